"""Static, threshold-gated advice layered on top of correlation results."""
from typing import List

from digesttrack.schemas import TagCorrelationResult

HIGH_RISK_PERCENT = 70
MEDIUM_RISK_PERCENT = 40

DAIRY_TERMS = ("dairy", "milk", "cheese", "cream", "yogurt", "butter", "lactose")
GLUTEN_TERMS = ("gluten", "wheat", "barley", "rye")


def risk_percent(result: TagCorrelationResult) -> float:
    """How much worse exposed days are than control days, in percent."""
    return (result.uplift_ratio - 1) * 100


def _mentions(results: List[TagCorrelationResult], terms) -> bool:
    return any(term in result.tag for result in results for term in terms)


def get_recommendations(results: List[TagCorrelationResult]) -> List[str]:
    """
    Plain-language suggestions for the ranked results.

    Only tags with a positive effect are considered. Advisory text only; the
    numbers in the results are the actual output of the analysis.
    """
    recommendations = []
    worsening = [result for result in results if result.effect > 0]

    high_risk = [r for r in worsening if risk_percent(r) > HIGH_RISK_PERCENT]
    medium_risk = [
        r
        for r in worsening
        if MEDIUM_RISK_PERCENT <= risk_percent(r) <= HIGH_RISK_PERCENT
    ]

    if high_risk:
        top = high_risk[0]
        recommendations.append(
            f"Consider eliminating {top.tag} for 2-4 weeks to confirm sensitivity "
            f"({round(risk_percent(top))}% worse symptoms within {top.primary_window}h, "
            f"{top.reliability.lower()} reliability)"
        )

    if medium_risk:
        recommendations.append(
            f"Monitor your intake of {', '.join(r.tag for r in medium_risk)} more closely"
        )

    flagged = high_risk + medium_risk
    if _mentions(flagged, DAIRY_TERMS):
        recommendations.append("Try lactose-free alternatives if dairy appears problematic")
    if _mentions(flagged, GLUTEN_TERMS):
        recommendations.append("Consider a gluten-free trial period")

    if flagged:
        recommendations.append(
            "Share this analysis with your healthcare provider for professional guidance"
        )

    if not recommendations:
        recommendations.append("Continue consistent logging to identify patterns over time")
        recommendations.append(
            "Log every meal and bowel movement each day so more days count toward the analysis"
        )

    return recommendations
