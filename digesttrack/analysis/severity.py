"""Scalar severity of a symptom event."""

NORMAL_BRISTOL_TYPE = 4

BRISTOL_WEIGHT = 1
URGENCY_WEIGHT = 2
BLOOD_WEIGHT = 3
PAIN_WEIGHT = 2


def score(symptom) -> int:
    """
    Severity of a single symptom event.

        |bristol_type - 4| * 1 + urgency * 2 + blood * 3 + pain * 2

    The legacy overall `severity` field is ignored. Blood is stored on a 0-3
    scale but only its presence counts. Missing sub-severities count as
    zero. Integer arithmetic only, so identical inputs always give identical
    outputs.
    """
    bristol_deviation = abs(int(symptom.bristol_type) - NORMAL_BRISTOL_TYPE)
    return (
        bristol_deviation * BRISTOL_WEIGHT
        + int(symptom.urgency or 0) * URGENCY_WEIGHT
        + (1 if symptom.blood else 0) * BLOOD_WEIGHT
        + int(symptom.pain or 0) * PAIN_WEIGHT
    )
