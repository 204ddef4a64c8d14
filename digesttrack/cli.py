"""CLI commands for DigestTrack."""

import argparse
import json
import sys

from pydantic import ValidationError
from sqlalchemy.orm import Session

from digesttrack.config import settings
from digesttrack.database import SessionLocal, init_db
from digesttrack.repositories.sql import SqlAlchemyStore
from digesttrack.schemas import CorrelationAnalysisSettings
from digesttrack.services.correlation_service import (
    AnalysisFailedError,
    CorrelationService,
)


def _build_settings(args) -> CorrelationAnalysisSettings:
    values = {}
    if args.windows:
        values["windows"] = args.windows
    if args.min_exposures is not None:
        values["min_exposures"] = args.min_exposures
    if args.coverage_threshold is not None:
        values["coverage_threshold"] = args.coverage_threshold
    return CorrelationAnalysisSettings(**values)


def analyze(args) -> None:
    """Run correlation analysis for the default user and print the ranking."""
    try:
        analysis_settings = _build_settings(args)
    except ValidationError as e:
        print(f"Error: invalid analysis settings: {e}")
        sys.exit(2)

    db: Session = SessionLocal()
    try:
        store = SqlAlchemyStore(db)
        service = CorrelationService(store, store)
        try:
            response = service.run_analysis(settings.default_user_id, analysis_settings)
        except AnalysisFailedError:
            print("Error: Analysis failed")
            sys.exit(1)
    finally:
        db.close()

    if args.json:
        print(response.model_dump_json(indent=2))
        return

    if not response.results:
        print("Not enough data: no tag reached the minimum number of exposed days.")
        return

    print(f"{'Tag':<20} {'Window':>7} {'Effect':>8} {'Uplift':>7}  {'Reliability':<11} {'N':>4}")
    print("-" * 64)
    for result in response.results:
        print(
            f"{result.tag:<20} {result.primary_window:>6}h {result.effect:>8.2f} "
            f"{result.uplift_ratio:>7.2f}  {result.reliability:<11} {result.n_exposures:>4}"
        )
    if response.recommendations:
        print("\nRecommendations:")
        for line in response.recommendations:
            print(f"  - {line}")


def coverage(args) -> None:
    """Print logging coverage for the last N days."""
    if args.days < 1:
        print("Error: --days must be at least 1.")
        sys.exit(2)

    db: Session = SessionLocal()
    try:
        store = SqlAlchemyStore(db)
        report = CorrelationService(store, store).get_coverage(
            settings.default_user_id, days=args.days
        )
    finally:
        db.close()

    if args.json:
        print(json.dumps(report.model_dump(mode="json"), indent=2))
        return

    for day in report.coverage:
        marker = "valid" if day.is_valid else ""
        print(f"{day.date.isoformat()}  {day.total_coverage:>3}%  {marker}")
    print(
        f"\n{report.valid_days}/{report.total_days} valid days, "
        f"average coverage {report.average_coverage:.1f}%"
    )


def main(argv=None):
    parser = argparse.ArgumentParser(description="DigestTrack CLI")
    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    # analyze command
    analyze_parser = subparsers.add_parser(
        "analyze", help="Run multi-window correlation analysis"
    )
    analyze_parser.add_argument(
        "--windows", type=int, nargs="+", help="Lag windows in hours (e.g. 6 24 48)"
    )
    analyze_parser.add_argument(
        "--min-exposures", type=int, help="Minimum exposed days per tag and window"
    )
    analyze_parser.add_argument(
        "--coverage-threshold", type=float, help="Minimum day coverage percent"
    )
    analyze_parser.add_argument(
        "--json", action="store_true", help="Print the full response as JSON"
    )

    # coverage command
    coverage_parser = subparsers.add_parser(
        "coverage", help="Show logging coverage per day"
    )
    coverage_parser.add_argument(
        "--days", type=int, default=30, help="Number of days to show (default: 30)"
    )
    coverage_parser.add_argument(
        "--json", action="store_true", help="Print the report as JSON"
    )

    args = parser.parse_args(argv)

    if args.command is None:
        parser.print_help()
        sys.exit(1)

    init_db()
    if args.command == "analyze":
        analyze(args)
    elif args.command == "coverage":
        coverage(args)


if __name__ == "__main__":
    main()
