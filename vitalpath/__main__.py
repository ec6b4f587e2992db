"""
Command-line analysis of a single patient record.

Run:
    python -m vitalpath record.json
    python -m vitalpath record.json --json

The record file is a JSON object with the fields of PatientRecord
(``totalCholesterol`` is accepted for ``total_cholesterol``).
"""
import argparse
import json
import sys
from pathlib import Path

from vitalpath.config import settings
from vitalpath.core.clinical import ClinicalDecisionEngine, PatientRecord
from vitalpath.utils import get_logger, setup_logging, VitalPathError

logger = get_logger(__name__)


def _print_report(result) -> None:
    print(f"Overall risk: {result.overall_risk.level.value}")
    print(f"  {result.overall_risk.message}")
    print()

    if not result.conditions:
        print("No conditions flagged.")
        return

    print("Conditions (priority order):")
    for i, c in enumerate(result.conditions, 1):
        print(f"  {i}. {c.name.value} — {c.confidence.value} confidence (score {c.score})")
        for factor in c.factors:
            print(f"       - {factor}")
    print()

    heading = "Diagnostic tests"
    if result.has_high_confidence:
        heading += " (routine tests escalated to urgent)"
    print(f"{heading}:")
    for t in result.diagnostic_tests:
        print(f"  [{t.priority.value:8}] {t.name}")
    print()

    print("Care pathways:")
    for p in result.care_pathways:
        print(f"  {p.condition}")
        for step in p.steps:
            print(f"    - {step}")


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="vitalpath",
        description="Rule-based cardiometabolic risk screening for one patient record.",
    )
    parser.add_argument("record", type=Path, help="Path to a JSON patient record")
    parser.add_argument("--json", action="store_true", help="Print the full result as JSON")
    parser.add_argument(
        "--log-level",
        default=settings.log_level,
        type=str.upper,
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        help="Logging level",
    )
    args = parser.parse_args(argv)

    setup_logging(args.log_level, settings.log_file)

    try:
        data = json.loads(args.record.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        logger.error(f"Could not read {args.record}: {exc}")
        return 2

    try:
        record = PatientRecord.from_dict(data)
    except VitalPathError as exc:
        logger.error(exc.message)
        return 2

    result = ClinicalDecisionEngine().analyze(record)

    if args.json:
        print(json.dumps(result.to_dict(), indent=2, ensure_ascii=False))
    else:
        _print_report(result)
    return 0


if __name__ == "__main__":
    sys.exit(main())
