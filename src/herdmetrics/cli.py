"""Command-line reports for herd performance.

Usage:
    herdmetrics report                       # Herd KPIs from the cached snapshot
    herdmetrics report export.json --json    # Herd KPIs as JSON
    herdmetrics animal 0042 --as-of 2024-07-01
"""

import argparse
import json
import sys
from datetime import date
from pathlib import Path

from herdmetrics.core import format_gain_rate, format_weight, get_cache_dir, settings
from herdmetrics.data.records import load_snapshot
from herdmetrics.report import (
    build_animal_report,
    build_herd_report,
    format_herd_report,
    metric_to_dict,
)


def _parse_as_of(value: str | None) -> date:
    if not value:
        return date.today()
    try:
        return date.fromisoformat(value)
    except ValueError as e:
        raise argparse.ArgumentTypeError(f"Invalid date '{value}' (expected YYYY-MM-DD)") from e


def _snapshot_path(value: str | None) -> Path:
    if value:
        return Path(value)
    return get_cache_dir() / settings.snapshot_file


def cmd_report(args: argparse.Namespace) -> int:
    snapshot = load_snapshot(_snapshot_path(args.snapshot), strict=args.strict)
    as_of = _parse_as_of(args.as_of)
    metrics = build_herd_report(snapshot, as_of)

    if args.json:
        print(json.dumps([metric_to_dict(m) for m in metrics], indent=2, default=str))
        return 0

    print(f"Herd performance as of {as_of}")
    print(f"  {len(snapshot.animals)} animals, {len(snapshot.weights)} weigh records")
    if snapshot.version:
        print(f"  Snapshot: {snapshot.version}")
    print()
    print(format_herd_report(metrics))
    return 0


def cmd_animal(args: argparse.Namespace) -> int:
    snapshot = load_snapshot(_snapshot_path(args.snapshot), strict=args.strict)
    as_of = _parse_as_of(args.as_of)
    report = build_animal_report(snapshot, args.id, as_of)

    if args.json:
        print(json.dumps(report, indent=2, default=str))
        return 0

    print(f"Animal: {report['animal_id']}")
    print(f"Stock type: {report['stock_type'] or '?'}")
    print(f"Weigh records: {report['weigh_count']}")
    print(f"Total gain: {format_weight(report['total_gain_kg'])}")
    print(f"DLWG: {format_gain_rate(report['dlwg'])}")
    print(f"ADG (period): {format_gain_rate(report['period_adg'])}")
    print(f"WGM: {report['wgm']:.2f}")
    fcr = f"{report['fcr']:.2f} ({report['fcr_band']})" if report["fcr"] > 0 else "no data"
    print(f"FCR ({settings.fcr_period_months} months): {fcr}")
    return 0


def cli_main(argv: list[str] | None = None) -> int:
    """CLI entry point for herd metrics."""
    parser = argparse.ArgumentParser(description="Livestock performance metrics")
    subparsers = parser.add_subparsers(dest="command", help="Command")

    # report command
    report_parser = subparsers.add_parser("report", help="Herd KPIs scored against targets")
    report_parser.add_argument("snapshot", nargs="?", help="Snapshot JSON (default: cache dir)")
    report_parser.add_argument("--as-of", help="Reporting date (YYYY-MM-DD, default: today)")
    report_parser.add_argument("--json", action="store_true", help="Output as JSON")
    report_parser.add_argument("--strict", action="store_true", help="Fail on malformed records")
    report_parser.set_defaults(func=cmd_report)

    # animal command
    animal_parser = subparsers.add_parser("animal", help="Growth and feed metrics for one animal")
    animal_parser.add_argument("id", help="Animal ID / tag number")
    animal_parser.add_argument("snapshot", nargs="?", help="Snapshot JSON (default: cache dir)")
    animal_parser.add_argument("--as-of", help="Reporting date (YYYY-MM-DD, default: today)")
    animal_parser.add_argument("--json", action="store_true", help="Output as JSON")
    animal_parser.add_argument("--strict", action="store_true", help="Fail on malformed records")
    animal_parser.set_defaults(func=cmd_animal)

    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        return 1

    try:
        return args.func(args)
    except FileNotFoundError as e:
        print(f"Error: snapshot not found: {e.filename}", file=sys.stderr)
    except (argparse.ArgumentTypeError, ValueError) as e:
        # RecordValidationError, bad JSON and unknown animals are all ValueErrors
        print(f"Error: {e}", file=sys.stderr)
    return 1


def cli() -> None:
    """Console script entry point."""
    sys.exit(cli_main())


if __name__ == "__main__":
    cli()
