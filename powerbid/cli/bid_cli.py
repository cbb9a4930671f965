"""
Command-line interface for bid data analytics.

Usage:
    python -m powerbid.cli.bid_cli <command> --input <file_or_url> [options]
"""

import argparse
import asyncio
import json
import sys
from pathlib import Path

from powerbid.analytics import color_positions, filter_records, latest, summarize, trend
from powerbid.batch.pipeline import BidDataPipeline
from powerbid.batch.writers import SUPPORTED_FORMATS, export, to_json
from powerbid.core.exceptions import PowerBidError
from powerbid.core.models import BidFilter
from powerbid.observability.events import LoadEvent
from powerbid.observability.logger import get_logger, log_operation
from powerbid.observability.metrics import start_metrics_server

logger = get_logger(__name__)


def build_pipeline(args) -> BidDataPipeline:
    """
    Create a pipeline, using the rules file if it exists.

    Args:
        args: Command-line arguments
    """
    rules_path = Path(args.validation_rules) if args.validation_rules else None
    if rules_path is not None and rules_path.exists():
        pipeline = BidDataPipeline.from_config(rules_path)
    else:
        if rules_path is not None:
            logger.warning(f"Validation rules file not found: {rules_path}; using built-in rules")
        pipeline = BidDataPipeline()

    pipeline.events.subscribe(
        LoadEvent.VALIDATION_WARNING,
        lambda warnings: logger.warning(f"{len(warnings)} records dropped during validation"),
    )
    return pipeline


def emit(payload) -> None:
    """Write a JSON-serializable payload to stdout."""
    print(json.dumps(payload, indent=2, ensure_ascii=False))


def validate_command(args, pipeline: BidDataPipeline) -> None:
    dataset = asyncio.run(pipeline.load(args.input))
    result = pipeline.last_validation
    emit({
        "source": args.input,
        "shape": result.shape.value,
        "total_records": result.total_records,
        "valid_records": len(dataset),
        "rejected_records": result.rejected_count,
        "warnings": result.warnings,
    })


def summary_command(args, pipeline: BidDataPipeline) -> None:
    dataset = asyncio.run(pipeline.load(args.input))
    summary = summarize(dataset)
    emit(summary.model_dump(mode="json") if summary else None)


def latest_command(args, pipeline: BidDataPipeline) -> None:
    dataset = asyncio.run(pipeline.load(args.input))
    print(to_json(latest(dataset, args.count)))


def filter_command(args, pipeline: BidDataPipeline) -> None:
    dataset = asyncio.run(pipeline.load(args.input))
    bid_filter = BidFilter(
        start_date=args.start_date,
        end_date=args.end_date,
        min_price=args.min_price,
        max_price=args.max_price,
        user_name=args.user,
        power_company=args.company,
    )
    print(to_json(filter_records(bid_filter, dataset)))


def trend_command(args, pipeline: BidDataPipeline) -> None:
    dataset = asyncio.run(pipeline.load(args.input))
    line = trend(dataset)
    emit({
        "trend_line": line.model_dump(mode="json") if line else None,
        "color_positions": color_positions(dataset),
    })


def export_command(args, pipeline: BidDataPipeline) -> None:
    dataset = asyncio.run(pipeline.load(args.input))
    content = export(args.format, dataset)

    if args.output:
        Path(args.output).write_text(content, encoding="utf-8")
        logger.info(f"Exported {len(dataset)} records to {args.output}")
    else:
        print(content)


COMMANDS = {
    "validate": validate_command,
    "summary": summary_command,
    "latest": latest_command,
    "filter": filter_command,
    "trend": trend_command,
    "export": export_command,
}


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Electricity bid data validation and analytics",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Validate a local file and show dropped records
  python -m powerbid.cli.bid_cli validate --input data/bids.json

  # Summary statistics from a URL
  python -m powerbid.cli.bid_cli summary --input https://example.com/bids.json

  # Bids from one company above 0.5 in 2024
  python -m powerbid.cli.bid_cli filter --input data/bids.json \\
      --company "East Grid" --min-price 0.5 --start-date 2024-01-01

  # Export to CSV
  python -m powerbid.cli.bid_cli export --input data/bids.json --format csv --output bids.csv
        """
    )

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--input",
        required=True,
        help="Path or http(s) URL of the JSON payload"
    )
    common.add_argument(
        "--validation-rules",
        default="config/validation_rules.yaml",
        help="Path to validation rules YAML file (built-in rules if missing)"
    )

    parser.add_argument(
        "--metrics-port",
        type=int,
        help="Expose Prometheus metrics on this port while the command runs"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    subparsers.add_parser("validate", parents=[common], help="Validate a payload and report rejections")
    subparsers.add_parser("summary", parents=[common], help="Summary statistics")

    latest_parser = subparsers.add_parser("latest", parents=[common], help="Most recent records")
    latest_parser.add_argument(
        "--count",
        type=int,
        default=10,
        help="Number of records (default: 10)"
    )

    filter_parser = subparsers.add_parser("filter", parents=[common], help="Filter records")
    filter_parser.add_argument("--start-date", help="Earliest bid date (inclusive, ISO-8601)")
    filter_parser.add_argument("--end-date", help="Latest bid date (inclusive, ISO-8601)")
    filter_parser.add_argument("--min-price", type=float, help="Minimum price (inclusive)")
    filter_parser.add_argument("--max-price", type=float, help="Maximum price (inclusive)")
    filter_parser.add_argument("--user", help="Substring of user_name")
    filter_parser.add_argument("--company", help="Substring of power_company")

    subparsers.add_parser("trend", parents=[common], help="Linear trend line and color positions")

    export_parser = subparsers.add_parser("export", parents=[common], help="Export processed records")
    export_parser.add_argument(
        "--format",
        default="json",
        choices=list(SUPPORTED_FORMATS),
        help="Export format (default: json)"
    )
    export_parser.add_argument(
        "--output",
        help="Write to this file instead of stdout"
    )

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(1)

    if args.metrics_port:
        start_metrics_server(args.metrics_port)

    try:
        pipeline = build_pipeline(args)
        with log_operation(f"{args.command} {args.input}", logger=logger, command=args.command):
            COMMANDS[args.command](args, pipeline)
    except (PowerBidError, ValueError) as e:
        logger.error(f"{args.command} failed: {e}")
        sys.exit(1)


if __name__ == "__main__":
    main()
