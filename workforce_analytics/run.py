"""Command-line runner: validate sources or compute diversity metrics for one company."""

import argparse
import logging
import sys
from datetime import date

from rich.console import Console
from rich.table import Table

from workforce_analytics.config import load_analytics_config, load_analytics_config_file
from workforce_analytics.domains import diversity
from workforce_analytics.domains.diversity.report import render_result, result_frames
from workforce_analytics.errors import DiversityAnalyticsError
from workforce_analytics.utils.io import write_output

console = Console()


def _parse_date(value: str) -> date:
    try:
        return date.fromisoformat(value)
    except ValueError:
        raise argparse.ArgumentTypeError(f"Not an ISO date: {value!r}") from None


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Workforce diversity by hierarchy level (GRI 405-1)")
    parser.add_argument("--employees", required=True, help="Employee CSV export or directory of exports")
    parser.add_argument("--positions", required=True, help="Position catalog CSV")
    parser.add_argument("--snapshots", help="Historical diversity snapshots CSV")
    parser.add_argument("--company", help="Company identifier")
    parser.add_argument("--start", type=_parse_date, help="Period start (YYYY-MM-DD)")
    parser.add_argument("--end", type=_parse_date, help="Period end (YYYY-MM-DD)")
    parser.add_argument("--config", help="TOML file overriding the jurisdiction preset")
    parser.add_argument("--jurisdiction", default="brazil", help="Quota-law preset (brazil, portugal, none)")
    parser.add_argument("--format", choices=["table", "json", "csv"], default="table")
    parser.add_argument("--output", help="Write json/csv output to this path instead of stdout")
    parser.add_argument("--validate", action="store_true", help="Only validate the data sources")
    parser.add_argument(
        "--log-level", type=str.upper, default="WARNING", choices=["DEBUG", "INFO", "WARNING", "ERROR"]
    )
    return parser


def _print_validation(outcome: dict[str, str]) -> bool:
    table = Table(title="Validation Results")
    table.add_column("Source")
    table.add_column("Valid")
    table.add_column("Details")

    match outcome:
        case {"status": "ok"}:
            table.add_row("diversity", "[green]✓[/green]", "OK")
            valid = True
        case {"status": "skipped", "reason": reason}:
            table.add_row("diversity", "[yellow]~[/yellow]", reason)
            valid = True
        case {"status": "error", "message": msg}:
            table.add_row("diversity", "[red]✗[/red]", msg)
            valid = False
        case _:
            table.add_row("diversity", "[red]✗[/red]", "Unknown validation result")
            valid = False

    console.print(table)
    return valid


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )

    if args.validate:
        outcome = diversity.validate(args.employees, args.positions, args.snapshots)
        return 0 if _print_validation(outcome) else 1

    missing = [flag for flag, value in (("--company", args.company), ("--start", args.start), ("--end", args.end)) if value is None]
    if missing:
        parser.error(f"the following arguments are required: {', '.join(missing)}")

    try:
        config = load_analytics_config_file(args.config) if args.config else load_analytics_config(args.jurisdiction)
        result = diversity.run(
            args.company, args.start, args.end,
            args.employees, args.positions, args.snapshots,
            config=config,
        )
    except (DiversityAnalyticsError, ValueError, OSError) as exc:
        console.print(f"[red]{exc}[/red]")
        return 1

    match args.format:
        case "table":
            render_result(result, console)
        case "json" if args.output:
            write_output(result.to_dict(), args.output, fmt="json")
        case "json":
            console.print_json(data=result.to_dict())
        case "csv" if args.output:
            write_output(result_frames(result)["tiers"], args.output, fmt="csv")
        case "csv":
            console.out(result_frames(result)["tiers"].to_csv(index=False))
    return 0


if __name__ == "__main__":
    sys.exit(main())
