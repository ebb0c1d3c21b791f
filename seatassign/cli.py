"""Command-line interface for seatassign."""

import argparse
import logging
import sys
from dataclasses import replace
from pathlib import Path

from seatassign.constraints import validate_constraints
from seatassign.normalize import normalize_weights
from seatassign.optimizer import optimize_with_restarts
from seatassign.output import format_plan_csv, format_results, format_violations
from seatassign.parser import (
    EventSettings,
    check_table_limits,
    create_event_template,
    parse_event_yaml,
    parse_guests_csv,
)


def _configure_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s %(name)s: %(message)s")


def main(argv: list[str] | None = None) -> int:
    """Main entry point for seatassign CLI."""
    parser = argparse.ArgumentParser(
        description="Optimize table seating for a networking event.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""\
Examples:
  seatassign guests.csv
  seatassign guests.csv --event event.yaml
  seatassign guests.csv --event event.yaml --tables 6 --seats 8 --restarts 5
""",
    )
    parser.add_argument(
        "guests_csv",
        type=Path,
        help="Path to the CSV file with the guest list",
    )
    parser.add_argument(
        "--event",
        type=Path,
        help="Path to the event YAML file (tables, weights, constraints)",
    )
    parser.add_argument("--tables", type=int, help="Number of tables (overrides event file)")
    parser.add_argument("--seats", type=int, help="Seats per table (overrides event file)")
    parser.add_argument(
        "--max-iterations",
        type=int,
        help="Local search iteration budget (overrides event file)",
    )
    parser.add_argument("--seed", type=int, help="Random seed (overrides event file)")
    parser.add_argument(
        "--restarts",
        type=int,
        default=1,
        help="Number of seeds to try, keeping the best plan (default: 1)",
    )
    parser.add_argument(
        "--csv-out",
        type=Path,
        help="Write the seating plan as CSV to this path",
    )
    parser.add_argument(
        "--output-template",
        type=Path,
        help="Path for event template (default: event_template.yaml)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=0,
        help="Log search progress (-v for info, -vv for debug)",
    )

    args = parser.parse_args(argv)
    _configure_logging(args.verbose)

    if not args.guests_csv.exists():
        print(f"Error: Guest file not found: {args.guests_csv}", file=sys.stderr)
        return 1

    try:
        guests = parse_guests_csv(args.guests_csv)
    except Exception as e:
        print(f"Error parsing guest CSV: {e}", file=sys.stderr)
        return 1

    print(f"Loaded {len(guests)} guests")

    settings = EventSettings()
    if args.event:
        if not args.event.exists():
            print(f"Error: Event file not found: {args.event}", file=sys.stderr)
            return 1
        try:
            settings = parse_event_yaml(args.event)
        except Exception as e:
            print(f"Error parsing event YAML: {e}", file=sys.stderr)
            return 1
        print(f"Loaded {len(settings.constraints)} constraints")
    else:
        template_path = args.output_template or Path("event_template.yaml")
        create_event_template(template_path, guests)
        print(f"\nNo event file provided. Created template at: {template_path}")
        print("Edit this file to describe your tables and constraints, then run again.\n")

    overrides = {
        "table_count": args.tables,
        "seats_per_table": args.seats,
        "max_iterations": args.max_iterations,
        "seed": args.seed,
    }
    try:
        config = replace(settings.config, **{k: v for k, v in overrides.items() if v is not None})
        check_table_limits(config.table_count, config.seats_per_table)
        result = optimize_with_restarts(
            guests=guests,
            constraints=settings.constraints,
            weights=normalize_weights(settings.weights),
            config=config,
            restarts=args.restarts,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    print()
    print(format_results(result, guests))

    if result.plan.tables and not result.feasible:
        print()
        print("=== Constraint Violations ===")
        print(
            format_violations(
                validate_constraints(result.plan, settings.constraints, guests, report_all=True)
            )
        )

    if args.csv_out:
        args.csv_out.write_text(format_plan_csv(result, guests) + "\n", encoding="utf-8")
        print(f"\nWrote seating plan to {args.csv_out}")

    return 0 if result.feasible else 2


if __name__ == "__main__":
    sys.exit(main())
