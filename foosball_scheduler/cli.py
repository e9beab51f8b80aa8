"""
Command-line interface for the foosball scheduler.
"""

import argparse
import sys
import yaml
from .config import SchedulerConfig, load_config
from .ingest import load_players
from .engine import schedule
from .validation import find_violations
from .export import write_table_csv, write_excel, format_schedule, format_score_summary


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        description="Foosball Scheduler - fair four-position tournament schedules"
    )

    parser.add_argument(
        "--players",
        required=True,
        help="Path to CSV or Excel file with player names and ratings"
    )

    parser.add_argument(
        "--config",
        help="Path to YAML configuration file (optional)"
    )

    parser.add_argument(
        "--out",
        help="Path to output tournament table CSV (default from config)"
    )

    parser.add_argument(
        "--excel",
        help="Path to output Excel workbook (optional)"
    )

    parser.add_argument(
        "--trials",
        type=int,
        help="Number of candidate schedules to sample"
    )

    parser.add_argument(
        "--workers",
        type=int,
        help="Number of parallel workers (default: CPU count)"
    )

    parser.add_argument(
        "--seed",
        type=int,
        help="Base random seed"
    )

    parser.add_argument(
        "--executor",
        choices=["process", "thread"],
        help="Worker pool type"
    )

    parser.add_argument(
        "--verbose", "-v",
        action="store_true",
        help="Enable verbose output"
    )

    return parser


def apply_overrides(config: SchedulerConfig, args: argparse.Namespace) -> SchedulerConfig:
    """Return a copy of the configuration with command-line values applied."""
    search = {}
    for name in ("trials", "workers", "seed", "executor"):
        value = getattr(args, name)
        if value is not None:
            search[name] = value

    output = {}
    if args.out:
        output['table_csv'] = args.out
    if args.excel:
        output['excel_path'] = args.excel

    data = config.model_dump()
    data['search'].update(search)
    data['output'].update(output)
    return SchedulerConfig(**data)


def main(argv=None):
    """Main CLI entry point."""
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        # Load configuration
        if args.config:
            print("Loading configuration...")
            config = load_config(args.config)
        else:
            config = SchedulerConfig()
        config = apply_overrides(config, args)

        # Load players
        print("Loading players...")
        players = load_players(args.players, config)
        print(f"Loaded {len(players)} players from '{args.players}'.")
        print(f"Games to schedule: {len(players)}  (each player plays RA, RD, BA, BD once)")
        print(f"Iterations       : {config.search.trials}\n")

        # Run the search
        tournament = schedule(players, config, verbose=args.verbose)

        # Validate final schedule
        violations = find_violations(tournament.schedule, len(tournament.competitors))
        if violations['errors']:
            print("ERRORS found in final schedule:")
            for error in violations['errors']:
                print(f"  - {error}")
            sys.exit(1)
        print("  Validation passed: all positions, players, and teams are unique.")

        print()
        print(format_schedule(tournament))
        summary = format_score_summary(tournament)
        if summary:
            print(summary)
        print()

        # Export
        write_table_csv(tournament, config.output.table_csv)
        if config.output.excel_path:
            write_excel(tournament, config, config.output.excel_path)

    except FileNotFoundError as e:
        print(f"ERROR: File not found: {e}")
        sys.exit(1)
    except yaml.YAMLError as e:
        print(f"ERROR: Invalid YAML configuration: {e}")
        sys.exit(1)
    except Exception as e:
        print(f"ERROR: {e}")
        if args.verbose:
            import traceback
            traceback.print_exc()
        sys.exit(1)


if __name__ == "__main__":
    main()
