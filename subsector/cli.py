"""Subsector generator - command line entry point."""

import argparse
import logging
import sys

from .engine import generate_subsector, project_player_safe, resolve_abundance, sector_table
from .models import GridSize, SubsectorError
from .utils import GRID_COLUMNS, GRID_ROWS, RNG_SEED_DEFAULT
from .utils.serialization import dumps, load_subsector, save_subsector

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="subsector-gen",
        description="Subsector Generator - star systems for a hex-map subsector",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s generate --seed 42 --out reach.json      # Generate and save
  %(prog)s generate --abundance dense --name Reach  # Denser subsector, printed as JSON
  %(prog)s player-safe reach.json reach_players.json
  %(prog)s table reach.json                         # T5 sector table
        """,
    )
    parser.add_argument("--debug", action="store_true", help="Enable debug logging")
    commands = parser.add_subparsers(dest="command", required=True)

    generate = commands.add_parser("generate", help="Generate a new subsector")
    generate.add_argument(
        "--seed",
        type=int,
        default=RNG_SEED_DEFAULT,
        help=f"Random seed for generation (default: {RNG_SEED_DEFAULT})",
    )
    generate.add_argument(
        "--abundance",
        default="0",
        help="World-abundance DM or preset: rift, sparse, nominal, dense, abundant (default: 0)",
    )
    generate.add_argument("--name", default=None, help="Subsector name (default: generated)")
    generate.add_argument("--columns", type=int, default=GRID_COLUMNS, help="Grid columns")
    generate.add_argument("--rows", type=int, default=GRID_ROWS, help="Grid rows")
    generate.add_argument(
        "--out", metavar="FILE", default=None, help="Save to JSON file (default: print)"
    )

    player_safe = commands.add_parser(
        "player-safe", help="Write a player-safe copy of a saved subsector"
    )
    player_safe.add_argument("input", metavar="IN", help="Full subsector JSON file")
    player_safe.add_argument("output", metavar="OUT", help="Player-safe JSON file to write")

    table = commands.add_parser("table", help="Print the T5 sector table of a saved subsector")
    table.add_argument("input", metavar="IN", help="Subsector JSON file")

    return parser


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.debug else logging.INFO,
        format="[%(levelname)s] %(message)s",
    )

    try:
        if args.command == "generate":
            subsector = generate_subsector(
                args.seed,
                resolve_abundance(args.abundance),
                GridSize(args.columns, args.rows),
                args.name,
            )
            if args.out:
                save_subsector(subsector, args.out)
                print(f"Saved {subsector.name} ({len(subsector.worlds)} worlds) to {args.out}")
            else:
                print(dumps(subsector))
        elif args.command == "player-safe":
            save_subsector(project_player_safe(load_subsector(args.input)), args.output)
            print(f"Wrote player-safe copy to {args.output}")
        else:
            print(sector_table(load_subsector(args.input)))
    except FileNotFoundError as e:
        print(f"Error: File {e.filename} not found.", file=sys.stderr)
        return 1
    except (SubsectorError, ValueError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
