"""Build the CantoDict Yomitan dictionary from the command line."""

import argparse
import sys

from CantoDictYomitan.util.config.configuration import load_config
from CantoDictYomitan.util.logging_config import display, logger, set_level
from CantoDictYomitan.util.yomitan_dict import CantoDictBuilder, CantoDictError


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        description="Build a Yomitan dictionary from the CantoDict CSV export"
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="TOML config file (default: $CANTODICT_CONFIG, then built-in defaults)"
    )
    parser.add_argument(
        "--csv",
        type=str,
        default=None,
        help="CantoDict CSV export (overrides paths.csv_path)"
    )
    parser.add_argument(
        "--output",
        type=str,
        default=None,
        help="Output ZIP file (overrides paths.output_path)"
    )
    parser.add_argument(
        "--entries-per-bank",
        type=int,
        default=None,
        help="Split the term bank into files of at most N entries, 0 for a single file"
    )
    parser.add_argument(
        "--workers",
        type=int,
        default=None,
        help="Threads used to build entries (default: export.workers)"
    )
    parser.add_argument(
        "--stats",
        action="store_true",
        help="Just show entry counts, don't build the dictionary"
    )
    parser.add_argument(
        "--debug",
        action="store_true",
        help="Log debug messages to the console"
    )
    return parser.parse_args(argv)


def main(argv=None) -> int:
    """CLI entry point."""
    args = parse_args(argv)
    if args.debug:
        set_level("DEBUG")

    try:
        config = load_config(args.config)
    except (OSError, ValueError) as e:
        logger.error(f"Could not load config: {e}")
        return 1

    if args.csv:
        config.paths.csv_path = args.csv
    if args.output:
        config.paths.output_path = args.output
    if args.entries_per_bank is not None:
        config.export.entries_per_bank = args.entries_per_bank

    builder = CantoDictBuilder(config)

    try:
        index = builder.load_csv()
    except FileNotFoundError as e:
        logger.error(f"CSV export not found: {e.filename}")
        return 1
    except CantoDictError as e:
        logger.error(f"Aborting, no dictionary written: {e}")
        return 1

    if args.stats:
        for kind, count in sorted(index.count_by_kind().items()):
            display(f"{kind}: {count}")
        return 0

    builder.build(workers=args.workers)
    builder.export()
    return 0


if __name__ == "__main__":
    sys.exit(main())
