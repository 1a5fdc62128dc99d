# src/cli.py
import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from compat_scraper.config import load_config
from compat_scraper.main import CompatibilityScraper, any_records
from compat_scraper.utils.logging import setup_logging, DEFAULT_LOG_FORMAT
from compat_scraper.exceptions import ScraperException, ConfigurationError

# Get a logger for the CLI module itself
cli_logger = logging.getLogger("cli")


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description=(
            "Firmware compatibility scraper: extracts the minimum BIOS versions that carry the\n"
            "Secure Boot 2023 certificate from vendor support pages into one JSON file per vendor."
        ),
        formatter_class=argparse.RawTextHelpFormatter # For better help text formatting
    )

    parser.add_argument(
        "--config", "-c",
        type=str,
        help=(
            "Path to a specific YAML configuration file. \n"
            "If not provided, 'config/default.yaml' is used."
        )
    )

    parser.add_argument(
        "--env", "-e",
        type=str,
        default=None,
        help=(
            "Environment overlay to merge (e.g., 'production'). \n"
            "Looks for '<env>.yaml' next to the base config."
        )
    )

    parser.add_argument(
        "--output-dir", "-o",
        type=str,
        help="Directory for the per-vendor JSON files (overrides scraper.output_dir)."
    )

    parser.add_argument("--skip-dell", action="store_true", help="Do not scrape Dell.")
    parser.add_argument("--skip-hp", action="store_true", help="Do not scrape HP.")
    parser.add_argument(
        "--skip",
        type=str,
        action="append",
        default=[],
        metavar="VENDOR",
        help="Skip any configured vendor by key. May be repeated."
    )

    parser.add_argument(
        "--log-level",
        type=str,
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        help="Override the configured log level."
    )

    parser.add_argument(
        "--save-raw-html",
        type=str,
        metavar="DIR",
        help="Save every fetched page to DIR for troubleshooting."
    )

    return parser.parse_args(argv)


def collect_skips(args: argparse.Namespace) -> List[str]:
    skips = list(args.skip)
    if args.skip_dell:
        skips.append("dell")
    if args.skip_hp:
        skips.append("hp")
    return skips


def main_cli(argv: Optional[List[str]] = None) -> int:
    """
    Main entry point for the CLI.
    Exit codes: 0 when at least one vendor produced records, 1 when none did
    (or configuration failed), 2 on an unexpected scraper error, 130 on Ctrl+C.
    """
    args = parse_args(argv)

    temp_log_config = {"level": "INFO", "console": True, "format": DEFAULT_LOG_FORMAT}
    try:
        config = load_config(config_path=args.config, env=args.env)
        if args.output_dir:
            config.setdefault("scraper", {})["output_dir"] = str(Path(args.output_dir).resolve())
        if args.save_raw_html:
            config.setdefault("debug", {})["raw_html_dir"] = str(Path(args.save_raw_html).resolve())
        setup_logging(config.get("logging", temp_log_config), level_override=args.log_level)
        scraper = CompatibilityScraper(config)
    except ConfigurationError as e:
        setup_logging(temp_log_config, level_override=args.log_level)
        cli_logger.error(f"Configuration error: {e}")
        return 1

    cli_logger.debug(f"Full arguments: {args}")

    try:
        results = scraper.run(skip=collect_skips(args))
    except KeyboardInterrupt:
        cli_logger.info("Keyboard interrupt received. Shutting down.")
        return 130
    except ScraperException as e:
        cli_logger.error(f"A scraper-specific error occurred: {e}", exc_info=True)
        return 2

    if any_records(results):
        cli_logger.info("Done: at least one vendor snapshot written.")
        return 0
    cli_logger.error("No vendor produced any records.")
    return 1


if __name__ == "__main__":
    sys.exit(main_cli())
