"""Command-line entry point: turn a saved table page into paste-ready sheet text.

Reads an HTML page (or a RawTable JSON file), extracts the table with the
selected preset, and writes the sheet to stdout or to --output.

Usage:
    tabsheet carteira.html --preset fiis                 # shaped for the portfolio sheet
    tabsheet carteira.html --url https://investidor.suno.com.br/carteiras/valor
    tabsheet carteira.html --mode raw -o table.tsv        # table as displayed
    tabsheet export.html --wait                           # poll until the file has a table
"""

import argparse
import logging
import sys
from pathlib import Path

from pydantic import ValidationError

from tabsheet.config import DEFAULT_PRESET, POLL_ATTEMPTS, POLL_INTERVAL, presets_path
from tabsheet.tables.errors import TabsheetError
from tabsheet.tables.pipeline import SheetMode, run
from tabsheet.tables.polling import InstallState, poll_until_ready
from tabsheet.tables.presets import PRESETS, load_presets, preset_for_url, select_preset
from tabsheet.tables.schema import RawTable, TableOptions
from tabsheet.tables.sources import load_source

logger = logging.getLogger(__name__)


def _build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(prog="tabsheet", description="Convert an HTML table into tab-delimited sheet text")
    parser.add_argument("input", type=Path, help="HTML page or RawTable JSON file")
    selector = parser.add_mutually_exclusive_group()
    selector.add_argument("--preset", help=f"Preset name (default: {DEFAULT_PRESET})")
    selector.add_argument("--url", help="Page URL; its last path segment selects the preset")
    parser.add_argument("--presets-file", type=Path, help="JSON file with extra presets")
    parser.add_argument("--mode", choices=[m.value for m in SheetMode], default=SheetMode.SHAPED.value, help="raw or shaped output (default: shaped)")
    parser.add_argument("-o", "--output", type=Path, help="Write the sheet here instead of stdout")
    parser.add_argument("--wait", action="store_true", help=f"Poll until the input holds a table ({POLL_ATTEMPTS} x {POLL_INTERVAL}s)")
    parser.add_argument("--header-table", type=int, default=0, help="Index of the <table> holding the header (default: 0)")
    parser.add_argument("--body-table", type=int, help="Index of the <table> holding the body (default: same as header)")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    return parser


def _resolve_options(args: argparse.Namespace) -> TableOptions:
    """Pick the preset named on the command line, by URL, or the configured default."""
    path = args.presets_file or presets_path()
    presets = load_presets(path) if path else PRESETS
    if args.url:
        return preset_for_url(args.url, presets)
    return select_preset(args.preset or DEFAULT_PRESET, presets)


def _read_source(args: argparse.Namespace) -> RawTable | None:
    """Load the input, polling for it first when --wait is given."""

    def load() -> RawTable | None:
        if not args.input.exists():
            return None
        return load_source(args.input, args.header_table, args.body_table)

    if not args.wait:
        return load()

    result = poll_until_ready(load, max_attempts=POLL_ATTEMPTS, interval=POLL_INTERVAL)
    return result.source if result.state == InstallState.INSTALLED else None


def main(argv: list[str] | None = None) -> int:
    """Run the CLI; returns the process exit status."""
    args = _build_parser().parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(asctime)s - %(levelname)s - %(message)s")

    try:
        options = _resolve_options(args)
        source = _read_source(args)
        if source is None:
            logger.error("No table source available at %s", args.input)
            return 1
        sheet = run(source, options, SheetMode(args.mode))
        if args.output:
            args.output.write_text(sheet, encoding="utf-8")
            logger.info("Wrote sheet to %s", args.output)
    except ValidationError as exc:
        logger.error("Invalid table source %s: %s", args.input, exc)
        return 1
    except (OSError, UnicodeDecodeError) as exc:
        logger.error("Cannot read or write %s: %s", args.input, exc)
        return 1
    except TabsheetError as exc:
        logger.error("%s", exc)
        return 2

    if not args.output:
        sys.stdout.write(sheet + "\n" if sheet else "")
    return 0


if __name__ == "__main__":
    sys.exit(main())
