"""Named table presets and preset selection.

The three built-in presets shape the Suno portfolio tables (dividendos,
fiis, valor) into the column layout of the dlombello portfolio sheet:
ticker, ... , entry date.  They share every option except the column order
and whether the totals footer row is dropped.

Extra presets can be loaded from a JSON file mapping preset name to an
options object.  Because JSON cannot hold functions, ``columnModifiers``
there maps a column index to the name of a registered modifier.
"""

import json
import logging
from pathlib import Path
from typing import Callable
from urllib.parse import urlparse

from pydantic import ValidationError

from tabsheet.config import DEFAULT_PRESET
from tabsheet.tables.errors import ConfigurationError, ErrorKind
from tabsheet.tables.schema import MultiValuePolicy, TableOptions, build_options

logger = logging.getLogger(__name__)


# ─── Column Modifiers ────────────────────────────────────────────────────────


def dots_to_slashes(value: str) -> str:
    """Turn a dotted date such as '10.05.2024' into '10/05/2024'."""
    return value.replace(".", "/")


MODIFIERS: dict[str, Callable[[str], str]] = {
    "dots_to_slashes": dots_to_slashes,
    "strip": str.strip,
    "upper": str.upper,
    "lower": str.lower,
}


# ─── Built-in Presets ────────────────────────────────────────────────────────

# Column 3 of every Suno portfolio table is the entry date
_DATE_COLUMN = 3


def _portfolio_preset(column_order: list[int], remove_footer: bool) -> TableOptions:
    return build_options(
        skip_empty_rows=True,
        multi_value_policy=MultiValuePolicy.KEEP_FIRST,
        trim_cells=True,
        column_modifiers={_DATE_COLUMN: dots_to_slashes},
        column_order=column_order,
        remove_header_row=True,
        remove_footer_row=remove_footer,
    )


PRESETS: dict[str, TableOptions] = {
    "dividendos": _portfolio_preset([0, 2, 5, 6, 8, 3], remove_footer=True),
    "fiis": _portfolio_preset([0, 1, 4, 6, 8, 3], remove_footer=False),
    "valor": _portfolio_preset([0, 2, 4, 5, 7, 3], remove_footer=True),
}


# ─── Selection ───────────────────────────────────────────────────────────────


def select_preset(key: str, presets: dict[str, TableOptions] | None = None) -> TableOptions:
    """Return the preset registered under *key*."""
    available = PRESETS if presets is None else presets
    if key not in available:
        raise ConfigurationError(
            ErrorKind.UNKNOWN_PRESET,
            f"unknown preset {key!r} (available: {', '.join(sorted(available))})",
        )
    return available[key]


def preset_key_for_url(url: str) -> str:
    """Return the last path segment of a page URL, e.g. '.../carteiras/fiis' -> 'fiis'."""
    return urlparse(url).path.rstrip("/").rsplit("/", 1)[-1]


def preset_for_url(
    url: str,
    presets: dict[str, TableOptions] | None = None,
    default: str = DEFAULT_PRESET,
) -> TableOptions:
    """Pick the preset whose name matches the page URL, falling back to *default*."""
    available = PRESETS if presets is None else presets
    key = preset_key_for_url(url)
    if key not in available:
        logger.warning("No preset for page %r; using %r", key, default)
        key = default
    return select_preset(key, available)


# ─── Preset Files ────────────────────────────────────────────────────────────


def _resolve_modifiers(name: str, raw_modifiers: dict) -> dict[int, Callable[[str], str]]:
    """Map column index -> modifier name to column index -> modifier function."""
    if not isinstance(raw_modifiers, dict):
        raise ConfigurationError(ErrorKind.INVALID_PRESET_FILE, f"preset {name!r}: columnModifiers must be a JSON object")
    resolved: dict[int, Callable[[str], str]] = {}
    for column, modifier_name in raw_modifiers.items():
        if not isinstance(modifier_name, str):
            raise ConfigurationError(
                ErrorKind.INVALID_PRESET_FILE,
                f"preset {name!r}: column modifier for {column!r} must be a modifier name, got {modifier_name!r}",
            )
        if modifier_name not in MODIFIERS:
            raise ConfigurationError(
                ErrorKind.UNKNOWN_MODIFIER,
                f"preset {name!r}: unknown column modifier {modifier_name!r}",
            )
        try:
            resolved[int(column)] = MODIFIERS[modifier_name]
        except ValueError as exc:
            raise ConfigurationError(
                ErrorKind.INVALID_PRESET_FILE,
                f"preset {name!r}: column modifier key {column!r} is not a column index",
            ) from exc
    return resolved


def parse_presets(data: dict) -> dict[str, TableOptions]:
    """Build TableOptions from a decoded presets document."""
    if not isinstance(data, dict):
        raise ConfigurationError(ErrorKind.INVALID_PRESET_FILE, "presets document must be a JSON object")

    presets: dict[str, TableOptions] = {}
    for name, raw in data.items():
        if not isinstance(raw, dict):
            raise ConfigurationError(ErrorKind.INVALID_PRESET_FILE, f"preset {name!r} must be a JSON object")
        fields = dict(raw)
        for key in ("columnModifiers", "column_modifiers"):
            if key in fields:
                fields[key] = _resolve_modifiers(name, fields[key] if fields[key] is not None else {})
        try:
            presets[name] = build_options(fields)
        except ValidationError as exc:
            raise ConfigurationError(ErrorKind.INVALID_PRESET_FILE, f"preset {name!r}: {exc}") from exc
    return presets


def load_presets(path: Path) -> dict[str, TableOptions]:
    """Load presets from a JSON file and merge them over the built-in ones."""
    logger.info("Loading presets from %s", path)
    try:
        with open(path, "r", encoding="utf-8") as fopen:
            data = json.load(fopen)
    except (OSError, UnicodeDecodeError, json.JSONDecodeError) as exc:
        raise ConfigurationError(ErrorKind.INVALID_PRESET_FILE, f"{path}: {exc}") from exc

    loaded = parse_presets(data)
    logger.info("Loaded %d presets: %s", len(loaded), ", ".join(sorted(loaded)))
    return {**PRESETS, **loaded}
