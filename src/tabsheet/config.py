"""Shared configuration for the tabsheet extraction pipeline."""

import os
from pathlib import Path

from dotenv import load_dotenv

ROOT = Path(__file__).parent.parent.parent.resolve()
load_dotenv(ROOT / ".env")

DEFAULT_PRESET = os.getenv("TABSHEET_PRESET", "dividendos")

# Polling budget used while waiting for a source to become available
POLL_ATTEMPTS = int(os.getenv("TABSHEET_POLL_ATTEMPTS", "60"))
POLL_INTERVAL = float(os.getenv("TABSHEET_POLL_INTERVAL", "1.0"))

# Optional JSON file with extra presets (see tabsheet.tables.presets.load_presets)
PRESETS_FILE = os.getenv("TABSHEET_PRESETS_FILE", "")


def presets_path() -> Path | None:
    """Return the configured presets file, resolved against ROOT, or None if unset."""
    if not PRESETS_FILE:
        return None
    path = Path(PRESETS_FILE)
    return path if path.is_absolute() else ROOT / path
