# iptally/utils/timestamps.py

from __future__ import annotations
from datetime import datetime

import pandas as pd

from iptally.utils.logging import get_logger

log = get_logger(__name__)

# Format written by the servers we usually read; anything else goes through pandas.
CANONICAL_FORMAT = "%Y-%m-%d %H:%M:%S"


def parse_timestamp(text: str) -> datetime:
    """
    Parse the date-time literal captured from a log line.

    The canonical `YYYY-MM-DD HH:MM:SS` form is tried first; other
    spellings (missing seconds, single-digit fields, day-first dates)
    are handed to `pandas.to_datetime`, which is lenient in the same way
    a locale-aware parser is.

    Raises:
        ValueError if the literal cannot be understood as a date-time.
    """
    text = text.strip()
    try:
        return datetime.strptime(text, CANONICAL_FORMAT)
    except ValueError:
        pass

    parsed = pd.to_datetime(text, errors="raise")
    if pd.isna(parsed):
        raise ValueError(f"not a date-time: {text!r}")

    log.debug("Parsed non-canonical timestamp %r as %s", text, parsed)
    return parsed.to_pydatetime()
