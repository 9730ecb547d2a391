# iptally/processing/stats.py

from __future__ import annotations
from typing import Iterable, List

import pandas as pd

from iptally.models import CountTable, LogRecord
from iptally.utils.logging import get_logger

log = get_logger(__name__)


def records_to_dataframe(records: Iterable[LogRecord]) -> pd.DataFrame:
    """
    Lay records out as a DataFrame with `address` and `timestamp` columns.

    Addresses stay IPv4Address objects (object dtype) so they round-trip
    into the CountTable unchanged.
    """
    rows = [(r.address, r.timestamp) for r in records]
    return pd.DataFrame(rows, columns=["address", "timestamp"])


def count_requests(records: Iterable[LogRecord]) -> CountTable:
    """
    Count how many records each address has.

    Returns:
        dict of address -> count, keys in first-seen order
    """
    df = records_to_dataframe(records)
    if df.empty:
        return {}

    sizes = df.groupby("address", sort=False).size()
    counts: CountTable = {address: int(n) for address, n in sizes.items()}

    log.info("Counted %d records over %d unique addresses", len(df), len(counts))
    return counts


def rank_counts(counts: CountTable) -> List[tuple]:
    """
    Order (address, count) pairs by count descending, ties by address ascending.
    """
    return sorted(counts.items(), key=lambda item: (-item[1], int(item[0])))
