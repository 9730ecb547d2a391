# iptally/report/export.py

from __future__ import annotations
from pathlib import Path
from typing import List, Union

from iptally.errors import wrap_os_error
from iptally.models import CountTable
from iptally.processing.stats import rank_counts
from iptally.utils.logging import get_logger

log = get_logger(__name__)


PathLike = Union[str, Path]


def format_report(counts: CountTable) -> List[str]:
    """
    Render the table as report lines, most frequent address first.

    Equal counts are ordered by numeric address so the report is
    reproducible across runs.
    """
    return [f"{address} - {count}" for address, count in rank_counts(counts)]


def write_report(path: PathLike, counts: CountTable) -> None:
    """
    Write the ranked counts to `path`, one "<address> - <count>" per line.

    Existing content is truncated. A failed write may leave the file
    partially written.
    """
    out_path = str(path)
    lines = format_report(counts)
    log.info("Saving report with %d addresses to %s", len(lines), out_path)

    try:
        with open(out_path, "w", encoding="utf-8", newline="\n") as fh:
            for line in lines:
                fh.write(line + "\n")
    except OSError as e:
        log.debug("Error writing output file %s: %s", out_path, e)
        raise wrap_os_error(e, "writing", out_path) from e

    log.debug("Report written successfully to %s", out_path)
