# iptally/datasources/access_log.py

from __future__ import annotations
import re
from dataclasses import dataclass
from ipaddress import IPv4Address, AddressValueError
from pathlib import Path
from typing import Iterator, List, Optional, Union

from iptally.errors import ParseError, wrap_os_error
from iptally.models import LogRecord
from iptally.utils.logging import get_logger
from iptally.utils.timestamps import parse_timestamp

log = get_logger(__name__)

PathLike = Union[str, Path]

# group 1: dotted-quad address, group 2: "YYYY-MM-DD HH:MM:SS"-like literal
LINE_PATTERN = re.compile(r"(\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3}) ([\d-]+\s[\d:]+)")


def parse_line(line: str, line_number: Optional[int] = None) -> Optional[LogRecord]:
    """
    Extract a LogRecord from one line of the log.

    Returns None when the line does not contain an address/timestamp pair.
    A pair that matches the pattern but cannot be parsed raises ParseError.
    """
    match = LINE_PATTERN.search(line)
    if match is None:
        return None

    address_text, timestamp_text = match.group(1), match.group(2)
    try:
        address = IPv4Address(address_text)
    except AddressValueError as e:
        raise ParseError(f"invalid address {address_text!r}: {e}", line_number) from e

    try:
        timestamp = parse_timestamp(timestamp_text)
    except (ValueError, OverflowError) as e:
        raise ParseError(f"invalid timestamp {timestamp_text!r}: {e}", line_number) from e

    return LogRecord(address=address, timestamp=timestamp)


@dataclass
class AccessLogSource:
    """
    Line-oriented access log on disk.

    Every line is searched for an IPv4 literal followed by a date-time;
    lines without one are skipped.
    """

    path: PathLike
    encoding: str = "utf-8"

    def iter_records(self) -> Iterator[LogRecord]:
        path = str(self.path)
        try:
            with open(path, "r", encoding=self.encoding, errors="replace") as fh:
                for line_number, line in enumerate(fh, start=1):
                    record = parse_line(line, line_number)
                    if record is not None:
                        yield record
        except OSError as e:
            log.debug("Error reading input file %s: %s", path, e)
            raise wrap_os_error(e, "reading", path) from e

    def load(self) -> List[LogRecord]:
        records = list(self.iter_records())
        if not records:
            log.warning("No records loaded from %s", self.path)
        else:
            log.info("Loaded %d records from %s", len(records), self.path)
        return records


def read_logs(path: PathLike) -> List[LogRecord]:
    """Read every address/timestamp record from `path`, in file order."""
    return AccessLogSource(path=path).load()
