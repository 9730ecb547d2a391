# iptally/processing/filter.py

from __future__ import annotations
from ipaddress import IPv4Address, AddressValueError
from typing import List, Optional, Sequence

from iptally.errors import InconsistentFilterError, InvalidMaskError
from iptally.models import LogRecord
from iptally.utils.logging import get_logger

log = get_logger(__name__)


def parse_mask(literal: str) -> int:
    """
    Parse a dotted-quad bitmask into its 32-bit value (network byte order).

    Any IPv4-shaped value is accepted; the bits need not be contiguous.
    """
    try:
        return int(IPv4Address(literal.strip()))
    except AddressValueError as e:
        raise InvalidMaskError(literal) from e


def filter_records(
        records: Sequence[LogRecord],
        address_start: Optional[IPv4Address] = None,
        address_mask: Optional[str] = None,
        *,
        strict_subnet: bool = False,
) -> List[LogRecord]:
    """
    Restrict records to an address range.

    - no start and no mask: records are returned unchanged
    - mask given: keep a record when (address & mask) >= (start & mask).
      This is an ordering test on the masked values, not subnet
      membership; every address above the start's network passes too.
      With strict_subnet=True the test becomes ==, i.e. real containment.
    - start only: keep records whose address equals the start.
    """
    if address_start is None and not address_mask:
        return list(records)

    if address_mask:
        if address_start is None:
            raise InconsistentFilterError("An address mask requires an address start.")

        mask = parse_mask(address_mask)
        floor = int(address_start) & mask
        if strict_subnet:
            kept = [r for r in records if (int(r.address) & mask) == floor]
        else:
            kept = [r for r in records if (int(r.address) & mask) >= floor]
        log.info(
            "Mask filter %s/%s (%s) kept %d of %d records",
            address_start,
            address_mask,
            "subnet" if strict_subnet else "floor",
            len(kept),
            len(records),
        )
        return kept

    kept = [r for r in records if r.address == address_start]
    log.info("Exact filter %s kept %d of %d records", address_start, len(kept), len(records))
    return kept
