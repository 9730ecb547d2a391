# iptally/models.py
from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from ipaddress import IPv4Address
from typing import Dict, Optional


@dataclass(frozen=True)
class LogRecord:
    address: IPv4Address    # client address taken from the log line
    timestamp: datetime     # request time taken from the same line


@dataclass(frozen=True)
class ParameterSet:
    log_file_path: str
    output_file_path: str
    address_start: Optional[IPv4Address] = None
    address_mask: Optional[str] = None  # raw literal, validated by the range filter


# address -> number of requests, in first-seen order
CountTable = Dict[IPv4Address, int]
