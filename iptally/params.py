# iptally/params.py

from __future__ import annotations
from ipaddress import IPv4Address, AddressValueError
from pathlib import Path
from typing import Dict, Mapping, Optional, Sequence, Union

from dotenv import dotenv_values

from iptally.errors import (
    InconsistentFilterError,
    InvalidAddressError,
    MissingRequiredParameterError,
)
from iptally.models import ParameterSet
from iptally.utils.logging import get_logger

log = get_logger(__name__)

PathLike = Union[str, Path]

DEFAULT_CONFIG_FILE = "iptally.env"

FIELDS = ("log_file_path", "output_file_path", "address_start", "address_mask")

# field -> command-line flag
FLAGS: Dict[str, str] = {
    "log_file_path": "--file-log",
    "output_file_path": "--file-output",
    "address_start": "--address-start",
    "address_mask": "--address-mask",
}

# field -> key in the configuration file
CONFIG_KEYS: Dict[str, str] = {
    "log_file_path": "logFilePath",
    "output_file_path": "outputFilePath",
    "address_start": "addressStart",
    "address_mask": "addressMask",
}

# field -> environment variable
ENV_VARS: Dict[str, str] = {
    "log_file_path": "LOG_FILE_PATH",
    "output_file_path": "OUTPUT_FILE_PATH",
    "address_start": "ADDRESS_START",
    "address_mask": "ADDRESS_MASK",
}

_FLAG_TO_FIELD = {flag: field for field, flag in FLAGS.items()}


def load_config(path: PathLike = DEFAULT_CONFIG_FILE) -> Dict[str, str]:
    """
    Read a `key=value` configuration file (dotenv syntax).

    A missing file is not an error: it simply contributes no values.
    """
    path = Path(path).expanduser()
    if not path.is_file():
        log.debug("No configuration file at %s", path)
        return {}

    values = {k: v for k, v in dotenv_values(path).items() if v is not None}
    log.info("Loaded %d configuration keys from %s", len(values), path)
    return values


def scan_flags(args: Sequence[str]) -> Dict[str, Optional[str]]:
    """
    Pick the recognised flags out of a raw argument list.

    Unknown tokens are ignored. A flag repeated later on the line
    overrides the earlier value.
    """
    found: Dict[str, Optional[str]] = {field: None for field in FIELDS}
    i = 0
    while i < len(args):
        field = _FLAG_TO_FIELD.get(args[i])
        if field is not None:
            if i + 1 >= len(args):
                raise MissingRequiredParameterError(f"{args[i]} requires a value.")
            found[field] = args[i + 1]
            i += 2
            continue
        i += 1
    return found


def _first_non_empty(*candidates: Optional[str]) -> Optional[str]:
    for value in candidates:
        if value is not None and value.strip():
            return value
    return None


def _parse_address(literal: str, source: str) -> IPv4Address:
    try:
        return IPv4Address(literal.strip())
    except AddressValueError as e:
        raise InvalidAddressError(literal, source) from e


def resolve_values(
        cli: Mapping[str, Optional[str]],
        config: Mapping[str, Optional[str]],
        env: Mapping[str, Optional[str]],
) -> ParameterSet:
    """
    Merge already-parsed flag values with the configuration and environment.

    For every field the first non-empty value wins, in the order
    command line -> configuration -> environment.
    """
    merged: Dict[str, Optional[str]] = {}
    origin: Dict[str, str] = {}
    for field in FIELDS:
        sources = (
            ("command line", cli.get(field)),
            ("configuration", config.get(CONFIG_KEYS[field])),
            ("environment", env.get(ENV_VARS[field])),
        )
        merged[field] = None
        for name, value in sources:
            picked = _first_non_empty(value)
            if picked is not None:
                merged[field] = picked
                origin[field] = name
                break

    address_start = None
    if merged["address_start"] is not None:
        address_start = _parse_address(merged["address_start"], origin["address_start"])

    if not merged["log_file_path"] or not merged["output_file_path"]:
        raise MissingRequiredParameterError(
            f"Required parameters {FLAGS['log_file_path']} and "
            f"{FLAGS['output_file_path']} were not provided."
        )

    if merged["address_mask"] is not None and address_start is None:
        raise InconsistentFilterError(
            "An address mask was given without an address start."
        )

    params = ParameterSet(
        log_file_path=merged["log_file_path"],
        output_file_path=merged["output_file_path"],
        address_start=address_start,
        address_mask=merged["address_mask"],
    )
    log.debug("Resolved parameters %s (sources: %s)", params, origin)
    return params


def resolve(
        args: Sequence[str],
        config: Mapping[str, Optional[str]],
        env: Mapping[str, Optional[str]],
) -> ParameterSet:
    """Resolve a ParameterSet from raw arguments, a config mapping and an env mapping."""
    return resolve_values(scan_flags(args), config, env)
