# iptally/errors.py
from __future__ import annotations

from enum import Enum
from typing import Optional


class ErrorKind(str, Enum):
    MISSING_PARAMETER = "missing_parameter"
    INVALID_ADDRESS = "invalid_address"
    INCONSISTENT_FILTER = "inconsistent_filter"
    INVALID_MASK = "invalid_mask"
    PARSE = "parse"
    IO = "io"
    PERMISSION = "permission"


class IpTallyError(Exception):
    """Base class for every failure the pipeline reports to the operator."""

    kind: ErrorKind


class ResolutionError(IpTallyError):
    """Parameters could not be resolved into a usable ParameterSet."""


class MissingRequiredParameterError(ResolutionError):
    kind = ErrorKind.MISSING_PARAMETER


class InvalidAddressError(ResolutionError):
    kind = ErrorKind.INVALID_ADDRESS

    def __init__(self, literal: str, source: str = "command line"):
        self.literal = literal
        self.source = source
        super().__init__(f"Invalid IPv4 address {literal!r} (from {source}).")


class InconsistentFilterError(ResolutionError):
    kind = ErrorKind.INCONSISTENT_FILTER


class InvalidMaskError(IpTallyError):
    kind = ErrorKind.INVALID_MASK

    def __init__(self, literal: str):
        self.literal = literal
        super().__init__(f"Invalid address mask {literal!r}.")


class ParseError(IpTallyError):
    kind = ErrorKind.PARSE

    def __init__(self, message: str, line_number: Optional[int] = None):
        self.line_number = line_number
        if line_number is not None:
            message = f"line {line_number}: {message}"
        super().__init__(message)


class FileIOError(IpTallyError):
    kind = ErrorKind.IO

    def __init__(self, message: str, path: Optional[str] = None):
        self.path = path
        super().__init__(message)


class FilePermissionError(FileIOError):
    kind = ErrorKind.PERMISSION


def wrap_os_error(exc: OSError, action: str, path: str) -> FileIOError:
    """
    Translate an OSError raised while touching `path` into the
    package's own taxonomy, keeping access denials distinguishable.
    """
    reason = exc.strerror or str(exc)
    if isinstance(exc, PermissionError):
        return FilePermissionError(f"Access denied while {action} {path}: {reason}", path=path)
    return FileIOError(f"Error while {action} {path}: {reason}", path=path)
