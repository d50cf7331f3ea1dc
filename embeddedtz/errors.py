"""Errors raised while reading compiled time zone data."""

from __future__ import annotations

from enum import Enum


class ErrorKind(Enum):
    """The ways in which time zone data can be rejected."""

    HEADER_TOO_SHORT = "header too short"
    INVALID_MAGIC = "invalid magic"
    UNSUPPORTED_VERSION = "unsupported version"
    INCONSISTENT_TYPE_COUNT = "inconsistent type count"
    NO_TYPES = "no types"
    OFFSET_OVERFLOW = "time zone offset overflow"
    NON_UTF8_ABBR = "non-UTF-8 time zone abbreviations"
    DATA_TOO_SHORT = "data too short"
    INVALID_TIME_ZONE_FILE_NAME = "invalid time zone file name"
    INVALID_TYPE = "invalid time zone transition type"
    NAME_OFFSET_OUT_OF_BOUNDS = "name offset out of bounds"


class TzFileError(ValueError):
    """Raised when time zone data cannot be parsed or found."""

    def __init__(self, kind: ErrorKind) -> None:
        super().__init__(f"tzfile error: {kind.value}")
        self.kind = kind