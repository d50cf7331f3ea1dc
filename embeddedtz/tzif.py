"""Parsing of compiled TZif files into UTC/local transition tables."""

from __future__ import annotations

import struct
from dataclasses import dataclass
from typing import Tuple, Union

from .errors import ErrorKind, TzFileError

MAGIC = b"TZif"
HEADER_LEN = 44
MIN_TIMESTAMP = -(2**63)
MAX_OFFSET = 86_400

_COUNTS = struct.Struct(">6I")
_TTINFO = struct.Struct(">iBB")
_TIME64 = struct.Struct(">q")

Source = Union[bytes, bytearray, memoryview]


@dataclass(frozen=True)
class OffsetZone:
    """A span of time with a constant UTC offset and abbreviation."""

    offset: int
    abbr_index: int

    def to_local(self, utc_ts: int) -> int:
        """Convert a UTC timestamp to a local timestamp."""
        return utc_ts + self.offset


LocalZones = Tuple[OffsetZone, ...]
"""Zones valid at a local time: empty for a gap, two for an ambiguity."""


@dataclass(frozen=True)
class TransitionTable:
    """Sorted UTC-to-local and local-to-UTC lookup tables of a time zone."""

    names: str
    utc_to_local: Tuple[Tuple[int, OffsetZone], ...]
    local_to_utc: Tuple[Tuple[int, LocalZones], ...]

    def abbreviation(self, zone: OffsetZone) -> str:
        """Return the abbreviation that ``zone`` refers to."""
        suffix = self.names.encode("utf-8")[zone.abbr_index:]
        return suffix.split(b"\0", 1)[0].decode("utf-8")


def _fail(kind: ErrorKind) -> TzFileError:
    return TzFileError(kind)


@dataclass(frozen=True)
class Header:
    """The counts from a TZif header."""

    isut_count: int
    isstd_count: int
    leap_count: int
    time_count: int
    type_count: int
    char_count: int

    def data_len(self, time_size: int) -> int:
        """Length of the data block when timestamps take ``time_size`` bytes."""
        return (
            self.time_count * (time_size + 1)
            + self.type_count * 6
            + self.char_count
            + self.leap_count * (time_size + 4)
            + self.isstd_count
            + self.isut_count
        )

    def parse_content(self, content: Source) -> TransitionTable:
        """Build the transition table from a 64-bit data block."""
        content = memoryview(content)
        trans_end = self.time_count * 8
        types_end = trans_end + self.time_count
        infos_end = types_end + self.type_count * 6
        abbr_end = infos_end + self.char_count
        if len(content) < abbr_end:
            raise _fail(ErrorKind.DATA_TOO_SHORT)

        raw_names = bytes(content[infos_end:abbr_end])
        try:
            names = raw_names.decode("utf-8")
        except UnicodeDecodeError:
            raise _fail(ErrorKind.NON_UTF8_ABBR) from None

        zones = []
        for seconds, _is_dst, abbr_index in _TTINFO.iter_unpack(content[types_end:infos_end]):
            if not -MAX_OFFSET < seconds < MAX_OFFSET:
                raise _fail(ErrorKind.OFFSET_OVERFLOW)
            if abbr_index >= len(raw_names):
                raise _fail(ErrorKind.NAME_OFFSET_OUT_OF_BOUNDS)
            zones.append(OffsetZone(seconds, abbr_index))

        times = (t for (t,) in _TIME64.iter_unpack(content[:trans_end]))
        utc_to_local = [(MIN_TIMESTAMP, zones[0])]
        for timestamp, type_index in zip(times, content[trans_end:types_end]):
            if type_index >= len(zones):
                raise _fail(ErrorKind.INVALID_TYPE)
            utc_to_local.append((timestamp, zones[type_index]))

        prev = zones[0]
        local_to_utc: list = [(MIN_TIMESTAMP, (prev,))]
        for utc_ts, cur in utc_to_local[1:]:
            prev_local = prev.to_local(utc_ts)
            cur_local = cur.to_local(utc_ts)
            if prev_local < cur_local:
                local_to_utc.append((prev_local, ()))
                local_to_utc.append((cur_local, (cur,)))
            elif prev_local == cur_local:
                local_to_utc.append((cur_local, (cur,)))
            else:
                local_to_utc.append((cur_local, (prev, cur)))
                local_to_utc.append((prev_local, (cur,)))
            prev = cur

        return TransitionTable(names, tuple(utc_to_local), tuple(local_to_utc))


def parse_header(source: Source) -> Header:
    """Parse and validate the TZif header at the start of ``source``."""
    source = memoryview(source)
    if len(source) < HEADER_LEN:
        raise _fail(ErrorKind.HEADER_TOO_SHORT)
    if bytes(source[:4]) != MAGIC:
        raise _fail(ErrorKind.INVALID_MAGIC)
    if source[4] not in b"23":
        raise _fail(ErrorKind.UNSUPPORTED_VERSION)
    isut, isstd, leap, time, types, chars = _COUNTS.unpack_from(source, 20)
    if (isut != 0 and isut != types) or (isstd != 0 and isstd != types):
        raise _fail(ErrorKind.INCONSISTENT_TYPE_COUNT)
    if types == 0:
        raise _fail(ErrorKind.NO_TYPES)
    return Header(isut, isstd, leap, time, types, chars)


def parse_tzif(source: Source) -> TransitionTable:
    """Parse a version 2 or 3 TZif file, using its 64-bit data block.

    Leap second records and the trailing POSIX TZ string are ignored.
    """
    source = memoryview(source)
    header = parse_header(source)
    first_len = HEADER_LEN + header.data_len(4)
    if first_len > len(source):
        raise _fail(ErrorKind.DATA_TOO_SHORT)
    rest = source[first_len:]
    header = parse_header(rest)
    if len(rest) < HEADER_LEN + header.data_len(8):
        raise _fail(ErrorKind.DATA_TOO_SHORT)
    return header.parse_content(rest[HEADER_LEN:])