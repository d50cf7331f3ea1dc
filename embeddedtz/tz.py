"""Time zones backed by TZif transition tables, usable as ``datetime.tzinfo``."""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional, Tuple

from .errors import ErrorKind, TzFileError
from .tzif import (
    MAX_OFFSET,
    MIN_TIMESTAMP,
    OffsetZone,
    Source,
    TransitionTable,
    parse_tzif,
)

_EPOCH = datetime(1970, 1, 1)
_SECONDS_PER_DAY = 86_400


def _timestamp(dt: datetime) -> int:
    """Seconds since the epoch of ``dt``'s wall-clock reading, floored."""
    delta = dt.replace(tzinfo=None) - _EPOCH
    return delta.days * _SECONDS_PER_DAY + delta.seconds


@dataclass(frozen=True)
class Offset:
    """The UTC offset and abbreviation in effect at some instant of a zone."""

    zone: OffsetZone
    table: TransitionTable = field(repr=False, compare=False)

    @property
    def seconds(self) -> int:
        """Local time minus UTC, in seconds."""
        return self.zone.offset

    @property
    def delta(self) -> timedelta:
        """Local time minus UTC as a ``timedelta``."""
        return timedelta(seconds=self.zone.offset)

    @property
    def abbreviation(self) -> str:
        """The time zone abbreviation, such as ``"CET"``."""
        return self.table.abbreviation(self.zone)

    def __str__(self) -> str:
        return self.abbreviation


class Tz(tzinfo):
    """A time zone built from a transition table.

    Ambiguous local times are resolved with ``datetime.fold``: fold 0 picks
    the earlier offset, fold 1 the later one. For a local time inside a gap,
    fold 0 uses the offset in effect before the gap and fold 1 the one after.
    """

    def __init__(self, table: TransitionTable) -> None:
        super().__init__()
        self._table = table
        self._utc_keys = [ts for ts, _ in table.utc_to_local]
        self._local_keys = [ts for ts, _ in table.local_to_utc]

    @property
    def table(self) -> TransitionTable:
        """The underlying transition table."""
        return self._table

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Tz):
            return NotImplemented
        return self._table == other._table

    def __hash__(self) -> int:
        return hash(self._table)

    def __repr__(self) -> str:
        names = [self._table.abbreviation(zone) for _, zone in self._table.utc_to_local]
        return f"Tz({', '.join(dict.fromkeys(names))})"

    def __reduce__(self):
        return (Tz, (self._table,))

    def _offset(self, zone: OffsetZone) -> Offset:
        return Offset(zone, self._table)

    def offset_at_utc(self, timestamp: int) -> Offset:
        """The offset in effect at a UTC timestamp in seconds."""
        index = bisect_right(self._utc_keys, timestamp) - 1
        return self._offset(self._table.utc_to_local[index][1])

    def offsets_at_local(self, timestamp: int) -> Tuple[Offset, ...]:
        """Offsets that a local timestamp may have.

        Empty when the local time does not exist, two items (earlier first)
        when it is ambiguous.
        """
        index = bisect_right(self._local_keys, timestamp) - 1
        return tuple(self._offset(zone) for zone in self._table.local_to_utc[index][1])

    def offset_at_local_date(self, local_date: date) -> Optional[Offset]:
        """The earliest offset valid on a local date, or None if the day does not exist."""
        start = _timestamp(datetime(local_date.year, local_date.month, local_date.day))
        for timestamp in (start, start + _SECONDS_PER_DAY - 1):
            candidates = self.offsets_at_local(timestamp)
            if candidates:
                return candidates[0]
        return None

    def _single_zone(self) -> Optional[OffsetZone]:
        entries = self._table.utc_to_local
        return entries[0][1] if len(entries) == 1 else None

    def _zone_for_local(self, dt: datetime) -> OffsetZone:
        index = bisect_right(self._local_keys, _timestamp(dt)) - 1
        entries = self._table.local_to_utc
        zones = entries[index][1]
        if len(zones) == 1:
            return zones[0]
        if len(zones) == 2:
            return zones[dt.fold]
        before = entries[index - 1][1] if index > 0 else ()
        after = entries[index + 1][1] if index + 1 < len(entries) else ()
        if dt.fold and after:
            return after[0]
        if before:
            return before[-1]
        return after[0]

    def utcoffset(self, dt: Optional[datetime]) -> Optional[timedelta]:
        if dt is None:
            zone = self._single_zone()
            return None if zone is None else timedelta(seconds=zone.offset)
        return timedelta(seconds=self._zone_for_local(dt).offset)

    def dst(self, dt: Optional[datetime]) -> Optional[timedelta]:
        """Daylight saving information is not kept, so this is always None."""
        return None

    def tzname(self, dt: Optional[datetime]) -> Optional[str]:
        if dt is None:
            zone = self._single_zone()
            return None if zone is None else self._table.abbreviation(zone)
        return self._table.abbreviation(self._zone_for_local(dt))

    def fromutc(self, dt: datetime) -> datetime:
        if not isinstance(dt, datetime):
            raise TypeError("fromutc() requires a datetime argument")
        if dt.tzinfo is not self:
            raise ValueError("dt.tzinfo is not self")
        zone = self.offset_at_utc(_timestamp(dt)).zone
        local = dt + timedelta(seconds=zone.offset)
        candidates = self.offsets_at_local(_timestamp(local))
        later = len(candidates) == 2 and candidates[1].zone == zone != candidates[0].zone
        return local.replace(fold=1 if later else 0)

    def localize(self, dt: datetime) -> datetime:
        """Attach this zone to a naive local time that has exactly one meaning.

        Raises ValueError for local times that fall into a gap or that are
        ambiguous.
        """
        if dt.tzinfo is not None:
            raise ValueError("localize() requires a naive datetime")
        candidates = self.offsets_at_local(_timestamp(dt))
        if not candidates:
            raise ValueError(f"local time {dt} does not exist in this time zone")
        if len(candidates) > 1:
            raise ValueError(f"local time {dt} is ambiguous in this time zone")
        return dt.replace(tzinfo=self, fold=0)


def parse(name: str, source: Source) -> Tz:
    """Parse TZif bytes into a time zone; ``name`` only identifies the source."""
    return Tz(parse_tzif(source))


def _constant(names: str, zone: OffsetZone) -> Tz:
    return Tz(
        TransitionTable(
            names,
            ((MIN_TIMESTAMP, zone),),
            ((MIN_TIMESTAMP, (zone,)),),
        )
    )


def utc() -> Tz:
    """A time zone that is always UTC."""
    return _constant("UTC\0", OffsetZone(0, 0))


def fixed_offset(seconds: int) -> Tz:
    """A time zone with a constant offset east of UTC, named like ``+01:00``."""
    if not -MAX_OFFSET < seconds < MAX_OFFSET:
        raise TzFileError(ErrorKind.OFFSET_OVERFLOW)
    sign = "+" if seconds >= 0 else "-"
    hours, rest = divmod(abs(seconds), 3600)
    minutes, secs = divmod(rest, 60)
    name = f"{sign}{hours:02}:{minutes:02}"
    if secs:
        name += f":{secs:02}"
    return _constant(name + "\0", OffsetZone(seconds, 0))