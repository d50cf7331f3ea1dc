# embeddedtz

Time zones read from compiled tz database (TZif) files, for use with
Python's `datetime`.

The package parses version 2 and 3 TZif data into transition tables and
exposes them as `datetime.tzinfo` objects. It has no runtime dependencies.

## Installation

```
pip install embeddedtz
```

## Parsing a zone file

`embeddedtz.tz.parse(name, data)` turns TZif bytes into a `Tz`. The name
only identifies where the data came from; it is not looked up anywhere.

```python
from datetime import datetime, timezone
from pathlib import Path

from embeddedtz.tz import parse

data = Path("/usr/share/zoneinfo/America/New_York").read_bytes()
new_york = parse("America/New_York", data)

utc_time = datetime(2019, 3, 10, 6, 45, tzinfo=timezone.utc)
local = utc_time.astimezone(new_york)
print(local, local.tzname())   # 2019-03-10 01:45:00-05:00 EST
```

Malformed data raises `embeddedtz.errors.TzFileError`, a subclass of
`ValueError`. Its `kind` attribute is an `ErrorKind` member saying what went
wrong: `HEADER_TOO_SHORT`, `INVALID_MAGIC`, `UNSUPPORTED_VERSION`,
`INCONSISTENT_TYPE_COUNT`, `NO_TYPES`, `OFFSET_OVERFLOW`, `NON_UTF8_ABBR`,
`DATA_TOO_SHORT`, `INVALID_TYPE`, `NAME_OFFSET_OUT_OF_BOUNDS` or
`INVALID_TIME_ZONE_FILE_NAME`. The message reads `tzfile error: <reason>`.

The lower-level pieces live in `embeddedtz.tzif`: `parse_header`,
`parse_tzif`, and the `Header`, `TransitionTable` and `OffsetZone`
classes.

## Using a `Tz`

A `Tz` works wherever `datetime` accepts a `tzinfo`: `astimezone`,
`utcoffset()`, `tzname()` and `fromutc()`. `dst()` always returns `None`,
since daylight-saving flags are not kept.

For local times that are ambiguous, `datetime.fold` chooses: fold 0 takes
the earlier offset, fold 1 the later one. For a local time inside a gap,
fold 0 uses the offset in effect before the gap and fold 1 the one after.

Offsets can also be queried directly, by timestamp in seconds:

- `Tz.offset_at_utc(timestamp)` returns the `Offset` in effect at a UTC
  timestamp.
- `Tz.offsets_at_local(timestamp)` returns every `Offset` a local timestamp
  may have: none in a gap, one normally, two (earlier first) when ambiguous.
- `Tz.offset_at_local_date(local_date)` returns the earliest offset valid on
  a local date, or `None` if that day does not exist in the zone.

An `Offset` has `seconds` (local minus UTC), `delta` (the same as a
`timedelta`) and `abbreviation`; `str()` of it gives the abbreviation.

`Tz.localize` attaches the zone to a naive local datetime that has exactly
one meaning, and raises `ValueError` when the time falls in a gap or is
ambiguous:

```python
from datetime import datetime

london = parse("Europe/London", Path("/usr/share/zoneinfo/Europe/London").read_bytes())
london.localize(datetime(2016, 3, 27, 2, 0))      # exists
london.localize(datetime(2016, 3, 27, 1, 30))     # raises: falls in the gap
```

Two `Tz` objects compare equal when their transition tables are equal.

## Fixed zones

`utc()` returns a zone with a zero offset named `UTC`. `fixed_offset(seconds)`
returns a zone with a constant offset east of UTC, named like `+01:00` (with
a seconds part when there is one). Offsets of a full day or more raise
`TzFileError` with kind `OFFSET_OVERFLOW`.

## A directory of zone files

`embeddedtz.database.TzDatabase.from_directory` collects every TZif file
under a zoneinfo tree, leaving out files named `posixrules` and files that
do not start with `TZif`, and can read the tzdb version from a version
file (a trailing `-dirty` is dropped; an empty file raises `ValueError`).
A missing directory raises `FileNotFoundError`.

```python
from embeddedtz.database import TzDatabase

db = TzDatabase.from_directory("zoneinfo", "tzdb/version")
print(db.version)
print(db.names()[:5])
berlin = db.parse("Europe/Berlin")
```

Names are paths relative to the root with `/` separators, in sorted order.
A `TzDatabase` can also be built from a mapping or an iterable of
`(name, bytes)` pairs. It supports `len()`, iteration over names, `in`, and
an `entries` property with the raw pairs. Parsing a name that is not present
raises `TzFileError` with kind `INVALID_TIME_ZONE_FILE_NAME`.

The helpers `is_tzif`, `collect_tzif_files` and `read_version` are available
from the same module.

## What it does not do

- No time zone data ships with the package. Zone files must come from the
  system's zoneinfo directory or another source you supply.
- Leap-second records are ignored, and so is the POSIX TZ rule string at the
  end of a TZif file. Times after the last recorded transition keep the last
  offset rather than following the rule.
- Version 1 TZif files are rejected.

## Running the tests

```
pip install embeddedtz[test]
pytest
```