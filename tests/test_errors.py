import pytest

from embeddedtz.errors import ErrorKind, TzFileError


@pytest.mark.parametrize(
    ("kind", "message"),
    [
        (ErrorKind.HEADER_TOO_SHORT, "tzfile error: header too short"),
        (ErrorKind.INVALID_MAGIC, "tzfile error: invalid magic"),
        (ErrorKind.UNSUPPORTED_VERSION, "tzfile error: unsupported version"),
        (ErrorKind.INCONSISTENT_TYPE_COUNT, "tzfile error: inconsistent type count"),
        (ErrorKind.NO_TYPES, "tzfile error: no types"),
        (ErrorKind.OFFSET_OVERFLOW, "tzfile error: time zone offset overflow"),
        (ErrorKind.NON_UTF8_ABBR, "tzfile error: non-UTF-8 time zone abbreviations"),
        (ErrorKind.DATA_TOO_SHORT, "tzfile error: data too short"),
        (ErrorKind.INVALID_TIME_ZONE_FILE_NAME, "tzfile error: invalid time zone file name"),
        (ErrorKind.INVALID_TYPE, "tzfile error: invalid time zone transition type"),
        (ErrorKind.NAME_OFFSET_OUT_OF_BOUNDS, "tzfile error: name offset out of bounds"),
    ],
)
def test_message(kind, message):
    assert str(TzFileError(kind)) == message


def test_kind_is_kept():
    error = TzFileError(ErrorKind.NO_TYPES)
    assert error.kind is ErrorKind.NO_TYPES


def test_is_a_value_error_with_kind_and_message():
    error = TzFileError(ErrorKind.INVALID_MAGIC)
    assert isinstance(error, ValueError)
    assert error.kind is ErrorKind.INVALID_MAGIC
    assert str(error) == "tzfile error: invalid magic"


def test_every_kind_has_distinct_message():
    messages = {str(TzFileError(kind)) for kind in ErrorKind}
    assert len(messages) == len(ErrorKind)