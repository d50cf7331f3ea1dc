"""Time zones parsed from compiled TZif data, usable as datetime tzinfo objects."""

__version__ = "0.1.3"
__all__ = ["errors", "tzif", "tz", "database"]