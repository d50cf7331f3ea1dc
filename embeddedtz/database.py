"""A collection of named TZif files, loaded from a zoneinfo directory."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterable, Iterator, List, Mapping, Optional, Tuple, Union

from .errors import ErrorKind, TzFileError
from .tz import Tz, parse
from .tzif import MAGIC

PathLike = Union[str, "os.PathLike[str]"]
Entry = Tuple[str, bytes]

_SKIPPED_FILES = frozenset({"posixrules"})
_DIRTY_SUFFIX = "-dirty"


def is_tzif(data: bytes) -> bool:
    """Whether ``data`` starts with the TZif magic string."""
    return bytes(data[:4]) == MAGIC


def _regular_files(root: Path) -> Iterator[Path]:
    with os.scandir(root) as entries:
        for entry in entries:
            path = Path(entry.path)
            if entry.is_dir(follow_symlinks=False):
                yield from _regular_files(path)
            elif entry.is_file(follow_symlinks=False):
                if entry.name not in _SKIPPED_FILES:
                    yield path


def collect_tzif_files(root: PathLike) -> List[Entry]:
    """Return ``(name, data)`` for every TZif file below ``root``.

    Names are paths relative to ``root`` with ``/`` separators, in sorted
    order. Files named ``posixrules`` and files that are not TZif are skipped.
    """
    root = Path(root)
    relative = sorted(path.relative_to(root).parts for path in _regular_files(root))
    collected = []
    for parts in relative:
        data = root.joinpath(*parts).read_bytes()
        if is_tzif(data):
            collected.append(("/".join(parts), data))
    return collected


def read_version(path: PathLike) -> str:
    """Read a tz database version string, dropping a trailing ``-dirty``."""
    version = Path(path).read_text(encoding="utf-8").strip()
    if version.endswith(_DIRTY_SUFFIX):
        version = version[: -len(_DIRTY_SUFFIX)]
    if not version:
        raise ValueError(f"{path} is empty")
    return version


class TzDatabase:
    """Named TZif data that can be parsed into time zones on demand."""

    def __init__(
        self,
        entries: Union[Mapping[str, bytes], Iterable[Entry]],
        version: Optional[str] = None,
    ) -> None:
        pairs = entries.items() if isinstance(entries, Mapping) else entries
        self._entries: Tuple[Entry, ...] = tuple((name, bytes(data)) for name, data in pairs)
        self._by_name = {}
        for name, data in self._entries:
            self._by_name.setdefault(name, data)
        self.version = version

    @classmethod
    def from_directory(
        cls, zoneinfo_root: PathLike, version_file: Optional[PathLike] = None
    ) -> "TzDatabase":
        """Load every TZif file below ``zoneinfo_root``.

        The version is read from ``version_file`` when one is given.
        """
        root = Path(zoneinfo_root)
        if not root.is_dir():
            raise FileNotFoundError(f"missing zoneinfo directory {root}")
        version = read_version(version_file) if version_file is not None else None
        return cls(collect_tzif_files(root), version)

    @property
    def entries(self) -> Tuple[Entry, ...]:
        """All ``(name, raw TZif bytes)`` pairs, in load order."""
        return self._entries

    def names(self) -> List[str]:
        """The names of all entries, in load order."""
        return [name for name, _ in self._entries]

    def parse(self, name: str) -> Tz:
        """Parse the named time zone.

        Raises TzFileError with ``INVALID_TIME_ZONE_FILE_NAME`` when the name
        is unknown.
        """
        try:
            data = self._by_name[name]
        except KeyError:
            raise TzFileError(ErrorKind.INVALID_TIME_ZONE_FILE_NAME) from None
        return parse(name, data)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[str]:
        return iter(self.names())