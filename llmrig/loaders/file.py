"""Loading files from disk by glob pattern or directory.

A :class:`FileLoader` is a lazy, single-use sequence. Failures on single files do
not stop iteration: they appear in the sequence as :class:`FileLoaderError`
instances, which :meth:`FileLoader.ignore_errors` drops.
"""

from __future__ import annotations

import glob
import os
from enum import Enum, auto
from pathlib import Path
from typing import Any, Iterable, Iterator


class FileLoaderError(Exception):
    """Error raised or yielded while loading files."""


def _io_error(exc: BaseException) -> FileLoaderError:
    error = FileLoaderError(f"IO error: {exc}")
    error.__cause__ = exc
    return error


class _Stage(Enum):
    PATHS = auto()
    CONTENTS = auto()
    PATHS_WITH_CONTENTS = auto()


def _read(path: Path) -> str:
    return path.read_text(encoding="utf-8")


class FileLoader:
    """Lazy sequence of file paths, file contents, or (path, content) pairs."""

    def __init__(self, items: Iterable[Any], stage: _Stage = _Stage.PATHS) -> None:
        self._items = iter(items)
        self._stage = stage

    @classmethod
    def with_glob(cls, pattern: str) -> FileLoader:
        """Create a loader over the paths matching ``pattern``, in sorted order."""
        try:
            paths = sorted(glob.glob(pattern, recursive=True))
        except (OSError, ValueError) as exc:
            raise FileLoaderError(f"Pattern error: {exc}") from exc
        return cls(Path(p) for p in paths)

    @classmethod
    def with_dir(cls, directory: str | os.PathLike[str]) -> FileLoader:
        """Create a loader over the regular files directly inside ``directory``."""
        try:
            with os.scandir(directory) as entries:
                paths = sorted(Path(entry.path) for entry in entries if entry.is_file())
        except OSError as exc:
            raise _io_error(exc) from exc
        return cls(paths)

    def _require_paths(self, method: str) -> None:
        if self._stage is not _Stage.PATHS:
            raise TypeError(f"{method}() needs a loader over file paths")

    def read(self) -> FileLoader:
        """Replace each path with the file's text."""
        self._require_paths("read")

        def contents() -> Iterator[Any]:
            for item in self._items:
                if isinstance(item, FileLoaderError):
                    yield item
                    continue
                try:
                    yield _read(Path(item))
                except (OSError, UnicodeDecodeError) as exc:
                    yield _io_error(exc)

        return FileLoader(contents(), _Stage.CONTENTS)

    def read_with_path(self) -> FileLoader:
        """Replace each path with a ``(path, text)`` pair."""
        self._require_paths("read_with_path")

        def pairs() -> Iterator[Any]:
            for item in self._items:
                if isinstance(item, FileLoaderError):
                    yield item
                    continue
                path = Path(item)
                try:
                    yield path, _read(path)
                except (OSError, UnicodeDecodeError) as exc:
                    yield _io_error(exc)

        return FileLoader(pairs(), _Stage.PATHS_WITH_CONTENTS)

    def ignore_errors(self) -> FileLoader:
        """Drop every error, keeping only successful items."""
        return FileLoader(
            (item for item in self._items if not isinstance(item, FileLoaderError)),
            self._stage,
        )

    def __iter__(self) -> Iterator[Any]:
        return self._items