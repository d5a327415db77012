"""Utility helpers for :mod:`pdfrulingx`."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable, List, Union

from .exceptions import InvalidPageSelectionError

PathLike = Union[str, Path]


def ensure_path(path: PathLike) -> Path:
    """Return a resolved :class:`~pathlib.Path` for *path*."""

    if path is None:
        raise ValueError("Path must not be None")
    return Path(path).expanduser().resolve(strict=False)


def _expand_selection(entry: int | str) -> range:
    if not isinstance(entry, str):
        number = int(entry)
        return range(number, number + 1)
    first, dash, last = entry.partition("-")
    if not dash:
        number = int(entry)
        return range(number, number + 1)
    return range(int(first), int(last) + 1)


def normalize_pages(pages: Iterable[int | str], *, total_pages: int) -> List[int]:
    """Turn a page selection into sorted, unique 1-based page numbers.

    Entries are page numbers or strings such as ``"3"``, ``"2-5"`` or
    ``"1, 4-6"``. Blank strings are ignored. The selection is read once,
    so generators are accepted.
    """

    selection = list(pages)
    chosen: set[int] = set()
    for entry in selection:
        parts = entry.split(",") if isinstance(entry, str) else [entry]
        for part in parts:
            if isinstance(part, str):
                part = part.strip()
                if not part:
                    continue
            try:
                numbers = _expand_selection(part)
            except (TypeError, ValueError) as exc:
                raise InvalidPageSelectionError([entry]) from exc
            if not numbers or numbers[0] < 1 or numbers[-1] > total_pages:
                raise InvalidPageSelectionError([entry])
            chosen.update(numbers)

    if not chosen:
        raise InvalidPageSelectionError(selection)
    return sorted(chosen)


__all__ = ["PathLike", "ensure_path", "normalize_pages"]
