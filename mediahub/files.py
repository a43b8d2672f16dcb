"""Small file helpers: reading lines and finding files by pattern."""

from __future__ import annotations

import fnmatch
import itertools
import os
import stat
from collections.abc import Iterable

_MAX_EMPTY_LINES = 5


def read_all_lines(filename: str | os.PathLike[str]) -> list[str]:
    """Lines of a text file, reading stops after five consecutive empty lines.

    Trailing empty lines are dropped. An unreadable file yields no lines.
    """
    try:
        regular = stat.S_ISREG(os.stat(filename).st_mode)
        with open(filename, encoding="utf-8", errors="replace") as handle:
            content = handle.read()
    except OSError:
        return []

    source = content.split("\n")
    if not regular and source and source[-1] == "":
        source.pop()
    stream = itertools.chain(source, itertools.repeat("")) if regular else iter(source)

    lines: list[str] = []
    empty_count = 0
    for line in stream:
        if empty_count >= _MAX_EMPTY_LINES:
            break
        empty_count = empty_count + 1 if line == "" else 0
        lines.append(line)
    if empty_count:
        del lines[-empty_count:]
    return lines


def _matches(name: str, patterns: list[str]) -> bool:
    if not patterns:
        return True
    lowered = name.lower()
    return any(fnmatch.fnmatchcase(lowered, pattern.lower()) for pattern in patterns)


def find_files(directory: str | os.PathLike[str], name_filters: Iterable[str]) -> list[str]:
    """Paths of non-hidden files below ``directory`` whose names match any filter."""
    patterns = [p for p in name_filters if p]
    result: list[str] = []
    for root, dirs, files in os.walk(directory):
        dirs[:] = sorted(d for d in dirs if not d.startswith("."))
        for name in sorted(files):
            if name.startswith("."):
                continue
            path = os.path.join(root, name)
            if os.path.isfile(path) and _matches(name, patterns):
                result.append(path)
    return result