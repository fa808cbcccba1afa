"""Path glob matching with ``**`` support, for watch patterns."""

from __future__ import annotations

import re
from functools import lru_cache
from pathlib import Path, PurePosixPath

_MAGIC = re.compile(r"[*?\[]")


@lru_cache(maxsize=256)
def compile_glob(pattern: str) -> re.Pattern[str]:
    """Translate a POSIX-style glob into a compiled regex.

    ``*`` and ``?`` never cross a ``/``; a ``**/`` segment matches zero or
    more directories and a trailing ``**`` matches everything below.
    """
    out: list[str] = []
    i, n = 0, len(pattern)
    while i < n:
        c = pattern[i]
        if pattern.startswith("**/", i):
            out.append("(?:.*/)?")
            i += 3
        elif pattern.startswith("**", i):
            out.append(".*")
            i += 2
        elif c == "*":
            out.append("[^/]*")
            i += 1
        elif c == "?":
            out.append("[^/]")
            i += 1
        elif c == "[":
            end = pattern.find("]", i + 2)
            if end == -1:
                out.append(re.escape(c))
                i += 1
                continue
            body = pattern[i + 1 : end]
            if body.startswith("!"):
                body = "^" + body[1:]
            out.append(f"[{body}]")
            i = end + 1
        else:
            out.append(re.escape(c))
            i += 1
    return re.compile("".join(out) + r"\Z")


def matches_any(path: str, patterns: list[str] | tuple[str, ...]) -> bool:
    """True if the ``/``-separated relative *path* matches one of *patterns*."""
    return any(compile_glob(p).match(path) for p in patterns)


def watch_roots(patterns: list[str] | tuple[str, ...], base_dir: Path) -> list[Path]:
    """Return the deduplicated directories that must be observed for *patterns*.

    Each root is the longest literal directory prefix of a pattern; a
    pattern naming a single file is watched through its parent directory so
    atomic save-by-rename still registers.
    """
    roots: list[Path] = []
    for pattern in patterns:
        parts = PurePosixPath(pattern).parts
        literal: list[str] = []
        for part in parts:
            if _MAGIC.search(part):
                break
            literal.append(part)
        is_literal_file = len(literal) == len(parts)
        if is_literal_file:
            literal = literal[:-1]
        root = base_dir.joinpath(*literal) if literal else base_dir
        if root not in roots:
            roots.append(root)

    # Drop roots nested inside another root.
    return [r for r in roots if not any(o != r and o in r.parents for o in roots)]
