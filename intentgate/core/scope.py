"""
Scope - Ownership glob matching

An intent owns a set of glob patterns over workspace-relative paths.
A path is in scope if ANY pattern matches. No pattern outranks another.

Glob dialect:
  .      literal dot
  *      any run of characters except '/'
  ?      one character except '/'
  **     any sequence of path segments, including none
         ('src/**' matches 'src' and 'src/a/b.ts'; '**/x.md' matches 'x.md')
"""

import posixpath
import re
from typing import Iterable, List, Optional, Pattern, Tuple


def normalize_path(path: str) -> str:
    """Normalize to a POSIX relative path ('./a\\b' -> 'a/b')."""
    path = path.replace("\\", "/").strip()
    normalized = posixpath.normpath(path) if path else ""
    if normalized == ".":
        return ""
    return normalized


def escapes_root(path: str) -> bool:
    """True if a normalized relative path climbs above its root."""
    return path == ".." or path.startswith("../") or path.startswith("/")


def compile_glob(pattern: str) -> Pattern:
    """Compile one scope glob to an anchored regex."""
    pattern = normalize_path(pattern)
    parts = []
    i = 0
    n = len(pattern)

    while i < n:
        if pattern.startswith("**", i):
            at_start = i == 0 or pattern[i - 1] == "/"
            followed_by_sep = pattern.startswith("/", i + 2)
            at_end = i + 2 == n

            if at_start and followed_by_sep:
                # '**/' : zero or more leading segments
                parts.append("(?:.*/)?")
                i += 3
                continue
            if at_end and i > 0 and pattern[i - 1] == "/":
                # '/**' : the directory itself or anything below it
                parts.pop()
                parts.append("(?:/.*)?")
                i += 2
                continue
            parts.append(".*")
            i += 2
        elif pattern[i] == "*":
            parts.append("[^/]*")
            i += 1
        elif pattern[i] == "?":
            parts.append("[^/]")
            i += 1
        else:
            parts.append(re.escape(pattern[i]))
            i += 1

    return re.compile("".join(parts) + r"\Z", re.DOTALL)


class ScopeMatcher:
    """Compiled ownership scope for one intent."""

    def __init__(self, patterns: Iterable[str]):
        self.patterns: Tuple[str, ...] = tuple(patterns)
        self._compiled: List[Tuple[str, Pattern]] = [
            (p, compile_glob(p)) for p in self.patterns
        ]

    def matches(self, path: str) -> bool:
        """True if the path is in scope."""
        return self.first_match(path) is not None

    def first_match(self, path: str) -> Optional[str]:
        """Return a pattern that admits the path, or None."""
        candidate = normalize_path(path)
        for pattern, regex in self._compiled:
            if regex.match(candidate):
                return pattern
        return None

    def __bool__(self) -> bool:
        return bool(self.patterns)

    def __repr__(self) -> str:
        return f"ScopeMatcher({list(self.patterns)!r})"
