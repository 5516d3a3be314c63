"""
Ignore - Workspace deny-list for agent tools

Patterns live one per line in .intentignore at the workspace root.
Blank lines and '#' comments are skipped. A path is ignored when a
pattern is a substring of it or glob-matches it.

No ignore file means nothing is ignored. A filter loaded from a file
follows edits to it: the file is re-read on every match and re-parsed
when its xxhash digest changes, the same way the intent catalog is.
"""

import fnmatch
import logging
from pathlib import Path
from typing import List, Optional

import xxhash

from .scope import normalize_path


logger = logging.getLogger(__name__)


def parse_patterns(text: str) -> List[str]:
    patterns = []
    for line in text.splitlines():
        line = line.strip()
        if not line or line.startswith("#"):
            continue
        patterns.append(line)
    return patterns


class IgnoreFilter:
    """Tests candidate paths against the workspace deny-list."""

    def __init__(self, patterns: Optional[List[str]] = None, path: Optional[Path] = None):
        self.path = Path(path) if path is not None else None
        self._patterns: List[str] = list(patterns or [])
        self._digest: Optional[str] = None

    @classmethod
    def from_file(cls, path: Path) -> 'IgnoreFilter':
        """Filter backed by an ignore file. A missing file ignores nothing."""
        return cls(path=path)

    @property
    def patterns(self) -> List[str]:
        if self.path is not None:
            self._refresh()
        return list(self._patterns)

    def _refresh(self) -> None:
        try:
            raw = self.path.read_bytes()
        except FileNotFoundError:
            raw = b""

        digest = xxhash.xxh64(raw).hexdigest()
        if digest == self._digest:
            return

        self._patterns = parse_patterns(raw.decode("utf-8", errors="replace"))
        self._digest = digest
        logger.debug("Loaded %d ignore pattern(s) from %s", len(self._patterns), self.path)

    def match(self, path: str) -> Optional[str]:
        """Return the first pattern that ignores the path, or None."""
        candidate = normalize_path(path)
        for pattern in self.patterns:
            if pattern in candidate or fnmatch.fnmatch(candidate, pattern):
                return pattern
        return None

    def __len__(self) -> int:
        return len(self.patterns)
