"""
Concurrency - Optimistic staleness detection by content fingerprint

An agent reads a file, plans an edit, then writes. If someone else
changed the file in between, the agent's plan is built on stale content.
The agent sends the SHA-256 of what it read (initial_hash); we compare it
to what is on disk now.

    exists, hash equal       -> OK
    exists, hash differs     -> STALE
    missing, "new-file"      -> OK
    missing, anything else   -> CONFLICT  (agent believed the file existed)

This is a read-time check. It does not lock. A writer racing between the
check and the external write is only caught by the next invocation.
resource_lock() is available for callers that want to hold a per-path
critical section across check and write.
"""

import hashlib
import threading
import weakref
from contextlib import contextmanager
from enum import Enum
from pathlib import Path
from typing import Iterator, Optional, Union


NEW_FILE_SENTINEL = "new-file"


class ConcurrencyStatus(Enum):
    OK = "ok"
    STALE = "stale"
    CONFLICT = "conflict"


def compute_content_hash(content: Union[str, bytes]) -> str:
    """SHA-256 hex digest. Text is encoded as UTF-8."""
    if isinstance(content, str):
        content = content.encode("utf-8")
    return hashlib.sha256(content).hexdigest()


def fingerprint(path: Path) -> Optional[str]:
    """Hash of a file's raw bytes, or None if it does not exist."""
    try:
        return compute_content_hash(Path(path).read_bytes())
    except FileNotFoundError:
        return None


class ConcurrencyGuard:
    """Compares claimed pre-write fingerprints against live files."""

    # Held only by callers inside resource_lock; unused entries drop out
    _locks: "weakref.WeakValueDictionary[str, threading.RLock]" = weakref.WeakValueDictionary()
    _locks_guard = threading.Lock()

    def check(self, path: Path, claimed_pre_hash: str) -> ConcurrencyStatus:
        current = fingerprint(path)

        if current is None:
            if claimed_pre_hash == NEW_FILE_SENTINEL:
                return ConcurrencyStatus.OK
            return ConcurrencyStatus.CONFLICT

        if current == claimed_pre_hash:
            return ConcurrencyStatus.OK
        return ConcurrencyStatus.STALE

    def current_hash(self, path: Path) -> str:
        """Fingerprint to send as initial_hash ('new-file' when absent)."""
        return fingerprint(path) or NEW_FILE_SENTINEL

    @contextmanager
    def resource_lock(self, path: Path) -> Iterator[None]:
        """Process-local advisory lock keyed by resolved path."""
        key = str(Path(path).resolve())
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.RLock()
        with lock:
            yield
