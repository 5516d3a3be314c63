"""
Trace Store - Append-only provenance records

Each accepted mutation becomes one TraceEntry, serialized as one JSON
line in .orchestration/agent_trace.jsonl. Lines are never rewritten,
reordered or compacted. Each line parses on its own.

Appends are serialized per trace file within the process and written
with a single write() in append mode, then flushed to disk. A failed
append raises: a lost audit record is a compliance failure.
"""

import os
import threading
import uuid
import weakref
from dataclasses import dataclass, field
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional

import orjson


@dataclass(frozen=True)
class Contributor:
    entity_type: str = "AI"
    model_identifier: str = "unknown"

    def to_dict(self) -> Dict[str, Any]:
        return {"entity_type": self.entity_type, "model_identifier": self.model_identifier}


@dataclass(frozen=True)
class TraceRange:
    start_line: int
    end_line: int
    content_hash: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "start_line": self.start_line,
            "end_line": self.end_line,
            "content_hash": self.content_hash,
        }


@dataclass(frozen=True)
class TraceConversation:
    url: str
    contributor: Contributor
    ranges: List[TraceRange]
    related: List[Dict[str, str]]
    mutation_class: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "url": self.url,
            "contributor": self.contributor.to_dict(),
            "ranges": [r.to_dict() for r in self.ranges],
            "related": [dict(r) for r in self.related],
            "mutation_class": self.mutation_class,
        }


@dataclass(frozen=True)
class TraceFile:
    relative_path: str
    conversations: List[TraceConversation]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "relative_path": self.relative_path,
            "conversations": [c.to_dict() for c in self.conversations],
        }


@dataclass(frozen=True)
class TraceEntry:
    files: List[TraceFile]
    revision_id: str = "HEAD"
    id: str = field(default_factory=lambda: str(uuid.uuid4()))
    timestamp: str = field(default_factory=lambda: datetime.now(timezone.utc).isoformat())

    @property
    def intent_ids(self) -> List[str]:
        """Every intent this entry links back to."""
        return [
            related["value"]
            for f in self.files
            for conv in f.conversations
            for related in conv.related
            if related.get("type") == "specification"
        ]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "timestamp": self.timestamp,
            "vcs": {"revision_id": self.revision_id},
            "files": [f.to_dict() for f in self.files],
        }

    @classmethod
    def from_dict(cls, d: Dict[str, Any]) -> 'TraceEntry':
        files = []
        for f in d.get("files", []):
            conversations = []
            for c in f.get("conversations", []):
                contributor = c.get("contributor", {})
                conversations.append(TraceConversation(
                    url=c.get("url", ""),
                    contributor=Contributor(
                        entity_type=contributor.get("entity_type", "AI"),
                        model_identifier=contributor.get("model_identifier", "unknown"),
                    ),
                    ranges=[TraceRange(**r) for r in c.get("ranges", [])],
                    related=list(c.get("related", [])),
                    mutation_class=c.get("mutation_class", ""),
                ))
            files.append(TraceFile(relative_path=f["relative_path"], conversations=conversations))

        return cls(
            files=files,
            revision_id=d.get("vcs", {}).get("revision_id", "HEAD"),
            id=d["id"],
            timestamp=d["timestamp"],
        )


class TraceStore:
    """Append-only JSONL store for trace entries."""

    # One lock per trace file; the entry lives as long as a store holds it
    _locks: "weakref.WeakValueDictionary[str, threading.Lock]" = weakref.WeakValueDictionary()
    _locks_guard = threading.Lock()

    def __init__(self, path: Path, fsync: bool = True):
        self.path = Path(path)
        self.fsync = fsync
        key = str(self.path.resolve())
        with self._locks_guard:
            lock = self._locks.get(key)
            if lock is None:
                lock = self._locks[key] = threading.Lock()
            self._lock = lock

    def append(self, entry: TraceEntry) -> TraceEntry:
        line = orjson.dumps(entry.to_dict()) + b"\n"
        with self._lock:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, "ab") as f:
                f.write(line)
                f.flush()
                if self.fsync:
                    os.fsync(f.fileno())
        return entry

    def iter_entries(self) -> Iterator[TraceEntry]:
        """Yield entries in file order. Unparseable lines are skipped."""
        if not self.path.exists():
            return
        with open(self.path, "rb") as f:
            for line in f:
                line = line.strip()
                if not line:
                    continue
                try:
                    yield TraceEntry.from_dict(orjson.loads(line))
                except (orjson.JSONDecodeError, KeyError, TypeError):
                    continue

    def read_all(self) -> List[TraceEntry]:
        return list(self.iter_entries())

    def read_by_intent(self, intent_id: str) -> List[TraceEntry]:
        return [e for e in self.iter_entries() if intent_id in e.intent_ids]

    def count(self) -> int:
        return len(self.read_all())

    def get(self, entry_id: str) -> Optional[TraceEntry]:
        for entry in self.iter_entries():
            if entry.id == entry_id:
                return entry
        return None
