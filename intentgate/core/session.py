"""
Session - Per-run agent state

One session per agent run. It holds at most one active intent.
Only select_active_intent sets it; only reset() clears it.
Selecting a new intent replaces the old one outright.

The session is passed explicitly into every pipeline call. Its lock
makes read-decide-mutate of the active intent a critical section and
keeps a single invocation in flight per session.
"""

import threading
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional

from .intents import Intent


@dataclass
class Session:
    session_id: str = field(default_factory=lambda: uuid.uuid4().hex)
    active_intent: Optional[Intent] = None
    # Pre-write content captured by the pre-hook, consumed by the post-hook
    pre_images: Dict[str, str] = field(default_factory=dict)
    lock: threading.RLock = field(default_factory=threading.RLock, repr=False, compare=False)

    @property
    def active_intent_id(self) -> Optional[str]:
        return self.active_intent.id if self.active_intent else None

    @property
    def has_intent(self) -> bool:
        return self.active_intent is not None

    @property
    def url(self) -> str:
        """Reference recorded in trace conversations."""
        return f"session://{self.session_id}"

    def activate(self, intent: Intent) -> None:
        with self.lock:
            self.active_intent = intent
            self.pre_images.clear()

    def reset(self) -> None:
        with self.lock:
            self.active_intent = None
            self.pre_images.clear()
