"""
HookResult - What the pre-hook returns

Immutable. Either success (the caller may now run the tool, with the
possibly enriched payload) or a named rejection the agent can read,
fix and retry.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from ..core.errors import RejectionKind


@dataclass(frozen=True)
class HookResult:
    success: bool
    tool_name: str
    kind: Optional[RejectionKind] = None
    message: str = ""
    payload: Any = None
    # Set when a write passed the pipeline: the pre-image fingerprint
    pre_hash: Optional[str] = None
    metadata: Dict[str, Any] = field(default_factory=dict)

    @property
    def rejected(self) -> bool:
        return not self.success

    @classmethod
    def ok(cls, tool_name: str, payload: Any = None, **kwargs) -> 'HookResult':
        return cls(success=True, tool_name=tool_name, payload=payload, **kwargs)

    @classmethod
    def reject(cls, tool_name: str, kind: RejectionKind, message: str, payload: Any = None) -> 'HookResult':
        return cls(success=False, tool_name=tool_name, kind=kind, message=message, payload=payload)

    def to_error(self) -> Optional[Dict[str, str]]:
        """Tool-error shape handed back to the agent."""
        if self.success:
            return None
        return {"type": "tool-error", "code": self.kind.name, "message": self.message}

    def summary(self) -> str:
        if self.success:
            return f"ALLOWED {self.tool_name}"
        return f"REJECTED {self.tool_name} [{self.kind.name}] {self.message}"
