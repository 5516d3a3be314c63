"""
Hooks - The pre/post pipeline around agent tool calls
"""

from .result import HookResult
from .engine import HookEngine, inject_context, approval_gate_for

__all__ = ['HookResult', 'HookEngine', 'inject_context', 'approval_gate_for']
