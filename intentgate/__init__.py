"""
intentgate - Intent-gated hooks for autonomous coding agents

Every agent tool call passes through a pre-hook. Mutating tools need a
declared intent, must stay inside that intent's owned scope, need human
approval, and must not be based on stale reads. Successful writes are
traced to an append-only JSONL log.

Usage:
    intentgate intents
    intentgate check INT-001 src/auth/login.py
    intentgate hash src/auth/login.py
    intentgate trace --intent INT-001
    intentgate config --set approval.mode=auto
    intentgate prompt
    intentgate lesson "Run the linter before writing" --category style
"""

__version__ = "0.1.0"

# Core layer
from .core.errors import RejectionKind, IntentGateError, HookRejection
from .core.intents import Intent, IntentStore
from .core.session import Session
from .core.trace import TraceEntry, TraceStore

# Hooks layer
from .hooks.result import HookResult
from .hooks.engine import HookEngine

# Services layer
from .services.approval import ApprovalDecision, StaticApprovalGate, CallbackApprovalGate

# Configuration
from .config import Config, ConfigManager, get_config

__all__ = [
    '__version__',
    'RejectionKind', 'IntentGateError', 'HookRejection',
    'Intent', 'IntentStore', 'Session', 'TraceEntry', 'TraceStore',
    'HookResult', 'HookEngine',
    'ApprovalDecision', 'StaticApprovalGate', 'CallbackApprovalGate',
    'Config', 'ConfigManager', 'get_config',
]
