"""
Core - Data layer for intentgate

Contains the foundational pieces:
- Errors: Rejection taxonomy
- Intents: Catalog loading and resolution
- Scope: Owned-scope glob matching
- Ignore: Workspace deny-list
- Concurrency: Content fingerprints and staleness checks
- Tools: Classification registry and argument records
- Session: Per-run active intent
- Trace: Trace entry records and the append-only store
"""

from .errors import (
    RejectionKind, IntentGateError, HookRejection,
    CatalogNotFound, CatalogMalformed, IntentNotFound, MalformedArgs,
)
from .intents import Intent, IntentStore
from .scope import ScopeMatcher, normalize_path, escapes_root
from .ignore import IgnoreFilter
from .concurrency import (
    ConcurrencyGuard, ConcurrencyStatus, NEW_FILE_SENTINEL,
    compute_content_hash, fingerprint,
)
from .tools import ToolCategory, ToolSpec, TOOL_REGISTRY, classify, parse_args
from .session import Session
from .trace import Contributor, TraceRange, TraceConversation, TraceFile, TraceEntry, TraceStore

__all__ = [
    'RejectionKind', 'IntentGateError', 'HookRejection',
    'CatalogNotFound', 'CatalogMalformed', 'IntentNotFound', 'MalformedArgs',
    'Intent', 'IntentStore',
    'ScopeMatcher', 'normalize_path', 'escapes_root',
    'IgnoreFilter',
    'ConcurrencyGuard', 'ConcurrencyStatus', 'NEW_FILE_SENTINEL',
    'compute_content_hash', 'fingerprint',
    'ToolCategory', 'ToolSpec', 'TOOL_REGISTRY', 'classify', 'parse_args',
    'Session',
    'Contributor', 'TraceRange', 'TraceConversation', 'TraceFile', 'TraceEntry', 'TraceStore',
]
