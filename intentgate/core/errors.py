"""
Errors - Rejection taxonomy for the hook pipeline

Every condition the pipeline can refuse is named here.
Stages raise; the pipeline boundary converts to HookResult values,
so the calling agent inspects a kind and a message instead of a traceback.
"""

from enum import Enum


class RejectionKind(Enum):
    """Why an invocation was halted."""
    INTENT_REQUIRED = "intent_required"
    INTENT_NOT_FOUND = "intent_not_found"
    CATALOG_NOT_FOUND = "catalog_not_found"
    CATALOG_MALFORMED = "catalog_malformed"
    MALFORMED_ARGS = "malformed_args"
    IGNORED = "ignored"
    SCOPE_VIOLATION = "scope_violation"
    REJECTED = "rejected"              # Human said no (or cancelled)
    STALE_RESOURCE = "stale_resource"
    CONFLICT = "conflict"              # Claimed the file existed; it doesn't
    HOOK_FAILURE = "hook_failure"      # Unexpected internal fault


class IntentGateError(Exception):
    """
    Base for all recoverable intentgate errors.

    Carries a RejectionKind so the pipeline can report it without
    inspecting the exception type.
    """

    kind = RejectionKind.HOOK_FAILURE

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class CatalogNotFound(IntentGateError):
    kind = RejectionKind.CATALOG_NOT_FOUND


class CatalogMalformed(IntentGateError):
    kind = RejectionKind.CATALOG_MALFORMED


class IntentNotFound(IntentGateError):
    kind = RejectionKind.INTENT_NOT_FOUND


class MalformedArgs(IntentGateError):
    kind = RejectionKind.MALFORMED_ARGS


class HookRejection(IntentGateError):
    """Raised by a pipeline stage to halt the current invocation."""

    def __init__(self, kind: RejectionKind, message: str):
        self.kind = kind
        super().__init__(message)
