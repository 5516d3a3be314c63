"""
Hook Engine - Policy pipeline around every agent tool call

Classify -> Check -> Commit, then trace.

    result = engine.pre_hook(session, "write_to_file", args, payload)
    if result.success:
        ...perform the write...
        engine.post_hook(session, "write_to_file", args)

Check stages run in a fixed order. Later stages assume earlier ones
passed (the staleness check assumes the path was already scope-checked):

  1. gatekeeper      any tool but select_active_intent with no active intent
  2. arguments       raw args -> typed record
  3. intent select   select_active_intent resolves, activates, injects
                     context, and short-circuits the rest
  4. ignore          path on the workspace deny-list
  5. scope           mutating path outside the intent's owned_scope
  6. approval        human decision for every mutating tool
  7. staleness       write_to_file initial_hash vs the live file

Every rejection comes back as a HookResult. Unexpected faults inside a
stage become HOOK_FAILURE; the pipeline never raises into its host.
The post-hook is the exception: audit storage errors propagate.
"""

import logging
import os
from pathlib import Path
from typing import Any, Callable, Dict, Optional, Tuple

from ..config import Config
from ..content.prompts import render_intent_context
from ..core.concurrency import ConcurrencyGuard, ConcurrencyStatus, fingerprint
from ..core.errors import HookRejection, IntentGateError, MalformedArgs, RejectionKind
from ..core.ignore import IgnoreFilter
from ..core.intents import IntentStore
from ..core.scope import ScopeMatcher, escapes_root, normalize_path
from ..core.session import Session
from ..core.tools import (
    SELECT_INTENT_TOOL, TOOL_REGISTRY, ToolArgs, ToolSpec, WriteFileArgs, classify, parse_args,
)
from ..core.trace import Contributor, TraceEntry, TraceStore
from ..services.approval import (
    ApprovalDecision, ApprovalGate, ApprovalRequest, ConsoleApprovalGate, StaticApprovalGate,
)
from ..services.git import GitIntegration
from ..services.lessons import LessonLog
from ..tracking.audit import AuditLogger
from ..tracking.classifier import HeuristicClassifier
from .result import HookResult


logger = logging.getLogger(__name__)


class HookEngine:
    """Runs the policy pipeline for one workspace."""

    def __init__(
        self,
        workspace: Path,
        intents: IntentStore,
        audit: AuditLogger,
        approval: ApprovalGate,
        ignore: Optional[IgnoreFilter] = None,
        guard: Optional[ConcurrencyGuard] = None,
        contributor: Optional[Contributor] = None,
        lessons: Optional[LessonLog] = None,
        ignore_file_name: str = ".intentignore"
    ):
        self.workspace = Path(workspace)
        self.intents = intents
        self.audit = audit
        self.approval = approval
        self.ignore = ignore or IgnoreFilter()
        self.guard = guard or ConcurrencyGuard()
        self.contributor = contributor or Contributor()
        self.lessons = lessons or LessonLog(self.workspace / "AGENTS.md")
        self.ignore_file_name = ignore_file_name
        self._matchers: Dict[Tuple[str, ...], ScopeMatcher] = {}

    @classmethod
    def from_config(
        cls,
        workspace: Path,
        config: Optional[Config] = None,
        approval: Optional[ApprovalGate] = None
    ) -> 'HookEngine':
        """Wire the default collaborators from configuration."""
        workspace = Path(workspace)
        config = config or Config()
        paths = config.paths
        orchestration = workspace / paths.orchestration_dir

        if approval is None:
            approval = approval_gate_for(config)

        audit = AuditLogger(
            store=TraceStore(orchestration / paths.trace),
            classifier=HeuristicClassifier(
                size_threshold=config.classifier.size_threshold,
                line_threshold=config.classifier.line_threshold,
            ),
            revision_provider=GitIntegration(workspace).head_revision,
        )

        return cls(
            workspace=workspace,
            intents=IntentStore(orchestration / paths.catalog),
            audit=audit,
            approval=approval,
            ignore=IgnoreFilter.from_file(workspace / paths.ignore_file),
            contributor=Contributor(
                entity_type=config.contributor.entity_type,
                model_identifier=config.contributor.model_identifier,
            ),
            lessons=LessonLog(workspace / paths.lessons_file),
            ignore_file_name=paths.ignore_file,
        )

    # -------------------------------------------------------------------------
    # Public hooks
    # -------------------------------------------------------------------------

    def pre_hook(
        self,
        session: Session,
        tool_name: str,
        args: Optional[Dict[str, Any]] = None,
        payload: Any = None
    ) -> HookResult:
        """Run every check for one invocation. Never raises."""
        with session.lock:
            try:
                result = self._check(session, tool_name, args, payload)
            except IntentGateError as e:
                result = HookResult.reject(tool_name, e.kind, e.message, payload)
            except Exception as e:
                logger.exception("Hook failure while checking %s", tool_name)
                result = HookResult.reject(
                    tool_name, RejectionKind.HOOK_FAILURE, f"Hook failure: {e}", payload
                )

        logger.info(result.summary())
        return result

    def post_hook(
        self,
        session: Session,
        tool_name: str,
        args: Optional[Dict[str, Any]] = None,
        result: Any = None
    ) -> Optional[TraceEntry]:
        """
        Record provenance after the caller's mutation succeeded.

        Returns the written TraceEntry, or None when there is nothing to
        trace (untracked tool, no active intent, or a failed tool result).
        """
        with session.lock:
            spec = classify(tool_name)
            if not spec.tracked or not session.has_intent:
                return None
            if isinstance(result, dict) and result.get("success") is False:
                return None

            try:
                parsed = parse_args(tool_name, args)
            except MalformedArgs as e:
                logger.warning("Not tracing %s: %s", tool_name, e.message)
                return None

            target = self.relative_target(parsed.target_path)
            if target not in session.pre_images:
                logger.debug("No pre-image captured for %s; classifying against empty", target)
            pre_content = session.pre_images.pop(target, "")

            return self.audit.record(
                intent_id=session.active_intent_id,
                path=target,
                pre_content=pre_content,
                post_content=parsed.content,
                contributor=self.contributor,
                session_url=session.url,
                start_line=parsed.start_line,
                end_line=parsed.end_line,
            )

    def reset(self, session: Session) -> None:
        """Clear the active intent. Every tool but intent selection is gated again."""
        session.reset()
        logger.info("Session %s reset", session.session_id)

    def invoke(
        self,
        session: Session,
        tool_name: str,
        args: Optional[Dict[str, Any]],
        execute: Callable[[], Any],
        payload: Any = None
    ) -> Tuple[HookResult, Any]:
        """
        Pre-hook, execute, post-hook in one call.

        execute is only called when the pre-hook allows it. Writes hold
        the per-path resource lock from check to trace, closing the
        check-then-write window for callers inside this process.
        """
        path = (args or {}).get("path") if isinstance(args, dict) else None
        if classify(tool_name).tracked and isinstance(path, str) and path:
            with self.guard.resource_lock(self._absolute(self.relative_target(path))):
                return self._invoke(session, tool_name, args, execute, payload)
        return self._invoke(session, tool_name, args, execute, payload)

    def record_lesson(
        self,
        session: Session,
        lesson: str,
        category: Optional[str] = None
    ) -> Tuple[HookResult, Optional[str]]:
        """Run the built-in record_lesson tool through the pipeline."""
        args = {"lesson": lesson, "category": category}
        return self.invoke(
            session, "record_lesson", args,
            lambda: self.lessons.record(lesson, category),
        )

    # -------------------------------------------------------------------------
    # Stages
    # -------------------------------------------------------------------------

    def _invoke(self, session, tool_name, args, execute, payload):
        hook_result = self.pre_hook(session, tool_name, args, payload)
        if hook_result.rejected:
            return hook_result, None

        outcome = execute()
        self.post_hook(session, tool_name, args, outcome)
        return hook_result, outcome

    def _check(self, session: Session, tool_name: str, args, payload) -> HookResult:
        spec = classify(tool_name)
        if tool_name not in TOOL_REGISTRY:
            logger.warning(spec.reason)

        self._gatekeeper(session, spec)
        parsed = parse_args(tool_name, args)

        if tool_name == SELECT_INTENT_TOOL:
            return self._select_intent(session, parsed, payload)

        target = self.relative_target(parsed.target_path)

        self._filter_ignored(target)
        self._enforce_scope(session, spec, parsed, target)
        self._request_approval(session, spec, parsed, target)
        pre_hash = self._check_staleness(parsed, target)

        if spec.tracked and target is not None:
            session.pre_images[target] = self._read_text(self._absolute(target))

        return HookResult.ok(tool_name, payload, pre_hash=pre_hash)

    def _gatekeeper(self, session: Session, spec: ToolSpec) -> None:
        if spec.name != SELECT_INTENT_TOOL and not session.has_intent:
            raise HookRejection(
                RejectionKind.INTENT_REQUIRED,
                f"No active intent for '{spec.name}'. You must call "
                f"{SELECT_INTENT_TOOL} with a valid intent ID first."
            )

    def _select_intent(self, session: Session, args: ToolArgs, payload: Any) -> HookResult:
        intent = self.intents.resolve(args.intent_id)
        session.activate(intent)

        block = render_intent_context(intent)
        payload = inject_context(payload, block)

        logger.info("Session %s activated intent %s", session.session_id, intent.id)
        return HookResult.ok(
            SELECT_INTENT_TOOL, payload,
            metadata={"intent_id": intent.id, "context": block},
        )

    def _filter_ignored(self, target: Optional[str]) -> None:
        if target is None:
            return
        pattern = self.ignore.match(target)
        if pattern is not None:
            raise HookRejection(
                RejectionKind.IGNORED,
                f"{target} is excluded by pattern '{pattern}' in {self.ignore_file_name}."
            )

    def _enforce_scope(self, session: Session, spec: ToolSpec, args: ToolArgs, target: Optional[str]) -> None:
        if not spec.is_mutating:
            return

        intent = session.active_intent
        declared = getattr(args, "intent_id", None)
        if declared and declared != intent.id:
            raise HookRejection(
                RejectionKind.SCOPE_VIOLATION,
                f"Scope Violation: call declares intent {declared} but the active intent is "
                f"{intent.id}. Select {declared} first or pass intent_id={intent.id}."
            )

        if target is None:
            return

        if escapes_root(target):
            raise HookRejection(
                RejectionKind.SCOPE_VIOLATION,
                f"Scope Violation: {target} is outside the workspace."
            )

        if not self.matcher_for(intent.owned_scope).matches(target):
            owned = ", ".join(intent.owned_scope) or "(empty)"
            raise HookRejection(
                RejectionKind.SCOPE_VIOLATION,
                f"Scope Violation: intent {intent.id} is not allowed to modify {target}. "
                f"Owned scope: {owned}."
            )

    def _request_approval(self, session: Session, spec: ToolSpec, args: ToolArgs, target: Optional[str]) -> None:
        if not spec.is_mutating:
            return

        request = ApprovalRequest(
            tool_name=spec.name,
            target=target or getattr(args, "command", None),
            intent_id=session.active_intent_id,
        )
        decision = self.approval.request_approval(request)

        if decision != ApprovalDecision.APPROVED:
            raise HookRejection(
                RejectionKind.REJECTED,
                f"User rejected {spec.name} on {request.target or '(no target)'}. "
                f"Do not retry the same change without new guidance."
            )

    def _check_staleness(self, args: ToolArgs, target: Optional[str]) -> Optional[str]:
        if not isinstance(args, WriteFileArgs) or target is None:
            return None

        if args.initial_hash is None:
            logger.warning("No initial_hash for %s: no staleness guarantee", target)
            return None

        full_path = self._absolute(target)
        status = self.guard.check(full_path, args.initial_hash)

        if status == ConcurrencyStatus.STALE:
            current = fingerprint(full_path)
            raise HookRejection(
                RejectionKind.STALE_RESOURCE,
                f"Stale File: {target} changed since you last read it "
                f"(initial_hash {args.initial_hash}, current {current}). "
                f"Re-read the file and retry."
            )
        if status == ConcurrencyStatus.CONFLICT:
            raise HookRejection(
                RejectionKind.CONFLICT,
                f"Conflict: {target} does not exist, but initial_hash {args.initial_hash} "
                f"assumes it does. Use initial_hash 'new-file' to create it."
            )
        return args.initial_hash

    # -------------------------------------------------------------------------
    # Helpers
    # -------------------------------------------------------------------------

    def matcher_for(self, patterns: Tuple[str, ...]) -> ScopeMatcher:
        matcher = self._matchers.get(patterns)
        if matcher is None:
            matcher = self._matchers[patterns] = ScopeMatcher(patterns)
        return matcher

    def relative_target(self, raw: Optional[str]) -> Optional[str]:
        """Workspace-relative POSIX form of a tool path."""
        if raw is None:
            return None
        if os.path.isabs(raw):
            raw = os.path.relpath(raw, self.workspace)
        return normalize_path(raw)

    def _absolute(self, target: str) -> Path:
        return self.workspace / target

    @staticmethod
    def _read_text(path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8", errors="replace")
        except FileNotFoundError:
            return ""


def inject_context(payload: Any, block: str) -> Any:
    """
    Merge a context block into an outgoing payload.

    Appends to payload["prompt"] when present, otherwise appends a system
    message to payload["messages"]. Other payload shapes are left as is.
    """
    if not isinstance(payload, dict):
        return payload

    if isinstance(payload.get("prompt"), str):
        prompt = payload["prompt"]
        payload["prompt"] = f"{prompt}\n\n{block}" if prompt else block
    elif isinstance(payload.get("messages"), list):
        payload["messages"].append({"role": "system", "content": block})
    return payload


def approval_gate_for(config: Config) -> ApprovalGate:
    mode = config.approval.mode
    if mode == "auto":
        return StaticApprovalGate(ApprovalDecision.APPROVED)
    if mode == "deny":
        return StaticApprovalGate(ApprovalDecision.REJECTED)
    return ConsoleApprovalGate(timeout=config.approval.timeout)
