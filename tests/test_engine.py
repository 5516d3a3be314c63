"""
Tests for HookEngine - The pre/post pipeline

Covers the gate guarantees end to end against a real workspace:
intent required, scope, ignore, approval, staleness, trace, and the
order in which those checks fire.
"""

import logging
import threading
from unittest.mock import Mock

import orjson
import pytest

from intentgate.core.concurrency import NEW_FILE_SENTINEL, compute_content_hash
from intentgate.core.errors import RejectionKind
from intentgate.core.session import Session
from intentgate.hooks.engine import HookEngine, approval_gate_for, inject_context
from intentgate.config import Config
from intentgate.services.approval import (
    ApprovalDecision, CallbackApprovalGate, ConsoleApprovalGate, StaticApprovalGate,
)


def write_args(path, content, **extra):
    args = {"path": path, "content": content}
    args.update(extra)
    return args


def perform_write(workspace, args):
    """Stand-in for the external write tool."""
    workspace.write_file(args["path"], args["content"])
    return {"success": True}


class TestGatekeeper:
    """Every tool but intent selection needs an active intent."""

    @pytest.mark.parametrize("tool, args", [
        ("write_to_file", write_args("src/auth/a.py", "x")),
        ("delete_file", {"path": "src/auth/a.py"}),
        ("execute_command", {"command": "rm -rf /"}),
        ("write_to_file", {"bogus": 1}),
        ("write_to_file", None),
        ("some_future_tool", {"path": "src/auth/a.py"}),
    ])
    def test_mutating_without_intent_is_rejected(self, engine, session, tool, args):
        result = engine.pre_hook(session, tool, args)
        assert result.rejected
        assert result.kind == RejectionKind.INTENT_REQUIRED
        assert "select_active_intent" in result.message

    def test_executor_never_runs(self, workspace, engine, session):
        execute = Mock()
        result, outcome = engine.invoke(
            session, "write_to_file", write_args("src/auth/a.py", "x"), execute,
        )
        assert result.kind == RejectionKind.INTENT_REQUIRED
        execute.assert_not_called()
        assert not (workspace.root / "src/auth/a.py").exists()

    @pytest.mark.parametrize("tool, args", [
        ("read_file", {"path": "src/app.py"}),
        ("list_files", {"path": "src"}),
        ("search_files", {"regex": "print"}),
        ("record_lesson", {"lesson": "x"}),
    ])
    def test_benign_tools_need_intent_too(self, workspace, engine, session, tool, args):
        workspace.write_file("src/app.py", "print(1)\n")
        result = engine.pre_hook(session, tool, args)
        assert result.kind == RejectionKind.INTENT_REQUIRED
        assert tool in result.message

    def test_only_selection_passes_without_intent(self, engine, session):
        assert engine.pre_hook(session, "select_active_intent", {"intent_id": "INT-001"}).success
        assert engine.pre_hook(session, "read_file", {"path": "src/app.py"}).success

    def test_reset_gates_again(self, engine, active_session):
        assert active_session.has_intent
        engine.reset(active_session)
        result = engine.pre_hook(active_session, "delete_file", {"path": "src/auth/a.py"})
        assert result.kind == RejectionKind.INTENT_REQUIRED


class TestSelectIntent:
    """select_active_intent activates and injects curated context."""

    def test_activates_intent(self, engine, session):
        result = engine.pre_hook(session, "select_active_intent", {"intent_id": "INT-001"})
        assert result.success
        assert session.active_intent_id == "INT-001"
        assert result.metadata["intent_id"] == "INT-001"

    def test_injects_into_prompt(self, engine, session):
        payload = {"prompt": "Refactor login."}
        result = engine.pre_hook(
            session, "select_active_intent", {"intent_id": "INT-001"}, payload,
        )
        prompt = result.payload["prompt"]
        assert prompt.startswith("Refactor login.\n\n<intent_context>")
        assert prompt.endswith("</intent_context>")
        assert "Must not use external auth provider" in prompt
        assert "src/auth/**" in prompt

    def test_injects_system_message_when_no_prompt(self, engine, session):
        payload = {"messages": [{"role": "user", "content": "hi"}]}
        result = engine.pre_hook(
            session, "select_active_intent", {"intent_id": "INT-002"}, payload,
        )
        messages = result.payload["messages"]
        assert len(messages) == 2
        assert messages[-1]["role"] == "system"
        assert messages[-1]["content"].startswith("<intent_context>")

    def test_only_curated_fields_injected(self, engine, session):
        result = engine.pre_hook(
            session, "select_active_intent", {"intent_id": "INT-001"}, {"prompt": ""},
        )
        block = result.payload["prompt"]
        assert "IN_PROGRESS" not in block
        assert "platform-team" not in block
        assert result.metadata["context"] == block

    def test_unknown_intent(self, engine, session):
        result = engine.pre_hook(session, "select_active_intent", {"intent_id": "INT-404"})
        assert result.kind == RejectionKind.INTENT_NOT_FOUND
        assert "Available: INT-001, INT-002" in result.message
        assert not session.has_intent

    def test_missing_intent_id(self, engine, session):
        result = engine.pre_hook(session, "select_active_intent", {})
        assert result.kind == RejectionKind.MALFORMED_ARGS

    def test_missing_catalog(self, workspace, engine, session):
        workspace.catalog_path.unlink()
        result = engine.pre_hook(session, "select_active_intent", {"intent_id": "INT-001"})
        assert result.kind == RejectionKind.CATALOG_NOT_FOUND

    def test_reselect_replaces_intent(self, engine, active_session):
        engine.pre_hook(active_session, "select_active_intent", {"intent_id": "INT-002"})
        assert active_session.active_intent_id == "INT-002"
        result = engine.pre_hook(active_session, "delete_file", {"path": "src/auth/a.py"})
        assert result.kind == RejectionKind.SCOPE_VIOLATION


class TestScope:
    """Mutations stay inside the active intent's owned_scope."""

    def test_in_scope_write_allowed(self, engine, active_session):
        result = engine.pre_hook(
            active_session, "write_to_file",
            write_args("src/auth/login.py", "x", initial_hash=NEW_FILE_SENTINEL),
        )
        assert result.success

    def test_out_of_scope_write_rejected(self, workspace, engine, active_session):
        result = engine.pre_hook(
            active_session, "write_to_file", write_args("src/billing/pay.py", "x"),
        )
        assert result.kind == RejectionKind.SCOPE_VIOLATION
        assert "INT-001" in result.message
        assert "src/billing/pay.py" in result.message

    def test_exact_file_pattern(self, engine, active_session):
        assert engine.pre_hook(active_session, "delete_file", {"path": "src/middleware/jwt.ts"}).success
        result = engine.pre_hook(active_session, "delete_file", {"path": "src/middleware/cors.ts"})
        assert result.kind == RejectionKind.SCOPE_VIOLATION

    def test_parent_traversal_rejected(self, engine, active_session):
        result = engine.pre_hook(active_session, "delete_file", {"path": "src/../../etc/passwd"})
        assert result.kind == RejectionKind.SCOPE_VIOLATION
        assert "outside the workspace" in result.message

    def test_absolute_path_inside_workspace(self, workspace, engine, active_session):
        absolute = str(workspace.root / "src" / "auth" / "token.py")
        assert engine.pre_hook(active_session, "delete_file", {"path": absolute}).success

    def test_absolute_path_outside_workspace(self, tmp_path, engine, active_session):
        result = engine.pre_hook(active_session, "delete_file", {"path": str(tmp_path / "elsewhere.py")})
        assert result.kind == RejectionKind.SCOPE_VIOLATION

    def test_declared_intent_must_match_active(self, engine, active_session):
        result = engine.pre_hook(
            active_session, "write_to_file",
            write_args("src/auth/a.py", "x", intent_id="INT-002"),
        )
        assert result.kind == RejectionKind.SCOPE_VIOLATION
        assert "INT-002" in result.message

    def test_empty_scope_allows_nothing(self, workspace, session):
        workspace.write_catalog([{"id": "INT-900", "name": "Read only"}])
        engine = workspace.create_engine()
        engine.pre_hook(session, "select_active_intent", {"intent_id": "INT-900"})
        result = engine.pre_hook(session, "delete_file", {"path": "anything.py"})
        assert result.kind == RejectionKind.SCOPE_VIOLATION

    def test_benign_reads_are_not_scope_checked(self, workspace, engine, active_session):
        workspace.write_file("src/billing/pay.py", "x")
        assert engine.pre_hook(active_session, "read_file", {"path": "src/billing/pay.py"}).success

    def test_command_without_path_skips_scope(self, engine, active_session):
        assert engine.pre_hook(active_session, "execute_command", {"command": "pytest"}).success


class TestIgnore:
    """The deny-list applies to every tool."""

    def test_ignored_read_rejected(self, workspace):
        workspace.write_ignore(".env")
        engine = workspace.create_engine()
        session = workspace.active_session(engine)
        result = engine.pre_hook(session, "read_file", {"path": "config/.env"})
        assert result.kind == RejectionKind.IGNORED
        assert ".intentignore" in result.message

    def test_ignored_write_rejected_even_in_scope(self, workspace):
        workspace.write_ignore("src/auth/secrets")
        engine = workspace.create_engine()
        active = workspace.active_session(engine)
        result = engine.pre_hook(active, "write_to_file", write_args("src/auth/secrets/key.pem", "x"))
        assert result.kind == RejectionKind.IGNORED

    def test_ignore_edits_apply_mid_run(self, workspace, engine, active_session):
        workspace.write_file("src/auth/keys.pem", "k")
        assert engine.pre_hook(active_session, "read_file", {"path": "src/auth/keys.pem"}).success

        workspace.write_ignore("*.pem")
        result = engine.pre_hook(active_session, "read_file", {"path": "src/auth/keys.pem"})
        assert result.kind == RejectionKind.IGNORED

    def test_no_ignore_file(self, workspace, engine, active_session):
        workspace.write_file(".env", "TOKEN=1")
        assert engine.pre_hook(active_session, "read_file", {"path": ".env"}).success


class TestApproval:
    """Every mutating call asks a human; reads never do."""

    def test_rejection_halts(self, workspace):
        engine = workspace.create_engine(approval=StaticApprovalGate(ApprovalDecision.REJECTED))
        session = workspace.active_session(engine)
        result = engine.pre_hook(session, "write_to_file", write_args("src/auth/a.py", "x"))
        assert result.kind == RejectionKind.REJECTED

    def test_request_describes_action(self, workspace):
        gate = StaticApprovalGate(ApprovalDecision.APPROVED)
        engine = workspace.create_engine(approval=gate)
        session = workspace.active_session(engine)
        engine.pre_hook(session, "write_to_file", write_args("./src/auth/a.py", "x"))

        [request] = gate.requests
        assert request.tool_name == "write_to_file"
        assert request.target == "src/auth/a.py"
        assert request.intent_id == "INT-001"
        assert request.choices == ("Approve", "Reject")

    def test_command_target_is_the_command(self, workspace):
        gate = StaticApprovalGate()
        engine = workspace.create_engine(approval=gate)
        session = workspace.active_session(engine)
        engine.pre_hook(session, "execute_command", {"command": "npm test"})
        assert gate.requests[0].target == "npm test"

    def test_benign_tools_never_ask(self, workspace):
        gate = StaticApprovalGate()
        engine = workspace.create_engine(approval=gate)
        session = workspace.active_session(engine)
        workspace.write_file("README.md", "hi")
        engine.pre_hook(session, "read_file", {"path": "README.md"})
        assert gate.requests == []

    def test_dismissed_dialog_rejects(self, workspace):
        engine = workspace.create_engine(approval=CallbackApprovalGate(lambda request: None))
        session = workspace.active_session(engine)
        result = engine.pre_hook(session, "delete_file", {"path": "src/auth/a.py"})
        assert result.kind == RejectionKind.REJECTED

    def test_approval_timeout_rejects(self, workspace):
        hang = threading.Event()
        engine = workspace.create_engine(
            approval=CallbackApprovalGate(lambda request: hang.wait(5), timeout=0.05),
        )
        session = workspace.active_session(engine)
        result = engine.pre_hook(session, "delete_file", {"path": "src/auth/a.py"})
        hang.set()
        assert result.kind == RejectionKind.REJECTED

    def test_approval_gate_for_modes(self):
        config = Config()
        config.approval.mode = "auto"
        assert approval_gate_for(config).decision == ApprovalDecision.APPROVED
        config.approval.mode = "deny"
        assert approval_gate_for(config).decision == ApprovalDecision.REJECTED
        config.approval.mode = "prompt"
        config.approval.timeout = 12.0
        gate = approval_gate_for(config)
        assert isinstance(gate, ConsoleApprovalGate)
        assert gate.timeout == 12.0


class TestStaleness:
    """initial_hash must match the live file."""

    def test_matching_hash_allowed(self, workspace, engine, active_session):
        workspace.write_file("src/auth/a.py", "v1\n")
        result = engine.pre_hook(
            active_session, "write_to_file",
            write_args("src/auth/a.py", "v2\n", initial_hash=workspace.hash_of("src/auth/a.py")),
        )
        assert result.success
        assert result.pre_hash == compute_content_hash("v1\n")

    def test_changed_file_is_stale(self, workspace, engine, active_session):
        workspace.write_file("src/auth/a.py", "v1\n")
        claimed = workspace.hash_of("src/auth/a.py")
        workspace.write_file("src/auth/a.py", "someone else\n")

        result = engine.pre_hook(
            active_session, "write_to_file",
            write_args("src/auth/a.py", "v2\n", initial_hash=claimed),
        )
        assert result.kind == RejectionKind.STALE_RESOURCE
        assert "Re-read" in result.message
        assert workspace.read_file("src/auth/a.py") == "someone else\n"

    def test_new_file_sentinel(self, engine, active_session):
        result = engine.pre_hook(
            active_session, "write_to_file",
            write_args("src/auth/new.py", "x", initial_hash="new-file"),
        )
        assert result.success

    def test_missing_file_with_real_hash_conflicts(self, engine, active_session):
        result = engine.pre_hook(
            active_session, "write_to_file",
            write_args("src/auth/gone.py", "x", initial_hash=compute_content_hash("old")),
        )
        assert result.kind == RejectionKind.CONFLICT

    def test_missing_hash_warns_but_allows(self, engine, active_session, caplog):
        with caplog.at_level(logging.WARNING, logger="intentgate.hooks.engine"):
            result = engine.pre_hook(active_session, "write_to_file", write_args("src/auth/a.py", "x"))
        assert result.success
        assert "No initial_hash" in caplog.text

    def test_only_writes_are_hash_checked(self, workspace, engine, active_session):
        workspace.write_file("src/auth/a.py", "v1\n")
        result = engine.pre_hook(active_session, "delete_file", {"path": "src/auth/a.py"})
        assert result.success
        assert result.pre_hash is None


class TestStageOrder:
    """When several checks would fail, the earliest stage reports."""

    def test_ignore_before_scope(self, workspace):
        workspace.write_ignore("billing")
        engine = workspace.create_engine()
        session = workspace.active_session(engine)
        result = engine.pre_hook(session, "write_to_file", write_args("src/billing/x.py", "x"))
        assert result.kind == RejectionKind.IGNORED

    def test_scope_before_approval(self, workspace):
        gate = StaticApprovalGate(ApprovalDecision.REJECTED)
        engine = workspace.create_engine(approval=gate)
        session = workspace.active_session(engine)
        result = engine.pre_hook(session, "write_to_file", write_args("src/billing/x.py", "x"))
        assert result.kind == RejectionKind.SCOPE_VIOLATION
        assert gate.requests == []

    def test_approval_before_staleness(self, workspace):
        workspace.write_file("src/auth/a.py", "changed")
        engine = workspace.create_engine(approval=StaticApprovalGate(ApprovalDecision.REJECTED))
        session = workspace.active_session(engine)
        result = engine.pre_hook(
            session, "write_to_file",
            write_args("src/auth/a.py", "x", initial_hash=compute_content_hash("original")),
        )
        assert result.kind == RejectionKind.REJECTED

    def test_intent_before_args(self, engine, session):
        result = engine.pre_hook(session, "write_to_file", {"path": 42})
        assert result.kind == RejectionKind.INTENT_REQUIRED

    def test_args_checked_once_intent_active(self, engine, active_session):
        result = engine.pre_hook(active_session, "write_to_file", {"path": 42, "content": "x"})
        assert result.kind == RejectionKind.MALFORMED_ARGS


class TestHookFailure:
    """Unexpected faults become HOOK_FAILURE results."""

    def test_gate_exception(self, workspace):
        gate = Mock()
        gate.request_approval.side_effect = RuntimeError("dialog crashed")
        engine = workspace.create_engine(approval=gate)
        session = workspace.active_session(engine)

        result = engine.pre_hook(session, "delete_file", {"path": "src/auth/a.py"})
        assert result.kind == RejectionKind.HOOK_FAILURE
        assert "dialog crashed" in result.message

    def test_callback_exception_surfaces(self, workspace):
        def broken(request):
            raise ValueError("no display")

        engine = workspace.create_engine(approval=CallbackApprovalGate(broken))
        session = workspace.active_session(engine)
        result = engine.pre_hook(session, "delete_file", {"path": "src/auth/a.py"})
        assert result.kind == RejectionKind.HOOK_FAILURE

    def test_tool_error_shape(self, engine, session):
        result = engine.pre_hook(session, "delete_file", {"path": "x"})
        assert result.to_error() == {
            "type": "tool-error",
            "code": "INTENT_REQUIRED",
            "message": result.message,
        }


class TestPostHook:
    """Successful writes leave exactly one trace entry."""

    def test_write_is_traced(self, workspace, engine, active_session):
        args = write_args("src/auth/login.py", "def login():\n    pass\n", initial_hash="new-file")
        assert engine.pre_hook(active_session, "write_to_file", args).success
        perform_write(workspace, args)

        entry = engine.post_hook(active_session, "write_to_file", args, {"success": True})
        assert entry is not None
        assert entry.intent_ids == ["INT-001"]
        assert entry.files[0].relative_path == "src/auth/login.py"
        conversation = entry.files[0].conversations[0]
        assert conversation.url == active_session.url
        assert conversation.ranges[0].content_hash == compute_content_hash(args["content"])

        [stored] = workspace.trace_store().read_all()
        assert stored.id == entry.id

    def test_classification_uses_pre_write_content(self, workspace, engine, active_session):
        original = "".join(f"line {i}\n" for i in range(40))
        workspace.write_file("src/auth/big.py", original)

        small_edit = original.replace("line 3\n", "line three\n")
        args = write_args("src/auth/big.py", small_edit, initial_hash=workspace.hash_of("src/auth/big.py"))
        engine.pre_hook(active_session, "write_to_file", args)
        perform_write(workspace, args)
        entry = engine.post_hook(active_session, "write_to_file", args)

        assert entry.files[0].conversations[0].mutation_class == "AST_REFACTOR"

    def test_rewrite_is_intent_evolution(self, workspace, engine, active_session):
        workspace.write_file("src/auth/tiny.py", "x = 1\n")
        args = write_args("src/auth/tiny.py", "".join(f"y{i} = {i}\n" for i in range(30)))
        engine.pre_hook(active_session, "write_to_file", args)
        perform_write(workspace, args)
        entry = engine.post_hook(active_session, "write_to_file", args)

        assert entry.files[0].conversations[0].mutation_class == "INTENT_EVOLUTION"

    def test_pre_image_consumed(self, workspace, engine, active_session):
        args = write_args("src/auth/a.py", "x")
        engine.pre_hook(active_session, "write_to_file", args)
        assert "src/auth/a.py" in active_session.pre_images
        engine.post_hook(active_session, "write_to_file", args)
        assert active_session.pre_images == {}

    def test_line_range_args(self, workspace, engine, active_session):
        args = write_args("src/auth/a.py", "a\nb\nc\n", start_line=2, end_line=3)
        engine.pre_hook(active_session, "write_to_file", args)
        entry = engine.post_hook(active_session, "write_to_file", args)
        trace_range = entry.files[0].conversations[0].ranges[0]
        assert (trace_range.start_line, trace_range.end_line) == (2, 3)

    def test_untracked_tools_are_noops(self, workspace, engine, active_session):
        assert engine.post_hook(active_session, "delete_file", {"path": "src/auth/a.py"}) is None
        assert engine.post_hook(active_session, "read_file", {"path": "src/auth/a.py"}) is None
        assert not workspace.trace_path.exists()

    def test_no_intent_is_noop(self, workspace, engine, session):
        assert engine.post_hook(session, "write_to_file", write_args("src/auth/a.py", "x")) is None
        assert not workspace.trace_path.exists()

    def test_failed_tool_is_not_traced(self, workspace, engine, active_session):
        args = write_args("src/auth/a.py", "x")
        engine.pre_hook(active_session, "write_to_file", args)
        assert engine.post_hook(active_session, "write_to_file", args, {"success": False}) is None
        assert not workspace.trace_path.exists()

    def test_model_identifier_from_config(self, workspace, active_session):
        workspace.config.contributor.model_identifier = "agent-model-x"
        engine = workspace.create_engine()
        args = write_args("src/auth/a.py", "x")
        engine.pre_hook(active_session, "write_to_file", args)
        entry = engine.post_hook(active_session, "write_to_file", args)
        assert entry.files[0].conversations[0].contributor.model_identifier == "agent-model-x"


class TestInvoke:
    """pre_hook, execute and post_hook in one call."""

    def test_allowed_write_runs_and_traces(self, workspace, engine, active_session):
        args = write_args("src/auth/a.py", "hello\n", initial_hash="new-file")
        result, outcome = engine.invoke(
            active_session, "write_to_file", args, lambda: perform_write(workspace, args),
        )
        assert result.success
        assert outcome == {"success": True}
        assert workspace.read_file("src/auth/a.py") == "hello\n"
        assert workspace.trace_store().count() == 1

    def test_rejected_write_never_runs(self, workspace, engine, active_session):
        execute = Mock()
        result, outcome = engine.invoke(
            active_session, "write_to_file", write_args("docs/a.md", "x"), execute,
        )
        assert result.kind == RejectionKind.SCOPE_VIOLATION
        assert outcome is None
        execute.assert_not_called()
        assert workspace.trace_store().count() == 0

    def test_record_lesson(self, workspace, engine, active_session):
        result, entry = engine.record_lesson(active_session, "Hash before writing", "concurrency")
        assert result.success
        assert "**Category:** concurrency" in entry
        assert "Hash before writing" in (workspace.root / "AGENTS.md").read_text()

    def test_record_lesson_bad_category(self, engine, active_session):
        result, entry = engine.record_lesson(active_session, "x", "nonsense")
        assert result.kind == RejectionKind.MALFORMED_ARGS
        assert entry is None

    def test_record_lesson_needs_intent(self, workspace, engine, session):
        result, entry = engine.record_lesson(session, "Hash before writing")
        assert result.kind == RejectionKind.INTENT_REQUIRED
        assert entry is None
        assert not (workspace.root / "AGENTS.md").exists()


class TestTraceLog:
    """Each accepted write adds one self-contained line to the trace file."""

    def test_writes_under_successive_intents(self, workspace, engine, session):
        planned = [
            ("INT-001", ["src/auth/login.py", "src/auth/token.py", "src/middleware/jwt.ts"]),
            ("INT-002", ["docs/auth.md", "README.md"]),
        ]
        for intent_id, paths in planned:
            assert engine.pre_hook(session, "select_active_intent", {"intent_id": intent_id}).success
            for path in paths:
                args = write_args(path, f"# {path}\n", initial_hash="new-file", intent_id=intent_id)
                assert engine.pre_hook(session, "write_to_file", args).success
                perform_write(workspace, args)
                assert engine.post_hook(session, "write_to_file", args, {"success": True}) is not None

        lines = workspace.trace_path.read_bytes().splitlines()
        assert len(lines) == 5
        records = [orjson.loads(line) for line in lines]
        assert len({record["id"] for record in records}) == 5

        expected = [(intent_id, path) for intent_id, paths in planned for path in paths]
        for record, (intent_id, path) in zip(records, expected):
            [traced] = record["files"]
            assert traced["relative_path"] == path
            [conversation] = traced["conversations"]
            assert conversation["related"] == [{"type": "specification", "value": intent_id}]

    def test_rejected_writes_leave_no_line(self, workspace, engine, active_session):
        args = write_args("docs/a.md", "x")
        assert engine.pre_hook(active_session, "write_to_file", args).rejected
        assert not workspace.trace_path.exists()


class TestInjectContext:

    def test_non_dict_payload_untouched(self):
        assert inject_context(None, "<b/>") is None
        assert inject_context("text", "<b/>") == "text"

    def test_prompt_takes_precedence(self):
        payload = {"prompt": "p", "messages": []}
        inject_context(payload, "<b/>")
        assert payload == {"prompt": "p\n\n<b/>", "messages": []}

    def test_unrecognized_shape_untouched(self):
        assert inject_context({"input": "x"}, "<b/>") == {"input": "x"}


class TestSessions:

    def test_sessions_are_independent(self, engine):
        first, second = Session(), Session()
        engine.pre_hook(first, "select_active_intent", {"intent_id": "INT-001"})
        assert not second.has_intent
        result = engine.pre_hook(second, "delete_file", {"path": "src/auth/a.py"})
        assert result.kind == RejectionKind.INTENT_REQUIRED

    def test_engine_from_config_paths(self, workspace):
        engine = HookEngine.from_config(workspace.root, workspace.config)
        assert engine.intents.catalog_path == workspace.catalog_path
        assert engine.audit.store.path == workspace.trace_path
