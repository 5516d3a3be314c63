"""
Tests for the tool registry and argument records
"""

import pytest

from intentgate.core.errors import MalformedArgs
from intentgate.core.tools import (
    TOOL_REGISTRY, DeleteFileArgs, ExecuteCommandArgs, GenericArgs, PathArgs,
    SelectIntentArgs, ToolCategory, WriteFileArgs, classify, parse_args,
)


class TestClassify:

    @pytest.mark.parametrize("name", ["select_active_intent", "read_file", "list_files",
                                      "search_files", "record_lesson"])
    def test_benign(self, name):
        assert classify(name).category == ToolCategory.BENIGN

    @pytest.mark.parametrize("name", ["write_to_file", "delete_file", "execute_command"])
    def test_mutating(self, name):
        assert classify(name).is_mutating

    def test_unknown_tool_is_mutating(self):
        spec = classify("apply_diff")
        assert spec.is_mutating
        assert "Unknown" in spec.reason
        assert "apply_diff" not in TOOL_REGISTRY

    def test_only_writes_are_tracked(self):
        assert [name for name, spec in TOOL_REGISTRY.items() if spec.tracked] == ["write_to_file"]


class TestParseArgs:

    def test_select_intent(self):
        assert parse_args("select_active_intent", {"intent_id": "INT-001"}) == SelectIntentArgs("INT-001")

    def test_write_full(self):
        args = parse_args("write_to_file", {
            "path": "src/a.py", "content": "", "intent_id": "INT-001",
            "mutation_class": "AST_REFACTOR", "initial_hash": "new-file",
            "line_count": 0, "start_line": 1, "end_line": 1,
        })
        assert isinstance(args, WriteFileArgs)
        assert args.content == ""
        assert args.target_path == "src/a.py"
        assert args.mutation_class == "AST_REFACTOR"

    def test_empty_content_is_valid(self):
        assert parse_args("write_to_file", {"path": "a", "content": ""}).content == ""

    @pytest.mark.parametrize("raw, fragment", [
        ({"content": "x"}, "'path' is required"),
        ({"path": "a"}, "'content' is required"),
        ({"path": 3, "content": "x"}, "'path' must be a string"),
        ({"path": "  ", "content": "x"}, "'path' must not be empty"),
        ({"path": "a", "content": "x", "start_line": "1"}, "'start_line' must be an integer"),
        ({"path": "a", "content": "x", "line_count": True}, "'line_count' must be an integer"),
        ({"path": "a", "content": "x", "mutation_class": "BIG"}, "mutation_class"),
    ])
    def test_write_errors(self, raw, fragment):
        with pytest.raises(MalformedArgs) as exc:
            parse_args("write_to_file", raw)
        assert fragment in exc.value.message

    def test_non_mapping(self):
        with pytest.raises(MalformedArgs, match="must be an object"):
            parse_args("read_file", ["a.py"])

    def test_none_means_empty(self):
        with pytest.raises(MalformedArgs, match="'path' is required"):
            parse_args("read_file", None)

    def test_extra_keys_ignored(self):
        assert parse_args("read_file", {"path": "a.py", "encoding": "utf-8"}) == PathArgs("a.py")

    def test_delete(self):
        assert parse_args("delete_file", {"path": "a.py"}) == DeleteFileArgs("a.py")

    def test_execute_command_target(self):
        assert parse_args("execute_command", {"command": "ls"}).target_path is None
        assert parse_args("execute_command", {"command": "ls", "cwd": "src"}).target_path == "src"
        args = parse_args("execute_command", {"command": "ls", "cwd": "src", "path": "src/a"})
        assert isinstance(args, ExecuteCommandArgs)
        assert args.target_path == "src/a"

    def test_lesson_category(self):
        with pytest.raises(MalformedArgs, match="category"):
            parse_args("record_lesson", {"lesson": "x", "category": "gossip"})

    def test_generic_target(self):
        args = parse_args("list_files", {"path": "src", "recursive": True})
        assert isinstance(args, GenericArgs)
        assert args.target_path == "src"
        assert parse_args("apply_diff", {"file": "a.py"}).target_path == "a.py"
        assert parse_args("search_files", {"regex": "x"}).target_path is None
