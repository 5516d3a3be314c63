"""
Mutation Classifier - How big was this change?

A heuristic, not a diff. A mutation is classified from the size and
line-count deltas between the content before and after it:

  AST_REFACTOR      both deltas under threshold (intent preserved)
  INTENT_EVOLUTION  otherwise (new behavior)

Thresholds are policy and live in config. Swap the strategy for a
structural differ without touching the pipeline.
"""

from enum import Enum


class MutationClass(Enum):
    AST_REFACTOR = "AST_REFACTOR"
    INTENT_EVOLUTION = "INTENT_EVOLUTION"


DEFAULT_SIZE_THRESHOLD = 300   # bytes
DEFAULT_LINE_THRESHOLD = 10    # lines


def line_count(content: str) -> int:
    return len(content.split("\n"))


class MutationClassifier:
    """Strategy interface."""

    def classify(self, before: str, after: str) -> MutationClass:
        raise NotImplementedError


class HeuristicClassifier(MutationClassifier):

    def __init__(
        self,
        size_threshold: int = DEFAULT_SIZE_THRESHOLD,
        line_threshold: int = DEFAULT_LINE_THRESHOLD
    ):
        self.size_threshold = size_threshold
        self.line_threshold = line_threshold

    def classify(self, before: str, after: str) -> MutationClass:
        size_delta = abs(len(after.encode("utf-8")) - len(before.encode("utf-8")))
        line_delta = abs(line_count(after) - line_count(before))

        if size_delta < self.size_threshold and line_delta < self.line_threshold:
            return MutationClass.AST_REFACTOR
        return MutationClass.INTENT_EVOLUTION
