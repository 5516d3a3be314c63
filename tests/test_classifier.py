"""
Tests for HeuristicClassifier - AST_REFACTOR vs INTENT_EVOLUTION
"""

from intentgate.tracking.classifier import HeuristicClassifier, MutationClass, line_count


class TestLineCount:

    def test_counts_newline_separated_segments(self):
        assert line_count("") == 1
        assert line_count("a") == 1
        assert line_count("a\nb") == 2
        assert line_count("a\nb\n") == 3


class TestHeuristic:

    def test_small_edit_is_refactor(self):
        classifier = HeuristicClassifier()
        before = "def f(x):\n    return x\n"
        after = "def f(value):\n    return value\n"
        assert classifier.classify(before, after) == MutationClass.AST_REFACTOR

    def test_many_new_lines_is_evolution(self):
        classifier = HeuristicClassifier()
        before = "a = 1\n"
        after = before + "".join(f"b{i} = {i}\n" for i in range(10))
        assert classifier.classify(before, after) == MutationClass.INTENT_EVOLUTION

    def test_large_size_delta_is_evolution(self):
        classifier = HeuristicClassifier()
        assert classifier.classify("x", "x" * 400) == MutationClass.INTENT_EVOLUTION

    def test_thresholds_are_strict(self):
        classifier = HeuristicClassifier(size_threshold=5, line_threshold=100)
        assert classifier.classify("", "abcd") == MutationClass.AST_REFACTOR
        assert classifier.classify("", "abcde") == MutationClass.INTENT_EVOLUTION

    def test_size_counts_utf8_bytes(self):
        classifier = HeuristicClassifier(size_threshold=4, line_threshold=100)
        # two characters, four bytes
        assert classifier.classify("", "éé") == MutationClass.INTENT_EVOLUTION

    def test_deletion_counts_as_delta(self):
        classifier = HeuristicClassifier()
        before = "\n".join(str(i) for i in range(50))
        assert classifier.classify(before, "") == MutationClass.INTENT_EVOLUTION

    def test_new_file_from_empty(self):
        classifier = HeuristicClassifier()
        assert classifier.classify("", "print('hi')\n") == MutationClass.AST_REFACTOR
