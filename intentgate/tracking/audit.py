"""
Audit Logger - Provenance for every accepted mutation

Turns (intent, path, before, after, contributor) into one TraceEntry
and appends it to the trace store. Holds no state of its own beyond
the store it writes to.

Storage errors propagate. Silent audit loss defeats the purpose.
"""

import logging
from typing import Callable, Optional

from ..core.concurrency import compute_content_hash
from ..core.trace import (
    Contributor, TraceConversation, TraceEntry, TraceFile, TraceRange, TraceStore,
)
from .classifier import HeuristicClassifier, MutationClassifier, line_count


logger = logging.getLogger(__name__)


class AuditLogger:

    def __init__(
        self,
        store: TraceStore,
        classifier: Optional[MutationClassifier] = None,
        revision_provider: Optional[Callable[[], str]] = None
    ):
        self.store = store
        self.classifier = classifier or HeuristicClassifier()
        self.revision_provider = revision_provider or (lambda: "HEAD")

    def build_entry(
        self,
        intent_id: str,
        path: str,
        pre_content: str,
        post_content: str,
        contributor: Contributor,
        session_url: str = "",
        start_line: Optional[int] = None,
        end_line: Optional[int] = None
    ) -> TraceEntry:
        """Build the entry without writing it."""
        mutation_class = self.classifier.classify(pre_content, post_content)

        trace_range = TraceRange(
            start_line=start_line or 1,
            end_line=end_line or line_count(post_content),
            content_hash=compute_content_hash(post_content),
        )
        conversation = TraceConversation(
            url=session_url,
            contributor=contributor,
            ranges=[trace_range],
            related=[{"type": "specification", "value": intent_id}],
            mutation_class=mutation_class.value,
        )
        return TraceEntry(
            files=[TraceFile(relative_path=path, conversations=[conversation])],
            revision_id=self.revision_provider(),
        )

    def record(
        self,
        intent_id: str,
        path: str,
        pre_content: str,
        post_content: str,
        contributor: Contributor,
        session_url: str = "",
        start_line: Optional[int] = None,
        end_line: Optional[int] = None
    ) -> TraceEntry:
        """Classify, build and append one trace entry."""
        entry = self.build_entry(
            intent_id, path, pre_content, post_content, contributor,
            session_url=session_url, start_line=start_line, end_line=end_line,
        )
        self.store.append(entry)
        logger.info(
            "Traced %s under %s (%s)",
            path, intent_id, entry.files[0].conversations[0].mutation_class,
        )
        return entry
