"""
Lessons - Shared brain for agents

record_lesson appends a timestamped note (a failure reason, a design
decision, a style rule) to AGENTS.md so the next run starts smarter.
Append only. The file is created on first use.
"""

import logging
from datetime import datetime, timezone
from pathlib import Path
from typing import Optional

from ..core.tools import LESSON_CATEGORIES


logger = logging.getLogger(__name__)


def format_lesson(lesson: str, category: Optional[str] = None, timestamp: Optional[str] = None) -> str:
    timestamp = timestamp or datetime.now(timezone.utc).isoformat()
    category_line = f"**Category:** {category}\n" if category else ""
    return f"\n### {timestamp}\n{category_line}**Lesson:** {lesson.strip()}\n"


class LessonLog:

    def __init__(self, path: Path):
        self.path = Path(path)

    def record(self, lesson: str, category: Optional[str] = None) -> str:
        """Append a lesson. Returns the text written."""
        if not lesson or not lesson.strip():
            raise ValueError("Lesson text must not be empty")
        if category and category not in LESSON_CATEGORIES:
            raise ValueError(
                f"Unknown lesson category '{category}'. Valid: {', '.join(LESSON_CATEGORIES)}"
            )

        entry = format_lesson(lesson, category)
        self.path.parent.mkdir(parents=True, exist_ok=True)
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(entry)

        logger.info("Lesson recorded to %s", self.path)
        return entry
