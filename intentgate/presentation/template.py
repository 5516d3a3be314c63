"""
OutputTemplate - Consistent CLI output structure

Builder for command output with header, sections and footer.

Usage:
    template = OutputTemplate(symbols=symbols)
    template.header("INTENTGATE TRACE", "Recent Entries")
    template.section("ENTRIES", body)
    template.footer(f"{symbols.check_pass} 3 entries")
    print(template.render(command="trace"))
"""

import shutil
from dataclasses import dataclass
from typing import Dict, List, Optional

from .symbols import SymbolSet, get_symbols


HEADER_CHAR = "="
SECTION_CHAR = "-"
DEFAULT_WIDTH = 80

# Next step suggested after each command
NEXT_STEPS: Dict[str, str] = {
    "intents": "Next: intentgate check <INTENT_ID> <PATH>",
    "check": "Next: intentgate hash <PATH> to get the initial_hash for a write",
    "trace": "Next: intentgate trace --intent <INTENT_ID> to filter by intent",
}


@dataclass
class TemplateSection:
    title: str
    content: str


class OutputTemplate:
    """Builder for structured CLI output."""

    def __init__(
        self,
        symbols: Optional[SymbolSet] = None,
        width: Optional[int] = None
    ):
        self.symbols = symbols or get_symbols()
        self.width = min(width or shutil.get_terminal_size().columns or DEFAULT_WIDTH, DEFAULT_WIDTH)

        self._title: Optional[str] = None
        self._subtitle: Optional[str] = None
        self._sections: List[TemplateSection] = []
        self._summary: Optional[str] = None

    def header(self, title: str, subtitle: Optional[str] = None) -> "OutputTemplate":
        self._title = title
        self._subtitle = subtitle
        return self

    def section(self, title: str, content: str) -> "OutputTemplate":
        self._sections.append(TemplateSection(title=title, content=content))
        return self

    def footer(self, summary: Optional[str] = None) -> "OutputTemplate":
        self._summary = summary
        return self

    def render(self, command: Optional[str] = None) -> str:
        """Render to a string. command selects the next-step hint."""
        lines: List[str] = []

        if self._title:
            border = HEADER_CHAR * self.width
            title = f"{self._title} - {self._subtitle}" if self._subtitle else self._title
            lines.extend([border, title, border, ""])

        for section in self._sections:
            if section.title:
                lines.append(section.title)
                lines.append(SECTION_CHAR * len(section.title))
            if section.content:
                lines.append(section.content)
            lines.append("")

        lines.append(SECTION_CHAR * self.width)
        if self._summary:
            lines.append(f"Summary: {self._summary}")
        hint = NEXT_STEPS.get(command) if command else None
        if hint:
            lines.append(hint)
        lines.append(HEADER_CHAR * self.width)

        return "\n".join(lines)

    def format_table(
        self,
        rows: List[Dict[str, str]],
        columns: List[str],
        keys: Optional[List[str]] = None
    ) -> str:
        """Simple aligned table (grep-parseable)."""
        if not rows:
            return ""

        keys = keys or [c.lower().replace(" ", "_") for c in columns]

        widths = [len(c) for c in columns]
        for row in rows:
            for i, key in enumerate(keys):
                widths[i] = max(widths[i], len(str(row.get(key, ""))))

        lines = ["  ".join(col.ljust(widths[i]) for i, col in enumerate(columns)).rstrip()]
        for row in rows:
            lines.append("  ".join(
                str(row.get(key, "")).ljust(widths[i]) for i, key in enumerate(keys)
            ).rstrip())
        return "\n".join(lines)

    def format_list(self, items: List[str], bullet: Optional[str] = None) -> str:
        bullet = bullet or self.symbols.bullet
        return "\n".join(f"{bullet} {item}" for item in items)
