"""
Symbols - Visual vocabulary for gate decisions

Progressive enhancement: Unicode when supported, ASCII fallback.
Configurable via display.symbols setting.

Also provides safe_print() for printing catalog text and agent-written
content that may not encode on the current terminal.
"""

import os
import sys
from dataclasses import dataclass
from typing import Optional


UNICODE_TO_ASCII = {
    '→': '->',
    '←': '<-',
    '…': '...',
    '–': '-',
    '—': '--',
    '•': '*',
    '·': '.',
    '×': 'x',
    '≠': '!=',
}


def safe_print(text: str, end: str = '\n', file=None) -> None:
    """
    Print with graceful encoding fallback.

    Replaces known Unicode chars with ASCII equivalents, then '?' as
    last resort, instead of raising UnicodeEncodeError.
    """
    if file is None:
        file = sys.stdout

    try:
        print(text, end=end, file=file)
    except UnicodeEncodeError:
        safe_text = text
        for unicode_char, ascii_equiv in UNICODE_TO_ASCII.items():
            safe_text = safe_text.replace(unicode_char, ascii_equiv)

        try:
            print(safe_text, end=end, file=file)
        except UnicodeEncodeError:
            encoding = getattr(file, 'encoding', 'utf-8') or 'utf-8'
            encoded = safe_text.encode(encoding, errors='replace')
            print(encoded.decode(encoding), end=end, file=file)


SUMMARY_LENGTH = 80
ID_DISPLAY_LENGTH = 8


def truncate(text: str, length: int = SUMMARY_LENGTH, full: bool = False) -> str:
    """Truncate text with ellipsis, respecting full mode."""
    if not text:
        return ""
    if full or len(text) <= length:
        return text
    if length <= 3:
        return text[:length]
    return text[:length - 3] + "..."


@dataclass(frozen=True)
class SymbolSet:
    """Symbols for gate decisions and listings."""
    check_pass: str
    check_warn: str
    check_fail: str
    arrow: str
    bullet: str
    intent: str
    scope: str
    trace: str


UNICODE = SymbolSet(
    check_pass='✓',
    check_warn='⚠',
    check_fail='✗',
    arrow='→',
    bullet='•',
    intent='◎',
    scope='▢',
    trace='●',
)

ASCII = SymbolSet(
    check_pass='[OK]',
    check_warn='[!]',
    check_fail='[ERR]',
    arrow='->',
    bullet='*',
    intent='(o)',
    scope='[ ]',
    trace='*',
)


def supports_unicode() -> bool:
    """
    Check if environment likely supports Unicode output.

    Conservative: defaults to ASCII if uncertain.
    """
    if os.environ.get('INTENTGATE_ASCII_ONLY', '').lower() in ('1', 'true', 'yes'):
        return False
    if os.environ.get('INTENTGATE_UNICODE', '').lower() in ('1', 'true', 'yes'):
        return True

    stdout_encoding = getattr(sys.stdout, 'encoding', None)
    if stdout_encoding:
        encoding_lower = stdout_encoding.lower().replace('-', '').replace('_', '')
        if encoding_lower in ('utf8', 'utf16', 'utf16le', 'utf16be', 'utf32'):
            return True
        if encoding_lower.startswith('cp') or encoding_lower in ('ascii', 'latin1', 'iso88591'):
            return False

    lang = os.environ.get('LANG', '').lower()
    lc_all = os.environ.get('LC_ALL', '').lower()
    return 'utf-8' in lang or 'utf8' in lang or 'utf-8' in lc_all or 'utf8' in lc_all


def get_symbols(preference: Optional[str] = None) -> SymbolSet:
    """
    Get appropriate symbol set based on preference or auto-detection.

    Args:
        preference: "unicode", "ascii", or "auto" (None = auto)
    """
    if preference == 'unicode':
        return UNICODE
    if preference == 'ascii':
        return ASCII
    return UNICODE if supports_unicode() else ASCII
