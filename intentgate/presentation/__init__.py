"""Presentation - terminal output helpers."""

from .symbols import get_symbols, safe_print, truncate, SymbolSet, UNICODE, ASCII
from .template import OutputTemplate

__all__ = ['get_symbols', 'safe_print', 'truncate', 'SymbolSet', 'UNICODE', 'ASCII', 'OutputTemplate']
