"""
BaseCommand - Shared foundation for all CLI commands

Commands receive the CLI instance and reach its resources through
properties instead of building their own.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..cli import GateCLI


class BaseCommand:
    """Base class for CLI commands with access to shared resources."""

    def __init__(self, cli: 'GateCLI'):
        self._cli = cli

    @property
    def project_dir(self):
        """Workspace root."""
        return self._cli.project_dir

    @property
    def config(self):
        return self._cli.config

    @property
    def symbols(self):
        """Symbol set for display (Unicode/ASCII)."""
        return self._cli.symbols

    @property
    def intents(self):
        """Intent catalog."""
        return self._cli.intents

    @property
    def trace(self):
        """Append-only trace store."""
        return self._cli.trace

    @property
    def lessons(self):
        return self._cli.lessons

    @property
    def guard(self):
        """Content fingerprinting."""
        return self._cli.guard
