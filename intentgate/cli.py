"""
CLI -- Command interface

Inspection and setup around the hook pipeline. The pipeline itself is
a library; the CLI lets a human see what the agent will see.
"""

import argparse
import logging
import os
from pathlib import Path
from typing import Optional

from . import __version__
from .config import ConfigManager
from .core.concurrency import ConcurrencyGuard
from .core.intents import IntentStore
from .core.trace import TraceStore
from .hooks.engine import HookEngine
from .presentation.symbols import get_symbols
from .services.approval import ApprovalGate
from .services.lessons import LessonLog

from .commands.intents_cmd import IntentsCommand
from .commands.check import CheckCommand
from .commands.hash_cmd import HashCommand
from .commands.trace_cmd import TraceCommand
from .commands.config_cmd import ConfigCommand
from .commands.prompt import PromptCommand
from .commands.lesson import LessonCommand


class GateCLI:
    """Command-line interface for intentgate."""

    def __init__(self, project_dir: Path):
        self.project_dir = Path(project_dir)
        self.config_manager = ConfigManager(self.project_dir)
        self.config = self.config_manager.load()
        self.symbols = get_symbols(self.config.display.symbols)

        paths = self.config.paths
        self.orchestration_dir = self.project_dir / paths.orchestration_dir
        self.intents = IntentStore(self.orchestration_dir / paths.catalog)
        self.trace = TraceStore(self.orchestration_dir / paths.trace)
        self.lessons = LessonLog(self.project_dir / paths.lessons_file)
        self.guard = ConcurrencyGuard()

        # Command handlers
        self._intents_cmd = IntentsCommand(self)
        self._check_cmd = CheckCommand(self)
        self._hash_cmd = HashCommand(self)
        self._trace_cmd = TraceCommand(self)
        self._config_cmd = ConfigCommand(self)
        self._prompt_cmd = PromptCommand(self)
        self._lesson_cmd = LessonCommand(self)

    def engine(self, approval: Optional[ApprovalGate] = None) -> HookEngine:
        """Pipeline for this project, built from the loaded config."""
        return HookEngine.from_config(self.project_dir, self.config, approval=approval)


def main(argv=None):
    """
    Main entry point for the intentgate CLI.

    Parser definitions and dispatch logic are in individual command modules.
    """
    parser = argparse.ArgumentParser(
        description="intentgate -- Intent-gated hooks for coding agents",
        epilog="Declare intent. Stay in scope. Leave a trace."
    )

    parser.add_argument(
        '--project', '-p',
        default=os.environ.get("INTENTGATE_PROJECT_PATH", "."),
        help='Project directory (default: INTENTGATE_PROJECT_PATH or current)'
    )

    parser.add_argument(
        '--verbose', '-v',
        action='store_true',
        help='Log pipeline decisions to stderr'
    )

    parser.add_argument(
        '--version', '-V',
        action='version',
        version=f'intentgate {__version__}'
    )

    subparsers = parser.add_subparsers(dest='command', help='Commands')

    from .commands import register_all, dispatch
    register_all(subparsers)

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.INFO if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    if not args.command:
        parser.print_help()
        return 0

    cli = GateCLI(Path(args.project))

    try:
        result = dispatch(args.command, cli, args)
    except KeyError as e:
        print(f"Error: {e}")
        parser.print_help()
        return 1

    return result or 0


if __name__ == '__main__':
    raise SystemExit(main())
