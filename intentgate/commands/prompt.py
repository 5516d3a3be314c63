"""
PromptCommand - System prompt for intent-driven agents

Prints the rule text to prepend to an agent's system prompt, plus the
intent ids currently in the catalog so the agent knows what to select.
"""

from ..commands.base import BaseCommand
from ..content.prompts import build_system_prompt
from ..core.errors import IntentGateError
from ..presentation.symbols import safe_print


class PromptCommand(BaseCommand):

    def show_prompt(self) -> int:
        try:
            intents = self.intents.load()
        except IntentGateError:
            intents = []

        if intents:
            known = "\n".join(f"- {intent.id}: {intent.name}" for intent in intents)
            safe_print(build_system_prompt(f"Known active intents:\n{known}\n"))
        else:
            safe_print(build_system_prompt())
        return 0


def register_parser(subparsers):
    return subparsers.add_parser('prompt', help='Print the intent-driven system prompt')


def handle(cli, args):
    return cli._prompt_cmd.show_prompt()
