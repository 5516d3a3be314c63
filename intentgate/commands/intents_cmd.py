"""
IntentsCommand - Browse the intent catalog

Lists every intent with its owned scope, or prints the exact context
block select_active_intent would inject for one of them.
"""

from ..commands.base import BaseCommand
from ..content.prompts import render_intent_context
from ..core.errors import IntentGateError
from ..presentation.symbols import safe_print
from ..presentation.template import OutputTemplate


class IntentsCommand(BaseCommand):

    def list_intents(self) -> int:
        symbols = self.symbols
        template = OutputTemplate(symbols=symbols)
        template.header("INTENTGATE INTENTS", str(self.intents.catalog_path.name))

        try:
            intents = self.intents.load()
        except IntentGateError as e:
            template.section("ERROR", e.message)
            template.footer(f"{symbols.check_fail} {e.kind.name}")
            safe_print(template.render())
            return 1

        if not intents:
            template.section("INTENTS", "Catalog is empty.")
        else:
            rows = [
                {
                    "id": intent.id,
                    "name": intent.name,
                    "scope": ", ".join(intent.owned_scope) or "-",
                }
                for intent in intents
            ]
            template.section("INTENTS", template.format_table(rows, ["ID", "Name", "Scope"]))

        template.footer(f"{symbols.intent} {len(intents)} intent(s)")
        safe_print(template.render(command="intents"))
        return 0

    def show_intent(self, intent_id: str) -> int:
        """Print the curated context block for one intent."""
        try:
            intent = self.intents.resolve(intent_id)
        except IntentGateError as e:
            safe_print(f"{self.symbols.check_fail} {e.message}")
            return 1

        safe_print(render_intent_context(intent))
        return 0


# =============================================================================
# Command Registration
# =============================================================================

def register_parser(subparsers):
    p = subparsers.add_parser('intents', help='List the intent catalog')
    p.add_argument('--show', metavar='INTENT_ID',
                   help='Print the context block injected for this intent')
    return p


def handle(cli, args):
    if args.show:
        return cli._intents_cmd.show_intent(args.show)
    return cli._intents_cmd.list_intents()
