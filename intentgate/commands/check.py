"""
CheckCommand - Dry-run the pipeline for one intent and path

Activates the intent in a throwaway session, then runs a mutating
invocation for the path with approval auto-granted. Nothing is
written; the output is the decision the agent would get.
"""

from ..commands.base import BaseCommand
from ..core.errors import RejectionKind
from ..core.session import Session
from ..core.tools import SELECT_INTENT_TOOL
from ..presentation.symbols import safe_print
from ..presentation.template import OutputTemplate
from ..services.approval import ApprovalDecision, StaticApprovalGate

# Mutating tool with no post-hook side effects
PROBE_TOOL = "delete_file"


class CheckCommand(BaseCommand):

    def check(self, intent_id: str, path: str) -> int:
        symbols = self.symbols
        engine = self._cli.engine(approval=StaticApprovalGate(ApprovalDecision.APPROVED))
        session = Session()

        template = OutputTemplate(symbols=symbols)
        template.header("INTENTGATE CHECK", f"{intent_id} {symbols.arrow} {path}")

        result = engine.pre_hook(session, SELECT_INTENT_TOOL, {"intent_id": intent_id})
        if result.success:
            result = engine.pre_hook(session, PROBE_TOOL, {"path": path})

        if result.success:
            matched = engine.matcher_for(session.active_intent.owned_scope).first_match(
                engine.relative_target(path)
            )
            template.section("DECISION", f"{symbols.check_pass} Allowed")
            template.section("MATCHED", f"{symbols.scope} {matched}")
            template.footer(f"{symbols.check_pass} {path} is inside {intent_id}")
            safe_print(template.render(command="check"))
            return 0

        template.section("DECISION", f"{symbols.check_fail} {result.kind.name}")
        template.section("REASON", result.message)
        if result.kind == RejectionKind.SCOPE_VIOLATION:
            owned = list(session.active_intent.owned_scope)
            template.section("OWNED SCOPE", template.format_list(owned))
        template.footer(f"{symbols.check_fail} Would be rejected")
        safe_print(template.render())
        return 1


# =============================================================================
# Command Registration
# =============================================================================

def register_parser(subparsers):
    p = subparsers.add_parser('check', help='Check whether an intent may modify a path')
    p.add_argument('intent_id', help='Intent ID (e.g., INT-001)')
    p.add_argument('path', help='Workspace-relative path')
    return p


def handle(cli, args):
    return cli._check_cmd.check(args.intent_id, args.path)
