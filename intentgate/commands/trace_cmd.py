"""
TraceCommand - Read the audit trail

Shows the most recent trace entries, newest last, optionally only
those attributed to one intent.
"""

from ..commands.base import BaseCommand
from ..presentation.symbols import safe_print, truncate
from ..presentation.template import OutputTemplate


DEFAULT_LIMIT = 10


class TraceCommand(BaseCommand):

    def show(self, limit: int = DEFAULT_LIMIT, intent_id: str = None) -> int:
        symbols = self.symbols

        if intent_id:
            entries = self.trace.read_by_intent(intent_id)
        else:
            entries = self.trace.read_all()
        total = len(entries)
        if limit > 0:
            entries = entries[-limit:]

        template = OutputTemplate(symbols=symbols)
        template.header("INTENTGATE TRACE", f"intent {intent_id}" if intent_id else "All Intents")

        if not entries:
            template.section("ENTRIES", "No trace entries yet.")
        else:
            rows = []
            for entry in entries:
                for trace_file in entry.files:
                    conversation = trace_file.conversations[0] if trace_file.conversations else None
                    rows.append({
                        "id": entry.id[:8],
                        "time": entry.timestamp[:19],
                        "intent": ", ".join(entry.intent_ids) or "-",
                        "class": conversation.mutation_class if conversation else "-",
                        "path": truncate(trace_file.relative_path, 40),
                    })
            template.section(
                "ENTRIES",
                template.format_table(rows, ["ID", "Time", "Intent", "Class", "Path"]),
            )

        template.footer(f"{symbols.trace} showing {len(entries)} of {total} entries")
        safe_print(template.render(command="trace"))
        return 0


def register_parser(subparsers):
    p = subparsers.add_parser('trace', help='Show recent audit trace entries')
    p.add_argument('--limit', '-n', type=int, default=DEFAULT_LIMIT,
                   help='Number of entries (0 = all)')
    p.add_argument('--intent', metavar='INTENT_ID',
                   help='Only entries attributed to this intent')
    return p


def handle(cli, args):
    return cli._trace_cmd.show(limit=args.limit, intent_id=args.intent)
