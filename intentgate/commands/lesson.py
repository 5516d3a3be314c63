"""
LessonCommand - Append a lesson to the shared brain file
"""

from ..commands.base import BaseCommand
from ..core.tools import LESSON_CATEGORIES


class LessonCommand(BaseCommand):

    def record(self, text: str, category: str = None) -> int:
        symbols = self.symbols
        try:
            self.lessons.record(text, category)
        except ValueError as e:
            print(f"{symbols.check_fail} {e}")
            return 1

        print(f"{symbols.check_pass} Lesson recorded in {self.lessons.path.name}")
        return 0


def register_parser(subparsers):
    p = subparsers.add_parser('lesson', help='Record a lesson for future agent runs')
    p.add_argument('text', help='What was learned')
    p.add_argument('--category', '-c', choices=LESSON_CATEGORIES,
                   help='Lesson category')
    return p


def handle(cli, args):
    return cli._lesson_cmd.record(args.text, args.category)
