"""
HashCommand - Print the initial_hash for a path

The value an agent should send with write_to_file after reading the
file: the SHA-256 of its current bytes, or 'new-file' when absent.
"""

from ..commands.base import BaseCommand


class HashCommand(BaseCommand):

    def hash_path(self, path: str) -> int:
        print(self.guard.current_hash(self.project_dir / path))
        return 0


def register_parser(subparsers):
    p = subparsers.add_parser('hash', help="Print a file's initial_hash for write_to_file")
    p.add_argument('path', help='Workspace-relative path')
    return p


def handle(cli, args):
    return cli._hash_cmd.hash_path(args.path)
