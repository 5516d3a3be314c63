"""
ConfigCommand - Configuration display and updates
"""

from ..commands.base import BaseCommand
from ..presentation.template import OutputTemplate


class ConfigCommand(BaseCommand):

    def show_config(self) -> int:
        template = OutputTemplate(symbols=self.symbols)
        template.header("INTENTGATE CONFIG", "Current Configuration")
        template.section("SETTINGS", self._cli.config_manager.display())
        print(template.render())
        return 0

    def set_config(self, key: str, value: str, scope: str = "project") -> int:
        """Set a configuration value."""
        symbols = self.symbols
        manager = self._cli.config_manager
        error = manager.set(key, value, scope)

        template = OutputTemplate(symbols=symbols)

        if error:
            template.header("INTENTGATE CONFIG", "Error")
            template.section("ERROR", error)
            print(template.render())
            return 1

        template.header("INTENTGATE CONFIG", "Configuration Updated")
        template.section("SETTING", f"Set {key} = {value}")
        if scope == "project":
            template.section("SAVED TO", str(manager.project_config_path))
        else:
            template.section("SAVED TO", str(manager.user_config_path))
        template.footer(f"{symbols.check_pass} Configuration saved")
        print(template.render())
        return 0


def register_parser(subparsers):
    p = subparsers.add_parser('config', help='View or set configuration')
    p.add_argument('--set', metavar='KEY=VALUE',
                   help='Set config value (e.g., approval.mode=auto)')
    p.add_argument('--user', action='store_true',
                   help='Apply to user config instead of project')
    return p


def handle(cli, args):
    if args.set:
        if '=' not in args.set:
            print("Error: Use format KEY=VALUE (e.g., approval.mode=auto)")
            return 1
        key, value = args.set.split('=', 1)
        scope = "user" if args.user else "project"
        return cli._config_cmd.set_config(key, value, scope)
    return cli._config_cmd.show_config()
