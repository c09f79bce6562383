"""Declarative argparse wrapper used by the CLI.

Commands and their arguments are registered with decorators; ``run`` builds
the parser, dispatches, and turns exceptions into exit codes in one place.
"""
from __future__ import annotations

import argparse
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List, Optional, Sequence

from .cli_errors import ExitCode, handle_error


CommandFunc = Callable[[argparse.Namespace], int]


@dataclass
class Argument:
    name_or_flags: tuple
    kwargs: Dict[str, Any] = field(default_factory=dict)


@dataclass
class CommandDef:
    name: str
    func: CommandFunc
    help: str = ""
    description: str = ""
    arguments: List[Argument] = field(default_factory=list)
    aliases: List[str] = field(default_factory=list)
    parent: Optional[str] = None


class CLIApp:
    """Example usage:
        app = CLIApp("my-tool", "My tool")

        @app.command("list", help="List items")
        @app.argument("--filter", "-f", help="Filter pattern")
        def cmd_list(args):
            return 0

        app.run()
    """

    def __init__(
        self,
        name: str,
        description: str = "",
        *,
        version: Optional[str] = None,
    ):
        self.name = name
        self.description = description
        self.version = version

        self._commands: Dict[str, CommandDef] = {}
        self._groups: Dict[str, "CommandGroup"] = {}
        self._global_arguments: List[Argument] = []
        self._pending_arguments: List[Argument] = []

    def global_argument(self, *name_or_flags: str, **kwargs: Any) -> None:
        """Add an option accepted before the command name."""
        self._global_arguments.append(Argument(name_or_flags, kwargs))

    def command(
        self,
        name: str,
        *,
        help: str = "",
        description: str = "",
        aliases: Optional[List[str]] = None,
    ) -> Callable[[CommandFunc], CommandFunc]:
        def decorator(func: CommandFunc) -> CommandFunc:
            # @argument decorators run first (bottom-up) and queue their args
            arguments = list(reversed(self._pending_arguments))
            self._pending_arguments.clear()
            self._commands[name] = CommandDef(
                name=name,
                func=func,
                help=help,
                description=description or help,
                arguments=arguments,
                aliases=aliases or [],
            )
            return func
        return decorator

    def argument(self, *name_or_flags: str, **kwargs: Any) -> Callable[[CommandFunc], CommandFunc]:
        """Queue an argument for the next command. Place below @command."""
        def decorator(func: CommandFunc) -> CommandFunc:
            self._pending_arguments.append(Argument(name_or_flags, kwargs))
            return func
        return decorator

    def group(self, name: str, *, help: str = "", description: str = "") -> "CommandGroup":
        group = CommandGroup(self, name, help=help, description=description)
        self._groups[name] = group
        return group

    def build_parser(self) -> argparse.ArgumentParser:
        parser = argparse.ArgumentParser(
            prog=self.name,
            description=self.description,
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )
        if self.version:
            parser.add_argument("--version", "-V", action="version", version=f"%(prog)s {self.version}")
        for arg in self._global_arguments:
            parser.add_argument(*arg.name_or_flags, **arg.kwargs)

        subparsers = parser.add_subparsers(dest="command", metavar="<command>")
        for group in self._groups.values():
            group_parser = subparsers.add_parser(group.name, help=group.help, description=group.description)
            group._build_subparsers(group_parser)
        for cmd_def in self._commands.values():
            cmd_parser = subparsers.add_parser(
                cmd_def.name,
                help=cmd_def.help,
                description=cmd_def.description,
                aliases=cmd_def.aliases,
            )
            _add_command_arguments(cmd_parser, cmd_def)
            cmd_parser.set_defaults(_cmd_func=cmd_def.func)
        return parser

    def run(
        self,
        argv: Optional[Sequence[str]] = None,
        *,
        setup: Optional[Callable[[argparse.Namespace], None]] = None,
    ) -> int:
        """Parse argv, run the selected command and return its exit code.

        ``setup`` runs after parsing and before dispatch (logging config etc.).
        """
        parser = self.build_parser()
        args = parser.parse_args(argv)
        if setup:
            setup(args)

        cmd_func = getattr(args, "_cmd_func", None)
        if cmd_func is None:
            parser.print_help()
            return int(ExitCode.USAGE)

        try:
            return int(cmd_func(args) or 0)
        except (Exception, KeyboardInterrupt) as e:
            return handle_error(e, verbose=getattr(args, "verbose", False))


class CommandGroup:
    """A group of related commands (e.g. ``get filters``)."""

    def __init__(self, app: CLIApp, name: str, *, help: str = "", description: str = ""):
        self.app = app
        self.name = name
        self.help = help
        self.description = description or help
        self._commands: Dict[str, CommandDef] = {}

    def command(
        self,
        name: str,
        *,
        help: str = "",
        description: str = "",
        aliases: Optional[List[str]] = None,
    ) -> Callable[[CommandFunc], CommandFunc]:
        def decorator(func: CommandFunc) -> CommandFunc:
            arguments = list(reversed(self.app._pending_arguments))
            self.app._pending_arguments.clear()
            self._commands[name] = CommandDef(
                name=name,
                func=func,
                help=help,
                description=description or help,
                arguments=arguments,
                aliases=aliases or [],
                parent=self.name,
            )
            return func
        return decorator

    def argument(self, *name_or_flags: str, **kwargs: Any) -> Callable[[CommandFunc], CommandFunc]:
        return self.app.argument(*name_or_flags, **kwargs)

    def _build_subparsers(self, parser: argparse.ArgumentParser) -> None:
        subparsers = parser.add_subparsers(dest=f"{self.name}_cmd", metavar="<subcommand>")
        for cmd_name, cmd_def in self._commands.items():
            cmd_parser = subparsers.add_parser(
                cmd_name,
                help=cmd_def.help,
                description=cmd_def.description,
                aliases=cmd_def.aliases,
            )
            _add_command_arguments(cmd_parser, cmd_def)
            cmd_parser.set_defaults(_cmd_func=cmd_def.func)


def _add_command_arguments(parser: argparse.ArgumentParser, cmd_def: CommandDef) -> None:
    for arg in cmd_def.arguments:
        parser.add_argument(*arg.name_or_flags, **arg.kwargs)
