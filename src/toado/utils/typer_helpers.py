"""Typer helper utilities."""

from typer.core import TyperGroup


class SearchByDefaultGroup(TyperGroup):
    """Custom Typer group that runs ``search`` for a bare search term.

    ``toado groceries -p`` is treated as ``toado search groceries -p``: when
    the first positional argument is not a command name, the default
    command is inserted in front of it.
    """

    default_command = "search"
    # Group options that consume the following argument
    value_options = frozenset({"-f", "--file", "-c", "--config"})

    def parse_args(self, ctx, args):
        return super().parse_args(ctx, self._with_default_command(list(args)))

    def _with_default_command(self, args: list[str]) -> list[str]:
        skip_next = False
        for index, arg in enumerate(args):
            if skip_next:
                skip_next = False
                continue
            if arg == "--":
                if index + 1 < len(args):
                    args.insert(index, self.default_command)
                return args
            if arg.startswith("-"):
                skip_next = arg in self.value_options
                continue
            if arg not in self.commands:
                args.insert(index, self.default_command)
            return args
        return args
