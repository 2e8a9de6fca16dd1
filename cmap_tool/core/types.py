"""Shared types for cmap-tool: Command, Report."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

from cmap_tool.core.palette import Palette


class Command:
    """A self-registering CLI command.

    Usage in a command module:

        command = Command(name='gamma', help='Gamma-correct the palette', writes=True)

        @command.arguments
        def arguments(parser):
            parser.add_argument('--gamma', type=float, default=1.0)

        @command.run
        def run(palette, report, args):
            ...
            return palette
    """

    def __init__(self, name: str, help: str = '', writes: bool = False, needs_input: bool = True):
        self.name = name
        self.help = help
        self.writes = writes  # result palette is saved to --output (or the input path)
        self.needs_input = needs_input  # `create` builds a palette from nothing
        self._run_fn: Callable | None = None
        self._args_fn: Callable | None = None

    def run(self, fn: Callable) -> Callable:
        """Decorator to register the run function."""
        self._run_fn = fn
        return fn

    def arguments(self, fn: Callable) -> Callable:
        """Decorator to register extra argparse options for this command."""
        self._args_fn = fn
        return fn

    def add_arguments(self, parser: Any) -> None:
        if self._args_fn is not None:
            self._args_fn(parser)

    def execute(self, palette: Palette | None, report: Report, args: Any) -> Palette | None:
        """Execute the command's run function; returns the (possibly new) palette."""
        if self._run_fn is None:
            raise RuntimeError(f'Command {self.name} has no run function')
        return self._run_fn(palette, report, args)


@dataclass
class Report:
    """Accumulates command results for text/JSON output."""

    palette_path: str = ''
    depth: int = 0
    capacity: int = 0
    count: int = 0
    results: dict[str, dict[str, Any]] = field(default_factory=dict)
    warnings: list[str] = field(default_factory=list)
    output_path: str | None = None

    def add(self, command_name: str, data: dict[str, Any]) -> None:
        """Add (or extend) results for a command."""
        self.results.setdefault(command_name, {}).update(data)

    def warn(self, message: str) -> None:
        self.warnings.append(message)

    def describe(self, palette: Palette) -> None:
        """Record the palette's shape after the command ran."""
        self.depth = palette.depth
        self.capacity = palette.capacity
        self.count = palette.count
