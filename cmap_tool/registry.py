"""Command auto-discovery and registration.

Imports every public module in cmap_tool/commands/ and collects the
`command` objects of type Command into a dict keyed by command name.
"""

import importlib
import pkgutil

import cmap_tool.commands
from cmap_tool.core.types import Command

_registry: dict[str, Command] = {}


def discover() -> dict[str, Command]:
    """Import all command modules and return the registry."""
    if _registry:
        return _registry

    for info in pkgutil.iter_modules(cmap_tool.commands.__path__):
        if info.name.startswith('_'):
            continue
        module = importlib.import_module(f'cmap_tool.commands.{info.name}')
        cmd = getattr(module, 'command', None)
        if isinstance(cmd, Command):
            _registry[cmd.name] = cmd

    return _registry


def get(name: str) -> Command:
    """Get a command by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown command: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_commands() -> dict[str, Command]:
    """Return all registered commands."""
    return discover()
