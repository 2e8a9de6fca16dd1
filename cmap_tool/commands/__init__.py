"""CLI commands, one per module.

Each module defines a `command` object and is picked up by
cmap_tool.registry.discover(). The module docstring is the command's help.
"""
