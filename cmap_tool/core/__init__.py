"""cmap_tool.core — Foundation layer.

Contains the palette store, serialization, curves, colour-space conversion,
transforms, configuration and the report builder.
This module has NO dependencies on cmap_tool.commands or cmap_tool.registry.
Only stdlib and numpy are allowed here.
"""
