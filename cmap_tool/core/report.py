"""Report builder — text and JSON output for cmap-tool results."""

import json
from typing import Any

from cmap_tool.core.palette import Palette, rgb_to_hex
from cmap_tool.core.types import Report


def _format_value(value: Any) -> str:
    if isinstance(value, (list, tuple)) and len(value) == 3 and all(isinstance(v, int) for v in value):
        return f'({value[0]}, {value[1]}, {value[2]})'
    return str(value)


def format_text(report: Report) -> str:
    """Format report as human-readable text."""
    lines = []
    header = f'cmap-tool: {report.palette_path or "(new palette)"}'
    if report.capacity:
        header += f' (depth {report.depth} bpp, {report.count}/{report.capacity} colors)'
    lines.append(header)

    for command_name, data in report.results.items():
        lines.append(f'── {command_name}')
        if 'colors' in data:
            for entry in data['colors']:
                lines.append(f'  {entry["index"]:3d}  {entry["hex"]}  ({entry["r"]}, {entry["g"]}, {entry["b"]})')
        for key, value in data.items():
            if key == 'colors':
                continue
            lines.append(f'  {key}: {_format_value(value)}')

    for message in report.warnings:
        lines.append(f'warning: {message}')
    if report.output_path:
        lines.append(f'wrote {report.output_path}')
    return '\n'.join(lines)


def format_json(report: Report) -> str:
    """Format report as JSON."""
    obj: dict[str, Any] = {
        'palette': report.palette_path or None,
        'depth': report.depth,
        'capacity': report.capacity,
        'count': report.count,
        'results': report.results,
    }
    if report.warnings:
        obj['warnings'] = report.warnings
    if report.output_path:
        obj['output'] = report.output_path
    return json.dumps(obj, indent=2)


def colors_table(palette: Palette) -> list[dict[str, Any]]:
    """Defined entries as report rows: index, hex and channel values."""
    rows = []
    for i, (r, g, b) in enumerate(palette):
        rows.append({'index': i, 'hex': rgb_to_hex(r, g, b), 'r': r, 'g': g, 'b': b})
    return rows
