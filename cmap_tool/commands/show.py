"""Print the palette in its canonical text format.

Without --json the palette is written to stdout exactly as it would be
saved to disk. With --json each entry is listed with its hex value.

Example:
    uv run cmap-tool show palette.cmap
    uv run cmap-tool show palette.cmap --json
"""

from cmap_tool.core.report import colors_table
from cmap_tool.core.types import Command, Report

command = Command(name='show', help='Print the palette in canonical text format.')


@command.run
def run(palette, report: Report, args):
    report.add('show', {'colors': colors_table(palette)})
    return palette
