"""Convert every entry from HSV back to RGB, in place.

Expects a palette produced by the `hsv` command.

Example:
    uv run cmap-tool rgb palette-hsv.cmap -o palette.cmap
"""

from cmap_tool.core.transforms import convert_hsv_to_rgb
from cmap_tool.core.types import Command, Report

command = Command(name='rgb', help='Convert entries HSV -> RGB.', writes=True)


@command.run
def run(palette, report: Report, args):
    convert_hsv_to_rgb(palette)
    report.add('rgb', {'converted': palette.count})
    return palette
