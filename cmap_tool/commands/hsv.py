"""Convert every entry from RGB to HSV, in place.

Hue is stored in [0, 240), saturation and value in [0, 255]. The file does
not record which colour space it holds; run `rgb` to convert back.

Example:
    uv run cmap-tool hsv palette.cmap -o palette-hsv.cmap
"""

from cmap_tool.core.transforms import convert_rgb_to_hsv
from cmap_tool.core.types import Command, Report

command = Command(name='hsv', help='Convert entries RGB -> HSV.', writes=True)


@command.run
def run(palette, report: Report, args):
    convert_rgb_to_hsv(palette)
    report.add('hsv', {'converted': palette.count})
    return palette
