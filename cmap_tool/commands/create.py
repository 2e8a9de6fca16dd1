"""Create a new palette file from a list of hex colours.

The depth defaults to CMAP_TOOL_DEFAULT_DEPTH (8 if unset). Colours are
appended in the order given; with --dedup repeated colours are stored once.
The file format needs at least two colours, so fewer is an error and
nothing is written.

Example:
    uv run cmap-tool create palette.cmap --depth 2 --color '#000' --color '#fff'
"""

from cmap_tool.core.errors import InvalidRangeError
from cmap_tool.core.palette import Palette, hex_to_rgb
from cmap_tool.core.report import colors_table
from cmap_tool.core.serialize import MIN_COLORS
from cmap_tool.core.types import Command, Report

command = Command(name='create', help='Create a palette file from hex colours.', writes=True, needs_input=False)


@command.arguments
def arguments(parser):
    parser.add_argument('--depth', type=int, default=None, help='Bits per pixel: 1, 2, 4 or 8')
    parser.add_argument(
        '-c', '--color', dest='colors', action='append', type=hex_to_rgb, default=[], metavar='HEX', help='Colour to add'
    )
    parser.add_argument('--dedup', action='store_true', help='Skip colours already in the palette')


@command.run
def run(palette, report: Report, args):
    depth = args.depth if args.depth is not None else args.settings.default_depth
    palette = Palette(depth)
    for rgb in args.colors:
        if args.dedup:
            palette.add_new_color(*rgb)
        else:
            palette.add_color(*rgb)
    if palette.count < MIN_COLORS:
        raise InvalidRangeError(f'need at least {MIN_COLORS} colours, got {palette.count}')
    report.add('create', {'colors': colors_table(palette)})
    return palette
