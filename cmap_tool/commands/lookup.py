"""Find the index of a colour in the palette.

Reports the index of the first exact match, or `null` if the colour is not
present. With --nearest the closest entry (RGB Euclidean distance) is
reported as well.

Example:
    uv run cmap-tool lookup palette.cmap --color '#ff0000' --nearest
"""

from cmap_tool.core.palette import hex_to_rgb, rgb_distance
from cmap_tool.core.types import Command, Report

command = Command(name='lookup', help='Index of an exact (or nearest) colour match.')


@command.arguments
def arguments(parser):
    parser.add_argument('-c', '--color', type=hex_to_rgb, required=True, metavar='HEX', help='Colour to look up')
    parser.add_argument('--nearest', action='store_true', help='Also report the nearest entry')


@command.run
def run(palette, report: Report, args):
    data: dict = {'color': list(args.color), 'index': palette.find_index(*args.color)}
    if args.nearest and palette.count > 0:
        nearest = palette.get_nearest_index(*args.color)
        data['nearest'] = nearest
        data['distance'] = round(rgb_distance(args.color, palette.get_color(nearest)), 1)
    report.add('lookup', data)
    return palette
