"""Add colours to an existing palette.

--color appends unconditionally (duplicates allowed); with --new a colour
already present is not added again and its existing index is reported.

--black / --white add pure black or white if there is room. On a full
palette they report the darkest / lightest existing entry instead.

Example:
    uv run cmap-tool add palette.cmap --color '#2563eb' --new
    uv run cmap-tool add palette.cmap --white
"""

from cmap_tool.core.palette import BLACK, WHITE, hex_to_rgb
from cmap_tool.core.types import Command, Report

command = Command(name='add', help='Add colours (optionally deduplicated) or black/white.', writes=True)


@command.arguments
def arguments(parser):
    parser.add_argument(
        '-c', '--color', dest='colors', action='append', type=hex_to_rgb, default=[], metavar='HEX', help='Colour to add'
    )
    parser.add_argument('--new', action='store_true', help='Only add colours not already present')
    parser.add_argument('--black', action='store_true', help='Ensure black is present (or use the darkest entry)')
    parser.add_argument('--white', action='store_true', help='Ensure white is present (or use the lightest entry)')


@command.run
def run(palette, report: Report, args):
    indices = []
    for rgb in args.colors:
        if args.new:
            indices.append(palette.add_new_color(*rgb))
        else:
            palette.add_color(*rgb)
            indices.append(palette.count - 1)

    data: dict = {'indices': indices}
    if args.black:
        data['black'] = palette.add_black_or_white(BLACK)
    if args.white:
        data['white'] = palette.add_black_or_white(WHITE)
    data['free'] = palette.free_count
    report.add('add', data)
    return palette
