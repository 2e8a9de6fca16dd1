"""Select an entry by brightness rank.

Brightness is r + g + b. --rank 0.0 picks the darkest entry, 1.0 the
lightest and 0.5 the median. Ties go to the lowest index.

Example:
    uv run cmap-tool rank palette.cmap --rank 0.5
"""

from cmap_tool.core.transforms import get_rank_intensity
from cmap_tool.core.types import Command, Report

command = Command(name='rank', help='Index of the entry at a fractional brightness rank.')


@command.arguments
def arguments(parser):
    parser.add_argument('--rank', type=float, default=0.5, help='0.0 (darkest) ... 1.0 (lightest)')


@command.run
def run(palette, report: Report, args):
    index = get_rank_intensity(palette, args.rank)
    report.add('rank', {'rank': args.rank, 'index': index, 'rgb': list(palette.get_color(index))})
    return palette
