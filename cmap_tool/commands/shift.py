"""Proportionally shift the intensity of every colour, in place.

--fraction in [-1.0, 1.0]. Negative values move colours towards black,
positive values towards white. -1.0 gives all black, 1.0 all white.

Example:
    uv run cmap-tool shift palette.cmap --fraction -0.25
"""

from cmap_tool.core.transforms import shift_intensity
from cmap_tool.core.types import Command, Report

command = Command(name='shift', help='Shift intensity towards black (<0) or white (>0).', writes=True)


@command.arguments
def arguments(parser):
    parser.add_argument('--fraction', type=float, required=True, help='-1.0 ... 1.0')


@command.run
def run(palette, report: Report, args):
    shift_intensity(palette, args.fraction)
    report.add('shift', {'fraction': args.fraction})
    return palette
