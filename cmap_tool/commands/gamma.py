"""Gamma-correct every colour in the palette, in place.

--min maps to 0 and --max maps to 255 (either may lie outside [0, 255]).
gamma > 1 lightens, gamma < 1 darkens. A gamma <= 0 is replaced by 1.0
with a warning.

Example:
    uv run cmap-tool gamma palette.cmap --gamma 1.8 --min 20 --max 230 -o out.cmap
"""

from cmap_tool.core.transforms import gamma_trc
from cmap_tool.core.types import Command, Report

command = Command(name='gamma', help='Gamma TRC on every entry.', writes=True)


@command.arguments
def arguments(parser):
    parser.add_argument('--gamma', type=float, default=1.0, help='Gamma (> 0.0)')
    parser.add_argument('--min', dest='minval', type=int, default=0, help='Input value mapped to 0')
    parser.add_argument('--max', dest='maxval', type=int, default=255, help='Input value mapped to 255')


@command.run
def run(palette, report: Report, args):
    gamma_trc(palette, args.gamma, args.minval, args.maxval, on_warning=report.warn)
    report.add('gamma', {'gamma': args.gamma, 'minval': args.minval, 'maxval': args.maxval})
    return palette
