"""Contrast-enhance every colour in the palette, in place.

--factor 0.0 is no change; around 1.0 is strong. A negative factor is
replaced by 0.0 with a warning.

Example:
    uv run cmap-tool contrast palette.cmap --factor 0.5
"""

from cmap_tool.core.transforms import contrast_trc
from cmap_tool.core.types import Command, Report

command = Command(name='contrast', help='Contrast TRC on every entry.', writes=True)


@command.arguments
def arguments(parser):
    parser.add_argument('--factor', type=float, default=0.5, help='Enhancement factor (>= 0.0)')


@command.run
def run(palette, report: Report, args):
    contrast_trc(palette, args.factor, on_warning=report.warn)
    report.add('contrast', {'factor': args.factor})
    return palette
