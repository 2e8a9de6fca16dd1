"""Summarise a palette: depth, capacity, used and free slots.

Also reports whether the palette holds any non-gray colour, and the
indices of its darkest and lightest entries (by r + g + b).

Example:
    uv run cmap-tool info palette.cmap
"""

from cmap_tool.core.types import Command, Report

command = Command(name='info', help='Depth, capacity, count, free slots and darkest/lightest entries.')


@command.run
def run(palette, report: Report, args):
    data = {
        'depth': palette.depth,
        'capacity': palette.capacity,
        'count': palette.count,
        'free': palette.free_count,
        'has_color': palette.has_color(),
    }
    if palette.count > 0:
        darkest = palette.get_rank_intensity(0.0)
        lightest = palette.get_rank_intensity(1.0)
        data['darkest'] = {'index': darkest, 'rgb': list(palette.get_color(darkest))}
        data['lightest'] = {'index': lightest, 'rgb': list(palette.get_color(lightest))}
    report.add('info', data)
    return palette
