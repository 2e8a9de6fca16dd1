"""In-place photometric transforms on the defined entries of a Palette.

Every transform keeps depth and count unchanged. Out-of-domain parameters
that have a safe substitute (gamma <= 0 or NaN, factor < 0 or NaN) are reported through
`on_warning` and corrected; the rest raise InvalidRangeError before any
entry is touched.

The curve generators and colour-space converters are parameters so they
can be swapped out (e.g. a measured TRC instead of a power law).

Transforms are not transactional: if a converter raises part way through,
the entries already visited stay converted.
"""

import logging
from collections.abc import Callable

import numpy as np

from cmap_tool.core.colorspace import hsv_to_rgb, rgb_to_hsv
from cmap_tool.core.curves import contrast_curve, gamma_curve
from cmap_tool.core.errors import InvalidRangeError, NullInputError
from cmap_tool.core.palette import Palette

logger = logging.getLogger(__name__)

WarningFn = Callable[[str], None]
Converter = Callable[[int, int, int], tuple[int, int, int]]


def _require(palette: Palette | None) -> Palette:
    if palette is None:
        raise NullInputError('palette not defined')
    return palette


def _remap(palette: Palette, curve: np.ndarray) -> None:
    """Replace each channel value v by curve[v]."""
    curve = np.asarray(curve)
    if curve.shape != (256,):
        raise InvalidRangeError(f'curve must have 256 entries, got shape {curve.shape}')
    red, green, blue = palette.to_arrays()
    for i in range(len(red)):
        palette.reset_color(i, int(curve[red[i]]), int(curve[green[i]]), int(curve[blue[i]]))


def gamma_trc(
    palette: Palette,
    gamma: float,
    minval: int,
    maxval: int,
    curve: Callable[[float, int, int], np.ndarray] = gamma_curve,
    on_warning: WarningFn | None = None,
) -> None:
    """Gamma-correct every defined entry.

    minval maps to 0 and maxval to 255; either may lie outside [0, 255].
    """
    palette = _require(palette)
    warn = on_warning or logger.warning
    if not gamma > 0.0:
        warn('gamma must be > 0.0; setting to 1.0')
        gamma = 1.0
    if minval >= maxval:
        raise InvalidRangeError(f'minval {minval} not < maxval {maxval}')
    _remap(palette, curve(gamma, minval, maxval))


def contrast_trc(
    palette: Palette,
    factor: float,
    curve: Callable[[float], np.ndarray] = contrast_curve,
    on_warning: WarningFn | None = None,
) -> None:
    """Contrast-enhance every defined entry. factor 0.0 leaves colours unchanged."""
    palette = _require(palette)
    warn = on_warning or logger.warning
    if not factor >= 0.0:
        warn('factor must be >= 0.0; setting to 0.0')
        factor = 0.0
    _remap(palette, curve(factor))


def shift_intensity(palette: Palette, fraction: float) -> None:
    """Proportional intensity shift.

    fraction < 0 moves every colour towards black (darkens);
    fraction > 0 moves it towards white (fades).
    """
    palette = _require(palette)
    if not -1.0 <= fraction <= 1.0:
        raise InvalidRangeError(f'fraction {fraction} not in [-1.0, 1.0]')

    red, green, blue = palette.to_arrays()
    for i in range(len(red)):
        rgb = (int(red[i]), int(green[i]), int(blue[i]))
        if fraction < 0.0:
            shifted = tuple(int((1.0 + fraction) * v) for v in rgb)
        else:
            shifted = tuple(v + int(fraction * (255 - v)) for v in rgb)
        palette.reset_color(i, *shifted)


def _convert(palette: Palette, convert: Converter) -> None:
    red, green, blue = palette.to_arrays()
    for i in range(len(red)):
        palette.reset_color(i, *convert(int(red[i]), int(green[i]), int(blue[i])))


def convert_rgb_to_hsv(palette: Palette, convert: Converter = rgb_to_hsv) -> None:
    """Replace r, g, b with h, s, v in every defined entry."""
    _convert(_require(palette), convert)


def convert_hsv_to_rgb(palette: Palette, convert: Converter = hsv_to_rgb) -> None:
    """Replace h, s, v with r, g, b in every defined entry."""
    _convert(_require(palette), convert)


def get_rank_intensity(palette: Palette, rank: float) -> int:
    return _require(palette).get_rank_intensity(rank)
