"""Tone reproduction curves (TRCs): 256-entry lookup tables for 8-bit channels.

gamma_curve(gamma, minval, maxval)
    Maps minval -> 0 and maxval -> 255 with a power-law in between.
    Inputs below minval give 0, inputs above maxval give 255. minval may be
    negative and maxval may exceed 255 (the curve is then compressed).

contrast_curve(factor)
    Arctan-shaped S-curve centred at 127. factor 0.0 is the identity;
    larger factors give more contrast.

Both return int32 numpy arrays clamped to [0, 255].
"""

import logging

import numpy as np

from cmap_tool.core.errors import InvalidRangeError

logger = logging.getLogger(__name__)

# Scales the contrast factor into the arctan argument
ENHANCE_SCALE_FACTOR = 5.0


def gamma_curve(gamma: float, minval: int, maxval: int) -> np.ndarray:
    if minval >= maxval:
        raise InvalidRangeError(f'minval {minval} not < maxval {maxval}')
    if not gamma > 0.0:
        logger.warning('gamma must be > 0.0; setting to 1.0')
        gamma = 1.0

    x = np.arange(256, dtype=np.float64)
    frac = np.clip((x - minval) / float(maxval - minval), 0.0, 1.0)
    curve = (255.0 * np.power(frac, 1.0 / gamma) + 0.5).astype(np.int32)
    return np.clip(curve, 0, 255)


def contrast_curve(factor: float) -> np.ndarray:
    if not factor >= 0.0:
        logger.warning('factor must be >= 0.0; setting to 0.0')
        factor = 0.0
    if factor == 0.0:
        return np.arange(256, dtype=np.int32)

    scale = factor * ENHANCE_SCALE_FACTOR
    ymax = np.arctan(scale)
    ymin = np.arctan(-127.0 * scale / 128.0)
    dely = ymax - ymin
    x = np.arange(256, dtype=np.float64)
    curve = ((255.0 / dely) * (-ymin + np.arctan(scale * (x - 127.0) / 128.0)) + 0.5).astype(np.int32)
    return np.clip(curve, 0, 255)
