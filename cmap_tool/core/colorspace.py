"""Pixel-level RGB <-> HSV conversion in an 8-bit friendly integer encoding.

    hue         [0, 240)   six sectors of 40, red at 0, green at 80, blue at 160
    saturation  [0, 255]
    value       [0, 255]   max(r, g, b)

The encoding keeps all three components inside a palette slot, so a palette
can hold HSV triples in place of RGB ones.
"""

from cmap_tool.core.errors import InvalidRangeError

HUE_RANGE = 240


def rgb_to_hsv(r: int, g: int, b: int) -> tuple[int, int, int]:
    vmax = max(r, g, b)
    vmin = min(r, g, b)
    delta = vmax - vmin
    if delta == 0:  # gray: hue and saturation undefined
        return (0, 0, vmax)

    s = int(255.0 * delta / vmax + 0.5)
    if r == vmax:
        h = (g - b) / delta
    elif g == vmax:
        h = 2.0 + (b - r) / delta
    else:
        h = 4.0 + (r - g) / delta
    h *= 40.0
    if h < 0.0:
        h += HUE_RANGE
    if h >= HUE_RANGE - 0.5:
        h = 0.0
    return (int(h + 0.5), s, vmax)


def hsv_to_rgb(h: int, s: int, v: int) -> tuple[int, int, int]:
    if s == 0:
        return (v, v, v)
    if h < 0 or h > HUE_RANGE:
        raise InvalidRangeError(f'hue {h} not in [0, {HUE_RANGE}]')
    if h == HUE_RANGE:
        h = 0

    hf = h / 40.0
    sector = int(hf)
    f = hf - sector
    sf = s / 255.0
    x = int(v * (1.0 - sf) + 0.5)
    y = int(v * (1.0 - sf * f) + 0.5)
    z = int(v * (1.0 - sf * (1.0 - f)) + 0.5)

    if sector == 0:
        return (v, z, x)
    if sector == 1:
        return (y, v, x)
    if sector == 2:
        return (x, v, z)
    if sector == 3:
        return (x, y, v)
    if sector == 4:
        return (z, x, v)
    return (v, x, y)
