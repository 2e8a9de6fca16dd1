"""Bounded, indexed colour palette (colormap) for 1, 2, 4 and 8 bpp images.

A Palette owns a fixed block of 2**depth colour slots and a count of how many
of them are defined. Slots at index >= count are padding and are never read
through the public accessors.

Also holds the small colour helpers (hex parsing, RGB distance) used by the
CLI commands.
"""

from __future__ import annotations

import logging
import math
import operator
import re
from collections.abc import Iterator

import numpy as np

from cmap_tool.core.errors import (
    AllocationFailureError,
    CapacityExhaustedError,
    ColorNotFoundError,
    IndexOutOfRangeError,
    InvalidDepthError,
    InvalidRangeError,
    MalformedInputError,
    NullInputError,
)

logger = logging.getLogger(__name__)

VALID_DEPTHS = (1, 2, 4, 8)

RGB = tuple[int, int, int]

BLACK = 0
WHITE = 1

_HEX_RE = re.compile(r'^#?([0-9a-fA-F]{3}|[0-9a-fA-F]{6})$')


def hex_to_rgb(hex_str: str) -> RGB:
    """Parse '#rrggbb', 'rrggbb' or the short '#rgb' form."""
    m = _HEX_RE.match(hex_str.strip())
    if not m:
        raise MalformedInputError(f'not a hex colour: {hex_str!r}')
    digits = m.group(1)
    if len(digits) == 3:
        digits = ''.join(c * 2 for c in digits)
    return (int(digits[0:2], 16), int(digits[2:4], 16), int(digits[4:6], 16))


def rgb_to_hex(r: int, g: int, b: int) -> str:
    return f'#{r:02x}{g:02x}{b:02x}'


def rgb_distance(a: RGB, b: RGB) -> float:
    """Euclidean distance in RGB space. Plain ints, so no uint8 wrap-around."""
    return math.sqrt(sum((int(x) - int(y)) ** 2 for x, y in zip(a, b)))


def _channel(value: object, name: str) -> int:
    try:
        v = operator.index(value)
    except TypeError:
        raise InvalidRangeError(f'{name} must be an integer, got {value!r}') from None
    if not 0 <= v <= 255:
        raise InvalidRangeError(f'{name} = {v} not in [0, 255]')
    return v


def _check_rgb(r: object, g: object, b: object) -> RGB:
    return (_channel(r, 'rval'), _channel(g, 'gval'), _channel(b, 'bval'))


class Palette:
    """Fixed-capacity colour table.

    Usage:

        cmap = Palette(4)             # 16 slots, none defined
        cmap.add_color(0, 0, 0)
        idx = cmap.add_new_color(255, 255, 255)
        r, g, b = cmap.get_color(idx)
    """

    def __init__(self, depth: int):
        if isinstance(depth, bool) or depth not in VALID_DEPTHS:
            raise InvalidDepthError(f'depth {depth!r} not in {{1,2,4,8}}')
        self._depth = int(depth)
        self._capacity = 1 << self._depth
        try:
            # Columns: red, green, blue, reserved (alpha, unused)
            self._entries: np.ndarray | None = np.zeros((self._capacity, 4), dtype=np.uint8)
        except MemoryError as exc:
            raise AllocationFailureError('palette storage not made') from exc
        self._count = 0

    @classmethod
    def create(cls, depth: int) -> Palette:
        return cls(depth)

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def _storage(self) -> np.ndarray:
        if self._entries is None:
            raise NullInputError('palette has been destroyed')
        return self._entries

    @property
    def destroyed(self) -> bool:
        return self._entries is None

    @property
    def depth(self) -> int:
        return self._depth

    @property
    def capacity(self) -> int:
        return self._capacity

    @property
    def count(self) -> int:
        self._storage()
        return self._count

    @property
    def free_count(self) -> int:
        self._storage()
        return self._capacity - self._count

    def copy(self) -> Palette:
        """Deep copy: same depth, count and slot contents, independent storage."""
        src = self._storage()
        dst = Palette(self._depth)
        try:
            dst._entries = src.copy()
        except MemoryError as exc:
            raise AllocationFailureError('palette copy not made') from exc
        dst._count = self._count
        return dst

    def destroy(self) -> None:
        """Release storage. A destroyed palette raises NullInputError on use."""
        if self._entries is None:
            logger.warning('palette already destroyed')
            return
        self._entries = None
        self._count = 0

    def clear(self) -> None:
        """Forget every defined colour. Capacity and storage are kept."""
        self._storage()
        self._count = 0

    # ------------------------------------------------------------------
    # Lookup and insertion
    # ------------------------------------------------------------------

    def add_color(self, r: int, g: int, b: int) -> None:
        """Append a colour at index == count. Duplicates are allowed."""
        entries = self._storage()
        rgb = _check_rgb(r, g, b)
        if self._count >= self._capacity:
            raise CapacityExhaustedError(f'no free color entries (capacity {self._capacity})')
        entries[self._count, :3] = rgb
        self._count += 1

    def get_index(self, r: int, g: int, b: int) -> int:
        """Index of the first defined entry equal to (r, g, b).

        Raises ColorNotFoundError if no defined entry matches.
        """
        index = self.find_index(r, g, b)
        if index is None:
            raise ColorNotFoundError(f'color ({r}, {g}, {b}) not in palette')
        return index

    def find_index(self, r: int, g: int, b: int) -> int | None:
        """Like get_index, but returns None on a miss."""
        entries = self._storage()
        target = (int(r), int(g), int(b))
        for i in range(self._count):
            if (int(entries[i, 0]), int(entries[i, 1]), int(entries[i, 2])) == target:
                return i
        return None

    def add_new_color(self, r: int, g: int, b: int) -> int:
        """Return the index of (r, g, b), appending it only if it is absent."""
        rgb = _check_rgb(r, g, b)
        index = self.find_index(*rgb)
        if index is not None:
            return index
        if self._count >= self._capacity:
            raise CapacityExhaustedError(f'no free color entries for ({r}, {g}, {b})')
        self.add_color(*rgb)
        return self._count - 1

    def add_black_or_white(self, which: int | str) -> int:
        """Index of pure black (0 / 'black') or pure white (1 / 'white').

        Adds the colour when there is room. When the palette is full, returns
        the darkest (or lightest) existing entry instead.
        """
        if which in (BLACK, 'black'):
            rgb, rank = (0, 0, 0), 0.0
        elif which in (WHITE, 'white'):
            rgb, rank = (255, 255, 255), 1.0
        else:
            raise InvalidRangeError(f'which must be 0/black or 1/white, got {which!r}')

        if self.free_count > 0:
            return self.add_new_color(*rgb)
        return self.get_rank_intensity(rank)

    def has_color(self) -> bool:
        """True if any defined entry is not a gray (r == g == b)."""
        red, green, blue = self.to_arrays()
        for i in range(len(red)):
            if red[i] != green[i] or red[i] != blue[i]:
                return True
        return False

    def get_nearest_index(self, r: int, g: int, b: int) -> int:
        """Index of the defined entry closest to (r, g, b) in RGB distance.

        Ties resolve to the lowest index.
        """
        entries = self._storage()
        if self._count == 0:
            raise IndexOutOfRangeError('palette is empty')
        target = _check_rgb(r, g, b)
        best, best_dist = 0, math.inf
        for i in range(self._count):
            dist = rgb_distance(target, tuple(entries[i, :3]))
            if dist < best_dist:
                best, best_dist = i, dist
        return best

    # ------------------------------------------------------------------
    # Random access
    # ------------------------------------------------------------------

    def _check_index(self, index: int) -> int:
        try:
            i = operator.index(index)
        except TypeError:
            raise IndexOutOfRangeError(f'index must be an integer, got {index!r}') from None
        if i < 0 or i >= self._count:
            raise IndexOutOfRangeError(f'index {i} out of bounds (count {self._count})')
        return i

    def get_color(self, index: int) -> RGB:
        entries = self._storage()
        i = self._check_index(index)
        return (int(entries[i, 0]), int(entries[i, 1]), int(entries[i, 2]))

    def reset_color(self, index: int, r: int, g: int, b: int) -> None:
        """Overwrite an already-defined entry. Does not change count."""
        entries = self._storage()
        i = self._check_index(index)
        entries[i, :3] = _check_rgb(r, g, b)

    # ------------------------------------------------------------------
    # Extraction and ranking
    # ------------------------------------------------------------------

    def to_arrays(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Snapshot of the defined entries as (red, green, blue) int32 arrays."""
        entries = self._storage()
        try:
            block = entries[: self._count, :3].astype(np.int32)
        except MemoryError as exc:
            raise AllocationFailureError('colormap arrays not made') from exc
        return block[:, 0].copy(), block[:, 1].copy(), block[:, 2].copy()

    def get_rank_intensity(self, rank: float) -> int:
        """Index of the entry whose brightness (r + g + b) sits at `rank`.

        rank 0.0 is the darkest entry, 1.0 the lightest. The selected position
        is round-half-up of rank * (count - 1) in a stable increasing sort.
        For rank 1.0 the lowest index among the brightest entries is returned,
        so both ends prefer the earliest entry; interior ranks keep the
        sorted position.
        """
        if not 0.0 <= rank <= 1.0:
            raise InvalidRangeError(f'rank {rank} not in [0.0 ... 1.0]')
        red, green, blue = self.to_arrays()
        n = len(red)
        if n == 0:
            raise IndexOutOfRangeError('rank intensity of an empty palette')
        brightness = red + green + blue
        order = np.argsort(brightness, kind='stable')
        rank_index = int(rank * (n - 1) + 0.5)
        if rank_index == n - 1:
            return int(np.flatnonzero(brightness == brightness.max())[0])
        return int(order[rank_index])

    # ------------------------------------------------------------------
    # Python protocol
    # ------------------------------------------------------------------

    def colors(self) -> list[RGB]:
        return [self.get_color(i) for i in range(self.count)]

    def __len__(self) -> int:
        return self.count

    def __iter__(self) -> Iterator[RGB]:
        return iter(self.colors())

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Palette):
            return NotImplemented
        if self.destroyed or other.destroyed:
            return self is other
        return self._depth == other._depth and self.colors() == other.colors()

    __hash__ = None  # mutable

    def __repr__(self) -> str:
        if self.destroyed:
            return f'Palette(depth={self._depth}, destroyed)'
        return f'Palette(depth={self._depth}, count={self._count}/{self._capacity})'


def copy(source: Palette | None) -> Palette:
    if source is None:
        raise NullInputError('source palette not defined')
    return source.copy()


def destroy(palette: Palette | None) -> None:
    """Destroy a palette; always returns None so callers can rebind the handle.

        cmap = destroy(cmap)
    """
    if palette is None:
        logger.warning('palette not defined; nothing to destroy')
        return None
    palette.destroy()
    return None


def get_count(palette: Palette | None) -> int:
    if palette is None:
        logger.error('palette not defined')
        return 0
    return palette.count


def get_free_count(palette: Palette | None) -> int:
    if palette is None:
        logger.error('palette not defined')
        return 0
    return palette.free_count
