"""Text serialization of a Palette.

Format (one palette per stream segment; column widths are fixed):

    <blank line>
    Pixcmap: depth = 8 bpp; 3 colors
    Color    R-val    G-val    B-val
    --------------------------------
      0        10       10       10
      1       200      200      200
      2        50       50       50
    <blank line>

The reader skips leading blank lines, validates the header, consumes the two
banner lines without checking their text, then reads exactly the declared
number of rows. Anything after the last row is left in the stream, so
several palettes can be read back to back from one file.
"""

import io
import logging
import re
from typing import TextIO

from cmap_tool.core.errors import (
    CapacityExhaustedError,
    InvalidRangeError,
    MalformedInputError,
    NullInputError,
)
from cmap_tool.core.palette import VALID_DEPTHS, Palette

logger = logging.getLogger(__name__)

HEADER_FMT = 'Pixcmap: depth = {depth} bpp; {count} colors\n'
BANNER = 'Color    R-val    G-val    B-val\n'
RULE = '--------------------------------\n'
ROW_FMT = '{:3d}       {:3d}      {:3d}      {:3d}\n'

MIN_COLORS = 2
MAX_COLORS = 256

_HEADER_RE = re.compile(r'^\s*Pixcmap:\s*depth\s*=\s*(-?\d+)\s*bpp;\s*(-?\d+)\s*colors\s*$')
_INT_RE = re.compile(r'[+-]?[0-9]+')


def write_stream(fp: TextIO, palette: Palette) -> None:
    if fp is None:
        raise NullInputError('stream not defined')
    if palette is None:
        raise NullInputError('palette not defined')

    red, green, blue = palette.to_arrays()
    fp.write('\n')
    fp.write(HEADER_FMT.format(depth=palette.depth, count=len(red)))
    fp.write(BANNER)
    fp.write(RULE)
    for i in range(len(red)):
        fp.write(ROW_FMT.format(i, int(red[i]), int(green[i]), int(blue[i])))
    fp.write('\n')


def _next_line(fp: TextIO, what: str) -> str:
    """Next non-blank line, without its newline."""
    while True:
        line = fp.readline()
        if not line:
            raise MalformedInputError(f'unexpected end of input reading {what}')
        if line.strip():
            return line.rstrip('\r\n')


def _parse_header(line: str) -> tuple[int, int]:
    m = _HEADER_RE.match(line)
    if not m:
        raise MalformedInputError(f'invalid cmap header: {line!r}')
    depth, ncolors = int(m.group(1)), int(m.group(2))
    if depth not in VALID_DEPTHS or not MIN_COLORS <= ncolors <= MAX_COLORS:
        raise MalformedInputError(f'invalid cmap size: depth = {depth}, colors = {ncolors}')
    return depth, ncolors


def _parse_row(line: str, row: int) -> tuple[int, int, int]:
    tokens = line.split()
    if len(tokens) != 4:
        raise MalformedInputError(f'row {row}: expected 4 integers, got {line!r}')
    # ASCII decimal digits only
    if not all(_INT_RE.fullmatch(t) for t in tokens):
        raise MalformedInputError(f'row {row}: expected 4 integers, got {line!r}')
    _index, r, g, b = (int(t) for t in tokens)
    return r, g, b


def read_stream(fp: TextIO) -> Palette:
    """Read one palette from a text stream.

    The row index column is ignored; rows are taken in order.
    """
    if fp is None:
        raise NullInputError('stream not defined')

    depth, ncolors = _parse_header(_next_line(fp, 'header'))
    _next_line(fp, 'column banner')
    _next_line(fp, 'rule')

    cmap = Palette(depth)
    for row in range(ncolors):
        r, g, b = _parse_row(_next_line(fp, f'row {row}'), row)
        try:
            cmap.add_color(r, g, b)
        except (CapacityExhaustedError, InvalidRangeError) as exc:
            raise MalformedInputError(f'row {row}: {exc.message}') from exc
    logger.debug('read palette: depth %d, %d colors', depth, ncolors)
    return cmap


def to_string(palette: Palette) -> str:
    buf = io.StringIO()
    write_stream(buf, palette)
    return buf.getvalue()


def from_string(text: str) -> Palette:
    return read_stream(io.StringIO(text))


def write_file(path: str, palette: Palette) -> None:
    with open(path, 'w', encoding='utf-8', newline='\n') as f:
        write_stream(f, palette)


def read_file(path: str) -> Palette:
    with open(path, encoding='utf-8') as f:
        try:
            return read_stream(f)
        except UnicodeDecodeError as exc:
            raise MalformedInputError(f'{path}: not valid UTF-8 text ({exc.reason})') from exc
