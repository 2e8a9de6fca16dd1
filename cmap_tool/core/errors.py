"""Error kinds raised by palette operations.

Every failure is an exception tagged with an ErrorKind. Each subclass also
derives from the closest builtin (ValueError, IndexError, ...) so callers can
catch either the palette-specific type or the builtin one.

ColorNotFoundError is the expected outcome of a lookup miss, not a fault.
"""

from enum import Enum


class ErrorKind(Enum):
    INVALID_DEPTH = 'InvalidDepth'
    NULL_INPUT = 'NullInput'
    INDEX_OUT_OF_RANGE = 'IndexOutOfRange'
    CAPACITY_EXHAUSTED = 'CapacityExhausted'
    INVALID_RANGE = 'InvalidRange'
    MALFORMED_INPUT = 'MalformedInput'
    ALLOCATION_FAILURE = 'AllocationFailure'
    NOT_FOUND = 'NotFound'


class PaletteError(Exception):
    """Base class for every palette failure."""

    kind: ErrorKind

    def __init__(self, message: str):
        super().__init__(message)
        self.message = message

    def __str__(self) -> str:
        return f'{self.kind.value}: {self.message}'


class InvalidDepthError(PaletteError, ValueError):
    kind = ErrorKind.INVALID_DEPTH


class NullInputError(PaletteError, TypeError):
    kind = ErrorKind.NULL_INPUT


class IndexOutOfRangeError(PaletteError, IndexError):
    kind = ErrorKind.INDEX_OUT_OF_RANGE


class CapacityExhaustedError(PaletteError):
    kind = ErrorKind.CAPACITY_EXHAUSTED


class InvalidRangeError(PaletteError, ValueError):
    kind = ErrorKind.INVALID_RANGE


class MalformedInputError(PaletteError, ValueError):
    kind = ErrorKind.MALFORMED_INPUT


class AllocationFailureError(PaletteError, MemoryError):
    kind = ErrorKind.ALLOCATION_FAILURE


class ColorNotFoundError(PaletteError, LookupError):
    kind = ErrorKind.NOT_FOUND
