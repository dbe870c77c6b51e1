"""
Error handling for packmat.

Every failure surfaced by the library is a PackmatError subclass carrying a
numeric code, so callers can inspect errors instead of parsing messages.
Each subclass also derives from the closest builtin exception so generic
handlers (``except IndexError``, ``except ValueError``) keep working.
"""

from __future__ import annotations

from typing import Optional


# =============================================================================
# Error Codes
# =============================================================================

# Success
PACKMAT_OK = 0

# General errors (1-9)
PACKMAT_ERROR_UNKNOWN = 1

# Argument errors (10-19)
PACKMAT_ERROR_SHAPE_MISMATCH = 11
PACKMAT_ERROR_INDEX_OUT_OF_RANGE = 14
PACKMAT_ERROR_POSITION_OUT_OF_BOUNDS = 15
PACKMAT_ERROR_INVALID_DIMENSION = 16

# Lookup errors (30-39)
PACKMAT_ERROR_NOT_FOUND = 31


# Error code to message mapping
_ERROR_MESSAGES = {
    PACKMAT_OK: "Success",
    PACKMAT_ERROR_UNKNOWN: "Unknown error",
    PACKMAT_ERROR_SHAPE_MISMATCH: "Shape mismatch",
    PACKMAT_ERROR_INDEX_OUT_OF_RANGE: "Index out of range",
    PACKMAT_ERROR_POSITION_OUT_OF_BOUNDS: "Position out of bounds",
    PACKMAT_ERROR_INVALID_DIMENSION: "Invalid dimension",
    PACKMAT_ERROR_NOT_FOUND: "Not found",
}


# =============================================================================
# Exception Classes
# =============================================================================

class PackmatError(Exception):
    """
    Base exception for all packmat errors.

    Attributes:
        code: Numeric error code (one of the PACKMAT_ERROR_* constants)
        message: Human readable description
    """

    code = PACKMAT_ERROR_UNKNOWN

    def __init__(self, message: Optional[str] = None, code: Optional[int] = None):
        if code is not None:
            self.code = code
        if message is None:
            message = _ERROR_MESSAGES.get(self.code, f"Unknown error (code={self.code})")
        self.message = message
        super().__init__(f"packmat error {self.code}: {message}")

    @classmethod
    def from_context(cls, context: str = "") -> "PackmatError":
        """Create exception with the default message prefixed by context."""
        base_msg = _ERROR_MESSAGES.get(cls.code, "Unknown error")
        msg = f"{context}: {base_msg}" if context else base_msg
        return cls(msg)


class IndexOutOfRange(PackmatError, IndexError):
    """Raw store index outside ``[0, length)``."""

    code = PACKMAT_ERROR_INDEX_OUT_OF_RANGE


class PositionOutOfBounds(PackmatError, IndexError):
    """(row, col) position outside the declared matrix dimensions."""

    code = PACKMAT_ERROR_POSITION_OUT_OF_BOUNDS


class ShapeMismatch(PackmatError, ValueError):
    """Operand dimensions are incompatible with the requested operation."""

    code = PACKMAT_ERROR_SHAPE_MISMATCH


class InvalidDimension(PackmatError, ValueError):
    """A dimension would become non-positive, or a row/column index is invalid."""

    code = PACKMAT_ERROR_INVALID_DIMENSION


class NotFound(PackmatError, LookupError):
    """Search term does not occur in the matrix."""

    code = PACKMAT_ERROR_NOT_FOUND


# Constructors historically reported bad input as a "shape error"
ShapeError = ShapeMismatch


__all__ = [
    "PACKMAT_OK",
    "PACKMAT_ERROR_UNKNOWN",
    "PACKMAT_ERROR_SHAPE_MISMATCH",
    "PACKMAT_ERROR_INDEX_OUT_OF_RANGE",
    "PACKMAT_ERROR_POSITION_OUT_OF_BOUNDS",
    "PACKMAT_ERROR_INVALID_DIMENSION",
    "PACKMAT_ERROR_NOT_FOUND",
    "PackmatError",
    "IndexOutOfRange",
    "PositionOutOfBounds",
    "ShapeMismatch",
    "ShapeError",
    "InvalidDimension",
    "NotFound",
]
