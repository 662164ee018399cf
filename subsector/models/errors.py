"""Typed failures returned by subsector operations.

Every failure here is local and recoverable: the operation that raised it
left the subsector exactly as it was before the call.
"""

from enum import Enum


class ErrorType(Enum):
    """Classification of subsector operation failures."""

    INVALID_COORDINATE = "invalid_coordinate"
    INVALID_GRID_SIZE = "invalid_grid_size"
    OCCUPIED_TARGET = "occupied_target"
    EMPTY_HEX = "empty_hex"
    DANGLING_REFERENCE = "dangling_reference"
    INVALID_FIELD_VALUE = "invalid_field_value"
    SCHEMA_MISMATCH = "schema_mismatch"
    STALE_DERIVED_DATA = "stale_derived_data"


class SubsectorError(Exception):
    """Base class for failures with classification."""

    error_type: ErrorType

    def __init__(self, message: str):
        """Initialize subsector error.

        Args:
            message: Human-readable error message
        """
        self.message = message
        super().__init__(message)


class InvalidCoordinate(SubsectorError):
    """Coordinate is malformed or outside the grid bounds."""

    error_type = ErrorType.INVALID_COORDINATE


class InvalidGridSize(SubsectorError):
    """Grid dimensions cannot be addressed by a CCRR coordinate."""

    error_type = ErrorType.INVALID_GRID_SIZE


class OccupiedTarget(SubsectorError):
    """A move or insert targets a hex that already holds a world."""

    error_type = ErrorType.OCCUPIED_TARGET


class EmptyHex(SubsectorError):
    """The operation needs a world at a hex that is empty."""

    error_type = ErrorType.EMPTY_HEX


class DanglingReference(SubsectorError):
    """A faction would reference a hex with no world."""

    error_type = ErrorType.DANGLING_REFERENCE


class InvalidFieldValue(SubsectorError, ValueError):
    """Unknown field or value outside the field's domain."""

    error_type = ErrorType.INVALID_FIELD_VALUE


class SchemaMismatch(SubsectorError):
    """Serialized document has an unrecognized version or shape."""

    error_type = ErrorType.SCHEMA_MISMATCH


class StaleDerivedData(SubsectorError):
    """Trade codes disagree with the profile they should be derived from."""

    error_type = ErrorType.STALE_DERIVED_DATA
