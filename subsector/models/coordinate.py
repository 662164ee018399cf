"""Hex coordinates and grid dimensions."""

from dataclasses import dataclass
from typing import Iterator

from ..utils import GRID_COLUMNS, GRID_ROWS, MAX_GRID_DIMENSION
from .errors import InvalidCoordinate, InvalidGridSize


@dataclass(frozen=True, order=True)
class Coordinate:
    """1-based (column, row) address of a hex, rendered as CCRR.

    Ordering is column-major, which matches the order worlds are generated
    and listed in.
    """

    column: int
    row: int

    def __post_init__(self):
        """Validate coordinate data after initialization."""
        for axis, value in (("column", self.column), ("row", self.row)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidCoordinate(f"Invalid {axis}: {value!r} (must be an integer)")
            if not (1 <= value <= MAX_GRID_DIMENSION):
                raise InvalidCoordinate(
                    f"Invalid {axis}: {value} (must be 1-{MAX_GRID_DIMENSION})"
                )

    def __str__(self) -> str:
        return f"{self.column:02d}{self.row:02d}"

    @classmethod
    def parse(cls, text: str) -> "Coordinate":
        """Parse a CCRR string such as "0304".

        Spreadsheet-style leading "'" or "_" prefixes are tolerated.

        Raises:
            InvalidCoordinate: If text is not exactly four digits
        """
        stripped = str(text).strip().lstrip("'_").strip()
        if len(stripped) != 4 or not stripped.isdigit():
            raise InvalidCoordinate(f"Invalid hex '{text}' (expected four digits, e.g. 0101)")
        return cls(int(stripped[:2]), int(stripped[2:]))


@dataclass(frozen=True)
class GridSize:
    """Subsector grid dimensions."""

    columns: int = GRID_COLUMNS
    rows: int = GRID_ROWS

    def __post_init__(self):
        """Validate grid dimensions after initialization."""
        for axis, value in (("columns", self.columns), ("rows", self.rows)):
            if isinstance(value, bool) or not isinstance(value, int):
                raise InvalidGridSize(f"Invalid {axis}: {value!r} (must be an integer)")
            if not (1 <= value <= MAX_GRID_DIMENSION):
                raise InvalidGridSize(
                    f"Invalid {axis}: {value} (must be 1-{MAX_GRID_DIMENSION})"
                )

    def contains(self, coordinate: Coordinate) -> bool:
        return coordinate.column <= self.columns and coordinate.row <= self.rows

    def check(self, coordinate: Coordinate) -> Coordinate:
        """Return coordinate unchanged if it lies on the grid.

        Raises:
            InvalidCoordinate: If coordinate is outside the grid
        """
        if not self.contains(coordinate):
            raise InvalidCoordinate(
                f"Hex {coordinate} is outside the {self.columns}x{self.rows} grid"
            )
        return coordinate

    def coordinates(self) -> Iterator[Coordinate]:
        """Yield every hex in column-major order."""
        for column in range(1, self.columns + 1):
            for row in range(1, self.rows + 1):
                yield Coordinate(column, row)


STANDARD_GRID = GridSize()
