"""Data models for the subsector generator."""

from .coordinate import STANDARD_GRID, Coordinate, GridSize
from .errors import (
    DanglingReference,
    EmptyHex,
    ErrorType,
    InvalidCoordinate,
    InvalidFieldValue,
    InvalidGridSize,
    OccupiedTarget,
    SchemaMismatch,
    StaleDerivedData,
    SubsectorError,
)
from .faction import Faction, PolityColor
from .subsector import Subsector
from .world import (
    GM_ONLY_BLANKS,
    StarportClass,
    Temperature,
    TradeCode,
    TravelZone,
    World,
    WorldFaction,
)

__all__ = [
    "GM_ONLY_BLANKS",
    "STANDARD_GRID",
    "Coordinate",
    "GridSize",
    "DanglingReference",
    "EmptyHex",
    "ErrorType",
    "InvalidCoordinate",
    "InvalidFieldValue",
    "InvalidGridSize",
    "OccupiedTarget",
    "SchemaMismatch",
    "StaleDerivedData",
    "SubsectorError",
    "Faction",
    "PolityColor",
    "Subsector",
    "StarportClass",
    "Temperature",
    "TradeCode",
    "TravelZone",
    "World",
    "WorldFaction",
]
