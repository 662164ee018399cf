"""Utility functions and constants for the subsector generator."""

from .constants import (
    GRID_COLUMNS,
    GRID_ROWS,
    MAX_GRID_DIMENSION,
    OCCUPANCY_DICE,
    OCCUPANCY_THRESHOLD,
    RNG_SEED_DEFAULT,
    SCHEMA_VERSION,
    UWP_BOUNDS,
    VARIANT_FULL,
    VARIANT_PLAYER_SAFE,
    WORLD_ABUNDANCE,
    WORLD_FACTION_DICE,
    WORLD_FACTION_NAME,
    WORLD_FACTION_STRENGTH_BOUNDS,
    WORLD_TAG_BOUNDS,
    WORLD_TAGS_PER_WORLD,
)
from .naming import random_name
from .rng import DiceRNG, clamp

__all__ = [
    "GRID_COLUMNS",
    "GRID_ROWS",
    "MAX_GRID_DIMENSION",
    "OCCUPANCY_DICE",
    "OCCUPANCY_THRESHOLD",
    "RNG_SEED_DEFAULT",
    "SCHEMA_VERSION",
    "UWP_BOUNDS",
    "VARIANT_FULL",
    "VARIANT_PLAYER_SAFE",
    "WORLD_ABUNDANCE",
    "WORLD_FACTION_DICE",
    "WORLD_FACTION_NAME",
    "WORLD_FACTION_STRENGTH_BOUNDS",
    "WORLD_TAG_BOUNDS",
    "WORLD_TAGS_PER_WORLD",
    "random_name",
    "DiceRNG",
    "clamp",
]
