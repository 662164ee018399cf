"""Subsector generation: one occupancy roll and world per hex."""

import logging

from ..models import STANDARD_GRID, GridSize, Subsector
from ..utils import WORLD_ABUNDANCE, DiceRNG, random_name
from .world_factory import create_world

logger = logging.getLogger(__name__)


def resolve_abundance(value: int | str) -> int:
    """Turn a world-abundance preset name or a plain DM into a DM.

    Raises:
        ValueError: If value names no preset
    """
    if isinstance(value, int):
        return value
    key = str(value).strip().lower()
    if key in WORLD_ABUNDANCE:
        return WORLD_ABUNDANCE[key]
    try:
        return int(key)
    except ValueError:
        raise ValueError(
            f"Unknown world abundance {value!r} (use a number or one of: "
            f"{', '.join(WORLD_ABUNDANCE)})"
        ) from None


def generate_subsector(
    seed: int,
    abundance_dm: int = 0,
    grid: GridSize = STANDARD_GRID,
    name: str | None = None,
) -> Subsector:
    """Generate a full subsector from a seed.

    Algorithm:
    1. Draw the subsector name (unless one is supplied)
    2. Walk the grid in column-major order (0101, 0102, ..., 0201, ...)
    3. For each hex roll occupancy, then run the world factory

    All rolls come from one stream seeded with `seed`, so the same seed,
    abundance DM and grid size always give the same subsector.

    Args:
        seed: RNG seed for deterministic generation
        abundance_dm: World-abundance modifier on every occupancy roll
        grid: Grid dimensions
        name: Subsector name; generated when omitted

    Returns:
        New Subsector with no factions
    """
    rng = DiceRNG(seed)
    return generate_with(rng, abundance_dm, grid, name)


def generate_with(
    rng: DiceRNG,
    abundance_dm: int = 0,
    grid: GridSize = STANDARD_GRID,
    name: str | None = None,
) -> Subsector:
    """Generate a subsector from an existing dice stream."""
    subsector_name = name if name is not None else random_name(rng)

    worlds = {}
    for coordinate in grid.coordinates():
        world = create_world(rng, coordinate, abundance_dm)
        if world is not None:
            worlds[coordinate] = world

    subsector = Subsector(
        name=subsector_name,
        grid=grid,
        worlds=worlds,
        world_abundance_dm=abundance_dm,
    )
    logger.info(
        f"Generated subsector {subsector.name}: {len(worlds)} worlds in "
        f"{grid.columns}x{grid.rows} hexes (abundance DM {abundance_dm:+d})"
    )
    return subsector
