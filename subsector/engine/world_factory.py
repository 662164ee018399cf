"""World factory: occupancy, UWP pipeline, classification and naming."""

import logging
from dataclasses import fields, replace

from ..models import Coordinate, InvalidFieldValue, World
from ..utils import DiceRNG, random_name
from .trade_codes import classify
from .uwp import roll_occupancy, run_pipeline

logger = logging.getLogger(__name__)

WORLD_FIELDS = frozenset(f.name for f in fields(World))
NARRATIVE_FIELDS = ("notes", "description")


def create_world(
    rng: DiceRNG,
    coordinate: Coordinate,
    abundance_dm: int = 0,
    roll_for_occupancy: bool = True,
    name: str | None = None,
    fixed: dict | None = None,
) -> World | None:
    """Generate the world for one hex.

    Rolls in a fixed order (occupancy, name, profile) so the same stream
    state always yields the same world.

    Args:
        rng: Dice stream to consume
        coordinate: Hex being generated (the world does not store its position)
        abundance_dm: World-abundance modifier on the occupancy roll
        roll_for_occupancy: When False the hex is always occupied
        name: Keep this name instead of generating one
        fixed: Attribute overrides passed to the pipeline

    Returns:
        The new world, or None if the occupancy roll leaves the hex empty

    Raises:
        InvalidFieldValue: If an override names an unknown or derived attribute,
            or its value is outside the attribute's domain
    """
    fixed = dict(fixed or {})
    unknown = set(fixed) - WORLD_FIELDS | ({"name", "trade_codes"} & set(fixed))
    if unknown:
        raise InvalidFieldValue(f"Cannot fix attributes: {', '.join(sorted(unknown))}")

    if roll_for_occupancy and not roll_occupancy(rng, abundance_dm):
        logger.debug(f"Hex {coordinate} is empty")
        return None

    world_name = name if name is not None else random_name(rng)
    narrative = {key: fixed.pop(key) for key in NARRATIVE_FIELDS if key in fixed}
    values = run_pipeline(rng, fixed)

    world = World(name=world_name, **values, **narrative)
    world = replace(world, trade_codes=classify(world))
    logger.debug(f"Generated {world.name} at {coordinate}: {world.profile} {world.trade_code_str}")
    return world
