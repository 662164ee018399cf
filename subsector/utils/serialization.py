"""Subsector serialization to/from JSON.

Documents are versioned. The full variant carries every field; the
player-safe variant is written from a projected subsector and omits the
GM-only fields (notes, local factions, culture, world tags) entirely.
"""

import json
import logging
from dataclasses import replace
from pathlib import Path
from typing import Any

from ..engine.trade_codes import classify
from ..models import (
    GM_ONLY_BLANKS,
    Coordinate,
    Faction,
    GridSize,
    SchemaMismatch,
    Subsector,
    SubsectorError,
    World,
    WorldFaction,
)
from ..models.world import BASE_CODES
from .constants import SCHEMA_VERSION, VARIANT_FULL, VARIANT_PLAYER_SAFE

logger = logging.getLogger(__name__)

DOCUMENT_KEYS = frozenset(
    {"schema_version", "variant", "name", "grid", "world_abundance_dm", "worlds", "factions"}
)
PROFILE_KEYS = (
    "starport",
    "size",
    "atmosphere",
    "hydrographics",
    "population",
    "population_digit",
    "government",
    "law_level",
    "tech_level",
    "temperature",
    "diameter",
    "berthing_cost",
    "gas_giants",
    "belts",
    "travel_zone",
)


def save_subsector(subsector: Subsector, filepath: str | Path) -> None:
    """Save subsector to a JSON file.

    A restricted (player-safe) subsector is written as the player-safe variant.

    Args:
        subsector: Subsector to save
        filepath: Destination path; parent directories are created
    """
    path = Path(filepath)
    path.parent.mkdir(parents=True, exist_ok=True)
    with open(path, "w") as f:
        f.write(dumps(subsector))
    logger.info(f"Saved subsector {subsector.name} to {path}")


def load_subsector(filepath: str | Path) -> Subsector:
    """Load subsector from a JSON file.

    Raises:
        FileNotFoundError: If file doesn't exist
        SchemaMismatch: If the document is malformed or of an unknown version
    """
    path = Path(filepath)
    with open(path) as f:
        subsector = loads(f.read())
    logger.info(f"Loaded subsector {subsector.name} from {path}")
    return subsector


def dumps(subsector: Subsector) -> str:
    return json.dumps(subsector_to_dict(subsector), indent=2)


def loads(text: str) -> Subsector:
    try:
        data = json.loads(text)
    except ValueError as e:
        raise SchemaMismatch(f"Document is not valid JSON: {e}") from e
    return subsector_from_dict(data)


def subsector_to_dict(subsector: Subsector) -> dict[str, Any]:
    """Convert Subsector to a JSON-compatible document."""
    restricted = subsector.restricted
    return {
        "schema_version": subsector.schema_version,
        "variant": VARIANT_PLAYER_SAFE if restricted else VARIANT_FULL,
        "name": subsector.name,
        "grid": {"columns": subsector.grid.columns, "rows": subsector.grid.rows},
        "world_abundance_dm": subsector.world_abundance_dm,
        "worlds": {
            str(coordinate): _serialize_world(subsector.worlds[coordinate], restricted)
            for coordinate in subsector.occupied()
        },
        "factions": [_serialize_faction(f) for f in subsector.factions],
    }


def subsector_from_dict(data: dict[str, Any]) -> Subsector:
    """Reconstruct Subsector from a document.

    Trade codes are re-derived from each profile rather than trusted. The
    whole subsector is built before anything is returned.

    Raises:
        SchemaMismatch: If the version, variant or shape is not recognized
    """
    if not isinstance(data, dict):
        raise SchemaMismatch(f"Document must be an object, got {type(data).__name__}")
    version = data.get("schema_version")
    if version != SCHEMA_VERSION:
        raise SchemaMismatch(f"Unsupported schema version: {version!r} (expected {SCHEMA_VERSION})")
    variant = data.get("variant")
    if variant not in (VARIANT_FULL, VARIANT_PLAYER_SAFE):
        raise SchemaMismatch(f"Unknown document variant: {variant!r}")
    missing = DOCUMENT_KEYS - set(data)
    if missing:
        raise SchemaMismatch(f"Document is missing: {', '.join(sorted(missing))}")

    restricted = variant == VARIANT_PLAYER_SAFE
    try:
        worlds = {}
        for hex_str, world_data in data["worlds"].items():
            coordinate = Coordinate.parse(hex_str)
            if coordinate in worlds:
                raise SchemaMismatch(f"Hex {coordinate} appears more than once (as {hex_str!r})")
            worlds[coordinate] = _deserialize_world(world_data, restricted)
        return Subsector(
            name=data["name"],
            grid=GridSize(data["grid"]["columns"], data["grid"]["rows"]),
            worlds=worlds,
            factions=[_deserialize_faction(f) for f in data["factions"]],
            world_abundance_dm=data["world_abundance_dm"],
            schema_version=version,
            restricted=restricted,
        )
    except SchemaMismatch:
        raise
    except (KeyError, TypeError, AttributeError, ValueError, SubsectorError) as e:
        raise SchemaMismatch(f"Malformed {variant} document: {e}") from e


def _serialize_world(world: World, restricted: bool) -> dict[str, Any]:
    """Convert World to dictionary."""
    data: dict[str, Any] = {"name": world.name}
    for key in PROFILE_KEYS:
        value = getattr(world, key)
        data[key] = getattr(value, "value", value)
    data["bases"] = {name: getattr(world, name) for name in BASE_CODES}
    data["trade_codes"] = world.trade_code_str.split() if world.trade_codes else []
    data["description"] = world.description
    if not restricted:
        data["factions"] = [_serialize_world_faction(f) for f in world.factions]
        data["culture"] = world.culture
        data["world_tags"] = list(world.world_tags)
        data["notes"] = world.notes
    return data


def _deserialize_world(data: dict[str, Any], restricted: bool) -> World:
    """Reconstruct World from dictionary, re-deriving its trade codes."""
    if restricted:
        leaked = sorted(set(GM_ONLY_BLANKS) & set(data))
        if leaked:
            raise SchemaMismatch(
                f"Player-safe world {data.get('name')!r} carries GM-only fields: "
                f"{', '.join(leaked)}"
            )
        gm_only = dict(GM_ONLY_BLANKS)
    else:
        gm_only = {key: data.get(key, blank) for key, blank in GM_ONLY_BLANKS.items()}
        gm_only["factions"] = [_deserialize_world_faction(f) for f in gm_only["factions"]]
    world = World(
        name=data["name"],
        **{key: data[key] for key in PROFILE_KEYS},
        **{name: data["bases"][name] for name in BASE_CODES},
        description=data.get("description", ""),
        **gm_only,
    )
    derived = classify(world)
    stored = frozenset(data.get("trade_codes", []))
    if stored != {code.value for code in derived}:
        logger.warning(f"Re-derived trade codes for {world.name}: {sorted(stored)} was stale")
    return replace(world, trade_codes=derived)


def _serialize_faction(faction: Faction) -> dict[str, Any]:
    """Convert Faction to dictionary."""
    return {
        "name": faction.name,
        "color": faction.color.value,
        "worlds": [str(c) for c in faction.worlds],
    }


def _deserialize_faction(data: dict[str, Any]) -> Faction:
    """Reconstruct Faction from dictionary."""
    return Faction(
        name=data["name"],
        color=data["color"],
        worlds=[Coordinate.parse(c) for c in data["worlds"]],
    )


def _serialize_world_faction(faction: WorldFaction) -> dict[str, Any]:
    return {
        "name": faction.name,
        "strength": faction.strength,
        "government": faction.government,
        "description": faction.description,
    }


def _deserialize_world_faction(data: dict[str, Any]) -> WorldFaction:
    return WorldFaction(
        name=data["name"],
        strength=data["strength"],
        government=data["government"],
        description=data.get("description", ""),
    )
