"""Mutation engine for an editable subsector.

Every operation validates its inputs and builds the new world value before
writing anything, so a failed call leaves the subsector untouched.

Architecture:
SubsectorEditor owns one Subsector and one dice stream. Re-rolls draw a
child stream from it, so regenerating one hex costs the main stream a
single draw regardless of how many dice the new world needs.
"""

import copy
import functools
import logging
from dataclasses import fields, replace

from ..models import (
    STANDARD_GRID,
    Coordinate,
    Faction,
    GridSize,
    InvalidFieldValue,
    PolityColor,
    StarportClass,
    Subsector,
    SubsectorError,
    World,
)
from ..utils import RNG_SEED_DEFAULT, DiceRNG
from .generator import generate_with
from .trade_codes import TRADE_CODE_FIELDS, check_trade_codes, classify
from .uwp import FIELD_REROLLS, reroll, roll_berthing_cost, roll_diameter
from .world_factory import create_world

logger = logging.getLogger(__name__)

# Derived from the profile, never set directly
DERIVED_FIELDS = frozenset({"trade_codes"})
EDITABLE_FIELDS = frozenset(f.name for f in fields(World)) - DERIVED_FIELDS
REROLLABLE_FIELDS = frozenset(FIELD_REROLLS)


def _as_grid(grid: GridSize | tuple[int, int]) -> GridSize:
    return grid if isinstance(grid, GridSize) else GridSize(*grid)


def _mutation(method):
    """Log rejected mutations before re-raising them."""

    @functools.wraps(method)
    def wrapper(self, *args, **kwargs):
        try:
            return method(self, *args, **kwargs)
        except (SubsectorError, ValueError) as e:
            logger.warning(f"Rejected {method.__name__}: {e}")
            raise

    return wrapper


class SubsectorEditor:
    """Applies generation and editing intents to one subsector."""

    def __init__(self, subsector: Subsector, seed: int = RNG_SEED_DEFAULT):
        """Initialize editor.

        Args:
            subsector: Subsector to edit (mutated in place)
            seed: Seed for the editor's dice stream
        """
        self.rng = DiceRNG(seed)
        self.subsector = subsector

    @classmethod
    def from_seed(
        cls,
        seed: int,
        abundance_dm: int = 0,
        grid: GridSize | tuple[int, int] = STANDARD_GRID,
        name: str | None = None,
    ) -> "SubsectorEditor":
        """Generate a subsector and open an editor on it, sharing one stream."""
        rng = DiceRNG(seed)
        editor = cls(generate_with(rng, abundance_dm, _as_grid(grid), name), seed)
        editor.rng = rng
        return editor

    # =========================================================================
    # GENERATION
    # =========================================================================

    @_mutation
    def generate_all(
        self,
        seed: int,
        abundance_dm: int = 0,
        grid: GridSize | tuple[int, int] = STANDARD_GRID,
        name: str | None = None,
    ) -> Subsector:
        """Replace the subsector with a freshly generated one.

        Factions are cleared. The editor's stream is reseeded, so the result
        equals generate_subsector(seed, abundance_dm, grid, name).

        Raises:
            InvalidGridSize: If grid dimensions are out of range
        """
        grid = _as_grid(grid)
        self.rng = DiceRNG(seed)
        self.subsector = generate_with(self.rng, abundance_dm, grid, name)
        return self.subsector

    @_mutation
    def regenerate_world(
        self,
        coordinate: Coordinate,
        keep_name: bool = False,
        roll_occupancy: bool = False,
    ) -> World | None:
        """Discard the world at coordinate and generate a new one.

        Other hexes are left exactly as they were.

        Args:
            coordinate: Hex to regenerate (may be empty)
            keep_name: Keep the current world's name
            roll_occupancy: Roll occupancy as during full generation; the hex
                may end up empty, pruning faction references to it

        Returns:
            The new world, or None if the hex is now empty
        """
        current = self.subsector.get_world(coordinate)
        name = current.name if keep_name and current is not None else None
        world = create_world(
            self.rng.spawn(),
            coordinate,
            self.subsector.world_abundance_dm,
            roll_for_occupancy=roll_occupancy,
            name=name,
        )
        if world is None:
            self.subsector.remove_world(coordinate)
            logger.info(f"Regenerated {coordinate}: now empty")
        else:
            self.subsector.insert_world(coordinate, world, replace_existing=True)
            logger.info(f"Regenerated {coordinate}: {world.name} {world.profile}")
        return world

    @_mutation
    def regenerate_field(self, coordinate: Coordinate, field: str) -> World:
        """Re-roll one attribute of a world against its other attributes.

        Raises:
            EmptyHex: If there is no world at coordinate
            InvalidFieldValue: If the attribute cannot be re-rolled
        """
        world = self.subsector.world_at(coordinate)
        if field not in REROLLABLE_FIELDS:
            raise InvalidFieldValue(
                f"Cannot re-roll {field!r} (choose from {', '.join(sorted(REROLLABLE_FIELDS))})"
            )
        values = {f.name: getattr(world, f.name) for f in fields(World)}
        changes = reroll(self.rng.spawn(), field, values)
        updated = self._apply(coordinate, world, changes)
        logger.info(f"Re-rolled {field} at {coordinate}: {world.profile} -> {updated.profile}")
        return updated

    # =========================================================================
    # EDITING
    # =========================================================================

    @_mutation
    def move_world(self, source: Coordinate, destination: Coordinate) -> World:
        """Move a world to an empty hex, carrying faction references with it.

        Raises:
            EmptyHex: If source is empty
            OccupiedTarget: If destination holds a world
        """
        world = self.subsector.relocate_world(source, destination)
        logger.info(f"Moved {world.name} from {source} to {destination}")
        return world

    @_mutation
    def rename_subsector(self, name: str) -> None:
        old = self.subsector.name
        self.subsector.rename(name)
        logger.info(f"Renamed subsector {old} to {name}")

    @_mutation
    def rename_world(self, coordinate: Coordinate, name: str) -> World:
        world = self.subsector.world_at(coordinate)
        if not isinstance(name, str) or not name.strip():
            raise InvalidFieldValue("World name cannot be empty")
        updated = replace(world, name=name)
        self.subsector.insert_world(coordinate, updated, replace_existing=True)
        logger.info(f"Renamed {world.name} at {coordinate} to {name}")
        return updated

    @_mutation
    def edit_field(self, coordinate: Coordinate, field: str, value) -> World:
        """Set one attribute of a world.

        Trade codes are re-derived whenever the attribute feeds a trade
        code rule. Setting size to 0 also clears atmosphere and
        hydrographics; setting population to or from 0 keeps the population
        digit consistent, and an unpopulated world loses its factions. A new
        size or starport class re-rolls diameter or berthing cost unless the
        same call sets them.

        Raises:
            EmptyHex: If there is no world at coordinate
            InvalidFieldValue: If the attribute is unknown or derived, or the
                value is outside its domain
        """
        world = self.subsector.world_at(coordinate)
        if field not in EDITABLE_FIELDS:
            raise InvalidFieldValue(f"Cannot edit {field!r}")
        if field == "name":
            return self.rename_world(coordinate, value)
        updated = self._apply(coordinate, world, {field: value})
        logger.info(f"Set {field}={value!r} on {updated.name} at {coordinate}")
        return updated

    @_mutation
    def delete_world(self, coordinate: Coordinate) -> World | None:
        """Remove a world and prune faction references to it.

        Returns:
            The removed world, or None if the hex was already empty
        """
        removed = self.subsector.remove_world(coordinate)
        if removed is not None:
            logger.info(f"Deleted {removed.name} at {coordinate}")
        return removed

    def snapshot(self, coordinate: Coordinate) -> World | None:
        """Capture the world at coordinate for a later revert_world."""
        return copy.deepcopy(self.subsector.get_world(coordinate))

    @_mutation
    def revert_world(self, coordinate: Coordinate, snapshot: World | None) -> World | None:
        """Restore a snapshot verbatim, every field included.

        A None snapshot restores an empty hex.

        Raises:
            StaleDerivedData: If the snapshot's trade codes disagree with its profile
        """
        self.subsector.grid.check(coordinate)
        if snapshot is None:
            self.subsector.remove_world(coordinate)
            logger.info(f"Reverted {coordinate} to empty")
            return None
        check_trade_codes(snapshot)
        restored = copy.deepcopy(snapshot)
        self.subsector.insert_world(coordinate, restored, replace_existing=True)
        logger.info(f"Reverted {coordinate} to {restored.name} {restored.profile}")
        return restored

    # =========================================================================
    # FACTIONS
    # =========================================================================

    @_mutation
    def add_faction(
        self,
        name: str,
        color: PolityColor | str = PolityColor.GREY,
        worlds: list[Coordinate] | None = None,
    ) -> int:
        index = self.subsector.add_faction(Faction(name, color, list(worlds or [])))
        logger.info(f"Added faction {name} at index {index}")
        return index

    @_mutation
    def update_faction(self, index: int, **changes) -> Faction:
        faction = self.subsector.update_faction(index, **changes)
        logger.info(f"Updated faction {index}: {faction.name}")
        return faction

    @_mutation
    def remove_faction(self, index: int) -> Faction:
        faction = self.subsector.remove_faction(index)
        logger.info(f"Removed faction {faction.name}")
        return faction

    @_mutation
    def reorder_faction(self, index: int, new_index: int) -> None:
        self.subsector.reorder_faction(index, new_index)

    @_mutation
    def claim_world(self, index: int, coordinate: Coordinate) -> None:
        self.subsector.claim_world(index, coordinate)

    @_mutation
    def release_world(self, index: int, coordinate: Coordinate) -> None:
        self.subsector.release_world(index, coordinate)

    # =========================================================================
    # HELPERS
    # =========================================================================

    def _apply(self, coordinate: Coordinate, world: World, changes: dict) -> World:
        """Build the changed world, validate it, then store it."""
        changes = dict(changes)
        if changes.get("size") == 0:
            changes.setdefault("atmosphere", 0)
            changes.setdefault("hydrographics", 0)
        if "population" in changes and "population_digit" not in changes:
            if changes["population"] == 0:
                changes["population_digit"] = 0
            elif world.population_digit == 0:
                changes["population_digit"] = 1
        if changes.get("population") == 0:
            changes.setdefault("factions", [])

        # Values rolled off a changed attribute are rolled again
        size = changes.get("size", world.size)
        if "diameter" not in changes and _is_code(size) and size != world.size:
            changes["diameter"] = roll_diameter(self.rng.spawn(), size)
        if "starport" in changes and "berthing_cost" not in changes:
            try:
                starport = StarportClass(changes["starport"])
            except ValueError as e:
                raise InvalidFieldValue(f"Invalid starport: {changes['starport']!r}") from e
            if starport != world.starport:
                changes["berthing_cost"] = roll_berthing_cost(self.rng.spawn(), starport)

        updated = replace(world, **changes)
        if set(changes) & TRADE_CODE_FIELDS:
            updated = replace(updated, trade_codes=classify(updated))

        self.subsector.insert_world(coordinate, updated, replace_existing=True)
        return updated


def _is_code(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool)
