"""Subsector aggregate: hex grid of worlds plus factions."""

from dataclasses import dataclass, field, replace

from ..utils import SCHEMA_VERSION
from .coordinate import STANDARD_GRID, Coordinate, GridSize
from .errors import (
    DanglingReference,
    EmptyHex,
    InvalidCoordinate,
    InvalidFieldValue,
    OccupiedTarget,
)
from .faction import Faction, PolityColor
from .world import World


@dataclass
class Subsector:
    """Aggregate root holding every world and faction of one subsector.

    Absent map entries are empty hexes. Every mutating method validates its
    inputs before touching state, so a raised error leaves the subsector
    exactly as it was.
    """

    name: str
    grid: GridSize = STANDARD_GRID
    worlds: dict[Coordinate, World] = field(default_factory=dict)
    factions: list[Faction] = field(default_factory=list)
    world_abundance_dm: int = 0
    schema_version: int = SCHEMA_VERSION
    restricted: bool = False  # True for the player-safe projection

    def __post_init__(self):
        """Validate subsector invariants after initialization."""
        self._check_name(self.name)
        dm = self.world_abundance_dm
        if isinstance(dm, bool) or not isinstance(dm, int):
            raise InvalidFieldValue(f"Invalid world_abundance_dm: {dm!r} (must be an integer)")
        for coordinate in self.worlds:
            self._check_coordinate(coordinate)
        for faction in self.factions:
            self._check_references(faction.worlds)

    # =========================================================================
    # WORLD ACCESS
    # =========================================================================

    def get_world(self, coordinate: Coordinate) -> World | None:
        """Return the world at coordinate, or None for an empty hex."""
        return self.worlds.get(self._check_coordinate(coordinate))

    def world_at(self, coordinate: Coordinate) -> World:
        """Return the world at coordinate.

        Raises:
            EmptyHex: If there is no world there
        """
        world = self.get_world(coordinate)
        if world is None:
            raise EmptyHex(f"No world at {coordinate}")
        return world

    def occupied(self) -> list[Coordinate]:
        """List occupied coordinates in column-major order."""
        return sorted(self.worlds)

    def insert_world(
        self, coordinate: Coordinate, world: World, replace_existing: bool = False
    ) -> World | None:
        """Place world at coordinate.

        Args:
            coordinate: Target hex
            world: World to place
            replace_existing: Allow overwriting an occupied hex

        Returns:
            The displaced world, if any

        Raises:
            InvalidCoordinate: If coordinate is off the grid
            OccupiedTarget: If the hex is occupied and replacement was not requested
        """
        previous = self.get_world(coordinate)
        if previous is not None and not replace_existing:
            raise OccupiedTarget(f"Hex {coordinate} already holds {previous.name}")
        self.worlds[coordinate] = world
        return previous

    def remove_world(self, coordinate: Coordinate) -> World | None:
        """Remove the world at coordinate and prune faction references to it.

        Returns:
            The removed world, or None if the hex was already empty
        """
        removed = self.worlds.pop(self._check_coordinate(coordinate), None)
        if removed is not None:
            for faction in self.factions:
                if coordinate in faction.worlds:
                    faction.worlds.remove(coordinate)
        return removed

    def relocate_world(self, source: Coordinate, destination: Coordinate) -> World:
        """Move the world at source to an empty destination.

        Faction references to source are rewritten to destination, keeping
        their position in each faction's list.

        Raises:
            InvalidCoordinate: If either hex is off the grid
            EmptyHex: If there is no world at source
            OccupiedTarget: If destination already holds a world
        """
        world = self.world_at(source)
        occupant = self.get_world(destination)
        if occupant is not None:
            raise OccupiedTarget(f"Cannot move {world.name} to {destination}: {occupant.name} is there")

        del self.worlds[source]
        self.worlds[destination] = world
        for faction in self.factions:
            faction.worlds = [destination if c == source else c for c in faction.worlds]
        return world

    def rename(self, name: str) -> None:
        self._check_name(name)
        self.name = name

    # =========================================================================
    # FACTIONS
    # =========================================================================

    def add_faction(self, faction: Faction) -> int:
        """Append faction and return its index.

        Raises:
            DanglingReference: If faction lists an empty or off-grid hex
        """
        self._check_references(faction.worlds)
        self.factions.append(faction)
        return len(self.factions) - 1

    def get_faction(self, index: int) -> Faction:
        if not (0 <= index < len(self.factions)):
            raise ValueError(f"Invalid faction index: {index} (have {len(self.factions)})")
        return self.factions[index]

    def update_faction(
        self,
        index: int,
        name: str | None = None,
        color: PolityColor | str | None = None,
        worlds: list[Coordinate] | None = None,
    ) -> Faction:
        """Replace some of a faction's attributes.

        The updated faction is built and validated in full before it replaces
        the old one.
        """
        faction = self.get_faction(index)
        changes = {}
        if name is not None:
            changes["name"] = name
        if color is not None:
            changes["color"] = color
        if worlds is not None:
            self._check_references(worlds)
            changes["worlds"] = list(worlds)
        updated = replace(faction, **changes)
        self.factions[index] = updated
        return updated

    def remove_faction(self, index: int) -> Faction:
        self.get_faction(index)
        return self.factions.pop(index)

    def reorder_faction(self, index: int, new_index: int) -> None:
        """Move the faction at index so it ends up at new_index."""
        self.get_faction(index)
        self.get_faction(new_index)
        self.factions.insert(new_index, self.factions.pop(index))

    def claim_world(self, index: int, coordinate: Coordinate) -> None:
        """Add coordinate to a faction's worlds (no-op if already listed)."""
        faction = self.get_faction(index)
        self._check_references([coordinate])
        if coordinate not in faction.worlds:
            faction.worlds.append(coordinate)

    def release_world(self, index: int, coordinate: Coordinate) -> None:
        """Drop coordinate from a faction's worlds (no-op if not listed)."""
        faction = self.get_faction(index)
        if coordinate in faction.worlds:
            faction.worlds.remove(coordinate)

    def factions_for(self, coordinate: Coordinate) -> list[Faction]:
        """Factions listing coordinate, in faction order."""
        return [f for f in self.factions if coordinate in f.worlds]

    # =========================================================================
    # VALIDATION
    # =========================================================================

    def _check_coordinate(self, coordinate: Coordinate) -> Coordinate:
        if not isinstance(coordinate, Coordinate):
            raise InvalidCoordinate(f"Invalid hex: {coordinate!r}")
        return self.grid.check(coordinate)

    def _check_references(self, coordinates: list[Coordinate]) -> None:
        for coordinate in coordinates:
            self._check_coordinate(coordinate)
            if coordinate not in self.worlds:
                raise DanglingReference(f"Faction cannot reference empty hex {coordinate}")

    @staticmethod
    def _check_name(name: str) -> None:
        if not name or not name.strip():
            raise ValueError("Subsector name cannot be empty")
