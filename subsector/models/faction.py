"""Faction (polity) data model."""

from dataclasses import dataclass, field
from enum import Enum

from .coordinate import Coordinate


class PolityColor(str, Enum):
    """Display palette for polity territory."""

    TURQUOISE = "turquoise"
    YELLOW = "yellow"
    PERIWINKLE = "periwinkle"
    RED = "red"
    BLUE = "blue"
    ORANGE = "orange"
    PEAR = "pear"
    LAVENDER = "lavender"
    GREY = "grey"
    VIOLET = "violet"
    PISTACHIO = "pistachio"
    GOLD = "gold"

    @property
    def css_class(self) -> str:
        return f"hex-color-{self.value}"


@dataclass
class Faction:
    """A polity owning or influencing worlds in the subsector.

    Worlds are held as plain coordinates and resolved against the owning
    subsector on demand. Several factions may list the same world.
    """

    name: str
    color: PolityColor = PolityColor.GREY
    worlds: list[Coordinate] = field(default_factory=list)  # Ordered, no repeats

    def __post_init__(self):
        """Validate faction data after initialization."""
        if not self.name or not self.name.strip():
            raise ValueError("Faction name cannot be empty")
        self.color = PolityColor(self.color)
        if len(set(self.worlds)) != len(self.worlds):
            raise ValueError(f"Faction {self.name!r} lists a world more than once")
