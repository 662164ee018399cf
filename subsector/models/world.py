"""World data model."""

from dataclasses import dataclass, field
from enum import Enum

from ..utils import (
    UWP_BOUNDS,
    WORLD_FACTION_NAME,
    WORLD_FACTION_STRENGTH_BOUNDS,
    WORLD_TAG_BOUNDS,
    WORLD_TAGS_PER_WORLD,
)
from .errors import InvalidFieldValue

# Extended hex digits used in profile strings (I and O are skipped)
EHEX_DIGITS = "0123456789ABCDEFGHJKLMNPQRSTUVWXYZ"


def ehex(value: int) -> str:
    """Render an integer as a single extended-hex digit."""
    return EHEX_DIGITS[value]


class StarportClass(str, Enum):
    """Starport quality, A (excellent) to E (frontier), X (none)."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"
    X = "X"


class TravelZone(str, Enum):
    """Travel advisory for a world."""

    NONE = "none"
    AMBER = "amber"
    RED = "red"

    @property
    def code(self) -> str:
        return {"none": "-", "amber": "A", "red": "R"}[self.value]


class Temperature(str, Enum):
    """Average surface temperature band."""

    FROZEN = "frozen"
    COLD = "cold"
    TEMPERATE = "temperate"
    HOT = "hot"
    ROASTING = "roasting"


class TradeCode(str, Enum):
    """Economic and environmental classification tags."""

    AG = "Ag"
    AS = "As"
    BA = "Ba"
    DE = "De"
    FL = "Fl"
    GA = "Ga"
    HI = "Hi"
    HT = "Ht"
    IC = "Ic"
    IN = "In"
    LO = "Lo"
    LT = "Lt"
    NA = "Na"
    NI = "Ni"
    PO = "Po"
    RI = "Ri"
    VA = "Va"
    WA = "Wa"

    @property
    def long_name(self) -> str:
        return TRADE_CODE_NAMES[self]


TRADE_CODE_NAMES = {
    TradeCode.AG: "Agricultural",
    TradeCode.AS: "Asteroid",
    TradeCode.BA: "Barren",
    TradeCode.DE: "Desert",
    TradeCode.FL: "Fluid Oceans",
    TradeCode.GA: "Garden",
    TradeCode.HI: "High Population",
    TradeCode.HT: "High Tech",
    TradeCode.IC: "Ice-Capped",
    TradeCode.IN: "Industrial",
    TradeCode.LO: "Low Population",
    TradeCode.LT: "Low Tech",
    TradeCode.NA: "Non-Agricultural",
    TradeCode.NI: "Non-Industrial",
    TradeCode.PO: "Poor",
    TradeCode.RI: "Rich",
    TradeCode.VA: "Vacuum",
    TradeCode.WA: "Water World",
}

GRAVITY_BY_SIZE = {
    0: "N/A",
    1: "0.05 G",
    2: "0.15 G",
    3: "0.25 G",
    4: "0.35 G",
    5: "0.45 G",
    6: "0.70 G",
    7: "0.90 G",
    8: "1.00 G",
    9: "1.25 G",
    10: "1.40 G",
}

# GM-only fields and the blank values a player-safe copy carries
GM_ONLY_BLANKS = {
    "notes": "",
    "factions": [],
    "culture": 0,
    "world_tags": (0,) * WORLD_TAGS_PER_WORLD,
}

# Base flags in the order their letters appear in the bases column
BASE_CODES = {
    "naval_base": "N",
    "research_base": "R",
    "scout_base": "S",
    "tas": "T",
    "pirate_base": "P",
}


def _check_code(name: str, value, lower: int, upper: int) -> None:
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidFieldValue(f"Invalid {name}: {value!r} (must be an integer)")
    if not (lower <= value <= upper):
        raise InvalidFieldValue(f"Invalid {name}: {value} (must be {lower}-{upper})")


@dataclass
class WorldFaction:
    """A local power group on one world, distinct from subsector polities.

    Strength is the 2d6 result read against the faction strength table;
    government is a government code like the world's own.
    """

    strength: int
    government: int
    name: str = WORLD_FACTION_NAME
    description: str = ""

    def __post_init__(self):
        _check_code("faction strength", self.strength, *WORLD_FACTION_STRENGTH_BOUNDS)
        _check_code("faction government", self.government, *UWP_BOUNDS["government"])
        for name in ("name", "description"):
            if not isinstance(getattr(self, name), str):
                raise InvalidFieldValue(
                    f"Invalid faction {name}: {getattr(self, name)!r} (must be text)"
                )


@dataclass
class World:
    """A star system's main world, the occupant of one hex.

    The profile fields (starport through tech level) are what the trade-code
    classifier reads; `trade_codes` must always equal the classifier's output
    for them. `notes`, `factions`, `culture` and `world_tags` are GM-only and
    are blanked by the player-safe projection; `description` is player-visible.
    Culture and world tags are table indexes where 0 is the blank entry.
    """

    name: str
    starport: StarportClass = StarportClass.X
    size: int = 0
    atmosphere: int = 0
    hydrographics: int = 0
    population: int = 0
    government: int = 0
    law_level: int = 0
    tech_level: int = 0
    population_digit: int = 0  # Inhabitants = digit x 10^population
    temperature: Temperature = Temperature.TEMPERATE
    diameter: int = 0  # km
    berthing_cost: int = 0  # credits
    gas_giants: int = 0
    belts: int = 0
    naval_base: bool = False
    scout_base: bool = False
    research_base: bool = False
    tas: bool = False  # Traveller's Aid Society hostel
    pirate_base: bool = False
    travel_zone: TravelZone = TravelZone.NONE
    factions: list = field(default_factory=list)  # WorldFaction entries
    culture: int = 0
    world_tags: tuple = (0,) * WORLD_TAGS_PER_WORLD
    trade_codes: frozenset = field(default_factory=frozenset)
    notes: str = ""  # GM-only
    description: str = ""  # Player-visible

    def __post_init__(self):
        """Validate world data after initialization."""
        try:
            self.starport = StarportClass(self.starport)
            self.temperature = Temperature(self.temperature)
            self.travel_zone = TravelZone(self.travel_zone)
            self.trade_codes = frozenset(TradeCode(code) for code in self.trade_codes)
        except ValueError as e:
            raise InvalidFieldValue(str(e)) from e

        for name, (lower, upper) in UWP_BOUNDS.items():
            _check_code(name, getattr(self, name), lower, upper)

        if not isinstance(self.world_tags, (list, tuple)) or (
            len(self.world_tags) != WORLD_TAGS_PER_WORLD
        ):
            raise InvalidFieldValue(
                f"Invalid world_tags: {self.world_tags!r} "
                f"(must be {WORLD_TAGS_PER_WORLD} tag codes)"
            )
        for tag in self.world_tags:
            _check_code("world tag", tag, *WORLD_TAG_BOUNDS)
        self.world_tags = tuple(self.world_tags)

        if not isinstance(self.factions, (list, tuple)):
            raise InvalidFieldValue(f"Invalid factions: {self.factions!r} (must be a list)")
        self.factions = [_coerce_faction(entry) for entry in self.factions]

        for name in ("name", "notes", "description"):
            if not isinstance(getattr(self, name), str):
                raise InvalidFieldValue(f"Invalid {name}: {getattr(self, name)!r} (must be text)")

        for name in BASE_CODES:
            if not isinstance(getattr(self, name), bool):
                raise InvalidFieldValue(f"Invalid {name}: {getattr(self, name)!r} (must be a bool)")

        if self.size == 0 and (self.atmosphere != 0 or self.hydrographics != 0):
            raise InvalidFieldValue(
                "Invalid size 0 world: atmosphere and hydrographics must both be 0"
            )
        if self.population == 0 and self.population_digit != 0:
            raise InvalidFieldValue(
                f"Invalid population_digit: {self.population_digit} "
                f"(must be 0 when population is 0)"
            )
        if self.population == 0 and self.factions:
            raise InvalidFieldValue("Invalid factions: an unpopulated world has none")

    @property
    def profile(self) -> str:
        """Universal World Profile string, e.g. "A867656-9"."""
        return (
            f"{self.starport.value}{ehex(self.size)}{ehex(self.atmosphere)}"
            f"{ehex(self.hydrographics)}{ehex(self.population)}{ehex(self.government)}"
            f"{ehex(self.law_level)}-{ehex(self.tech_level)}"
        )

    @property
    def bases_code(self) -> str:
        codes = "".join(code for name, code in BASE_CODES.items() if getattr(self, name))
        return codes or "-"

    @property
    def pbg(self) -> str:
        """Population digit, belts, gas giants."""
        return f"{self.population_digit}{self.belts}{self.gas_giants}"

    @property
    def trade_code_str(self) -> str:
        return " ".join(code.value for code in sorted(self.trade_codes, key=_code_order)) or "-"

    @property
    def trade_code_long_str(self) -> str:
        return ", ".join(code.long_name for code in sorted(self.trade_codes, key=_code_order))

    @property
    def has_gas_giant(self) -> bool:
        return self.gas_giants > 0

    @property
    def is_wet_world(self) -> bool:
        return self.hydrographics > 3

    @property
    def inhabitants(self) -> int:
        return self.population_digit * 10**self.population

    @property
    def gravity(self) -> str:
        return GRAVITY_BY_SIZE[self.size]

    @property
    def importance(self) -> int:
        """Importance extension value."""
        score = 0
        if self.starport in (StarportClass.A, StarportClass.B):
            score += 1
        elif self.starport in (StarportClass.D, StarportClass.E, StarportClass.X):
            score -= 1
        if self.tech_level >= 10:
            score += 1
        if self.tech_level <= 8:
            score -= 1
        score += len(
            self.trade_codes & {TradeCode.AG, TradeCode.HI, TradeCode.IN, TradeCode.RI}
        )
        if self.population <= 6:
            score -= 1
        if self.naval_base and self.scout_base:
            score += 1
        return score

    @property
    def importance_str(self) -> str:
        return f"{{ {self.importance} }}"


def _coerce_faction(entry) -> WorldFaction:
    if isinstance(entry, WorldFaction):
        return entry
    if not isinstance(entry, dict):
        raise InvalidFieldValue(f"Invalid faction: {entry!r}")
    try:
        return WorldFaction(**entry)
    except TypeError as e:
        raise InvalidFieldValue(f"Invalid faction: {entry!r}") from e


def _code_order(code: TradeCode) -> int:
    return list(TradeCode).index(code)
