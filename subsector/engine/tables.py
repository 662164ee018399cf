"""Rule tables for world generation.

Tables are data, not branching code. DM tables map an attribute code to a
dice modifier (codes not listed give DM 0); bracket tables map a modified
roll onto a result. Rule revisions belong here, not in the pipeline.
"""

from dataclasses import dataclass
from typing import Any

from ..models import StarportClass, Temperature


def spread(*entries: tuple) -> dict[int, int]:
    """Build a DM table from (codes, dm) pairs."""
    table: dict[int, int] = {}
    for codes, dm in entries:
        for code in codes:
            table[code] = dm
    return table


@dataclass(frozen=True)
class BracketTable:
    """Ordered (upper bound, result) rows.

    A roll maps to the first row whose bound it does not exceed; anything
    above the last bound maps to the last row.
    """

    rows: tuple[tuple[int, Any], ...]

    def lookup(self, roll: int) -> Any:
        for upper, result in self.rows:
            if roll <= upper:
                return result
        return self.rows[-1][1]


# Size: 2d6-2
SIZE_DM = -2

# Diameter in km around size x 1600 (a size 0 body is about 800 km)
DIAMETER_PER_SIZE = 1600
SMALL_BODY_DIAMETER = 800
DIAMETER_SPREAD = 200

# Atmosphere: 2d6-7+size
ATMOSPHERE_DM = -7

TEMPERATURE_DM = spread(
    ((2, 3), -2),
    ((4, 5, 14), -1),
    ((8, 9), 1),
    ((10, 13, 15), 2),
    ((11, 12), 6),
)
TEMPERATURE_TABLE = BracketTable(
    (
        (2, Temperature.FROZEN),
        (4, Temperature.COLD),
        (9, Temperature.TEMPERATE),
        (11, Temperature.HOT),
        (12, Temperature.ROASTING),
    )
)

# Hydrographics: 2d6-7+size plus atmosphere DM; no roll for size 0 or 1
HYDROGRAPHICS_DM = -7
HYDROGRAPHICS_MIN_SIZE = 2
HYDROGRAPHICS_ATMOSPHERE_DM = spread(
    ((0, 1, 10, 11, 12), -4),
    ((14,), -2),
)

# Population: 2d6-2 plus habitability DMs
POPULATION_DM = -2
POPULATION_SIZE_DM = spread((range(0, 3), -1))
POPULATION_ATMOSPHERE_DM = spread(
    (range(10, 16), -2),
    ((6,), 3),
    ((5, 8), 1),
)
DRY_THIN_WORLD_DM = -2  # hydrographics 0 with atmosphere below 3
POPULATION_DIGIT_SIDES = 9

# Government: 2d6-7+population. Law level: 2d6-7+government
GOVERNMENT_DM = -7
LAW_LEVEL_DM = -7

# Starport: 2d6 + (population - 7)
STARPORT_DM = -7
STARPORT_TABLE = BracketTable(
    (
        (2, StarportClass.X),
        (4, StarportClass.E),
        (6, StarportClass.D),
        (8, StarportClass.C),
        (10, StarportClass.B),
        (12, StarportClass.A),
    )
)
BERTHING_COST_BASE = {
    StarportClass.A: 1000,
    StarportClass.B: 500,
    StarportClass.C: 100,
    StarportClass.D: 10,
    StarportClass.E: 0,
    StarportClass.X: 0,
}
STARPORT_FACILITIES = {
    StarportClass.A: ("Refined", "Shipyard (all), overhaul"),
    StarportClass.B: ("Refined", "Shipyard (spacecraft), overhaul"),
    StarportClass.C: ("Unrefined", "Shipyard (small craft), major repairs"),
    StarportClass.D: ("Unrefined", "Minor repairs"),
    StarportClass.E: ("None", "None"),
    StarportClass.X: ("None", "None"),
}

# Tech level: 1d6 plus one DM per attribute
TECH_LEVEL_DICE = 1
TECH_LEVEL_STARPORT_DM = {
    StarportClass.A: 6,
    StarportClass.B: 4,
    StarportClass.C: 2,
    StarportClass.X: -4,
}
TECH_LEVEL_DM = {
    "size": spread((range(0, 2), 2), (range(2, 5), 1)),
    "atmosphere": spread((range(0, 4), 1), (range(10, 16), 1)),
    "hydrographics": spread(((0, 9), 1), ((10,), 2)),
    "population": spread((range(1, 6), 1), ((9,), 1), ((10,), 2)),
    "government": spread(((0, 5), 1), ((7,), 2), ((13,), -2)),
}

# Gas giants and planetoid belts: presence on 2d6, count on 1d6 with DM (at least 1)
GAS_GIANT_PRESENCE = 5
GAS_GIANT_COUNT_DM = -2
BELT_PRESENCE = 4
BELT_COUNT_DM = -3

# Bases: 2d6 >= target; a missing entry means the base cannot exist
BASE_TARGETS = {
    StarportClass.A: {"naval_base": 8, "scout_base": 10, "research_base": 8, "tas": 2},
    StarportClass.B: {"naval_base": 8, "scout_base": 9, "research_base": 10, "tas": 2},
    StarportClass.C: {"scout_base": 8, "research_base": 10, "tas": 10},
    StarportClass.D: {"scout_base": 7},
    StarportClass.E: {},
    StarportClass.X: {},
}
PIRATE_BASE_TARGET = 12

# Travel zone: Amber when any of these hold
AMBER_ATMOSPHERES = frozenset(range(10, 16))
AMBER_GOVERNMENTS = frozenset({0, 7, 10})
AMBER_LAW_LEVELS = frozenset({0, *range(9, 16)})

ATMOSPHERE_NAMES = [
    "None",
    "Trace",
    "Very Thin, Tainted",
    "Very Thin",
    "Thin, Tainted",
    "Thin",
    "Standard",
    "Standard, Tainted",
    "Dense",
    "Dense, Tainted",
    "Exotic",
    "Corrosive",
    "Insidious",
    "Dense, High",
    "Ellipsoid",
    "Thin, Low",
]

GOVERNMENT_NAMES = [
    "None",
    "Company/Corporation",
    "Participating Democracy",
    "Self-Perpetuating Oligarchy",
    "Representative Democracy",
    "Feudal Technocracy",
    "Captive Government",
    "Balkanization",
    "Civil Service Bureaucracy",
    "Impersonal Bureaucracy",
    "Charismatic Dictator",
    "Non-Charismatic Leader",
    "Charismatic Oligarchy",
    "Religious Dictatorship",
]

# Local factions: 1d3 per populated world, one more under no government or
# balkanization, one fewer under a dictatorship or oligarchy
WORLD_FACTION_COUNT_DM = spread(
    ((0, 7), 1),
    (range(10, 14), -1),
)
FACTION_STRENGTH_TABLE = BracketTable(
    (
        (3, "Obscure group"),
        (5, "Fringe group"),
        (7, "Minor group"),
        (9, "Notable group"),
        (11, "Significant"),
        (12, "Overwhelming popular support"),
    )
)

# Cultural differences; code 0 is the blank entry
CULTURAL_DIFFERENCES = [
    "None",
    "Sexist",
    "Religious",
    "Artistic",
    "Ritualized",
    "Conservative",
    "Xenophobic",
    "Taboo",
    "Deceptive",
    "Liberal",
    "Honorable",
    "Influenced",
    "Fusion",
    "Barbaric",
    "Remnant",
    "Degenerate",
    "Progressive",
    "Recovering",
    "Nexus",
    "Tourist Attraction",
    "Violent",
    "Peaceful",
    "Obsessed",
    "Fashion",
    "At War",
    "Unusual Custom (Offworlders)",
    "Unusual Custom (Starport)",
    "Unusual Custom (Media)",
    "Unusual Custom (Technology)",
    "Unusual Custom (Lifecycle)",
    "Unusual Custom (Social Standings)",
    "Unusual Custom (Trade)",
    "Unusual Custom (Nobility)",
    "Unusual Custom (Sex)",
    "Unusual Custom (Eating)",
    "Unusual Custom (Travel)",
    "Unusual Custom (Conspiracy)",
]

# World tags; code 0 is the blank entry
WORLD_TAGS = [
    "None",
    "Abandoned Colony",
    "Alien Ruins",
    "Altered Humanity",
    "Anarchists",
    "Badlands World",
    "Bubble Cities",
    "Civil War",
    "Cold War",
    "Colonized Population",
    "Cultural Power",
    "Desert World",
    "Eugenic Cult",
    "Feral World",
    "Flying Cities",
    "Forbidden Tech",
    "Freak Geology",
    "Freak Weather",
    "Friendly Foe",
    "Gold Rush",
    "Great Work",
    "Hatred",
    "Heavy Industry",
    "Heavy Mining",
    "Hostile Biosphere",
    "Hostile Space",
    "Immortals",
    "Local Specialty",
    "Local Tech",
    "Major Spaceyard",
    "Mandarinate",
    "Megacorps",
    "Mercenaries",
    "Minimal Contact",
    "Nomads",
    "Oceanic World",
    "Out of Contact",
    "Outpost World",
    "Perimeter Agency",
    "Pilgrimage Site",
    "Police State",
    "Post-Scarcity",
    "Primitive Aliens",
    "Prison Planet",
    "Psionics Fear",
    "Quarantined World",
    "Radioactive World",
    "Refugees",
    "Regional Hegemon",
    "Restrictive Laws",
    "Revanchists",
    "Rigid Culture",
    "Sealed Menace",
    "Secret Masters",
    "Sectarians",
    "Seismic Instability",
    "Theocracy",
    "Tomb World",
    "Trade Hub",
    "Tyranny",
    "Warlords",
]
