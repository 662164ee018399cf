"""UWP derivation pipeline.

Each roll function takes the dice stream plus the already-determined
attributes it depends on. Rolls skipped by an edge-case rule (no atmosphere
on a size 0 body, no government without population) return the fixed value
without touching the stream, so a re-roll elsewhere never shifts them.
"""

from dataclasses import dataclass
from typing import Callable

from ..models import StarportClass, Temperature, TravelZone, WorldFaction
from ..utils import (
    OCCUPANCY_DICE,
    OCCUPANCY_THRESHOLD,
    UWP_BOUNDS,
    WORLD_FACTION_DICE,
    WORLD_TAG_BOUNDS,
    WORLD_TAGS_PER_WORLD,
    DiceRNG,
    clamp,
)
from . import tables


def roll_occupancy(rng: DiceRNG, abundance_dm: int = 0) -> bool:
    """Roll whether a hex holds a world."""
    return rng.roll(OCCUPANCY_DICE, 6) + abundance_dm >= OCCUPANCY_THRESHOLD


def roll_size(rng: DiceRNG) -> int:
    return rng.roll_2d6_with_dm(tables.SIZE_DM, *UWP_BOUNDS["size"])


def roll_diameter(rng: DiceRNG, size: int) -> int:
    """Diameter in km, scattered around the nominal value for size."""
    nominal = size * tables.DIAMETER_PER_SIZE if size > 0 else tables.SMALL_BODY_DIAMETER
    return nominal + rng.randint(-tables.DIAMETER_SPREAD, tables.DIAMETER_SPREAD)


def roll_atmosphere(rng: DiceRNG, size: int) -> int:
    if size == 0:
        return 0
    return rng.roll_2d6_with_dm(tables.ATMOSPHERE_DM + size, *UWP_BOUNDS["atmosphere"])


def roll_temperature(rng: DiceRNG, atmosphere: int) -> Temperature:
    return tables.TEMPERATURE_TABLE.lookup(
        rng.roll(2, 6) + tables.TEMPERATURE_DM.get(atmosphere, 0)
    )


def roll_hydrographics(rng: DiceRNG, size: int, atmosphere: int) -> int:
    if size < tables.HYDROGRAPHICS_MIN_SIZE:
        return 0
    dm = tables.HYDROGRAPHICS_DM + size + tables.HYDROGRAPHICS_ATMOSPHERE_DM.get(atmosphere, 0)
    return rng.roll_2d6_with_dm(dm, *UWP_BOUNDS["hydrographics"])


def population_dm(size: int, atmosphere: int, hydrographics: int) -> int:
    """Habitability modifier applied to the population roll."""
    dm = tables.POPULATION_DM
    dm += tables.POPULATION_SIZE_DM.get(size, 0)
    dm += tables.POPULATION_ATMOSPHERE_DM.get(atmosphere, 0)
    if hydrographics == 0 and atmosphere < 3:
        dm += tables.DRY_THIN_WORLD_DM
    return dm


def roll_population(rng: DiceRNG, size: int, atmosphere: int, hydrographics: int) -> int:
    return rng.roll_2d6_with_dm(
        population_dm(size, atmosphere, hydrographics), *UWP_BOUNDS["population"]
    )


def roll_population_digit(rng: DiceRNG, population: int) -> int:
    if population == 0:
        return 0
    return rng.roll(1, tables.POPULATION_DIGIT_SIDES)


def roll_government(rng: DiceRNG, population: int) -> int:
    if population == 0:
        return 0
    return rng.roll_2d6_with_dm(tables.GOVERNMENT_DM + population, *UWP_BOUNDS["government"])


def roll_law_level(rng: DiceRNG, government: int) -> int:
    if government == 0:
        return 0
    return rng.roll_2d6_with_dm(tables.LAW_LEVEL_DM + government, *UWP_BOUNDS["law_level"])


def roll_world_factions(rng: DiceRNG, population: int, government: int) -> list[WorldFaction]:
    """Roll the local factions of a populated world.

    Each faction gets a 2d6 strength roll and a 2d6 government roll.
    """
    if population == 0:
        return []
    dm = tables.WORLD_FACTION_COUNT_DM.get(government, 0)
    count = max(0, rng.roll(1, WORLD_FACTION_DICE) + dm)
    return [
        WorldFaction(strength=rng.roll(2, 6), government=rng.roll(2, 6))
        for _ in range(count)
    ]


def roll_culture(rng: DiceRNG) -> int:
    """Uniform pick from the cultural-differences table, never the blank entry."""
    return rng.randint(1, UWP_BOUNDS["culture"][1])


def roll_world_tags(rng: DiceRNG) -> tuple[int, ...]:
    return tuple(rng.randint(1, WORLD_TAG_BOUNDS[1]) for _ in range(WORLD_TAGS_PER_WORLD))


def roll_starport(rng: DiceRNG, population: int) -> StarportClass:
    return tables.STARPORT_TABLE.lookup(rng.roll(2, 6) + tables.STARPORT_DM + population)


def roll_berthing_cost(rng: DiceRNG, starport: StarportClass) -> int:
    base = tables.BERTHING_COST_BASE[StarportClass(starport)]
    if base == 0:
        return 0
    return rng.roll(1, 6) * base


def tech_level_dm(
    starport: StarportClass,
    size: int,
    atmosphere: int,
    hydrographics: int,
    population: int,
    government: int,
) -> int:
    """Sum of the tech level DMs contributed by each attribute."""
    attributes = {
        "size": size,
        "atmosphere": atmosphere,
        "hydrographics": hydrographics,
        "population": population,
        "government": government,
    }
    dm = tables.TECH_LEVEL_STARPORT_DM.get(StarportClass(starport), 0)
    for name, value in attributes.items():
        dm += tables.TECH_LEVEL_DM[name].get(value, 0)
    return dm


def roll_tech_level(
    rng: DiceRNG,
    starport: StarportClass,
    size: int,
    atmosphere: int,
    hydrographics: int,
    population: int,
    government: int,
) -> int:
    dm = tech_level_dm(starport, size, atmosphere, hydrographics, population, government)
    return clamp(rng.roll(tables.TECH_LEVEL_DICE, 6) + dm, *UWP_BOUNDS["tech_level"])


def roll_gas_giants(rng: DiceRNG) -> int:
    if rng.roll(2, 6) < tables.GAS_GIANT_PRESENCE:
        return 0
    return clamp(rng.roll(1, 6) + tables.GAS_GIANT_COUNT_DM, 1, UWP_BOUNDS["gas_giants"][1])


def roll_belts(rng: DiceRNG, size: int) -> int:
    """Planetoid belts; a size 0 main world always sits in one."""
    if size > 0 and rng.roll(2, 6) < tables.BELT_PRESENCE:
        return 0
    return clamp(rng.roll(1, 6) + tables.BELT_COUNT_DM, 1, UWP_BOUNDS["belts"][1])


def roll_bases(rng: DiceRNG, starport: StarportClass, government: int) -> dict[str, bool]:
    """Roll every base type the starport allows.

    Only reachable targets are rolled. A naval base needs a government, and
    pirates stay away from naval bases and class A ports.
    """
    starport = StarportClass(starport)
    bases = {
        "naval_base": False,
        "scout_base": False,
        "research_base": False,
        "tas": False,
        "pirate_base": False,
    }
    for name, target in tables.BASE_TARGETS[starport].items():
        if name == "naval_base" and government == 0:
            continue
        bases[name] = rng.roll(2, 6) >= target
    if not bases["naval_base"] and starport != StarportClass.A:
        bases["pirate_base"] = rng.roll(2, 6) >= tables.PIRATE_BASE_TARGET
    return bases


def resolve_travel_zone(atmosphere: int, government: int, law_level: int) -> TravelZone:
    """Amber for hostile atmospheres, unstable governments or extreme law."""
    if (
        atmosphere in tables.AMBER_ATMOSPHERES
        or government in tables.AMBER_GOVERNMENTS
        or law_level in tables.AMBER_LAW_LEVELS
    ):
        return TravelZone.AMBER
    return TravelZone.NONE


# =========================================================================
# PIPELINE
# =========================================================================


@dataclass(frozen=True)
class Step:
    """One stage of the pipeline: the fields it sets and how it rolls them."""

    name: str
    outputs: tuple[str, ...]
    run: Callable[[DiceRNG, dict], dict]


def _single(field: str, roller: Callable, *inputs: str) -> Step:
    def run(rng: DiceRNG, values: dict) -> dict:
        return {field: roller(rng, *(values[name] for name in inputs))}

    return Step(field, (field,), run)


BASE_FIELDS = ("naval_base", "scout_base", "research_base", "tas", "pirate_base")

PIPELINE: tuple[Step, ...] = (
    _single("size", roll_size),
    _single("diameter", roll_diameter, "size"),
    _single("atmosphere", roll_atmosphere, "size"),
    _single("temperature", roll_temperature, "atmosphere"),
    _single("hydrographics", roll_hydrographics, "size", "atmosphere"),
    _single("population", roll_population, "size", "atmosphere", "hydrographics"),
    _single("population_digit", roll_population_digit, "population"),
    _single("government", roll_government, "population"),
    _single("law_level", roll_law_level, "government"),
    _single("factions", roll_world_factions, "population", "government"),
    _single("culture", roll_culture),
    _single("world_tags", roll_world_tags),
    _single("starport", roll_starport, "population"),
    _single("berthing_cost", roll_berthing_cost, "starport"),
    _single(
        "tech_level",
        roll_tech_level,
        "starport",
        "size",
        "atmosphere",
        "hydrographics",
        "population",
        "government",
    ),
    _single("gas_giants", roll_gas_giants),
    _single("belts", roll_belts, "size"),
    Step("bases", BASE_FIELDS, lambda rng, v: roll_bases(rng, v["starport"], v["government"])),
)

STEPS_BY_NAME = {step.name: step for step in PIPELINE}

# Re-rolling one of these also re-rolls the attribute that hangs off it
FIELD_REROLLS: dict[str, tuple[str, ...]] = {
    "size": ("size", "diameter"),
    "atmosphere": ("atmosphere",),
    "temperature": ("temperature",),
    "hydrographics": ("hydrographics",),
    "population": ("population", "population_digit", "factions"),
    "government": ("government",),
    "law_level": ("law_level",),
    "factions": ("factions",),
    "culture": ("culture",),
    "world_tags": ("world_tags",),
    "starport": ("starport", "berthing_cost"),
    "tech_level": ("tech_level",),
    "gas_giants": ("gas_giants",),
    "belts": ("belts",),
    "bases": ("bases",),
}


def run_pipeline(rng: DiceRNG, fixed: dict | None = None) -> dict:
    """Derive every generated attribute in dependency order.

    Args:
        rng: Dice stream to consume
        fixed: Attribute overrides; a step whose outputs are all fixed is
            skipped without rolling, and later steps read the fixed values

    Returns:
        Mapping of attribute name to value, including travel_zone
    """
    fixed = dict(fixed or {})
    values: dict = {}
    for step in PIPELINE:
        if not all(name in fixed for name in step.outputs):
            values.update(step.run(rng, values))
        values.update({name: fixed[name] for name in step.outputs if name in fixed})
    values["travel_zone"] = fixed.get(
        "travel_zone",
        resolve_travel_zone(values["atmosphere"], values["government"], values["law_level"]),
    )
    return values


def reroll(rng: DiceRNG, field: str, values: dict) -> dict:
    """Re-roll one attribute against the current values of the others.

    Returns:
        Only the changed attributes

    Raises:
        KeyError: If the attribute cannot be re-rolled
    """
    current = dict(values)
    changes: dict = {}
    for name in FIELD_REROLLS[field]:
        update = STEPS_BY_NAME[name].run(rng, current)
        current.update(update)
        changes.update(update)
    return changes
