"""Display primitives for map rendering and world detail views.

Pure mappings from model values to labels, symbol ids and colour classes.
Drawing them is left to whatever renders the map.
"""

from dataclasses import dataclass

from ..models import Coordinate, Subsector, TravelZone, World, WorldFaction
from . import tables

DRY_WORLD_SYMBOL = "DryWorldSymbol"
WET_WORLD_SYMBOL = "WetWorldSymbol"
GAS_GIANT_SYMBOL = "GasGiantSymbol"

ZONE_COLORS = {
    TravelZone.NONE: None,
    TravelZone.AMBER: "amber",
    TravelZone.RED: "red",
}


@dataclass(frozen=True)
class MapGlyph:
    """Everything drawn in one occupied hex."""

    hex: str
    name: str
    starport_tl: str  # e.g. "A-9"
    profile: str
    world_symbol: str
    gas_giant: bool
    bases: str
    zone_color: str | None
    polity_class: str | None


def world_glyph(coordinate: Coordinate, world: World, polity_class: str | None = None) -> MapGlyph:
    return MapGlyph(
        hex=str(coordinate),
        name=world.name,
        starport_tl=f"{world.starport.value}-{world.tech_level}",
        profile=world.profile,
        world_symbol=WET_WORLD_SYMBOL if world.is_wet_world else DRY_WORLD_SYMBOL,
        gas_giant=world.has_gas_giant,
        bases=world.bases_code,
        zone_color=ZONE_COLORS[world.travel_zone],
        polity_class=polity_class,
    )


def map_glyphs(subsector: Subsector) -> list[MapGlyph]:
    """Glyphs for every occupied hex in column-major order.

    A hex claimed by several factions takes the colour of the first one.
    """
    glyphs = []
    for coordinate in subsector.occupied():
        owners = subsector.factions_for(coordinate)
        polity_class = owners[0].color.css_class if owners else None
        glyphs.append(world_glyph(coordinate, subsector.worlds[coordinate], polity_class))
    return glyphs


def map_title(subsector: Subsector) -> str:
    return f"{subsector.name} Subsector"


def world_details(world: World) -> dict[str, str]:
    """Human-readable summary of a world, one line per attribute."""
    fuel, facilities = tables.STARPORT_FACILITIES[world.starport]
    details = {
        "Name": world.name,
        "UWP": world.profile,
        "Starport": f"Class {world.starport.value} ({fuel} fuel; {facilities})",
        "Berthing Cost": f"Cr{world.berthing_cost:,}",
        "Size": f"{world.size} ({world.diameter:,} km, {world.gravity})",
        "Atmosphere": f"{world.atmosphere} ({tables.ATMOSPHERE_NAMES[world.atmosphere]})",
        "Temperature": world.temperature.value.capitalize(),
        "Hydrographics": f"{world.hydrographics} ({world.hydrographics * 10}% water)",
        "Population": f"{world.population} ({world.inhabitants:,} inhabitants)",
        "Government": f"{world.government} ({tables.GOVERNMENT_NAMES[world.government]})",
        "Law Level": str(world.law_level),
        "Tech Level": str(world.tech_level),
        "Bases": world.bases_code,
        "Trade Codes": world.trade_code_long_str or "None",
        "Travel Zone": world.travel_zone.value.capitalize(),
        "Culture": tables.CULTURAL_DIFFERENCES[world.culture],
        "World Tags": ", ".join(tables.WORLD_TAGS[tag] for tag in world.world_tags),
        "Factions": "; ".join(_faction_line(f) for f in world.factions) or "None",
        "Importance": world.importance_str,
        "PBG": world.pbg,
    }
    return details


def _faction_line(faction: WorldFaction) -> str:
    strength = tables.FACTION_STRENGTH_TABLE.lookup(faction.strength)
    return f"{faction.name} ({strength}, {tables.GOVERNMENT_NAMES[faction.government]})"
