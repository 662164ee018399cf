"""Tests for map glyphs and world detail views."""

from dataclasses import replace

from subsector.engine import classify, map_glyphs, map_title, world_details, world_glyph
from subsector.engine.display import DRY_WORLD_SYMBOL, WET_WORLD_SYMBOL
from subsector.models import Coordinate, Faction, Subsector, World, WorldFaction


def make_world(name="Regina", **overrides) -> World:
    values = {
        "starport": "A",
        "size": 8,
        "atmosphere": 6,
        "hydrographics": 7,
        "population": 6,
        "government": 5,
        "law_level": 6,
        "tech_level": 9,
        "population_digit": 3,
        "diameter": 12_800,
        "berthing_cost": 4000,
        "gas_giants": 1,
        "belts": 2,
    }
    values.update(overrides)
    world = World(name=name, **values)
    return replace(world, trade_codes=classify(world))


class TestWorldGlyph:
    """Test single-hex glyphs."""

    def test_labels(self):
        glyph = world_glyph(Coordinate(3, 4), make_world(naval_base=True))
        assert glyph.hex == "0304"
        assert glyph.name == "Regina"
        assert glyph.starport_tl == "A-9"
        assert glyph.profile == "A867656-9"
        assert glyph.bases == "N"
        assert glyph.gas_giant
        assert glyph.polity_class is None

    def test_wet_and_dry(self):
        assert world_glyph(Coordinate(1, 1), make_world()).world_symbol == WET_WORLD_SYMBOL
        dry = make_world(hydrographics=3)
        assert world_glyph(Coordinate(1, 1), dry).world_symbol == DRY_WORLD_SYMBOL

    def test_zone_colors(self):
        assert world_glyph(Coordinate(1, 1), make_world()).zone_color is None
        amber = make_world(travel_zone="amber")
        assert world_glyph(Coordinate(1, 1), amber).zone_color == "amber"
        red = make_world(travel_zone="red")
        assert world_glyph(Coordinate(1, 1), red).zone_color == "red"

    def test_no_gas_giant(self):
        assert not world_glyph(Coordinate(1, 1), make_world(gas_giants=0)).gas_giant


class TestMapGlyphs:
    """Test whole-map glyph lists."""

    def setup_method(self):
        self.a = Coordinate(2, 1)
        self.b = Coordinate(1, 5)
        self.subsector = Subsector(
            name="Regina",
            worlds={self.a: make_world("Alpha"), self.b: make_world("Beta")},
        )

    def test_column_major(self):
        assert [g.hex for g in map_glyphs(self.subsector)] == ["0105", "0201"]

    def test_first_faction_colors_hex(self):
        self.subsector.add_faction(Faction("Imperium", "gold", [self.a]))
        self.subsector.add_faction(Faction("Zhodani", "violet", [self.a, self.b]))
        glyphs = {g.hex: g for g in map_glyphs(self.subsector)}
        assert glyphs["0201"].polity_class == "hex-color-gold"
        assert glyphs["0105"].polity_class == "hex-color-violet"

    def test_title(self):
        assert map_title(self.subsector) == "Regina Subsector"

    def test_empty_subsector(self):
        assert map_glyphs(Subsector(name="Void")) == []


class TestWorldDetails:
    """Test the detail view."""

    def test_lines(self):
        details = world_details(make_world(scout_base=True))
        assert details["Name"] == "Regina"
        assert details["UWP"] == "A867656-9"
        assert details["Starport"].startswith("Class A (Refined fuel")
        assert details["Berthing Cost"] == "Cr4,000"
        assert details["Size"].startswith("8 (12,800 km")
        assert details["Atmosphere"] == "6 (Standard)"
        assert details["Hydrographics"] == "7 (70% water)"
        assert details["Population"] == "6 (3,000,000 inhabitants)"
        assert details["Bases"] == "S"
        assert details["Trade Codes"] == "Agricultural, Garden, Non-Industrial, Rich"
        assert details["Travel Zone"] == "None"
        assert details["PBG"] == "321"

    def test_local_color(self):
        world = make_world(
            culture=2,
            world_tags=(1, 58),
            factions=[WorldFaction(strength=8, government=5, name="Guild")],
        )
        details = world_details(world)
        assert details["Culture"] == "Religious"
        assert details["World Tags"] == "Abandoned Colony, Trade Hub"
        assert details["Factions"] == "Guild (Notable group, Feudal Technocracy)"

    def test_blank_local_color(self):
        details = world_details(make_world())
        assert details["Culture"] == "None"
        assert details["World Tags"] == "None, None"
        assert details["Factions"] == "None"

    def test_no_trade_codes(self):
        world = replace(make_world(), trade_codes=frozenset())
        assert world_details(world)["Trade Codes"] == "None"

    def test_keys_are_ordered(self):
        keys = list(world_details(make_world()))
        assert keys[:3] == ["Name", "UWP", "Starport"]
        assert keys[-1] == "PBG"
