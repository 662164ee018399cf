"""Tests for the UWP derivation pipeline and its rule tables."""

import pytest

from subsector.engine import tables, uwp
from subsector.models import StarportClass, Temperature, TravelZone
from subsector.utils import UWP_BOUNDS, WORLD_TAG_BOUNDS, DiceRNG

SEEDS = range(200)


class TestTables:
    """Test table lookups."""

    def test_starport_brackets(self):
        assert tables.STARPORT_TABLE.lookup(-5) is StarportClass.X
        assert tables.STARPORT_TABLE.lookup(2) is StarportClass.X
        assert tables.STARPORT_TABLE.lookup(3) is StarportClass.E
        assert tables.STARPORT_TABLE.lookup(7) is StarportClass.C
        assert tables.STARPORT_TABLE.lookup(11) is StarportClass.A
        assert tables.STARPORT_TABLE.lookup(20) is StarportClass.A

    def test_temperature_brackets(self):
        assert tables.TEMPERATURE_TABLE.lookup(0) is Temperature.FROZEN
        assert tables.TEMPERATURE_TABLE.lookup(7) is Temperature.TEMPERATE
        assert tables.TEMPERATURE_TABLE.lookup(18) is Temperature.ROASTING

    def test_spread(self):
        assert tables.spread(((1, 2), 5), ((3,), -1)) == {1: 5, 2: 5, 3: -1}

    def test_faction_strength_brackets(self):
        assert tables.FACTION_STRENGTH_TABLE.lookup(2) == "Obscure group"
        assert tables.FACTION_STRENGTH_TABLE.lookup(7) == "Minor group"
        assert tables.FACTION_STRENGTH_TABLE.lookup(12) == "Overwhelming popular support"

    def test_index_tables_match_bounds(self):
        assert len(tables.CULTURAL_DIFFERENCES) == UWP_BOUNDS["culture"][1] + 1
        assert len(tables.WORLD_TAGS) == WORLD_TAG_BOUNDS[1] + 1
        assert tables.CULTURAL_DIFFERENCES[0] == tables.WORLD_TAGS[0] == "None"


class TestModifiers:
    """Test DM calculations."""

    def test_population_dm_garden_world(self):
        # base -2, standard atmosphere +3
        assert uwp.population_dm(size=6, atmosphere=6, hydrographics=7) == 1

    def test_population_dm_airless_rock(self):
        # base -2, small -1, no water with thin air -2
        assert uwp.population_dm(size=1, atmosphere=0, hydrographics=0) == -5

    def test_tech_level_dm(self):
        # class A +6, government 5 +1
        assert uwp.tech_level_dm(StarportClass.A, 8, 6, 7, 6, 5) == 7
        # class X -4, size 0 +2, atmosphere 0 +1, hydrographics 0 +1, government 0 +1
        assert uwp.tech_level_dm(StarportClass.X, 0, 0, 0, 0, 0) == 1


class TestRolls:
    """Test individual roll functions."""

    def test_skipped_rolls_consume_nothing(self):
        """Fixed-by-rule values leave the stream untouched."""
        rng = DiceRNG(42)
        state = rng.get_state()
        assert uwp.roll_atmosphere(rng, size=0) == 0
        assert uwp.roll_hydrographics(rng, size=0, atmosphere=0) == 0
        assert uwp.roll_hydrographics(rng, size=1, atmosphere=3) == 0
        assert uwp.roll_population_digit(rng, population=0) == 0
        assert uwp.roll_government(rng, population=0) == 0
        assert uwp.roll_law_level(rng, government=0) == 0
        assert uwp.roll_world_factions(rng, population=0, government=0) == []
        assert uwp.roll_berthing_cost(rng, StarportClass.X) == 0
        assert rng.get_state() == state

    def test_rolls_stay_in_bounds(self):
        for seed in SEEDS:
            rng = DiceRNG(seed)
            size = uwp.roll_size(rng)
            atmosphere = uwp.roll_atmosphere(rng, size)
            hydrographics = uwp.roll_hydrographics(rng, size, atmosphere)
            population = uwp.roll_population(rng, size, atmosphere, hydrographics)
            government = uwp.roll_government(rng, population)
            law_level = uwp.roll_law_level(rng, government)
            for name, value in (
                ("size", size),
                ("atmosphere", atmosphere),
                ("hydrographics", hydrographics),
                ("population", population),
                ("government", government),
                ("law_level", law_level),
            ):
                lower, upper = UWP_BOUNDS[name]
                assert lower <= value <= upper, f"{name}={value} (seed {seed})"

    def test_diameter_follows_size(self):
        rng = DiceRNG(1)
        for size in range(11):
            diameter = uwp.roll_diameter(rng, size)
            nominal = size * 1600 if size else 800
            assert nominal - 200 <= diameter <= nominal + 200

    def test_size_zero_always_has_belt(self):
        for seed in SEEDS:
            assert uwp.roll_belts(DiceRNG(seed), size=0) >= 1

    def test_gas_giant_count(self):
        counts = {uwp.roll_gas_giants(DiceRNG(seed)) for seed in SEEDS}
        assert counts <= set(range(0, 5))
        assert 0 in counts
        assert counts & {1, 2, 3, 4}

    def test_berthing_cost_scale(self):
        for seed in range(20):
            cost = uwp.roll_berthing_cost(DiceRNG(seed), StarportClass.A)
            assert cost in {1000, 2000, 3000, 4000, 5000, 6000}

    def test_bases_class_a(self):
        """Class A always has a TAS hostel and never a pirate base."""
        for seed in SEEDS:
            bases = uwp.roll_bases(DiceRNG(seed), StarportClass.A, government=5)
            assert bases["tas"]
            assert not bases["pirate_base"]

    def test_no_naval_base_without_government(self):
        for seed in SEEDS:
            bases = uwp.roll_bases(DiceRNG(seed), StarportClass.A, government=0)
            assert not bases["naval_base"]

    def test_frontier_port_has_no_official_bases(self):
        for seed in SEEDS:
            bases = uwp.roll_bases(DiceRNG(seed), StarportClass.E, government=4)
            assert not any(bases[name] for name in ("naval_base", "scout_base", "research_base", "tas"))


class TestLocalColor:
    """Test factions, culture and world tags."""

    def test_faction_count_follows_government(self):
        counts = {
            government: {
                len(uwp.roll_world_factions(DiceRNG(seed), 6, government)) for seed in SEEDS
            }
            for government in (0, 5, 12)
        }
        assert counts[5] == {1, 2, 3}
        assert counts[0] == {2, 3, 4}
        assert counts[12] == {0, 1, 2}

    def test_faction_rolls(self):
        for seed in SEEDS:
            for faction in uwp.roll_world_factions(DiceRNG(seed), 8, 4):
                assert faction.name == "Unnamed"
                assert 2 <= faction.strength <= 12
                assert 2 <= faction.government <= 12

    def test_culture_never_blank(self):
        cultures = {uwp.roll_culture(DiceRNG(seed)) for seed in SEEDS}
        assert 0 not in cultures
        assert cultures <= set(range(1, 37))

    def test_two_world_tags(self):
        for seed in SEEDS:
            tags = uwp.roll_world_tags(DiceRNG(seed))
            assert len(tags) == 2
            assert all(1 <= tag <= WORLD_TAG_BOUNDS[1] for tag in tags)

    def test_pipeline_rolls_local_color(self):
        values = uwp.run_pipeline(DiceRNG(5), {"population": 7, "government": 5})
        assert 1 <= len(values["factions"]) <= 3
        assert values["culture"] >= 1
        assert len(values["world_tags"]) == 2


class TestTravelZone:
    """Test travel zone rules."""

    def test_none(self):
        assert uwp.resolve_travel_zone(6, 5, 5) is TravelZone.NONE
        assert uwp.resolve_travel_zone(6, 5, 8) is TravelZone.NONE

    @pytest.mark.parametrize(
        "atmosphere,government,law_level",
        [(10, 5, 5), (6, 7, 5), (6, 0, 5), (6, 10, 5), (6, 5, 0), (6, 5, 9)],
    )
    def test_amber(self, atmosphere, government, law_level):
        assert uwp.resolve_travel_zone(atmosphere, government, law_level) is TravelZone.AMBER


class TestPipeline:
    """Test the full pipeline."""

    def test_deterministic(self):
        assert uwp.run_pipeline(DiceRNG(99)) == uwp.run_pipeline(DiceRNG(99))

    def test_fixed_values_are_kept(self):
        values = uwp.run_pipeline(DiceRNG(3), {"size": 7, "population": 9})
        assert values["size"] == 7
        assert values["population"] == 9
        assert values["population_digit"] >= 1

    def test_fixed_size_zero(self):
        for seed in range(50):
            values = uwp.run_pipeline(DiceRNG(seed), {"size": 0})
            assert values["atmosphere"] == 0
            assert values["hydrographics"] == 0
            assert values["belts"] >= 1

    def test_fully_fixed_consumes_nothing(self):
        complete = uwp.run_pipeline(DiceRNG(8))
        rng = DiceRNG(1234)
        state = rng.get_state()
        fixed = {key: value for key, value in complete.items() if key != "travel_zone"}
        assert uwp.run_pipeline(rng, fixed) == complete
        assert rng.get_state() == state

    def test_travel_zone_derived(self):
        for seed in range(50):
            values = uwp.run_pipeline(DiceRNG(seed))
            expected = uwp.resolve_travel_zone(
                values["atmosphere"], values["government"], values["law_level"]
            )
            assert values["travel_zone"] is expected

    def test_reroll_population_includes_dependents(self):
        values = uwp.run_pipeline(DiceRNG(5))
        changes = uwp.reroll(DiceRNG(6), "population", values)
        assert set(changes) == {"population", "population_digit", "factions"}

    def test_reroll_bases(self):
        values = uwp.run_pipeline(DiceRNG(5))
        changes = uwp.reroll(DiceRNG(6), "bases", values)
        assert set(changes) == set(uwp.BASE_FIELDS)

    def test_reroll_unknown_field(self):
        with pytest.raises(KeyError):
            uwp.reroll(DiceRNG(1), "name", {})
