"""Tests for subsector serialization."""

import json
import tempfile
from dataclasses import replace
from pathlib import Path

import pytest

from subsector.engine import SubsectorEditor, generate_subsector, project_player_safe
from subsector.models import Coordinate, SchemaMismatch, TradeCode
from subsector.utils.serialization import (
    dumps,
    load_subsector,
    loads,
    save_subsector,
    subsector_from_dict,
    subsector_to_dict,
)


def edited_subsector():
    """A generated subsector with notes, a red zone and factions."""
    editor = SubsectorEditor.from_seed(42, abundance_dm=1, name="Regina")
    first, second = editor.subsector.occupied()[:2]
    editor.edit_field(first, "notes", "Hidden ancient site")
    editor.edit_field(first, "description", "Capital of the subsector")
    editor.edit_field(second, "travel_zone", "red")
    editor.add_faction("Imperium", "gold", [first, second])
    editor.add_faction("Zhodani", "violet", [second])
    return editor.subsector


def test_save_and_load_subsector():
    """A saved subsector loads back equal, every field included."""
    subsector = edited_subsector()

    with tempfile.TemporaryDirectory() as tmpdir:
        filepath = Path(tmpdir) / "nested" / "regina.json"
        save_subsector(subsector, filepath)
        loaded = load_subsector(filepath)

    assert loaded == subsector


def test_string_round_trip():
    subsector = edited_subsector()
    assert loads(dumps(subsector)) == subsector


def test_document_shape():
    document = subsector_to_dict(edited_subsector())
    assert document["schema_version"] == 1
    assert document["variant"] == "full"
    assert document["name"] == "Regina"
    assert document["grid"] == {"columns": 8, "rows": 10}
    assert document["world_abundance_dm"] == 1
    hexes = list(document["worlds"])
    assert hexes == sorted(hexes)
    first = document["worlds"][hexes[0]]
    assert first["notes"] == "Hidden ancient site"
    assert set(first["bases"]) == {"naval_base", "scout_base", "research_base", "tas", "pirate_base"}
    assert document["factions"][0] == {
        "name": "Imperium",
        "color": "gold",
        "worlds": hexes[:2],
    }
    json.dumps(document)


def test_player_safe_round_trip():
    """The projected subsector saves as the restricted variant and loads back equal."""
    projected = project_player_safe(edited_subsector())
    document = subsector_to_dict(projected)
    assert document["variant"] == "player_safe"
    assert all("notes" not in world for world in document["worlds"].values())
    assert any(world["description"] for world in document["worlds"].values())

    loaded = loads(dumps(projected))
    assert loaded == projected
    assert loaded.restricted


def test_player_safe_with_notes_rejected():
    document = subsector_to_dict(project_player_safe(edited_subsector()))
    first = next(iter(document["worlds"].values()))
    first["notes"] = "leaked"
    with pytest.raises(SchemaMismatch, match="GM-only fields: notes"):
        subsector_from_dict(document)


def test_player_safe_with_local_color_rejected():
    document = subsector_to_dict(project_player_safe(edited_subsector()))
    first = next(iter(document["worlds"].values()))
    first["culture"] = 4
    first["world_tags"] = [1, 2]
    with pytest.raises(SchemaMismatch, match="culture, world_tags"):
        subsector_from_dict(document)


def test_local_color_document_shape():
    subsector = edited_subsector()
    document = subsector_to_dict(subsector)
    for hex_id, data in document["worlds"].items():
        world = subsector.worlds[Coordinate.parse(hex_id)]
        assert data["culture"] == world.culture
        assert data["world_tags"] == list(world.world_tags)
        assert [f["strength"] for f in data["factions"]] == [f.strength for f in world.factions]
    restricted = subsector_to_dict(project_player_safe(subsector))
    for data in restricted["worlds"].values():
        assert not {"factions", "culture", "world_tags"} & set(data)


def test_full_document_without_local_color_loads_blank():
    document = subsector_to_dict(generate_subsector(5))
    for data in document["worlds"].values():
        for key in ("factions", "culture", "world_tags"):
            del data[key]
    loaded = subsector_from_dict(document)
    for world in loaded.worlds.values():
        assert (world.factions, world.culture, world.world_tags) == ([], 0, (0, 0))


def test_stale_trade_codes_are_rederived():
    """Hand-edited files get their trade codes recomputed."""
    document = subsector_to_dict(generate_subsector(5))
    hex_id, world = next(iter(document["worlds"].items()))
    world["trade_codes"] = ["Hi", "In"]
    loaded = subsector_from_dict(document)
    reference = generate_subsector(5)
    coordinate = Coordinate.parse(hex_id)
    assert loaded.worlds[coordinate].trade_codes == reference.worlds[coordinate].trade_codes


def test_profile_edit_in_file_reclassifies():
    document = subsector_to_dict(generate_subsector(5))
    hex_id, world = next(iter(document["worlds"].items()))
    world.update(size=8, atmosphere=6, hydrographics=7, population=6, population_digit=2)
    loaded = subsector_from_dict(document)
    assert TradeCode.AG in loaded.worlds[Coordinate.parse(hex_id)].trade_codes


class TestSchemaMismatch:
    """Test rejection of unrecognized documents."""

    def setup_method(self):
        self.document = subsector_to_dict(generate_subsector(3))

    def test_unknown_version(self):
        self.document["schema_version"] = 99
        with pytest.raises(SchemaMismatch, match="schema version"):
            subsector_from_dict(self.document)

    def test_unknown_variant(self):
        self.document["variant"] = "gm_eyes_only"
        with pytest.raises(SchemaMismatch, match="variant"):
            subsector_from_dict(self.document)

    def test_missing_key(self):
        del self.document["factions"]
        with pytest.raises(SchemaMismatch, match="factions"):
            subsector_from_dict(self.document)

    def test_bad_world(self):
        first = next(iter(self.document["worlds"].values()))
        first["size"] = 42
        with pytest.raises(SchemaMismatch, match="Malformed"):
            subsector_from_dict(self.document)

    def test_missing_world_field(self):
        first = next(iter(self.document["worlds"].values()))
        del first["starport"]
        with pytest.raises(SchemaMismatch):
            subsector_from_dict(self.document)

    def test_duplicate_hex(self):
        hex_id, world = next(iter(self.document["worlds"].items()))
        self.document["worlds"][f"'{hex_id}"] = dict(world, name="Shadow")
        with pytest.raises(SchemaMismatch, match="more than once"):
            subsector_from_dict(self.document)

    def test_abundance_must_be_integer(self):
        self.document["world_abundance_dm"] = "2"
        with pytest.raises(SchemaMismatch, match="world_abundance_dm"):
            subsector_from_dict(self.document)

    def test_bad_world_faction(self):
        world = next(w for w in self.document["worlds"].values() if w["factions"])
        world["factions"][0]["strength"] = 13
        with pytest.raises(SchemaMismatch, match="faction strength"):
            subsector_from_dict(self.document)

    def test_bad_hex(self):
        world = next(iter(self.document["worlds"].values()))
        self.document["worlds"] = {"0A01": world}
        with pytest.raises(SchemaMismatch):
            subsector_from_dict(self.document)

    def test_dangling_faction(self):
        self.document["factions"] = [{"name": "Ghosts", "color": "grey", "worlds": ["0101"]}]
        self.document["worlds"].pop("0101", None)
        with pytest.raises(SchemaMismatch):
            subsector_from_dict(self.document)

    def test_not_json(self):
        with pytest.raises(SchemaMismatch, match="not valid JSON"):
            loads("{not json")

    def test_not_an_object(self):
        with pytest.raises(SchemaMismatch):
            subsector_from_dict([1, 2, 3])


def test_load_missing_file():
    with tempfile.TemporaryDirectory() as tmpdir:
        with pytest.raises(FileNotFoundError):
            load_subsector(Path(tmpdir) / "missing.json")


def test_generated_subsector_round_trip():
    for seed in range(5):
        subsector = generate_subsector(seed)
        assert loads(dumps(subsector)) == subsector


def test_description_survives_round_trip():
    subsector = generate_subsector(9)
    coordinate = subsector.occupied()[0]
    subsector.worlds[coordinate] = replace(subsector.worlds[coordinate], description="Changed")
    assert loads(dumps(subsector)).worlds[coordinate].description == "Changed"
