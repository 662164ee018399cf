"""Generation and mutation engine for subsectors."""

from .display import MapGlyph, map_glyphs, map_title, world_details, world_glyph
from .editor import EDITABLE_FIELDS, REROLLABLE_FIELDS, SubsectorEditor
from .generator import generate_subsector, generate_with, resolve_abundance
from .projection import project_player_safe
from .sector_table import sector_table
from .trade_codes import TRADE_CODE_FIELDS, TRADE_RULES, check_trade_codes, classify
from .world_factory import create_world

__all__ = [
    "MapGlyph",
    "map_glyphs",
    "map_title",
    "world_details",
    "world_glyph",
    "EDITABLE_FIELDS",
    "REROLLABLE_FIELDS",
    "SubsectorEditor",
    "generate_subsector",
    "generate_with",
    "resolve_abundance",
    "project_player_safe",
    "sector_table",
    "TRADE_CODE_FIELDS",
    "TRADE_RULES",
    "check_trade_codes",
    "classify",
    "create_world",
]
