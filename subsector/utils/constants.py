"""Subsector configuration constants and rule bounds."""

# Grid dimensions (standard subsector layout)
GRID_COLUMNS = 8
GRID_ROWS = 10
MAX_GRID_DIMENSION = 99  # Coordinates render as two digits per axis

# Occupancy: one die plus world-abundance DM, world present on 4+
OCCUPANCY_DICE = 1
OCCUPANCY_THRESHOLD = 4

# World-abundance presets (DM applied to the occupancy roll)
WORLD_ABUNDANCE = {
    "rift": -2,
    "sparse": -1,
    "nominal": 0,
    "dense": 1,
    "abundant": 2,
}

# Inclusive bounds for every numeric world field
UWP_BOUNDS = {
    "size": (0, 10),
    "atmosphere": (0, 15),
    "hydrographics": (0, 10),
    "population": (0, 10),
    "population_digit": (0, 9),
    "government": (0, 13),
    "law_level": (0, 15),
    "tech_level": (0, 15),
    "gas_giants": (0, 4),
    "belts": (0, 3),
    "diameter": (0, 16200),
    "berthing_cost": (0, 6000),
    "culture": (0, 36),  # Index into the cultural-differences table, 0 is blank
}

# World tags: two per world, each an index into the world-tag table (0 is blank)
WORLD_TAG_BOUNDS = (0, 60)
WORLD_TAGS_PER_WORLD = 2

# Local factions: 1d3 per populated world; strength is the 2d6 table roll
WORLD_FACTION_DICE = 3
WORLD_FACTION_STRENGTH_BOUNDS = (2, 12)
WORLD_FACTION_NAME = "Unnamed"

# Serialized document format
SCHEMA_VERSION = 1
VARIANT_FULL = "full"
VARIANT_PLAYER_SAFE = "player_safe"

# Testing
RNG_SEED_DEFAULT = 42  # Default seed for testing
