"""Player-safe projection of a subsector."""

import copy
from dataclasses import replace

from ..models import GM_ONLY_BLANKS, Subsector


def project_player_safe(subsector: Subsector) -> Subsector:
    """Return a restricted copy with every GM-only field blanked.

    Notes are emptied, local factions dropped, and culture and world tags
    reset to the blank table entry. The source subsector is never modified.
    Projecting a projection returns an equal value.
    """
    projected = copy.deepcopy(subsector)
    projected.worlds = {
        coordinate: replace(world, **GM_ONLY_BLANKS)
        for coordinate, world in projected.worlds.items()
    }
    projected.restricted = True
    return projected
