"""Fixed-width T5 sector table export."""

from ..models import Coordinate, Subsector, World

UWP_REFERENCE = r"""# UWP Reference Diagram:
#
#      ,- Starport
#     |  ,- Atmosphere
#     | |  ,- Population
#     | | |  ,- Law Level
#     | | | |
#     CA6A643-9
#      | | |  |
#      | | |   `- Tech Level
#      | |  `- Government
#      |  `- Hydrographics
#       `- Size"""

HEADERS = ("Name", "Hex", "UWP", "Bases", "Remarks", "Zone", "PBG", "A", "Stellar")
COLUMN_SEPARATOR = "  "
NO_ALLEGIANCE = "Na"


def table_row(coordinate: Coordinate, world: World) -> tuple[str, ...]:
    return (
        world.name,
        str(coordinate),
        world.profile,
        world.bases_code,
        world.trade_code_str,
        world.travel_zone.code,
        world.pbg,
        NO_ALLEGIANCE,
        "",
    )


def sector_table(subsector: Subsector) -> str:
    """Render the subsector as a T5 column-delimited table.

    Each column is padded to its longest entry (header included) and
    separated by two spaces. Rows follow column-major hex order and the
    UWP legend closes the table.
    """
    rows = [table_row(c, subsector.worlds[c]) for c in subsector.occupied()]
    widths = [
        max([len(header)] + [len(row[i]) for row in rows]) for i, header in enumerate(HEADERS)
    ]

    def line(cells) -> str:
        return COLUMN_SEPARATOR.join(cell.ljust(width) for cell, width in zip(cells, widths))

    lines = [line(HEADERS), line("-" * width for width in widths)]
    lines.extend(line(row).rstrip() for row in rows)
    return "\n".join(lines) + "\n\n" + UWP_REFERENCE
