from __future__ import annotations

"""Design tokens for the measurement sheet.

- Olive and gold carry the atelier brand; each measurement section gets its own accent.
- Sizes are in points; use reportlab.lib.units.mm where a layout value is metric.
"""

from dataclasses import dataclass
from typing import Dict

from reportlab.lib import colors


class Colors:
    olive = colors.HexColor("#8A7D3C")
    gold = colors.HexColor("#C97A1E")
    blue = colors.HexColor("#3B82F6")
    green = colors.HexColor("#229650")
    text = colors.HexColor("#1F2937")
    subtext = colors.HexColor("#6B7280")
    rule = colors.HexColor("#DBD2B0")
    grid = colors.HexColor("#E5E7EB")
    cream = colors.HexColor("#F7F6F0")
    white = colors.white


class FontSize:
    title = 18
    subtitle = 10
    date = 8.5
    heading = 12
    section = 10
    body = 9.5
    table = 9
    notes = 9
    summary = 8
    footer = 7.5


@dataclass(frozen=True)
class SectionStyle:
    accent: colors.Color
    # Background of every other body row
    alt_row: colors.Color


SECTION_STYLES: Dict[str, SectionStyle] = {
    "upper": SectionStyle(accent=Colors.olive, alt_row=Colors.cream),
    "arms": SectionStyle(accent=Colors.blue, alt_row=colors.HexColor("#EFF6FF")),
    "pants": SectionStyle(accent=Colors.green, alt_row=colors.HexColor("#F0FDF4")),
    "lower": SectionStyle(accent=Colors.gold, alt_row=colors.HexColor("#FDF8F0")),
}
