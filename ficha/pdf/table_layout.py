# ficha/pdf/table_layout.py
from __future__ import annotations

from typing import Any, List, Mapping, Sequence, Tuple

from reportlab.platypus import Table, TableStyle
from reportlab.lib.units import mm

from ficha.core.formatting import PLACEHOLDER, fmt_cm
from ficha.data.catalog import MeasurementGroup
from ficha.styles.tokens import Colors, FontSize, SectionStyle

Pair = Tuple[str, str]

HEADER = ["Medida", "Valor", "Medida", "Valor"]

# Value columns are fixed; the two label columns share the remainder
COL_W_VALUE = 25 * mm

W_GRID = 0.25 * mm

PADDING_V = (3 * mm, 3 * mm)         # top, bottom (body)
PADDING_V_HEAD = (3.5 * mm, 3.5 * mm)
PADDING_H = (4 * mm, 4 * mm)         # left, right


def measurement_rows(group: MeasurementGroup, values: Mapping[str, Any] | None) -> List[Pair]:
    """(label, display) pairs in catalog order; missing values become the placeholder."""
    values = values or {}
    return [(f.label, fmt_cm(f.lookup(values))) for f in group.fields]


def count_present(rows: Sequence[Pair]) -> int:
    return sum(1 for _label, value in rows if value != PLACEHOLDER)


def to_double_rows(pairs: Sequence[Pair]) -> List[List[str]]:
    """Pack pairs two per row: [label, value, label, value]. An odd tail gets a blank right pair."""
    rows: List[List[str]] = []
    for i in range(0, len(pairs), 2):
        left = pairs[i]
        right = pairs[i + 1] if i + 1 < len(pairs) else ("", "")
        rows.append([left[0], left[1], right[0], right[1]])
    return rows


def _col_widths(content_width: float) -> list[float]:
    label = max(30 * mm, (content_width - 2 * COL_W_VALUE) / 2)
    return [label, COL_W_VALUE, label, COL_W_VALUE]


def build_measurement_table(
    body: Sequence[Sequence[str]],
    style: SectionStyle,
    content_width: float,
    font: str = "Helvetica",
    bold_font: str = "Helvetica-Bold",
) -> Table:
    """
    Build one section table.
    body: rows from to_double_rows
    style: accent (header fill) and alternating row background of the section
    content_width: usable width inside margins
    """
    data = [list(HEADER)] + [list(r) for r in body]

    t = Table(data, colWidths=_col_widths(content_width), repeatRows=1)

    ts = TableStyle()
    ts.add("GRID", (0, 0), (-1, -1), W_GRID, Colors.grid)

    # Header
    ts.add("BACKGROUND", (0, 0), (-1, 0), style.accent)
    ts.add("TEXTCOLOR", (0, 0), (-1, 0), Colors.white)
    ts.add("FONTNAME", (0, 0), (-1, 0), bold_font)
    ts.add("FONTSIZE", (0, 0), (-1, 0), FontSize.table)
    ts.add("ALIGN", (0, 0), (-1, 0), "LEFT")
    ts.add("TOPPADDING", (0, 0), (-1, 0), PADDING_V_HEAD[0])
    ts.add("BOTTOMPADDING", (0, 0), (-1, 0), PADDING_V_HEAD[1])

    # Body
    if len(data) > 1:
        ts.add("FONTNAME", (0, 1), (-1, -1), font)
        ts.add("FONTSIZE", (0, 1), (-1, -1), FontSize.table)
        ts.add("TEXTCOLOR", (0, 1), (-1, -1), Colors.text)
        ts.add("TOPPADDING", (0, 1), (-1, -1), PADDING_V[0])
        ts.add("BOTTOMPADDING", (0, 1), (-1, -1), PADDING_V[1])
        ts.add("ROWBACKGROUNDS", (0, 1), (-1, -1), [Colors.white, style.alt_row])
        # Value columns
        for col in (1, 3):
            ts.add("ALIGN", (col, 1), (col, -1), "CENTER")
            ts.add("FONTNAME", (col, 1), (col, -1), bold_font)

    ts.add("LEFTPADDING", (0, 0), (-1, -1), PADDING_H[0])
    ts.add("RIGHTPADDING", (0, 0), (-1, -1), PADDING_H[1])
    ts.add("VALIGN", (0, 0), (-1, -1), "MIDDLE")

    t.setStyle(ts)
    return t
