from __future__ import annotations

from io import BytesIO

import pytest

from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas

from ficha.data.catalog import ARMS, UPPER
from ficha.pdf import report_draw
from ficha.pdf.layout_context import (
    BOTTOM_MARGIN,
    PAGE_HEIGHT,
    PAGE_SIZE,
    TOP_OFFSET,
    LayoutContext,
)
from ficha.pdf.table_layout import build_measurement_table, measurement_rows, to_double_rows
from ficha.styles.tokens import SECTION_STYLES

FONTS = ("Helvetica", "Helvetica-Bold")


def _context(footers: list[int]) -> LayoutContext:
    canvas = Canvas(BytesIO(), pagesize=PAGE_SIZE)
    return LayoutContext(canvas=canvas, on_page_end=lambda ctx: footers.append(ctx.page))


def _upper_table(width: float):
    rows = to_double_rows(measurement_rows(UPPER, {}))
    return build_measurement_table(rows, SECTION_STYLES["upper"], width)


def test_long_notes_near_bottom_move_to_next_page() -> None:
    footers: list[int] = []
    ctx = _context(footers)
    ctx.y = PAGE_HEIGHT - BOTTOM_MARGIN - 45 * mm
    notes = "\n".join(f"Ajuste de prueba número {i}" for i in range(20))

    report_draw._draw_notes(ctx, FONTS, notes)

    assert footers == [1]
    assert ctx.page == 2
    # Cursor ends 8 mm below the box; the box itself stays above the footer band
    box_bottom = ctx.y - 8 * mm
    assert box_bottom <= PAGE_HEIGHT - BOTTOM_MARGIN


def test_short_notes_stay_on_current_page() -> None:
    footers: list[int] = []
    ctx = _context(footers)
    ctx.y = PAGE_HEIGHT - BOTTOM_MARGIN - 45 * mm

    report_draw._draw_notes(ctx, FONTS, "Hombro caído")

    assert footers == []
    assert ctx.page == 1


def test_table_lead_covers_header_and_first_row() -> None:
    ctx = _context([])
    table = _upper_table(ctx.content_width)

    lead = report_draw.table_lead_height(ctx.canvas, table, ctx.content_width)

    _w, full = table.wrapOn(ctx.canvas, ctx.content_width, 10 ** 6)
    assert 18 * mm < lead < full


def test_section_heading_moves_with_its_table(monkeypatch: pytest.MonkeyPatch) -> None:
    footers: list[int] = []
    ctx = _context(footers)
    ctx.y = 247 * mm
    heading_pages: list[int] = []
    draw_header = report_draw._draw_section_header

    def record_header(ctx: LayoutContext, *args, **kwargs) -> None:
        draw_header(ctx, *args, **kwargs)
        heading_pages.append(ctx.page)

    monkeypatch.setattr(report_draw, "_draw_section_header", record_header)

    report_draw._draw_measurement_section(ctx, FONTS, ARMS, measurement_rows(ARMS, {}), report_draw.TABLE_GAP)

    assert heading_pages == [2]
    assert ctx.page == 2
    assert footers == [1]


def test_table_split_continues_on_next_page() -> None:
    footers: list[int] = []
    ctx = _context(footers)
    _w, full_height = _upper_table(ctx.content_width).wrapOn(ctx.canvas, ctx.content_width, 10 ** 6)
    ctx.y = 250 * mm

    report_draw._draw_table(ctx, _upper_table(ctx.content_width), 0)

    assert footers == [1]
    assert ctx.page == 2
    assert ctx.y > TOP_OFFSET
    # Only the remainder (repeated header plus the rows left over) landed on page 2
    assert ctx.y < TOP_OFFSET + full_height
