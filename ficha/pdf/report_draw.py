from __future__ import annotations

import datetime as _dt
import logging
from pathlib import Path
from typing import Any, Callable, Iterable, List, Optional, Sequence, Tuple

from reportlab.lib.units import mm
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen.canvas import Canvas
from reportlab.platypus import Table

from ficha.core.formatting import (
    PLACEHOLDER,
    contact_line,
    fmt_file_date,
    fmt_long_date,
    slug_name,
)
from ficha.core.paths import font_path
from ficha.core.settings import Settings
from ficha.data.catalog import GROUPS, TOTAL_FIELDS, MeasurementGroup
from ficha.data.models import ClientRecord, MeasurementRecord, StudioBranding
from ficha.pdf.layout_context import PAGE_SIZE, TOP_OFFSET, LayoutContext
from ficha.pdf.table_layout import (
    Pair,
    build_measurement_table,
    count_present,
    measurement_rows,
    to_double_rows,
)
from ficha.styles.tokens import SECTION_STYLES, Colors, FontSize

logger = logging.getLogger(__name__)


# ===== Layout constants (top-down offsets) =====
HEADER_BAND_H = 36 * mm
GOLD_RULE_H = 2.5 * mm
CLIENT_TOP = 50 * mm
CLIENT_ROW_H = 6 * mm

# Client info columns
COL_L_VALUE = 28 * mm
COL_R_SHIFT = 5 * mm    # right column starts this far past the page centre
COL_R_VALUE = 32 * mm

SECTION_BAR_H = 8 * mm
SECTION_GAP = 4 * mm
TABLE_GAP = 8 * mm
LAST_TABLE_GAP = 10 * mm

SUMMARY_RESERVE = 25 * mm
SUMMARY_H = 16 * mm
SUMMARY_ADVANCE = 24 * mm

NOTES_TITLE_H = 5 * mm
NOTES_MAX_LINES = 8
NOTES_LINE_H = 4.5          # mm
NOTES_BOX_MIN = 20.0        # mm
NOTES_BOX_MAX = 50.0        # mm
NOTES_INSET = 5 * mm

FOOTER_Y = 12 * mm          # baseline, from the bottom edge
FOOTER_RULE_GAP = 4 * mm

CORNER_R = 2 * mm

SUBTITLE = "Ficha Técnica de Medidas"
CONFIDENTIAL = "Ficha técnica confidencial"

Fonts = Tuple[str, str]


# ===== Helpers =====
def _register_fonts() -> Fonts:
    """Return (regular_font_name, bold_font_name)."""
    regular = "Helvetica"
    bold = "Helvetica-Bold"
    try:
        reg = font_path("NotoSans-Regular.ttf")
        bld = font_path("NotoSans-Bold.ttf")
        if reg.exists():
            pdfmetrics.registerFont(TTFont("NotoSans", str(reg)))
            regular = "NotoSans"
        if bld.exists():
            pdfmetrics.registerFont(TTFont("NotoSans-Bold", str(bld)))
            bold = "NotoSans-Bold"
    except Exception:
        logger.warning("Could not register bundled fonts; using Helvetica", exc_info=True)
        return "Helvetica", "Helvetica-Bold"
    return regular, bold


def _visible(candidates: Iterable[Tuple[bool, str, Callable[[], Any]]]) -> List[Tuple[str, str]]:
    """Keep (label, value) for candidates whose condition holds, formatting lazily."""
    return [(label, str(fmt())) for shown, label, fmt in candidates if shown]


def wrap_lines(text: str, max_width: float, font_name: str, font_size: float) -> List[str]:
    """Greedy word wrap honouring explicit newlines; words wider than a line are hard-split."""
    width_fn = pdfmetrics.stringWidth
    lines: List[str] = []
    for paragraph in (text or "").replace("\r", "").split("\n"):
        line = ""
        for word in paragraph.split():
            trial = f"{line} {word}" if line else word
            if width_fn(trial, font_name, font_size) <= max_width:
                line = trial
                continue
            if line:
                lines.append(line)
            # Hard-split a word that cannot fit on its own
            while width_fn(word, font_name, font_size) > max_width and len(word) > 1:
                cut = len(word) - 1
                while cut > 1 and width_fn(word[:cut], font_name, font_size) > max_width:
                    cut -= 1
                lines.append(word[:cut])
                word = word[cut:]
            line = word
        lines.append(line)
    return lines


def notes_box_height(line_count: int) -> float:
    """Notes box height in mm, clamped to [20, 50] whatever the text length."""
    return max(NOTES_BOX_MIN, min(line_count * NOTES_LINE_H + 10, NOTES_BOX_MAX))


def layout_notes(text: str, max_width: float, font_name: str, font_size: float) -> Tuple[List[str], float]:
    """Return (lines to draw, box height in mm). Lines past the cap are dropped."""
    lines = wrap_lines(text, max_width, font_name, font_size)
    return lines[:NOTES_MAX_LINES], notes_box_height(len(lines))


def total_present(measure: MeasurementRecord) -> int:
    return sum(count_present(measurement_rows(g, getattr(measure, g.attr))) for g in GROUPS)


def summary_items(measure: MeasurementRecord, present: int) -> List[str]:
    items = _visible((
        (True, "Total medidas", lambda: f"{present} / {TOTAL_FIELDS}"),
        (bool(measure.fit_type), "Ajuste", lambda: measure.fit_type),
        (bool(measure.suggested_size), "Talla", lambda: measure.suggested_size),
        (bool(measure.fabric_type), "Tela", lambda: measure.fabric_type),
    ))
    return [f"{label}: {value}" for label, value in items]


def distribute_centers(count: int, x0: float, width: float) -> List[float]:
    """Centres of ``count`` items spread over ``width``: count+1 equal gaps."""
    gap = width / (count + 1)
    return [x0 + gap * k for k in range(1, count + 1)]


def footer_texts(studio: StudioBranding, year: int, page: int) -> Tuple[str, str, str]:
    """(left, centre, right) footer strings; centre is empty when the studio has no contact."""
    left = f"{studio.display_name()} © {year} — {CONFIDENTIAL}"
    centre = contact_line(studio.phone, studio.website)
    return left, centre, f"Página {page}"


def report_filename(name: Optional[str], today: _dt.date, ascii_fold: bool = False) -> str:
    return f"ficha-{slug_name(name, ascii_fold)}-{fmt_file_date(today)}.pdf"


# ===== Stages =====
def _draw_header(ctx: LayoutContext, fonts: Fonts, studio: StudioBranding, today: _dt.date) -> None:
    """Olive band with studio name, subtitle and issue date, then a thin gold rule."""
    c = ctx.canvas
    font, bold_font = fonts
    top = ctx.page_height

    c.setFillColor(Colors.olive)
    c.rect(0, top - HEADER_BAND_H, ctx.page_width, HEADER_BAND_H, stroke=0, fill=1)

    c.setFillColor(Colors.white)
    c.setFont(bold_font, FontSize.title)
    c.drawString(ctx.margin, top - 14 * mm, studio.display_name())

    c.setFont(font, FontSize.subtitle)
    c.drawString(ctx.margin, top - 21 * mm, SUBTITLE)

    c.setFont(font, FontSize.date)
    c.drawRightString(ctx.page_width - ctx.margin, top - 21 * mm, f"Emitida el {fmt_long_date(today)}")

    c.setFillColor(Colors.gold)
    c.rect(0, top - HEADER_BAND_H - GOLD_RULE_H, ctx.page_width, GOLD_RULE_H, stroke=0, fill=1)


def _client_columns(client: ClientRecord, measure: MeasurementRecord) -> Tuple[List[Tuple[str, str]], List[Tuple[str, str]]]:
    left = _visible((
        (True, "Nombre:", lambda: client.name or PLACEHOLDER),
        (bool(client.gender), "Género:", client.gender_label),
        (True, "Teléfono:", lambda: client.phone or PLACEHOLDER),
        (True, "Email:", lambda: client.email or PLACEHOLDER),
    ))
    right = _visible((
        (bool(measure.label), "Sesión:", lambda: measure.label),
        (bool(measure.fit_type), "Ajuste:", lambda: measure.fit_type),
        (bool(measure.fabric_type), "Tela:", lambda: measure.fabric_type),
        (bool(measure.suggested_size), "Talla sugerida:", lambda: measure.suggested_size),
    ))
    return left, right


def _draw_field(c: Canvas, fonts: Fonts, x_label: float, x_value: float, y: float, field: Tuple[str, str]) -> None:
    font, bold_font = fonts
    c.setFont(bold_font, FontSize.body)
    c.setFillColor(Colors.text)
    c.drawString(x_label, y, field[0])
    c.setFont(font, FontSize.body)
    c.setFillColor(Colors.subtext)
    c.drawString(x_value, y, field[1])


def _draw_client_info(ctx: LayoutContext, fonts: Fonts, client: ClientRecord, measure: MeasurementRecord) -> None:
    c = ctx.canvas
    _font, bold_font = fonts

    ctx.y = CLIENT_TOP
    c.setFillColor(Colors.text)
    c.setFont(bold_font, FontSize.heading)
    c.drawString(ctx.margin, ctx.pdf_y(), "Datos del Cliente")

    ctx.y += 2 * mm
    c.setStrokeColor(Colors.gold)
    c.setLineWidth(0.6 * mm)
    c.line(ctx.margin, ctx.pdf_y(), ctx.margin + 40 * mm, ctx.pdf_y())
    ctx.y += 6 * mm

    left, right = _client_columns(client, measure)
    col_l = ctx.margin
    col_r = ctx.page_width / 2 + COL_R_SHIFT
    for i in range(max(len(left), len(right))):
        if i < len(left):
            _draw_field(c, fonts, col_l, col_l + COL_L_VALUE, ctx.pdf_y(), left[i])
        if i < len(right):
            _draw_field(c, fonts, col_r, col_r + COL_R_VALUE, ctx.pdf_y(), right[i])
        ctx.y += CLIENT_ROW_H

    ctx.y += 6 * mm


def _draw_section_header(ctx: LayoutContext, fonts: Fonts, title: str, color, keep: float = 0.0) -> None:
    """Section bar; ``keep`` is the height that must still fit below it on the same page."""
    ctx.ensure_space(SECTION_BAR_H + SECTION_GAP + keep)
    c = ctx.canvas
    c.setFillColor(color)
    c.roundRect(ctx.margin, ctx.pdf_y(SECTION_BAR_H), ctx.content_width, SECTION_BAR_H, CORNER_R, stroke=0, fill=1)

    c.setFont(fonts[1], FontSize.section)
    c.setFillColor(Colors.white)
    c.drawString(ctx.margin + 4 * mm, ctx.pdf_y(5.8 * mm), title)

    ctx.y += SECTION_BAR_H + SECTION_GAP


def table_lead_height(canvas: Canvas, table: Table, width: float) -> float:
    """Height of the header row plus the first body row: the smallest piece split() can place."""
    table.wrapOn(canvas, width, 10 ** 6)
    return sum(table._rowHeights[:2])


def _draw_table(ctx: LayoutContext, table: Table, gap: float) -> None:
    """
    Draw a table at the cursor, continuing on new pages when it runs out of room.
    Heights come from wrapOn; the cursor ends at the drawn bottom plus ``gap``.
    """
    c = ctx.canvas
    width = ctx.content_width
    part = table
    while True:
        avail = ctx.remaining
        _w, h = part.wrapOn(c, width, avail)
        if h <= avail or ctx.y <= TOP_OFFSET:
            # Fits, or already on a fresh page where nothing more can be gained
            part.drawOn(c, ctx.margin, ctx.pdf_y(h))
            ctx.y += h
            break
        pieces = part.split(width, avail)
        if len(pieces) > 1:
            head = pieces[0]
            _w, hh = head.wrapOn(c, width, avail)
            head.drawOn(c, ctx.margin, ctx.pdf_y(hh))
            part = pieces[1]
        ctx.new_page()
    ctx.y += gap


def _draw_measurement_section(
    ctx: LayoutContext, fonts: Fonts, group: MeasurementGroup, rows: Sequence[Pair], gap: float
) -> None:
    style = SECTION_STYLES[group.attr]
    table = build_measurement_table(to_double_rows(rows), style, ctx.content_width, *fonts)
    _draw_section_header(ctx, fonts, group.heading, style.accent, keep=table_lead_height(ctx.canvas, table, ctx.content_width))
    _draw_table(ctx, table, gap)


def _draw_summary(ctx: LayoutContext, fonts: Fonts, items: Sequence[str]) -> None:
    ctx.ensure_space(SUMMARY_RESERVE)
    c = ctx.canvas
    c.setFillColor(Colors.cream)
    c.setStrokeColor(Colors.rule)
    c.setLineWidth(0.2 * mm)
    c.roundRect(ctx.margin, ctx.pdf_y(SUMMARY_H), ctx.content_width, SUMMARY_H, CORNER_R, stroke=1, fill=1)

    c.setFont(fonts[1], FontSize.summary)
    c.setFillColor(Colors.olive)
    for x, text in zip(distribute_centers(len(items), ctx.margin, ctx.content_width), items):
        c.drawCentredString(x, ctx.pdf_y(10 * mm), text)

    ctx.y += SUMMARY_ADVANCE


def _draw_notes(ctx: LayoutContext, fonts: Fonts, notes: str) -> None:
    c = ctx.canvas
    font, bold_font = fonts
    lines, box_mm = layout_notes(notes, ctx.content_width - 2 * NOTES_INSET, font, FontSize.notes)
    box_h = box_mm * mm
    ctx.ensure_space(NOTES_TITLE_H + box_h)

    c.setFont(bold_font, FontSize.section)
    c.setFillColor(Colors.text)
    c.drawString(ctx.margin, ctx.pdf_y(), "Notas Técnicas")
    ctx.y += NOTES_TITLE_H

    c.setFillColor(Colors.cream)
    c.setStrokeColor(Colors.rule)
    c.setLineWidth(0.2 * mm)
    c.roundRect(ctx.margin, ctx.pdf_y(box_h), ctx.content_width, box_h, CORNER_R, stroke=1, fill=1)

    c.setFont(font, FontSize.notes)
    c.setFillColor(Colors.subtext)
    for i, line in enumerate(lines):
        c.drawString(ctx.margin + NOTES_INSET, ctx.pdf_y(7 * mm + i * NOTES_LINE_H * mm), line)

    ctx.y += box_h + 8 * mm


def _draw_footer(ctx: LayoutContext, fonts: Fonts, studio: StudioBranding, year: int) -> None:
    c = ctx.canvas
    left, centre, right = footer_texts(studio, year, ctx.page)

    c.setStrokeColor(Colors.rule)
    c.setLineWidth(0.4 * mm)
    rule_y = FOOTER_Y + FOOTER_RULE_GAP
    c.line(ctx.margin, rule_y, ctx.page_width - ctx.margin, rule_y)

    c.setFont(fonts[0], FontSize.footer)
    c.setFillColor(Colors.subtext)
    c.drawString(ctx.margin, FOOTER_Y, left)
    if centre:
        c.drawCentredString(ctx.page_width / 2, FOOTER_Y, centre)
    c.drawRightString(ctx.page_width - ctx.margin, FOOTER_Y, right)


# ===== Public API =====
def build_report_pdf(
    out_path: Path | str,
    client: ClientRecord,
    measure: MeasurementRecord,
    studio: Optional[StudioBranding] = None,
    today: Optional[_dt.date] = None,
) -> int:
    """Draw the complete measurement sheet (A4, paginated) and return the page count."""
    out = Path(out_path)
    out.parent.mkdir(parents=True, exist_ok=True)

    studio = studio or StudioBranding()
    today = today or _dt.date.today()
    fonts = _register_fonts()

    c = Canvas(str(out), pagesize=PAGE_SIZE)
    c.setAuthor(studio.display_name())
    c.setTitle(f"Ficha técnica {client.name or ''}".strip())

    ctx = LayoutContext(canvas=c, on_page_end=lambda cx: _draw_footer(cx, fonts, studio, today.year))

    _draw_header(ctx, fonts, studio, today)
    _draw_client_info(ctx, fonts, client, measure)

    sections = [(g, measurement_rows(g, getattr(measure, g.attr))) for g in GROUPS]
    for i, (group, rows) in enumerate(sections):
        gap = LAST_TABLE_GAP if i == len(sections) - 1 else TABLE_GAP
        _draw_measurement_section(ctx, fonts, group, rows, gap)

    present = sum(count_present(rows) for _g, rows in sections)
    _draw_summary(ctx, fonts, summary_items(measure, present))

    if measure.technical_notes:
        _draw_notes(ctx, fonts, measure.technical_notes)

    ctx.finish()
    c.save()
    return ctx.page


def render_report(
    client: Any,
    measurement: Any,
    studio: Any = None,
    out_dir: Optional[Path | str] = None,
    *,
    settings: Optional[Settings] = None,
    today: Optional[_dt.date] = None,
) -> Path:
    """
    Render a client's measurement sheet to ``ficha-<name>-<DDMMYYYY>.pdf``.

    client / measurement / studio may be records or plain dicts (camelCase keys
    from the client app are accepted). Without a studio the branding from
    ``settings`` is used. Returns the path of the written file.
    """
    settings = settings or Settings()
    client_rec = ClientRecord.coerce(client)
    measure_rec = MeasurementRecord.coerce(measurement)
    studio_rec = StudioBranding.coerce(studio) if studio is not None else settings.studio()
    today = today or _dt.date.today()

    folder = Path(out_dir) if out_dir is not None else settings.resolved_output_dir()
    out_path = folder / report_filename(client_rec.name, today, settings.ascii_filenames)

    logger.info("Building measurement sheet: %s", out_path)
    pages = build_report_pdf(out_path, client_rec, measure_rec, studio_rec, today)
    logger.info("Measurement sheet built: %s (%d page(s))", out_path, pages)
    return out_path
