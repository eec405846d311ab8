from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.pdfgen.canvas import Canvas

logger = logging.getLogger(__name__)


# ===== Page geometry =====
PAGE_SIZE = A4
PAGE_WIDTH, PAGE_HEIGHT = PAGE_SIZE

MARGIN = 18 * mm
# Space kept free above the bottom edge for the footer
BOTTOM_MARGIN = 20 * mm
# Cursor position at the top of every continuation page
TOP_OFFSET = 20 * mm


@dataclass
class LayoutContext:
    """Cursor and page counter for a single render.

    ``y`` grows downward from the top edge of the page, in points. Use
    :meth:`pdf_y` to convert to ReportLab's bottom-up coordinates.
    ``on_page_end`` draws the footer of the page that is being closed.
    """

    canvas: Canvas
    on_page_end: Callable[["LayoutContext"], None]
    y: float = 0.0
    page: int = 1
    page_width: float = PAGE_WIDTH
    page_height: float = PAGE_HEIGHT
    margin: float = MARGIN

    @property
    def content_width(self) -> float:
        return self.page_width - 2 * self.margin

    @property
    def remaining(self) -> float:
        """Height left above the bottom margin on the current page."""
        return self.page_height - BOTTOM_MARGIN - self.y

    def pdf_y(self, offset: float = 0.0) -> float:
        return self.page_height - (self.y + offset)

    def fits(self, needed: float) -> bool:
        return self.y + needed + BOTTOM_MARGIN <= self.page_height

    def ensure_space(self, needed: float) -> bool:
        """Break the page when ``needed`` does not fit below the cursor. Returns True on a break."""
        if self.fits(needed):
            return False
        self.new_page()
        return True

    def new_page(self) -> None:
        self.on_page_end(self)
        self.canvas.showPage()
        self.page += 1
        self.y = TOP_OFFSET
        logger.debug("Page break: now on page %d", self.page)

    def finish(self) -> None:
        """Close the last page (draws its footer)."""
        self.on_page_end(self)
