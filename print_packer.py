"""Print packer: fit album pages onto print sheets in a fixed grid.

Each sheet orientation is tried (portrait first) and the one holding more
pages wins; ties keep portrait. Pages keep their album order: sheet *k*
gets pages ``k * capacity`` to ``(k + 1) * capacity - 1``.
"""

import logging
import math

from models import (
    PrintSheetLayout, PlacedPage, A4, PORTRAIT, LANDSCAPE,
    DEFAULT_SHEET_MARGIN_MM, DEFAULT_SHEET_GAP_MM,
)

logger = logging.getLogger(__name__)


def _fit_count(space: float, item: float, gap: float) -> int:
    """Largest N with ``N * item + (N - 1) * gap <= space``, at least 1.

    A zero-size pitch has no meaningful count and yields 1.
    """
    if item + gap <= 0:
        return 1
    return max(1, math.floor((space + gap) / (item + gap)))


def _grid_for(sheet_w: float, sheet_h: float, orientation: str,
              page_w: float, page_h: float, margin: float, gap: float) -> PrintSheetLayout:
    inner_w = sheet_w - 2 * margin
    inner_h = sheet_h - 2 * margin
    return PrintSheetLayout(
        width=sheet_w,
        height=sheet_h,
        orientation=orientation,
        margin_mm=margin,
        gap_mm=gap,
        columns=_fit_count(inner_w, page_w, gap),
        rows=_fit_count(inner_h, page_h, gap),
    )


def compute_print_layout(page_width_mm: float, page_height_mm: float,
                         margin_mm: float = DEFAULT_SHEET_MARGIN_MM,
                         gap_mm: float = DEFAULT_SHEET_GAP_MM,
                         sheet: tuple[float, float] = A4) -> PrintSheetLayout:
    """Choose the sheet orientation and grid that hold the most album pages.

    A page larger than the sheet's inner area still gets a 1x1 grid; the
    overflow is the renderer's to clip.
    """
    short, long_ = sorted(sheet)
    portrait = _grid_for(short, long_, PORTRAIT,
                         page_width_mm, page_height_mm, margin_mm, gap_mm)
    landscape = _grid_for(long_, short, LANDSCAPE,
                          page_width_mm, page_height_mm, margin_mm, gap_mm)

    best = landscape if landscape.capacity > portrait.capacity else portrait
    logger.debug("Print layout for %sx%s mm pages: %s %dx%d (portrait %d, landscape %d)",
                 page_width_mm, page_height_mm, best.orientation, best.columns, best.rows,
                 portrait.capacity, landscape.capacity)
    return best


def assign_to_sheets(pages: list, capacity: int) -> list[list]:
    """Split *pages* into consecutive sheets of *capacity* pages each."""
    if capacity < 1:
        raise ValueError(f"sheet capacity must be at least 1, got {capacity}")
    return [pages[i:i + capacity] for i in range(0, len(pages), capacity)]


def place_pages(sheet: PrintSheetLayout, page_width_mm: float, page_height_mm: float,
                count: int | None = None) -> list[PlacedPage]:
    """Grid cells for one sheet, row-major from the top-left margin."""
    n = sheet.capacity if count is None else min(count, sheet.capacity)
    placed = []
    for i in range(n):
        row, col = divmod(i, sheet.columns)
        placed.append(PlacedPage(
            page_index=i,
            x=sheet.margin_mm + col * (page_width_mm + sheet.gap_mm),
            y=sheet.margin_mm + row * (page_height_mm + sheet.gap_mm),
            width=page_width_mm,
            height=page_height_mm,
        ))
    return placed
