"""Data model classes and constants for the photo album layout engine.

Page layout math happens in device pixels at the album's dpi; print sheet
packing happens in millimetres.
"""

import math
from dataclasses import dataclass, field, fields
from pathlib import PurePath

from units import mm_to_px


# === Constants ===
DEFAULT_DPI = 300
MIN_SCALE = 0.6
MAX_SCALE = 1.8

DEFAULT_SHEET_MARGIN_MM = 10.0
DEFAULT_SHEET_GAP_MM = 5.0

PORTRAIT = "portrait"
LANDSCAPE = "landscape"

# Standard sheet sizes as (name, width_mm, height_mm), portrait
PAPER_SIZES = [
    ("A4 (210 × 297 mm)", 210, 297),
    ("A3 (297 × 420 mm)", 297, 420),
    ("A5 (148 × 210 mm)", 148, 210),
    ("US Letter (8.5 × 11 in)", 215.9, 279.4),
]
A4 = (210, 297)


def round_half_up(value: float) -> int:
    """Round .5 away from the floor, unlike Python's banker's rounding."""
    return math.floor(value + 0.5)


class InvalidPageGeometry(ValueError):
    """Album settings leave no room for the photo, or are out of range."""


# === Configuration ===

@dataclass
class PageGeometry:
    """Album page size, padding and caption share, in pixels."""
    album_width_px: int
    album_height_px: int
    padding_px: int
    text_area_percent: float


@dataclass
class AlbumSettings:
    """User-facing album settings, in physical units."""
    album_width_mm: float = 200.0
    album_height_mm: float = 200.0
    padding_mm: float = 5.0
    text_area_percent: float = 20.0    # Share of page height kept for captions
    dpi: int = DEFAULT_DPI
    paper_size_index: int = 0          # Index into PAPER_SIZES
    sheet_margin_mm: float = DEFAULT_SHEET_MARGIN_MM
    sheet_gap_mm: float = DEFAULT_SHEET_GAP_MM

    @property
    def album_width_px(self) -> int:
        return round_half_up(mm_to_px(self.album_width_mm, self.dpi))

    @property
    def album_height_px(self) -> int:
        return round_half_up(mm_to_px(self.album_height_mm, self.dpi))

    @property
    def padding_px(self) -> int:
        return round_half_up(mm_to_px(self.padding_mm, self.dpi))

    @property
    def sheet_size(self) -> tuple[float, float]:
        _, w, h = PAPER_SIZES[self.paper_size_index]
        return w, h

    def page_geometry(self) -> PageGeometry:
        return PageGeometry(
            album_width_px=self.album_width_px,
            album_height_px=self.album_height_px,
            padding_px=self.padding_px,
            text_area_percent=self.text_area_percent,
        )

    def validate(self):
        """Raise InvalidPageGeometry unless every page of the batch can hold a photo."""
        if self.dpi <= 0:
            raise InvalidPageGeometry(f"dpi must be positive, got {self.dpi}")
        if self.album_width_mm <= 0 or self.album_height_mm <= 0:
            raise InvalidPageGeometry(
                f"album size must be positive, got {self.album_width_mm} x {self.album_height_mm} mm")
        if self.padding_mm < 0:
            raise InvalidPageGeometry(f"padding must not be negative, got {self.padding_mm} mm")
        if not 0 <= self.text_area_percent < 100:
            raise InvalidPageGeometry(
                f"text area must be in [0, 100) percent, got {self.text_area_percent}")
        if not 0 <= self.paper_size_index < len(PAPER_SIZES):
            raise InvalidPageGeometry(f"unknown paper size index {self.paper_size_index}")

        g = self.page_geometry()
        text_h = round_half_up(g.text_area_percent / 100 * g.album_height_px)
        draw_w = g.album_width_px - 2 * g.padding_px
        draw_h = g.album_height_px - text_h - 2 * g.padding_px
        if draw_w <= 0 or draw_h <= 0:
            raise InvalidPageGeometry(
                f"padding and text area leave no drawable area ({draw_w} x {draw_h} px)")


# === Layout ===

@dataclass(frozen=True)
class Layout:
    """Placement of one photo inside its album page.

    ``target_*`` is the scaled photo size and ``offset_*`` its top-left
    corner relative to the drawable rectangle (never positive, so the photo
    always covers the rectangle). ``scale`` is the user zoom, 1.0 being the
    automatic cover fit.
    """
    album_width_px: int
    album_height_px: int
    padding_px: int
    text_area_percent: float
    text_area_height: int
    draw_width: int
    draw_height: int
    base_target_width: int
    base_target_height: int
    base_offset_x: float
    base_offset_y: float
    target_width: int
    target_height: int
    offset_x: float
    offset_y: float
    scale: float = 1.0

    @property
    def geometry(self) -> PageGeometry:
        return PageGeometry(self.album_width_px, self.album_height_px,
                            self.padding_px, self.text_area_percent)

    def as_dict(self) -> dict:
        return {f.name: getattr(self, f.name) for f in fields(self)}


# === Print sheets ===

@dataclass(frozen=True)
class PrintSheetLayout:
    """Grid of album pages on one print sheet (millimetres)."""
    width: float
    height: float
    orientation: str
    margin_mm: float
    gap_mm: float
    columns: int
    rows: int
    capacity: int = field(init=False)

    def __post_init__(self):
        object.__setattr__(self, "capacity", self.columns * self.rows)


@dataclass
class PlacedPage:
    """An album page with its cell on the sheet (mm from the top-left corner)."""
    page_index: int
    x: float
    y: float
    width: float
    height: float


# === Album content ===

@dataclass
class AlbumPhoto:
    """A source photo as the user supplied it."""
    data: bytes
    name: str
    pixel_width: int
    pixel_height: int


@dataclass
class PageState:
    """One album page: the source photo, its current layout and the edited render."""
    photo: AlbumPhoto
    layout: Layout
    print_data: bytes | None = None  # Rendered page, set by the compositor

    @property
    def prepared_name(self) -> str:
        return f"prepared-{PurePath(self.photo.name).stem}.jpg"


@dataclass
class AlbumProject:
    """Full project state. Pickle-serializable."""
    pages: list[PageState] = field(default_factory=list)
    settings: AlbumSettings = field(default_factory=AlbumSettings)
