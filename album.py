"""Album editor: owns the page collection and drives the layout engine.

Orchestrates the model, layout engine, print packer and metadata builder.
Rendering, file pickers and print documents live outside and talk to this
class with plain data.
"""

import io
import logging
import pickle

from PIL import ExifTags, Image, UnidentifiedImageError

from models import AlbumProject, AlbumSettings, AlbumPhoto, PageState, PrintSheetLayout
from layout_engine import compute_layout, apply_scale, pan_from_screen, reset_layout
from print_packer import compute_print_layout, assign_to_sheets
from metadata import build_editing_metadata
from units import px_to_mm

logger = logging.getLogger(__name__)

# EXIF orientations that turn the photo on its side (transpose, 90, transverse, 270)
_QUARTER_TURNS = {5, 6, 7, 8}


def read_photo(data: bytes, name: str) -> AlbumPhoto | None:
    """Read the header of *data* to learn its displayed size.

    Pixels are not decoded. Returns None when the bytes are not an image
    Pillow understands.
    """
    try:
        with Image.open(io.BytesIO(data)) as img:
            width, height = img.size
            # Camera photos are displayed EXIF-rotated; lay out what the user sees
            if img.getexif().get(ExifTags.Base.Orientation) in _QUARTER_TURNS:
                width, height = height, width
    except UnidentifiedImageError:
        logger.warning("Skipping %s: not a recognised image", name)
        return None
    if width <= 0 or height <= 0:
        raise ValueError(f"{name} has no pixels ({width} x {height})")
    return AlbumPhoto(data=data, name=name, pixel_width=width, pixel_height=height)


class AlbumEditor:
    """A batch of album pages sharing one page geometry."""

    def __init__(self, project: AlbumProject | None = None):
        self.project = project or AlbumProject()
        self.project.settings.validate()

    @property
    def pages(self) -> list[PageState]:
        return self.project.pages

    @property
    def settings(self) -> AlbumSettings:
        return self.project.settings

    def _layout_for(self, photo: AlbumPhoto):
        g = self.settings.page_geometry()
        return compute_layout(photo.pixel_width, photo.pixel_height,
                              g.album_width_px, g.album_height_px,
                              g.padding_px, g.text_area_percent)

    # --- Pages ---

    def add_photo(self, data: bytes, name: str) -> PageState | None:
        photo = read_photo(data, name)
        if photo is None:
            return None
        page = PageState(photo=photo, layout=self._layout_for(photo))
        self.pages.append(page)
        return page

    def add_photos(self, items) -> int:
        """Add ``(data, name)`` pairs in order; return how many were images."""
        return sum(1 for data, name in items if self.add_photo(data, name) is not None)

    def remove_page(self, index: int) -> PageState:
        return self.pages.pop(index)

    def clear(self):
        self.pages.clear()

    def apply_settings(self, settings: AlbumSettings):
        """Switch the batch to new settings.

        Pan, zoom and renders are discarded only when the page geometry
        changes; sheet-only changes keep every edit.
        """
        settings.validate()
        relayout = settings.page_geometry() != self.settings.page_geometry()
        self.project.settings = settings
        if not relayout:
            return
        for page in self.pages:
            page.layout = self._layout_for(page.photo)
            page.print_data = None
        logger.debug("Re-laid out %d pages at %d x %d px", len(self.pages),
                     settings.album_width_px, settings.album_height_px)

    # --- Interaction ---

    def scale_page(self, index: int, scale_percent: float) -> PageState:
        page = self.pages[index]
        page.layout = apply_scale(page.layout, scale_percent)
        return page

    def pan_page(self, index: int, dx: float, dy: float,
                 display_width: float, display_height: float) -> PageState:
        """Pan by a screen-space drag on a preview of the given size."""
        page = self.pages[index]
        page.layout = pan_from_screen(page.layout, dx, dy, display_width, display_height)
        return page

    def reset_page(self, index: int) -> PageState:
        page = self.pages[index]
        page.layout = reset_layout(page.layout)
        return page

    def set_print_data(self, index: int, data: bytes | None):
        """Store the compositor's render of page *index* for printing."""
        self.pages[index].print_data = data

    def metadata(self, index: int) -> dict:
        return build_editing_metadata(self.pages[index])

    # --- Print ---

    def print_layout(self) -> PrintSheetLayout:
        """Pack pages at their rendered size: whole pixels at the album dpi."""
        s = self.settings
        return compute_print_layout(px_to_mm(s.album_width_px, s.dpi),
                                    px_to_mm(s.album_height_px, s.dpi),
                                    margin_mm=s.sheet_margin_mm, gap_mm=s.sheet_gap_mm,
                                    sheet=s.sheet_size)

    def sheets(self) -> list[list[PageState]]:
        return assign_to_sheets(self.pages, self.print_layout().capacity)

    # --- Save / Load ---

    def save(self, path: str):
        with open(path, "wb") as f:
            pickle.dump(self.project, f)
        logger.info("Saved %d pages to %s", len(self.pages), path)

    @classmethod
    def load(cls, path: str) -> "AlbumEditor":
        with open(path, "rb") as f:
            proj = pickle.load(f)  # noqa: S301
        if not isinstance(proj, AlbumProject):
            raise TypeError(f"{path} is not an album project")
        logger.info("Loaded %d pages from %s", len(proj.pages), path)
        return cls(proj)
