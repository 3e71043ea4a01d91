"""Layout engine: cover-fit placement of a photo inside an album page.

The drawable rectangle is the page minus padding on every side and minus
the caption strip at the bottom. A photo is scaled to *cover* that
rectangle (overflow is cropped) and centred; the user may then zoom in
[MIN_SCALE, MAX_SCALE] around the current centre and pan, and every
transform clamps the offsets so no background shows inside the rectangle.

All transforms take a Layout and return a new one.
"""

from dataclasses import replace

from models import Layout, MIN_SCALE, MAX_SCALE, round_half_up


def compute_layout(image_width: int, image_height: int,
                   album_width_px: int, album_height_px: int,
                   padding_px: int, text_area_percent: float) -> Layout:
    """Cover-fit *image_width* x *image_height* into the page's drawable rectangle.

    Degenerate page geometry is not rejected here; the arithmetic simply
    carries through. A zero image dimension raises ZeroDivisionError.
    """
    text_area_height = round_half_up(text_area_percent / 100 * album_height_px)
    draw_width = album_width_px - padding_px * 2
    draw_height = album_height_px - text_area_height - padding_px * 2

    # Larger ratio: fill the rectangle, crop the excess
    ratio = max(draw_width / image_width, draw_height / image_height)
    base_w = round_half_up(image_width * ratio)
    base_h = round_half_up(image_height * ratio)
    base_x = (draw_width - base_w) / 2
    base_y = (draw_height - base_h) / 2

    return Layout(
        album_width_px=album_width_px,
        album_height_px=album_height_px,
        padding_px=padding_px,
        text_area_percent=text_area_percent,
        text_area_height=text_area_height,
        draw_width=draw_width,
        draw_height=draw_height,
        base_target_width=base_w,
        base_target_height=base_h,
        base_offset_x=base_x,
        base_offset_y=base_y,
        target_width=base_w,
        target_height=base_h,
        offset_x=base_x,
        offset_y=base_y,
        scale=1.0,
    )


def clamp_offsets(layout: Layout) -> Layout:
    """Keep the photo covering the drawable rectangle.

    If the photo is smaller than the rectangle the lower bound exceeds 0
    and the offset is pinned to 0.
    """
    min_x = layout.draw_width - layout.target_width
    min_y = layout.draw_height - layout.target_height
    return replace(
        layout,
        offset_x=min(0, max(min_x, layout.offset_x)),
        offset_y=min(0, max(min_y, layout.offset_y)),
    )


def apply_scale(layout: Layout, scale_percent: float) -> Layout:
    """Zoom to *scale_percent* of the cover fit, keeping the visual centre fixed."""
    new_scale = min(MAX_SCALE, max(MIN_SCALE, scale_percent / 100))
    center_x = layout.offset_x + layout.target_width / 2
    center_y = layout.offset_y + layout.target_height / 2

    target_w = round_half_up(layout.base_target_width * new_scale)
    target_h = round_half_up(layout.base_target_height * new_scale)
    return clamp_offsets(replace(
        layout,
        scale=new_scale,
        target_width=target_w,
        target_height=target_h,
        offset_x=center_x - target_w / 2,
        offset_y=center_y - target_h / 2,
    ))


def reset_layout(layout: Layout) -> Layout:
    return clamp_offsets(replace(
        layout,
        scale=1.0,
        target_width=layout.base_target_width,
        target_height=layout.base_target_height,
        offset_x=layout.base_offset_x,
        offset_y=layout.base_offset_y,
    ))


# ------------------------------------------------------------------ #
#  Panning                                                            #
# ------------------------------------------------------------------ #

def screen_delta_to_layout(layout: Layout, dx: float, dy: float,
                           display_width: float, display_height: float) -> tuple[float, float]:
    """Convert a drag delta in screen pixels to layout pixels.

    *display_width* x *display_height* is the on-screen size of the drawable
    rectangle; previews are usually much smaller than the page.
    """
    if display_width <= 0 or display_height <= 0:
        raise ValueError(f"display size must be positive, got {display_width} x {display_height}")
    return (dx * layout.draw_width / display_width,
            dy * layout.draw_height / display_height)


def pan_layout(layout: Layout, dx: float, dy: float) -> Layout:
    """Shift the photo by a layout-space delta, then clamp."""
    return clamp_offsets(replace(
        layout,
        offset_x=layout.offset_x + dx,
        offset_y=layout.offset_y + dy,
    ))


def pan_from_screen(layout: Layout, dx: float, dy: float,
                    display_width: float, display_height: float) -> Layout:
    lx, ly = screen_delta_to_layout(layout, dx, dy, display_width, display_height)
    return pan_layout(layout, lx, ly)


# ------------------------------------------------------------------ #
#  Crop reporting                                                     #
# ------------------------------------------------------------------ #

def crop_fraction(layout: Layout) -> float:
    """Share of the scaled photo's area hidden outside the drawable rectangle."""
    photo_area = layout.target_width * layout.target_height
    if photo_area <= 0:
        return 0.0
    visible_w = min(layout.draw_width, layout.target_width)
    visible_h = min(layout.draw_height, layout.target_height)
    visible = max(0, visible_w) * max(0, visible_h)
    return 1.0 - visible / photo_area


def source_crop_box(layout: Layout, image_width: int,
                    image_height: int) -> tuple[float, float, float, float]:
    """Visible region in source pixels as a ``(left, top, right, bottom)`` box."""
    sx = image_width / layout.target_width
    sy = image_height / layout.target_height
    left = -layout.offset_x * sx
    top = -layout.offset_y * sy
    right = min(image_width, left + layout.draw_width * sx)
    bottom = min(image_height, top + layout.draw_height * sy)
    return left, top, right, bottom
