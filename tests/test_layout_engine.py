"""Unit tests for the cover-fit layout engine."""
from dataclasses import replace

import pytest

from layout_engine import (
    compute_layout, apply_scale, clamp_offsets, reset_layout,
    screen_delta_to_layout, pan_layout, pan_from_screen,
    crop_fraction, source_crop_box,
)
from models import MIN_SCALE, MAX_SCALE


def _landscape_layout():
    """4000 x 3000 photo on a 2000 px square page, 100 px padding, 20% caption."""
    return compute_layout(4000, 3000, 2000, 2000, 100, 20)


def _simple_layout():
    """600 x 400 photo covering a 500 x 400 drawable rectangle at ratio 1."""
    return compute_layout(600, 400, 520, 420, 10, 0)


def _assert_covers(layout):
    """Offsets stay in bounds; a photo smaller than the rectangle is pinned to 0."""
    assert min(0, layout.draw_width - layout.target_width) <= layout.offset_x <= 0
    assert min(0, layout.draw_height - layout.target_height) <= layout.offset_y <= 0


class TestComputeLayout:
    """Cover-fit placement of the photo in the drawable rectangle."""

    def test_drawable_rectangle(self):
        layout = _landscape_layout()
        assert layout.text_area_height == 400
        assert layout.draw_width == 1800
        assert layout.draw_height == 1400

    def test_cover_uses_larger_ratio(self):
        """Height is the binding side: the photo fills it and overflows horizontally."""
        layout = _landscape_layout()
        assert layout.base_target_height == 1400
        assert layout.base_target_width == 1867
        assert layout.base_target_width >= layout.draw_width

    def test_photo_is_centred(self):
        layout = _landscape_layout()
        assert layout.base_offset_x == pytest.approx(-33.5)
        assert layout.base_offset_y == pytest.approx(0)

    def test_initial_state_is_base(self):
        layout = _landscape_layout()
        assert layout.scale == 1
        assert layout.target_width == layout.base_target_width
        assert layout.target_height == layout.base_target_height
        assert layout.offset_x == layout.base_offset_x
        assert layout.offset_y == layout.base_offset_y

    def test_geometry_is_kept(self):
        g = _landscape_layout().geometry
        assert (g.album_width_px, g.album_height_px, g.padding_px, g.text_area_percent) == \
            (2000, 2000, 100, 20)

    def test_tall_photo_overflows_vertically(self):
        layout = compute_layout(300, 900, 520, 420, 10, 0)
        assert layout.target_width == 500
        assert layout.target_height == 1500
        assert layout.offset_x == 0
        assert layout.offset_y == pytest.approx(-550)

    def test_text_area_rounds_half_up(self):
        """2.5% of 100 px is 2.5 px and becomes 3, not banker's 2."""
        layout = compute_layout(100, 100, 100, 100, 0, 2.5)
        assert layout.text_area_height == 3

    def test_degenerate_geometry_is_not_rejected(self):
        layout = compute_layout(100, 100, 100, 100, 60, 0)
        assert layout.draw_width == -20

    def test_zero_size_image_is_not_guarded(self):
        with pytest.raises(ZeroDivisionError):
            compute_layout(0, 100, 100, 100, 0, 0)


class TestApplyScale:
    """Zoom around the visual centre, within the scale bounds."""

    @pytest.mark.parametrize('percent', [0, -50, 59, 60, 100, 180, 181, 10000])
    def test_scale_bounds(self, percent):
        layout = apply_scale(_landscape_layout(), percent)
        assert MIN_SCALE <= layout.scale <= MAX_SCALE
        _assert_covers(layout)

    def test_target_follows_base(self):
        layout = apply_scale(_landscape_layout(), 180)
        assert layout.scale == pytest.approx(1.8)
        assert layout.target_width == 3361
        assert layout.target_height == 2520

    def test_centre_preserved(self):
        layout = _simple_layout()
        assert (layout.offset_x, layout.target_width, layout.draw_width) == (-50, 600, 500)
        before = layout.offset_x + layout.target_width / 2

        zoomed = apply_scale(layout, 150)
        assert zoomed.target_width == 900
        assert zoomed.offset_x + zoomed.target_width / 2 == pytest.approx(before, abs=1)
        assert zoomed.offset_x == pytest.approx(-200)
        assert zoomed.offset_y == pytest.approx(-100)

    def test_zoom_out_below_cover_pins_to_origin(self):
        layout = apply_scale(_landscape_layout(), 60)
        assert layout.target_width < layout.draw_width
        assert layout.offset_x == 0
        assert layout.offset_y == 0

    def test_input_layout_is_untouched(self):
        layout = _landscape_layout()
        apply_scale(layout, 150)
        assert layout.scale == 1
        assert layout.target_width == layout.base_target_width


class TestClampOffsets:

    def test_positive_offset_clamped_to_zero(self):
        layout = clamp_offsets(replace(_simple_layout(), offset_x=30, offset_y=10))
        assert layout.offset_x == 0
        assert layout.offset_y == 0

    def test_offset_past_far_edge_clamped(self):
        base = _simple_layout()
        layout = clamp_offsets(replace(base, offset_x=-500))
        assert layout.offset_x == base.draw_width - base.target_width

    def test_valid_offset_unchanged(self):
        base = _simple_layout()
        assert clamp_offsets(base) == base


class TestResetLayout:

    def test_reset_restores_base(self):
        layout = pan_layout(apply_scale(_landscape_layout(), 180), -300, -200)
        reset = reset_layout(layout)
        assert reset.scale == 1
        assert reset.target_width == reset.base_target_width
        assert reset.offset_x == reset.base_offset_x
        assert reset.offset_y == reset.base_offset_y

    def test_reset_idempotent(self):
        layout = apply_scale(_landscape_layout(), 140)
        once = reset_layout(layout)
        assert reset_layout(once) == once


class TestPan:
    """Screen deltas are converted to layout units before clamping."""

    def test_screen_delta_scaled_by_display_ratio(self):
        layout = _simple_layout()
        assert screen_delta_to_layout(layout, 10, 5, 250, 200) == (20, 10)

    def test_pan_from_screen(self):
        layout = pan_from_screen(_simple_layout(), 10, 0, 250, 200)
        assert layout.offset_x == pytest.approx(-30)

    def test_pan_clamped_at_both_edges(self):
        layout = _simple_layout()
        assert pan_from_screen(layout, -100, 0, 250, 200).offset_x == -100
        assert pan_from_screen(layout, 100, 0, 250, 200).offset_x == 0

    def test_pan_cannot_reveal_background_vertically(self):
        """The photo exactly fits vertically, so vertical pans do nothing."""
        layout = pan_layout(_simple_layout(), 0, -40)
        assert layout.offset_y == 0

    def test_non_positive_display_rejected(self):
        with pytest.raises(ValueError):
            screen_delta_to_layout(_simple_layout(), 1, 1, 0, 200)


class TestCoverInvariant:
    """Every sequence of interactions keeps the photo covering the rectangle."""

    @pytest.mark.parametrize('size', [(4000, 3000), (3000, 4000), (1000, 1000), (5000, 800)])
    def test_interaction_sequence(self, size):
        layout = compute_layout(*size, 2000, 1500, 80, 15)
        steps = [
            lambda l: apply_scale(l, 175),
            lambda l: pan_layout(l, -900, 400),
            lambda l: apply_scale(l, 100),
            lambda l: pan_from_screen(l, 35, -60, 400, 300),
            lambda l: apply_scale(l, 130),
            lambda l: pan_layout(l, 5000, -5000),
            reset_layout,
            lambda l: pan_layout(l, -3, -3),
        ]
        for step in steps:
            layout = step(layout)
            _assert_covers(layout)
            if layout.scale >= 1:
                assert layout.target_width >= layout.draw_width
                assert layout.target_height >= layout.draw_height


class TestCropReporting:

    def test_crop_fraction_at_cover_fit(self):
        assert crop_fraction(_simple_layout()) == pytest.approx(1 - 500 / 600)

    def test_crop_fraction_grows_with_zoom(self):
        layout = _simple_layout()
        assert crop_fraction(apply_scale(layout, 150)) > crop_fraction(layout)

    def test_source_crop_box_at_cover_fit(self):
        left, top, right, bottom = source_crop_box(_simple_layout(), 600, 400)
        assert (left, top, right, bottom) == pytest.approx((50, 0, 550, 400))

    def test_source_crop_box_zoomed(self):
        """At 1.5x the visible 500 x 400 window covers a third less of the source."""
        layout = apply_scale(_simple_layout(), 150)
        left, top, right, bottom = source_crop_box(layout, 600, 400)
        assert right - left == pytest.approx(500 / 1.5)
        assert bottom - top == pytest.approx(400 / 1.5)
        assert left == pytest.approx(200 / 1.5)
