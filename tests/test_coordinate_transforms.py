"""
Tests for the contain-fit coordinate mapping.

Covers:
- Exact fit, pillarbox (box wider than image) and letterbox (box taller)
- from_canvas as the inverse of to_canvas
- Geometry / CanvasBounds helpers
"""
import pytest

from layer_aligner.models.layer import Layer
from layer_aligner.models.transform import CanvasBounds, Geometry, Vec2
from layer_aligner.utils.coordinate_transforms import (
    clamp01, contain_rect, from_canvas, to_canvas
)


def make_layer(x, y, width, height, aspect_ratio):
    return Layer('img.png', x, y, width, height, aspect_ratio=aspect_ratio)


# ══════════════════════════════════════════════════════════════════════════
# to_canvas
# ══════════════════════════════════════════════════════════════════════════

class TestToCanvas:

    def test_exact_fit_maps_corners_to_box(self):
        layer = make_layer(10, 20, 200, 100, aspect_ratio=2.0)
        assert to_canvas(layer, 0, 0) == pytest.approx((10, 20))
        assert to_canvas(layer, 1, 1) == pytest.approx((210, 120))

    def test_center_maps_to_box_center(self):
        for ratio in (0.5, 1.0, 3.0):
            layer = make_layer(50, 60, 400, 200, aspect_ratio=ratio)
            assert to_canvas(layer, 0.5, 0.5) == pytest.approx((250, 160))

    def test_box_wider_than_image_centres_horizontally(self):
        # 400x200 box, square image -> 200x200 image with 100px bands left/right
        layer = make_layer(0, 0, 400, 200, aspect_ratio=1.0)
        assert contain_rect(layer) == pytest.approx((100, 0, 200, 200))
        assert to_canvas(layer, 0, 0) == pytest.approx((100, 0))
        assert to_canvas(layer, 1, 1) == pytest.approx((300, 200))

    def test_box_taller_than_image_centres_vertically(self):
        # 200x400 box, square image -> 200x200 image with 100px bands top/bottom
        layer = make_layer(0, 0, 200, 400, aspect_ratio=1.0)
        assert contain_rect(layer) == pytest.approx((0, 100, 200, 200))
        assert to_canvas(layer, 0, 0) == pytest.approx((0, 100))
        assert to_canvas(layer, 1, 1) == pytest.approx((200, 300))

    def test_translation_moves_mapping(self):
        layer = make_layer(0, 0, 300, 300, aspect_ratio=0.5)
        moved = make_layer(25, -40, 300, 300, aspect_ratio=0.5)
        x0, y0 = to_canvas(layer, 0.3, 0.7)
        x1, y1 = to_canvas(moved, 0.3, 0.7)
        assert (x1 - x0, y1 - y0) == pytest.approx((25, -40))


# ══════════════════════════════════════════════════════════════════════════
# from_canvas
# ══════════════════════════════════════════════════════════════════════════

class TestFromCanvas:

    @pytest.mark.parametrize("box,ratio", [
        ((0, 0, 400, 200), 1.0),
        ((30, 40, 200, 400), 1.0),
        ((-10, 5, 320, 240), 4 / 3),
    ])
    def test_inverse_of_to_canvas(self, box, ratio):
        layer = make_layer(*box, aspect_ratio=ratio)
        for u, v in ((0, 0), (0.25, 0.8), (1, 1)):
            x, y = to_canvas(layer, u, v)
            assert from_canvas(layer, x, y) == pytest.approx((u, v))

    def test_points_in_band_are_outside_unit_range(self):
        layer = make_layer(0, 0, 400, 200, aspect_ratio=1.0)
        u, v = from_canvas(layer, 50, 100)
        assert u < 0
        assert v == pytest.approx(0.5)

    def test_clamp01(self):
        assert clamp01(-0.3) == 0.0
        assert clamp01(0.4) == 0.4
        assert clamp01(1.7) == 1.0


# ══════════════════════════════════════════════════════════════════════════
# Geometry helpers
# ══════════════════════════════════════════════════════════════════════════

class TestGeometry:

    def test_center(self):
        assert Geometry(10, 20, 100, 50).center == Vec2(60, 45)

    def test_contains_is_inclusive(self):
        box = Geometry(0, 0, 10, 10)
        assert box.contains(0, 0)
        assert box.contains(10, 10)
        assert not box.contains(10.1, 5)

    def test_replace_keeps_other_fields(self):
        assert Geometry(1, 2, 3, 4).replace(y=20) == Geometry(1, 20, 3, 4)

    def test_vec2_unpacks(self):
        x, y = Vec2(3, 4)
        assert (x, y) == (3, 4)

    def test_bounds_normalize(self):
        assert CanvasBounds(200, 100).normalize(50, 50) == Vec2(0.25, 0.5)
