"""Resize constraint solver tests."""

import pytest

from template_canvas.configs.base_config import CanvasConfig
from template_canvas.core.common import Position, Size, ResizeHandle
from template_canvas.core.resize import resize_geometry, HANDLE_AXES, EdgeMode


def solve(x, y, w, h, handle, delta):
    position, size = resize_geometry(Position(x, y), Size(w, h), handle, delta)
    return (position.x, position.y, size.width, size.height)


class TestHandleTable:

    def test_all_eight_handles_declared(self):
        assert set(HANDLE_AXES) == set(ResizeHandle)

    def test_edges_touch_one_axis(self):
        assert HANDLE_AXES[ResizeHandle.TOP] == (EdgeMode.FIXED, EdgeMode.NEAR)
        assert HANDLE_AXES[ResizeHandle.RIGHT] == (EdgeMode.FAR, EdgeMode.FIXED)


class TestFarEdge:

    def test_bottom_right_hits_minimum_exactly(self):
        assert solve(0, 0, 150, 80, ResizeHandle.BOTTOM_RIGHT, (-100, -50)) == (0, 0, 100, 40)

    def test_right_grows_width_only(self):
        assert solve(100, 100, 150, 80, ResizeHandle.RIGHT, (50, 30)) == (100, 100, 200, 80)

    def test_bottom_grows_height_only(self):
        assert solve(100, 100, 150, 80, ResizeHandle.BOTTOM, (30, 25)) == (100, 100, 150, 105)

    def test_right_overflow_shrinks_to_page(self):
        assert solve(500, 0, 100, 40, ResizeHandle.RIGHT, (50, 0)) == (500, 0, 112, 40)

    def test_bottom_overflow_shrinks_to_page(self):
        assert solve(0, 700, 100, 40, ResizeHandle.BOTTOM, (0, 100)) == (0, 700, 100, 92)


class TestNearEdge:

    def test_left_moves_position_and_size_together(self):
        assert solve(100, 100, 150, 80, ResizeHandle.LEFT, (30, 0)) == (130, 100, 120, 80)

    def test_left_shrink_is_capped_at_minimum(self):
        assert solve(100, 100, 150, 80, ResizeHandle.LEFT, (80, 0)) == (150, 100, 100, 80)

    def test_top_shrink_is_capped_at_minimum(self):
        assert solve(100, 100, 150, 80, ResizeHandle.TOP, (0, 70)) == (100, 140, 150, 40)

    def test_right_edge_is_preserved_when_capped(self):
        x, _, w, _ = solve(100, 100, 150, 80, ResizeHandle.LEFT, (500, 0))
        assert x + w == 250

    def test_left_past_page_pins_to_zero_and_keeps_right_edge(self):
        assert solve(20, 100, 150, 80, ResizeHandle.LEFT, (-50, 0)) == (0, 100, 170, 80)

    def test_top_past_page_pins_to_zero_and_keeps_bottom_edge(self):
        assert solve(100, 10, 150, 80, ResizeHandle.TOP, (0, -40)) == (100, 0, 150, 90)


class TestCorners:

    def test_top_left_axes_are_independent(self):
        assert solve(100, 100, 150, 80, ResizeHandle.TOP_LEFT, (200, -20)) == (150, 80, 100, 100)

    def test_top_right_mixes_far_x_and_near_y(self):
        assert solve(100, 100, 150, 80, ResizeHandle.TOP_RIGHT, (20, 10)) == (100, 110, 170, 70)

    def test_bottom_left_mixes_near_x_and_far_y(self):
        assert solve(100, 100, 150, 80, ResizeHandle.BOTTOM_LEFT, (-20, 10)) == (80, 100, 170, 90)


class TestNoDrift:

    @pytest.mark.parametrize("handle", [ResizeHandle.LEFT, ResizeHandle.TOP, ResizeHandle.TOP_LEFT])
    def test_delta_then_inverse_restores_geometry(self, handle):
        start = (Position(200, 200), Size(150, 80))
        mid = resize_geometry(*start, handle, (30, 20))
        end = resize_geometry(*mid, handle, (-30, -20))
        assert end == start


class TestConfig:

    def test_custom_minimum_is_respected(self):
        config = CanvasConfig(min_width=50, min_height=20)
        position, size = resize_geometry(Position(0, 0), Size(150, 80), ResizeHandle.BOTTOM_RIGHT, (-500, -500), config)
        assert (size.width, size.height) == (50, 20)
