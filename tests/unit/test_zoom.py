"""ZoomTransform tests."""

import pytest

from template_canvas.configs.base_config import ZoomConfig
from template_canvas.core.zoom import ZoomTransform


class TestZoomTransform:

    def test_document_delta_divides_by_zoom(self):
        assert ZoomTransform.to_document_delta((40, -20), 2.0) == (20, -10)

    def test_screen_length_multiplies_by_zoom(self):
        assert ZoomTransform.to_screen_length(150, 0.5) == 75

    def test_same_drag_differs_by_zoom_ratio(self):
        at_one = ZoomTransform.to_document_delta((120, 60), 1.0)
        at_two = ZoomTransform.to_document_delta((120, 60), 2.0)
        assert at_one == (at_two[0] * 2, at_two[1] * 2)

    def test_zoom_in_steps_by_a_tenth(self):
        zt = ZoomTransform()
        assert zt.zoom_in(1.0) == pytest.approx(1.1)
        assert zt.zoom_in(zt.zoom_in(1.0)) == 1.2

    def test_zoom_clamps_to_range(self):
        zt = ZoomTransform()
        assert zt.zoom_in(3.0) == 3.0
        assert zt.zoom_out(0.3) == 0.3
        assert zt.set_zoom(10) == 3.0
        assert zt.set_zoom(0.01) == 0.3

    def test_repeated_steps_stay_on_tenths(self):
        zt = ZoomTransform()
        zoom = 1.0
        for _ in range(7):
            zoom = zt.zoom_out(zoom)
        assert zoom == 0.3
        for _ in range(27):
            zoom = zt.zoom_in(zoom)
        assert zoom == 3.0

    def test_reset_returns_default(self):
        assert ZoomTransform().reset() == 1.0
        assert ZoomTransform(ZoomConfig(default=2.0)).reset() == 2.0

    def test_can_zoom_flags(self):
        zt = ZoomTransform()
        assert not zt.can_zoom_in(3.0)
        assert not zt.can_zoom_out(0.3)
        assert zt.can_zoom_in(1.0) and zt.can_zoom_out(1.0)
