# /template_canvas/core/zoom.py

from typing import Optional, Tuple

from template_canvas.configs.base_config import ZoomConfig, DEFAULT_CONFIG

class ZoomTransform:
    """
    Maps between screen (pointer) space and document space.
    Holds no zoom state of its own: every method takes the current zoom and
    returns a value, so the caller decides where the zoom lives.
    """

    def __init__(self, config: Optional[ZoomConfig] = None):
        self.config = config or DEFAULT_CONFIG.zoom

    @staticmethod
    def to_document_delta(screen_delta: Tuple[float, float], zoom: float) -> Tuple[float, float]:
        dx, dy = screen_delta
        return (dx / zoom, dy / zoom)

    @staticmethod
    def to_screen_length(doc_length: float, zoom: float) -> float:
        return doc_length * zoom

    def clamp(self, value: float) -> float:
        # Repeated 0.1 steps must land on exact tenths.
        value = round(float(value), 6)
        return min(self.config.max_zoom, max(self.config.min_zoom, value))

    def set_zoom(self, value: float) -> float:
        return self.clamp(value)

    def zoom_in(self, zoom: float) -> float:
        return self.clamp(zoom + self.config.step)

    def zoom_out(self, zoom: float) -> float:
        return self.clamp(zoom - self.config.step)

    def reset(self) -> float:
        return self.config.default

    def can_zoom_in(self, zoom: float) -> bool:
        return zoom < self.config.max_zoom

    def can_zoom_out(self, zoom: float) -> bool:
        return zoom > self.config.min_zoom
