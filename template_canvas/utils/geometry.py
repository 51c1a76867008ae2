# /template_canvas/utils/geometry.py

import numpy as np
from shapely.geometry import box, Polygon

from template_canvas.configs.base_config import CanvasConfig
from template_canvas.core.common import CanvasItem, Position, Size

def clamp(value: float, lower: float, upper: float) -> float:
    """Clamps value into [lower, upper]. If the range is empty, lower wins."""
    return max(lower, min(value, upper))

def clamp_position(x: float, y: float, width: float, height: float, config: CanvasConfig) -> Position:
    """Each axis independently clamped to [0, page_dim - item_dim]."""
    return Position(
        clamp(x, 0, config.page_width - width),
        clamp(y, 0, config.page_height - height),
    )

def fit_to_page(item: CanvasItem, config: CanvasConfig) -> CanvasItem:
    """
    Enforces the minimum size, then the page bounds. Since the page is larger than
    the minimum size in both axes, the second step never breaks the first.
    """
    width = clamp(item.size.width, config.min_width, config.page_width)
    height = clamp(item.size.height, config.min_height, config.page_height)
    position = clamp_position(item.position.x, item.position.y, width, height, config)
    if position == item.position and (width, height) == (item.size.width, item.size.height):
        return item
    return item.with_geometry(position, Size(width, height))

def item_polygon(item: CanvasItem) -> Polygon:
    return box(item.left, item.top, item.right, item.bottom)

def page_polygon(config: CanvasConfig) -> Polygon:
    return box(0, 0, config.page_width, config.page_height)

def is_within_page(item: CanvasItem, config: CanvasConfig) -> bool:
    """True when the item satisfies both the minimum size and the page bounds."""
    if item.size.width < config.min_width or item.size.height < config.min_height:
        return False
    return page_polygon(config).covers(item_polygon(item))

def item_boxes(items) -> np.ndarray:
    """Returns an (N, 4) array of [left, top, right, bottom] rows."""
    if not items:
        return np.empty((0, 4))
    return np.array([[it.left, it.top, it.right, it.bottom] for it in items], dtype=np.float64)
