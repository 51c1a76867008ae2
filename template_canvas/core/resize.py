# /template_canvas/core/resize.py

from typing import Dict, Optional, Tuple

from template_canvas.configs.base_config import CanvasConfig, DEFAULT_CONFIG
from template_canvas.core.common import StrEnum, ResizeHandle, Position, Size

class EdgeMode(StrEnum):
    """How a handle acts on one axis."""
    FIXED = "fixed"  # axis untouched
    FAR = "far"      # origin-side edge stays put, size follows the pointer
    NEAR = "near"    # opposite edge stays put, size and position both change

HANDLE_AXES: Dict[ResizeHandle, Tuple[EdgeMode, EdgeMode]] = {
    ResizeHandle.TOP_LEFT: (EdgeMode.NEAR, EdgeMode.NEAR),
    ResizeHandle.TOP: (EdgeMode.FIXED, EdgeMode.NEAR),
    ResizeHandle.TOP_RIGHT: (EdgeMode.FAR, EdgeMode.NEAR),
    ResizeHandle.RIGHT: (EdgeMode.FAR, EdgeMode.FIXED),
    ResizeHandle.BOTTOM_RIGHT: (EdgeMode.FAR, EdgeMode.FAR),
    ResizeHandle.BOTTOM: (EdgeMode.FIXED, EdgeMode.FAR),
    ResizeHandle.BOTTOM_LEFT: (EdgeMode.NEAR, EdgeMode.FAR),
    ResizeHandle.LEFT: (EdgeMode.NEAR, EdgeMode.FIXED),
}

def _resolve_axis(mode: EdgeMode, pos: float, size: float, delta: float, min_size: float) -> Tuple[float, float]:
    if mode is EdgeMode.FIXED:
        return pos, size
    if mode is EdgeMode.FAR:
        return pos, max(min_size, size + delta)

    # Clamp first, then derive both size and position from the same value.
    max_delta = size - min_size
    constrained = min(delta, max_delta)
    return pos + constrained, size - constrained

def _fit_axis(mode: EdgeMode, pos: float, size: float, orig_pos: float, orig_size: float,
              page_dim: float, min_size: float) -> Tuple[float, float]:
    if pos + size > page_dim:
        if mode is EdgeMode.FAR:
            size = page_dim - pos
        else:
            pos = page_dim - size

    if pos < 0:
        pos = 0
        if mode is EdgeMode.NEAR:
            # Keep the opposite edge where it was at gesture start.
            size = max(min_size, orig_pos + orig_size)
    return pos, size

def resize_geometry(
    position: Position,
    size: Size,
    handle: ResizeHandle,
    doc_delta: Tuple[float, float],
    config: Optional[CanvasConfig] = None,
) -> Tuple[Position, Size]:
    """
    Solves a resize for one handle.

    Args:
        position: The item's position at gesture start.
        size: The item's size at gesture start.
        handle: Which of the eight handles is being dragged.
        doc_delta: Total pointer delta since gesture start, in document units.
        config: Page and minimum-size limits.

    Returns:
        The new (position, size). The two axes are solved independently, then
        a boundary pass keeps the item on the page.
    """
    config = config or DEFAULT_CONFIG.canvas
    x_mode, y_mode = HANDLE_AXES[ResizeHandle(handle)]
    dx, dy = doc_delta

    x, width = _resolve_axis(x_mode, position.x, size.width, dx, config.min_width)
    y, height = _resolve_axis(y_mode, position.y, size.height, dy, config.min_height)

    x, width = _fit_axis(x_mode, x, width, position.x, size.width, config.page_width, config.min_width)
    y, height = _fit_axis(y_mode, y, height, position.y, size.height, config.page_height, config.min_height)

    return Position(x, y), Size(width, height)
