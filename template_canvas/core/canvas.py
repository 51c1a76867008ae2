# /template_canvas/core/canvas.py

import logging
from dataclasses import dataclass, field, replace
from typing import Iterable, List, Optional, Tuple

from template_canvas.configs.base_config import Config, CanvasConfig, DEFAULT_CONFIG
from template_canvas.core.common import (
    CanvasItem, ItemKind, ResizeHandle, ReorderDirection, new_item_id, count_by_kind
)
from template_canvas.core.resize import resize_geometry
from template_canvas.core.zoom import ZoomTransform
from template_canvas.utils.geometry import clamp_position, fit_to_page

class EmptyCanvasError(ValueError):
    """Raised when an operation needs at least one placed item."""

@dataclass(frozen=True)
class CanvasState:
    """
    The ordered item collection. Order is the z-order (last is topmost) and the
    instance numbering used on export. Every operation below returns a new state.
    """
    items: Tuple[CanvasItem, ...] = ()

    def __len__(self):
        return len(self.items)

    def __iter__(self):
        return iter(self.items)

    def __getitem__(self, index: int) -> CanvasItem:
        return self.items[index]

    def _valid(self, index: int) -> bool:
        return 0 <= index < len(self.items)

    def _with_item(self, index: int, item: CanvasItem) -> "CanvasState":
        items = list(self.items)
        items[index] = item
        return CanvasState(tuple(items))

# --- Mutation operations ---

def add_item(
    state: CanvasState,
    kind: ItemKind,
    drop_point_screen: Tuple[float, float],
    zoom: float,
    default_size: Optional[Tuple[float, float]] = None,
    label: Optional[str] = None,
    config: Optional[CanvasConfig] = None,
) -> CanvasState:
    """Centers a new item on the drop point, clamps it onto the page and puts it on top."""
    config = config or DEFAULT_CONFIG.canvas
    width, height = default_size or (config.default_item_width, config.default_item_height)
    drop_x, drop_y = ZoomTransform.to_document_delta(drop_point_screen, zoom)

    position = clamp_position(drop_x - width / 2, drop_y - height / 2, width, height, config)
    item = fit_to_page(CanvasItem.create(kind, position.x, position.y, width, height, label=label), config)
    return CanvasState(state.items + (item,))

def remove_item(state: CanvasState, index: int) -> CanvasState:
    if not state._valid(index):
        return state
    return CanvasState(state.items[:index] + state.items[index + 1:])

def move_item(
    state: CanvasState,
    index: int,
    screen_delta: Tuple[float, float],
    zoom: float,
    config: Optional[CanvasConfig] = None,
) -> CanvasState:
    if not state._valid(index):
        return state
    config = config or DEFAULT_CONFIG.canvas
    item = state[index]
    dx, dy = ZoomTransform.to_document_delta(screen_delta, zoom)
    position = clamp_position(item.position.x + dx, item.position.y + dy, item.size.width, item.size.height, config)
    return state._with_item(index, replace(item, position=position))

def resize_item(
    state: CanvasState,
    index: int,
    handle: ResizeHandle,
    screen_delta: Tuple[float, float],
    zoom: float,
    origin: Optional[CanvasItem] = None,
    config: Optional[CanvasConfig] = None,
) -> CanvasState:
    """
    Resizes the item at `index`. `origin` is the item as it was when the gesture
    started; the delta is the total since then. Without an origin the current
    item is used, which makes this a single-step gesture.
    """
    if not state._valid(index):
        return state
    start = origin or state[index]
    doc_delta = ZoomTransform.to_document_delta(screen_delta, zoom)
    position, size = resize_geometry(start.position, start.size, handle, doc_delta, config)
    return state._with_item(index, state[index].with_geometry(position, size))

def duplicate_item(state: CanvasState, index: int, config: Optional[CanvasConfig] = None) -> CanvasState:
    if not state._valid(index):
        return state
    config = config or DEFAULT_CONFIG.canvas
    source = state[index]
    offset = config.duplicate_offset
    position = clamp_position(
        source.position.x + offset, source.position.y + offset, source.size.width, source.size.height, config
    )
    copy = replace(source, id=new_item_id(), position=position)
    return CanvasState(state.items + (copy,))

def reorder(state: CanvasState, index: int, direction: ReorderDirection) -> CanvasState:
    """Swaps with the array neighbor. Forward moves towards the top of the z-order."""
    if not state._valid(index):
        return state
    target = index + 1 if ReorderDirection(direction) is ReorderDirection.FORWARD else index - 1
    if not state._valid(target):
        return state
    items = list(state.items)
    items[index], items[target] = items[target], items[index]
    return CanvasState(tuple(items))

def clear_items(state: CanvasState) -> CanvasState:
    return CanvasState()

def replace_items(state: CanvasState, items: Iterable[CanvasItem], config: Optional[CanvasConfig] = None) -> CanvasState:
    config = config or DEFAULT_CONFIG.canvas
    return CanvasState(tuple(fit_to_page(item, config) for item in items))

# --- Document owner ---

@dataclass
class ResizeGesture:
    index: int
    handle: ResizeHandle
    origin: CanvasItem

@dataclass
class CanvasDocument:
    """
    The single owner of the editable state: the item collection, the selection,
    the zoom and the transient resize start-state. All edits go through the
    mutation operations above.
    """
    config: Config = field(default_factory=lambda: DEFAULT_CONFIG)
    state: CanvasState = field(default_factory=CanvasState)
    zoom: Optional[float] = None
    selected_index: Optional[int] = None
    _resize: Optional[ResizeGesture] = field(default=None, repr=False)

    def __post_init__(self):
        self.zoom_transform = ZoomTransform(self.config.zoom)
        if self.zoom is None:
            self.zoom = self.zoom_transform.reset()

    @property
    def items(self) -> List[CanvasItem]:
        return list(self.state.items)

    @property
    def is_resizing(self) -> bool:
        return self._resize is not None

    def stats(self):
        return count_by_kind(self.state)

    # Zoom
    def zoom_in(self) -> float:
        self.zoom = self.zoom_transform.zoom_in(self.zoom)
        return self.zoom

    def zoom_out(self) -> float:
        self.zoom = self.zoom_transform.zoom_out(self.zoom)
        return self.zoom

    def set_zoom(self, value: float) -> float:
        self.zoom = self.zoom_transform.set_zoom(value)
        return self.zoom

    def reset_zoom(self) -> float:
        self.zoom = self.zoom_transform.reset()
        return self.zoom

    # Edits
    def add(self, kind: ItemKind, drop_point_screen: Tuple[float, float],
            default_size: Optional[Tuple[float, float]] = None, label: Optional[str] = None) -> CanvasState:
        self.state = add_item(self.state, kind, drop_point_screen, self.zoom, default_size, label, self.config.canvas)
        return self.state

    def remove(self, index: int) -> CanvasState:
        new_state = remove_item(self.state, index)
        if new_state is self.state:
            return self.state
        self.state = new_state

        if self.selected_index is not None:
            if self.selected_index == index:
                self.selected_index = None
            elif self.selected_index > index:
                self.selected_index -= 1

        gesture = self._resize
        if gesture is not None:
            if gesture.index == index:
                logging.info(f"Item {index} removed mid-resize; ending the gesture.")
                self._resize = None
            elif gesture.index > index:
                gesture.index -= 1
        return self.state

    def move(self, index: int, screen_delta: Tuple[float, float]) -> CanvasState:
        self.state = move_item(self.state, index, screen_delta, self.zoom, self.config.canvas)
        return self.state

    def duplicate(self, index: int) -> CanvasState:
        self.state = duplicate_item(self.state, index, self.config.canvas)
        return self.state

    def reorder(self, index: int, direction: ReorderDirection) -> CanvasState:
        new_state = reorder(self.state, index, direction)
        if new_state is self.state:
            return self.state
        self.state = new_state

        step = 1 if ReorderDirection(direction) is ReorderDirection.FORWARD else -1
        target = index + step
        swapped = {index: target, target: index}
        if self.selected_index in swapped:
            self.selected_index = swapped[self.selected_index]
        if self._resize is not None and self._resize.index in swapped:
            self._resize.index = swapped[self._resize.index]
        return self.state

    def clear(self) -> CanvasState:
        self.state = clear_items(self.state)
        self.selected_index = None
        self._resize = None
        return self.state

    def replace(self, items: Iterable[CanvasItem]) -> CanvasState:
        self.state = replace_items(self.state, items, self.config.canvas)
        self.selected_index = None
        self._resize = None
        return self.state

    def select(self, index: Optional[int]) -> None:
        self.selected_index = index if index is not None and self.state._valid(index) else None

    # Resize gesture
    def begin_resize(self, index: int, handle: ResizeHandle) -> None:
        if not self.state._valid(index):
            logging.warning(f"Ignoring resize start on missing item {index}.")
            return
        self._resize = ResizeGesture(index=index, handle=ResizeHandle(handle), origin=self.state[index])
        self.selected_index = index

    def update_resize(self, screen_delta: Tuple[float, float]) -> CanvasState:
        """`screen_delta` is the total pointer travel since begin_resize."""
        gesture = self._resize
        if gesture is None:
            return self.state
        self.state = resize_item(
            self.state, gesture.index, gesture.handle, screen_delta, self.zoom,
            origin=gesture.origin, config=self.config.canvas,
        )
        return self.state

    def end_resize(self) -> CanvasState:
        self._resize = None
        return self.state

    # Keyboard
    def handle_key(self, key: str, input_focused: bool = False) -> bool:
        """Delete/Backspace removes the selection unless a text input has focus."""
        if key not in ("Delete", "Backspace") or input_focused or self.selected_index is None:
            return False
        self.remove(self.selected_index)
        self.selected_index = None
        return True

    # Import / export
    def export_template(self) -> dict:
        from template_canvas.codec.template_codec import encode
        if not self.state.items:
            raise EmptyCanvasError("No items to export.")
        return encode(self.state.items)

    def import_template(self, text: str) -> CanvasState:
        """Replaces the collection with a decoded template. On any error the state is untouched."""
        from template_canvas.codec.template_codec import decode_text
        items = decode_text(text, self.config.canvas)
        return self.replace(items)
