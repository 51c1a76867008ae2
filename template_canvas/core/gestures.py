# /template_canvas/core/gestures.py

import logging
from dataclasses import dataclass
from typing import Optional, Tuple

from template_canvas.core.common import StrEnum, ItemKind, ResizeHandle
from template_canvas.core.canvas import CanvasDocument

class GesturePhase(StrEnum):
    START = "start"
    MOVE = "move"
    END = "end"

class GestureTarget(StrEnum):
    PALETTE = "palette"  # drag a new item from the palette
    ITEM = "item"        # drag an existing item
    HANDLE = "handle"    # drag a resize handle of an existing item

@dataclass(frozen=True)
class PaletteDescriptor:
    kind: ItemKind
    default_size: Optional[Tuple[float, float]] = None
    label: Optional[str] = None

@dataclass(frozen=True)
class GestureEvent:
    """
    One event from a pointer-drag source. Positions are relative to the canvas
    origin and `screen_delta` is the total travel since the start event, both in
    screen pixels.
    """
    phase: GesturePhase
    target: GestureTarget
    pointer: Tuple[float, float] = (0.0, 0.0)
    screen_delta: Tuple[float, float] = (0.0, 0.0)
    index: Optional[int] = None
    handle: Optional[ResizeHandle] = None
    palette: Optional[PaletteDescriptor] = None
    over_canvas: bool = True
    over_trash: bool = False

class GestureController:
    """
    Drives a CanvasDocument from gesture events. Only one gesture is active at a
    time; the event source guarantees a start is never sent before the previous end.
    """

    def __init__(self, document: CanvasDocument):
        self.document = document

    def dispatch(self, event: GestureEvent) -> None:
        if event.target is GestureTarget.HANDLE:
            self._on_resize(event)
        elif event.phase is GesturePhase.END:
            if event.target is GestureTarget.PALETTE:
                self._on_palette_drop(event)
            else:
                self._on_item_drop(event)
        elif event.phase is GesturePhase.START and event.target is GestureTarget.ITEM:
            self.document.select(event.index)

    def _on_resize(self, event: GestureEvent) -> None:
        if event.phase is GesturePhase.START:
            if event.index is None or event.handle is None:
                logging.warning("Resize start without an item index or handle; ignoring.")
                return
            self.document.begin_resize(event.index, event.handle)
        elif event.phase is GesturePhase.MOVE:
            self.document.update_resize(event.screen_delta)
        else:
            self.document.update_resize(event.screen_delta)
            self.document.end_resize()

    def _on_palette_drop(self, event: GestureEvent) -> None:
        if not event.over_canvas or event.palette is None:
            return
        palette = event.palette
        self.document.add(palette.kind, event.pointer, palette.default_size, palette.label)

    def _on_item_drop(self, event: GestureEvent) -> None:
        if event.index is None:
            return
        if event.over_trash:
            self.document.remove(event.index)
        elif event.over_canvas:
            self.document.move(event.index, event.screen_delta)
