# /template_canvas/core/common.py

import uuid
from dataclasses import dataclass, replace
from enum import Enum
from typing import Dict, Iterable, Optional

class StrEnum(str, Enum):
    """Enum where members are also strings."""
    def __str__(self):
        return self.value

class ItemKind(StrEnum):
    TEXT = "text"
    TITLE = "title"
    LIST = "list"
    TABLE = "table"
    FIGURE = "figure"

    @property
    def class_id(self) -> int:
        """Numeric class used by the backend schema."""
        return KIND_TO_CLASS[self]

    @property
    def default_label(self) -> str:
        return self.value.capitalize()

    @classmethod
    def from_class_id(cls, class_id) -> Optional["ItemKind"]:
        return CLASS_TO_KIND.get(class_id)

KIND_TO_CLASS: Dict[ItemKind, int] = {kind: i for i, kind in enumerate(ItemKind)}
CLASS_TO_KIND: Dict[int, ItemKind] = {i: kind for kind, i in KIND_TO_CLASS.items()}

class ResizeHandle(StrEnum):
    TOP_LEFT = "top-left"
    TOP = "top"
    TOP_RIGHT = "top-right"
    RIGHT = "right"
    BOTTOM_RIGHT = "bottom-right"
    BOTTOM = "bottom"
    BOTTOM_LEFT = "bottom-left"
    LEFT = "left"

class Direction(StrEnum):
    ABOVE = "above"
    BELOW = "below"
    LEFT = "left"
    RIGHT = "right"

class ReorderDirection(StrEnum):
    FORWARD = "forward"
    BACKWARD = "backward"

@dataclass(frozen=True)
class Position:
    """Top-left corner in document units."""
    x: float
    y: float

@dataclass(frozen=True)
class Size:
    width: float
    height: float

def new_item_id() -> str:
    return uuid.uuid4().hex

@dataclass(frozen=True)
class CanvasItem:
    """A placed block. Geometry is always in document space, never scaled by zoom."""
    id: str
    kind: ItemKind
    label: str
    position: Position
    size: Size

    @classmethod
    def create(cls, kind: ItemKind, x: float, y: float, width: float, height: float,
               label: Optional[str] = None) -> "CanvasItem":
        kind = ItemKind(kind)
        return cls(
            id=new_item_id(),
            kind=kind,
            label=kind.default_label if label is None else label,
            position=Position(x, y),
            size=Size(width, height),
        )

    @property
    def left(self) -> float:
        return self.position.x

    @property
    def top(self) -> float:
        return self.position.y

    @property
    def right(self) -> float:
        return self.position.x + self.size.width

    @property
    def bottom(self) -> float:
        return self.position.y + self.size.height

    @property
    def center(self):
        return (self.position.x + self.size.width / 2, self.position.y + self.size.height / 2)

    def with_geometry(self, position: Position, size: Size) -> "CanvasItem":
        return replace(self, position=position, size=size)

def count_by_kind(items: Iterable[CanvasItem]) -> Dict[ItemKind, int]:
    """Per-kind totals, zero-filled for kinds that are absent."""
    counts = {kind: 0 for kind in ItemKind}
    for item in items:
        counts[item.kind] += 1
    return counts
