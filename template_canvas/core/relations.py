# /template_canvas/core/relations.py

from dataclasses import dataclass
from typing import Dict, List, Optional, Sequence

import numpy as np

from template_canvas.core.common import CanvasItem, Direction
from template_canvas.utils.geometry import item_boxes

@dataclass(frozen=True)
class RelationSet:
    """Nearest neighbor id per direction. Derived on demand, never stored on items."""
    above: Optional[str] = None
    below: Optional[str] = None
    left: Optional[str] = None
    right: Optional[str] = None

    def get(self, direction: Direction) -> Optional[str]:
        return getattr(self, Direction(direction).value)

def _overlap_matrix(low: np.ndarray, high: np.ndarray, centers: np.ndarray) -> np.ndarray:
    """
    m[i, j] is True when item j's center lies strictly inside item i's [low, high]
    extent, or item i's center lies strictly inside item j's extent.
    """
    inside = (low[:, None] < centers[None, :]) & (centers[None, :] < high[:, None])
    return inside | inside.T

def neighbor_indices(items: Sequence[CanvasItem]) -> List[Dict[Direction, Optional[int]]]:
    """
    For every item, the index of its nearest neighbor in each direction, or None.

    `above` considers items whose center is higher and which overlap horizontally,
    and keeps the one with the largest center y. The other directions mirror this.
    Ties go to the item that comes first in collection order.
    """
    n = len(items)
    if n == 0:
        return []

    boxes = item_boxes(items)
    left, top, right, bottom = boxes.T
    cx = (left + right) / 2.0
    cy = (top + bottom) / 2.0

    horizontal = _overlap_matrix(left, right, cx)
    vertical = _overlap_matrix(top, bottom, cy)
    not_self = ~np.eye(n, dtype=bool)

    results = []
    for i in range(n):
        h_mask = horizontal[i] & not_self[i]
        v_mask = vertical[i] & not_self[i]
        candidates = {
            Direction.ABOVE: (h_mask & (cy < cy[i]), cy, True),
            Direction.BELOW: (h_mask & (cy > cy[i]), cy, False),
            Direction.LEFT: (v_mask & (cx < cx[i]), cx, True),
            Direction.RIGHT: (v_mask & (cx > cx[i]), cx, False),
        }
        relation = {}
        for direction, (mask, axis, pick_max) in candidates.items():
            if not mask.any():
                relation[direction] = None
            elif pick_max:
                relation[direction] = int(np.argmax(np.where(mask, axis, -np.inf)))
            else:
                relation[direction] = int(np.argmin(np.where(mask, axis, np.inf)))
        results.append(relation)
    return results

def candidate_indices(items: Sequence[CanvasItem], index: int, direction: Direction) -> List[int]:
    """All items that qualify for `direction` relative to items[index], nearest or not."""
    boxes = item_boxes(items)
    left, top, right, bottom = boxes.T
    cx = (left + right) / 2.0
    cy = (top + bottom) / 2.0
    direction = Direction(direction)

    if direction in (Direction.ABOVE, Direction.BELOW):
        overlap = _overlap_matrix(left, right, cx)[index]
        axis = cy
    else:
        overlap = _overlap_matrix(top, bottom, cy)[index]
        axis = cx

    if direction in (Direction.ABOVE, Direction.LEFT):
        mask = overlap & (axis < axis[index])
    else:
        mask = overlap & (axis > axis[index])
    mask[index] = False
    return [int(j) for j in np.flatnonzero(mask)]

def compute_relations(items: Sequence[CanvasItem]) -> List[RelationSet]:
    """Relations for every item, expressed as neighbor ids."""
    relations = []
    for neighbors in neighbor_indices(items):
        ids = {d.value: (items[j].id if j is not None else None) for d, j in neighbors.items()}
        relations.append(RelationSet(**ids))
    return relations

def relations_for(items: Sequence[CanvasItem], index: int) -> RelationSet:
    return compute_relations(items)[index]
