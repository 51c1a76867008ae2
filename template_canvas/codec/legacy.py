# /template_canvas/codec/legacy.py

import logging
import re
import uuid
from collections import defaultdict
from typing import Any, Dict, List, Optional, Sequence

from template_canvas.configs.base_config import CanvasConfig
from template_canvas.core.common import CanvasItem, ItemKind, Direction, count_by_kind
from template_canvas.core.registry import register_decoder
from template_canvas.core.relations import neighbor_indices

# Order of the neighbor fields inside relative_position_k, as the backend writes them.
RELATION_FIELDS = (Direction.ABOVE, Direction.RIGHT, Direction.LEFT, Direction.BELOW)

_SUFFIXED_KEY = re.compile(r"^(instance_id|class|relative_position)_(\d+)$")

def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)

def json_number(value: float):
    """Integral floats are written as ints, matching what the backend produces."""
    if isinstance(value, float) and value.is_integer():
        return int(value)
    return value

def new_element_id() -> str:
    return uuid.uuid4().hex

def encode_legacy(items: Sequence[CanvasItem]) -> Dict[str, Any]:
    """
    Serializes items, in collection order, into the backend schema. Relations are
    recomputed here from the items themselves and written as class numbers.
    """
    counts = count_by_kind(items)
    neighbors = neighbor_indices(items)

    instances = []
    for k, (item, relation) in enumerate(zip(items, neighbors), start=1):
        position = {
            "item": [
                json_number(item.left),
                json_number(item.top),
                json_number(item.right),
                json_number(item.bottom),
            ]
        }
        for direction in RELATION_FIELDS:
            j = relation[direction]
            position[direction.value] = items[j].kind.class_id if j is not None else None

        instances.append({
            f"instance_id_{k}": k,
            f"class_{k}": item.kind.class_id,
            f"relative_position_{k}": position,
        })

    return {
        "class_counts": {f"{kind.class_id}_element": counts[kind] for kind in ItemKind},
        "category_count": sum(1 for kind in ItemKind if counts[kind] > 0),
        "element_count": len(items),
        "element_id": new_element_id(),
        "instances": instances,
    }

def _group_suffixed(instance: Dict[str, Any]) -> Dict[int, Dict[str, Any]]:
    groups: Dict[int, Dict[str, Any]] = defaultdict(dict)
    for key, value in instance.items():
        match = _SUFFIXED_KEY.match(key)
        if match:
            field_name, k = match.groups()
            groups[int(k)][field_name] = value
    return groups

def _decode_instance(k: int, fields: Dict[str, Any]) -> Optional[CanvasItem]:
    class_id = fields.get("class")
    kind = ItemKind.from_class_id(class_id) if _is_number(class_id) else None
    if kind is None:
        logging.warning(f"Skipping instance {k}: unmapped class id {class_id!r}.")
        return None

    payload = fields.get("relative_position")
    box = payload.get("item") if isinstance(payload, dict) else None
    if not isinstance(box, (list, tuple)) or len(box) != 4 or not all(_is_number(v) for v in box):
        logging.warning(f"Skipping instance {k}: missing or malformed position payload.")
        return None

    left, top, right, bottom = box
    return CanvasItem.create(kind, left, top, right - left, bottom - top)

def _is_legacy(document: Dict[str, Any]) -> bool:
    return "class_counts" in document

@register_decoder("legacy", _is_legacy)
def decode_legacy(document: Dict[str, Any], config: CanvasConfig) -> List[CanvasItem]:
    """
    Reads the backend schema. Instances with a missing position or an unknown
    class are skipped; the neighbor fields are informational and ignored.
    """
    instances = document.get("instances") or []
    if not isinstance(instances, list):
        logging.warning("Legacy template has no instance list; nothing to import.")
        return []

    items = []
    for position_in_list, instance in enumerate(instances, start=1):
        if not isinstance(instance, dict):
            logging.warning(f"Skipping instance {position_in_list}: not an object.")
            continue
        groups = _group_suffixed(instance)
        if not groups:
            logging.warning(f"Skipping instance {position_in_list}: no numbered fields.")
            continue
        for k in sorted(groups):
            item = _decode_instance(k, groups[k])
            if item is not None:
                items.append(item)

    declared = document.get("element_count")
    if _is_number(declared) and declared != len(items):
        logging.info(f"Decoded {len(items)} of {declared} declared elements.")
    return items
