# /template_canvas/codec/native.py

import logging
from dataclasses import asdict
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, ValidationError

from template_canvas.codec.errors import TemplateFormatError
from template_canvas.configs.base_config import CanvasConfig
from template_canvas.core.common import CanvasItem, ItemKind, Size
from template_canvas.core.registry import register_decoder
from template_canvas.core.relations import compute_relations

class NativePosition(BaseModel):
    x: float
    y: float

class NativeSize(BaseModel):
    width: float
    height: float

class NativeRelations(BaseModel):
    above: Optional[str] = None
    below: Optional[str] = None
    left: Optional[str] = None
    right: Optional[str] = None

class NativeElement(BaseModel):
    id: Optional[str] = None
    type: ItemKind
    label: Optional[str] = None
    position: NativePosition
    size: Optional[NativeSize] = None
    relations: Optional[NativeRelations] = None

def encode_native(items: Sequence[CanvasItem], version: str = "1.0") -> Dict[str, Any]:
    """The editor's own schema. Relations carry neighbor ids and are only advisory."""
    relations = compute_relations(items)
    elements = []
    for item, relation in zip(items, relations):
        element = NativeElement(
            id=item.id,
            type=item.kind,
            label=item.label,
            position=NativePosition(x=item.position.x, y=item.position.y),
            size=NativeSize(width=item.size.width, height=item.size.height),
            relations=NativeRelations(**asdict(relation)),
        )
        elements.append(element.model_dump(mode="json"))
    return {"version": version, "template": {"elements": elements}}

def _is_native(document: Dict[str, Any]) -> bool:
    return "version" in document and "template" in document

@register_decoder("native", _is_native)
def decode_native(document: Dict[str, Any], config: CanvasConfig) -> List[CanvasItem]:
    """Maps template.elements[] straight to items; relations are ignored on import."""
    template = document["template"]
    elements = template.get("elements") if isinstance(template, dict) else None
    if not isinstance(elements, list):
        raise TemplateFormatError("Native template has no 'template.elements' list.")

    items = []
    for i, raw in enumerate(elements, start=1):
        try:
            element = NativeElement.model_validate(raw)
        except ValidationError as e:
            logging.warning(f"Skipping element {i}: {e.error_count()} validation error(s).")
            continue

        if element.size is not None:
            size = Size(element.size.width, element.size.height)
        else:
            size = Size(config.default_item_width, config.default_item_height)
        items.append(CanvasItem.create(
            element.type, element.position.x, element.position.y, size.width, size.height, label=element.label
        ))
    return items
