# /template_canvas/codec/template_codec.py

import json
import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence, Union

from template_canvas.codec.errors import TemplateFormatError
from template_canvas.codec.legacy import encode_legacy
from template_canvas.codec.native import encode_native
from template_canvas.configs.base_config import CanvasConfig, ExportConfig, DEFAULT_CONFIG
from template_canvas.core.common import CanvasItem
from template_canvas.core.registry import TEMPLATE_DECODERS, SCHEMA_DETECTORS
from template_canvas.utils.geometry import fit_to_page, is_within_page

# The backend schema is checked first: a document carrying class_counts is legacy
# regardless of any other keys.
DETECTION_ORDER = ("legacy", "native")

def detect_schema(document: Any) -> str:
    if not isinstance(document, dict):
        raise TemplateFormatError("Template root must be a JSON object.")
    names = list(DETECTION_ORDER) + [n for n in SCHEMA_DETECTORS if n not in DETECTION_ORDER]
    for name in names:
        if SCHEMA_DETECTORS[name](document):
            return name
    raise TemplateFormatError("Unrecognized template schema.")

def decode(document: Any, config: Optional[CanvasConfig] = None) -> List[CanvasItem]:
    """Detects the schema, decodes, and fits every item onto the page."""
    config = config or DEFAULT_CONFIG.canvas
    schema = detect_schema(document)
    items = TEMPLATE_DECODERS[schema](document, config)
    logging.debug(f"Decoded {len(items)} item(s) from {schema} template.")

    fitted = []
    for i, item in enumerate(items, start=1):
        if not is_within_page(item, config):
            adjusted = fit_to_page(item, config)
            logging.warning(
                f"Element {i} ({item.kind.value}) adjusted to fit the page: "
                f"({item.left}, {item.top}, {item.size.width}x{item.size.height}) -> "
                f"({adjusted.left}, {adjusted.top}, {adjusted.size.width}x{adjusted.size.height})"
            )
            item = adjusted
        fitted.append(item)
    return fitted

def decode_text(text: Union[str, bytes], config: Optional[CanvasConfig] = None) -> List[CanvasItem]:
    try:
        document = json.loads(text)
    except (json.JSONDecodeError, UnicodeDecodeError) as e:
        raise TemplateFormatError(f"Template is not valid JSON: {e}") from e
    return decode(document, config)

def encode(items: Sequence[CanvasItem]) -> Dict[str, Any]:
    """Always produces the backend (legacy) schema."""
    return encode_legacy(list(items))

def to_native(items: Sequence[CanvasItem], config: Optional[ExportConfig] = None) -> Dict[str, Any]:
    config = config or DEFAULT_CONFIG.export
    return encode_native(list(items), version=config.native_version)

def dumps(document: Dict[str, Any], config: Optional[ExportConfig] = None) -> str:
    config = config or DEFAULT_CONFIG.export
    return json.dumps(document, indent=config.indent, ensure_ascii=False)

def save_template(items: Sequence[CanvasItem], output_dir: Union[str, Path],
                  config: Optional[ExportConfig] = None) -> Path:
    """Writes the backend schema to <output_dir>/template.json and returns the path."""
    config = config or DEFAULT_CONFIG.export
    output_dir = Path(output_dir)
    output_dir.mkdir(parents=True, exist_ok=True)
    path = output_dir / config.filename
    with open(path, 'w', encoding='utf-8') as f:
        f.write(dumps(encode(items), config))
    logging.info(f"Exported {len(items)} item(s) to {path}")
    return path

def load_template(path: Union[str, Path], config: Optional[CanvasConfig] = None) -> List[CanvasItem]:
    with open(path, 'r', encoding='utf-8') as f:
        return decode_text(f.read(), config)
