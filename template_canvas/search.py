# /template_canvas/search.py

import logging
from typing import Any, Dict, List, Optional, Sequence

from pydantic import BaseModel, Field, ValidationError

from template_canvas.configs.base_config import SearchConfig, DEFAULT_CONFIG
from template_canvas.core.canvas import EmptyCanvasError
from template_canvas.core.common import CanvasItem

class TemplateCounts(BaseModel):
    text_count: int = 0
    title_count: int = 0
    list_count: int = 0
    table_count: int = 0
    figure_count: int = 0

class SimilarTemplate(BaseModel):
    image_url: str
    json_content: Dict[str, Any] = Field(default_factory=dict)

    @property
    def counts(self) -> TemplateCounts:
        return TemplateCounts.model_validate(self.json_content)

def build_search_request(items: Sequence[CanvasItem]) -> Dict[str, Any]:
    """Request body for the similarity search, built from the live items."""
    if not items:
        raise EmptyCanvasError("Add at least one item to the canvas before searching.")
    return {
        "elements": [
            {
                "type": item.kind.value,
                "position": {"x": item.position.x, "y": item.position.y},
                "size": {"width": item.size.width, "height": item.size.height},
            }
            for item in items
        ]
    }

def parse_search_response(payload: Any, config: Optional[SearchConfig] = None) -> List[SimilarTemplate]:
    """
    Turns a backend response into templates for the results panel. Relative image
    URLs are resolved against the backend base URL. A payload without a usable
    `images` list yields no results.
    """
    config = config or DEFAULT_CONFIG.search
    images = payload.get("images") if isinstance(payload, dict) else None
    if not isinstance(images, list):
        return []

    results = []
    for raw in images:
        try:
            template = SimilarTemplate.model_validate(raw)
        except ValidationError as e:
            logging.warning(f"Dropping malformed search result: {e.error_count()} error(s).")
            continue
        if not template.image_url.startswith("http"):
            template.image_url = f"{config.base_url.rstrip('/')}/{template.image_url.lstrip('/')}"
        results.append(template)
    return results

class SearchTracker:
    """
    Tags each outgoing search with a generation number. A response is applied only
    if no newer request has been issued since; older ones are discarded.
    """

    def __init__(self, config: Optional[SearchConfig] = None):
        self.config = config or DEFAULT_CONFIG.search
        self.latest = 0
        self.results: List[SimilarTemplate] = []

    def issue(self) -> int:
        self.latest += 1
        return self.latest

    def is_current(self, token: int) -> bool:
        return token == self.latest

    def accept(self, token: int, payload: Any) -> Optional[List[SimilarTemplate]]:
        if not self.is_current(token):
            logging.warning(f"Discarding stale search response {token} (latest is {self.latest}).")
            return None
        self.results = parse_search_response(payload, self.config)
        return self.results
