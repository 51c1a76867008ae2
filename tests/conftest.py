"""
Shared fixtures for the canvas and template codec tests.
"""

import numpy as np
import pytest

from template_canvas.configs.base_config import Config, CanvasConfig
from template_canvas.core.canvas import CanvasState, CanvasDocument
from template_canvas.core.common import CanvasItem, ItemKind


@pytest.fixture
def canvas_config() -> CanvasConfig:
    return CanvasConfig()


@pytest.fixture
def text_item() -> CanvasItem:
    return CanvasItem.create(ItemKind.TEXT, 0, 0, 150, 80)


@pytest.fixture
def title_item() -> CanvasItem:
    return CanvasItem.create(ItemKind.TITLE, 0, 100, 150, 50)


@pytest.fixture
def scenario_items(text_item, title_item):
    """A text block with a title directly below it."""
    return [text_item, title_item]


@pytest.fixture
def state(scenario_items) -> CanvasState:
    return CanvasState(tuple(scenario_items))


@pytest.fixture
def document() -> CanvasDocument:
    return CanvasDocument(config=Config())


@pytest.fixture
def rng() -> np.random.Generator:
    return np.random.default_rng(1234)


@pytest.fixture
def legacy_document() -> dict:
    """Backend template with three instances; the second has no position payload."""
    return {
        "class_counts": {"0_element": 2, "1_element": 1, "2_element": 0, "3_element": 0, "4_element": 0},
        "category_count": 2,
        "element_count": 3,
        "element_id": "0123456789abcdef0123456789abcdef",
        "instances": [
            {
                "instance_id_1": 1,
                "class_1": 1,
                "relative_position_1": {"item": [50, 20, 550, 80], "above": None, "right": None,
                                        "left": None, "below": 0},
            },
            {
                "instance_id_2": 2,
                "class_2": 0,
            },
            {
                "instance_id_3": 3,
                "class_3": 0,
                "relative_position_3": {"item": [50, 100, 300, 400], "above": 1, "right": None,
                                        "left": None, "below": None},
            },
        ],
    }


def random_items(rng: np.random.Generator, n: int):
    """In-bounds items with integer geometry."""
    kinds = list(ItemKind)
    items = []
    for _ in range(n):
        width = int(rng.integers(100, 300))
        height = int(rng.integers(40, 200))
        x = int(rng.integers(0, 612 - width + 1))
        y = int(rng.integers(0, 792 - height + 1))
        items.append(CanvasItem.create(kinds[int(rng.integers(0, len(kinds)))], x, y, width, height))
    return items


@pytest.fixture
def make_random_items():
    return random_items
