# /template_canvas/configs/base_config.py
from pathlib import Path
from typing import Union

import yaml
from pydantic import BaseModel, Field, model_validator

class CanvasConfig(BaseModel):
    page_width: float = 612
    page_height: float = 792
    min_width: float = 100
    min_height: float = 40
    default_item_width: float = 150
    default_item_height: float = 80
    duplicate_offset: float = 20

    @model_validator(mode="after")
    def _page_fits_minimum(self):
        if self.min_width > self.page_width or self.min_height > self.page_height:
            raise ValueError("Minimum item size must fit on the page.")
        return self

class ZoomConfig(BaseModel):
    min_zoom: float = 0.3
    max_zoom: float = 3.0
    step: float = 0.1
    default: float = 1.0

    @model_validator(mode="after")
    def _default_in_range(self):
        if not (0 < self.min_zoom <= self.default <= self.max_zoom):
            raise ValueError("Zoom default must lie within [min_zoom, max_zoom].")
        return self

class ExportConfig(BaseModel):
    filename: str = "template.json"
    indent: int = 2
    native_version: str = "1.0"

class SearchConfig(BaseModel):
    base_url: str = "http://localhost:5000"

class Config(BaseModel):
    canvas: CanvasConfig = Field(default_factory=CanvasConfig)
    zoom: ZoomConfig = Field(default_factory=ZoomConfig)
    export: ExportConfig = Field(default_factory=ExportConfig)
    search: SearchConfig = Field(default_factory=SearchConfig)

DEFAULT_CONFIG = Config()

def load_config(path: Union[str, Path]) -> Config:
    """Loads and validates a YAML configuration file. An empty file yields the defaults."""
    config_path = Path(path)
    if not config_path.exists():
        raise FileNotFoundError(f"Configuration file not found at {config_path}")
    with open(config_path, 'r') as f:
        config_dict = yaml.safe_load(f) or {}
    return Config(**config_dict)
