# /template_canvas/core/registry.py

from typing import Callable, Dict

TEMPLATE_DECODERS: Dict[str, Callable] = {}
SCHEMA_DETECTORS: Dict[str, Callable] = {}

def register_decoder(name: str, detector: Callable[[dict], bool]):
    """Decorator to register a template schema decoder together with its detection rule."""
    def decorator(func: Callable):
        if name in TEMPLATE_DECODERS:
            raise ValueError(f"Template decoder '{name}' is already registered.")
        TEMPLATE_DECODERS[name] = func
        SCHEMA_DETECTORS[name] = detector
        return func
    return decorator
