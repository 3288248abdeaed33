"""
Selector variants and their registry.
"""

from typing import Dict, Type

from .base import BaseSelector
from .directed_rect import DirectedRectSelector
from .fancy_box import FancyBoxSelector
from .freehand import FreehandSelector

SELECTORS: Dict[str, Type[BaseSelector]] = {
    cls.name: cls for cls in (DirectedRectSelector, FancyBoxSelector, FreehandSelector)
}


def create_selector(name: str, annotator, surface, config=None) -> BaseSelector:
    """
    Instantiate a registered selector.

    Raises:
        KeyError: If no selector is registered under ``name``
    """
    if name not in SELECTORS:
        raise KeyError(f"Unknown selector '{name}', expected one of {sorted(SELECTORS)}")
    return SELECTORS[name](annotator, surface, config)


__all__ = [
    "BaseSelector",
    "DirectedRectSelector",
    "FancyBoxSelector",
    "FreehandSelector",
    "SELECTORS",
    "create_selector",
]
