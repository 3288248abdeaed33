"""
Interfaces module - host collaborators for the selection core.

Provides a concrete annotator host and a numpy/OpenCV drawing surface.
"""

from .annotator import Annotator, ViewportTransform, install_selector
from .image_surface import ImageSurface, parse_color

__all__ = ["Annotator", "ViewportTransform", "install_selector", "ImageSurface", "parse_color"]
