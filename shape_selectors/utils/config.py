"""
Default configuration for the selectors.

Values can be overridden through ``SHAPESEL_`` environment variables,
e.g. ``SHAPESEL_FANCYBOX__MIN_SIZE=5``.
"""

import os
from typing import Mapping, Optional

from easydict import EasyDict as edict

from .env import load_cfg_from_env


def default_config() -> edict:
    return edict(
        {
            "fancybox": {
                # pixels, exclusive, checked on both axes
                "min_size": 3,
                "mask_color": "rgba(0,0,0,0.4)",
                "line_width": 1.0,
                "highlight_line_width": 1.2,
            },
            "marker": {
                "radius": 3.5,
                "line_width": 1.0,
                "fill": "#ffffff",
                "outline": "#000000",
            },
            "style": {
                "outer_color": "#000000",
                "outer_width": 2.5,
                "inner_color": "#ffffff",
                "inner_width": 1.4,
                "freehand_width": 2.0,
            },
            "highlight": {
                "color": "#fff000",
                "normal_color": "#ffffff",
                "expand": 1.2,
            },
        }
    )


def load_config(env: Optional[Mapping[str, str]] = None) -> edict:
    """Default configuration with environment overrides applied."""
    if env is None:
        env = os.environ
    return load_cfg_from_env(default_config(), dict(env))
