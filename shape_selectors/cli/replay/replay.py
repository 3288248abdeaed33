import json
import logging
from gettext import gettext as _
from pathlib import Path
from typing import List, Optional, Tuple

import cv2
import numpy as np
from easydict import EasyDict as edict

from shape_selectors.core.selection import (
    POINTER_MOVE,
    POINTER_UP,
    EventType,
    PointerEvent,
    SelectionEvent,
)
from shape_selectors.interfaces import (
    Annotator,
    ImageSurface,
    ViewportTransform,
    install_selector,
)
from shape_selectors.utils.config import load_config

logger = logging.getLogger(__name__)

_POINTER_KINDS = {"move": POINTER_MOVE, "up": POINTER_UP}


def replay_trace(
    trace: dict, config: Optional[edict] = None, selector: Optional[str] = None
) -> Tuple[Annotator, List[SelectionEvent]]:
    """
    Replay a pointer trace and collect the events fired by the selector.

    Args:
        trace: Dict with ``width``, ``height``, ``events`` and optionally
            ``selector`` and ``viewport``
        config: Selector configuration
        selector: Selector name overriding ``trace["selector"]``

    Returns:
        The annotator used and the events it emitted
    """
    name = selector or trace.get("selector", "directed_rect")
    surface = ImageSurface(trace["width"], trace["height"])
    annotator = Annotator(
        surface,
        transform=ViewportTransform.from_dict(trace.get("viewport")),
        config=config,
    )
    install_selector(annotator, name, activate=True)

    fired: List[SelectionEvent] = []
    for event_type in EventType:
        annotator.events.on(event_type, fired.append)

    for raw in trace["events"]:
        kind = raw.get("type")
        event = PointerEvent.from_dict(raw)
        if kind == "down":
            annotator.start_selection(event.x, event.y)
        elif kind in _POINTER_KINDS:
            surface.dispatch(_POINTER_KINDS[kind], event)
        else:
            raise ValueError(f"Unknown pointer event type: {kind}")

    return annotator, fired


def render_result(
    annotator: Annotator, fired: List[SelectionEvent], background: Optional[np.ndarray] = None
) -> np.ndarray:
    """RGB image with every completed shape drawn on ``background``."""
    surface = annotator.surface
    if background is None:
        background = np.zeros((surface.height, surface.width, 3), dtype=np.uint8)
    surface.clear()
    for event in fired:
        if event.event_type is EventType.SELECTION_COMPLETED:
            annotator.draw_shape(event.data["shape"])
    return surface.composite(background)


def handle(args):
    config = load_config()
    trace = json.loads(Path(args.trace).read_text())
    logger.debug(_("Replaying {n} pointer events").format(n=len(trace["events"])))

    annotator, fired = replay_trace(trace, config=config, selector=args.selector)
    print(json.dumps([event.to_dict() for event in fired], indent=2))

    if args.render is not None:
        background = None
        if args.image is not None:
            bgr = cv2.imread(str(args.image))
            if bgr is None:
                raise ValueError(f"Cannot read image {args.image}")
            background = cv2.cvtColor(bgr, cv2.COLOR_BGR2RGB)
        rendered = render_result(annotator, fired, background)
        cv2.imwrite(str(args.render), cv2.cvtColor(rendered, cv2.COLOR_RGB2BGR))
        logger.debug(_("Rendered selection to '{path}'").format(path=args.render))
    return fired
