# flake8: noqa E501

from gettext import gettext as _
from pathlib import Path

COMMAND_DESCRIPTION = _("Replay a recorded pointer trace through a selector")


def command(subparser):
    subparser.add_argument("trace", type=Path, help=_("JSON file with the pointer trace"))
    subparser.add_argument(
        "-s",
        "--selector",
        dest="selector",
        default=None,
        help=_("Selector to use, overrides the one named in the trace"),
    )
    subparser.add_argument(
        "-r",
        "--render",
        dest="render",
        type=Path,
        default=None,
        help=_("Write an image with the committed shape drawn on it"),
    )
    subparser.add_argument(
        "-i",
        "--image",
        dest="image",
        type=Path,
        default=None,
        help=_("Background image for --render"),
    )

    def handle(args):
        from .replay import handle as replay_handle

        return replay_handle(args)

    return handle
