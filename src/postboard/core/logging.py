"""Root logger setup shared by the API and the command-line scripts."""

import logging
import sys

_HANDLER_ATTR = "_postboard"


def setup_logging(level: str | int = logging.INFO) -> None:
    """Attach a single stdout handler to the root logger.

    Safe to call multiple times; the handler is only added once.
    """
    if isinstance(level, str):
        level = getattr(logging, level.upper(), logging.INFO)

    root = logging.getLogger()
    root.setLevel(level)

    for handler in root.handlers:
        if getattr(handler, _HANDLER_ATTR, False):
            return

    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(
        logging.Formatter(
            fmt="%(asctime)s | %(levelname)-8s | %(name)s | %(message)s",
            datefmt="%Y-%m-%d %H:%M:%S",
        )
    )
    setattr(handler, _HANDLER_ATTR, True)
    root.addHandler(handler)
