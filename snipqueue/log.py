"""Package-wide logger."""

from __future__ import annotations

import logging

logger = logging.getLogger("snipqueue")


def enable_debug_logging() -> None:
    """Attach a stderr handler at DEBUG level (used by ``--debug``)."""
    handler = logging.StreamHandler()
    handler.setFormatter(
        logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(logging.DEBUG)
