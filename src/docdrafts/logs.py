"""Logging setup for docdrafts entry points."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger with a terse CLI format.

    Library code only calls ``logging.getLogger(__name__)``; this is for entry
    points. Pass ``force=True`` to reconfigure (tests, repeated CLI runs).
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
