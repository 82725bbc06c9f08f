"""Shared logging helpers for reviewdesk."""

from __future__ import annotations

import logging


def configure_logging(*, level: int = logging.INFO, force: bool = False) -> None:
    """Initialise the root logger once.

    Hosts embedding a review session usually own logging themselves; call this
    from scripts and notebooks that do not. ``force=True`` replaces handlers
    installed earlier, which tests rely on.
    """

    logging.basicConfig(
        level=level,
        format="%(asctime)s %(levelname)s [%(name)s] %(message)s",
        datefmt="%H:%M:%S",
        force=force,
    )
