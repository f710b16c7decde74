from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def configure_logging(level: str = "INFO") -> None:
    """Install one stream handler on the package logger.

    Safe to call more than once (app factory runs per test).
    """

    root = logging.getLogger("peopleops")
    root.setLevel(getattr(logging, str(level).upper(), logging.INFO))
    if any(getattr(h, "_peopleops", False) for h in root.handlers):
        return

    handler = logging.StreamHandler()
    handler.setFormatter(logging.Formatter(LOG_FORMAT))
    handler._peopleops = True  # type: ignore[attr-defined]
    root.addHandler(handler)
