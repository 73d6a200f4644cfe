from __future__ import annotations

import logging


def configure_logging(level: str = "INFO") -> None:
    """
    Configure stdlib logging for the staffhub.* loggers.

    Uvicorn installs its own handlers; when running without it (scripts,
    tests) a basic stream handler is added so our records still show up.
    """
    normalized = level.upper()
    if not logging.getLogger().handlers:
        logging.basicConfig(
            level=normalized,
            format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        )
    logger = logging.getLogger("staffhub")
    logger.setLevel(normalized)
    logger.propagate = True
