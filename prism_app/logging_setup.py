"""
Console logging for the CLI and the Streamlit app.

Library modules only create module-level loggers; handlers are installed here,
once, by the entry point.
"""
from __future__ import annotations

import logging

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
CONSOLE_HANDLER_NAME = "prism_console"


def setup_console_logging(level: int | str = logging.INFO) -> logging.Logger:
    """Attach one stream handler to the `prism_app` logger (idempotent)."""
    logger = logging.getLogger("prism_app")
    logger.setLevel(level)
    if not any(h.name == CONSOLE_HANDLER_NAME for h in logger.handlers):
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler.name = CONSOLE_HANDLER_NAME
        logger.addHandler(handler)
    return logger
