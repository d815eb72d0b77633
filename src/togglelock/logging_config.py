import logging
import sys
from typing import Optional, Union

FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(
    level: Union[int, str] = logging.WARNING, log_file: Optional[str] = None
) -> None:
    """Attach stderr (and optionally file) handlers to the 'togglelock' logger."""
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())

    logger = logging.getLogger("togglelock")
    logger.setLevel(level)
    logger.handlers.clear()

    # stdout is reserved for the status line
    handlers: list[logging.Handler] = [logging.StreamHandler(sys.stderr)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode="w", encoding="utf-8"))

    formatter = logging.Formatter(FORMAT, datefmt="%H:%M:%S")
    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    logger.debug("Logging initialized.")
