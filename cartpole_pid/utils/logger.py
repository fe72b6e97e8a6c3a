"""Package-wide logger."""

import logging

logger = logging.getLogger("cartpole_pid")
logger.addHandler(logging.NullHandler())


def setup_console_logging(level: int = logging.INFO) -> logging.Handler:
    """Attach a console handler to the package logger.

    Args:
        level: Logging level for both the logger and the handler.

    Returns:
        The handler that was added.
    """
    handler = logging.StreamHandler()
    handler.setLevel(level)
    handler.setFormatter(
        logging.Formatter("%(asctime)s [%(levelname)s] %(name)s: %(message)s")
    )
    logger.addHandler(handler)
    logger.setLevel(level)
    return handler
