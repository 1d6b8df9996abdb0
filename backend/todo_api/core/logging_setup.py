import logging
import sys

_FORMAT = "%(asctime)s.%(msecs)03d %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"


def setup_logging(level: str | int = logging.INFO) -> None:
    """
    Attach a single stderr handler to the ``todo_api`` logger.

    Safe to call more than once (create_app runs per test); the handler is
    only added the first time, later calls just adjust the level.
    """
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logger = logging.getLogger("todo_api")
    logger.setLevel(level)

    if not any(getattr(h, "_todo_api", False) for h in logger.handlers):
        handler = logging.StreamHandler(sys.stderr)
        handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        handler._todo_api = True  # type: ignore[attr-defined]
        logger.addHandler(handler)
