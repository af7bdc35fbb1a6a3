import logging
import sys

_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"
_DATEFMT = "%Y-%m-%d %H:%M:%S"

_handler = None


def setup_logging(level="INFO") -> None:
    """Install one stderr handler on the root logger.

    Safe to call more than once (each app instance calls it); later calls only
    adjust the level.
    """
    global _handler

    root = logging.getLogger()
    if isinstance(level, str):
        level = logging.getLevelName(level.upper())
    root.setLevel(level)

    if _handler is None:
        _handler = logging.StreamHandler(sys.stderr)
        _handler.setFormatter(logging.Formatter(fmt=_FORMAT, datefmt=_DATEFMT))
        root.addHandler(_handler)
        logging.captureWarnings(True)

    # passlib logs a bcrypt version probe at warning level on first use
    logging.getLogger("passlib").setLevel(logging.ERROR)
