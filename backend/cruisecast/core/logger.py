import logging
import sys

from cruisecast.core.config import LOG_LEVEL

_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"
_configured = False


def _configure_root() -> None:
    global _configured
    if _configured:
        return
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(_FORMAT))
    root = logging.getLogger("cruisecast")
    root.addHandler(handler)
    root.setLevel(LOG_LEVEL.upper())
    root.propagate = False
    _configured = True


def get_logger(name: str) -> logging.Logger:
    _configure_root()
    if not name.startswith("cruisecast"):
        name = f"cruisecast.{name}"
    return logging.getLogger(name)
