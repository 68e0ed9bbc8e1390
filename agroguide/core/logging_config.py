"""
Logging setup for the AgroGuide backend
"""
import logging

from agroguide.core.config import get_settings

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"

_configured = False


def configure_logging(level: str | None = None) -> None:
    """Configure the root logger once. Later calls only adjust the level."""
    global _configured

    level_name = (level or get_settings().log_level).upper()
    root = logging.getLogger()

    if not _configured:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        root.addHandler(handler)
        _configured = True

    root.setLevel(getattr(logging, level_name, logging.INFO))
