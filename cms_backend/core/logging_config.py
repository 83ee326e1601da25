"""
Logging configuration
"""
import logging
import sys

from cms_backend.core.config import settings

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"


def setup_logging(level: str = None) -> None:
    """
    Configure root logger once for the whole application.
    
    Args:
        level: Log level name, defaults to settings.LOG_LEVEL
    """
    level_name = (level or settings.LOG_LEVEL).upper()
    
    root = logging.getLogger()
    root.setLevel(level_name)
    
    # Avoid duplicate handlers on reload
    if not any(getattr(h, "_cms_handler", False) for h in root.handlers):
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(logging.Formatter(LOG_FORMAT))
        handler._cms_handler = True
        root.addHandler(handler)
    
    # SQL echo only in debug
    logging.getLogger("sqlalchemy.engine").setLevel(
        logging.INFO if settings.DEBUG else logging.WARNING
    )
