import logging
import sys
from typing import Optional

from .config import Settings, settings as default_settings


LOG_FORMAT = (
    "%(asctime)s | %(levelname)s | %(name)s | %(message)s"
)


def setup_logging(settings: Optional[Settings] = None) -> None:
    settings = settings or default_settings
    handler = logging.StreamHandler(sys.stdout)
    handler.setFormatter(logging.Formatter(LOG_FORMAT))

    root = logging.getLogger()
    root.setLevel(logging.INFO if settings.is_production else logging.DEBUG)

    # Clear and re-add to avoid duplicate handlers with reload
    root.handlers = []
    root.addHandler(handler)

    # aiomysql and sqlalchemy are chatty at DEBUG
    logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)
    logging.getLogger("aiomysql").setLevel(logging.INFO)
