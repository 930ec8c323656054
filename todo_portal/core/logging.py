# File: todo_portal/core/logging.py

import logging
from typing import Optional

from todo_portal.core.config import settings

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"


def configure_logging(level: Optional[str] = None) -> None:
    """
    Configure the root logger once for the API process.

    Modules log through ``logging.getLogger(__name__)`` and prefix messages
    with a short tag ("[AUTH]", "[TODOS]", ...). Passwords, hashes and tokens
    are never passed to a logger.
    """
    logging.basicConfig(level=(level or settings.log_level).upper(), format=LOG_FORMAT)
