from __future__ import annotations

import logging
import os

LOG_FORMAT = "%(asctime)s [%(levelname)s] %(name)s: %(message)s"


def setup_logging(debug: bool) -> None:
    level = logging.DEBUG if debug else logging.INFO
    # MUSICALZOE_LOG_LEVEL wins over --debug, e.g. when run under a process manager
    level_name = os.getenv("MUSICALZOE_LOG_LEVEL")
    if level_name:
        level = logging.getLevelName(level_name.upper())
        if not isinstance(level, int):
            level = logging.INFO

    logging.basicConfig(level=level, format=LOG_FORMAT)

    # urllib3 logs every pooled connection at DEBUG
    if not debug:
        logging.getLogger("urllib3").setLevel(logging.WARNING)
