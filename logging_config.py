"""
Logging setup for TapCalc
"""
import logging
import sys
from typing import Optional

import config

LOG_FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'


def setup_logging(level: int = config.LOG_LEVEL, log_file: Optional[str] = config.LOG_FILE) -> None:
    """Send TapCalc log records to stdout and, if log_file is set, append them there too."""
    root = logging.getLogger()
    root.setLevel(level)
    # the GUI and the API server both call this; keep one set of handlers
    root.handlers.clear()

    formatter = logging.Formatter(LOG_FORMAT, datefmt='%H:%M:%S')
    handlers = [logging.StreamHandler(sys.stdout)]
    if log_file:
        handlers.append(logging.FileHandler(log_file, mode='a', encoding='utf-8'))

    for handler in handlers:
        handler.setLevel(level)
        handler.setFormatter(formatter)
        root.addHandler(handler)

    root.debug(f"Logging to stdout{' and ' + log_file if log_file else ''} at {logging.getLevelName(level)}")
