# edoji/logs.py
from __future__ import annotations
import logging
from typing import Optional

FORMAT = '%(asctime)s - %(name)s - %(levelname)s - %(message)s'

def setup_logging(level: int = logging.INFO, logfile: Optional[str] = None):
    handlers = [logging.StreamHandler()]
    if logfile:
        handlers.append(logging.FileHandler(logfile))
    logging.basicConfig(level=level, format=FORMAT, handlers=handlers)
