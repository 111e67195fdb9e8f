# core/logger.py
import logging
from app.core.config import settings

logger = logging.getLogger("trip_planner")
logger.setLevel(settings.LOG_LEVEL.upper())

if not logger.handlers:
    console_handler = logging.StreamHandler()
    console_handler.setFormatter(logging.Formatter("[%(asctime)s] [%(levelname)s] [%(name)s] %(message)s"))
    logger.addHandler(console_handler)
