
import os
import logging

LOGS_DIR = "logs"
LOG_FILE = os.path.join(LOGS_DIR, "rncs.log")


def setup_logging(level=None):
    """Configure centralized logging for the application"""
    os.makedirs(LOGS_DIR, exist_ok=True)
    level = level or os.getenv("LOG_LEVEL", "INFO").upper()
    logging.basicConfig(
        level=level,
        format="%(asctime)s - [%(levelname)s] - %(name)s - %(message)s",
        handlers=[
            logging.FileHandler(LOG_FILE, encoding="utf-8"),
            logging.StreamHandler(),
        ],
    )
