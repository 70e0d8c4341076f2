"""Application logging configuration values."""

import os


APP_LOG_LEVEL = (os.getenv("APP_LOG_LEVEL") or "INFO").upper()
APP_LOG_FORMAT = os.getenv(
    "APP_LOG_FORMAT",
    "%(asctime)s %(levelname)-7s %(name)s gen=%(session_generation)s req=%(request_id)s | %(message)s",
)
APP_LOG_DATEFMT = os.getenv("APP_LOG_DATEFMT", "%H:%M:%S")


__all__ = [
    "APP_LOG_LEVEL",
    "APP_LOG_FORMAT",
    "APP_LOG_DATEFMT",
]
