"""Logging configuration for repogen."""

import logging
import sys
from typing import Optional
from repogen.core.config import settings

ROOT_LOGGER_NAME = "repogen"

def setupLogging(level: Optional[str] = None, logFile: Optional[str] = None, formatString: Optional[str] = None) -> None:
    """
    Configure the ``repogen`` logger tree.

    Args:
        level: Logging level name (DEBUG, INFO, WARNING, ERROR, CRITICAL)
        logFile: Optional file path for file logging
        formatString: Optional custom format string
    """
    logLevel = getattr(logging, (level or settings.logLevel).upper(), logging.INFO)
    logFilePath = logFile or settings.logFile

    if formatString is None:
        formatString = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

    rootLogger = logging.getLogger(ROOT_LOGGER_NAME)
    rootLogger.setLevel(logLevel)
    rootLogger.handlers.clear()

    consoleHandler = logging.StreamHandler(sys.stderr)
    consoleHandler.setLevel(logLevel)
    consoleHandler.setFormatter(logging.Formatter(formatString))
    rootLogger.addHandler(consoleHandler)

    if logFilePath:
        fileHandler = logging.FileHandler(logFilePath, encoding="utf-8")
        fileHandler.setLevel(logLevel)
        fileHandler.setFormatter(logging.Formatter(formatString))
        rootLogger.addHandler(fileHandler)

    rootLogger.propagate = False

def getLogger(name: str) -> logging.Logger:
    if name == ROOT_LOGGER_NAME or name.startswith(ROOT_LOGGER_NAME + "."):
        return logging.getLogger(name)
    return logging.getLogger(f"{ROOT_LOGGER_NAME}.{name}")
