import logging
import sys
import traceback

from colorlog import ColoredFormatter

LOGGER_NAME = "azure_app_stack"

DEBUG_MODE = False


def setup_logger(debug_mode=False):
    logger = logging.getLogger(LOGGER_NAME)
    logger.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    formatter = ColoredFormatter(
        "%(log_color)s[%(levelname)s] %(message)s",
        log_colors={
            "DEBUG":    "cyan",
            "INFO":     "green",
            "WARNING":  "yellow",
            "ERROR":    "red",
            "CRITICAL": "red,bg_white",
        }
    )

    if not logger.handlers:
        handler = logging.StreamHandler(sys.stdout)
        handler.setFormatter(formatter)
        logger.addHandler(handler)

    # Re-configuration only changes the level of the existing handler
    for handler in logger.handlers:
        handler.setLevel(logging.DEBUG if debug_mode else logging.INFO)

    return logger


def configure_logger(mode: str):
    """
    Re-configure the package logger from the stack's ``mode`` value.

    Args:
        mode: Config mode, "DEBUG" (any case) turns on debug output.
    """
    global logger, DEBUG_MODE
    DEBUG_MODE = (mode or "").upper() == "DEBUG"
    logger = setup_logger(debug_mode=DEBUG_MODE)
    if DEBUG_MODE:
        logger.debug("Debug mode is active.")
    return logger


def get_debug_mode():
    return DEBUG_MODE


def print_stack_trace():
    """Log the current exception's stack trace if debug mode is enabled."""
    if get_debug_mode():
        logger.error(traceback.format_exc())


# Defaults to INFO until configure_logger() is called
logger = setup_logger(debug_mode=DEBUG_MODE)
