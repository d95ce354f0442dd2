"""
zcatr Logger - Centralized Logging Utility
Diagnostics go to stderr; stdout is reserved for rendered content.
"""
import logging
import sys

def setup_logger():
    # Create a custom logger
    logger = logging.getLogger("zcatr")
    logger.setLevel(logging.DEBUG)

    # Create handlers
    c_handler = logging.StreamHandler(sys.stderr)
    c_handler.setLevel(logging.INFO)

    # Create formatters and add it to handlers
    c_format = logging.Formatter('%(message)s') # Clean output for CLI
    c_handler.setFormatter(c_format)

    # Add handlers to the logger
    if not logger.handlers:
        logger.addHandler(c_handler)

    return logger


def set_verbosity(verbose: bool):
    """Switch console diagnostics between INFO and DEBUG"""
    level = logging.DEBUG if verbose else logging.INFO
    for handler in logger.handlers:
        handler.setLevel(level)

# Initialize singleton
logger = setup_logger()

__all__ = ["logger", "set_verbosity"]
