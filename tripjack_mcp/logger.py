import logging
import os
import sys

LOGGER_NAME = "tripjack_mcp"


def configure_logging(debug: bool = False) -> logging.Logger:
    """Send log records to stderr (stdout is reserved for the MCP stdio protocol)."""
    logging.basicConfig(
        level=os.getenv("LOG_LEVEL", "INFO").upper(),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        stream=sys.stderr
    )
    logger = logging.getLogger(LOGGER_NAME)
    if debug:
        logger.setLevel(logging.DEBUG)
        logger.debug("Debug logging enabled")
    return logger
