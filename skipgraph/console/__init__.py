"""Rich, structured console output for skipgraph.

Usage:
    from skipgraph.console import logger

    logger.info("Loading manifest...")
    logger.success("Graph built")
    logger.key_value({"layers": 4, "shortcuts": 2})
"""
from skipgraph.console.logger import Logger, get_logger

# Module-level singleton for convenient import
logger = get_logger()

__all__ = ["Logger", "get_logger", "logger"]
