"""Logging configuration for captrix.

Messages logged while a route is being tried carry the route name in
``extra["route"]`` (see ``route_context``); verbose output shows it.
"""

import sys
from typing import Any

from loguru import logger

# Remove default handler
logger.remove()

_info_format = "<level>{level: <7}</level> | {message}"
_debug_prefix = "<dim>{time:HH:mm:ss}</dim> | <level>{level: <7}</level> | <cyan>{name}</cyan> | "


def _debug_format(record: Any) -> str:
    route = "<magenta>{extra[route]}</magenta> | " if record["extra"].get("route") else ""
    return _debug_prefix + route + "{message}\n{exception}"


def route_context(name: str) -> Any:
    """Tag every message logged inside the block with a route name."""
    return logger.contextualize(route=name)


def configure_logging(verbose: bool = False) -> None:
    """Configure logging based on verbosity.

    Args:
        verbose: If True, show DEBUG level with timestamps, module and route names.
            If False, show INFO and above.
    """
    logger.remove()
    if verbose:
        logger.add(sys.stderr, format=_debug_format, level="DEBUG")
    else:
        logger.add(sys.stderr, format=_info_format, level="INFO")


__all__ = ["logger", "configure_logging", "route_context"]
