"""
Step-oriented logging helpers.
Each pipeline step is logged with a short name and a JSON-rendered payload.
"""
import json
import logging
from typing import Any

logger = logging.getLogger("ogp_service")

_LEVELS = {
    "input": logging.INFO,
    "output": logging.INFO,
    "info": logging.INFO,
    "warning": logging.WARNING,
    "error": logging.ERROR,
}

_ICONS = {
    "input": "->",
    "output": "<-",
    "info": "--",
    "warning": "!!",
    "error": "xx",
}


def configure_logging(debug: bool = False) -> None:
    """Install a basic handler on the service logger (idempotent)."""
    if not logger.handlers:
        handler = logging.StreamHandler()
        handler.setFormatter(logging.Formatter("%(asctime)s %(levelname)s %(name)s %(message)s"))
        logger.addHandler(handler)
    logger.setLevel(logging.DEBUG if debug else logging.INFO)


def _render(data: Any) -> str:
    if isinstance(data, str):
        return data
    try:
        return json.dumps(data, ensure_ascii=False, default=str)
    except (TypeError, ValueError):
        return repr(data)


def print_step(step: str, data: Any = None, kind: str = "info") -> None:
    """
    Log a named step of request processing.

    Args:
        step: Human readable step name
        data: Payload (dict, list or string) describing the step
        kind: One of input, output, info, warning, error
    """
    level = _LEVELS.get(kind, logging.INFO)
    icon = _ICONS.get(kind, "--")
    if data is None:
        logger.log(level, "%s %s", icon, step)
    else:
        logger.log(level, "%s %s: %s", icon, step, _render(data))
