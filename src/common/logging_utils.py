"""Logging helpers shared by every module.

Modules create their own ``logging.getLogger(__name__)`` and pass structured
fields through ``extra=extra_context(...)`` so handlers can pick them up
without the message text changing.
"""
from __future__ import annotations

import logging
import os
from typing import Any, Dict, Optional

from constants import Constants


def configure_logging(level: Optional[str] = None) -> int:
    """Configure the root logger once for the process.

    Precedence: explicit argument, SBOM2GID_LOG_LEVEL, Constants.LOG_LEVEL.
    Unknown level names fall back to INFO.

    Returns:
        int: The numeric level that was applied.
    """
    name = level or os.environ.get(Constants.ENV_LOG_LEVEL) or Constants.LOG_LEVEL
    numeric = logging.getLevelName(str(name).upper())
    if not isinstance(numeric, int):
        numeric = logging.INFO
    logging.basicConfig(level=numeric, format=Constants.LOG_FORMAT)
    logging.getLogger().setLevel(numeric)
    return numeric


def extra_context(**fields: Any) -> Dict[str, Any]:
    """Build an ``extra`` mapping for a log call, dropping unset fields."""
    return {key: value for key, value in fields.items() if value is not None}


def is_debug_enabled(logger: logging.Logger) -> bool:
    """True when DEBUG records from this logger would be emitted."""
    return logger.isEnabledFor(logging.DEBUG)
