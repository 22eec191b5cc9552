from __future__ import annotations

"""Logging helpers for lzs.

Wraps loguru with the package defaults. Import `logger` from here rather than
from `loguru` directly.
"""

from .static import (
    DEFAULT_FUNCTION_COLOR,
    DEFAULT_CLASS_COLOR,
    LOGLEVEL_MAPPING,
    REVERSE_LOGLEVEL_MAPPING,
)
from .main import (
    Logger,
    default_formatter,
    create_default_logger,
    change_logger_level,
    get_logger,
    logger,
)

__all__ = [
    "DEFAULT_FUNCTION_COLOR",
    "DEFAULT_CLASS_COLOR",
    "LOGLEVEL_MAPPING",
    "REVERSE_LOGLEVEL_MAPPING",
    "Logger",
    "default_formatter",
    "create_default_logger",
    "change_logger_level",
    "get_logger",
    "logger",
]
