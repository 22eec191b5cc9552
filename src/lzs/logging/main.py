from __future__ import annotations

"""Factory helpers for the lzs logger.

lzs logs through its own loguru core so that registering fields or decoding
documents never writes into handlers an application configured on the global
loguru logger.
"""

import sys
import threading
import typing as t

from loguru._logger import Core as _Core
from loguru._logger import Logger as _Logger

from .static import DEFAULT_CLASS_COLOR, DEFAULT_FUNCTION_COLOR, REVERSE_LOGLEVEL_MAPPING

if t.TYPE_CHECKING:
    from loguru import Record

_lock = threading.Lock()
_logger_contexts: t.Dict[str, 'Logger'] = {}
_handler_configs: t.Dict[str, t.Dict[str, t.Any]] = {}

__all__ = [
    "Logger",
    "default_formatter",
    "create_default_logger",
    "change_logger_level",
    "get_logger",
    "logger",
]


class Logger(_Logger):

    name: str = None
    handler_id: t.Optional[int] = None
    current_level: t.Optional[str] = None


def default_formatter(record: 'Record') -> str:
    """
    Formats a record as `LEVEL time: module:function: message`
    """
    _extra = record.get('extra', {})
    if _extra.get('module_name'):
        extra = DEFAULT_CLASS_COLOR + '{extra[module_name]}</>:' + DEFAULT_FUNCTION_COLOR + '{function}</>: '
    else:
        extra = DEFAULT_CLASS_COLOR + '{name}</>:' + DEFAULT_FUNCTION_COLOR + '{function}</>: '
    return "<level>{level: <8}</> <green>{time:YYYY-MM-DD HH:mm:ss.SSS}</>: " \
        + extra + "<level>{message}</level>\n{exception}"


def _resolve_level(level: t.Union[str, int, None]) -> t.Union[str, int]:
    if level is None:
        from lzs.configs import get_settings
        level = get_settings().logger_level
    if isinstance(level, str):
        level = level.upper()
        if level not in REVERSE_LOGLEVEL_MAPPING:
            raise ValueError(f'Invalid log level: {level}')
    return level


def create_default_logger(
    name: str = 'lzs',
    level: t.Union[str, int, None] = None,
    format: t.Optional[t.Callable[['Record'], str]] = None,
    sink: t.Any = None,
    **kwargs: t.Any,
) -> Logger:
    """Return the logger registered under `name`, creating it on first use.

    Args:
        name: Registry key for the logger, also shown as the module name in
            every record.
        level: Minimum level for the handler. Defaults to the level from
            `SerializerSettings`.
        format: Optional callable used to format records.
        sink: Where records are written. Defaults to `sys.stderr`.
        **kwargs: Extra keyword arguments forwarded to `loguru.Logger.add`.

    Returns:
        Logger: The configured logger.
    """
    if name in _logger_contexts:
        return _logger_contexts[name]

    with _lock:
        if name in _logger_contexts:
            return _logger_contexts[name]
        level = _resolve_level(level)
        _logger = Logger(
            core=_Core(),
            exception=None,
            depth=0,
            record=False,
            lazy=False,
            colors=False,
            raw=False,
            capture=True,
            patchers=[],
            extra={'module_name': name},
        )
        _logger.name = name
        _handler_configs[name] = {
            'sink': sink or sys.stderr,
            'format': format or default_formatter,
            'backtrace': True,
            **kwargs,
        }
        _logger.handler_id = _logger.add(level = level, **_handler_configs[name])
        _logger.current_level = level
        _logger_contexts[name] = _logger
        return _logger


def change_logger_level(
    level: t.Union[str, int],
    name: str = 'lzs',
    verbose: bool = False,
) -> None:
    """Replace the handler of the named logger with one at `level`."""
    level = _resolve_level(level)
    _logger = create_default_logger(name)
    if level == _logger.current_level: return
    with _lock:
        if verbose: _logger.info(f'[{name}] Changing logger level from {_logger.current_level} -> {level}')
        _logger.remove(_logger.handler_id)
        _logger.handler_id = _logger.add(level = level, **_handler_configs[name])
        _logger.current_level = level


get_logger = create_default_logger
logger = create_default_logger('lzs')
