from __future__ import annotations

"""
lzs Settings
"""

import functools
from pydantic_settings import BaseSettings
from typing import Optional


class SerializerSettings(BaseSettings):
    """
    Serializer Settings

    Environment variables:
        LZS_JSON_LIB: Module used to render and parse JSON text (must expose `dumps` / `loads`)
        LZS_COMPACT: Render JSON without whitespace between separators
        LZS_ENSURE_ASCII: Escape non-ascii characters when rendering
        LZS_STRICT_REGISTRATION: Raise when a field is registered after its class was used
        LZS_LOG_LEVEL: Minimum level for the lzs logger
        LZS_DEBUG_ENABLED: Shortcut that forces the `DEBUG` level
    """

    json_lib: str = 'json'
    compact: bool = True
    ensure_ascii: bool = False
    strict_registration: bool = True
    log_level: str = 'INFO'
    debug_enabled: Optional[bool] = False

    class Config:
        env_prefix = 'LZS_'
        case_sensitive = False
        extra = 'ignore'

    @property
    def logger_level(self) -> str:
        """
        Returns the effective logger level
        """
        return 'DEBUG' if self.debug_enabled else self.log_level.upper()

    def update_config(self, **kwargs):
        """
        Updates the settings in place, ignoring unknown keys
        """
        for k, v in kwargs.items():
            if not hasattr(self, k): continue
            setattr(self, k, v)


@functools.lru_cache()
def get_settings() -> SerializerSettings:
    """Get the lzs settings singleton"""
    return SerializerSettings()


def reset_settings() -> None:
    """
    Drops the cached settings and codec so the environment is read again,
    and moves the lzs logger to the level the fresh settings resolve to
    """
    from .codec import get_codec
    from .logging import change_logger_level
    get_settings.cache_clear()
    get_codec.cache_clear()
    change_logger_level(get_settings().logger_level)
