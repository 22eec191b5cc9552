from __future__ import annotations

"""
JSON text codec used to render and parse documents
"""

import json
import functools
import importlib
from types import ModuleType
from typing import Any, Optional, Union


def _resolve_jsonlib(lib: Union[str, ModuleType, Any]) -> Any:
    if isinstance(lib, str):
        lib = importlib.import_module(lib)
    assert hasattr(lib, "dumps") and hasattr(lib, "loads"), f"Invalid JSON Library: {lib}"
    return lib


class JsonCodec:
    """
    Renders documents to JSON text and parses JSON text back into documents

    Any module exposing `dumps` / `loads` can be used (`json`, `ujson`, `orjson`, ...).
    Layout options are only forwarded to the standard library `json`; other libraries
    render with their own defaults.
    """

    jsonlib: Any = json
    compact: Optional[bool] = True
    ensure_ascii: Optional[bool] = False

    def __init__(
        self,
        jsonlib: Optional[Union[str, ModuleType, Any]] = None,
        compact: Optional[bool] = None,
        ensure_ascii: Optional[bool] = None,
    ):
        if jsonlib is not None: self.jsonlib = _resolve_jsonlib(jsonlib)
        if compact is not None: self.compact = compact
        if ensure_ascii is not None: self.ensure_ascii = ensure_ascii
        self.jsonlib_name: str = self.jsonlib.__name__

    @property
    def is_stdlib(self) -> bool:
        """
        Returns whether the codec uses the standard library `json`
        """
        return self.jsonlib is json

    def dumps(self, document: Any, **kwargs) -> str:
        """
        Renders the document as JSON text
        """
        if self.is_stdlib:
            if self.compact: kwargs.setdefault('separators', (',', ':'))
            kwargs.setdefault('ensure_ascii', self.ensure_ascii)
        value = self.jsonlib.dumps(document, **kwargs)
        if isinstance(value, (bytes, bytearray)):
            value = value.decode('utf-8')
        return value

    def loads(self, text: Union[str, bytes, bytearray], **kwargs) -> Any:
        """
        Parses JSON text into a document
        """
        return self.jsonlib.loads(text, **kwargs)

    def __repr__(self) -> str:
        return f'<JsonCodec {self.jsonlib_name} compact={self.compact}>'


@functools.lru_cache()
def get_codec() -> JsonCodec:
    """
    Returns the codec configured by `SerializerSettings`
    """
    from lzs.configs import get_settings
    settings = get_settings()
    return JsonCodec(
        jsonlib = settings.json_lib,
        compact = settings.compact,
        ensure_ascii = settings.ensure_ascii,
    )
