from __future__ import annotations

"""
Conversion Engine

Produces documents from instances and populates instances from documents
using the field map governing the instance's class.
"""

import typing as t
from collections.abc import Mapping

from lzs.codec import JsonCodec, get_codec
from lzs.fields import get_field_map, is_serializable_type
from lzs.logging import logger
from lzs.types.keys import MISSING, get_field_value, set_field_value

if t.TYPE_CHECKING:
    from lzs.fields import FieldMap

ObjT = t.TypeVar('ObjT')
DocumentInput = t.Union[str, bytes, bytearray, t.Mapping[str, t.Any], t.Any]

__all__ = [
    'to_document_value',
    'serialize_document',
    'serialize',
    'deserialize',
]


def to_document_value(value: t.Any) -> t.Any:
    """
    Replaces values that know how to serialize themselves with their documents

    Governed instances go through `serialize_document`, pydantic models through
    `model_dump(mode = 'json')` and other objects exposing `to_dict()` through
    that hook. Lists, tuples and dicts are walked. Everything else is returned
    unchanged.
    """
    if value is None or isinstance(value, (str, int, float, bool)):
        return value
    if is_serializable_type(type(value)):
        return serialize_document(value)
    if isinstance(value, (list, tuple)):
        return [to_document_value(item) for item in value]
    if isinstance(value, dict):
        return {key: to_document_value(item) for key, item in value.items()}
    if hasattr(value, 'model_dump'):
        return value.model_dump(mode = 'json')
    to_dict = getattr(value, 'to_dict', None)
    if callable(to_dict):
        return to_document_value(to_dict())
    return value


def _get_field_map(instance: t.Any) -> t.Optional['FieldMap']:
    field_map = get_field_map(type(instance))
    if field_map is not None:
        field_map.freeze()
    return field_map


def serialize_document(instance: t.Any) -> t.Dict[str, t.Any]:
    """Builds the document for `instance`.

    Fields are visited in field map order: inherited fields first, then the
    class' own. When two fields target the same output key the one visited
    last wins, which is always the subclass' own field.

    Fields that hold no value are dropped from the result.
    """
    field_map = _get_field_map(instance)
    document: t.Dict[str, t.Any] = {}
    if field_map is None:
        return document
    for key, options in field_map.items():
        value = get_field_value(instance, key)
        if value is MISSING:
            document[options.output_key] = MISSING
            continue
        document[options.output_key] = to_document_value(options.to_document_value(value))
    return {key: value for key, value in document.items() if value is not MISSING}


def serialize(instance: t.Any, codec: t.Optional[JsonCodec] = None, **kwargs) -> str:
    """
    Renders the document for `instance` as JSON text
    """
    codec = codec or get_codec()
    return codec.dumps(serialize_document(instance), **kwargs)


def deserialize(instance: ObjT, document: DocumentInput, codec: t.Optional[JsonCodec] = None) -> ObjT:
    """Populates `instance` from `document` and returns it.

    Args:
        instance: The object to populate.
        document: JSON text, or an already parsed document.
        codec: Codec used to parse text. Defaults to the configured codec.

    Each document key is routed to the single field that owns it. Keys no
    field owns are ignored, fields absent from the document keep their value.
    Text that cannot be parsed, or a document that is not a mapping, leaves
    the instance untouched.
    """
    field_map = _get_field_map(instance)
    name = type(instance).__qualname__
    if isinstance(document, (str, bytes, bytearray)):
        codec = codec or get_codec()
        try:
            document = codec.loads(document)
        except ValueError as e:
            logger.warning(f'Ignoring malformed document for {name}: {e}')
            return instance
    if not isinstance(document, Mapping):
        logger.warning(f'Ignoring document for {name}: expected a mapping, got {type(document).__name__}')
        return instance
    if field_map is None:
        return instance

    for output_key, value in document.items():
        entry = field_map.lookup(output_key)
        if entry is None:
            logger.trace(f'Ignoring unknown key {output_key!r} for {name}')
            continue
        field_key, options = entry
        set_field_value(instance, field_key, options.from_document_value(value))
    return instance
