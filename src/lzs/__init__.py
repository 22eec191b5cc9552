from __future__ import annotations

"""Declarative field serialization.

Classes declare, per field, the document key the field maps to and how its
value converts in each direction. `serialize` builds a JSON document from an
instance and `deserialize` populates an instance from one.

    >>> from lzs import Serializable, SerializeProperty
    >>> class User(Serializable):
    ...     user_name = SerializeProperty('user_name', default = 'anon')
    ...
    >>> User().from_json('{"user_name": "ada"}').user_name
    'ada'
"""

from .version import VERSION
from .errors import (
    SerializationError,
    FieldConfigurationError,
    OpaqueKeyWithoutNameError,
    DuplicateOutputKeyError,
    InvalidFieldOptionsError,
    FrozenFieldMapError,
)
from .types import (
    MISSING,
    OpaqueKey,
    FieldKey,
    FieldOptions,
    get_field_value,
    set_field_value,
)
from .configs import SerializerSettings, get_settings, reset_settings
from .codec import JsonCodec, get_codec
from .fields import (
    FieldMap,
    register,
    get_field_map,
    get_fields,
    is_serializable_type,
)
from .engine import serialize, serialize_document, deserialize
from .properties import SerializeProperty, serialize_property, serializable
from .base import Serializable
from .strategies import (
    compose_strategy,
    for_each,
    revive,
    iso_datetime_to_document,
    iso_datetime_from_document,
)

__version__ = VERSION

__all__ = [
    "VERSION",
    "SerializationError",
    "FieldConfigurationError",
    "OpaqueKeyWithoutNameError",
    "DuplicateOutputKeyError",
    "InvalidFieldOptionsError",
    "FrozenFieldMapError",
    "MISSING",
    "OpaqueKey",
    "FieldKey",
    "FieldOptions",
    "get_field_value",
    "set_field_value",
    "SerializerSettings",
    "get_settings",
    "reset_settings",
    "JsonCodec",
    "get_codec",
    "FieldMap",
    "register",
    "get_field_map",
    "get_fields",
    "is_serializable_type",
    "serialize",
    "serialize_document",
    "deserialize",
    "SerializeProperty",
    "serialize_property",
    "serializable",
    "Serializable",
    "compose_strategy",
    "for_each",
    "revive",
    "iso_datetime_to_document",
    "iso_datetime_from_document",
]
