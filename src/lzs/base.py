from __future__ import annotations

"""
Serializable base class
"""

import typing as t

from lzs.engine import deserialize, serialize, serialize_document
from lzs.properties import register_properties
from lzs.types.keys import MISSING, FieldKey, get_field_value, set_field_value

if t.TYPE_CHECKING:
    from lzs.codec import JsonCodec
    from lzs.engine import DocumentInput

SerializableT = t.TypeVar('SerializableT', bound = 'Serializable')


class Serializable:
    """Base class for objects converted to and from JSON documents.

    Fields are declared with `SerializeProperty` in the class body and are
    registered when the subclass is created, in declaration order.

    Example:
        >>> class Point(Serializable):
        ...     x = SerializeProperty(default = 0)
        ...     y = SerializeProperty('Y', default = 0)
        ...
        >>> Point().from_json('{"x": 1, "Y": 2}').to_json()
        '{"x":1,"Y":2}'
    """

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        register_properties(cls)

    def __init__(self, **fields: t.Any):
        for name, value in fields.items():
            setattr(self, name, value)

    def to_dict(self) -> t.Dict[str, t.Any]:
        """
        Returns the document for this instance
        """
        return serialize_document(self)

    def to_json(self, codec: t.Optional['JsonCodec'] = None, **kwargs) -> str:
        """
        Returns the document for this instance as JSON text
        """
        return serialize(self, codec = codec, **kwargs)

    def from_json(self: SerializableT, document: 'DocumentInput', codec: t.Optional['JsonCodec'] = None) -> SerializableT:
        """
        Populates this instance from JSON text or a parsed document and returns it
        """
        return deserialize(self, document, codec = codec)

    from_dict = from_json

    @classmethod
    def parse(cls: t.Type[SerializableT], document: 'DocumentInput', codec: t.Optional['JsonCodec'] = None) -> SerializableT:
        """
        Creates a new instance populated from the document
        """
        return cls().from_json(document, codec = codec)

    def __getitem__(self, key: FieldKey) -> t.Any:
        value = get_field_value(self, key)
        if value is MISSING:
            raise KeyError(key)
        return value

    def __setitem__(self, key: FieldKey, value: t.Any) -> None:
        set_field_value(self, key, value)
