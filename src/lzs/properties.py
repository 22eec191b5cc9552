from __future__ import annotations

"""
Serialized Property Descriptors.

`SerializeProperty` declares a field in a class body. The descriptor only
records its owner and attribute name when the class is created; the field is
registered by `register_properties`, which `Serializable.__init_subclass__` and
the `serializable` class decorator call once the class body is complete.
"""

import typing as t

from lzs.fields import register
from lzs.types.keys import MISSING, FieldKey, OpaqueKey, get_opaque_values, validate_field_key
from lzs.types.options import FieldOptions, OptionsInput

ClassT = t.TypeVar('ClassT', bound = type)

__all__ = [
    'SerializeProperty',
    'serialize_property',
    'register_properties',
    'find_property',
    'serializable',
]


class SerializeProperty:
    """A class attribute that is serialized under a document key.

    Example:
        >>> class User(Serializable):
        ...     user_name = SerializeProperty('user_name', default = 'anon')
        ...     tags = SerializeProperty(default_factory = list)
        ...
        >>> User().to_json()
        '{"user_name":"anon","tags":[]}'

    Args:
        options: `None`, an output key string, a `FieldOptions` or a mapping
            of option names.
        default: Value returned while the field was never assigned.
        default_factory: Called on first read to build the value, which is
            then stored on the instance.
        key: The field key. Defaults to the attribute name; pass an
            `OpaqueKey` to declare an opaque field.
    """

    def __init__(
        self,
        options: OptionsInput = None,
        *,
        default: t.Any = MISSING,
        default_factory: t.Optional[t.Callable[[], t.Any]] = None,
        key: t.Optional[FieldKey] = None,
    ):
        if default is not MISSING and default_factory is not None:
            raise ValueError('Cannot specify both `default` and `default_factory`')
        if key is not None: validate_field_key(key)
        self.options = options
        self.default = default
        self.default_factory = default_factory
        self.key = key
        self.name: t.Optional[str] = None
        self.owner: t.Optional[type] = None
        self.field_options: t.Optional[FieldOptions] = None

    @property
    def field_key(self) -> FieldKey:
        """
        Returns the key the field is registered under
        """
        return self.key if self.key is not None else self.name

    @property
    def is_opaque(self) -> bool:
        return isinstance(self.key, OpaqueKey)

    def __set_name__(self, owner: type, name: str) -> None:
        self.owner = owner
        self.name = name

    def register(self, owner: type) -> FieldOptions:
        """
        Registers the field on `owner`
        """
        self.field_options = register(owner, self.field_key, self.options)
        return self.field_options

    def _get_store(self, obj: t.Any) -> t.Tuple[t.Dict[t.Any, t.Any], t.Any]:
        if self.is_opaque:
            return get_opaque_values(obj, create = True), self.key
        return obj.__dict__, self.name

    def get_value(self, obj: t.Any) -> t.Any:
        """
        Returns the stored value, the default, or `MISSING`
        """
        store, slot = self._get_store(obj)
        if slot in store:
            return store[slot]
        if self.default_factory is not None:
            value = store[slot] = self.default_factory()
            return value
        return self.default

    def __get__(self, obj: t.Any, owner: t.Optional[type] = None) -> t.Any:
        if obj is None:
            return self
        value = self.get_value(obj)
        if value is MISSING:
            raise AttributeError(f"'{type(obj).__name__}' object has no attribute '{self.name}'")
        return value

    def __set__(self, obj: t.Any, value: t.Any) -> None:
        store, slot = self._get_store(obj)
        store[slot] = value

    def __delete__(self, obj: t.Any) -> None:
        store, slot = self._get_store(obj)
        if slot not in store:
            raise AttributeError(self.name)
        del store[slot]

    def __repr__(self) -> str:
        return f'SerializeProperty(name={self.name!r}, key={self.field_key!r}, options={self.options!r})'


serialize_property = SerializeProperty


def register_properties(cls: ClassT) -> ClassT:
    """
    Registers every `SerializeProperty` declared directly in the body of `cls`, in order
    """
    for value in list(vars(cls).values()):
        if isinstance(value, SerializeProperty):
            value.register(cls)
    return cls


def find_property(cls: type, key: FieldKey) -> t.Optional[SerializeProperty]:
    """
    Returns the nearest `SerializeProperty` along the MRO of `cls` declaring `key`
    """
    for klass in cls.__mro__:
        for value in vars(klass).values():
            if isinstance(value, SerializeProperty) and value.field_key == key:
                return value
    return None


def serializable(cls: ClassT) -> ClassT:
    """Class decorator registering the `SerializeProperty` fields of a plain class.

    Subclasses of `Serializable` are registered automatically and do not
    need it. Plain subclasses of a decorated class must be decorated too.
    """
    return register_properties(cls)
