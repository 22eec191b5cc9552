from __future__ import annotations

"""
Field keys and instance access.

A field key is either a `str` (an attribute name) or an `OpaqueKey`, a token
compared by identity that has no textual form of its own.
"""

import typing as t


class _Missing:
    """Marks a field that holds no value at all"""

    _instance: t.Optional['_Missing'] = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self) -> str:
        return 'MISSING'

    def __bool__(self) -> bool:
        return False


MISSING = _Missing()

OPAQUE_VALUES_ATTR = '__lzs_opaque_values__'


class OpaqueKey:
    """An identity-compared field key.

    Two keys created with the same description are still distinct keys.
    The description only appears in `repr` and error messages.

    Example:
        >>> TOKEN = OpaqueKey('token')
        >>> TOKEN == OpaqueKey('token')
        False
    """

    __slots__ = ('description',)

    def __init__(self, description: t.Optional[str] = None):
        self.description = description

    def __repr__(self) -> str:
        return f'OpaqueKey({self.description!r})' if self.description is not None else 'OpaqueKey()'


FieldKey = t.Union[str, OpaqueKey]


def is_opaque_key(key: t.Any) -> bool:
    """
    Returns whether the key is an opaque key
    """
    return isinstance(key, OpaqueKey)


def validate_field_key(key: t.Any) -> FieldKey:
    """
    Ensures the key is a valid field key
    """
    if not isinstance(key, (str, OpaqueKey)):
        raise TypeError(f'Field keys must be `str` or `OpaqueKey`, got {type(key).__name__}')
    return key


def get_opaque_values(instance: t.Any, create: bool = False) -> t.Optional[t.Dict[OpaqueKey, t.Any]]:
    """
    Returns the table holding the instance's opaque field values
    """
    values = instance.__dict__.get(OPAQUE_VALUES_ATTR)
    if values is None and create:
        values = instance.__dict__[OPAQUE_VALUES_ATTR] = {}
    return values


def get_field_value(instance: t.Any, key: FieldKey) -> t.Any:
    """
    Reads a field from the instance, returning `MISSING` when it holds no value
    """
    if isinstance(key, OpaqueKey):
        values = get_opaque_values(instance)
        if values is not None and key in values:
            return values[key]
        # a descriptor may still supply a default for the opaque field
        from lzs.properties import find_property
        prop = find_property(type(instance), key)
        return prop.get_value(instance) if prop is not None else MISSING
    try:
        return getattr(instance, key)
    except AttributeError:
        return MISSING


def set_field_value(instance: t.Any, key: FieldKey, value: t.Any) -> None:
    """
    Writes a field on the instance
    """
    if isinstance(key, OpaqueKey):
        get_opaque_values(instance, create = True)[key] = value
        return
    setattr(instance, key, value)
