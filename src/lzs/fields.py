from __future__ import annotations

"""Per-class field maps and the registration entry point.

Each class that registers a field owns a `FieldMap`, stored on the class
itself. The first registration seeds the map with a shallow copy of the
nearest ancestor's map, freezing that ancestor's map in the process, so a
finalized map is never looked up through the inheritance chain at runtime.
"""

import typing as t

from lzs.configs import get_settings
from lzs.errors import DuplicateOutputKeyError, FrozenFieldMapError
from lzs.logging import logger
from lzs.types.keys import FieldKey, validate_field_key
from lzs.types.options import FieldOptions, OptionsInput, normalize_options

FIELD_MAP_ATTR = '__lzs_field_map__'

__all__ = [
    'FieldMap',
    'register',
    'get_field_map',
    'get_own_field_map',
    'ensure_field_map',
    'get_fields',
    'is_serializable_type',
]


def _owner_name(owner: t.Optional[type]) -> str:
    return getattr(owner, '__qualname__', repr(owner))


class FieldMap:
    """The field table of one class.

    - ``forward`` maps each field key to its options. Inherited entries come
      first, in the parent's order, followed by the class' own entries in
      declaration order.
    - ``reverse`` maps each output key to the field key that claimed it last.
    - ``own`` holds the output keys claimed by the class' own declarations and
      is only consulted to reject duplicates among them.
    """

    def __init__(
        self,
        owner: t.Optional[type] = None,
        forward: t.Optional[t.Mapping[FieldKey, FieldOptions]] = None,
        reverse: t.Optional[t.Mapping[str, FieldKey]] = None,
    ) -> None:
        self.owner = owner
        self.forward: t.Dict[FieldKey, FieldOptions] = dict(forward) if forward else {}
        self.reverse: t.Dict[str, FieldKey] = dict(reverse) if reverse else {}
        self.own: t.Dict[str, FieldKey] = {}
        self.frozen: bool = False

    def clone(self, owner: t.Optional[type] = None) -> 'FieldMap':
        """
        Returns an unfrozen copy of the entries, without the own-key bookkeeping
        """
        return self.__class__(owner = owner, forward = self.forward, reverse = self.reverse)

    def freeze(self) -> None:
        """
        Marks the map as finalized
        """
        if self.frozen: return
        self.frozen = True
        logger.debug(f'Finalized field map of {_owner_name(self.owner)} with {len(self.forward)} field(s)')

    def register(self, key: FieldKey, options: FieldOptions) -> None:
        """Binds `key` to `options`.

        Raises:
            DuplicateOutputKeyError: A different field declared by this same
                class already claimed `options.output_key`.
        """
        output_key = options.output_key
        existing = self.own.get(output_key)
        if existing is not None and existing != key:
            raise DuplicateOutputKeyError(output_key, owner = self.owner, field_key = key, existing_key = existing)

        previous = self.forward.get(key)
        self.forward[key] = options
        if previous is not None and previous.output_key != output_key:
            self._release(key, previous.output_key)

        shadowed = self.reverse.get(output_key)
        if shadowed is not None and shadowed != key:
            logger.debug(f'{_owner_name(self.owner)}.{key} shadows inherited field {shadowed} for output key {output_key!r}')
        self.reverse[output_key] = key
        self.own[output_key] = key
        logger.debug(f'Registered {_owner_name(self.owner)}.{key} -> {output_key!r}')

    def _release(self, key: FieldKey, output_key: str) -> None:
        """
        Unbinds `output_key` from `key` after `key` moved to another output key
        """
        if self.own.get(output_key) == key:
            del self.own[output_key]
        if self.reverse.get(output_key) != key:
            return
        claimants = [k for k, opts in self.forward.items() if opts.output_key == output_key]
        if claimants:
            self.reverse[output_key] = claimants[-1]
        else:
            del self.reverse[output_key]

    def lookup(self, output_key: str) -> t.Optional[t.Tuple[FieldKey, FieldOptions]]:
        """
        Returns the field key and options that own `output_key`
        """
        key = self.reverse.get(output_key)
        if key is None: return None
        return key, self.forward[key]

    def items(self) -> t.ItemsView[FieldKey, FieldOptions]:
        return self.forward.items()

    def __iter__(self) -> t.Iterator[FieldKey]:
        return iter(self.forward)

    def __len__(self) -> int:
        return len(self.forward)

    def __contains__(self, key: t.Any) -> bool:
        return key in self.forward

    def __repr__(self) -> str:
        fields = ', '.join(f'{k}->{o.output_key!r}' for k, o in self.forward.items())
        return f'<FieldMap {_owner_name(self.owner)}: {fields}>'


def get_own_field_map(cls: type) -> t.Optional[FieldMap]:
    """
    Returns the field map created for `cls` itself, ignoring ancestors
    """
    return cls.__dict__.get(FIELD_MAP_ATTR)


def get_field_map(cls: type) -> t.Optional[FieldMap]:
    """
    Returns the field map governing `cls`: its own, else the nearest ancestor's
    """
    for klass in cls.__mro__:
        field_map = get_own_field_map(klass)
        if field_map is not None:
            return field_map
    return None


def _get_inherited_field_map(cls: type) -> t.Optional[FieldMap]:
    """
    Returns the nearest field map along the MRO of `cls`, excluding `cls` itself
    """
    for klass in cls.__mro__[1:]:
        field_map = get_own_field_map(klass)
        if field_map is not None:
            return field_map
    return None


def is_serializable_type(cls: type) -> bool:
    """
    Returns whether instances of `cls` are governed by a field map
    """
    return isinstance(cls, type) and get_field_map(cls) is not None


def ensure_field_map(cls: type) -> FieldMap:
    """
    Returns the own field map of `cls`, cloning the nearest ancestor's on first use
    """
    field_map = get_own_field_map(cls)
    if field_map is not None:
        return field_map
    parent = _get_inherited_field_map(cls)
    if parent is not None:
        parent.freeze()
        field_map = parent.clone(owner = cls)
    else:
        field_map = FieldMap(owner = cls)
    setattr(cls, FIELD_MAP_ATTR, field_map)
    return field_map


def get_fields(cls: type) -> t.Dict[FieldKey, FieldOptions]:
    """
    Returns a copy of the forward mapping governing `cls`
    """
    field_map = get_field_map(cls)
    return dict(field_map.forward) if field_map is not None else {}


def register(owner: type, field_key: FieldKey, options: OptionsInput = None) -> FieldOptions:
    """Registers a field on `owner`.

    Args:
        owner: The class declaring the field.
        field_key: The attribute name, or an `OpaqueKey`.
        options: `None`, an output key string, a `FieldOptions` or a mapping
            of option names.

    Returns:
        FieldOptions: The normalized options that were stored.

    Raises:
        OpaqueKeyWithoutNameError: `field_key` is opaque and no output key was given.
        DuplicateOutputKeyError: Another field of `owner` already claimed the output key.
        InvalidFieldOptionsError: `options` could not be normalized.
        FrozenFieldMapError: `owner` was already used for conversion (strict mode).
    """
    if not isinstance(owner, type):
        raise TypeError(f'Fields can only be registered on classes, got {type(owner).__name__}')
    validate_field_key(field_key)
    field_options = normalize_options(field_key, options, owner = owner)
    field_map = ensure_field_map(owner)
    if field_map.frozen:
        if get_settings().strict_registration:
            raise FrozenFieldMapError(owner = owner, field_key = field_key)
        logger.warning(f'Registering {_owner_name(owner)}.{field_key} after its field map was finalized')
    field_map.register(field_key, field_options)
    return field_options
