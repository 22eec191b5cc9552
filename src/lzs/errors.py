from __future__ import annotations

"""Errors raised while declaring serializable fields.

Every error here is a configuration error: it is raised synchronously while a
class is being defined (or while a field is registered explicitly) and is not
caught anywhere inside the package.
"""

import typing as t

if t.TYPE_CHECKING:
    from .types.keys import FieldKey


ERROR_MESSAGE_OPAQUE_KEY = 'Opaque field keys require an explicit output key'
ERROR_MESSAGE_DUPLICATE_OUTPUT_KEY = 'Duplicate output key'
ERROR_MESSAGE_FROZEN_FIELD_MAP = 'Field map is frozen after first use'
ERROR_MESSAGE_INVALID_OPTIONS = 'Invalid field options'


class SerializationError(Exception):
    """Base class for every error raised by lzs"""


class FieldConfigurationError(SerializationError):
    """Describes a mistake in how a field was declared"""

    def __init__(
        self,
        msg: str,
        owner: t.Optional[type] = None,
        field_key: t.Optional['FieldKey'] = None,
    ) -> None:
        super().__init__(msg)
        self.message = msg
        """Our text for the error"""

        self.owner = owner
        """The class the field was being registered on"""

        self.field_key = field_key
        """The field key being registered"""


class OpaqueKeyWithoutNameError(FieldConfigurationError):
    """An opaque field key was registered without an output key"""

    def __init__(self, owner: t.Optional[type] = None, field_key: t.Optional['FieldKey'] = None) -> None:
        super().__init__(ERROR_MESSAGE_OPAQUE_KEY, owner = owner, field_key = field_key)


class DuplicateOutputKeyError(FieldConfigurationError):
    """Two distinct fields of the same class claim one output key"""

    def __init__(
        self,
        output_key: str,
        owner: t.Optional[type] = None,
        field_key: t.Optional['FieldKey'] = None,
        existing_key: t.Optional['FieldKey'] = None,
    ) -> None:
        super().__init__(f'{ERROR_MESSAGE_DUPLICATE_OUTPUT_KEY}: {output_key}', owner = owner, field_key = field_key)
        self.output_key = output_key
        """The output key both fields tried to claim"""

        self.existing_key = existing_key
        """The field key that claimed the output key first"""


class InvalidFieldOptionsError(FieldConfigurationError):
    """The options given for a field could not be normalized"""

    def __init__(self, detail: str, owner: t.Optional[type] = None, field_key: t.Optional['FieldKey'] = None) -> None:
        super().__init__(f'{ERROR_MESSAGE_INVALID_OPTIONS}: {detail}', owner = owner, field_key = field_key)
        self.detail = detail


class FrozenFieldMapError(FieldConfigurationError):
    """A field was registered on a class whose field map is already in use"""

    def __init__(self, owner: t.Optional[type] = None, field_key: t.Optional['FieldKey'] = None) -> None:
        name = getattr(owner, '__qualname__', owner)
        super().__init__(f'{ERROR_MESSAGE_FROZEN_FIELD_MAP}: {name}', owner = owner, field_key = field_key)
