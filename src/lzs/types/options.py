from __future__ import annotations

"""
Field Options and their normalization.
"""

import typing as t
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, ValidationError, field_validator

from lzs.errors import InvalidFieldOptionsError, OpaqueKeyWithoutNameError
from .keys import FieldKey, OpaqueKey

Strategy = t.Callable[[t.Any], t.Any]


class FieldOptions(BaseModel):
    """How one field maps to a document key.

    Attributes:
        output_key: The key the field is written under in the document.
        to_document: Converts the field value before it is written.
        from_document: Converts the document value before it is assigned.

    Both strategies default to the identity conversion.
    """

    model_config = ConfigDict(frozen = True, extra = 'forbid', arbitrary_types_allowed = True)

    output_key: str = Field(
        validation_alias = AliasChoices('output_key', 'serialized_key', 'serializedKey'),
    )
    to_document: t.Optional[Strategy] = Field(
        default = None,
        validation_alias = AliasChoices('to_document', 'to_json_strategy', 'toJsonStrategy'),
    )
    from_document: t.Optional[Strategy] = Field(
        default = None,
        validation_alias = AliasChoices('from_document', 'from_json_strategy', 'fromJsonStrategy'),
    )

    @field_validator('to_document', 'from_document', mode = 'before')
    @classmethod
    def validate_strategy(cls, v: t.Any) -> t.Optional[Strategy]:
        """
        Rejects strategies that cannot be called
        """
        if v is not None and not callable(v):
            raise ValueError(f'strategy must be callable, got {type(v).__name__}')
        return v

    def to_document_value(self, value: t.Any) -> t.Any:
        """
        Applies the `to_document` strategy
        """
        return value if self.to_document is None else self.to_document(value)

    def from_document_value(self, value: t.Any) -> t.Any:
        """
        Applies the `from_document` strategy
        """
        return value if self.from_document is None else self.from_document(value)


OptionsInput = t.Union[None, str, FieldOptions, t.Mapping[str, t.Any]]

_OUTPUT_KEY_NAMES = ('output_key', 'serialized_key', 'serializedKey')


def normalize_options(
    field_key: FieldKey,
    options: OptionsInput = None,
    owner: t.Optional[type] = None,
) -> FieldOptions:
    """Normalizes the accepted option forms into `FieldOptions`.

    Args:
        field_key: The key of the field being registered.
        options: `None`, an output key string, a `FieldOptions` or a mapping
            of option names.
        owner: The class the field belongs to, attached to raised errors.

    Raises:
        OpaqueKeyWithoutNameError: `field_key` is opaque and no output key was given.
        InvalidFieldOptionsError: The options could not be validated.
    """
    if isinstance(options, FieldOptions):
        return options
    if options is None:
        data: t.Dict[str, t.Any] = {}
    elif isinstance(options, str):
        data = {'output_key': options}
    elif isinstance(options, t.Mapping):
        data = dict(options)
    else:
        raise InvalidFieldOptionsError(
            f'expected a string, a mapping or FieldOptions, got {type(options).__name__}',
            owner = owner, field_key = field_key,
        )

    if all(data.get(name) is None for name in _OUTPUT_KEY_NAMES):
        if isinstance(field_key, OpaqueKey):
            raise OpaqueKeyWithoutNameError(owner = owner, field_key = field_key)
        for name in _OUTPUT_KEY_NAMES: data.pop(name, None)
        data['output_key'] = field_key

    try:
        return FieldOptions.model_validate(data)
    except ValidationError as e:
        raise InvalidFieldOptionsError(str(e), owner = owner, field_key = field_key) from e
