"""
Field keys and options shared by the registration and conversion layers
"""

from .keys import (
    MISSING,
    OpaqueKey,
    FieldKey,
    is_opaque_key,
    validate_field_key,
    get_field_value,
    set_field_value,
)
from .options import (
    FieldOptions,
    OptionsInput,
    Strategy,
    normalize_options,
)
