from __future__ import annotations

import pytest

from lzs.errors import (
    ERROR_MESSAGE_OPAQUE_KEY,
    DuplicateOutputKeyError,
    FrozenFieldMapError,
    InvalidFieldOptionsError,
    OpaqueKeyWithoutNameError,
)
from lzs.engine import serialize_document
from lzs.fields import FieldMap, ensure_field_map, get_field_map, get_fields, get_own_field_map, register
from lzs.types import FieldOptions, OpaqueKey


def test_textual_key_defaults_output_key_to_its_name() -> None:
    class Owner:
        pass

    options = register(Owner, 'user_name')

    assert options.output_key == 'user_name'
    assert get_field_map(Owner).reverse == {'user_name': 'user_name'}


def test_options_accept_string_mapping_and_model_forms() -> None:
    class Owner:
        pass

    upper = str.upper
    register(Owner, 'a', 'A')
    register(Owner, 'b', {'serialized_key': 'B', 'to_json_strategy': upper})
    register(Owner, 'c', FieldOptions(output_key='C'))
    register(Owner, 'd', {'fromJsonStrategy': upper})

    fields = get_fields(Owner)
    assert [o.output_key for o in fields.values()] == ['A', 'B', 'C', 'd']
    assert fields['b'].to_document is upper
    assert fields['d'].from_document is upper


def test_opaque_key_requires_output_key() -> None:
    class Owner:
        pass

    token = OpaqueKey('token')
    with pytest.raises(OpaqueKeyWithoutNameError) as excinfo:
        register(Owner, token)
    assert excinfo.value.message == ERROR_MESSAGE_OPAQUE_KEY
    assert excinfo.value.field_key is token

    with pytest.raises(OpaqueKeyWithoutNameError):
        register(Owner, token, {'from_document': str})

    assert register(Owner, token, 'token').output_key == 'token'
    assert get_field_map(Owner).reverse == {'token': token}


def test_duplicate_output_key_in_same_class_fails() -> None:
    class Owner:
        pass

    register(Owner, 'serialize_me', 'serialize_me')
    with pytest.raises(DuplicateOutputKeyError) as excinfo:
        register(Owner, 'serialize_me_too', 'serialize_me')

    assert excinfo.value.output_key == 'serialize_me'
    assert str(excinfo.value) == 'Duplicate output key: serialize_me'
    assert excinfo.value.existing_key == 'serialize_me'


def test_redeclaring_same_key_rebinds_output_key() -> None:
    class Owner:
        pass

    register(Owner, 'a', 'k1')
    register(Owner, 'a', 'k2')
    field_map = get_field_map(Owner)

    assert field_map.forward['a'].output_key == 'k2'
    assert field_map.reverse == {'k2': 'a'}
    # the abandoned key is free for another field again
    register(Owner, 'b', 'k1')
    assert field_map.reverse == {'k2': 'a', 'k1': 'b'}


def test_child_clones_parent_and_overrides_same_field() -> None:
    class Parent:
        pass

    class Child(Parent):
        pass

    register(Parent, 'f', 'k1')
    register(Child, 'f', 'k2')

    parent_map, child_map = get_field_map(Parent), get_field_map(Child)
    assert parent_map is not child_map
    assert parent_map.frozen
    assert not child_map.frozen
    assert list(child_map.forward) == ['f']
    assert child_map.reverse == {'k2': 'f'}
    assert parent_map.reverse == {'k1': 'f'}


def test_child_field_shadows_inherited_output_key() -> None:
    class Parent:
        pass

    class Child(Parent):
        pass

    register(Parent, 'f1', 'k')
    register(Child, 'f2', 'k')

    child_map = get_field_map(Child)
    assert list(child_map.forward) == ['f1', 'f2']
    assert child_map.forward['f1'].output_key == 'k'
    assert child_map.reverse == {'k': 'f2'}
    assert get_field_map(Parent).reverse == {'k': 'f1'}


def test_rebinding_a_shadowing_field_restores_inherited_owner() -> None:
    class Parent:
        pass

    class Child(Parent):
        pass

    register(Parent, 'f1', 'k')
    register(Child, 'f2', 'k')
    register(Child, 'f2', 'j')

    assert get_field_map(Child).reverse == {'k': 'f1', 'j': 'f2'}


def test_subclass_without_fields_uses_nearest_map() -> None:
    class Parent:
        pass

    class Child(Parent):
        pass

    class GrandChild(Child):
        pass

    register(Parent, 'a')

    assert get_own_field_map(GrandChild) is None
    assert get_field_map(GrandChild) is get_field_map(Parent)
    register(GrandChild, 'b')
    assert list(get_field_map(GrandChild).forward) == ['a', 'b']


def test_mixin_first_subclass_inherits_fields_of_later_base() -> None:
    class Mixin:
        pass

    class Base:
        def __init__(self) -> None:
            self.a = 'base'
            self.b = 'child'

    class Child(Mixin, Base):
        pass

    register(Base, 'a')
    register(Child, 'b')

    assert list(get_fields(Child)) == ['a', 'b']
    assert serialize_document(Child()) == {'a': 'base', 'b': 'child'}
    assert get_field_map(Base).frozen


def test_invalid_options_are_rejected() -> None:
    class Owner:
        pass

    with pytest.raises(InvalidFieldOptionsError):
        register(Owner, 'a', {'output_key': 'a', 'bogus': True})
    with pytest.raises(InvalidFieldOptionsError):
        register(Owner, 'a', {'to_document': 'not callable'})
    with pytest.raises(InvalidFieldOptionsError):
        register(Owner, 'a', 42)
    assert get_own_field_map(Owner) is None


def test_register_validates_owner_and_key() -> None:
    class Owner:
        pass

    with pytest.raises(TypeError):
        register('Owner', 'a')
    with pytest.raises(TypeError):
        register(Owner, 5)


def test_registration_after_use_is_rejected() -> None:
    class Owner:
        pass

    register(Owner, 'a')
    serialize_document(Owner())

    with pytest.raises(FrozenFieldMapError):
        register(Owner, 'b')


def test_registration_after_use_allowed_when_not_strict(monkeypatch: pytest.MonkeyPatch) -> None:
    from lzs.configs import reset_settings

    monkeypatch.setenv('LZS_STRICT_REGISTRATION', 'false')
    reset_settings()

    class Owner:
        pass

    register(Owner, 'a')
    serialize_document(Owner())
    register(Owner, 'b')

    assert list(get_field_map(Owner).forward) == ['a', 'b']


def test_field_map_lookup_and_clone() -> None:
    field_map = FieldMap()
    field_map.register('a', FieldOptions(output_key='A'))

    assert field_map.lookup('A') == ('a', field_map.forward['a'])
    assert field_map.lookup('a') is None
    assert 'a' in field_map and len(field_map) == 1

    clone = field_map.clone()
    clone.register('a', FieldOptions(output_key='B'))
    assert field_map.forward['a'].output_key == 'A'
    assert clone.own == {'B': 'a'}


def test_ensure_field_map_is_idempotent() -> None:
    class Owner:
        pass

    assert ensure_field_map(Owner) is ensure_field_map(Owner)
