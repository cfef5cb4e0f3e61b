"""
Tests for attribute document serialization
"""

import pytest

from asset_attributes.business.attributes import (
    AttributeEntry,
    AttributeErrorKind,
    FieldDefinition,
    FieldType,
    FreeForm,
    deserialize,
    reconcile,
    schema_mode_for,
    serialize,
)


@pytest.fixture
def mode():
    return schema_mode_for([
        FieldDefinition(key='color', label='Color'),
        FieldDefinition(key='weight', label='Weight', type=FieldType.NUMBER, unit_id=3),
        FieldDefinition(key='in_service', label='In service', type=FieldType.BOOLEAN),
        FieldDefinition(key='installed', label='Installed', type=FieldType.DATE),
    ])


def test_nothing_to_store_is_none():
    assert serialize([], FreeForm()).value is None
    blank_rows = [AttributeEntry(key=''), AttributeEntry(key='  ', value=' ')]
    result = serialize(blank_rows, FreeForm())
    assert result.ok
    assert result.value is None


def test_unit_value_is_wrapped():
    result = serialize([AttributeEntry('weight', '10', 3, field_type=FieldType.NUMBER)], FreeForm())
    assert result.value == {'weight': {'value': 10, 'unit_id': 3}}
    assert deserialize(result.value) == [AttributeEntry(key='weight', value='10', unit_id=3)]


def test_value_without_key_is_rejected():
    result = serialize([AttributeEntry(key='', value='x')], FreeForm())
    assert not result.ok
    assert result.kind == AttributeErrorKind.KEY_REQUIRED


def test_unit_without_key_is_rejected():
    result = serialize([AttributeEntry(key=' ', unit_id=2)], FreeForm())
    assert result.kind == AttributeErrorKind.KEY_REQUIRED


def test_duplicate_keys_are_rejected():
    result = serialize([AttributeEntry(key=' Marka ', value='a'), AttributeEntry(key='marka', value='b')], FreeForm())
    assert result.kind == AttributeErrorKind.DUPLICATE_KEY
    assert result.field_label == 'marka'


def test_keys_and_values_are_trimmed():
    result = serialize([AttributeEntry(key=' color ', value='  red '), AttributeEntry(key='note')], FreeForm())
    assert result.value == {'color': 'red', 'note': None}


def test_schema_types_are_applied(mode):
    entries = reconcile([
        AttributeEntry(key='color', value='blue'),
        AttributeEntry(key='weight', value='2.5'),
        AttributeEntry(key='in_service', value='false'),
        AttributeEntry(key='installed', value='2024-05-01'),
    ], mode)

    assert serialize(entries, mode).value == {
        'color': 'blue',
        'weight': {'value': 2.5, 'unit_id': 3},
        'in_service': False,
        'installed': '2024-05-01',
    }


def test_definition_type_wins_over_row_copy(mode):
    stale = [AttributeEntry(key='weight', value='7', field_type=FieldType.TEXT)]
    assert serialize(stale, mode).value == {'weight': 7}


def test_unparseable_number_is_kept_as_text():
    result = serialize([AttributeEntry(key='qty', value='lots', field_type=FieldType.NUMBER)], FreeForm())
    assert result.value == {'qty': 'lots'}


def test_non_ascii_digits_are_not_numbers():
    result = serialize([AttributeEntry(key='qty', value='١٢', field_type=FieldType.NUMBER)], FreeForm())
    assert result.value == {'qty': '١٢'}


def test_schema_bound_round_trip(mode):
    entries = reconcile([
        AttributeEntry(key='color', value='red'),
        AttributeEntry(key='weight', value='12.75'),
        AttributeEntry(key='in_service', value='true'),
    ], mode)
    first = serialize(entries, mode).value
    second = serialize(reconcile(deserialize(first), mode), mode).value

    assert first == second
    assert first['weight'] == {'value': 12.75, 'unit_id': 3}
    assert first['in_service'] is True
    assert first['installed'] is None


def test_free_form_normalization_is_stable():
    entries = [
        AttributeEntry(key='qty', value='10.50', field_type=FieldType.NUMBER),
        AttributeEntry(key='location', value='Hall B', unit_id=None),
        AttributeEntry(key='length', value='3', unit_id=5),
    ]
    once = serialize(deserialize(serialize(entries, FreeForm()).value), FreeForm()).value
    twice = serialize(deserialize(once), FreeForm()).value
    assert once == twice


@pytest.mark.parametrize("document", [None, [], "text", 42, [{'a': 1}]])
def test_non_object_documents_give_no_rows(document):
    assert deserialize(document) == []


def test_deserialize_scalars():
    entries = deserialize({'flag': True, 'count': 10.0, 'ratio': 0.25, 'note': None, 'tags': [1, 2]})
    assert [entry.as_triple() for entry in entries] == [
        ('flag', 'true', None),
        ('count', '10', None),
        ('ratio', '0.25', None),
        ('note', '', None),
        ('tags', '[1, 2]', None),
    ]


def test_deserialize_wrapped_values():
    entries = deserialize({
        'a': {'value': 2.5, 'unitId': '4'},
        'b': {'value': 'x', 'unit_id': 'abc'},
        'c': {'value': None, 'unit_id': 7},
        'd': {'unit_id': True},
    })
    assert [entry.as_triple() for entry in entries] == [
        ('a', '2.5', 4),
        ('b', 'x', None),
        ('c', '', 7),
        ('d', '', None),
    ]


def test_legacy_object_without_value_is_empty():
    assert deserialize({'legacy': {'foo': 1}}) == [AttributeEntry(key='legacy', value='')]
