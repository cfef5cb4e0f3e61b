"""
Tests for field schema parsing and schema editor payloads
"""

from asset_attributes.business.attributes import (
    AttributeErrorKind,
    FieldDraft,
    FieldType,
    build_field_payload,
    parse_schema,
    schema_drafts,
)


def test_orders_by_sort_order_then_id():
    rows = [
        {'id': 5, 'name': 'c', 'label': 'C', 'sort_order': 2},
        {'id': 3, 'name': 'a', 'label': 'A', 'sort_order': 1},
        {'id': 4, 'name': 'b', 'label': 'B', 'sort_order': 1},
    ]
    schema = parse_schema(rows)
    assert [(d.sort_order, d.id) for d in schema] == [(1, 3), (1, 4), (2, 5)]
    assert [d.key for d in schema] == ['a', 'b', 'c']


def test_inactive_rows_are_excluded():
    rows = [
        {'id': 1, 'name': 'kept', 'sort_order': 0},
        {'id': 2, 'name': 'off', 'active': False, 'sort_order': 1},
        {'id': 3, 'name': 'off_too', 'is_active': False, 'sort_order': 2},
        {'id': 4, 'name': 'null_active', 'active': None, 'sort_order': 3},
    ]
    assert [d.key for d in parse_schema(rows)] == ['kept', 'null_active']


def test_type_tag_variants_and_garbage():
    rows = [
        {'id': 1, 'name': 'a', 'input_type': 'number'},
        {'id': 2, 'name': 'b', 'data_type': 'boolean'},
        {'id': 3, 'name': 'c', 'data_type': 'date'},
        {'id': 4, 'name': 'd', 'input_type': 'colour'},
        {'id': 5, 'name': 'e'},
        {'id': 6, 'name': 'f', 'input_type': ['number']},
    ]
    types = [d.type for d in parse_schema(rows)]
    assert types == [FieldType.NUMBER, FieldType.BOOLEAN, FieldType.DATE,
                     FieldType.TEXT, FieldType.TEXT, FieldType.TEXT]


def test_unit_reference_coercion():
    rows = [
        {'id': 1, 'name': 'a', 'unit_id': 3},
        {'id': 2, 'name': 'b', 'unit_id': 0},
        {'id': 3, 'name': 'c', 'unit_id': -2},
        {'id': 4, 'name': 'd', 'unit_id': 'abc'},
        {'id': 5, 'name': 'e', 'unit_id': float('inf')},
        {'id': 6, 'name': 'f', 'unitId': '7'},
        {'id': 7, 'name': 'g', 'unit_id': None},
    ]
    assert [d.unit_id for d in parse_schema(rows)] == [3, None, None, None, None, 7, None]


def test_label_falls_back_to_name_and_key_to_label():
    rows = [
        {'id': 1, 'name': ' serial_no ', 'label': '   '},
        {'id': 2, 'name': '', 'label': 'Çalışma Şekli'},
        {'id': 3, 'name': '', 'label': ''},
        {'id': 4, 'name': None, 'label': None},
    ]
    schema = parse_schema(rows)
    assert [(d.key, d.label) for d in schema] == [
        ('serial_no', 'serial_no'),
        ('calisma_sekli', 'Çalışma Şekli'),
    ]


def test_required_flag_and_defaults():
    schema = parse_schema([{'id': 1, 'name': 'a', 'required': 1}, {'id': 2, 'name': 'b'}])
    assert [d.required for d in schema] == [True, False]


def test_repeated_key_keeps_first():
    rows = [
        {'id': 1, 'name': 'Marka', 'sort_order': 0},
        {'id': 2, 'name': 'marka', 'sort_order': 1},
    ]
    schema = parse_schema(rows)
    assert len(schema) == 1
    assert schema[0].id == 1


def test_non_list_input_gives_empty_schema():
    assert parse_schema(None) == []
    assert parse_schema('rows') == []
    assert parse_schema({'id': 1, 'name': 'a'}) == []


def test_non_mapping_rows_are_skipped():
    assert [d.key for d in parse_schema([None, 42, {'id': 1, 'name': 'a'}])] == ['a']


def test_schema_drafts_keep_order_and_labels():
    rows = [
        {'id': 2, 'name': 'weight', 'label': 'Weight', 'input_type': 'number', 'unit_id': 3, 'sort_order': 1},
        {'id': 1, 'name': 'marka', 'label': 'Marka', 'sort_order': 0},
    ]
    assert schema_drafts(rows) == [
        FieldDraft(label='Marka'),
        FieldDraft(label='Weight', type=FieldType.NUMBER, unit_id=3),
    ]


def test_build_field_payload():
    result = build_field_payload([
        FieldDraft(label=' Çalışma Şekli '),
        FieldDraft(),
        {'label': 'Weight', 'type': 'number', 'unit_id': 3, 'required': True},
    ])
    assert result.ok
    assert result.value == [
        {'name': 'calisma_sekli', 'label': 'Çalışma Şekli', 'input_type': 'text',
         'required': False, 'unit_id': None, 'active': True},
        {'name': 'weight', 'label': 'Weight', 'input_type': 'number',
         'required': True, 'unit_id': 3, 'active': True},
    ]


def test_build_field_payload_rejects_missing_label():
    result = build_field_payload([FieldDraft(label='', type=FieldType.NUMBER)])
    assert not result.ok
    assert result.kind == AttributeErrorKind.KEY_REQUIRED


def test_build_field_payload_rejects_label_without_key():
    result = build_field_payload([{'label': '!!!'}])
    assert result.kind == AttributeErrorKind.KEY_REQUIRED


def test_build_field_payload_rejects_colliding_keys():
    result = build_field_payload([{'label': 'Renk'}, {'label': 'renk!!'}])
    assert result.kind == AttributeErrorKind.DUPLICATE_KEY
    assert result.field_label == 'renk!!'


def test_build_field_payload_empty():
    result = build_field_payload([])
    assert result.ok and result.value == []
