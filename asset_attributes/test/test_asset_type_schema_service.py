"""
Tests for asset type schema editing
"""

import pytest

from asset_attributes.business.attributes import (
    AttributeErrorKind,
    AttributeValidationError,
    FieldDraft,
    FieldType,
)
from asset_attributes.data.core.asset_info.asset import Asset
from asset_attributes.data.core.asset_info.asset_type import AssetType, AssetTypeField
from asset_attributes.services.assets.asset_attribute_service import AssetAttributeService
from asset_attributes.services.assets.asset_type_schema_service import AssetTypeSchemaService


@pytest.fixture
def motor_type(db, units):
    return AssetTypeSchemaService.create_asset_type(' MOTOR ', ' Motor ', [
        FieldDraft(label='Güç (kW)', type=FieldType.NUMBER, unit_id=units['KW'].id),
        FieldDraft(label='Devir', type=FieldType.NUMBER, unit_id=units['RPM'].id),
        FieldDraft(label='Note'),
    ])


def test_create_asset_type(motor_type):
    stored = AssetType.query.filter_by(code='MOTOR').one()

    assert stored.name == 'Motor'
    assert [(f.name, f.input_type, f.sort_order) for f in stored.fields] == [
        ('guc_kw', 'number', 0),
        ('devir', 'number', 1),
        ('note', 'text', 2),
    ]


def test_get_drafts(motor_type, units):
    drafts = AssetTypeSchemaService.get_drafts(motor_type.id)

    assert drafts[0] == FieldDraft(label='Güç (kW)', type=FieldType.NUMBER, unit_id=units['KW'].id)
    assert [d.label for d in drafts] == ['Güç (kW)', 'Devir', 'Note']


def test_duplicate_labels_are_rejected(motor_type):
    with pytest.raises(AttributeValidationError) as excinfo:
        AssetTypeSchemaService.save_fields(motor_type.id, [FieldDraft(label='Note'), FieldDraft(label='note!')])

    assert excinfo.value.kind == AttributeErrorKind.DUPLICATE_KEY
    assert excinfo.value.field_label == 'note!'
    assert len(AssetAttributeService.load_schema(motor_type.id)) == 3


def test_label_without_key_is_rejected(motor_type):
    with pytest.raises(AttributeValidationError) as excinfo:
        AssetTypeSchemaService.save_fields(motor_type.id, [FieldDraft(label='???')])
    assert excinfo.value.kind == AttributeErrorKind.KEY_REQUIRED


def test_create_rolls_back_on_rejected_drafts(db):
    with pytest.raises(AttributeValidationError):
        AssetTypeSchemaService.create_asset_type('BAD', 'Bad', [FieldDraft(label='A'), FieldDraft(label='a')])
    assert AssetType.query.filter_by(code='BAD').first() is None


def test_save_reorders_updates_and_deactivates(db, motor_type):
    fields = AssetTypeSchemaService.save_fields(motor_type.id, [
        {'label': 'Note', 'required': True},
        {'label': 'Güç (kW)', 'type': 'number'},
        {'label': 'Serial No'},
    ])

    assert [f.name for f in fields] == ['note', 'guc_kw', 'serial_no']
    assert fields[1].unit_id is None

    schema = AssetAttributeService.load_schema(motor_type.id)
    assert [(d.key, d.required) for d in schema] == [('note', True), ('guc_kw', False), ('serial_no', False)]

    devir = AssetTypeField.query.filter_by(asset_type_id=motor_type.id, name='devir').one()
    assert devir.is_active is False


def test_deactivated_field_keeps_stored_values(db, motor_type):
    asset = Asset(name='M-1', asset_type_id=motor_type.id, attributes_json={'devir': {'value': 1450, 'unit_id': 11}})
    db.session.add(asset)
    db.session.commit()

    AssetTypeSchemaService.save_fields(motor_type.id, [FieldDraft(label='Note')])

    db.session.expire_all()
    assert db.session.get(Asset, asset.id).attributes_json == {'devir': {'value': 1450, 'unit_id': 11}}

    # The next edit of the asset drops the orphaned key
    session = AssetAttributeService().begin_edit(db.session.get(Asset, asset.id))
    assert [e.key for e in session.entries] == ['note']


def test_reactivating_a_field_reuses_its_row(db, motor_type):
    AssetTypeSchemaService.save_fields(motor_type.id, [FieldDraft(label='Note')])
    AssetTypeSchemaService.save_fields(motor_type.id, [FieldDraft(label='Devir'), FieldDraft(label='Note')])

    rows = AssetTypeField.query.filter_by(asset_type_id=motor_type.id, name='devir').all()
    assert len(rows) == 1
    assert rows[0].is_active is True
    assert rows[0].sort_order == 0
