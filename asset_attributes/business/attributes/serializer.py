"""
Attribute document serialization
Converts between the editable attribute rows and the flat document stored
in Asset.attributes_json:

    {"color": "red", "weight": {"value": 10, "unit_id": 3}, "note": null}

A value carrying a unit is always wrapped; everything else is a bare scalar.
"""

from collections.abc import Mapping

from asset_attributes.business.attributes.entries import AttributeEntry
from asset_attributes.business.attributes.field_schema import FieldType
from asset_attributes.business.attributes.results import Ok
from asset_attributes.business.attributes.schema_mode import as_schema_mode
from asset_attributes.business.attributes.validator import AttributeValidator
from asset_attributes.business.attributes.values import parse_number, to_finite_number, value_to_text
from asset_attributes.utils.logger import get_logger

logger = get_logger("asset_attributes.serializer")

UNIT_KEYS = ('unit_id', 'unitId')


def coerce_scalar(raw, field_type):
    """
    Type a trimmed value for storage

    Blank is None. Numbers that fail to parse are kept as text rather than
    lost; schema-bound saves validate before they get here.
    """
    if not raw:
        return None
    if field_type == FieldType.NUMBER:
        number = parse_number(raw)
        return raw if number is None else number
    if field_type == FieldType.BOOLEAN:
        return raw == 'true'
    return raw


def serialize(entries, mode):
    """
    Build the attribute document for an asset save

    Args:
        entries: Iterable of AttributeEntry as edited
        mode: SchemaBound / FreeForm, or a list of FieldDefinitions. Under
            SchemaBound the definition's type wins over the row's copy.

    Returns:
        Ok(dict | None) or Err(key_required | duplicate_key). None means the
        asset has no attributes at all.
    """
    mode = as_schema_mode(mode)
    trimmed = [
        AttributeEntry(
            key=entry.key.strip(),
            value=entry.value,
            unit_id=entry.unit_id,
            field_type=entry.field_type,
        )
        for entry in (entries or [])
    ]
    trimmed = [entry for entry in trimmed if not entry.is_blank()]

    structural = AttributeValidator.validate_keys(trimmed)
    if not structural.ok:
        logger.debug(f"Serialize rejected: {structural.kind.value}")
        return structural

    if not trimmed:
        return Ok(None)

    document = {}
    for entry in trimmed:
        definition = mode.definition_for(entry.key)
        field_type = definition.type if definition is not None else entry.field_type
        scalar = coerce_scalar(entry.value.strip(), field_type)
        if entry.unit_id is not None:
            document[entry.key] = {'value': scalar, 'unit_id': entry.unit_id}
        else:
            document[entry.key] = scalar

    return Ok(document)


def _unit_from(raw: Mapping):
    for name in UNIT_KEYS:
        if name in raw:
            return to_finite_number(raw[name])
    return None


def deserialize(document) -> list:
    """
    Read a stored attribute document back into editable rows

    Anything that is not a JSON object gives no rows. Object values are read
    as {"value", "unit_id"/"unitId"}; legacy objects without those keys
    come back as an empty value.

    Returns:
        list[AttributeEntry] in document key order
    """
    if not isinstance(document, Mapping):
        return []

    entries = []
    for key, raw in document.items():
        if isinstance(raw, Mapping):
            entries.append(AttributeEntry(
                key=str(key),
                value=value_to_text(raw.get('value')),
                unit_id=_unit_from(raw),
            ))
        else:
            entries.append(AttributeEntry(key=str(key), value=value_to_text(raw)))
    return entries
