"""
Field Schema
Parses the raw field rows declared on an asset type into the ordered list of
FieldDefinition objects used by the reconciler, validator and serializer.

Raw rows arrive in slightly different shapes depending on who produced them
(input_type vs data_type, unit_id vs unitId, active vs is_active). All of
those variants are folded here; nothing downstream looks at raw rows.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum

from asset_attributes.business.attributes.errors import AttributeErrorKind
from asset_attributes.business.attributes.key_generator import slugify
from asset_attributes.business.attributes.results import Err, Ok
from asset_attributes.business.attributes.values import to_finite_number
from asset_attributes.utils.logger import get_logger

logger = get_logger("asset_attributes.schema")

# canonical name -> accepted raw names, first match wins
FIELD_ROW_ALIASES = {
    'type': ('input_type', 'data_type', 'type'),
    'unit_id': ('unit_id', 'unitId'),
    'sort_order': ('sort_order', 'sortOrder'),
    'active': ('active', 'is_active'),
}


class FieldType(str, Enum):
    TEXT = 'text'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    DATE = 'date'

    @classmethod
    def coerce(cls, value) -> FieldType:
        """Unknown or garbage type tags fall back to text"""
        try:
            return cls(value)
        except (ValueError, TypeError):
            return cls.TEXT


@dataclass(frozen=True)
class FieldDefinition:
    key: str
    label: str
    type: FieldType = FieldType.TEXT
    required: bool = False
    unit_id: int | None = None
    sort_order: float = 0
    id: float = 0
    active: bool = True

    @property
    def display_label(self) -> str:
        return self.label or self.key


@dataclass(frozen=True)
class FieldDraft:
    """One row of the asset type schema editor, keyed by label until saved"""
    label: str = ''
    type: FieldType = FieldType.TEXT
    required: bool = False
    unit_id: int | None = None


def normalize_unit_id(value) -> int | None:
    """Non-positive or non-finite unit references become None"""
    number = to_finite_number(value)
    if number is None or number <= 0:
        return None
    return number


def _row_as_mapping(row):
    if isinstance(row, Mapping):
        return row
    if hasattr(row, 'to_dict'):
        return row.to_dict()
    return None


def _pick(row: Mapping, canonical: str, default=None):
    for name in FIELD_ROW_ALIASES[canonical]:
        if name in row:
            return row[name]
    return default


def _text(value) -> str:
    if value is None:
        return ''
    return str(value).strip()


def _normalize_row(row: Mapping) -> FieldDefinition:
    name = _text(row.get('name'))
    label = _text(row.get('label')) or name
    sort_order = to_finite_number(_pick(row, 'sort_order'))
    row_id = to_finite_number(row.get('id'))

    return FieldDefinition(
        key=name or slugify(label),
        label=label,
        type=FieldType.coerce(_pick(row, 'type')),
        required=bool(row.get('required')),
        unit_id=normalize_unit_id(_pick(row, 'unit_id')),
        sort_order=sort_order if sort_order is not None else 0,
        id=row_id if row_id is not None else 0,
        active=_pick(row, 'active', True) is not False,
    )


def parse_schema(raw_rows) -> list[FieldDefinition]:
    """
    Parse raw field rows into the authoritative display/edit order.

    Inactive rows are discarded, the rest sorted by (sort_order, id), and rows
    without a usable key dropped. A key repeated case-insensitively keeps its
    first occurrence.

    Args:
        raw_rows: Iterable of mappings (or models exposing to_dict())

    Returns:
        list[FieldDefinition]
    """
    if not isinstance(raw_rows, (list, tuple)):
        return []

    definitions = []
    for row in raw_rows:
        mapping = _row_as_mapping(row)
        if mapping is None:
            continue
        definition = _normalize_row(mapping)
        if definition.active:
            definitions.append(definition)

    definitions.sort(key=lambda d: (d.sort_order, d.id))

    schema = []
    seen = set()
    for definition in definitions:
        if not definition.key:
            continue
        lowered = definition.key.lower()
        if lowered in seen:
            logger.warning(f"Duplicate field key '{definition.key}' ignored")
            continue
        seen.add(lowered)
        schema.append(definition)
    return schema


def schema_drafts(raw_rows) -> list[FieldDraft]:
    """Editable drafts for the schema editor, in schema order, labelled rows only"""
    return [
        FieldDraft(label=d.label, type=d.type, required=d.required, unit_id=d.unit_id)
        for d in parse_schema(raw_rows)
        if d.label
    ]


def _as_draft(row) -> FieldDraft:
    if isinstance(row, FieldDraft):
        return FieldDraft(
            label=_text(row.label),
            type=FieldType.coerce(row.type),
            required=bool(row.required),
            unit_id=normalize_unit_id(row.unit_id),
        )
    mapping = _row_as_mapping(row) or {}
    return FieldDraft(
        label=_text(mapping.get('label')),
        type=FieldType.coerce(_pick(mapping, 'type')),
        required=bool(mapping.get('required')),
        unit_id=normalize_unit_id(_pick(mapping, 'unit_id')),
    )


def _is_blank_draft(draft: FieldDraft) -> bool:
    return not (draft.label or draft.required or draft.unit_id is not None or draft.type != FieldType.TEXT)


def build_field_payload(drafts):
    """
    Turn schema editor rows into the field definition payload of an asset type.

    Untouched rows are skipped. Every kept row needs a label that slugifies to
    a non-empty key, and keys must be unique.

    Returns:
        Ok(list of {name, label, input_type, required, unit_id, active}) or
        Err(key_required | duplicate_key)
    """
    kept = [draft for draft in map(_as_draft, drafts or []) if not _is_blank_draft(draft)]

    seen = set()
    payload = []
    for draft in kept:
        key = slugify(draft.label)
        if not key:
            return Err(AttributeErrorKind.KEY_REQUIRED, draft.label or None)
        if key in seen:
            return Err(AttributeErrorKind.DUPLICATE_KEY, draft.label)
        seen.add(key)
        payload.append({
            'name': key,
            'label': draft.label,
            'input_type': draft.type.value,
            'required': draft.required,
            'unit_id': draft.unit_id,
            'active': True,
        })

    return Ok(payload)
