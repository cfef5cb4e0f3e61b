"""
Read-only attribute rows for asset detail views
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

from asset_attributes.business.attributes.alias_resolver import AliasResolver
from asset_attributes.business.attributes.field_schema import normalize_unit_id
from asset_attributes.business.attributes.values import to_finite_number, value_to_text

EMPTY_DISPLAY_VALUE = '-'


@dataclass(frozen=True)
class DisplayRow:
    key: str
    label: str
    value: str
    unit_id: int | None = None
    unit_label: str | None = None


class UnitCatalog:
    """Unit id -> human label, from rows shaped {id, symbol, name}; inactive units get none"""

    def __init__(self, units=None):
        self._labels = {}
        for unit in units or []:
            row = unit if isinstance(unit, Mapping) else unit.to_dict()
            if row.get('is_active', row.get('active', True)) is False:
                continue
            unit_id = normalize_unit_id(row.get('id'))
            if unit_id is None:
                continue
            symbol = (row.get('symbol') or '').strip()
            self._labels[unit_id] = symbol or (row.get('name') or '').strip() or None

    def label_for(self, unit_id) -> str | None:
        if unit_id is None:
            return None
        return self._labels.get(unit_id)

    def __len__(self):
        return len(self._labels)


def _is_wrapped(raw) -> bool:
    return isinstance(raw, Mapping) and any(name in raw for name in ('value', 'unit_id', 'unitId'))


def _display_text(value) -> str:
    if value is None:
        return EMPTY_DISPLAY_VALUE
    if isinstance(value, str):
        return value.strip() or EMPTY_DISPLAY_VALUE
    return value_to_text(value)


def _split(raw):
    if _is_wrapped(raw):
        unit_raw = raw.get('unit_id', raw.get('unitId'))
        return raw.get('value'), to_finite_number(unit_raw)
    return raw, None


def display_rows(document, schema, units=None, resolver=None) -> list[DisplayRow]:
    """
    Rows for showing an asset's attributes

    Schema fields come first in schema order, then any stored keys the schema
    does not know about. Brand / model / serial rows are moved to the top,
    otherwise the order is kept.

    Args:
        document: Stored attributes_json
        schema: Parsed FieldDefinitions of the asset's type
        units: UnitCatalog or raw unit rows
        resolver: AliasResolver deciding the top rows
    """
    if not isinstance(document, Mapping):
        return []
    if not isinstance(units, UnitCatalog):
        units = UnitCatalog(units)
    resolver = resolver or AliasResolver()

    by_lower_key = {str(key).lower(): key for key in document}
    consumed = set()
    rows = []

    for definition in schema or ():
        stored_key = by_lower_key.get(definition.key.lower())
        raw = None
        if stored_key is not None:
            consumed.add(stored_key)
            raw = document[stored_key]
        value, unit_id = _split(raw)
        rows.append(DisplayRow(
            key=definition.key,
            label=definition.display_label,
            value=_display_text(value),
            unit_id=unit_id,
            unit_label=units.label_for(unit_id),
        ))

    for key, raw in document.items():
        if key in consumed:
            continue
        value, unit_id = _split(raw)
        rows.append(DisplayRow(
            key=str(key),
            label=str(key),
            value=_display_text(value),
            unit_id=unit_id,
            unit_label=units.label_for(unit_id),
        ))

    # sorted() is stable, so rows with equal priority keep their order
    return sorted(rows, key=lambda row: resolver.priority(row))
