"""
Schema Reconciler
Merges an asset's existing attribute rows with the schema of its asset type
to produce the rows a user edits.
"""

from __future__ import annotations

from asset_attributes.business.attributes.entries import AttributeEntry
from asset_attributes.business.attributes.schema_mode import SchemaBound, as_schema_mode
from asset_attributes.utils.logger import get_logger

logger = get_logger("asset_attributes.reconciler")


def index_by_key(entries) -> dict:
    """Case-insensitive key index; a later duplicate overwrites an earlier one"""
    return {entry.key.lower(): entry for entry in entries}


def reconcile(existing, mode) -> list[AttributeEntry]:
    """
    Build the editable rows for `existing` under `mode`.

    Schema-bound: exactly one row per definition, in schema order. Values are
    carried over by case-insensitive key match; unit, label, type and
    required always come from the current definition. Rows with no matching
    definition are left out.

    Free-form: the same rows stripped to key, value and unit.

    Args:
        existing: Iterable of AttributeEntry
        mode: SchemaBound / FreeForm, or a list of FieldDefinitions

    Returns:
        New list of AttributeEntry; inputs are not modified
    """
    mode = as_schema_mode(mode)
    existing = list(existing or [])

    if not isinstance(mode, SchemaBound):
        return [entry.bare() for entry in existing]

    by_key = index_by_key(existing)
    rows = []
    for definition in mode.schema:
        match = by_key.pop(definition.key.lower(), None)
        rows.append(AttributeEntry.from_definition(definition, match.value if match else ''))

    if by_key:
        logger.debug(f"Reconcile dropped {len(by_key)} entries without a field definition: {sorted(by_key)}")
    return rows
