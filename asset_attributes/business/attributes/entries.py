from __future__ import annotations

from dataclasses import dataclass, replace

from asset_attributes.business.attributes.field_schema import FieldDefinition, FieldType


@dataclass(frozen=True)
class AttributeEntry:
    """
    One editable attribute row.

    `value` is always text in memory; it is typed only when validated or
    serialized. label / field_type / required / schema_bound are a
    denormalized copy of the matching FieldDefinition used for editing
    affordances and are never persisted.
    """
    key: str
    value: str = ''
    unit_id: int | None = None
    label: str | None = None
    field_type: FieldType | None = None
    required: bool = False
    schema_bound: bool = False

    @classmethod
    def from_definition(cls, definition: FieldDefinition, value: str = '') -> AttributeEntry:
        return cls(
            key=definition.key,
            value=value,
            unit_id=definition.unit_id,
            label=definition.display_label,
            field_type=definition.type,
            required=definition.required,
            schema_bound=True,
        )

    def bare(self) -> AttributeEntry:
        """Copy restricted to key, value and unit"""
        return AttributeEntry(key=self.key, value=self.value, unit_id=self.unit_id)

    def with_value(self, value: str) -> AttributeEntry:
        return replace(self, value=value)

    def is_blank(self) -> bool:
        return not self.key.strip() and not self.value.strip() and self.unit_id is None

    def as_triple(self) -> tuple:
        return (self.key, self.value, self.unit_id)
