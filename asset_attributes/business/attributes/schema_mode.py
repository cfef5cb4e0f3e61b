"""
Schema mode
An asset type with at least one active field puts its assets in schema-bound
mode; anything else is free-form. The mode is decided once, where the schema
is loaded, and passed explicitly to the reconciler, validator and serializer.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from asset_attributes.business.attributes.field_schema import FieldDefinition


@dataclass(frozen=True)
class SchemaBound:
    schema: tuple[FieldDefinition, ...]

    def __post_init__(self):
        if not self.schema:
            raise ValueError("SchemaBound requires at least one field definition")
        object.__setattr__(self, 'schema', tuple(self.schema))

    def definition_for(self, key: str) -> FieldDefinition | None:
        lowered = (key or '').strip().lower()
        for definition in self.schema:
            if definition.key.lower() == lowered:
                return definition
        return None


@dataclass(frozen=True)
class FreeForm:
    schema: tuple = ()

    def definition_for(self, key: str) -> None:
        return None


SchemaMode = Union[SchemaBound, FreeForm]


def schema_mode_for(schema) -> SchemaMode:
    """SchemaBound when the parsed schema has any definition, FreeForm otherwise"""
    definitions = tuple(schema or ())
    if definitions:
        return SchemaBound(definitions)
    return FreeForm()


def as_schema_mode(mode_or_schema) -> SchemaMode:
    """Accept an explicit mode or a bare list of FieldDefinitions"""
    if isinstance(mode_or_schema, (SchemaBound, FreeForm)):
        return mode_or_schema
    return schema_mode_for(mode_or_schema)
