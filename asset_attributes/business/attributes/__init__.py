"""
Typed attribute schema engine

Pure functions over asset type field rows and asset attribute documents:
key generation, schema parsing, reconciliation, validation, serialization
and alias lookup. Nothing in this package touches the database.
"""

from asset_attributes.business.attributes.errors import (
    AttributeErrorKind,
    AttributeDomainError,
    AttributeValidationError,
    SchemaNotLoadedError,
    AssetTypeNotFoundError,
    DEFAULT_ERROR_MESSAGES,
    describe,
)
from asset_attributes.business.attributes.results import Ok, Err
from asset_attributes.business.attributes.key_generator import slugify
from asset_attributes.business.attributes.field_schema import (
    FieldType,
    FieldDefinition,
    FieldDraft,
    parse_schema,
    schema_drafts,
    build_field_payload,
)
from asset_attributes.business.attributes.entries import AttributeEntry
from asset_attributes.business.attributes.schema_mode import SchemaBound, FreeForm, schema_mode_for
from asset_attributes.business.attributes.reconciler import reconcile
from asset_attributes.business.attributes.validator import AttributeValidator, validate, validate_keys
from asset_attributes.business.attributes.serializer import serialize, deserialize
from asset_attributes.business.attributes.alias_resolver import (
    AliasResolver,
    DEFAULT_ATTRIBUTE_ALIASES,
    pick,
    upsert,
)
from asset_attributes.business.attributes.display import DisplayRow, UnitCatalog, display_rows

__all__ = [
    'AttributeErrorKind',
    'AttributeDomainError',
    'AttributeValidationError',
    'SchemaNotLoadedError',
    'AssetTypeNotFoundError',
    'DEFAULT_ERROR_MESSAGES',
    'describe',
    'Ok',
    'Err',
    'slugify',
    'FieldType',
    'FieldDefinition',
    'FieldDraft',
    'parse_schema',
    'schema_drafts',
    'build_field_payload',
    'AttributeEntry',
    'SchemaBound',
    'FreeForm',
    'schema_mode_for',
    'reconcile',
    'AttributeValidator',
    'validate',
    'validate_keys',
    'serialize',
    'deserialize',
    'AliasResolver',
    'DEFAULT_ATTRIBUTE_ALIASES',
    'pick',
    'upsert',
    'DisplayRow',
    'UnitCatalog',
    'display_rows',
]
