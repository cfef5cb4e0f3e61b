"""
Asset Attribute Service
Hosts the attribute engine for asset create/edit flows.

Handles:
- Fetching and parsing the field schema of an asset type
- Edit sessions: deserialize -> reconcile -> edit -> validate -> serialize -> store
- Read-only attribute rows for detail views
"""

from dataclasses import replace
from typing import List, Optional

from asset_attributes import db
from asset_attributes.business.attributes import (
    AliasResolver,
    AssetTypeNotFoundError,
    AttributeEntry,
    AttributeValidationError,
    AttributeValidator,
    FieldDefinition,
    FreeForm,
    SchemaNotLoadedError,
    UnitCatalog,
    deserialize,
    display_rows,
    parse_schema,
    reconcile,
    schema_mode_for,
    serialize,
)
from asset_attributes.data.core.asset_info.asset import Asset
from asset_attributes.data.core.asset_info.asset_type import AssetType, AssetTypeField
from asset_attributes.data.core.unit import Unit
from asset_attributes.utils.logger import get_logger

logger = get_logger("asset_attributes.services.asset_attributes")


class AttributeEditSession:
    """
    Attribute rows of one asset while it is being created or edited.

    The schema of the selected asset type must be loaded before save() is
    allowed. Selecting another type while a schema is outstanding supersedes
    it: a schema that arrives for a type that is no longer selected is
    discarded.
    """

    def __init__(self, service, asset: Optional[Asset] = None, entries=None):
        self.service = service
        self.asset = asset
        self.entries: List[AttributeEntry] = list(entries or [])
        self.mode = FreeForm()
        self.asset_type_id: Optional[int] = None
        self.schema_loaded = False

    @property
    def schema(self) -> tuple:
        return self.mode.schema

    def request_asset_type(self, asset_type_id: Optional[int]) -> None:
        """Mark `asset_type_id` as selected with its schema still outstanding"""
        self.asset_type_id = asset_type_id
        self.schema_loaded = False

    def apply_schema(self, asset_type_id: Optional[int], schema: List[FieldDefinition]) -> bool:
        """
        Install a fetched schema if it is for the currently selected type.

        Returns:
            bool: False when the schema was superseded and discarded
        """
        if asset_type_id != self.asset_type_id:
            logger.debug(f"Discarding schema for asset type {asset_type_id}; {self.asset_type_id} is selected")
            return False
        self.mode = schema_mode_for(schema)
        self.entries = reconcile(self.entries, self.mode)
        self.schema_loaded = True
        return True

    def select_asset_type(self, asset_type_id: Optional[int]) -> None:
        self.request_asset_type(asset_type_id)
        schema = self.service.load_schema(asset_type_id) if asset_type_id else []
        self.apply_schema(asset_type_id, schema)

    def set_value(self, key: str, value: str, unit_id: Optional[int] = None) -> None:
        """Set a row's value by case-insensitive key, appending a free-form row when absent"""
        lowered = key.strip().lower()
        for index, entry in enumerate(self.entries):
            if entry.key.lower() == lowered:
                updated = entry.with_value(value)
                if not entry.schema_bound and unit_id is not None:
                    updated = replace(updated, unit_id=unit_id)
                self.entries = self.entries[:index] + [updated] + self.entries[index + 1:]
                return
        self.entries = self.entries + [AttributeEntry(key=key, value=value, unit_id=unit_id)]

    def remove(self, key: str) -> None:
        """Drop a free-form row; schema-bound rows stay and are only cleared"""
        lowered = key.strip().lower()
        remaining = []
        for entry in self.entries:
            if entry.key.lower() != lowered:
                remaining.append(entry)
            elif entry.schema_bound:
                remaining.append(entry.with_value(''))
        self.entries = remaining

    def get_alias(self, canonical_key: str) -> str:
        return self.service.resolver.pick(self.entries, canonical_key)

    def set_alias(self, canonical_key: str, value: str) -> None:
        self.entries = self.service.resolver.upsert(self.entries, canonical_key, value, self.schema)

    def visible_entries(self) -> List[AttributeEntry]:
        return self.service.resolver.visible_entries(self.entries)

    def validate(self):
        return AttributeValidator.validate(self.entries, self.mode)

    def build_document(self):
        """
        Validate and serialize without touching the database

        Raises:
            SchemaNotLoadedError: The selected type's schema is not loaded
            AttributeValidationError: The rows were rejected
        """
        if not self.schema_loaded:
            raise SchemaNotLoadedError(
                f"Schema for asset type {self.asset_type_id} is not loaded; refusing to save"
            )

        result = self.validate()
        if not result.ok:
            raise AttributeValidationError(result.kind, result.field_label)

        serialized = serialize(self.entries, self.mode)
        if not serialized.ok:
            raise AttributeValidationError(serialized.kind, serialized.field_label)
        return serialized.value

    def save(self, commit: bool = True):
        """
        Write the attribute document onto the asset

        Returns:
            dict | None: The stored document
        """
        if self.asset is None:
            raise ValueError("save() needs an asset; use build_document() for new assets")

        try:
            document = self.build_document()
        except AttributeValidationError as e:
            logger.warning(f"Rejected attributes for asset {self.asset.id}: {e.kind.value} ({e.field_label})")
            raise

        self.asset.attributes_json = document
        self.asset.asset_type_id = self.asset_type_id
        try:
            db.session.add(self.asset)
            if commit:
                db.session.commit()
                logger.info(f"Saved {len(document or {})} attributes for asset {self.asset.id}")
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error saving attributes for asset {self.asset.id}: {e}")
            raise
        return document


class AssetAttributeService:
    """
    Service for asset attribute editing and display.

    Provides methods for:
    - Loading the parsed schema of an asset type
    - Opening edit sessions for new or existing assets
    - Building display rows with unit labels
    """

    def __init__(self, aliases=None):
        self.resolver = AliasResolver(aliases)

    @staticmethod
    def get_asset_type(asset_type_id: int) -> AssetType:
        asset_type = db.session.get(AssetType, asset_type_id)
        if asset_type is None:
            raise AssetTypeNotFoundError(f"Asset type {asset_type_id} not found")
        return asset_type

    @staticmethod
    def load_schema(asset_type_id: int) -> List[FieldDefinition]:
        """
        Fetch the field rows of an asset type and parse them

        Args:
            asset_type_id: Asset type to load

        Returns:
            Parsed, ordered FieldDefinitions (empty for a schema-less type)
        """
        AssetAttributeService.get_asset_type(asset_type_id)
        rows = AssetTypeField.query.filter_by(asset_type_id=asset_type_id).all()
        schema = parse_schema([row.to_dict(include_timestamps=False) for row in rows])
        logger.debug(f"Loaded {len(schema)} active fields for asset type {asset_type_id}")
        return schema

    def begin_edit(self, asset: Optional[Asset] = None, asset_type_id: Optional[int] = None) -> AttributeEditSession:
        """
        Open an edit session

        Args:
            asset: Existing asset, or None when creating one
            asset_type_id: Type to select; defaults to the asset's current type
        """
        entries = deserialize(asset.attributes_json) if asset is not None else []
        session = AttributeEditSession(self, asset=asset, entries=entries)
        if asset_type_id is None and asset is not None:
            asset_type_id = asset.asset_type_id
        session.select_asset_type(asset_type_id)
        return session

    def display(self, asset: Asset):
        """Display rows for an asset detail view"""
        schema = self.load_schema(asset.asset_type_id) if asset.asset_type_id else []
        units = UnitCatalog(Unit.query.all())
        return display_rows(asset.attributes_json, schema, units, self.resolver)
