"""
Asset Type Schema Service
Saves the field schema of an asset type from schema editor rows.

Fields are matched to existing rows by key. Rows that disappear from the
editor are deactivated rather than deleted, so values already stored on
assets under that key stay where they are.
"""

from typing import List, Optional

from asset_attributes import db
from asset_attributes.business.attributes import (
    AttributeValidationError,
    FieldDraft,
    build_field_payload,
    schema_drafts,
)
from asset_attributes.data.core.asset_info.asset_type import AssetType, AssetTypeField
from asset_attributes.services.assets.asset_attribute_service import AssetAttributeService
from asset_attributes.utils.logger import get_logger

logger = get_logger("asset_attributes.services.asset_type_schema")


class AssetTypeSchemaService:
    """
    Service for asset type schema editing.

    Provides methods for:
    - Creating asset types with an initial schema
    - Loading editor rows for an existing type
    - Saving editor rows back as AssetTypeField records
    """

    @staticmethod
    def get_drafts(asset_type_id: int) -> List[FieldDraft]:
        asset_type = AssetAttributeService.get_asset_type(asset_type_id)
        return schema_drafts([field.to_dict(include_timestamps=False) for field in asset_type.fields])

    @staticmethod
    def create_asset_type(code: str, name: str, drafts=None, commit: bool = True) -> AssetType:
        """
        Create an asset type and its fields in one go

        Raises:
            AttributeValidationError: The drafts were rejected
        """
        asset_type = AssetType(code=code.strip(), name=name.strip(), is_active=True)
        db.session.add(asset_type)
        try:
            db.session.flush()
            AssetTypeSchemaService.save_fields(asset_type.id, drafts or [], commit=False)
            if commit:
                db.session.commit()
                logger.info(f"Created asset type {asset_type.code} with {len(asset_type.fields)} fields")
        except Exception:
            db.session.rollback()
            raise
        return asset_type

    @staticmethod
    def save_fields(asset_type_id: int, drafts, commit: bool = True) -> List[AssetTypeField]:
        """
        Replace the active schema of an asset type

        Args:
            asset_type_id: Asset type being edited
            drafts: FieldDraft objects or {label, type, required, unit_id} dicts, in display order
            commit: Whether to commit the transaction

        Returns:
            The active AssetTypeField rows in their new order

        Raises:
            AttributeValidationError: key_required / duplicate_key from the drafts
        """
        asset_type = AssetAttributeService.get_asset_type(asset_type_id)

        result = build_field_payload(drafts)
        if not result.ok:
            logger.warning(f"Rejected schema for asset type {asset_type_id}: {result.kind.value}")
            raise AttributeValidationError(result.kind, result.field_label)

        existing = {field.name.lower(): field for field in asset_type.fields}
        active_fields = []
        for position, payload in enumerate(result.value):
            field: Optional[AssetTypeField] = existing.pop(payload['name'].lower(), None)
            if field is None:
                field = AssetTypeField(asset_type_id=asset_type.id, name=payload['name'])
                asset_type.fields.append(field)
            field.label = payload['label']
            field.input_type = payload['input_type']
            field.required = payload['required']
            field.unit_id = payload['unit_id']
            field.is_active = payload['active']
            field.sort_order = position
            active_fields.append(field)

        for field in existing.values():
            if field.is_active:
                logger.debug(f"Deactivating field {field.name} on asset type {asset_type_id}")
            field.is_active = False

        try:
            if commit:
                db.session.commit()
                logger.info(f"Saved {len(active_fields)} fields for asset type {asset_type_id}")
        except Exception as e:
            db.session.rollback()
            logger.error(f"Error saving fields for asset type {asset_type_id}: {e}")
            raise
        return active_fields
