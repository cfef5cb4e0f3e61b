"""
Attribute validation
Checks edited attribute rows against the field definitions of their asset
type (schema-bound mode) or for structural key problems (free-form mode).

Nothing here raises for bad input: every check returns Ok() or
Err(kind, field_label) and the caller decides how to surface it.
"""

from asset_attributes.business.attributes.errors import AttributeErrorKind
from asset_attributes.business.attributes.field_schema import FieldType
from asset_attributes.business.attributes.reconciler import index_by_key
from asset_attributes.business.attributes.results import Err, Ok
from asset_attributes.business.attributes.schema_mode import SchemaBound, as_schema_mode
from asset_attributes.business.attributes.values import parse_date, parse_number
from asset_attributes.utils.logger import get_logger

logger = get_logger("asset_attributes.validator")

BOOLEAN_LITERALS = ('true', 'false')


class AttributeValidator:
    """Schema and key validation for attribute rows"""

    @classmethod
    def validate(cls, entries, mode):
        """
        Validate rows under the given mode

        Args:
            entries: Iterable of AttributeEntry
            mode: SchemaBound / FreeForm, or a list of FieldDefinitions

        Returns:
            Ok() or Err(kind, field_label); schema checks stop at the first
            failing field in schema order
        """
        mode = as_schema_mode(mode)
        entries = list(entries or [])
        if not isinstance(mode, SchemaBound):
            return cls.validate_keys(entries)

        by_key = index_by_key(entries)
        for definition in mode.schema:
            entry = by_key.get(definition.key.lower())
            raw = (entry.value if entry else '').strip()
            kind = cls.check_value(definition.type, raw, definition.required)
            if kind is not None:
                logger.debug(f"Field '{definition.key}' rejected: {kind.value}")
                return Err(kind, definition.display_label)

        return Ok()

    @classmethod
    def check_value(cls, field_type, raw, required=False):
        """
        Check one trimmed value against its field type

        Returns:
            AttributeErrorKind or None when the value is acceptable
        """
        if not raw:
            return AttributeErrorKind.REQUIRED if required else None

        if field_type == FieldType.NUMBER and parse_number(raw) is None:
            return AttributeErrorKind.NUMBER
        if field_type == FieldType.BOOLEAN and raw not in BOOLEAN_LITERALS:
            return AttributeErrorKind.BOOLEAN
        if field_type == FieldType.DATE and parse_date(raw) is None:
            return AttributeErrorKind.DATE
        return None

    @classmethod
    def validate_keys(cls, entries):
        """
        Structural checks for free-form rows

        Rows with no key, value or unit are ignored. Among the rest, a blank
        key is reported before any duplicate; duplicates compare keys
        case-insensitively after trimming.

        Returns:
            Ok() or Err(key_required | duplicate_key)
        """
        kept = [entry for entry in (entries or []) if not entry.is_blank()]

        for entry in kept:
            if not entry.key.strip():
                return Err(AttributeErrorKind.KEY_REQUIRED)

        seen = set()
        for entry in kept:
            lowered = entry.key.strip().lower()
            if lowered in seen:
                return Err(AttributeErrorKind.DUPLICATE_KEY, entry.key.strip())
            seen.add(lowered)

        return Ok()


validate = AttributeValidator.validate
validate_keys = AttributeValidator.validate_keys
