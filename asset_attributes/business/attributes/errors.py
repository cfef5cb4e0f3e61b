"""
Error kinds and domain exceptions for asset attribute handling

The engine itself never raises for bad user data: every check returns an
Ok / Err result carrying one of the AttributeErrorKind values below.
The exceptions are raised by the service layer when a host asks it to save
something the engine rejected.
"""

from enum import Enum


class AttributeErrorKind(str, Enum):
    KEY_REQUIRED = 'key_required'
    DUPLICATE_KEY = 'duplicate_key'
    REQUIRED = 'required'
    NUMBER = 'number'
    BOOLEAN = 'boolean'
    DATE = 'date'


DEFAULT_ERROR_MESSAGES = {
    AttributeErrorKind.KEY_REQUIRED: "Attribute key cannot be empty.",
    AttributeErrorKind.DUPLICATE_KEY: "The same key cannot be used more than once.",
    AttributeErrorKind.REQUIRED: "This field is required.",
    AttributeErrorKind.NUMBER: "A valid number must be entered.",
    AttributeErrorKind.BOOLEAN: "This field must be true or false.",
    AttributeErrorKind.DATE: "A valid date must be entered.",
}


def describe(kind, field_label=None):
    """Default English message for an error kind, prefixed with the field label when known"""
    message = DEFAULT_ERROR_MESSAGES[AttributeErrorKind(kind)]
    if field_label:
        return f"{field_label}: {message}"
    return message


class AttributeDomainError(Exception):
    """Base exception for all attribute domain errors"""
    pass


class AttributeValidationError(AttributeDomainError):
    """Raised when a save is attempted with attributes the engine rejected"""

    def __init__(self, kind, field_label=None):
        self.kind = AttributeErrorKind(kind)
        self.field_label = field_label
        super().__init__(describe(self.kind, field_label))


class SchemaNotLoadedError(AttributeDomainError):
    """Raised when saving while the schema for the selected asset type is not loaded"""
    pass


class AssetTypeNotFoundError(AttributeDomainError):
    """Raised when an asset type id does not resolve to a stored asset type"""
    pass
