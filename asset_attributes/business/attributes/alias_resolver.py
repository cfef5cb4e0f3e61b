"""
Alias Resolver
Surfaces brand / model / serial number as first-class inputs while they stay
ordinary rows in the attribute store. A row matches a canonical key when its
key or label, stripped to lowercase alphanumerics, equals one of the aliases.
"""

from __future__ import annotations

import re
from dataclasses import replace

from asset_attributes.business.attributes.entries import AttributeEntry
from asset_attributes.business.attributes.field_schema import FieldType

DEFAULT_ATTRIBUTE_ALIASES = {
    'brand': ('marka', 'brand'),
    'model': ('model',),
    'serial': ('seri_no', 'serial_no', 'serino', 'serialno'),
}

_NON_TOKEN_CHARS = re.compile(r'[^a-z0-9]+')


def normalize_token(value) -> str:
    return _NON_TOKEN_CHARS.sub('', (value or '').lower())


def _matches(entry: AttributeEntry, alias_tokens) -> bool:
    if normalize_token(entry.key) in alias_tokens:
        return True
    label = normalize_token(entry.label)
    return bool(label) and label in alias_tokens


def _find_index(entries, aliases) -> int:
    alias_tokens = {normalize_token(alias) for alias in aliases}
    for index, entry in enumerate(entries):
        if _matches(entry, alias_tokens):
            return index
    return -1


def pick(entries, aliases) -> str:
    """Value of the first row matching any alias, '' when none does"""
    entries = list(entries or [])
    index = _find_index(entries, aliases)
    return entries[index].value if index >= 0 else ''


def upsert(entries, canonical_key, aliases, value, schema=()) -> list[AttributeEntry]:
    """
    Write `value` through the alias lens

    An existing matching row only gets its value replaced. Otherwise a new
    row keyed `canonical_key` is appended, taking its unit, label, type and
    required flag from the schema definition with the same key if there is
    one.

    Returns:
        New list of AttributeEntry; rows are never removed or renamed
    """
    entries = list(entries or [])
    index = _find_index(entries, aliases)
    if index >= 0:
        return [
            entry.with_value(value) if i == index else entry
            for i, entry in enumerate(entries)
        ]

    canonical_token = normalize_token(canonical_key)
    definition = next(
        (d for d in (schema or ()) if normalize_token(d.key) == canonical_token),
        None,
    )
    if definition is not None:
        added = replace(AttributeEntry.from_definition(definition, value), key=canonical_key)
    else:
        added = AttributeEntry(
            key=canonical_key,
            value=value,
            label=canonical_key,
            field_type=FieldType.TEXT,
        )
    return entries + [added]


class AliasResolver:
    """
    Alias table bound to a call site

    Each call site may treat a different set of keys as canonical; pass the
    table in rather than copying the lookup logic.
    """

    def __init__(self, aliases=None):
        self.aliases = {
            canonical: tuple(names)
            for canonical, names in (aliases or DEFAULT_ATTRIBUTE_ALIASES).items()
        }

    def pick(self, entries, canonical_key: str) -> str:
        return pick(entries, self.aliases[canonical_key])

    def storage_key(self, canonical_key: str) -> str:
        """Key a new row is written under: the first alias of the canonical key"""
        return self.aliases[canonical_key][0]

    def upsert(self, entries, canonical_key: str, value: str, schema=()) -> list[AttributeEntry]:
        names = self.aliases[canonical_key]
        return upsert(entries, self.storage_key(canonical_key), names, value, schema)

    def canonical_key_for(self, entry: AttributeEntry) -> str | None:
        for canonical, names in self.aliases.items():
            if _matches(entry, {normalize_token(name) for name in names}):
                return canonical
        return None

    def is_alias_entry(self, entry: AttributeEntry) -> bool:
        return self.canonical_key_for(entry) is not None

    def visible_entries(self, entries) -> list[AttributeEntry]:
        """Rows for the generic editor, with the canonical rows left out"""
        return [entry for entry in (entries or []) if not self.is_alias_entry(entry)]

    def priority(self, entry: AttributeEntry, default: int = 10) -> int:
        """Position of the entry's canonical key in the alias table, `default` otherwise"""
        canonical = self.canonical_key_for(entry)
        if canonical is None:
            return default
        return list(self.aliases).index(canonical)
