"""
Key generation for attribute fields

Turns a free-text field label into the machine-safe key stored in asset
attribute documents, e.g. "Çalışma Şekli" -> "calisma_sekli".
"""

import re
import unicodedata

# Turkish letters that NFKD either leaves alone (ı) or would map oddly (İ)
TRANSLITERATION_TABLE = str.maketrans({
    'Ç': 'c', 'ç': 'c',
    'Ğ': 'g', 'ğ': 'g',
    'İ': 'i', 'I': 'i', 'ı': 'i',
    'Ö': 'o', 'ö': 'o',
    'Ş': 's', 'ş': 's',
    'Ü': 'u', 'ü': 'u',
})

_NON_KEY_CHARS = re.compile(r'[^a-z0-9]+')


def slugify(label: str) -> str:
    """
    Build a stable key from a field label.

    An empty result means the label had nothing usable; callers report it
    as key_required. Distinct labels may collide ("Renk" and "renk!!").
    """
    source = (label or '').strip()
    if not source:
        return ''

    ascii_text = unicodedata.normalize('NFKD', source.translate(TRANSLITERATION_TABLE))
    ascii_text = ''.join(ch for ch in ascii_text if not unicodedata.combining(ch))

    return _NON_KEY_CHARS.sub('_', ascii_text.lower()).strip('_')
