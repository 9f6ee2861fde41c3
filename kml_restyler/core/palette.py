"""Canonical placemark palette and colour-key helpers.

The sixteen palette entries are what downstream map apps expect: the IDs
and icon URLs must stay byte-for-byte identical.
"""

from kml_restyler.core.types import PaletteEntry

ICON_BASE_URL = 'https://omaps.app/placemarks'

_PALETTE_NAMES = (
    'red',
    'blue',
    'purple',
    'yellow',
    'pink',
    'brown',
    'green',
    'orange',
    'deeppurple',
    'lightblue',
    'cyan',
    'teal',
    'lime',
    'deeporange',
    'gray',
    'bluegray',
)

CANONICAL_PALETTE: tuple[PaletteEntry, ...] = tuple(
    PaletteEntry(id=f'placemark-{name}', icon_href=f'{ICON_BASE_URL}/placemark-{name}.png')
    for name in _PALETTE_NAMES
)

DEFAULT_PALETTE_ID = 'placemark-blue'

# Round-robin order used when assigning discovered colour keys
COLOUR_ORDER: tuple[str, ...] = (
    'placemark-blue',
    'placemark-cyan',
    'placemark-teal',
    'placemark-lime',
    'placemark-green',
    'placemark-yellow',
    'placemark-orange',
    'placemark-deeporange',
    'placemark-red',
    'placemark-pink',
    'placemark-purple',
    'placemark-deeppurple',
    'placemark-brown',
    'placemark-gray',
    'placemark-bluegray',
    'placemark-lightblue',
)

# Google My Maps icon colours seen in exports
FIXED_COLOUR_TABLE: dict[str, str] = {
    '0097A7': 'placemark-cyan',
    '0288D1': 'placemark-blue',
    '097138': 'placemark-teal',
    '558B2F': 'placemark-green',
    '673AB7': 'placemark-purple',
    '795548': 'placemark-brown',
    '880E4F': 'placemark-deeppurple',
    'F9A825': 'placemark-yellow',
    'FF5252': 'placemark-red',
}

_HEX_DIGITS = frozenset('0123456789abcdefABCDEF')


def is_hex_colour(value: str) -> bool:
    """True for a bare six-digit hex colour like '0288D1' (no leading '#')."""
    return len(value) == 6 and all(c in _HEX_DIGITS for c in value)


def palette_ids() -> list[str]:
    return [entry.id for entry in CANONICAL_PALETTE]


def is_canonical(style_id: str) -> bool:
    return any(entry.id == style_id for entry in CANONICAL_PALETTE)


def extract_colour_keys(identifiers) -> list[str]:
    """Collect the distinct colour keys embedded in style identifiers.

    Identifiers are split on '-' and every six-hex-digit segment is a key,
    so 'icon-1602-0288D1-normal' yields '0288D1'. The result is sorted so
    that downstream assignment does not depend on document order.
    """
    keys: set[str] = set()
    for identifier in identifiers:
        for part in identifier.split('-'):
            if is_hex_colour(part):
                keys.add(part)
    return sorted(keys)
