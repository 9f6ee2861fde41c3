"""Palette resolution: decide which canonical style every original style becomes."""

from __future__ import annotations

from collections.abc import Mapping

from kml_restyler.core.log import get_logger
from kml_restyler.core.palette import DEFAULT_PALETTE_ID, extract_colour_keys, is_canonical
from kml_restyler.core.types import Document, Policy, Resolution

LOGGER = get_logger(__name__)


def _first_key(identifier: str, colour_mapping: Mapping[str, str]) -> str | None:
    for key in sorted(colour_mapping):
        if key in identifier:
            return key
    return None


def match_palette_id(identifier: str, colour_mapping: Mapping[str, str]) -> str:
    """Return the palette ID for the first colour key contained in identifier.

    Keys are tried in sorted order and matched as substrings, so
    'msn_icon-1602-0288D1' matches '0288D1'. No match gives the blue default.
    """
    key = _first_key(identifier, colour_mapping)
    if key is None:
        return DEFAULT_PALETTE_ID
    return colour_mapping[key]


def resolve(document: Document, policy: Policy) -> Resolution:
    """Map every Style and StyleMap ID in the document to a palette ID.

    IDs that already name a canonical palette style map to themselves, so
    the tool's own output resolves to itself.
    """
    identifiers = document.style_identifiers()
    colour_keys = extract_colour_keys(identifiers)
    colour_mapping = policy.build_mapping(colour_keys)
    LOGGER.debug('Policy %s: %d colour key(s) found, %d mapped', policy.name, len(colour_keys), len(colour_mapping))

    style_mapping: dict[str, str] = {}
    for identifier in identifiers:
        if not identifier:
            # An id-less Style cannot be referenced.
            continue
        if is_canonical(identifier):
            style_mapping[identifier] = identifier
            continue
        key = _first_key(identifier, colour_mapping)
        if key is None:
            LOGGER.debug('No colour key in %r, defaulting to %s', identifier, DEFAULT_PALETTE_ID)
            style_mapping[identifier] = DEFAULT_PALETTE_ID
        else:
            style_mapping[identifier] = colour_mapping[key]

    return Resolution(policy=policy.name, colour_mapping=colour_mapping, style_mapping=style_mapping)
