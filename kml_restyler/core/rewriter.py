"""Replace a document's styles with the canonical palette and repoint placemarks."""

from __future__ import annotations

from kml_restyler.core.log import get_logger
from kml_restyler.core.palette import CANONICAL_PALETTE
from kml_restyler.core.resolver import resolve
from kml_restyler.core.types import Document, Policy, Resolution, RewriteStats, Style

LOGGER = get_logger(__name__)

ANCHOR = '#'


def canonical_styles() -> list[Style]:
    """Fresh Style objects for all sixteen palette entries."""
    return [Style(id=entry.id, icon_href=entry.icon_href) for entry in CANONICAL_PALETTE]


def rewrite(document: Document, resolution: Resolution) -> RewriteStats:
    """Apply a resolution to the document in place.

    All sixteen palette styles are written whether used or not, and every
    StyleMap is dropped. A placemark whose style URL is empty or not in the
    resolution keeps its original URL.
    """
    document.styles = canonical_styles()
    document.style_groups = []

    stats = RewriteStats()
    for folder in document.folders:
        for placemark in folder.placemarks:
            style_id = placemark.style_url.removeprefix(ANCHOR)
            palette_id = resolution.style_mapping.get(style_id) if style_id else None
            if palette_id is None:
                LOGGER.debug('Leaving unresolved style %r on %r', placemark.style_url, placemark.name)
                stats.untouched += 1
                stats.unresolved.append(placemark.style_url)
                continue
            placemark.style_url = ANCHOR + palette_id
            stats.rewritten += 1

    LOGGER.info('Rewrote %d placemark style(s), left %d untouched', stats.rewritten, stats.untouched)
    return stats


def restyle(document: Document, policy: Policy) -> tuple[Resolution, RewriteStats]:
    """Resolve and rewrite in one step."""
    resolution = resolve(document, policy)
    return resolution, rewrite(document, resolution)
