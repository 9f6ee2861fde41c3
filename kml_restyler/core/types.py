"""Shared types for kml-restyler: the KML document model, Policy, Resolution."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field

KML_NAMESPACE = 'http://www.opengis.net/kml/2.2'


@dataclass
class Style:
    """A single-icon point style (<Style id=...><IconStyle><Icon><href>)."""

    id: str
    icon_href: str = ''


@dataclass
class StylePair:
    key: str  # 'normal' or 'highlight'
    style_url: str  # '#<style id>'


@dataclass
class StyleGroup:
    """A KML <StyleMap>: state keys pointing at Styles, no visuals of its own."""

    id: str
    pairs: list[StylePair] = field(default_factory=list)


@dataclass
class Placemark:
    name: str = ''
    description: str = ''
    style_url: str = ''
    coordinates: str = ''  # raw <Point><coordinates> text, passed through


@dataclass
class Folder:
    name: str = ''
    placemarks: list[Placemark] = field(default_factory=list)


@dataclass
class Document:
    """Parsed KML document. Mutated in place by the rewriter."""

    name: str = ''
    description: str = ''
    styles: list[Style] = field(default_factory=list)
    style_groups: list[StyleGroup] = field(default_factory=list)
    folders: list[Folder] = field(default_factory=list)
    namespace: str = KML_NAMESPACE  # root <kml> xmlns, '' when absent

    def style_identifiers(self) -> list[str]:
        """Every Style ID followed by every StyleGroup ID, in document order."""
        return [s.id for s in self.styles] + [g.id for g in self.style_groups]

    def placemarks(self) -> list[Placemark]:
        return [p for folder in self.folders for p in folder.placemarks]


@dataclass(frozen=True)
class PaletteEntry:
    id: str
    icon_href: str


@dataclass
class Resolution:
    """Result of palette resolution for one document."""

    policy: str
    colour_mapping: dict[str, str] = field(default_factory=dict)  # colour key -> palette ID
    style_mapping: dict[str, str] = field(default_factory=dict)  # style/group ID -> palette ID


@dataclass
class RewriteStats:
    rewritten: int = 0
    untouched: int = 0
    unresolved: list[str] = field(default_factory=list)  # style URLs left as-is


class Policy:
    """A self-registering colour-to-palette policy.

    Usage in a policy module:

        policy = Policy(name='fixed', help='Static table of known colours')

        @policy.assign
        def assign(colour_keys):
            ...
    """

    def __init__(self, name: str, help: str = ''):
        self.name = name
        self.help = help
        self._assign_fn: Callable | None = None

    def assign(self, fn: Callable) -> Callable:
        """Decorator to register the assignment function."""
        self._assign_fn = fn
        return fn

    def build_mapping(self, colour_keys: list[str]) -> dict[str, str]:
        """Return colour key -> palette ID for the keys found in a document."""
        if self._assign_fn is None:
            raise RuntimeError(f'Policy {self.name} has no assign function')
        return self._assign_fn(colour_keys)
