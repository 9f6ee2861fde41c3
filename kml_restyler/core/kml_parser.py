"""ElementTree-based KML reader and writer.

Only the parts of KML the restyler touches are modelled: document name and
description, icon Styles, StyleMaps, and Folders of point Placemarks.
Elements are matched by local name, so files with or without the KML
namespace (or with a prefix) read the same. Text is kept verbatim.
"""

from __future__ import annotations

from pathlib import Path
from xml.etree import ElementTree as ET

from kml_restyler.core.log import get_logger
from kml_restyler.core.types import Document, Folder, Placemark, Style, StyleGroup, StylePair

LOGGER = get_logger(__name__)

XML_HEADER = '<?xml version="1.0" encoding="UTF-8"?>\n'


class KmlParseError(ValueError):
    """Input is not well-formed XML or not a KML document."""


def parse_kml_file(path: str | Path) -> Document:
    """Parse a KML file from disk. OSError propagates to the caller."""
    data = Path(path).read_bytes()
    LOGGER.debug('Read %d bytes from %s', len(data), path)
    return parse_kml_bytes(data)


def parse_kml_string(text: str) -> Document:
    """Parse already-decoded KML text. Any declared encoding is ignored."""
    return _parse_root(_fromstring(text))


def parse_kml_bytes(data: bytes) -> Document:
    """Parse raw KML bytes into a Document, honouring the declared encoding."""
    return _parse_root(_fromstring(data))


def _fromstring(data: str | bytes) -> ET.Element:
    try:
        return ET.fromstring(data)
    except ET.ParseError as exc:
        raise KmlParseError(f'malformed XML: {exc}') from exc


def _parse_root(root: ET.Element) -> Document:
    namespace, tag = _split_tag(root.tag)
    if tag != 'kml':
        raise KmlParseError(f'expected root element <kml>, found <{tag}>')

    document = Document(namespace=namespace)
    doc_el = _child(root, 'Document')
    if doc_el is None:
        LOGGER.warning('No <Document> element; nothing to restyle')
        return document

    document.name = _text(doc_el, 'name')
    document.description = _text(doc_el, 'description')
    document.styles = [_parse_style(el) for el in _children(doc_el, 'Style')]
    document.style_groups = [_parse_style_group(el) for el in _children(doc_el, 'StyleMap')]
    document.folders = [folder for el in _children(doc_el, 'Folder') for folder in _parse_folder(el)]

    loose = len(_children(doc_el, 'Placemark'))
    if loose:
        LOGGER.warning('Ignoring %d placemark(s) outside any <Folder>', loose)

    LOGGER.debug(
        'Parsed %d styles, %d style maps, %d folders',
        len(document.styles),
        len(document.style_groups),
        len(document.folders),
    )
    return document


def _parse_style(el: ET.Element) -> Style:
    href = ''
    icon_style = _child(el, 'IconStyle')
    if icon_style is not None:
        icon = _child(icon_style, 'Icon')
        if icon is not None:
            href = _text(icon, 'href')
    return Style(id=el.get('id', ''), icon_href=href)


def _parse_style_group(el: ET.Element) -> StyleGroup:
    pairs = [StylePair(key=_text(p, 'key'), style_url=_text(p, 'styleUrl')) for p in _children(el, 'Pair')]
    return StyleGroup(id=el.get('id', ''), pairs=pairs)


def _parse_folder(el: ET.Element) -> list[Folder]:
    """Return the folder followed by its nested folders, depth first.

    The model has no folder hierarchy, so nested folders become siblings
    placed right after their parent. No placemark is lost.
    """
    folder = Folder(
        name=_text(el, 'name'),
        placemarks=[_parse_placemark(p) for p in _children(el, 'Placemark')],
    )
    nested = _children(el, 'Folder')
    if nested:
        LOGGER.info('Flattening %d nested <Folder>(s) in %r', len(nested), folder.name)
    return [folder] + [sub for child in nested for sub in _parse_folder(child)]


def _parse_placemark(el: ET.Element) -> Placemark:
    coordinates = ''
    point = _child(el, 'Point')
    if point is not None:
        coordinates = _text(point, 'coordinates')
    return Placemark(
        name=_text(el, 'name'),
        description=_text(el, 'description'),
        style_url=_text(el, 'styleUrl'),
        coordinates=coordinates,
    )


def _split_tag(tag: str) -> tuple[str, str]:
    """'{ns}local' -> ('ns', 'local'); 'local' -> ('', 'local')."""
    if tag.startswith('{'):
        ns, _, local = tag[1:].partition('}')
        return ns, local
    return '', tag


def _children(el: ET.Element, name: str) -> list[ET.Element]:
    return [child for child in el if _split_tag(child.tag)[1] == name]


def _child(el: ET.Element, name: str) -> ET.Element | None:
    for child in el:
        if _split_tag(child.tag)[1] == name:
            return child
    return None


def _text(el: ET.Element, name: str) -> str:
    child = _child(el, name)
    if child is None or child.text is None:
        return ''
    return child.text


# -- writing -----------------------------------------------------------------


def serialize_kml(document: Document, indent: str = '  ') -> bytes:
    """Serialize a Document to UTF-8 KML with an XML declaration.

    Every modelled field is written, even when empty, so output is stable
    across re-runs.
    """
    root = ET.Element('kml')
    if document.namespace:
        root.set('xmlns', document.namespace)

    doc_el = ET.SubElement(root, 'Document')
    _sub_text(doc_el, 'name', document.name)
    _sub_text(doc_el, 'description', document.description)

    for style in document.styles:
        style_el = ET.SubElement(doc_el, 'Style', {'id': style.id})
        icon_el = ET.SubElement(ET.SubElement(style_el, 'IconStyle'), 'Icon')
        _sub_text(icon_el, 'href', style.icon_href)

    for group in document.style_groups:
        group_el = ET.SubElement(doc_el, 'StyleMap', {'id': group.id})
        for pair in group.pairs:
            pair_el = ET.SubElement(group_el, 'Pair')
            _sub_text(pair_el, 'key', pair.key)
            _sub_text(pair_el, 'styleUrl', pair.style_url)

    for folder in document.folders:
        folder_el = ET.SubElement(doc_el, 'Folder')
        _sub_text(folder_el, 'name', folder.name)
        for placemark in folder.placemarks:
            pm_el = ET.SubElement(folder_el, 'Placemark')
            _sub_text(pm_el, 'name', placemark.name)
            _sub_text(pm_el, 'description', placemark.description)
            _sub_text(pm_el, 'styleUrl', placemark.style_url)
            _sub_text(ET.SubElement(pm_el, 'Point'), 'coordinates', placemark.coordinates)

    ET.indent(root, space=indent)
    body = ET.tostring(root, encoding='unicode', short_empty_elements=False)
    return (XML_HEADER + body + '\n').encode('utf-8')


def write_kml_file(document: Document, path: str | Path, indent: str = '  ') -> int:
    """Serialize and write a Document. Returns the number of bytes written."""
    data = serialize_kml(document, indent=indent)
    Path(path).write_bytes(data)
    LOGGER.debug('Wrote %d bytes to %s', len(data), path)
    return len(data)


def _sub_text(parent: ET.Element, tag: str, text: str) -> ET.Element:
    el = ET.SubElement(parent, tag)
    el.text = text
    return el
