"""Tests for kml_restyler.core.kml_parser — KML reading and writing."""

from pathlib import Path

import pytest
from kml_restyler.core.kml_parser import (
    KmlParseError,
    parse_kml_bytes,
    parse_kml_file,
    parse_kml_string,
    serialize_kml,
    write_kml_file,
)
from kml_restyler.core.types import Document, Folder, Placemark, Style

FIXTURES_DIR = Path(__file__).parent / 'fixtures'
MYMAP_KML = FIXTURES_DIR / 'mymap.kml'


class TestParseKmlFile:
    def test_document_fields(self):
        doc = parse_kml_file(MYMAP_KML)
        assert doc.name == 'Lisbon trip'
        assert doc.description == 'Places to see & eat'
        assert doc.namespace == 'http://www.opengis.net/kml/2.2'

    def test_styles(self):
        doc = parse_kml_file(MYMAP_KML)
        ids = [s.id for s in doc.styles]
        assert ids == [
            'icon-1602-0288D1-normal',
            'icon-1602-0288D1-highlight',
            'icon-1577-FF5252-normal',
            'icon-1899-F9A825-normal',
            'icon-plain',
        ]
        assert doc.styles[-1].icon_href == 'https://example.com/pin.png'

    def test_style_maps(self):
        doc = parse_kml_file(MYMAP_KML)
        assert [g.id for g in doc.style_groups] == ['icon-1602-0288D1', 'icon-1577-FF5252', 'icon-1899-F9A825']
        pairs = doc.style_groups[0].pairs
        assert [(p.key, p.style_url) for p in pairs] == [
            ('normal', '#icon-1602-0288D1-normal'),
            ('highlight', '#icon-1602-0288D1-highlight'),
        ]

    def test_folders_in_order(self):
        doc = parse_kml_file(MYMAP_KML)
        assert [f.name for f in doc.folders] == ['Sights', 'Food']
        assert [p.name for p in doc.folders[1].placemarks] == ['Pasteis de Belem', 'Time Out Market', 'Mystery stall']

    def test_placemark_text_kept_verbatim(self):
        doc = parse_kml_file(MYMAP_KML)
        belem = doc.folders[0].placemarks[0]
        assert belem.description == 'Built 1519 <b>UNESCO</b>'
        assert belem.style_url == '#icon-1602-0288D1'
        assert belem.coordinates == '\n            -9.2159,38.6916,0\n          '

    def test_missing_fields_are_empty(self):
        doc = parse_kml_file(MYMAP_KML)
        castelo = doc.folders[0].placemarks[1]
        assert castelo.description == ''

    def test_missing_file_raises_oserror(self, tmp_path: Path):
        with pytest.raises(OSError):
            parse_kml_file(tmp_path / 'nope.kml')


class TestParseKmlString:
    def test_without_namespace(self):
        doc = parse_kml_string(
            '<kml><Document><name>n</name><Style id="a"><IconStyle><Icon><href>h</href></Icon></IconStyle></Style>'
            '</Document></kml>'
        )
        assert doc.namespace == ''
        assert doc.styles == [Style(id='a', icon_href='h')]

    def test_prefixed_namespace(self):
        doc = parse_kml_string(
            '<k:kml xmlns:k="http://www.opengis.net/kml/2.2"><k:Document><k:Folder><k:name>F</k:name>'
            '<k:Placemark><k:name>P</k:name><k:styleUrl>#s</k:styleUrl></k:Placemark>'
            '</k:Folder></k:Document></k:kml>'
        )
        assert doc.folders[0].name == 'F'
        assert doc.folders[0].placemarks[0].style_url == '#s'

    def test_style_without_icon(self):
        doc = parse_kml_string('<kml><Document><Style id="bare"/></Document></kml>')
        assert doc.styles == [Style(id='bare', icon_href='')]

    def test_missing_document_is_empty(self):
        doc = parse_kml_string('<kml xmlns="http://www.opengis.net/kml/2.2"/>')
        assert doc.styles == []
        assert doc.folders == []

    def test_loose_placemarks_ignored(self):
        doc = parse_kml_string('<kml><Document><Placemark><name>x</name></Placemark></Document></kml>')
        assert doc.folders == []

    def test_nested_folders_flattened_in_document_order(self):
        doc = parse_kml_string(
            '<kml><Document>'
            '<Folder><name>Outer</name>'
            '<Placemark><name>a</name></Placemark>'
            '<Folder><name>Inner</name>'
            '<Placemark><name>b</name><styleUrl>#icon-1</styleUrl></Placemark>'
            '<Folder><name>Deepest</name><Placemark><name>c</name></Placemark></Folder>'
            '</Folder>'
            '</Folder>'
            '<Folder><name>Next</name><Placemark><name>d</name></Placemark></Folder>'
            '</Document></kml>'
        )
        assert [f.name for f in doc.folders] == ['Outer', 'Inner', 'Deepest', 'Next']
        assert [p.name for p in doc.placemarks()] == ['a', 'b', 'c', 'd']
        assert doc.folders[1].placemarks[0].style_url == '#icon-1'

    def test_nested_folder_placemarks_survive_serialization(self):
        doc = parse_kml_string(
            '<kml><Document><Folder><name>Outer</name>'
            '<Folder><name>Inner</name><Placemark><name>kept</name></Placemark></Folder>'
            '</Folder></Document></kml>'
        )
        again = parse_kml_bytes(serialize_kml(doc))
        assert [p.name for p in again.placemarks()] == ['kept']

    def test_string_input_ignores_declared_encoding(self):
        doc = parse_kml_string(
            '<?xml version="1.0" encoding="ISO-8859-1"?>'
            '<kml><Document><name>São Paulo</name></Document></kml>'
        )
        assert doc.name == 'São Paulo'

    def test_bytes_input_honours_declared_encoding(self):
        data = '<?xml version="1.0" encoding="ISO-8859-1"?><kml><Document><name>São</name></Document></kml>'
        doc = parse_kml_bytes(data.encode('iso-8859-1'))
        assert doc.name == 'São'


class TestParseErrors:
    def test_malformed_xml(self):
        with pytest.raises(KmlParseError):
            parse_kml_bytes(b'<kml><Document></kml>')

    def test_not_xml(self):
        with pytest.raises(KmlParseError):
            parse_kml_bytes(b'hello world')

    def test_wrong_root(self):
        with pytest.raises(KmlParseError, match='<gpx>'):
            parse_kml_bytes(b'<gpx><trk/></gpx>')

    def test_is_value_error(self):
        assert issubclass(KmlParseError, ValueError)


class TestSerializeKml:
    def _doc(self) -> Document:
        return Document(
            name='Trip',
            description='',
            styles=[Style(id='placemark-red', icon_href='https://omaps.app/placemarks/placemark-red.png')],
            folders=[
                Folder(
                    name='A',
                    placemarks=[Placemark(name='p & q', style_url='#placemark-red', coordinates='1,2,0')],
                )
            ],
        )

    def test_declaration_header(self):
        out = serialize_kml(self._doc())
        assert out.startswith(b'<?xml version="1.0" encoding="UTF-8"?>\n<kml xmlns="http://www.opengis.net/kml/2.2">')

    def test_indentation(self):
        text = serialize_kml(self._doc()).decode('utf-8')
        assert '\n  <Document>\n    <name>Trip</name>\n' in text
        assert '\n        <Placemark>\n' not in text
        assert '\n      <Placemark>\n' in text

    def test_custom_indent(self):
        text = serialize_kml(self._doc(), indent='    ').decode('utf-8')
        assert '\n    <Document>\n        <name>Trip</name>\n' in text

    def test_empty_elements_open_close(self):
        text = serialize_kml(self._doc()).decode('utf-8')
        assert '<description></description>' in text

    def test_escaping(self):
        text = serialize_kml(self._doc()).decode('utf-8')
        assert '<name>p &amp; q</name>' in text

    def test_no_style_maps_written_when_empty(self):
        assert b'StyleMap' not in serialize_kml(self._doc())

    def test_no_xmlns_when_namespace_empty(self):
        doc = self._doc()
        doc.namespace = ''
        assert b'<kml>' in serialize_kml(doc)

    def test_utf8(self):
        doc = self._doc()
        doc.name = 'Sao Jorge – Lisboa'
        assert 'Sao Jorge – Lisboa'.encode() in serialize_kml(doc)

    def test_reparse_gives_equal_document(self):
        doc = parse_kml_file(MYMAP_KML)
        again = parse_kml_bytes(serialize_kml(doc))
        assert again == doc

    def test_serialize_is_stable(self):
        doc = parse_kml_file(MYMAP_KML)
        first = serialize_kml(doc)
        assert serialize_kml(parse_kml_bytes(first)) == first


class TestWriteKmlFile:
    def test_writes_bytes(self, tmp_path: Path):
        doc = parse_kml_file(MYMAP_KML)
        out = tmp_path / 'out.kml'
        written = write_kml_file(doc, out)
        assert out.read_bytes() == serialize_kml(doc)
        assert written == len(out.read_bytes())

    def test_unwritable_raises_oserror(self, tmp_path: Path):
        doc = parse_kml_file(MYMAP_KML)
        with pytest.raises(OSError):
            write_kml_file(doc, tmp_path / 'missing-dir' / 'out.kml')
