"""kml-restyler: normalise KML placemark styles onto a fixed sixteen-colour palette."""

__version__ = '0.1.0'
