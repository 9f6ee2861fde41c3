"""kml_restyler.core — Foundation layer.

Contains the document model, canonical palette, KML reader/writer,
resolver, rewriter, settings and report builder.
This module has NO dependencies on kml_restyler.policies or
kml_restyler.registry; policies are passed in as Policy objects.
"""
