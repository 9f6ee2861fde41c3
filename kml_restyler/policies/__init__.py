"""Auto-discovery of colour policy modules.

Every .py file in this package that defines a `policy` object is
auto-registered by kml_restyler.registry.discover().
"""
