"""Colour policy auto-discovery and registration.

Scans kml_restyler/policies/ for modules that define a `policy` object of
type Policy. Collects them into a dict keyed by name.
"""

import importlib
import pkgutil

from kml_restyler.core.types import Policy

_registry: dict[str, Policy] = {}


def discover() -> dict[str, Policy]:
    """Import all policy modules and return the registry."""
    if _registry:
        return _registry

    import kml_restyler.policies as pkg

    for _importer, modname, _ispkg in pkgutil.iter_modules(pkg.__path__):
        if modname.startswith('_'):
            continue
        module = importlib.import_module(f'kml_restyler.policies.{modname}')
        pol = getattr(module, 'policy', None)
        if isinstance(pol, Policy):
            _registry[pol.name] = pol

    return _registry


def get(name: str) -> Policy:
    """Get a policy by name."""
    reg = discover()
    if name not in reg:
        raise KeyError(f'Unknown policy: {name}. Available: {", ".join(sorted(reg))}')
    return reg[name]


def all_policies() -> dict[str, Policy]:
    """Return all registered policies."""
    return discover()
