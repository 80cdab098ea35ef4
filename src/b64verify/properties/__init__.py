"""Property model, registry and the built-in catalog.

Exports:
    Property: Generator binding plus predicate
    Verdict: Predicate outcome
    PropertyRegistry: Immutable id-ordered catalog
    PROPERTY_TABLE: Registration table of the built-in properties
    default_registry: Cached registry built from PROPERTY_TABLE

Python 3.13+.
"""

from .catalog import PROPERTY_TABLE, default_registry
from .model import GeneratorFactory, Predicate, Property, Verdict
from .registry import PropertyRegistry

__all__ = [
    "PROPERTY_TABLE",
    "GeneratorFactory",
    "Predicate",
    "Property",
    "PropertyRegistry",
    "Verdict",
    "default_registry",
]
