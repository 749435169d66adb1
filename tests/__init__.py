# tests/__init__.py

from tests.helpers.factories import make_requirements, make_scenario
from tests.helpers.invariants import assert_registry_invariants

__all__ = [
    "make_requirements",
    "make_scenario",
    "assert_registry_invariants",
]
