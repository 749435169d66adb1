"""Core value types, registry and builder for scengrid."""

from scengrid.core.builder import RegistryBuilder, build_registry
from scengrid.core.cell import CellKey, CellRequirements
from scengrid.core.errors import (
    DuplicateCellRequirementError,
    RegistryInvariantError,
    ScenarioIndexError,
)
from scengrid.core.registry import RegistryStats, ScenarioRegistry
from scengrid.core.scenario import LocalScenarioDefinition, Perturbation, ShiftType

__all__ = [
    "CellKey",
    "CellRequirements",
    "DuplicateCellRequirementError",
    "LocalScenarioDefinition",
    "Perturbation",
    "RegistryBuilder",
    "RegistryInvariantError",
    "RegistryStats",
    "ScenarioIndexError",
    "ScenarioRegistry",
    "ShiftType",
    "build_registry",
]
