"""
scengrid - Scenario Deduplication and Cell Indexing for Risk Grids
==================================================================

A risk calculation runs as a grid of cells (row = calculation target,
column = requested measure). Each cell may need valuing under a few
locally-scoped market data scenarios, and across a large grid many cells
ask for value-identical scenarios. scengrid stores every distinct scenario
once and gives each cell a compact array of indices into that store.

Quick Start
-----------
>>> import scengrid as sg
>>> s1 = sg.LocalScenarioDefinition.of("up", sg.Perturbation("EUR-ESTR/1Y", 1e-4))
>>> s2 = sg.LocalScenarioDefinition.of("down", sg.Perturbation("EUR-ESTR/1Y", -1e-4))
>>> reg = sg.build_registry([
...     sg.CellRequirements.of(0, 0, [s1, s2]),
...     sg.CellRequirements.of(0, 1, [s2, s1]),
... ])
>>> len(reg.scenario_definitions)
2
>>> reg.scenario_indices_for((0, 1)).tolist()
[1, 0]

Key Concepts
------------
**Structural equality**
  Scenarios are deduplicated by ``==``/``hash``, never by identity. Any
  hashable value works; LocalScenarioDefinition is a ready-made one.

**First-seen order**
  Scenarios appear in the registry in the order first encountered,
  scanning cells in input order and scenarios within each cell in order.

**Immutability**
  A built registry never changes. Index arrays are read-only numpy
  arrays, so workers share one registry without locks.

Public API
----------
build_registry, RegistryBuilder
    Build a ScenarioRegistry from CellRequirements.
ScenarioRegistry
    The deduplicated registry and its read API.
CellKey, CellRequirements
    Grid positions and their scenario requirements.
LocalScenarioDefinition, Perturbation, ShiftType
    Concrete scenario value types.
DuplicateCellRequirementError, ScenarioIndexError, RegistryInvariantError
    Errors raised by the engine.
Config, load_config
    Engine configuration.
"""

from scengrid.config import Config, load_config
from scengrid.core import (
    CellKey,
    CellRequirements,
    DuplicateCellRequirementError,
    LocalScenarioDefinition,
    Perturbation,
    RegistryBuilder,
    RegistryInvariantError,
    RegistryStats,
    ScenarioIndexError,
    ScenarioRegistry,
    ShiftType,
    build_registry,
)

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "CellKey",
    "CellRequirements",
    "Config",
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
    "load_config",
]
