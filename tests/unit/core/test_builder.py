"""
Unit tests for RegistryBuilder.

Tests cover:
- The literal example scenarios (two cells, equal instances, empty input,
  repeated scenario in one cell, duplicate cell keys)
- First-seen ordering and index sharing across cells
- Cells without scenarios
- Invariant checking and logging
"""

from __future__ import annotations

import logging

import pytest

from scengrid import (
    CellKey,
    CellRequirements,
    Config,
    DuplicateCellRequirementError,
    RegistryBuilder,
    ScenarioRegistry,
    build_registry,
)
from scengrid.logging import DEEP_DEBUG
from tests.helpers.factories import make_requirements, make_scenario
from tests.helpers.invariants import assert_registry_invariants

# ============================================================================
# Literal examples
# ============================================================================


def test_two_cells_opposite_order(s1, s2) -> None:
    reqs = make_requirements({(0, 0): [s1, s2], (0, 1): [s2, s1]})

    reg = build_registry(reqs)

    assert reg.scenario_definitions == (s1, s2)
    assert reg.scenario_indices_for(CellKey(0, 0)).tolist() == [0, 1]
    assert reg.scenario_indices_for(CellKey(0, 1)).tolist() == [1, 0]
    assert_registry_invariants(reg, reqs)


def test_equal_instances_collapse(s1) -> None:
    s1_copy = make_scenario("parallel_up", shift=0.0001)
    assert s1_copy is not s1 and s1_copy == s1
    reqs = make_requirements({(0, 0): [s1], (1, 0): [s1_copy]})

    reg = build_registry(reqs)

    assert reg.scenario_definitions == (s1,)
    assert reg.scenario_definitions[0] is s1  # first instance seen is kept
    assert reg.scenario_indices_for((0, 0)).tolist() == [0]
    assert reg.scenario_indices_for((1, 0)).tolist() == [0]


def test_empty_input_returns_empty_singleton() -> None:
    reg = build_registry([])

    assert reg is ScenarioRegistry.empty()
    assert reg.scenario_definitions == ()
    assert len(reg.cell_scenario_definitions) == 0
    assert reg.is_empty()


def test_same_scenario_twice_in_one_cell(s1) -> None:
    reqs = make_requirements({(2, 3): [s1, s1]})

    reg = build_registry(reqs)

    assert reg.scenario_definitions == (s1,)
    assert reg.scenario_indices_for((2, 3)).tolist() == [0, 0]


def test_duplicate_cell_key_fails(s1, s2) -> None:
    reqs = make_requirements([((0, 0), [s1]), ((0, 0), [s2])])

    with pytest.raises(DuplicateCellRequirementError) as exc_info:
        build_registry(reqs)

    assert exc_info.value.cell_key == CellKey(0, 0)
    assert "row=0, column=0" in str(exc_info.value)


def test_duplicate_cell_error_is_value_error(s1) -> None:
    reqs = make_requirements([((5, 1), [s1]), ((0, 0), []), ((5, 1), [])])

    with pytest.raises(ValueError, match="Duplicate requirements for cell"):
        build_registry(reqs)


# ============================================================================
# Ordering and sharing
# ============================================================================


def test_first_seen_order_across_cells(s1, s2, s3) -> None:
    reqs = make_requirements({(0, 0): [s3], (0, 1): [s1, s3], (1, 0): [s2, s1]})

    reg = build_registry(reqs)

    assert reg.scenario_definitions == (s3, s1, s2)
    assert reg.scenario_indices_for((0, 1)).tolist() == [1, 0]
    assert reg.scenario_indices_for((1, 0)).tolist() == [2, 1]


def test_cells_keep_input_order(s1) -> None:
    reqs = make_requirements({(3, 0): [s1], (0, 0): [s1], (1, 2): [s1]})

    reg = build_registry(reqs)

    assert reg.cells() == (CellKey(3, 0), CellKey(0, 0), CellKey(1, 2))


def test_opaque_hashable_scenarios() -> None:
    reqs = make_requirements({(0, 0): ["a", ("b", 1)], (0, 1): [("b", 1), "c"]})

    reg = build_registry(reqs)

    assert reg.scenario_definitions == ("a", ("b", 1), "c")
    assert reg.scenario_indices_for((0, 1)).tolist() == [1, 2]


def test_accepts_generator_input(s1, s2) -> None:
    reg = build_registry(
        CellRequirements.of(0, col, [s1, s2][col:]) for col in range(2)
    )

    assert reg.scenario_indices_for((0, 0)).tolist() == [0, 1]
    assert reg.scenario_indices_for((0, 1)).tolist() == [1]


def test_empty_generator_returns_singleton() -> None:
    assert build_registry(r for r in []) is ScenarioRegistry.empty()


# ============================================================================
# Cells without scenarios
# ============================================================================


def test_cells_without_scenarios_keep_empty_entry() -> None:
    reqs = make_requirements({(0, 0): [], (0, 1): []})

    reg = build_registry(reqs)

    assert reg is not ScenarioRegistry.empty()
    assert reg.scenario_definitions == ()
    assert reg.scenario_indices_for((0, 0)).tolist() == []
    assert reg.scenario_indices_for((9, 9)) is None
    assert not reg.is_empty()


# ============================================================================
# Builder behaviour
# ============================================================================


def test_builder_is_reusable(s1, s2) -> None:
    builder = RegistryBuilder()

    first = builder.build(make_requirements({(0, 0): [s1]}))
    second = builder.build(make_requirements({(0, 0): [s2, s1]}))

    assert first.scenario_definitions == (s1,)
    assert second.scenario_definitions == (s2, s1)


def test_failed_build_does_not_affect_next_build(s1, s2) -> None:
    builder = RegistryBuilder()
    with pytest.raises(DuplicateCellRequirementError):
        builder.build(make_requirements([((0, 0), [s2]), ((0, 0), [s2])]))

    reg = builder.build(make_requirements({(0, 0): [s1]}))

    assert reg.scenario_definitions == (s1,)


def test_of_matches_build_registry(s1, s2) -> None:
    reqs = make_requirements({(0, 0): [s1, s2], (1, 1): [s2]})
    assert ScenarioRegistry.of(reqs) == build_registry(reqs)


def test_check_invariants_runs_validate(s1, monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(ScenarioRegistry, "validate", lambda self: calls.append(self))

    reg = RegistryBuilder(Config(check_invariants=True)).build(
        make_requirements({(0, 0): [s1]})
    )

    assert calls == [reg]


def test_default_config_skips_validate(s1, monkeypatch) -> None:
    calls = []
    monkeypatch.setattr(ScenarioRegistry, "validate", lambda self: calls.append(self))

    build_registry(make_requirements({(0, 0): [s1]}))

    assert calls == []


def test_debug_summary_logged(s1, s2, caplog) -> None:
    reqs = make_requirements({(0, 0): [s1, s2], (0, 1): [s2]})

    with caplog.at_level(logging.DEBUG, logger="scengrid.core.builder"):
        build_registry(reqs)

    assert "2 cells, 3 references, 2 distinct scenarios" in caplog.text


def test_deep_trace_per_cell(s1, caplog) -> None:
    reqs = make_requirements({(4, 2): [s1, s1]})

    with caplog.at_level(DEEP_DEBUG, logger="scengrid.core.builder"):
        build_registry(reqs)

    assert "cell (4, 2) -> [0, 0]" in caplog.text
