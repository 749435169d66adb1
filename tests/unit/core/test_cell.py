"""Unit tests for CellKey and CellRequirements."""

from __future__ import annotations

import pytest

from scengrid import CellKey, CellRequirements

# ============================================================================
# CellKey
# ============================================================================


def test_cell_key_structural_equality() -> None:
    a = CellKey(1, 2)
    b = CellKey.of(1, 2)

    assert a == b
    assert a is not b
    assert hash(a) == hash(b)
    assert len({a, b}) == 1


def test_cell_key_distinguishes_row_and_column() -> None:
    assert CellKey(1, 2) != CellKey(2, 1)


def test_cell_key_is_frozen() -> None:
    key = CellKey(0, 0)
    with pytest.raises(AttributeError):
        key.row_index = 3  # type: ignore[misc]


def test_cell_key_orders_by_row_then_column() -> None:
    keys = [CellKey(1, 0), CellKey(0, 2), CellKey(0, 1)]
    assert sorted(keys) == [CellKey(0, 1), CellKey(0, 2), CellKey(1, 0)]


@pytest.mark.parametrize("row, col", [(-1, 0), (0, -1), (-3, -3)])
def test_cell_key_rejects_negative_indices(row: int, col: int) -> None:
    with pytest.raises(ValueError, match="must be non-negative"):
        CellKey(row, col)


@pytest.mark.parametrize("row, col", [(0.0, 0), (0, "1"), (True, 0)])
def test_cell_key_rejects_non_int_indices(row, col) -> None:
    with pytest.raises(TypeError, match="must be int"):
        CellKey(row, col)


# ============================================================================
# CellRequirements
# ============================================================================


def test_requirements_store_scenarios_as_tuple(s1, s2) -> None:
    req = CellRequirements(CellKey(0, 0), [s1, s2, s1])

    assert req.local_scenarios == (s1, s2, s1)
    assert isinstance(req.local_scenarios, tuple)


def test_requirements_of_builds_key(s1) -> None:
    req = CellRequirements.of(4, 7, iter([s1]))

    assert req.cell_key == CellKey(4, 7)
    assert req.row_index == 4
    assert req.column_index == 7
    assert req.local_scenarios == (s1,)


def test_requirements_default_to_no_scenarios() -> None:
    req = CellRequirements(CellKey(0, 0))
    assert req.local_scenarios == ()


def test_requirements_reject_unhashable_scenario() -> None:
    with pytest.raises(TypeError, match="position 1 .* unhashable"):
        CellRequirements.of(0, 0, ["ok", ["not", "hashable"]])


def test_requirements_reject_non_key() -> None:
    with pytest.raises(TypeError, match="cell_key must be CellKey"):
        CellRequirements((0, 0), [])  # type: ignore[arg-type]


def test_requirements_copy_input_sequence(s1, s2) -> None:
    scenarios = [s1]
    req = CellRequirements.of(0, 0, scenarios)
    scenarios.append(s2)

    assert req.local_scenarios == (s1,)
