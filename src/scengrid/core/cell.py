"""Grid cell identifiers and per-cell scenario requirements."""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Any

from scengrid.typing import Scenario


def _check_grid_index(name: str, value: Any) -> None:
    # bool is an int subclass but never a valid grid index
    if isinstance(value, bool) or not isinstance(value, int):
        raise TypeError(f"{name} must be int, got {type(value).__name__}")
    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")


@dataclass(slots=True, frozen=True, order=True)
class CellKey:
    """
    Position of one cell in the calculation grid.

    Rows are calculation targets, columns are requested measures. Keys
    compare, hash and sort by ``(row_index, column_index)``.

    Parameters
    ----------
    row_index : int
        Non-negative row index.
    column_index : int
        Non-negative column index.

    Examples
    --------
    >>> CellKey(0, 1) == CellKey.of(0, 1)
    True
    >>> sorted([CellKey(1, 0), CellKey(0, 2)])
    [CellKey(row_index=0, column_index=2), CellKey(row_index=1, column_index=0)]
    """

    row_index: int
    column_index: int

    def __post_init__(self) -> None:
        """Validate both indices are non-negative integers."""
        _check_grid_index("row_index", self.row_index)
        _check_grid_index("column_index", self.column_index)

    @classmethod
    def of(cls, row_index: int, column_index: int) -> CellKey:
        """Return the key for ``(row_index, column_index)``."""
        return cls(row_index, column_index)


@dataclass(slots=True, frozen=True)
class CellRequirements:
    """
    Local scenarios required by one grid cell.

    Parameters
    ----------
    cell_key : CellKey
        The cell these requirements belong to.
    local_scenarios : iterable of hashable
        Scenarios the cell must be valued under. Order is significant and
        duplicates are kept. Stored as a tuple.

    Raises
    ------
    TypeError
        If ``cell_key`` is not a CellKey or a scenario is unhashable.
    """

    cell_key: CellKey
    local_scenarios: tuple[Scenario, ...] = field(default=())

    def __post_init__(self) -> None:
        if not isinstance(self.cell_key, CellKey):
            raise TypeError(
                f"cell_key must be CellKey, got {type(self.cell_key).__name__}"
            )
        scenarios = tuple(self.local_scenarios)
        for position, scenario in enumerate(scenarios):
            try:
                hash(scenario)
            except TypeError:
                raise TypeError(
                    f"Scenario at position {position} of cell {self.cell_key} "
                    f"is unhashable ({type(scenario).__name__})"
                ) from None
        object.__setattr__(self, "local_scenarios", scenarios)

    @classmethod
    def of(
        cls,
        row_index: int,
        column_index: int,
        local_scenarios: Iterable[Scenario] = (),
    ) -> CellRequirements:
        """Build requirements for the cell at ``(row_index, column_index)``."""
        return cls(CellKey(row_index, column_index), tuple(local_scenarios))

    @property
    def row_index(self) -> int:
        return self.cell_key.row_index

    @property
    def column_index(self) -> int:
        return self.cell_key.column_index
