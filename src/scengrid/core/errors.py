"""Exceptions raised by the registry builder and the registry read API."""

from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from scengrid.core.cell import CellKey


class DuplicateCellRequirementError(ValueError):
    """
    Raised when two requirements in one build share a cell key.

    Requirement gathering must hand over at most one entry per cell, so
    this always indicates an upstream bug. The build is aborted and no
    registry is returned.

    Parameters
    ----------
    cell_key : CellKey
        The key that appeared more than once.
    """

    def __init__(self, cell_key: CellKey) -> None:
        self.cell_key = cell_key
        super().__init__(
            f"Duplicate requirements for cell (row={cell_key.row_index}, "
            f"column={cell_key.column_index}); each cell may appear only once"
        )


class ScenarioIndexError(IndexError):
    """Raised by ``ScenarioRegistry.scenario_at`` for an index outside the registry."""

    def __init__(self, index: int, size: int) -> None:
        self.index = index
        self.size = size
        if size == 0:
            msg = f"Scenario index {index} out of range: registry is empty"
        else:
            msg = f"Scenario index {index} out of range [0, {size})"
        super().__init__(msg)


class RegistryInvariantError(ValueError):
    """Raised by ``ScenarioRegistry.validate`` when a structural invariant fails."""
