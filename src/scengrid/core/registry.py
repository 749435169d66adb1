"""
Deduplicated scenario registry shared by valuation workers.

A ScenarioRegistry holds the distinct local scenarios of one calculation
run, in first-seen order, and per grid cell a read-only array of indices
into them. It is immutable once constructed and is read concurrently by
any number of workers without locking.
"""

from __future__ import annotations

import operator
from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass
from types import MappingProxyType
from typing import TYPE_CHECKING, Any, ClassVar

import numpy as np

from scengrid.core.cell import CellKey
from scengrid.core.errors import RegistryInvariantError, ScenarioIndexError
from scengrid.typing import Idx1D, Scenario

if TYPE_CHECKING:
    from pandas import DataFrame

    from scengrid.core.cell import CellRequirements


def _import_pandas() -> Any:
    """
    Lazily import pandas with helpful error message if not installed.

    Raises
    ------
    ImportError
        If pandas is not installed.
    """
    try:
        import pandas as pd

        return pd
    except ImportError:  # pragma: no cover
        raise ImportError(
            "pandas is required for ScenarioRegistry.to_dataframe(). "
            "Install it with: pip install scengrid[pandas] or pip install pandas"
        ) from None


def _as_key(cell_key: CellKey | tuple[int, int]) -> CellKey:
    if isinstance(cell_key, CellKey):
        return cell_key
    row, column = cell_key
    return CellKey(row, column)


def _frozen_indices(indices: Iterable[int] | Idx1D) -> Idx1D:
    raw = np.asarray(indices)
    if raw.ndim != 1:
        raise RegistryInvariantError(
            f"Scenario indices must be 1-D, got shape={raw.shape}"
        )
    # an empty list has float dtype; only non-empty data must be integral
    integral = raw.dtype != np.bool_ and np.issubdtype(raw.dtype, np.integer)
    if raw.size and not integral:
        raise TypeError(f"Scenario indices must be integers, got dtype={raw.dtype}")
    arr = np.array(raw, dtype=np.intp)
    arr.setflags(write=False)
    return arr


@dataclass(slots=True, frozen=True)
class RegistryStats:
    """
    Summary counts for a registry.

    Parameters
    ----------
    n_cells : int
        Cells with an entry (including entries with no scenarios).
    n_scenarios : int
        Distinct scenarios.
    n_references : int
        Total scenario references across all cells.
    dedup_ratio : float
        ``n_references / n_scenarios``; 0.0 when there are no scenarios.
    """

    n_cells: int
    n_scenarios: int
    n_references: int
    dedup_ratio: float


class ScenarioRegistry:
    """
    Immutable registry of distinct local scenarios and per-cell indices.

    Parameters
    ----------
    scenario_definitions : iterable of hashable
        Distinct scenarios in first-seen order.
    cell_scenario_definitions : mapping of CellKey to sequence of int
        Per-cell indices into ``scenario_definitions``.

    Raises
    ------
    RegistryInvariantError
        If the scenarios are not distinct, an index is out of range, or a
        cell's indices are not 1-D.
    TypeError
        If a cell key is not a CellKey or a cell's indices are not integers.

    Notes
    -----
    Registries are normally produced by ``RegistryBuilder.build`` (or
    ``ScenarioRegistry.of``) rather than constructed directly. Cells absent
    from the mapping and cells mapped to an empty array both mean "no local
    scenario overrides".

    Examples
    --------
    >>> from scengrid import CellRequirements, ScenarioRegistry
    >>> reg = ScenarioRegistry.of([
    ...     CellRequirements.of(0, 0, ["s1", "s2"]),
    ...     CellRequirements.of(0, 1, ["s2", "s1"]),
    ... ])
    >>> reg.scenario_definitions
    ('s1', 's2')
    >>> reg.scenario_indices_for((0, 1)).tolist()
    [1, 0]
    """

    __slots__ = ("_scenarios", "_cells", "_hash")

    _EMPTY: ClassVar[ScenarioRegistry]

    def __init__(
        self,
        scenario_definitions: Iterable[Scenario] = (),
        cell_scenario_definitions: Mapping[CellKey, Iterable[int]] | None = None,
    ) -> None:
        cells: dict[CellKey, Idx1D] = {}
        for key, indices in (cell_scenario_definitions or {}).items():
            if not isinstance(key, CellKey):
                raise TypeError(f"Cell keys must be CellKey, got {type(key).__name__}")
            cells[key] = _frozen_indices(indices)
        self._init(tuple(scenario_definitions), cells)
        self.validate()

    def _init(
        self, scenarios: tuple[Scenario, ...], cells: dict[CellKey, Idx1D]
    ) -> None:
        self._scenarios = scenarios
        self._cells: Mapping[CellKey, Idx1D] = MappingProxyType(cells)
        self._hash: int | None = None

    @classmethod
    def _from_parts(
        cls, scenarios: tuple[Scenario, ...], cells: dict[CellKey, Idx1D]
    ) -> ScenarioRegistry:
        """Wrap already-validated parts without copying or re-checking them."""
        obj = cls.__new__(cls)
        obj._init(scenarios, cells)
        return obj

    # ------------------------------------------------------------------ #
    # Factories
    # ------------------------------------------------------------------ #

    @classmethod
    def empty(cls) -> ScenarioRegistry:
        """Return the shared registry with no scenarios and no cells."""
        return cls._EMPTY

    @classmethod
    def of(cls, requirements: Iterable[CellRequirements]) -> ScenarioRegistry:
        """
        Build a registry from per-cell requirements.

        Shortcut for ``RegistryBuilder().build(requirements)``.
        """
        from scengrid.core.builder import build_registry

        return build_registry(requirements)

    # ------------------------------------------------------------------ #
    # Read API
    # ------------------------------------------------------------------ #

    @property
    def scenario_definitions(self) -> tuple[Scenario, ...]:
        """Distinct scenarios in first-seen order."""
        return self._scenarios

    @property
    def cell_scenario_definitions(self) -> Mapping[CellKey, Idx1D]:
        """Read-only mapping of cell key to read-only index array."""
        return self._cells

    @property
    def n_scenarios(self) -> int:
        return len(self._scenarios)

    @property
    def n_cells(self) -> int:
        return len(self._cells)

    def is_empty(self) -> bool:
        """True when the registry holds no scenarios and no cells."""
        return not self._scenarios and not self._cells

    def scenario_at(self, index: int) -> Scenario:
        """
        Return the scenario stored at ``index``.

        Parameters
        ----------
        index : int
            Position in ``scenario_definitions``. Negative values are
            invalid; there is no wrap-around.

        Raises
        ------
        ScenarioIndexError
            If ``index`` is outside ``[0, n_scenarios)``.
        TypeError
            If ``index`` is not an integer.
        """
        if isinstance(index, bool):
            raise TypeError("Scenario index must be int, got bool")
        i = operator.index(index)
        if i < 0 or i >= len(self._scenarios):
            raise ScenarioIndexError(i, len(self._scenarios))
        return self._scenarios[i]

    def scenario_indices_for(
        self, cell_key: CellKey | tuple[int, int]
    ) -> Idx1D | None:
        """
        Return the scenario indices for a cell.

        Returns ``None`` when the cell has no entry. An entry may also be an
        empty array; both mean the cell has no local scenario overrides.
        A tuple that cannot name a cell, such as ``(0, -1)``, has no entry.
        """
        try:
            key = _as_key(cell_key)
        except (TypeError, ValueError):
            return None
        return self._cells.get(key)

    def scenarios_for(
        self, cell_key: CellKey | tuple[int, int]
    ) -> tuple[Scenario, ...]:
        """Return the scenarios for a cell in its original order (``()`` if none)."""
        indices = self.scenario_indices_for(cell_key)
        if indices is None:
            return ()
        return tuple(self._scenarios[i] for i in indices)

    def cells(self) -> tuple[CellKey, ...]:
        """Cell keys in the order their requirements were supplied."""
        return tuple(self._cells)

    def usage_counts(self) -> Idx1D:
        """Number of references to each scenario across all cells."""
        _, _, flat = self.to_csr()
        return np.bincount(flat, minlength=len(self._scenarios)).astype(np.intp)

    def to_csr(self) -> tuple[tuple[CellKey, ...], Idx1D, Idx1D]:
        """
        Flatten the per-cell indices into compressed sparse row form.

        Returns
        -------
        cell_keys : tuple of CellKey
            Cells in build order.
        offsets : Idx1D
            Length ``len(cell_keys) + 1``; cell ``i`` owns
            ``indices[offsets[i]:offsets[i + 1]]``.
        indices : Idx1D
            All scenario indices, concatenated.
        """
        keys = tuple(self._cells)
        arrays = [self._cells[k] for k in keys]
        lengths = np.fromiter((a.size for a in arrays), dtype=np.intp, count=len(keys))
        offsets = np.zeros(len(keys) + 1, dtype=np.intp)
        np.cumsum(lengths, out=offsets[1:])
        if arrays:
            flat = np.concatenate(arrays).astype(np.intp, copy=False)
        else:
            flat = np.empty(0, dtype=np.intp)
        return keys, offsets, flat

    def to_dataframe(self) -> DataFrame:
        """
        Export the cell index mapping as a long-format DataFrame.

        One row per scenario reference with columns ``row_index``,
        ``column_index``, ``position`` (within the cell) and
        ``scenario_index``.

        Raises
        ------
        ImportError
            If pandas is not installed.
        """
        pd = _import_pandas()
        keys, offsets, flat = self.to_csr()
        lengths = np.diff(offsets)
        rows = np.repeat(np.array([k.row_index for k in keys], dtype=np.intp), lengths)
        cols = np.repeat(
            np.array([k.column_index for k in keys], dtype=np.intp), lengths
        )
        starts = np.repeat(offsets[:-1], lengths)
        positions = np.arange(flat.size, dtype=np.intp) - starts
        return pd.DataFrame(
            {
                "row_index": rows,
                "column_index": cols,
                "position": positions,
                "scenario_index": flat,
            }
        )

    def stats(self) -> RegistryStats:
        n_refs = int(sum(a.size for a in self._cells.values()))
        n_scen = len(self._scenarios)
        return RegistryStats(
            n_cells=len(self._cells),
            n_scenarios=n_scen,
            n_references=n_refs,
            dedup_ratio=n_refs / n_scen if n_scen else 0.0,
        )

    def validate(self) -> None:
        """
        Check the registry's structural invariants.

        Raises
        ------
        RegistryInvariantError
            If two scenarios are equal, an index array is not a read-only
            1-D ``intp`` array, or an index lies outside the registry.
        """
        seen: dict[Scenario, int] = {}
        for i, scenario in enumerate(self._scenarios):
            first = seen.setdefault(scenario, i)
            if first != i:
                raise RegistryInvariantError(
                    f"Scenarios at positions {first} and {i} are equal: {scenario!r}"
                )

        n = len(self._scenarios)
        for key, arr in self._cells.items():
            if not isinstance(key, CellKey):
                raise RegistryInvariantError(f"Cell key {key!r} is not a CellKey")
            if arr.ndim != 1 or arr.dtype != np.intp:
                raise RegistryInvariantError(
                    f"Indices for {key} must be a 1-D intp array, "
                    f"got shape={arr.shape} dtype={arr.dtype}"
                )
            if arr.flags.writeable:
                raise RegistryInvariantError(f"Indices for {key} are writeable")
            if arr.size and (arr.min() < 0 or arr.max() >= n):
                raise RegistryInvariantError(
                    f"Indices for {key} out of range [0, {n}): {arr.tolist()}"
                )

    # ------------------------------------------------------------------ #
    # Dunder methods
    # ------------------------------------------------------------------ #

    def __len__(self) -> int:
        return len(self._scenarios)

    def __contains__(self, cell_key: object) -> bool:
        if isinstance(cell_key, tuple):
            try:
                cell_key = _as_key(cell_key)  # type: ignore[arg-type]
            except (TypeError, ValueError):
                return False
        return cell_key in self._cells

    def __iter__(self) -> Iterator[tuple[CellKey, Idx1D]]:
        return iter(self._cells.items())

    def __eq__(self, other: object) -> bool:
        if other is self:
            return True
        if not isinstance(other, ScenarioRegistry):
            return NotImplemented
        if self._scenarios != other._scenarios:
            return False
        if self._cells.keys() != other._cells.keys():
            return False
        return all(
            np.array_equal(arr, other._cells[key]) for key, arr in self._cells.items()
        )

    def __hash__(self) -> int:
        if self._hash is None:
            cells = frozenset(
                (key, tuple(arr.tolist())) for key, arr in self._cells.items()
            )
            self._hash = hash((self._scenarios, cells))
        return self._hash

    def __repr__(self) -> str:
        cells = ", ".join(
            f"({k.row_index}, {k.column_index}): {a.tolist()}"
            for k, a in self._cells.items()
        )
        return (
            f"ScenarioRegistry(scenario_definitions={list(self._scenarios)!r}, "
            f"cell_scenario_definitions={{{cells}}})"
        )


ScenarioRegistry._EMPTY = ScenarioRegistry._from_parts((), {})
