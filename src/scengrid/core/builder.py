"""
Single-pass construction of a ScenarioRegistry from per-cell requirements.

Each distinct scenario (by structural equality) is stored once, in the
order it is first seen, scanning cells in input order and scenarios in
cell order. Every cell receives an index array of the same length as its
scenario list, where position ``i`` points at a scenario equal to the
cell's ``i``-th scenario.
"""

from __future__ import annotations

from collections.abc import Iterable

import numpy as np

from scengrid.config.schema import Config
from scengrid.core.cell import CellKey, CellRequirements
from scengrid.core.errors import DuplicateCellRequirementError
from scengrid.core.registry import ScenarioRegistry
from scengrid.logging import DEEP_DEBUG, getLogger
from scengrid.typing import Idx1D, Scenario

__all__ = ["RegistryBuilder", "build_registry"]

log = getLogger(__name__)


class RegistryBuilder:
    """
    Builds deduplicated scenario registries.

    The builder keeps no state between calls; all working state lives in
    a single ``build`` invocation, so one builder may be reused and shared.

    Parameters
    ----------
    config : Config, optional
        Engine configuration. Defaults to ``Config()``.

    Examples
    --------
    >>> from scengrid import CellRequirements, RegistryBuilder
    >>> reg = RegistryBuilder().build([
    ...     CellRequirements.of(2, 3, ["s1", "s1"]),
    ... ])
    >>> reg.scenario_definitions, reg.scenario_indices_for((2, 3)).tolist()
    (('s1',), [0, 0])
    """

    __slots__ = ("config",)

    def __init__(self, config: Config | None = None) -> None:
        self.config = config if config is not None else Config()

    def build(self, requirements: Iterable[CellRequirements]) -> ScenarioRegistry:
        """
        Deduplicate scenarios across cells and index each cell into them.

        Parameters
        ----------
        requirements : iterable of CellRequirements
            Per-cell requirements in grid order. Consumed once.

        Returns
        -------
        ScenarioRegistry
            ``ScenarioRegistry.empty()`` when ``requirements`` is empty.

        Raises
        ------
        DuplicateCellRequirementError
            If two requirements share a cell key. Nothing is returned.
        """
        items = list(requirements)
        if not items:
            log.debug("No cell requirements; returning the empty registry")
            return ScenarioRegistry.empty()

        # scenario -> index; insertion order is the registry order
        scenario_index: dict[Scenario, int] = {}
        cells: dict[CellKey, Idx1D] = {}
        n_refs = 0
        trace = log.isEnabledFor(DEEP_DEBUG)

        for req in items:
            key = req.cell_key
            if key in cells:
                raise DuplicateCellRequirementError(key)

            indices = np.empty(len(req.local_scenarios), dtype=np.intp)
            for pos, scenario in enumerate(req.local_scenarios):
                idx = scenario_index.get(scenario)
                if idx is None:
                    idx = len(scenario_index)
                    scenario_index[scenario] = idx
                indices[pos] = idx
            indices.setflags(write=False)
            cells[key] = indices
            n_refs += indices.size

            if trace:
                log.deep(
                    "cell (%d, %d) -> %s",
                    key.row_index,
                    key.column_index,
                    indices.tolist(),
                )

        registry = ScenarioRegistry._from_parts(tuple(scenario_index), cells)
        if self.config.check_invariants:
            registry.validate()

        log.debug(
            "Built scenario registry: %d cells, %d references, %d distinct scenarios",
            len(cells),
            n_refs,
            len(scenario_index),
        )
        return registry


def build_registry(
    requirements: Iterable[CellRequirements], *, config: Config | None = None
) -> ScenarioRegistry:
    """Build a ScenarioRegistry; see ``RegistryBuilder.build``."""
    return RegistryBuilder(config).build(requirements)
