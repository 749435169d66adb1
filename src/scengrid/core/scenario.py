"""
Local scenario value types.

The registry builder treats scenarios as opaque hashable values. This
module provides a concrete, structurally comparable scenario type for
callers that do not bring their own: a named bundle of market data
perturbations.

Examples
--------
>>> bump = Perturbation("USD-OIS/5Y", 0.0001)
>>> s1 = LocalScenarioDefinition("parallel +1bp", [bump])
>>> s2 = LocalScenarioDefinition("parallel +1bp", (Perturbation("USD-OIS/5Y", 1e-4),))
>>> s1 == s2 and hash(s1) == hash(s2)
True
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from enum import Enum


class ShiftType(Enum):
    """How a perturbation's shift is applied to a market data value."""

    ABSOLUTE = "absolute"
    RELATIVE = "relative"


@dataclass(slots=True, frozen=True)
class Perturbation:
    """
    A single shift applied to one market data value.

    Parameters
    ----------
    market_data_id : str
        Identifier of the market data value to shift (non-empty).
    shift : float
        Shift amount. Must be finite; NaN would make the perturbation
        unequal to itself.
    shift_type : ShiftType, default ShiftType.ABSOLUTE
        ABSOLUTE adds ``shift``, RELATIVE scales by ``1 + shift``.
    """

    market_data_id: str
    shift: float
    shift_type: ShiftType = ShiftType.ABSOLUTE

    def __post_init__(self) -> None:
        if not isinstance(self.market_data_id, str) or not self.market_data_id:
            raise ValueError(
                f"market_data_id must be a non-empty string, "
                f"got {self.market_data_id!r}"
            )
        if isinstance(self.shift, bool) or not isinstance(self.shift, (int, float)):
            raise TypeError(f"shift must be float, got {type(self.shift).__name__}")
        if not math.isfinite(self.shift):
            raise ValueError(f"shift must be finite, got {self.shift}")
        if not isinstance(self.shift_type, ShiftType):
            object.__setattr__(self, "shift_type", ShiftType(self.shift_type))
        object.__setattr__(self, "shift", float(self.shift))

    def apply(self, value: float) -> float:
        """Return ``value`` with this perturbation applied."""
        if self.shift_type is ShiftType.RELATIVE:
            return value * (1.0 + self.shift)
        return value + self.shift


@dataclass(slots=True, frozen=True)
class LocalScenarioDefinition:
    """
    Named bundle of market data perturbations scoped to one cell.

    Equality and hashing are structural over ``name`` and the ordered
    ``perturbations`` tuple, so independently built but equal definitions
    collapse to one registry entry.

    Parameters
    ----------
    name : str
        Scenario name.
    perturbations : iterable of Perturbation
        Perturbations to apply, stored as a tuple in the given order.
    """

    name: str
    perturbations: tuple[Perturbation, ...] = field(default=())

    def __post_init__(self) -> None:
        if not isinstance(self.name, str):
            raise TypeError(f"name must be str, got {type(self.name).__name__}")
        perturbations = tuple(self.perturbations)
        for p in perturbations:
            if not isinstance(p, Perturbation):
                raise TypeError(
                    f"perturbations must be Perturbation, got {type(p).__name__}"
                )
        object.__setattr__(self, "perturbations", perturbations)

    @classmethod
    def of(cls, name: str, *perturbations: Perturbation) -> LocalScenarioDefinition:
        return cls(name, perturbations)

    @property
    def market_data_ids(self) -> tuple[str, ...]:
        """Market data ids touched by this scenario, in first-seen order."""
        return tuple(dict.fromkeys(p.market_data_id for p in self.perturbations))

    def perturbations_for(
        self, market_data_ids: Iterable[str]
    ) -> tuple[Perturbation, ...]:
        """Return the perturbations that target any of ``market_data_ids``."""
        wanted = set(market_data_ids)
        return tuple(p for p in self.perturbations if p.market_data_id in wanted)
