"""
Type aliases for scengrid.

Per-cell scenario indices are stored as 1-D numpy arrays of ``np.intp`` so
they can be used directly for fancy indexing and flattened into CSR form.
"""

from collections.abc import Hashable
from typing import TypeAlias

import numpy as np
from numpy.typing import NDArray

Idx1D: TypeAlias = NDArray[np.intp]
"""Read-only array of indices into ``ScenarioRegistry.scenario_definitions``."""

Scenario: TypeAlias = Hashable
"""Any value with a total, consistent ``__eq__``/``__hash__``."""

__all__ = [
    "Idx1D",
    "Scenario",
]
