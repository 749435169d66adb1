"""
Configuration dataclass for the scenario registry engine.

Config instances are created by ``load_config()`` after merging packaged
defaults, a user YAML file or mapping, and keyword overrides.

Design Notes
------------
- Immutable (frozen=True) to prevent accidental modification
- Memory-efficient (slots=True)
- Hashable by value, including the per-module level overrides
- No other methods - validation happens in ConfigValidator

See Also
--------
ConfigValidator : Centralized validation for configuration parameters
scengrid.config.loader.load_config : Creates Config from merged parameters
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType


@dataclass(slots=True, frozen=True)
class Config:
    """
    Immutable configuration for registry construction.

    Parameters
    ----------
    check_invariants : bool, optional
        Run ``ScenarioRegistry.validate()`` on every built registry before
        returning it. Default: False.
    log_level : str, optional
        Level for the ``scengrid`` logger. Default: "INFO".
    module_log_levels : mapping of str to str, optional
        Per-module overrides keyed by logger suffix, e.g.
        ``{"core.builder": "DEEP_DEBUG"}``. Default: empty.

    Examples
    --------
    >>> from scengrid.config import Config
    >>> Config().check_invariants
    False
    >>> Config(check_invariants=True, log_level="DEBUG").log_level
    'DEBUG'
    """

    check_invariants: bool = False
    log_level: str = "INFO"
    module_log_levels: Mapping[str, str] = field(
        default_factory=lambda: MappingProxyType({})
    )

    def __post_init__(self) -> None:
        object.__setattr__(
            self, "module_log_levels", MappingProxyType(dict(self.module_log_levels))
        )

    def __hash__(self) -> int:
        # mappingproxy is unhashable; hash the overrides as a frozenset
        return hash(
            (
                self.check_invariants,
                self.log_level,
                frozenset(self.module_log_levels.items()),
            )
        )
