"""Load, merge and apply engine configuration."""

from __future__ import annotations

from collections.abc import Mapping
from importlib import resources
from pathlib import Path
from typing import Any, Dict

# noinspection PyPackageRequirements
import yaml

from scengrid.config.schema import Config
from scengrid.config.validator import ConfigValidator
from scengrid.logging import getLogger, level_from_name

__all__ = ["configure_logging", "load_config"]

ROOT_LOGGER = "scengrid"


# helpers
# ---------------------------------------------------------------------------
def _read_yaml(obj: str | Path | Mapping[str, Any] | None) -> Dict[str, Any]:
    """Return a plain dict – {} if *obj* is None."""
    if obj is None:
        return {}
    if isinstance(obj, Mapping):
        return dict(obj)
    p = Path(obj)
    with p.open("rt", encoding="utf-8") as fh:
        data = yaml.safe_load(fh) or {}
    if not isinstance(data, Mapping):
        raise TypeError(f"config root must be mapping, got {type(data)!r}")
    return dict(data)


def _package_defaults() -> Dict[str, Any]:
    """Load scengrid/defaults.yml"""
    txt = resources.files("scengrid").joinpath("defaults.yml").read_text()
    return yaml.safe_load(txt) or {}


def load_config(
    config: str | Path | Mapping[str, Any] | None = None, **overrides: Any
) -> Config:
    """
    Build a validated Config and apply its logging levels.

    Layers are merged in order: packaged ``defaults.yml``, then ``config``
    (a YAML path or a mapping), then keyword ``overrides``. Later layers
    replace whole top-level keys.

    Parameters
    ----------
    config : str, Path, mapping or None
        User configuration.
    **overrides
        Top-level keys overriding everything else.

    Returns
    -------
    Config
        Frozen configuration.

    Raises
    ------
    ValueError
        If validation fails.
    TypeError
        If a YAML file's root is not a mapping.

    Examples
    --------
    >>> cfg = load_config(check_invariants=True)
    >>> cfg.check_invariants
    True
    """
    cfg_dict = _package_defaults()
    cfg_dict.update(_read_yaml(config))
    cfg_dict.update(overrides)

    ConfigValidator.validate_config(cfg_dict)

    log_cfg = cfg_dict.get("logging") or {}
    cfg = Config(
        check_invariants=cfg_dict.get("check_invariants", False),
        log_level=log_cfg.get("default_level", "INFO"),
        module_log_levels=log_cfg.get("modules") or {},
    )
    configure_logging(cfg)
    return cfg


def configure_logging(cfg: Config) -> None:
    """
    Configure logging levels for scengrid loggers.

    Parameters
    ----------
    cfg : Config
        Configuration whose ``log_level`` applies to the ``scengrid`` logger
        and whose ``module_log_levels`` apply to ``scengrid.<module>``.
    """
    getLogger(ROOT_LOGGER).setLevel(level_from_name(cfg.log_level))
    for module_name, level in cfg.module_log_levels.items():
        getLogger(f"{ROOT_LOGGER}.{module_name}").setLevel(level_from_name(level))
