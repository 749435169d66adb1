"""Centralized configuration validation for scengrid."""

from __future__ import annotations

import warnings
from typing import Any


class ConfigValidator:
    """
    Centralized validation for engine configuration.

    All validation happens once in ``load_config()`` to ensure:
    - Type correctness
    - Valid log level names
    - Clear error messages with actionable feedback
    """

    # Valid log levels for logging configuration
    VALID_LOG_LEVELS = {"DEEP_DEBUG", "DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"}

    # Top-level keys understood by load_config
    KNOWN_KEYS = {"check_invariants", "logging"}

    @staticmethod
    def validate_config(cfg: dict[str, Any]) -> None:
        """
        Validate all configuration parameters.

        Unknown top-level keys produce a ``UserWarning`` and are ignored.

        Parameters
        ----------
        cfg : dict
            Merged configuration dictionary.

        Raises
        ------
        ValueError
            If any validation check fails.
        """
        unknown = sorted(set(cfg) - ConfigValidator.KNOWN_KEYS)
        if unknown:
            warnings.warn(
                f"Ignoring unknown config keys: {', '.join(unknown)}",
                UserWarning,
                stacklevel=3,
            )

        ConfigValidator._validate_types(cfg)

        if "logging" in cfg:
            ConfigValidator._validate_logging(cfg["logging"])

    @staticmethod
    def _validate_types(cfg: dict[str, Any]) -> None:
        """
        Ensure correct types for configuration parameters.

        Raises
        ------
        ValueError
            If any parameter has incorrect type.
        """
        if "check_invariants" in cfg:
            val = cfg["check_invariants"]
            if not isinstance(val, bool):
                raise ValueError(
                    f"Config parameter 'check_invariants' must be bool, "
                    f"got {type(val).__name__}"
                )

    @staticmethod
    def _validate_logging(log_cfg: Any) -> None:
        """
        Validate the ``logging`` section.

        Expected shape::

            logging:
              default_level: INFO
              modules:
                core.builder: DEEP_DEBUG

        Raises
        ------
        ValueError
            If the section is malformed or names an unknown level.
        """
        if log_cfg is None:
            return
        if not isinstance(log_cfg, dict):
            raise ValueError(
                f"Config parameter 'logging' must be a mapping, "
                f"got {type(log_cfg).__name__}"
            )

        if "default_level" in log_cfg:
            ConfigValidator._validate_level(
                "logging.default_level", log_cfg["default_level"]
            )

        modules = log_cfg.get("modules")
        if modules is None:
            return
        if not isinstance(modules, dict):
            raise ValueError(
                f"Config parameter 'logging.modules' must be a mapping, "
                f"got {type(modules).__name__}"
            )
        for module_name, level in modules.items():
            if not isinstance(module_name, str) or not module_name:
                raise ValueError(
                    f"Module names in 'logging.modules' must be non-empty strings, "
                    f"got {module_name!r}"
                )
            ConfigValidator._validate_level(f"logging.modules.{module_name}", level)

    @staticmethod
    def _validate_level(name: str, level: Any) -> None:
        if not isinstance(level, str) or level not in ConfigValidator.VALID_LOG_LEVELS:
            valid = ", ".join(sorted(ConfigValidator.VALID_LOG_LEVELS))
            raise ValueError(
                f"Invalid log level {level!r} for '{name}'. Valid: {valid}"
            )
