"""
Custom logging configuration for scengrid.

Extends Python's standard logging with a custom DEEP_DEBUG level (5)
for per-cell tracing inside the registry builder. Provides the ScenLogger
class and a ``getLogger`` factory returning it.

Log Levels
----------
- CRITICAL (50): Critical errors
- ERROR (40): Errors
- WARNING (30): Warnings
- INFO (20): Informational messages (default)
- DEBUG (10): Build summaries
- DEEP_DEBUG (5): One line per indexed cell

Examples
--------
>>> from scengrid import logging
>>> logger = logging.getLogger("scengrid.core.builder")
>>> logger.debug("Registry built")
>>> logger.deep("cell (0, 1) -> [0 1]")

Configure levels through the config layer:

>>> from scengrid.config import load_config
>>> cfg = load_config(logging={"default_level": "DEBUG",
...                            "modules": {"core.builder": "DEEP_DEBUG"}})

See Also
--------
scengrid.config.loader.configure_logging : Applies configured levels
"""

import logging
from typing import Any

(CRITICAL, ERROR, WARNING, INFO, DEBUG) = (
    logging.CRITICAL,
    logging.ERROR,
    logging.WARNING,
    logging.INFO,
    logging.DEBUG,
)
DEEP_DEBUG = 5
logging.addLevelName(DEEP_DEBUG, "DEEP")


class ScenLogger(logging.Logger):
    """
    Custom logger with DEEP_DEBUG level support.

    Extends Python's Logger to add the `deep()` method for very verbose
    debugging output (level 5).

    Examples
    --------
    >>> logger = ScenLogger("test")
    >>> logger.setLevel(5)  # DEEP_DEBUG
    >>> logger.deep("Very verbose message")
    """

    def deep(self, msg: str, *args: Any, **kwargs: Any) -> None:
        """
        Log message at DEEP_DEBUG level (5).

        Parameters
        ----------
        msg : str
            Message format string.
        *args : Any
            Arguments for message formatting.
        **kwargs : Any
            Additional logging kwargs.
        """
        if self.isEnabledFor(DEEP_DEBUG):
            self._log(DEEP_DEBUG, msg, args, **kwargs)


# Make the logging module hand out our subclass from now on
logging.setLoggerClass(ScenLogger)


def level_from_name(name: str) -> int:
    """Translate a level name (including ``DEEP_DEBUG``) to its number."""
    if name == "DEEP_DEBUG":
        return DEEP_DEBUG
    return int(getattr(logging, name))


def getLogger(name: str | None = None) -> ScenLogger:
    """
    Get a ScenLogger instance.

    Convenience wrapper around logging.getLogger() that returns
    a ScenLogger instance with DEEP_DEBUG support.

    Parameters
    ----------
    name : str, optional
        Logger name. If None, returns root logger.

    Returns
    -------
    ScenLogger
        Logger instance with deep() method.
    """
    return logging.getLogger(name)  # type: ignore[return-value]
