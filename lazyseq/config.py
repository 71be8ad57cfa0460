"""
Configuration for lazy sequence evaluation.

This module holds the process-wide settings that cursors read when they are
built. Settings are read once per cursor, so one realization always sees a
consistent configuration.
"""

from __future__ import annotations

import logging
import os
import threading

logger = logging.getLogger(__name__)

MAX_SCAN_ENV = "LAZYSEQ_MAX_SCAN"


class SequenceConfig:
    """
    Global configuration for lazy sequence evaluation.

    The only setting is the scan limit. Filtering over an infinite sequence
    with a predicate that is never satisfied again does not terminate; by
    default that is left to the caller. Setting a scan limit turns such a
    pull into a NonTerminationError once that many consecutive elements
    have been examined without one being emitted.
    """

    _instance: SequenceConfig | None = None
    _lock = threading.Lock()

    def __init__(self):
        self._max_scan: int | None = None
        self._max_scan_loaded = False

    @classmethod
    def global_config(cls) -> SequenceConfig:
        """Get the global configuration instance."""
        if cls._instance is None:
            with cls._lock:
                if cls._instance is None:
                    cls._instance = SequenceConfig()
        return cls._instance

    @property
    def max_scan(self) -> int | None:
        """
        Maximum consecutive elements a filtering cursor may examine per pull.

        Returns:
            The limit, or None when scanning is unbounded (the default)
        """
        if not self._max_scan_loaded:
            # Try to get from environment variable
            env_scan = os.environ.get(MAX_SCAN_ENV)
            if env_scan:
                try:
                    limit = int(env_scan)
                except ValueError:
                    logger.warning(
                        "Ignoring %s=%r: not an integer", MAX_SCAN_ENV, env_scan
                    )
                else:
                    if limit >= 1:
                        self._max_scan = limit
                    else:
                        logger.warning(
                            "Ignoring %s=%r: must be at least 1",
                            MAX_SCAN_ENV,
                            env_scan,
                        )
            self._max_scan_loaded = True

        return self._max_scan

    @max_scan.setter
    def max_scan(self, value: int | None) -> None:
        """Set the scan limit, or None to remove it."""
        if value is not None:
            if isinstance(value, bool) or not isinstance(value, int):
                raise TypeError("Scan limit must be an int or None")
            if value < 1:
                raise ValueError("Scan limit must be at least 1")

        with self._lock:
            self._max_scan = value
            self._max_scan_loaded = True

    def reset(self) -> None:
        """Restore defaults; the environment is consulted again on next read."""
        with self._lock:
            self._max_scan = None
            self._max_scan_loaded = False


# Global configuration instance
_global_config = SequenceConfig.global_config()


def set_max_scan(limit: int | None) -> None:
    """
    Set the global scan limit for filtering cursors.

    Args:
        limit: Positive number of consecutive elements, or None for no limit

    Example:
        >>> from lazyseq import set_max_scan
        >>> set_max_scan(10_000)
    """
    _global_config.max_scan = limit


def get_max_scan() -> int | None:
    """
    Get the current global scan limit.

    Returns:
        The limit, or None when scanning is unbounded
    """
    return _global_config.max_scan
