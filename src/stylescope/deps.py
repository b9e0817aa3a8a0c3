"""Process-wide cache of which optional packages can be imported."""

from __future__ import annotations

import importlib
import logging

logger = logging.getLogger(__name__)

_cached_result: dict[str, bool] = {}


def has_dep_installed(dep: str) -> bool:
    """Return True if the module *dep* can be imported.

    The answer is computed once per name and cached for the life of the process.
    """
    if dep in _cached_result:
        return _cached_result[dep]

    try:
        importlib.import_module(dep)
        result = True
    except ImportError:
        result = False

    logger.debug("Optional dependency %r installed: %s", dep, result)
    _cached_result[dep] = result
    return result


def clear_dep_cache() -> None:
    """Forget every cached answer."""
    _cached_result.clear()
