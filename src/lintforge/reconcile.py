"""
lintforge.reconcile - Configuration Reconciliation
==================================================

Merges freshly generated default configuration into a configuration the
user may already have, without dropping the user's own keys.

Merge Rules
-----------
``deep_merge(target, source)`` is deliberately asymmetric:

- every key of ``source`` ends up in the result;
- keys that exist only in ``target`` are kept unchanged;
- when both sides hold a mapping under the same key the merge recurses;
- scalars, ``None`` and lists from ``source`` replace whatever ``target``
  holds at the same key. Lists are never merged element-wise, so a
  generated ESLint ``extends`` list wins over an existing one.

Example
-------
>>> deep_merge({"a": {"x": 1, "y": 2}}, {"a": {"y": 3, "z": 4}})
{'a': {'y': 3, 'z': 4, 'x': 1}}
"""

from __future__ import annotations

from typing import Any


def deep_merge(
    target: dict[str, Any] | None,
    source: dict[str, Any] | None,
) -> dict[str, Any]:
    """
    Merge ``source`` into ``target`` and return the merged mapping.

    Parameters
    ----------
    target : dict | None
        Existing configuration. Treated as ``{}`` when None. Never modified.

    source : dict | None
        Generated defaults. Treated as ``{}`` when None. Nested mappings that
        also exist in ``target`` are updated in place with the merged result.

    Returns
    -------
    dict
        ``{**target, **source}`` after nested mappings have been merged.

    Notes
    -----
    Circular references are not detected.
    """
    target = target or {}
    source = source or {}

    for key, value in source.items():
        if isinstance(value, dict) and isinstance(target.get(key), dict):
            value.update(deep_merge(target[key], value))

    return {**target, **source}
