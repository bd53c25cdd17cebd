"""Recursive merge of a user config over the defaults."""

from typing import Any

# List-valued keys whose entries accumulate across config layers
ADDITIVE_KEYS = frozenset({"reserved_namespaces"})


def deep_merge(base: dict[str, Any], update: dict[str, Any]) -> dict[str, Any]:
    """Return `base` overlaid with `update`; neither input is modified.

    Nested mappings merge key by key. A list replaces the base list, except
    under `ADDITIVE_KEYS`, where both are combined into one sorted list
    without duplicates.
    """
    result = dict(base)
    for key, value in update.items():
        current = result.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            result[key] = deep_merge(current, value)
        elif (
            key in ADDITIVE_KEYS
            and isinstance(current, list)
            and isinstance(value, list)
        ):
            result[key] = sorted({*current, *value})
        else:
            result[key] = value
    return result
