"""Merge caller env overrides into a stack's stored environment."""

from typing import Dict, List, Optional

from stackctl.models.env import StackEnvVar


def dedupe_overrides(overrides: List[StackEnvVar]) -> Dict[str, str]:
    """
    Collapse overrides into name -> value.

    Entries with empty names are ignored, the last value wins for a repeated
    name, and the dict keeps first-seen name order.
    """
    values: Dict[str, str] = {}
    for override in overrides:
        if not override.name:
            continue
        values[override.name] = override.value
    return values


def merge_env_overrides(
    existing: List[StackEnvVar], overrides: Optional[List[StackEnvVar]]
) -> List[StackEnvVar]:
    """
    Merge overrides into the stored environment.

    Stored entries keep their order; overridden names get the override value
    in place. Names only present in the overrides are appended once, in the
    order they were first seen.

    Args:
        existing: Environment stored on the server
        overrides: Caller-supplied overrides

    Returns:
        Merged environment list
    """
    if not overrides:
        return existing

    override_values = dedupe_overrides(overrides)
    if not override_values:
        return existing

    merged: List[StackEnvVar] = []
    seen = set()
    for current in existing:
        if current.name in override_values:
            merged.append(StackEnvVar(current.name, override_values[current.name]))
        else:
            merged.append(current)
        seen.add(current.name)

    for name, value in override_values.items():
        if name in seen:
            continue
        merged.append(StackEnvVar(name, value))
        seen.add(name)

    return merged


def unique_env_names(env: List[StackEnvVar]) -> List[str]:
    """Get non-empty names in first-seen order, without repeats."""
    names: List[str] = []
    seen = set()
    for entry in env:
        if not entry.name or entry.name in seen:
            continue
        seen.add(entry.name)
        names.append(entry.name)
    return names


def repeated_env_names(overrides: List[StackEnvVar]) -> List[str]:
    """Get names given more than once, in first-seen order."""
    counts: Dict[str, int] = {}
    for override in overrides:
        if override.name:
            counts[override.name] = counts.get(override.name, 0) + 1
    return [name for name, count in counts.items() if count > 1]
