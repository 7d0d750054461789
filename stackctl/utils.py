"""
CLI Utilities

Input parsing helpers for stackctl commands.
"""

import json
from pathlib import Path
from typing import Any, Iterable, List, Optional

from dotenv import dotenv_values

from stackctl.exceptions import ValidationError
from stackctl.models.env import StackEnvVar


def parse_env_assignment(assignment: str) -> StackEnvVar:
    """
    Parse a KEY=VALUE assignment.

    Args:
        assignment: String like "LOG_LEVEL=debug" (value may be empty)

    Returns:
        StackEnvVar

    Raises:
        ValidationError: If there is no '=' or the name is empty
    """
    if "=" not in assignment:
        raise ValidationError(
            f"Invalid env override: '{assignment}'", context="Use: KEY=VALUE"
        )
    name, value = assignment.split("=", 1)
    name = name.strip()
    if not name:
        raise ValidationError(f"Invalid env name in override: '{assignment}'")
    return StackEnvVar(name=name, value=value)


def parse_env_entries(entries: Any) -> List[StackEnvVar]:
    """
    Parse a JSON list of {"name": ..., "value": ...} objects.

    Raises:
        ValidationError: If an entry is not an object, or name/value are invalid
    """
    if entries is None:
        return []
    if not isinstance(entries, list):
        raise ValidationError("env overrides must be a JSON array")

    result = []
    for entry in entries:
        if not isinstance(entry, dict):
            raise ValidationError(f"invalid env override: {entry!r}")
        name = entry.get("name")
        if not isinstance(name, str) or not name:
            raise ValidationError(f"invalid env name: {name!r}")
        value = entry.get("value")
        if not isinstance(value, str):
            raise ValidationError(f"invalid env value: {value!r}")
        result.append(StackEnvVar(name=name, value=value))
    return result


def load_env_file_overrides(env_file: Path) -> List[StackEnvVar]:
    """
    Read overrides from a dotenv file, keeping file order.

    Raises:
        ValidationError: If a line has a name but no value
    """
    overrides = []
    for name, value in dotenv_values(env_file).items():
        if value is None:
            raise ValidationError(
                f"Env file entry '{name}' has no value", context=f"File: {env_file}"
            )
        overrides.append(StackEnvVar(name=name, value=value))
    return overrides


def collect_env_overrides(
    assignments: Iterable[str] = (),
    env_file: Optional[Path] = None,
    env_json: Optional[str] = None,
) -> List[StackEnvVar]:
    """
    Build the override list from every CLI source.

    Order: env file, then JSON entries, then KEY=VALUE assignments, so a
    later source supersedes an earlier one for the same name.
    """
    overrides: List[StackEnvVar] = []

    if env_file is not None:
        overrides.extend(load_env_file_overrides(env_file))

    if env_json:
        try:
            entries = json.loads(env_json)
        except ValueError as e:
            raise ValidationError(f"env overrides are not valid JSON: {e}")
        overrides.extend(parse_env_entries(entries))

    overrides.extend(parse_env_assignment(item) for item in assignments)
    return overrides


def read_stack_file(path: Path) -> str:
    """
    Read a compose file.

    Raises:
        ValidationError: If the file is empty
    """
    content = Path(path).read_text()
    if not content.strip():
        raise ValidationError(f"Stack file is empty: {path}")
    return content
