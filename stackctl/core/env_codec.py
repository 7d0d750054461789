"""
Stack environment codec.

The server may emit a stack's ``Env`` list in two shapes that carry the same
data: name/value pairs keyed ``name``/``value``, or records keyed
``Name``/``Value``. Both are decoded as explicit variants; the pair variant
is tried first and only accepted when it actually captured something.
"""

import json
from dataclasses import dataclass
from typing import Any, Dict, List

from stackctl.exceptions import ParseError
from stackctl.models.env import StackEnvVar


@dataclass(frozen=True)
class EnvShape:
    """One known JSON encoding of an env entry."""

    label: str
    name_key: str
    value_key: str


PAIR_SHAPE = EnvShape("pair", "name", "value")
RECORD_SHAPE = EnvShape("record", "Name", "Value")


def _load(raw: Any) -> Any:
    if raw is None:
        return None
    if isinstance(raw, (bytes, bytearray, str)):
        if not raw.strip():
            return None
        try:
            return json.loads(raw)
        except ValueError as e:
            raise ParseError("failed to parse stack env", context=str(e))
    return raw


def _field(entry: Dict[str, Any], key: str, shape: EnvShape) -> str:
    value = entry.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise ParseError(
            f"env entry field '{key}' is not a string",
            context=f"shape: {shape.label}",
        )
    return value


def decode_variant(data: Any, shape: EnvShape) -> List[StackEnvVar]:
    """Decode a JSON value as a list of env entries of the given shape."""
    if not isinstance(data, list):
        raise ParseError(
            "stack env is not a JSON array", context=f"shape: {shape.label}"
        )

    env = []
    for entry in data:
        if not isinstance(entry, dict):
            raise ParseError(
                f"env entry is not an object: {entry!r}",
                context=f"shape: {shape.label}",
            )
        env.append(
            StackEnvVar(
                name=_field(entry, shape.name_key, shape),
                value=_field(entry, shape.value_key, shape),
            )
        )
    return env


def has_env_values(env: List[StackEnvVar]) -> bool:
    """Check if any entry carries a non-empty name or value."""
    return any(entry.name or entry.value for entry in env)


def parse_stack_env(raw: Any) -> List[StackEnvVar]:
    """
    Parse a stack's stored environment.

    Args:
        raw: JSON bytes/str, or an already-decoded JSON value

    Returns:
        Ordered list of StackEnvVar (empty for null or missing input)

    Raises:
        ParseError: If neither known shape decodes
    """
    data = _load(raw)
    if data is None:
        return []

    try:
        primary = decode_variant(data, PAIR_SHAPE)
    except ParseError:
        primary = None

    if primary is not None and (not primary or has_env_values(primary)):
        return primary

    try:
        alternate = decode_variant(data, RECORD_SHAPE)
    except ParseError as e:
        raise ParseError("failed to parse stack env", context=e.message)

    # Neither shape captured a name or value
    if primary is None and alternate and not has_env_values(alternate):
        raise ParseError(
            "failed to parse stack env",
            context="no entry matches a known name/value shape",
        )
    return alternate


def encode_stack_env(env: List[StackEnvVar]) -> List[Dict[str, str]]:
    """Encode env entries in the pair shape the server accepts on update."""
    return [entry.to_dict() for entry in env]
