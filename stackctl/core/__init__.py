"""
stackctl Core

Pure logic behind the dual-path stack client: env codec, env merging,
fallback classification and path resolution.
"""

from .env_codec import parse_stack_env, encode_stack_env
from .env_merger import merge_env_overrides, unique_env_names
from .fallback import should_fallback, is_edge_stack_message
from .resolution import Action, Attempt, Outcome, attempt

__all__ = [
    "parse_stack_env",
    "encode_stack_env",
    "merge_env_overrides",
    "unique_env_names",
    "should_fallback",
    "is_edge_stack_message",
    "Action",
    "Attempt",
    "Outcome",
    "attempt",
]
