"""stackctl CLI commands"""

from .stacks import (
    stacks_list,
    stacks_file,
    stacks_env,
    stacks_create,
    stacks_update,
)

__all__ = [
    "stacks_list",
    "stacks_file",
    "stacks_env",
    "stacks_create",
    "stacks_update",
]
