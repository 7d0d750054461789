"""
stackctl Domain Models

Clean dataclass-based models for type-safe data handling.
"""

from .stack import (
    Stack,
    RegularStack,
    EdgeStack,
    format_creation_date,
)
from .env import (
    StackEnvVar,
    RegularStackDetails,
)
from .config import (
    ServerConfig,
    normalize_server_url,
)

__all__ = [
    # Stacks
    "Stack",
    "RegularStack",
    "EdgeStack",
    "format_creation_date",
    # Environment
    "StackEnvVar",
    "RegularStackDetails",
    # Config
    "ServerConfig",
    "normalize_server_url",
]
