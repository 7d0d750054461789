"""
stackctl Services Layer

Transport, configuration and stack operations used by the CLI commands.
"""

from .config_service import ConfigService
from .transport_service import StackTransport
from .edge_stack_service import EdgeStackAPI, EdgeStackClient
from .stack_service import StackService

__all__ = [
    "ConfigService",
    "StackTransport",
    "EdgeStackAPI",
    "EdgeStackClient",
    "StackService",
]
