"""
Stack Environment Models

Dataclass models for stack environment variables.
"""

from dataclasses import dataclass, field
from typing import Dict, List


@dataclass(frozen=True)
class StackEnvVar:
    """A single stack environment variable."""

    name: str
    value: str = ""

    def to_dict(self) -> Dict[str, str]:
        """Convert to the server's name/value pair encoding."""
        return {"name": self.name, "value": self.value}


@dataclass
class RegularStackDetails:
    """Endpoint and stored environment of a regular stack."""

    endpoint_id: int
    env: List[StackEnvVar] = field(default_factory=list)

    def __repr__(self) -> str:
        return f"RegularStackDetails(endpoint={self.endpoint_id}, env={len(self.env)})"
