"""
Stack Models

Dataclass models for the unified stack view and the two server-side
records it is built from.
"""

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, List

from stackctl.constants import RFC3339_FORMAT
from stackctl.exceptions import ParseError


def format_creation_date(epoch_seconds: int) -> str:
    """Format epoch seconds as an RFC3339 UTC timestamp."""
    return datetime.fromtimestamp(epoch_seconds, tz=timezone.utc).strftime(
        RFC3339_FORMAT
    )


def stack_file_content(data: Any) -> str:
    """Read StackFileContent from a file response object (missing or null is empty)."""
    if not isinstance(data, dict):
        raise ParseError("stack file response is not a JSON object")
    content = data.get("StackFileContent")
    if content is None:
        return ""
    if not isinstance(content, str):
        raise ParseError(
            f"StackFileContent is not a string: {type(content).__name__}"
        )
    return content


def _int_list(values: Any) -> List[int]:
    if not values:
        return []
    return [int(value) for value in values]


@dataclass(frozen=True)
class Stack:
    """Unified stack view returned to all callers."""

    id: int
    name: str
    created_at: str
    environment_group_ids: List[int] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Convert to dictionary for JSON output."""
        return {
            "Id": self.id,
            "Name": self.name,
            "CreatedAt": self.created_at,
            "EnvironmentGroupIds": list(self.environment_group_ids),
        }

    def __repr__(self) -> str:
        return f"Stack(id={self.id}, name={self.name})"


@dataclass
class RegularStack:
    """Regular stack record from the /api/stacks REST surface."""

    id: int
    name: str
    type: int = 0
    endpoint_id: int = 0
    creation_date: int = 0
    status: int = 0

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "RegularStack":
        """Create from a REST response object."""
        return cls(
            id=int(data.get("Id", 0)),
            name=data.get("Name", "") or "",
            type=int(data.get("Type", 0) or 0),
            endpoint_id=int(data.get("EndpointId", 0) or 0),
            creation_date=int(data.get("CreationDate", 0) or 0),
            status=int(data.get("Status", 0) or 0),
        )

    def to_stack(self) -> Stack:
        """Convert to the unified view; regular stacks carry no group IDs."""
        return Stack(
            id=self.id,
            name=self.name,
            created_at=format_creation_date(self.creation_date),
            environment_group_ids=[],
        )


@dataclass
class EdgeStack:
    """Edge stack record from the edge stack API."""

    id: int
    name: str
    creation_date: int = 0
    edge_groups: List[int] = field(default_factory=list)

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "EdgeStack":
        """Create from an edge stack API response object."""
        return cls(
            id=int(data.get("Id", 0)),
            name=data.get("Name", "") or "",
            creation_date=int(data.get("CreationDate", 0) or 0),
            edge_groups=_int_list(data.get("EdgeGroups")),
        )

    def to_stack(self) -> Stack:
        """Convert to the unified view, keeping the edge group IDs."""
        return Stack(
            id=self.id,
            name=self.name,
            created_at=format_creation_date(self.creation_date),
            environment_group_ids=list(self.edge_groups),
        )
