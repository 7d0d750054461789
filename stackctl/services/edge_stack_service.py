"""
Edge stack API.

The stack service only ever talks to edge stacks through the four
primitives of ``EdgeStackAPI``. ``EdgeStackClient`` implements them over
the server's /api/edge_stacks endpoints.
"""

from abc import ABC, abstractmethod
from typing import List

from stackctl.constants import (
    EDGE_DEPLOYMENT_TYPE_COMPOSE,
    EDGE_STACK_CREATE_PATH,
    EDGE_STACK_FILE_PATH,
    EDGE_STACK_PATH,
    EDGE_STACKS_PATH,
)
from stackctl.exceptions import ParseError
from stackctl.models.stack import EdgeStack, stack_file_content
from stackctl.services.transport_service import StackTransport


class EdgeStackAPI(ABC):
    """Edge stack primitives consumed by the stack service."""

    @abstractmethod
    def list_edge_stacks(self) -> List[EdgeStack]:
        """List all edge stacks."""
        ...

    @abstractmethod
    def get_edge_stack_file(self, stack_id: int) -> str:
        """Get the compose file of an edge stack."""
        ...

    @abstractmethod
    def create_edge_stack(self, name: str, file: str, group_ids: List[int]) -> int:
        """Create an edge stack and return its ID."""
        ...

    @abstractmethod
    def update_edge_stack(self, stack_id: int, file: str, group_ids: List[int]) -> None:
        """Replace the compose file and groups of an edge stack."""
        ...


class EdgeStackClient(EdgeStackAPI):
    """Edge stack API over the server's REST endpoints."""

    def __init__(self, transport: StackTransport):
        self.transport = transport

    def list_edge_stacks(self) -> List[EdgeStack]:
        data = self.transport.get_json(EDGE_STACKS_PATH)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ParseError("edge stack list is not a JSON array")
        try:
            return [EdgeStack.from_dict(item) for item in data]
        except (AttributeError, TypeError, ValueError) as e:
            raise ParseError(f"failed to parse edge stack list: {e}")

    def get_edge_stack_file(self, stack_id: int) -> str:
        data = self.transport.get_json(EDGE_STACK_FILE_PATH.format(stack_id=stack_id))
        return stack_file_content(data)

    def create_edge_stack(self, name: str, file: str, group_ids: List[int]) -> int:
        payload = {
            "name": name,
            "stackFileContent": file,
            "edgeGroups": list(group_ids),
            "deploymentType": EDGE_DEPLOYMENT_TYPE_COMPOSE,
        }
        data = self.transport.post_json(EDGE_STACK_CREATE_PATH, payload)
        if not isinstance(data, dict) or "Id" not in data:
            raise ParseError("edge stack create response has no Id")
        return int(data["Id"])

    def update_edge_stack(self, stack_id: int, file: str, group_ids: List[int]) -> None:
        payload = {
            "stackFileContent": file,
            "edgeGroups": list(group_ids),
            "deploymentType": EDGE_DEPLOYMENT_TYPE_COMPOSE,
            "updateVersion": True,
        }
        self.transport.put(EDGE_STACK_PATH.format(stack_id=stack_id), payload)
