"""
Stack service.

One logical stack API over two server resource kinds: regular stacks on
the /api/stacks REST surface and edge stacks behind ``EdgeStackAPI``. The
regular path is always probed first; the decision tables in
``stackctl.core.resolution`` decide what happens when it does not answer.
"""

from typing import List, Optional

from stackctl.constants import (
    REGULAR_STACK_FILE_PATH,
    REGULAR_STACK_PATH,
    REGULAR_STACKS_PATH,
)
from stackctl.core.env_codec import encode_stack_env, parse_stack_env
from stackctl.core.env_merger import merge_env_overrides, unique_env_names
from stackctl.core.resolution import (
    ENV_NAMES_TABLE,
    READ_TABLE,
    Action,
    Attempt,
    Outcome,
    attempt,
    update_table,
)
from stackctl.exceptions import (
    ConfigurationError,
    DualPathError,
    ParseError,
    StackOperationError,
    UnsupportedError,
)
from stackctl.logger import StackLogger
from stackctl.models.config import ServerConfig
from stackctl.models.env import RegularStackDetails, StackEnvVar
from stackctl.models.stack import RegularStack, Stack, stack_file_content
from stackctl.services.edge_stack_service import EdgeStackAPI
from stackctl.services.transport_service import StackTransport


class StackService:
    """Service for stack operations across regular and edge stacks."""

    def __init__(
        self,
        config: ServerConfig,
        edge_api: EdgeStackAPI,
        transport: Optional[StackTransport] = None,
        logger: Optional[StackLogger] = None,
    ):
        """
        Initialize stack service.

        Args:
            config: Server configuration
            edge_api: Edge stack primitives
            transport: REST transport (built from config if omitted)
            logger: Optional logger for path decisions
        """
        self.config = config
        self.edge_api = edge_api
        self.transport = transport or StackTransport(config)
        self.logger = logger

    def _log(self, message: str, level: str = "DEBUG") -> None:
        if self.logger:
            self.logger.log(message, level)

    def _attempt(self, description: str, call, is_empty=None) -> Attempt:
        result = attempt(call, self.config.edge_markers, is_empty)
        if result.error is not None:
            self._log(f"{description}: {result.outcome.value} ({result.error})")
        elif result.outcome == Outcome.EMPTY:
            self._log(f"{description}: empty answer")
        return result

    def _edge_failure(
        self,
        regular: Attempt,
        regular_message: str,
        edge_message: str,
        edge_error: Exception,
    ) -> StackOperationError:
        self._log(f"{edge_message}: {edge_error}", "ERROR")
        if regular.error is not None:
            return DualPathError(regular_message, regular.error, edge_error)
        return StackOperationError(edge_message, edge_error)

    def _require_credentials(self) -> None:
        if not self.config.has_credentials:
            raise ConfigurationError("regular stack API requires server url and token")

    # Regular stack REST path

    def list_regular_stacks(self) -> List[RegularStack]:
        """List regular stacks via GET /api/stacks."""
        self._require_credentials()
        data = self.transport.get_json(REGULAR_STACKS_PATH)
        if data is None:
            return []
        if not isinstance(data, list):
            raise ParseError("stack list is not a JSON array")
        try:
            return [RegularStack.from_dict(item) for item in data]
        except (AttributeError, TypeError, ValueError) as e:
            raise ParseError(f"failed to parse stack list: {e}")

    def get_regular_stack_file(self, stack_id: int) -> str:
        """Get a regular stack's compose file via GET /api/stacks/{id}/file."""
        self._require_credentials()
        data = self.transport.get_json(REGULAR_STACK_FILE_PATH.format(stack_id=stack_id))
        return stack_file_content(data)

    def get_regular_stack_details(self, stack_id: int) -> RegularStackDetails:
        """Get endpoint ID and stored env via GET /api/stacks/{id}."""
        self._require_credentials()
        data = self.transport.get_json(REGULAR_STACK_PATH.format(stack_id=stack_id))
        if not isinstance(data, dict):
            raise ParseError("stack response is not a JSON object")
        try:
            endpoint_id = int(data.get("EndpointId") or 0)
        except (TypeError, ValueError) as e:
            raise ParseError(f"invalid EndpointId: {e}")
        return RegularStackDetails(
            endpoint_id=endpoint_id, env=parse_stack_env(data.get("Env"))
        )

    def update_regular_stack(
        self, stack_id: int, endpoint_id: int, file: str, env: List[StackEnvVar]
    ) -> None:
        """Update a regular stack via PUT /api/stacks/{id}?endpointId={eid}."""
        self._require_credentials()
        payload = {
            "StackFileContent": file,
            "Prune": False,
            "PullImage": False,
            "Env": encode_stack_env(env),
        }
        self.transport.put(
            REGULAR_STACK_PATH.format(stack_id=stack_id),
            payload,
            params={"endpointId": endpoint_id},
        )

    # Public operations

    def get_stacks(self) -> List[Stack]:
        """
        List stacks.

        Returns regular stacks when the server has any, edge stacks otherwise.

        Raises:
            StackOperationError: If the edge listing fails
            DualPathError: If both listings fail
        """
        regular = self._attempt(
            "list regular stacks", self.list_regular_stacks, is_empty=lambda s: not s
        )
        if regular.decide(READ_TABLE) == Action.RETURN:
            return [stack.to_stack() for stack in regular.value]

        self._log("listing edge stacks")
        try:
            edge_stacks = self.edge_api.list_edge_stacks()
        except Exception as e:
            raise self._edge_failure(
                regular, "failed to list regular stacks", "failed to list edge stacks", e
            ) from e

        return [stack.to_stack() for stack in edge_stacks]

    def get_stack_file(self, stack_id: int) -> str:
        """
        Get a stack's compose file.

        Args:
            stack_id: Stack ID

        Returns:
            Compose file content
        """
        regular = self._attempt(
            f"get regular stack file {stack_id}",
            lambda: self.get_regular_stack_file(stack_id),
            is_empty=lambda content: not content,
        )
        if regular.decide(READ_TABLE) == Action.RETURN:
            return regular.value

        self._log(f"getting edge stack file {stack_id}")
        try:
            return self.edge_api.get_edge_stack_file(stack_id)
        except Exception as e:
            raise self._edge_failure(
                regular,
                "failed to get regular stack file",
                "failed to get edge stack file",
                e,
            ) from e

    def get_stack_env_names(self, stack_id: int) -> List[str]:
        """
        Get the environment variable names of a regular stack.

        Args:
            stack_id: Stack ID

        Returns:
            Unique, non-empty names in stored order

        Raises:
            ConfigurationError: If server URL or token is missing
            UnsupportedError: If the ID belongs to an edge stack
            StackOperationError: If the stack details cannot be read
        """
        if not self.config.has_credentials:
            raise ConfigurationError("stack env names require server url and token")

        details = self._attempt(
            f"get regular stack {stack_id}",
            lambda: self.get_regular_stack_details(stack_id),
        )
        action = details.decide(ENV_NAMES_TABLE)
        if action == Action.REJECT:
            raise UnsupportedError("stack env names are not available for edge stacks")
        if action == Action.RAISE:
            raise StackOperationError(
                "failed to get stack details", details.error
            ) from details.error

        return unique_env_names(details.value.env)

    def create_stack(self, name: str, file: str, group_ids: List[int]) -> int:
        """
        Create an edge stack.

        Args:
            name: Stack name
            file: Compose file content
            group_ids: Environment group IDs

        Returns:
            ID of the created stack
        """
        self._log(f"creating edge stack {name}", "INFO")
        try:
            return self.edge_api.create_edge_stack(name, file, list(group_ids))
        except Exception as e:
            raise StackOperationError("failed to create edge stack", e) from e

    def update_stack(
        self,
        stack_id: int,
        file: str,
        group_ids: List[int],
        env_overrides: Optional[List[StackEnvVar]] = None,
    ) -> None:
        """
        Update a stack, regular first, edge when the ID is an edge stack.

        Args:
            stack_id: Stack ID
            file: Compose file content
            group_ids: Environment group IDs (used by edge stacks)
            env_overrides: Env vars to set on a regular stack

        Raises:
            ConfigurationError: If overrides are given without server url/token
            UnsupportedError: If overrides are given for an edge stack
            StackOperationError: If the update fails
            DualPathError: If both the regular and the edge update fail
        """
        overrides = list(env_overrides or [])
        group_ids = list(group_ids)

        if not self.config.has_credentials:
            if overrides:
                raise ConfigurationError(
                    "stack env overrides require a server url and token"
                )
            self._log(f"updating edge stack {stack_id}", "INFO")
            try:
                self.edge_api.update_edge_stack(stack_id, file, group_ids)
            except Exception as e:
                raise StackOperationError("failed to update edge stack", e) from e
            return

        details = self._attempt(
            f"get regular stack {stack_id}",
            lambda: self.get_regular_stack_details(stack_id),
        )
        if details.outcome == Outcome.SUCCESS:
            merged = merge_env_overrides(details.value.env, overrides)
            step = self._attempt(
                f"update regular stack {stack_id}",
                lambda: self.update_regular_stack(
                    stack_id, details.value.endpoint_id, file, merged
                ),
            )
            message = "failed to update regular stack"
        else:
            step = details
            message = "failed to get regular stack details"

        action = step.decide(update_table(bool(overrides)))
        if action == Action.RETURN:
            self._log(f"updated regular stack {stack_id}", "INFO")
            return
        if action == Action.REJECT:
            raise UnsupportedError("stack env overrides are not supported for edge stacks")
        if action == Action.RAISE:
            raise StackOperationError(message, step.error) from step.error

        self._log(f"updating edge stack {stack_id}", "INFO")
        try:
            self.edge_api.update_edge_stack(stack_id, file, group_ids)
        except Exception as e:
            raise self._edge_failure(step, message, "failed to update edge stack", e) from e
