"""Tests for the dual-path stack service."""

import pytest

from stackctl.exceptions import (
    ConfigurationError,
    DualPathError,
    ParseError,
    StackOperationError,
    StatusError,
    TransportError,
    UnsupportedError,
)
from stackctl.models.env import StackEnvVar
from stackctl.models.stack import EdgeStack, Stack, format_creation_date
from stackctl.services.stack_service import StackService
from tests.fakes import FakeEdgeStackAPI, FakeStackTransport

NOW = 1700000000
CREATED_AT = format_creation_date(NOW)

REGULAR_STACK = {
    "Id": 10,
    "Name": "regular-stack",
    "Type": 2,
    "EndpointId": 3,
    "CreationDate": NOW,
    "Status": 1,
}


def _service(config, responses=None, edge=None):
    transport = FakeStackTransport(config, responses)
    edge = edge or FakeEdgeStackAPI()
    return StackService(config, edge, transport=transport), transport, edge


def _details(env, endpoint_id=3):
    return {"Id": 5, "EndpointId": endpoint_id, "Env": env}


# get_stacks


def test_get_stacks_returns_regular_stacks(config) -> None:
    service, transport, edge = _service(
        config, {("GET", "/api/stacks"): [REGULAR_STACK]}
    )

    stacks = service.get_stacks()

    assert stacks == [
        Stack(id=10, name="regular-stack", created_at=CREATED_AT, environment_group_ids=[])
    ]
    assert edge.calls == []


def test_get_stacks_falls_back_to_edge_when_regular_is_empty(config) -> None:
    edge = FakeEdgeStackAPI(
        stacks=[
            EdgeStack(id=1, name="stack1", creation_date=NOW, edge_groups=[1, 2]),
            EdgeStack(id=2, name="stack2", creation_date=NOW, edge_groups=[3]),
        ]
    )
    service, _, _ = _service(config, {("GET", "/api/stacks"): []}, edge)

    stacks = service.get_stacks()

    assert stacks == [
        Stack(id=1, name="stack1", created_at=CREATED_AT, environment_group_ids=[1, 2]),
        Stack(id=2, name="stack2", created_at=CREATED_AT, environment_group_ids=[3]),
    ]


def test_get_stacks_falls_back_to_edge_when_regular_fails(config) -> None:
    edge = FakeEdgeStackAPI(stacks=[EdgeStack(id=1, name="e", creation_date=NOW)])
    service, _, _ = _service(
        config, {("GET", "/api/stacks"): StatusError(403, "forbidden")}, edge
    )

    assert [s.id for s in service.get_stacks()] == [1]
    assert edge.calls == [("list",)]


def test_get_stacks_both_paths_fail(config) -> None:
    edge = FakeEdgeStackAPI(list_error=RuntimeError("edge down"))
    service, _, _ = _service(
        config, {("GET", "/api/stacks"): StatusError(500, "boom")}, edge
    )

    with pytest.raises(DualPathError) as exc_info:
        service.get_stacks()

    assert "failed to list regular stacks" in str(exc_info.value)
    assert "boom" in str(exc_info.value)
    assert "edge down" in str(exc_info.value)


def test_get_stacks_edge_fails_after_empty_regular(config) -> None:
    edge = FakeEdgeStackAPI(list_error=RuntimeError("edge down"))
    service, _, _ = _service(config, {("GET", "/api/stacks"): []}, edge)

    with pytest.raises(StackOperationError) as exc_info:
        service.get_stacks()

    assert not isinstance(exc_info.value, DualPathError)
    assert str(exc_info.value) == "failed to list edge stacks: edge down"


def test_get_stacks_without_credentials_uses_edge_only(edge_only_config) -> None:
    edge = FakeEdgeStackAPI(stacks=[EdgeStack(id=2, name="e", creation_date=NOW)])
    service, transport, _ = _service(edge_only_config, edge=edge)

    assert [s.id for s in service.get_stacks()] == [2]
    assert transport.requests == []


def test_get_stacks_malformed_regular_list_falls_back(config) -> None:
    edge = FakeEdgeStackAPI(stacks=[])
    service, _, _ = _service(config, {("GET", "/api/stacks"): b"{oops"}, edge)

    assert service.get_stacks() == []
    assert edge.calls == [("list",)]


# get_stack_file


def test_get_stack_file_regular(config) -> None:
    service, _, edge = _service(
        config,
        {("GET", "/api/stacks/5/file"): {"StackFileContent": "services: {}\n"}},
    )

    assert service.get_stack_file(5) == "services: {}\n"
    assert edge.calls == []


def test_get_stack_file_empty_regular_falls_back(config) -> None:
    edge = FakeEdgeStackAPI(files={5: "edge: true\n"})
    service, _, _ = _service(
        config, {("GET", "/api/stacks/5/file"): {"StackFileContent": ""}}, edge
    )

    assert service.get_stack_file(5) == "edge: true\n"


def test_get_stack_file_non_string_content_is_not_returned(config) -> None:
    edge = FakeEdgeStackAPI(files={5: "edge: true\n"})
    service, _, _ = _service(
        config, {("GET", "/api/stacks/5/file"): {"StackFileContent": 42}}, edge
    )

    assert service.get_stack_file(5) == "edge: true\n"
    assert edge.calls == [("get_file", 5)]


def test_get_stack_file_not_found_falls_back(config) -> None:
    edge = FakeEdgeStackAPI(files={5: "edge: true\n"})
    service, _, _ = _service(config, edge=edge)

    assert service.get_stack_file(5) == "edge: true\n"
    assert edge.calls == [("get_file", 5)]


def test_get_stack_file_both_fail(config) -> None:
    edge = FakeEdgeStackAPI(file_error=RuntimeError("no such edge stack"))
    service, _, _ = _service(config, edge=edge)

    with pytest.raises(DualPathError) as exc_info:
        service.get_stack_file(5)

    assert str(exc_info.value).startswith("failed to get regular stack file")
    assert isinstance(exc_info.value.regular_error, StatusError)


# get_stack_env_names


def test_get_stack_env_names_requires_credentials(edge_only_config) -> None:
    service, transport, edge = _service(edge_only_config)

    with pytest.raises(ConfigurationError):
        service.get_stack_env_names(5)

    assert transport.requests == []
    assert edge.calls == []


def test_get_stack_env_names_dedupes_in_order(config) -> None:
    env = [
        {"name": "B", "value": "1"},
        {"name": "", "value": "x"},
        {"name": "A", "value": "2"},
        {"name": "B", "value": "3"},
    ]
    service, _, _ = _service(config, {("GET", "/api/stacks/5"): _details(env)})

    assert service.get_stack_env_names(5) == ["B", "A"]


def test_get_stack_env_names_reads_record_shape(config) -> None:
    env = [{"Name": "TOKEN", "Value": "abc"}]
    service, _, _ = _service(config, {("GET", "/api/stacks/5"): _details(env)})

    assert service.get_stack_env_names(5) == ["TOKEN"]


def test_get_stack_env_names_on_edge_stack_is_unsupported(config) -> None:
    service, _, edge = _service(config)

    with pytest.raises(UnsupportedError) as exc_info:
        service.get_stack_env_names(5)

    assert "not available for edge stacks" in str(exc_info.value)
    assert edge.calls == []


def test_get_stack_env_names_marker_body_is_unsupported(config) -> None:
    service, _, edge = _service(
        config,
        {("GET", "/api/stacks/5"): StatusError(400, "Stack is an Edge Stack")},
    )

    with pytest.raises(UnsupportedError):
        service.get_stack_env_names(5)

    assert edge.calls == []


def test_get_stack_env_names_terminal_error_is_wrapped(config) -> None:
    cause = StatusError(403, "Access denied")
    service, _, _ = _service(config, {("GET", "/api/stacks/5"): cause})

    with pytest.raises(StackOperationError) as exc_info:
        service.get_stack_env_names(5)

    assert exc_info.value.cause is cause
    assert str(exc_info.value).startswith("failed to get stack details")


# create_stack


def test_create_stack_delegates_to_edge(config) -> None:
    edge = FakeEdgeStackAPI(created_id=42)
    service, transport, _ = _service(config, edge=edge)

    assert service.create_stack("web", "services: {}", [1, 2]) == 42
    assert edge.calls == [("create", "web", "services: {}", [1, 2])]
    assert transport.requests == []


def test_create_stack_failure_is_wrapped(config) -> None:
    edge = FakeEdgeStackAPI(create_error=StatusError(409, "name taken"))
    service, _, _ = _service(config, edge=edge)

    with pytest.raises(StackOperationError) as exc_info:
        service.create_stack("web", "x", [1])

    assert str(exc_info.value) == "failed to create edge stack: api returned status 409: name taken"


# update_stack


def test_update_regular_stack_merges_overrides(config) -> None:
    env = [{"name": "A", "value": "1"}, {"name": "B", "value": "2"}]
    service, transport, edge = _service(
        config,
        {
            ("GET", "/api/stacks/5"): _details(env, endpoint_id=7),
            ("PUT", "/api/stacks/5"): b"{}",
        },
    )

    service.update_stack(
        5, "compose", [1], [StackEnvVar("B", "9"), StackEnvVar("C", "3")]
    )

    put = transport.calls_to("PUT")[0]
    assert put["params"] == {"endpointId": 7}
    assert put["payload"] == {
        "StackFileContent": "compose",
        "Prune": False,
        "PullImage": False,
        "Env": [
            {"name": "A", "value": "1"},
            {"name": "B", "value": "9"},
            {"name": "C", "value": "3"},
        ],
    }
    assert edge.calls == []


def test_update_regular_stack_without_overrides_keeps_env(config) -> None:
    env = [{"Name": "A", "Value": "1"}]
    service, transport, _ = _service(
        config,
        {("GET", "/api/stacks/5"): _details(env), ("PUT", "/api/stacks/5"): b""},
    )

    service.update_stack(5, "compose", [])

    assert transport.calls_to("PUT")[0]["payload"]["Env"] == [{"name": "A", "value": "1"}]


def test_update_rejects_overrides_when_write_says_edge_stack(config) -> None:
    service, _, edge = _service(
        config,
        {
            ("GET", "/api/stacks/5"): _details([]),
            ("PUT", "/api/stacks/5"): StatusError(400, "use EdgeStackUpdate"),
        },
    )

    with pytest.raises(UnsupportedError):
        service.update_stack(5, "compose", [1], [StackEnvVar("A", "1")])

    assert edge.calls == []


def test_update_write_fallback_without_overrides_updates_edge(config) -> None:
    service, _, edge = _service(
        config,
        {
            ("GET", "/api/stacks/5"): _details([]),
            ("PUT", "/api/stacks/5"): StatusError(404, ""),
        },
    )

    service.update_stack(5, "compose", [1, 2], [])

    assert edge.calls == [("update", 5, "compose", [1, 2])]


def test_update_write_terminal_error_is_surfaced(config) -> None:
    service, _, edge = _service(
        config,
        {
            ("GET", "/api/stacks/5"): _details([]),
            ("PUT", "/api/stacks/5"): StatusError(500, "disk full"),
        },
    )

    with pytest.raises(StackOperationError) as exc_info:
        service.update_stack(5, "compose", [1])

    assert str(exc_info.value).startswith("failed to update regular stack")
    assert edge.calls == []


def test_update_details_not_found_updates_edge(config) -> None:
    service, transport, edge = _service(config)

    service.update_stack(5, "compose", [3])

    assert edge.calls == [("update", 5, "compose", [3])]
    assert transport.calls_to("PUT") == []


def test_update_details_not_found_with_overrides_is_unsupported(config) -> None:
    service, _, edge = _service(config)

    with pytest.raises(UnsupportedError) as exc_info:
        service.update_stack(5, "compose", [3], [StackEnvVar("A", "1")])

    assert "not supported for edge stacks" in str(exc_info.value)
    assert edge.calls == []


def test_update_details_terminal_error_is_surfaced(config) -> None:
    service, _, edge = _service(
        config, {("GET", "/api/stacks/5"): TransportError("connection refused")}
    )

    with pytest.raises(StackOperationError) as exc_info:
        service.update_stack(5, "compose", [3])

    assert str(exc_info.value).startswith("failed to get regular stack details")
    assert edge.calls == []


def test_update_with_undecodable_stored_env_sends_no_put(config) -> None:
    service, transport, edge = _service(
        config,
        {
            ("GET", "/api/stacks/5"): _details([{"name": "PORT", "value": 8080}]),
            ("PUT", "/api/stacks/5"): b"{}",
        },
    )

    with pytest.raises(StackOperationError) as exc_info:
        service.update_stack(5, "compose", [], [StackEnvVar("NEW", "1")])

    assert isinstance(exc_info.value.cause, ParseError)
    assert transport.calls_to("PUT") == []
    assert edge.calls == []


def test_update_both_paths_fail(config) -> None:
    edge = FakeEdgeStackAPI(update_error=RuntimeError("edge rejected"))
    service, _, _ = _service(config, edge=edge)

    with pytest.raises(DualPathError) as exc_info:
        service.update_stack(5, "compose", [3])

    assert "failed to get regular stack details" in str(exc_info.value)
    assert "edge rejected" in str(exc_info.value)


def test_update_without_credentials_goes_straight_to_edge(edge_only_config) -> None:
    service, transport, edge = _service(edge_only_config)

    service.update_stack(5, "compose", [1, 2], [])

    assert edge.calls == [("update", 5, "compose", [1, 2])]
    assert transport.requests == []


def test_update_without_credentials_rejects_overrides(edge_only_config) -> None:
    service, _, edge = _service(edge_only_config)

    with pytest.raises(ConfigurationError):
        service.update_stack(5, "compose", [1], [StackEnvVar("A", "1")])

    assert edge.calls == []


def test_update_without_credentials_edge_failure_is_wrapped(edge_only_config) -> None:
    edge = FakeEdgeStackAPI(update_error=RuntimeError("boom"))
    service, _, _ = _service(edge_only_config, edge=edge)

    with pytest.raises(StackOperationError) as exc_info:
        service.update_stack(5, "compose", [1])

    assert str(exc_info.value) == "failed to update edge stack: boom"


def test_service_logs_fallback_decisions(config, tmp_path) -> None:
    from stackctl.logger import StackLogger

    edge = FakeEdgeStackAPI(files={5: "edge"})
    with StackLogger("test", tmp_path, verbose=False) as logger:
        service = StackService(
            config, edge, transport=FakeStackTransport(config), logger=logger
        )
        service.get_stack_file(5)
        log_path = logger.log_path

    content = log_path.read_text()
    assert "get regular stack file 5: fallback" in content
    assert "getting edge stack file 5" in content
