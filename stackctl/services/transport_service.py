"""HTTP transport for the orchestration server REST API."""

import json
from typing import Any, Callable, Dict, Optional

import requests

from stackctl.constants import API_KEY_HEADER
from stackctl.exceptions import ParseError, StatusError, TransportError
from stackctl.models.config import ServerConfig


def _is_ok(status_code: int) -> bool:
    return status_code == 200


def _is_2xx(status_code: int) -> bool:
    return 200 <= status_code < 300


class StackTransport:
    """
    Authenticated REST calls against the orchestration server.

    Each call opens its own session and closes it (and the response) on
    every exit path; nothing is reused between calls.
    """

    def __init__(
        self,
        config: ServerConfig,
        session_factory: Callable[[], requests.Session] = requests.Session,
    ):
        """
        Initialize transport.

        Args:
            config: Server URL, token, TLS and timeout settings
            session_factory: Builds a fresh requests session per call
        """
        self.config = config
        self.session_factory = session_factory

    def url_for(self, path: str) -> str:
        """Build absolute URL for an API path."""
        return f"{self.config.base_url}{path}"

    def request(
        self,
        method: str,
        path: str,
        params: Optional[Dict[str, Any]] = None,
        payload: Optional[Any] = None,
        accept: Callable[[int], bool] = _is_2xx,
    ) -> bytes:
        """
        Issue one HTTP request and return the raw body.

        Args:
            method: HTTP method
            path: API path (e.g. /api/stacks)
            params: Query parameters
            payload: JSON body
            accept: Predicate for accepted status codes

        Returns:
            Response body bytes

        Raises:
            TransportError: If the request could not be made
            StatusError: If the status code is not accepted
        """
        url = self.url_for(path)
        headers = {API_KEY_HEADER: self.config.token}

        with self.session_factory() as session:
            try:
                response = session.request(
                    method,
                    url,
                    params=params,
                    json=payload,
                    headers=headers,
                    verify=not self.config.skip_tls_verify,
                    timeout=self.config.timeout,
                )
            except requests.RequestException as e:
                raise TransportError(f"failed to make http request: {e}", url=url)

            try:
                if not accept(response.status_code):
                    raise StatusError(response.status_code, response.text, url=url)
                return response.content
            finally:
                response.close()

    def get(self, path: str, params: Optional[Dict[str, Any]] = None) -> bytes:
        """GET a path; only status 200 is accepted."""
        return self.request("GET", path, params=params, accept=_is_ok)

    def put(
        self, path: str, payload: Any, params: Optional[Dict[str, Any]] = None
    ) -> bytes:
        """PUT a JSON payload; any 2xx is accepted."""
        return self.request("PUT", path, params=params, payload=payload)

    def post(self, path: str, payload: Any) -> bytes:
        """POST a JSON payload; any 2xx is accepted."""
        return self.request("POST", path, payload=payload)

    def get_json(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """GET a path and decode the JSON body."""
        return decode_json(self.get(path, params=params), self.url_for(path))

    def post_json(self, path: str, payload: Any) -> Any:
        """POST a JSON payload and decode the JSON body."""
        return decode_json(self.post(path, payload), self.url_for(path))


def decode_json(body: bytes, url: Optional[str] = None) -> Any:
    """Decode a response body, raising ParseError on malformed JSON."""
    try:
        return json.loads(body)
    except ValueError as e:
        raise ParseError(
            f"failed to parse response json: {e}",
            context=f"URL: {url}" if url else None,
        )
