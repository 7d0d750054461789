"""
Server Configuration Models

Dataclass model for the connection settings passed into the transport.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional, Tuple

from stackctl.constants import DEFAULT_SCHEME, DEFAULT_TIMEOUT, EDGE_STACK_MARKERS


def normalize_server_url(server_url: str) -> str:
    """Prefix https:// when no scheme is given and trim one trailing slash."""
    if not server_url.startswith("http://") and not server_url.startswith(
        "https://"
    ):
        server_url = DEFAULT_SCHEME + server_url
    return server_url.removesuffix("/")


@dataclass(frozen=True)
class ServerConfig:
    """Connection settings for the orchestration server."""

    server_url: str = ""
    token: str = ""
    skip_tls_verify: bool = False
    timeout: float = DEFAULT_TIMEOUT
    edge_markers: Tuple[str, ...] = EDGE_STACK_MARKERS
    read_only: bool = False
    log_dir: Optional[Path] = None

    @property
    def has_credentials(self) -> bool:
        """Check if both server URL and token are set."""
        return bool(self.server_url) and bool(self.token)

    @property
    def base_url(self) -> str:
        """Get normalized base URL."""
        return normalize_server_url(self.server_url)

    def __repr__(self) -> str:
        token_state = "set" if self.token else "unset"
        return (
            f"ServerConfig(server={self.server_url or '-'}, token={token_state}, "
            f"skip_tls_verify={self.skip_tls_verify})"
        )
