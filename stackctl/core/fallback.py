"""
Fallback classification for regular-stack failures.

The server has no structured "this is an edge stack" error. A 404, or a
response that mentions edge stacks in free text, is the only signal. The
substring matching lives in ``is_edge_stack_message`` so it can be replaced
once the server exposes a proper error contract.
"""

from typing import Iterable, Optional

from stackctl.constants import EDGE_STACK_MARKERS
from stackctl.exceptions import ErrorKind, StatusError, TransportError


def is_edge_stack_message(
    message: Optional[str], markers: Iterable[str] = EDGE_STACK_MARKERS
) -> bool:
    """Check if free text contains one of the edge stack markers."""
    if not message:
        return False
    lower = message.lower()
    return any(marker.lower() in lower for marker in markers if marker)


def should_fallback(
    error: Exception, markers: Iterable[str] = EDGE_STACK_MARKERS
) -> bool:
    """
    Decide if a regular-path failure means the ID belongs to an edge stack.

    Args:
        error: Failure raised by the regular REST path
        markers: Case-insensitive substrings hinting at an edge stack

    Returns:
        True if the edge path should be tried
    """
    markers = tuple(markers)

    if isinstance(error, StatusError):
        if error.kind == ErrorKind.NOT_FOUND:
            return True
        if is_edge_stack_message(error.body, markers):
            return True
        return is_edge_stack_message(str(error), markers)

    if isinstance(error, TransportError):
        # URL context is excluded: host names are not hints
        return is_edge_stack_message(error.message, markers)

    return False
