"""
stackctl - one stack API over regular and edge stacks.

Regular stacks are served by the orchestration server's /api/stacks REST
surface; edge stacks only by the edge stack API. ``StackService`` probes the
regular path first and falls back to the edge path when the server says the
ID is not a regular stack.
"""

__version__ = "1.0.0"
