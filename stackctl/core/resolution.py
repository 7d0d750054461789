"""
Regular/edge path resolution.

Every public stack operation probes the regular REST path first. The probe
ends in one of four outcomes; each operation has a decision table that maps
the outcome to what happens next. Keeping the tables side by side keeps the
small differences between operations visible.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Optional

from stackctl.constants import EDGE_STACK_MARKERS
from stackctl.core.fallback import should_fallback
from stackctl.exceptions import StackCtlError


class Outcome(Enum):
    """Result of one regular-path attempt."""

    SUCCESS = "success"
    EMPTY = "empty"
    FALLBACK = "fallback"
    TERMINAL = "terminal"


class Action(Enum):
    """Next step after a regular-path attempt."""

    RETURN = "return"
    TRY_EDGE = "try_edge"
    REJECT = "reject"
    RAISE = "raise"


DecisionTable = Dict[Outcome, Action]

# List and file reads: anything short of a non-empty answer goes to the edge path.
READ_TABLE: DecisionTable = {
    Outcome.SUCCESS: Action.RETURN,
    Outcome.EMPTY: Action.TRY_EDGE,
    Outcome.FALLBACK: Action.TRY_EDGE,
    Outcome.TERMINAL: Action.TRY_EDGE,
}

# Env names exist only on regular stacks.
ENV_NAMES_TABLE: DecisionTable = {
    Outcome.SUCCESS: Action.RETURN,
    Outcome.EMPTY: Action.RETURN,
    Outcome.FALLBACK: Action.REJECT,
    Outcome.TERMINAL: Action.RAISE,
}

UPDATE_TABLE: DecisionTable = {
    Outcome.SUCCESS: Action.RETURN,
    Outcome.EMPTY: Action.RETURN,
    Outcome.FALLBACK: Action.TRY_EDGE,
    Outcome.TERMINAL: Action.RAISE,
}

# Env overrides have no edge equivalent.
UPDATE_WITH_OVERRIDES_TABLE: DecisionTable = {
    Outcome.SUCCESS: Action.RETURN,
    Outcome.EMPTY: Action.RETURN,
    Outcome.FALLBACK: Action.REJECT,
    Outcome.TERMINAL: Action.RAISE,
}


@dataclass(frozen=True)
class Attempt:
    """Value or error of one regular-path call, with its outcome."""

    outcome: Outcome
    value: Any = None
    error: Optional[Exception] = None

    def decide(self, table: DecisionTable) -> Action:
        """Look up the next action for this attempt."""
        return table[self.outcome]


def attempt(
    call: Callable[[], Any],
    markers: Iterable[str] = EDGE_STACK_MARKERS,
    is_empty: Optional[Callable[[Any], bool]] = None,
) -> Attempt:
    """
    Run a regular-path call and classify how it ended.

    Args:
        call: Zero-argument callable hitting the regular REST path
        markers: Edge stack markers used by the fallback classifier
        is_empty: Predicate marking a successful but empty answer

    Returns:
        Attempt carrying the value or the error
    """
    try:
        value = call()
    except StackCtlError as e:
        if should_fallback(e, markers):
            return Attempt(Outcome.FALLBACK, error=e)
        return Attempt(Outcome.TERMINAL, error=e)

    if is_empty is not None and is_empty(value):
        return Attempt(Outcome.EMPTY, value=value)
    return Attempt(Outcome.SUCCESS, value=value)


def update_table(has_overrides: bool) -> DecisionTable:
    """Pick the update decision table."""
    if has_overrides:
        return UPDATE_WITH_OVERRIDES_TABLE
    return UPDATE_TABLE
