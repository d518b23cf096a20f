"""Route guard decision for protected pages (application layer)."""

from dataclasses import dataclass
from typing import Literal

GuardAction = Literal["LOADING", "RENDER", "REDIRECT"]

LOGIN_ROUTE = "login"


@dataclass(frozen=True)
class GuardDecision:
    """Result contract for the route guard."""

    action: GuardAction
    reason: str


def evaluate_guard(manager) -> GuardDecision:
    """
    Decide what a protected page should do for the manager's current state.
    Read-only: the manager is never mutated here. Callers must not act on a
    missing session until is_loading is False.
    """
    if manager.is_loading:
        return GuardDecision(action="LOADING", reason="initializing")
    if manager.session is None:
        return GuardDecision(action="REDIRECT", reason="auth_required")
    return GuardDecision(action="RENDER", reason="authenticated")
