"""Application layer contracts for orchestrating high-level flows."""

from .rbac_policy import Capabilities, capabilities_for, enforce
from .route_guard import LOGIN_ROUTE, GuardAction, GuardDecision, evaluate_guard
from .session_models import Role, Session, User, normalize_role, user_from_payload, user_to_payload

__all__ = [
    "Capabilities",
    "GuardAction",
    "GuardDecision",
    "LOGIN_ROUTE",
    "Role",
    "Session",
    "User",
    "capabilities_for",
    "enforce",
    "evaluate_guard",
    "normalize_role",
    "user_from_payload",
    "user_to_payload",
]
