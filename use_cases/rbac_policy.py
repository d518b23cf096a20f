"""Centralized Role-Based Access Control logic."""

import logging
from dataclasses import asdict, dataclass
from typing import Optional

from use_cases.session_models import Role, User

log = logging.getLogger(__name__)

ELEVATED_ROLES = frozenset({Role.DEVELOPER, Role.ADMIN})


@dataclass(frozen=True)
class Capabilities:
    create: bool = False
    read: bool = False
    edit: bool = False
    delete: bool = False
    delete_progress: bool = False
    unfinalize: bool = False
    is_admin: bool = False
    is_developer: bool = False


NO_CAPABILITIES = Capabilities()
CAPABILITY_NAMES = tuple(asdict(NO_CAPABILITIES).keys())


def capabilities_for(user: Optional[User]) -> Capabilities:
    """
    Derive the capability flags for a user.
    Any authenticated user may create and read; every other flag
    depends on the normalized role.
    """
    if user is None:
        return NO_CAPABILITIES

    role = user.role
    elevated = role in ELEVATED_ROLES
    return Capabilities(
        create=True,
        read=True,
        edit=elevated,
        delete=elevated,
        delete_progress=elevated,
        unfinalize=elevated,
        is_admin=elevated,
        is_developer=role is Role.DEVELOPER,
    )


def enforce(user: Optional[User], capability: str) -> bool:
    """
    Evaluates if the user holds the named capability.
    Returns True if authorized, False otherwise.
    """
    if capability not in CAPABILITY_NAMES:
        raise ValueError(f"Unknown capability: {capability}")

    authorized = getattr(capabilities_for(user), capability)
    if not authorized:
        log.warning(
            "rbac_denied capability=%s user_id=%s role=%s",
            capability,
            user.id if user else None,
            user.role.value if user else None,
        )
    return authorized
