"""Session DTOs shared across application layers."""

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional


class Role(str, Enum):
    NONE = "none"
    DEVELOPER = "desarrollador"
    ADMIN = "admin"


_ROLE_LABELS = {
    "desarrollador": Role.DEVELOPER,
    "admin": Role.ADMIN,
    "administrador": Role.ADMIN,
}


class InvalidUserPayloadError(ValueError):
    pass


def normalize_role(label: Optional[str]) -> Role:
    """Map a free-form role label ("ADMIN", " Desarrollador ") onto the closed Role set."""
    if not isinstance(label, str):
        return Role.NONE
    return _ROLE_LABELS.get(label.strip().lower(), Role.NONE)


@dataclass(frozen=True)
class User:
    id: int
    username: str
    nombre_completo: str = ""
    rol: Optional[str] = None

    @property
    def role(self) -> Role:
        return normalize_role(self.rol)


@dataclass(frozen=True)
class Session:
    token: str
    user: User

    def __post_init__(self):
        if not isinstance(self.token, str) or not self.token:
            raise ValueError("session token must be a non-empty string")
        if not isinstance(self.user, User):
            raise ValueError("session user must be a User")


def _coerce_id(value: Any) -> int:
    if isinstance(value, bool):
        raise InvalidUserPayloadError("user id must be an integer")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and value.strip().isdigit():
        return int(value.strip())
    raise InvalidUserPayloadError("user id must be an integer")


def user_from_payload(payload: Any) -> User:
    """
    Build a User from the `usuario` object returned by the auth service
    (or its JSON copy kept in the session store).
    """
    if not isinstance(payload, dict):
        raise InvalidUserPayloadError("user payload must be an object")
    if "id" not in payload:
        raise InvalidUserPayloadError("user payload has no id")
    user_id = _coerce_id(payload["id"])

    username = payload.get("username")
    if not isinstance(username, str):
        raise InvalidUserPayloadError("user payload has no username")

    nombre = payload.get("nombre_completo")
    rol = payload.get("rol")
    return User(
        id=user_id,
        username=username,
        nombre_completo=nombre if isinstance(nombre, str) else "",
        rol=rol if isinstance(rol, str) else None,
    )


def user_to_payload(user: User) -> Dict[str, Any]:
    return {
        "id": user.id,
        "username": user.username,
        "nombre_completo": user.nombre_completo,
        "rol": user.rol,
    }
