import json

from infrastructure.session_store import TOKEN_KEY, USER_KEY, MemorySessionStore
from use_cases.route_guard import GuardDecision, evaluate_guard
from use_cases.session_models import Session, User
from utils.session_manager import SessionManager

USER = User(id=5, username="dev", nombre_completo="Dev", rol="desarrollador")


class _Exchange:
    def exchange(self, username, password):
        return Session("tok-login", USER)


def _stored():
    return {TOKEN_KEY: "tok", USER_KEY: json.dumps({"id": 5, "username": "dev", "rol": "desarrollador"})}


def test_loading_before_initialize_even_with_stored_session() -> None:
    manager = SessionManager(MemorySessionStore(_stored()), _Exchange())
    decision = evaluate_guard(manager)
    assert decision == GuardDecision(action="LOADING", reason="initializing")


def test_loading_before_initialize_without_session() -> None:
    manager = SessionManager(MemorySessionStore({}), _Exchange())
    assert evaluate_guard(manager).action == "LOADING"


def test_render_when_authenticated() -> None:
    manager = SessionManager(MemorySessionStore(_stored()), _Exchange())
    manager.initialize()
    assert evaluate_guard(manager) == GuardDecision(action="RENDER", reason="authenticated")


def test_redirect_when_unauthenticated() -> None:
    manager = SessionManager(MemorySessionStore({}), _Exchange())
    manager.initialize()
    assert evaluate_guard(manager) == GuardDecision(action="REDIRECT", reason="auth_required")


def test_guard_follows_login_and_logout() -> None:
    manager = SessionManager(MemorySessionStore({}), _Exchange())
    manager.initialize()
    assert evaluate_guard(manager).action == "REDIRECT"

    manager.login("dev", "pw")
    assert evaluate_guard(manager).action == "RENDER"

    manager.logout()
    assert evaluate_guard(manager).action == "REDIRECT"


def test_guard_does_not_mutate_manager() -> None:
    storage = _stored()
    manager = SessionManager(MemorySessionStore(storage), _Exchange())
    evaluate_guard(manager)
    assert manager.is_loading is True
    assert manager.session is None
    assert storage == _stored()
