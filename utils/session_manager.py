import json
import logging
from enum import Enum
from typing import Callable, List, Optional, Protocol

import streamlit as st

import config
from infrastructure.auth_api_client import AuthApiClient, CredentialExchangeError
from infrastructure.observability import mask_token
from infrastructure.session_store import TOKEN_KEY, USER_KEY, BrowserSessionStore, SessionStore
from use_cases.rbac_policy import Capabilities, capabilities_for
from use_cases.session_models import Session, User, user_from_payload, user_to_payload

"""
SESSION STATE CONTRACT

One SessionManager per browser tab, kept in st.session_state and handed to
every view. Keys owned here:

session_manager: SessionManager
    the tab's manager, created on first access
    owner: utils/session_manager

session_store_cache: dict
    write-through overlay of the browser session store
    default: {}
    owner: infrastructure/session_store
"""

log = logging.getLogger(__name__)


class SessionState(str, Enum):
    INITIALIZING = "INITIALIZING"
    AUTHENTICATED = "AUTHENTICATED"
    UNAUTHENTICATED = "UNAUTHENTICATED"


class SessionEvent(str, Enum):
    RESTORED = "RESTORED"
    RESTORE_EMPTY = "RESTORE_EMPTY"
    RESTORE_FAILED = "RESTORE_FAILED"
    LOGIN_SUCCESS = "LOGIN_SUCCESS"
    LOGIN_FAILED = "LOGIN_FAILED"
    LOGOUT = "LOGOUT"


class RestorationError(Exception):
    pass


class CredentialExchange(Protocol):
    def exchange(self, username: str, password: str) -> Session: ...


Listener = Callable[[SessionEvent, "SessionManager"], None]


class SessionManager:
    """
    Owns the authenticated session of one client.

    State starts at INITIALIZING with is_loading=True; initialize() moves it to
    AUTHENTICATED or UNAUTHENTICATED. login()/logout() move between those two.
    The store is written alongside memory on every mutation.
    """

    def __init__(self, store: SessionStore, exchange: CredentialExchange):
        self.store = store
        self.exchange = exchange
        self.state = SessionState.INITIALIZING
        self.is_loading = True
        self._session: Optional[Session] = None
        self._listeners: List[Listener] = []

    @property
    def session(self) -> Optional[Session]:
        return self._session

    @property
    def user(self) -> Optional[User]:
        return self._session.user if self._session else None

    @property
    def token(self) -> Optional[str]:
        return self._session.token if self._session else None

    @property
    def is_authenticated(self) -> bool:
        return self._session is not None

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe():
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _emit(self, event: SessionEvent) -> None:
        for listener in list(self._listeners):
            try:
                listener(event, self)
            except Exception:
                log.exception(f"Session listener failed on {event.value}")

    def _commit(self, session: Optional[Session]) -> None:
        self._session = session
        self.state = SessionState.AUTHENTICATED if session else SessionState.UNAUTHENTICATED

    def _read_stored_session(self) -> Optional[Session]:
        token = self.store.get(TOKEN_KEY)
        raw_user = self.store.get(USER_KEY)
        if not token and not raw_user:
            return None
        if not token:
            raise RestorationError("stored user without token")
        if not raw_user:
            raise RestorationError("stored token without user")
        try:
            user = user_from_payload(json.loads(raw_user))
        except (ValueError, TypeError) as e:
            # json.JSONDecodeError and InvalidUserPayloadError are both ValueErrors
            raise RestorationError(f"stored user is malformed: {e}") from e
        return Session(token=token, user=user)

    def _clear_store(self) -> None:
        for key in (TOKEN_KEY, USER_KEY):
            try:
                self.store.remove(key)
            except Exception:
                log.warning(f"Could not clear stored '{key}'", exc_info=True)

    def _restore_store(self, previous) -> None:
        for key, value in previous.items():
            try:
                if value is None:
                    self.store.remove(key)
                else:
                    self.store.set(key, value)
            except Exception:
                log.warning(f"Could not roll back stored '{key}'", exc_info=True)

    def initialize(self) -> SessionState:
        if not self.is_loading:
            log.debug("initialize() called again; keeping current session state")
            return self.state

        try:
            restored = self._read_stored_session()
        except RestorationError as e:
            log.warning(f"Session restoration failed: {e}")
            self._clear_store()
            self._commit(None)
            event = SessionEvent.RESTORE_FAILED
        except Exception:
            log.exception("Unexpected error while restoring session")
            self._clear_store()
            self._commit(None)
            event = SessionEvent.RESTORE_FAILED
        else:
            self._commit(restored)
            if restored:
                log.info(f"Session restored for user_id={restored.user.id} token={mask_token(restored.token)}")
                event = SessionEvent.RESTORED
            else:
                event = SessionEvent.RESTORE_EMPTY
        finally:
            self.is_loading = False

        self._emit(event)
        return self.state

    def login(self, username: str, password: str) -> bool:
        try:
            session = self.exchange.exchange(username, password)
        except CredentialExchangeError as e:
            log.info(f"Login failed for '{username}': {e.reason} (status={e.status_code})")
            self._emit(SessionEvent.LOGIN_FAILED)
            return False
        except Exception:
            log.exception(f"Unexpected error during login for '{username}'")
            self._emit(SessionEvent.LOGIN_FAILED)
            return False

        previous = {key: self.store.get(key) for key in (TOKEN_KEY, USER_KEY)}
        try:
            self.store.set(TOKEN_KEY, session.token)
            self.store.set(USER_KEY, json.dumps(user_to_payload(session.user)))
        except Exception:
            log.exception("Could not persist session; keeping previous state")
            self._restore_store(previous)
            self._emit(SessionEvent.LOGIN_FAILED)
            return False

        self._commit(session)
        log.info(f"Login ok user_id={session.user.id} role={session.user.role.value} token={mask_token(session.token)}")
        self._emit(SessionEvent.LOGIN_SUCCESS)
        return True

    def logout(self) -> None:
        had_session = self._session is not None
        self._commit(None)
        self._clear_store()
        if had_session:
            log.info("Logout")
        self._emit(SessionEvent.LOGOUT)

    def capabilities(self) -> Capabilities:
        return capabilities_for(self.user)


def build_session_manager() -> SessionManager:
    if "session_store_cache" not in st.session_state:
        st.session_state.session_store_cache = {}
    try:
        cookies = st.context.cookies
    except Exception:
        # Bare/test runs have no request context
        cookies = {}
    store = BrowserSessionStore(
        cookies=cookies,
        cache=st.session_state.session_store_cache,
        prefix=config.session_key_prefix(),
    )
    client = AuthApiClient(config.auth_base_url(), timeout=config.auth_timeout())
    return SessionManager(store, client)


def get_session_manager() -> SessionManager:
    if st.session_state.get("session_manager") is None:
        st.session_state.session_manager = build_session_manager()
    return st.session_state.session_manager


def flush_store_writes(manager: SessionManager) -> int:
    """Emit browser writes queued by the previous run (login/logout reran before they rendered)."""
    flush = getattr(manager.store, "flush", None)
    if flush is None:
        return 0
    return flush()
