"""
Tab-scoped persistence of the authenticated session.

Two logical keys are stored: TOKEN_KEY (raw bearer token) and USER_KEY
(JSON-serialized user record). Only the SessionManager writes here.
"""

import json
import logging
from typing import Callable, List, Mapping, MutableMapping, Optional, Protocol
from urllib.parse import quote, unquote

log = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"

# Marks a key removed during this tab session so a stale request cookie
# is not read back before the browser drops it.
_TOMBSTONE = object()

PENDING_SCRIPTS_KEY = "__pending_scripts__"


class SessionStore(Protocol):
    def get(self, key: str) -> Optional[str]: ...

    def set(self, key: str, value: str) -> None: ...

    def remove(self, key: str) -> None: ...


class MemorySessionStore:
    """Dict-backed store. Two managers sharing one mapping behave like a page reload."""

    def __init__(self, data: Optional[MutableMapping[str, str]] = None):
        self.data = data if data is not None else {}

    def get(self, key: str) -> Optional[str]:
        return self.data.get(key)

    def set(self, key: str, value: str) -> None:
        self.data[key] = value

    def remove(self, key: str) -> None:
        self.data.pop(key, None)


def _default_emit(script: str) -> None:
    import streamlit.components.v1 as components
    components.html(script, height=0)


class BrowserSessionStore:
    """
    Keeps the session in the browser: sessionStorage plus a session cookie
    (no max-age) so the next page load can hand it back to the server through
    st.context.cookies.

    The cookie lives for the browser session and is shared by every tab of
    that browser; it is not per-tab isolation.

    `cache` should live in st.session_state; it overlays the request cookies
    so reads after writes are consistent within the same tab session.

    set()/remove() only queue their browser script in the cache. Callers
    usually st.rerun() right after a login or logout, which would drop a
    component emitted in the same run, so flush() must run at the top of the
    next script run, before any page renders.
    """

    def __init__(
        self,
        cookies: Mapping[str, str],
        cache: MutableMapping,
        prefix: str = "sedeges_",
        emit: Callable[[str], None] = _default_emit,
    ):
        self.cookies = cookies
        self.cache = cache
        self.prefix = prefix
        self.emit = emit

    def _name(self, key: str) -> str:
        return f"{self.prefix}{key}"

    def _queue(self, script: str) -> None:
        self.cache.setdefault(PENDING_SCRIPTS_KEY, []).append(script)

    @property
    def pending(self) -> List[str]:
        return list(self.cache.get(PENDING_SCRIPTS_KEY, []))

    def flush(self) -> int:
        """Emit queued browser writes in order. Returns how many were emitted."""
        scripts = self.cache.pop(PENDING_SCRIPTS_KEY, [])
        for script in scripts:
            self.emit(script)
        if scripts:
            log.debug(f"Flushed {len(scripts)} browser session write(s)")
        return len(scripts)

    def get(self, key: str) -> Optional[str]:
        if key in self.cache:
            cached = self.cache[key]
            return None if cached is _TOMBSTONE else cached
        raw = self.cookies.get(self._name(key))
        if raw is None:
            return None
        return unquote(raw)

    def set(self, key: str, value: str) -> None:
        self.cache[key] = value
        name = json.dumps(self._name(key))
        encoded = json.dumps(quote(value, safe=""))
        self._queue(
            f"""
            <script>
              (function () {{
                var name = {name};
                var value = {encoded};
                var cookieStr = name + "=" + value + "; path=/; SameSite=Lax";
                try {{ window.parent.sessionStorage.setItem(name, decodeURIComponent(value)); }} catch (e) {{}}
                document.cookie = cookieStr;
                try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
              }})();
            </script>
            """
        )

    def remove(self, key: str) -> None:
        self.cache[key] = _TOMBSTONE
        name = json.dumps(self._name(key))
        self._queue(
            f"""
            <script>
              (function () {{
                var name = {name};
                var cookieStr = name + "=; path=/; max-age=0; SameSite=Lax";
                try {{ window.parent.sessionStorage.removeItem(name); }} catch (e) {{}}
                document.cookie = cookieStr;
                try {{ window.parent.document.cookie = cookieStr; }} catch (e) {{}}
              }})();
            </script>
            """
        )
