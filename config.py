import os
import streamlit as st

DEFAULT_AUTH_BASE_URL = "http://localhost:3000/api/auth"
DEFAULT_API_BASE_URL = "http://localhost:3000"
DEFAULT_API_TIMEOUT = 15
DEFAULT_SESSION_KEY_PREFIX = "sedeges_"

def get_secret(key):
    try:
        return st.secrets.get(key)
    except FileNotFoundError:
        return None

def get_setting(key, default=None):
    """secrets.toml wins over the environment; the default is the last resort."""
    value = get_secret(key)
    if value is None or value == "":
        value = os.getenv(key)
    if value is None or value == "":
        return default
    return value

def _get_timeout(key, default):
    raw = get_setting(key)
    if raw is None:
        return default
    try:
        return float(raw)
    except (TypeError, ValueError):
        return default

def auth_base_url():
    return str(get_setting("AUTH_BASE_URL", DEFAULT_AUTH_BASE_URL)).rstrip("/")

def api_base_url():
    return str(get_setting("API_BASE_URL", DEFAULT_API_BASE_URL)).rstrip("/")

def auth_timeout():
    # No timeout unless configured: a hanging login keeps the form pending.
    return _get_timeout("AUTH_TIMEOUT", None)

def api_timeout():
    return _get_timeout("API_TIMEOUT", DEFAULT_API_TIMEOUT)

def session_key_prefix():
    return str(get_setting("SESSION_KEY_PREFIX", DEFAULT_SESSION_KEY_PREFIX))
