"""
Logging and optional Sentry setup for the dashboard.
Everything is driven by environment variables; call setup_observability()
once, before the first page renders.
"""

import os
import logging
import re
from typing import Any, Dict, Optional

log = logging.getLogger(__name__)

SENSITIVE_KEYS = {"password", "token", "authorization", "cookie"}

SENSITIVE_PATTERNS = [
    re.compile(r"(Bearer\s+)[A-Za-z0-9_\-\.=]+", re.IGNORECASE),
    re.compile(r"eyJ[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+\.[A-Za-z0-9_\-]+"),  # JWT
]


def mask_token(token: Optional[str]) -> str:
    """Short, log-safe form of a bearer token."""
    if not token:
        return "<none>"
    return f"{token[:6]}…({len(token)})"


def _mask_string(val: str) -> str:
    for pattern in SENSITIVE_PATTERNS:
        if pattern.groups:
            val = pattern.sub(r"\1[REDACTED]", val)
        else:
            val = pattern.sub("[REDACTED]", val)
    return val


def scrub(obj: Any) -> Any:
    if isinstance(obj, dict):
        return {
            k: "[REDACTED]" if str(k).lower() in SENSITIVE_KEYS else scrub(v)
            for k, v in obj.items()
        }
    if isinstance(obj, list):
        return [scrub(i) for i in obj]
    if isinstance(obj, str):
        return _mask_string(obj)
    return obj


def _scrub_sensitive_data(event: Dict[str, Any], hint: Dict[str, Any]) -> Dict[str, Any]:
    """Sentry before_send hook: drop credentials from frame locals and request data."""
    for exc in event.get("exception", {}).get("values", []) or []:
        for frame in (exc.get("stacktrace") or {}).get("frames", []) or []:
            if "vars" in frame:
                frame["vars"] = scrub(frame["vars"])
    if "request" in event:
        event["request"] = scrub(event["request"])
    if "breadcrumbs" in event:
        event["breadcrumbs"] = scrub(event["breadcrumbs"])
    return event


def setup_observability() -> None:
    log_level_str = os.getenv("LOG_LEVEL", "INFO").upper()
    log_level = getattr(logging, log_level_str, logging.INFO)

    logging.basicConfig(
        level=log_level,
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S"
    )

    sentry_dsn = os.getenv("SENTRY_DSN")
    if sentry_dsn:
        try:
            import sentry_sdk
            sentry_env = os.getenv("SENTRY_ENV", "development")
            sentry_sdk.init(
                dsn=sentry_dsn,
                environment=sentry_env,
                traces_sample_rate=float(os.getenv("SENTRY_TRACES_SAMPLE_RATE", "0.2")),
                send_default_pii=False,
                before_send=_scrub_sensitive_data
            )
            log.info(f"Sentry SDK initialized (env: {sentry_env})")
        except ImportError:
            log.warning("SENTRY_DSN provided but sentry-sdk is not installed. Skipping Sentry init.")
    else:
        log.info("SENTRY_DSN not provided. Running without Sentry.")

    logging.getLogger("urllib3").setLevel(logging.WARNING)
    logging.getLogger("requests").setLevel(logging.WARNING)
