import logging
from typing import Optional

import requests

from use_cases.session_models import InvalidUserPayloadError, Session, user_from_payload

log = logging.getLogger(__name__)


class CredentialExchangeError(Exception):
    def __init__(self, reason: str, status_code: Optional[int] = None):
        super().__init__(reason)
        self.reason = reason
        self.status_code = status_code


class AuthApiClient:
    """Exchanges username/password for a Session against the external auth service."""

    def __init__(self, base_url: str, timeout: Optional[float] = None, http: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        # A persistent requests.Session keeps the cookies the auth service sets.
        self.http = http if http is not None else requests.Session()

    def exchange(self, username: str, password: str) -> Session:
        url = f"{self.base_url}/login"
        try:
            response = self.http.post(
                url,
                json={"username": username, "password": password},
                timeout=self.timeout,
            )
        except requests.RequestException as e:
            raise CredentialExchangeError(f"network error: {e.__class__.__name__}") from e

        if not 200 <= response.status_code < 300:
            raise CredentialExchangeError("login rejected", status_code=response.status_code)

        try:
            body = response.json()
        except ValueError as e:
            raise CredentialExchangeError("response is not JSON", status_code=response.status_code) from e

        if not isinstance(body, dict):
            raise CredentialExchangeError("response is not an object", status_code=response.status_code)

        token = body.get("token")
        if not isinstance(token, str) or not token:
            raise CredentialExchangeError("response has no token", status_code=response.status_code)

        try:
            user = user_from_payload(body.get("usuario"))
        except InvalidUserPayloadError as e:
            raise CredentialExchangeError(f"invalid usuario: {e}", status_code=response.status_code) from e

        return Session(token=token, user=user)
