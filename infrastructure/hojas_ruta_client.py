import logging
from typing import Any, Dict, List, Optional

import requests

log = logging.getLogger(__name__)


class HojasRutaApiError(Exception):
    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class HojasRutaClient:
    """Routing-slip API client. Every request carries the session token as a bearer credential."""

    def __init__(self, base_url: str, token: str, timeout: Optional[float] = 15, http: Optional[requests.Session] = None):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.http = http if http is not None else requests.Session()
        self.http.headers.update({"Authorization": f"Bearer {token}"})

    def _get(self, path: str, params: Optional[Dict[str, Any]] = None) -> Any:
        url = f"{self.base_url}{path}"
        try:
            resp = self.http.get(url, params=params, timeout=self.timeout)
        except requests.RequestException as e:
            log.error(f"❌ Network error on GET {path}: {e.__class__.__name__}")
            raise HojasRutaApiError("network error") from e

        if resp.status_code != 200:
            log.error(f"❌ GET {path} failed: {resp.status_code}")
            raise HojasRutaApiError(f"unexpected status {resp.status_code}", status_code=resp.status_code)
        try:
            return resp.json()
        except ValueError as e:
            raise HojasRutaApiError("response is not JSON", status_code=resp.status_code) from e

    def list_hojas(self, query: str = "") -> List[Dict[str, Any]]:
        query = (query or "").strip()
        data = self._get("/api/hojas-ruta", params={"query": query} if query else {})
        if not isinstance(data, list):
            raise HojasRutaApiError("expected a list of hojas de ruta")
        log.info(f"Loaded {len(data)} hojas de ruta (query={query!r})")
        return data

    def get_hoja(self, hoja_id) -> Dict[str, Any]:
        data = self._get(f"/api/hojas-ruta/{hoja_id}")
        if isinstance(data, dict):
            payload = data.get("hoja") or data.get("data") or data
        else:
            payload = data
        if not isinstance(payload, dict) or not payload:
            raise HojasRutaApiError("empty hoja de ruta payload")
        return payload
