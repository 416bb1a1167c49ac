"""Client utilities for the data.go.kr small-business store registry (sdsc2)."""

import logging
import re
from typing import Any, Dict, List, Optional, Tuple
from urllib.parse import quote

import requests

from tradearea.core.config import DEFAULT_SDSC2_BASE_URL
from tradearea.models import Coordinate, RegistryHit

logger = logging.getLogger(__name__)
_SESSION = requests.Session()

PAGE_SIZE = 1000
SUCCESS_CODE = "00"
_SERVICE_KEY_RE = re.compile(r"(serviceKey=)[^&]*", re.IGNORECASE)


class RegistryError(RuntimeError):
    """Raised when every request variant against the registry failed."""

    def __init__(self, reason: str, status: Optional[int] = None, url: Optional[str] = None) -> None:
        super().__init__(reason)
        self.reason = reason
        self.status = status
        self.url = url


def redact_url(url: Optional[str]) -> Optional[str]:
    if not url:
        return url
    return _SERVICE_KEY_RE.sub(r"\1<redacted>", url)


def _dig(payload: Any, *path: str) -> Any:
    for key in path:
        if not isinstance(payload, dict):
            return None
        payload = payload.get(key)
    return payload


def result_code(payload: Any) -> Optional[str]:
    code = _dig(payload, "response", "header", "resultCode") or _dig(payload, "header", "resultCode")
    return str(code) if code else None


def extract_items(payload: Any) -> List[Dict[str, Any]]:
    """Pull the item list out of whichever envelope the registry answered with."""
    items_raw = None
    for path in (("response", "body", "items"), ("body", "items"), ("items",), ("item",)):
        items_raw = _dig(payload, *path)
        if items_raw is not None:
            break

    if isinstance(items_raw, list):
        return items_raw
    if isinstance(items_raw, dict):
        inner = items_raw.get("item")
        if isinstance(inner, list):
            return inner
        if isinstance(inner, dict):
            return [inner]
    if items_raw not in (None, "", []):
        logger.debug("Unrecognised sdsc2 items shape: %s", str(items_raw)[:200])
    return []


class StoreRegistryClient:
    """Queries stores within a radius, trying the raw key first and then a pre-encoded one."""

    VARIANTS = ("raw", "encoded")

    def __init__(
        self,
        service_key: str,
        base_url: str = DEFAULT_SDSC2_BASE_URL,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = 10,
    ) -> None:
        if not service_key:
            raise ValueError("service_key is required")
        self._service_key = service_key
        self._base_url = base_url
        self._session = session
        self._timeout = timeout

    def __repr__(self) -> str:
        return f"StoreRegistryClient(base_url={self._base_url!r})"

    def build_params(self, coordinate: Coordinate, radius: int, variant: str = "raw") -> Dict[str, Any]:
        key = self._service_key if variant == "raw" else quote(self._service_key, safe="")
        return {
            "serviceKey": key,
            "radius": str(radius),
            "cx": str(coordinate.lng),  # x is longitude
            "cy": str(coordinate.lat),
            "numOfRows": str(PAGE_SIZE),
            "pageNo": "1",
            "_type": "json",
        }

    def build_url(self, coordinate: Coordinate, radius: int, variant: str = "raw") -> str:
        request = requests.Request("GET", self._base_url, params=self.build_params(coordinate, radius, variant))
        return request.prepare().url

    def query(self, coordinate: Coordinate, radius: int) -> RegistryHit:
        last_error = "sdsc2_unknown"
        last_status: Optional[int] = None
        last_url: Optional[str] = None

        for variant in self.VARIANTS:
            url = self.build_url(coordinate, radius, variant)
            last_url = redact_url(url)
            hit, error, status = self._attempt(url, variant)
            if status is not None:
                last_status = status
            if hit is not None:
                return hit
            last_error = error
            logger.warning("sdsc2 %s variant failed: %s (status=%s url=%s)", variant, error, status, last_url)

        raise RegistryError(last_error, status=last_status, url=last_url)

    def _attempt(self, url: str, variant: str) -> Tuple[Optional[RegistryHit], str, Optional[int]]:
        session = self._session or _SESSION
        try:
            response = session.get(url, timeout=self._timeout)
        except requests.RequestException as exc:
            logger.debug("sdsc2 transport error: %s", type(exc).__name__)
            return None, "sdsc2_transport_error", None

        status = response.status_code
        if not 200 <= status < 300:
            return None, f"sdsc2_http_{status}", status

        try:
            payload = response.json()
        except ValueError:
            return None, "sdsc2_bad_json", status

        code = result_code(payload)
        if code and code != SUCCESS_CODE:
            return None, f"sdsc2_code_{code}", status

        items = extract_items(payload)
        logger.info("sdsc2 %s variant returned %d items", variant, len(items))
        return RegistryHit(items=items, variant=variant, status=status, url=redact_url(url)), "", status
