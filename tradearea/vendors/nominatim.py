"""Client utilities for the Nominatim geocoding API."""

import logging
from typing import Any, Dict, Optional

import requests

from tradearea.core.config import DEFAULT_NOMINATIM_BASE_URL, DEFAULT_USER_AGENT
from tradearea.models import Coordinate

logger = logging.getLogger(__name__)
_SESSION = requests.Session()


class ResolutionError(RuntimeError):
    """Raised when a place query cannot be turned into a coordinate."""


def build_params(query: str) -> Dict[str, Any]:
    return {"q": query, "format": "json", "limit": 1, "addressdetails": 1}


def geocode(
    query: str,
    user_agent: str = DEFAULT_USER_AGENT,
    base_url: str = DEFAULT_NOMINATIM_BASE_URL,
    timeout: Optional[float] = 10,
) -> Coordinate:
    """Resolve ``query`` to the top Nominatim match."""
    query = (query or "").strip()
    if not query:
        raise ValueError("Query must be provided for geocoding.")

    try:
        response = _SESSION.get(
            base_url,
            params=build_params(query),
            headers={"User-Agent": user_agent},
            timeout=timeout,
        )
    except requests.RequestException as exc:
        logger.warning("geocode transport failure for query=%s: %s", query, exc)
        raise ResolutionError("geocode_transport_error") from exc

    if not 200 <= response.status_code < 300:
        logger.warning("geocode failed: status=%s query=%s", response.status_code, query)
        raise ResolutionError(f"geocode_http_{response.status_code}")

    try:
        results = response.json()
    except ValueError as exc:
        raise ResolutionError("geocode_bad_json") from exc

    if not isinstance(results, list) or not results:
        logger.info("geocode returned no match for query=%s", query)
        raise ResolutionError("geocode_no_result")

    top = results[0]
    try:
        return Coordinate(name=str(top.get("display_name") or query), lat=float(top["lat"]), lng=float(top["lon"]))
    except (AttributeError, KeyError, TypeError, ValueError) as exc:
        raise ResolutionError("geocode_bad_result") from exc
