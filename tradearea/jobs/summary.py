"""Request orchestration: place text -> coordinate -> nearby stores -> summary.

Upstream problems (geocoding, registry, missing credential, unexpected
aggregation errors) never reach the caller as an error status. They end in a
fixed demo payload so that the front-end always has something to render. Only
a missing ``q`` is reported as a client error.
"""

from __future__ import annotations

import copy
import logging
import re
from typing import Any, Dict, Optional, Tuple

from tradearea.core.config import ConfigurationError, Settings, get_settings
from tradearea.etl.aggregate import summarize
from tradearea.etl.normalize import normalize_records
from tradearea.models import RegistryHit
from tradearea.vendors import nominatim
from tradearea.vendors.nominatim import ResolutionError
from tradearea.vendors.sdsc2 import RegistryError, StoreRegistryClient

logger = logging.getLogger(__name__)

DEFAULT_RADIUS = 500
MIN_RADIUS = 100
MAX_RADIUS = 1200
CACHE_CONTROL = "s-maxage=900, stale-while-revalidate=3600"

_LEADING_INT_RE = re.compile(r"^\s*([+-]?[0-9]+)")

_DEMO_PAYLOAD: Dict[str, Any] = {
    "region": {"name": "상권(데모)", "lat": 37.5, "lng": 127.0},
    "kpi": {"total": 820, "pharm": 18, "topShare": "카페·디저트 14.6%"},
    "top": [
        {"name": "카페·디저트", "count": 120},
        {"name": "한식", "count": 98},
        {"name": "양식", "count": 64},
        {"name": "학원", "count": 58},
        {"name": "미용실", "count": 47},
    ],
    # Demo rows use "cate"; live rows use "cateMid".
    "stores": [
        {"name": "온약약국", "cate": "약국", "addr": "서울 강남구 테헤란로 xxx"},
        {"name": "OO커피", "cate": "카페·디저트", "addr": "서울 강남구 역삼로 xxx"},
        {"name": "OO학원", "cate": "학원", "addr": "서울 강남구 논현로 xxx"},
    ],
    "note": "DEMO fallback (키/호출 점검 필요)",
}


class ValidationError(ValueError):
    """Raised for unusable request parameters; the only error reported as 4xx."""


def demo_payload() -> Dict[str, Any]:
    return copy.deepcopy(_DEMO_PAYLOAD)


def parse_query(raw: Any) -> str:
    query = str(raw or "").strip()
    if not query:
        raise ValidationError("q_required")
    return query


def parse_radius(raw: Any) -> int:
    """Leading-integer parse; missing, invalid or zero means the default. Clamped to [100, 1200]."""
    match = _LEADING_INT_RE.match(str(raw if raw is not None else ""))
    radius = int(match.group(1)) if match else 0
    if not radius:
        radius = DEFAULT_RADIUS
    return min(max(radius, MIN_RADIUS), MAX_RADIUS)


def parse_debug(raw: Any) -> bool:
    return str(raw or "") == "1"


def fetch_summary(query: str, radius: int, settings: Settings) -> Tuple[Dict[str, Any], RegistryHit]:
    service_key = settings.require_service_key()

    region = nominatim.geocode(
        query,
        user_agent=settings.geocoder_user_agent,
        base_url=settings.nominatim_base_url,
        timeout=settings.http_timeout,
    )
    logger.info("Resolved %r to %s (%.6f, %.6f)", query, region.name, region.lat, region.lng)

    client = StoreRegistryClient(
        service_key,
        base_url=settings.sdsc2_base_url,
        timeout=settings.http_timeout,
    )
    hit = client.query(region, radius)

    records = normalize_records(hit.items)
    summary = summarize(region, records)
    logger.info("Summarised %d stores within %dm of %s", summary.total, radius, region.name)
    return summary.to_payload(), hit


def fallback_payload(exc: BaseException, debug: bool) -> Dict[str, Any]:
    payload = demo_payload()
    if not debug:
        return payload

    message = str(exc) or type(exc).__name__
    if isinstance(exc, RegistryError):
        message = f"{message} @ {exc.status} {exc.url}"
        payload["_debug"] = {"sdsc2Status": exc.status, "usedUrl": exc.url}
    payload["_error"] = message
    return payload


def build_summary_response(
    q: Any,
    radius: Any = None,
    debug: Any = None,
    settings: Optional[Settings] = None,
) -> Tuple[Dict[str, Any], int]:
    """Run one request end to end and return ``(json_payload, http_status)``."""
    debug_enabled = debug if isinstance(debug, bool) else parse_debug(debug)

    try:
        query = parse_query(q)
    except ValidationError as exc:
        return {"error": str(exc)}, 400
    radius_m = parse_radius(radius)

    try:
        payload, hit = fetch_summary(query, radius_m, settings or get_settings())
    except (ConfigurationError, ResolutionError, RegistryError) as exc:
        logger.warning("Serving demo payload for q=%r: %s", query, exc)
        return fallback_payload(exc, debug_enabled), 200
    except Exception as exc:  # noqa: BLE001
        logger.exception("Unexpected failure for q=%r; serving demo payload", query)
        return fallback_payload(exc, debug_enabled), 200

    if debug_enabled:
        payload["_debug"] = {
            "sdsc2Status": hit.status,
            "usedUrl": hit.url,
            "variant": hit.variant,
            "rawCount": len(hit.items),
        }
    return payload, 200

