"""HTTP entrypoint serving trade-area summaries (Cloud Run friendly)."""

from __future__ import annotations

import logging
import os
from datetime import datetime, timezone
from typing import Any

from flask import Flask, jsonify, request

from tradearea.core.config import get_settings
from tradearea.jobs.summary import CACHE_CONTROL, build_summary_response

# ---------- Logging ----------
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s %(levelname)s %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

# ---------- App ----------
app = Flask(__name__)
app.json.ensure_ascii = False

# ---------- Routes ----------


@app.get("/")
def root() -> Any:
    """Simple root to avoid 404 on GET /"""
    return "ok", 200


@app.get("/healthz")
def healthcheck() -> Any:
    return (
        jsonify(
            {
                "status": "ok",
                "revision": os.getenv("K_REVISION", "unknown"),
                "region": os.getenv("X_GOOGLE_RUNTIMEREGION", "unknown"),
            }
        ),
        200,
    )


@app.get("/api/check")
def check() -> Any:
    """Report whether the registry key is configured. The value itself is never exposed."""
    now = datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    return jsonify({"hasKey": get_settings().has_service_key, "now": now}), 200


@app.get("/api/poi")
def poi() -> Any:
    """
    Summarise stores around a place.
    Query params: q (required), radius (meters, 100-1200, default 500), debug=1
    """
    payload, status = build_summary_response(
        request.args.get("q"),
        radius=request.args.get("radius"),
        debug=request.args.get("debug"),
    )
    response = jsonify(payload)
    response.status_code = status
    response.headers["Cache-Control"] = CACHE_CONTROL
    return response


def main() -> None:
    port = get_settings().port
    logger.info("[BOOT] Binding on 0.0.0.0:%d", port)
    app.run(host="0.0.0.0", port=port)


if __name__ == "__main__":
    main()
