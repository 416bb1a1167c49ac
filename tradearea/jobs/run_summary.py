"""CLI job to print the trade-area summary for a place."""

import argparse
import json
import logging
from typing import List, Optional

from tradearea.jobs.summary import DEFAULT_RADIUS, build_summary_response

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Summarise stores around a place")
    parser.add_argument("query", help="Free-text place, e.g. '강남역'")
    parser.add_argument(
        "--radius",
        dest="radius",
        default=str(DEFAULT_RADIUS),
        help="Search radius in meters (clamped to 100-1200)",
    )
    parser.add_argument("--debug", dest="debug", action="store_true", help="Include diagnostic fields")
    return parser


def main(argv: Optional[List[str]] = None) -> int:
    logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)s %(name)s - %(message)s")
    args = build_parser().parse_args(argv)

    payload, status = build_summary_response(args.query, radius=args.radius, debug=args.debug)
    print(json.dumps(payload, ensure_ascii=False, indent=2))
    if status != 200:
        logger.error("Request rejected: %s", payload.get("error"))
        return 2
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
