"""Summary statistics over normalized store records."""

from decimal import ROUND_HALF_UP, Decimal
from typing import Dict, List, Sequence

from tradearea.models import CategoryBucket, Coordinate, StoreRecord, Summary

PHARMACY_KEYWORD = "약국"
TOP_CATEGORY_LIMIT = 5
SAMPLE_LIMIT = 60


def count_pharmacies(records: Sequence[StoreRecord]) -> int:
    return sum(
        1 for record in records if PHARMACY_KEYWORD in record.cate_mid or PHARMACY_KEYWORD in record.name
    )


def group_by_category(records: Sequence[StoreRecord]) -> Dict[str, int]:
    """Count records per category; keys keep first-appearance order."""
    counts: Dict[str, int] = {}
    for record in records:
        counts[record.cate_mid] = counts.get(record.cate_mid, 0) + 1
    return counts


def rank_categories(records: Sequence[StoreRecord], limit: int = TOP_CATEGORY_LIMIT) -> List[CategoryBucket]:
    buckets = [CategoryBucket(name=name, count=count) for name, count in group_by_category(records).items()]
    # sorted() is stable, so equal counts stay in first-appearance order.
    buckets = sorted(buckets, key=lambda bucket: bucket.count, reverse=True)
    return buckets[:limit]


def format_top_share(top: Sequence[CategoryBucket], total: int) -> str:
    if not top or not total:
        return "-"
    leader = top[0]
    # Round half up on the exact float value.
    share = Decimal(leader.count / total * 100).quantize(Decimal("0.1"), rounding=ROUND_HALF_UP)
    return f"{leader.name} {share}%"


def summarize(region: Coordinate, records: Sequence[StoreRecord]) -> Summary:
    total = len(records)
    top = rank_categories(records)
    return Summary(
        region=region,
        total=total,
        pharm=count_pharmacies(records),
        top_share=format_top_share(top, total),
        top=top,
        stores=list(records[:SAMPLE_LIMIT]),
    )
