from tradearea.etl import aggregate
from tradearea.models import Coordinate, StoreRecord

REGION = Coordinate(name="강남역", lat=37.498, lng=127.028)


def _records(*pairs):
    return [StoreRecord(name=name, cate_mid=cate) for name, cate in pairs]


def test_count_pharmacies_matches_name_or_category():
    records = _records(("온약약국", "의약·의료"), ("OO", "약국"), ("OO커피", "카페"))
    assert aggregate.count_pharmacies(records) == 2


def test_rank_categories_keeps_first_seen_order_on_ties():
    records = _records(
        ("a", "한식"), ("b", "카페"), ("c", "카페"), ("d", "학원"), ("e", "한식"), ("f", "양식"), ("g", "미용"), ("h", "기타")
    )
    top = aggregate.rank_categories(records)

    assert [bucket.name for bucket in top] == ["한식", "카페", "학원", "양식", "미용"]
    assert [bucket.count for bucket in top] == [2, 2, 1, 1, 1]


def test_format_top_share():
    top = aggregate.rank_categories(_records(("a", "카페"), ("b", "카페"), ("c", "한식")))
    assert aggregate.format_top_share(top, 3) == "카페 66.7%"
    assert aggregate.format_top_share([], 0) == "-"
    assert aggregate.format_top_share(top, 0) == "-"


def test_summarize_empty():
    summary = aggregate.summarize(REGION, [])
    assert summary.total == 0
    assert summary.pharm == 0
    assert summary.top_share == "-"
    assert summary.top == []
    assert summary.stores == []


def test_summarize_truncates_sample_and_builds_payload():
    records = [StoreRecord(name=f"store {i}", cate_mid="카페" if i % 3 else "약국") for i in range(75)]
    summary = aggregate.summarize(REGION, records)

    assert summary.total == 75
    assert summary.pharm == 25
    assert summary.pharm <= summary.total
    assert len(summary.stores) == 60
    assert summary.stores == records[:60]
    assert summary.top_share == "카페 66.7%"

    payload = summary.to_payload()
    assert payload["region"] == {"name": "강남역", "lat": 37.498, "lng": 127.028}
    assert payload["kpi"] == {"total": 75, "pharm": 25, "topShare": "카페 66.7%"}
    assert payload["top"][0] == {"name": "카페", "count": 50}
    assert payload["stores"][0] == {"name": "store 0", "cateMid": "약국", "addr": ""}


def test_format_top_share_rounds_ties_up():
    records = _records(("a", "카페"), *[(f"s{i}", f"cat{i}") for i in range(15)])
    summary = aggregate.summarize(REGION, records)
    assert summary.top_share == "카페 6.3%"

    five_of_sixteen = [aggregate.CategoryBucket(name="한식", count=5)]
    assert aggregate.format_top_share(five_of_sixteen, 16) == "한식 31.3%"


def test_format_top_share_plain_value():
    top = [aggregate.CategoryBucket(name="카페·디저트", count=120)]
    assert aggregate.format_top_share(top, 820) == "카페·디저트 14.6%"
    assert aggregate.format_top_share(top, 120) == "카페·디저트 100.0%"
