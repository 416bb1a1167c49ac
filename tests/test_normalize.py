from tradearea.etl import normalize


def test_to_store_record_prefers_first_alias():
    record = normalize.to_store_record(
        {
            "bizesNm": "  온약약국 ",
            "bizes_name": "ignored",
            "indsMclsNm": "의약·의료",
            "rdnmAdr": "서울 강남구 테헤란로 1",
            "lnoAdr": "서울 강남구 역삼동 1",
        }
    )
    assert record.name == "온약약국"
    assert record.cate_mid == "의약·의료"
    assert record.addr == "서울 강남구 테헤란로 1"


def test_to_store_record_falls_through_empty_aliases():
    record = normalize.to_store_record(
        {"bizesNm": "   ", "bizes_name": None, "bizesnm": "OO커피", "mcls": "카페", "rdnmAdr": "", "addr": "역삼로"}
    )
    assert record.name == "OO커피"
    assert record.cate_mid == "카페"
    assert record.addr == "역삼로"


def test_to_store_record_uses_placeholders():
    record = normalize.to_store_record({})
    assert record.name == normalize.NAME_PLACEHOLDER
    assert record.cate_mid == normalize.CATEGORY_PLACEHOLDER
    assert record.addr == ""


def test_to_store_record_coerces_non_strings():
    record = normalize.to_store_record({"bizesNm": 1234, "indsMclsNm": ["x"], "addr": 0})
    assert record.name == "1234"
    assert record.cate_mid == "['x']"
    assert record.addr == "0"


def test_to_store_record_tolerates_non_mapping():
    record = normalize.to_store_record("garbage")
    assert record.name == normalize.NAME_PLACEHOLDER
    assert record.cate_mid == normalize.CATEGORY_PLACEHOLDER


def test_normalize_records_never_yields_empty_name_or_category():
    raws = [{}, {"bizesNm": ""}, None, {"indsMclsNm": " "}, {"bizesNm": "A", "indsMclsNm": "B"}]
    records = normalize.normalize_records(raws)
    assert len(records) == len(raws)
    assert all(record.name and record.cate_mid for record in records)
    assert normalize.normalize_records(None) == []
