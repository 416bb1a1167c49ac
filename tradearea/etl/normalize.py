"""Utilities for turning registry items into canonical store records."""

import logging
from typing import Any, Iterable, List, Mapping, Optional, Sequence

from tradearea.models import StoreRecord

logger = logging.getLogger(__name__)

# Field names seen across sdsc2 API versions, most specific first.
NAME_ALIASES = ("bizesNm", "bizes_name", "bizesnm")
CATEGORY_ALIASES = ("indsMclsNm", "inds_mcls_nm", "mcls")
ADDRESS_ALIASES = ("rdnmAdr", "lnoAdr", "addr")

NAME_PLACEHOLDER = "(상호명)"
CATEGORY_PLACEHOLDER = "(분류없음)"


def _strip_or_none(value: Any) -> Optional[str]:
    if value is None:
        return None
    value_str = str(value).strip()
    return value_str or None


def first_present(raw: Mapping[str, Any], aliases: Sequence[str]) -> Optional[str]:
    for alias in aliases:
        value = _strip_or_none(raw.get(alias))
        if value:
            return value
    return None


def to_store_record(raw: Any) -> StoreRecord:
    if not isinstance(raw, Mapping):
        logger.debug("Registry item is not a mapping: %r", raw)
        raw = {}

    return StoreRecord(
        name=first_present(raw, NAME_ALIASES) or NAME_PLACEHOLDER,
        cate_mid=first_present(raw, CATEGORY_ALIASES) or CATEGORY_PLACEHOLDER,
        addr=first_present(raw, ADDRESS_ALIASES) or "",
    )


def normalize_records(raws: Iterable[Any]) -> List[StoreRecord]:
    return [to_store_record(raw) for raw in raws or []]
