"""Core data models shared by the trade-area summary pipeline."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, List


@dataclass(frozen=True, slots=True)
class Coordinate:
    """Resolved place: display name plus WGS84 latitude/longitude."""

    name: str
    lat: float
    lng: float

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "lat": self.lat, "lng": self.lng}


@dataclass(frozen=True, slots=True)
class StoreRecord:
    """Canonical store row derived from one registry item."""

    name: str
    cate_mid: str
    addr: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "cateMid": self.cate_mid, "addr": self.addr}


@dataclass(frozen=True, slots=True)
class CategoryBucket:
    name: str
    count: int

    def to_dict(self) -> Dict[str, Any]:
        return {"name": self.name, "count": self.count}


@dataclass(frozen=True, slots=True)
class Summary:
    """Aggregated view of the stores around a region."""

    region: Coordinate
    total: int
    pharm: int
    top_share: str
    top: List[CategoryBucket] = field(default_factory=list)
    stores: List[StoreRecord] = field(default_factory=list)

    def to_payload(self) -> Dict[str, Any]:
        return {
            "region": self.region.to_dict(),
            "kpi": {"total": self.total, "pharm": self.pharm, "topShare": self.top_share},
            "top": [bucket.to_dict() for bucket in self.top],
            "stores": [store.to_dict() for store in self.stores],
        }


@dataclass(slots=True)
class RegistryHit:
    """Successful registry call. ``url`` is always the redacted request URL."""

    items: List[Dict[str, Any]]
    variant: str
    status: int
    url: str
