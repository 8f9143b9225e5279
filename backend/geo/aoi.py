from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class BBox:
    """
    WGS84 bounding box in lon/lat degrees.

    Convention used throughout this repo:
    - minLon, minLat, maxLon, maxLat
    """

    min_lon: float
    min_lat: float
    max_lon: float
    max_lat: float

    def normalized(self) -> "BBox":
        min_lon = min(self.min_lon, self.max_lon)
        max_lon = max(self.min_lon, self.max_lon)
        min_lat = min(self.min_lat, self.max_lat)
        max_lat = max(self.min_lat, self.max_lat)
        return BBox(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)

    def extend(self, other: "BBox") -> "BBox":
        a = self.normalized()
        b = other.normalized()
        return BBox(
            min_lon=min(a.min_lon, b.min_lon),
            min_lat=min(a.min_lat, b.min_lat),
            max_lon=max(a.max_lon, b.max_lon),
            max_lat=max(a.max_lat, b.max_lat),
        )

    def to_payload(self) -> dict[str, float]:
        b = self.normalized()
        return {
            "minLon": b.min_lon,
            "minLat": b.min_lat,
            "maxLon": b.max_lon,
            "maxLat": b.max_lat,
        }
