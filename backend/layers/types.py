from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal, TypeAlias, Union


GeometryFamily = Literal["point", "line", "polygon"]


@dataclass(frozen=True)
class PointFeature:
    id: str
    lon: float
    lat: float
    props: dict[str, Any]


@dataclass(frozen=True)
class LineFeature:
    id: str
    coords: list[tuple[float, float]]  # [(lon, lat), ...]
    props: dict[str, Any]


@dataclass(frozen=True)
class PolygonFeature:
    id: str
    rings: list[
        list[tuple[float, float]]
    ]  # [outer_ring, ...]; each ring is [(lon, lat), ...]
    props: dict[str, Any]


LayerFeature: TypeAlias = Union[PointFeature, LineFeature, PolygonFeature]


def geometry_family(feature: LayerFeature) -> GeometryFamily:
    if isinstance(feature, PolygonFeature):
        return "polygon"
    if isinstance(feature, LineFeature):
        return "line"
    return "point"


@dataclass(frozen=True)
class Layer:
    """
    Features of one configured layer, as delivered by its data source.

    Styling is not stored here: it is derived per feature from the layer's
    descriptor every time the map is rendered.
    """

    id: str
    features: list[LayerFeature]

    def get(self, feature_id: str) -> LayerFeature | None:
        fid = (feature_id or "").strip()
        for f in self.features:
            if f.id == fid:
                return f
        return None
