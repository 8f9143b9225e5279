from __future__ import annotations

from typing import Iterable

from shapely.geometry import GeometryCollection, LineString, Point, Polygon
from shapely.geometry.base import BaseGeometry

from geo.aoi import BBox
from layers.types import LayerFeature, LineFeature, PointFeature, PolygonFeature


def to_shape(feature: LayerFeature) -> BaseGeometry | None:
    if isinstance(feature, PointFeature):
        return Point(feature.lon, feature.lat)
    if isinstance(feature, LineFeature):
        if len(feature.coords) < 2:
            return None
        return LineString(feature.coords)
    if isinstance(feature, PolygonFeature):
        if not feature.rings or len(feature.rings[0]) < 3:
            return None
        return Polygon(feature.rings[0], holes=[r for r in feature.rings[1:] if len(r) >= 3])
    return None


def features_bbox(features: Iterable[LayerFeature]) -> BBox | None:
    shapes = [s for s in (to_shape(f) for f in features) if s is not None and not s.is_empty]
    if not shapes:
        return None
    min_lon, min_lat, max_lon, max_lat = GeometryCollection(shapes).bounds
    return BBox(min_lon=min_lon, min_lat=min_lat, max_lon=max_lon, max_lat=max_lat)


def anchor_point(feature: LayerFeature) -> tuple[float, float] | None:
    """
    (lon, lat) where a feature's popup is anchored.

    Points anchor on themselves; lines and polygons on a point guaranteed to lie on
    or inside the geometry.
    """
    if isinstance(feature, PointFeature):
        return feature.lon, feature.lat
    shape = to_shape(feature)
    if shape is None or shape.is_empty:
        return None
    if not shape.is_valid:
        shape = shape.buffer(0)
        if shape.is_empty:
            return None
    p = shape.representative_point()
    return float(p.x), float(p.y)
