from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from layers.types import LayerFeature, LineFeature, PointFeature, PolygonFeature


def read_feature_collection(path: Path) -> dict[str, Any]:
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict) or data.get("type") != "FeatureCollection":
        raise ValueError(f"Not a GeoJSON FeatureCollection: {path}")
    return data


def load_geojson_features(path: Path) -> list[LayerFeature]:
    """
    Load every feature of a GeoJSON FeatureCollection.

    Multi-part geometries become one feature per part (`<id>-<n>`), all sharing the
    same properties. Feature ids are unique within the result: an id already taken
    gets `-<position>` appended. Features without coordinates or with unsupported
    geometry types (e.g. GeometryCollection) are skipped.
    """
    return features_from_geojson(read_feature_collection(path))


def features_from_geojson(data: dict[str, Any]) -> list[LayerFeature]:
    features = data.get("features") or []

    out: list[LayerFeature] = []
    used: set[str] = set()
    for i, feature in enumerate(features):
        geom = (feature or {}).get("geometry") or {}
        props = (feature or {}).get("properties") or {}
        gtype = geom.get("type")
        coords = geom.get("coordinates")
        if not coords:
            continue

        fid = str((feature or {}).get("id") or props.get("id") or f"feature-{i}")

        if gtype == "Point":
            point = _to_point(coords)
            if point is not None:
                out.append(
                    PointFeature(
                        id=_claim(fid, i, used), lon=point[0], lat=point[1], props=props
                    )
                )
        elif gtype == "MultiPoint":
            for j, p in enumerate(coords):
                point = _to_point(p)
                if point is not None:
                    out.append(
                        PointFeature(
                            id=_claim(f"{fid}-{j}", i, used),
                            lon=point[0],
                            lat=point[1],
                            props=props,
                        )
                    )
        elif gtype == "LineString":
            line = _to_ring(coords)
            if len(line) >= 2:
                out.append(LineFeature(id=_claim(fid, i, used), coords=line, props=props))
        elif gtype == "MultiLineString":
            for j, part in enumerate(coords):
                line = _to_ring(part)
                if len(line) >= 2:
                    out.append(
                        LineFeature(id=_claim(f"{fid}-{j}", i, used), coords=line, props=props)
                    )
        elif gtype == "Polygon":
            rings = [_to_ring(r) for r in coords]
            if rings:
                out.append(
                    PolygonFeature(id=_claim(fid, i, used), rings=rings, props=props)
                )
        elif gtype == "MultiPolygon":
            for j, poly in enumerate(coords):
                rings = [_to_ring(r) for r in poly]
                if rings:
                    out.append(
                        PolygonFeature(id=_claim(f"{fid}-{j}", i, used), rings=rings, props=props)
                    )

    return out


def _claim(fid: str, index: int, used: set[str]) -> str:
    # Ids must be unique within a layer; a repeat gets the feature's position appended.
    out = fid
    n = 0
    while out in used:
        n += 1
        out = f"{fid}-{index}" if n == 1 else f"{fid}-{index}-{n}"
    used.add(out)
    return out


def _to_point(p: Any) -> tuple[float, float] | None:
    if not p or len(p) < 2:
        return None
    return float(p[0]), float(p[1])


def _to_ring(ring: Any) -> list[tuple[float, float]]:
    out: list[tuple[float, float]] = []
    for p in ring or []:
        point = _to_point(p)
        if point is not None:
            out.append(point)
    return out
