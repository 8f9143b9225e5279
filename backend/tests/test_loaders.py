from __future__ import annotations

import json
from pathlib import Path

import pytest

from layers.loaders import features_from_geojson, load_geojson_features
from layers.types import (
    Layer,
    LineFeature,
    PointFeature,
    PolygonFeature,
    geometry_family,
)
from styling.popup import select_popup_content


def _fc(*features):
    return {"type": "FeatureCollection", "features": list(features)}


def _feature(geom, props=None, fid=None):
    out = {"type": "Feature", "geometry": geom, "properties": props or {}}
    if fid is not None:
        out["id"] = fid
    return out


def test_each_geometry_type_maps_to_a_family():
    feats = features_from_geojson(
        _fc(
            _feature({"type": "Point", "coordinates": [1, 2]}, fid="p"),
            _feature({"type": "LineString", "coordinates": [[0, 0], [1, 1]]}, fid="l"),
            _feature(
                {"type": "Polygon", "coordinates": [[[0, 0], [1, 0], [1, 1], [0, 0]]]},
                fid="a",
            ),
        )
    )
    assert [type(f) for f in feats] == [PointFeature, LineFeature, PolygonFeature]
    assert [geometry_family(f) for f in feats] == ["point", "line", "polygon"]
    assert feats[0].lon == 1.0 and feats[0].lat == 2.0


def test_multi_geometries_split_into_parts_sharing_props():
    props = {"AREA_NA13": "Ward"}
    feats = features_from_geojson(
        _fc(
            _feature({"type": "MultiPoint", "coordinates": [[0, 0], [1, 1]]}, props, fid="mp"),
            _feature(
                {"type": "MultiPolygon", "coordinates": [
                    [[[0, 0], [1, 0], [1, 1], [0, 0]]],
                    [[[2, 2], [3, 2], [3, 3], [2, 2]]],
                ]},
                props,
                fid="mpoly",
            ),
        )
    )
    assert [f.id for f in feats] == ["mp-0", "mp-1", "mpoly-0", "mpoly-1"]
    assert all(f.props == props for f in feats)


def test_skips_empty_and_unsupported_geometries():
    feats = features_from_geojson(
        _fc(
            _feature({"type": "Point", "coordinates": []}),
            _feature({"type": "GeometryCollection", "geometries": []}),
            _feature({"type": "LineString", "coordinates": [[0, 0]]}),
            {"type": "Feature", "geometry": None, "properties": {}},
            _feature({"type": "Point", "coordinates": [5, 6]}),
        )
    )
    # Fallback ids use the feature's position in the collection.
    assert [f.id for f in feats] == ["feature-4"]


def test_load_geojson_rejects_non_feature_collections(tmp_path: Path):
    p = tmp_path / "bad.geojson"
    p.write_text(json.dumps({"type": "Feature"}), encoding="utf-8")
    with pytest.raises(ValueError):
        load_geojson_features(p)


def test_load_shipped_ward_polygons():
    root = Path(__file__).resolve().parents[2]
    feats = load_geojson_features(root / "data" / "scarborough" / "percent-renters_poly.geojson")
    assert sorted(f.id for f in feats) == ["ward-21-0", "ward-21-1", "ward-24"]


def test_repeated_and_colliding_ids_stay_unique():
    feats = features_from_geojson(
        _fc(
            _feature({"type": "Point", "coordinates": [0, 0]}, {"name": "First"}, fid=7),
            _feature({"type": "Point", "coordinates": [1, 1]}, {"name": "Second"}, fid=7),
            _feature({"type": "Point", "coordinates": [2, 2]}, {"name": "Third"}),
            _feature({"type": "Point", "coordinates": [3, 3]}, {"name": "Fourth"}, fid="feature-2"),
        )
    )
    assert [f.id for f in feats] == ["7", "7-1", "feature-2", "feature-2-3"]

    layer = Layer(id="points", features=feats)
    assert [select_popup_content(layer.get(f.id).props) for f in feats] == [
        "First",
        "Second",
        "Third",
        "Fourth",
    ]
