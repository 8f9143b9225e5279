from __future__ import annotations

from typing import Any

from layers.types import LineFeature, PointFeature, PolygonFeature
from scenarios.types import ScenarioConfig, ScenarioLayer


def layer_cfg(layer_id: str = "layer", **kw: Any) -> ScenarioLayer:
    data: dict[str, Any] = {
        "id": layer_id,
        "title": kw.pop("title", layer_id.title()),
        "source": {"type": "geojson", "path": f"data/{layer_id}.geojson"},
    }
    data.update(kw)
    return ScenarioLayer.model_validate(data)


def scenario_cfg(layers: list[ScenarioLayer], *, zoom: float = 12.0, **kw: Any) -> ScenarioConfig:
    data: dict[str, Any] = {
        "id": "test",
        "title": "Test map",
        "defaultView": {"center": {"lat": 43.765, "lon": -79.205}, "zoom": zoom},
        "layers": [layer.model_dump() for layer in layers],
    }
    data.update(kw)
    return ScenarioConfig.model_validate(data)


def square(fid: str, props: dict[str, Any], x: float = -79.2, y: float = 43.76) -> PolygonFeature:
    ring = [(x, y), (x + 0.01, y), (x + 0.01, y + 0.01), (x, y + 0.01), (x, y)]
    return PolygonFeature(id=fid, rings=[ring], props=props)


def point(fid: str, props: dict[str, Any], lon: float = -79.2, lat: float = 43.76) -> PointFeature:
    return PointFeature(id=fid, lon=lon, lat=lat, props=props)


def line(fid: str, props: dict[str, Any]) -> LineFeature:
    return LineFeature(id=fid, coords=[(-79.2, 43.76), (-79.19, 43.77)], props=props)


SHELTER = layer_cfg("rir", encoding="shelter_cost", valueField="pct_above_30", pane="rirPane")
WARDS = layer_cfg("wards", encoding="boundary", valueField="AREA_NA13")
PARTY = layer_cfg(
    "ward-points",
    encoding="party_points",
    valueField="mpp_renter_pct",
    partyField="offices-all_Party",
    minZoom=12,
)
PLAIN = layer_cfg("plain")
