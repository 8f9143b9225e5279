from __future__ import annotations

from fastapi.testclient import TestClient

from layers.errors import LayerLoadError
from main import create_app
from viewer.loading import GeoJSONFileSource


class FailingWardsSource(GeoJSONFileSource):
    async def fetch(self, layer):
        if layer.id == "wards":
            raise LayerLoadError(layer.id, "HTTP 500")
        return await super().fetch(layer)


def _client(**kw) -> TestClient:
    return TestClient(create_app("scarborough_renters", **kw))


def test_scenario_lists_layers_after_load():
    with _client() as client:
        resp = client.get("/scenario")
        assert resp.status_code == 200
        data = resp.json()
        assert data["id"] == "scarborough_renters"
        assert [l["id"] for l in data["layers"]] == ["ward-points", "wards", "rir"]
        assert all(l["loaded"] for l in data["layers"])


def test_legend_endpoint():
    with _client() as client:
        data = client.get("/legend").json()
        assert data["title"] == "Renter Housing Cost Burden"
        sections = {s["layerId"]: s for s in data["sections"]}
        assert list(sections) == ["ward-points", "wards", "rir"]
        assert [r["color"] for r in sections["rir"]["rows"]] == [
            "#e8e5f0",
            "#beacd3",
            "#9373b7",
            "#69399a",
            "#3f007d",
        ]
        assert sections["wards"]["rows"] == []


def test_plot_endpoint_returns_plot_payload():
    with _client() as client:
        resp = client.get("/plot")
        assert resp.status_code == 200
        data = resp.json()
        assert set(data.keys()) == {"data", "layout"}
        names = {t.get("name") for t in data["data"]}
        assert "MPP Parties" in names
        assert "Renter Households Spending 30%+ on Shelter" in names


def test_visibility_toggle_is_idempotent():
    with _client() as client:
        first = client.post("/layers/rir/visibility", json={"enabled": False}).json()
        assert first["shown"] is False
        assert first["signals"] == [{"layerId": "rir", "shown": False}]

        second = client.post("/layers/rir/visibility", json={"enabled": False}).json()
        assert second["signals"] == []


def test_zoom_gate_via_view_endpoint():
    with _client() as client:
        out = client.post("/view", json={"zoom": 11}).json()
        assert out["signals"] == [{"layerId": "ward-points", "shown": False}]
        assert out["visibility"]["ward-points"]["shown"] is False

        # Clamped to the map's minimum zoom.
        out = client.post("/view", json={"zoom": 4}).json()
        assert out["zoom"] == 11
        assert out["signals"] == []

        out = client.post("/view/reset").json()
        assert out["zoom"] == 12
        assert out["signals"] == [{"layerId": "ward-points", "shown": True}]


def test_popup_endpoint():
    with _client() as client:
        resp = client.get("/layers/rir/features/ct-0002/popup")
        assert resp.status_code == 200
        assert resp.json()["text"] == (
            "Tract 0002\nRenter households spending ≥30% of income: 45.0%"
        )
        resp = client.get("/layers/ward-points/features/ward-25/popup")
        assert resp.json()["text"] == "Scarborough-Rouge Park"


def test_unknown_layer_is_404():
    with _client() as client:
        assert client.post("/layers/nope/visibility", json={"enabled": True}).status_code == 404
        assert client.get("/layers/rir/features/nope/popup").status_code == 404


def test_failed_layer_is_left_out():
    with _client(source=FailingWardsSource()) as client:
        layers = {l["id"]: l for l in client.get("/scenario").json()["layers"]}
        assert layers["wards"]["loaded"] is False
        assert layers["wards"]["error"] == "HTTP 500"

        sections = client.get("/legend").json()["sections"]
        assert [s["layerId"] for s in sections] == ["ward-points", "rir"]
        assert client.post("/layers/wards/visibility", json={"enabled": True}).status_code == 404
