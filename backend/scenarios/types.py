from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field


class ScenarioCenter(BaseModel):
    lat: float
    lon: float


class ScenarioDefaultView(BaseModel):
    center: ScenarioCenter
    zoom: float = Field(ge=0.0, le=24.0)


LayerSourceType = Literal["geojson"]

# Which encoding rule set classifies a layer's features. Layers without one
# are styled by geometry family only.
LayerEncoding = Literal["shelter_cost", "boundary", "party_points"]

# Leaflet's overlay pane sits at z-index 400; layers without a pane render there.
DEFAULT_PANE_Z = 400


class ScenarioPane(BaseModel):
    name: str
    zIndex: int


class ScenarioLayerSource(BaseModel):
    model_config = ConfigDict(frozen=True)

    type: LayerSourceType = "geojson"
    path: str


class ScenarioLayer(BaseModel):
    """
    A configured thematic layer.

    Immutable after load; the encoding role (not the id) decides which
    classification rules apply.
    """

    model_config = ConfigDict(frozen=True)

    id: str
    title: str
    source: ScenarioLayerSource
    valueField: str | None = None
    partyField: str | None = None
    encoding: LayerEncoding | None = None
    pane: str | None = None
    # Layer is auto-hidden below this zoom.
    minZoom: float | None = Field(default=None, ge=0.0, le=24.0)
    defaultVisible: bool = True


class ScenarioConfig(BaseModel):
    id: str
    title: str
    defaultView: ScenarioDefaultView
    minZoom: float = Field(default=0.0, ge=0.0, le=24.0)
    maxZoom: float = Field(default=19.0, ge=0.0, le=24.0)
    enabled: bool = True

    panes: list[ScenarioPane] = Field(default_factory=list)
    layers: list[ScenarioLayer]

    def get_layer(self, layer_id: str) -> ScenarioLayer | None:
        lid = (layer_id or "").strip()
        for layer in self.layers:
            if layer.id == lid:
                return layer
        return None

    def pane_z(self, layer: ScenarioLayer) -> int:
        for pane in self.panes:
            if pane.name == layer.pane:
                return pane.zIndex
        return DEFAULT_PANE_Z
