from __future__ import annotations

import logging

from geo.aoi import BBox
from geo.shapes import features_bbox
from layers.types import Layer, LayerFeature
from legend.model import LegendSection, build_legend
from scenarios.types import ScenarioConfig, ScenarioLayer
from styling.classify import classify
from styling.popup import select_popup_content
from styling.types import StyleDescriptor
from viewer.renderer import MapRenderer, Renderer
from visibility.coordinator import VisibilityCoordinator, VisibilitySignal

_LOGGER = logging.getLogger("rentmap.session")


class MapSession:
    """
    Live state of one map: configuration, loaded layers, visibility and legend.

    Every event (layer loaded/failed, user toggle, zoom change) is a plain method call
    handled to completion before the next one; the legend is rebuilt from scratch
    after each change that can affect it.
    """

    def __init__(self, config: ScenarioConfig, renderer: Renderer | None = None) -> None:
        self.config = config
        self.renderer: Renderer = renderer or MapRenderer(
            center=config.defaultView.center.model_dump(),
            zoom=self.clamp_zoom(config.defaultView.zoom),
        )
        self.visibility = VisibilityCoordinator()
        self.visibility.subscribe(self._apply_signal)
        self.layers: dict[str, Layer] = {}
        self.failed: dict[str, str] = {}
        self.legend: list[LegendSection] = []

    def on_layer_loaded(
        self, layer_id: str, features: list[LayerFeature]
    ) -> list[VisibilitySignal]:
        layer_cfg = self._layer_cfg(layer_id)
        self.layers[layer_id] = Layer(id=layer_id, features=list(features))
        self.failed.pop(layer_id, None)
        _LOGGER.info("loaded layer %s (%d features)", layer_id, len(features))

        signals = self.visibility.register(layer_cfg, self.renderer.current_zoom())
        self.rebuild_legend()
        return signals

    def on_layer_failed(self, layer_id: str, reason: str) -> None:
        self._layer_cfg(layer_id)
        self.failed[layer_id] = reason

    def set_layer_enabled(self, layer_id: str, enabled: bool) -> list[VisibilitySignal]:
        if layer_id not in self.layers:
            raise KeyError(f"Layer not loaded: {layer_id}")
        signals = self.visibility.set_user_enabled(layer_id, enabled)
        self.rebuild_legend()
        return signals

    def on_zoom(self, zoom: float) -> list[VisibilitySignal]:
        z = self.clamp_zoom(zoom)
        if isinstance(self.renderer, MapRenderer):
            self.renderer.set_view(zoom=z)
        return self.visibility.on_zoom(z)

    def reset_view(self) -> list[VisibilitySignal]:
        view = self.config.defaultView
        z = self.clamp_zoom(view.zoom)
        if isinstance(self.renderer, MapRenderer):
            self.renderer.set_view(zoom=z, center=view.center.model_dump())
        return self.visibility.on_zoom(z)

    def rebuild_legend(self) -> list[LegendSection]:
        self.legend = build_legend(
            self.config.layers, set(self.layers), self.visibility
        )
        return self.legend

    def clamp_zoom(self, zoom: float) -> float:
        return min(max(float(zoom), self.config.minZoom), self.config.maxZoom)

    def shown_layers(self) -> list[ScenarioLayer]:
        """
        Layers currently on the map, bottom-most first (pane z-index, then config order).
        """
        ordered = sorted(
            enumerate(self.config.layers),
            key=lambda item: (self.config.pane_z(item[1]), item[0]),
        )
        return [
            cfg
            for _, cfg in ordered
            if cfg.id in self.layers and self.renderer.has_layer(cfg.id)
        ]

    def classified(self, layer_id: str) -> list[tuple[LayerFeature, StyleDescriptor]]:
        layer_cfg = self._layer_cfg(layer_id)
        layer = self.layers.get(layer_id)
        if layer is None:
            return []
        return [(f, classify(f, layer_cfg)) for f in layer.features]

    def popup(self, layer_id: str, feature_id: str) -> str:
        layer = self.layers.get(layer_id)
        if layer is None:
            raise KeyError(f"Layer not loaded: {layer_id}")
        feature = layer.get(feature_id)
        if feature is None:
            raise KeyError(f"Feature not found: {layer_id}/{feature_id}")
        return select_popup_content(feature.props)

    def bounds(self) -> BBox | None:
        out: BBox | None = None
        for layer in self.layers.values():
            b = features_bbox(layer.features)
            if b is not None:
                out = b if out is None else out.extend(b)
        return out

    def _layer_cfg(self, layer_id: str) -> ScenarioLayer:
        cfg = self.config.get_layer(layer_id)
        if cfg is None:
            raise KeyError(f"Unknown layer: {layer_id}")
        return cfg

    def _apply_signal(self, signal: VisibilitySignal) -> None:
        if signal.shown:
            if not self.renderer.has_layer(signal.layer_id):
                self.renderer.add_layer(signal.layer_id)
        elif self.renderer.has_layer(signal.layer_id):
            self.renderer.remove_layer(signal.layer_id)
