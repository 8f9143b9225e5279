from __future__ import annotations

from typing import Protocol


class Renderer(Protocol):
    """
    The map surface layers are drawn on.

    Only membership and zoom are visible here; panning, tiles and projection stay
    with the rendering side.
    """

    def add_layer(self, layer_id: str) -> None: ...

    def remove_layer(self, layer_id: str) -> None: ...

    def has_layer(self, layer_id: str) -> bool: ...

    def current_zoom(self) -> float: ...


class MapRenderer:
    """
    In-process renderer: remembers which layers are on the map and the current view.

    The Plotly payload is built from this state (see `render.build_map`).
    """

    def __init__(self, *, center: dict[str, float], zoom: float) -> None:
        self.center = dict(center)
        self._zoom = float(zoom)
        self._on_map: list[str] = []

    def add_layer(self, layer_id: str) -> None:
        if layer_id not in self._on_map:
            self._on_map.append(layer_id)

    def remove_layer(self, layer_id: str) -> None:
        if layer_id in self._on_map:
            self._on_map.remove(layer_id)

    def has_layer(self, layer_id: str) -> bool:
        return layer_id in self._on_map

    def current_zoom(self) -> float:
        return self._zoom

    def set_view(self, *, zoom: float, center: dict[str, float] | None = None) -> None:
        self._zoom = float(zoom)
        if center is not None:
            self.center = dict(center)
