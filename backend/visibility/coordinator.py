from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Callable

from scenarios.types import ScenarioLayer

_LOGGER = logging.getLogger("rentmap.visibility")


@dataclass
class VisibilityState:
    user_enabled: bool
    # Always True for layers without a zoom gate.
    zoom_gate_passed: bool = True

    @property
    def shown(self) -> bool:
        return self.user_enabled and self.zoom_gate_passed


@dataclass(frozen=True)
class VisibilitySignal:
    """
    Effective visibility of a layer changed: add it to the map (shown=True) or
    remove it (shown=False).
    """

    layer_id: str
    shown: bool


VisibilityListener = Callable[[VisibilitySignal], None]


class VisibilityCoordinator:
    """
    Per-layer visibility from two independent inputs: the user's toggle and, for
    layers with a `minZoom`, the current map zoom.

    A layer is shown iff `user_enabled and zoom_gate_passed`. Listeners only hear
    about transitions, so repeating an event never re-adds or re-removes a layer.
    """

    def __init__(self) -> None:
        self._states: dict[str, VisibilityState] = {}
        self._min_zoom: dict[str, float] = {}
        self._listeners: list[VisibilityListener] = []

    def subscribe(self, listener: VisibilityListener) -> None:
        self._listeners.append(listener)

    def register(self, layer: ScenarioLayer, current_zoom: float) -> list[VisibilitySignal]:
        """
        Start tracking a loaded layer. A layer seen for the first time counts as hidden
        before this call.
        """
        previous = self._states.get(layer.id)
        if layer.minZoom is not None:
            self._min_zoom[layer.id] = float(layer.minZoom)
        state = VisibilityState(
            user_enabled=bool(layer.defaultVisible),
            zoom_gate_passed=self._gate(layer.id, current_zoom),
        )
        self._states[layer.id] = state
        return self._apply(layer.id, was_shown=bool(previous and previous.shown))

    def set_user_enabled(self, layer_id: str, enabled: bool) -> list[VisibilitySignal]:
        state = self._states.get(layer_id)
        if state is None:
            raise KeyError(f"Layer not registered: {layer_id}")
        was_shown = state.shown
        state.user_enabled = bool(enabled)
        return self._apply(layer_id, was_shown=was_shown)

    def on_zoom(self, zoom: float) -> list[VisibilitySignal]:
        signals: list[VisibilitySignal] = []
        for layer_id in self._min_zoom:
            state = self._states[layer_id]
            was_shown = state.shown
            state.zoom_gate_passed = self._gate(layer_id, zoom)
            signals.extend(self._apply(layer_id, was_shown=was_shown))
        return signals

    def state(self, layer_id: str) -> VisibilityState | None:
        return self._states.get(layer_id)

    def is_shown(self, layer_id: str) -> bool:
        state = self._states.get(layer_id)
        return bool(state and state.shown)

    def _gate(self, layer_id: str, zoom: float) -> bool:
        min_zoom = self._min_zoom.get(layer_id)
        return min_zoom is None or float(zoom) >= min_zoom

    def _apply(self, layer_id: str, *, was_shown: bool) -> list[VisibilitySignal]:
        shown = self._states[layer_id].shown
        if shown == was_shown:
            return []
        signal = VisibilitySignal(layer_id=layer_id, shown=shown)
        _LOGGER.debug("layer %s -> %s", layer_id, "shown" if shown else "hidden")
        for listener in self._listeners:
            listener(signal)
        return [signal]
