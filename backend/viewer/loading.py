from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path
from typing import Protocol

from layers.errors import LayerLoadError
from layers.loaders import load_geojson_features
from layers.types import LayerFeature
from scenarios.registry import resolve_repo_path
from scenarios.types import ScenarioLayer
from viewer.session import MapSession

_LOGGER = logging.getLogger("rentmap.loading")


class DataSource(Protocol):
    """
    Yields the features of one configured layer, or raises `LayerLoadError`.

    Retrying, if any, is up to the source.
    """

    async def fetch(self, layer: ScenarioLayer) -> list[LayerFeature]: ...


class GeoJSONFileSource:
    """
    Reads GeoJSON files off the event loop.

    Source paths are relative to `root` (the repo root by default).
    """

    def __init__(self, root: Path | None = None) -> None:
        self.root = root

    def _path(self, layer: ScenarioLayer) -> Path:
        if self.root is None:
            return resolve_repo_path(layer.source.path)
        return self.root / layer.source.path.lstrip("/")

    async def fetch(self, layer: ScenarioLayer) -> list[LayerFeature]:
        path = self._path(layer)
        if not path.exists():
            raise LayerLoadError(layer.id, f"missing file: {layer.source.path}")
        try:
            return await asyncio.to_thread(load_geojson_features, path)
        except (OSError, json.JSONDecodeError, ValueError) as e:
            raise LayerLoadError(layer.id, str(e)) from e


async def load_layer(session: MapSession, source: DataSource, layer: ScenarioLayer) -> bool:
    try:
        features = await source.fetch(layer)
    except LayerLoadError as e:
        _LOGGER.error("%s", e)
        session.on_layer_failed(layer.id, e.reason)
        return False
    except Exception as e:
        # A broken source must not take the other layers down with it.
        _LOGGER.exception("Error loading layer %s", layer.id)
        session.on_layer_failed(layer.id, str(e) or type(e).__name__)
        return False

    session.on_layer_loaded(layer.id, features)
    return True


async def load_layers(session: MapSession, source: DataSource) -> dict[str, bool]:
    """
    Load every configured layer concurrently.

    Each layer is handed to the session as soon as its own fetch finishes, in
    whatever order that happens.
    """
    layers = list(session.config.layers)
    results = await asyncio.gather(*(load_layer(session, source, l) for l in layers))
    return {layer.id: ok for layer, ok in zip(layers, results)}
