from __future__ import annotations

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI, HTTPException, Request
from fastapi.middleware.cors import CORSMiddleware
from pydantic import BaseModel, Field

from legend.model import legend_payload
from render.build_map import build_map_plot, visibility_payload
from scenarios.registry import get_scenario
from viewer.loading import DataSource, GeoJSONFileSource, load_layers
from viewer.session import MapSession
from visibility.coordinator import VisibilitySignal

_LOGGER = logging.getLogger("rentmap.api")


def configure_logging() -> None:
    level = (os.getenv("RENTMAP_LOG_LEVEL") or "INFO").strip().upper()
    logging.basicConfig(
        level=getattr(logging, level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


class ApiVisibilityToggle(BaseModel):
    enabled: bool


class ApiZoom(BaseModel):
    zoom: float = Field(ge=0.0, le=24.0)


def _signals(signals: list[VisibilitySignal]) -> list[dict]:
    return [{"layerId": s.layer_id, "shown": s.shown} for s in signals]


def create_app(
    scenario_id: str | None = None,
    *,
    source: DataSource | None = None,
) -> FastAPI:
    """
    Build the API around a fresh `MapSession`.

    All configured layers are loaded on startup; a layer that fails to load is
    logged and left off the map and out of the legend.
    """
    entry = get_scenario(scenario_id)
    data_source = source or GeoJSONFileSource()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        session = MapSession(entry.config)
        app.state.session = session
        results = await load_layers(session, data_source)
        _LOGGER.info(
            "scenario %s ready: %d/%d layers loaded",
            entry.config.id,
            sum(results.values()),
            len(results),
        )
        yield

    app = FastAPI(lifespan=lifespan)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["http://localhost:3000"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    def _session(request: Request) -> MapSession:
        return request.app.state.session

    @app.get("/scenario")
    def scenario(request: Request):
        session = _session(request)
        cfg = session.config
        return {
            "id": cfg.id,
            "title": cfg.title,
            "defaultView": cfg.defaultView.model_dump(),
            "minZoom": cfg.minZoom,
            "maxZoom": cfg.maxZoom,
            "layers": [
                {
                    "id": layer.id,
                    "title": layer.title,
                    "encoding": layer.encoding,
                    "minZoom": layer.minZoom,
                    "loaded": layer.id in session.layers,
                    "error": session.failed.get(layer.id),
                }
                for layer in cfg.layers
            ],
        }

    @app.get("/legend")
    def legend(request: Request):
        session = _session(request)
        return legend_payload(session.config.title, session.legend)

    @app.get("/plot")
    def plot(request: Request):
        return build_map_plot(_session(request))

    @app.post("/layers/{layer_id}/visibility")
    def set_visibility(layer_id: str, body: ApiVisibilityToggle, request: Request):
        session = _session(request)
        try:
            signals = session.set_layer_enabled(layer_id, body.enabled)
        except KeyError:
            raise HTTPException(status_code=404, detail=f"Layer not loaded: {layer_id}")
        return {
            "layerId": layer_id,
            "shown": session.renderer.has_layer(layer_id),
            "signals": _signals(signals),
        }

    @app.post("/view")
    def set_view(body: ApiZoom, request: Request):
        session = _session(request)
        signals = session.on_zoom(body.zoom)
        return {
            "zoom": session.renderer.current_zoom(),
            "signals": _signals(signals),
            "visibility": visibility_payload(session),
        }

    @app.post("/view/reset")
    def reset_view(request: Request):
        session = _session(request)
        signals = session.reset_view()
        return {
            "zoom": session.renderer.current_zoom(),
            "signals": _signals(signals),
            "visibility": visibility_payload(session),
        }

    @app.get("/layers/{layer_id}/features/{feature_id}/popup")
    def popup(layer_id: str, feature_id: str, request: Request):
        session = _session(request)
        try:
            text = session.popup(layer_id, feature_id)
        except KeyError as e:
            raise HTTPException(status_code=404, detail=str(e.args[0]))
        return {"layerId": layer_id, "featureId": feature_id, "text": text}

    return app


configure_logging()
app = create_app()
