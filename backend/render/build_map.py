from __future__ import annotations

from typing import Any

from legend.model import legend_payload
from render.traces import (
    trace_lines,
    trace_point_outlines,
    trace_points,
    trace_polygons,
)
from viewer.session import MapSession


def build_map_plot(session: MapSession) -> dict[str, Any]:
    """
    Plotly `scattermapbox` figure for the layers currently on the map.

    Layers are emitted bottom-most first (pane z-index); within a layer polygons
    come before lines, lines before points.
    """
    traces: list[dict[str, Any]] = []
    stats: dict[str, Any] = {"featuresRendered": {}}

    for layer in session.shown_layers():
        classified = session.classified(layer.id)
        traces.extend(trace_polygons(layer, classified))
        traces.extend(trace_lines(layer, classified))
        outline_trace = trace_point_outlines(layer, classified)
        if outline_trace is not None:
            traces.append(outline_trace)
        point_trace = trace_points(layer, classified)
        if point_trace is not None:
            traces.append(point_trace)
        stats["featuresRendered"][layer.id] = len(classified)

    bounds = session.bounds()
    renderer = session.renderer
    center = getattr(renderer, "center", None) or session.config.defaultView.center.model_dump()

    return {
        "data": traces,
        "layout": {
            "mapbox": {
                "center": center,
                "zoom": renderer.current_zoom(),
                "style": "open-street-map",
            },
            "showlegend": True,
            "meta": {
                "scenarioId": session.config.id,
                "minZoom": session.config.minZoom,
                "maxZoom": session.config.maxZoom,
                "legend": legend_payload(session.config.title, session.legend),
                "visibility": visibility_payload(session),
                "failedLayers": dict(session.failed),
                "bounds": bounds.to_payload() if bounds is not None else None,
                "stats": stats,
            },
        },
    }


def visibility_payload(session: MapSession) -> dict[str, dict[str, bool]]:
    out: dict[str, dict[str, bool]] = {}
    for layer in session.config.layers:
        state = session.visibility.state(layer.id)
        if state is None:
            continue
        out[layer.id] = {
            "userEnabled": state.user_enabled,
            "zoomGatePassed": state.zoom_gate_passed,
            "shown": session.renderer.has_layer(layer.id),
        }
    return out
