from __future__ import annotations

from typing import Any

from geo.shapes import anchor_point
from layers.types import LayerFeature, LineFeature, PointFeature, PolygonFeature
from scenarios.types import ScenarioLayer
from styling.popup import popup_lines
from styling.types import MarkerStyle, StyleDescriptor, VectorStyle


def rgba(color: str | None, alpha: float) -> str:
    """
    '#rgb' / '#rrggbb' -> 'rgba(r, g, b, a)'. Non-hex colors are passed through.
    """
    c = (color or "").strip()
    if not c.startswith("#"):
        return c
    h = c[1:]
    if len(h) == 3:
        h = "".join(ch * 2 for ch in h)
    if len(h) != 6:
        return c
    r, g, b = (int(h[i : i + 2], 16) for i in (0, 2, 4))
    return f"rgba({r}, {g}, {b}, {round(float(alpha), 3)})"


def hover_text(feature: LayerFeature) -> str:
    return "<br>".join(popup_lines(feature.props))


def _group_by_style(
    classified: list[tuple[LayerFeature, StyleDescriptor]],
) -> list[tuple[VectorStyle, list[LayerFeature]]]:
    # One trace per distinct style; first-seen order keeps output deterministic.
    groups: dict[VectorStyle, list[LayerFeature]] = {}
    for feature, style in classified:
        if isinstance(style, VectorStyle):
            groups.setdefault(style, []).append(feature)
    return list(groups.items())


def _polygon_path(features: list[LayerFeature]) -> tuple[list[float | None], list[float | None]]:
    lons: list[float | None] = []
    lats: list[float | None] = []
    for f in features:
        if not isinstance(f, PolygonFeature) or not f.rings:
            continue
        ring = f.rings[0]
        if not ring:
            continue
        if ring[0] != ring[-1]:
            ring = [*ring, ring[0]]
        for lon, lat in ring:
            lons.append(lon)
            lats.append(lat)
        lons.append(None)
        lats.append(None)
    return lons, lats


def _line_path(features: list[LayerFeature]) -> tuple[list[float | None], list[float | None]]:
    lons: list[float | None] = []
    lats: list[float | None] = []
    for f in features:
        if not isinstance(f, LineFeature) or len(f.coords) < 2:
            continue
        for lon, lat in f.coords:
            lons.append(lon)
            lats.append(lat)
        lons.append(None)
        lats.append(None)
    return lons, lats


def trace_polygons(
    layer: ScenarioLayer,
    classified: list[tuple[LayerFeature, StyleDescriptor]],
) -> list[dict[str, Any]]:
    polys = [(f, s) for f, s in classified if isinstance(f, PolygonFeature)]
    traces: list[dict[str, Any]] = []
    for i, (style, feats) in enumerate(_group_by_style(polys)):
        lons, lats = _polygon_path(feats)
        traces.append(
            {
                "type": "scattermapbox",
                "name": layer.title,
                "legendgroup": layer.id,
                "showlegend": i == 0,
                "lon": lons,
                "lat": lats,
                "mode": "lines",
                "fill": "toself",
                "fillcolor": rgba(style.fill_color or style.color, style.fill_opacity),
                "line": {"color": rgba(style.color, style.opacity), "width": style.weight},
                "hoverinfo": "skip",
            }
        )
    if polys:
        traces.append(trace_popup_anchors(layer, [f for f, _ in polys]))
    return traces


def trace_lines(
    layer: ScenarioLayer,
    classified: list[tuple[LayerFeature, StyleDescriptor]],
) -> list[dict[str, Any]]:
    lines = [(f, s) for f, s in classified if isinstance(f, LineFeature)]
    traces: list[dict[str, Any]] = []
    for i, (style, feats) in enumerate(_group_by_style(lines)):
        lons, lats = _line_path(feats)
        traces.append(
            {
                "type": "scattermapbox",
                "name": layer.title,
                "legendgroup": layer.id,
                "showlegend": i == 0,
                "lon": lons,
                "lat": lats,
                "mode": "lines",
                "line": {"color": rgba(style.color, style.opacity), "width": style.weight},
                "hoverinfo": "skip",
            }
        )
    if lines:
        traces.append(trace_popup_anchors(layer, [f for f, _ in lines]))
    return traces


def trace_points(
    layer: ScenarioLayer,
    classified: list[tuple[LayerFeature, StyleDescriptor]],
) -> dict[str, Any] | None:
    points = [
        (f, s)
        for f, s in classified
        if isinstance(f, PointFeature) and isinstance(s, MarkerStyle)
    ]
    if not points:
        return None
    return {
        "type": "scattermapbox",
        "name": layer.title,
        "legendgroup": layer.id,
        "lon": [f.lon for f, _ in points],
        "lat": [f.lat for f, _ in points],
        "ids": [f.id for f, _ in points],
        "mode": "markers+text",
        "text": [s.label for _, s in points],
        "textposition": "middle center",
        "hovertext": [hover_text(f) for f, _ in points],
        "marker": {
            "size": [s.diameter for _, s in points],
            "sizemode": "diameter",
            "color": [s.fill_color for _, s in points],
            "opacity": [s.fill_opacity for _, s in points],
        },
        "hovertemplate": "%{hovertext}<extra></extra>",
    }


def trace_popup_anchors(layer: ScenarioLayer, features: list[LayerFeature]) -> dict[str, Any]:
    """
    Invisible markers carrying popup text for line/polygon features.
    """
    lons: list[float] = []
    lats: list[float] = []
    ids: list[str] = []
    texts: list[str] = []
    for f in features:
        anchor = anchor_point(f)
        if anchor is None:
            continue
        lons.append(anchor[0])
        lats.append(anchor[1])
        ids.append(f.id)
        texts.append(hover_text(f))
    return {
        "type": "scattermapbox",
        "name": f"{layer.title} (info)",
        "legendgroup": layer.id,
        "showlegend": False,
        "lon": lons,
        "lat": lats,
        "ids": ids,
        "mode": "markers",
        "marker": {"size": 8, "opacity": 0},
        "hovertext": texts,
        "hovertemplate": "%{hovertext}<extra></extra>",
    }


def trace_point_outlines(
    layer: ScenarioLayer,
    classified: list[tuple[LayerFeature, StyleDescriptor]],
) -> dict[str, Any] | None:
    """
    Marker outlines, drawn as slightly larger markers underneath the points.

    `scattermapbox` markers have no line of their own.
    """
    stroked = [
        (f, s)
        for f, s in classified
        if isinstance(f, PointFeature)
        and isinstance(s, MarkerStyle)
        and s.stroke_color
        and s.stroke_weight > 0
    ]
    if not stroked:
        return None
    return {
        "type": "scattermapbox",
        "name": f"{layer.title} (outline)",
        "legendgroup": layer.id,
        "showlegend": False,
        "lon": [f.lon for f, _ in stroked],
        "lat": [f.lat for f, _ in stroked],
        "mode": "markers",
        "marker": {
            "size": [s.diameter + 2 * s.stroke_weight for _, s in stroked],
            "sizemode": "diameter",
            "color": [s.stroke_color for _, s in stroked],
        },
        "hoverinfo": "skip",
    }
