from __future__ import annotations

from layers.types import LayerFeature, PointFeature, geometry_family
from scenarios.types import ScenarioLayer
from styling.scales import (
    PARTY_COLORS,
    RENTER_RADII,
    SHELTER_COST_COLORS,
    format_fixed,
    to_number,
)
from styling.types import MarkerStyle, StyleDescriptor, VectorStyle

BOUNDARY_STYLE = VectorStyle(color="#000", weight=2, fill_opacity=0.0)

DEFAULT_LINE_STYLE = VectorStyle(color="#FF851B", weight=3, opacity=0.9)
DEFAULT_POLYGON_STYLE = VectorStyle(
    color="#2ECC40", weight=1, fill_color="#2ECC40", fill_opacity=0.2
)
DEFAULT_POINT_MARKER = MarkerStyle(
    fill_color="#747575",
    radius=6,
    fill_opacity=1.0,
    stroke_color="#ffffff",
    stroke_weight=1,
)


def classify(feature: LayerFeature, layer: ScenarioLayer) -> StyleDescriptor:
    """
    Map one feature to its style (lines/polygons) or marker (points).

    Pure: the result depends only on the feature's attributes, its geometry family
    and the layer's encoding. Missing or malformed attributes never fail; they take
    the tables' fallback outputs.
    """
    family = geometry_family(feature)
    props = feature.props or {}

    if layer.encoding == "shelter_cost" and family == "polygon":
        return VectorStyle(
            color="#ffffff",
            weight=1,
            opacity=0.7,
            fill_color=SHELTER_COST_COLORS.lookup(_value(props, layer.valueField)),
            fill_opacity=0.8,
        )

    if layer.encoding == "boundary" and family == "polygon":
        return BOUNDARY_STYLE

    if layer.encoding == "party_points" and isinstance(feature, PointFeature):
        return party_marker(props, layer)

    if family == "line":
        return DEFAULT_LINE_STYLE
    if family == "polygon":
        return DEFAULT_POLYGON_STYLE
    return DEFAULT_POINT_MARKER


def party_marker(props: dict, layer: ScenarioLayer) -> MarkerStyle:
    raw = _value(props, layer.valueField)
    value = to_number(raw)
    return MarkerStyle(
        fill_color=PARTY_COLORS.lookup(_value(props, layer.partyField)),
        radius=RENTER_RADII.lookup(raw),
        label="" if value is None else f"{format_fixed(value, 0)}%",
    )


def _value(props: dict, field: str | None):
    if not field:
        return None
    return props.get(field)
