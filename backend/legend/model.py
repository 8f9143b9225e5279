from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Literal

from scenarios.types import ScenarioLayer
from styling.scales import (
    PARTY_COLORS,
    RENTER_RADII,
    SHELTER_COST_COLORS,
    BreakpointTable,
    CategoricalTable,
)
from visibility.coordinator import VisibilityCoordinator

PARTY_POINTS_CAPTION = (
    "Circle colour = MPP party; circle size & number = % of households that rent."
)

LegendRowKind = Literal["color", "size"]


@dataclass(frozen=True)
class LegendRow:
    label: str
    kind: LegendRowKind
    swatch_color: str | None = None
    swatch_diameter: int | None = None


@dataclass(frozen=True)
class LegendToggle:
    layer_id: str
    label: str
    checked: bool


@dataclass(frozen=True)
class LegendSection:
    layer_id: str
    toggle: LegendToggle
    rows: list[LegendRow] = field(default_factory=list)
    caption: str | None = None


def color_rows(table: BreakpointTable) -> list[LegendRow]:
    return [
        LegendRow(label=row.label, kind="color", swatch_color=row.output)
        for row in table.rows
    ]


def category_rows(table: CategoricalTable) -> list[LegendRow]:
    return [
        LegendRow(label=entry.label, kind="color", swatch_color=entry.color)
        for entry in table.entries
    ]


def size_rows(table: BreakpointTable) -> list[LegendRow]:
    return [
        LegendRow(label=row.label, kind="size", swatch_diameter=int(row.output) * 2)
        for row in table.rows
    ]


def build_legend(
    layers: Iterable[ScenarioLayer],
    loaded_ids: set[str],
    visibility: VisibilityCoordinator,
) -> list[LegendSection]:
    """
    Build the legend for every loaded layer, in configuration order.

    Rows come straight from the tables the classifier uses, so the legend can't
    drift from the rendered colors/sizes. The result is rebuilt from scratch on
    every call.
    """
    sections: list[LegendSection] = []
    for layer in layers:
        if layer.id not in loaded_ids:
            continue

        state = visibility.state(layer.id)
        toggle = LegendToggle(
            layer_id=layer.id,
            label=layer.title,
            checked=bool(state and state.user_enabled),
        )

        if layer.encoding == "shelter_cost":
            sections.append(
                LegendSection(
                    layer_id=layer.id,
                    toggle=toggle,
                    rows=color_rows(SHELTER_COST_COLORS),
                )
            )
        elif layer.encoding == "party_points":
            sections.append(
                LegendSection(
                    layer_id=layer.id,
                    toggle=toggle,
                    rows=[*category_rows(PARTY_COLORS), *size_rows(RENTER_RADII)],
                    caption=PARTY_POINTS_CAPTION,
                )
            )
        else:
            sections.append(LegendSection(layer_id=layer.id, toggle=toggle))

    return sections


def legend_payload(title: str, sections: list[LegendSection]) -> dict[str, Any]:
    return {
        "title": title,
        "sections": [
            {
                "layerId": s.layer_id,
                "toggle": {
                    "layerId": s.toggle.layer_id,
                    "label": s.toggle.label,
                    "checked": s.toggle.checked,
                },
                "rows": [_row_payload(r) for r in s.rows],
                "caption": s.caption,
            }
            for s in sections
        ],
    }


def _row_payload(row: LegendRow) -> dict[str, Any]:
    out: dict[str, Any] = {"label": row.label, "kind": row.kind}
    if row.kind == "color":
        out["color"] = row.swatch_color
    else:
        out["diameter"] = row.swatch_diameter
    return out
