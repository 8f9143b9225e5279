from .model import (
    LegendRow,
    LegendSection,
    LegendToggle,
    build_legend,
    legend_payload,
)

__all__ = [
    "LegendRow",
    "LegendSection",
    "LegendToggle",
    "build_legend",
    "legend_payload",
]
