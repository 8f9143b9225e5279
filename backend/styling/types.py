from __future__ import annotations

from dataclasses import dataclass
from typing import TypeAlias, Union


@dataclass(frozen=True)
class VectorStyle:
    """
    Stroke/fill style for line and polygon features.
    """

    color: str
    weight: float
    opacity: float = 1.0
    fill_color: str | None = None
    fill_opacity: float = 0.0


@dataclass(frozen=True)
class MarkerStyle:
    """
    Circle marker for point features. `label` is drawn inside the marker.
    """

    fill_color: str
    radius: int
    label: str = ""
    fill_opacity: float = 1.0
    stroke_color: str | None = None
    stroke_weight: float = 0.0

    @property
    def diameter(self) -> int:
        return self.radius * 2


StyleDescriptor: TypeAlias = Union[VectorStyle, MarkerStyle]
