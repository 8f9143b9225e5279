from .classify import classify
from .popup import popup_lines, select_popup_content
from .scales import PARTY_COLORS, RENTER_RADII, SHELTER_COST_COLORS
from .types import MarkerStyle, StyleDescriptor, VectorStyle

__all__ = [
    "PARTY_COLORS",
    "RENTER_RADII",
    "SHELTER_COST_COLORS",
    "MarkerStyle",
    "StyleDescriptor",
    "VectorStyle",
    "classify",
    "popup_lines",
    "select_popup_content",
]
