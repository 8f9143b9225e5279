from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any, Callable


def to_number(value: Any) -> float | None:
    """
    Coerce an attribute value to a finite float.

    Returns None for anything that is missing, non-numeric or non-finite (NaN/inf).
    Booleans are not treated as numbers.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        try:
            v = float(value)
        except OverflowError:
            return None
    elif isinstance(value, str):
        s = value.strip()
        if not s:
            return None
        try:
            v = float(s)
        except ValueError:
            return None
    else:
        return None
    return v if math.isfinite(v) else None


def format_fixed(value: float, digits: int) -> str:
    # Half-up on the exact binary value, so 0.5 steps round away from zero.
    with localcontext() as ctx:
        ctx.prec = 400
        q = Decimal(1).scaleb(-digits)
        return format(Decimal(value).quantize(q, rounding=ROUND_HALF_UP), "f")


@dataclass(frozen=True)
class BreakpointRow:
    label: str
    test: Callable[[float], bool]
    output: Any


@dataclass(frozen=True)
class BreakpointTable:
    """
    Ordered numeric classification.

    Rows are tried top to bottom and the first row whose test accepts the value wins,
    so overlapping or unreachable rows keep their table position. `fallback` covers
    values that don't coerce to a finite number; `unmatched` covers finite values no
    row accepts.
    """

    rows: tuple[BreakpointRow, ...]
    fallback: Any
    unmatched: Any

    def lookup(self, value: Any) -> Any:
        v = to_number(value)
        if v is None:
            return self.fallback
        for row in self.rows:
            if row.test(v):
                return row.output
        return self.unmatched

    def outputs(self) -> list[Any]:
        return [row.output for row in self.rows]


@dataclass(frozen=True)
class CategoryEntry:
    code: str
    label: str
    color: str


@dataclass(frozen=True)
class CategoricalTable:
    entries: tuple[CategoryEntry, ...]
    default: str

    def lookup(self, raw: Any) -> str:
        if raw is None:
            return self.default
        code = str(raw).strip()
        for entry in self.entries:
            if entry.code == code:
                return entry.color
        return self.default


# Share of renter households spending 30%+ of income on shelter.
# The last row can never be reached after `< 51`, and `unmatched` can never be
# reached after `>= 51`; both are kept so lookups stay in this exact order.
SHELTER_COST_COLORS = BreakpointTable(
    rows=(
        BreakpointRow("< 11%", lambda v: v <= 11, "#e8e5f0"),
        BreakpointRow("11–32%", lambda v: v < 32, "#beacd3"),
        BreakpointRow("32-41%", lambda v: v < 41, "#9373b7"),
        BreakpointRow("41-51%", lambda v: v < 51, "#69399a"),
        BreakpointRow("≥ 51%", lambda v: v >= 51, "#3f007d"),
    ),
    fallback="#f0f0f0",
    unmatched="#f16913",
)

# Marker radius (px) by share of households that rent. Missing values get the
# largest marker, same as 60%+.
RENTER_RADII = BreakpointTable(
    rows=(
        BreakpointRow("< 30%", lambda v: v < 30, 20),
        BreakpointRow("30–40%", lambda v: v < 40, 30),
        BreakpointRow("40–50%", lambda v: v < 50, 40),
        BreakpointRow("50–60%", lambda v: v < 60, 50),
        BreakpointRow("≥ 60%", lambda v: v >= 60, 60),
    ),
    fallback=60,
    unmatched=60,
)

PARTY_COLORS = CategoricalTable(
    entries=(
        CategoryEntry("PC", "Progressive Conservative", "#1A4782"),
        CategoryEntry("OLP", "Liberal", "#D71920"),
        CategoryEntry("NDP", "NDP", "#F37021"),
    ),
    default="#666666",
)


def shelter_cost_color(value: Any) -> str:
    return SHELTER_COST_COLORS.lookup(value)


def renter_radius(value: Any) -> int:
    return RENTER_RADII.lookup(value)


def party_color(raw: Any) -> str:
    return PARTY_COLORS.lookup(raw)
