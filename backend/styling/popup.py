from __future__ import annotations

import json
from typing import Any

from styling.scales import format_fixed, to_number

NO_ATTRIBUTES = "No attributes"


def popup_lines(props: dict[str, Any] | None) -> list[str]:
    """
    Pick the display lines for a feature popup, most important first.

    Only attributes that are present contribute a line; when none of the known
    attributes is present every attribute is listed instead.
    """
    props = props or {}
    lines: list[str] = []

    name = props.get("AREA_NA13") or props.get("name")
    if name:
        lines.append(_text(name))

    if props.get("30_pct_plus_inc") is not None:
        pct = _pct(props["30_pct_plus_inc"])
        lines.append(f"Renter households spending ≥30% of income: {pct}%")

    if props.get("pct_renters") is not None:
        lines.append(f"Renter households: {_pct(props['pct_renters'])}%")

    party = props.get("mpp_party") or props.get("offices-all_Party")
    if party:
        lines.append(f"MPP party: {_text(party)}")

    if lines:
        return lines
    if not props:
        return [NO_ATTRIBUTES]
    return [f"{k}: {_text(v)}" for k, v in props.items()]


def select_popup_content(props: dict[str, Any] | None) -> str:
    return "\n".join(popup_lines(props))


def _pct(raw: Any) -> str:
    # Values that don't parse are shown as stored.
    v = to_number(raw)
    return _text(raw) if v is None else format_fixed(v, 1)


def _text(v: Any) -> str:
    # Rendered the way the JSON value reads: 1.0 -> "1", True -> "true".
    if v is None:
        return "null"
    if isinstance(v, bool):
        return "true" if v else "false"
    if isinstance(v, float) and v.is_integer() and abs(v) < 1e21:
        return str(int(v))
    if isinstance(v, (dict, list)):
        return json.dumps(v, ensure_ascii=False)
    return str(v)
