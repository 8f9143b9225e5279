from __future__ import annotations

import math

from styling.scales import (
    PARTY_COLORS,
    RENTER_RADII,
    SHELTER_COST_COLORS,
    format_fixed,
    party_color,
    renter_radius,
    shelter_cost_color,
    to_number,
)


def test_to_number_accepts_numbers_and_numeric_strings():
    assert to_number(45) == 45.0
    assert to_number(31.6) == 31.6
    assert to_number(" 61.7 ") == 61.7


def test_to_number_rejects_missing_and_non_finite():
    for raw in (None, "", "   ", "n/a", True, math.nan, math.inf, -math.inf, "inf", [1]):
        assert to_number(raw) is None, raw


def test_shelter_cost_scenarios():
    assert shelter_cost_color(45) == "#69399a"
    assert shelter_cost_color(10) == "#e8e5f0"
    assert shelter_cost_color(None) == "#f0f0f0"


def test_shelter_cost_boundaries_resolve_to_first_matching_row():
    assert shelter_cost_color(11) == "#e8e5f0"
    assert shelter_cost_color(11.01) == "#beacd3"
    assert shelter_cost_color(32) == "#9373b7"
    assert shelter_cost_color(41) == "#69399a"
    assert shelter_cost_color(50.999) == "#69399a"
    assert shelter_cost_color(51) == "#3f007d"
    assert shelter_cost_color(-5) == "#e8e5f0"
    assert shelter_cost_color("not a number") == "#f0f0f0"


def test_shelter_cost_keeps_unreachable_unmatched_output():
    assert SHELTER_COST_COLORS.unmatched == "#f16913"
    for v in range(-10, 120):
        assert shelter_cost_color(v) != SHELTER_COST_COLORS.unmatched


def test_shelter_cost_finite_inputs_hit_exactly_one_table_color():
    colors = SHELTER_COST_COLORS.outputs()
    assert len(set(colors)) == len(colors)
    for i in range(0, 1000):
        v = i / 10.0
        assert colors.count(shelter_cost_color(v)) == 1


def test_renter_radius_buckets():
    assert renter_radius(29.9) == 20
    assert renter_radius(30) == 30
    assert renter_radius(45) == 40
    assert renter_radius(55) == 50
    assert renter_radius(60) == 60
    assert renter_radius(250) == 60


def test_renter_radius_is_monotonic_and_bounded():
    allowed = set(RENTER_RADII.outputs())
    assert allowed == {20, 30, 40, 50, 60}
    prev = 0
    for i in range(-100, 1000):
        r = renter_radius(i / 10.0)
        assert r in allowed
        assert r >= prev
        prev = r


def test_renter_radius_non_numeric_matches_top_bucket():
    for raw in (None, "", "abc", math.nan):
        assert renter_radius(raw) == renter_radius(60)


def test_party_color_trims_and_defaults():
    assert party_color("NDP") == "#F37021"
    assert party_color(" PC ") == "#1A4782"
    assert party_color("OLP") == "#D71920"
    assert party_color("ndp") == PARTY_COLORS.default
    assert party_color("Green") == "#666666"
    assert party_color(None) == "#666666"


def test_format_fixed_rounds_half_up():
    assert format_fixed(55.2, 0) == "55"
    assert format_fixed(2.5, 0) == "3"
    assert format_fixed(10.04, 1) == "10.0"
    assert format_fixed(45, 1) == "45.0"
