from __future__ import annotations

from scenarios.registry import (
    clear_registry_cache,
    get_registry,
    get_scenario,
    list_scenarios,
)


def test_scarborough_scenario_is_registered():
    ids = {cfg.id for cfg in list_scenarios()}
    assert "scarborough_renters" in ids
    assert get_registry()["scarborough_renters"].path.name == "scenario.yaml"


def test_scarborough_layer_descriptors():
    cfg = get_scenario("scarborough_renters").config
    by_id = {layer.id: layer for layer in cfg.layers}

    points = by_id["ward-points"]
    assert points.encoding == "party_points"
    assert points.minZoom == 12
    assert points.partyField == "offices-all_Party"
    assert cfg.pane_z(points) == 400

    rir = by_id["rir"]
    assert rir.encoding == "shelter_cost"
    assert rir.valueField == "pct_above_30"
    assert cfg.pane_z(rir) == 200

    assert by_id["wards"].pane is None
    assert cfg.pane_z(by_id["wards"]) == 400
    assert cfg.minZoom == 11


def test_unknown_scenario_falls_back_to_default():
    assert get_scenario("does-not-exist").config.id == "scarborough_renters"


def test_clear_registry_cache_reloads_from_disk():
    first = get_registry()
    assert get_registry() is first

    clear_registry_cache()
    reloaded = get_registry()
    assert reloaded is not first
    assert set(reloaded) == set(first)
