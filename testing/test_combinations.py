from __future__ import annotations

import pytest

from beamcore import AppliedLoad, BeamGeometry, Force, LoadCaseFactor, LoadCombination, Support
from beamcore.combinations import (
    classify_combination,
    combination_summary,
    combine,
    computed_result,
    is_zero_result,
    reaction_combinations,
    standard_combinations,
    support_reaction,
    transfer_reaction_load,
)


def _applied():
    return [
        AppliedLoad("udl", (0.0, 6.0), [Force((1000.0,), "Dead"), Force((2000.0,), "Live")]),
        AppliedLoad("point", (3.0,), [Force((500.0,), "Live")]),
        AppliedLoad("trapezoidal", (1.0, 4.0), [Force((100.0, 300.0), "Dead"), Force((50.0,), "Wind")]),
    ]


def _combo(name, *factors, kind="ultimate"):
    return LoadCombination(name, kind, tuple(LoadCaseFactor(case, value) for case, value in factors))


def _magnitudes(loads):
    return [load.magnitude for load in loads]


def test_combine_factored_sum() -> None:
    loads = combine(_applied(), _combo("1.2G + 1.5Q", ("Dead", 1.2), ("Live", 1.5)))

    assert [load.type for load in loads] == ["udl", "point", "trapezoidal"]
    assert [load.position for load in loads] == [(0.0, 6.0), (3.0,), (1.0, 4.0)]
    assert loads[0].magnitude == pytest.approx((4200.0,))
    assert loads[1].magnitude == pytest.approx((750.0,))
    assert loads[2].magnitude == pytest.approx((120.0, 360.0))


def test_combine_is_linear() -> None:
    applied = _applied()
    both = combine(applied, _combo("both", ("Dead", 1.2), ("Live", 1.5)))
    dead = combine(applied, _combo("dead", ("Dead", 1.2)))
    live = combine(applied, _combo("live", ("Live", 1.5)))

    for b, d, q in zip(both, dead, live):
        assert b.magnitude == pytest.approx(tuple(x + y for x, y in zip(d.magnitude, q.magnitude)))

    doubled = combine(applied, _combo("dead x2", ("Dead", 2.4)))
    for d, dd in zip(dead, doubled):
        assert dd.magnitude == pytest.approx(tuple(2.0 * x for x in d.magnitude))


def test_combine_is_idempotent() -> None:
    applied = _applied()
    combination = _combo("mixed", ("Dead", 1.2), ("Live", 0.4), ("Wind", 1.0))
    assert combine(applied, combination) == combine(applied, combination)


def test_empty_combination_is_zero_and_undefined() -> None:
    applied = _applied()
    empty = LoadCombination("empty")
    assert all(m == 0.0 for mags in _magnitudes(combine(applied, empty)) for m in mags)
    assert computed_result(applied, empty) is None


def test_term_factor_multiplies_factor() -> None:
    combination = LoadCombination(
        "long term", "serviceability", (LoadCaseFactor("Dead", 1.0, term_factor=2.0),)
    )
    loads = combine(_applied(), combination)
    assert loads[0].magnitude == pytest.approx((2000.0,))


def test_inactive_factor_and_missing_case_contribute_nothing() -> None:
    combination = LoadCombination(
        "partial",
        factors=(LoadCaseFactor("Dead", 1.0), LoadCaseFactor("Live", 1.5, is_active=False), LoadCaseFactor("Snow", 3.0)),
    )
    loads = combine(_applied(), combination)
    assert loads[0].magnitude == pytest.approx((1000.0,))
    assert loads[1].magnitude == (0.0,)


def test_single_value_force_spans_trapezoid() -> None:
    loads = combine(_applied(), _combo("wind", ("Wind", 1.0)))
    assert loads[2].magnitude == pytest.approx((50.0, 50.0))


def test_reaction_and_inactive_combinations_have_no_result() -> None:
    applied = _applied()
    reaction = _combo("Dead reaction", ("Dead", 1.0), kind="reaction")
    inactive = LoadCombination("off", factors=(LoadCaseFactor("Dead", 1.0),), is_active=False)
    assert computed_result(applied, reaction) is None
    assert computed_result(applied, inactive) is None


def test_zero_result_detection() -> None:
    applied = _applied()
    assert is_zero_result(combine(applied, _combo("snow", ("Snow", 1.0))))
    assert not is_zero_result(combine(applied, _combo("wind", ("Wind", 1.0))))
    assert is_zero_result(None)


def test_reaction_combinations_added_once() -> None:
    applied = _applied()
    existing = [_combo("1.2G + 1.5Q", ("Dead", 1.2), ("Live", 1.5))]

    combos = reaction_combinations(applied, existing)
    names = [c.name for c in combos]
    assert names == ["1.2G + 1.5Q", "Dead reaction", "Live reaction", "Wind reaction"]
    assert all(c.combination_type == "reaction" for c in combos[1:])

    again = reaction_combinations(applied, combos)
    assert [c.name for c in again] == names

    custom = reaction_combinations(applied, combos, custom_factors={"Dead": 1.35}, force_regenerate=True)
    dead = next(c for c in custom if c.name == "Dead reaction")
    assert dead.factors[0].factor == 1.35
    assert len(custom) == len(combos)


def test_combination_summary() -> None:
    applied = _applied()
    combos = [_combo("1.2G + 1.5Q", ("Dead", 1.2), ("Live", 1.5)), _combo("Dead reaction", ("Dead", 1.0), kind="reaction")]
    summary = combination_summary(applied, combos)
    assert summary.total == 2
    assert summary.individual == 1
    assert summary.multi_factor == 1
    assert summary.load_case_types == ["Dead", "Live", "Wind"]
    assert summary.missing_individual == ["Live", "Wind"]


def test_reaction_combinations_take_term_factors() -> None:
    applied = _applied()
    custom = {"Live": {"factor": 1.5, "term_factor": 0.4}, "Wind": 0.9}

    combos = reaction_combinations(applied, [], custom_factors=custom)

    by_name = {c.name: c.factors[0] for c in combos}
    assert (by_name["Live reaction"].factor, by_name["Live reaction"].term_factor) == (1.5, 0.4)
    assert (by_name["Wind reaction"].factor, by_name["Wind reaction"].term_factor) == (0.9, 1.0)
    assert (by_name["Dead reaction"].factor, by_name["Dead reaction"].term_factor) == (1.0, 1.0)

    with pytest.raises(ValueError):
        reaction_combinations(applied, [], custom_factors={"Live": {"psi": 0.4}})


def test_combination_summary_ignores_inactive() -> None:
    applied = _applied()
    combos = [
        _combo("1.2G + 1.5Q", ("Dead", 1.2), ("Live", 1.5)),
        LoadCombination("0.9G + Wu", factors=(LoadCaseFactor("Dead", 0.9), LoadCaseFactor("Wind", 1.0)), is_active=False),
        _combo("Dead reaction", ("Dead", 1.0), kind="reaction"),
        LoadCombination("Live reaction", "reaction", (LoadCaseFactor("Live", 1.0),), is_active=False),
    ]

    summary = combination_summary(applied, combos)

    assert summary.total == 4
    assert summary.individual == 1
    assert summary.multi_factor == 1
    assert summary.missing_individual == ["Live", "Wind"]


def test_standard_combinations_and_classification() -> None:
    combos = {c.name: c for c in standard_combinations(psi_c=0.4, psi_l=0.4)}
    assert "1.2G + 1.5Q" in combos
    assert combos["G + ψsQ"].combination_type == "serviceability"

    assert classify_combination(combos["1.35G"]) == "1.35G"
    assert classify_combination(combos["1.2G + 1.5Q"]) == "floor_distributed_1.2G+1.5Q"
    assert classify_combination(combos["1.2G + ψlQ"]) == "permanent_1.2G+ψlQ"
    assert classify_combination(combos["1.2G + ψcQ + Wu"]) == "permanent_wind_imposed_1.2G+ψcQ+Wu"
    assert classify_combination(combos["0.9G + Wu"]) == "permanent_wind_reversal_0.9G+Wu"
    assert classify_combination(combos["G + Eu + ψcQ"]) == "permanent_earthquake_imposed_G+Eu+ψcQ"

    roof = LoadCombination("roof concentrated", factors=combos["1.2G + 1.5Q"].factors)
    assert classify_combination(roof) == "roof_concentrated_1.2G+1.5Q"

    with pytest.raises(ValueError):
        standard_combinations("Eurocode")


def _simple_beam():
    return BeamGeometry(
        span=6.0,
        E=10e9,
        I=1e-4,
        A=0.02,
        supports=(Support(0.0, "pinned"), Support(6.0, "roller")),
    )


def test_support_reaction_for_reaction_combination() -> None:
    applied = [
        AppliedLoad("udl", (0.0, 6.0), [Force((1000.0,), "Dead")]),
        AppliedLoad("point", (2.0,), [Force((600.0,), "Live")]),
    ]
    reaction = _combo("Live reaction", ("Live", 1.0), kind="reaction")
    _, fy, _ = support_reaction(_simple_beam(), applied, reaction, 6.0)
    assert fy == pytest.approx(200.0)


def test_transfer_reaction_load() -> None:
    applied = [
        AppliedLoad("udl", (0.0, 6.0), [Force((1000.0,), "Dead")]),
        AppliedLoad("point", (2.0,), [Force((600.0,), "Live")]),
    ]
    transfer = transfer_reaction_load(_simple_beam(), applied, 6.0, target_position=1.5)

    assert transfer.type == "point"
    assert transfer.position == (1.5,)
    by_case = {f.load_case: f.magnitude[0] for f in transfer.forces}
    assert by_case["Dead"] == pytest.approx(3000.0)
    assert by_case["Live"] == pytest.approx(200.0)
