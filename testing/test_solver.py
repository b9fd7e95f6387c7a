from __future__ import annotations

import warnings

import numpy as np
import pytest

from beamcore import BeamGeometry, Load, SolverSettings, Support, solve
from beamcore.errors import InvalidGeometry, NumericalInstability, UnstableStructure

E = 200e9
I = 8.0e-5
A = 0.01


def _beam(span, supports, loads=()):
    return BeamGeometry(span=span, E=E, I=I, A=A, supports=tuple(supports), loads=tuple(loads))


def _rel(a: float, b: float) -> float:
    return abs(a - b) / max(abs(b), 1e-12)


def test_simply_supported_center_load() -> None:
    """Central point load: PL/4 at midspan and P/2 at each support."""
    L = 10.0
    P = 5000.0
    beam = _beam(L, [Support(0.0, "pinned"), Support(L, "roller")], [Load("point", (P,), (L / 2.0,))])

    result = solve(beam)

    x, m = result.max_bending
    assert x == pytest.approx(L / 2.0)
    assert _rel(m, P * L / 4.0) < 1e-9
    assert _rel(result.reaction_at(0.0)[1], P / 2.0) < 1e-9
    assert _rel(result.reaction_at(L)[1], P / 2.0) < 1e-9
    assert result.method == "statics"

    # midspan deflection PL^3 / 48EI, downward
    expected = -P * L**3 / (48.0 * E * I)
    assert _rel(result.deflection_result().at(L / 2.0), expected) < 1e-9


def test_simply_supported_udl() -> None:
    """Full-span UDL: wL^2/8 at midspan and wL/2 shear at the supports."""
    L = 6.0
    w = 5000.0
    beam = _beam(L, [Support(0.0, "pinned"), Support(L, "roller")], [Load("udl", (w,), (0.0, L))])

    result = solve(beam)

    x, m = result.max_bending
    assert x == pytest.approx(L / 2.0)
    assert _rel(m, w * L**2 / 8.0) < 1e-9
    assert _rel(abs(result.max_shear[1]), w * L / 2.0) < 1e-9
    assert result.max_shear[0] in (pytest.approx(0.0), pytest.approx(L))
    assert _rel(result.shear().at(0.0), w * L / 2.0) < 1e-9

    expected = -5.0 * w * L**4 / (384.0 * E * I)
    assert _rel(result.max_deflection[1], expected) < 1e-9


def test_cantilever_tip_load() -> None:
    """Fixed at x=0, tip load at L: hogging PL at the root, no deflection or rotation there."""
    L = 5.0
    P = 1000.0
    beam = _beam(L, [Support(0.0, "fixed")], [Load("point", (P,), (L,))])

    result = solve(beam)

    x, m = result.max_bending
    assert x == pytest.approx(0.0)
    assert _rel(abs(m), P * L) < 1e-9
    assert m < 0.0
    _, fy, mz = result.reaction_at(0.0)
    assert _rel(fy, P) < 1e-9
    assert _rel(mz, P * L) < 1e-9
    assert abs(result.deflection[0]) < 1e-15
    assert abs(result.rotation[0]) < 1e-15
    assert abs(result.bending_moment[-1]) < 1e-9 * P * L
    assert _rel(result.deflection[-1], -P * L**3 / (3.0 * E * I)) < 1e-9
    assert result.method == "stiffness"


def test_propped_cantilever_udl() -> None:
    """Fixed + roller under UDL: 5wL/8 and 3wL/8, root moment wL^2/8."""
    L = 8.0
    w = 1200.0
    beam = _beam(L, [Support(0.0, "fixed"), Support(L, "roller")], [Load("udl", (w,), (0.0, L))])

    result = solve(beam)

    assert _rel(result.reaction_at(0.0)[1], 5.0 * w * L / 8.0) < 1e-9
    assert _rel(result.reaction_at(L)[1], 3.0 * w * L / 8.0) < 1e-9
    assert _rel(result.reaction_at(0.0)[2], w * L**2 / 8.0) < 1e-9
    assert _rel(result.max_bending[1], -w * L**2 / 8.0) < 1e-9


def test_two_span_continuous_udl() -> None:
    """Two equal spans under UDL: 1.25wL at the middle support and -wL^2/8 over it."""
    L = 5.0
    w = 2000.0
    supports = [Support(0.0, "pinned"), Support(L, "roller"), Support(2 * L, "roller")]
    beam = _beam(2 * L, supports, [Load("udl", (w,), (0.0, 2 * L))])

    result = solve(beam)

    assert _rel(result.reaction_at(L)[1], 1.25 * w * L) < 1e-9
    assert _rel(result.reaction_at(0.0)[1], 0.375 * w * L) < 1e-9
    assert _rel(result.reaction_at(2 * L)[1], 0.375 * w * L) < 1e-9
    x, m = result.max_bending
    assert x == pytest.approx(L)
    assert _rel(m, -w * L**2 / 8.0) < 1e-9
    assert abs(result.deflection_result().at(L)) < 1e-12


def test_fixed_fixed_udl() -> None:
    """Both ends fixed: end moments -wL^2/12 and wL^2/24 at midspan."""
    L = 6.0
    w = 3000.0
    beam = _beam(L, [Support(0.0, "fixed"), Support(L, "fixed")], [Load("udl", (w,), (0.0, L))])

    result = solve(beam)

    assert _rel(result.bending().at(0.0), -w * L**2 / 12.0) < 1e-9
    assert _rel(result.bending().at(L / 2.0), w * L**2 / 24.0) < 1e-9
    assert _rel(result.reaction_at(L)[2], -w * L**2 / 12.0) < 1e-9


def test_equilibrium_mixed_loads() -> None:
    """Reactions balance an arbitrary load set on an indeterminate beam."""
    loads = [
        Load("trapezoidal", (1000.0, 3000.0), (0.0, 6.0)),
        Load("point", (4000.0,), (2.5,)),
        Load("udl", (750.0,), (5.0, 7.5)),
    ]
    supports = [Support(0.0, "fixed"), Support(4.0, "roller"), Support(8.0, "pinned")]
    beam = _beam(8.0, supports, loads)

    result = solve(beam)

    sum_fy, sum_m = result.residuals()
    total = sum(load.resultant() for load in loads)
    assert abs(sum_fy) < 1e-9 * total
    assert abs(sum_m) < 1e-9 * total * 8.0
    # shear just left of the far support balances its reaction
    assert _rel(result.shear_force[-1], -result.reaction_at(8.0)[1]) < 1e-9
    assert result.normal_force.shape == result.x_values.shape
    assert not np.any(result.normal_force)


def test_statics_and_stiffness_agree() -> None:
    L = 7.0
    loads = [Load("trapezoidal", (2000.0, 500.0), (1.0, 5.0)), Load("point", (800.0,), (6.0,))]
    beam = _beam(L, [Support(0.5, "pinned"), Support(L, "roller")], loads)

    statics = solve(beam)
    stiffness = solve(beam, SolverSettings(force_stiffness=True))

    assert statics.method == "statics"
    assert stiffness.method == "stiffness"
    for x in (0.5, L):
        assert _rel(stiffness.reaction_at(x)[1], statics.reaction_at(x)[1]) < 1e-9
    assert np.allclose(stiffness.deflection, statics.deflection, rtol=1e-8, atol=1e-14)


def test_overhang_loads_match_statics() -> None:
    """Loads beyond the outer supports reach the stiffness solve through statics."""
    L = 10.0
    loads = [Load("udl", (1200.0,), (0.0, L)), Load("point", (3000.0,), (9.5,)), Load("point", (500.0,), (0.5,))]
    beam = _beam(L, [Support(2.0, "pinned"), Support(8.0, "roller")], loads)

    statics = solve(beam)
    stiffness = solve(beam, SolverSettings(force_stiffness=True))

    for x in (2.0, 8.0):
        assert _rel(stiffness.reaction_at(x)[1], statics.reaction_at(x)[1]) < 1e-9
    assert np.allclose(stiffness.bending_moment, statics.bending_moment, rtol=1e-9, atol=1e-6)


@pytest.mark.parametrize("gap", [1e-3, 1e-4, 1e-5, 1e-6])
def test_point_load_next_to_udl_end(gap) -> None:
    """A point load a hair past the end of a half-span UDL on a fixed-fixed beam."""
    L = 10.0
    w = 2000.0
    P = 5000.0
    a = 5.0 + gap
    b = L - a
    loads = [Load("udl", (w,), (0.0, 5.0)), Load("point", (P,), (a,))]
    beam = _beam(L, [Support(0.0, "fixed"), Support(L, "fixed")], loads)

    with warnings.catch_warnings():
        warnings.simplefilter("error", RuntimeWarning)
        result = solve(beam)

    _, fy_0, mz_0 = result.reaction_at(0.0)
    _, fy_l, mz_l = result.reaction_at(L)
    assert _rel(fy_0, 13.0 * w * L / 32.0 + P * b**2 * (3.0 * a + b) / L**3) < 1e-9
    assert _rel(fy_l, 3.0 * w * L / 32.0 + P * a**2 * (a + 3.0 * b) / L**3) < 1e-9
    assert _rel(mz_0, 11.0 * w * L**2 / 192.0 + P * a * b**2 / L**2) < 1e-9
    assert _rel(mz_l, -(5.0 * w * L**2 / 192.0 + P * a**2 * b / L**2)) < 1e-9
    sum_fy, sum_m = result.residuals()
    assert abs(sum_fy) < 1e-9 * (w * 5.0 + P)
    assert abs(sum_m) < 1e-9 * (w * 5.0 + P) * L


def test_jump_samples_at_point_load() -> None:
    """A point load gets a left and a right sample so the shear step is exact."""
    L = 4.0
    P = 1000.0
    beam = _beam(L, [Support(0.0, "pinned"), Support(L, "roller")], [Load("point", (P,), (1.0,))])

    result = solve(beam)

    x = result.x_values
    assert np.all(np.diff(x) >= 0.0)
    idx = np.where(x == 1.0)[0]
    assert len(idx) == 2
    left, right = result.shear_force[idx[0]], result.shear_force[idx[1]]
    assert _rel(left - right, P) < 1e-9
    assert x[0] == 0.0
    assert x[-1] == L


def test_roller_and_pinned_are_equivalent() -> None:
    loads = [Load("udl", (1500.0,), (0.0, 9.0))]
    a = solve(_beam(9.0, [Support(0.0, "pinned"), Support(4.0, "pinned"), Support(9.0, "pinned")], loads))
    b = solve(_beam(9.0, [Support(0.0, "roller"), Support(4.0, "roller"), Support(9.0, "roller")], loads))
    assert np.array_equal(a.bending_moment, b.bending_moment)
    assert a.reactions == b.reactions


def test_solve_is_deterministic() -> None:
    loads = [Load("trapezoidal", (100.0, 900.0), (0.0, 3.0)), Load("point", (250.0,), (4.5,))]
    beam = _beam(6.0, [Support(0.0, "fixed"), Support(3.0, "roller"), Support(6.0, "roller")], loads)
    a = solve(beam)
    b = solve(beam)
    assert np.array_equal(a.x_values, b.x_values)
    assert np.array_equal(a.bending_moment, b.bending_moment)
    assert np.array_equal(a.deflection, b.deflection)
    assert a.reactions == b.reactions


def test_results_are_read_only() -> None:
    beam = _beam(3.0, [Support(0.0, "fixed")], [Load("udl", (100.0,), (0.0, 3.0))])
    result = solve(beam)
    with pytest.raises(ValueError):
        result.bending_moment[0] = 1.0
    with pytest.raises(TypeError):
        result.reactions[0.0] = (0.0, 0.0, 0.0)
    with pytest.raises(TypeError):
        del result.reactions[0.0]


def test_zero_loads_give_zero_fields() -> None:
    result = solve(_beam(5.0, [Support(0.0, "pinned"), Support(5.0, "roller")]))
    assert result.max_bending == (0.0, 0.0)
    assert not np.any(result.deflection)


def test_free_support_reports_zero_reaction() -> None:
    loads = [Load("udl", (1000.0,), (0.0, 6.0))]
    supports = [Support(0.0, "pinned"), Support(2.0, "free"), Support(6.0, "roller")]
    result = solve(_beam(6.0, supports, loads))
    assert result.reaction_at(2.0) == (0.0, 0.0, 0.0)
    assert result.method == "statics"
    assert _rel(result.reaction_at(0.0)[1], 3000.0) < 1e-9


@pytest.mark.parametrize(
    "supports",
    [
        [],
        [Support(0.0, "pinned")],
        [Support(3.0, "roller")],
        [Support(0.0, "free"), Support(5.0, "roller")],
    ],
)
def test_mechanisms_are_rejected(supports) -> None:
    beam = _beam(5.0, supports, [Load("point", (100.0,), (2.0,))])
    with pytest.raises(UnstableStructure) as info:
        solve(beam)
    assert isinstance(info.value, InvalidGeometry)
    assert info.value.kind == "unstable"


def test_ill_conditioned_system_is_reported() -> None:
    supports = [Support(0.0, "pinned"), Support(5.0, "roller"), Support(10.0, "roller")]
    beam = _beam(10.0, supports, [Load("point", (100.0,), (2.0,))])
    with pytest.raises(NumericalInstability) as info:
        solve(beam, SolverSettings(condition_limit=1.5))
    assert info.value.condition_number > 1.5


def test_settings_validation() -> None:
    with pytest.raises(ValueError):
        SolverSettings(points_per_segment=0).validate()
    with pytest.raises(ValueError):
        SolverSettings(equilibrium_tol=0.0).validate()
