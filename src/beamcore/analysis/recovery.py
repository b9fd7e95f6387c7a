from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Dict, List, Sequence, Tuple

import numpy as np

from beamcore.model.geometry import BeamGeometry


@dataclass(frozen=True, slots=True)
class MomentTerm:
    """coef * <x - a>^p / p! contribution to the sagging-positive bending moment."""

    coef: float
    a: float
    p: int


def moment_terms(
    geometry: BeamGeometry,
    support_forces: Dict[float, float],
    support_moments: Dict[float, float],
) -> List[MomentTerm]:
    """Singularity terms for all loads plus upward support forces and CCW support couples."""
    terms: List[MomentTerm] = []
    for x, force in sorted(support_forces.items()):
        if force != 0.0:
            terms.append(MomentTerm(force, x, 1))
    for x, couple in sorted(support_moments.items()):
        if couple != 0.0:
            terms.append(MomentTerm(-couple, x, 0))
    for load in geometry.loads:
        if not load.is_distributed:
            terms.append(MomentTerm(-load.magnitude[0], load.position[0], 1))
            continue
        w0, w1 = load.intensities()
        wa, wb = -w0, -w1
        a, b = load.start, load.end
        k = (wb - wa) / (b - a)
        terms.append(MomentTerm(wa, a, 2))
        terms.append(MomentTerm(-wb, b, 2))
        if k != 0.0:
            terms.append(MomentTerm(k, a, 3))
            terms.append(MomentTerm(-k, b, 3))
    return terms


def _bracket(x: np.ndarray, a: float, p: int, right: np.ndarray, tol: float) -> np.ndarray:
    d = x - a
    if p < 0:
        return np.zeros_like(x)
    if p == 0:
        return np.where(d > tol, 1.0, np.where((np.abs(d) <= tol) & right, 1.0, 0.0))
    return np.where(d > 0.0, d, 0.0) ** p / math.factorial(p)


def evaluate(terms: Sequence[MomentTerm], x: np.ndarray, right: np.ndarray, order: int, tol: float) -> np.ndarray:
    """Sum terms raised by `order`: -1 is shear, 0 moment, 1 is EI*slope, 2 is EI*deflection (no constants)."""
    out = np.zeros_like(x, dtype=float)
    for term in terms:
        out += term.coef * _bracket(x, term.a, term.p + order, right, tol)
    return out


def integration_constants(geometry: BeamGeometry, terms: Sequence[MomentTerm]) -> Tuple[float, float]:
    """C1, C2 of EI*v = sum + C1 x + C2 fitted to v = 0 at vertical supports and theta = 0 at fixed ones."""
    rows: List[List[float]] = []
    rhs: List[float] = []
    tol = geometry.tol
    for support in geometry.supports:
        x = np.array([support.position])
        right = np.array([True])
        if support.restrains_vertical:
            rows.append([support.position, 1.0])
            rhs.append(-float(evaluate(terms, x, right, 2, tol)[0]))
        if support.restrains_rotation:
            rows.append([1.0, 0.0])
            rhs.append(-float(evaluate(terms, x, right, 1, tol)[0]))
    solution, _, _, _ = np.linalg.lstsq(np.array(rows, dtype=float), np.array(rhs, dtype=float), rcond=None)
    return float(solution[0]), float(solution[1])


def jump_positions(geometry: BeamGeometry) -> List[float]:
    """Interior positions where shear or moment jump: point loads and restraining supports."""
    tol = geometry.tol
    raw = [load.position[0] for load in geometry.loads if not load.is_distributed]
    raw.extend(s.position for s in geometry.restraining_supports())
    return sorted({x for x in raw if tol < x < geometry.span - tol})


def sample_positions(geometry: BeamGeometry, points_per_segment: int) -> Tuple[np.ndarray, np.ndarray]:
    """Non-decreasing sample grid and a right-limit flag per sample.

    Every key position is sampled exactly; jump positions get a left and a right sample.
    """
    tol = geometry.tol
    nodes = geometry.key_positions()
    jumps = jump_positions(geometry)
    xs: List[float] = []
    right: List[bool] = []
    for idx, (x0, x1) in enumerate(zip(nodes, nodes[1:])):
        segment = np.linspace(x0, x1, points_per_segment + 1)
        if idx > 0:
            segment = segment[1:]
        for x in segment.tolist():
            if any(abs(x - j) <= tol for j in jumps):
                xs.extend([x, x])
                right.extend([False, True])
            else:
                xs.append(x)
                right.append(True)
    # the far end takes its left limit
    right[-1] = False
    return np.array(xs, dtype=float), np.array(right, dtype=bool)


@dataclass
class RecoveredFields:
    x: np.ndarray
    shear: np.ndarray
    moment: np.ndarray
    rotation: np.ndarray
    deflection: np.ndarray


def recover_fields(
    geometry: BeamGeometry,
    support_forces: Dict[float, float],
    support_moments: Dict[float, float],
    points_per_segment: int,
) -> RecoveredFields:
    terms = moment_terms(geometry, support_forces, support_moments)
    c1, c2 = integration_constants(geometry, terms)
    x, right = sample_positions(geometry, points_per_segment)
    tol = geometry.tol
    ei = geometry.EI

    shear = evaluate(terms, x, right, -1, tol)
    moment = evaluate(terms, x, right, 0, tol)
    rotation = (evaluate(terms, x, right, 1, tol) + c1) / ei
    deflection = (evaluate(terms, x, right, 2, tol) + c1 * x + c2) / ei
    return RecoveredFields(x=x, shear=shear, moment=moment, rotation=rotation, deflection=deflection)
