from __future__ import annotations

from dataclasses import dataclass
from typing import List

import numpy as np

from beamcore.analysis.assembly import AssemblyResult
from beamcore.errors import NumericalInstability


@dataclass
class LinearSolution:
    displacements: np.ndarray  # full vector
    reactions: np.ndarray  # full vector, non-zero only at restrained dofs
    free_dofs: List[int]
    restrained_dofs: List[int]
    condition_number: float


def solve_linear_system(assembly: AssemblyResult, condition_limit: float = 1e12) -> LinearSolution:
    """Solve K_ff u_f = f_f with all supports at zero displacement, then back out reactions.

    Mechanisms are rejected beforehand by BeamGeometry.check_stability, so a bad matrix
    here is only ever reported as NumericalInstability. The reduced matrix is Jacobi-scaled
    before the condition estimate.
    """
    k_full = assembly.k_full
    f_full = assembly.f_full
    free = assembly.free_dofs
    restrained = assembly.restrained_dofs

    u_full = np.zeros_like(f_full)
    condition = 1.0

    if free:
        k_ff = k_full[np.ix_(free, free)]
        f_f = f_full[free]

        diag = np.diag(k_ff)
        if np.any(diag <= 0.0):
            raise NumericalInstability("stiffness matrix has a free degree of freedom without stiffness")
        scale = 1.0 / np.sqrt(diag)
        k_scaled = k_ff * scale[:, None] * scale[None, :]

        condition = float(np.linalg.cond(k_scaled))
        if not np.isfinite(condition) or condition > condition_limit:
            raise NumericalInstability(
                f"stiffness matrix is ill-conditioned (condition number {condition:.3e} > {condition_limit:.3e})",
                condition_number=condition,
            )

        try:
            y = np.linalg.solve(k_scaled, f_f * scale)
        except np.linalg.LinAlgError as exc:
            raise NumericalInstability(f"stiffness matrix is singular: {exc}", condition_number=condition) from exc

        u_f = y * scale
        if not np.all(np.isfinite(u_f)):
            raise NumericalInstability("solve produced non-finite displacements", condition_number=condition)
        u_full[free] = u_f

    reactions = k_full @ u_full - f_full
    reactions[free] = 0.0

    return LinearSolution(
        displacements=u_full,
        reactions=reactions,
        free_dofs=list(free),
        restrained_dofs=list(restrained),
        condition_number=condition,
    )
