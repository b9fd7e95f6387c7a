from __future__ import annotations

import logging
import warnings
from typing import Dict, Optional, Tuple

import numpy as np

from beamcore.analysis.assembly import assemble_global_system
from beamcore.analysis.mesh import build_analysis_model
from beamcore.analysis.recovery import recover_fields
from beamcore.analysis.results import AnalysisResult, Reaction
from beamcore.analysis.settings import SolverSettings
from beamcore.analysis.solver_linear import solve_linear_system
from beamcore.analysis.statics import determinate_reactions
from beamcore.errors import NumericalInstability
from beamcore.model.geometry import BeamGeometry

logger = logging.getLogger(__name__)


def _stiffness_reactions(geometry: BeamGeometry, settings: SolverSettings) -> Tuple[Dict[float, float], Dict[float, float]]:
    model = build_analysis_model(geometry)
    assembly = assemble_global_system(model, geometry)
    solution = solve_linear_system(assembly, condition_limit=settings.condition_limit)
    logger.debug(
        "stiffness solve: %d nodes, %d elements, %d free dofs, condition %.3e",
        len(model.nodes),
        len(model.elements),
        len(solution.free_dofs),
        solution.condition_number,
    )
    forces: Dict[float, float] = {}
    moments: Dict[float, float] = {}
    for support in geometry.restraining_supports():
        base = 2 * model.node_at(support.position)
        forces[support.position] = float(solution.reactions[base]) if support.restrains_vertical else 0.0
        moments[support.position] = float(solution.reactions[base + 1]) if support.restrains_rotation else 0.0
    return forces, moments


def _check_equilibrium(result: AnalysisResult, settings: SolverSettings) -> None:
    sum_fy, sum_m = result.residuals()
    load_scale = sum(abs(load.resultant()) for load in result.loads)
    if load_scale == 0.0:
        return
    if abs(sum_fy) > settings.equilibrium_tol * load_scale:
        warnings.warn(
            f"vertical equilibrium residual {sum_fy:.6g} N exceeds tolerance",
            RuntimeWarning,
        )
    if abs(sum_m) > settings.equilibrium_tol * load_scale * max(result.span, 1.0):
        warnings.warn(
            f"moment equilibrium residual {sum_m:.6g} N*m exceeds tolerance",
            RuntimeWarning,
        )


def solve(geometry: BeamGeometry, settings: Optional[SolverSettings] = None) -> AnalysisResult:
    """Reactions and sampled shear/moment/rotation/deflection for one resolved load set.

    Two pinned/roller supports are solved by statics; anything else goes through the
    stiffness method. Raises UnstableStructure for mechanisms and NumericalInstability
    for ill-conditioned systems.
    """
    settings = settings or SolverSettings()
    settings.validate()
    geometry.check_stability()

    if geometry.is_determinate() and not settings.force_stiffness:
        method = "statics"
        forces = determinate_reactions(geometry)
        moments: Dict[float, float] = {x: 0.0 for x in forces}
    else:
        method = "stiffness"
        forces, moments = _stiffness_reactions(geometry, settings)
    logger.debug("solving span %.4g m with %d supports by %s", geometry.span, len(geometry.supports), method)

    fields = recover_fields(geometry, forces, moments, settings.points_per_segment)
    for label, values in (("deflection", fields.deflection), ("moment", fields.moment)):
        if not np.all(np.isfinite(values)):
            raise NumericalInstability(f"recovered {label} contains non-finite values")

    reactions: Dict[float, Reaction] = {}
    for support in geometry.supports:
        reactions[support.position] = (
            0.0,
            forces.get(support.position, 0.0),
            moments.get(support.position, 0.0),
        )

    result = AnalysisResult(
        span=geometry.span,
        x_values=fields.x,
        shear_force=fields.shear,
        bending_moment=fields.moment,
        deflection=fields.deflection,
        rotation=fields.rotation,
        normal_force=np.zeros_like(fields.x),
        reactions=reactions,
        loads=geometry.loads,
        method=method,
    )
    _check_equilibrium(result, settings)
    return result
