from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from beamcore.analysis.results import Reaction
from beamcore.analysis.settings import SolverSettings
from beamcore.analysis.solver import solve
from beamcore.combinations.engine import LoadCaseFactor, LoadCombination, combine, load_case_types
from beamcore.model.geometry import BeamGeometry
from beamcore.model.loads import AppliedLoad, Force

logger = logging.getLogger(__name__)


def support_reaction(
    geometry: BeamGeometry,
    applied_loads: Sequence[AppliedLoad],
    combination: LoadCombination,
    position: float,
    settings: Optional[SolverSettings] = None,
) -> Reaction:
    """(Fx, Fy, Mz) at the support at `position` under any combination, reaction ones included."""
    loads = combine(applied_loads, combination)
    result = solve(geometry.with_loads(loads), settings)
    return result.reaction_at(position)


def transfer_reaction_load(
    geometry: BeamGeometry,
    applied_loads: Sequence[AppliedLoad],
    position: float,
    target_position: float,
    description: Optional[str] = None,
    settings: Optional[SolverSettings] = None,
) -> AppliedLoad:
    """Point load for a supporting member built from this beam's reaction at `position`.

    One force per load case; the upward reaction on this beam becomes a downward
    (positive) load on the supporting member, so uplift transfers as a negative load.
    """
    forces: List[Force] = []
    for case in load_case_types(applied_loads):
        combination = LoadCombination(
            name=f"{case} reaction",
            combination_type="reaction",
            factors=(LoadCaseFactor(case, 1.0),),
        )
        _, fy, _ = support_reaction(geometry, applied_loads, combination, position, settings)
        if fy == 0.0:
            continue
        forces.append(Force(magnitude=(fy,), load_case=case))
        logger.debug("transfer from x=%.4g: %s reaction %.6g N", position, case, fy)

    return AppliedLoad(
        type="point",
        position=(target_position,),
        forces=forces,
        description=description or f"Reaction transfer from support at {position:g} m",
    )
