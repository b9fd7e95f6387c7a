from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional, Sequence

from beamcore.analysis.results import AnalysisResult
from beamcore.analysis.settings import SolverSettings
from beamcore.analysis.solver import solve
from beamcore.combinations.engine import LoadCombination, is_zero_result
from beamcore.design.codes import CodeRules, rules_for
from beamcore.design.parameters import DesignParameters, DesignSettings
from beamcore.design.section import SectionProperties
from beamcore.errors import InvalidGeometry, UndefinedCombination, UnresolvedSection
from beamcore.model.geometry import BeamGeometry
from beamcore.model.loads import Load

logger = logging.getLogger(__name__)

Status = Literal["PASS", "FAIL"]


@dataclass(frozen=True, eq=False)
class DesignResult:
    combination_name: str
    combination_type: str
    analysis: AnalysisResult
    bending_capacity: float
    shear_capacity: float
    utilization: Dict[str, float]
    status: Status
    capacities: Dict[str, Any] = field(default_factory=dict)
    rules: str = ""
    tolerance: float = 1e-6

    @property
    def max_shear(self):
        return self.analysis.max_shear

    @property
    def max_bending(self):
        return self.analysis.max_bending

    @property
    def max_deflection(self):
        return self.analysis.max_deflection

    @property
    def reactions(self):
        return self.analysis.reactions

    @property
    def governing_utilization(self) -> float:
        return max(self.utilization.values())

    @property
    def passed(self) -> bool:
        return self.status == "PASS"

    def to_dict(self) -> Dict[str, Any]:
        """Nested plain-python rendering of the result (SI units, position-string reaction keys)."""
        analysis = self.analysis
        bending_util = self.utilization["bending_strength"]
        shear_util = self.utilization["shear_strength"]
        return {
            "combinationName": self.combination_name,
            "combinationType": self.combination_type,
            "bending_capacity": self.bending_capacity,
            "shear_capacity": self.shear_capacity,
            "bending_check": {
                "demand": abs(analysis.max_bending[1]),
                "capacity": self.bending_capacity,
                "utilization": bending_util,
                "status": _status(bending_util, self.tolerance),
            },
            "shear_check": {
                "demand": abs(analysis.max_shear[1]),
                "capacity": self.shear_capacity,
                "utilization": shear_util,
                "status": _status(shear_util, self.tolerance),
            },
            "capacity_data": {
                "status": self.status,
                "utilization": dict(self.utilization),
                "capacities": dict(self.capacities),
            },
            "reactions": analysis.reactions_dict(),
            "max_shear": list(analysis.max_shear),
            "max_bending": list(analysis.max_bending),
            "max_deflection": list(analysis.max_deflection),
            "x_values": analysis.x_values.tolist(),
            "shear_force": analysis.shear_force.tolist(),
            "bending_moment": analysis.bending_moment.tolist(),
            "deflection": analysis.deflection.tolist(),
            "normal_force": analysis.normal_force.tolist(),
        }


def _status(utilization: float, tol: float) -> Status:
    return "PASS" if utilization <= 1.0 + tol else "FAIL"


def _capacities(bending, shear) -> Dict[str, Any]:
    out: Dict[str, Any] = {
        "bending_strength": bending.value,
        "shear_strength": shear.value,
        "bending_limit_state": bending.limit_state,
        "shear_limit_state": shear.limit_state,
    }
    for key, value in bending.factors.items():
        out[key] = value
    for key, value in shear.factors.items():
        out.setdefault(key, value)
    return out


def check(
    geometry: BeamGeometry,
    combined_loads: Optional[Sequence[Load]],
    section: Optional[SectionProperties],
    params: DesignParameters,
    rules: Optional[CodeRules] = None,
    settings: Optional[DesignSettings] = None,
    combination: Optional[LoadCombination] = None,
    solver_settings: Optional[SolverSettings] = None,
) -> DesignResult:
    """Solve one combined load set and compare the peak demands against the section capacities.

    Raises UnresolvedSection when no section is given and UndefinedCombination when
    the combined loads are missing or all zero.
    """
    settings = settings or DesignSettings()
    settings.validate()
    params.validate()
    name = combination.name if combination is not None else "combination"
    kind = combination.combination_type if combination is not None else "ultimate"

    if section is None:
        raise UnresolvedSection(None)
    if combined_loads is None:
        raise UndefinedCombination(name, "no combined loads")
    if is_zero_result(combined_loads, settings.zero_tol):
        raise UndefinedCombination(name, "all combined loads are zero")

    rules = rules or rules_for(params)
    analysis = solve(geometry.with_loads(combined_loads), solver_settings)

    bending = rules.bending_capacity(section, params)
    shear = rules.shear_capacity(section, params)
    if not bending.value > 0.0 or not shear.value > 0.0:
        raise InvalidGeometry(
            f"section {section.name!r} has non-positive capacity (bending {bending.value}, shear {shear.value})",
            kind="section",
        )

    utilization = {
        "bending_strength": abs(analysis.max_bending[1]) / bending.value,
        "shear_strength": abs(analysis.max_shear[1]) / shear.value,
    }
    if kind == "serviceability" and params.deflection_limit:
        allowable = geometry.span / params.deflection_limit
        utilization["deflection"] = abs(analysis.max_deflection[1]) / allowable

    tol = settings.utilization_tolerance
    status: Status = "PASS" if all(_status(u, tol) == "PASS" for u in utilization.values()) else "FAIL"
    logger.debug("%s: %s %s", name, status, {k: round(v, 4) for k, v in utilization.items()})

    return DesignResult(
        combination_name=name,
        combination_type=kind,
        analysis=analysis,
        bending_capacity=bending.value,
        shear_capacity=shear.value,
        utilization=utilization,
        status=status,
        capacities=_capacities(bending, shear),
        rules=rules.name,
        tolerance=tol,
    )
