from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass, field
from typing import List, Literal, Optional, Sequence, Tuple, Union

from beamcore.analysis.settings import SolverSettings
from beamcore.combinations.engine import LoadCombination, computed_result, is_zero_result
from beamcore.design.checker import DesignResult, check
from beamcore.design.codes import CodeRules, rules_for
from beamcore.design.parameters import DesignParameters, DesignSettings
from beamcore.design.section import SectionProperties
from beamcore.errors import UndefinedCombination, UnresolvedSection
from beamcore.model.geometry import BeamGeometry
from beamcore.model.loads import AppliedLoad

logger = logging.getLogger(__name__)

OverallStatus = Literal["PASS", "FAIL", "INCOMPLETE", "NONE"]


@dataclass(frozen=True)
class CombinationIssue:
    name: str
    reason: str
    error: Optional[BaseException] = None


@dataclass
class DesignReport:
    results: List[DesignResult] = field(default_factory=list)
    skipped: List[CombinationIssue] = field(default_factory=list)
    failures: List[CombinationIssue] = field(default_factory=list)

    @property
    def governing(self) -> Optional[DesignResult]:
        return governing(self.results)

    @property
    def overall_status(self) -> OverallStatus:
        """FAIL if any check failed; INCOMPLETE if some combination errored; NONE if nothing was checked."""
        if any(not r.passed for r in self.results):
            return "FAIL"
        if self.failures:
            return "INCOMPLETE"
        if not self.results:
            return "NONE"
        return "PASS"


def governing(results: Sequence[DesignResult]) -> Optional[DesignResult]:
    """The result with the highest utilization; the first one wins ties."""
    best: Optional[DesignResult] = None
    for result in results:
        if best is None or result.governing_utilization > best.governing_utilization:
            best = result
    return best


_Outcome = Tuple[str, Union[DesignResult, CombinationIssue]]


def _design_one(
    geometry: BeamGeometry,
    applied_loads: Sequence[AppliedLoad],
    combination: LoadCombination,
    section: SectionProperties,
    params: DesignParameters,
    rules: CodeRules,
    settings: DesignSettings,
    solver_settings: Optional[SolverSettings],
) -> _Outcome:
    name = combination.name
    if not combination.is_active:
        return "skipped", CombinationIssue(name, "combination is inactive")
    if combination.is_reaction:
        return "skipped", CombinationIssue(name, "reaction combinations are not designed")
    try:
        loads = computed_result(applied_loads, combination)
        if loads is None:
            return "skipped", CombinationIssue(name, "no active load case factors")
        if is_zero_result(loads, settings.zero_tol):
            return "skipped", CombinationIssue(name, "all combined loads are zero")
        result = check(
            geometry,
            loads,
            section,
            params,
            rules=rules,
            settings=settings,
            combination=combination,
            solver_settings=solver_settings,
        )
    except UndefinedCombination as exc:
        return "skipped", CombinationIssue(name, exc.reason, exc)
    except Exception as exc:
        # Any error from one combination, including user-supplied rules, is recorded and the batch goes on.
        return "failed", CombinationIssue(name, f"{type(exc).__name__}: {exc}", exc)
    return "result", result


def design_all_combinations(
    geometry: BeamGeometry,
    applied_loads: Sequence[AppliedLoad],
    combinations: Sequence[LoadCombination],
    section: Optional[SectionProperties],
    params: DesignParameters,
    rules: Optional[CodeRules] = None,
    settings: Optional[DesignSettings] = None,
    solver_settings: Optional[SolverSettings] = None,
) -> DesignReport:
    """Check every combination independently; one failing combination never stops the others.

    Results keep the order of `combinations` whether or not they are fanned out to threads.
    """
    settings = settings or DesignSettings()
    settings.validate()
    if section is None:
        raise UnresolvedSection(None)
    rules = rules or rules_for(params)

    def run(combination: LoadCombination) -> _Outcome:
        return _design_one(geometry, applied_loads, combination, section, params, rules, settings, solver_settings)

    if settings.max_workers and settings.max_workers > 1 and len(combinations) > 1:
        with ThreadPoolExecutor(max_workers=settings.max_workers) as pool:
            outcomes = list(pool.map(run, combinations))
    else:
        outcomes = [run(combination) for combination in combinations]

    report = DesignReport()
    for kind, payload in outcomes:
        if kind == "result":
            report.results.append(payload)  # type: ignore[arg-type]
            logger.info("checked %s: %s", payload.combination_name, payload.status)  # type: ignore[union-attr]
        elif kind == "skipped":
            report.skipped.append(payload)  # type: ignore[arg-type]
            logger.warning("skipped %s: %s", payload.name, payload.reason)  # type: ignore[union-attr]
        else:
            report.failures.append(payload)  # type: ignore[arg-type]
            logger.warning("combination %s failed: %s", payload.name, payload.reason)  # type: ignore[union-attr]
    return report
