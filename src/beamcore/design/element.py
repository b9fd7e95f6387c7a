from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterable, List, Optional

from beamcore.analysis.results import AnalysisResult
from beamcore.analysis.settings import SolverSettings
from beamcore.analysis.solver import solve
from beamcore.combinations.engine import LoadCombination, combine
from beamcore.design.batch import DesignReport, design_all_combinations
from beamcore.design.codes import CodeRules
from beamcore.design.parameters import DesignParameters, DesignSettings
from beamcore.design.section import SectionLibrary, SectionProperties
from beamcore.model.geometry import BeamGeometry
from beamcore.model.loads import AppliedLoad, Load
from beamcore.model.supports import Support


@dataclass
class Element:
    """A designable member: span, supports, multi-case loads, combinations and a named section."""

    name: str
    span: float
    supports: List[Support] = field(default_factory=list)
    applied_loads: List[AppliedLoad] = field(default_factory=list)
    combinations: List[LoadCombination] = field(default_factory=list)
    section_name: Optional[str] = None
    section_count: int = 1
    design_parameters: DesignParameters = field(default_factory=DesignParameters)

    def section(self, library: SectionLibrary) -> SectionProperties:
        """Resolved section scaled by the number of members acting together."""
        return library.resolve(self.section_name).scaled(self.section_count)

    def geometry(self, section: SectionProperties, loads: Iterable[Load] = ()) -> BeamGeometry:
        return BeamGeometry(
            span=self.span,
            E=section.E,
            I=section.Ix,
            A=section.A,
            supports=tuple(self.supports),
            loads=tuple(loads),
        )

    def analyze(
        self,
        combination: LoadCombination,
        library: SectionLibrary,
        solver_settings: Optional[SolverSettings] = None,
    ) -> AnalysisResult:
        section = self.section(library)
        loads = combine(self.applied_loads, combination)
        return solve(self.geometry(section, loads), solver_settings)

    def design(
        self,
        library: SectionLibrary,
        rules: Optional[CodeRules] = None,
        settings: Optional[DesignSettings] = None,
        solver_settings: Optional[SolverSettings] = None,
    ) -> DesignReport:
        section = self.section(library)
        return design_all_combinations(
            self.geometry(section),
            self.applied_loads,
            self.combinations,
            section,
            self.design_parameters,
            rules=rules,
            settings=settings,
            solver_settings=solver_settings,
        )
