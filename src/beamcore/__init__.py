"""
beamcore - numerical engine for single-span and continuous beams.

- Beam solver: statics for simply supported spans, 2D stiffness method otherwise,
  with shear, moment, rotation and deflection recovered along the span.
- Load combinations: factored superposition of load cases (Dead, Live, Wind, ...).
- Design checks: bending and shear utilization against pluggable code rules,
  batched over every combination of an element.
"""

from beamcore.analysis import AnalysisResult, Result, SolverSettings, solve
from beamcore.combinations import (
    LoadCaseFactor,
    LoadCombination,
    combine,
    computed_result,
    reaction_combinations,
    standard_combinations,
)
from beamcore.design import (
    DesignParameters,
    DesignReport,
    DesignResult,
    DesignSettings,
    Element,
    SectionLibrary,
    SectionProperties,
    check,
    design_all_combinations,
    governing,
)
from beamcore.errors import (
    BeamcoreError,
    InvalidGeometry,
    NumericalInstability,
    UndefinedCombination,
    UnresolvedSection,
    UnstableStructure,
)
from beamcore.logging_setup import setup_logging
from beamcore.model import AppliedLoad, BeamGeometry, Force, Load, Support

__all__ = [
    "AnalysisResult",
    "AppliedLoad",
    "BeamGeometry",
    "BeamcoreError",
    "DesignParameters",
    "DesignReport",
    "DesignResult",
    "DesignSettings",
    "Element",
    "Force",
    "InvalidGeometry",
    "Load",
    "LoadCaseFactor",
    "LoadCombination",
    "NumericalInstability",
    "Result",
    "SectionLibrary",
    "SectionProperties",
    "SolverSettings",
    "Support",
    "UndefinedCombination",
    "UnresolvedSection",
    "UnstableStructure",
    "check",
    "combine",
    "computed_result",
    "design_all_combinations",
    "governing",
    "reaction_combinations",
    "setup_logging",
    "solve",
    "standard_combinations",
]
