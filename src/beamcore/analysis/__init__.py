from __future__ import annotations

from beamcore.analysis.results import AnalysisResult, Result
from beamcore.analysis.settings import SolverSettings
from beamcore.analysis.solver import solve

__all__ = ["AnalysisResult", "Result", "SolverSettings", "solve"]
