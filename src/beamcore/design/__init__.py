from __future__ import annotations

from beamcore.design.batch import CombinationIssue, DesignReport, design_all_combinations, governing
from beamcore.design.checker import DesignResult, check
from beamcore.design.codes import Capacity, CodeRules, SteelYieldingRules, TimberRules, register_rules, rules_for
from beamcore.design.element import Element
from beamcore.design.parameters import DesignParameters, DesignSettings
from beamcore.design.section import SectionLibrary, SectionProperties

__all__ = [
    "Capacity",
    "CodeRules",
    "CombinationIssue",
    "DesignParameters",
    "DesignReport",
    "DesignResult",
    "DesignSettings",
    "Element",
    "SectionLibrary",
    "SectionProperties",
    "SteelYieldingRules",
    "TimberRules",
    "check",
    "design_all_combinations",
    "governing",
    "register_rules",
    "rules_for",
]
