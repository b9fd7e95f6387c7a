from __future__ import annotations

from typing import Callable, Dict

from beamcore.design.codes.base import Capacity, CodeRules
from beamcore.design.codes.steel import SteelYieldingRules
from beamcore.design.codes.timber import TimberRules
from beamcore.design.parameters import DesignParameters

RulesFactory = Callable[[], CodeRules]

_REGISTRY: Dict[str, RulesFactory] = {
    "timber": TimberRules,
    "steel": SteelYieldingRules,
}


def register_rules(material: str, factory: RulesFactory) -> None:
    _REGISTRY[material.strip().lower()] = factory


def rules_for(params: DesignParameters) -> CodeRules:
    key = params.material_type.strip().lower()
    if key not in _REGISTRY:
        raise ValueError(f"no code rules registered for material {params.material_type!r}")
    return _REGISTRY[key]()


__all__ = [
    "Capacity",
    "CodeRules",
    "SteelYieldingRules",
    "TimberRules",
    "register_rules",
    "rules_for",
]
