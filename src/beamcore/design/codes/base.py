from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict

from beamcore.design.parameters import DesignParameters
from beamcore.design.section import SectionProperties
from beamcore.errors import InvalidGeometry


@dataclass(frozen=True)
class Capacity:
    """A design capacity (N*m or N) with the factors that produced it."""

    value: float
    factors: Dict[str, float] = field(default_factory=dict)
    limit_state: str = ""


class CodeRules(ABC):
    """Capacity formulas of one design standard for one material."""

    name: str = "code rules"

    @abstractmethod
    def bending_capacity(self, section: SectionProperties, params: DesignParameters) -> Capacity:
        ...

    @abstractmethod
    def shear_capacity(self, section: SectionProperties, params: DesignParameters) -> Capacity:
        ...

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"


def require_strength(section: SectionProperties, attr: str) -> float:
    value = getattr(section, attr)
    if value is None or not value > 0.0:
        raise InvalidGeometry(f"section {section.name!r} has no {attr} strength", kind="section")
    return float(value)
