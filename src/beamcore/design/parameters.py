from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Literal, Optional

MoistureCondition = Literal["dry", "wet"]
TemperatureCondition = Literal["normal", "elevated"]


@dataclass
class DesignParameters:
    """Code, material and restraint inputs of a capacity check.

    k_factors holds code modification factors by name ("k1" ... "k12"); factors
    not supplied are taken as 1.0 by the rules that use them.
    """

    country: str = "New Zealand"
    material_type: str = "timber"
    moisture_condition: MoistureCondition = "dry"
    temperature_condition: TemperatureCondition = "normal"
    phi: float = 0.9
    loading_scenario: int = 1
    member_type: str = "solid timber"
    member_spacing: float = 1.0
    member_count: int = 1
    lateral_restraint_spacing: float = 1.0
    torsional_restraint_spacing: float = 1.0
    k_factors: Dict[str, float] = field(default_factory=dict)
    deflection_limit: Optional[float] = None
    code_parameters: Dict[str, Any] = field(default_factory=dict)

    def k(self, name: str) -> float:
        return float(self.k_factors.get(name, 1.0))

    def validate(self) -> None:
        if not 0.0 < self.phi <= 1.0:
            raise ValueError("phi must be in (0, 1]")
        if self.member_count < 1:
            raise ValueError("member_count must be at least 1")
        if self.member_spacing <= 0.0:
            raise ValueError("member_spacing must be positive")
        if self.lateral_restraint_spacing <= 0.0 or self.torsional_restraint_spacing <= 0.0:
            raise ValueError("restraint spacings must be positive")
        if self.deflection_limit is not None and self.deflection_limit <= 0.0:
            raise ValueError("deflection_limit must be positive")
        for name, value in self.k_factors.items():
            if value <= 0.0:
                raise ValueError(f"{name} must be positive, got {value}")


@dataclass
class DesignSettings:
    utilization_tolerance: float = 1e-6
    max_workers: Optional[int] = None
    zero_tol: float = 0.0

    def validate(self) -> None:
        if self.utilization_tolerance < 0.0:
            raise ValueError("utilization_tolerance must be non-negative")
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        if self.zero_tol < 0.0:
            raise ValueError("zero_tol must be non-negative")
