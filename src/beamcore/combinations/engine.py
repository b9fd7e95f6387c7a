from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Literal, Mapping, Optional, Sequence, Tuple, Union

from beamcore.model.loads import AppliedLoad, Load, magnitude_count

logger = logging.getLogger(__name__)

CombinationType = Literal["ultimate", "serviceability", "reaction", "other"]
COMBINATION_TYPES: Tuple[CombinationType, ...] = ("ultimate", "serviceability", "reaction", "other")


def normalize_combination_type(value: str) -> CombinationType:
    key = str(value).strip().lower()
    if key not in COMBINATION_TYPES:
        raise ValueError(f"unknown combination type {value!r}; expected one of {COMBINATION_TYPES}")
    return key  # type: ignore[return-value]


@dataclass(frozen=True, slots=True)
class LoadCaseFactor:
    load_case: str
    factor: float
    term_factor: float = 1.0
    is_active: bool = True
    description: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "load_case", str(self.load_case).strip())
        object.__setattr__(self, "factor", float(self.factor))
        object.__setattr__(self, "term_factor", float(self.term_factor))

    @property
    def effective(self) -> float:
        return self.factor * self.term_factor


@dataclass(frozen=True)
class LoadCombination:
    name: str
    combination_type: CombinationType = "ultimate"
    factors: Tuple[LoadCaseFactor, ...] = ()
    description: Optional[str] = None
    is_active: bool = True
    code_reference: Optional[str] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "combination_type", normalize_combination_type(self.combination_type))
        object.__setattr__(self, "factors", tuple(self.factors))

    def active_factors(self) -> List[LoadCaseFactor]:
        return [f for f in self.factors if f.is_active]

    @property
    def is_reaction(self) -> bool:
        return self.combination_type == "reaction"

    @property
    def is_defined(self) -> bool:
        """True when the combination yields a load set that should be analysed."""
        return self.is_active and not self.is_reaction and bool(self.active_factors())


def _component(magnitude: Tuple[float, ...], idx: int) -> float:
    # Single-value forces on a trapezoidal load apply to both ends.
    if idx < len(magnitude):
        return magnitude[idx]
    return magnitude[-1]


def combine_magnitude(load: AppliedLoad, factors: Sequence[LoadCaseFactor]) -> Tuple[float, ...]:
    count = magnitude_count(load.type)
    out: List[float] = []
    for idx in range(count):
        total = 0.0
        for factor in factors:
            if not factor.is_active:
                continue
            for force in load.forces:
                if force.load_case == factor.load_case:
                    total += factor.factor * factor.term_factor * _component(force.magnitude, idx)
        out.append(total)
    return tuple(out)


def combine(applied_loads: Iterable[AppliedLoad], combination: LoadCombination) -> List[Load]:
    """Factored superposition of each applied load's per-case forces.

    Always defined: a combination without active factors yields zero magnitudes.
    One output Load per input, same type and position.
    """
    out: List[Load] = []
    for idx, load in enumerate(applied_loads):
        magnitude = combine_magnitude(load, combination.factors)
        name = load.description or f"{load.type} {idx + 1}"
        out.append(load.as_load(magnitude, name=name))
    return out


def computed_result(applied_loads: Iterable[AppliedLoad], combination: LoadCombination) -> Optional[List[Load]]:
    """The combined loads to analyse, or None when the combination has nothing to analyse."""
    if not combination.is_defined:
        return None
    return combine(applied_loads, combination)


def is_zero_result(loads: Optional[Iterable[Load]], tol: float = 0.0) -> bool:
    if loads is None:
        return True
    return all(load.is_zero(tol) for load in loads)


def load_case_types(applied_loads: Iterable[AppliedLoad]) -> List[str]:
    seen: List[str] = []
    for load in applied_loads:
        for case in load.load_cases():
            if case not in seen:
                seen.append(case)
    return seen


CustomFactor = Union[float, Mapping[str, float]]


def _custom_factor(value: Optional[CustomFactor]) -> Tuple[float, float]:
    if value is None:
        return 1.0, 1.0
    if isinstance(value, Mapping):
        unknown = set(value) - {"factor", "term_factor"}
        if unknown:
            raise ValueError(f"unknown custom factor keys {sorted(unknown)}")
        return float(value.get("factor", 1.0)), float(value.get("term_factor", 1.0))
    return float(value), 1.0


def reaction_combinations(
    applied_loads: Sequence[AppliedLoad],
    combinations: Sequence[LoadCombination],
    custom_factors: Optional[Mapping[str, CustomFactor]] = None,
    force_regenerate: bool = False,
) -> List[LoadCombination]:
    """Add one single-factor reaction combination per load case, keeping the existing ones.

    Load cases are taken from the applied loads and from active factors of existing
    combinations. With force_regenerate, existing reaction combinations are rebuilt.
    A custom factor is either a number or a mapping with "factor" and "term_factor".
    """
    custom_factors = dict(custom_factors or {})
    cases = load_case_types(applied_loads)
    for combination in combinations:
        for factor in combination.active_factors():
            if factor.load_case not in cases:
                cases.append(factor.load_case)

    kept: List[LoadCombination] = []
    existing: Dict[str, LoadCombination] = {}
    for combination in combinations:
        single = combination.is_reaction and len(combination.factors) == 1
        if single and force_regenerate:
            continue
        kept.append(combination)
        if single:
            existing[combination.factors[0].load_case] = combination

    for case in cases:
        if case in existing:
            continue
        factor, term_factor = _custom_factor(custom_factors.get(case))
        kept.append(
            LoadCombination(
                name=f"{case} reaction",
                combination_type="reaction",
                factors=(LoadCaseFactor(case, factor, term_factor, description=f"{case} load case"),),
                description=f"Individual {case.lower()} load case for reaction transfer",
            )
        )
        logger.debug("added reaction combination for load case %s", case)
    return kept


@dataclass
class CombinationSummary:
    total: int
    individual: int
    multi_factor: int
    load_case_types: List[str] = field(default_factory=list)
    missing_individual: List[str] = field(default_factory=list)


def combination_summary(
    applied_loads: Sequence[AppliedLoad], combinations: Sequence[LoadCombination]
) -> CombinationSummary:
    cases = load_case_types(applied_loads)
    active = [c for c in combinations if c.is_active]
    individual = [c for c in active if c.is_reaction and len(c.factors) == 1]
    covered = {c.factors[0].load_case for c in individual}
    return CombinationSummary(
        total=len(combinations),
        individual=len(individual),
        multi_factor=sum(1 for c in active if len(c.factors) > 1),
        load_case_types=cases,
        missing_individual=[case for case in cases if case not in covered],
    )

