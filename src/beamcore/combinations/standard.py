from __future__ import annotations

from typing import List, Literal, Optional, Tuple

from beamcore.combinations.engine import LoadCaseFactor, LoadCombination

CombinationPattern = Literal[
    "1.35G",
    "roof_distributed_1.2G+1.5Q",
    "roof_concentrated_1.2G+1.5Q",
    "floor_distributed_1.2G+1.5Q",
    "floor_concentrated_1.2G+1.5Q",
    "permanent_1.2G+ψlQ",
    "permanent_wind_imposed_1.2G+ψcQ+Wu",
    "permanent_wind_reversal_0.9G+Wu",
    "permanent_earthquake_imposed_G+Eu+ψcQ",
    "fire",
]

SUPPORTED_CODES: Tuple[str, ...] = ("AS/NZS 1170",)


def _combo(name: str, kind: str, *factors: Tuple[str, float], term_factor: float = 1.0) -> LoadCombination:
    return LoadCombination(
        name=name,
        combination_type=kind,  # type: ignore[arg-type]
        factors=tuple(LoadCaseFactor(case, value, term_factor) for case, value in factors),
        code_reference="AS/NZS 1170.0",
    )


def standard_combinations(
    code: str = "AS/NZS 1170",
    psi_c: float = 0.4,
    psi_l: float = 0.4,
    psi_s: float = 0.7,
    long_term_factor: float = 1.0,
) -> List[LoadCombination]:
    """The usual strength and serviceability combinations for dead, live, wind and earthquake.

    The psi values are combination/long-term/short-term live load factors and are data
    for the caller to supply for the occupancy at hand.
    """
    if code not in SUPPORTED_CODES:
        raise ValueError(f"no standard combinations for code {code!r}; expected one of {SUPPORTED_CODES}")
    return [
        _combo("1.35G", "ultimate", ("Dead", 1.35)),
        _combo("1.2G + 1.5Q", "ultimate", ("Dead", 1.2), ("Live", 1.5)),
        _combo("1.2G + ψlQ", "ultimate", ("Dead", 1.2), ("Live", psi_l)),
        _combo("1.2G + ψcQ + Wu", "ultimate", ("Dead", 1.2), ("Live", psi_c), ("Wind", 1.0)),
        _combo("0.9G + Wu", "ultimate", ("Dead", 0.9), ("Wind", 1.0)),
        _combo("G + Eu + ψcQ", "ultimate", ("Dead", 1.0), ("Seismic", 1.0), ("Live", psi_c)),
        _combo("G + ψsQ", "serviceability", ("Dead", 1.0), ("Live", psi_s)),
        _combo("G + ψlQ", "serviceability", ("Dead", 1.0), ("Live", psi_l), term_factor=long_term_factor),
    ]


def _factor(combination: LoadCombination, case: str) -> float:
    for factor in combination.active_factors():
        if factor.load_case == case:
            return factor.factor
    return 0.0


def _close(a: float, b: float, tol: float = 0.01) -> bool:
    return abs(a - b) <= tol


def classify_combination(combination: LoadCombination) -> Optional[CombinationPattern]:
    """Recognise a combination's code pattern from its dead/live/wind/seismic factors.

    Returns None when nothing matches; 1.2G + 1.5Q is told apart by "roof"/"floor" and
    "distributed"/"concentrated" in the name or description, defaulting to floor distributed.
    """
    dead = _factor(combination, "Dead")
    live = _factor(combination, "Live")
    wind = _factor(combination, "Wind")
    seismic = _factor(combination, "Seismic")
    text = f"{combination.name} {combination.description or ''}".lower()

    if _close(dead, 1.35) and _close(live, 0.0) and _close(wind, 0.0) and _close(seismic, 0.0):
        return "1.35G"
    if _close(dead, 1.2) and _close(live, 1.5) and _close(wind, 0.0) and _close(seismic, 0.0):
        place = "roof" if "roof" in text else "floor"
        spread = "concentrated" if "concentrated" in text else "distributed"
        return f"{place}_{spread}_1.2G+1.5Q"  # type: ignore[return-value]
    if _close(dead, 1.2) and 0.0 < live < 1.5 and _close(wind, 0.0):
        return "permanent_1.2G+ψlQ"
    if _close(dead, 1.2) and wind > 0.0:
        return "permanent_wind_imposed_1.2G+ψcQ+Wu"
    if _close(dead, 0.9) and wind > 0.0:
        return "permanent_wind_reversal_0.9G+Wu"
    if _close(dead, 1.0) and seismic > 0.0:
        return "permanent_earthquake_imposed_G+Eu+ψcQ"
    if "fire" in text:
        return "fire"
    return None
