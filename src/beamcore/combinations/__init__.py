from __future__ import annotations

from beamcore.combinations.engine import (
    COMBINATION_TYPES,
    CombinationSummary,
    CombinationType,
    LoadCaseFactor,
    LoadCombination,
    combination_summary,
    combine,
    computed_result,
    is_zero_result,
    reaction_combinations,
)
from beamcore.combinations.standard import classify_combination, standard_combinations
from beamcore.combinations.transfer import support_reaction, transfer_reaction_load

__all__ = [
    "COMBINATION_TYPES",
    "CombinationSummary",
    "CombinationType",
    "LoadCaseFactor",
    "LoadCombination",
    "classify_combination",
    "combination_summary",
    "combine",
    "computed_result",
    "is_zero_result",
    "reaction_combinations",
    "standard_combinations",
    "support_reaction",
    "transfer_reaction_load",
]
