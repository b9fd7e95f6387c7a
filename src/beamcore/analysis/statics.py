from __future__ import annotations

from typing import Dict

from beamcore.model.geometry import BeamGeometry


def determinate_reactions(geometry: BeamGeometry) -> Dict[float, float]:
    """Upward support forces of a two-support pinned/roller beam from sum Fy = 0 and sum M = 0."""
    left, right = geometry.restraining_supports()
    a = left.position
    b = right.position

    total = 0.0
    moment_about_a = 0.0
    for load in geometry.loads:
        total -= load.resultant()
        moment_about_a -= load.first_moment(a)

    r_b = -moment_about_a / (b - a)
    r_a = -total - r_b
    return {a: r_a, b: r_b}
