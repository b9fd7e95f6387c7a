from __future__ import annotations

from beamcore.analysis.model import AnalysisModel
from beamcore.model.geometry import BeamGeometry


def build_analysis_model(geometry: BeamGeometry) -> AnalysisModel:
    """One node per restraining support, one element between neighbouring supports.

    Load boundaries are not nodes: loads inside an element enter as fixed-end forces and
    loads on an overhang are carried to the outermost support by statics.
    """
    model = AnalysisModel(tol=geometry.tol)
    positions = sorted(s.position for s in geometry.restraining_supports())
    for x in positions:
        model.add_node(x)
    for idx in range(len(positions) - 1):
        model.add_element(idx, idx + 1, geometry.E, geometry.I)
    return model
