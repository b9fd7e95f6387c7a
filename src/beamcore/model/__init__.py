from beamcore.model.geometry import BeamGeometry
from beamcore.model.loads import LOAD_CASE_TYPES, LOAD_TYPES, AppliedLoad, Force, Load, LoadType
from beamcore.model.supports import FIXITIES, Fixity, Support

__all__ = [
    "AppliedLoad",
    "BeamGeometry",
    "FIXITIES",
    "Fixity",
    "Force",
    "LOAD_CASE_TYPES",
    "LOAD_TYPES",
    "Load",
    "LoadType",
    "Support",
]
