from beamcore.io.payload import geometry_from_dict, geometry_to_dict, load_from_dict, result_to_dict

__all__ = [
    "geometry_from_dict",
    "geometry_to_dict",
    "load_from_dict",
    "result_to_dict",
]
