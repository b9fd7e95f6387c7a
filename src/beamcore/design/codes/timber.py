from __future__ import annotations

from beamcore.design.codes.base import Capacity, CodeRules, require_strength
from beamcore.design.parameters import DesignParameters
from beamcore.design.section import SectionProperties


class TimberRules(CodeRules):
    """
    Timber bending and shear capacity shell.

    - Bending:  phi * k1 * k4 * k5 * k8 * fb * Z
    - Shear:    phi * k1 * k4 * k5 * fs * (2/3) * A

    k1 (load duration), k4 (moisture), k5 (load sharing) and k8 (stability) come from
    DesignParameters.k_factors; the tables that produce them belong to the standard.
    """

    name = "timber"

    def bending_capacity(self, section: SectionProperties, params: DesignParameters) -> Capacity:
        fb = require_strength(section, "fb")
        factors = {
            "phi": params.phi,
            "k1": params.k("k1"),
            "k4": params.k("k4"),
            "k5": params.k("k5"),
            "k8": params.k("k8"),
            "fb": fb,
            "Z": section.Zx,
        }
        value = factors["phi"] * factors["k1"] * factors["k4"] * factors["k5"] * factors["k8"] * fb * section.Zx
        return Capacity(value=value, factors=factors, limit_state="bending strength")

    def shear_capacity(self, section: SectionProperties, params: DesignParameters) -> Capacity:
        fs = require_strength(section, "fs")
        shear_plane = 2.0 / 3.0 * section.A
        factors = {
            "phi": params.phi,
            "k1": params.k("k1"),
            "k4": params.k("k4"),
            "k5": params.k("k5"),
            "fs": fs,
            "As": shear_plane,
        }
        value = factors["phi"] * factors["k1"] * factors["k4"] * factors["k5"] * fs * shear_plane
        return Capacity(value=value, factors=factors, limit_state="shear strength")
