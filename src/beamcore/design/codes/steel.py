from __future__ import annotations

from beamcore.design.codes.base import Capacity, CodeRules, require_strength
from beamcore.design.parameters import DesignParameters
from beamcore.design.section import SectionProperties


class SteelYieldingRules(CodeRules):
    """
    Steel section capacity for yielding only.

    - Bending uses the plastic modulus when the section has one (Mp = fy * Sx),
      else the elastic modulus (My = fy * Zx).
    - Shear uses 0.6 * fy over the web area (d * t_w, or A when t_w is unknown).

    Does NOT include lateral-torsional buckling or local buckling reductions.
    """

    name = "steel yielding"

    def bending_capacity(self, section: SectionProperties, params: DesignParameters) -> Capacity:
        fy = require_strength(section, "fy")
        if section.Sx:
            modulus = section.Sx
            limit_state = "yielding (plastic)"
        else:
            modulus = section.Zx
            limit_state = "yielding (elastic)"
        mn = fy * modulus
        return Capacity(
            value=params.phi * mn,
            factors={"phi": params.phi, "fy": fy, "modulus": modulus, "Mn": mn},
            limit_state=limit_state,
        )

    def shear_capacity(self, section: SectionProperties, params: DesignParameters) -> Capacity:
        fy = require_strength(section, "fy")
        web_area = section.web_area
        vn = 0.6 * fy * web_area
        return Capacity(
            value=params.phi * vn,
            factors={"phi": params.phi, "fy": fy, "Aw": web_area, "Vn": vn},
            limit_state="shear yielding",
        )
