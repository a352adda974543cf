import math
from dataclasses import dataclass

# phase = OSC_PHASE_COEFF * H[eV^2] * L[km] / E[GeV]
OSC_PHASE_COEFF = 2.534

GF_EV_CM3 = 8.961877245622253e-38   # G_F (hbar c)^3 [eV cm^3]
AVOGADRO = 6.02214076e23            # [mol^-1]
EV_SCALE = 1e9                      # GeV -> eV


@dataclass(frozen=True)
class PhysicalConstants:
    """
    Reference values entering the matter potential.

    Attributes
    ----------
    fermi_constant : float
        Fermi coupling constant, G_F (hbar c)^3 in eV cm^3.
    avogadro : float
        Avogadro constant in mol^-1.
    energy_scale : float
        Unit conversion between the constants' natural units and eV.
    """

    fermi_constant: float = GF_EV_CM3
    avogadro: float = AVOGADRO
    energy_scale: float = EV_SCALE

    @property
    def matter_potential_coefficient(self) -> float:
        """A / rho, with rho in g/cm^3."""
        return 2 * math.sqrt(2) * self.fermi_constant * self.avogadro * self.energy_scale


DEFAULT_CONSTANTS = PhysicalConstants()
