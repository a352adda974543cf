from nu_osc.globals.backend import Backend
from nu_osc.hamiltonian.matter import matter_oscillation_matrices
from nu_osc.models.mixing import build_mixing_matrix
from nu_osc.models.parameters import OscillationParameters
from nu_osc.models.spectrum import build_hamiltonian
from nu_osc.utils.units import OSC_PHASE_COEFF, PhysicalConstants, DEFAULT_CONSTANTS


def _check_energy_and_baseline(energy, baseline):
    xp = Backend.xp()
    if not bool(xp.all(xp.asarray(energy) > 0)):
        raise ValueError(f"Neutrino energy must be > 0 GeV, got {energy}")
    if not bool(xp.all(xp.asarray(baseline) >= 0)):
        raise ValueError(f"Baseline must be ≥ 0 km, got {baseline}")


def _amplitudes(U, H, L_over_E):
    """
    A = U exp(-i D) U† for each entry of L_over_E (nE,), D = 2.534 diag(H) L/E.
    Returns shape (nE, N, N).
    """
    xp = Backend.xp()
    phases = OSC_PHASE_COEFF * L_over_E[:, None] * H[None, :]     # (nE, nF)
    D = xp.exp(-1j * phases)                                        # (nE, nF)
    Ud = xp.conj(U.T)
    return (U[None, :, :] * D[:, None, :]) @ Ud[None, :, :]


def transition_probability(U, H, energy, baseline):
    """
    Flavour transition probabilities P = |U exp(-i D) U†|².

    Parameters
    ----------
    U : (N, N) complex
        Unitary mixing matrix (vacuum or matter).
    H : (N,) complex
        Hamiltonian eigenvalues [eV²].
    energy : float
        Neutrino energy [GeV], > 0.
    baseline : float
        Propagation distance [km], ≥ 0.

    Returns
    -------
    P : (N, N) real
        P[a, b] probability for a neutrino produced as flavour a to be
        detected as flavour b.
    """
    _check_energy_and_baseline(energy, baseline)
    xp = Backend.xp()

    U = xp.asarray(U, dtype=Backend.complex_dtype())
    H = xp.asarray(H, dtype=Backend.complex_dtype())
    n = U.shape[0]
    if U.shape != (n, n) or H.shape != (n,):
        raise ValueError(f"Shape mismatch: U has shape {tuple(U.shape)}, H has shape {tuple(H.shape)}.")

    L_over_E = xp.asarray([baseline / energy], dtype=Backend.real_dtype())
    A = _amplitudes(U, H, L_over_E)[0]
    return xp.abs(A) ** 2


def vacuum_transition_probability(parameters: OscillationParameters, energy, baseline):
    """Vacuum form of `transition_probability`, U and H built from `parameters`."""
    H = build_hamiltonian(parameters)
    U = build_mixing_matrix(parameters)
    return transition_probability(U, H, energy, baseline)


class Oscillator:
    """
    Probability calculator over arrays of baselines and energies.

    Vacuum by default; `set_constant_density` switches to constant matter,
    whose eigen-decomposition is recomputed from the current parameters at
    each `probability` call.
    """

    def __init__(
          self,
          parameters: OscillationParameters,
          decay=None,
          constants: PhysicalConstants = DEFAULT_CONSTANTS
    ):
        self.parameters = parameters
        self.decay = decay
        self.constants = constants
        self._rho_in_g_per_cm3 = None

    @property
    def n_neutrinos(self):
        return self.parameters.n_neutrinos

    @property
    def density(self):
        return self._rho_in_g_per_cm3

    def use_vacuum(self):
        self._rho_in_g_per_cm3 = None

    def set_constant_density(self, rho_in_g_per_cm3: float):
        self._rho_in_g_per_cm3 = float(rho_in_g_per_cm3)

    def get_matrices(self):
        """Return (U, H) used for propagation in the current environment."""
        U = build_mixing_matrix(self.parameters)
        H = build_hamiltonian(self.parameters, decay=self.decay)
        if self._rho_in_g_per_cm3 is None:
            return U, H
        H_matter, U_matter = matter_oscillation_matrices(
            U, H, self._rho_in_g_per_cm3, constants=self.constants
        )
        return U_matter, H_matter

    def probability(self, L_km, E_GeV, flavor_emit=None, flavor_det=None):
        # unify array format
        L, E = self._generate_L_and_E_arrays(L_km, E_GeV)
        flavor_emit = self._format_flavor_arg(flavor_emit)
        flavor_det = self._format_flavor_arg(flavor_det)
        _check_energy_and_baseline(E, L)

        U, H = self.get_matrices()
        A = _amplitudes(U, H, L / E)                       # (nE, nF, nF)
        A = A[:, flavor_emit, :][:, :, flavor_det]         # (nE, nFe, nFd)
        prob = Backend.xp().abs(A) ** 2

        # back to CPU
        return Backend.from_device(prob.squeeze())

    def _generate_L_and_E_arrays(self, L_km, E_GeV):
        xp = Backend.xp()

        L_in = xp.asarray(L_km, dtype=Backend.real_dtype()).reshape(-1)
        E_in = xp.asarray(E_GeV, dtype=Backend.real_dtype()).reshape(-1)

        # pairwise semantics, a single value is broadcast on the other array
        if L_in.size == 1 and E_in.size > 1:
            return xp.broadcast_to(L_in, E_in.shape), E_in
        if E_in.size == 1 and L_in.size > 1:
            return L_in, xp.broadcast_to(E_in, L_in.shape)
        if L_in.size != E_in.size:
            raise ValueError(
                f"Length mismatch: L_km has {L_in.size}, E_GeV has {E_in.size}. "
                "They must match for pairwise propagation."
            )
        return L_in, E_in

    def _format_flavor_arg(self, arg):
        """
        Normalize to list[int].
        Allowed: None → full range [0..n_neutrinos-1], int, list[int].
        """
        if arg is None:
            return list(range(self.n_neutrinos))

        if isinstance(arg, int):
            out = [arg]
        elif isinstance(arg, list) and all(isinstance(x, int) for x in arg):
            out = list(arg)
        else:
            raise TypeError("Flavor arg must be None, int, or list of int.")

        for f in out:
            if not 0 <= f < self.n_neutrinos:
                raise IndexError(f"flavor index {f} out of range for n={self.n_neutrinos}")
        return out
