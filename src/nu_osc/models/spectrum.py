from nu_osc.globals.backend import Backend
from nu_osc.models.parameters import OscillationParameters


def build_hamiltonian(parameters: OscillationParameters, decay=None):
    """
    Diagonal vacuum Hamiltonian (mass basis) built from the Δm² entries.

    Parameters
    ----------
    parameters : OscillationParameters
        Only the mass-squared differences are used.
    decay : array-like, optional
        Decay/damping parameter λ_k for each mass eigenstate, added as an
        imaginary part i·λ_k. Defaults to zeros.

    Returns
    -------
    H : xp.ndarray, shape (N,), complex
        H_k = (Σ_{k<m} Δm²_km − Σ_{m<k} Δm²_mk + i λ_k) / N
    """
    xp = Backend.xp()
    n = parameters.n_neutrinos

    if decay is None:
        decay = xp.zeros(n, dtype=Backend.real_dtype())
    else:
        decay = xp.asarray(decay, dtype=Backend.real_dtype())
        if decay.shape != (n,):
            raise ValueError(f"decay must have shape ({n},), got {tuple(decay.shape)}")

    dm2 = xp.asarray(parameters.get_mass_squared_diff_matrix(), dtype=Backend.real_dtype())

    H = xp.zeros(n, dtype=Backend.complex_dtype())
    for i in range(n):
        for k in range(n):
            if i < k:
                H[i] += dm2[i, k]
            elif k < i:
                H[i] -= dm2[k, i]
        H[i] += 1j * decay[i]
    return H / n
