from nu_osc.globals.backend import Backend
from nu_osc.models.mixing import build_mixing_matrix
from nu_osc.models.parameters import OscillationParameters
from nu_osc.models.spectrum import build_hamiltonian
from nu_osc.utils.flavors import electron
from nu_osc.utils.units import PhysicalConstants, DEFAULT_CONSTANTS


def matter_potential(rho_in_g_per_cm3, constants: PhysicalConstants = DEFAULT_CONSTANTS):
    """A = 2√2 G_F N_A 1e9 ρ, same units as the vacuum Hamiltonian."""
    return constants.matter_potential_coefficient * rho_in_g_per_cm3


def flavor_hamiltonian(U, H):
    """H_f = U diag(H) U†"""
    xp = Backend.xp()
    U = xp.asarray(U, dtype=Backend.complex_dtype())
    H = xp.asarray(H, dtype=Backend.complex_dtype())

    n = U.shape[0]
    if U.shape != (n, n) or H.shape != (n,):
        raise ValueError(f"Shape mismatch: U has shape {tuple(U.shape)}, H has shape {tuple(H.shape)}.")

    return U @ xp.diag(H) @ xp.conj(U.T)


def _is_hermitian(M, tol=1e-12):
    xp = Backend.xp()
    scale = float(xp.max(xp.abs(M)))
    return bool(xp.allclose(M, xp.conj(M.T), rtol=0.0, atol=tol * scale))


def matter_oscillation_matrices(U, H, rho_in_g_per_cm3, constants: PhysicalConstants = DEFAULT_CONSTANTS):
    """
    Eigenvalues and eigenvectors of the flavour Hamiltonian in constant matter.

    Parameters
    ----------
    U : (N, N) complex
        Vacuum mixing matrix.
    H : (N,) complex
        Vacuum Hamiltonian eigenvalues.
    rho_in_g_per_cm3 : float
        Matter density. Only the electron flavour feels the potential.
    constants : PhysicalConstants
        G_F and N_A used for the matter potential.

    Returns
    -------
    H_matter : (N,)
        Matter eigenvalues.
    U_matter : (N, N) complex
        Matter eigenvectors, one per column.

    Without decay terms H_f is Hermitian and is diagonalized with eigh
    (ascending, orthonormal eigenvectors). Otherwise the general solver is
    used. A solver failure raises numpy.linalg.LinAlgError.
    """
    xp = Backend.xp()

    H_flavor = flavor_hamiltonian(U, H)
    H_flavor[electron, electron] += matter_potential(rho_in_g_per_cm3, constants)

    if _is_hermitian(H_flavor):
        eigen_values, eigen_vectors = xp.linalg.eigh(H_flavor)
    else:
        eigen_values, eigen_vectors = xp.linalg.eig(H_flavor)

    H_matter = xp.asarray(eigen_values, dtype=Backend.complex_dtype())
    U_matter = xp.asarray(eigen_vectors, dtype=Backend.complex_dtype())
    return H_matter, U_matter


def matter_oscillation_matrices_from_parameters(
      parameters: OscillationParameters,
      rho_in_g_per_cm3,
      decay=None,
      constants: PhysicalConstants = DEFAULT_CONSTANTS
):
    """Same as `matter_oscillation_matrices`, vacuum U and H built from `parameters`."""
    U_vacuum = build_mixing_matrix(parameters)
    H_vacuum = build_hamiltonian(parameters, decay=decay)
    return matter_oscillation_matrices(U_vacuum, H_vacuum, rho_in_g_per_cm3, constants=constants)
