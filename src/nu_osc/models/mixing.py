from nu_osc.globals.backend import Backend
from nu_osc.models.indices import ordered_index_pairs
from nu_osc.models.parameters import OscillationParameters


def rotation_matrix(n: int, i: int, j: int, theta, delta=None):
    """
    Return the n x n complex rotation in the (i,j) plane (1-based, i < j).

    R[i,i] = R[j,j] = cos θ, R[i,j] = sin θ e^{-iδ}, R[j,i] = -sin θ e^{+iδ}.
    The phase factor is only applied when delta is given and non-zero.
    """
    xp = Backend.xp()
    theta = xp.asarray(theta, dtype=Backend.real_dtype())
    s, c = xp.sin(theta), xp.cos(theta)

    R = xp.eye(n, dtype=Backend.complex_dtype())
    ii, jj = i - 1, j - 1
    R[ii, ii] = c
    R[jj, jj] = c
    R[ii, jj] = s
    R[jj, ii] = -s
    if delta is not None and delta != 0:
        cp_term = xp.exp(-1j * xp.asarray(delta, dtype=Backend.real_dtype()))
        R[ii, jj] *= cp_term
        R[jj, ii] *= xp.conj(cp_term)
    return R


def build_mixing_matrix(parameters: OscillationParameters):
    """
    Return the full complex mixing matrix U (dim x dim).

    Rotations are generated in `ordered_index_pairs` order and each new one
    is left-multiplied onto the product accumulated so far:
        U = R_{N-1,N} ... R_{1,3} R_{1,2}
    """
    n = parameters.n_neutrinos
    U = Backend.xp().eye(n, dtype=Backend.complex_dtype())

    for (i, j) in ordered_index_pairs(n):
        delta = parameters.cp_phase(i, j) if parameters.has_cp_phase(i, j) else None
        R = rotation_matrix(n, i, j, theta=parameters.mixing_angle(i, j), delta=delta)
        U = R @ U

    return U
