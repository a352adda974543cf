import numpy as np
import pytest

from nu_osc.hamiltonian.matter import (
    flavor_hamiltonian,
    matter_potential,
    matter_oscillation_matrices,
    matter_oscillation_matrices_from_parameters,
)
from nu_osc.models.mixing import build_mixing_matrix
from nu_osc.models.parameters import OscillationParameters
from nu_osc.models.spectrum import build_hamiltonian
from nu_osc.propagation.oscillator import transition_probability
from nu_osc.utils.units import PhysicalConstants, DEFAULT_CONSTANTS

angles = {(1, 2): np.deg2rad(33.4), (1, 3): np.deg2rad(8.6), (2, 3): np.deg2rad(49)}
phases = {(1, 3): np.deg2rad(195)}
dm2 = {(1, 2): 7.42e-5, (1, 3): 2.517e-3, (2, 3): 2.443e-3}
params = OscillationParameters(3, mixing_angles=angles, mass_squared_diff=dm2, cp_phases=phases)
U_vac = build_mixing_matrix(params)
H_vac = build_hamiltonian(params)


def test_matter_potential_value():
    A = matter_potential(1.0)
    expected = 2 * np.sqrt(2) * 8.961877245622253e-38 * 6.02214076e23 * 1e9
    assert np.isclose(A, expected)
    assert np.isclose(matter_potential(2.6), 2.6 * expected)
    assert matter_potential(0.0) == 0.0


def test_injected_constants():
    doubled = PhysicalConstants(fermi_constant=2 * DEFAULT_CONSTANTS.fermi_constant)
    assert np.isclose(matter_potential(3.0, doubled), 2 * matter_potential(3.0))


def test_flavor_hamiltonian_hermitian():
    H_f = flavor_hamiltonian(U_vac, H_vac)
    assert np.allclose(H_f, H_f.conj().T)
    assert np.isclose(np.trace(H_f), np.sum(H_vac))


def test_zero_density_recovers_vacuum():
    H_m, U_m = matter_oscillation_matrices(U_vac, H_vac, 0.0)
    assert np.allclose(np.sort(H_m.real), np.sort(H_vac.real), atol=1e-15)

    # columns equal up to reordering and phase: |U_m† U_vac| is a permutation
    overlap = np.abs(U_m.conj().T @ U_vac)
    assert np.allclose(np.sort(overlap, axis=1)[:, -1], 1.0)
    assert np.allclose(np.sum(overlap ** 2, axis=0), 1.0)

    for E, L in [(0.5, 295.0), (2.0, 1300.0)]:
        assert np.allclose(
            transition_probability(U_m, H_m, E, L),
            transition_probability(U_vac, H_vac, E, L),
            atol=1e-10,
        )


def test_matter_shifts_electron_entry():
    rho = 2.8
    H_m, U_m = matter_oscillation_matrices(U_vac, H_vac, rho)
    # trace picks up exactly A
    assert np.isclose(np.sum(H_m), np.sum(H_vac) + matter_potential(rho))
    # eigen-decomposition reproduces the shifted flavour hamiltonian
    H_f = flavor_hamiltonian(U_vac, H_vac)
    H_f[0, 0] += matter_potential(rho)
    assert np.allclose(U_m @ np.diag(H_m) @ U_m.conj().T, H_f, atol=1e-15)
    assert np.allclose(U_m @ U_m.conj().T, np.eye(3), atol=1e-12)


def test_from_parameters():
    H_a, U_a = matter_oscillation_matrices_from_parameters(params, 3.0)
    H_b, U_b = matter_oscillation_matrices(U_vac, H_vac, 3.0)
    assert np.allclose(H_a, H_b)
    assert np.allclose(U_a, U_b)


def test_decay_uses_general_solver():
    decay = [0.0, 1e-4, 2e-4]
    H_m, U_m = matter_oscillation_matrices_from_parameters(params, 2.0, decay=decay)
    H_f = flavor_hamiltonian(U_vac, build_hamiltonian(params, decay=decay))
    H_f[0, 0] += matter_potential(2.0)
    assert np.allclose(H_f @ U_m, U_m * H_m[None, :], atol=1e-15)


def test_numerical_failure_propagates():
    with pytest.raises(np.linalg.LinAlgError):
        matter_oscillation_matrices(U_vac, H_vac, np.nan)


def test_shape_mismatch():
    with pytest.raises(ValueError):
        matter_oscillation_matrices(U_vac, H_vac[:2], 1.0)
