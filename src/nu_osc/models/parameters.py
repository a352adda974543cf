import numpy as np


class OscillationParameters:
    """
    Raw oscillation parameters for N neutrino generations.

    Initialize with:
        OscillationParameters(3, mixing_angles={(1, 2): 0.58})

    Then set single entries via:
        set_mixing_angle(1, 3, 0.15)
        set_mass_squared_diff(1, 2, 7.42e-5)
        set_cp_phase(1, 3, np.deg2rad(195))

    Attributes
    ----------
    _mixing_angles : np.ndarray
        Upper-triangular matrix of mixing angles θ_ij [rad].
    _mass_squared_diff : np.ndarray
        Upper-triangular matrix of Δm²_ij [eV²].
    _cp_phases : np.ndarray
        Upper-triangular matrix of CP phases δ_ij [rad]. A zero entry means
        no phase is applied to the (i,j) rotation.

    Only entries with i < j are meaningful; indices are 1-based.
    """

    def __init__(
          self,
          n_neutrinos: int,
          mixing_angles: dict = None,
          mass_squared_diff: dict = None,
          cp_phases: dict = None
    ):
        if isinstance(n_neutrinos, bool) or not isinstance(n_neutrinos, (int, np.integer)):
            raise ValueError(f"Number of neutrinos must be an integer, got {n_neutrinos!r}.")
        if n_neutrinos < 1:
            raise ValueError(f"Number of neutrinos must be ≥ 1, got {n_neutrinos}.")
        self._n_neutrinos = int(n_neutrinos)

        shape = (self._n_neutrinos, self._n_neutrinos)
        self._mixing_angles = np.zeros(shape, dtype=float)
        self._mass_squared_diff = np.zeros(shape, dtype=float)
        self._cp_phases = np.zeros(shape, dtype=float)

        for (i, j), val in (mixing_angles or {}).items():
            self.set_mixing_angle(i, j, val)
        for (i, j), val in (mass_squared_diff or {}).items():
            self.set_mass_squared_diff(i, j, val)
        for (i, j), val in (cp_phases or {}).items():
            self.set_cp_phase(i, j, val)

    @property
    def n_neutrinos(self):
        return self._n_neutrinos

    # ---------- setters ----------
    def set_mixing_angle(self, i: int, j: int, value: float):
        self._mixing_angles[self._check_pair(i, j)] = value

    def set_mass_squared_diff(self, i: int, j: int, value: float):
        self._mass_squared_diff[self._check_pair(i, j)] = value

    def set_cp_phase(self, i: int, j: int, value: float):
        self._cp_phases[self._check_pair(i, j)] = value

    # ---------- getters ----------
    def mixing_angle(self, i: int, j: int) -> float:
        return float(self._mixing_angles[self._check_pair(i, j)])

    def mass_squared_diff(self, i: int, j: int) -> float:
        return float(self._mass_squared_diff[self._check_pair(i, j)])

    def cp_phase(self, i: int, j: int) -> float:
        return float(self._cp_phases[self._check_pair(i, j)])

    def has_cp_phase(self, i: int, j: int) -> bool:
        """True if a non-zero CP phase is stored for (i,j)."""
        return self.cp_phase(i, j) != 0.0

    def get_mixing_angles_matrix(self):
        return self._mixing_angles.copy()

    def get_mass_squared_diff_matrix(self):
        return self._mass_squared_diff.copy()

    def get_cp_phases_matrix(self):
        return self._cp_phases.copy()

    def _check_pair(self, i, j):
        """Validate 1-based (i,j) and return the matching 0-based array index."""
        if not (1 <= i <= self._n_neutrinos and 1 <= j <= self._n_neutrinos):
            raise IndexError(f"indices ({i},{j}) out of range for n={self._n_neutrinos}")
        if i >= j:
            raise ValueError(f"Invalid pair ({i},{j}): parameters are stored for i < j only.")
        return i - 1, j - 1

    # ---------- Utilities ----------
    def summary(self):
        n = self._n_neutrinos
        print(f"Oscillation parameters for {n} neutrino generations:")
        for i in range(n):
            for j in range(i + 1, n):
                theta = self._mixing_angles[i, j]
                delta = self._cp_phases[i, j]
                if theta != 0.0 or delta != 0.0:
                    print(f"  θ{i + 1}{j + 1} = {np.rad2deg(theta):.3f}°, δ{i + 1}{j + 1} = {np.rad2deg(delta):.3f}°")
        for i in range(n):
            for j in range(i + 1, n):
                if self._mass_squared_diff[i, j] != 0.0:
                    print(f"  Δm²_{i + 1}{j + 1} = {self._mass_squared_diff[i, j]:.3e} eV²")

    def __repr__(self):
        return f"OscillationParameters(n_neutrinos={self._n_neutrinos})"
