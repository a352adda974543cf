def number_mixing_angles(n: int) -> int:
    """Number of pairwise rotations for n neutrino generations."""
    if n < 1:
        return 0
    return n * (n - 1) // 2


def number_cp_phases(n: int) -> int:
    """Number of independent Dirac CP phases for n neutrino generations."""
    if n < 1:
        return 0
    return (n - 1) * (n - 2) // 2


def ordered_index_pairs(n: int) -> list[tuple[int, int]]:
    """
    Return the 1-based generation pairs (j, i), j < i <= n, in rotation order.

    The outer loop runs over i, the inner one over j, e.g. n=3 gives
    [(1, 2), (1, 3), (2, 3)].
    """
    pairs = []
    for i in range(1, n + 1):
        for j in range(1, i):
            pairs.append((j, i))
    return pairs
