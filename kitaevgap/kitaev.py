"""Long-range Kitaev model on a square lattice and a scan of its spectral gap."""

from __future__ import annotations

import argparse
from dataclasses import dataclass
from typing import Callable, Iterable, Iterator, Sequence, TextIO

import numpy as np

from kitaevgap.matrix import Matrix

GAP_CEILING = 1e4
DEFAULT_STEPS = 30
DEFAULT_ALPHA_MIN = 0.2
DEFAULT_ALPHA_MAX = 5.0
DEFAULT_MU_MIN = -1.0
DEFAULT_MU_MAX = 5.0
DEFAULT_T = 0.5
DEFAULT_DELTA = 0.5
DEFAULT_BETA = 100.0


@dataclass
class KitaevPoint:
    """One point of the (alpha, mu) phase space together with its gap."""

    alpha: float = 0.0
    mu: float = 0.0
    gap: float = 0.0
    beta: float = DEFAULT_BETA
    t: float = DEFAULT_T
    delta: float = DEFAULT_DELTA
    chern: float = 0.0
    edge_count: int = 0

    def describe(self) -> str:
        """A one-line summary of alpha, mu and the gap."""
        return f"\n[a,m,GAP] = [{self.alpha:.5f},{self.mu:.5f},{self.gap:.5f}]"


def _lattice(lx: int, ly: int) -> tuple[np.ndarray, np.ndarray]:
    if lx < 1 or ly < 1:
        raise ValueError("lattice sides must be positive")
    sites = np.arange(lx * ly)
    return sites % lx, sites // lx


def _offsets(coords: np.ndarray) -> np.ndarray:
    """Matrix of ``coords[k] - coords[j]`` indexed by ``[j, k]``."""
    return coords[np.newaxis, :] - coords[:, np.newaxis]


def _fold(offset: np.ndarray, size: int) -> np.ndarray:
    """Map a periodic offset in ``[0, size)`` to its shortest signed form."""
    return np.where(offset > size - offset, offset - size, offset).astype(float)


def _assemble(t, delta, mu, alpha, beta, r: np.ndarray, s: np.ndarray) -> Matrix:
    n = r.shape[0]
    off = ~np.eye(n, dtype=bool)
    distance = np.where(off, np.hypot(r, s), 1.0)
    hopping = np.where(off, -t * np.exp(-beta * np.log(distance)), 0.0)
    pairing = np.where(off, delta * np.exp(-alpha * np.log(distance)) / distance, 0.0)

    h = np.zeros((2 * n, 2 * n), dtype=complex)
    h[:n, :n] = hopping
    h[n:, n:] = -hopping
    h[:n, n:] = pairing * (r + 1j * s)
    h[n:, :n] = -pairing * (r - 1j * s)
    sites = np.arange(n)
    h[sites, sites] = -mu + 4.0 * t
    h[sites + n, sites + n] = mu - 4.0 * t
    return Matrix(h)


def build_hpp(lx, ly, t, delta, mu, alpha, beta) -> Matrix:
    """Bogoliubov-de Gennes Hamiltonian, periodic in both directions."""
    m, n = _lattice(lx, ly)
    r = _fold(_offsets(m) % lx, lx)
    s = _fold(_offsets(n) % ly, ly)
    return _assemble(t, delta, mu, alpha, beta, r, s)


def build_hpo(lx, ly, t, delta, mu, alpha, beta) -> Matrix:
    """Hamiltonian periodic along x and open along y."""
    m, n = _lattice(lx, ly)
    r = _fold(_offsets(m) % lx, lx)
    s = _offsets(n).astype(float)
    return _assemble(t, delta, mu, alpha, beta, r, s)


def build_hop(lx, ly, t, delta, mu, alpha, beta) -> Matrix:
    """Hamiltonian open along x; y offsets are taken forward modulo ``ly``, unfolded."""
    m, n = _lattice(lx, ly)
    r = _offsets(m).astype(float)
    s = (_offsets(n) % ly).astype(float)
    return _assemble(t, delta, mu, alpha, beta, r, s)


def build_hoo(lx, ly, t, delta, mu, alpha, beta) -> Matrix:
    """Open-open Hamiltonian as far as it is defined: only the first site's on-site terms."""
    m, _ = _lattice(lx, ly)
    sites = m.size
    h = np.zeros((2 * sites, 2 * sites), dtype=complex)
    h[0, 0] = -mu + 2.0
    h[sites, sites] = mu - 2.0
    return Matrix(h)


def smallest_positive(values: Iterable[float], ceiling: float) -> float:
    """The smallest strictly positive value below ``ceiling``, or ``ceiling`` if none."""
    return min((float(v) for v in values if 0.0 < float(v) < ceiling), default=ceiling)


def _descending(top: float, bottom: float, step: float) -> Iterator[float]:
    value = top - step
    while value > bottom - step:
        yield value
        value -= step


PointCallback = Callable[[KitaevPoint, int, float], None]


def scan_phase_space(
    length,
    steps=DEFAULT_STEPS,
    alpha_min=DEFAULT_ALPHA_MIN,
    alpha_max=DEFAULT_ALPHA_MAX,
    mu_min=DEFAULT_MU_MIN,
    mu_max=DEFAULT_MU_MAX,
    t=DEFAULT_T,
    delta=DEFAULT_DELTA,
    beta=DEFAULT_BETA,
    on_point: PointCallback | None = None,
) -> list[KitaevPoint]:
    """Compute the gap of the periodic Hamiltonian over a grid of (alpha, mu).

    Alpha and mu are walked downward from their maxima; at most ``steps**2``
    points are produced. ``on_point`` receives each point, the solver status
    and the progress in percent before that point.
    """
    if steps < 1:
        raise ValueError("steps must be positive")
    if alpha_max < alpha_min or mu_max < mu_min:
        raise ValueError("ranges must not be reversed")
    if length < 1:
        raise ValueError("lattice side must be positive")
    total = steps * steps
    alpha_step = (alpha_max - alpha_min) / steps
    mu_step = (mu_max - mu_min) / steps

    points: list[KitaevPoint] = []
    for alpha in _descending(alpha_max, alpha_min, alpha_step):
        for mu in _descending(mu_max, mu_min, mu_step):
            if len(points) >= total:
                break
            result = build_hpp(length, length, t, delta, mu, alpha, beta).eigen_problem()
            # The final eigenvalue of the solver's ordering is left out of the gap.
            gap = smallest_positive(result.values[:-1], GAP_CEILING)
            point = KitaevPoint(alpha=alpha, mu=mu, gap=gap, beta=beta, t=t, delta=delta)
            progress = 100.0 * len(points) / total
            points.append(point)
            if on_point is not None:
                on_point(point, result.error, progress)
    return points


def write_gap_table(points: Sequence[KitaevPoint], steps: int, stream: TextIO) -> None:
    """Write the gaps in reverse order, ``steps`` values per line."""
    column = 0
    for point in reversed(points):
        if column == steps:
            stream.write("\n")
            column = 0
        stream.write(f"{point.gap:g} ")
        column += 1


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(
        prog="kitaevgap",
        description="Scan the spectral gap of the long-range Kitaev model.",
    )
    parser.add_argument("-L", "--length", type=int, help="lattice side")
    parser.add_argument("--steps", type=int, default=DEFAULT_STEPS)
    parser.add_argument("--output", default="gap.dat")
    args = parser.parse_args(argv)

    length = args.length
    if length is None:
        print("\n L = (?) ", end="", flush=True)
        length = int(input())
    steps = args.steps
    if steps < 1 or length < 1:
        parser.error("length and steps must be positive")

    alpha_step = (DEFAULT_ALPHA_MAX - DEFAULT_ALPHA_MIN) / steps
    mu_step = (DEFAULT_MU_MAX - DEFAULT_MU_MIN) / steps
    print(
        f"\n'mu' step = {mu_step:.5f}\t'alpha' step = {alpha_step:.5f}"
        f"\tNOFsteps = {float(steps):.5f}\tNOFiter = {float(steps * steps):.5f}",
        end="",
    )

    def report(point: KitaevPoint, error: int, progress: float) -> None:
        print(point.describe(), end="")
        print(f"\terror = {error}\tPROGRESS {progress:.1f}%", end="", flush=True)

    points = scan_phase_space(length, steps, on_point=report)
    with open(args.output, "w", encoding="utf-8") as stream:
        write_gap_table(points, steps, stream)
    print()
    return 0


if __name__ == "__main__":
    raise SystemExit(main())