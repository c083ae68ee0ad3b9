# kitaevgap

This package computes the spectral gap of a two-dimensional Kitaev superconductor
with long-range hopping and pairing on an `L × L` square lattice. The hopping
amplitude falls off as `-t · d^-beta` and the pairing amplitude as
`delta · d^-alpha`. The gap is evaluated over a grid of pairing exponents `alpha`
and chemical potentials `mu`.

## Installation

```
pip install .
```

The only runtime dependency is `numpy`. To run the tests, install the `test`
extra (`pip install .[test]`) and run `pytest`.

## Command line

```
kitaevgap [-L LENGTH] [--steps STEPS] [--output FILE]
```

- `-L`, `--length`: the lattice side. If you leave it out, the command asks for
  it on standard input.
- `--steps`: the number of grid steps per axis. The default is 30, which gives
  at most `steps²` points.
- `--output`: the file the gap table is written to. The default is `gap.dat`.

Both `alpha` and `mu` are walked downward from one step below their maxima:
`alpha` from just under 5 down to about 0.2, and `mu` from just under 5 down to
about -1. The command uses `t = 0.5`, `delta = 0.5` and `beta = 100`. For every
point it builds the fully periodic Hamiltonian, diagonalises it, and prints one
line with `[a,m,GAP]`, the solver status (`error = 0` when it converged, `-1`
otherwise) and the progress. The gap is the smallest strictly positive
eigenvalue below `1e4`. The last eigenvalue in the solver's ordering is not
considered, and if no eigenvalue qualifies the gap is `1e4`.

The output file holds the gaps in reverse order of computation, `steps` values
per line, so each line holds one `alpha` value.

## Library use

```python
from kitaevgap.kitaev import build_hpp, smallest_positive

h = build_hpp(4, 4, t=0.5, delta=0.5, mu=1.0, alpha=3.0, beta=100.0)
system = h.eigen_problem()
print(system.converged, smallest_positive(system.values, 1e4))
```

### `kitaevgap.kitaev`

- `build_hpp(lx, ly, t, delta, mu, alpha, beta)` builds the Bogoliubov–de Gennes
  Hamiltonian with periodic boundaries in both directions. Offsets are folded to
  their shortest signed form.
- `build_hpo(...)` builds it periodic along x and open along y.
- `build_hop(...)` builds it open along x. Along y the offsets are taken forward
  modulo `ly` and are not folded.
- `build_hoo(...)` fills in only the on-site terms of the first site
  (`-mu + 2` and `mu - 2`). It is not a complete open/open Hamiltonian.
- `smallest_positive(values, ceiling)` returns the smallest value in
  `(0, ceiling)`, or `ceiling` if there is none.
- `scan_phase_space(length, steps, alpha_min, alpha_max, mu_min, mu_max, t,
  delta, beta, on_point)` runs the sweep and returns a list of `KitaevPoint`
  records. The optional `on_point(point, error, progress)` callback is called
  for each point.
- `write_gap_table(points, steps, stream)` writes the gaps in the layout of
  the output file.
- `KitaevPoint` records `alpha`, `mu`, `gap`, `beta`, `t`, `delta`, `chern`
  and `edge_count`. `describe()` gives the one-line summary.
- `main(argv=None)` is the command-line entry point.

### `kitaevgap.matrix`

- `Matrix(data)` is a square real or complex matrix. `Matrix.zeros(dim)` makes a
  complex zero matrix.
  - `clear()` zeroes the matrix.
  - `eigen_problem()` diagonalises the matrix and returns the result.
  - `is_hermitian()` checks that the matrix equals its conjugate transpose exactly.
  - `transposed()`, `conjugated()` and `hermitian_conjugate()` return new matrices.
  - `+`, `-` and `*` work between matrices, and `*` also works with scalars.
  - `format()` renders the matrix as a fixed-precision table.
- `jacobi_eigen(matrix, max_iterations=50)` diagonalises a Hermitian matrix with
  cyclic complex Jacobi rotations. It reads only the upper triangle. The result
  is an `Eigensystem` with `values`, `vectors` (the eigenvectors as columns),
  `converged`, `iterations` and `error`.
- `minabs`, `maxabs`, `str2int` and `format_square` are small helpers.

## What it does not do

The package computes only the gap table. It does not compute Chern numbers,
count edge states or write eigenvector maps. The `chern` and `edge_count` fields
of `KitaevPoint` are always left at zero. It also has no open/open Hamiltonian
beyond the partial `build_hoo`.