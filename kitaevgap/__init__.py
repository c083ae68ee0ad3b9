"""Spectral gaps of long-range two-dimensional Kitaev lattice models, with a Jacobi eigensolver."""

__version__ = "0.1.0"
__all__ = ["kitaev", "matrix"]