"""
==================================================================
Core digital signal processing utilities (:mod:`psksim.dsp.core`)
==================================================================

.. autosummary::
   :toctree: generated/

   sigPow                 -- Calculate the average power of x.
   pnorm                  -- Normalize the average power of x.
   gaussianComplexNoise   -- Generate complex-valued circular Gaussian noise.
"""

"""Digital signal processing utilities."""
import numpy as np
from numba import njit


@njit
def sigPow(x):
    """
    Calculate the average power of x.

    Parameters
    ----------
    x : np.array
        Signal.

    Returns
    -------
    scalar
        Average power of x: P = mean(abs(x)**2).

    """
    return np.mean(np.abs(x) ** 2)


@njit
def pnorm(x):
    """
    Normalize the average power of x.

    Parameters
    ----------
    x : np.array
        Signal.

    Returns
    -------
    np.array
        Signal x normalized to unit average power.

    """
    return x / np.sqrt(np.mean(x * np.conj(x)).real)


def gaussianComplexNoise(shapeOut, σ2=1.0, rng=None):
    """
    Generate complex circular Gaussian noise.

    Real and imaginary parts are independent, each with variance σ2/2.

    Parameters
    ----------
    shapeOut : tuple of int
        Shape of np.array to be generated.
    σ2 : float, optional
        Total variance of the noise (default is 1).
    rng : np.random.Generator, optional
        Source of randomness. A fresh unseeded generator is used if None.

    Returns
    -------
    noise : np.array
        Generated complex circular Gaussian noise.
    """
    if rng is None:
        rng = np.random.default_rng()

    σ = np.sqrt(σ2 / 2)

    # independent in-phase and quadrature components
    noise = np.empty(shapeOut, dtype=np.complex128)
    noise.real = σ * rng.standard_normal(shapeOut)
    noise.imag = σ * rng.standard_normal(shapeOut)

    return noise
