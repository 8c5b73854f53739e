"""
==========================================================
Sources of discrete sequences (:mod:`psksim.comm.sources`)
==========================================================

.. autosummary::
   :toctree: generated/

   bitSource          -- Generate a random bit sequence of length nBits.
   symbolSource       -- Generate a random sequence of symbol labels for an M-ary alphabet.
"""

import numpy as np

from psksim.utils import checkPositiveInt


def bitSource(nBits, rng=None):
    """
    Generate a sequence of i.i.d. uniformly distributed bits.

    Parameters
    ----------
    nBits : int
        The number of bits in the sequence.
    rng : np.random.Generator, optional
        Source of randomness. A fresh unseeded generator is used if None.

    Returns
    -------
    bits : np.array
        An array of `nBits` random bits.

    """
    return symbolSource(nBits, 2, rng)


def symbolSource(nSymbols, M, rng=None):
    """
    Generate a sequence of i.i.d. symbol labels, uniformly distributed over
    the alphabet {0, 1, ..., M-1}.

    Parameters
    ----------
    nSymbols : int
        The number of symbols to generate.
    M : int
        The alphabet size (modulation order).
    rng : np.random.Generator, optional
        Source of randomness. Pass a seeded generator for reproducible
        sequences. A fresh unseeded generator is used if None.

    Returns
    -------
    symbols : np.array of int
        Array with `nSymbols` labels in [0, M).

    """
    nSymbols = checkPositiveInt("nSymbols", nSymbols)
    M = checkPositiveInt("M", M)

    if rng is None:
        rng = np.random.default_rng()

    return rng.integers(0, M, size=nSymbols, dtype=np.int64)
