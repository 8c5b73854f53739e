"""
=========================================================
Models for noisy channels (:mod:`psksim.models.channels`)
=========================================================

.. autosummary::
   :toctree: generated/

   awgn                 -- AWGN channel model.
"""


"""Basic channel models."""
import logging as logg
import numbers
import warnings

import numpy as np

from psksim.utils import dB2lin, InvalidInputError, NumericRangeWarning
from psksim.dsp.core import sigPow, gaussianComplexNoise

# beyond this |SNR| in dB the linear ratio is far outside typical simulation
# ranges and approaches the float64 overflow/underflow limits
SNR_RANGE_DB = 300


def awgn(sig, snr, rng=None):
    """
    Implement a basic AWGN channel model.

    The noise variance is calibrated from the measured average power of the
    input, so the per-sample noise power is sigPow(sig) / 10**(snr/10), split
    equally between the in-phase and quadrature components.

    Parameters
    ----------
    sig : array-like of complex
        Input symbols, any shape. Not modified.
    snr : real scalar
        Signal-to-noise ratio (Es/N0) in dB. A 0-d array is accepted.
    rng : np.random.Generator, optional
        Source of randomness. A fresh unseeded generator is used if None.

    Returns
    -------
    np.array
        Input signal plus noise, same shape and order as the input.

    Raises
    ------
    InvalidInputError
        If `sig` is empty or has zero/non-finite average power, or if `snr`
        is not a finite number.

    Warns
    -----
    NumericRangeWarning
        If |snr| > 300 dB. Computation proceeds: very large SNRs give
        (close to) zero noise and very small SNRs give (close to) infinite
        noise variance.

    """
    sig = np.atleast_1d(np.asarray(sig, dtype=np.complex128))

    if sig.size == 0:
        raise InvalidInputError("sig", sig, "empty symbol sequence")
    if isinstance(snr, np.ndarray) and snr.ndim == 0:
        snr = snr[()]
    if isinstance(snr, (bool, np.bool_)) or not isinstance(snr, numbers.Real) or not np.isfinite(snr):
        raise InvalidInputError("snr", snr, "must be a finite real number")
    snr = float(snr)

    Ps = sigPow(sig)

    if not np.isfinite(Ps) or Ps == 0:
        raise InvalidInputError("sig", f"<average power {Ps}>", "signal power must be positive and finite")

    if abs(snr) > SNR_RANGE_DB:
        msg = f"SNR of {snr} dB is outside +/-{SNR_RANGE_DB} dB, noise variance is best-effort"
        logg.warning(msg)
        warnings.warn(msg, NumericRangeWarning, stacklevel=2)

    snr_lin = dB2lin(snr)

    with np.errstate(divide="ignore", over="ignore"):
        noiseVar = np.divide(Ps, snr_lin)

    logg.debug("awgn: Ps = %.3e, snr = %.2f dB, noise variance = %.3e", Ps, snr, noiseVar)

    return sig + gaussianComplexNoise(sig.shape, noiseVar, rng)
