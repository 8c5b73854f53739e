"""
=================================================================================
Metrics for error-rate estimation and theory (:mod:`psksim.comm.metrics`)
=================================================================================

.. autosummary::
   :toctree: generated/

   Qfunc                    -- Calculate function Q(x)
   theoryBER                -- Theoretical bit error probability for PSK/PAM in AWGN channel
   theorySER                -- Theoretical symbol error probability for PSK/PAM in AWGN channel
   countSymbolErrors        -- Count symbol decision errors
   countBitErrors           -- Count bit errors between Gray-labeled symbol sequences
   errorRateCI              -- Clopper-Pearson confidence interval of an error rate
"""


"""Metrics for error-rate estimation and theory."""
import numpy as np
from scipy.special import erfc
from scipy.integrate import quad
from scipy.stats import beta

from psksim.utils import dB2lin, InvalidInputError
from psksim.comm.modulation import checkModOrder, grayCode


def Qfunc(x):
    """
    Calculate function Q(x).

    Parameters
    ----------
    x : scalar
        function input.

    Returns
    -------
    scalar
        value of Q(x).

    """
    return 0.5 * erfc(x / np.sqrt(2))


def theoryBER(M, EbN0, constType="psk", exact=False):
    """
    Theoretical bit error probability for PSK/PAM in AWGN channel (Gray mapping).

    Exact for BPSK and QPSK, nearest-neighbor approximation otherwise unless
    `exact` is set.

    Parameters
    ----------
    M : int
        Modulation order.
    EbN0 : scalar or np.array
        Signal-to-noise ratio (SNR) per bit in dB.
    constType : string
        Modulation type: 'psk' or 'pam'
    exact : bool, optional
        For M-PSK, sum the probabilities of falling into each decision
        region weighted by the Hamming distance between the Gray labels
        (Lee's expression), each region probability given by Craig's
        integral. The default is False.

    Returns
    -------
    Pb : scalar or np.array
        Theoretical probability of bit error.

    References
    ----------
    [1] P. J. Lee, "Computation of the bit error rate of coherent M-ary PSK with Gray code bit
    mapping," IEEE Transactions on Communications, vol. 34, no. 5, pp. 488-491, 1986.

    """
    if constType not in ("psk", "pam"):
        raise InvalidInputError("constType", constType, "theory is available for 'psk' and 'pam'")
    M = checkModOrder(M, constType)
    EbN0lin = dB2lin(EbN0)
    k = np.log2(M)

    if constType == "psk" and exact:
        Pb = _pskExactBER(M, k * EbN0lin)
    elif constType == "psk" and M in (2, 4):
        # in-phase and quadrature branches are independent binary antipodal channels
        Pb = Qfunc(np.sqrt(2 * EbN0lin))
    else:
        Pb = np.minimum(theorySER(M, EbN0, constType) / k, 0.5)

    return Pb


def theorySER(M, EbN0, constType="psk", exact=False):
    """
    Theoretical symbol error probability for PSK/PAM in AWGN channel.

    Parameters
    ----------
    M : int
        Modulation order.
    EbN0 : scalar or np.array
        Signal-to-noise ratio (SNR) per bit in dB.
    constType : string
        Modulation type: 'psk' or 'pam'
    exact : bool, optional
        For M-PSK, evaluate Craig's integral instead of the high-SNR
        approximation 2Q(sqrt(2Es/N0)sin(pi/M)). The default is False.

    Returns
    -------
    Ps : scalar or np.array
        Theoretical probability of symbol error.

    References
    ----------
    [1] Proakis, J. G., & Salehi, M. Digital Communications (5th Edition). McGraw-Hill Education, 2008.

    [2] J. W. Craig, "A new, simple and exact result for calculating the probability of error for
    two-dimensional signal constellations," IEEE MILCOM, 1991.
    """
    if constType not in ("psk", "pam"):
        raise InvalidInputError("constType", constType, "theory is available for 'psk' and 'pam'")
    M = checkModOrder(M, constType)
    EbN0lin = dB2lin(EbN0)
    k = np.log2(M)
    EsN0lin = k * EbN0lin

    if constType == "pam":
        return (2 * (M - 1) / M) * Qfunc(np.sqrt(6 * k / (M**2 - 1) * EbN0lin))

    if M == 2:
        return Qfunc(np.sqrt(2 * EbN0lin))

    if not exact:
        return np.minimum(2 * Qfunc(np.sqrt(2 * EsN0lin) * np.sin(np.pi / M)), 1)

    Ps = np.vectorize(lambda snr: 2 * _phaseTail(np.pi / M, snr), otypes=[np.float64])(EsN0lin)

    return Ps[()] if Ps.ndim == 0 else Ps


def _phaseTail(ψ, EsN0lin):
    # Craig's form of P(phase error > ψ) on one side of the transmitted point
    g = np.sin(ψ) ** 2
    return quad(
        lambda θ: np.exp(-EsN0lin * g / np.sin(θ) ** 2),
        0,
        np.pi - ψ,
        epsabs=0,
        epsrel=1e-10,
        limit=200,
    )[0] / (2 * np.pi)


def _pskExactBER(M, EsN0lin):
    k = int(np.log2(M))

    # Gray labels in angular order, as laid out by grayMapping
    labels = np.array([int(c, 2) for c in grayCode(k)])

    # mean Hamming distance between labels i decision regions apart
    weights = np.zeros(M)
    for i in range(1, M):
        diff = np.bitwise_xor(labels, np.roll(labels, -i))
        weights[i] = np.mean([bin(d).count("1") for d in diff])

    def ber(snr):
        # tails[j] = P(phase error > (2j + 1)pi/M), j = 0, ..., M/2 - 1
        tails = [_phaseTail((2 * j + 1) * np.pi / M, snr) for j in range(M // 2)]
        Pb = 0.0
        for i in range(1, M):
            d = min(i, M - i)
            Pi = 2 * tails[d - 1] if 2 * d == M else tails[d - 1] - tails[d]
            Pb += weights[i] * Pi
        return Pb / k

    Pb = np.vectorize(ber, otypes=[np.float64])(EsN0lin)

    return Pb[()] if Pb.ndim == 0 else Pb


def countSymbolErrors(indTx, indRx):
    """
    Count symbol decision errors.

    Parameters
    ----------
    indTx : np.array of ints
        Transmitted symbol labels.
    indRx : np.array of ints
        Decided symbol labels.

    Returns
    -------
    int
        Number of positions where the labels differ.

    """
    indTx = np.asarray(indTx)
    indRx = np.asarray(indRx)

    if indTx.shape != indRx.shape:
        raise InvalidInputError("indRx", f"<shape {indRx.shape}>", f"must match transmitted shape {indTx.shape}")

    return int(np.count_nonzero(indTx != indRx))


def countBitErrors(indTx, indRx, M):
    """
    Count bit errors between two sequences of symbol labels.

    Each label is read as its log2(M)-bit binary word, MSB first, which is
    the bit labeling used by `modulateGray`/`demodulateGray`.

    Parameters
    ----------
    indTx : np.array of ints
        Transmitted symbol labels.
    indRx : np.array of ints
        Decided symbol labels.
    M : int
        Modulation order.

    Returns
    -------
    int
        Number of bit errors.

    """
    indTx = np.asarray(indTx, dtype=np.int64)
    indRx = np.asarray(indRx, dtype=np.int64)

    if indTx.shape != indRx.shape:
        raise InvalidInputError("indRx", f"<shape {indRx.shape}>", f"must match transmitted shape {indTx.shape}")

    # Hamming distance between labels is the popcount of their XOR
    diff = np.bitwise_xor(indTx, indRx)
    nErrors = 0
    for _ in range(int(np.log2(M))):
        nErrors += int(np.count_nonzero(diff & 1))
        diff = diff >> 1

    return nErrors


def errorRateCI(nErrors, nUnits, confLevel=0.95):
    """
    Clopper-Pearson (exact binomial) confidence interval of an error rate.

    Parameters
    ----------
    nErrors : int or np.array
        Number of observed errors.
    nUnits : int or np.array
        Number of observed units (bits or symbols).
    confLevel : float, optional
        Confidence level in (0, 1). The default is 0.95.

    Returns
    -------
    lower, upper : scalar or np.array
        Bounds of the confidence interval. The lower bound is 0 when no
        errors were observed, the upper bound is 1 when all units failed.

    """
    if not 0 < confLevel < 1:
        raise InvalidInputError("confLevel", confLevel, "must lie in (0, 1)")

    nErrors = np.asarray(nErrors, dtype=np.float64)
    nUnits = np.asarray(nUnits, dtype=np.float64)
    α = 1 - confLevel

    with np.errstate(invalid="ignore"):
        lower = np.where(nErrors > 0, beta.ppf(α / 2, nErrors, nUnits - nErrors + 1), 0.0)
        upper = np.where(nErrors < nUnits, beta.ppf(1 - α / 2, nErrors + 1, nUnits - nErrors), 1.0)

    return lower[()], upper[()]
