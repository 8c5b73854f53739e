"""
============================================================
Digital modulation utilities (:mod:`psksim.comm.modulation`)
============================================================

.. autosummary::
   :toctree: generated/

   grayCode                 -- Gray code generator
   grayMapping              -- Gray Mapping for digital modulations
   pamConst                 -- Generate a Pulse Amplitude Modulation (PAM) constellation.
   pskConst                 -- Generate a Phase Shift Keying (PSK) constellation.
   checkModOrder            -- Validate the modulation order for a constellation type
   minEuclid                -- Find minimum Euclidean distance
   demap                    -- Contellation symbol index to bit sequence demapping
   symbolMap                -- Map symbol labels to constellation symbols (w/ Gray mapping)
   symbolDemap              -- Hard decision of symbol labels (minEuclid, w/ Gray mapping)
   modulateGray             -- Modulate bit sequences to constellation symbol sequences (w/ Gray mapping)
   demodulateGray           -- Demodulate symbol sequences (minEuclid + hard decisions) to bit sequences (assuming Gray mapping)
"""


"""Digital modulation utilities."""
import numpy as np
from numba import njit, prange

from psksim.utils import bitarray2dec, dec2bitarray, isPowerOf2, InvalidInputError
from psksim.dsp.core import pnorm

CONST_TYPES = ["psk", "pam", "ook"]


def grayCode(n):
    """
    Gray code generator.

    Parameters
    ----------
    n : int
        length of the codeword in bits.

    Returns
    -------
    code : list
           list of binary strings of the gray code.

    """
    code = []

    for i in range(1 << n):
        # Generating the decimal
        # values of gray code then using
        # bitset to convert them to binary form
        val = i ^ (i >> 1)

        # Converting to binary string
        s = bin(val)[2::]
        code.append(s.zfill(n))
    return code


def checkModOrder(M, constType):
    """
    Validate the modulation order for a given constellation type.

    Parameters
    ----------
    M : int
        modulation order.
    constType : string
        'psk', 'pam' or 'ook'.

    Returns
    -------
    int
        The validated modulation order.

    Raises
    ------
    InvalidInputError
        If the constellation type is unknown, or M is not a power of 2
        greater or equal to 2 (exactly 2 for 'ook').
    """
    if constType not in CONST_TYPES:
        raise InvalidInputError("constType", constType, f"supported types are {CONST_TYPES}")
    if isinstance(M, bool) or not isinstance(M, (int, np.integer)) or not isPowerOf2(M) or M < 2:
        raise InvalidInputError("M", M, "modulation order must be a power of 2 >= 2")
    if constType == "ook" and M != 2:
        raise InvalidInputError("M", M, "OOK has only 2 symbols")

    return int(M)


def grayMapping(M, constType, phaseOffset=0):
    """
    Gray Mapping for digital modulations.

    Parameters
    ----------
    M : int
        modulation order
    constType : 'psk', 'pam' or 'ook'.
        type of constellation.
    phaseOffset : float, optional
        rotation of the constellation in radians (default is 0).

    Returns
    -------
    const : np.array
        constellation symbols (sorted according their corresponding
        Gray bit sequence as integer decimal).

    References
    ----------
    [1] Proakis, J. G., & Salehi, M. Digital Communications (5th Edition). McGraw-Hill Education, 2008.
    """
    M = checkModOrder(M, constType)
    bitsSymb = int(np.log2(M))

    code = grayCode(bitsSymb)
    if constType == "ook":
        const = np.arange(0, 2)
    elif constType == "pam":
        const = pamConst(M)
    elif constType == "psk":
        const = pskConst(M, phaseOffset)

    const = const.reshape(M, 1)
    const_ = np.zeros((M, 2), dtype=complex)

    for ind in range(M):
        const_[ind, 0] = const[ind, 0]  # complex constellation symbol
        const_[ind, 1] = int(code[ind], 2)  # mapped bit sequence (as integer decimal)

    # sort complex symbols column according to their mapped bit sequence (as integer decimal)
    const = const_[const_[:, 1].real.argsort()]
    const = const[:, 0]

    if constType in ["pam", "ook"]:
        const = const.real
    return const


def pamConst(M):
    """
    Generate a Pulse Amplitude Modulation (PAM) constellation.

    Parameters
    ----------
    M : int
        Number of symbols in the constellation. It must be an integer.

    Returns
    -------
    np.array
        1D PAM constellation.

    """
    L = int(M - 1)
    return np.arange(-L, L + 1, 2)


def pskConst(M, phaseOffset=0):
    """
    Generate a Phase Shift Keying (PSK) constellation.

    Parameters
    ----------
    M : int
        Number of symbols in the constellation. It must be a power of 2 positive integer.
    phaseOffset : float, optional
        Phase of the first constellation point in radians (default is 0).

    Returns
    -------
    np.array
        Complex M-PSK constellation, with unit energy per symbol.

    References
    ----------
    [1] Proakis, J. G., & Salehi, M. Digital Communications (5th Edition). McGraw-Hill Education, 2008.
    """
    pskPhases = 2 * np.pi * np.arange(M) / M
    return np.exp(1j * (pskPhases + phaseOffset))


@njit(parallel=True)
def minEuclid(symb, const):
    """
    Find minimum Euclidean distance.

    Find closest constellation symbol w.r.t the Euclidean distance in the
    complex plane.

    Parameters
    ----------
    symb : np.array
        Received constellation symbols.
    const : np.array
        Reference constellation.

    Returns
    -------
    np.array of int
        indexes of the closest constellation symbols.

    """
    ind = np.zeros(symb.shape, dtype=np.int64)
    for ii in prange(len(symb)):
        ind[ii] = np.abs(symb[ii] - const).argmin()
    return ind


@njit(parallel=True)
def demap(indSymb, bitMap):
    """
    Contellation symbol index to bit sequence demapping.

    Parameters
    ----------
    indSymb : np.array of ints
        Indexes of received symbol sequence.
    bitMap : (M, log2(M)) np.array
        bit-to-symbol mapping.

    Returns
    -------
    decBits : np.array
        Sequence of demapped bits.

    """
    b = bitMap.shape[1]

    decBits = np.zeros(len(indSymb) * b, dtype=np.int64)

    for i in prange(len(indSymb)):
        decBits[i * b : i * b + b] = bitMap[indSymb[i], :]
    return decBits


def symbolMap(indSymb, M, constType, phaseOffset=0):
    """
    Map symbol labels to constellation symbols (w/ Gray mapping).

    Label `m` is carried by the constellation point whose Gray code word,
    read as an integer, equals `m`. Symbols are normalized to unit average
    energy over the constellation.

    Parameters
    ----------
    indSymb : array of ints
        symbol labels in [0, M).
    M : int
        order of the modulation format.
    constType : string
        'psk', 'pam' or 'ook'.
    phaseOffset : float, optional
        rotation of the constellation in radians (default is 0).

    Returns
    -------
    array of complex constellation symbols

    """
    const = pnorm(grayMapping(M, constType, phaseOffset).astype(np.complex128))
    indSymb = np.asarray(indSymb, dtype=np.int64)

    if indSymb.size and (indSymb.min() < 0 or indSymb.max() >= M):
        raise InvalidInputError("indSymb", f"<labels in [{indSymb.min()}, {indSymb.max()}]>", f"labels must lie in [0, {M})")

    return const[indSymb]


def symbolDemap(symb, M, constType, phaseOffset=0):
    """
    Hard decision of symbol labels (minEuclid, w/ Gray mapping).

    Parameters
    ----------
    symb : array of complex constellation symbols
        received symbols, with the scale used by `symbolMap`.
    M : int
        order of the modulation format.
    constType : string
        'psk', 'pam' or 'ook'.
    phaseOffset : float, optional
        rotation of the constellation in radians (default is 0).

    Returns
    -------
    array of ints
        decided symbol labels.

    """
    const = pnorm(grayMapping(M, constType, phaseOffset).astype(np.complex128))

    return minEuclid(np.asarray(symb, dtype=np.complex128), const)


def modulateGray(bits, M, constType, phaseOffset=0):
    """
    Modulate bit sequences to constellation symbol sequences (w/ Gray mapping).

    Parameters
    ----------
    bits : array of ints
        sequence of data bits, MSB first within each symbol.
    M : int
        order of the modulation format.
    constType : string
        'psk', 'pam' or 'ook'.
    phaseOffset : float, optional
        rotation of the constellation in radians (default is 0).

    Returns
    -------
    array of complex constellation symbols
        bits modulated to complex constellation symbols.

    References
    ----------
    [1] Proakis, J. G., & Salehi, M. Digital Communications (5th Edition). McGraw-Hill Education, 2008.

    """
    M = checkModOrder(M, constType)
    bitsSymb = int(np.log2(M))
    bits = np.asarray(bits)

    if bits.size % bitsSymb:
        raise InvalidInputError("bits", f"<{bits.size} bits>", f"length must be a multiple of log2(M) = {bitsSymb}")

    symb = bits.reshape(-1, bitsSymb).T
    symbInd = bitarray2dec(symb)

    return symbolMap(symbInd, M, constType, phaseOffset)


def demodulateGray(symb, M, constType, phaseOffset=0):
    """
    Demodulate symbol sequences to bit sequences (w/ Gray mapping).

    Hard demodulation is based on minimum Euclidean distance.

    Parameters
    ----------
    symb : array of complex constellation symbols
        sequence of constellation symbols to be demodulated.
    M : int
        order of the modulation format.
    constType : string
        'psk', 'pam' or 'ook'.
    phaseOffset : float, optional
        rotation of the constellation in radians (default is 0).

    Returns
    -------
    array of ints
        sequence of demodulated bits.

    """
    M = checkModOrder(M, constType)
    bitMap = dec2bitarray(np.arange(M), int(np.log2(M)))

    indrx = symbolDemap(symb, M, constType, phaseOffset)

    return demap(indrx, bitMap)
