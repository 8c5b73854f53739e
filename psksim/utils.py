"""
=======================================
General utilities (:mod:`psksim.utils`)
=======================================

.. autosummary::
   :toctree: generated/

   parameters             -- Class to be used as a struct of parameters.
   InvalidInputError      -- Error raised when a precondition on the inputs fails.
   NumericRangeWarning    -- Warning for extreme values handled with best-effort floating point.
   lin2dB                 -- Convert linear value to dB (decibels).
   dB2lin                 -- Convert dB (decibels) to a linear value.
   dec2bitarray           -- Convert decimals to arrays of bits.
   bitarray2dec           -- Convert array of bits to decimal.
   isPowerOf2             -- Check if an integer is a power of 2.
   checkPositiveInt       -- Validate a strictly positive integer parameter.
"""

"""General utilities."""
import numbers

import numpy as np


class InvalidInputError(ValueError):
    """
    Raised when an input violates a precondition (empty signal, non-finite SNR,
    non-positive sizes or thresholds, unsupported modulation order).

    Parameters
    ----------
    name : str
        Name of the offending parameter.
    value : object
        Offending value.
    reason : str, optional
        Short description of the violated condition.
    """

    def __init__(self, name, value, reason=""):
        self.name = name
        self.value = value
        msg = f"invalid value for '{name}': {value!r}"
        if reason:
            msg += f" ({reason})"
        super().__init__(msg)


class NumericRangeWarning(RuntimeWarning):
    """Advisory warning: extreme values handled with best-effort floating point."""

    pass


class parameters:
    """
    Basic class to be used as a struct of parameters

    """

    pass

    def table(self):
        """
        Returns the attributes as a markdown table.

        """
        markdown = "| Parameter Name | Value |\n"
        markdown += "|----------------|-----------------|\n"

        for name, value in vars(self).items():
            if isinstance(value, (list, np.ndarray, tuple)):
                markdown += f"| {name} | Array |\n"
            else:
                markdown += f"| {name} | {value} |\n"

        return markdown


def lin2dB(x):
    """
    Convert linear value to dB (decibels).

    Parameters
    ----------
    x : float
        The linear value to be converted to dB.

    Returns
    -------
    float
        The value converted to dB, i.e 10log10(x).
    """
    return 10 * np.log10(x)


def dB2lin(x):
    """
    Convert dB (decibels) to a linear value.

    Overflow and underflow saturate to inf and 0 instead of raising.

    Parameters
    ----------
    x : float
        The value in dB to be converted to a linear value.

    Returns
    -------
    float
        The linear value.
    """
    with np.errstate(over="ignore", under="ignore"):
        return np.power(10.0, np.asarray(x, dtype=np.float64) / 10)


def dec2bitarray(x, bit_width):
    """
    Converts a non-negative integer or an array-like of non-negative integers
    to a NumPy array containing bits (0 and 1), MSB first.

    Parameters
    ----------
    x : int or array-like of int
        Non-negative integer(s) to be converted to a bit array.

    bit_width : int
        Size of the output bit array.

    Returns
    -------
    bitarray : NumPy array of int
        1D array for a scalar input, (len(x), bit_width) array otherwise.

    """
    x = np.asarray(x, dtype=np.int64)
    shifts = np.arange(bit_width - 1, -1, -1, dtype=np.int64)

    return (x[..., np.newaxis] >> shifts) & 1


def bitarray2dec(x_bitarray):
    """
    Converts an input NumPy array of bits (0 and 1), MSB first, to a decimal
    integer.

    Parameters
    ----------
    x_bitarray : array of int
        Input NumPy array of bits. For a 2D input, each column holds one word.

    Returns
    -------
    number : int or array of int
        Integer representation(s) of the input bit array(s).
    """
    number = 0

    for i in range(len(x_bitarray)):
        number = number + x_bitarray[i] * pow(2, len(x_bitarray) - 1 - i)

    return number


def isPowerOf2(value):
    # Well-known trick to check if a number is a power of 2.
    return value > 0 and value & (value - 1) == 0


def checkPositiveInt(name, value):
    """
    Validate a strictly positive integer parameter.

    Integral floats (e.g. 1e5) are accepted and converted.

    Parameters
    ----------
    name : str
        Parameter name, used in the error message.
    value : int or float
        Value to be checked.

    Returns
    -------
    int
        The validated value.

    Raises
    ------
    InvalidInputError
        If the value is not a positive integer.
    """
    if isinstance(value, bool) or not isinstance(value, numbers.Real):
        raise InvalidInputError(name, value, "must be a positive integer")
    if not np.isfinite(value) or value != int(value) or value < 1:
        raise InvalidInputError(name, value, "must be a positive integer")

    return int(value)
