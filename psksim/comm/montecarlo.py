"""
=========================================================================
Monte Carlo error-rate estimation (:mod:`psksim.comm.montecarlo`)
=========================================================================

.. autosummary::
   :toctree: generated/

   StopReason               -- State of the per-SNR-point Monte Carlo loop
   TrialAccumulator         -- Error and unit counters of one SNR point
   ErrorRateCurve           -- Simulated error rate versus SNR
   PSKTrial                 -- Gray-coded M-PSK trial (source, modulator, demodulator, error counter)
   estimateErrorRate        -- Block-wise Monte Carlo BER/SER estimation over a list of SNR points
"""


"""Monte Carlo error-rate estimation."""
import logging as logg
from enum import Enum

import numpy as np
from tqdm.auto import tqdm

from psksim.utils import lin2dB, checkPositiveInt, InvalidInputError
from psksim.models.channels import awgn
from psksim.comm.sources import symbolSource
from psksim.comm.modulation import checkModOrder, symbolMap, symbolDemap
from psksim.comm.metrics import countBitErrors, countSymbolErrors, errorRateCI


class StopReason(Enum):
    """
    State of the Monte Carlo loop of one SNR point.

    RUNNING is the only non-terminal state. CONFIDENCE_REACHED means the
    minimum number of error events was collected, SAMPLE_CAP_REACHED means
    the loop stopped at the maximum number of simulated units (with fewer
    errors, so the estimate is less reliable).
    """

    RUNNING = 0
    CONFIDENCE_REACHED = 1
    SAMPLE_CAP_REACHED = 2


class TrialAccumulator:
    """
    Error and unit counters of one SNR point.

    Attributes
    ----------
    accumulatedErrors : int
        Number of unit-level decision errors (bits or symbols).
    processedUnits : int
        Number of units examined.
    processedSamples : int
        Number of channel symbols processed.
    nBlocks : int
        Number of blocks processed.
    state : StopReason
        Current state of the loop.
    """

    def __init__(self):
        self.accumulatedErrors = 0
        self.processedUnits = 0
        self.processedSamples = 0
        self.nBlocks = 0
        self.state = StopReason.RUNNING

    def update(self, nErrors, nUnits, nSamples):
        self.accumulatedErrors += int(nErrors)
        self.processedUnits += int(nUnits)
        self.processedSamples += int(nSamples)
        self.nBlocks += 1

    def step(self, minErrorEvents, maxUnitsSimulated):
        """
        Apply the stopping rule and return the resulting state.

        Reaching `minErrorEvents` takes precedence when both conditions
        hold after the same block.
        """
        if self.accumulatedErrors >= minErrorEvents:
            self.state = StopReason.CONFIDENCE_REACHED
        elif self.processedUnits >= maxUnitsSimulated:
            self.state = StopReason.SAMPLE_CAP_REACHED

        return self.state

    @property
    def done(self):
        return self.state is not StopReason.RUNNING

    @property
    def rate(self):
        if self.processedUnits == 0:
            return 0.0
        return self.accumulatedErrors / self.processedUnits


class ErrorRateCurve:
    """
    Simulated error rate versus SNR.

    Points are stored in the order they were simulated. Iterating over the
    curve yields (snr, rate) pairs.

    Attributes
    ----------
    snr : np.array
        SNR points in dB.
    rate : np.array
        Empirical error rates.
    errors : np.array of int
        Accumulated errors per point.
    units : np.array of int
        Processed units per point.
    samples : np.array of int
        Processed channel symbols per point.
    stopReason : list of StopReason
        Terminal state of each point.
    unit : str
        'bit' or 'symbol'.
    M : int
        Modulation order.
    label : str
        Short description used in plots and logs.
    """

    def __init__(self, unit, M, label=""):
        self.unit = unit
        self.M = M
        self.label = label
        self.snr = np.array([], dtype=np.float64)
        self.rate = np.array([], dtype=np.float64)
        self.errors = np.array([], dtype=np.int64)
        self.units = np.array([], dtype=np.int64)
        self.samples = np.array([], dtype=np.int64)
        self.stopReason = []

    def append(self, snr, acc):
        """
        Append the final state of one SNR point.

        Parameters
        ----------
        snr : float
            SNR of the point in dB.
        acc : TrialAccumulator
            Counters of the point, in a terminal state.
        """
        if not acc.done:
            raise InvalidInputError("acc", acc.state, "accumulator has not reached a terminal state")

        self.snr = np.append(self.snr, snr)
        self.rate = np.append(self.rate, acc.rate)
        self.errors = np.append(self.errors, acc.accumulatedErrors)
        self.units = np.append(self.units, acc.processedUnits)
        self.samples = np.append(self.samples, acc.processedSamples)
        self.stopReason.append(acc.state)

    def confInterval(self, confLevel=0.95):
        """Clopper-Pearson confidence interval of each point (see `errorRateCI`)."""
        return errorRateCI(self.errors, self.units, confLevel)

    def __len__(self):
        return self.snr.size

    def __iter__(self):
        return zip(self.snr.tolist(), self.rate.tolist())

    def __repr__(self):
        return f"ErrorRateCurve(label={self.label!r}, unit={self.unit!r}, M={self.M}, points={len(self)})"


class PSKTrial:
    """
    Gray-coded M-PSK trial over symbol labels.

    Generates uniform symbol labels, maps them to a power-normalized M-PSK
    constellation, makes minimum-distance decisions and counts either bit
    errors (MSB-first labels) or symbol errors.

    Parameters
    ----------
    M : int
        Modulation order (power of 2, >= 2).
    unit : str, optional
        Error unit: 'bit' (BER) or 'symbol' (SER). The default is 'bit'.
    phaseOffset : float, optional
        Constellation rotation in radians. The default is pi/M.
    snrType : str, optional
        Meaning of the SNR points: 'EbN0' (per bit) or 'EsN0' (per symbol).
        The default is 'EbN0'.
    """

    def __init__(self, M, unit="bit", phaseOffset=None, snrType="EbN0"):
        self.M = checkModOrder(M, "psk")
        self.bitsSymb = int(np.log2(self.M))

        if unit not in ("bit", "symbol"):
            raise InvalidInputError("unit", unit, "must be 'bit' or 'symbol'")
        if snrType not in ("EbN0", "EsN0"):
            raise InvalidInputError("snrType", snrType, "must be 'EbN0' or 'EsN0'")

        self.unit = unit
        self.snrType = snrType
        self.phaseOffset = np.pi / self.M if phaseOffset is None else phaseOffset

    @property
    def snrOffset(self):
        """Offset in dB from an SNR point to the Es/N0 used by the channel."""
        if self.snrType == "EbN0":
            return lin2dB(self.bitsSymb)
        return 0.0

    @property
    def label(self):
        return f"{self.M}-PSK {'BER' if self.unit == 'bit' else 'SER'}"

    def generateBlock(self, n, rng=None):
        return symbolSource(n, self.M, rng)

    def modulate(self, block):
        return symbolMap(block, self.M, "psk", self.phaseOffset)

    def demodulate(self, symbols):
        return symbolDemap(symbols, self.M, "psk", self.phaseOffset)

    def unitsPerBlock(self, n):
        return n * self.bitsSymb if self.unit == "bit" else n

    def countErrors(self, original, decided):
        if self.unit == "bit":
            return countBitErrors(original, decided, self.M)
        return countSymbolErrors(original, decided)


def _checkSnrPoints(snrPoints):
    snrPoints = np.atleast_1d(np.asarray(snrPoints, dtype=np.float64))

    if snrPoints.ndim != 1 or snrPoints.size == 0:
        raise InvalidInputError("snrPoints", snrPoints, "must be a non-empty 1D sequence")
    if not np.all(np.isfinite(snrPoints)):
        raise InvalidInputError("snrPoints", snrPoints, "all SNR points must be finite")

    return snrPoints


def estimateErrorRate(
    snrPoints,
    blockSize,
    minErrorEvents,
    maxUnitsSimulated,
    trial,
    seed=None,
    prgsBar=False,
):
    """
    Block-wise Monte Carlo error-rate estimation over a list of SNR points.

    For each SNR point, blocks of `blockSize` symbols are generated,
    modulated, passed through the AWGN channel, demodulated and compared
    with the transmitted block, until either `minErrorEvents` errors are
    collected or `maxUnitsSimulated` units are processed.

    Parameters
    ----------
    snrPoints : sequence of float
        SNR points in dB, simulated in the given order.
    blockSize : int
        Number of symbols per block.
    minErrorEvents : int
        Number of errors that ends a point (statistical confidence).
    maxUnitsSimulated : int
        Number of units (bits or symbols, see `trial.unit`) that ends a
        point (safety cap on runtime).
    trial : object
        Trial capability providing `generateBlock(n, rng)`,
        `modulate(block)`, `demodulate(symbols)`,
        `countErrors(original, decided)`, `unitsPerBlock(n)` and
        `snrOffset`, e.g. a `PSKTrial`.
    seed : int or np.random.SeedSequence, optional
        Seed of the simulation. Each SNR point draws from its own
        generator spawned from this seed, so points are independent and
        the whole curve is reproducible. The default is None (unseeded).
    prgsBar : bool, optional
        Show a progress bar over the SNR points. The default is False.

    Returns
    -------
    ErrorRateCurve
        One point per entry of `snrPoints`, in the same order.

    Raises
    ------
    InvalidInputError
        If the SNR points are empty or non-finite, or any of the sizes or
        thresholds is not a positive integer.

    """
    snrPoints = _checkSnrPoints(snrPoints)
    blockSize = checkPositiveInt("blockSize", blockSize)
    minErrorEvents = checkPositiveInt("minErrorEvents", minErrorEvents)
    maxUnitsSimulated = checkPositiveInt("maxUnitsSimulated", maxUnitsSimulated)

    unitsPerBlock = trial.unitsPerBlock(blockSize)
    if unitsPerBlock < 1:
        raise InvalidInputError("trial", trial, "a block must contain at least one unit")

    ss = seed if isinstance(seed, np.random.SeedSequence) else np.random.SeedSequence(seed)
    streams = [np.random.default_rng(s) for s in ss.spawn(snrPoints.size)]

    curve = ErrorRateCurve(getattr(trial, "unit", "unit"), getattr(trial, "M", None), getattr(trial, "label", ""))

    logg.info(
        "%s: %d SNR points, block of %d symbols, min. %d errors, max. %d units",
        curve.label,
        snrPoints.size,
        blockSize,
        minErrorEvents,
        maxUnitsSimulated,
    )

    for snr, rng in tqdm(zip(snrPoints, streams), total=snrPoints.size, disable=not (prgsBar)):
        acc = TrialAccumulator()
        snrChannel = snr + trial.snrOffset

        while not acc.done:
            block = trial.generateBlock(blockSize, rng)
            symbTx = trial.modulate(block)
            symbRx = awgn(symbTx, snrChannel, rng)
            decided = trial.demodulate(symbRx)

            acc.update(trial.countErrors(block, decided), unitsPerBlock, symbTx.size)
            acc.step(minErrorEvents, maxUnitsSimulated)

            logg.debug(
                "SNR = %.2f dB | %d/%d errors, %d/%d units | rate = %10.2e",
                snr,
                acc.accumulatedErrors,
                minErrorEvents,
                acc.processedUnits,
                maxUnitsSimulated,
                acc.rate,
            )

        logg.info(
            "%s | SNR = %5.2f dB | rate = %10.2e | %d errors in %d %ss (%s)",
            curve.label,
            snr,
            acc.rate,
            acc.accumulatedErrors,
            acc.processedUnits,
            curve.unit,
            acc.state.name,
        )
        curve.append(snr, acc)

    return curve
