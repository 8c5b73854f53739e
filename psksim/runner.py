"""
=================================================================
M-PSK BER/SER simulation driver (:mod:`psksim.runner`)
=================================================================

.. autosummary::
   :toctree: generated/

   runSimulation          -- Sweep modulation orders and SNR points
   theoryCurves           -- Theoretical error rates matching simulated curves
   main                   -- Command-line interface
"""

"""M-PSK BER/SER simulation driver."""
import argparse
import logging as logg

import numpy as np

from psksim.utils import parameters, checkPositiveInt, InvalidInputError
from psksim.comm.montecarlo import PSKTrial, estimateErrorRate
from psksim.comm.metrics import theoryBER, theorySER


def runSimulation(param):
    """
    Run Monte Carlo BER or SER simulations of Gray-coded M-PSK in AWGN.

    Parameters
    ----------
    param : parameter object  (struct)
        Object with the simulation parameters.

        - param.Mset: modulation orders [default: [2, 4, 8, 16, 32, 64]]

        - param.EbN0dB: Eb/N0 points in dB [default: -1, 0, ..., 25]

        - param.unit: 'bit' (BER) or 'symbol' (SER) [default: 'bit']

        - param.blockSize: symbols per Monte Carlo block [default: 1e5]

        - param.minErrors: errors that end an SNR point [default: 100]

        - param.maxSymbols: safety cap in symbols per SNR point [default: 1e6]

        - param.seed: seed of the simulation [default: None]

        - param.prgsBar: show progress bars [default: False]

    Returns
    -------
    curves : dict
        ErrorRateCurve for each modulation order, keyed by M.

    Notes
    -----
    The cap is given in symbols and converted to the error unit, i.e.
    maxSymbols * log2(M) bits for BER runs.
    """
    param.Mset = getattr(param, "Mset", [2, 4, 8, 16, 32, 64])
    param.EbN0dB = getattr(param, "EbN0dB", np.arange(-1, 26))
    param.unit = getattr(param, "unit", "bit")
    param.blockSize = getattr(param, "blockSize", 1e5)
    param.minErrors = getattr(param, "minErrors", 100)
    param.maxSymbols = getattr(param, "maxSymbols", 1e6)
    param.seed = getattr(param, "seed", None)
    param.prgsBar = getattr(param, "prgsBar", False)

    if len(param.Mset) == 0:
        raise InvalidInputError("Mset", param.Mset, "at least one modulation order is required")
    if len(set(param.Mset)) != len(param.Mset):
        raise InvalidInputError("Mset", param.Mset, "modulation orders must be unique")

    maxSymbols = checkPositiveInt("maxSymbols", param.maxSymbols)

    # one independent seed per modulation order
    seeds = np.random.SeedSequence(param.seed).spawn(len(param.Mset))

    curves = {}
    for M, ss in zip(param.Mset, seeds):
        trial = PSKTrial(M, unit=param.unit)
        maxUnits = trial.unitsPerBlock(maxSymbols)

        curves[M] = estimateErrorRate(
            param.EbN0dB,
            param.blockSize,
            param.minErrors,
            maxUnits,
            trial,
            seed=ss,
            prgsBar=param.prgsBar,
        )

    return curves


def theoryCurves(curves):
    """
    Theoretical error rates at the SNR points (Eb/N0) of each curve.

    Parameters
    ----------
    curves : list of ErrorRateCurve
        Simulated M-PSK curves.

    Returns
    -------
    list of np.array
        Theoretical BER or SER, in the order of `curves`.
    """
    return [
        theoryBER(c.M, c.snr, "psk", exact=True) if c.unit == "bit" else theorySER(c.M, c.snr, "psk")
        for c in curves
    ]


def _parseFloatList(text):
    return [float(v) for v in text.split(",") if v.strip()]


def _parseIntList(text):
    return [int(v) for v in text.split(",") if v.strip()]


def buildParser():
    p = argparse.ArgumentParser(description="Monte Carlo BER/SER of Gray-coded M-PSK in AWGN")
    p.add_argument("--unit", choices=["bit", "symbol"], default="bit", help="Error unit: bit (BER) or symbol (SER)")
    p.add_argument("--M", type=_parseIntList, default=[2, 4, 8, 16, 32, 64], help="Comma-separated modulation orders")
    p.add_argument("--ebn0-min", type=float, default=-1, help="First Eb/N0 point in dB")
    p.add_argument("--ebn0-max", type=float, default=25, help="Last Eb/N0 point in dB")
    p.add_argument("--ebn0-step", type=float, default=1, help="Eb/N0 step in dB")
    p.add_argument("--ebn0", type=_parseFloatList, default=None, help="Comma-separated Eb/N0 points in dB (overrides the range)")
    p.add_argument("--block-size", type=int, default=100000, help="Symbols per Monte Carlo block")
    p.add_argument("--min-errors", type=int, default=100, help="Errors that end an SNR point")
    p.add_argument("--max-symbols", type=int, default=1000000, help="Safety cap in symbols per SNR point")
    p.add_argument("--seed", type=int, default=None, help="RNG seed for reproducibility")
    p.add_argument("--plot", default=None, help="Save the BER/SER plot to this file")
    p.add_argument("--show", action="store_true", help="Show the BER/SER plot")
    p.add_argument("--progress", action="store_true", help="Show progress bars")
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase logging verbosity")
    return p


def main(argv=None):
    parser = buildParser()
    args = parser.parse_args(argv)

    if args.ebn0 is None and not args.ebn0_step > 0:
        parser.error(f"--ebn0-step must be positive, got {args.ebn0_step}")

    level = logg.WARNING - 10 * min(args.verbose, 2)
    logg.basicConfig(level=level, format="%(asctime)s %(levelname)s %(name)s: %(message)s")

    param = parameters()
    param.Mset = args.M
    if args.ebn0 is not None:
        param.EbN0dB = np.asarray(args.ebn0)
    else:
        param.EbN0dB = np.arange(args.ebn0_min, args.ebn0_max + args.ebn0_step / 2, args.ebn0_step)
    param.unit = args.unit
    param.blockSize = args.block_size
    param.minErrors = args.min_errors
    param.maxSymbols = args.max_symbols
    param.seed = args.seed
    param.prgsBar = args.progress

    logg.info("simulation parameters:\n%s", param.table())

    try:
        curves = list(runSimulation(param).values())
    except InvalidInputError as e:
        parser.error(str(e))

    theory = theoryCurves(curves)

    rateName = "BER" if args.unit == "bit" else "SER"
    for curve, ref in zip(curves, theory):
        lower, upper = curve.confInterval(0.95)
        print(f"{curve.label}")
        print(
            f"{'Eb/N0 [dB]':>10} {rateName + ' (sim.)':>14} {'95% CI':>23} "
            f"{rateName + ' (theory)':>14} {'errors':>8} {'units':>10}  stop"
        )
        for ind, (snr, rate) in enumerate(curve):
            print(
                f"{snr:10.2f} {rate:14.3e} [{lower[ind]:9.2e}, {upper[ind]:9.2e}] "
                f"{ref[ind]:14.3e} {curve.errors[ind]:8d} "
                f"{curve.units[ind]:10d}  {curve.stopReason[ind].name}"
            )

    if args.plot or args.show:
        import matplotlib.pyplot as plt

        from psksim.plot import plotErrorRate

        ax = plotErrorRate(curves, theory)
        ax.set_title(f"M-PSK {rateName} in AWGN")
        if args.plot:
            ax.figure.savefig(args.plot, dpi=150, bbox_inches="tight")
        if args.show:
            plt.show()

    return curves


if __name__ == "__main__":
    main()
