"""
========================================================================
Customized functions for plotting and vizualization (:mod:`psksim.plot`)
========================================================================

.. autosummary::
   :toctree: generated/

   plotErrorRate              -- Plot simulated error-rate curves against theory
"""

"""Plot utilities."""
import matplotlib.pyplot as plt
import numpy as np

MARKERS = ["o", "s", "d", "^", "v", "p", "h", "*"]


def plotErrorRate(curves, theory=None, ax=None, ylim=(1e-6, 1), xlabel="$E_b/N_0$ [dB]"):
    """
    Plot simulated error-rate curves (markers) and theoretical curves (lines).

    Parameters
    ----------
    curves : list of ErrorRateCurve
        Simulated curves.
    theory : list of np.array, optional
        Theoretical error rate evaluated at the SNR points of each curve,
        in the same order as `curves`. The default is None (no theory).
    ax : matplotlib.axes.Axes, optional
        Axes to draw on. A new figure is created if None.
    ylim : tuple, optional
        Limits of the y-axis. The default is (1e-6, 1).
    xlabel : str, optional
        Label of the x-axis.

    Returns
    -------
    ax : matplotlib.axes.Axes
        Axes with the plotted curves.

    Notes
    -----
    Zero error rates cannot be shown on a log scale and are left out of the
    plot; the curves themselves are not modified.
    """
    if ax is None:
        _, ax = plt.subplots(figsize=(10, 8))

    colors = plt.cm.tab10(np.arange(max(len(curves), 1)) % 10)

    for ind, curve in enumerate(curves):
        rate = np.where(curve.rate > 0, curve.rate, np.nan)
        ax.semilogy(
            curve.snr,
            rate,
            marker=MARKERS[ind % len(MARKERS)],
            linestyle="none",
            color=colors[ind],
            label=f"{curve.label} (sim.)",
        )
        if theory is not None:
            ref = np.where(np.asarray(theory[ind]) > 0, theory[ind], np.nan)
            ax.semilogy(curve.snr, ref, "-", color=colors[ind], linewidth=2, label=f"{curve.label} (theory)")

    if len(curves):
        ax.set_xlim(min(c.snr.min() for c in curves), max(c.snr.max() for c in curves))
    ax.set_ylim(*ylim)
    ax.set_xlabel(xlabel)
    ax.set_ylabel("error rate")
    ax.grid(True, which="both", alpha=0.5)
    ax.legend(loc="lower left", ncol=2, frameon=False)

    return ax
