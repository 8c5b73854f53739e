import numpy as np
import matplotlib.pyplot as plt
from psksim.comm.montecarlo import PSKTrial, estimateErrorRate
from psksim.comm.metrics import theoryBER
from psksim.plot import plotErrorRate
from psksim.utils import parameters

## BER of Gray-coded M-PSK in the AWGN channel

# simulation parameters
paramSim = parameters()
paramSim.blockSize = 1e5   # symbols per Monte Carlo block
paramSim.minErrors = 100   # bit errors that end an Eb/N0 point
paramSim.maxSymbols = 1e6  # safety cap in symbols per Eb/N0 point
paramSim.seed = 123        # fixing the seed to get reproducible results

EbN0dB = np.arange(-1, 26)
pskOrder = [2, 4, 8, 16, 32, 64]

## Simulation
curves = []
for M in pskOrder:
    print(f"run sim: M = {M}")
    trial = PSKTrial(M, unit="bit")

    curve = estimateErrorRate(
        EbN0dB,
        paramSim.blockSize,
        paramSim.minErrors,
        trial.unitsPerBlock(paramSim.maxSymbols),
        trial,
        seed=paramSim.seed,
        prgsBar=True,
    )
    curves.append(curve)

    for snr, ber, reason in zip(curve.snr, curve.rate, curve.stopReason):
        print(f"  Eb/N0 = {snr:5.1f} dB  BER = {ber:9.2e}  ({reason.name})")

## Plot simulation results and theoretical curves
ax = plotErrorRate(curves, [theoryBER(c.M, c.snr, "psk", exact=True) for c in curves])
ax.set_title("M-PSK bit error rate")
plt.show()
