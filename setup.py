# Authors: PSKSim contributors
# License: BSD 3-Clause

from setuptools import setup

DISTNAME = "PSKSim"
DESCRIPTION = "Monte Carlo BER/SER simulation of M-PSK over AWGN channels"
LONG_DESCRIPTION = open("README.md", encoding="utf8").read()
MAINTAINER = "PSKSim contributors"
LICENSE = "BSD 3-Clause"
VERSION = "0.1.0"

setup(
    name=DISTNAME,
    maintainer=MAINTAINER,
    description=DESCRIPTION,
    license=LICENSE,
    version=VERSION,
    packages=["psksim", "psksim.comm", "psksim.models", "psksim.dsp"],
    install_requires=[
        "numpy>=1.17",
        "scipy>=1.4",
        "matplotlib>=3.7.0",
        "tqdm>=4.64.1",
        "numba>=0.54.1",
    ],
    extras_require={
        "test": ["pytest"],
        "docs": ["sphinx", "sphinx-rtd-theme>=1.2.2"],
    },
    # 'runner' is in the root.
    scripts=["runner"],
    entry_points={"console_scripts": ["psksim=psksim.runner:main"]},
    long_description=LONG_DESCRIPTION,
    long_description_content_type="text/markdown",
    classifiers=[
        "Development Status :: 4 - Beta",
        "Intended Audience :: Science/Research",
        "Intended Audience :: Telecommunications Industry",
        "Operating System :: Unix",
        "Programming Language :: Python",
        "Topic :: Scientific/Engineering",
    ],
    python_requires=">=3.8",
)
