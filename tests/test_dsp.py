# -*- coding: utf-8 -*-
"""
Test functions in psksim.dsp.core

"""

import unittest
import numpy as np
from psksim.dsp.core import sigPow, pnorm, gaussianComplexNoise


class TestCoreFunctions(unittest.TestCase):
    def test_sigPow_of_psk_symbols_is_one(self):
        x = np.exp(1j * 2 * np.pi * np.arange(8) / 8)
        self.assertAlmostEqual(sigPow(x), 1.0)

    def test_sigPow_is_a_mean_not_a_sum(self):
        x = 2 * np.ones(1000, dtype=np.complex128)
        self.assertAlmostEqual(sigPow(x), 4.0)

    def test_pnorm_gives_unit_power(self):
        x = np.array([1 + 1j, -3 + 1j, 3 - 3j, -1 - 1j])
        np.testing.assert_allclose(sigPow(pnorm(x)), 1.0)

    def test_gaussianComplexNoise_splits_variance_between_axes(self):
        rng = np.random.default_rng(7)
        σ2 = 0.3
        noise = gaussianComplexNoise((200000,), σ2, rng)

        self.assertEqual(noise.shape, (200000,))
        self.assertAlmostEqual(np.var(noise.real) / (σ2 / 2), 1, delta=0.02)
        self.assertAlmostEqual(np.var(noise.imag) / (σ2 / 2), 1, delta=0.02)
        self.assertLess(abs(np.corrcoef(noise.real, noise.imag)[0, 1]), 0.02)

    def test_gaussianComplexNoise_is_reproducible_with_seed(self):
        a = gaussianComplexNoise((10,), 1.0, np.random.default_rng(1))
        b = gaussianComplexNoise((10,), 1.0, np.random.default_rng(1))
        np.testing.assert_array_equal(a, b)

    def test_gaussianComplexNoise_with_zero_variance(self):
        noise = gaussianComplexNoise((5,), 0.0, np.random.default_rng(0))
        np.testing.assert_array_equal(noise, np.zeros(5))


if __name__ == "__main__":
    unittest.main()
