import unittest
import warnings
import numpy as np
from psksim.models.channels import awgn
from psksim.comm.modulation import pskConst
from psksim.utils import InvalidInputError, NumericRangeWarning


class TestAWGNChannel(unittest.TestCase):
    def setUp(self):
        self.rng = np.random.default_rng(2024)
        # non-unit power symbols, so the calibration must use the measured power
        self.symbTx = 3 * pskConst(4, np.pi / 4)[self.rng.integers(0, 4, 100000)]

    def test_noise_power_matches_snr(self):
        for snrdB in [-10, 0, 3, 10, 25]:
            with self.subTest(snrdB=snrdB):
                noise = awgn(self.symbTx, snrdB, self.rng) - self.symbTx
                expected = np.mean(np.abs(self.symbTx) ** 2) / 10 ** (snrdB / 10)

                self.assertAlmostEqual(np.mean(np.abs(noise) ** 2) / expected, 1, delta=0.05)
                self.assertAlmostEqual(np.var(noise.real) / (expected / 2), 1, delta=0.05)
                self.assertAlmostEqual(np.var(noise.imag) / (expected / 2), 1, delta=0.05)

    def test_noise_power_over_repeated_calls_on_short_block(self):
        symb = np.array([1 + 0j, 0 + 2j, -1 - 1j])
        Ps = np.mean(np.abs(symb) ** 2)
        noise = np.concatenate([awgn(symb, 6, self.rng) - symb for _ in range(5000)])

        self.assertAlmostEqual(np.var(noise) / (Ps / 10**0.6), 1, delta=0.05)

    def test_noise_has_zero_mean(self):
        noise = awgn(self.symbTx, 0, self.rng) - self.symbTx
        self.assertLess(abs(np.mean(noise)), 0.05)

    def test_preserves_length_and_order(self):
        symb = np.arange(1, 11) * np.exp(1j * np.arange(10))
        out = awgn(symb, 60, self.rng)

        self.assertEqual(out.shape, symb.shape)
        np.testing.assert_allclose(out, symb, atol=0.1)

    def test_does_not_mutate_input(self):
        symb = self.symbTx.copy()
        awgn(symb, 5, self.rng)
        np.testing.assert_array_equal(symb, self.symbTx)

    def test_accepts_python_sequences(self):
        out = awgn([1, -1, 1j, -1j], 20, self.rng)
        self.assertEqual(out.shape, (4,))
        self.assertEqual(out.dtype, np.complex128)

    def test_preserves_column_vector_shape(self):
        symb = self.symbTx[:5000].reshape(-1, 1)
        out = awgn(symb, 10, self.rng)

        self.assertEqual(out.shape, (5000, 1))
        noise = out - symb
        self.assertEqual(noise.shape, (5000, 1))
        self.assertAlmostEqual(np.mean(np.abs(noise) ** 2) / (9 / 10), 1, delta=0.1)

    def test_accepts_zero_dimensional_snr(self):
        symb = self.symbTx[:100]
        a = awgn(symb, np.array(10.0), np.random.default_rng(7))
        b = awgn(symb, 10.0, np.random.default_rng(7))
        np.testing.assert_array_equal(a, b)

        with self.assertRaises(InvalidInputError):
            awgn(symb, np.array([10.0]))

    def test_is_reproducible_with_seeded_generator(self):
        a = awgn(self.symbTx[:100], 3, np.random.default_rng(5))
        b = awgn(self.symbTx[:100], 3, np.random.default_rng(5))
        np.testing.assert_array_equal(a, b)

    def test_rejects_empty_input(self):
        with self.assertRaises(InvalidInputError) as cm:
            awgn(np.array([], dtype=complex), 10)
        self.assertEqual(cm.exception.name, "sig")

    def test_rejects_zero_power_input(self):
        with self.assertRaises(InvalidInputError):
            awgn(np.zeros(10, dtype=complex), 10)

    def test_rejects_non_finite_snr(self):
        for snr in [np.nan, np.inf, -np.inf, "10", None]:
            with self.subTest(snr=snr):
                with self.assertRaises(InvalidInputError) as cm:
                    awgn(self.symbTx[:10], snr)
                self.assertEqual(cm.exception.name, "snr")

    def test_invalid_input_is_a_value_error(self):
        with self.assertRaises(ValueError):
            awgn([], 0)

    def test_extreme_snr_warns_but_does_not_crash(self):
        symb = self.symbTx[:1000]

        with self.assertWarns(NumericRangeWarning):
            out = awgn(symb, 4000, self.rng)
        np.testing.assert_array_equal(out, symb)

        with self.assertWarns(NumericRangeWarning):
            out = awgn(symb, -4000, self.rng)
        self.assertTrue(np.all(np.isinf(np.abs(out))))

    def test_no_warning_in_normal_range(self):
        with warnings.catch_warnings():
            warnings.simplefilter("error", NumericRangeWarning)
            awgn(self.symbTx[:10], 300, self.rng)
            awgn(self.symbTx[:10], -300, self.rng)


if __name__ == "__main__":
    unittest.main()
