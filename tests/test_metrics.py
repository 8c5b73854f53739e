import unittest
import numpy as np
from psksim.utils import dec2bitarray, InvalidInputError
from psksim.comm.metrics import (
    Qfunc,
    theoryBER,
    theorySER,
    countSymbolErrors,
    countBitErrors,
    errorRateCI,
)


class TestCommunicationMetrics(unittest.TestCase):
    def test_Qfunc(self):
        np.testing.assert_allclose(Qfunc(np.array([1.0, 3.0])), [0.158655, 1.349898e-3], rtol=1e-5)
        self.assertGreater(Qfunc(30.0), 0)
        self.assertAlmostEqual(Qfunc(0), 0.5)

    def test_theoryBER_bpsk_at_10dB(self):
        # Q(sqrt(2 * 10)) ~= 3.87e-6
        np.testing.assert_allclose(theoryBER(2, 10, "psk"), 3.872e-6, rtol=1e-3)

    def test_theoryBER_qpsk_equals_bpsk(self):
        EbN0dB = np.arange(-1, 11)
        np.testing.assert_allclose(theoryBER(4, EbN0dB), theoryBER(2, EbN0dB))

    def test_theoryBER_is_decreasing_and_bounded(self):
        EbN0dB = np.arange(-5, 26)
        for M in [2, 4, 8, 16, 32, 64]:
            with self.subTest(M=M):
                Pb = theoryBER(M, EbN0dB)
                self.assertTrue(np.all(np.diff(Pb) < 0))
                self.assertTrue(np.all(Pb <= 0.5))

    def test_theoryBER_exact_matches_closed_form_for_bpsk_and_qpsk(self):
        EbN0dB = np.array([-1.0, 4.0, 10.0])
        Pb = Qfunc(np.sqrt(2 * 10 ** (EbN0dB / 10)))
        for M in [2, 4]:
            with self.subTest(M=M):
                np.testing.assert_allclose(theoryBER(M, EbN0dB, exact=True), Pb, rtol=1e-6)

    def test_theoryBER_exact_limits(self):
        for M in [8, 16, 64]:
            with self.subTest(M=M):
                # uniform phase: half of the bits are wrong on average
                self.assertAlmostEqual(theoryBER(M, -60, exact=True), 0.5, delta=0.01)
                # high SNR: only Gray neighbours matter
                self.assertAlmostEqual(theoryBER(M, 25, exact=True) / theoryBER(M, 25), 1, delta=0.02)

    def test_theoryBER_exact_exceeds_approximation_at_low_snr(self):
        EbN0dB = np.array([-1.0, 2.0])
        for M in [16, 64]:
            with self.subTest(M=M):
                Pb = theoryBER(M, EbN0dB, exact=True)
                self.assertTrue(np.all(Pb > theoryBER(M, EbN0dB)))
                self.assertTrue(np.all(np.diff(Pb) < 0))

    def test_theorySER_bpsk_equals_ber(self):
        np.testing.assert_allclose(theorySER(2, [0, 5]), theoryBER(2, [0, 5]))

    def test_theorySER_exact_qpsk(self):
        # exact QPSK SER: 2Q(x) - Q(x)^2, with x = sqrt(2 Eb/N0)
        EbN0dB = np.array([0.0, 4.0, 8.0])
        q = Qfunc(np.sqrt(2 * 10 ** (EbN0dB / 10)))
        np.testing.assert_allclose(theorySER(4, EbN0dB, exact=True), 2 * q - q**2, rtol=1e-5)

    def test_theorySER_approximation_converges_to_exact(self):
        for M in [8, 16, 32]:
            with self.subTest(M=M):
                exact = theorySER(M, 25, exact=True)
                approx = theorySER(M, 25)
                self.assertAlmostEqual(approx / exact, 1, delta=0.01)
                self.assertIsInstance(float(exact), float)

    def test_theory_rejects_unknown_constellation(self):
        with self.assertRaises(InvalidInputError):
            theoryBER(2, 10, "ook")
        with self.assertRaises(InvalidInputError):
            theorySER(3, 10, "psk")

    def test_countSymbolErrors(self):
        self.assertEqual(countSymbolErrors([0, 1, 2, 3], [0, 1, 3, 0]), 2)
        with self.assertRaises(InvalidInputError):
            countSymbolErrors([0, 1], [0, 1, 2])

    def test_countBitErrors_is_hamming_distance_of_labels(self):
        rng = np.random.default_rng(11)
        M = 16
        tx = rng.integers(0, M, 1000)
        rx = rng.integers(0, M, 1000)
        expected = np.sum(dec2bitarray(tx, 4) != dec2bitarray(rx, 4))
        self.assertEqual(countBitErrors(tx, rx, M), expected)
        self.assertEqual(countBitErrors([0, 3], [3, 3], 4), 2)

    def test_errorRateCI_contains_rate(self):
        lower, upper = errorRateCI(100, 10000)
        self.assertLess(lower, 0.01)
        self.assertGreater(upper, 0.01)
        self.assertGreater(lower, 0.007)
        self.assertLess(upper, 0.013)

    def test_errorRateCI_with_zero_errors(self):
        lower, upper = errorRateCI(0, 1e6)
        self.assertEqual(lower, 0)
        # rule of three: ~3/n
        self.assertAlmostEqual(upper * 1e6, 3.69, delta=0.1)

    def test_errorRateCI_vectorized(self):
        lower, upper = errorRateCI(np.array([0, 5, 10]), np.array([10, 10, 10]))
        self.assertEqual(lower.shape, (3,))
        self.assertEqual(upper[2], 1)

    def test_errorRateCI_rejects_invalid_level(self):
        with self.assertRaises(InvalidInputError):
            errorRateCI(1, 10, confLevel=1.5)


if __name__ == "__main__":
    unittest.main()
