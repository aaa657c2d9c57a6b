import unittest

import numpy

from juliaset import IN_SET, EscapeResult, escape_stages, is_in_set


class TestIsInSet(unittest.TestCase):

    def test_origin_is_fixed_point(self):
        self.assertEqual(is_in_set(0j, 0j, 100), EscapeResult(in_set=True, escape_stage=None))

    def test_escapes_on_first_iteration(self):
        # 2**2 + 2 = 6
        self.assertEqual(is_in_set(2 + 0j, 2 + 0j, 100), EscapeResult(in_set=False, escape_stage=0))

    def test_escape_stage_is_zero_based(self):
        self.assertEqual(is_in_set(1.5 + 0j, 0j, 100).escape_stage, 0)
        self.assertEqual(is_in_set(1.2 + 0j, 0j, 100).escape_stage, 1)
        self.assertEqual(is_in_set(1.1 + 0j, 0j, 100).escape_stage, 2)

    def test_reference_corner(self):
        # (-2 + 2i)**2 = -8i
        self.assertEqual(is_in_set(complex(-2, 2), 0j, 100), EscapeResult(False, 0))

    def test_nonzero_fixed_point(self):
        # 0.5**2 + 0.25 = 0.5
        self.assertEqual(is_in_set(0.5 + 0j, 0.25 + 0j, 100), EscapeResult(True, None))

    def test_period_two_cycle_runs_out_budget(self):
        # 0 -> -1 -> 0 -> ... never escapes and is never stationary
        self.assertEqual(is_in_set(0j, -1 + 0j, 100), EscapeResult(True, None))

    def test_budget_limits_iterations(self):
        self.assertEqual(is_in_set(1.1 + 0j, 0j, 2), EscapeResult(True, None))
        self.assertEqual(is_in_set(1.1 + 0j, 0j, 3), EscapeResult(False, 2))
        self.assertEqual(is_in_set(5 + 0j, 0j, 0), EscapeResult(True, None))


class TestEscapeStages(unittest.TestCase):

    def test_known_points(self):
        real = numpy.array([[0.0, 2.0], [1.1, 0.5]])
        imag = numpy.zeros_like(real)

        stages = escape_stages(real, imag, 0j, 100)

        self.assertEqual(stages.shape, (2, 2))
        self.assertEqual(stages.tolist(), [[IN_SET, 0], [2, IN_SET]])

    def test_matches_scalar_evaluator(self):
        for c in (0j, complex(0.285, 0.01), complex(-0.8, 0.156), complex(-1, 0)):
            real, imag = numpy.meshgrid(numpy.linspace(-1.7, 1.7, 17), numpy.linspace(1.2, -1.2, 11))
            stages = escape_stages(real, imag, c, 60)

            for (row, col), stage in numpy.ndenumerate(stages):
                result = is_in_set(complex(real[row, col], imag[row, col]), c, 60)
                expected = IN_SET if result.in_set else result.escape_stage
                self.assertEqual(stage, expected, msg=f"c={c} at {(row, col)}")

    def test_empty_grid(self):
        stages = escape_stages(numpy.zeros((4, 0)), numpy.zeros((4, 0)), 0j, 100)
        self.assertEqual(stages.shape, (4, 0))


if __name__ == '__main__':
    unittest.main()
