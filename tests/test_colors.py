import unittest

import numpy

from juliaset import IN_SET, ColorPolicy, color_for_escape, color_for_in_set
from juliaset.colors import ESCAPE_DELTA, IN_SET_COLOR, OUT_OF_SET_COLOR


class TestColorPolicy(unittest.TestCase):

    def test_in_set_color_is_constant(self):
        self.assertEqual(color_for_in_set(), (0, 0, 0, 255))
        self.assertEqual(color_for_in_set(), IN_SET_COLOR)

    def test_stage_zero_is_base_color(self):
        self.assertEqual(color_for_escape(0), OUT_OF_SET_COLOR)
        self.assertEqual(color_for_escape(0), (10, 10, 30, 255))

    def test_channels_truncate(self):
        # 11.6, 10.8, 31.4, 255
        self.assertEqual(color_for_escape(1), (11, 10, 31, 255))

    def test_channel_step_is_delta(self):
        policy = ColorPolicy()
        for k in range(1, 50):
            previous = policy.escape_channels(k - 1)
            current = policy.escape_channels(k)
            for channel in range(4):
                self.assertAlmostEqual(current[channel] - previous[channel], ESCAPE_DELTA[channel], places=9)

    def test_integer_delta_steps_exactly(self):
        policy = ColorPolicy(out_of_set=(0, 20, 40, 100), delta=(2, 1, 3, 0))
        for k in range(1, 60):
            previous = policy.color_for_escape(k - 1)
            current = policy.color_for_escape(k)
            self.assertEqual(tuple(a - b for a, b in zip(current, previous)), (2, 1, 3, 0))

    def test_clamps_to_channel_range(self):
        self.assertEqual(color_for_escape(1000), (255, 255, 255, 255))

        policy = ColorPolicy(out_of_set=(100, 100, 100, 100), delta=(-3.0, 0.0, 3.0, -1.0))
        self.assertEqual(policy.color_for_escape(200), (0, 100, 255, 0))
        self.assertEqual(policy.escape_channels(200), (0.0, 100.0, 255.0, 0.0))

    def test_colorize_matches_scalar(self):
        policy = ColorPolicy()
        stages = numpy.arange(-1, 200, dtype=numpy.int32).reshape(1, -1)

        rgba = policy.colorize(stages)

        self.assertEqual(rgba.shape, (1, 201, 4))
        self.assertEqual(rgba.dtype, numpy.uint8)
        self.assertEqual(tuple(rgba[0, 0]), policy.color_for_in_set())
        for k in range(200):
            self.assertEqual(tuple(int(v) for v in rgba[0, k + 1]), policy.color_for_escape(k))

    def test_colorize_custom_in_set(self):
        policy = ColorPolicy(in_set=(1, 2, 3, 4))
        rgba = policy.colorize(numpy.array([[IN_SET, 0]]))
        self.assertEqual(rgba[0, 0].tolist(), [1, 2, 3, 4])
        self.assertEqual(rgba[0, 1].tolist(), list(OUT_OF_SET_COLOR))


if __name__ == '__main__':
    unittest.main()
