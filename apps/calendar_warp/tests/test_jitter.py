"""
Unit tests for apps.calendar_warp.jitter.

random.randint is patched where a specific draw is needed.
"""
from unittest.mock import patch

from django.test import SimpleTestCase

from apps.calendar_warp.jitter import ceil_to, compute_offset

PATCH_RANDINT = 'apps.calendar_warp.jitter.random.randint'


class CeilToTests(SimpleTestCase):

    def test_exact_multiple_is_unchanged(self):
        self.assertEqual(ceil_to(25, 5), 25)

    def test_non_multiple_rounds_up(self):
        # round((27 + 2.5) / 5) * 5 = round(5.9) * 5 = 30
        self.assertEqual(ceil_to(27, 5), 30)

    def test_just_above_multiple_rounds_up(self):
        self.assertEqual(ceil_to(26, 5), 30)
        self.assertEqual(ceil_to(6, 5), 10)

    def test_float_is_ceiled_first(self):
        self.assertEqual(ceil_to(24.2, 5), 25)

    def test_default_step_is_5(self):
        self.assertEqual(ceil_to(11), 15)

    def test_other_steps(self):
        self.assertEqual(ceil_to(4, 3), 6)
        self.assertEqual(ceil_to(9, 3), 9)


class ComputeOffsetTests(SimpleTestCase):

    @patch(PATCH_RANDINT, return_value=27)
    def test_draw_27_gives_30(self, mock_randint):
        self.assertEqual(compute_offset(5, 30), 30)
        mock_randint.assert_called_once_with(5, 30)

    @patch(PATCH_RANDINT, return_value=25)
    def test_draw_25_gives_25(self, mock_randint):
        self.assertEqual(compute_offset(5, 30), 25)

    @patch(PATCH_RANDINT, return_value=5)
    def test_minimum_draw(self, mock_randint):
        self.assertEqual(compute_offset(5, 30), 5)

    @patch(PATCH_RANDINT, return_value=31)
    def test_can_exceed_max_when_max_not_a_multiple(self, mock_randint):
        """Known boundary quirk: the draw is never clamped back to max_warp."""
        self.assertEqual(compute_offset(5, 32), 35)

    def test_many_draws_are_multiples_of_5_and_at_least_5(self):
        for _ in range(2000):
            offset = compute_offset(5, 30)
            self.assertGreaterEqual(offset, 5)
            self.assertLessEqual(offset, 30)
            self.assertEqual(offset % 5, 0)

    def test_upper_bound_is_next_multiple_above_max(self):
        for _ in range(2000):
            offset = compute_offset(5, 32)
            self.assertEqual(offset % 5, 0)
            self.assertGreaterEqual(offset, 5)
            self.assertLessEqual(offset, 35)

    def test_equal_min_and_max(self):
        self.assertEqual(compute_offset(5, 5), 5)

    def test_rejects_non_positive_min(self):
        with self.assertRaises(ValueError):
            compute_offset(0, 30)

    def test_rejects_max_below_min(self):
        with self.assertRaises(ValueError):
            compute_offset(10, 5)
