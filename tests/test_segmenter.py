#!/usr/bin/env python3

# Standard Library
import os
import sys
import unittest

# PIP3 modules
import numpy

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

from wavtrimlib.core import segmenter

#============================================

def _ranges(*pairs) -> list:
	return [{'start': start, 'end': end} for start, end in pairs]

#============================================

class SegmenterTest(unittest.TestCase):
	#============================================
	def test_single_range_gives_two_segments(self) -> None:
		"""A 1000 sample buffer cut at (400,450) yields [0..400] and [450..999]."""
		bounds = segmenter.plan_segments(_ranges((400, 450)), 1000, 1, 50)
		self.assertEqual(bounds, _ranges((0, 400), (450, 999)))
		channel = numpy.arange(1000, dtype=numpy.int32)
		segments = segmenter.slice_segments([channel], bounds)
		self.assertEqual(len(segments), 2)
		self.assertEqual(len(segments[0][0]), 401)
		self.assertEqual(int(segments[0][0][-1]), 400)
		self.assertEqual(len(segments[1][0]), 550)
		self.assertEqual(int(segments[1][0][0]), 450)
		self.assertEqual(int(segments[1][0][-1]), 999)

	#============================================
	def test_first_range_too_close_to_start(self) -> None:
		kept = segmenter.filter_short_segments(_ranges((30, 40), (400, 450)), 1000, 50)
		self.assertEqual(kept, _ranges((400, 450)))

	#============================================
	def test_last_range_too_close_to_end(self) -> None:
		kept = segmenter.filter_short_segments(_ranges((400, 450), (980, 990)), 1000, 50)
		self.assertEqual(kept, _ranges((400, 450)))

	#============================================
	def test_later_range_of_short_gap_dropped(self) -> None:
		kept = segmenter.filter_short_segments(
			_ranges((100, 150), (170, 200), (500, 550)), 1000, 50)
		self.assertEqual(kept, _ranges((100, 150), (500, 550)))

	#============================================
	def test_sole_range_dropped_gives_fallback(self) -> None:
		"""No surviving range means no bounds, the caller writes one file."""
		self.assertEqual(segmenter.plan_segments(_ranges((10, 20)), 1000, 1, 50), [])
		self.assertEqual(segmenter.plan_segments([], 1000, 1, 50), [])

	#============================================
	def test_length_filter(self) -> None:
		kept = segmenter.filter_short_ranges(_ranges((5, 9), (20, 40)), 10)
		self.assertEqual(kept, _ranges((20, 40)))

	#============================================
	def test_bounds_without_ranges(self) -> None:
		self.assertEqual(segmenter.compute_segment_bounds([], 10), _ranges((0, 9)))
		self.assertEqual(segmenter.compute_segment_bounds([], 0), [])

	#============================================
	def test_all_channels_sliced_identically(self) -> None:
		left = numpy.arange(20, dtype=numpy.int16)
		right = numpy.arange(20, dtype=numpy.int16) * -1
		bounds = segmenter.compute_segment_bounds(_ranges((5, 8), (12, 14)), 20)
		self.assertEqual(bounds, _ranges((0, 5), (8, 12), (14, 19)))
		segments = segmenter.slice_segments([left, right], bounds)
		for segment in segments:
			self.assertEqual(len(segment), 2)
			self.assertEqual(len(segment[0]), len(segment[1]))
			self.assertTrue(numpy.array_equal(segment[0], -segment[1]))

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
