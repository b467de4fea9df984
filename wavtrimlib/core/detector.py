#!/usr/bin/env python3

import numpy
from wavtrimlib.core import samples

#============================================

def find_silence_ranges(channel: numpy.ndarray, threshold: int,
	min_length_samples: int) -> list:
	"""
	Find contiguous silent runs in one channel.

	A run still open at the last sample is not finalized and is dropped.

	Args:
		channel: One channel of samples.
		threshold: Deviation threshold.
		min_length_samples: Minimum run length, inclusive.

	Returns:
		list: Ranges as dicts with inclusive 'start' and 'end', ordered by start.
	"""
	mask = samples.silent_mask(channel, threshold)
	if mask.size == 0:
		return []
	mask_int = mask.astype(numpy.int8)
	diff = numpy.diff(mask_int)
	start_idxs = numpy.where(diff == 1)[0] + 1
	# exclusive end: first loud sample after the run
	end_idxs = numpy.where(diff == -1)[0] + 1
	if mask[0]:
		start_idxs = numpy.concatenate(
			(numpy.array([0], dtype=numpy.int64), start_idxs)
		)
	ranges = []
	for start_idx, end_idx in zip(start_idxs, end_idxs):
		start = int(start_idx)
		end = int(end_idx) - 1
		if end - start + 1 >= min_length_samples:
			ranges.append({'start': start, 'end': end})
	return ranges

#============================================

def find_silence_ranges_per_channel(channels: list, threshold: int,
	min_length_samples: int) -> list:
	ranges_per_channel = []
	for channel in channels:
		ranges_per_channel.append(
			find_silence_ranges(channel, threshold, min_length_samples)
		)
	return ranges_per_channel

#============================================

def range_length(silence_range: dict) -> int:
	return silence_range['end'] - silence_range['start'] + 1
