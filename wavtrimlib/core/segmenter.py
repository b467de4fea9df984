#!/usr/bin/env python3

from wavtrimlib.core import detector

#============================================

def filter_short_ranges(ranges: list, min_silence_samples: int) -> list:
	return [item for item in ranges
		if detector.range_length(item) >= min_silence_samples]

#============================================

def filter_short_segments(ranges: list, total_length: int,
	min_segment_samples: int) -> list:
	"""
	Drop cut points that would leave a segment shorter than the minimum.

	The first range is dropped when the audio before it is too short, the
	last when the audio after it is too short. For each adjacent pair with
	too little audio in between the later range is dropped. The drop set is
	computed against the input list and applied once.

	Args:
		ranges: Ordered silence ranges.
		total_length: Channel length in samples.
		min_segment_samples: Minimum segment length in samples.

	Returns:
		list: Retained ranges in order.
	"""
	if len(ranges) == 0:
		return []
	dropped = set()
	if ranges[0]['start'] < min_segment_samples:
		dropped.add(0)
	last_index = len(ranges) - 1
	if total_length - ranges[last_index]['end'] < min_segment_samples:
		dropped.add(last_index)
	for index in range(1, len(ranges)):
		gap = ranges[index]['start'] - ranges[index - 1]['end']
		if gap < min_segment_samples:
			dropped.add(index)
	retained = [index for index in range(len(ranges)) if index not in dropped]
	return [ranges[index] for index in retained]

#============================================

def compute_segment_bounds(ranges: list, total_length: int) -> list:
	"""
	Turn accepted silence ranges into inclusive segment bounds.

	Each segment runs from the previous cut point, initially 0, through the
	start of the next range. The cut point then moves to that range's end.
	A final segment runs from the last cut point to the last sample.
	"""
	if total_length <= 0:
		return []
	bounds = []
	cut_point = 0
	for silence_range in ranges:
		bounds.append({'start': cut_point, 'end': silence_range['start']})
		cut_point = silence_range['end']
	bounds.append({'start': cut_point, 'end': total_length - 1})
	return bounds

#============================================

def plan_segments(ranges: list, total_length: int, min_silence_samples: int,
	min_segment_samples: int) -> list:
	"""
	Filter canonical ranges and return segment bounds.

	Returns:
		list: Segment bounds, empty when no range survives filtering and
			the caller should fall back to a single output.
	"""
	accepted = filter_short_ranges(ranges, min_silence_samples)
	accepted = filter_short_segments(accepted, total_length, min_segment_samples)
	if len(accepted) == 0:
		return []
	return compute_segment_bounds(accepted, total_length)

#============================================

def slice_segments(channels: list, bounds: list) -> list:
	segments = []
	for bound in bounds:
		segment = []
		for channel in channels:
			segment.append(channel[bound['start']:bound['end'] + 1])
		segments.append(segment)
	return segments
