#!/usr/bin/env python3

#============================================

def select_base_channel(ranges_per_channel: list):
	"""
	Pick the channel with the most silence ranges, first one on ties.

	Returns:
		int or None: Channel index, None when no channel has ranges.
	"""
	base_index = None
	base_count = 0
	for index, ranges in enumerate(ranges_per_channel):
		if len(ranges) > base_count:
			base_index = index
			base_count = len(ranges)
	return base_index

#============================================

def widen_range(base_range: dict, other_ranges: list) -> dict:
	"""
	Widen one base range by the overlapping ranges of another channel.

	Ranges starting after the base end or ending before the base start
	are skipped.
	"""
	start = base_range['start']
	end = base_range['end']
	for other in other_ranges:
		if other['start'] > base_range['end']:
			break
		if other['end'] < base_range['start']:
			continue
		if other['start'] < start:
			start = other['start']
		if other['end'] > end:
			end = other['end']
	return {'start': start, 'end': end}

#============================================

def coalesce_ranges(ranges: list) -> list:
	"""
	Merge overlapping or touching ranges into an ordered disjoint list.
	"""
	if len(ranges) == 0:
		return []
	sorted_ranges = sorted(ranges, key=lambda item: item['start'])
	merged = []
	current = {
		'start': sorted_ranges[0]['start'],
		'end': sorted_ranges[0]['end'],
	}
	for silence_range in sorted_ranges[1:]:
		if silence_range['start'] <= current['end'] + 1:
			if silence_range['end'] > current['end']:
				current['end'] = silence_range['end']
		else:
			merged.append(current)
			current = {'start': silence_range['start'], 'end': silence_range['end']}
	merged.append(current)
	return merged

#============================================

def merge_channel_ranges(ranges_per_channel: list) -> list:
	"""
	Reconcile per-channel silence ranges into one canonical list.

	The channel with the most ranges is the base. Each base range is
	widened to cover the overlapping silence of every other channel.
	Inputs are left untouched.

	Args:
		ranges_per_channel: One ordered range list per channel.

	Returns:
		list: Canonical ranges, empty when no channel reported silence.
	"""
	with_ranges = [ranges for ranges in ranges_per_channel if len(ranges) > 0]
	if len(with_ranges) == 0:
		return []
	if len(with_ranges) == 1:
		return [dict(item) for item in with_ranges[0]]
	base_index = select_base_channel(ranges_per_channel)
	widened = []
	for base_range in ranges_per_channel[base_index]:
		current = {'start': base_range['start'], 'end': base_range['end']}
		for index, other_ranges in enumerate(ranges_per_channel):
			if index == base_index:
				continue
			candidate = widen_range(base_range, other_ranges)
			current['start'] = min(current['start'], candidate['start'])
			current['end'] = max(current['end'], candidate['end'])
		widened.append(current)
	return coalesce_ranges(widened)
