#!/usr/bin/env python3

import numpy
from wavtrimlib.core import samples

#============================================

def find_last_sound_index(channel: numpy.ndarray, threshold: int):
	"""
	Find the last index holding a non-silent sample.

	Args:
		channel: One channel of samples.
		threshold: Deviation threshold.

	Returns:
		int or None: Last non-silent index, None when the channel is fully silent.
	"""
	loud = numpy.flatnonzero(~samples.silent_mask(channel, threshold))
	if loud.size == 0:
		return None
	return int(loud[-1])

#============================================

def trim_trailing_silence(channels: list, threshold: int) -> tuple:
	"""
	Drop fully silent channels and cut the rest after the shared last sound.

	A channel whose only non-silent sample is at index 0 is kept with
	last-sound index 0.

	Args:
		channels: Equal-length channel arrays.
		threshold: Deviation threshold.

	Returns:
		tuple: (trimmed_channels, kept_indices). Both empty when all
			channels are fully silent.
	"""
	last_sounds = []
	for channel in channels:
		last_sounds.append(find_last_sound_index(channel, threshold))
	kept_indices = [index for index, last in enumerate(last_sounds) if last is not None]
	if len(kept_indices) == 0:
		return [], []
	max_last_sound = max(last_sounds[index] for index in kept_indices)
	trimmed = []
	for index in kept_indices:
		trimmed.append(channels[index][:max_last_sound + 1])
	return trimmed, kept_indices

#============================================

def channel_length(channels: list) -> int:
	if len(channels) == 0:
		return 0
	return len(channels[0])
