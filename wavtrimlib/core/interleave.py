#!/usr/bin/env python3

import numpy

#============================================

def deinterleave(samples, channel_count: int) -> list:
	"""
	Split a flat interleaved sample stream into per-channel arrays.

	Channel c receives every flat index i with i % channel_count == c.
	A trailing partial frame is dropped so all channels share one length.

	Args:
		samples: Flat interleaved samples.
		channel_count: Number of channels, 1 or more.

	Returns:
		list: One numpy array per channel.
	"""
	if channel_count <= 0:
		raise RuntimeError("channel count must be positive")
	flat = numpy.asarray(samples)
	if flat.ndim != 1:
		flat = flat.reshape(-1)
	frame_count = flat.size // channel_count
	if flat.size != frame_count * channel_count:
		flat = flat[:frame_count * channel_count]
	frames = flat.reshape(frame_count, channel_count)
	channels = []
	for channel_idx in range(channel_count):
		channels.append(numpy.ascontiguousarray(frames[:, channel_idx]))
	return channels

#============================================

def reinterleave(channels: list, dtype=None) -> numpy.ndarray:
	"""
	Build a flat interleaved stream from equal-length channels.

	Args:
		channels: List of per-channel arrays.
		dtype: Output dtype, defaults to the first channel's dtype.

	Returns:
		numpy.ndarray: Flat samples, index i from channel i % n at i // n.
	"""
	if len(channels) == 0:
		if dtype is None:
			dtype = numpy.int32
		return numpy.zeros(0, dtype=dtype)
	lengths = {len(channel) for channel in channels}
	if len(lengths) != 1:
		raise RuntimeError(f"channel lengths differ: {sorted(lengths)}")
	if dtype is None:
		dtype = numpy.asarray(channels[0]).dtype
	stacked = numpy.stack([numpy.asarray(channel, dtype=dtype) for channel in channels],
		axis=1)
	return stacked.reshape(-1)
