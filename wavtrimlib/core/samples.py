#!/usr/bin/env python3

import numpy
from wavtrimlib.core import utils
from wavtrimlib.core.errors import UnsupportedFormatError

INTEGER_FORMAT = 'int'
FLOAT_FORMAT = 'float'

# storage type per supported integer bit depth
DTYPE_BY_BITS = {
	16: numpy.dtype(numpy.int16),
	24: numpy.dtype(numpy.int32),
	32: numpy.dtype(numpy.int32),
}

#============================================

class SampleFormat():
	def __init__(self, sample_format: str, bits_per_sample: int,
		channels: int, sample_rate: int):
		self.sample_format = sample_format
		self.bits_per_sample = int(bits_per_sample)
		self.channels = int(channels)
		self.sample_rate = int(sample_rate)

	#============================
	def __repr__(self) -> str:
		return (f"SampleFormat({self.sample_format}, {self.bits_per_sample} bit, "
			f"{self.channels} ch, {self.sample_rate} Hz)")

	#============================
	def validate(self) -> None:
		if self.sample_format == FLOAT_FORMAT:
			raise UnsupportedFormatError(
				f"{self.bits_per_sample} bit floating point samples not supported"
			)
		if self.sample_format != INTEGER_FORMAT:
			raise UnsupportedFormatError(f"unknown sample format: {self.sample_format}")
		if self.bits_per_sample not in DTYPE_BY_BITS:
			raise UnsupportedFormatError(
				f"{self.bits_per_sample} bit integer samples not supported"
			)
		if self.channels <= 0:
			raise UnsupportedFormatError("channel count must be positive")
		if self.sample_rate <= 0:
			raise UnsupportedFormatError("sample rate must be positive")
		return

	#============================
	@property
	def dtype(self) -> numpy.dtype:
		self.validate()
		return DTYPE_BY_BITS[self.bits_per_sample]

	#============================
	def with_channels(self, channels: int) -> 'SampleFormat':
		return SampleFormat(self.sample_format, self.bits_per_sample,
			channels, self.sample_rate)

	#============================
	def to_dict(self) -> dict:
		return {
			'sample_format': self.sample_format,
			'bits_per_sample': self.bits_per_sample,
			'channels': self.channels,
			'sample_rate': self.sample_rate,
		}

#============================================

def compute_threshold(db: float, bits_per_sample: int) -> int:
	"""
	Convert a decibel floor into an integer deviation threshold.

	Args:
		db: Decibel floor. Values above 0 dBFS saturate at full scale.
		bits_per_sample: Integer sample width.

	Returns:
		int: Threshold, samples within [-threshold, threshold] are silent.
	"""
	max_value = utils.int_bit_to_max(bits_per_sample, signed=True)
	normalized = utils.db_to_normalized_value(db)
	threshold = int(round(max_value * normalized))
	if threshold < 0:
		threshold = 0
	if threshold > max_value:
		threshold = max_value
	return threshold

#============================================

def silent_mask(channel: numpy.ndarray, threshold: int) -> numpy.ndarray:
	# compare in int64 so the most negative sample cannot overflow
	values = numpy.asarray(channel).astype(numpy.int64, copy=False)
	return (values >= -threshold) & (values <= threshold)
