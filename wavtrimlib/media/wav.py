#!/usr/bin/env python3

import struct
import wave
import numpy
from wavtrimlib.core import samples
from wavtrimlib.core.errors import DecodeError
from wavtrimlib.core.errors import EncodeError

WAVE_FORMAT_PCM = 0x0001
WAVE_FORMAT_IEEE_FLOAT = 0x0003
WAVE_FORMAT_EXTENSIBLE = 0xFFFE

#============================================

def _read_chunk_header(handle) -> tuple:
	header = handle.read(8)
	if len(header) < 8:
		return (None, 0)
	chunk_id, chunk_size = struct.unpack('<4sI', header)
	return (chunk_id, chunk_size)

#============================================

def _format_name_from_tag(format_tag: int) -> str:
	if format_tag == WAVE_FORMAT_PCM:
		return samples.INTEGER_FORMAT
	if format_tag == WAVE_FORMAT_IEEE_FLOAT:
		return samples.FLOAT_FORMAT
	return f"tag-0x{format_tag:04x}"

#============================================

def _scan_riff(wav_path: str, want_data: bool) -> tuple:
	"""
	Walk the RIFF chunk list of a wav file.

	Args:
		wav_path: Wav file path.
		want_data: Also read the sample bytes of the data chunk.

	Returns:
		tuple: (fmt chunk body, data chunk bytes or None)
	"""
	fmt_body = None
	data = None
	try:
		with open(wav_path, 'rb') as handle:
			riff_header = handle.read(12)
			if len(riff_header) < 12:
				raise DecodeError(f"file too short for a wav header: {wav_path}")
			riff_id, _, wave_id = struct.unpack('<4sI4s', riff_header)
			if riff_id != b'RIFF' or wave_id != b'WAVE':
				raise DecodeError(f"not a RIFF/WAVE file: {wav_path}")
			while True:
				chunk_id, chunk_size = _read_chunk_header(handle)
				if chunk_id is None:
					break
				if chunk_id == b'fmt ':
					fmt_body = handle.read(chunk_size)
				elif chunk_id == b'data' and want_data:
					# a truncated file yields whatever frames it still holds
					data = handle.read(chunk_size)
				else:
					handle.seek(chunk_size, 1)
				# chunks are word aligned
				handle.seek(chunk_size & 1, 1)
				if fmt_body is not None and (data is not None or not want_data):
					break
	except OSError as exc:
		raise DecodeError(f"cannot read {wav_path}: {exc}") from exc
	if fmt_body is None:
		raise DecodeError(f"no fmt chunk found: {wav_path}")
	if want_data and data is None:
		raise DecodeError(f"no data chunk found: {wav_path}")
	return (fmt_body, data)

#============================================

def _parse_fmt(body: bytes, wav_path: str) -> samples.SampleFormat:
	if len(body) < 16:
		raise DecodeError(f"fmt chunk too short: {wav_path}")
	format_tag, channels, sample_rate, _, _, bits = struct.unpack('<HHIIHH', body[:16])
	if format_tag == WAVE_FORMAT_EXTENSIBLE:
		if len(body) < 40:
			raise DecodeError(f"extensible fmt chunk too short: {wav_path}")
		# first two bytes of the sub-format GUID carry the real tag
		format_tag = struct.unpack('<H', body[24:26])[0]
	return samples.SampleFormat(_format_name_from_tag(format_tag), bits,
		channels, sample_rate)

#============================================

def probe_wav_format(wav_path: str) -> samples.SampleFormat:
	"""
	Read the fmt chunk of a RIFF/WAVE file.

	Args:
		wav_path: Wav file path.

	Returns:
		samples.SampleFormat: Format metadata, not yet validated.
	"""
	fmt_body, _ = _scan_riff(wav_path, want_data=False)
	return _parse_fmt(fmt_body, wav_path)

#============================================

def _decode_frames(raw: bytes, bits_per_sample: int) -> numpy.ndarray:
	if bits_per_sample == 16:
		return numpy.frombuffer(raw, dtype='<i2').astype(numpy.int16)
	if bits_per_sample == 32:
		return numpy.frombuffer(raw, dtype='<i4').astype(numpy.int32)
	if bits_per_sample == 24:
		usable = len(raw) - (len(raw) % 3)
		triplets = numpy.frombuffer(raw[:usable], dtype=numpy.uint8).reshape(-1, 3)
		values = (triplets[:, 0].astype(numpy.int32)
			| (triplets[:, 1].astype(numpy.int32) << 8)
			| (triplets[:, 2].astype(numpy.int32) << 16))
		# sign extend from 24 bits
		values = numpy.where(values >= (1 << 23), values - (1 << 24), values)
		return values.astype(numpy.int32)
	raise DecodeError(f"cannot decode {bits_per_sample} bit samples")

#============================================

def _encode_frames(flat: numpy.ndarray, bits_per_sample: int) -> bytes:
	if bits_per_sample == 16:
		return flat.astype('<i2').tobytes()
	if bits_per_sample == 32:
		return flat.astype('<i4').tobytes()
	if bits_per_sample == 24:
		quads = flat.astype('<i4').view(numpy.uint8).reshape(-1, 4)
		return quads[:, :3].tobytes()
	raise EncodeError(f"cannot encode {bits_per_sample} bit samples")

#============================================

def read_wav(wav_path: str) -> tuple:
	"""
	Decode a wav file into a flat interleaved sample array.

	Args:
		wav_path: Wav file path.

	Returns:
		tuple: (samples.SampleFormat, numpy.ndarray of interleaved samples)
	"""
	fmt_body, data = _scan_riff(wav_path, want_data=True)
	sample_format = _parse_fmt(fmt_body, wav_path)
	sample_format.validate()
	frame_bytes = sample_format.channels * (sample_format.bits_per_sample // 8)
	# drop a trailing partial frame
	usable = len(data) - (len(data) % frame_bytes)
	flat = _decode_frames(data[:usable], sample_format.bits_per_sample)
	return (sample_format, flat)

#============================================

def write_wav(wav_path: str, sample_format: samples.SampleFormat,
	flat: numpy.ndarray) -> str:
	"""
	Write interleaved samples as PCM wav at the given depth and rate.

	Args:
		wav_path: Output path.
		sample_format: Output format, channel count already revised.
		flat: Interleaved samples.

	Returns:
		str: Output path.
	"""
	if sample_format.channels <= 0:
		raise EncodeError(f"no channels to write: {wav_path}")
	data = _encode_frames(numpy.asarray(flat), sample_format.bits_per_sample)
	try:
		with wave.open(wav_path, 'wb') as wav_handle:
			wav_handle.setnchannels(sample_format.channels)
			wav_handle.setsampwidth(sample_format.bits_per_sample // 8)
			wav_handle.setframerate(sample_format.sample_rate)
			wav_handle.writeframes(data)
	except (wave.Error, OSError) as exc:
		raise EncodeError(f"couldn't write {wav_path}: {exc}") from exc
	return wav_path
