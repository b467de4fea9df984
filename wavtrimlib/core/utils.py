#!/usr/bin/env python3

import math
import os
import sys

QUIET_MODE = False

#============================================

def set_quiet_mode(enabled: bool) -> None:
	global QUIET_MODE
	QUIET_MODE = bool(enabled)
	return

#============================================

def is_quiet_mode() -> bool:
	return QUIET_MODE

#============================================

def log_message(text: str) -> None:
	if QUIET_MODE:
		return
	print(text)
	return

#============================================

def log_warning(text: str) -> None:
	print(f"WARNING: {text}", file=sys.stderr)
	return

#============================================

def log_error(text: str) -> None:
	print(f"ERROR: {text}", file=sys.stderr)
	return

#============================================

def int_bit_to_max(bits: int, signed: bool = True) -> int:
	"""
	Largest value an integer of the given bit width can store.

	Args:
		bits: Integer width in bits.
		signed: True for two's complement signed integers.

	Returns:
		int: Maximum representable value, e.g. 8388607 for signed 24 bit.
	"""
	if bits <= 0:
		raise RuntimeError("bit width must be positive")
	if signed:
		return 2 ** (bits - 1) - 1
	return 2 ** bits - 1

#============================================

def db_to_normalized_value(db: float) -> float:
	"""
	Convert a decibel floor to a linear amplitude ratio.

	Args:
		db: Level in dBFS, 0 or negative.

	Returns:
		float: Linear ratio, 1.0 at 0 dB.
	"""
	return math.pow(10.0, db / 20.0)

#============================================

def ms_to_samples(milliseconds: float, sample_rate: int) -> int:
	if milliseconds <= 0:
		return 0
	return int(math.floor(milliseconds * sample_rate / 1000.0))

#============================================

def samples_to_seconds(samples: int, sample_rate: int) -> float:
	if sample_rate <= 0:
		raise RuntimeError("sample rate must be positive")
	return samples / float(sample_rate)
