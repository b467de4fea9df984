#!/usr/bin/env python3

#============================================

class WavTrimError(RuntimeError):
	pass

#============================================

class UnsupportedFormatError(WavTrimError):
	"""Non-integer sample format or a bit depth outside 16/24/32."""
	pass

#============================================

class DecodeError(WavTrimError):
	pass

#============================================

class EncodeError(WavTrimError):
	pass

#============================================

class FilesystemError(WavTrimError):
	"""Delete or directory creation failure, reported but never fatal."""
	pass

#============================================

class ConfigError(WavTrimError):
	pass
