#!/usr/bin/env python3

import os
from wavtrimlib.core import interleave
from wavtrimlib.core import utils
from wavtrimlib.core.errors import FilesystemError
from wavtrimlib.media import wav

NON_OVERWRITE_SUFFIX = "_stripped"
OUTPUT_EXTENSION = ".wav"

#============================================

class OutputAssembler():
	def __init__(self, config):
		self.config = config

	#============================
	def _stem(self, input_path: str) -> str:
		name = os.path.basename(input_path)
		stem, _ = os.path.splitext(name)
		if stem == "":
			stem = "default_name"
		return stem

	#============================
	def trimmed_output_path(self, input_path: str) -> str:
		if self.config.overwrite:
			return input_path
		stem = self._stem(input_path)
		return os.path.join(os.path.dirname(input_path),
			f"{stem}{NON_OVERWRITE_SUFFIX}{OUTPUT_EXTENSION}")

	#============================
	def segment_directory(self, input_path: str) -> str:
		parent = os.path.dirname(input_path)
		auto_cut = self.config.auto_cut
		if auto_cut is None or not auto_cut.create_subdirectory:
			return parent
		return os.path.join(parent, self._stem(input_path))

	#============================
	def segment_output_path(self, input_path: str, number: int,
		directory: str = None) -> str:
		if directory is None:
			directory = self.segment_directory(input_path)
		stem = self._stem(input_path)
		marker = "" if self.config.overwrite else NON_OVERWRITE_SUFFIX
		postfix = ""
		if self.config.auto_cut is not None:
			postfix = self.config.auto_cut.numbering_postfix
		return os.path.join(directory,
			f"{stem}{marker}{postfix}{number:02d}{OUTPUT_EXTENSION}")

	#============================
	def ensure_directory(self, directory: str) -> str:
		try:
			os.makedirs(directory, exist_ok=True)
		except OSError as exc:
			raise FilesystemError(f"couldn't create directory {directory}: {exc}") from exc
		return directory

	#============================
	def remove_file(self, path: str, reason: str) -> None:
		utils.log_message(f"deleting file because {reason}: {path}")
		try:
			os.remove(path)
		except OSError as exc:
			raise FilesystemError(f"couldn't remove file {path}: {exc}") from exc
		return

	#============================
	def handle_empty(self, input_path: str) -> bool:
		"""
		Apply the empty-file policy, nothing is written for empty audio.

		Returns:
			bool: True when the input file was removed.

		Raises:
			FilesystemError: The input file could not be removed.
		"""
		if not self.config.delete_empty:
			utils.log_message(f"nothing left after trimming, skipping: {input_path}")
			return False
		self.remove_file(input_path, "it's empty")
		return True

	#============================
	def write_channels(self, output_path: str, sample_format, channels: list) -> str:
		"""
		Re-interleave channels and hand them to the wav encoder.

		Raises:
			EncodeError: The output could not be written.
		"""
		out_format = sample_format.with_channels(len(channels))
		flat = interleave.reinterleave(channels, dtype=sample_format.dtype)
		wav.write_wav(output_path, out_format, flat)
		utils.log_message(f"wrote {output_path}")
		return output_path
