#!/usr/bin/env python3

import os
from wavtrimlib.core import detector
from wavtrimlib.core import interleave
from wavtrimlib.core import merger
from wavtrimlib.core import samples
from wavtrimlib.core import segmenter
from wavtrimlib.core import trimmer
from wavtrimlib.core import utils
from wavtrimlib.core import walker
from wavtrimlib.core.errors import DecodeError
from wavtrimlib.core.errors import EncodeError
from wavtrimlib.core.errors import FilesystemError
from wavtrimlib.core.errors import UnsupportedFormatError
from wavtrimlib.core.output import OutputAssembler
from wavtrimlib.media import wav

#============================================

class WavProcessor():
	def __init__(self, config):
		self.config = config
		self.output = OutputAssembler(config)

	#============================
	def analyze(self, sample_format: samples.SampleFormat, flat) -> dict:
		"""
		Run trim and segmentation on decoded samples without touching disk.

		Args:
			sample_format: Validated input format.
			flat: Interleaved samples.

		Returns:
			dict: threshold, trimmed channels, kept channel indices,
				canonical ranges and segment bounds.
		"""
		sample_format.validate()
		threshold = samples.compute_threshold(self.config.deviation_db,
			sample_format.bits_per_sample)
		channels = interleave.deinterleave(flat, sample_format.channels)
		original_length = trimmer.channel_length(channels)
		trimmed, kept_indices = trimmer.trim_trailing_silence(channels, threshold)
		total_length = trimmer.channel_length(trimmed)
		analysis = {
			'threshold': threshold,
			'original_length': original_length,
			'channels': trimmed,
			'kept_indices': kept_indices,
			'total_length': total_length,
			'ranges': [],
			'bounds': [],
		}
		auto_cut = self.config.auto_cut
		if auto_cut is None or total_length == 0:
			return analysis
		min_silence = auto_cut.min_silence_samples(sample_format.sample_rate)
		min_segment = auto_cut.min_segment_samples(sample_format.sample_rate)
		ranges_per_channel = detector.find_silence_ranges_per_channel(trimmed,
			threshold, min_silence)
		canonical = merger.merge_channel_ranges(ranges_per_channel)
		analysis['ranges'] = canonical
		if len(canonical) == 0:
			return analysis
		analysis['bounds'] = segmenter.plan_segments(canonical, total_length,
			min_silence, min_segment)
		return analysis

	#============================
	def _new_result(self, wav_path: str) -> dict:
		return {
			'path': wav_path,
			'status': 'ok',
			'outputs': [],
			'channels_kept': [],
			'segments': 0,
			'deleted': False,
		}

	#============================
	def process_file(self, wav_path: str) -> dict:
		"""
		Trim and optionally segment one wav file, writing its outputs.

		Unsupported, undecodable and unwritable files are reported and
		recorded in the result status, never raised.

		Args:
			wav_path: Input wav path.

		Returns:
			dict: Result summary for the file.
		"""
		result = self._new_result(wav_path)
		utils.log_message(f"Processing wav file: {wav_path}")
		try:
			sample_format, flat = wav.read_wav(wav_path)
		except UnsupportedFormatError as exc:
			utils.log_error(f"{wav_path}: {exc}")
			result['status'] = 'unsupported'
			return result
		except DecodeError as exc:
			utils.log_error(str(exc))
			result['status'] = 'decode-error'
			return result
		analysis = self.analyze(sample_format, flat)
		result['channels_kept'] = analysis['kept_indices']
		if analysis['total_length'] == 0:
			result['status'] = 'empty'
			try:
				result['deleted'] = self.output.handle_empty(wav_path)
			except FilesystemError as exc:
				utils.log_error(str(exc))
			return result
		if len(analysis['bounds']) > 0:
			self._write_segments(wav_path, sample_format, analysis, result)
		else:
			if self.config.auto_cut is not None:
				utils.log_message(f"no usable silence found, writing single file: {wav_path}")
			self._write_single(wav_path, sample_format, analysis, result)
		return result

	#============================
	def _write_single(self, wav_path: str, sample_format, analysis: dict,
		result: dict) -> None:
		output_path = self.output.trimmed_output_path(wav_path)
		try:
			self.output.write_channels(output_path, sample_format, analysis['channels'])
		except EncodeError as exc:
			utils.log_error(str(exc))
			result['status'] = 'encode-error'
			return
		result['outputs'].append(output_path)
		return

	#============================
	def _write_segments(self, wav_path: str, sample_format, analysis: dict,
		result: dict) -> None:
		directory = self.output.segment_directory(wav_path)
		if directory != os.path.dirname(wav_path):
			try:
				self.output.ensure_directory(directory)
			except FilesystemError as exc:
				utils.log_error(str(exc))
				directory = os.path.dirname(wav_path)
		segments = segmenter.slice_segments(analysis['channels'], analysis['bounds'])
		result['segments'] = len(segments)
		failures = 0
		for number, segment in enumerate(segments, start=1):
			if trimmer.channel_length(segment) == 0:
				try:
					result['deleted'] = self.output.handle_empty(wav_path)
				except FilesystemError as exc:
					utils.log_error(str(exc))
				continue
			output_path = self.output.segment_output_path(wav_path, number, directory)
			try:
				self.output.write_channels(output_path, sample_format, segment)
			except EncodeError as exc:
				utils.log_error(str(exc))
				failures += 1
				continue
			result['outputs'].append(output_path)
		if failures > 0:
			result['status'] = 'encode-error'
		auto_cut = self.config.auto_cut
		if not auto_cut.delete_original or len(result['outputs']) == 0:
			return
		if wav_path in result['outputs'] or result['deleted']:
			return
		try:
			self.output.remove_file(wav_path, "it was split into segments")
			result['deleted'] = True
		except FilesystemError as exc:
			utils.log_error(str(exc))
		return

	#============================
	def build_plan(self, wav_path: str) -> dict:
		"""
		Describe what process_file would do, as plain data for YAML output.
		"""
		plan = {'path': wav_path}
		try:
			sample_format, flat = wav.read_wav(wav_path)
		except (UnsupportedFormatError, DecodeError) as exc:
			plan['status'] = 'skipped'
			plan['error'] = str(exc)
			return plan
		analysis = self.analyze(sample_format, flat)
		sample_rate = sample_format.sample_rate
		plan['format'] = sample_format.to_dict()
		if self.config.auto_cut is not None:
			plan['auto_cut'] = self.config.auto_cut.to_dict()
		plan['threshold'] = analysis['threshold']
		plan['channels_kept'] = list(analysis['kept_indices'])
		plan['original_samples'] = analysis['original_length']
		plan['trimmed_samples'] = analysis['total_length']
		plan['trimmed_seconds'] = round(
			utils.samples_to_seconds(analysis['total_length'], sample_rate), 3)
		if analysis['total_length'] == 0:
			plan['status'] = 'empty'
			plan['delete_input'] = self.config.delete_empty
			plan['outputs'] = []
			return plan
		plan['status'] = 'ok'
		plan['silence_ranges'] = [dict(item) for item in analysis['ranges']]
		if len(analysis['bounds']) == 0:
			plan['outputs'] = [self.output.trimmed_output_path(wav_path)]
			return plan
		directory = self.output.segment_directory(wav_path)
		plan['segments'] = []
		for number, bound in enumerate(analysis['bounds'], start=1):
			plan['segments'].append({
				'start': bound['start'],
				'end': bound['end'],
				'output': self.output.segment_output_path(wav_path, number, directory),
			})
		plan['outputs'] = [item['output'] for item in plan['segments']]
		plan['delete_input'] = self.config.auto_cut.delete_original
		return plan

	#============================
	def run(self, root: str) -> dict:
		summary = {
			'processed': 0,
			'empty': 0,
			'skipped': 0,
			'failed': 0,
			'results': [],
		}
		for wav_path in walker.iter_wav_files(root):
			result = self.process_file(wav_path)
			summary['results'].append(result)
			status = result['status']
			if status == 'ok':
				summary['processed'] += 1
			elif status == 'empty':
				summary['empty'] += 1
			elif status in ('unsupported', 'decode-error'):
				summary['skipped'] += 1
			else:
				summary['failed'] += 1
		return summary
