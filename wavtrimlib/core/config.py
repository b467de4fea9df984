#!/usr/bin/env python3

import math
import os
import yaml
from wavtrimlib.core import utils
from wavtrimlib.core.errors import ConfigError

DEFAULT_DEVIATION_DB = -60.0
DEFAULT_MIN_SILENCE_MS = 500.0
DEFAULT_MIN_SEGMENT_MS = 1000.0
DEFAULT_NUMBERING_POSTFIX = "_"
CONFIG_VERSION = 1

# accepted spellings for on/off settings
SWITCH_WORDS = {
	"true": True, "yes": True, "on": True, "1": True,
	"false": False, "no": False, "off": False, "0": False,
}

#============================================

class AutoCutConfig():
	"""
	Segmentation settings.

	Defaults: min_silence_length_ms=500.0, min_segment_length_ms=1000.0,
	numbering_postfix="_", create_subdirectory=False, delete_original=False.
	"""
	def __init__(self, min_silence_length_ms: float = DEFAULT_MIN_SILENCE_MS,
		min_segment_length_ms: float = DEFAULT_MIN_SEGMENT_MS,
		numbering_postfix: str = DEFAULT_NUMBERING_POSTFIX,
		create_subdirectory: bool = False, delete_original: bool = False):
		if not math.isfinite(min_silence_length_ms) or min_silence_length_ms < 0:
			raise ConfigError("min_silence_length_ms must be a finite, non-negative number")
		if not math.isfinite(min_segment_length_ms) or min_segment_length_ms < 0:
			raise ConfigError("min_segment_length_ms must be a finite, non-negative number")
		if '/' in numbering_postfix or os.sep in numbering_postfix:
			raise ConfigError("numbering_postfix must not contain path separators")
		self.min_silence_length_ms = float(min_silence_length_ms)
		self.min_segment_length_ms = float(min_segment_length_ms)
		self.numbering_postfix = numbering_postfix
		self.create_subdirectory = bool(create_subdirectory)
		self.delete_original = bool(delete_original)

	#============================
	def min_silence_samples(self, sample_rate: int) -> int:
		return utils.ms_to_samples(self.min_silence_length_ms, sample_rate)

	#============================
	def min_segment_samples(self, sample_rate: int) -> int:
		return utils.ms_to_samples(self.min_segment_length_ms, sample_rate)

	#============================
	def to_dict(self) -> dict:
		return {
			'min_silence_ms': self.min_silence_length_ms,
			'min_segment_ms': self.min_segment_length_ms,
			'numbering_postfix': self.numbering_postfix,
			'create_subdirectory': self.create_subdirectory,
			'delete_original': self.delete_original,
		}

#============================================

class TrimConfig():
	"""
	Per-run settings, built once and shared read-only by every file.

	Defaults: deviation_db=-60.0, overwrite=False, delete_empty=False,
	auto_cut=None (trailing-silence trim only).
	"""
	def __init__(self, deviation_db: float = DEFAULT_DEVIATION_DB,
		overwrite: bool = False, delete_empty: bool = False,
		auto_cut: AutoCutConfig = None):
		deviation_db = parse_db(deviation_db)
		if deviation_db > 0:
			utils.log_warning(f"deviation {deviation_db} dB is above full scale, "
				"every sample will count as silence")
		self.deviation_db = deviation_db
		self.overwrite = bool(overwrite)
		self.delete_empty = bool(delete_empty)
		self.auto_cut = auto_cut

	#============================
	def describe(self) -> str:
		text = (f"minimum db = {self.deviation_db}, "
			f"overwrite input files = {self.overwrite}, "
			f"delete empty files = {self.delete_empty}")
		if self.auto_cut is not None:
			text += (f", auto cut = (min silence {self.auto_cut.min_silence_length_ms} ms, "
				f"min segment {self.auto_cut.min_segment_length_ms} ms)")
		return text

#============================================

def parse_db(value, default: float = DEFAULT_DEVIATION_DB) -> float:
	"""
	Parse a decibel value, falling back to the default when unparseable.

	NaN and infinite values count as unparseable.

	Args:
		value: Raw value from the command line or config.
		default: Value used when parsing fails.

	Returns:
		float: Decibel floor.
	"""
	if value is None:
		return default
	parsed = None
	if isinstance(value, (int, float)) and not isinstance(value, bool):
		parsed = float(value)
	elif isinstance(value, str):
		try:
			parsed = float(value.strip())
		except ValueError:
			parsed = None
	if parsed is None or not math.isfinite(parsed):
		utils.log_warning(f"invalid decibel value {value!r}, using {default}")
		return default
	return parsed

#============================================

def coerce_bool(value, config_path: str, key_path: str) -> bool:
	"""
	Read an on/off switch. 0 and 1 are the only numbers accepted.
	"""
	if isinstance(value, bool):
		return value
	if isinstance(value, int) and value in (0, 1):
		return value == 1
	if isinstance(value, str):
		word = value.strip().lower()
		if word in SWITCH_WORDS:
			return SWITCH_WORDS[word]
	raise ConfigError(f"{config_path}: {key_path} must be on or off, got {value!r}")

#============================================

def coerce_float(value, config_path: str, key_path: str) -> float:
	if isinstance(value, bool):
		raise ConfigError(f"config {config_path}: {key_path} must be a number")
	number = None
	if isinstance(value, (int, float)):
		number = float(value)
	elif isinstance(value, str):
		try:
			number = float(value)
		except ValueError:
			number = None
	if number is None or not math.isfinite(number):
		raise ConfigError(f"config {config_path}: {key_path} must be a finite number")
	return number

#============================================

def default_config() -> dict:
	"""
	Build the default config dictionary.

	Returns:
		dict: Default configuration values.
	"""
	return {
		'wavtrim': CONFIG_VERSION,
		'settings': {
			'deviation_db': DEFAULT_DEVIATION_DB,
			'overwrite': False,
			'delete_empty': False,
			'auto_cut': {
				'enabled': False,
				'min_silence_ms': DEFAULT_MIN_SILENCE_MS,
				'min_segment_ms': DEFAULT_MIN_SEGMENT_MS,
				'numbering_postfix': DEFAULT_NUMBERING_POSTFIX,
				'create_subdirectory': False,
				'delete_original': False,
			},
		},
	}

#============================================

def write_config_file(config_path: str, config: dict) -> None:
	text = yaml.safe_dump(config, sort_keys=False)
	os.makedirs(os.path.dirname(config_path) or '.', exist_ok=True)
	with open(config_path, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return

#============================================

def load_config(config_path: str) -> dict:
	"""
	Read a wavtrim YAML config and check its version marker.

	Raises:
		ConfigError: The file can't be read or is not a wavtrim config.
	"""
	try:
		with open(config_path, 'r', encoding='utf-8') as handle:
			data = yaml.safe_load(handle)
	except OSError as exc:
		raise ConfigError(f"cannot read config {config_path}: {exc}") from exc
	except yaml.YAMLError as exc:
		raise ConfigError(f"config {config_path} is not valid YAML: {exc}") from exc
	marker = None
	if isinstance(data, dict):
		marker = data.get('wavtrim')
	if marker != CONFIG_VERSION:
		raise ConfigError(f"{config_path} is not a wavtrim config, "
			f"expected top level 'wavtrim: {CONFIG_VERSION}'")
	return data

#============================================

def build_settings(config: dict, config_path: str) -> dict:
	"""
	Normalize settings with defaults.

	Args:
		config: Raw config dictionary.
		config_path: Config file path, used in error messages.

	Returns:
		dict: Flat settings dictionary.
	"""
	settings = default_config()['settings']
	overrides = {}
	if isinstance(config, dict):
		overrides = config.get('settings') or {}
	if not isinstance(overrides, dict):
		raise ConfigError(f"config {config_path}: settings must be a mapping")
	auto_cut = overrides.get('auto_cut') or {}
	if not isinstance(auto_cut, dict):
		raise ConfigError(f"config {config_path}: settings.auto_cut must be a mapping")
	postfix = auto_cut.get('numbering_postfix',
		settings['auto_cut']['numbering_postfix'])
	if not isinstance(postfix, str):
		raise ConfigError(
			f"config {config_path}: settings.auto_cut.numbering_postfix must be a string"
		)
	return {
		'deviation_db': parse_db(overrides.get('deviation_db'),
			settings['deviation_db']),
		'overwrite': coerce_bool(overrides.get('overwrite',
			settings['overwrite']), config_path, "settings.overwrite"),
		'delete_empty': coerce_bool(overrides.get('delete_empty',
			settings['delete_empty']), config_path, "settings.delete_empty"),
		'auto_cut': coerce_bool(auto_cut.get('enabled',
			settings['auto_cut']['enabled']), config_path,
			"settings.auto_cut.enabled"),
		'min_silence_ms': coerce_float(auto_cut.get('min_silence_ms',
			settings['auto_cut']['min_silence_ms']), config_path,
			"settings.auto_cut.min_silence_ms"),
		'min_segment_ms': coerce_float(auto_cut.get('min_segment_ms',
			settings['auto_cut']['min_segment_ms']), config_path,
			"settings.auto_cut.min_segment_ms"),
		'numbering_postfix': postfix,
		'create_subdirectory': coerce_bool(auto_cut.get('create_subdirectory',
			settings['auto_cut']['create_subdirectory']), config_path,
			"settings.auto_cut.create_subdirectory"),
		'delete_original': coerce_bool(auto_cut.get('delete_original',
			settings['auto_cut']['delete_original']), config_path,
			"settings.auto_cut.delete_original"),
	}

#============================================

def make_trim_config(settings: dict) -> TrimConfig:
	auto_cut = None
	if settings.get('auto_cut'):
		auto_cut = AutoCutConfig(
			min_silence_length_ms=settings['min_silence_ms'],
			min_segment_length_ms=settings['min_segment_ms'],
			numbering_postfix=settings['numbering_postfix'],
			create_subdirectory=settings['create_subdirectory'],
			delete_original=settings['delete_original'],
		)
	return TrimConfig(
		deviation_db=settings['deviation_db'],
		overwrite=settings['overwrite'],
		delete_empty=settings['delete_empty'],
		auto_cut=auto_cut,
	)
