#!/usr/bin/env python3

import argparse
import os
import sys
import yaml
from wavtrimlib.core import config as config_module
from wavtrimlib.core import utils
from wavtrimlib.core import walker
from wavtrimlib.core.errors import ConfigError
from wavtrimlib.core.processor import WavProcessor

#============================================

def parse_args(argv: list = None):
	"""
	Parse command-line arguments.
	"""
	parser = argparse.ArgumentParser(
		description="Find all .wav files and trim the end silence off. "
			"Whole channels are dropped when they are empty. "
			"Looks for gitignore-style \".wavignore\" files in every directory.",
		epilog="example: wavtrim -d -55.7 -o -r")
	parser.add_argument('-i', '--input-dir', dest='input_dir', default='.',
		help='directory to search for wav files')
	parser.add_argument('-d', '--db', dest='db', default=None,
		help='minimum dB a sample must reach to count as sound, defaults to -60')
	parser.add_argument('-o', '--overwrite', dest='overwrite', action='store_true',
		help='overwrite the input files instead of writing *_stripped.wav')
	parser.add_argument('-r', '--rm', '--delete-empty', dest='delete_empty',
		action='store_true', help='delete input files that are empty after trimming')
	parser.add_argument('-a', '--auto-cut', dest='auto_cut', action='store_true',
		help='also split files into segments at interior silence')
	parser.add_argument('-s', '--min-silence', dest='min_silence', type=float,
		default=None, help='minimum silence length in milliseconds for a cut')
	parser.add_argument('-m', '--min-segment', dest='min_segment', type=float,
		default=None, help='minimum segment length in milliseconds')
	parser.add_argument('-n', '--numbering-postfix', dest='numbering_postfix',
		default=None, help='text placed between the name and the segment number')
	parser.add_argument('-S', '--subdirectory', dest='create_subdirectory',
		action='store_true', default=None,
		help='write segments into a directory named after the input file')
	parser.add_argument('-D', '--delete-original', dest='delete_original',
		action='store_true', default=None,
		help='delete the input file after it was split into segments')
	parser.add_argument('-c', '--config', dest='config_file', default=None,
		help='path to a wavtrim config YAML')
	parser.add_argument('-w', '--write-config', dest='write_config', default=None,
		help='write the default config YAML to this path and exit')
	parser.add_argument('-p', '--dump-plan', dest='dump_plan', action='store_true',
		help='print the per-file plan as YAML without writing anything')
	parser.add_argument('-q', '--quiet', dest='quiet', action='store_true',
		help='only print warnings and errors')
	parser.set_defaults(overwrite=False)
	parser.set_defaults(delete_empty=False)
	parser.set_defaults(auto_cut=False)
	args = parser.parse_args(argv)
	return args

#============================================

def build_config(args: argparse.Namespace) -> config_module.TrimConfig:
	"""
	Merge config file values and command-line overrides.

	Args:
		args: Parsed command-line arguments.

	Returns:
		config_module.TrimConfig: Settings for the run.
	"""
	raw_config = config_module.default_config()
	config_path = "<defaults>"
	if args.config_file is not None:
		config_path = args.config_file
		raw_config = config_module.load_config(config_path)
	settings = config_module.build_settings(raw_config, config_path)
	if args.db is not None:
		settings['deviation_db'] = config_module.parse_db(args.db,
			config_module.DEFAULT_DEVIATION_DB)
	if args.overwrite:
		settings['overwrite'] = True
	if args.delete_empty:
		settings['delete_empty'] = True
	if args.auto_cut:
		settings['auto_cut'] = True
	if args.min_silence is not None:
		settings['min_silence_ms'] = args.min_silence
	if args.min_segment is not None:
		settings['min_segment_ms'] = args.min_segment
	if args.numbering_postfix is not None:
		settings['numbering_postfix'] = args.numbering_postfix
	if args.create_subdirectory is not None:
		settings['create_subdirectory'] = args.create_subdirectory
	if args.delete_original is not None:
		settings['delete_original'] = args.delete_original
	return config_module.make_trim_config(settings)

#============================================

def dump_plan(processor: WavProcessor, root: str) -> str:
	plans = []
	for wav_path in walker.iter_wav_files(root):
		plans.append(processor.build_plan(wav_path))
	return yaml.safe_dump({'files': plans}, sort_keys=False)

#============================================

def main(argv: list = None) -> int:
	args = parse_args(argv)
	utils.set_quiet_mode(args.quiet or args.dump_plan)
	if args.write_config is not None:
		config_module.write_config_file(args.write_config,
			config_module.default_config())
		print(f"Wrote default config: {args.write_config}")
		return 0
	try:
		trim_config = build_config(args)
	except ConfigError as exc:
		utils.log_error(str(exc))
		return 2
	if not os.path.isdir(args.input_dir):
		utils.log_error(f"input directory not found: {args.input_dir}")
		return 2
	utils.log_message(f"RUNNING WITH SETTINGS:\n\t{trim_config.describe()}")
	processor = WavProcessor(trim_config)
	if args.dump_plan:
		print(dump_plan(processor, args.input_dir), end="")
		return 0
	summary = processor.run(args.input_dir)
	utils.log_message(
		f"processed {summary['processed']}, empty {summary['empty']}, "
		f"skipped {summary['skipped']}, failed {summary['failed']}"
	)
	utils.log_message("Process Finished!")
	return 0


if __name__ == '__main__':
	sys.exit(main())
