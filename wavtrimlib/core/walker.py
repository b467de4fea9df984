#!/usr/bin/env python3

import os
import re
from wavtrimlib.core import utils

IGNORE_FILENAME = ".wavignore"
WAV_EXTENSIONS = (".wav",)

#============================================

def translate_pattern(pattern: str) -> str:
	"""
	Convert a gitignore-style glob to a regular expression.

	'*' and '?' stay inside one path component, '**' spans components.
	"""
	parts = []
	index = 0
	while index < len(pattern):
		char = pattern[index]
		if pattern.startswith('**/', index):
			parts.append('(?:.*/)?')
			index += 3
			continue
		if pattern.startswith('**', index):
			parts.append('.*')
			index += 2
			continue
		if char == '*':
			parts.append('[^/]*')
		elif char == '?':
			parts.append('[^/]')
		elif char == '[':
			close = pattern.find(']', index + 1)
			if close == -1:
				parts.append(re.escape(char))
			else:
				body = pattern[index + 1:close]
				if body.startswith('!'):
					body = '^' + body[1:]
				parts.append(f"[{body}]")
				index = close
		else:
			parts.append(re.escape(char))
		index += 1
	return '^' + ''.join(parts) + '$'

#============================================

class IgnoreRule():
	def __init__(self, base_dir: str, raw_pattern: str):
		self.base_dir = base_dir
		pattern = raw_pattern
		self.negate = pattern.startswith('!')
		if self.negate:
			pattern = pattern[1:]
		self.dir_only = pattern.endswith('/')
		pattern = pattern.rstrip('/')
		self.anchored = '/' in pattern
		pattern = pattern.lstrip('/')
		self.pattern = pattern
		self.regex = re.compile(translate_pattern(pattern))

	#============================
	def matches(self, rel_path: str, is_dir: bool) -> bool:
		if self.dir_only and not is_dir:
			return False
		if self.base_dir:
			prefix = self.base_dir + '/'
			if not rel_path.startswith(prefix):
				return False
			rel_path = rel_path[len(prefix):]
		if self.anchored:
			return self.regex.match(rel_path) is not None
		name = rel_path.rsplit('/', 1)[-1]
		return self.regex.match(name) is not None

#============================================

def parse_ignore_lines(lines, base_dir: str) -> list:
	rules = []
	for line in lines:
		text = line.rstrip('\n').rstrip('\r')
		if text.strip() == "" or text.startswith('#'):
			continue
		if text.startswith('\\#') or text.startswith('\\!'):
			text = text[1:]
		text = text.rstrip()
		rules.append(IgnoreRule(base_dir, text))
	return rules

#============================================

def load_ignore_file(ignore_path: str, base_dir: str) -> list:
	try:
		with open(ignore_path, 'r', encoding='utf-8') as handle:
			return parse_ignore_lines(handle, base_dir)
	except OSError as exc:
		utils.log_error(f"cannot read {ignore_path}: {exc}")
		return []

#============================================

def is_ignored(rules: list, rel_path: str, is_dir: bool) -> bool:
	ignored = False
	for rule in rules:
		if rule.matches(rel_path, is_dir):
			ignored = not rule.negate
	return ignored

#============================================

def is_wav_name(filename: str) -> bool:
	return filename.lower().endswith(WAV_EXTENSIONS)

#============================================

def iter_wav_files(root: str):
	"""
	Yield wav files below root, honouring .wavignore files.

	Hidden files and directories are included. Each .wavignore applies to
	its own directory and everything below it.

	Args:
		root: Directory to walk.

	Yields:
		str: Wav file paths in sorted walk order.
	"""
	rules = []

	def report_error(exc: OSError) -> None:
		utils.log_error(str(exc))

	for dirpath, dirnames, filenames in os.walk(root, onerror=report_error):
		rel_dir = os.path.relpath(dirpath, root).replace(os.sep, '/')
		if rel_dir == '.':
			rel_dir = ''
		if IGNORE_FILENAME in filenames:
			rules = rules + load_ignore_file(os.path.join(dirpath, IGNORE_FILENAME),
				rel_dir)
		kept_dirs = []
		for dirname in sorted(dirnames):
			rel_path = f"{rel_dir}/{dirname}" if rel_dir else dirname
			if not is_ignored(rules, rel_path, True):
				kept_dirs.append(dirname)
		dirnames[:] = kept_dirs
		for filename in sorted(filenames):
			if not is_wav_name(filename):
				continue
			rel_path = f"{rel_dir}/{filename}" if rel_dir else filename
			if is_ignored(rules, rel_path, False):
				continue
			yield os.path.join(dirpath, filename)
