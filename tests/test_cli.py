"""
Pytest coverage for the wavtrim command line front end.
"""

# Standard Library
import os
import sys

# PIP3 modules
import yaml

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# tests helpers
TESTS_DIR = os.path.abspath(os.path.dirname(__file__))
if TESTS_DIR not in sys.path:
	sys.path.insert(0, TESTS_DIR)
from wav_utils import read_pcm_wav
from wav_utils import write_pcm_wav

# local repo modules
import wavtrim_cli
from wavtrimlib.core import utils

#============================================

def _pause_clip() -> list:
	return [800] * 300 + [0] * 200 + [800] * 300 + [0] * 50

#============================================

def test_default_run_writes_stripped_file(tmp_path) -> None:
	write_pcm_wav(str(tmp_path / "clip.wav"), [[800] * 10 + [0] * 40])
	assert wavtrim_cli.main(["-i", str(tmp_path), "-q"]) == 0
	assert utils.is_quiet_mode() is True
	utils.set_quiet_mode(False)
	assert read_pcm_wav(str(tmp_path / "clip_stripped.wav"))[3] == 10

#============================================

def test_invalid_db_falls_back_to_default(tmp_path, capsys) -> None:
	args = wavtrim_cli.parse_args(["--db=notanumber"])
	trim_config = wavtrim_cli.build_config(args)
	assert trim_config.deviation_db == -60.0
	assert "WARNING" in capsys.readouterr().err
	args = wavtrim_cli.parse_args(["-d", "-42.5", "-o", "--rm"])
	trim_config = wavtrim_cli.build_config(args)
	assert trim_config.deviation_db == -42.5
	assert trim_config.overwrite is True
	assert trim_config.delete_empty is True
	assert trim_config.auto_cut is None

#============================================

def test_auto_cut_flags_override_config(tmp_path) -> None:
	config_path = str(tmp_path / "wavtrim.yaml")
	assert wavtrim_cli.main(["-w", config_path]) == 0
	args = wavtrim_cli.parse_args(["-c", config_path, "-a", "-s", "150",
		"-m", "200", "-n", ".", "-S", "-D"])
	trim_config = wavtrim_cli.build_config(args)
	auto_cut = trim_config.auto_cut
	assert auto_cut is not None
	assert auto_cut.min_silence_length_ms == 150.0
	assert auto_cut.min_segment_length_ms == 200.0
	assert auto_cut.numbering_postfix == "."
	assert auto_cut.create_subdirectory is True
	assert auto_cut.delete_original is True

#============================================

def test_dump_plan_prints_yaml_and_writes_nothing(tmp_path, capsys) -> None:
	write_pcm_wav(str(tmp_path / "clip.wav"), [_pause_clip()])
	code = wavtrim_cli.main(["-i", str(tmp_path), "-p", "-a", "-s", "100", "-m", "100"])
	utils.set_quiet_mode(False)
	assert code == 0
	plan = yaml.safe_load(capsys.readouterr().out)
	assert len(plan['files']) == 1
	entry = plan['files'][0]
	assert entry['status'] == 'ok'
	assert [item['end'] for item in entry['segments']] == [300, 799]
	assert sorted(os.listdir(str(tmp_path))) == ["clip.wav"]

#============================================

def test_bad_config_returns_error_code(tmp_path) -> None:
	config_path = tmp_path / "bad.yaml"
	config_path.write_text("wavtrim: 1\nsettings:\n  overwrite: sometimes\n")
	assert wavtrim_cli.main(["-c", str(config_path), "-i", str(tmp_path)]) == 2
	assert wavtrim_cli.main(["-i", str(tmp_path / "missing")]) == 2

#============================================

def test_non_finite_db_runs_with_default(tmp_path, capsys) -> None:
	write_pcm_wav(str(tmp_path / "clip.wav"), [[800] * 10 + [0] * 40])
	assert wavtrim_cli.main(["-i", str(tmp_path), "-q", "-d", "nan"]) == 0
	utils.set_quiet_mode(False)
	assert "invalid decibel value" in capsys.readouterr().err
	assert read_pcm_wav(str(tmp_path / "clip_stripped.wav"))[3] == 10

#============================================

def test_positive_db_treats_everything_as_silence(tmp_path) -> None:
	write_pcm_wav(str(tmp_path / "clip.wav"), [[32767, -32767, 800, 0]])
	assert wavtrim_cli.main(["-i", str(tmp_path), "-q", "-d", "3"]) == 0
	utils.set_quiet_mode(False)
	assert sorted(os.listdir(str(tmp_path))) == ["clip.wav"]
