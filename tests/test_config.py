"""
Pytest coverage for settings, YAML config files and decibel parsing.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest
import yaml

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from wavtrimlib.core import config
from wavtrimlib.core.errors import ConfigError

#============================================

def test_defaults() -> None:
	trim_config = config.TrimConfig()
	assert trim_config.deviation_db == -60.0
	assert trim_config.overwrite is False
	assert trim_config.delete_empty is False
	assert trim_config.auto_cut is None
	auto_cut = config.AutoCutConfig()
	assert auto_cut.min_silence_length_ms == 500.0
	assert auto_cut.min_segment_length_ms == 1000.0
	assert auto_cut.numbering_postfix == "_"
	assert auto_cut.create_subdirectory is False
	assert auto_cut.delete_original is False

#============================================

def test_millisecond_lengths_round_down() -> None:
	auto_cut = config.AutoCutConfig(min_silence_length_ms=500.0,
		min_segment_length_ms=0.7)
	assert auto_cut.min_silence_samples(44100) == 22050
	assert auto_cut.min_segment_samples(1000) == 0
	assert auto_cut.min_segment_samples(44100) == 30

#============================================

def test_parse_db_falls_back_on_garbage(capsys) -> None:
	"""
	An unparseable decibel string uses the default and warns.
	"""
	assert config.parse_db("-55.7") == pytest.approx(-55.7)
	assert config.parse_db(" -12 ") == -12.0
	assert config.parse_db("loud") == -60.0
	captured = capsys.readouterr()
	assert "WARNING" in captured.err
	assert config.parse_db(None, -30.0) == -30.0

#============================================

@pytest.mark.parametrize("raw", ["nan", "inf", "-inf", " NaN ", float("nan"), float("-inf")])
def test_parse_db_rejects_non_finite(raw, capsys) -> None:
	assert config.parse_db(raw) == -60.0
	assert "invalid decibel value" in capsys.readouterr().err
	trim_config = config.TrimConfig(deviation_db=raw)
	assert trim_config.deviation_db == -60.0

#============================================

def test_positive_db_warns_and_is_kept(capsys) -> None:
	trim_config = config.TrimConfig(deviation_db=3.0)
	assert trim_config.deviation_db == 3.0
	assert "above full scale" in capsys.readouterr().err

#============================================

def test_invalid_values_rejected() -> None:
	with pytest.raises(ConfigError):
		config.AutoCutConfig(numbering_postfix="a/b")
	with pytest.raises(ConfigError):
		config.AutoCutConfig(min_silence_length_ms=-1.0)
	with pytest.raises(ConfigError):
		config.AutoCutConfig(min_segment_length_ms=float("nan"))
	with pytest.raises(ConfigError):
		config.build_settings({'settings': {'auto_cut': {'min_silence_ms': "inf"}}},
			"test.yaml")

#============================================

def test_default_config_round_trip(tmp_path) -> None:
	config_path = str(tmp_path / "conf" / "wavtrim.yaml")
	config.write_config_file(config_path, config.default_config())
	data = config.load_config(config_path)
	settings = config.build_settings(data, config_path)
	assert settings['deviation_db'] == -60.0
	assert settings['auto_cut'] is False
	trim_config = config.make_trim_config(settings)
	assert trim_config.auto_cut is None

#============================================

def test_config_file_enables_auto_cut(tmp_path) -> None:
	config_path = tmp_path / "wavtrim.yaml"
	data = {
		'wavtrim': 1,
		'settings': {
			'deviation_db': "-48",
			'overwrite': "yes",
			'auto_cut': {
				'enabled': True,
				'min_silence_ms': 250,
				'numbering_postfix': "-part",
				'create_subdirectory': "on",
			},
		},
	}
	config_path.write_text(yaml.safe_dump(data), encoding='utf-8')
	settings = config.build_settings(config.load_config(str(config_path)),
		str(config_path))
	trim_config = config.make_trim_config(settings)
	assert trim_config.deviation_db == -48.0
	assert trim_config.overwrite is True
	assert trim_config.auto_cut.min_silence_length_ms == 250.0
	assert trim_config.auto_cut.min_segment_length_ms == 1000.0
	assert trim_config.auto_cut.numbering_postfix == "-part"
	assert trim_config.auto_cut.create_subdirectory is True

#============================================

def test_bad_config_values(tmp_path) -> None:
	with pytest.raises(ConfigError):
		config.build_settings({'settings': {'overwrite': "maybe"}}, "test.yaml")
	with pytest.raises(ConfigError):
		config.build_settings({'settings': {'auto_cut': {'min_segment_ms': "long"}}},
			"test.yaml")
	marker_path = tmp_path / "other.yaml"
	marker_path.write_text("settings: {}\n", encoding='utf-8')
	with pytest.raises(ConfigError):
		config.load_config(str(marker_path))
	with pytest.raises(ConfigError):
		config.load_config(str(tmp_path / "missing.yaml"))

#============================================

def test_yaml_nan_deviation_uses_default(tmp_path) -> None:
	config_path = tmp_path / "wavtrim.yaml"
	config_path.write_text("wavtrim: 1\nsettings:\n  deviation_db: .nan\n", encoding='utf-8')
	settings = config.build_settings(config.load_config(str(config_path)),
		str(config_path))
	assert settings['deviation_db'] == -60.0

#============================================

def test_switch_words() -> None:
	assert config.coerce_bool("Off", "test.yaml", "settings.overwrite") is False
	assert config.coerce_bool(1, "test.yaml", "settings.overwrite") is True
	with pytest.raises(ConfigError):
		config.coerce_bool(2, "test.yaml", "settings.overwrite")
