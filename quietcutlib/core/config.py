#!/usr/bin/env python3

import os
import yaml
from quietcutlib.core.errors import ConfigError

#============================================

CONFIG_VERSION = 1

#============================================

def coerce_bool(value, config_path: str, key_path: str) -> bool:
	"""
	Coerce a raw config value to bool or raise ConfigError naming key_path.
	"""
	if isinstance(value, bool):
		return value
	if isinstance(value, int):
		return bool(value)
	if isinstance(value, str):
		normalized = value.strip().lower()
		if normalized in ("true", "yes", "1", "on"):
			return True
		if normalized in ("false", "no", "0", "off"):
			return False
	raise ConfigError(f"config {config_path}: {key_path} must be a boolean")

#============================================

def coerce_float(value, config_path: str, key_path: str) -> float:
	"""
	Coerce a raw config value to float or raise ConfigError naming key_path.
	"""
	if isinstance(value, bool):
		raise ConfigError(f"config {config_path}: {key_path} must be a number")
	if isinstance(value, (int, float)):
		return float(value)
	if isinstance(value, str):
		try:
			return float(value)
		except ValueError as exc:
			raise ConfigError(f"config {config_path}: {key_path} must be a number") from exc
	raise ConfigError(f"config {config_path}: {key_path} must be a number")

#============================================

def coerce_int(value, config_path: str, key_path: str) -> int:
	"""
	Coerce a raw config value to int or raise ConfigError naming key_path.
	"""
	if isinstance(value, bool):
		raise ConfigError(f"config {config_path}: {key_path} must be an integer")
	if isinstance(value, int):
		return value
	if isinstance(value, float):
		return int(value)
	if isinstance(value, str):
		try:
			return int(float(value))
		except ValueError as exc:
			raise ConfigError(f"config {config_path}: {key_path} must be an integer") from exc
	raise ConfigError(f"config {config_path}: {key_path} must be an integer")

#============================================

def default_config() -> dict:
	"""
	Build the default config dictionary.

	Returns:
		dict: Default configuration values.
	"""
	return {
		'quietcut': CONFIG_VERSION,
		'settings': {
			'detection': {
				'threshold': 0.075,
				'frame_ms': 2,
				'attack_frames': 75,
				'release_frames': 10,
			},
			'sections': {
				'shift_ms': 20,
				'expand_ms': 0,
				'include_leading_noise': False,
				'close_at_end': True,
			},
			'extract': {
				'sample_rate': 48000,
				'channels': 1,
			},
		},
	}

#============================================

def default_config_path(input_file: str) -> str:
	return f"{input_file}.quietcut.config.yaml"

#============================================

def build_config_text(config: dict) -> str:
	"""
	Build YAML text for the config file.

	Args:
		config: Config dictionary.

	Returns:
		str: YAML content.
	"""
	defaults = default_config()['settings']
	settings = config.get('settings', {})
	detection = dict(defaults['detection'])
	detection.update(settings.get('detection', {}))
	sections = dict(defaults['sections'])
	sections.update(settings.get('sections', {}))
	extract = dict(defaults['extract'])
	extract.update(settings.get('extract', {}))
	lines = []
	lines.append(f"quietcut: {CONFIG_VERSION}")
	lines.append("settings:")
	lines.append("  detection:")
	lines.append(f"    threshold: {detection['threshold']}")
	lines.append(f"    frame_ms: {detection['frame_ms']}")
	lines.append(f"    attack_frames: {detection['attack_frames']}")
	lines.append(f"    release_frames: {detection['release_frames']}")
	lines.append("  sections:")
	lines.append(f"    shift_ms: {sections['shift_ms']}")
	lines.append(f"    expand_ms: {sections['expand_ms']}")
	lines.append(
		f"    include_leading_noise: {str(bool(sections['include_leading_noise'])).lower()}"
	)
	lines.append(f"    close_at_end: {str(bool(sections['close_at_end'])).lower()}")
	lines.append("  extract:")
	lines.append(f"    sample_rate: {extract['sample_rate']}")
	lines.append(f"    channels: {extract['channels']}")
	lines.append("")
	return "\n".join(lines)

#============================================

def write_config_file(config_path: str, config: dict) -> None:
	"""
	Write the config YAML, creating the parent directory if needed.
	"""
	text = build_config_text(config)
	os.makedirs(os.path.dirname(config_path) or '.', exist_ok=True)
	with open(config_path, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return

#============================================

def load_config(config_path: str) -> dict:
	"""
	Read a config file and check that it is a versioned quietcut mapping.
	"""
	with open(config_path, 'r', encoding='utf-8') as handle:
		data = yaml.safe_load(handle)
	if not isinstance(data, dict):
		raise ConfigError(f"config {config_path}: file must be a mapping")
	if data.get('quietcut') != CONFIG_VERSION:
		raise ConfigError(f"config {config_path}: must set quietcut: {CONFIG_VERSION}")
	return data

#============================================

def _section(overrides: dict, name: str, config_path: str) -> dict:
	value = overrides.get(name, {})
	if value is None:
		return {}
	if not isinstance(value, dict):
		raise ConfigError(f"config {config_path}: settings.{name} must be a mapping")
	return value

#============================================

def build_settings(config: dict, config_path: str) -> dict:
	"""
	Normalize settings with defaults and validate them.

	Args:
		config: Raw config dictionary.
		config_path: Config file path.

	Returns:
		dict: Flat, validated settings.
	"""
	defaults = default_config()['settings']
	overrides = {}
	if isinstance(config, dict):
		overrides = config.get('settings', {}) or {}
	if not isinstance(overrides, dict):
		raise ConfigError(f"config {config_path}: settings must be a mapping")
	detection = _section(overrides, 'detection', config_path)
	sections = _section(overrides, 'sections', config_path)
	extract = _section(overrides, 'extract', config_path)
	settings = {
		'threshold': coerce_float(detection.get('threshold',
			defaults['detection']['threshold']), config_path,
			"settings.detection.threshold"),
		'frame_ms': coerce_float(detection.get('frame_ms',
			defaults['detection']['frame_ms']), config_path,
			"settings.detection.frame_ms"),
		'attack_frames': coerce_int(detection.get('attack_frames',
			defaults['detection']['attack_frames']), config_path,
			"settings.detection.attack_frames"),
		'release_frames': coerce_int(detection.get('release_frames',
			defaults['detection']['release_frames']), config_path,
			"settings.detection.release_frames"),
		'shift_ms': coerce_int(sections.get('shift_ms',
			defaults['sections']['shift_ms']), config_path,
			"settings.sections.shift_ms"),
		'expand_ms': coerce_int(sections.get('expand_ms',
			defaults['sections']['expand_ms']), config_path,
			"settings.sections.expand_ms"),
		'include_leading_noise': coerce_bool(sections.get('include_leading_noise',
			defaults['sections']['include_leading_noise']), config_path,
			"settings.sections.include_leading_noise"),
		'close_at_end': coerce_bool(sections.get('close_at_end',
			defaults['sections']['close_at_end']), config_path,
			"settings.sections.close_at_end"),
		'sample_rate': coerce_int(extract.get('sample_rate',
			defaults['extract']['sample_rate']), config_path,
			"settings.extract.sample_rate"),
		'channels': coerce_int(extract.get('channels',
			defaults['extract']['channels']), config_path,
			"settings.extract.channels"),
	}
	validate_settings(settings)
	return settings

#============================================

def default_settings() -> dict:
	return build_settings(default_config(), "<defaults>")

#============================================

def validate_settings(settings: dict) -> None:
	"""
	Raise ConfigError for any out-of-range setting.
	"""
	threshold = settings['threshold']
	if not (0.0 < threshold < 1.0):
		raise ConfigError(f"threshold must be between 0 and 1 (exclusive), got {threshold}")
	if settings['frame_ms'] <= 0:
		raise ConfigError("frame_ms must be positive")
	if settings['attack_frames'] < 0:
		raise ConfigError("attack_frames must be 0 or positive")
	if settings['release_frames'] < 0:
		raise ConfigError("release_frames must be 0 or positive")
	if settings['shift_ms'] < 0:
		raise ConfigError("shift_ms must be 0 or positive")
	if settings['expand_ms'] < 0:
		raise ConfigError("expand_ms must be 0 or positive")
	if settings.get('sample_rate', 1) <= 0:
		raise ConfigError("sample_rate must be positive")
	if settings.get('channels', 1) < 1:
		raise ConfigError("channels must be at least 1")
	return
