#!/usr/bin/env python3

import os
import shutil
import tempfile
from quietcutlib.core import analyzer
from quietcutlib.core import config
from quietcutlib.core import report
from quietcutlib.core import utils
from quietcutlib.media import ffmpeg_extract
from quietcutlib.media import ffmpeg_render

#============================================

class QuietcutProject():
	def __init__(self, input_file: str, output_file: str = None, audio_file: str = None,
		config_file: str = None, overrides: dict = None, sections_file: str = None,
		keep_temp: bool = False, cache_dir: str = None, debug: bool = False):
		self.input_file = input_file
		self.output_file = output_file
		self.audio_file = audio_file
		self.config_file = config_file
		self.overrides = overrides or {}
		self.sections_file = sections_file
		self.keep_temp = keep_temp
		self.cache_dir = cache_dir
		self.cache_dir_created = False
		self.debug = debug
		self.settings = None
		self.result = None

	#============================
	def load_settings(self) -> dict:
		config_path = self.config_file
		if config_path is None:
			config_path = config.default_config_path(self.input_file)
		if not os.path.exists(config_path):
			config.write_config_file(config_path, config.default_config())
			utils.log(f"Wrote default config: {config_path}")
		raw_config = config.load_config(config_path)
		settings = config.build_settings(raw_config, config_path)
		for key, value in self.overrides.items():
			if value is not None:
				settings[key] = value
		config.validate_settings(settings)
		self.settings = settings
		return settings

	#============================
	def _make_work_dir(self) -> str:
		if self.cache_dir is None:
			self.cache_dir = tempfile.mkdtemp(prefix="quietcut-run-")
			self.cache_dir_created = True
		elif not os.path.exists(self.cache_dir):
			os.makedirs(self.cache_dir)
		return self.cache_dir

	#============================
	def _audio_path(self, work_dir: str) -> str:
		if self.audio_file is not None:
			utils.ensure_file_exists(self.audio_file)
			return self.audio_file
		utils.check_dependency("ffmpeg")
		wav_path = os.path.join(work_dir, "audio.wav")
		return ffmpeg_extract.extract_audio(self.input_file, wav_path,
			self.settings['sample_rate'], self.settings['channels'])

	#============================
	def run(self):
		utils.ensure_file_exists(self.input_file)
		self.load_settings()
		work_dir = self._make_work_dir()
		try:
			audio_path = self._audio_path(work_dir)
			self.result = analyzer.analyze_file(audio_path, self.settings,
				show_progress=True)
			self._write_reports(audio_path)
			if self.output_file is not None:
				self._render(work_dir)
		finally:
			if not self.keep_temp and self.cache_dir_created:
				shutil.rmtree(self.cache_dir, ignore_errors=True)
		if not utils.is_quiet_mode():
			report.print_summary(self.input_file, self.result)
		return self.result

	#============================
	def _write_reports(self, audio_path: str) -> None:
		sections_file = self.sections_file
		if sections_file is None:
			sections_file = report.default_sections_path(self.input_file)
		yaml_text = report.build_sections_yaml(self.input_file, self.result, self.settings)
		report.write_text_report(sections_file, yaml_text)
		utils.log(f"Sections report: {sections_file}")
		if not self.debug:
			return
		debug_file = report.default_debug_path(self.input_file)
		debug_text = report.build_debug_report(audio_path, self.result, self.settings)
		report.write_text_report(debug_file, debug_text)
		utils.log(f"Debug file: {debug_file}")
		plot_file = report.default_plot_path(self.input_file)
		report.write_debug_plot(plot_file, self.result, self.settings)
		utils.log(f"Debug plot: {plot_file}")

	#============================
	def _render(self, work_dir: str) -> None:
		utils.check_dependency("ffmpeg")
		utils.check_dependency("ffprobe")
		if len(self.result.sections) == 0:
			raise RuntimeError("no noise sections found; nothing to render")
		include_video = ffmpeg_extract.has_video_stream(self.input_file)
		filter_paths = ffmpeg_render.write_filter_scripts(self.result.sections,
			work_dir, include_video=include_video)
		ffmpeg_render.render_sections(self.input_file, self.output_file, filter_paths)
		utils.log(f"Output: {self.output_file}")
