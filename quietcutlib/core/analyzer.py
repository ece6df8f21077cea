#!/usr/bin/env python3

from quietcutlib.core import config
from quietcutlib.core import framer
from quietcutlib.core import sections
from quietcutlib.core import segmenter
from quietcutlib.core import timeconv
from quietcutlib.core import utils
from quietcutlib.core import wavdecoder

#============================================

class AnalysisResult():
	def __init__(self):
		self.format_info = None
		self.frames = None
		self.frame_size = 0
		self.duration_ms = 0
		self.global_peak = 0
		self.global_peak_index = None
		self.transitions = []
		self.raw_sections = []
		self.sections = []

	#============================
	def stats(self) -> dict:
		kept_ms = sections.total_duration_ms(self.sections)
		kept_pct = 0.0
		if self.duration_ms > 0:
			kept_pct = (kept_ms / float(self.duration_ms)) * 100.0
		return {
			'duration_ms': self.duration_ms,
			'frame_count': len(self.frames) if self.frames is not None else 0,
			'frame_size': self.frame_size,
			'global_peak': self.global_peak,
			'global_peak_index': self.global_peak_index,
			'transition_count': len(self.transitions),
			'section_count': len(self.sections),
			'kept_ms': kept_ms,
			'removed_ms': self.duration_ms - kept_ms,
			'kept_pct': kept_pct,
		}

#============================================

def analyze(buffer, settings: dict = None, show_progress: bool = False) -> AnalysisResult:
	"""
	Run the whole pipeline over a WAV buffer.

	Settings are validated before the buffer is decoded.

	Args:
		buffer: RIFF/WAVE bytes.
		settings: Flat settings from config.build_settings(); defaults if None.
		show_progress: Show a progress bar during classification.

	Returns:
		AnalysisResult: Format, frames, transitions and sections.
	"""
	if settings is None:
		settings = config.default_settings()
	config.validate_settings(settings)
	result = AnalysisResult()
	(fmt, pcm) = wavdecoder.decode(buffer)
	result.format_info = fmt
	utils.log(f"Format: {fmt.channels} ch, {fmt.sample_rate} Hz, "
		f"{fmt.bits_per_sample} bit, {len(pcm)} data bytes")
	frames = framer.frame(pcm, fmt, settings['frame_ms'])
	result.frames = frames
	result.frame_size = frames.frame_size
	result.duration_ms = timeconv.time_of(len(pcm), fmt.byte_rate)
	result.global_peak = frames.global_peak
	result.global_peak_index = frames.global_peak_index
	utils.log(f"Frames: {len(frames)} x {frames.frame_size} bytes, "
		f"global peak {frames.global_peak}")
	result.transitions = segmenter.segment(frames, frames.global_peak,
		settings['threshold'], settings['attack_frames'], settings['release_frames'],
		show_progress=show_progress)
	result.raw_sections = sections.build_sections(result.transitions,
		settings['shift_ms'], frames.frame_size, fmt.byte_rate, result.duration_ms,
		close_at_end=settings['close_at_end'],
		include_leading_noise=settings['include_leading_noise'])
	result.sections = result.raw_sections
	if settings['expand_ms'] > 0:
		result.sections = sections.expand_sections(result.raw_sections,
			settings['expand_ms'], result.duration_ms)
	return result

#============================================

def analyze_file(wav_path: str, settings: dict = None,
	show_progress: bool = False) -> AnalysisResult:
	if settings is None:
		settings = config.default_settings()
	config.validate_settings(settings)
	utils.ensure_file_exists(wav_path)
	with open(wav_path, 'rb') as wav_handle:
		buffer = wav_handle.read()
	return analyze(buffer, settings, show_progress=show_progress)
