#!/usr/bin/env python3

import numpy
import yaml
from quietcutlib.core import segmenter
from quietcutlib.core import utils

#============================================

def default_sections_path(input_file: str) -> str:
	return f"{input_file}.quietcut.yaml"

#============================================

def default_debug_path(input_file: str) -> str:
	return f"{input_file}.quietcut.debug.txt"

#============================================

def default_plot_path(input_file: str) -> str:
	return f"{input_file}.quietcut.debug.png"

#============================================

def build_sections_yaml(input_file: str, result, settings: dict) -> str:
	"""
	Build the YAML sections report.

	Args:
		input_file: Source media path.
		result: AnalysisResult.
		settings: Flat settings used for the run.

	Returns:
		str: YAML text.
	"""
	entries = []
	for section in result.sections:
		entries.append({
			'from_ms': section.from_ms,
			'to_ms': section.to_ms,
			'from_tc': utils.format_timestamp(section.from_ms),
			'to_tc': utils.format_timestamp(section.to_ms),
		})
	data = {
		'quietcut': 1,
		'input': input_file,
		'duration_ms': result.duration_ms,
		'settings': {
			'threshold': settings['threshold'],
			'frame_ms': settings['frame_ms'],
			'attack_frames': settings['attack_frames'],
			'release_frames': settings['release_frames'],
			'shift_ms': settings['shift_ms'],
			'expand_ms': settings['expand_ms'],
		},
		'sections': entries,
	}
	return yaml.safe_dump(data, sort_keys=False)

#============================================

def build_debug_report(audio_path: str, result, settings: dict) -> str:
	"""
	Build a plain text debug report.
	"""
	fmt = result.format_info
	stats = result.stats()
	lines = []
	lines.append(f"audio_path: {audio_path}")
	lines.append("")
	lines.append("wav_info:")
	lines.append(f"channels: {fmt.channels}")
	lines.append(f"sample_rate: {fmt.sample_rate}")
	lines.append(f"byte_rate: {fmt.byte_rate}")
	lines.append(f"bits_per_sample: {fmt.bits_per_sample}")
	lines.append(f"block_align: {fmt.block_align}")
	lines.append(f"duration_ms: {result.duration_ms}")
	lines.append("")
	lines.append("framing:")
	lines.append(f"frame_ms: {settings['frame_ms']}")
	lines.append(f"frame_size: {stats['frame_size']}")
	lines.append(f"frame_count: {stats['frame_count']}")
	lines.append(f"global_peak: {stats['global_peak']}")
	lines.append(f"global_peak_index: {stats['global_peak_index']}")
	lines.append("")
	lines.append("segmenter:")
	lines.append(f"threshold: {settings['threshold']}")
	lines.append(f"attack_frames: {settings['attack_frames']}")
	lines.append(f"release_frames: {settings['release_frames']}")
	for transition in result.transitions:
		lines.append(f"- frame {transition.frame_index}: "
			f"{transition.from_state} -> {transition.to_state}")
	lines.append("")
	lines.append("sections:")
	lines.append(f"shift_ms: {settings['shift_ms']}")
	lines.append(f"expand_ms: {settings['expand_ms']}")
	lines.append(f"raw_count: {len(result.raw_sections)}")
	lines.append(f"count: {len(result.sections)}")
	for section in result.sections:
		lines.append(f"- {section.from_ms} -> {section.to_ms}")
	lines.append("")
	return "\n".join(lines)

#============================================

def write_text_report(output_file: str, text: str) -> None:
	with open(output_file, 'w', encoding='utf-8') as handle:
		handle.write(text)
	return

#============================================

def write_debug_plot(output_file: str, result, settings: dict) -> None:
	"""
	Write a frame peak plot with the silence threshold and confirmed silence.

	Args:
		output_file: Output plot path.
		result: AnalysisResult.
		settings: Flat settings used for the run.
	"""
	frames = result.frames
	if frames is None or len(frames) == 0:
		return
	try:
		import matplotlib.pyplot as pyplot
	except ImportError as exc:
		raise RuntimeError("matplotlib is required for --debug plots") from exc
	peaks = frames.peaks.astype(numpy.float64)
	times = numpy.arange(peaks.size) * settings['frame_ms'] / 1000.0
	silent = numpy.zeros(peaks.size, dtype=bool)
	for (index, state, _) in segmenter.fold_states(frames, frames.global_peak,
		settings['threshold'], settings['attack_frames'], settings['release_frames']):
		silent[index] = state in (segmenter.SILENCE, segmenter.POTENTIAL_SILENCE_FINISH)
	threshold_amp = settings['threshold'] * frames.global_peak
	pyplot.figure(figsize=(12, 4))
	pyplot.plot(times, peaks, linewidth=0.6, label="frame peak")
	pyplot.fill_between(times, 0, peaks.max(), where=silent, color='grey',
		alpha=0.3, label="silence")
	pyplot.axhline(threshold_amp, color='red', linestyle='--', linewidth=1.0)
	pyplot.xlabel("Seconds")
	pyplot.ylabel("Peak amplitude")
	pyplot.title("Frame Peak Amplitude")
	pyplot.legend(loc="upper right")
	pyplot.tight_layout()
	pyplot.savefig(output_file)
	pyplot.close()
	return

#============================================

def print_summary(input_file: str, result) -> None:
	"""
	Print a human-readable summary.
	"""
	stats = result.stats()
	print("")
	print("Quietcut Summary")
	print(f"Input: {input_file}")
	print(f"Duration: {utils.format_timestamp(stats['duration_ms'])}")
	print(f"Kept: {utils.format_timestamp(stats['kept_ms'])} ({stats['kept_pct']:.2f}%)")
	print(f"Removed: {utils.format_timestamp(stats['removed_ms'])}")
	print(f"Sections: {stats['section_count']}")
	for section in result.sections:
		print(f"  {utils.format_timestamp(section.from_ms)} -> "
			f"{utils.format_timestamp(section.to_ms)}")
	print("")
	return
