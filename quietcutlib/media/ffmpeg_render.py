#!/usr/bin/env python3

import os
import time
from quietcutlib.core import utils

#============================================

VIDEO_FILTER_NAME = "video_filter.txt"
AUDIO_FILTER_NAME = "audio_filter.txt"

#============================================

def build_keep_expression(sections: list) -> str:
	"""
	Build an ffmpeg expression that is non-zero inside any section.

	Args:
		sections: Ordered closed sections.

	Returns:
		str: between(t,a,b)+between(t,c,d)+... in seconds, or "0".
	"""
	if len(sections) == 0:
		return "0"
	terms = []
	for section in sections:
		start = utils.millis_to_seconds_text(section.from_ms)
		end = utils.millis_to_seconds_text(section.to_ms)
		terms.append(f"between(t,{start},{end})")
	return "+".join(terms)

#============================================

def build_video_filter(expression: str) -> str:
	return f"select='{expression}', setpts=N/FRAME_RATE/TB"

#============================================

def build_audio_filter(expression: str) -> str:
	return f"aselect='{expression}', asetpts=N/SR/TB"

#============================================

def write_filter_scripts(sections: list, work_dir: str, include_video: bool = True) -> dict:
	"""
	Write select filter scripts for ffmpeg -filter_script.

	Args:
		sections: Ordered closed sections.
		work_dir: Directory for the script files.
		include_video: Also write the video select script.

	Returns:
		dict: Paths keyed by 'audio' and, when written, 'video'.
	"""
	expression = build_keep_expression(sections)
	paths = {}
	audio_path = os.path.join(work_dir, AUDIO_FILTER_NAME)
	with open(audio_path, 'w', encoding='utf-8') as handle:
		handle.write(build_audio_filter(expression))
	paths['audio'] = audio_path
	if include_video:
		video_path = os.path.join(work_dir, VIDEO_FILTER_NAME)
		with open(video_path, 'w', encoding='utf-8') as handle:
			handle.write(build_video_filter(expression))
		paths['video'] = video_path
	return paths

#============================================

def render_sections(input_file: str, output_file: str, filter_paths: dict) -> str:
	"""
	Render only the kept sections of the input with ffmpeg.

	Args:
		input_file: Source media path.
		output_file: Output media path.
		filter_paths: Script paths from write_filter_scripts().

	Returns:
		str: Output media path.
	"""
	t0 = time.time()
	cmd = ["ffmpeg", "-y", "-hide_banner", "-loglevel", "error", "-i", input_file]
	if 'video' in filter_paths:
		cmd += ["-filter_script:v", filter_paths['video']]
	cmd += ["-filter_script:a", filter_paths['audio']]
	cmd.append(output_file)
	utils.run_process(cmd, capture_output=True)
	if not os.path.isfile(output_file):
		raise RuntimeError(f"render failed: {output_file}")
	utils.log(f"Complete in {int(time.time() - t0)} seconds")
	return output_file
