#!/usr/bin/env python3

import os
from quietcutlib.core import utils

#============================================

def extract_audio(input_file: str, wav_path: str, sample_rate: int = 48000,
	channels: int = 1) -> str:
	"""
	Extract the first audio stream as 16-bit PCM wav using ffmpeg.

	Args:
		input_file: Video or audio file path.
		wav_path: Output wav path.
		sample_rate: Output sample rate in Hz.
		channels: Output channel count.

	Returns:
		str: Output wav path.
	"""
	cmd = [
		"ffmpeg", "-y", "-hide_banner", "-loglevel", "error",
		"-i", input_file,
		"-vn", "-sn",
		"-acodec", "pcm_s16le",
		"-ar", str(sample_rate),
		"-ac", str(channels),
		wav_path,
	]
	utils.run_process(cmd, capture_output=True)
	if not os.path.isfile(wav_path):
		raise RuntimeError("audio extraction failed")
	return wav_path

#============================================

def has_video_stream(input_file: str) -> bool:
	cmd = [
		"ffprobe", "-v", "error",
		"-select_streams", "v:0",
		"-show_entries", "stream=codec_type",
		"-of", "csv=p=0",
		input_file,
	]
	proc = utils.run_process(cmd, capture_output=True)
	return proc.stdout.strip() != ""
