
"""
Pytest coverage for the ffmpeg keep-filter and render helpers.
"""

# Standard Library
import os
import sys

# PIP3 modules
import pytest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from quietcutlib.core import utils
from quietcutlib.core.sections import Section
from quietcutlib.media import ffmpeg_extract
from quietcutlib.media import ffmpeg_render

#============================================

def test_keep_expression() -> None:
	sections = [Section(0, 164), Section(424, 1500), Section(2001, 3000)]
	expression = ffmpeg_render.build_keep_expression(sections)
	assert expression == "between(t,0,0.164)+between(t,0.424,1.5)+between(t,2.001,3)"

#============================================

def test_keep_expression_empty() -> None:
	assert ffmpeg_render.build_keep_expression([]) == "0"

#============================================

def test_write_filter_scripts(tmp_path) -> None:
	paths = ffmpeg_render.write_filter_scripts([Section(424, 500)], str(tmp_path))
	with open(paths['video'], 'r', encoding='utf-8') as handle:
		video_text = handle.read()
	with open(paths['audio'], 'r', encoding='utf-8') as handle:
		audio_text = handle.read()
	assert video_text == "select='between(t,0.424,0.5)', setpts=N/FRAME_RATE/TB"
	assert audio_text == "aselect='between(t,0.424,0.5)', asetpts=N/SR/TB"

#============================================

def test_write_filter_scripts_audio_only(tmp_path) -> None:
	paths = ffmpeg_render.write_filter_scripts([Section(0, 10)], str(tmp_path),
		include_video=False)
	assert 'video' not in paths
	assert os.path.isfile(paths['audio'])

#============================================

def test_render_command(monkeypatch, tmp_path) -> None:
	"""
	Ensure the render call passes both filter scripts to ffmpeg.
	"""
	seen = {}
	output_file = str(tmp_path / "out.mkv")

	def fake_run(cmd: list, capture_output: bool = True) -> None:
		seen['cmd'] = cmd
		with open(output_file, 'w') as handle:
			handle.write("")

	monkeypatch.setattr(ffmpeg_render.utils, "run_process", fake_run)
	utils.set_quiet_mode(True)
	try:
		paths = {'video': "v.txt", 'audio': "a.txt"}
		ffmpeg_render.render_sections("in.mkv", output_file, paths)
	finally:
		utils.set_quiet_mode(False)
	cmd = seen['cmd']
	assert cmd[0] == "ffmpeg"
	assert cmd[cmd.index("-i") + 1] == "in.mkv"
	assert cmd[cmd.index("-filter_script:v") + 1] == "v.txt"
	assert cmd[cmd.index("-filter_script:a") + 1] == "a.txt"
	assert cmd[-1] == output_file

#============================================

def test_render_missing_output_raises(monkeypatch, tmp_path) -> None:
	monkeypatch.setattr(ffmpeg_render.utils, "run_process", lambda cmd, capture_output=True: None)
	with pytest.raises(RuntimeError):
		ffmpeg_render.render_sections("in.wav", str(tmp_path / "missing.wav"),
			{'audio': "a.txt"})

#============================================

def test_extract_command(monkeypatch, tmp_path) -> None:
	seen = {}
	wav_path = str(tmp_path / "audio.wav")

	def fake_run(cmd: list, capture_output: bool = True) -> None:
		seen['cmd'] = cmd
		with open(wav_path, 'wb') as handle:
			handle.write(b"")

	monkeypatch.setattr(ffmpeg_extract.utils, "run_process", fake_run)
	ffmpeg_extract.extract_audio("clip.mp4", wav_path, sample_rate=16000, channels=2)
	cmd = seen['cmd']
	assert cmd[cmd.index("-acodec") + 1] == "pcm_s16le"
	assert cmd[cmd.index("-ar") + 1] == "16000"
	assert cmd[cmd.index("-ac") + 1] == "2"
	assert cmd[-1] == wav_path
