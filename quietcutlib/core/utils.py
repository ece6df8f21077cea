#!/usr/bin/env python3

import os
import shlex
import shutil
import subprocess
from decimal import Decimal
from decimal import ROUND_HALF_UP

#============================================

_QUIET_MODE = False

#============================================

def set_quiet_mode(enabled: bool) -> None:
	global _QUIET_MODE
	_QUIET_MODE = bool(enabled)
	return

#============================================

def is_quiet_mode() -> bool:
	return _QUIET_MODE

#============================================

def log(message: str) -> None:
	if not _QUIET_MODE:
		print(message)
	return

#============================================

def run_process(cmd: list, capture_output: bool = True) -> subprocess.CompletedProcess:
	"""
	Log and run a command list, raising RuntimeError on a non-zero exit.
	"""
	showcmd = shlex.join(cmd)
	log(f"CMD: '{showcmd}'")
	proc = subprocess.run(cmd, capture_output=capture_output, text=True)
	if proc.returncode != 0:
		stderr_text = (proc.stderr or "").strip()
		raise RuntimeError(f"command failed: {showcmd}\n{stderr_text}")
	return proc

#============================================

def ensure_file_exists(filepath: str) -> None:
	"""
	Raise RuntimeError unless filepath is an existing file.
	"""
	if not os.path.isfile(filepath):
		raise RuntimeError(f"file not found: {filepath}")
	return

#============================================

def check_dependency(cmd_name: str) -> None:
	"""
	Raise RuntimeError unless cmd_name is on PATH.
	"""
	if shutil.which(cmd_name) is None:
		raise RuntimeError(f"missing dependency: {cmd_name}")
	return

#============================================

def format_timestamp(millis: int) -> str:
	"""
	Format milliseconds as HH:MM:SS.mmm.

	Args:
		millis: Time in milliseconds.

	Returns:
		str: Formatted timestamp.
	"""
	total_millis = max(0, int(millis))
	hours = total_millis // 3600000
	remainder = total_millis % 3600000
	minutes = remainder // 60000
	remainder = remainder % 60000
	seconds_part = remainder // 1000
	millis_part = remainder % 1000
	return f"{hours:02d}:{minutes:02d}:{seconds_part:02d}.{millis_part:03d}"

#============================================

def millis_to_seconds_text(millis: int) -> str:
	"""
	Seconds with millisecond precision, trailing zeros removed.
	"""
	value = (Decimal(int(millis)) / Decimal(1000)).quantize(Decimal("0.001"),
		rounding=ROUND_HALF_UP)
	text = f"{value:f}"
	if '.' in text:
		text = text.rstrip('0').rstrip('.')
	return text
