#!/usr/bin/env python3

from decimal import Decimal
from decimal import ROUND_HALF_UP
from quietcutlib.core.errors import InvalidHeader

#============================================

def time_of(byte_offset: int, byte_rate: int) -> int:
	"""
	Convert a byte offset into the sample payload to milliseconds.

	Args:
		byte_offset: Offset in bytes from the start of the sample data.
		byte_rate: Bytes per second of the PCM stream.

	Returns:
		int: Milliseconds, rounded half-up.
	"""
	if byte_rate <= 0:
		raise InvalidHeader("byte rate must be positive")
	millis = Decimal(byte_offset) * Decimal(1000) / Decimal(byte_rate)
	millis = millis.quantize(Decimal("1"), rounding=ROUND_HALF_UP)
	return int(millis)

#============================================

def frame_byte_offset(frame_index: int, frame_size: int, data_start: int = 0) -> int:
	"""
	Byte offset of the first byte of a frame.
	"""
	return data_start + frame_index * frame_size

#============================================

def frame_time(frame_index: int, frame_size: int, byte_rate: int) -> int:
	return time_of(frame_byte_offset(frame_index, frame_size), byte_rate)
