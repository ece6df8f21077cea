#!/usr/bin/env python3

import math
import numpy
from quietcutlib.core.errors import ConfigError
from quietcutlib.core.wavdecoder import FormatInfo
from quietcutlib.core.wavdecoder import PcmView

#============================================

DEFAULT_FRAME_MS = 2

#============================================

class Frame():
	def __init__(self, index: int, peak: int):
		self.index = index
		self.peak = peak

	#============================
	def __eq__(self, other) -> bool:
		if not isinstance(other, Frame):
			return NotImplemented
		return self.index == other.index and self.peak == other.peak

	#============================
	def __repr__(self) -> str:
		return f"Frame(index={self.index}, peak={self.peak})"

#============================================

class PeakFrames():
	"""
	Ordered frame peaks for a whole PCM payload.

	Iterating yields Frame objects in index order; the sequence can be
	iterated again from the start.
	"""
	def __init__(self, peaks: numpy.ndarray, frame_size: int, frame_ms: float,
		data_length: int):
		self.peaks = peaks
		self.frame_size = frame_size
		self.frame_ms = frame_ms
		self.data_length = data_length
		if peaks.size == 0:
			self.global_peak = 0
			self.global_peak_index = None
		else:
			self.global_peak_index = int(numpy.argmax(peaks))
			self.global_peak = int(peaks[self.global_peak_index])

	#============================
	def __len__(self) -> int:
		return int(self.peaks.size)

	#============================
	def __getitem__(self, index: int) -> Frame:
		if index < 0:
			index += len(self)
		if index < 0 or index >= len(self):
			raise IndexError("frame index out of range")
		return Frame(index, int(self.peaks[index]))

	#============================
	def __iter__(self):
		for index, peak in enumerate(self.peaks.tolist()):
			yield Frame(index, peak)

#============================================

def frame_size_bytes(fmt: FormatInfo, frame_ms: float) -> int:
	"""
	Frame size in bytes, aligned down to whole sample blocks.

	Args:
		fmt: Stream format.
		frame_ms: Frame duration in milliseconds.

	Returns:
		int: Frame size in bytes, at least one block.
	"""
	if frame_ms <= 0:
		raise ConfigError("frame duration must be positive")
	raw_size = int(math.floor(fmt.byte_rate * frame_ms / 1000.0 + 0.5))
	size = raw_size - (raw_size % fmt.block_align)
	if size < fmt.block_align:
		size = fmt.block_align
	return size

#============================================

def decode_samples(data, fmt: FormatInfo) -> numpy.ndarray:
	"""
	Decode interleaved PCM bytes into signed integers.

	Trailing bytes that do not fill a whole block are dropped.

	Args:
		data: Sample payload bytes.
		fmt: Stream format.

	Returns:
		numpy.ndarray: Signed int64 samples, all channels interleaved.
	"""
	usable = len(data) - (len(data) % fmt.block_align)
	if usable == 0:
		return numpy.array([], dtype=numpy.int64)
	raw = numpy.frombuffer(data, dtype=numpy.uint8, count=usable)
	bits = fmt.bits_per_sample
	if bits == 8:
		# 8-bit wav is unsigned with a 128 midpoint
		return raw.astype(numpy.int64) - 128
	if bits == 16:
		return raw.view('<i2').astype(numpy.int64)
	if bits == 24:
		triples = raw.reshape(-1, 3).astype(numpy.int64)
		values = triples[:, 0] | (triples[:, 1] << 8) | (triples[:, 2] << 16)
		values = numpy.where(values >= 0x800000, values - 0x1000000, values)
		return values
	if bits == 32:
		return raw.view('<i4').astype(numpy.int64)
	raise RuntimeError(f"unsupported bits per sample: {bits}")

#============================================

def frame(pcm: PcmView, fmt: FormatInfo, frame_ms: float = DEFAULT_FRAME_MS) -> PeakFrames:
	"""
	Slice the payload into fixed-duration frames and take each frame's peak.

	All channels of a frame are combined into a single peak.

	Args:
		pcm: Sample payload view.
		fmt: Stream format.
		frame_ms: Frame duration in milliseconds.

	Returns:
		PeakFrames: Frame peaks plus the global peak and its frame index.
	"""
	size = frame_size_bytes(fmt, frame_ms)
	samples = decode_samples(pcm.data, fmt)
	if samples.size == 0:
		return PeakFrames(numpy.array([], dtype=numpy.int64), size, frame_ms, len(pcm))
	magnitudes = numpy.abs(samples)
	samples_per_frame = size // fmt.bytes_per_sample
	starts = numpy.arange(0, magnitudes.size, samples_per_frame)
	peaks = numpy.maximum.reduceat(magnitudes, starts)
	return PeakFrames(peaks, size, frame_ms, len(pcm))
