#!/usr/bin/env python3

"""
RIFF/WAVE container decoding.

The container is walked chunk by chunk; the data chunk is never assumed to
sit at a fixed offset because LIST/INFO and other metadata chunks of any size
may precede it.
"""

import struct
from quietcutlib.core.errors import FormatError
from quietcutlib.core.errors import InvalidHeader

#============================================

WAVE_FORMAT_PCM = 0x0001
WAVE_FORMAT_EXTENSIBLE = 0xFFFE
SUPPORTED_BITS = (8, 16, 24, 32)
CHUNK_HEADER_SIZE = 8
FMT_MIN_SIZE = 16
# cbSize, valid bits, channel mask and the 16 byte SubFormat GUID
FMT_EXTENSIBLE_SIZE = 40
EXTENSION_MIN_SIZE = 22
KSDATAFORMAT_SUBTYPE_PCM = bytes.fromhex("0100000000001000800000aa00389b71")

#============================================

class FormatInfo():
	def __init__(self, channels: int, sample_rate: int, byte_rate: int,
		bits_per_sample: int, block_align: int, audio_format: int = WAVE_FORMAT_PCM):
		self.channels = channels
		self.sample_rate = sample_rate
		self.byte_rate = byte_rate
		self.bits_per_sample = bits_per_sample
		self.block_align = block_align
		self.audio_format = audio_format

	#============================
	@property
	def bytes_per_sample(self) -> int:
		return self.bits_per_sample // 8

	#============================
	def __eq__(self, other) -> bool:
		if not isinstance(other, FormatInfo):
			return NotImplemented
		return self.as_dict() == other.as_dict()

	#============================
	def as_dict(self) -> dict:
		return {
			'channels': self.channels,
			'sample_rate': self.sample_rate,
			'byte_rate': self.byte_rate,
			'bits_per_sample': self.bits_per_sample,
			'block_align': self.block_align,
			'audio_format': self.audio_format,
		}

	#============================
	def __repr__(self) -> str:
		return (f"FormatInfo(channels={self.channels}, sample_rate={self.sample_rate}, "
			f"byte_rate={self.byte_rate}, bits_per_sample={self.bits_per_sample}, "
			f"block_align={self.block_align})")

#============================================

class PcmView():
	"""
	Read-only window over the sample payload of a decoded buffer.
	"""
	def __init__(self, buffer, offset: int, length: int):
		self._buffer = memoryview(buffer).toreadonly()
		self.offset = offset
		self.length = length

	#============================
	@property
	def data(self) -> memoryview:
		return self._buffer[self.offset:self.offset + self.length]

	#============================
	def __len__(self) -> int:
		return self.length

#============================================

def read_chunk_header(buffer, offset: int) -> tuple:
	"""
	Read a chunk identifier and payload size.

	Args:
		buffer: Container bytes.
		offset: Offset of the chunk header.

	Returns:
		tuple: (chunk_id, payload_size)
	"""
	raw_id = bytes(buffer[offset:offset + 4])
	(size,) = struct.unpack_from('<I', buffer, offset + 4)
	try:
		chunk_id = raw_id.decode('ascii')
	except UnicodeDecodeError as exc:
		raise FormatError(f"garbled chunk identifier at byte {offset}") from exc
	return (chunk_id, size)

#============================================

def check_extensible_subformat(buffer, offset: int, size: int) -> None:
	"""
	Require a WAVE_FORMAT_EXTENSIBLE header to carry the integer PCM SubFormat.
	"""
	if size < FMT_EXTENSIBLE_SIZE or offset + FMT_EXTENSIBLE_SIZE > len(buffer):
		raise InvalidHeader(f"extensible fmt chunk too short: {size} bytes")
	(extension_size,) = struct.unpack_from('<H', buffer, offset + 16)
	if extension_size < EXTENSION_MIN_SIZE:
		raise InvalidHeader(f"extensible fmt extension too short: {extension_size} bytes")
	subformat = bytes(buffer[offset + 24:offset + 40])
	if subformat != KSDATAFORMAT_SUBTYPE_PCM:
		raise InvalidHeader(f"unsupported extensible SubFormat: {subformat.hex()}")
	return

#============================================

def parse_format_chunk(buffer, offset: int, size: int) -> FormatInfo:
	"""
	Parse and validate the fields of a "fmt " chunk payload.

	Args:
		buffer: Container bytes.
		offset: Offset of the chunk payload.
		size: Declared payload size.

	Returns:
		FormatInfo: Validated format parameters.
	"""
	if size < FMT_MIN_SIZE or offset + FMT_MIN_SIZE > len(buffer):
		raise InvalidHeader(f"fmt chunk too short: {size} bytes")
	fields = struct.unpack_from('<HHIIHH', buffer, offset)
	(audio_format, channels, sample_rate, byte_rate, block_align, bits) = fields
	if audio_format not in (WAVE_FORMAT_PCM, WAVE_FORMAT_EXTENSIBLE):
		raise InvalidHeader(f"unsupported audio format code: {audio_format:#06x}")
	if audio_format == WAVE_FORMAT_EXTENSIBLE:
		check_extensible_subformat(buffer, offset, size)
	if channels < 1:
		raise InvalidHeader("channel count must be at least 1")
	if sample_rate <= 0:
		raise InvalidHeader("sample rate must be positive")
	if byte_rate <= 0:
		raise InvalidHeader("byte rate must be positive")
	if bits not in SUPPORTED_BITS:
		raise InvalidHeader(f"unsupported bits per sample: {bits}")
	expected_align = channels * (bits // 8)
	if block_align != expected_align:
		raise InvalidHeader(
			f"block align {block_align} does not match channels x bytes ({expected_align})"
		)
	if byte_rate != sample_rate * block_align:
		raise InvalidHeader(
			f"byte rate {byte_rate} does not match sample rate x block align "
			f"({sample_rate * block_align})"
		)
	return FormatInfo(channels, sample_rate, byte_rate, bits, block_align, audio_format)

#============================================

def decode(buffer) -> tuple:
	"""
	Decode a RIFF/WAVE buffer into format parameters and a sample view.

	Args:
		buffer: Whole container as bytes-like object.

	Returns:
		tuple: (FormatInfo, PcmView)
	"""
	if len(buffer) < 12:
		raise FormatError("buffer too short for a RIFF header")
	if bytes(buffer[0:4]) != b'RIFF':
		raise FormatError("missing RIFF container tag")
	if bytes(buffer[8:12]) != b'WAVE':
		raise FormatError("missing WAVE format tag")
	fmt = None
	offset = 12
	while offset + CHUNK_HEADER_SIZE <= len(buffer):
		(chunk_id, size) = read_chunk_header(buffer, offset)
		payload_start = offset + CHUNK_HEADER_SIZE
		if chunk_id == 'fmt ':
			fmt = parse_format_chunk(buffer, payload_start, size)
		elif chunk_id == 'data':
			if fmt is None:
				raise FormatError("data chunk found before fmt chunk")
			# streamed writers leave the size unset; take what is present
			available = len(buffer) - payload_start
			length = min(size, available)
			return (fmt, PcmView(buffer, payload_start, length))
		offset = payload_start + size + (size & 1)
	if fmt is None:
		raise FormatError("no fmt chunk found")
	raise FormatError("no data chunk found")
