#!/usr/bin/env python3

from quietcutlib.core import segmenter
from quietcutlib.core import timeconv
from quietcutlib.core.errors import ConfigError

#============================================

class Section():
	def __init__(self, from_ms: int, to_ms: int = None):
		self.from_ms = from_ms
		self.to_ms = to_ms

	#============================
	@property
	def is_open(self) -> bool:
		return self.to_ms is None

	#============================
	@property
	def duration_ms(self) -> int:
		if self.to_ms is None:
			return 0
		return self.to_ms - self.from_ms

	#============================
	def __eq__(self, other) -> bool:
		if not isinstance(other, Section):
			return NotImplemented
		return self.from_ms == other.from_ms and self.to_ms == other.to_ms

	#============================
	def __repr__(self) -> str:
		return f"Section(from_ms={self.from_ms}, to_ms={self.to_ms})"

#============================================

def build_sections(transitions: list, shift_ms: int, frame_size: int, byte_rate: int,
	duration_ms: int, close_at_end: bool = True,
	include_leading_noise: bool = False) -> list:
	"""
	Fold confirmed transitions into ordered noise sections.

	A section opens when silence ends (confirmed return to Noisy), starting
	shift_ms before the confirming frame, and closes when silence is
	confirmed again. A silence confirmation with no open section is ignored.
	When the shifted start reaches back into the previous section, that
	section is continued; it stays as it was if the continuation is never
	closed.

	Args:
		transitions: TransitionEvent objects in frame order.
		shift_ms: How far before the noise-resume point a section starts.
		frame_size: Frame size in bytes.
		byte_rate: Stream byte rate.
		duration_ms: Track duration in milliseconds.
		close_at_end: Close a section still open at the end of the track.
		include_leading_noise: Open a section at 0 ms before the first frame.

	Returns:
		list: Closed Section objects in ascending time order.
	"""
	if shift_ms < 0:
		raise ConfigError("shift_ms must be 0 or positive")
	sections = []
	open_section = None
	# open section continues sections[-1] and replaces it when closed
	resumes_previous = False
	if include_leading_noise:
		open_section = Section(0)
	for transition in transitions:
		event_ms = timeconv.frame_time(transition.frame_index, frame_size, byte_rate)
		if transition.to_state == segmenter.NOISY:
			if open_section is not None:
				continue
			start_ms = max(0, event_ms - shift_ms)
			if len(sections) > 0 and start_ms <= sections[-1].to_ms:
				open_section = Section(sections[-1].from_ms)
				resumes_previous = True
			else:
				open_section = Section(start_ms)
				resumes_previous = False
		elif transition.to_state == segmenter.SILENCE:
			if open_section is None:
				continue
			if event_ms > open_section.from_ms:
				_store_section(sections, Section(open_section.from_ms, event_ms),
					resumes_previous)
			open_section = None
			resumes_previous = False
	if open_section is not None and close_at_end:
		if duration_ms > open_section.from_ms:
			_store_section(sections, Section(open_section.from_ms, duration_ms),
				resumes_previous)
	return sections

#============================================

def _store_section(sections: list, section: Section, resumes_previous: bool) -> None:
	if resumes_previous:
		sections[-1] = section
	else:
		sections.append(section)
	return

#============================================

def expand_sections(sections: list, expand_ms: int, duration_ms: int) -> list:
	"""
	Pad every section on both sides and merge the ones that meet.

	Args:
		sections: Ordered closed sections.
		expand_ms: Padding in milliseconds.
		duration_ms: Track duration used to clamp the end.

	Returns:
		list: New ordered, non-overlapping sections.
	"""
	if expand_ms < 0:
		raise ConfigError("expand_ms must be 0 or positive")
	merged = []
	for section in sections:
		from_ms = max(0, section.from_ms - expand_ms)
		to_ms = min(duration_ms, section.to_ms + expand_ms)
		if to_ms <= from_ms:
			continue
		if len(merged) > 0 and from_ms <= merged[-1].to_ms:
			if to_ms > merged[-1].to_ms:
				merged[-1].to_ms = to_ms
			continue
		merged.append(Section(from_ms, to_ms))
	return merged

#============================================

def total_duration_ms(sections: list) -> int:
	return sum(section.duration_ms for section in sections)

