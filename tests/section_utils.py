
"""
Section invariant checks shared by tests.
"""

#============================================

def check_sections(sections: list) -> None:
	"""
	Raise if sections are unordered, overlapping, open or empty.
	"""
	previous_end = None
	for section in sections:
		if section.is_open:
			raise AssertionError(f"section left open: {section}")
		if section.from_ms < 0 or section.from_ms >= section.to_ms:
			raise AssertionError(f"section has no duration: {section}")
		if previous_end is not None and section.from_ms < previous_end:
			raise AssertionError(f"section overlaps its predecessor: {section}")
		previous_end = section.to_ms
	return
