#!/usr/bin/env python3

"""
Unit tests for quietcutlib.core.timeconv.
"""

# Standard Library
import os
import sys
import unittest

REPO_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
if REPO_ROOT not in sys.path:
	sys.path.insert(0, REPO_ROOT)

# local repo modules
from quietcutlib.core import timeconv
from quietcutlib.core.errors import InvalidHeader

#============================================

class TimeConvTest(unittest.TestCase):
	#============================================
	def test_time_of_whole_millis(self) -> None:
		self.assertEqual(timeconv.time_of(0, 16000), 0)
		self.assertEqual(timeconv.time_of(6784, 16000), 424)
		self.assertEqual(timeconv.time_of(192000, 192000), 1000)

	#============================================
	def test_time_of_rounds_half_up(self) -> None:
		self.assertEqual(timeconv.time_of(8, 16000), 1)
		self.assertEqual(timeconv.time_of(7, 16000), 0)
		self.assertEqual(timeconv.time_of(88, 88200), 1)

	#============================================
	def test_zero_byte_rate_raises(self) -> None:
		with self.assertRaises(InvalidHeader):
			timeconv.time_of(100, 0)

	#============================================
	def test_frame_byte_offset(self) -> None:
		self.assertEqual(timeconv.frame_byte_offset(10, 32), 320)
		self.assertEqual(timeconv.frame_byte_offset(10, 32, data_start=44), 364)

	#============================================
	def test_frame_time(self) -> None:
		self.assertEqual(timeconv.frame_time(212, 32, 16000), 424)

#============================================

def main() -> None:
	"""Run the unit tests."""
	unittest.main()

#============================================

if __name__ == "__main__":
	main()
