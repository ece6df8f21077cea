
"""
Pytest coverage for quietcutlib.core.segmenter.
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
from quietcutlib.core import segmenter
from quietcutlib.core.errors import ConfigError
from quietcutlib.core.framer import Frame
from quietcutlib.core.segmenter import HysteresisContext

#============================================

LOUD = 1000
QUIET = 10
SIL = segmenter.SAMPLE_SILENCE
NOI = segmenter.SAMPLE_NOISY

#============================================

def _frames(peaks: list) -> list:
	return [Frame(index, peak) for index, peak in enumerate(peaks)]

#============================================

def _segment(peaks: list, attack: int, release: int) -> list:
	return segmenter.segment(_frames(peaks), LOUD, 0.1, attack, release)

#============================================

@pytest.mark.parametrize("state, context, event, expected_state, expected_context, confirmed", [
	(segmenter.NOISY, HysteresisContext(4, 4), SIL,
		segmenter.POTENTIAL_SILENCE_START, HysteresisContext(0, 4), False),
	(segmenter.NOISY, HysteresisContext(4, 4), NOI,
		segmenter.NOISY, HysteresisContext(4, 4), False),
	(segmenter.POTENTIAL_SILENCE_START, HysteresisContext(3, 0), SIL,
		segmenter.SILENCE, HysteresisContext(0, 0), True),
	(segmenter.POTENTIAL_SILENCE_START, HysteresisContext(2, 0), SIL,
		segmenter.POTENTIAL_SILENCE_START, HysteresisContext(3, 0), False),
	(segmenter.POTENTIAL_SILENCE_START, HysteresisContext(2, 0), NOI,
		segmenter.NOISY, HysteresisContext(0, 0), False),
	(segmenter.SILENCE, HysteresisContext(0, 5), SIL,
		segmenter.SILENCE, HysteresisContext(0, 5), False),
	(segmenter.SILENCE, HysteresisContext(0, 5), NOI,
		segmenter.POTENTIAL_SILENCE_FINISH, HysteresisContext(0, 0), False),
	(segmenter.POTENTIAL_SILENCE_FINISH, HysteresisContext(0, 1), SIL,
		segmenter.SILENCE, HysteresisContext(0, 0), False),
	(segmenter.POTENTIAL_SILENCE_FINISH, HysteresisContext(0, 2), NOI,
		segmenter.NOISY, HysteresisContext(0, 0), True),
	(segmenter.POTENTIAL_SILENCE_FINISH, HysteresisContext(0, 1), NOI,
		segmenter.POTENTIAL_SILENCE_FINISH, HysteresisContext(0, 2), False),
])
def test_transition_table(state, context, event, expected_state,
	expected_context, confirmed) -> None:
	"""
	Ensure every row of the transition table, with attack=2 and release=1.
	"""
	result = segmenter.next_state(state, context, event, 2, 1)
	assert result == (expected_state, expected_context, confirmed)

#============================================

def test_next_state_does_not_mutate_context() -> None:
	context = HysteresisContext(1, 0)
	segmenter.next_state(segmenter.POTENTIAL_SILENCE_START, context, SIL, 5, 5)
	assert context == HysteresisContext(1, 0)

#============================================

def test_unknown_event_raises() -> None:
	with pytest.raises(ValueError):
		segmenter.next_state(segmenter.NOISY, HysteresisContext(), "SAMPLE_MAYBE", 1, 1)

#============================================

def test_classify_threshold_boundary() -> None:
	assert segmenter.classify(99, 0.1, 1000) == SIL
	assert segmenter.classify(100, 0.1, 1000) == NOI

#============================================

def test_constant_noise_never_confirms_silence() -> None:
	assert _segment([LOUD] * 500, 3, 3) == []

#============================================

def test_short_silence_is_debounced() -> None:
	"""
	Ensure a silence run no longer than attack_frames is never confirmed.
	"""
	attack = 5
	peaks = [LOUD] * 10 + [QUIET] * attack + [LOUD] * 10
	assert _segment(peaks, attack, 2) == []
	peaks = [LOUD] * 10 + [QUIET] * (attack + 2) + [LOUD] * 10
	assert _segment(peaks, attack, 2) == []

#============================================

def test_silence_confirmed_after_attack() -> None:
	attack = 5
	peaks = [LOUD] * 10 + [QUIET] * 20
	transitions = _segment(peaks, attack, 2)
	assert transitions == [
		segmenter.TransitionEvent(10 + attack + 2, segmenter.POTENTIAL_SILENCE_START,
			segmenter.SILENCE),
	]

#============================================

def test_noise_confirmed_after_release() -> None:
	attack = 2
	release = 3
	peaks = [QUIET] * 10 + [LOUD] * 10
	transitions = _segment(peaks, attack, release)
	assert [item.to_state for item in transitions] == [segmenter.SILENCE, segmenter.NOISY]
	assert transitions[1].from_state == segmenter.POTENTIAL_SILENCE_FINISH
	assert transitions[1].frame_index == 10 + release + 2

#============================================

def test_noise_blip_inside_silence_is_debounced() -> None:
	peaks = [QUIET] * 10 + [LOUD] * 3 + [QUIET] * 10
	transitions = _segment(peaks, 2, 3)
	assert [item.to_state for item in transitions] == [segmenter.SILENCE]

#============================================

def test_fold_states_reports_every_frame() -> None:
	peaks = [LOUD, QUIET, QUIET, LOUD]
	states = list(segmenter.fold_states(_frames(peaks), LOUD, 0.1, 5, 5))
	assert [item[0] for item in states] == [0, 1, 2, 3]
	assert [item[1] for item in states] == [
		segmenter.NOISY,
		segmenter.POTENTIAL_SILENCE_START,
		segmenter.POTENTIAL_SILENCE_START,
		segmenter.NOISY,
	]

#============================================

def test_empty_frame_sequence() -> None:
	assert segmenter.segment([], 0, 0.075, 1, 1) == []

#============================================

@pytest.mark.parametrize("threshold, attack, release", [
	(0.0, 1, 1),
	(1.0, 1, 1),
	(-0.5, 1, 1),
	(0.5, -1, 1),
	(0.5, 1, -1),
])
def test_invalid_parameters_raise(threshold, attack, release) -> None:
	with pytest.raises(ConfigError):
		segmenter.segment(_frames([LOUD]), LOUD, threshold, attack, release)
