#!/usr/bin/env python3

"""
Hysteresis classification of frame peaks into noise and silence.

Each frame is turned into a SAMPLE_SILENCE or SAMPLE_NOISY event and folded
through a four state machine. Entry into silence must hold for more than
attack_frames frames and return to noise for more than release_frames frames
before the change is confirmed, which keeps short dips and clicks from
flickering the result.
"""

from tqdm import tqdm
from quietcutlib.core import utils
from quietcutlib.core.errors import ConfigError

#============================================

NOISY = 'Noisy'
POTENTIAL_SILENCE_START = 'PotentialSilenceStart'
SILENCE = 'Silence'
POTENTIAL_SILENCE_FINISH = 'PotentialSilenceFinish'
STATES = (NOISY, POTENTIAL_SILENCE_START, SILENCE, POTENTIAL_SILENCE_FINISH)
INITIAL_STATE = NOISY

SAMPLE_SILENCE = 'SAMPLE_SILENCE'
SAMPLE_NOISY = 'SAMPLE_NOISY'

#============================================

class HysteresisContext():
	def __init__(self, silence_count: int = 0, noise_count: int = 0):
		self.silence_count = silence_count
		self.noise_count = noise_count

	#============================
	def replace(self, silence_count: int = None, noise_count: int = None):
		if silence_count is None:
			silence_count = self.silence_count
		if noise_count is None:
			noise_count = self.noise_count
		return HysteresisContext(silence_count, noise_count)

	#============================
	def __eq__(self, other) -> bool:
		if not isinstance(other, HysteresisContext):
			return NotImplemented
		return (self.silence_count == other.silence_count
			and self.noise_count == other.noise_count)

	#============================
	def __repr__(self) -> str:
		return (f"HysteresisContext(silence_count={self.silence_count}, "
			f"noise_count={self.noise_count})")

#============================================

class TransitionEvent():
	def __init__(self, frame_index: int, from_state: str, to_state: str):
		self.frame_index = frame_index
		self.from_state = from_state
		self.to_state = to_state

	#============================
	def __eq__(self, other) -> bool:
		if not isinstance(other, TransitionEvent):
			return NotImplemented
		return ((self.frame_index, self.from_state, self.to_state)
			== (other.frame_index, other.from_state, other.to_state))

	#============================
	def __repr__(self) -> str:
		return (f"TransitionEvent(frame_index={self.frame_index}, "
			f"from_state={self.from_state}, to_state={self.to_state})")

#============================================

def validate_parameters(threshold: float, attack_frames: int, release_frames: int) -> None:
	if not (0.0 < threshold < 1.0):
		raise ConfigError(f"threshold must be between 0 and 1 (exclusive), got {threshold}")
	if attack_frames < 0:
		raise ConfigError("attack_frames must be 0 or positive")
	if release_frames < 0:
		raise ConfigError("release_frames must be 0 or positive")

#============================================

def classify(peak: int, threshold: float, global_peak: int) -> str:
	"""
	Turn one frame peak into a machine event.

	Args:
		peak: Frame peak amplitude.
		threshold: Fraction of the global peak below which a frame is silent.
		global_peak: Largest sample magnitude of the track.

	Returns:
		str: SAMPLE_SILENCE or SAMPLE_NOISY.
	"""
	if peak < threshold * global_peak:
		return SAMPLE_SILENCE
	return SAMPLE_NOISY

#============================================

def next_state(state: str, context: HysteresisContext, event: str,
	attack_frames: int, release_frames: int) -> tuple:
	"""
	Pure transition function of the hysteresis machine.

	Args:
		state: Current state.
		context: Current run counters.
		event: SAMPLE_SILENCE or SAMPLE_NOISY.
		attack_frames: Silence frames required before silence is confirmed.
		release_frames: Noisy frames required before noise is confirmed.

	Returns:
		tuple: (next_state, next_context, confirmed) where confirmed is True
			only on the two confirming edges.
	"""
	if event not in (SAMPLE_SILENCE, SAMPLE_NOISY):
		raise ValueError(f"unknown event: {event}")
	silent = event == SAMPLE_SILENCE
	if state == NOISY:
		if silent:
			return (POTENTIAL_SILENCE_START, context.replace(silence_count=0), False)
		return (NOISY, context, False)
	if state == POTENTIAL_SILENCE_START:
		if not silent:
			return (NOISY, context.replace(silence_count=0), False)
		if context.silence_count > attack_frames:
			return (SILENCE, context.replace(silence_count=0), True)
		next_count = context.silence_count + 1
		return (POTENTIAL_SILENCE_START, context.replace(silence_count=next_count), False)
	if state == SILENCE:
		if silent:
			return (SILENCE, context, False)
		return (POTENTIAL_SILENCE_FINISH, context.replace(noise_count=0), False)
	if state == POTENTIAL_SILENCE_FINISH:
		if silent:
			return (SILENCE, context.replace(noise_count=0), False)
		if context.noise_count > release_frames:
			return (NOISY, context.replace(noise_count=0), True)
		next_count = context.noise_count + 1
		return (POTENTIAL_SILENCE_FINISH, context.replace(noise_count=next_count), False)
	raise ValueError(f"unknown state: {state}")

#============================================

def fold_states(frames, global_peak: int, threshold: float, attack_frames: int,
	release_frames: int, show_progress: bool = False):
	"""
	Run the machine over every frame.

	Yields:
		tuple: (frame_index, state_after_frame, TransitionEvent or None)
	"""
	validate_parameters(threshold, attack_frames, release_frames)
	state = INITIAL_STATE
	context = HysteresisContext()
	if show_progress and not utils.is_quiet_mode():
		frame_iter = tqdm(frames, total=len(frames), unit="frame")
	else:
		frame_iter = frames
	for frame in frame_iter:
		event = classify(frame.peak, threshold, global_peak)
		(new_state, context, confirmed) = next_state(state, context, event,
			attack_frames, release_frames)
		transition = None
		if confirmed:
			transition = TransitionEvent(frame.index, state, new_state)
		state = new_state
		yield (frame.index, state, transition)

#============================================

def segment(frames, global_peak: int, threshold: float, attack_frames: int,
	release_frames: int, show_progress: bool = False) -> list:
	"""
	Classify a frame sequence and collect the confirmed transitions.

	Args:
		frames: Ordered Frame sequence.
		global_peak: Largest sample magnitude of the track.
		threshold: Fraction of the global peak in (0, 1).
		attack_frames: Silence debounce in frames.
		release_frames: Noise debounce in frames.
		show_progress: Show a progress bar unless quiet mode is on.

	Returns:
		list: TransitionEvent objects in frame order.
	"""
	transitions = []
	for (_, _, transition) in fold_states(frames, global_peak, threshold,
		attack_frames, release_frames, show_progress=show_progress):
		if transition is not None:
			transitions.append(transition)
	return transitions
