#!/usr/bin/env python3

#============================================

class FormatError(RuntimeError):
	"""Container magic is missing or garbled, or a required chunk is absent."""
	pass

#============================================

class InvalidHeader(RuntimeError):
	"""Format chunk fields are missing or unusable for time computations."""
	pass

#============================================

class ConfigError(RuntimeError):
	"""Analysis settings are out of range."""
	pass
