import typing


class DrummerError (Exception):

	"""
	Base class for composition errors raised by tinydrummer.
	"""


class UnknownDurationError (DrummerError):

	"""
	A duration token is neither a known note name nor a raw tick count.
	"""

	def __init__ (self, token: typing.Any) -> None:

		self.token = token
		super().__init__(f"Unknown duration {token!r}")


class MissingVariationError (DrummerError):

	"""
	A beat-string contains a symbol with no entry in the variation table.
	"""

	def __init__ (self, symbol: str, pattern: str) -> None:

		self.symbol = symbol
		self.pattern = pattern
		super().__init__(f"No variation for symbol {symbol!r} in pattern {pattern!r}")


class InvalidFillError (DrummerError):

	"""
	A fill cannot be spliced into its phrase.
	"""

	def __init__ (self, message: str, instrument: typing.Optional[int] = None) -> None:

		self.instrument = instrument
		super().__init__(message)


class DegenerateEnvelopeError (DrummerError):

	"""
	An envelope was requested with fewer than one step.
	"""

	def __init__ (self, steps: int) -> None:

		self.steps = steps
		super().__init__(f"An envelope needs at least one step, got {steps}")
