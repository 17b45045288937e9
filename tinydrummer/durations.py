"""Duration arithmetic.

A duration is a token: either a note name (``"quarter"``,
``"dotted_eighth"``, ``"triplet_sixteenth"``, or an alias such as
``"dotted-eighth"`` or ``"den"``) or a raw tick count written ``"d<ticks>"``
(``"d90"`` is 90 ticks at 96 ticks per quarter note).

Every token maps to exactly one beat length, an exact
:class:`fractions.Fraction` where 1 = one quarter note.
"""

import fractions
import re
import typing

import tinydrummer.constants
import tinydrummer.constants.durations
import tinydrummer.errors
import tinydrummer.sequence_utils


Duration = str

_RAW_TICKS = re.compile(r"^d(\d+)$")


def normalize (token: Duration) -> str:

	"""
	Return the canonical note name for *token*, or raise UnknownDurationError.
	"""

	if not isinstance(token, str):
		raise tinydrummer.errors.UnknownDurationError(token)

	name = token.strip().lower().replace("-", "_").replace(" ", "_")

	if name in tinydrummer.constants.durations.DURATIONS:
		return name

	if name in tinydrummer.constants.durations.SHORT_NAMES:
		return tinydrummer.constants.durations.SHORT_NAMES[name]

	raise tinydrummer.errors.UnknownDurationError(token)


def raw_ticks (token: Duration) -> typing.Optional[int]:

	"""
	Return the tick count of a ``"d<ticks>"`` token, or None for any other token.
	"""

	if not isinstance(token, str):
		return None

	match = _RAW_TICKS.match(token)

	return int(match.group(1)) if match else None


def ticks_token (ticks: int) -> Duration:

	"""Build a raw tick duration token: ``ticks_token(90) == "d90"``."""

	if ticks <= 0:
		raise ValueError(f"A tick duration must be positive, got {ticks}")

	return f"d{ticks}"


def beat_length (duration: Duration) -> fractions.Fraction:

	"""Return the length of *duration* in beats (quarter notes).

	Parameters:
		duration: A note name, alias, or raw ``"d<ticks>"`` token.

	Raises:
		UnknownDurationError: If the token is not recognised.

	Example:
		```python
		beat_length("dotted_eighth")   # Fraction(3, 4)
		beat_length("d48")             # Fraction(1, 2)
		```
	"""

	ticks = raw_ticks(duration)

	if ticks is not None:

		if ticks == 0:
			raise tinydrummer.errors.UnknownDurationError(duration)

		return fractions.Fraction(ticks, tinydrummer.constants.TICKS_PER_QUARTER)

	return tinydrummer.constants.durations.DURATIONS[normalize(duration)]


def is_duration (token: typing.Any) -> bool:

	"""True if *token* is a valid duration."""

	try:
		beat_length(token)
	except tinydrummer.errors.UnknownDurationError:
		return False

	return True


def beats_to_ticks (beats: tinydrummer.sequence_utils.Number) -> int:

	"""Convert a beat position or length to the nearest whole tick."""

	return tinydrummer.sequence_utils.round_half_away(
		fractions.Fraction(beats) * tinydrummer.constants.TICKS_PER_QUARTER
	)


def to_ticks (duration: Duration) -> int:

	"""Length of *duration* in ticks, rounded to the nearest tick."""

	return beats_to_ticks(beat_length(duration))


def ticks_for (duration: Duration, reference: Duration) -> int:

	"""Ticks left in *duration* after *reference* has been played.

	Used by flams and grace notes: the main stroke lasts the note length
	minus the grace note, rounded half away from zero.

	Example:
		```python
		ticks_for("quarter", "sixtyfourth")   # 90
		```
	"""

	return beats_to_ticks(beat_length(duration) - beat_length(reference))


def steps_in (length: Duration, step: Duration) -> int:

	"""How many *step* notes fit in *length*, rounded to the nearest whole note."""

	return tinydrummer.sequence_utils.round_half_away(beat_length(length) / beat_length(step))


def token_for_beats (beats: tinydrummer.sequence_utils.Number, default: typing.Optional[Duration] = None) -> typing.Optional[Duration]:

	"""Reverse lookup: the note name whose length is exactly *beats*.

	Returns *default* when no named duration has that length.

	Example:
		```python
		token_for_beats(fractions.Fraction(1, 3))        # "triplet_eighth"
		token_for_beats(0.4, default="quarter")          # "quarter"
		```
	"""

	return tinydrummer.constants.durations.NAMES_BY_LENGTH.get(fractions.Fraction(beats), default)
