from __future__ import annotations

import dataclasses
import fractions
import logging
import typing

import tinydrummer.beat_strings
import tinydrummer.constants
import tinydrummer.constants.durations
import tinydrummer.constants.gm_drums
import tinydrummer.durations
import tinydrummer.errors
import tinydrummer.sequence_utils
import tinydrummer.timeline

if typing.TYPE_CHECKING:
	import tinydrummer.timeline


logger = logging.getLogger(__name__)

# Ticks in one 4/4 bar; a fill step of 4/L beats is ticks_per_bar / L ticks.
_TICKS_PER_BAR = 4 * tinydrummer.constants.TICKS_PER_QUARTER

Phrases = typing.Mapping[int, typing.Sequence[str]]


@dataclasses.dataclass
class Fill:

	"""
	A drum fill: one beat-string per instrument, all the same length.

	``duration`` is the fill's step resolution as steps per whole note
	(8 = eighth notes, 16 = sixteenth notes). Strings shorter than
	``duration`` sit at the end of the bar; the start is padded with rests.

	Example::

		# Eight sixteenth-note snare hits ending the phrase
		Fill(duration=16, patterns={
			gm_drums.OPEN_HH: "00000000",
			gm_drums.ACOUSTIC_SNARE: "11111111",
			gm_drums.ACOUSTIC_BASS: "00000000",
		})
	"""

	patterns: typing.Dict[int, str]
	duration: int = 8

	def __post_init__ (self) -> None:
		if not self.patterns:
			raise tinydrummer.errors.InvalidFillError("A fill needs at least one pattern")
		if self.duration <= 0:
			raise tinydrummer.errors.InvalidFillError(f"Fill duration must be positive, got {self.duration}")
		if len({len(pattern) for pattern in self.patterns.values()}) != 1:
			raise tinydrummer.errors.InvalidFillError("Fill patterns must all be the same length")
		if not self.length:
			raise tinydrummer.errors.InvalidFillError("Fill patterns cannot be empty")

	@property
	def length (self) -> int:

		"""Number of symbols in each fill pattern."""

		return len(next(iter(self.patterns.values())))


@dataclasses.dataclass
class SplicedFill:

	"""
	The result of splicing a fill into a phrase, ready to render.
	"""

	patterns: typing.Dict[int, str]
	duration: str
	lcm: int
	chop: int


FillSource = typing.Union[Fill, typing.Callable[[], Fill]]


def default_fill (kit: typing.Optional[typing.Mapping[str, int]] = None) -> Fill:

	"""
	Three eighth-note snare hits, with the hi-hat and kick silenced.
	"""

	if kit is None:
		kit = tinydrummer.constants.gm_drums.GM_KIT

	return Fill(
		duration = 8,
		patterns = {
			kit["open_hh"]: "000",
			kit["snare"]: "111",
			kit["kick"]: "000",
		}
	)


def step_duration (lcm: int) -> str:

	"""Duration token for one step of a bar divided into *lcm* steps.

	A step with no note name becomes a raw tick token when the bar divides
	evenly into ticks, otherwise an eighth note.
	"""

	size = fractions.Fraction(4, lcm)
	duration = tinydrummer.durations.token_for_beats(size)

	if duration is not None:
		return duration

	if _TICKS_PER_BAR % lcm == 0:
		duration = tinydrummer.durations.ticks_token(_TICKS_PER_BAR // lcm)
	else:
		duration = tinydrummer.constants.durations.EIGHTH_NAME

	logger.warning(f"No duration name for a step of {size} beats, using {duration}")

	return duration


def splice_fill (fill: Fill, phrases: Phrases) -> SplicedFill:

	"""Replace the end of a multi-instrument phrase with a fill.

	Every phrase and the fill are stretched onto a common grid of ``L``
	steps, where ``L`` is the least common multiple of the fill's step
	resolution and each instrument's phrase length. The last steps of each
	stretched phrase are then overwritten with the last steps of the
	stretched fill.

	Parameters:
		fill: The fill to splice in.
		phrases: Instrument -> beat-strings. Each instrument's strings are
			joined into one phrase.

	Returns:
		The spliced pattern for every instrument (each exactly ``L`` long),
		the step duration to render them at, ``L`` and the chop length.

	Raises:
		InvalidFillError: A phrase is empty, or the fill plays an
			instrument that has no phrase.
	"""

	logger.debug(f"Fill: {fill.patterns} at 1/{fill.duration}")

	lengths = {instrument: sum(len(pattern) for pattern in patterns) for instrument, patterns in phrases.items()}

	if not lengths:
		raise tinydrummer.errors.InvalidFillError("A fill needs at least one phrase to splice into")

	for instrument in list(fill.patterns) + list(lengths):
		if not lengths.get(instrument):
			raise tinydrummer.errors.InvalidFillError(f"Instrument {instrument} has no phrase to splice the fill into", instrument)

	lcm = tinydrummer.sequence_utils.multi_lcm(fill.duration, *lengths.values())
	duration = step_duration(lcm)

	logger.debug(f"LCM: {lcm}, duration: {duration}")

	if fill.duration == lcm:
		chop = fill.length
	else:
		chop = lcm // fill.length + 1

	chop = min(chop, lcm)

	logger.debug(f"Chop: {chop}")

	stretched = {
		instrument: _stretch("".join(phrases[instrument]), lcm)
		for instrument in lengths
	}

	logger.debug(f"Phrases: {stretched}")

	replacements = {
		instrument: _stretch(pattern.rjust(fill.duration, tinydrummer.sequence_utils.REST), lcm)[-chop:]
		for instrument, pattern in fill.patterns.items()
	}

	logger.debug(f"Replacements: {replacements}")

	spliced: typing.Dict[int, str] = {}

	for instrument, pattern in stretched.items():
		tail = replacements.get(instrument, "")
		spliced[instrument] = pattern[:len(pattern) - len(tail)] + tail
		logger.debug(f"{instrument}: {spliced[instrument]}")

	return SplicedFill(patterns=spliced, duration=duration, lcm=lcm, chop=chop)


def _stretch (pattern: str, length: int) -> str:

	if len(pattern) >= length:
		return pattern

	return "".join(tinydrummer.sequence_utils.upsize(list(pattern), length))


def add_fill (timeline: tinydrummer.timeline.Timeline, phrases: Phrases, fill: typing.Optional[FillSource] = None) -> SplicedFill:

	"""Splice *fill* into *phrases* and play every instrument together.

	*fill* may be a :class:`Fill` or a zero-argument callable returning
	one; without it the :func:`default_fill` is used.

	Example:
		```python
		add_fill(timeline, {
			gm_drums.OPEN_HH: ["11111111"],
			gm_drums.ACOUSTIC_SNARE: ["0101"],
			gm_drums.ACOUSTIC_BASS: ["1010"],
		})
		```
	"""

	if fill is None:
		fill = default_fill()
	elif callable(fill):
		fill = fill()

	spliced = splice_fill(fill, phrases)

	tinydrummer.beat_strings.sync_patterns(
		timeline,
		{instrument: [pattern] for instrument, pattern in spliced.patterns.items()},
		duration = spliced.duration
	)

	return spliced
