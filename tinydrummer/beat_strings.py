import fractions
import functools
import logging
import typing

import tinydrummer.constants.durations
import tinydrummer.durations
import tinydrummer.errors
import tinydrummer.sequence_utils
import tinydrummer.timeline


logger = logging.getLogger(__name__)

Variation = typing.Callable[[], typing.Any]
Variations = typing.Mapping[str, Variation]


def default_variations (timeline: tinydrummer.timeline.Timeline, duration: str, instrument: int) -> typing.Dict[str, Variation]:

	"""
	The standard variation table: ``"0"`` rests and ``"1"`` strikes *instrument*.
	"""

	return {
		tinydrummer.sequence_utils.REST: functools.partial(timeline.emit_rest, duration),
		tinydrummer.sequence_utils.ONSET: functools.partial(timeline.emit_note, duration, instrument),
	}


def infer_duration (pattern: str) -> str:

	"""Guess the step duration of a one-bar beat-string from its length.

	Four beats divided by the number of symbols, as a note name; a length
	with no matching note name falls back to a quarter note.

	Example:
		```python
		infer_duration("0101")       # "quarter"
		infer_duration("10101010")   # "eighth"
		infer_duration("101")        # "triplet_half"
		```
	"""

	if not pattern:
		raise ValueError("Cannot infer a duration from an empty pattern")

	return tinydrummer.durations.token_for_beats(
		fractions.Fraction(4, len(pattern)),
		default = tinydrummer.constants.durations.QUARTER_NAME
	)


def _check_variations (pattern: str, variations: Variations) -> None:

	for symbol in pattern:
		if symbol not in variations:
			raise tinydrummer.errors.MissingVariationError(symbol, pattern)


def _check_repeat (repeat: int) -> None:

	if repeat < 1:
		raise ValueError(f"Repeat must be at least 1, got {repeat}")


def render_pattern (
	timeline: tinydrummer.timeline.Timeline,
	patterns: typing.Sequence[str],
	instrument: int,
	duration: typing.Optional[str] = None,
	repeat: int = 1,
	negate: bool = False,
	variations: typing.Optional[Variations] = None
) -> fractions.Fraction:

	"""Play beat-strings by dispatching each symbol to a variation.

	Each pattern is read left to right and every symbol calls its entry in
	the variation table. Patterns are played in order, each one *repeat*
	times before the next.

	A pattern made only of rests skips the variation table and simply rests
	for its length, so an empty bar still takes up time.

	Parameters:
		timeline: The score to append to.
		patterns: Beat-strings, e.g. ``["0101", "0110"]``.
		instrument: Note number struck by the default ``"1"`` variation.
		duration: Step duration. If omitted it is inferred from the first
			pattern's length (see :func:`infer_duration`).
		repeat: Number of passes over each pattern.
		negate: Swap ``0`` and ``1`` before playing.
		variations: Symbol -> callable table. Each callable should emit
			notes or rests adding up to *duration*. Defaults to
			:func:`default_variations`.

	Returns:
		The number of beats added to the counter.

	Raises:
		MissingVariationError: A symbol has no variation.
	"""

	_check_repeat(repeat)

	if not patterns:
		return fractions.Fraction(0)

	if duration is None:
		duration = infer_duration(patterns[0])
	else:
		tinydrummer.durations.beat_length(duration)

	if variations is None:
		variations = default_variations(timeline, duration, instrument)

	start = timeline.counter

	for pattern in patterns:

		if negate:
			pattern = tinydrummer.sequence_utils.negate(pattern)

		if tinydrummer.sequence_utils.is_rest(pattern):
			for _ in range(len(pattern) * repeat):
				timeline.emit_rest(duration)
			continue

		_check_variations(pattern, variations)

		for _ in range(repeat):
			for symbol in pattern:
				variations[symbol]()

	return timeline.counter - start


def render_combinatorial (
	timeline: tinydrummer.timeline.Timeline,
	instrument: int,
	beats: int = 4,
	repeat: int = 1,
	negate: bool = False,
	duration: str = tinydrummer.constants.durations.QUARTER_NAME,
	variations: typing.Optional[Variations] = None,
	patterns: typing.Optional[typing.Sequence[str]] = None,
	legacy_counter: bool = False
) -> fractions.Fraction:

	"""Play every pattern of *beats* symbols over the variation alphabet.

	Without explicit *patterns*, all ``len(alphabet) ** beats`` strings are
	generated in sorted order (``0000``, ``0001``, ... ``1111`` for the
	default table) - the classic syncopation exercise of playing every
	rhythm a bar can hold.

	Unlike :func:`render_pattern`, all-rest patterns are played through the
	variation table, since a custom ``"0"`` may well strike something.

	Parameters:
		timeline: The score to append to.
		instrument: Note number struck by the default ``"1"`` variation.
		beats: Symbols per generated pattern.
		repeat: Number of passes over each pattern.
		negate: Swap ``0`` and ``1`` before playing.
		duration: Step duration used by the default variations.
		variations: Symbol -> callable table; its keys form the alphabet.
		patterns: Play these instead of generating every combination.
		legacy_counter: Also add *duration* to the counter once per symbol,
			on top of whatever the variations emit. Only for reproducing
			scores that relied on that double count.

	Returns:
		The number of beats added to the counter.
	"""

	_check_repeat(repeat)
	step = tinydrummer.durations.beat_length(duration)

	if variations is None:
		variations = default_variations(timeline, duration, instrument)

	for symbol in variations:
		if len(symbol) != 1:
			raise ValueError(f"Variation keys must be single characters, got {symbol!r}")

	if patterns is None:
		patterns = tinydrummer.sequence_utils.variations_with_repetition(variations.keys(), beats)

	logger.debug(f"Combinatorial: {len(patterns)} patterns of {beats} over {sorted(variations)}")

	start = timeline.counter

	for pattern in patterns:

		if negate:
			pattern = tinydrummer.sequence_utils.negate(pattern)

		_check_variations(pattern, variations)

		for _ in range(repeat):
			for symbol in pattern:
				variations[symbol]()
				if legacy_counter:
					timeline.counter += step

	return timeline.counter - start


def sync_patterns (
	timeline: tinydrummer.timeline.Timeline,
	patterns: typing.Mapping[int, typing.Sequence[str]],
	duration: typing.Optional[str] = None
) -> fractions.Fraction:

	"""Play several instruments' beat-strings simultaneously.

	Each instrument becomes one voice of :meth:`Timeline.sync`. A shared
	*duration* renders every voice at the same step size (as fills need);
	otherwise each voice infers its own.

	Example:
		```python
		sync_patterns(timeline, {
			closed_hh: ["11111111"],
			snare:     ["0101"],
			kick:      ["1010"],
		})
		```
	"""

	voices = [
		functools.partial(render_pattern, timeline, instrument_patterns, instrument, duration=duration)
		for instrument, instrument_patterns in patterns.items()
	]

	return timeline.sync(*voices)
