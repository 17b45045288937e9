import fractions

import pytest

import tinydrummer.constants.durations
import tinydrummer.durations
import tinydrummer.errors


Fraction = fractions.Fraction


def test_named_durations_have_exact_lengths () -> None:

	"""Plain, dotted, double dotted and triplet names map to exact fractions."""

	assert tinydrummer.durations.beat_length("quarter") == 1
	assert tinydrummer.durations.beat_length("whole") == 4
	assert tinydrummer.durations.beat_length("dotted_eighth") == Fraction(3, 4)
	assert tinydrummer.durations.beat_length("double_dotted_half") == Fraction(7, 2)
	assert tinydrummer.durations.beat_length("triplet_eighth") == Fraction(1, 3)
	assert tinydrummer.durations.beat_length("onetwentyeighth") == Fraction(1, 32)


def test_duration_table_has_every_variant () -> None:

	"""Eight base values times four modifiers."""

	assert len(tinydrummer.constants.durations.DURATIONS) == 32


def test_beat_length_is_repeatable () -> None:

	"""The same token always gives the same length."""

	for token in tinydrummer.constants.durations.DURATIONS:
		assert tinydrummer.durations.beat_length(token) == tinydrummer.durations.beat_length(token)


def test_aliases () -> None:

	"""Hyphenated names and classic short tokens are accepted."""

	assert tinydrummer.durations.beat_length("dotted-eighth") == Fraction(3, 4)
	assert tinydrummer.durations.beat_length("Triplet Sixteenth") == Fraction(1, 6)
	assert tinydrummer.durations.beat_length("qn") == 1
	assert tinydrummer.durations.beat_length("den") == Fraction(3, 4)
	assert tinydrummer.durations.beat_length("tsn") == Fraction(1, 6)
	assert tinydrummer.durations.beat_length("ddhn") == Fraction(7, 2)
	assert tinydrummer.durations.beat_length("zn") == Fraction(1, 32)

	assert tinydrummer.durations.normalize("yn") == "sixtyfourth"


def test_raw_tick_durations () -> None:

	"""d<ticks> tokens divide by 96 ticks per quarter note."""

	assert tinydrummer.durations.beat_length("d96") == 1
	assert tinydrummer.durations.beat_length("d48") == Fraction(1, 2)
	assert tinydrummer.durations.beat_length("d90") == Fraction(15, 16)
	assert tinydrummer.durations.raw_ticks("d90") == 90
	assert tinydrummer.durations.raw_ticks("quarter") is None
	assert tinydrummer.durations.ticks_token(90) == "d90"


def test_ticks_token_rejects_non_positive () -> None:

	"""A tick duration must be at least one tick."""

	with pytest.raises(ValueError):
		tinydrummer.durations.ticks_token(0)


@pytest.mark.parametrize("token", ["crotchet", "", "d0", "dx", None, 4])
def test_unknown_durations_raise (token: object) -> None:

	"""Anything else is an UnknownDurationError carrying the token."""

	with pytest.raises(tinydrummer.errors.UnknownDurationError) as info:
		tinydrummer.durations.beat_length(token)

	assert info.value.token == token
	assert not tinydrummer.durations.is_duration(token)


def test_ticks_for_flam () -> None:

	"""A quarter minus a sixty-fourth grace note leaves 90 ticks."""

	assert tinydrummer.durations.ticks_for("quarter", "sixtyfourth") == 90
	assert tinydrummer.durations.ticks_for("triplet_eighth", "sixtyfourth") == 26


def test_ticks_round_half_away_from_zero () -> None:

	"""Half ticks round up, not to even."""

	assert tinydrummer.durations.to_ticks("triplet_sixtyfourth") == 4
	assert tinydrummer.durations.beats_to_ticks(Fraction(5, 192)) == 3
	assert tinydrummer.durations.beats_to_ticks(Fraction(-5, 192)) == -3


def test_steps_in () -> None:

	"""Number of strokes of one duration in another."""

	assert tinydrummer.durations.steps_in("half", "sixteenth") == 8
	assert tinydrummer.durations.steps_in("quarter", "triplet_eighth") == 3
	assert tinydrummer.durations.steps_in("eighth", "thirtysecond") == 4


def test_token_for_beats () -> None:

	"""The reverse lookup finds names by exact length only."""

	assert tinydrummer.durations.token_for_beats(1) == "quarter"
	assert tinydrummer.durations.token_for_beats(Fraction(1, 3)) == "triplet_eighth"
	assert tinydrummer.durations.token_for_beats(Fraction(4, 3)) == "triplet_half"
	assert tinydrummer.durations.token_for_beats(Fraction(2, 5)) is None
	assert tinydrummer.durations.token_for_beats(Fraction(2, 5), default="quarter") == "quarter"
