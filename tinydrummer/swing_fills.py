"""A library of short jazz and swing fills.

Each fill is stored as data: a sequence of steps over three roles, the
``kick``, the ``snare`` and a ``cymbal`` (the closed hi-hat unless another
cymbal is given). Pick one at random and play it at the end of a phrase::

    fills = SwingFills(rng=random.Random(7))

    for beat in range(d.beats * d.bars):
        remaining = d.beats * d.bars - beat
        fill = fills.get_fill(d, d.ride2)
        if remaining == fill.span:
            fill.play()
            break
        d.note("quarter", d.open_hh, d.kick if beat % 2 else d.snare)
"""

from __future__ import annotations

import dataclasses
import fractions
import random
import typing

import tinydrummer.durations
import tinydrummer.sequence_utils

if typing.TYPE_CHECKING:
	import tinydrummer.drummer


KICK = "kick"
SNARE = "snare"
CYMBAL = "cymbal"

NOTE = "note"
REST = "rest"
FLAM = "flam"


@dataclasses.dataclass(frozen=True)
class FillStep:

	"""
	One stroke of a fill: a note over some roles, a rest, or a snare flam.
	"""

	kind: str
	duration: str
	voices: typing.Tuple[str, ...] = ()
	velocity: typing.Optional[int] = None


def _note (duration: str, *voices: str, velocity: typing.Optional[int] = None) -> FillStep:
	return FillStep(NOTE, duration, voices, velocity)


def _rest (duration: str) -> FillStep:
	return FillStep(REST, duration)


def _flam (duration: str) -> FillStep:
	return FillStep(FLAM, duration, (SNARE,))


@dataclasses.dataclass(frozen=True)
class SwingFill:

	"""
	A numbered fill and its steps.
	"""

	number: int
	steps: typing.Tuple[FillStep, ...]

	@property
	def span (self) -> fractions.Fraction:

		"""Length of the fill in beats."""

		return sum((tinydrummer.durations.beat_length(step.duration) for step in self.steps), fractions.Fraction(0))

	def play (self, drummer: tinydrummer.drummer.Drummer, cymbal: typing.Optional[int] = None) -> None:

		"""
		Play the fill on *drummer*, using *cymbal* for the cymbal role.
		"""

		roles = {
			KICK: drummer.kick,
			SNARE: drummer.snare,
			CYMBAL: drummer.closed_hh if cymbal is None else cymbal,
		}

		for step in self.steps:

			if step.kind == REST:
				drummer.rest(step.duration)

			elif step.kind == FLAM:
				drummer.flam(step.duration, grace=drummer.snare)

			else:
				drummer.note(step.duration, *(roles[voice] for voice in step.voices), velocity=step.velocity)


@dataclasses.dataclass
class BoundSwingFill:

	"""
	A fill chosen for a particular drummer and cymbal.
	"""

	fill: SwingFill
	drummer: tinydrummer.drummer.Drummer
	cymbal: typing.Optional[int] = None

	@property
	def span (self) -> fractions.Fraction:
		return self.fill.span

	def play (self) -> None:
		self.fill.play(self.drummer, self.cymbal)


# ─── The fills ───────────────────────────────────────────────────────

_DE = "dotted_eighth"
_E = "eighth"
_S = "sixteenth"
_Q = "quarter"
_TE = "triplet_eighth"
_TS = "triplet_sixteenth"

# Fill 9 swells from velocity 49 over nine triplets.
_SWELL_START = 49
_SWELL_STEP = tinydrummer.sequence_utils.round_half_away(fractions.Fraction(39, 9))


def _swell (n: int) -> int:
	return _SWELL_START + n * _SWELL_STEP


FILLS: typing.Tuple[SwingFill, ...] = (
	SwingFill(1, (
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_TE, KICK, SNARE),
		_note(_TE, SNARE),
		_note(_TE, SNARE),
	)),
	SwingFill(2, (
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_DE, SNARE),
		_note(_S, KICK, CYMBAL),
	)),
	SwingFill(3, (
		_note(_E, KICK, CYMBAL),
		_note(_TS, SNARE),
		_note(_TS, SNARE),
		_note(_TS, SNARE),
		_note(_DE, SNARE),
		_note(_S, KICK, CYMBAL),
	)),
	SwingFill(4, (
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_TE, KICK, SNARE),
		_note(_TE, SNARE),
		_note(_TE, SNARE),
		_note(_TE, KICK, SNARE),
		_note(_TE, SNARE),
		_note(_TE, SNARE),
		_note(_TE, KICK, SNARE),
		_note(_TE, SNARE),
		_note(_TE, SNARE),
	)),
	SwingFill(5, (
		_note(_DE, KICK, SNARE, CYMBAL),
		_note(_S, CYMBAL),
		_note(_E, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_S, SNARE),
		_note(_DE, SNARE),
		_note(_S, KICK, CYMBAL),
	)),
	SwingFill(6, (
		_note(_DE, KICK, SNARE, CYMBAL),
		_note(_S, CYMBAL),
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_DE, SNARE),
		_note(_S, KICK),
	)),
	SwingFill(7, (
		_note(_DE, SNARE, CYMBAL),
		_note(_S, SNARE, CYMBAL),
		_note(_Q, SNARE, CYMBAL),
		_note(_DE, KICK, CYMBAL),
		_note(_S, KICK),
	)),
	SwingFill(8, (
		_note(_DE, SNARE, CYMBAL),
		_note(_S, KICK, CYMBAL),
		_note(_Q, KICK, CYMBAL),
		_note(_DE, SNARE, CYMBAL),
		_note(_S, KICK, CYMBAL),
	)),
	SwingFill(9, (
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_TE, KICK, SNARE, velocity=_swell(0)),
		_note(_TE, SNARE, velocity=_swell(1)),
		_note(_TE, SNARE, velocity=_swell(2)),
		_note(_TE, KICK, SNARE, velocity=_swell(3)),
		_note(_TE, SNARE, velocity=_swell(4)),
		_note(_TE, SNARE, velocity=_swell(5)),
		_note(_TE, KICK, SNARE, velocity=_swell(6)),
		_note(_TE, SNARE, velocity=_swell(7)),
		_note(_TE, SNARE, velocity=_swell(8)),
	)),
	SwingFill(10, (
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_DE, SNARE, CYMBAL),
		_note(_S, KICK, CYMBAL),
		_note(_DE, SNARE, CYMBAL),
		_note(_S, SNARE),
		_note(_DE, KICK, CYMBAL),
		_note(_S, CYMBAL),
	)),
	SwingFill(11, (
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_DE, SNARE, CYMBAL),
		_note(_S, KICK, CYMBAL),
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_DE, SNARE, CYMBAL),
		_note(_S, KICK, CYMBAL),
	)),
	SwingFill(12, (
		_note(_DE, SNARE, CYMBAL),
		_note(_S, KICK),
		_note(_DE, CYMBAL),
		_note(_S, SNARE, CYMBAL),
		_note(_Q, KICK, CYMBAL),
		_note(_DE, KICK, CYMBAL),
		_note(_S, CYMBAL),
	)),
	SwingFill(13, (
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_TE, SNARE),
		_note(_TE, SNARE),
		_note(_TE, SNARE),
		_note(_DE, SNARE),
		_note(_S, KICK),
		_note(_Q, KICK),
	)),
	SwingFill(14, (
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_DE, CYMBAL),
		_note(_S, SNARE, CYMBAL),
		_note(_DE, CYMBAL),
		_note(_S, KICK),
		_note(_DE, CYMBAL),
		_note(_S, KICK),
	)),
	SwingFill(15, (
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE, CYMBAL),
		_note(_Q, KICK, CYMBAL),
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE, CYMBAL),
	)),
	SwingFill(16, (
		_note(_TE, KICK, SNARE, CYMBAL),
		_rest(_TE),
		_note(_TE, CYMBAL),
		_note(_TE, KICK, CYMBAL),
		_rest(_TE),
		_note(_TE, SNARE),
		_note(_TE, KICK, CYMBAL),
		_note(_TE, SNARE),
		_note(_TE, SNARE, CYMBAL),
	)),
	SwingFill(17, (
		_note(_DE, KICK, SNARE, CYMBAL),
		_note(_S, CYMBAL),
		_note(_Q, KICK, CYMBAL),
		_note(_TS, SNARE),
		_note(_TS, SNARE),
		_note(_TS, SNARE),
		_note(_DE, SNARE),
		_note(_S, KICK),
	)),
	SwingFill(18, (
		_note(_TE, KICK, CYMBAL),
		_note(_TE, SNARE),
		_rest(_TE),
		_note(_TE, SNARE, CYMBAL),
		_rest(_TE),
		_note(_TE, SNARE, CYMBAL),
		_note(_TE, SNARE, CYMBAL),
		_note(_TE, KICK),
		_rest(_TE),
		_note(_TE, KICK, CYMBAL),
		_rest(_TE),
		_note(_TE, KICK, CYMBAL),
	)),
	SwingFill(19, (
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_DE, KICK, CYMBAL),
		_note(_S, CYMBAL),
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE),
		_note(_DE, KICK, CYMBAL),
		_note(_S, SNARE, CYMBAL),
	)),
	SwingFill(20, (
		_flam(_TE),
		_note(_TE, KICK),
		_note(_TE, KICK),
		_flam(_TE),
		_note(_TE, KICK),
		_note(_TE, KICK),
	)),
	SwingFill(21, (
		_note(_TE, KICK),
		_flam(_TE),
		_note(_TE, KICK),
		_flam(_TE),
		_note(_TE, KICK),
		_flam(_TE),
		_note(_TE, KICK),
		_flam(_TE),
		_note(_TE, KICK),
		_flam(_TE),
		_note(_TE, KICK),
		_note(_TE, KICK),
	)),
)


class SwingFills:

	"""
	Chooses fills at random from :data:`FILLS`.
	"""

	def __init__ (self, rng: typing.Optional[random.Random] = None, fills: typing.Sequence[SwingFill] = FILLS) -> None:

		if not fills:
			raise ValueError("SwingFills needs at least one fill")

		self.rng = rng or random.Random()
		self.fills = tuple(fills)

	def get_fill (self, drummer: tinydrummer.drummer.Drummer, cymbal: typing.Optional[int] = None) -> BoundSwingFill:

		"""Return a random fill ready to play on *drummer*.

		Parameters:
			drummer: The drummer that will play the fill.
			cymbal: Note number for the cymbal role (closed hi-hat if omitted).
		"""

		return BoundSwingFill(self.rng.choice(self.fills), drummer, cymbal)

	def get (self, number: int) -> SwingFill:

		"""Look up a fill by its number (1-based)."""

		for fill in self.fills:
			if fill.number == number:
				return fill

		raise ValueError(f"No fill numbered {number}")
