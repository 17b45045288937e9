import fractions
import logging
import re
import typing

import tinydrummer.beat_strings
import tinydrummer.config
import tinydrummer.constants
import tinydrummer.constants.durations
import tinydrummer.constants.gm_drums
import tinydrummer.constants.velocity
import tinydrummer.durations
import tinydrummer.envelope
import tinydrummer.fills
import tinydrummer.midi_file
import tinydrummer.sequence_utils
import tinydrummer.timeline


logger = logging.getLogger(__name__)

_SIGNATURE = re.compile(r"^\s*(\d+)\s*/\s*(\d+)\s*$")

# A grace note written as this plays a rest instead.
GRACE_REST = "r"

FillArgument = typing.Union[
	tinydrummer.fills.Fill,
	typing.Mapping[typing.Any, typing.Any],
	typing.Callable[["Drummer"], typing.Any],
	None,
]


def parse_signature (signature: str) -> typing.Tuple[int, int]:

	"""Split a ``"5/4"`` style time signature into ``(5, 4)``."""

	match = _SIGNATURE.match(signature) if isinstance(signature, str) else None

	if match is None:
		raise ValueError(f"Time signature must look like '4/4', got {signature!r}")

	return int(match.group(1)), int(match.group(2))


class Drummer:

	"""
	A drummer writing a MIDI drum score.

	The drummer owns a :class:`tinydrummer.timeline.Timeline` and adds the
	conveniences a drum part needs: a named kit, count-ins and metronome
	grooves, flams and rolls, beat-string patterns, fills, and writing the
	result to a MIDI file.

	Every kit entry and every duration name is available as an attribute,
	so ``d.kick`` is a note number and ``d.dotted_eighth`` a duration token.

	Typical workflow:
	1. Create a ``Drummer`` with a tempo and time signature.
	2. Add notes, metronome bars, patterns and fills.
	3. Call ``write()``.
	"""

	def __init__ (
		self,
		file: str = tinydrummer.constants.DEFAULT_FILE,
		bpm: float = tinydrummer.constants.DEFAULT_BPM,
		volume: int = tinydrummer.constants.velocity.DEFAULT_VOLUME,
		signature: str = tinydrummer.constants.DEFAULT_SIGNATURE,
		bars: int = tinydrummer.constants.DEFAULT_BARS,
		reverb: int = tinydrummer.constants.DEFAULT_REVERB,
		channel: int = tinydrummer.constants.DRUM_CHANNEL,
		beats: typing.Optional[int] = None,
		kit: typing.Optional[typing.Mapping[str, typing.Union[int, str]]] = None
	) -> None:

		"""
		Initialize a drummer and record the tempo, reverb and time signature.

		Parameters:
			file: Default MIDI file written by ``write()``.
			bpm: Tempo in beats per minute (default 120).
			volume: Ambient note velocity (default 100).
			signature: Time signature (default ``"4/4"``).
			bars: Default bar count for count-ins and metronomes.
			reverb: Reverb send, written as controller 91 (default 15).
			channel: MIDI channel, 0-indexed (default 9, GM percussion).
			beats: Beats per bar. When given it is kept instead of being
				taken from *signature*.
			kit: Overrides for the General MIDI kit. Values are note numbers
				or names of other kit entries.

		Example:
			```python
			d = tinydrummer.Drummer(bpm=100, signature="5/4", kit={"kick": "electric_bass"})
			```
		"""

		if bars <= 0:
			raise ValueError(f"Bars must be positive, got {bars}")

		self.file = file
		self.bpm = bpm
		self.bars = bars
		self.reverb = reverb
		self.signature = signature
		self.kit = self._build_kit(kit)

		self.timeline = tinydrummer.timeline.Timeline(
			channel = channel,
			volume = volume,
			beats = beats if beats is not None else 4
		)

		self.timeline.set_tempo(bpm)
		self.timeline.set_control(tinydrummer.constants.CONTROL_REVERB, reverb)
		self.set_time_sig(signature, reset=beats is None)

	@classmethod
	def from_config (cls, config: typing.Union[tinydrummer.config.DrummerConfig, typing.Mapping[str, typing.Any]]) -> "Drummer":

		"""
		Build a drummer from a :class:`DrummerConfig` or a plain settings mapping.
		"""

		if not isinstance(config, tinydrummer.config.DrummerConfig):
			config = tinydrummer.config.DrummerConfig.from_dict(config)

		return cls(**config.to_kwargs())

	@staticmethod
	def _build_kit (overrides: typing.Optional[typing.Mapping[str, typing.Union[int, str]]]) -> typing.Dict[str, int]:

		kit = dict(tinydrummer.constants.gm_drums.GM_KIT)

		for name, value in (overrides or {}).items():

			if isinstance(value, str):
				if value not in tinydrummer.constants.gm_drums.GM_KIT:
					raise ValueError(f"Unknown drum {value!r} for kit entry {name!r}")
				value = tinydrummer.constants.gm_drums.GM_KIT[value]

			if not 0 <= value <= 127:
				raise ValueError(f"Kit entry {name!r} must be a note number in 0-127, got {value}")

			kit[name] = value

		return kit

	def __getattr__ (self, name: str) -> typing.Any:

		# Only called for names not found normally: kit entries, then durations.
		kit = self.__dict__.get("kit")

		if kit is not None and name in kit:
			return kit[name]

		if name in tinydrummer.constants.durations.DURATIONS or name in tinydrummer.constants.durations.SHORT_NAMES:
			return name

		raise AttributeError(f"{type(self).__name__!r} object has no attribute {name!r}")

	def instrument (self, name_or_number: typing.Union[int, str]) -> int:

		"""
		Resolve a kit name (``"snare"``) or note number to a note number.
		"""

		if isinstance(name_or_number, str):
			if name_or_number not in self.kit:
				raise ValueError(f"Unknown instrument {name_or_number!r}")
			return self.kit[name_or_number]

		return name_or_number


	# ─── Ambient state ───────────────────────────────────────────────

	@property
	def counter (self) -> fractions.Fraction:

		"""Beats of notes and rests added so far (a quarter note is 1)."""

		return self.timeline.counter

	@counter.setter
	def counter (self, value: tinydrummer.sequence_utils.Number) -> None:
		self.timeline.counter = fractions.Fraction(value)

	@property
	def beats (self) -> int:
		return self.timeline.beats

	@property
	def divisions (self) -> int:
		return self.timeline.divisions

	@property
	def volume (self) -> int:
		return self.timeline.volume

	@property
	def channel (self) -> int:
		return self.timeline.channel


	# ─── Notes ───────────────────────────────────────────────────────

	def note (self, duration: str, *instruments: int, velocity: typing.Optional[int] = None) -> tinydrummer.timeline.NoteEvent:

		"""
		Add a note for one or more instruments struck together.

		Example:
			```python
			d.note(d.quarter, d.closed_hh, d.kick)
			d.note("d90", d.snare)    # raw tick duration
			```
		"""

		return self.timeline.emit_note(duration, *instruments, velocity=velocity)

	def accent_note (self, accent: int, duration: str, *instruments: int) -> tinydrummer.timeline.NoteEvent:

		"""
		Add a note at the *accent* velocity, then return to the ambient volume.

		Use a low accent (< 50) for a ghost note.
		"""

		return self.timeline.emit_accented(accent, duration, *instruments)

	def rest (self, duration: str) -> tinydrummer.timeline.RestEvent:

		"""Add a rest."""

		return self.timeline.emit_rest(duration)

	def count_in (self, bars: typing.Optional[int] = None, patch: typing.Optional[int] = None, accent: typing.Optional[int] = None) -> None:

		"""
		Count in with quarter notes: an accented *accent* (closed hi-hat) on
		each downbeat and *patch* (pedal hi-hat) on the other beats.
		"""

		bars = bars or self.bars
		patch = self.pedal_hh if patch is None else patch
		accent = self.closed_hh if accent is None else accent

		for beat in range(self.beats * bars):
			if beat % self.beats == 0:
				self.accent_note(tinydrummer.constants.velocity.ACCENT_VELOCITY, self.quarter, accent)
			else:
				self.note(self.quarter, patch)


	# ─── Metronome grooves ───────────────────────────────────────────

	def metronome38 (self, bars: typing.Optional[int] = None) -> None:

		"""A steady 3/8 beat."""

		for _ in range(bars or self.bars):
			self.note(self.eighth, self.closed_hh, self.kick)
			self.note(self.eighth, self.closed_hh)
			self.note(self.eighth, self.closed_hh, self.snare)

	def metronome34 (self, bars: typing.Optional[int] = None) -> None:

		"""A steady 3/4 beat on the ride."""

		for _ in range(bars or self.bars):
			self.note(self.quarter, self.ride1, self.kick)
			self.note(self.quarter, self.ride1)
			self.note(self.quarter, self.ride1, self.snare)

	def metronome44 (self, bars: typing.Optional[int] = None, flag: bool = False) -> None:

		"""A steady 4/4 beat.

		Kick and snare alternate under the closed hi-hat, one per beat of
		every bar. With *flag*, every other kick is split into two eighth
		notes.
		"""

		kicks = 0

		for n in range(1, self.beats * (bars or self.bars) + 1):

			if n % 2 == 0:
				self.note(self.quarter, self.closed_hh, self.snare)
				continue

			if flag and kicks % 2:
				self.note(self.eighth, self.closed_hh, self.kick)
				self.note(self.eighth, self.kick)
			else:
				self.note(self.quarter, self.closed_hh, self.kick)

			kicks += 1

	def metronome44swing (self, bars: typing.Optional[int] = None) -> None:

		"""A steady 4/4 swing beat on the ride."""

		for _ in range(bars or self.bars):
			self.note(self.quarter, self.ride1, self.kick)
			self.note(self.triplet_eighth, self.ride1)
			self.rest(self.triplet_eighth)
			self.note(self.triplet_eighth, self.ride1, self.kick)
			self.note(self.quarter, self.ride1, self.snare)
			self.note(self.triplet_eighth, self.ride1, self.kick)
			self.rest(self.triplet_eighth)
			self.note(self.triplet_eighth, self.ride1)

	def metronome54 (self, bars: typing.Optional[int] = None) -> None:

		"""A 5/4 beat. Every second bar ends with an eighth-note kick pickup."""

		for n in range(1, (bars or self.bars) + 1):
			self.note(self.quarter, self.closed_hh, self.kick)
			self.note(self.quarter, self.closed_hh)
			self.note(self.quarter, self.closed_hh, self.snare)
			self.note(self.quarter, self.closed_hh)

			if n % 2:
				self.note(self.quarter, self.closed_hh)
			else:
				self.note(self.eighth, self.closed_hh)
				self.note(self.eighth, self.kick)

	def metronome58 (self, bars: typing.Optional[int] = None) -> None:

		"""A 5/8 beat."""

		for _ in range(bars or self.bars):
			self.note(self.eighth, self.closed_hh, self.kick)
			self.note(self.eighth, self.closed_hh)
			self.note(self.eighth, self.closed_hh, self.snare)
			self.note(self.eighth, self.closed_hh)
			self.note(self.eighth, self.closed_hh)

	def metronome68 (self, bars: typing.Optional[int] = None) -> None:

		"""A 6/8 beat."""

		for _ in range(bars or self.bars):
			self.note(self.eighth, self.closed_hh, self.kick)
			self.note(self.eighth, self.closed_hh)
			self.note(self.eighth, self.closed_hh)
			self.note(self.eighth, self.closed_hh, self.snare)
			self.note(self.eighth, self.closed_hh)
			self.note(self.eighth, self.closed_hh)

	def metronome74 (self, bars: typing.Optional[int] = None) -> None:

		"""A 7/4 beat."""

		for _ in range(bars or self.bars):
			self.note(self.quarter, self.closed_hh, self.kick)
			self.note(self.quarter, self.closed_hh)
			self.note(self.quarter, self.closed_hh, self.snare)
			self.note(self.eighth, self.closed_hh)
			self.note(self.eighth, self.kick)
			self.note(self.quarter, self.closed_hh, self.kick)
			self.note(self.quarter, self.closed_hh, self.snare)
			self.note(self.quarter, self.closed_hh)

	def metronome78 (self, bars: typing.Optional[int] = None) -> None:

		"""A 7/8 beat."""

		for _ in range(bars or self.bars):
			self.note(self.eighth, self.closed_hh, self.kick)
			self.note(self.eighth, self.closed_hh)
			self.note(self.eighth, self.closed_hh)
			self.note(self.eighth, self.closed_hh, self.kick)
			self.note(self.eighth, self.closed_hh, self.snare)
			self.note(self.eighth, self.closed_hh)
			self.note(self.eighth, self.closed_hh)


	# ─── Rudiments ───────────────────────────────────────────────────

	def flam (self, duration: str, grace: typing.Union[int, str, None] = None, patch: typing.Optional[int] = None, accent: typing.Optional[int] = None) -> None:

		"""Play a flam: a soft sixty-fourth grace note, then the main stroke.

		The main stroke lasts *duration* minus the grace note, as a raw tick
		duration, so the flam as a whole takes exactly *duration*.

		Parameters:
			duration: Total length of the flam.
			grace: Grace note instrument (snare by default), or ``"r"`` to
				rest instead of playing a grace note.
			patch: Main stroke instrument (snare by default).
			accent: Grace note velocity (half the ambient volume by default).
		"""

		grace = self.snare if grace is None else grace
		patch = self.snare if patch is None else patch

		if accent is None:
			accent = tinydrummer.sequence_utils.round_half_away(fractions.Fraction(self.volume, 2))

		main = tinydrummer.durations.ticks_token(
			tinydrummer.durations.ticks_for(duration, tinydrummer.constants.durations.SIXTYFOURTH_NAME)
		)

		if grace == GRACE_REST:
			self.rest(self.sixtyfourth)
		else:
			self.accent_note(accent, self.sixtyfourth, grace)

		self.note(main, patch)

	def roll (self, length: str, duration: str, patch: typing.Optional[int] = None) -> None:

		"""Roll on *patch* (snare by default) for *length* in *duration* strokes."""

		patch = self.snare if patch is None else patch

		for _ in range(tinydrummer.durations.steps_in(length, duration)):
			self.note(duration, patch)

	def crescendo_roll (self, span: typing.Sequence[typing.Any], length: str, duration: str, patch: typing.Optional[int] = None) -> typing.List[int]:

		"""Roll with the velocity moving from one level to another.

		Parameters:
			span: ``(start, end)`` or ``(start, end, curve)`` velocities. A
				true *curve* follows a Bezier curve instead of a straight line.
			length: Total length of the roll.
			duration: Length of each stroke.
			patch: Instrument (snare by default).

		Returns:
			The velocity of each stroke.

		Example:
			```python
			d.crescendo_roll([50, 127, True], d.half, d.sixteenth)
			```
		"""

		patch = self.snare if patch is None else patch

		start, end = span[0], span[1]
		curve = bool(span[2]) if len(span) > 2 else False

		steps = tinydrummer.durations.steps_in(length, duration)
		velocities = tinydrummer.envelope.envelope(start, end, steps, curve=curve)

		for velocity in velocities:
			self.accent_note(velocity, duration, patch)

		return velocities


	# ─── Patterns ────────────────────────────────────────────────────

	def pattern (
		self,
		patterns: typing.Sequence[str],
		instrument: typing.Optional[int] = None,
		duration: typing.Optional[str] = None,
		repeat: int = 1,
		negate: bool = False,
		vary: typing.Optional[tinydrummer.beat_strings.Variations] = None
	) -> fractions.Fraction:

		"""Play beat-strings on one instrument (the snare by default).

		See :func:`tinydrummer.beat_strings.render_pattern`. *vary* maps
		symbols to zero-argument callables.

		Example:
			```python
			d.pattern(["0101", "0101", "0110", "0110"], instrument=d.kick)
			```
		"""

		return tinydrummer.beat_strings.render_pattern(
			self.timeline,
			patterns,
			self.snare if instrument is None else instrument,
			duration = duration,
			repeat = repeat,
			negate = negate,
			variations = vary
		)

	def sync_patterns (self, patterns: typing.Mapping[int, typing.Union[str, typing.Sequence[str]]], duration: typing.Optional[str] = None) -> fractions.Fraction:

		"""Play several instruments' beat-strings at the same time.

		Example:
			```python
			for _ in range(d.bars):
				d.sync_patterns({d.open_hh: ["1111"], d.snare: ["0101"], d.kick: ["1010"]})
			```
		"""

		return tinydrummer.beat_strings.sync_patterns(self.timeline, _pattern_lists(patterns), duration=duration)

	def add_fill (self, fill: FillArgument, patterns: typing.Mapping[int, typing.Union[str, typing.Sequence[str]]]) -> typing.Dict[int, str]:

		"""Play a phrase with its ending replaced by a fill.

		Parameters:
			fill: A :class:`Fill`, a mapping of instrument -> beat-string
				with an optional ``"duration"`` key, a callable taking this
				drummer and returning either, or None for a three-note
				eighth-note snare fill.
			patterns: The phrase: instrument -> beat-strings.

		Returns:
			The spliced pattern played by each instrument.

		Example:
			```python
			d.add_fill(
				lambda d: {"duration": 16, d.open_hh: "00000000", d.snare: "11111111", d.kick: "00000000"},
				{d.open_hh: ["11111111"], d.snare: ["0101"], d.kick: ["1010"]},
			)
			```
		"""

		spliced = tinydrummer.fills.add_fill(self.timeline, _pattern_lists(patterns), self._resolve_fill(fill))

		return spliced.patterns

	def _resolve_fill (self, fill: FillArgument) -> tinydrummer.fills.Fill:

		if fill is None:
			return tinydrummer.fills.default_fill(self.kit)

		if callable(fill) and not isinstance(fill, tinydrummer.fills.Fill):
			fill = fill(self)

		if isinstance(fill, tinydrummer.fills.Fill):
			return fill

		fill = dict(fill)
		duration = fill.pop("duration", None) or 8

		return tinydrummer.fills.Fill(
			patterns = {self.instrument(instrument): pattern for instrument, pattern in fill.items()},
			duration = duration
		)

	def euclidean (self, pulses: int, steps: int) -> str:

		"""The Euclidean beat-string of *pulses* onsets over *steps* steps."""

		return tinydrummer.sequence_utils.euclid(pulses, steps)

	def combinatorial (
		self,
		instrument: typing.Optional[int] = None,
		beats: typing.Optional[int] = None,
		repeat: int = 1,
		negate: bool = False,
		duration: str = tinydrummer.constants.durations.QUARTER_NAME,
		vary: typing.Optional[tinydrummer.beat_strings.Variations] = None,
		patterns: typing.Optional[typing.Sequence[str]] = None,
		legacy_counter: bool = False
	) -> fractions.Fraction:

		"""Play every rhythm of one bar, in order (the snare by default).

		With the default ``beats`` of a 4/4 bar this is the sixteen patterns
		``0000`` to ``1111``. See
		:func:`tinydrummer.beat_strings.render_combinatorial`.

		Example:
			```python
			d.sync(
				lambda: d.combinatorial(d.snare),
				lambda: d.steady(d.kick),
			)
			```
		"""

		return tinydrummer.beat_strings.render_combinatorial(
			self.timeline,
			self.snare if instrument is None else instrument,
			beats = self.beats if beats is None else beats,
			repeat = repeat,
			negate = negate,
			duration = duration,
			variations = vary,
			patterns = patterns,
			legacy_counter = legacy_counter
		)

	def steady (self, instrument: typing.Optional[int] = None, duration: str = tinydrummer.constants.durations.QUARTER_NAME, beats: typing.Optional[tinydrummer.sequence_utils.Number] = None) -> int:

		"""Play *instrument* (closed hi-hat by default) steadily for *beats* beats.

		Without *beats*, a voice inside :meth:`sync` lasts as long as the
		longest voice before it; outside a sync it lasts as long as the beat
		counter. Returns the number of notes played.
		"""

		instrument = self.closed_hh if instrument is None else instrument

		if beats is None:
			beats = self.timeline.synced_span()

		if beats is None:
			beats = self.counter

		count = tinydrummer.sequence_utils.round_half_away(
			fractions.Fraction(beats) / tinydrummer.durations.beat_length(duration)
		)

		for _ in range(count):
			self.note(duration, instrument)

		return count

	def sync (self, *voices: tinydrummer.timeline.Voice) -> fractions.Fraction:

		"""Play each callable as a simultaneous part from the current position."""

		return self.timeline.sync(*voices)


	# ─── Score settings ──────────────────────────────────────────────

	def set_time_sig (self, signature: typing.Optional[str] = None, reset: bool = True) -> None:

		"""
		Add a time signature event and, unless *reset* is false, take the
		beats and divisions from it. Without *signature* the current one is
		written again.
		"""

		numerator, denominator = parse_signature(signature or self.signature)

		self.timeline.set_time_signature(numerator, denominator, reset=reset)

		if signature:
			self.signature = signature

	def set_bpm (self, bpm: float) -> None:

		"""Change the tempo from the current position on."""

		self.timeline.set_tempo(bpm)
		self.bpm = bpm

	def set_channel (self, channel: int = tinydrummer.constants.DRUM_CHANNEL) -> None:

		"""Use *channel* for the notes that follow (back to 9 by default)."""

		if not 0 <= channel <= 15:
			raise ValueError(f"MIDI channel must be in 0-15, got {channel}")

		self.timeline.channel = channel

	def set_volume (self, volume: int = 0) -> None:

		"""Set the ambient velocity (0-127). With no argument, mute."""

		if not tinydrummer.constants.velocity.MIN_VELOCITY <= volume <= tinydrummer.constants.velocity.MAX_VELOCITY:
			raise ValueError(f"Volume must be in 0-127, got {volume}")

		self.timeline.volume = volume


	# ─── Output ──────────────────────────────────────────────────────

	def render (self, sink: tinydrummer.timeline.ScoreSink) -> None:

		"""Replay the score into any score sink."""

		self.timeline.render(sink)

	def write (self, path: typing.Optional[str] = None) -> str:

		"""
		Write the score as a MIDI file to *path* (the ``file`` setting by
		default) and return the path written.
		"""

		path = path or self.file

		sink = tinydrummer.midi_file.MidiFileSink()
		self.timeline.render(sink)
		sink.write_to_file(path)

		return path


def _pattern_lists (patterns: typing.Mapping[int, typing.Union[str, typing.Sequence[str]]]) -> typing.Dict[int, typing.List[str]]:

	# A single beat-string is shorthand for a one-element list.
	return {
		instrument: [value] if isinstance(value, str) else list(value)
		for instrument, value in patterns.items()
	}
