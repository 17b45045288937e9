import contextlib
import dataclasses
import fractions
import logging
import typing

import tinydrummer.constants
import tinydrummer.constants.velocity
import tinydrummer.durations


logger = logging.getLogger(__name__)

Fraction = fractions.Fraction


@dataclasses.dataclass(frozen=True)
class NoteEvent:

	"""
	One or more instruments struck together for a duration.
	"""

	start: Fraction
	duration: str
	beats: Fraction
	instruments: typing.Tuple[int, ...]
	velocity: int
	channel: int


@dataclasses.dataclass(frozen=True)
class RestEvent:

	"""
	Silence for a duration.
	"""

	start: Fraction
	duration: str
	beats: Fraction


@dataclasses.dataclass(frozen=True)
class TimeSignatureEvent:

	"""
	A time signature change at a beat position.
	"""

	start: Fraction
	numerator: int
	denominator: int


@dataclasses.dataclass(frozen=True)
class TempoEvent:

	"""
	A tempo change at a beat position.
	"""

	start: Fraction
	microseconds_per_quarter: int


@dataclasses.dataclass(frozen=True)
class ControlEvent:

	"""
	A MIDI control change (reverb, volume ...) at a beat position.
	"""

	start: Fraction
	channel: int
	control: int
	value: int


Event = typing.Union[NoteEvent, RestEvent, TimeSignatureEvent, TempoEvent, ControlEvent]

Voice = typing.Callable[[], typing.Any]


@typing.runtime_checkable
class ScoreSink (typing.Protocol):

	"""
	Receives a rendered timeline. Every call carries its absolute start tick,
	so voices written one after another can be merged by time.
	"""

	def append_note (self, start_ticks: int, duration_ticks: int, instruments: typing.Sequence[int], velocity: int, channel: int) -> None:
		...

	def append_rest (self, start_ticks: int, duration_ticks: int) -> None:
		...

	def set_time_signature (self, start_ticks: int, numerator: int, denominator: int) -> None:
		...

	def set_tempo (self, start_ticks: int, microseconds_per_quarter: int) -> None:
		...

	def set_control (self, start_ticks: int, channel: int, control: int, value: int) -> None:
		...

	def write_to_file (self, path: str) -> None:
		...


def _check_midi_value (name: str, value: int) -> None:

	if not tinydrummer.constants.velocity.MIN_VELOCITY <= value <= tinydrummer.constants.velocity.MAX_VELOCITY:
		raise ValueError(f"{name} must be in 0-127, got {value}")


class Timeline:

	"""
	The score being composed: an append-only list of events plus a beat counter.

	``counter`` is the number of beats of notes and rests emitted so far. It
	only ever grows, and it is shared by every voice of a :meth:`sync`.

	``position`` is where the next event starts. It normally equals the
	counter minus any time spent in parallel voices: :meth:`sync` rewinds it
	to the same start for each voice, then leaves it at the end of the
	longest one.
	"""

	def __init__ (
		self,
		channel: int = tinydrummer.constants.DRUM_CHANNEL,
		volume: int = tinydrummer.constants.velocity.DEFAULT_VOLUME,
		beats: int = 4,
		divisions: int = 4
	) -> None:

		"""
		Initialize an empty timeline with the ambient channel and volume.
		"""

		_check_midi_value("Volume", volume)

		self.events: typing.List[Event] = []
		self.counter = Fraction(0)
		self.position = Fraction(0)
		self.channel = channel
		self.volume = volume
		self.beats = beats
		self.divisions = divisions

		self._sync_spans: typing.List[typing.List[Fraction]] = []


	# ─── Notes and rests ─────────────────────────────────────────────

	def emit_note (self, duration: str, *instruments: int, velocity: typing.Optional[int] = None) -> NoteEvent:

		"""
		Append a note for one or more instruments and advance the counter.

		The ambient volume is used unless *velocity* is given.
		"""

		beats = tinydrummer.durations.beat_length(duration)

		if not instruments:
			raise ValueError("A note needs at least one instrument")

		if velocity is None:
			velocity = self.volume

		_check_midi_value("Velocity", velocity)

		event = NoteEvent(
			start = self.position,
			duration = duration,
			beats = beats,
			instruments = tuple(instruments),
			velocity = velocity,
			channel = self.channel
		)

		self.events.append(event)
		self._advance(beats)

		return event

	def emit_rest (self, duration: str) -> RestEvent:

		"""
		Append a rest and advance the counter.
		"""

		beats = tinydrummer.durations.beat_length(duration)

		event = RestEvent(start=self.position, duration=duration, beats=beats)

		self.events.append(event)
		self._advance(beats)

		return event

	@contextlib.contextmanager
	def accent (self, velocity: int) -> typing.Iterator[None]:

		"""Temporarily change the ambient volume.

		The previous volume is restored when the block exits, even if
		emitting inside it fails.

		Example:
			```python
			with timeline.accent(127):
				timeline.emit_note("sixteenth", snare)
			```
		"""

		_check_midi_value("Accent", velocity)

		resume = self.volume
		self.volume = velocity

		try:
			yield
		finally:
			self.volume = resume

	def emit_accented (self, velocity: int, duration: str, *instruments: int) -> NoteEvent:

		"""
		Append a note played at *velocity* instead of the ambient volume.
		"""

		with self.accent(velocity):
			return self.emit_note(duration, *instruments)

	def _advance (self, beats: Fraction) -> None:

		self.counter += beats
		self.position += beats


	# ─── Score settings ──────────────────────────────────────────────

	def set_time_signature (self, numerator: int, denominator: int, reset: bool = True) -> TimeSignatureEvent:

		"""
		Record a time signature change at the current position.

		Unless *reset* is false, ``beats`` and ``divisions`` follow the new
		signature. This can be called at any point, not just at the start.
		"""

		if numerator <= 0:
			raise ValueError(f"Time signature numerator must be positive, got {numerator}")

		if denominator <= 0 or denominator & (denominator - 1):
			raise ValueError(f"Time signature denominator must be a power of two, got {denominator}")

		if reset:
			self.beats = numerator
			self.divisions = denominator

		event = TimeSignatureEvent(start=self.position, numerator=numerator, denominator=denominator)
		self.events.append(event)

		return event

	def set_tempo (self, bpm: float) -> TempoEvent:

		"""
		Record a tempo change at the current position.
		"""

		if bpm <= 0:
			raise ValueError("BPM must be positive")

		event = TempoEvent(start=self.position, microseconds_per_quarter=int(60_000_000 / bpm))
		self.events.append(event)

		return event

	def set_control (self, control: int, value: int, channel: typing.Optional[int] = None) -> ControlEvent:

		"""
		Record a control change on *channel* (the ambient channel by default).
		"""

		_check_midi_value("Controller number", control)
		_check_midi_value("Controller value", value)

		event = ControlEvent(
			start = self.position,
			channel = self.channel if channel is None else channel,
			control = control,
			value = value
		)
		self.events.append(event)

		return event


	# ─── Simultaneous voices ─────────────────────────────────────────

	def sync (self, *voices: Voice) -> Fraction:

		"""Run *voices* as simultaneous parts starting at the same position.

		Each voice runs to completion in turn; its events start at the
		position the sync began at. Afterwards the position is the end of the
		longest voice. The beat counter is not rewound, so it reflects every
		voice's notes. Returns the span of the longest voice in beats.

		Example:
			```python
			timeline.sync(
				lambda: timeline.emit_note("half", kick),
				lambda: [timeline.emit_note("quarter", closed_hh) for _ in range(2)],
			)
			```
		"""

		start = self.position
		spans: typing.List[Fraction] = []
		self._sync_spans.append(spans)

		try:
			for voice in voices:
				self.position = start
				voice()
				spans.append(self.position - start)
		finally:
			self._sync_spans.pop()
			self.position = start + max(spans, default=Fraction(0))

		logger.debug(f"Synced {len(voices)} voices from beat {start}, spans {spans}")

		return max(spans, default=Fraction(0))

	def synced_span (self) -> typing.Optional[Fraction]:

		"""
		Inside a sync, the span of the longest voice finished so far; otherwise None.
		"""

		if not self._sync_spans or not self._sync_spans[-1]:
			return None

		return max(self._sync_spans[-1])


	# ─── Queries and rendering ───────────────────────────────────────

	@property
	def notes (self) -> typing.List[NoteEvent]:

		"""Every note event, in emission order."""

		return [event for event in self.events if isinstance(event, NoteEvent)]

	@property
	def rests (self) -> typing.List[RestEvent]:

		"""Every rest event, in emission order."""

		return [event for event in self.events if isinstance(event, RestEvent)]

	@property
	def end (self) -> Fraction:

		"""The latest beat reached by any note or rest."""

		return max(
			(event.start + event.beats for event in self.events if isinstance(event, (NoteEvent, RestEvent))),
			default = Fraction(0)
		)

	def render (self, sink: ScoreSink) -> None:

		"""
		Replay every event into *sink* with absolute tick positions.
		"""

		for event in self.events:

			start_ticks = tinydrummer.durations.beats_to_ticks(event.start)

			if isinstance(event, NoteEvent):
				# Tick lengths are taken end-minus-start so rounding never drifts.
				end_ticks = tinydrummer.durations.beats_to_ticks(event.start + event.beats)
				sink.append_note(start_ticks, end_ticks - start_ticks, event.instruments, event.velocity, event.channel)

			elif isinstance(event, RestEvent):
				end_ticks = tinydrummer.durations.beats_to_ticks(event.start + event.beats)
				sink.append_rest(start_ticks, end_ticks - start_ticks)

			elif isinstance(event, TimeSignatureEvent):
				sink.set_time_signature(start_ticks, event.numerator, event.denominator)

			elif isinstance(event, TempoEvent):
				sink.set_tempo(start_ticks, event.microseconds_per_quarter)

			elif isinstance(event, ControlEvent):
				sink.set_control(start_ticks, event.channel, event.control, event.value)
