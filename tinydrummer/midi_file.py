import itertools
import logging
import typing

import mido

import tinydrummer.constants


logger = logging.getLogger(__name__)

# Sort order for messages sharing a tick: settings first, then releases, then strikes.
_PRIORITY_META = 0
_PRIORITY_NOTE_OFF = 1
_PRIORITY_OTHER = 2
_PRIORITY_NOTE_ON = 3

MidiMessage = typing.Union[mido.Message, mido.MetaMessage]


class MidiFileSink:

	"""
	Collects a rendered timeline as MIDI messages and writes a Standard MIDI File.

	Messages are stored with absolute tick positions and sorted when the
	file is built, which is what merges simultaneous voices into one track.
	"""

	def __init__ (self, ticks_per_beat: int = tinydrummer.constants.TICKS_PER_QUARTER) -> None:

		"""
		Initialize an empty sink at the given resolution.
		"""

		if ticks_per_beat <= 0:
			raise ValueError("Ticks per beat must be positive")

		self.ticks_per_beat = ticks_per_beat
		self.messages: typing.List[typing.Tuple[int, int, int, MidiMessage]] = []
		self.rest_ticks = 0

		self._order = itertools.count()

	def _add (self, tick: int, priority: int, message: MidiMessage) -> None:

		if tick < 0:
			raise ValueError(f"Tick position cannot be negative, got {tick}")

		self.messages.append((tick, priority, next(self._order), message))

	def append_note (self, start_ticks: int, duration_ticks: int, instruments: typing.Sequence[int], velocity: int, channel: int) -> None:

		"""
		Add note on/off pairs for every instrument of a note.
		"""

		# Velocity 0 is a note-off in MIDI, so muted notes are dropped.
		if velocity == 0:
			return

		for instrument in instruments:
			self._add(start_ticks, _PRIORITY_NOTE_ON, mido.Message('note_on', channel=channel, note=instrument, velocity=velocity))
			self._add(start_ticks + duration_ticks, _PRIORITY_NOTE_OFF, mido.Message('note_off', channel=channel, note=instrument, velocity=0))

	def append_rest (self, start_ticks: int, duration_ticks: int) -> None:

		"""
		Rests carry no message; the gap is implied by the next event's time.
		"""

		self.rest_ticks += duration_ticks

	def set_time_signature (self, start_ticks: int, numerator: int, denominator: int) -> None:

		self._add(start_ticks, _PRIORITY_META, mido.MetaMessage('time_signature', numerator=numerator, denominator=denominator))

	def set_tempo (self, start_ticks: int, microseconds_per_quarter: int) -> None:

		self._add(start_ticks, _PRIORITY_META, mido.MetaMessage('set_tempo', tempo=microseconds_per_quarter))

	def set_control (self, start_ticks: int, channel: int, control: int, value: int) -> None:

		self._add(start_ticks, _PRIORITY_OTHER, mido.Message('control_change', channel=channel, control=control, value=value))

	def build (self) -> mido.MidiFile:

		"""
		Build a single-track (type 0) MIDI file from the collected messages.
		"""

		mid = mido.MidiFile(type=0, ticks_per_beat=self.ticks_per_beat)
		track = mido.MidiTrack()
		mid.tracks.append(track)

		last_tick = 0

		for tick, _, _, message in sorted(self.messages, key=lambda item: item[:3]):
			track.append(message.copy(time=tick - last_tick))
			last_tick = tick

		track.append(mido.MetaMessage('end_of_track', time=0))

		return mid

	def write_to_file (self, path: str) -> None:

		"""
		Write the MIDI file to *path*. OSError propagates to the caller.
		"""

		mid = self.build()

		logger.info(f"Saving MIDI file ({len(self.messages)} messages) to {path}...")
		mid.save(path)
		logger.info(f"Saved {path}")
