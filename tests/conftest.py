import typing

import pytest

import tinydrummer.drummer
import tinydrummer.timeline


class RecordingSink:

	"""Score sink that keeps every call for inspection."""

	def __init__ (self) -> None:

		"""Start with no recorded calls."""

		self.calls: typing.List[typing.Tuple[typing.Any, ...]] = []
		self.written: typing.List[str] = []

	def append_note (self, start_ticks: int, duration_ticks: int, instruments: typing.Sequence[int], velocity: int, channel: int) -> None:

		"""Record a note."""

		self.calls.append(("note", start_ticks, duration_ticks, tuple(instruments), velocity, channel))

	def append_rest (self, start_ticks: int, duration_ticks: int) -> None:

		"""Record a rest."""

		self.calls.append(("rest", start_ticks, duration_ticks))

	def set_time_signature (self, start_ticks: int, numerator: int, denominator: int) -> None:

		"""Record a time signature."""

		self.calls.append(("time_signature", start_ticks, numerator, denominator))

	def set_tempo (self, start_ticks: int, microseconds_per_quarter: int) -> None:

		"""Record a tempo."""

		self.calls.append(("tempo", start_ticks, microseconds_per_quarter))

	def set_control (self, start_ticks: int, channel: int, control: int, value: int) -> None:

		"""Record a control change."""

		self.calls.append(("control", start_ticks, channel, control, value))

	def write_to_file (self, path: str) -> None:

		"""Remember the path instead of writing."""

		self.written.append(path)

	def of_kind (self, kind: str) -> typing.List[typing.Tuple[typing.Any, ...]]:

		"""Return the recorded calls of one kind."""

		return [call for call in self.calls if call[0] == kind]


@pytest.fixture
def sink () -> RecordingSink:

	"""A fresh recording sink."""

	return RecordingSink()


@pytest.fixture
def timeline () -> tinydrummer.timeline.Timeline:

	"""An empty timeline with the default channel and volume."""

	return tinydrummer.timeline.Timeline()


@pytest.fixture
def drummer (tmp_path: typing.Any) -> tinydrummer.drummer.Drummer:

	"""A default drummer that writes into the test's temporary directory."""

	return tinydrummer.drummer.Drummer(file=str(tmp_path / "drums.mid"))


