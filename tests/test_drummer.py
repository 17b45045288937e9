import fractions
import pathlib

import mido
import pytest

import tinydrummer.config
import tinydrummer.constants.gm_drums as gm_drums
import tinydrummer.drummer
import tinydrummer.envelope
import tinydrummer.errors
import tinydrummer.fills
import tinydrummer.timeline


Drummer = tinydrummer.drummer.Drummer


def _instruments (drummer: Drummer) -> list:

	return [note.instruments for note in drummer.timeline.notes]


# ─── Construction ────────────────────────────────────────────────────────────


def test_defaults_record_settings (drummer: Drummer, sink) -> None:

	"""A new drummer writes tempo, reverb and time signature at the start."""

	drummer.render(sink)

	assert sink.calls == [
		("tempo", 0, 500000),
		("control", 0, 9, 91, 15),
		("time_signature", 0, 4, 4),
	]
	assert drummer.beats == 4
	assert drummer.divisions == 4
	assert drummer.counter == 0


def test_signature_sets_beats () -> None:

	"""The beats per bar come from the time signature."""

	drummer = Drummer(signature="5/4")

	assert drummer.beats == 5
	assert drummer.divisions == 4


def test_explicit_beats_are_kept () -> None:

	"""A beats argument wins over the signature's numerator."""

	drummer = Drummer(signature="4/4", beats=3)

	assert drummer.beats == 3
	assert isinstance(drummer.timeline.events[-1], tinydrummer.timeline.TimeSignatureEvent)


def test_kit_and_duration_attributes (drummer: Drummer) -> None:

	"""Kit names and durations read as attributes."""

	assert drummer.kick == gm_drums.ACOUSTIC_BASS
	assert drummer.snare == gm_drums.ACOUSTIC_SNARE
	assert drummer.closed_hh == gm_drums.CLOSED_HH
	assert drummer.dotted_eighth == "dotted_eighth"
	assert drummer.qn == "qn"

	with pytest.raises(AttributeError):
		drummer.cowbell_solo


def test_kit_overrides () -> None:

	"""Kit entries can be replaced by note numbers or by other kit names."""

	drummer = Drummer(kit={"kick": "electric_bass", "snare": 40, "tabla": 60})

	assert drummer.kick == gm_drums.ELECTRIC_BASS
	assert drummer.snare == gm_drums.ELECTRIC_SNARE
	assert drummer.tabla == 60
	assert drummer.instrument("tabla") == 60
	assert drummer.instrument(49) == 49


@pytest.mark.parametrize("kit", [{"kick": "gong"}, {"kick": 128}, {"kick": -1}])
def test_bad_kit (kit: dict) -> None:

	"""Unknown names and out-of-range numbers are rejected."""

	with pytest.raises(ValueError):
		Drummer(kit=kit)


def test_from_config () -> None:

	"""A drummer can be built from a settings mapping."""

	drummer = Drummer.from_config({"bpm": 90, "signature": "3/4", "kit": {"snare": "clap"}})

	assert drummer.bpm == 90
	assert drummer.beats == 3
	assert drummer.snare == gm_drums.CLAP


def test_from_config_object () -> None:

	"""DrummerConfig objects are used as they are."""

	config = tinydrummer.config.DrummerConfig(bars=2, volume=80)

	drummer = Drummer.from_config(config)

	assert drummer.bars == 2
	assert drummer.volume == 80


def test_unknown_instrument (drummer: Drummer) -> None:

	with pytest.raises(ValueError):
		drummer.instrument("theremin")


# ─── Notes and count-in ──────────────────────────────────────────────────────


def test_note_and_rest (drummer: Drummer) -> None:

	"""Notes and rests add their lengths to the counter."""

	drummer.note(drummer.quarter, drummer.closed_hh, drummer.kick)
	drummer.rest(drummer.eighth)
	drummer.accent_note(30, drummer.sixteenth, drummer.snare)

	assert drummer.counter == fractions.Fraction(7, 4)
	assert _instruments(drummer) == [(gm_drums.CLOSED_HH, gm_drums.ACOUSTIC_BASS), (gm_drums.ACOUSTIC_SNARE,)]
	assert drummer.timeline.notes[-1].velocity == 30
	assert drummer.volume == 100


def test_counter_can_be_reset (drummer: Drummer) -> None:

	drummer.note(drummer.whole, drummer.kick)
	drummer.counter = 0

	assert drummer.counter == 0


def test_count_in (drummer: Drummer) -> None:

	"""One bar: an accented closed hat, then three pedal hats."""

	drummer.count_in(1)

	notes = drummer.timeline.notes

	assert [note.instruments for note in notes] == [
		(gm_drums.CLOSED_HH,),
		(gm_drums.PEDAL_HH,),
		(gm_drums.PEDAL_HH,),
		(gm_drums.PEDAL_HH,),
	]
	assert [note.velocity for note in notes] == [127, 100, 100, 100]
	assert drummer.counter == 4


def test_count_in_follows_the_bar () -> None:

	"""The accent falls on every downbeat of the current signature."""

	drummer = Drummer(signature="3/4", bars=2)
	drummer.count_in()

	accented = [note.start for note in drummer.timeline.notes if note.velocity == 127]

	assert accented == [0, 3]
	assert drummer.counter == 6


# ─── Metronomes ──────────────────────────────────────────────────────────────


@pytest.mark.parametrize("method,beats_per_bar", [
	("metronome38", fractions.Fraction(3, 2)),
	("metronome34", 3),
	("metronome44", 4),
	("metronome44swing", 4),
	("metronome54", 5),
	("metronome58", fractions.Fraction(5, 2)),
	("metronome68", 3),
	("metronome74", 7),
	("metronome78", fractions.Fraction(7, 2)),
])
def test_metronome_bar_lengths (drummer: Drummer, method: str, beats_per_bar: fractions.Fraction) -> None:

	"""Each metronome groove fills exactly its bars."""

	getattr(drummer, method)(2)

	assert drummer.counter == 2 * beats_per_bar


def test_metronome44_alternates (drummer: Drummer) -> None:

	"""Kick and snare alternate under the hat."""

	drummer.metronome44(1)

	assert _instruments(drummer) == [
		(gm_drums.CLOSED_HH, gm_drums.ACOUSTIC_BASS),
		(gm_drums.CLOSED_HH, gm_drums.ACOUSTIC_SNARE),
		(gm_drums.CLOSED_HH, gm_drums.ACOUSTIC_BASS),
		(gm_drums.CLOSED_HH, gm_drums.ACOUSTIC_SNARE),
	]


def test_metronome44_flag (drummer: Drummer) -> None:

	"""With the flag every other kick becomes two eighths."""

	drummer.metronome44(2, flag=True)

	kicks = [note for note in drummer.timeline.notes if gm_drums.ACOUSTIC_BASS in note.instruments]

	assert [kick.duration for kick in kicks] == ["quarter", "eighth", "eighth", "quarter", "eighth", "eighth"]
	assert drummer.counter == 8


def test_metronome_uses_default_bars () -> None:

	drummer = Drummer(bars=3)
	drummer.metronome34()

	assert drummer.counter == 9


# ─── Rudiments ───────────────────────────────────────────────────────────────


def test_flam (drummer: Drummer) -> None:

	"""A soft sixty-fourth grace note, then the rest of the quarter as raw ticks."""

	drummer.flam(drummer.quarter)

	grace, main = drummer.timeline.notes

	assert (grace.duration, grace.velocity, grace.instruments) == ("sixtyfourth", 50, (gm_drums.ACOUSTIC_SNARE,))
	assert (main.duration, main.velocity) == ("d90", 100)
	assert drummer.counter == 1


def test_flam_with_rest_grace (drummer: Drummer) -> None:

	"""A grace of 'r' rests instead of striking."""

	drummer.flam(drummer.triplet_eighth, grace="r", patch=drummer.crash1)

	assert drummer.timeline.rests[0].duration == "sixtyfourth"
	assert drummer.timeline.notes[0].duration == "d26"
	assert drummer.timeline.notes[0].instruments == (gm_drums.CRASH1,)
	assert drummer.counter == fractions.Fraction(1, 3)


def test_roll (drummer: Drummer) -> None:

	"""A half-note roll in sixteenths is eight strokes."""

	drummer.roll(drummer.half, drummer.sixteenth)

	assert len(drummer.timeline.notes) == 8
	assert drummer.counter == 2


def test_crescendo_roll (drummer: Drummer) -> None:

	"""The stroke velocities follow the envelope and the volume comes back."""

	velocities = drummer.crescendo_roll([50, 127], drummer.half, drummer.eighth)

	assert velocities == tinydrummer.envelope.linear(50, 127, 4)
	assert [note.velocity for note in drummer.timeline.notes] == velocities
	assert velocities[0] == 50
	assert velocities[-1] == 127
	assert drummer.volume == 100


def test_crescendo_roll_curve (drummer: Drummer) -> None:

	velocities = drummer.crescendo_roll([50, 127, True], drummer.whole, drummer.quarter, patch=drummer.hi_tom)

	assert velocities == tinydrummer.envelope.bezier(50, 127, 4)
	assert {note.instruments for note in drummer.timeline.notes} == {(gm_drums.HI_TOM,)}


# ─── Patterns ────────────────────────────────────────────────────────────────


def test_pattern_defaults_to_snare (drummer: Drummer) -> None:

	drummer.pattern(["0101"])

	assert _instruments(drummer) == [(gm_drums.ACOUSTIC_SNARE,)] * 2
	assert drummer.counter == 4


def test_pattern_variations (drummer: Drummer) -> None:

	"""A symbol can play a flam."""

	vary = {
		"0": lambda: drummer.rest(drummer.quarter),
		"1": lambda: drummer.note(drummer.quarter, drummer.kick),
		"f": lambda: drummer.flam(drummer.quarter),
	}

	drummer.pattern(["1f0f"], vary=vary)

	assert len(drummer.timeline.notes) == 5
	assert drummer.counter == 4


def test_sync_patterns_accepts_strings (drummer: Drummer) -> None:

	"""A single beat-string per instrument is enough."""

	drummer.sync_patterns({drummer.closed_hh: "11111111", drummer.kick: "1010"})

	assert drummer.timeline.position == 4
	assert len(drummer.timeline.notes) == 10


def test_euclidean (drummer: Drummer) -> None:

	assert drummer.euclidean(3, 8) == "10010010"


def test_combinatorial_with_steady_voices (drummer: Drummer) -> None:

	"""Every one-bar snare rhythm against a steady kick and hat."""

	drummer.sync(
		lambda: drummer.combinatorial(drummer.snare),
		lambda: drummer.steady(drummer.kick),
		lambda: drummer.steady(drummer.closed_hh),
	)

	kicks = [note for note in drummer.timeline.notes if note.instruments == (gm_drums.ACOUSTIC_BASS,)]
	hats = [note for note in drummer.timeline.notes if note.instruments == (gm_drums.CLOSED_HH,)]
	snares = [note for note in drummer.timeline.notes if note.instruments == (gm_drums.ACOUSTIC_SNARE,)]

	assert len(kicks) == 64
	assert len(hats) == 64
	assert len(snares) == 32
	assert drummer.timeline.position == 64


def test_steady_outside_sync (drummer: Drummer) -> None:

	"""Outside a sync the steady voice lasts as long as the counter."""

	drummer.count_in(1)

	assert drummer.steady() == 4
	assert drummer.steady(drummer.ride1, drummer.eighth, beats=2) == 4


# ─── Fills ───────────────────────────────────────────────────────────────────


PHRASE_NAMES = {"open_hh": "11111111", "snare": "0101", "kick": "1010"}


def _phrase (drummer: Drummer) -> dict:

	return {drummer.instrument(name): pattern for name, pattern in PHRASE_NAMES.items()}


def test_add_default_fill (drummer: Drummer) -> None:

	"""No fill means three eighth-note snares at the end of the phrase."""

	patterns = drummer.add_fill(None, _phrase(drummer))

	assert patterns[drummer.snare] == "00100111"
	assert drummer.timeline.position == 4


def test_add_fill_from_callable (drummer: Drummer) -> None:

	"""A callable receives the drummer; a 'duration' key sets the fill grid."""

	patterns = drummer.add_fill(
		lambda d: {"duration": 16, d.open_hh: "00000000", d.snare: "11111111", d.kick: "00000000"},
		_phrase(drummer),
	)

	assert patterns[drummer.snare] == "0000100011111111"
	assert all(note.duration == "sixteenth" for note in drummer.timeline.notes)


def test_add_fill_by_name (drummer: Drummer) -> None:

	"""Fill mappings may name kit entries."""

	patterns = drummer.add_fill({"snare": "11"}, {drummer.snare: ["0101"]})

	# "0101" is stretched to eighths before the last two steps are replaced.
	assert patterns == {drummer.snare: "00100011"}


def test_add_fill_object (drummer: Drummer) -> None:

	fill = tinydrummer.fills.Fill(patterns={drummer.kick: "1"}, duration=4)

	assert drummer.add_fill(fill, {drummer.kick: "0000"}) == {drummer.kick: "0001"}


def test_add_fill_missing_instrument (drummer: Drummer) -> None:

	with pytest.raises(tinydrummer.errors.InvalidFillError):
		drummer.add_fill(None, {drummer.snare: ["0101"]})


# ─── Score settings ──────────────────────────────────────────────────────────


def test_set_time_sig (drummer: Drummer) -> None:

	drummer.note(drummer.whole, drummer.kick)
	drummer.set_time_sig("7/8")

	event = drummer.timeline.events[-1]

	assert (event.start, event.numerator, event.denominator) == (4, 7, 8)
	assert drummer.beats == 7
	assert drummer.signature == "7/8"


@pytest.mark.parametrize("signature", ["7-8", "four/four", "7/"])
def test_bad_time_sig (drummer: Drummer, signature: str) -> None:

	with pytest.raises(ValueError):
		drummer.set_time_sig(signature)


def test_set_bpm (drummer: Drummer) -> None:

	drummer.set_bpm(60)

	assert drummer.timeline.events[-1].microseconds_per_quarter == 1000000
	assert drummer.bpm == 60


def test_set_channel_and_volume (drummer: Drummer) -> None:

	"""Channel and volume apply to the notes that follow."""

	drummer.set_channel(3)
	drummer.set_volume(64)
	drummer.note(drummer.quarter, drummer.kick)

	drummer.set_channel()
	drummer.set_volume()
	drummer.note(drummer.quarter, drummer.kick)

	first, second = drummer.timeline.notes

	assert (first.channel, first.velocity) == (3, 64)
	assert (second.channel, second.velocity) == (9, 0)

	with pytest.raises(ValueError):
		drummer.set_channel(16)

	with pytest.raises(ValueError):
		drummer.set_volume(128)


# ─── Output ──────────────────────────────────────────────────────────────────


def test_write (drummer: Drummer, tmp_path: pathlib.Path) -> None:

	"""The score is written to the configured file."""

	drummer.count_in(1)
	drummer.set_volume()
	drummer.note(drummer.quarter, drummer.kick)

	path = drummer.write()

	assert path == str(tmp_path / "drums.mid")

	mid = mido.MidiFile(path)
	notes = [message for message in mid.tracks[0] if message.type == 'note_on']

	# The muted kick is not written.
	assert [message.note for message in notes] == [gm_drums.CLOSED_HH] + [gm_drums.PEDAL_HH] * 3
	assert notes[0].velocity == 127


def test_write_to_other_path (drummer: Drummer, tmp_path: pathlib.Path) -> None:

	other = tmp_path / "other.mid"

	drummer.metronome44(1)

	assert drummer.write(str(other)) == str(other)
	assert other.exists()
