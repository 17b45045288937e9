import pathlib

import mido

import tinydrummer.__main__


GROOVE = """\
bpm: 100
sections:
  - count_in: 1
  - repeat: 2
    patterns:
      closed_hh: "11111111"
      snare: "0101"
      kick: {euclid: [3, 8]}
    fill:
      snare: "111"
"""


def _write_groove (tmp_path: pathlib.Path, text: str = GROOVE) -> str:

	path = tmp_path / "groove.yaml"
	path.write_text(text)

	return str(path)


def test_renders_a_groove (tmp_path: pathlib.Path) -> None:

	"""The groove is written to the requested MIDI file."""

	output = tmp_path / "groove.mid"

	assert tinydrummer.__main__.main([_write_groove(tmp_path), "-o", str(output)]) == 0

	mid = mido.MidiFile(str(output))
	tempo = [message.tempo for message in mid.tracks[0] if message.type == 'set_tempo']

	assert tempo == [600000]
	assert any(message.type == 'note_on' for message in mid.tracks[0])


def test_bpm_override (tmp_path: pathlib.Path) -> None:

	output = tmp_path / "fast.mid"

	assert tinydrummer.__main__.main([_write_groove(tmp_path), "-o", str(output), "--bpm", "150", "-v"]) == 0

	mid = mido.MidiFile(str(output))

	assert [message.tempo for message in mid.tracks[0] if message.type == 'set_tempo'] == [400000]


def test_missing_groove (tmp_path: pathlib.Path) -> None:

	assert tinydrummer.__main__.main([str(tmp_path / "missing.yaml")]) == 1


def test_invalid_groove (tmp_path: pathlib.Path) -> None:

	"""Errors in the groove are reported, not raised."""

	output = tmp_path / "bad.mid"
	path = _write_groove(tmp_path, "sections:\n  - patterns:\n      snare: \"0x01\"\n")

	assert tinydrummer.__main__.main([path, "-o", str(output)]) == 1
	assert not output.exists()


def test_parser_defaults () -> None:

	args = tinydrummer.__main__.build_parser().parse_args(["groove.yaml"])

	assert args.groove == "groove.yaml"
	assert args.output is None
	assert args.bpm is None
	assert args.verbose is False
