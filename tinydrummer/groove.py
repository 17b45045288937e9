"""Render a groove document into a drummer's score.

A groove is a mapping of drummer settings plus a list of ``sections``,
usually loaded from YAML::

    bpm: 100
    signature: 4/4
    kit:
      kick: electric_bass
    sections:
      - count_in: 1
      - repeat: 3
        duration: eighth
        patterns:
          closed_hh: "11111111"
          snare: "00100010"
          kick: {euclid: [3, 8]}
      - patterns:
          closed_hh: "11111111"
          snare: "00100010"
          kick: "10001000"
        fill:
          duration: 16
          snare: "11111111"

Each section plays its ``patterns`` (instrument -> beat-string, list of
beat-strings, or ``{euclid: [pulses, steps]}``) simultaneously, ``repeat``
times. A ``fill`` replaces the end of the last repetition. ``count_in``
adds bars of count-in and ``rest`` a rest of the given duration.
"""

import logging
import typing

import tinydrummer.config
import tinydrummer.drummer


logger = logging.getLogger(__name__)

_SECTION_KEYS = {"name", "count_in", "rest", "patterns", "repeat", "duration", "fill"}


def split_groove (document: typing.Mapping[str, typing.Any]) -> typing.Tuple[tinydrummer.config.DrummerConfig, typing.List[typing.Dict[str, typing.Any]]]:

	"""
	Separate a groove document into drummer settings and its sections.
	"""

	settings = dict(document)
	sections = settings.pop("sections", None) or []

	if not isinstance(sections, list):
		raise ValueError("Groove sections must be a list")

	return tinydrummer.config.DrummerConfig.from_dict(settings), sections


def _beat_string (drummer: tinydrummer.drummer.Drummer, value: typing.Any) -> str:

	if isinstance(value, str):
		return value

	if isinstance(value, dict) and "euclid" in value:
		pulses, steps = value["euclid"]
		return drummer.euclidean(int(pulses), int(steps))

	raise ValueError(f"Cannot read a beat-string from {value!r}")


def resolve_patterns (drummer: tinydrummer.drummer.Drummer, patterns: typing.Mapping[typing.Any, typing.Any]) -> typing.Dict[int, typing.List[str]]:

	"""Turn a section's ``patterns`` into note number -> beat-strings.

	Example:
		```python
		resolve_patterns(d, {"snare": "0101", "kick": {"euclid": [3, 8]}})
		# {38: ["0101"], 35: ["10010010"]}
		```
	"""

	resolved: typing.Dict[int, typing.List[str]] = {}

	for instrument, value in patterns.items():

		values = value if isinstance(value, list) else [value]
		resolved[drummer.instrument(instrument)] = [_beat_string(drummer, item) for item in values]

	return resolved


def render_section (drummer: tinydrummer.drummer.Drummer, section: typing.Mapping[str, typing.Any]) -> None:

	"""
	Play one section of a groove.
	"""

	unknown = sorted(set(section) - _SECTION_KEYS)

	if unknown:
		raise ValueError(f"Unknown section keys: {', '.join(unknown)}")

	name = section.get("name", "section")
	start = drummer.counter

	if "count_in" in section:
		drummer.count_in(int(section["count_in"]))

	if "rest" in section:
		drummer.rest(section["rest"])

	if "patterns" in section:

		patterns = resolve_patterns(drummer, section["patterns"])
		repeat = int(section.get("repeat", 1))
		duration = section.get("duration")
		fill = section.get("fill")

		if repeat < 1:
			raise ValueError(f"Section {name!r} repeat must be at least 1, got {repeat}")

		for n in range(repeat):
			if fill is not None and n == repeat - 1:
				drummer.add_fill(fill, patterns)
			else:
				drummer.sync_patterns(patterns, duration=duration)

	logger.debug(f"Rendered {name}: {drummer.counter - start} beats")


def render_groove (document: typing.Mapping[str, typing.Any], **overrides: typing.Any) -> tinydrummer.drummer.Drummer:

	"""Build a drummer from a groove document and play every section.

	*overrides* replace settings from the document (``bpm=140``).
	"""

	config, sections = split_groove(document)

	for key, value in overrides.items():
		if value is not None:
			setattr(config, key, value)

	drummer = tinydrummer.drummer.Drummer.from_config(config)

	for section in sections:
		render_section(drummer, section)

	logger.info(f"Rendered {len(sections)} sections, {drummer.counter} beats")

	return drummer
