import dataclasses
import logging
import os
import typing

import yaml

import tinydrummer.constants
import tinydrummer.constants.velocity


logger = logging.getLogger(__name__)


def load_config (config_path: str) -> dict:

	"""
	Load configuration from a YAML file.

	A missing file is not an error: a warning is logged and an empty
	configuration returned, so the defaults apply.
	"""

	if not os.path.exists(config_path):
		logger.warning(f"Config file {config_path} not found. Using defaults.")
		return {}

	with open(config_path, 'r') as f:
		config = yaml.safe_load(f) or {}

	if not isinstance(config, dict):
		raise ValueError(f"Config file {config_path} must contain a mapping, got {type(config).__name__}")

	logger.info(f"Loaded config from {config_path}")

	return config


@dataclasses.dataclass
class DrummerConfig:

	"""
	The settings a :class:`tinydrummer.drummer.Drummer` is built from.

	Parameters:
		file: Default MIDI file written by ``write()``.
		bpm: Tempo in beats per minute.
		volume: Ambient note velocity (0-127).
		signature: Time signature, e.g. ``"5/4"``.
		bars: Default number of bars for count-ins and metronomes.
		reverb: Reverb send (controller 91) value.
		channel: MIDI channel, 0-indexed (9 is General MIDI percussion).
		beats: Beats per bar. Taken from the signature unless given.
		kit: Kit overrides: name -> note number, or the name of another
			General MIDI drum (``{"kick": "electric_bass"}``).
	"""

	file: str = tinydrummer.constants.DEFAULT_FILE
	bpm: float = tinydrummer.constants.DEFAULT_BPM
	volume: int = tinydrummer.constants.velocity.DEFAULT_VOLUME
	signature: str = tinydrummer.constants.DEFAULT_SIGNATURE
	bars: int = tinydrummer.constants.DEFAULT_BARS
	reverb: int = tinydrummer.constants.DEFAULT_REVERB
	channel: int = tinydrummer.constants.DRUM_CHANNEL
	beats: typing.Optional[int] = None
	kit: typing.Dict[str, typing.Union[int, str]] = dataclasses.field(default_factory=dict)

	@classmethod
	def from_dict (cls, data: typing.Mapping[str, typing.Any]) -> "DrummerConfig":

		"""Build a config from a mapping such as a loaded YAML document.

		Raises:
			ValueError: If the mapping has keys that are not settings.
		"""

		known = {field.name for field in dataclasses.fields(cls)}
		unknown = sorted(set(data) - known)

		if unknown:
			raise ValueError(f"Unknown drummer settings: {', '.join(unknown)}")

		config = cls(**data)

		if config.kit is None:
			config.kit = {}

		return config

	def to_kwargs (self) -> typing.Dict[str, typing.Any]:

		"""The settings as ``Drummer`` keyword arguments."""

		return dataclasses.asdict(self)
