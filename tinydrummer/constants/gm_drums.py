"""General MIDI Level 1 drum kit.

Standard MIDI percussion assignments for channel 10 (0-indexed channel 9).
These note numbers are supported by virtually all GM-compatible instruments,
drum machines, and soundfonts.

Two ways to use this module:

1. **As a kit** - every :class:`tinydrummer.drummer.Drummer` starts from
   ``GM_KIT`` and exposes each entry as an attribute, so ``d.kick`` and
   ``d.closed_hh`` are note numbers. Override entries per drummer::

       d = tinydrummer.Drummer(kit={"kick": gm_drums.ELECTRIC_BASS, "snare": gm_drums.ELECTRIC_SNARE})

2. **As constants** - reference note numbers directly::

       import tinydrummer.constants.gm_drums as gm_drums

       d.note("quarter", gm_drums.ACOUSTIC_SNARE)
"""

import typing


# ─── Individual note constants ───────────────────────────────────────
#
# General MIDI Level 1 percussion key map, metronome click to open triangle.

CLICK = 33
BELL = 34
ACOUSTIC_BASS = 35
ELECTRIC_BASS = 36
SIDE_STICK = 37
ACOUSTIC_SNARE = 38
CLAP = 39
ELECTRIC_SNARE = 40
LOW_FLOOR_TOM = 41
CLOSED_HH = 42
HI_FLOOR_TOM = 43
PEDAL_HH = 44
LOW_TOM = 45
OPEN_HH = 46
LOW_MID_TOM = 47
HI_MID_TOM = 48
CRASH1 = 49
HI_TOM = 50
RIDE1 = 51
CHINA = 52
RIDE_BELL = 53
TAMBOURINE = 54
SPLASH = 55
COWBELL = 56
CRASH2 = 57
VIBRASLAP = 58
RIDE2 = 59
HI_BONGO = 60
LOW_BONGO = 61
MUTE_HI_CONGA = 62
OPEN_HI_CONGA = 63
LOW_CONGA = 64
HIGH_TIMBALE = 65
LOW_TIMBALE = 66
HIGH_AGOGO = 67
LOW_AGOGO = 68
CABASA = 69
MARACAS = 70
SHORT_WHISTLE = 71
LONG_WHISTLE = 72
SHORT_GUIRO = 73
LONG_GUIRO = 74
CLAVES = 75
HI_WOOD_BLOCK = 76
LOW_WOOD_BLOCK = 77
MUTE_CUICA = 78
OPEN_CUICA = 79
MUTE_TRIANGLE = 80
OPEN_TRIANGLE = 81

# The default kick and snare are the acoustic voices.

KICK = ACOUSTIC_BASS
SNARE = ACOUSTIC_SNARE


# ─── Complete kit ────────────────────────────────────────────────────
#
# Name -> note number. These names become Drummer attributes.

GM_KIT: typing.Dict[str, int] = {
	"click": CLICK,
	"bell": BELL,
	"kick": KICK,
	"acoustic_bass": ACOUSTIC_BASS,
	"electric_bass": ELECTRIC_BASS,
	"side_stick": SIDE_STICK,
	"snare": SNARE,
	"acoustic_snare": ACOUSTIC_SNARE,
	"electric_snare": ELECTRIC_SNARE,
	"clap": CLAP,
	"open_hh": OPEN_HH,
	"closed_hh": CLOSED_HH,
	"pedal_hh": PEDAL_HH,
	"crash1": CRASH1,
	"crash2": CRASH2,
	"splash": SPLASH,
	"china": CHINA,
	"ride1": RIDE1,
	"ride2": RIDE2,
	"ride_bell": RIDE_BELL,
	"hi_tom": HI_TOM,
	"hi_mid_tom": HI_MID_TOM,
	"low_mid_tom": LOW_MID_TOM,
	"low_tom": LOW_TOM,
	"hi_floor_tom": HI_FLOOR_TOM,
	"low_floor_tom": LOW_FLOOR_TOM,
	"tambourine": TAMBOURINE,
	"cowbell": COWBELL,
	"vibraslap": VIBRASLAP,
	"hi_bongo": HI_BONGO,
	"low_bongo": LOW_BONGO,
	"mute_hi_conga": MUTE_HI_CONGA,
	"open_hi_conga": OPEN_HI_CONGA,
	"low_conga": LOW_CONGA,
	"high_timbale": HIGH_TIMBALE,
	"low_timbale": LOW_TIMBALE,
	"high_agogo": HIGH_AGOGO,
	"low_agogo": LOW_AGOGO,
	"cabasa": CABASA,
	"maracas": MARACAS,
	"short_whistle": SHORT_WHISTLE,
	"long_whistle": LONG_WHISTLE,
	"short_guiro": SHORT_GUIRO,
	"long_guiro": LONG_GUIRO,
	"claves": CLAVES,
	"hi_wood_block": HI_WOOD_BLOCK,
	"low_wood_block": LOW_WOOD_BLOCK,
	"mute_cuica": MUTE_CUICA,
	"open_cuica": OPEN_CUICA,
	"mute_triangle": MUTE_TRIANGLE,
	"open_triangle": OPEN_TRIANGLE,
}
