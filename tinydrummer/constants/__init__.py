"""Constants for tinydrummer.

This package contains three sets of constants:

- ``tinydrummer.constants.durations`` - Named note durations as exact beat lengths
- ``tinydrummer.constants.velocity`` - MIDI velocity (volume) constants
- ``tinydrummer.constants.gm_drums`` - The General MIDI percussion kit

The score resolution is re-exported here because every timing conversion
needs it: ``tinydrummer.constants.TICKS_PER_QUARTER``.
"""

# Score resolution - MIDI ticks in one quarter note (one beat).

TICKS_PER_QUARTER = 96

# General MIDI percussion lives on channel 10 (0-indexed channel 9).

DRUM_CHANNEL = 9

# MIDI controller numbers used by the drummer.

CONTROL_REVERB = 91

# Drummer defaults.

DEFAULT_FILE = "tinydrummer.mid"
DEFAULT_BPM = 120
DEFAULT_BARS = 4
DEFAULT_REVERB = 15
DEFAULT_SIGNATURE = "4/4"
