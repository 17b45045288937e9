"""MIDI velocity constants.

Velocity is the MIDI attack strength (0-127). The drummer calls the
ambient velocity its "volume": every note uses it unless an accent or an
explicit velocity overrides it.
"""

# Primary defaults
DEFAULT_VOLUME = 100            # Most notes
ACCENT_VELOCITY = 127           # Count-in downbeats and other accents

# Crescendo roll defaults
CRESCENDO_START = 50
CRESCENDO_END = 127

# MIDI standard range
MIN_VELOCITY = 0
MAX_VELOCITY = 127
