"""Named note durations and their exact beat lengths.

All values are :class:`fractions.Fraction` beats, where 1 = one quarter
note. Fractions keep triplets exact, so a bar of triplet eighths adds up
to precisely 4 beats instead of 3.9999999.

Every base value comes in four flavours:

    plain           quarter                 1
    triplet         triplet_quarter         2/3
    dotted          dotted_quarter          3/2
    double dotted   double_dotted_quarter   7/4

Use the names as duration tokens anywhere a duration is expected::

    d.note("dotted_eighth", d.kick)
    d.pattern(["1010"], duration="triplet_eighth")

    # Lengths for arithmetic
    import tinydrummer.constants.durations as dur
    bar = 4 * dur.QUARTER

The classic one-to-four letter tokens (``qn``, ``ten``, ``dsn``, ``ddhn``
...) are accepted as aliases; see :data:`SHORT_NAMES`.
"""

import fractions
import typing


Fraction = fractions.Fraction

WHOLE = Fraction(4)
HALF = Fraction(2)
QUARTER = Fraction(1)
EIGHTH = Fraction(1, 2)
SIXTEENTH = Fraction(1, 4)
THIRTYSECOND = Fraction(1, 8)
SIXTYFOURTH = Fraction(1, 16)
ONETWENTYEIGHTH = Fraction(1, 32)

TRIPLET = Fraction(2, 3)
DOTTED = Fraction(3, 2)
DOUBLE_DOTTED = Fraction(7, 4)

QUARTER_NAME = "quarter"
EIGHTH_NAME = "eighth"
SIXTEENTH_NAME = "sixteenth"
SIXTYFOURTH_NAME = "sixtyfourth"
DOTTED_EIGHTH_NAME = "dotted_eighth"
TRIPLET_EIGHTH_NAME = "triplet_eighth"


# ─── Base values ─────────────────────────────────────────────────────
#
# (name, short letter, length). The letter is the classic token initial:
# "qn" is a quarter note, "xn" a thirty-second, "zn" a 128th.

BASE_DURATIONS: typing.Tuple[typing.Tuple[str, str, Fraction], ...] = (
	("whole",           "w", WHOLE),
	("half",            "h", HALF),
	("quarter",         "q", QUARTER),
	("eighth",          "e", EIGHTH),
	("sixteenth",       "s", SIXTEENTH),
	("thirtysecond",    "x", THIRTYSECOND),
	("sixtyfourth",     "y", SIXTYFOURTH),
	("onetwentyeighth", "z", ONETWENTYEIGHTH),
)

# (name prefix, short prefix, multiplier)

MODIFIERS: typing.Tuple[typing.Tuple[str, str, Fraction], ...] = (
	("",               "",   Fraction(1)),
	("triplet_",       "t",  TRIPLET),
	("dotted_",        "d",  DOTTED),
	("double_dotted_", "dd", DOUBLE_DOTTED),
)


# ─── Lookup tables ───────────────────────────────────────────────────

DURATIONS: typing.Dict[str, Fraction] = {
	prefix + name: length * multiplier
	for name, _, length in BASE_DURATIONS
	for prefix, _, multiplier in MODIFIERS
}

SHORT_NAMES: typing.Dict[str, str] = {
	short_prefix + letter + "n": prefix + name
	for name, letter, _ in BASE_DURATIONS
	for prefix, short_prefix, _ in MODIFIERS
}

NAMES_BY_LENGTH: typing.Dict[Fraction, str] = {length: name for name, length in DURATIONS.items()}
