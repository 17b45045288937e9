import fractions
import itertools
import math
import typing


Number = typing.Union[int, float, fractions.Fraction]

REST = "0"
ONSET = "1"

_NEGATION = str.maketrans("01", "10")


def round_half_away (value: Number) -> int:

	"""
	Round to the nearest integer, with halves rounded away from zero.

	Python's ``round()`` rounds halves to even; conventional ``%.0f``
	formatting of note lengths and velocities expects 2.5 -> 3.
	"""

	value = fractions.Fraction(value)

	if value < 0:
		return -round_half_away(-value)

	return math.floor(value + fractions.Fraction(1, 2))


def generate_euclidean_sequence (steps: int, pulses: int) -> typing.List[int]:

	"""
	Generate a Euclidean rhythm using Bjorklund's algorithm.
	"""

	if pulses == 0:
		return [0] * steps

	if pulses > steps:
		raise ValueError(f"Pulses ({pulses}) cannot be greater than steps ({steps})")

	sequence = []
	counts = []
	remainders = []
	divisor = steps - pulses

	remainders.append(pulses)
	level = 0

	while True:
		counts.append(divisor // remainders[level])
		remainders.append(divisor % remainders[level])
		divisor = remainders[level]
		level += 1
		if remainders[level] <= 1:
			break

	counts.append(divisor)

	def build (level: int) -> None:
		if level == -1:
			sequence.append(0)
		elif level == -2:
			sequence.append(1)
		else:
			for i in range(counts[level]):
				build(level - 1)
			if remainders[level] != 0:
				build(level - 2)

	build(level)
	i = sequence.index(1)
	return sequence[i:] + sequence[:i]


def euclid (pulses: int, steps: int) -> str:

	"""Return the Euclidean beat-string for *pulses* onsets over *steps* steps.

	Zero steps give an empty string rather than an error.

	Example:
		```python
		euclid(3, 8)   # "10010010"
		```
	"""

	if steps == 0:
		return ""

	if steps < 0 or pulses < 0:
		raise ValueError(f"Pulses ({pulses}) and steps ({steps}) cannot be negative")

	return "".join(str(bit) for bit in generate_euclidean_sequence(steps, pulses))


def negate (pattern: str) -> str:

	"""Swap the ``0`` and ``1`` symbols of a beat-string. Other symbols are kept."""

	return pattern.translate(_NEGATION)


def is_rest (pattern: str) -> bool:

	"""True for a non-empty beat-string made only of rest symbols."""

	return bool(pattern) and set(pattern) == {REST}


def upsize (sequence: typing.Sequence[str], length: int) -> typing.List[str]:

	"""Stretch a sequence of symbols onto a finer grid of *length* steps.

	Each symbol keeps its relative position (index ``round(i * length / n)``)
	and the new in-between steps are rests, so onsets are moved, never
	repeated or sustained.

	Example:
		```python
		upsize(list("0101"), 8)   # ['0', '0', '1', '0', '0', '0', '1', '0']
		```
	"""

	if not sequence:
		raise ValueError("Cannot upsize an empty sequence")

	if length < len(sequence):
		raise ValueError(f"New length ({length}) is shorter than the sequence ({len(sequence)})")

	factor = fractions.Fraction(length, len(sequence))
	result = [REST] * length

	for i, symbol in enumerate(sequence):
		result[round_half_away(i * factor)] = symbol

	return result


def multi_lcm (*values: int) -> int:

	"""Least common multiple of all *values*."""

	if not values:
		raise ValueError("multi_lcm needs at least one value")

	if any(value <= 0 for value in values):
		raise ValueError(f"multi_lcm needs positive values, got {values}")

	return math.lcm(*values)


def variations_with_repetition (alphabet: typing.Iterable[str], length: int) -> typing.List[str]:

	"""Every string of *length* symbols drawn from *alphabet*, sorted.

	Example:
		```python
		variations_with_repetition("01", 2)   # ["00", "01", "10", "11"]
		```
	"""

	if length < 0:
		raise ValueError(f"Length cannot be negative ({length})")

	symbols = sorted(set(alphabet))

	return sorted("".join(combo) for combo in itertools.product(symbols, repeat=length))
