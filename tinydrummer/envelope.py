"""Velocity envelopes for crescendo and decrescendo rolls.

An envelope turns a span ``(start, end, curve)`` into one velocity per
stroke of a roll:

    linear(50, 127, 5)    -> [50, 69, 88, 107, 127]
    bezier(50, 127, 5)    -> [50, 55, 69, 93, 127]

The linear form steps by a constant, rounded increment and always lands
exactly on ``end``.  The curved form follows a quadratic Bezier through
the control points ``(1, start)``, ``(steps, start)``, ``(steps, end)``:
it lingers near the start and sweeps up (or down) at the finish.

     |            *
     |           *
 vol |         *
     |      *
     |*
     ---------------
           time

A single step is a valid, degenerate envelope and returns ``[start]``.
"""

from __future__ import annotations

import fractions
import typing

import tinydrummer.errors
import tinydrummer.sequence_utils


Point = typing.Tuple[fractions.Fraction, fractions.Fraction]


# ─── Curve geometry ───────────────────────────────────────────────────────────


def bezier_point (control_points: typing.Sequence[typing.Tuple[tinydrummer.sequence_utils.Number, tinydrummer.sequence_utils.Number]], t: tinydrummer.sequence_utils.Number) -> Point:
    """Evaluate a Bezier curve of any degree at parameter *t* in [0, 1].

    Uses de Casteljau's algorithm on exact fractions, so integer control
    points and rational *t* give exact results.
    """
    if not control_points:
        raise ValueError("A Bezier curve needs at least one control point")

    t = fractions.Fraction(t)
    points = [(fractions.Fraction(x), fractions.Fraction(y)) for x, y in control_points]

    while len(points) > 1:
        points = [
            (x0 + (x1 - x0) * t, y0 + (y1 - y0) * t)
            for (x0, y0), (x1, y1) in zip(points, points[1:])
        ]

    return points[0]


def _check_steps (steps: int) -> None:
    if steps < 1:
        raise tinydrummer.errors.DegenerateEnvelopeError(steps)


# ─── Envelopes ────────────────────────────────────────────────────────────────


def linear (start: int, end: int, steps: int) -> typing.List[int]:
    """Evenly stepped velocities from *start* to *end*.

    The increment is ``(end - start) / (steps - 1)`` rounded half away from
    zero.  The last sample is forced to *end* so rounding never leaves the
    roll short, and samples are kept between *start* and *end* so rounding
    never overshoots.
    """
    _check_steps(steps)

    if steps == 1:
        return [start]

    increment = tinydrummer.sequence_utils.round_half_away(fractions.Fraction(end - start, steps - 1))
    low, high = min(start, end), max(start, end)

    values = [max(low, min(high, start + n * increment)) for n in range(steps - 1)]
    values.append(end)

    return values


def bezier (start: int, end: int, steps: int) -> typing.List[int]:
    """Velocities sampled along a quadratic Bezier curve.

    The curve's control points are ``(1, start)``, ``(steps, start)`` and
    ``(steps, end)``; it is sampled at *steps* evenly spaced parameter
    values from 0 to 1 and each y-coordinate is rounded to the nearest
    integer.
    """
    _check_steps(steps)

    if steps == 1:
        return [start]

    control_points = ((1, start), (steps, start), (steps, end))

    return [
        tinydrummer.sequence_utils.round_half_away(bezier_point(control_points, fractions.Fraction(n, steps - 1))[1])
        for n in range(steps)
    ]


def envelope (start: int, end: int, steps: int, curve: bool = False) -> typing.List[int]:
    """Return *steps* velocities from *start* to *end*, curved if *curve* is true."""
    if curve:
        return bezier(start, end, steps)
    return linear(start, end, steps)
