"""
tinydrummer - script drum parts and write them as MIDI files.

Instead of clicking notes into a grid, describe a drum part in Python:
metronome grooves, beat-strings such as ``"0101"``, Euclidean rhythms,
every-rhythm-in-a-bar exercises and fills spliced onto the end of a
phrase. The result is a General MIDI percussion track.

What it does:

- **Exact durations.** Note lengths are exact fractions of a beat, so
  triplets, dotted notes and raw tick lengths (``"d90"``) never drift.
- **Beat-strings.** ``d.pattern(["0101"])`` plays a bar; each symbol
  maps to a callable, so ``"0"`` and ``"1"`` can mean anything.
- **Combinatorial exercises.** ``d.combinatorial(d.snare)`` plays every
  rhythm a bar can hold, the classic syncopation drill.
- **Euclidean rhythms.** ``d.euclidean(5, 16)`` spreads onsets evenly.
- **Fills.** ``d.add_fill(...)`` resamples a phrase and a fill onto a
  common grid and replaces the end of the phrase with the fill.
- **Rudiments.** Flams, rolls and crescendo rolls along a straight line
  or a Bezier curve.
- **Simultaneous voices.** ``d.sync(...)`` plays several parts from the
  same position; ``d.steady(...)`` keeps time under them.
- **Swing fills.** A library of jazz fills, chosen at random.

Minimal example:

    ```python
    import tinydrummer

    d = tinydrummer.Drummer(bpm=100, file="drums.mid")

    d.count_in(1)

    for _ in range(d.bars):
        d.sync_patterns({d.open_hh: ["11111111"], d.snare: ["0101"], d.kick: ["1010"]})

    d.add_fill(None, {d.open_hh: ["11111111"], d.snare: ["0101"], d.kick: ["1010"]})

    d.write()
    ```

Grooves can also be written in YAML and rendered from the command line
with ``python -m tinydrummer groove.yaml -o groove.mid``.

Package-level exports: ``Drummer``, ``DrummerConfig``, ``Fill``, ``SwingFills``, ``Timeline``.
"""

import tinydrummer.config
import tinydrummer.drummer
import tinydrummer.fills
import tinydrummer.swing_fills
import tinydrummer.timeline


Drummer = tinydrummer.drummer.Drummer
DrummerConfig = tinydrummer.config.DrummerConfig
Fill = tinydrummer.fills.Fill
SwingFills = tinydrummer.swing_fills.SwingFills
Timeline = tinydrummer.timeline.Timeline
