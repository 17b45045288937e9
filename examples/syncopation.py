import logging

import tinydrummer

logging.basicConfig(level=logging.INFO)

# Every one-bar snare rhythm over a steady kick and hi-hat, then the same
# rhythms in eighths with a ghost note for every rest.

d = tinydrummer.Drummer(file="syncopation.mid", bpm=90)

d.count_in(1)

d.sync(
	lambda: d.combinatorial(d.snare),
	lambda: d.steady(d.kick),
	lambda: d.steady(d.closed_hh),
)

ghosts = {
	"0": lambda: d.accent_note(30, d.eighth, d.snare),
	"1": lambda: d.note(d.eighth, d.snare),
}

d.sync(
	lambda: d.combinatorial(d.snare, beats=8, duration=d.eighth, vary=ghosts, patterns=["10010010", "10101001"], repeat=2),
	lambda: d.steady(d.kick, d.quarter),
)

d.write()
