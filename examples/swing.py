import logging
import random

import tinydrummer

logging.basicConfig(level=logging.INFO)

# Swing on the ride, finishing each eight bar phrase with a random fill.

d = tinydrummer.Drummer(file="swing.mid", bpm=160, bars=8)
fills = tinydrummer.SwingFills(rng=random.Random(2))

d.count_in(1)

for _ in range(4):

	fill = fills.get_fill(d, d.ride2)
	end = d.counter + d.beats * d.bars

	d.metronome44swing(d.bars - 1)

	while d.counter < end - fill.span:
		d.note(d.eighth, d.ride1)

	fill.play()

d.note(d.whole, d.crash1, d.kick)

d.write()
