import logging

import tinydrummer

logging.basicConfig(level=logging.INFO)

d = tinydrummer.Drummer(
	file="demo.mid",
	bpm=100,
	bars=4
)

d.count_in(1)

# Two bars of rock beat, then a bar that ends in the default snare fill.
for _ in range(2):
	d.sync_patterns({
		d.closed_hh: "11111111",
		d.snare: "0101",
		d.kick: "1010",
	})

d.add_fill(None, {
	d.open_hh: "11111111",
	d.snare: "0101",
	d.kick: "1010",
})

# A Euclidean kick under a steady ride.
d.sync(
	lambda: d.pattern([d.euclidean(5, 16)] * 2, instrument=d.kick, duration=d.sixteenth),
	lambda: d.steady(d.ride1, d.eighth),
)

d.flam(d.quarter)
d.flam(d.quarter)
d.crescendo_roll([50, 127, True], d.half, d.sixteenth)
d.note(d.whole, d.crash1, d.kick)

d.write()
