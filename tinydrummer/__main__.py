import argparse
import logging
import sys
import typing

import tinydrummer.config
import tinydrummer.errors
import tinydrummer.groove


logger = logging.getLogger(__name__)


def build_parser () -> argparse.ArgumentParser:

	"""
	Command line options for rendering a groove file.
	"""

	parser = argparse.ArgumentParser(prog="tinydrummer", description="Render a YAML drum groove to a MIDI file.")
	parser.add_argument("groove", help="YAML groove file")
	parser.add_argument("-o", "--output", help="MIDI file to write (default: the groove's file setting)")
	parser.add_argument("--bpm", type=float, help="Override the groove's tempo")
	parser.add_argument("-v", "--verbose", action="store_true", help="Log fill splicing and section details")

	return parser


def main (argv: typing.Optional[typing.List[str]] = None) -> int:

	"""
	Main entry point for the tinydrummer command.
	"""

	args = build_parser().parse_args(argv)

	logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO)

	document = tinydrummer.config.load_config(args.groove)

	if not document:
		logger.error(f"Nothing to render in {args.groove}")
		return 1

	try:
		drummer = tinydrummer.groove.render_groove(document, bpm=args.bpm)
		drummer.write(args.output)

	except (tinydrummer.errors.DrummerError, ValueError) as exc:
		logger.error(f"Could not render {args.groove}: {exc}")
		return 1

	return 0


if __name__ == "__main__":
	sys.exit(main())
