"""
Walk-throughs of tagged unions, exhaustive matching, immutable values, and delegation.

For example:

    variety

runs every walk-through in order, and

    variety -v

also narrates what the registries and matches are doing, on stderr.
"""
import sys, argparse
from importlib import import_module

TUTORIALS = ["sealed_types", "when_expressions", "data_classes", "delegation"]

parser = argparse.ArgumentParser(
	prog="variety",
	description=__doc__,
	formatter_class=argparse.RawDescriptionHelpFormatter,
)
parser.add_argument('-v', "--verbose", action="count", help="Narrate definitions and matches on stderr.")

def run(args):
	from .diagnostics import Report, VarietyError
	report = Report(verbose=args.verbose)
	for name in TUTORIALS:
		module = import_module("variety.tutorial." + name)
		try: module.main(report)
		except VarietyError:
			report.complain_to_console()
			raise
	return 0

def main(argv=None):
	sys.exit(run(parser.parse_args(argv)))
