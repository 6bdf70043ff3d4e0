import argparse
import json
import logging
import sys
from pathlib import Path
from .config import configure_logging
from .bodies.loaders import load_bodies
from .bodies.provenance import check_compatibility
from .sim.scenarios import load_scenario
from .sim.engine import run_generation
from .sim.outputs import write_outputs, plot_run
from .sim.fixtures import compare_fixture_corpus, write_fixture_corpus
from .validation.validator import validate_body

logger = logging.getLogger(__name__)


def main(argv=None) -> int:
	parser = argparse.ArgumentParser(prog="cbgen", description="Procedural celestial body generator")
	parser.add_argument("--log-level", default="INFO", type=str)
	sub = parser.add_subparsers(dest="cmd", required=True)

	p_run = sub.add_parser("run", help="Generate a star system from a scenario")
	p_run.add_argument("--scenario", required=True, type=str)
	p_run.add_argument("--out", required=True, type=str)
	p_run.add_argument("--created-at", default=None, type=str, help="Pin the provenance timestamp")

	p_plot = sub.add_parser("plot", help="Plot a prior run")
	p_plot.add_argument("--run", required=True, type=str)

	p_fix = sub.add_parser("fixtures", help="Write or check the regression fixture corpus")
	p_fix.add_argument("--out", type=str, help="Directory to write fixtures into")
	p_fix.add_argument("--check", type=str, help="Directory of stored fixtures to compare against")

	p_val = sub.add_parser("validate", help="Validate bodies stored in a JSON document")
	p_val.add_argument("--input", required=True, type=str)

	args = parser.parse_args(argv)
	configure_logging(args.log_level)

	if args.cmd == "run":
		scenario = load_scenario(args.scenario)
		results = run_generation(scenario, created_at=args.created_at)
		write_outputs(results, Path(args.out))
		print(json.dumps(results["summary"], indent=2))
	elif args.cmd == "plot":
		plot_run(Path(args.run))
	elif args.cmd == "fixtures":
		if not args.out and not args.check:
			parser.error("fixtures needs --out and/or --check")
		if args.out:
			write_fixture_corpus(Path(args.out))
		if args.check:
			diffs = compare_fixture_corpus(Path(args.check))
			print(json.dumps({"fixture_dir": args.check, "differences": diffs}, indent=2))
			if diffs:
				return 1
	elif args.cmd == "validate":
		report = []
		errors = 0
		for body in load_bodies(args.input):
			result = validate_body(body)
			errors += len(result.errors())
			report.append({
				"id": body.id,
				"compatibility": check_compatibility(body.provenance).value,
				"issues": [{"field": i.field, "severity": i.severity.value, "message": i.message} for i in result.issues],
			})
		print(json.dumps({"bodies": report, "errors": errors}, indent=2))
		if errors:
			logger.error("%d validation error(s) in %s", errors, args.input)
			return 1
	return 0


if __name__ == "__main__":
	sys.exit(main())
