from __future__ import annotations

import argparse
import sys
from typing import List, Optional

import uvicorn

from importcaps.config import Settings
from importcaps.errors import ConfigError
from importcaps.logging import configure_logging
from importcaps.orchestrator import ExitCode, run


TRUE_VALUES = {"1", "t", "T", "TRUE", "true", "True"}
FALSE_VALUES = {"0", "f", "F", "FALSE", "false", "False"}


def parse_bool(value: str) -> bool:
	if value in TRUE_VALUES:
		return True
	if value in FALSE_VALUES:
		return False
	raise argparse.ArgumentTypeError(f"invalid boolean value {value!r}")


def add_bool_flag(parser: argparse.ArgumentParser, name: str, default: bool, help: str) -> None:
	# -flag sets true; -flag=false / -flag=true set explicitly
	parser.add_argument(
		f"-{name}",
		dest=name,
		nargs="?",
		const=True,
		default=default,
		type=parse_bool,
		metavar="BOOL",
		help=help,
	)


def build_parser() -> argparse.ArgumentParser:
	parser = argparse.ArgumentParser(
		prog="importcaps",
		description="Run capslock on all packages imported by a Go module or tree.",
		allow_abbrev=False,
	)
	parser.add_argument("-capability_map", default="", metavar="PATH", help="use a custom capability map file")
	add_bool_flag(
		parser,
		"disable_builtin",
		False,
		"disable the builtin capability mappings when using a custom capability map",
	)
	parser.add_argument("-goarch", default="", help="GOARCH to use for analysis")
	parser.add_argument("-goos", default="", help="GOOS to use for analysis")
	parser.add_argument(
		"-i",
		dest="ignore",
		action="append",
		default=[],
		metavar="PATTERN",
		help="imported package path patterns to ignore (allows multiple instances)",
	)
	add_bool_flag(parser, "imports", False, "list imports that would be analysed and then exit")
	add_bool_flag(parser, "lock", False, "write out a new lock file")
	add_bool_flag(parser, "mod", True, "include the whole main module")
	add_bool_flag(parser, "stdlib", False, "include stdlib packages in analysis")
	add_bool_flag(parser, "v", False, "print verbose output")
	return parser


def settings_from_args(args: argparse.Namespace) -> Settings:
	return Settings.create(
		goos=args.goos,
		goarch=args.goarch,
		capability_map=args.capability_map,
		disable_builtin=args.disable_builtin,
		ignore=args.ignore,
		imports=args.imports,
		lock=args.lock,
		mod=args.mod,
		stdlib=args.stdlib,
		verbose=args.v,
	)


def main(argv: Optional[List[str]] = None) -> int:
	"""Command line entry point; returns the process exit code."""
	configure_logging()
	args = build_parser().parse_args(argv)
	try:
		settings = settings_from_args(args)
	except ConfigError as e:
		print(e, file=sys.stderr)
		return ExitCode.INVOCATION_ERROR
	return run(settings)


def serve_main(argv: Optional[List[str]] = None) -> None:
	parser = argparse.ArgumentParser(prog="importcaps-serve")
	parser.add_argument("--host", default="127.0.0.1")
	parser.add_argument("--port", type=int, default=8000)
	parser.add_argument("--reload", action="store_true")
	args = parser.parse_args(argv)
	configure_logging()
	uvicorn.run("api:app", host=args.host, port=args.port, reload=args.reload)


if __name__ == "__main__":
	sys.exit(main())
