"""
Thin wrappers around the go command.

Each function runs one go invocation through a CommandRunner and turns its
output (or failure) into Python values and importcaps errors.
"""

from __future__ import annotations

import json
import os
from typing import Dict, Iterator, List, Optional, Sequence, Tuple

from .errors import ConfigError, GoEnvironmentError, LoadError
from .logging import get_logger
from .model import GoPackage
from .runner import CommandResult, CommandRunner


logger = get_logger(__name__)

GO = "go"
LIST_FIELDS = "ImportPath,Imports,Module,Error,DepsErrors"


def platform_env(goos: str, goarch: str) -> Dict[str, str]:
	return {"GOOS": goos, "GOARCH": goarch}


def _go(
	runner: CommandRunner,
	args: Sequence[str],
	env: Optional[Dict[str, str]] = None,
	cwd: Optional[str] = None,
) -> CommandResult:
	try:
		return runner.run(GO, list(args), env=env, cwd=cwd)
	except FileNotFoundError as e:
		raise GoEnvironmentError(str(e)) from e


def module_root(runner: CommandRunner, workdir: str) -> str:
	"""Return the directory holding the go.mod of the module containing workdir."""
	res = _go(runner, ["env", "GOMOD"], cwd=workdir)
	if not res.ok:
		raise GoEnvironmentError(f"go env exit status {res.returncode}: {res.stderr_text().strip()}")
	gomod = res.stdout_text().strip()
	if gomod == "":
		raise GoEnvironmentError("go tool not running in module mode")
	if gomod == os.devnull:
		raise ConfigError("no go.mod")
	return os.path.dirname(gomod)


def host_platform(runner: CommandRunner, workdir: Optional[str] = None) -> Tuple[str, str]:
	res = _go(runner, ["env", "GOHOSTOS", "GOHOSTARCH"], cwd=workdir)
	if not res.ok:
		raise GoEnvironmentError(f"go env exit status {res.returncode}: {res.stderr_text().strip()}")
	lines = res.stdout_text().split()
	if len(lines) != 2:
		raise GoEnvironmentError(f"go env: unexpected output {res.stdout_text()!r}")
	return lines[0], lines[1]


def iter_json_objects(text: str) -> Iterator[dict]:
	"""Decode a stream of concatenated JSON objects, as printed by go list -json."""
	decoder = json.JSONDecoder()
	idx = 0
	end = len(text)
	while True:
		while idx < end and text[idx].isspace():
			idx += 1
		if idx >= end:
			return
		obj, idx = decoder.raw_decode(text, idx)
		yield obj


def load_packages(runner: CommandRunner, root: str, goos: str, goarch: str) -> List[GoPackage]:
	"""
	Load every package under root for the given platform.

	Only import edges and module membership are requested. Any package that
	failed to load makes the whole load fail with LoadError.
	"""
	args = ["list", "-e", f"-json={LIST_FIELDS}", "./..."]
	res = _go(runner, args, env=platform_env(goos, goarch), cwd=root)
	try:
		pkgs = [GoPackage.model_validate(obj) for obj in iter_json_objects(res.stdout_text())]
	except ValueError as e:
		raise LoadError(f"load: decoding go list output: {e}") from e

	errors: List[str] = []
	for pkg in pkgs:
		for err in pkg.errors():
			errors.append(f"{pkg.import_path}: {err}")
	if errors:
		raise LoadError("\n".join(errors), errors)
	if not res.ok:
		raise LoadError(f"load: go list exit status {res.returncode}: {res.stderr_text().strip()}")
	logger.debug("loaded %d packages under %s for %s/%s", len(pkgs), root, goos, goarch)
	return pkgs


def is_stdlib(runner: CommandRunner, path: str, goos: str, goarch: str, cwd: Optional[str] = None) -> bool:
	res = _go(runner, ["list", "-f={{.Standard}}", path], env=platform_env(goos, goarch), cwd=cwd)
	if not res.ok:
		stderr = res.stderr_text()
		note, sep, _ = stderr.partition(";")
		detail = note if sep else stderr
		raise GoEnvironmentError(f"go list exit status {res.returncode}: {detail.strip()}")
	return res.stdout_text().strip() == "true"
