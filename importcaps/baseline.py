"""
Baseline files produced by the capslock analyzer.

Two files live at the analysis root: ``caps.lock`` (JSON output, used as the
comparison baseline) and ``caps.summary`` (verbose, human-readable output).
Their contents are whatever capslock prints; they are stored and read back
byte for byte.
"""

from __future__ import annotations

import os
from typing import List, Optional, Sequence

from .config import Settings
from .errors import AnalyzerError, BaselineWriteError
from .logging import get_logger
from .runner import CommandRunner


logger = get_logger(__name__)

CAPSLOCK = "capslock"
LOCK_FILE = "caps.lock"
SUMMARY_FILE = "caps.summary"
FILE_MODE = 0o664

JSON_FORMAT = "json"
VERBOSE_FORMAT = "verbose"
COMPARE_FORMAT = "compare"


class BaselineStore:
	def __init__(
		self,
		root: str,
		runner: CommandRunner,
		goos: str,
		goarch: str,
		capability_map: str = "",
		disable_builtin: bool = False,
	):
		self.root = root
		self.runner = runner
		self.goos = goos
		self.goarch = goarch
		self.capability_map = capability_map
		self.disable_builtin = disable_builtin

	@classmethod
	def from_settings(cls, root: str, runner: CommandRunner, settings: Settings) -> "BaselineStore":
		return cls(
			root,
			runner,
			settings.goos,
			settings.goarch,
			capability_map=settings.capability_map,
			disable_builtin=settings.disable_builtin,
		)

	@property
	def lock_path(self) -> str:
		return os.path.join(self.root, LOCK_FILE)

	@property
	def summary_path(self) -> str:
		return os.path.join(self.root, SUMMARY_FILE)

	def analyzer_args(self, packages: Sequence[str], output: str, baseline: Optional[str] = None) -> List[str]:
		args = [
			"-goos", self.goos,
			"-goarch", self.goarch,
			"-output", output,
			"-packages", ",".join(sorted(packages)),
		]
		if self.capability_map:
			args += ["-capability_map", self.capability_map]
			if self.disable_builtin:
				args.append("-disable_builtin")
		if baseline is not None:
			args.append(baseline)
		return args

	def run_analyzer(self, packages: Sequence[str], output: str, baseline: Optional[str] = None) -> bytes:
		args = self.analyzer_args(packages, output, baseline)
		try:
			res = self.runner.run(CAPSLOCK, args, cwd=self.root)
		except FileNotFoundError as e:
			raise AnalyzerError(-1, str(e)) from e
		if not res.ok:
			raise AnalyzerError(res.returncode, res.stderr_text())
		return res.stdout

	def write_summary(self, packages: Sequence[str]) -> bytes:
		out = self.run_analyzer(packages, VERBOSE_FORMAT)
		write_file(self.summary_path, out)
		return out

	def write_lock(self, packages: Sequence[str]) -> bytes:
		out = self.run_analyzer(packages, JSON_FORMAT)
		write_file(self.lock_path, out)
		return out

	def compare(self, packages: Sequence[str], lock_path: Optional[str] = None) -> bytes:
		"""Compare the packages' capabilities against a lock file; empty output means no change."""
		return self.run_analyzer(packages, COMPARE_FORMAT, lock_path or self.lock_path)


def write_file(path: str, data: bytes, mode: int = FILE_MODE) -> None:
	try:
		fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, mode)
		with os.fdopen(fd, "wb") as fh:
			fh.write(data)
	except OSError as e:
		raise BaselineWriteError(path, e) from e
	logger.debug("wrote %d bytes to %s", len(data), path)
