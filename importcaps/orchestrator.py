"""
Top-level workflow: list imports, write a new baseline, or compare against
the existing one.
"""

from __future__ import annotations

import sys
from enum import IntEnum
from typing import Optional, TextIO, Tuple

from .baseline import BaselineStore
from .config import LIST_MODE, LOCK_MODE, Settings
from .errors import ImportCapsError
from .filter import PatternFilter
from .gotool import host_platform
from .logging import get_logger
from .model import AnalysisTarget
from .resolve import resolve_imports
from .runner import CommandRunner, SubprocessRunner


logger = get_logger(__name__)


class ExitCode(IntEnum):
	SUCCESS = 0
	INTERNAL_ERROR = 1
	INVOCATION_ERROR = 2
	CAP_CHANGE = 4


def prepare(settings: Settings, runner: CommandRunner) -> Tuple[Settings, PatternFilter]:
	"""Compile ignore patterns and fill in the host platform where none was given."""
	ignore = PatternFilter(settings.ignore)
	if not settings.goos or not settings.goarch:
		goos, goarch = host_platform(runner, settings.workdir)
		settings = settings.with_platform(goos, goarch)
	return settings, ignore


def list_imports(settings: Settings, runner: CommandRunner) -> AnalysisTarget:
	settings, ignore = prepare(settings, runner)
	return resolve_imports(settings, runner, ignore)


def write_baseline(settings: Settings, runner: CommandRunner) -> bytes:
	"""Write caps.summary then caps.lock; returns the summary output."""
	settings, ignore = prepare(settings, runner)
	target = resolve_imports(settings, runner, ignore)
	store = BaselineStore.from_settings(target.root, runner, settings)
	summary = store.write_summary(target.packages)
	store.write_lock(target.packages)
	return summary


def compare_baseline(settings: Settings, runner: CommandRunner) -> bytes:
	settings, ignore = prepare(settings, runner)
	target = resolve_imports(settings, runner, ignore)
	store = BaselineStore.from_settings(target.root, runner, settings)
	return store.compare(target.packages)


def write_output(stream: TextIO, data: bytes) -> None:
	buf = getattr(stream, "buffer", None)
	if buf is not None:
		stream.flush()
		buf.write(data)
		buf.flush()
	else:
		stream.write(data.decode("utf-8", errors="replace"))


def run(
	settings: Settings,
	runner: Optional[CommandRunner] = None,
	stdout: Optional[TextIO] = None,
	stderr: Optional[TextIO] = None,
) -> int:
	"""Run one invocation and return its process exit code."""
	runner = runner or SubprocessRunner()
	stdout = stdout or sys.stdout
	stderr = stderr or sys.stderr
	try:
		if settings.mode == LIST_MODE:
			target = list_imports(settings, runner)
			for imp in target.packages:
				print(imp, file=stdout)
			return ExitCode.SUCCESS

		if settings.mode == LOCK_MODE:
			summary = write_baseline(settings, runner)
			if settings.verbose:
				write_output(stdout, summary + b"\n")
			return ExitCode.SUCCESS

		diff = compare_baseline(settings, runner)
		write_output(stdout, diff)
		if diff:
			logger.info("capabilities changed")
			return ExitCode.CAP_CHANGE
		return ExitCode.SUCCESS
	except ImportCapsError as e:
		print(e, file=stderr)
		return ExitCode(e.exit_code)
