from __future__ import annotations

import os
import shutil
import subprocess
from typing import Dict, List, Optional, Protocol, Sequence

from pydantic import BaseModel

from .errors import CommandError
from .logging import get_logger


logger = get_logger(__name__)


class CommandResult(BaseModel):
	returncode: int
	stdout: bytes = b""
	stderr: bytes = b""

	@property
	def ok(self) -> bool:
		return self.returncode == 0

	def stdout_text(self) -> str:
		return self.stdout.decode("utf-8", errors="replace")

	def stderr_text(self) -> str:
		return self.stderr.decode("utf-8", errors="replace")


class CommandRunner(Protocol):
	"""Runs an external command and captures its output."""

	def run(
		self,
		name: str,
		args: Sequence[str],
		env: Optional[Dict[str, str]] = None,
		cwd: Optional[str] = None,
	) -> CommandResult:
		...


class SubprocessRunner:
	"""
	CommandRunner backed by subprocess.

	``name`` is looked up on PATH and run by absolute path, never relative to
	the working directory. ``env`` holds overrides merged onto os.environ.
	Raises FileNotFoundError when the executable is not on PATH and
	CommandError when it cannot be started (bad working directory, permissions).
	"""

	def resolve(self, name: str) -> str:
		path = shutil.which(name)
		if path is None or not os.path.isabs(path):
			raise FileNotFoundError(f'exec: "{name}": executable file not found in $PATH')
		return path

	def run(
		self,
		name: str,
		args: Sequence[str],
		env: Optional[Dict[str, str]] = None,
		cwd: Optional[str] = None,
	) -> CommandResult:
		argv: List[str] = [self.resolve(name), *args]
		full_env = None
		if env:
			full_env = dict(os.environ)
			full_env.update(env)
		logger.debug("exec %s (cwd=%s, env=%s)", " ".join([name, *args]), cwd or ".", env or {})
		try:
			proc = subprocess.run(argv, env=full_env, cwd=cwd, capture_output=True, check=False)
		except OSError as e:
			raise CommandError(name, e) from e
		return CommandResult(returncode=proc.returncode, stdout=proc.stdout, stderr=proc.stderr)
