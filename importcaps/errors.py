"""
Error hierarchy for importcaps.

Every error carries the process exit code the command line reports for it,
so callers can catch ImportCapsError once and exit with ``err.exit_code``.
"""

from __future__ import annotations

from typing import List, Optional


INTERNAL_ERROR = 1
INVOCATION_ERROR = 2


class ImportCapsError(Exception):
	"""Base class for all errors raised while resolving or analysing imports."""

	exit_code = INTERNAL_ERROR


class ConfigError(ImportCapsError):
	"""
	Invalid invocation.

	Raised for bad flag combinations, ignore patterns that do not compile,
	and a missing go.mod when the whole module was requested.
	"""

	exit_code = INVOCATION_ERROR


class GoEnvironmentError(ImportCapsError):
	"""The go tool is missing, not module-aware, or failed to classify a package."""


class LoadError(ImportCapsError):
	"""The package graph could not be loaded cleanly."""

	def __init__(self, message: str, errors: Optional[List[str]] = None):
		super().__init__(message)
		self.errors = list(errors or [])


class AnalyzerError(ImportCapsError):
	"""The capslock analyzer exited with a non-zero status."""

	def __init__(self, returncode: int, stderr: str):
		self.returncode = returncode
		self.stderr = stderr
		super().__init__(f"capslock: exit status {returncode}: {stderr.strip()}")


class BaselineWriteError(ImportCapsError):
	"""A baseline file could not be written."""

	def __init__(self, path: str, cause: OSError):
		self.path = path
		self.cause = cause
		super().__init__(f"write {path}: {cause.strerror or cause}")


class CommandError(ImportCapsError):
	"""An external command was found but could not be started."""

	def __init__(self, name: str, cause: OSError):
		self.name = name
		self.cause = cause
		super().__init__(f"exec {name}: {cause}")
