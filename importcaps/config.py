from __future__ import annotations

import os
from typing import FrozenSet

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

from .errors import ConfigError


LIST_MODE = "imports"
LOCK_MODE = "lock"
COMPARE_MODE = "compare"


class Settings(BaseModel):
	"""
	Invocation settings, built once from the command line (or an API request)
	and passed down unchanged.

	Empty ``goos``/``goarch`` mean "the go tool's host platform" and are filled
	in by the orchestrator before anything is loaded.
	"""

	model_config = ConfigDict(frozen=True)

	goos: str = ""
	goarch: str = ""
	capability_map: str = ""
	disable_builtin: bool = False
	ignore: FrozenSet[str] = frozenset()
	imports: bool = False
	lock: bool = False
	mod: bool = True
	stdlib: bool = False
	verbose: bool = False
	workdir: str = Field(default_factory=os.getcwd)

	@field_validator("ignore", mode="before")
	@classmethod
	def _as_set(cls, value):
		if value is None:
			return frozenset()
		return frozenset(value)

	@model_validator(mode="after")
	def _check_builtin(self) -> "Settings":
		if self.disable_builtin and not self.capability_map:
			raise ValueError("disable_builtin requires capability_map")
		return self

	@classmethod
	def create(cls, **values) -> "Settings":
		"""Build settings, reporting validation failures as ConfigError."""
		try:
			return cls(**values)
		except ValidationError as exc:
			raise ConfigError(_describe(exc)) from exc

	@property
	def mode(self) -> str:
		if self.imports:
			return LIST_MODE
		if self.lock:
			return LOCK_MODE
		return COMPARE_MODE

	def with_platform(self, goos: str, goarch: str) -> "Settings":
		return self.model_copy(update={"goos": self.goos or goos, "goarch": self.goarch or goarch})


def _describe(exc: ValidationError) -> str:
	messages = []
	for err in exc.errors():
		cause = (err.get("ctx") or {}).get("error")
		msg = str(cause) if cause is not None else err["msg"]
		loc = ".".join(str(part) for part in err.get("loc", ()))
		messages.append(f"{loc}: {msg}" if loc else msg)
	return "; ".join(messages)
