"""
Logging setup for importcaps.

Modules get their logger with:
	from importcaps.logging import get_logger
	logger = get_logger(__name__)

Only entry points call configure_logging().
"""

from __future__ import annotations

import logging
import os
import sys
from typing import Optional, TextIO, Union


DEFAULT_FORMAT = "[%(levelname)s] %(name)s: %(message)s"
LEVEL_ENV = "IMPORTCAPS_LOG_LEVEL"


def level_from_env(default: str = "WARNING") -> int:
	name = os.environ.get(LEVEL_ENV, default).upper()
	level = logging.getLevelName(name)
	if isinstance(level, int):
		return level
	return logging.getLevelName(default)


def configure_logging(
	level: Optional[Union[int, str]] = None,
	fmt: str = DEFAULT_FORMAT,
	stream: TextIO = sys.stderr,
) -> None:
	"""
	Configure the importcaps logger.

	Records go to stderr by default; stdout is reserved for tool output.
	Calling this more than once only updates the level.
	"""
	if level is None:
		level = level_from_env()
	logger = logging.getLogger("importcaps")
	if not logger.handlers:
		handler = logging.StreamHandler(stream)
		handler.setFormatter(logging.Formatter(fmt))
		logger.addHandler(handler)
	logger.setLevel(level)


def get_logger(name: str) -> logging.Logger:
	return logging.getLogger(name)
