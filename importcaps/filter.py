from __future__ import annotations

import re
from typing import Iterable, List, Pattern

from .errors import ConfigError


class PatternFilter:
	"""
	Matches import paths against a set of regular expressions.

	Patterns are searched, not anchored: ``net`` matches ``golang.org/x/net``.
	"""

	def __init__(self, patterns: Iterable[str] = ()):
		self.patterns: List[Pattern[str]] = []
		for p in sorted(set(patterns)):
			try:
				self.patterns.append(re.compile(p))
			except re.error as e:
				raise ConfigError(f"error parsing regexp {p!r}: {e}") from e

	def matches(self, path: str) -> bool:
		return any(p.search(path) for p in self.patterns)
