from __future__ import annotations

import os
from typing import Dict, List, Optional

from .config import Settings
from .errors import GoEnvironmentError
from .filter import PatternFilter
from .gotool import is_stdlib, load_packages, module_root
from .logging import get_logger
from .model import AnalysisTarget
from .runner import CommandRunner


logger = get_logger(__name__)

# cgo pseudo-package; go list reports it as an import, it is not a package
CGO_PSEUDO_PACKAGE = "C"


def find_root(settings: Settings, runner: CommandRunner) -> str:
	if settings.mod:
		return module_root(runner, settings.workdir)
	return os.path.abspath(settings.workdir)


def resolve_imports(
	settings: Settings,
	runner: CommandRunner,
	ignore: Optional[PatternFilter] = None,
) -> AnalysisTarget:
	"""
	Collect the external packages imported from the tree at the analysis root.

	Imports from the importing package's own module and imports matching
	``ignore`` are dropped; standard library packages are dropped too unless
	``settings.stdlib`` is set. The returned target maps each remaining import
	path to the packages that import it.
	"""
	if ignore is None:
		ignore = PatternFilter(settings.ignore)
	root = find_root(settings, runner)
	logger.debug("analysis root %s", root)

	importers: Dict[str, List[str]] = {}
	for pkg in load_packages(runner, root, settings.goos, settings.goarch):
		for imp in pkg.imports:
			if imp == CGO_PSEUDO_PACKAGE:
				continue
			if pkg.module is not None and imp.startswith(pkg.module.path):
				continue
			if ignore.matches(imp):
				logger.debug("ignoring %s", imp)
				continue
			importers.setdefault(imp, []).append(pkg.import_path)

	if not settings.stdlib:
		for imp in sorted(importers):
			try:
				std = is_stdlib(runner, imp, settings.goos, settings.goarch, cwd=root)
			except GoEnvironmentError as e:
				raise GoEnvironmentError(f"{e}: imported by {','.join(importers[imp])}") from e
			if std:
				logger.debug("skipping standard library package %s", imp)
				del importers[imp]

	return AnalysisTarget(root=root, importers=importers)
