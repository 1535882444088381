"""importcaps: run capslock over the packages a Go module imports.

Modules:
- filter.py: ignore patterns for import paths.
- gotool.py: go command queries (module root, package loading, stdlib checks).
- resolve.py: import set resolution.
- baseline.py: caps.lock / caps.summary generation and comparison via capslock.
- orchestrator.py: list / lock / compare workflow and exit codes.
- config.py, model.py, errors.py, runner.py, logging.py: supporting pieces.
"""

__version__ = "0.1.0"

__all__ = [
	"baseline",
	"config",
	"errors",
	"filter",
	"gotool",
	"model",
	"orchestrator",
	"resolve",
	"runner",
]
