from __future__ import annotations

import os
from typing import List

from fastapi import Depends, FastAPI, HTTPException
from pydantic import BaseModel

from importcaps.config import Settings
from importcaps.errors import ConfigError, ImportCapsError
from importcaps.model import CompareResult, ImportsResult
from importcaps.orchestrator import compare_baseline, list_imports
from importcaps.runner import CommandRunner, SubprocessRunner


app = FastAPI(title="importcaps")


class ImportsRequest(BaseModel):
	root_path: str
	goos: str = ""
	goarch: str = ""
	ignore: List[str] = []
	stdlib: bool = False
	mod: bool = True


class CompareRequest(ImportsRequest):
	capability_map: str = ""
	disable_builtin: bool = False


def get_runner() -> CommandRunner:
	return SubprocessRunner()


def _settings(req: ImportsRequest, **extra) -> Settings:
	root = os.path.abspath(req.root_path)
	if not os.path.isdir(root):
		raise HTTPException(status_code=400, detail=f"Invalid root_path: {root}")
	return Settings.create(
		workdir=root,
		goos=req.goos,
		goarch=req.goarch,
		ignore=req.ignore,
		stdlib=req.stdlib,
		mod=req.mod,
		**extra,
	)


def _http_error(e: ImportCapsError) -> HTTPException:
	status = 400 if isinstance(e, ConfigError) else 500
	return HTTPException(status_code=status, detail=str(e))


@app.post("/imports", response_model=ImportsResult)
def imports(req: ImportsRequest, runner: CommandRunner = Depends(get_runner)) -> ImportsResult:
	try:
		target = list_imports(_settings(req, imports=True), runner)
	except ImportCapsError as e:
		raise _http_error(e) from e
	return ImportsResult(root=target.root, imports=target.packages)


@app.post("/compare", response_model=CompareResult)
def compare(req: CompareRequest, runner: CommandRunner = Depends(get_runner)) -> CompareResult:
	try:
		settings = _settings(
			req,
			capability_map=req.capability_map,
			disable_builtin=req.disable_builtin,
		)
		diff = compare_baseline(settings, runner)
	except ImportCapsError as e:
		raise _http_error(e) from e
	return CompareResult(changed=bool(diff), output=diff.decode("utf-8", errors="replace"))


def create_app() -> FastAPI:
	return app
