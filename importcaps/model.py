from __future__ import annotations

from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field


class GoModule(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	path: str = Field(alias="Path")
	dir: Optional[str] = Field(default=None, alias="Dir")
	main: bool = Field(default=False, alias="Main")


class PackageError(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	pos: str = Field(default="", alias="Pos")
	err: str = Field(alias="Err")

	def __str__(self) -> str:
		if self.pos:
			return f"{self.pos}: {self.err}"
		return self.err


class GoPackage(BaseModel):
	model_config = ConfigDict(populate_by_name=True)

	import_path: str = Field(alias="ImportPath")
	imports: List[str] = Field(default_factory=list, alias="Imports")
	module: Optional[GoModule] = Field(default=None, alias="Module")
	error: Optional[PackageError] = Field(default=None, alias="Error")
	deps_errors: List[PackageError] = Field(default_factory=list, alias="DepsErrors")

	def errors(self) -> List[PackageError]:
		errs: List[PackageError] = []
		if self.error is not None:
			errs.append(self.error)
		errs.extend(self.deps_errors)
		return errs


class AnalysisTarget(BaseModel):
	root: str
	# import path -> packages importing it, kept for diagnostics
	importers: Dict[str, List[str]] = {}

	@property
	def packages(self) -> List[str]:
		return sorted(self.importers)


class ImportsResult(BaseModel):
	root: str
	imports: List[str]


class CompareResult(BaseModel):
	changed: bool
	output: str
