from __future__ import annotations

import json
import os
from typing import Dict, List, Optional, Sequence, Set

import pytest

from importcaps.runner import CommandResult


class FakeToolchain:
	"""Scripted stand-in for the go and capslock executables."""

	def __init__(self, root: str):
		self.root = root
		self.gomod = os.path.join(root, "go.mod")
		self.host = ("linux", "amd64")
		self.packages: List[dict] = []
		self.stdlib: Set[str] = set()
		self.list_failures: Dict[str, str] = {}
		self.list_returncode = 0
		self.capslock_failures: Dict[str, CommandResult] = {}
		self.compare_output: Optional[bytes] = None
		self.missing: Set[str] = set()
		self.calls: List[tuple] = []

	def add_package(self, path: str, imports: Sequence[str], module: Optional[str] = "example.com/mod", **extra):
		pkg = {"ImportPath": path, "Imports": list(imports)}
		if module is not None:
			pkg["Module"] = {"Path": module, "Main": True, "Dir": self.root}
		pkg.update(extra)
		self.packages.append(pkg)

	def commands(self, name: str) -> List[tuple]:
		return [c for c in self.calls if c[0] == name]

	def run(self, name, args, env=None, cwd=None) -> CommandResult:
		args = list(args)
		self.calls.append((name, args, env, cwd))
		if name in self.missing:
			raise FileNotFoundError(f'exec: "{name}": executable file not found in $PATH')
		if name == "go":
			return self._go(args)
		if name == "capslock":
			return self._capslock(args)
		raise AssertionError(f"unexpected command {name}")

	def _go(self, args: List[str]) -> CommandResult:
		if args == ["env", "GOMOD"]:
			return CommandResult(returncode=0, stdout=(self.gomod + "\n").encode())
		if args == ["env", "GOHOSTOS", "GOHOSTARCH"]:
			return CommandResult(returncode=0, stdout=f"{self.host[0]}\n{self.host[1]}\n".encode())
		if args[:2] == ["list", "-e"]:
			out = "".join(json.dumps(p, indent="\t") + "\n" for p in self.packages)
			return CommandResult(returncode=self.list_returncode, stdout=out.encode(), stderr=b"list failed")
		if args[0] == "list" and args[1] == "-f={{.Standard}}":
			path = args[2]
			if path in self.list_failures:
				return CommandResult(returncode=1, stderr=self.list_failures[path].encode())
			return CommandResult(returncode=0, stdout=b"true\n" if path in self.stdlib else b"false\n")
		raise AssertionError(f"unexpected go command {args}")

	def _capslock(self, args: List[str]) -> CommandResult:
		output = args[args.index("-output") + 1]
		packages = args[args.index("-packages") + 1]
		if output in self.capslock_failures:
			return self.capslock_failures[output]
		if output == "verbose":
			return CommandResult(returncode=0, stdout=f"summary of {packages}".encode())
		if output == "json":
			return CommandResult(returncode=0, stdout=self.lock_content(packages))
		if output == "compare":
			if self.compare_output is not None:
				return CommandResult(returncode=0, stdout=self.compare_output)
			with open(args[-1], "rb") as fh:
				baseline = fh.read()
			if baseline == self.lock_content(packages):
				return CommandResult(returncode=0)
			return CommandResult(returncode=0, stdout=b"capabilities changed\n")
		raise AssertionError(f"unexpected capslock output {output}")

	@staticmethod
	def lock_content(packages: str) -> bytes:
		return json.dumps({"packages": packages.split(",")}).encode()


@pytest.fixture
def toolchain(tmp_path) -> FakeToolchain:
	return FakeToolchain(str(tmp_path))
