import os
import stat

import pytest

from importcaps.baseline import LOCK_FILE, SUMMARY_FILE, BaselineStore
from importcaps.errors import AnalyzerError, BaselineWriteError
from importcaps.runner import CommandResult


def store(toolchain, **kw):
	return BaselineStore(toolchain.root, toolchain, "linux", "amd64", **kw)


def test_analyzer_arguments(toolchain):
	s = store(toolchain)
	assert s.analyzer_args(["b", "a"], "json") == [
		"-goos", "linux", "-goarch", "amd64", "-output", "json", "-packages", "a,b",
	]


def test_analyzer_arguments_with_capability_map(toolchain):
	s = store(toolchain, capability_map="custom.cm", disable_builtin=True)
	args = s.analyzer_args(["a"], "compare", "/m/caps.lock")
	assert args[-4:] == ["-capability_map", "custom.cm", "-disable_builtin", "/m/caps.lock"]


def test_write_summary_and_lock(toolchain, tmp_path):
	s = store(toolchain)
	old = os.umask(0)
	try:
		summary = s.write_summary(["github.com/x/y"])
		lock = s.write_lock(["github.com/x/y"])
	finally:
		os.umask(old)
	assert summary == b"summary of github.com/x/y"
	assert (tmp_path / SUMMARY_FILE).read_bytes() == summary
	assert (tmp_path / LOCK_FILE).read_bytes() == lock
	assert stat.S_IMODE((tmp_path / LOCK_FILE).stat().st_mode) == 0o664


def test_write_truncates_existing_file(toolchain, tmp_path):
	(tmp_path / SUMMARY_FILE).write_bytes(b"x" * 1000)
	store(toolchain).write_summary(["a"])
	assert (tmp_path / SUMMARY_FILE).read_bytes() == b"summary of a"


def test_compare_passes_lock_path(toolchain, tmp_path):
	toolchain.compare_output = b""
	s = store(toolchain)
	assert s.compare(["a"]) == b""
	name, args, env, cwd = toolchain.calls[-1]
	assert name == "capslock"
	assert args[-1] == str(tmp_path / LOCK_FILE)
	assert s.compare(["a"], "/other/caps.lock") == b""
	assert toolchain.calls[-1][1][-1] == "/other/caps.lock"


def test_compare_does_not_write(toolchain, tmp_path):
	toolchain.compare_output = b"changed"
	assert store(toolchain).compare(["a"]) == b"changed"
	assert not (tmp_path / LOCK_FILE).exists()


def test_analyzer_failure(toolchain, tmp_path):
	toolchain.capslock_failures["json"] = CommandResult(returncode=3, stderr=b"capslock: bad package\n")
	with pytest.raises(AnalyzerError) as exc:
		store(toolchain).write_lock(["a"])
	assert exc.value.returncode == 3
	assert str(exc.value) == "capslock: exit status 3: capslock: bad package"
	assert not (tmp_path / LOCK_FILE).exists()


def test_analyzer_missing(toolchain):
	toolchain.missing.add("capslock")
	with pytest.raises(AnalyzerError, match="executable file not found"):
		store(toolchain).compare(["a"])


def test_write_failure(toolchain, tmp_path):
	s = BaselineStore(str(tmp_path / "missing"), toolchain, "linux", "amd64")
	with pytest.raises(BaselineWriteError) as exc:
		s.write_summary(["a"])
	assert exc.value.path.endswith(SUMMARY_FILE)
	assert exc.value.exit_code == 1
