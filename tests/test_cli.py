import pytest

import cli


def test_flag_defaults():
	args = cli.build_parser().parse_args([])
	assert args.mod is True
	assert args.lock is False
	assert args.ignore == []
	assert args.goos == ""


def test_go_style_flags():
	args = cli.build_parser().parse_args(
		["-lock", "-mod=false", "-stdlib=true", "-i", "^golang.org/", "-i", "yaml", "-goos", "windows", "-v"]
	)
	s = cli.settings_from_args(args)
	assert s.lock and s.stdlib and s.verbose
	assert s.mod is False
	assert s.ignore == frozenset({"^golang.org/", "yaml"})
	assert s.goos == "windows"


def test_imports_flag_is_not_ignore_flag():
	args = cli.build_parser().parse_args(["-imports"])
	assert args.imports is True
	assert args.ignore == []


def test_invalid_bool_value():
	with pytest.raises(SystemExit) as exc:
		cli.build_parser().parse_args(["-lock=maybe"])
	assert exc.value.code == 2


def test_disable_builtin_without_map_exits_before_resolution(monkeypatch, capsys):
	def fail(*args, **kwargs):
		raise AssertionError("run must not be called")

	monkeypatch.setattr(cli, "run", fail)
	assert cli.main(["-disable_builtin"]) == 2
	assert "disable_builtin requires capability_map" in capsys.readouterr().err


def test_main_passes_settings_to_run(monkeypatch):
	seen = []
	monkeypatch.setattr(cli, "run", lambda settings: seen.append(settings) or 4)
	assert cli.main(["-capability_map", "my.cm", "-disable_builtin"]) == 4
	assert seen[0].capability_map == "my.cm"
	assert seen[0].disable_builtin is True
