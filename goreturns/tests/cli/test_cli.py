# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import io
import sys

import pytest

from goreturns.cli import main

BROKEN = b'package p\n\nimport "errors"\n\nfunc f() (int, error) {\n\treturn errors.New("x")\n}\n'
FIXED = BROKEN.replace(b"return errors", b"return 0, errors")
CLEAN = b"package p\n\nfunc g() int { return 1 }\n"


@pytest.fixture
def no_config(tmp_path):
	return ["--config", str(tmp_path / "none.json")]


@pytest.fixture
def pkg(tmp_path):
	root = tmp_path / "pkg"
	root.mkdir()
	(root / "a.go").write_bytes(BROKEN)
	(root / "b.go").write_bytes(CLEAN)
	hidden = root / ".cache"
	hidden.mkdir()
	(hidden / "c.go").write_bytes(BROKEN)
	return root


def _stdin(monkeypatch, data: bytes) -> None:
	monkeypatch.setattr(sys, "stdin", io.TextIOWrapper(io.BytesIO(data)))


def test_stdin_accepts_fragments(monkeypatch, capsys, no_config) -> None:
	_stdin(monkeypatch, b"func f() (int, error) {\n\treturn err\n}\n")
	assert main(no_config) == 0
	assert capsys.readouterr().out == "func f() (int, error) {\n\treturn 0, err\n}\n"


def test_stdin_cannot_be_written(monkeypatch, capsys, no_config) -> None:
	_stdin(monkeypatch, BROKEN)
	assert main(["-w", *no_config]) == 2
	assert "cannot use -w" in capsys.readouterr().err


def test_stdin_syntax_error(monkeypatch, capsys, no_config) -> None:
	_stdin(monkeypatch, b"x := (\n")
	assert main(no_config) == 2
	assert "<standard input>:" in capsys.readouterr().err


def test_list_changed_files(capsys, pkg, no_config) -> None:
	assert main(["-l", str(pkg), *no_config]) == 0
	assert capsys.readouterr().out.splitlines() == [str(pkg / "a.go")]


def test_write_back(capsys, pkg, no_config) -> None:
	assert main(["-w", str(pkg / "a.go"), str(pkg / "b.go"), *no_config]) == 0
	assert (pkg / "a.go").read_bytes() == FIXED
	assert (pkg / "b.go").read_bytes() == CLEAN
	assert capsys.readouterr().out == ""


def test_diff(capsys, pkg, no_config) -> None:
	assert main(["-d", str(pkg), *no_config]) == 0
	out = capsys.readouterr().out
	assert f"--- {pkg / 'a.go'}.orig" in out
	assert '+\treturn 0, errors.New("x")' in out
	assert "b.go" not in out
	assert (pkg / "a.go").read_bytes() == BROKEN


def test_print_result(capsys, pkg, no_config) -> None:
	assert main([str(pkg / "a.go"), *no_config]) == 0
	assert capsys.readouterr().out == FIXED.decode()


def test_syntax_errors_fail_the_run(capsys, pkg, no_config) -> None:
	bad = pkg / "z.go"
	bad.write_bytes(b"package p\nfunc f( {\n")
	assert main(["-l", str(pkg), *no_config]) == 2
	captured = capsys.readouterr()
	assert captured.out.splitlines() == [str(pkg / "a.go")]
	assert f"{bad}:" in captured.err


def test_bad_config(capsys, tmp_path) -> None:
	cfg = tmp_path / "cfg.json"
	cfg.write_text("{")
	assert main(["--config", str(cfg)]) == 2
	assert capsys.readouterr().err.startswith("goreturns: ")


def test_config_file_options(monkeypatch, capsys, tmp_path) -> None:
	cfg = tmp_path / "cfg.json"
	cfg.write_text('{"removeBareReturns": true}')
	_stdin(monkeypatch, b"package p\nfunc f() (n int, err error) {\n\treturn\n}\n")
	assert main(["--config", str(cfg)]) == 0
	assert "\treturn n, err\n" in capsys.readouterr().out
