# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import logging

import pytest

from goreturns.config import Options
from goreturns.parser import GoSyntaxError
from goreturns.returns.process import load_siblings, process

UNIT = """package store

func Load(t *Thing) (int, error) {
	return t.Err()
}
"""

THING = """package store

type Thing struct{}

func (t *Thing) Err() error { return nil }
"""


def _package(tmp_path, **files):
	for name, text in files.items():
		(tmp_path / name).write_text(text)
	return tmp_path


def test_without_package_the_method_call_is_unknown() -> None:
	assert process(None, "unit.go", UNIT.encode()) == UNIT.encode()
	assert process("", "unit.go", UNIT.encode()) == UNIT.encode()


def test_package_types_resolve_method_calls(tmp_path) -> None:
	pkg = _package(tmp_path, **{"unit.go": UNIT, "thing.go": THING})
	out = process(str(pkg), str(pkg / "unit.go"), UNIT.encode())
	assert out == UNIT.replace("return t.Err()", "return 0, t.Err()").encode()


def test_siblings_are_filtered(tmp_path, caplog) -> None:
	pkg = _package(
		tmp_path,
		**{
			"unit.go": UNIT,
			"thing.go": THING,
			"thing_test.go": "package store\nfunc helper() {}\n",
			"other.go": "package other\nfunc x() {}\n",
			"broken.go": "package store\nfunc {\n",
			"notes.txt": "not go",
		},
	)
	with caplog.at_level(logging.WARNING):
		siblings = load_siblings(pkg, str(pkg / "unit.go"), "store", start=100)
	assert [f.filename.rsplit("/", 1)[-1] for f in siblings] == ["thing.go"]
	assert siblings[0].node_id == 100
	assert "could not parse 'broken.go'" in caplog.text


def test_type_errors_drop_type_info(tmp_path, caplog) -> None:
	unit = """package store

func Load(t *Thing) (int, error) {
	missing()
	return t.Err()
}
"""
	pkg = _package(tmp_path, **{"unit.go": unit, "thing.go": THING})
	opts = Options(print_errors=True)
	with caplog.at_level(logging.WARNING):
		out = process(str(pkg), str(pkg / "unit.go"), unit.encode(), opts)
	assert out == unit.encode()
	assert "undefined: missing" in caplog.text
	assert "typechecking failed (continuing without type info)" in caplog.text


def test_type_errors_are_quiet_by_default(tmp_path, caplog) -> None:
	unit = "package store\nfunc f() (int, error) {\n\tnope()\n\treturn err\n}\n"
	pkg = _package(tmp_path, **{"unit.go": unit})
	with caplog.at_level(logging.WARNING):
		out = process(str(pkg), str(pkg / "unit.go"), unit.encode())
	# Syntax-only completion still applies.
	assert out == unit.replace("return err", "return 0, err").encode()
	assert caplog.text == ""


def test_all_errors_logs_every_diagnostic(tmp_path, caplog) -> None:
	unit = "package store\nfunc f() {\n\ta()\n\tb()\n}\n"
	pkg = _package(tmp_path, **{"unit.go": unit})
	with caplog.at_level(logging.WARNING):
		process(str(pkg), str(pkg / "unit.go"), unit.encode(), Options(print_errors=True))
	assert "undefined: a" in caplog.text and "undefined: b" not in caplog.text
	caplog.clear()
	with caplog.at_level(logging.WARNING):
		process(str(pkg), str(pkg / "unit.go"), unit.encode(), Options(print_errors=True, all_errors=True))
	assert "undefined: a" in caplog.text and "undefined: b" in caplog.text


def test_return_count_errors_do_not_count_as_failures(tmp_path, caplog) -> None:
	unit = "package store\nimport \"os\"\nfunc f() (*os.File, int, error) {\n\treturn os.Open(\"x\")\n}\n"
	pkg = _package(tmp_path, **{"unit.go": unit})
	with caplog.at_level(logging.WARNING):
		out = process(str(pkg), str(pkg / "unit.go"), unit.encode(), Options(print_errors=True))
	# os.Open yields two values, so the statement is left alone.
	assert out == unit.encode()
	assert caplog.text == ""


def test_bare_returns_option() -> None:
	src = b"package p\nfunc f() (n int, err error) {\n\treturn\n}\n"
	assert process(None, "x.go", src, Options(remove_bare_returns=True)) == src.replace(
		b"\treturn\n", b"\treturn n, err\n"
	)


def test_syntax_errors_propagate() -> None:
	with pytest.raises(GoSyntaxError):
		process(None, "x.go", b"package p\nfunc f( {\n")


def test_calls_through_defined_func_types(tmp_path) -> None:
	unit = """package store

type Handler func() (int, error)

func g() error { return nil }

func (g Handler) Call() (int, error) {
	return g()
}
"""
	pkg = _package(tmp_path, **{"unit.go": unit})
	assert process(str(pkg), str(pkg / "unit.go"), unit.encode()) == unit.encode()
