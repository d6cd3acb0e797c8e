# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

from goreturns.parser import GoSyntaxError, SyntaxErrorKind, parse_file, parse_source


def test_missing_package_clause() -> None:
	with pytest.raises(GoSyntaxError) as excinfo:
		parse_file("x.go", "func f() {}\n")
	err = excinfo.value
	assert err.kind is SyntaxErrorKind.MISSING_PACKAGE
	assert err.message == "expected 'package', found 'func'"
	assert (err.line, err.column) == (1, 1)
	assert str(err) == "x.go:1:1: expected 'package', found 'func'"


def test_empty_input_is_missing_package() -> None:
	with pytest.raises(GoSyntaxError) as excinfo:
		parse_file("x.go", "")
	assert excinfo.value.kind is SyntaxErrorKind.MISSING_PACKAGE
	assert excinfo.value.message == "expected 'package', found EOF"


def test_statement_at_top_level() -> None:
	with pytest.raises(GoSyntaxError) as excinfo:
		parse_file("x.go", "package p\nx := 1\n")
	err = excinfo.value
	assert err.kind is SyntaxErrorKind.MISSING_DECLARATION
	assert err.message == "expected declaration, found x"
	assert err.line == 2


def test_statement_after_declarations() -> None:
	src = "package p\n\nfunc f() {\n\tif true {\n\t}\n}\n\nreturn\n"
	with pytest.raises(GoSyntaxError) as excinfo:
		parse_file("x.go", src)
	assert excinfo.value.kind is SyntaxErrorKind.MISSING_DECLARATION
	assert excinfo.value.line == 8


def test_other_syntax_errors() -> None:
	with pytest.raises(GoSyntaxError) as excinfo:
		parse_file("x.go", "package p\nfunc f() {\n")
	assert excinfo.value.kind is SyntaxErrorKind.OTHER
	assert isinstance(excinfo.value, ValueError)


def test_invalid_character() -> None:
	with pytest.raises(GoSyntaxError) as excinfo:
		parse_file("x.go", "package p\nfunc f() { $ }\n")
	assert excinfo.value.kind is SyntaxErrorKind.OTHER
	assert excinfo.value.message.startswith("invalid character")


def test_mixed_named_and_unnamed_parameters() -> None:
	with pytest.raises(GoSyntaxError) as excinfo:
		parse_file("x.go", "package p\nfunc f(a int, string) {}\n")
	assert "mixed named and unnamed parameters" in excinfo.value.message
	assert excinfo.value.filename == "x.go"


def test_invalid_utf8() -> None:
	with pytest.raises(GoSyntaxError) as excinfo:
		parse_source("x.go", b"package p\n\xff\n")
	assert excinfo.value.message.startswith("invalid UTF-8")
