# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import shutil

import pytest

from goreturns.config import Options
from goreturns.gofmt import FormatError, format_source
from goreturns.returns.process import process


def test_missing_binary(tmp_path) -> None:
	with pytest.raises(FormatError, match="not found"):
		format_source(b"package p\n", str(tmp_path / "no-gofmt"))


@pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")
def test_formats_rewritten_source() -> None:
	src = b"package p\nfunc f() (int,error) {\nreturn err\n}\n"
	out = process(None, "x.go", src, Options(format=True))
	assert b"func f() (int, error) {\n\treturn 0, err\n}\n" in out


@pytest.mark.skipif(shutil.which("gofmt") is None, reason="gofmt not installed")
def test_gofmt_rejects_bad_input() -> None:
	with pytest.raises(FormatError, match="gofmt failed"):
		format_source(b"package p\nfunc {\n")
