# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

from goreturns.checker import stdlib_index


@pytest.mark.parametrize(
	"path, name",
	[
		("fmt", "fmt"),
		("net/http", "http"),
		("example.com/lib/v2", "lib"),
		("github.com/mattn/go-sqlite3", "sqlite3"),
		("gopkg.in/yaml.v3", "yaml"),
		("github.com/foo/bar-baz", "bar_baz"),
		("v2", "v2"),
	],
)
def test_package_name_for_path(path: str, name: str) -> None:
	assert stdlib_index.package_name_for_path(path) == name


def test_result_counts() -> None:
	assert stdlib_index.result_count("os", "Open") == 2
	assert stdlib_index.result_count("strconv", "Atoi") == 2
	assert stdlib_index.result_count("strings", "Cut") == 3
	assert stdlib_index.result_count("fmt", "Errorf") == 1
	assert stdlib_index.result_count("fmt", "Printf") == 2
	assert stdlib_index.result_count("log", "Printf") == 0
	assert stdlib_index.result_count("os", "NoSuchThing") is None
	assert stdlib_index.result_count("example.com/lib", "Open") is None


def test_type_names() -> None:
	assert stdlib_index.is_type_name("time", "Duration")
	assert not stdlib_index.is_type_name("time", "Now")
	assert not stdlib_index.is_type_name("example.com/lib", "Duration")
