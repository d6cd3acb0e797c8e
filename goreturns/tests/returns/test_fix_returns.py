# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
import pytest

from goreturns.parser import assign_node_ids, parse_file
from goreturns.printer import render
from goreturns.returns.bare_returns import expand_bare_returns
from goreturns.returns.collector import collect_returns
from goreturns.returns.fix import fix_returns


def rewrite(src: str, bare: bool = False, **kwargs) -> str:
	file = parse_file("x.go", src)
	assign_node_ids(file)
	fix_returns(file, **kwargs)
	if bare:
		expand_bare_returns(file)
	return render(file, src)


def test_missing_leading_int() -> None:
	src = """package p

func f() (int, error) {
	return err
}
"""
	assert rewrite(src) == src.replace("return err", "return 0, err")


def test_existing_values_keep_their_order() -> None:
	src = """package p

func f() (int, int, error) {
	return 7, err
}
"""
	assert rewrite(src) == src.replace("return 7, err", "return 0, 7, err")


def test_slice_result_gets_nil() -> None:
	src = """package p

func f() ([]int, error) {
	return err
}
"""
	assert rewrite(src) == src.replace("return err", "return nil, err")


def test_multi_valued_call_is_left_alone() -> None:
	src = """package p

func twoValued() (int, error) { return 0, nil }

func f() (int, error) {
	return twoValued()
}
"""
	assert rewrite(src) == src


def test_named_struct_result_is_left_alone() -> None:
	src = """package p

type T struct{}

func f() (T, error) {
	return err
}
"""
	assert rewrite(src) == src


def test_every_zero_value_shape() -> None:
	src = """package p

func f() (string, bool, *T, map[string]int, [2]int, float64, error) {
	return err
}
"""
	expected = src.replace("return err", 'return "", false, nil, nil, [2]int{}, 0, err')
	assert rewrite(src) == expected


def test_single_result_constructor_call() -> None:
	src = """package p

func f() (int, error) {
	return errors.New("boom")
}
"""
	assert rewrite(src) == src.replace("return errors", "return 0, errors")


def test_unknown_call_is_assumed_multi_valued() -> None:
	src = """package p

func f() (int, error) {
	return load()
}
"""
	assert rewrite(src) == src


def test_closures_use_their_own_signature() -> None:
	src = """package p

func outer() (string, error) {
	f := func() (int, error) {
		return err
	}
	if f == nil {
		return err
	}
	return "", nil
}
"""
	expected = src.replace("\t\treturn err\n\t}\n\tif", "\t\treturn 0, err\n\t}\n\tif").replace(
		"nil {\n\t\treturn err", 'nil {\n\t\treturn "", err'
	)
	assert rewrite(src) == expected


def test_complete_empty_and_overfull_returns_are_untouched() -> None:
	src = """package p

func f() (int, error) {
	if a {
		return 1, nil
	}
	if b {
		return
	}
	return 1, 2, nil
}
"""
	assert rewrite(src) == src


def test_one_line_function_and_comments() -> None:
	src = "package p\nfunc f() (int, error) { return /* why */ err }\n"
	assert rewrite(src) == "package p\nfunc f() (int, error) { return /* why */ 0, err }\n"


def test_rewrite_is_idempotent() -> None:
	src = """package p

func f() (int, string, error) {
	return err
}
"""
	once = rewrite(src)
	assert once == src.replace("return err", 'return 0, "", err')
	assert rewrite(once) == once


def test_fix_returns_reports_changed_statements() -> None:
	src = "package p\nfunc f() (int, error) {\n\treturn err\n}\nfunc g() error {\n\treturn nil\n}\n"
	file = parse_file("x.go", src)
	assign_node_ids(file)
	fixed = fix_returns(file)
	assert len(fixed) == 1
	assert [type(r).__name__ for r in fixed[0].results] == ["BasicLit", "Ident"]


def test_collector_binds_innermost_function() -> None:
	src = """package p

func outer() error {
	go func() {
		return
	}()
	return nil
}
"""
	file = parse_file("x.go", src)
	bindings = collect_returns(file)
	assert [b.ret.span.line for b in bindings] == [5, 7]
	inner, outer = bindings
	assert inner.signature.results is None
	assert outer.signature.results.num_fields() == 1


def test_bare_return_with_named_results() -> None:
	src = """package p

func f() (count int, err error) {
	return
}
"""
	assert rewrite(src, bare=True) == src.replace("\treturn\n", "\treturn count, err\n")
	assert rewrite(src) == src


def test_bare_return_with_unnamed_or_blank_results() -> None:
	unnamed = "package p\nfunc f() (int, error) {\n\treturn\n}\n"
	blank = "package p\nfunc f() (_ int, err error) {\n\treturn\n}\n"
	assert rewrite(unnamed, bare=True) == unnamed
	assert rewrite(blank, bare=True) == blank


PARAM_SHADOW = """package p

func g() error { return nil }

func f(g func() (int, error)) (int, error) {
	return g()
}
"""

RECEIVER_SHADOW = """package p

type Handler func() (int, error)

func g() error { return nil }

func (g Handler) Call() (int, error) {
	return g()
}
"""

RANGE_SHADOW = """package p

func g() error { return nil }

func f(fns []func() (int, error)) (int, error) {
	for _, g := range fns {
		return g()
	}
	return 0, nil
}
"""

NAMED_RESULT_SHADOW = """package p

func g() error { return nil }

func f() (g func() (int, error), err error) {
	return g()
}
"""

VAR_SHADOW = """package p

func g() error { return nil }

func f(h Handler) (int, error) {
	var g = h
	return g()
}
"""


@pytest.mark.parametrize("src", [PARAM_SHADOW, RECEIVER_SHADOW, RANGE_SHADOW, NAMED_RESULT_SHADOW, VAR_SHADOW])
def test_shadowed_single_result_function_is_not_trusted(src: str) -> None:
	assert rewrite(src) == src
