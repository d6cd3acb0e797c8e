# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from goreturns.parser import parse_file
from goreturns.parser.ast import (
	ArrayType,
	Ellipsis as EllipsisExpr,
	FuncDecl,
	GenDecl,
	Ident,
	IndexExpr,
	SelectorExpr,
	StarExpr,
	StructType,
	TypeSpec,
	ValueSpec,
)

SRC = """
package demo

import (
	"fmt"
	str "strings"
	. "math"
)

const (
	A = iota
	B
)

var x, y int = 1, 2

type Pair[K comparable, V any] struct {
	Key K
	Val V `json:"v"`
	*Embedded
}

type Alias = Pair[string, int]

func (p *Pair[K, V]) Get(k K) (v V, ok bool) { return }

func Div(a, b int) (int, error) {
	return a / b, nil
}
"""


def _decl(file, index):
	return file.decls[index]


def test_package_and_imports() -> None:
	file = parse_file("demo.go", SRC)
	assert file.package.name == "demo"
	assert file.filename == "demo.go"
	imports = [(s.name.name if s.name else None, s.import_path) for s in file.imports]
	assert imports == [(None, "fmt"), ("str", "strings"), (".", "math")]


def test_const_and_var_specs() -> None:
	file = parse_file("demo.go", SRC)
	consts = _decl(file, 1)
	assert isinstance(consts, GenDecl) and consts.tok == "const"
	first, second = consts.specs
	assert isinstance(first, ValueSpec) and [v.name for v in first.values] == ["iota"]
	assert isinstance(second, ValueSpec) and second.values == [] and second.type_expr is None

	var = _decl(file, 2)
	assert var.tok == "var"
	(spec,) = var.specs
	assert [n.name for n in spec.names] == ["x", "y"]
	assert isinstance(spec.type_expr, Ident) and spec.type_expr.name == "int"
	assert [v.value for v in spec.values] == ["1", "2"]


def test_generic_struct_type() -> None:
	file = parse_file("demo.go", SRC)
	(spec,) = _decl(file, 3).specs
	assert isinstance(spec, TypeSpec) and not spec.alias
	assert spec.name.name == "Pair"
	assert [[n.name for n in f.names] for f in spec.type_params.fields] == [["K"], ["V"]]
	assert isinstance(spec.type_expr, StructType)
	fields = spec.type_expr.fields.fields
	assert [[n.name for n in f.names] for f in fields] == [["Key"], ["Val"], []]
	assert fields[1].tag is not None and fields[1].tag.value == '`json:"v"`'
	assert isinstance(fields[2].type_expr, StarExpr)


def test_alias_of_instantiated_type() -> None:
	file = parse_file("demo.go", SRC)
	(spec,) = _decl(file, 4).specs
	assert spec.alias
	assert isinstance(spec.type_expr, IndexExpr)
	assert [i.name for i in spec.type_expr.indices] == ["string", "int"]


def test_method_with_generic_receiver() -> None:
	file = parse_file("demo.go", SRC)
	method = _decl(file, 5)
	assert isinstance(method, FuncDecl)
	assert method.name.name == "Get"
	(recv,) = method.recv.fields
	assert [n.name for n in recv.names] == ["p"]
	assert isinstance(recv.type_expr, StarExpr) and isinstance(recv.type_expr.x, IndexExpr)
	results = method.func_type.results
	assert [[n.name for n in f.names] for f in results.fields] == [["v"], ["ok"]]


def test_parameters_are_grouped_like_go() -> None:
	file = parse_file("demo.go", SRC)
	func = _decl(file, 6)
	(params,) = func.func_type.params.fields
	assert [n.name for n in params.names] == ["a", "b"]
	assert func.func_type.params.num_fields() == 2
	results = func.func_type.results.fields
	assert [f.names for f in results] == [[], []]
	assert [f.type_expr.name for f in results] == ["int", "error"]


def test_single_result_type_without_parens() -> None:
	file = parse_file("x.go", "package p\nfunc f() []string { return nil }\n")
	(field,) = file.decls[0].func_type.results.fields
	assert isinstance(field.type_expr, ArrayType) and field.type_expr.length is None


def test_qualified_and_array_types() -> None:
	src = "package p\nvar t time.Duration\nvar a [4]byte\nvar e [...]int\n"
	file = parse_file("x.go", src)
	t, a, e = (d.specs[0].type_expr for d in file.decls)
	assert isinstance(t, SelectorExpr) and t.sel.name == "Duration"
	assert isinstance(a, ArrayType) and a.length.value == "4"
	assert isinstance(e, ArrayType) and isinstance(e.length, EllipsisExpr)


def test_spans_point_into_the_source() -> None:
	file = parse_file("demo.go", SRC)
	func = _decl(file, 6)
	ret = func.body.stmts[0]
	assert SRC[ret.span.start_pos : ret.span.end_pos] == "return a / b, nil"
	assert ret.span.line == 28
