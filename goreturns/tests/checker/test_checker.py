# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from goreturns.checker import RETURN_COUNT_CODE, UNDEFINED_CODE, check_package, is_return_count_error
from goreturns.checker.types import INVALID, Named, Pointer, Tuple, type_string
from goreturns.parser import assign_node_ids, parse_file
from goreturns.parser.ast import CallExpr, Ident, ReturnStmt, TypeSpec, walk
from goreturns.returns.call_arity import dotted_name


def check(*sources: str):
	files = []
	next_id = 1
	for i, src in enumerate(sources):
		file = parse_file(f"f{i}.go", src)
		next_id = assign_node_ids(file, start=next_id)
		files.append(file)
	return files, check_package(files[0], files[1:])


def find_call(file, name: str) -> CallExpr:
	for node in walk(file):
		if isinstance(node, CallExpr) and dotted_name(node.fun) == name:
			return node
	raise AssertionError(f"no call of {name}")


def test_indexed_standard_library_calls() -> None:
	src = """package p

import (
	"os"
	"strconv"
)

func open() (*os.File, error) {
	f, err := os.Open("x")
	return f, err
}

func itoa() (string, error) {
	return strconv.Itoa(1)
}
"""
	(file,), result = check(src)
	assert result.info.type_of(find_call(file, "os.Open")) == Tuple((INVALID, INVALID))
	assert result.info.type_of(find_call(file, "strconv.Itoa")) == INVALID
	[diag] = result.errors
	assert diag.code == RETURN_COUNT_CODE
	assert is_return_count_error(diag)
	assert diag.message == "wrong number of return values (have 1, want 2)"
	assert diag.span.line == 14


def test_unindexed_calls_stay_unknown() -> None:
	src = "package p\nimport \"example.com/lib\"\nfunc f() { lib.Do() }\n"
	(file,), result = check(src)
	assert result.errors == []
	assert result.info.type_of(find_call(file, "lib.Do")) is None


def test_undefined_names() -> None:
	src = """package p

func f(m Missing) int {
	x := 1
	return x + y
}
"""
	_, result = check(src)
	assert [d.message for d in result.errors] == ["undefined: Missing", "undefined: y"]
	assert all(d.code == UNDEFINED_CODE for d in result.errors)
	last = result.errors[-1]
	assert (last.span.file, last.span.line) == ("f0.go", 5)
	assert str(last).startswith("f0.go:5:")


def test_diagnostics_are_reported_once_per_node() -> None:
	src = "package p\nvar v = missing()\nfunc f() { _ = v }\n"
	_, result = check(src)
	assert [d.message for d in result.errors] == ["undefined: missing"]


def test_dot_imports_hide_undefined_names() -> None:
	src = "package p\nimport . \"math\"\nfunc f() float64 { return Sqrt(2) }\n"
	_, result = check(src)
	assert result.errors == []


def test_closure_calls_have_tuple_types() -> None:
	src = """package p

func f() {
	g := func() (int, error) { return 0, nil }
	_, _ = g()
}
"""
	(file,), result = check(src)
	t = result.info.type_of(find_call(file, "g"))
	assert type_string(t) == "(int, error)"


def test_methods_resolve_across_files() -> None:
	unit = "package p\nfunc Load(t *Thing) (int, error) {\n\treturn t.Err()\n}\n"
	thing = "package p\ntype Thing struct{}\nfunc (t *Thing) Err() error { return nil }\n"
	(file, _), result = check(unit, thing)
	assert result.info.type_of(find_call(file, "t.Err")) == Named("error")
	assert [d.code for d in result.errors] == [RETURN_COUNT_CODE]
	assert result.errors[0].span.file == "f0.go"


def test_errors_in_siblings_name_their_file() -> None:
	unit = "package p\nfunc f() {}\n"
	other = "package p\nfunc g() {\n\th()\n}\n"
	_, result = check(unit, other)
	[diag] = result.errors
	assert (diag.span.file, diag.span.line, diag.message) == ("f1.go", 3, "undefined: h")


STORE = """package store

import (
	"errors"
	"fmt"
	"sort"
	"sync"
)

type Kind int

const (
	Small Kind = iota
	Large
)

func (k Kind) String() string {
	switch k {
	case Small:
		return "small"
	}
	return "large"
}

type Item struct {
	Name string
	Kind Kind
	Size int64
}

type Getter interface {
	Get(name string) (*Item, error)
}

var ErrMissing = errors.New("missing")

type Store struct {
	mu    sync.Mutex
	items map[string]*Item
}

var _ Getter = (*Store)(nil)

func NewStore() *Store {
	return &Store{items: make(map[string]*Item)}
}

func (s *Store) Get(name string) (*Item, error) {
	s.mu.Lock()
	defer s.mu.Unlock()
	item, ok := s.items[name]
	if !ok {
		return nil, fmt.Errorf("%w: %s", ErrMissing, name)
	}
	return item, nil
}

func (s *Store) Names() []string {
	names := make([]string, 0, len(s.items))
	for name := range s.items {
		names = append(names, name)
	}
	sort.Strings(names)
	return names
}

func Describe(v any) string {
	switch x := v.(type) {
	case *Item:
		return x.Name
	case Kind:
		return x.String()
	case nil:
		return "nil"
	default:
		return fmt.Sprint(x)
	}
}

type Pair[K comparable, V any] struct {
	Key K
	Val V
}

func (p Pair[K, V]) First() K { return p.Key }

func Map[T, U any](xs []T, f func(T) U) []U {
	out := make([]U, 0, len(xs))
	for _, x := range xs {
		out = append(out, f(x))
	}
	return out
}

func Lookup(g Getter, names ...string) ([]*Item, error) {
	var out []*Item
	for _, name := range names {
		item, err := g.Get(name)
		if err != nil {
			return nil, err
		}
		out = append(out, item)
	}
	return out, nil
}
"""


def test_realistic_package_checks_cleanly() -> None:
	(file,), result = check(STORE)
	assert result.errors == []
	info = result.info
	assert type_string(info.type_of(find_call(file, "g.Get"))) == "(*Item, error)"
	assert type_string(info.type_of(find_call(file, "x.String"))) == "string"
	assert type_string(info.type_of(find_call(file, "make"))) == "map[string]*Item"


def test_comma_ok_index_binds_the_element_type() -> None:
	(file,), result = check(STORE)
	returns = [n for n in walk(file) if isinstance(n, ReturnStmt) and len(n.results) == 2]
	# `return item, nil` in Store.Get
	item = next(r.results[0] for r in returns if isinstance(r.results[0], Ident) and r.results[0].name == "item")
	assert result.info.type_of(item) == Pointer(Named("Item", decl_id=item_decl_id(file)))


def item_decl_id(file) -> int:
	for node in walk(file):
		if isinstance(node, TypeSpec) and node.name.name == "Item":
			return node.node_id
	raise AssertionError("no Item type")


def test_calls_through_defined_func_types() -> None:
	src = """package p

type Handler func() (int, error)

type Alias = func() string

func g() error { return nil }

func (g Handler) Call() (int, error) {
	return g()
}

func use(a Alias) string {
	return a()
}
"""
	(file,), result = check(src)
	assert result.errors == []
	assert type_string(result.info.type_of(find_call(file, "g"))) == "(int, error)"
	assert type_string(result.info.type_of(find_call(file, "a"))) == "string"
