# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from goreturns.parser import parse_file
from goreturns.parser.ast import (
	AssignStmt,
	BinaryExpr,
	BranchStmt,
	CallExpr,
	CompositeLit,
	DeferStmt,
	ForStmt,
	FuncLit,
	GoStmt,
	Ident,
	IfStmt,
	IncDecStmt,
	IndexExpr,
	KeyValueExpr,
	LabeledStmt,
	ParenExpr,
	RangeStmt,
	ReturnStmt,
	SelectStmt,
	SelectorExpr,
	SliceExpr,
	StarExpr,
	SwitchStmt,
	TypeAssertExpr,
	TypeSwitchStmt,
	UnaryExpr,
)

LOOPS = """
package demo

func F(xs []int, m map[string]int, ch chan int) (total int) {
	for i := 0; i < len(xs); i++ {
		total += xs[i]
	}
	for _, x := range xs {
		total += x
	}
	for k := range m {
		_ = k
	}
	for total < 10 {
		total++
	}
	switch v := total; {
	case v > 5:
		fallthrough
	default:
	}
	select {
	case v := <-ch:
		_ = v
	default:
	}
	go func() {}()
	defer close(ch)
	if err := g(); err != nil {
		return
	} else if total == 0 {
		goto done
	}
done:
	return
}
"""


def _body(src: str):
	file = parse_file("x.go", src)
	return file.decls[-1].body.stmts


def test_statement_kinds_in_order() -> None:
	kinds = [type(s) for s in _body(LOOPS)]
	assert kinds == [
		ForStmt,
		RangeStmt,
		RangeStmt,
		ForStmt,
		SwitchStmt,
		SelectStmt,
		GoStmt,
		DeferStmt,
		IfStmt,
		LabeledStmt,
	]


def test_three_clause_for() -> None:
	loop = _body(LOOPS)[0]
	assert isinstance(loop.init, AssignStmt) and loop.init.tok == ":="
	assert isinstance(loop.cond, BinaryExpr) and loop.cond.op == "<"
	assert isinstance(loop.post, IncDecStmt) and loop.post.tok == "++"
	(stmt,) = loop.body.stmts
	assert isinstance(stmt, AssignStmt) and stmt.tok == "+="
	assert isinstance(stmt.rhs[0], IndexExpr)


def test_range_clauses() -> None:
	stmts = _body(LOOPS)
	both, key_only = stmts[1], stmts[2]
	assert both.key.name == "_" and both.value.name == "x" and both.tok == ":="
	assert key_only.key.name == "k" and key_only.value is None
	cond_only = stmts[3]
	assert cond_only.init is None and cond_only.post is None
	assert isinstance(cond_only.cond, BinaryExpr)


def test_switch_with_init_and_no_tag() -> None:
	switch = _body(LOOPS)[4]
	assert isinstance(switch.init, AssignStmt)
	assert switch.tag is None
	case, default = switch.clauses
	assert isinstance(case.body[0], BranchStmt) and case.body[0].tok == "fallthrough"
	assert default.exprs is None and default.body == []


def test_select_clauses() -> None:
	select = _body(LOOPS)[5]
	recv, default = select.clauses
	assert isinstance(recv.comm, AssignStmt)
	assert isinstance(recv.comm.rhs[0], UnaryExpr) and recv.comm.rhs[0].op == "<-"
	assert default.comm is None


def test_go_defer_if_and_label() -> None:
	stmts = _body(LOOPS)
	go, defer, branch, labeled = stmts[6], stmts[7], stmts[8], stmts[9]
	assert isinstance(go.call, CallExpr) and isinstance(go.call.fun, FuncLit)
	assert isinstance(defer.call, CallExpr) and defer.call.fun.name == "close"
	assert isinstance(branch.init, AssignStmt)
	assert isinstance(branch.else_, IfStmt)
	(goto,) = branch.else_.body.stmts
	assert goto.tok == "goto" and goto.label.name == "done"
	assert labeled.label.name == "done"
	assert isinstance(labeled.stmt, ReturnStmt) and labeled.stmt.results == []


def test_type_switch() -> None:
	src = """
package demo

func T(x any) int {
	switch v := x.(type) {
	case int, int64:
		return 1
	case nil:
		return 0
	}
	return 2
}
"""
	switch = _body(src)[0]
	assert isinstance(switch, TypeSwitchStmt)
	assert isinstance(switch.assign, AssignStmt)
	assert switch.assign.lhs[0].name == "v"
	guard = switch.assign.rhs[0]
	assert isinstance(guard, TypeAssertExpr) and guard.type_expr is None
	assert [e.name for e in switch.clauses[0].exprs] == ["int", "int64"]


def test_expressions() -> None:
	src = """
package demo

var v = []int{1, 2, 3}[1:2]
var s = struct{ A int }{A: 1}
var f = pkg.Func[int](a, b...)
var p = &T{X: 1}
var c = x.(*T)
var n = -a * (b + c)
"""
	file = parse_file("x.go", src)
	v, s, f, p, c, n = (d.specs[0].values[0] for d in file.decls)

	assert isinstance(v, SliceExpr) and isinstance(v.x, CompositeLit) and len(v.x.elts) == 3

	assert isinstance(s, CompositeLit)
	(elt,) = s.elts
	assert isinstance(elt, KeyValueExpr) and elt.key.name == "A"

	assert isinstance(f, CallExpr) and f.has_ellipsis
	assert isinstance(f.fun, IndexExpr) and isinstance(f.fun.x, SelectorExpr)
	assert [a.name for a in f.args] == ["a", "b"]

	assert isinstance(p, UnaryExpr) and p.op == "&" and isinstance(p.x, CompositeLit)

	assert isinstance(c, TypeAssertExpr) and isinstance(c.type_expr, StarExpr)

	assert isinstance(n, BinaryExpr) and n.op == "*"
	assert isinstance(n.x, UnaryExpr) and n.x.op == "-"
	assert isinstance(n.y, ParenExpr)


def test_semicolons_and_comments_terminate_statements() -> None:
	src = "package p\nfunc f() { a := 1; b := 2 /* x\n */ c := a + b // done\n_ = c }\n"
	stmts = _body(src)
	assert [s.lhs[0].name for s in stmts] == ["a", "b", "c", "_"]
	assert all(isinstance(s.lhs[0], Ident) for s in stmts)
