# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Go syntax tree.

The node set mirrors Go's own `go/ast` package closely enough that the
rewrite passes read like their Go counterparts: expressions, type
expressions, statements, declarations and the file. Nodes are mutable
dataclasses compared by identity; list-valued fields are plain lists so a
pass can splice new children in place.

Every node carries a `Span` (empty for synthesized nodes) and a `node_id`
assigned once per invocation by `assign_node_ids`, which side tables such
as the checker's type information key on.
"""

from __future__ import annotations

import copy
from dataclasses import dataclass, field, fields
from enum import Enum
from typing import Iterator, List, Optional

from goreturns.core.span import Span

NodeId = int


class Node:
	"""Base class for every syntax tree node."""

	node_id: NodeId = 0
	span: Span


class Expr(Node):
	"""Expressions, including type expressions."""


class Stmt(Node):
	"""Statements."""


class Decl(Node):
	"""Top-level (or statement-level) declarations."""


class Spec(Node):
	"""Import, value and type specs inside a general declaration."""


class LitKind(Enum):
	INT = "INT"
	FLOAT = "FLOAT"
	IMAG = "IMAG"
	CHAR = "CHAR"
	STRING = "STRING"


class ChanDir(Enum):
	BOTH = "chan"
	SEND = "chan<-"
	RECV = "<-chan"


# Expressions ---------------------------------------------------------------


@dataclass(eq=False)
class Ident(Expr):
	name: str
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class BasicLit(Expr):
	kind: LitKind
	value: str
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class CompositeLit(Expr):
	type_expr: Optional[Expr]
	elts: List[Expr] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class FuncLit(Expr):
	func_type: "FuncType"
	body: "BlockStmt"
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class ParenExpr(Expr):
	x: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class SelectorExpr(Expr):
	x: Expr
	sel: Ident
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class IndexExpr(Expr):
	"""`x[i]`, or a generic instantiation `f[T1, T2]` with several indices."""

	x: Expr
	indices: List[Expr]
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class SliceExpr(Expr):
	x: Expr
	low: Optional[Expr]
	high: Optional[Expr]
	max: Optional[Expr] = None
	slice3: bool = False
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class TypeAssertExpr(Expr):
	"""`x.(T)`; `type_expr` is None for the `x.(type)` guard of a type switch."""

	x: Expr
	type_expr: Optional[Expr]
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class CallExpr(Expr):
	fun: Expr
	args: List[Expr] = field(default_factory=list)
	has_ellipsis: bool = False
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class StarExpr(Expr):
	"""Pointer type `*T` or dereference `*x`."""

	x: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class UnaryExpr(Expr):
	op: str
	x: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class BinaryExpr(Expr):
	x: Expr
	op: str
	y: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class KeyValueExpr(Expr):
	key: Expr
	value: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class Ellipsis(Expr):
	"""`...T` in a variadic parameter, or `[...]T` array length (elt None)."""

	elt: Optional[Expr] = None
	span: Span = field(default_factory=Span)


# Types ---------------------------------------------------------------------


@dataclass(eq=False)
class ArrayType(Expr):
	"""`[N]T` (length set), `[...]T` (length is Ellipsis) or slice `[]T` (length None)."""

	length: Optional[Expr]
	elt: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class Field(Node):
	names: List[Ident]
	type_expr: Expr
	tag: Optional[BasicLit] = None
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class FieldList(Node):
	fields: List[Field] = field(default_factory=list)
	span: Span = field(default_factory=Span)

	def num_fields(self) -> int:
		"""Number of declared entries; a field with several names counts once per name."""
		return sum(max(1, len(f.names)) for f in self.fields)


@dataclass(eq=False)
class StructType(Expr):
	fields: FieldList
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class FuncType(Expr):
	params: FieldList
	results: Optional[FieldList] = None
	type_params: Optional[FieldList] = None
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class InterfaceType(Expr):
	"""Methods are fields with a FuncType; embedded types and unions have no names."""

	methods: FieldList
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class MapType(Expr):
	key: Expr
	value: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class ChanType(Expr):
	direction: ChanDir
	value: Expr
	span: Span = field(default_factory=Span)


# Statements ----------------------------------------------------------------


@dataclass(eq=False)
class DeclStmt(Stmt):
	decl: "GenDecl"
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class LabeledStmt(Stmt):
	label: Ident
	stmt: Optional[Stmt]
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class ExprStmt(Stmt):
	x: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class SendStmt(Stmt):
	chan: Expr
	value: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class IncDecStmt(Stmt):
	x: Expr
	tok: str
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class AssignStmt(Stmt):
	"""Assignment (`=`, `op=`) or short variable declaration (`:=`)."""

	lhs: List[Expr]
	tok: str
	rhs: List[Expr]
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class GoStmt(Stmt):
	call: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class DeferStmt(Stmt):
	call: Expr
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class ReturnStmt(Stmt):
	results: List[Expr] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class BranchStmt(Stmt):
	tok: str
	label: Optional[Ident] = None
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class BlockStmt(Stmt):
	stmts: List[Stmt] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class IfStmt(Stmt):
	init: Optional[Stmt]
	cond: Expr
	body: BlockStmt
	else_: Optional[Stmt] = None
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class CaseClause(Stmt):
	"""A switch case; `exprs` is None for `default`."""

	exprs: Optional[List[Expr]]
	body: List[Stmt] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class SwitchStmt(Stmt):
	init: Optional[Stmt]
	tag: Optional[Expr]
	clauses: List[CaseClause] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class TypeSwitchStmt(Stmt):
	"""`assign` is `x := y.(type)` (an AssignStmt) or `y.(type)` (an ExprStmt)."""

	init: Optional[Stmt]
	assign: Stmt
	clauses: List[CaseClause] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class CommClause(Stmt):
	"""A select case; `comm` is None for `default`."""

	comm: Optional[Stmt]
	body: List[Stmt] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class SelectStmt(Stmt):
	clauses: List[CommClause] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class ForStmt(Stmt):
	init: Optional[Stmt]
	cond: Optional[Expr]
	post: Optional[Stmt]
	body: BlockStmt
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class RangeStmt(Stmt):
	key: Optional[Expr]
	value: Optional[Expr]
	tok: Optional[str]
	x: Expr
	body: BlockStmt
	span: Span = field(default_factory=Span)


# Declarations --------------------------------------------------------------


@dataclass(eq=False)
class ImportSpec(Spec):
	name: Optional[Ident]
	path: BasicLit
	span: Span = field(default_factory=Span)

	@property
	def import_path(self) -> str:
		return unquote(self.path.value)


@dataclass(eq=False)
class ValueSpec(Spec):
	names: List[Ident]
	type_expr: Optional[Expr] = None
	values: List[Expr] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class TypeSpec(Spec):
	name: Ident
	type_expr: Expr
	type_params: Optional[FieldList] = None
	alias: bool = False
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class GenDecl(Decl):
	"""`import`, `const`, `type` or `var` declaration (`tok` holds the keyword)."""

	tok: str
	specs: List[Spec] = field(default_factory=list)
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class FuncDecl(Decl):
	recv: Optional[FieldList]
	name: Ident
	func_type: FuncType
	body: Optional[BlockStmt] = None
	span: Span = field(default_factory=Span)


@dataclass(eq=False)
class File(Node):
	package: Ident
	decls: List[Decl] = field(default_factory=list)
	filename: str = ""
	span: Span = field(default_factory=Span)

	@property
	def imports(self) -> List[ImportSpec]:
		specs: List[ImportSpec] = []
		for decl in self.decls:
			if isinstance(decl, GenDecl) and decl.tok == "import":
				specs.extend(s for s in decl.specs if isinstance(s, ImportSpec))
		return specs


# Helpers -------------------------------------------------------------------


def unquote(literal: str) -> str:
	"""Strip the quotes of an import path literal (interpreted or raw)."""
	if len(literal) >= 2 and literal[0] == literal[-1] and literal[0] in "\"`":
		return literal[1:-1]
	return literal


def unparen(expr: Expr) -> Expr:
	while isinstance(expr, ParenExpr):
		expr = expr.x
	return expr


def iter_child_nodes(node: Node) -> Iterator[Node]:
	"""Yield the direct children of `node` in field (source) order."""
	for f in fields(node):  # type: ignore[arg-type]
		if f.name == "span":
			continue
		value = getattr(node, f.name)
		if isinstance(value, Node):
			yield value
		elif isinstance(value, list):
			for item in value:
				if isinstance(item, Node):
					yield item


def walk(node: Node) -> Iterator[Node]:
	"""Pre-order traversal of `node` and all of its descendants."""
	stack = [node]
	while stack:
		current = stack.pop()
		yield current
		stack.extend(reversed(list(iter_child_nodes(current))))


def clone(node: Node) -> Node:
	"""Deep copy of `node` with node ids cleared; spans are kept."""
	copied = copy.deepcopy(node)
	for sub in walk(copied):
		sub.node_id = 0
	return copied


__all__ = [
	"ArrayType",
	"AssignStmt",
	"BasicLit",
	"BinaryExpr",
	"BlockStmt",
	"BranchStmt",
	"CallExpr",
	"CaseClause",
	"ChanDir",
	"ChanType",
	"CommClause",
	"CompositeLit",
	"Decl",
	"DeclStmt",
	"DeferStmt",
	"Ellipsis",
	"Expr",
	"ExprStmt",
	"Field",
	"FieldList",
	"File",
	"ForStmt",
	"FuncDecl",
	"FuncLit",
	"FuncType",
	"GenDecl",
	"GoStmt",
	"Ident",
	"IfStmt",
	"ImportSpec",
	"IncDecStmt",
	"IndexExpr",
	"InterfaceType",
	"KeyValueExpr",
	"LabeledStmt",
	"LitKind",
	"MapType",
	"Node",
	"NodeId",
	"ParenExpr",
	"RangeStmt",
	"ReturnStmt",
	"SelectStmt",
	"SelectorExpr",
	"SendStmt",
	"SliceExpr",
	"Spec",
	"StarExpr",
	"Stmt",
	"StructType",
	"SwitchStmt",
	"TypeAssertExpr",
	"TypeSpec",
	"TypeSwitchStmt",
	"UnaryExpr",
	"ValueSpec",
	"clone",
	"iter_child_nodes",
	"unparen",
	"unquote",
	"walk",
]
