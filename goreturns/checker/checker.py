# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Package-level type checking.

The checker resolves the types of the expressions of one package so the
return rewrite can tell single-valued calls from multi-valued ones. It
does not aim to be a complete Go type checker: it reports undefined names
and return statements whose value count does not match the enclosing
signature, and leaves everything it cannot follow unresolved. Imported
packages are not loaded; calls into well-known standard library functions
resolve through `stdlib_index`.
"""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, List, Optional, Sequence, Set, Tuple as Pair

from goreturns.core.diagnostics import Diagnostic
from goreturns.parser.ast import (
	ArrayType,
	AssignStmt,
	BasicLit,
	BinaryExpr,
	BlockStmt,
	BranchStmt,
	CallExpr,
	ChanType,
	CompositeLit,
	DeclStmt,
	DeferStmt,
	Ellipsis,
	Expr,
	ExprStmt,
	FieldList,
	File,
	ForStmt,
	FuncDecl,
	FuncLit,
	FuncType,
	GenDecl,
	GoStmt,
	Ident,
	IfStmt,
	IncDecStmt,
	IndexExpr,
	InterfaceType,
	KeyValueExpr,
	LabeledStmt,
	LitKind,
	MapType,
	Node,
	NodeId,
	ParenExpr,
	RangeStmt,
	ReturnStmt,
	SelectorExpr,
	SelectStmt,
	SendStmt,
	SliceExpr,
	StarExpr,
	Stmt,
	StructType,
	SwitchStmt,
	TypeAssertExpr,
	TypeSpec,
	TypeSwitchStmt,
	UnaryExpr,
	ValueSpec,
	unparen,
)

from . import stdlib_index
from .scope import Obj, ObjKind, Scope
from .types import (
	INVALID,
	Array,
	Basic,
	Chan,
	CheckResult,
	Interface,
	Map,
	Named,
	Pointer,
	Signature,
	Slice,
	Struct,
	Tuple,
	Type,
	TypeInfo,
	TypeParam,
	call_result,
)
from .universe import BOOL_TYPE, ERROR_TYPE, INT_TYPE, STRING_TYPE, new_universe

PHASE = "typecheck"
RETURN_COUNT_CODE = "E-RETURN-COUNT"
UNDEFINED_CODE = "E-UNDEFINED"

_LITERAL_TYPES = {
	LitKind.INT: INT_TYPE,
	LitKind.FLOAT: Basic("float64"),
	LitKind.IMAG: Basic("complex128"),
	LitKind.CHAR: Basic("rune"),
	LitKind.STRING: STRING_TYPE,
}

_COMPARISON_OPS = frozenset({"==", "!=", "<", "<=", ">", ">=", "&&", "||"})


def is_return_count_error(diag: Diagnostic) -> bool:
	"""True for the "wrong number of return values" errors the rewrite exists to fix."""
	return diag.code == RETURN_COUNT_CODE


@dataclass
class _FuncContext:
	results: int
	named: bool


def _receiver_base(recv: FieldList) -> Optional[Ident]:
	if not recv.fields:
		return None
	t = unparen(recv.fields[0].type_expr)
	if isinstance(t, StarExpr):
		t = unparen(t.x)
	if isinstance(t, IndexExpr):
		t = unparen(t.x)
	return t if isinstance(t, Ident) else None


def _receiver_type_params(recv: Optional[FieldList]) -> List[Ident]:
	if recv is None or not recv.fields:
		return []
	t = unparen(recv.fields[0].type_expr)
	if isinstance(t, StarExpr):
		t = unparen(t.x)
	if isinstance(t, IndexExpr):
		return [i for i in t.indices if isinstance(i, Ident)]
	return []


class Checker:
	def __init__(self, files: Sequence[File]) -> None:
		self._files = list(files)
		self._pkg = Scope(parent=new_universe())
		self.info = TypeInfo()
		self.diagnostics: List[Diagnostic] = []
		self._reported: Set[Pair[NodeId, str]] = set()
		self._filename = ""
		self._scope_files: Dict[int, str] = {}
		self._methods: Dict[str, Dict[str, Pair[FuncDecl, Scope]]] = {}
		self._type_specs: Dict[NodeId, Pair[TypeSpec, Scope]] = {}
		self._decl_scopes: Dict[NodeId, Scope] = {}
		self._signatures: Dict[NodeId, Signature] = {}
		self._checked_bodies: Set[NodeId] = set()
		self._resolving: Set[int] = set()

	def check(self) -> CheckResult:
		file_scopes = [self._collect(file) for file in self._files]
		for file, scope in zip(self._files, file_scopes):
			self._filename = file.filename
			self._check_file(file, scope)
		return CheckResult(self.info, self.diagnostics)

	# Diagnostics -----------------------------------------------------------

	def _error(self, node: Node, message: str, code: str) -> None:
		key = (node.node_id, message)
		if key in self._reported:
			return
		self._reported.add(key)
		span = replace(node.span, file=self._filename)
		self.diagnostics.append(Diagnostic(message, code=code, phase=PHASE, span=span))

	def _undefined(self, ident: Ident, scope: Scope) -> None:
		if ident.name == "_" or scope.has_dot_imports():
			return
		self._error(ident, f"undefined: {ident.name}", UNDEFINED_CODE)

	# Package collection ----------------------------------------------------

	def _collect(self, file: File) -> Scope:
		scope = self._pkg.child()
		self._scope_files[id(scope)] = file.filename
		for spec in file.imports:
			if spec.name is None:
				name = stdlib_index.package_name_for_path(spec.import_path)
			elif spec.name.name == ".":
				scope.dot_imports = True
				continue
			else:
				name = spec.name.name
			scope.insert(Obj(ObjKind.PKG_NAME, name, decl=spec, path=spec.import_path))

		for decl in file.decls:
			if isinstance(decl, FuncDecl):
				if decl.recv is None:
					if decl.name.name != "init":
						self._pkg.insert(Obj(ObjKind.FUNC, decl.name.name, decl=decl, scope=scope))
				else:
					base = _receiver_base(decl.recv)
					if base is not None:
						self._methods.setdefault(base.name, {})[decl.name.name] = (decl, scope)
			elif isinstance(decl, GenDecl) and decl.tok != "import":
				self._declare_gen(decl, self._pkg, scope)
		return scope

	def _declare_gen(self, decl: GenDecl, target: Scope, file_scope: Scope) -> None:
		"""Insert the names of a package-level declaration; their types are resolved on first use."""
		kind = ObjKind.CONST if decl.tok == "const" else ObjKind.VAR
		last_valued: Optional[ValueSpec] = None
		for spec in decl.specs:
			if isinstance(spec, TypeSpec):
				tscope = self._type_scope(spec, file_scope)
				self._type_specs[spec.node_id] = (spec, tscope)
				t = None if spec.alias else Named(spec.name.name, decl_id=spec.node_id)
				target.insert(Obj(ObjKind.TYPE, spec.name.name, type=t, decl=spec, scope=tscope))
			elif isinstance(spec, ValueSpec):
				if spec.values or spec.type_expr is not None:
					last_valued = spec
				source = spec if kind is ObjKind.VAR or last_valued is None else last_valued
				for i, name in enumerate(spec.names):
					target.insert(Obj(kind, name.name, decl=source, scope=file_scope, index=i))

	def _type_scope(self, spec: TypeSpec, scope: Scope) -> Scope:
		if spec.type_params is None:
			return scope
		tscope = scope.child()
		self._scope_files[id(tscope)] = self._scope_files.get(id(scope), self._filename)
		self._declare_type_params(spec.type_params, tscope)
		return tscope

	def _declare_type_params(self, params: FieldList, scope: Scope) -> None:
		for f in params.fields:
			for name in f.names:
				scope.insert(Obj(ObjKind.TYPE, name.name, type=TypeParam(name.name)))

	def _check_constraints(self, params: Optional[FieldList], scope: Scope) -> None:
		if params is not None:
			for f in params.fields:
				self._resolve_type(f.type_expr, scope)

	def _decl_scope(self, decl: FuncDecl, file_scope: Scope) -> Scope:
		"""The scope of a function's signature: its type parameters and those of its receiver."""
		scope = self._decl_scopes.get(decl.node_id)
		if scope is not None:
			return scope
		scope = file_scope.child()
		self._scope_files[id(scope)] = self._scope_files.get(id(file_scope), self._filename)
		for ident in _receiver_type_params(decl.recv):
			scope.insert(Obj(ObjKind.TYPE, ident.name, type=TypeParam(ident.name)))
		if decl.func_type.type_params is not None:
			self._declare_type_params(decl.func_type.type_params, scope)
		self._check_constraints(decl.func_type.type_params, scope)
		self._decl_scopes[decl.node_id] = scope
		return scope

	def _func_signature(self, decl: FuncDecl, file_scope: Scope) -> Signature:
		sig = self._signatures.get(decl.node_id)
		if sig is None:
			sig = self._signature(decl.func_type, self._decl_scope(decl, file_scope))
			self._signatures[decl.node_id] = sig
		return sig

	def _obj_type(self, obj: Obj) -> Optional[Type]:
		"""Type of `obj`, resolving package-level declarations on first use."""
		if obj.type is not None or obj.decl is None or obj.scope is None:
			return obj.type
		key = id(obj)
		if key in self._resolving:
			return None
		self._resolving.add(key)
		saved = self._filename
		self._filename = self._scope_files.get(id(obj.scope), saved)
		try:
			decl = obj.decl
			if isinstance(decl, FuncDecl):
				obj.type = self._func_signature(decl, obj.scope)
			elif isinstance(decl, TypeSpec):
				obj.type = self._resolve_type(decl.type_expr, obj.scope)
			elif isinstance(decl, ValueSpec):
				if decl.type_expr is not None:
					obj.type = self._resolve_type(decl.type_expr, obj.scope)
				elif decl.values:
					types = self._value_types(decl.values, len(decl.names), obj.scope)
					obj.type = types[obj.index] if obj.index < len(types) else None
		finally:
			self._filename = saved
			self._resolving.discard(key)
		return obj.type

	# Declarations ----------------------------------------------------------

	def _check_file(self, file: File, scope: Scope) -> None:
		for decl in file.decls:
			if isinstance(decl, FuncDecl):
				self._check_func_decl(decl, scope)
			elif isinstance(decl, GenDecl) and decl.tok != "import":
				for spec in decl.specs:
					if isinstance(spec, TypeSpec):
						_, tscope = self._type_specs[spec.node_id]
						self._check_constraints(spec.type_params, tscope)
						self._resolve_type(spec.type_expr, tscope)
					elif isinstance(spec, ValueSpec):
						if spec.type_expr is not None:
							self._resolve_type(spec.type_expr, scope)
						for value in spec.values:
							self._expr(value, scope)

	def _check_func_decl(self, decl: FuncDecl, file_scope: Scope) -> None:
		sig = self._func_signature(decl, file_scope)
		scope = self._decl_scope(decl, file_scope).child()
		if decl.recv is not None:
			for f in decl.recv.fields:
				t = self._resolve_type(f.type_expr, scope)
				for name in f.names:
					scope.insert(Obj(ObjKind.VAR, name.name, type=t))
		self._declare_params(decl.func_type, sig, scope)
		if decl.body is not None:
			self._body(decl.body, scope, self._context(decl.func_type))

	def _context(self, func_type: FuncType) -> _FuncContext:
		results = func_type.results
		if results is None:
			return _FuncContext(0, False)
		named = bool(results.fields) and all(f.names for f in results.fields)
		return _FuncContext(results.num_fields(), named)

	def _declare_params(self, func_type: FuncType, sig: Signature, scope: Scope) -> None:
		lists = [(func_type.params, sig.params.items), (func_type.results, sig.results.items)]
		for fields, types in lists:
			if fields is None:
				continue
			i = 0
			for f in fields.fields:
				for name in f.names or [None]:
					t = types[i] if i < len(types) else None
					if name is not None:
						if isinstance(f.type_expr, Ellipsis) and t is not None:
							t = Slice(t)
						scope.insert(Obj(ObjKind.VAR, name.name, type=t))
					i += 1

	def _signature(self, func_type: FuncType, scope: Scope) -> Signature:
		variadic = False
		params: List[Type] = []
		for f in func_type.params.fields:
			expr = f.type_expr
			if isinstance(expr, Ellipsis):
				variadic = True
				expr = expr.elt
			t = self._resolve_type(expr, scope) if expr is not None else None
			params.extend([t or INVALID] * max(1, len(f.names)))
		results: List[Type] = []
		if func_type.results is not None:
			for f in func_type.results.fields:
				t = self._resolve_type(f.type_expr, scope)
				results.extend([t or INVALID] * max(1, len(f.names)))
		return Signature(Tuple(tuple(params)), Tuple(tuple(results)), variadic)

	def _local_decl(self, decl: GenDecl, scope: Scope) -> None:
		last_values: List[Optional[Type]] = []
		for spec in decl.specs:
			if isinstance(spec, TypeSpec):
				tscope = self._type_scope(spec, scope)
				obj = Obj(ObjKind.TYPE, spec.name.name)
				if not spec.alias:
					obj.type = Named(spec.name.name, decl_id=spec.node_id)
				scope.insert(obj)
				self._type_specs[spec.node_id] = (spec, tscope)
				t = self._resolve_type(spec.type_expr, tscope)
				if spec.alias:
					obj.type = t
			elif isinstance(spec, ValueSpec):
				declared = self._resolve_type(spec.type_expr, scope) if spec.type_expr is not None else None
				if spec.values:
					last_values = self._value_types(spec.values, len(spec.names), scope)
				values = last_values if decl.tok == "const" else self._padded(spec, last_values)
				kind = ObjKind.CONST if decl.tok == "const" else ObjKind.VAR
				for i, name in enumerate(spec.names):
					t = declared if declared is not None else (values[i] if i < len(values) else None)
					scope.insert(Obj(kind, name.name, type=t))

	@staticmethod
	def _padded(spec: ValueSpec, values: List[Optional[Type]]) -> List[Optional[Type]]:
		return values if spec.values else [None] * len(spec.names)

	# Statements ------------------------------------------------------------

	def _body(self, body: BlockStmt, scope: Scope, ctx: _FuncContext) -> None:
		for stmt in body.stmts:
			self._stmt(stmt, scope, ctx)

	def _stmts(self, stmts: Iterable[Stmt], scope: Scope, ctx: _FuncContext) -> None:
		for stmt in stmts:
			self._stmt(stmt, scope, ctx)

	def _stmt(self, stmt: Optional[Stmt], scope: Scope, ctx: _FuncContext) -> None:
		if stmt is None or isinstance(stmt, BranchStmt):
			return
		if isinstance(stmt, ExprStmt):
			self._expr(stmt.x, scope)
		elif isinstance(stmt, SendStmt):
			self._expr(stmt.chan, scope)
			self._expr(stmt.value, scope)
		elif isinstance(stmt, IncDecStmt):
			self._expr(stmt.x, scope)
		elif isinstance(stmt, AssignStmt):
			self._assign(stmt, scope)
		elif isinstance(stmt, (GoStmt, DeferStmt)):
			self._expr(stmt.call, scope)
		elif isinstance(stmt, ReturnStmt):
			self._return(stmt, scope, ctx)
		elif isinstance(stmt, BlockStmt):
			self._stmts(stmt.stmts, scope.child(), ctx)
		elif isinstance(stmt, LabeledStmt):
			self._stmt(stmt.stmt, scope, ctx)
		elif isinstance(stmt, DeclStmt):
			self._local_decl(stmt.decl, scope)
		elif isinstance(stmt, IfStmt):
			inner = scope.child()
			self._stmt(stmt.init, inner, ctx)
			self._expr(stmt.cond, inner)
			self._stmt(stmt.body, inner, ctx)
			self._stmt(stmt.else_, inner, ctx)
		elif isinstance(stmt, ForStmt):
			inner = scope.child()
			self._stmt(stmt.init, inner, ctx)
			if stmt.cond is not None:
				self._expr(stmt.cond, inner)
			self._stmt(stmt.post, inner, ctx)
			self._stmt(stmt.body, inner, ctx)
		elif isinstance(stmt, RangeStmt):
			self._range(stmt, scope, ctx)
		elif isinstance(stmt, SwitchStmt):
			inner = scope.child()
			self._stmt(stmt.init, inner, ctx)
			if stmt.tag is not None:
				self._expr(stmt.tag, inner)
			for clause in stmt.clauses:
				cscope = inner.child()
				for e in clause.exprs or []:
					self._expr(e, cscope)
				self._stmts(clause.body, cscope, ctx)
		elif isinstance(stmt, TypeSwitchStmt):
			self._type_switch(stmt, scope, ctx)
		elif isinstance(stmt, SelectStmt):
			for comm in stmt.clauses:
				cscope = scope.child()
				self._stmt(comm.comm, cscope, ctx)
				self._stmts(comm.body, cscope, ctx)

	def _assign(self, stmt: AssignStmt, scope: Scope) -> None:
		types = self._value_types(stmt.rhs, len(stmt.lhs), scope)
		if stmt.tok != ":=":
			for lhs in stmt.lhs:
				if not (isinstance(lhs, Ident) and lhs.name == "_"):
					self._expr(lhs, scope)
			return
		for lhs, t in zip(stmt.lhs, types):
			if isinstance(lhs, Ident):
				scope.insert(Obj(ObjKind.VAR, lhs.name, type=t))

	def _value_types(self, rhs: Sequence[Expr], n: int, scope: Scope) -> List[Optional[Type]]:
		"""Types of `n` values produced by `rhs`, distributing a multi-valued call or comma-ok form."""
		types = [self._expr(r, scope) for r in rhs]
		if len(rhs) == n:
			return types
		if len(rhs) == 1:
			t = types[0]
			if isinstance(t, Tuple) and len(t.items) == n:
				return list(t.items)
			x = unparen(rhs[0])
			comma_ok = isinstance(x, (TypeAssertExpr, IndexExpr)) or (isinstance(x, UnaryExpr) and x.op == "<-")
			if n == 2 and comma_ok:
				return [t, BOOL_TYPE]
		return [None] * n

	def _range(self, stmt: RangeStmt, scope: Scope, ctx: _FuncContext) -> None:
		inner = scope.child()
		xt = self._expr(stmt.x, inner)
		if isinstance(xt, Pointer) and isinstance(xt.elem, Array):
			xt = xt.elem
		key: Optional[Type] = None
		value: Optional[Type] = None
		if isinstance(xt, (Slice, Array)):
			key, value = INT_TYPE, xt.elem
		elif isinstance(xt, Map):
			key, value = xt.key, xt.value
		elif isinstance(xt, Chan):
			key = xt.elem
		elif xt == STRING_TYPE:
			key, value = INT_TYPE, Basic("rune")
		elif xt == INT_TYPE:
			key = INT_TYPE
		if stmt.tok == ":=":
			for target, t in ((stmt.key, key), (stmt.value, value)):
				if isinstance(target, Ident):
					inner.insert(Obj(ObjKind.VAR, target.name, type=t))
		else:
			for target in (stmt.key, stmt.value):
				if target is not None and not (isinstance(target, Ident) and target.name == "_"):
					self._expr(target, inner)
		self._stmt(stmt.body, inner, ctx)

	def _type_switch(self, stmt: TypeSwitchStmt, scope: Scope, ctx: _FuncContext) -> None:
		inner = scope.child()
		self._stmt(stmt.init, inner, ctx)
		binding: Optional[str] = None
		guard: Optional[Expr] = None
		if isinstance(stmt.assign, AssignStmt):
			lhs = stmt.assign.lhs[0]
			binding = lhs.name if isinstance(lhs, Ident) else None
			guard = stmt.assign.rhs[0]
		elif isinstance(stmt.assign, ExprStmt):
			guard = stmt.assign.x
		guarded = unparen(guard) if guard is not None else None
		xt = self._expr(guarded.x, inner) if isinstance(guarded, TypeAssertExpr) else None
		for clause in stmt.clauses:
			cscope = inner.child()
			exprs = clause.exprs or []
			types = [self._case_type(e, cscope) for e in exprs]
			if binding is not None:
				t = types[0] if len(types) == 1 and types[0] is not None else xt
				cscope.insert(Obj(ObjKind.VAR, binding, type=t))
			self._stmts(clause.body, cscope, ctx)

	def _case_type(self, expr: Expr, scope: Scope) -> Optional[Type]:
		if isinstance(expr, Ident) and expr.name == "nil":
			return None
		return self._resolve_type(expr, scope)

	def _return(self, stmt: ReturnStmt, scope: Scope, ctx: _FuncContext) -> None:
		types = [self._expr(r, scope) for r in stmt.results]
		want = ctx.results
		have = len(stmt.results)
		if have == 0 and ctx.named:
			return
		if have == 1 and want != 1 and isinstance(types[0], Tuple):
			have = len(types[0].items)
		if have != want:
			self._error(stmt, f"wrong number of return values (have {have}, want {want})", RETURN_COUNT_CODE)

	# Expressions -----------------------------------------------------------

	def _expr(self, expr: Expr, scope: Scope) -> Optional[Type]:
		cached = self.info.type_of(expr)
		if cached is not None:
			return cached
		t = self._expr_type(expr, scope)
		if t is not None:
			self.info.record(expr, t)
		return t

	def _expr_type(self, expr: Expr, scope: Scope) -> Optional[Type]:
		if isinstance(expr, Ident):
			if expr.name == "_":
				return None
			obj = scope.lookup(expr.name)
			if obj is None:
				self._undefined(expr, scope)
				return None
			if obj.kind in (ObjKind.VAR, ObjKind.CONST, ObjKind.FUNC, ObjKind.NIL):
				return self._obj_type(obj)
			return None
		if isinstance(expr, BasicLit):
			return _LITERAL_TYPES[expr.kind]
		if isinstance(expr, ParenExpr):
			return self._expr(expr.x, scope)
		if isinstance(expr, CompositeLit):
			t = self._resolve_type(expr.type_expr, scope) if expr.type_expr is not None else None
			self._elements(expr.elts, scope)
			return t
		if isinstance(expr, FuncLit):
			return self._func_lit(expr, scope)
		if isinstance(expr, SelectorExpr):
			return self._selector(expr, scope)
		if isinstance(expr, IndexExpr):
			return self._index(expr, scope)
		if isinstance(expr, SliceExpr):
			xt = self._expr(expr.x, scope)
			for part in (expr.low, expr.high, expr.max):
				if part is not None:
					self._expr(part, scope)
			if isinstance(xt, Pointer):
				xt = xt.elem
			return Slice(xt.elem) if isinstance(xt, Array) else xt
		if isinstance(expr, TypeAssertExpr):
			self._expr(expr.x, scope)
			return self._resolve_type(expr.type_expr, scope) if expr.type_expr is not None else None
		if isinstance(expr, CallExpr):
			return self._call(expr, scope)
		if isinstance(expr, StarExpr):
			xt = self._expr(expr.x, scope)
			return xt.elem if isinstance(xt, Pointer) else None
		if isinstance(expr, UnaryExpr):
			xt = self._expr(expr.x, scope)
			if expr.op == "&":
				return Pointer(xt) if xt is not None else None
			if expr.op == "<-":
				return xt.elem if isinstance(xt, Chan) else None
			if expr.op == "!":
				return BOOL_TYPE
			return xt
		if isinstance(expr, BinaryExpr):
			xt = self._expr(expr.x, scope)
			yt = self._expr(expr.y, scope)
			if expr.op in _COMPARISON_OPS:
				return BOOL_TYPE
			return xt or yt
		if isinstance(expr, KeyValueExpr):
			return self._expr(expr.value, scope)
		# A type in expression position (conversion callee, make argument, ...).
		self._resolve_type(expr, scope)
		return None

	def _elements(self, elts: Sequence[Expr], scope: Scope) -> None:
		for elt in elts:
			if isinstance(elt, KeyValueExpr):
				# Bare identifier keys name struct fields.
				if not isinstance(elt.key, Ident):
					self._element(elt.key, scope)
				self._element(elt.value, scope)
			else:
				self._element(elt, scope)

	def _element(self, elt: Expr, scope: Scope) -> None:
		if isinstance(elt, CompositeLit) and elt.type_expr is None:
			self._elements(elt.elts, scope)
		else:
			self._expr(elt, scope)

	def _func_lit(self, lit: FuncLit, scope: Scope) -> Signature:
		sig = self._signature(lit.func_type, scope)
		if lit.node_id not in self._checked_bodies:
			self._checked_bodies.add(lit.node_id)
			inner = scope.child()
			self._declare_params(lit.func_type, sig, inner)
			self._body(lit.body, inner, self._context(lit.func_type))
		return sig

	def _selector(self, expr: SelectorExpr, scope: Scope) -> Optional[Type]:
		x = unparen(expr.x)
		name = expr.sel.name
		if isinstance(x, Ident):
			obj = scope.lookup(x.name)
			if obj is not None and obj.kind is ObjKind.PKG_NAME:
				assert obj.path is not None
				count = stdlib_index.result_count(obj.path, name)
				if count is None:
					return None
				return Signature(results=Tuple((INVALID,) * count))
		xt = self._expr(x, scope)
		if xt is None:
			return None
		return self._member(xt, name)

	def _member(self, t: Type, name: str) -> Optional[Type]:
		"""Type of field or method `name` of a value of type `t`."""
		if isinstance(t, Pointer):
			t = t.elem
		if not isinstance(t, Named):
			return None
		if t == ERROR_TYPE:
			return Signature(results=Tuple((STRING_TYPE,))) if name == "Error" else None
		if t.pkg is not None or t.decl_id not in self._type_specs:
			return None
		spec, tscope = self._type_specs[t.decl_id]
		method = self._methods.get(t.name, {}).get(name)
		if method is not None:
			decl, file_scope = method
			return self._func_signature(decl, file_scope)
		underlying = unparen(spec.type_expr)
		if isinstance(underlying, StructType):
			for f in underlying.fields.fields:
				if any(n.name == name for n in f.names):
					return self._resolve_type(f.type_expr, tscope)
		elif isinstance(underlying, InterfaceType):
			for m in underlying.methods.fields:
				if m.names and m.names[0].name == name and isinstance(m.type_expr, FuncType):
					return self._signature(m.type_expr, tscope)
		return None

	def _index(self, expr: IndexExpr, scope: Scope) -> Optional[Type]:
		xt = self._expr(expr.x, scope)
		for idx in expr.indices:
			self._expr(idx, scope)
		if isinstance(xt, Pointer) and isinstance(xt.elem, Array):
			xt = xt.elem
		if isinstance(xt, (Slice, Array)):
			return xt.elem
		if isinstance(xt, Map):
			return xt.value
		if xt == STRING_TYPE:
			return Basic("byte")
		if isinstance(xt, Signature):
			# Instantiation of a generic function.
			return xt
		return None

	def _call(self, call: CallExpr, scope: Scope) -> Optional[Type]:
		fun = unparen(call.fun)
		conversion = self._conversion_type(fun, scope)
		if conversion is not None:
			for arg in call.args:
				self._expr(arg, scope)
			return conversion
		if isinstance(fun, Ident):
			obj = scope.lookup(fun.name)
			if obj is not None and obj.kind is ObjKind.BUILTIN:
				return self._builtin(fun.name, call, scope)
		ft = self._expr(fun, scope)
		for arg in call.args:
			self._expr(arg, scope)
		ft = self._underlying(ft)
		if isinstance(ft, Signature):
			return call_result(ft)
		return None

	def _underlying(self, t: Optional[Type]) -> Optional[Type]:
		"""The type a package-level defined type stands for: `type Handler func() error` gives the signature."""
		seen: Set[NodeId] = set()
		while isinstance(t, Named) and t.pkg is None and t.decl_id in self._type_specs and t.decl_id not in seen:
			seen.add(t.decl_id)
			spec, tscope = self._type_specs[t.decl_id]
			t = self._resolve_type(spec.type_expr, tscope)
		return t

	def _conversion_type(self, fun: Expr, scope: Scope) -> Optional[Type]:
		"""The target type if calling `fun` is a conversion, else None."""
		if isinstance(fun, Ident):
			obj = scope.lookup(fun.name)
			if obj is None or obj.kind is not ObjKind.TYPE:
				return None
			return self._obj_type(obj) or INVALID
		if isinstance(fun, SelectorExpr) and isinstance(unparen(fun.x), Ident):
			obj = scope.lookup(unparen(fun.x).name)  # type: ignore[attr-defined]
			if obj is not None and obj.kind is ObjKind.PKG_NAME and obj.path is not None:
				if stdlib_index.is_type_name(obj.path, fun.sel.name):
					return Named(fun.sel.name, pkg=obj.path)
			return None
		if isinstance(fun, (ArrayType, MapType, ChanType, FuncType, InterfaceType, StructType)):
			return self._resolve_type(fun, scope) or INVALID
		if isinstance(fun, StarExpr):
			inner = self._conversion_type(unparen(fun.x), scope)
			return Pointer(inner) if inner is not None else None
		if isinstance(fun, IndexExpr):
			base = self._conversion_type(unparen(fun.x), scope)
			if base is not None:
				for idx in fun.indices:
					self._resolve_type(idx, scope)
			return base
		return None

	def _builtin(self, name: str, call: CallExpr, scope: Scope) -> Type:
		args = call.args
		if name in ("make", "new"):
			t = self._resolve_type(args[0], scope) if args else None
			for arg in args[1:]:
				self._expr(arg, scope)
			if name == "new":
				return Pointer(t or INVALID)
			return t or INVALID
		types = [self._expr(arg, scope) for arg in args]
		if name in ("len", "cap", "copy"):
			return INT_TYPE
		if name in ("append", "min", "max"):
			return types[0] if types and types[0] is not None else INVALID
		if name == "complex":
			return Basic("complex128")
		if name in ("real", "imag"):
			return Basic("float64")
		if name == "recover":
			return Interface()
		# panic, print, println, close, delete, clear
		return Tuple(())

	# Types -----------------------------------------------------------------

	def _resolve_type(self, expr: Optional[Expr], scope: Scope) -> Optional[Type]:
		"""The type denoted by `expr`, reporting undefined names."""
		if expr is None:
			return None
		if isinstance(expr, ParenExpr):
			return self._resolve_type(expr.x, scope)
		if isinstance(expr, Ident):
			obj = scope.lookup(expr.name)
			if obj is None:
				self._undefined(expr, scope)
				return None
			return self._obj_type(obj) if obj.kind is ObjKind.TYPE else None
		if isinstance(expr, SelectorExpr):
			x = unparen(expr.x)
			if isinstance(x, Ident):
				obj = scope.lookup(x.name)
				if obj is None:
					self._undefined(x, scope)
					return None
				if obj.kind is ObjKind.PKG_NAME:
					return Named(expr.sel.name, pkg=obj.path)
			return None
		if isinstance(expr, StarExpr):
			return Pointer(self._resolve_type(expr.x, scope) or INVALID)
		if isinstance(expr, ArrayType):
			elt = self._resolve_type(expr.elt, scope) or INVALID
			if expr.length is None:
				return Slice(elt)
			if not isinstance(expr.length, Ellipsis):
				self._expr(expr.length, scope)
			return Array(elt)
		if isinstance(expr, Ellipsis):
			return Slice(self._resolve_type(expr.elt, scope) or INVALID)
		if isinstance(expr, MapType):
			key = self._resolve_type(expr.key, scope) or INVALID
			return Map(key, self._resolve_type(expr.value, scope) or INVALID)
		if isinstance(expr, ChanType):
			return Chan(self._resolve_type(expr.value, scope) or INVALID)
		if isinstance(expr, FuncType):
			return self._signature(expr, scope)
		if isinstance(expr, StructType):
			for f in expr.fields.fields:
				self._resolve_type(f.type_expr, scope)
			return Struct(expr.node_id)
		if isinstance(expr, InterfaceType):
			for m in expr.methods.fields:
				self._resolve_type(m.type_expr, scope)
			return Interface(expr.node_id)
		if isinstance(expr, IndexExpr):
			base = self._resolve_type(expr.x, scope)
			for idx in expr.indices:
				self._resolve_type(idx, scope)
			return base
		if isinstance(expr, (BinaryExpr, UnaryExpr)):
			# Constraint unions and approximations: `~int | ~string`.
			for part in (getattr(expr, "x", None), getattr(expr, "y", None)):
				if part is not None:
					self._resolve_type(part, scope)
			return Interface()
		return None


def check_package(unit: File, siblings: Sequence[File] = ()) -> CheckResult:
	"""
	Type-check `unit` together with the other files of its package.

	Node ids must be unique across all files (see `assign_node_ids`).
	Diagnostics are reported for every file, with the file name in their
	span.
	"""
	return Checker([unit, *siblings]).check()


__all__ = ["Checker", "PHASE", "RETURN_COUNT_CODE", "UNDEFINED_CODE", "check_package", "is_return_count_error"]
