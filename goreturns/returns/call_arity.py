# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Decide whether a call used as a lone return value yields one value or several.

`return f()` in a function with two results is already complete when `f`
returns two values. Type information answers that directly when the checker
ran; otherwise a per-file syntax index of functions, closures and types
gives the declared result count, and an allow-list of well-known
single-result constructors covers the common standard library calls.
Anything else is assumed to be multi-valued, so the statement is left alone.
"""

from __future__ import annotations

import logging
from typing import Dict, Iterable, Optional, Set

from goreturns.checker.types import Tuple, TypeInfo
from goreturns.parser.ast import (
	ArrayType,
	AssignStmt,
	CallExpr,
	ChanType,
	Expr,
	FieldList,
	File,
	FuncDecl,
	FuncLit,
	FuncType,
	Ident,
	IndexExpr,
	InterfaceType,
	MapType,
	RangeStmt,
	SelectorExpr,
	StarExpr,
	StructType,
	TypeSpec,
	ValueSpec,
	unparen,
	walk,
)

from .signature import result_arity

logger = logging.getLogger(__name__)

DEFAULT_SINGLE_RESULT_CALLS = frozenset({"errors.New", "fmt.Errorf"})

PREDECLARED_TYPES = frozenset(
	{
		"any",
		"bool",
		"byte",
		"comparable",
		"complex64",
		"complex128",
		"error",
		"float32",
		"float64",
		"int",
		"int8",
		"int16",
		"int32",
		"int64",
		"rune",
		"string",
		"uint",
		"uint8",
		"uint16",
		"uint32",
		"uint64",
		"uintptr",
	}
)

_TYPE_LITERALS = (ArrayType, ChanType, FuncType, InterfaceType, MapType, StructType)


def dotted_name(expr: Expr) -> Optional[str]:
	"""`pkg.Func` style rendering of an identifier or selector chain."""
	expr = unparen(expr)
	if isinstance(expr, Ident):
		return expr.name
	if isinstance(expr, SelectorExpr):
		base = dotted_name(expr.x)
		return f"{base}.{expr.sel.name}" if base is not None else None
	return None


class CallArityResolver:
	def __init__(
		self,
		file: File,
		type_info: Optional[TypeInfo] = None,
		single_result_calls: Iterable[str] = DEFAULT_SINGLE_RESULT_CALLS,
	) -> None:
		self._info = type_info
		self._single_result_calls = frozenset(single_result_calls)
		self._arities: Dict[str, Set[int]] = {}
		self._types: Set[str] = set()
		self._opaque: Set[str] = set()
		self._index(file)

	def _index(self, file: File) -> None:
		for node in walk(file):
			if isinstance(node, FuncDecl):
				if node.recv is None:
					self._bind(node.name.name, node.func_type)
				else:
					self._shadow_fields(node.recv)
			elif isinstance(node, FuncType):
				self._shadow_fields(node.params)
				self._shadow_fields(node.results)
			elif isinstance(node, TypeSpec):
				self._types.add(node.name.name)
			elif isinstance(node, AssignStmt):
				self._index_assign(node)
			elif isinstance(node, RangeStmt) and node.tok == ":=":
				for target in (node.key, node.value):
					if isinstance(target, Ident):
						self._shadow(target.name)
			elif isinstance(node, ValueSpec):
				if isinstance(node.type_expr, FuncType):
					for name in node.names:
						self._bind(name.name, node.type_expr)
					continue
				values = node.values if len(node.values) == len(node.names) else []
				for i, name in enumerate(node.names):
					value = unparen(values[i]) if values else None
					if isinstance(value, FuncLit) and node.type_expr is None:
						self._bind(name.name, value.func_type)
					else:
						self._shadow(name.name)

	def _index_assign(self, stmt: AssignStmt) -> None:
		if stmt.tok not in (":=", "="):
			return
		paired = len(stmt.lhs) == len(stmt.rhs)
		for i, lhs in enumerate(stmt.lhs):
			if not isinstance(lhs, Ident):
				continue
			rhs = unparen(stmt.rhs[i]) if paired else None
			if isinstance(rhs, FuncLit):
				self._bind(lhs.name, rhs.func_type)
			elif stmt.tok == ":=":
				self._shadow(lhs.name)

	def _bind(self, name: str, func_type: FuncType) -> None:
		if name == "_":
			return
		self._arities.setdefault(name, set()).add(result_arity(func_type))

	def _shadow(self, name: str) -> None:
		# A binding whose type is not spelled out here: any call of the name is unknown.
		if name != "_":
			self._opaque.add(name)

	def _shadow_fields(self, fields: Optional[FieldList]) -> None:
		if fields is None:
			return
		for f in fields.fields:
			for name in f.names:
				if isinstance(f.type_expr, FuncType):
					self._bind(name.name, f.type_expr)
				else:
					self._shadow(name.name)

	def declared_result_count(self, call: CallExpr) -> Optional[int]:
		"""Result count of `call` from declarations in this file, or None when unknown."""
		fun = unparen(call.fun)
		if isinstance(fun, IndexExpr):
			# Generic instantiation `f[T](...)`.
			fun = unparen(fun.x)
		if isinstance(fun, FuncLit):
			return result_arity(fun.func_type)
		if isinstance(fun, _TYPE_LITERALS):
			return 1
		if isinstance(fun, StarExpr):
			target = unparen(fun.x)
			if isinstance(target, Ident) and self._is_type_name(target.name):
				return 1
			return None
		if not isinstance(fun, Ident) or fun.name in self._opaque:
			return None
		arities = self._arities.get(fun.name)
		if arities:
			# Several bindings with different arities: cannot tell which one is in scope.
			return next(iter(arities)) if len(arities) == 1 else None
		if self._is_type_name(fun.name):
			return 1
		return None

	def _is_type_name(self, name: str) -> bool:
		return name in self._types or name in PREDECLARED_TYPES

	def is_single_valued(self, call: CallExpr) -> bool:
		if self._info is not None:
			resolved = self._info.type_of(call)
			if resolved is not None:
				return not isinstance(resolved, Tuple)
		count = self.declared_result_count(call)
		if count is not None:
			return count == 1
		name = dotted_name(call.fun)
		if name is not None and name in self._single_result_calls:
			return True
		logger.debug("assuming %s returns several values", name or "call")
		return False


__all__ = ["CallArityResolver", "DEFAULT_SINGLE_RESULT_CALLS", "PREDECLARED_TYPES", "dotted_name"]
