# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Zero values of declared result types.

Only shapes that can be decided from the type expression alone are
handled: predeclared names, pointers, slices, arrays with a length and
unnamed map/chan/func/interface literals. A named type (a local struct,
an imported type, a type parameter, even a named integer type) could
be anything, so `zero_value` returns None and the caller leaves the
return statement alone.
"""

from __future__ import annotations

from typing import Optional

from goreturns.parser.ast import (
	ArrayType,
	BasicLit,
	ChanType,
	CompositeLit,
	Expr,
	FuncType,
	Ident,
	InterfaceType,
	LitKind,
	MapType,
	StarExpr,
	clone,
)

INTEGER_TYPES = frozenset(
	{
		"int",
		"int8",
		"int16",
		"int32",
		"int64",
		"uint",
		"uint8",
		"uint16",
		"uint32",
		"uint64",
		"uintptr",
		"byte",
		"rune",
	}
)
FLOAT_TYPES = frozenset({"float32", "float64"})
COMPLEX_TYPES = frozenset({"complex64", "complex128"})
# Predeclared interfaces.
NIL_TYPES = frozenset({"error", "any"})


def zero_value(type_expr: Expr) -> Optional[Expr]:
	"""Return a fresh zero-value expression for `type_expr`, or None if undeterminable."""
	if isinstance(type_expr, Ident):
		name = type_expr.name
		if name in INTEGER_TYPES:
			return BasicLit(kind=LitKind.INT, value="0")
		if name in FLOAT_TYPES:
			return BasicLit(kind=LitKind.FLOAT, value="0")
		if name in COMPLEX_TYPES:
			return BasicLit(kind=LitKind.IMAG, value="0")
		if name == "bool":
			return Ident(name="false")
		if name == "string":
			return BasicLit(kind=LitKind.STRING, value='""')
		if name in NIL_TYPES:
			return Ident(name="nil")
		return None
	if isinstance(type_expr, ArrayType):
		if type_expr.length is None:
			return Ident(name="nil")
		return CompositeLit(type_expr=clone(type_expr), elts=[])
	if isinstance(type_expr, (StarExpr, MapType, ChanType, FuncType, InterfaceType)):
		return Ident(name="nil")
	return None


__all__ = ["COMPLEX_TYPES", "FLOAT_TYPES", "INTEGER_TYPES", "NIL_TYPES", "zero_value"]
