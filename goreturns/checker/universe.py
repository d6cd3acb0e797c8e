# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""The universe scope: predeclared types, constants, nil and builtins."""

from __future__ import annotations

from .scope import Obj, ObjKind, Scope
from .types import UNTYPED_NIL, Basic, Interface, Named

BASIC_TYPE_NAMES = (
	"bool",
	"byte",
	"complex64",
	"complex128",
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
)

BUILTIN_FUNCS = (
	"append",
	"cap",
	"clear",
	"close",
	"complex",
	"copy",
	"delete",
	"imag",
	"len",
	"make",
	"max",
	"min",
	"new",
	"panic",
	"print",
	"println",
	"real",
	"recover",
)

ERROR_TYPE = Named("error")
BOOL_TYPE = Basic("bool")
INT_TYPE = Basic("int")
STRING_TYPE = Basic("string")


def new_universe() -> Scope:
	scope = Scope()
	for name in BASIC_TYPE_NAMES:
		scope.insert(Obj(ObjKind.TYPE, name, type=Basic(name)))
	scope.insert(Obj(ObjKind.TYPE, "error", type=ERROR_TYPE))
	scope.insert(Obj(ObjKind.TYPE, "any", type=Interface()))
	scope.insert(Obj(ObjKind.TYPE, "comparable", type=Interface()))
	scope.insert(Obj(ObjKind.CONST, "true", type=BOOL_TYPE))
	scope.insert(Obj(ObjKind.CONST, "false", type=BOOL_TYPE))
	scope.insert(Obj(ObjKind.CONST, "iota", type=INT_TYPE))
	scope.insert(Obj(ObjKind.NIL, "nil", type=UNTYPED_NIL))
	for name in BUILTIN_FUNCS:
		scope.insert(Obj(ObjKind.BUILTIN, name))
	return scope


__all__ = ["BASIC_TYPE_NAMES", "BUILTIN_FUNCS", "ERROR_TYPE", "new_universe"]
