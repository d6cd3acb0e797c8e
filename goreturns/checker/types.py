# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Semantic types produced by the checker.

The model is deliberately shallow: enough to follow values through
assignments, calls, selectors and indexing so the result count of a call
can be read off its callee's signature. Struct fields and interface
methods are looked up through the declaring syntax rather than copied
into the types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, List, Optional

from goreturns.core.diagnostics import Diagnostic
from goreturns.parser.ast import Expr, NodeId


class Type:
	"""Base class for checker types."""


@dataclass(frozen=True)
class Basic(Type):
	name: str


@dataclass(frozen=True)
class Named(Type):
	"""A defined type; `decl_id` is the node id of its TypeSpec (0 for imported types)."""

	name: str
	pkg: Optional[str] = None
	decl_id: NodeId = 0


@dataclass(frozen=True)
class TypeParam(Type):
	name: str


@dataclass(frozen=True)
class Pointer(Type):
	elem: Type


@dataclass(frozen=True)
class Slice(Type):
	elem: Type


@dataclass(frozen=True)
class Array(Type):
	elem: Type


@dataclass(frozen=True)
class Map(Type):
	key: Type
	value: Type


@dataclass(frozen=True)
class Chan(Type):
	elem: Type


@dataclass(frozen=True)
class Struct(Type):
	decl_id: NodeId = 0


@dataclass(frozen=True)
class Interface(Type):
	decl_id: NodeId = 0


@dataclass(frozen=True)
class Tuple(Type):
	"""The result list of a call yielding zero or several values."""

	items: tuple[Type, ...] = ()


@dataclass(frozen=True)
class Signature(Type):
	params: Tuple = Tuple()
	results: Tuple = Tuple()
	variadic: bool = False


INVALID = Basic("invalid")
UNTYPED_NIL = Basic("untyped nil")


def type_string(t: Optional[Type]) -> str:
	"""Go-like rendering, used in diagnostics and tests."""
	if t is None:
		return "<unknown>"
	if isinstance(t, Basic):
		return t.name
	if isinstance(t, Named):
		return f"{t.pkg}.{t.name}" if t.pkg else t.name
	if isinstance(t, TypeParam):
		return t.name
	if isinstance(t, Pointer):
		return "*" + type_string(t.elem)
	if isinstance(t, Slice):
		return "[]" + type_string(t.elem)
	if isinstance(t, Array):
		return "[N]" + type_string(t.elem)
	if isinstance(t, Map):
		return f"map[{type_string(t.key)}]{type_string(t.value)}"
	if isinstance(t, Chan):
		return "chan " + type_string(t.elem)
	if isinstance(t, Struct):
		return "struct{...}"
	if isinstance(t, Interface):
		return "interface{...}"
	if isinstance(t, Tuple):
		return "(" + ", ".join(type_string(i) for i in t.items) + ")"
	if isinstance(t, Signature):
		results = type_string(t.results) if len(t.results.items) != 1 else type_string(t.results.items[0])
		return f"func{type_string(t.params)} {results}".rstrip()
	return repr(t)


def call_result(sig: Signature) -> Type:
	"""The type of a call of `sig`: its single result, or a Tuple otherwise."""
	if len(sig.results.items) == 1:
		return sig.results.items[0]
	return sig.results


@dataclass
class TypeInfo:
	"""
	Read-only lookup from expression node ids to resolved types.

	Only expressions the checker could resolve are present; a missing entry
	means "unknown", never "no value".
	"""

	types: Dict[NodeId, Type] = field(default_factory=dict)

	def type_of(self, expr: Expr) -> Optional[Type]:
		if not expr.node_id:
			return None
		return self.types.get(expr.node_id)

	def record(self, expr: Expr, t: Type) -> None:
		if expr.node_id:
			self.types[expr.node_id] = t


@dataclass
class CheckResult:
	info: TypeInfo
	diagnostics: List[Diagnostic] = field(default_factory=list)

	@property
	def errors(self) -> List[Diagnostic]:
		return [d for d in self.diagnostics if d.is_error]


__all__ = [
	"Array",
	"Basic",
	"Chan",
	"CheckResult",
	"INVALID",
	"Interface",
	"Map",
	"Named",
	"Pointer",
	"Signature",
	"Slice",
	"Struct",
	"Tuple",
	"Type",
	"TypeInfo",
	"TypeParam",
	"UNTYPED_NIL",
	"call_result",
	"type_string",
]
