# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Objects and lexical scopes."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Optional

from goreturns.parser.ast import Node

from .types import Type


class ObjKind(Enum):
	PKG_NAME = "package"
	CONST = "const"
	TYPE = "type"
	VAR = "var"
	FUNC = "func"
	BUILTIN = "builtin"
	NIL = "nil"


@dataclass(eq=False)
class Obj:
	"""
	A declared name.

	Package-level objects are typed lazily: `decl` is the declaring node and
	`scope` the file scope it must be resolved in (imports are per file).
	"""

	kind: ObjKind
	name: str
	type: Optional[Type] = None
	decl: Optional[Node] = None
	scope: Optional["Scope"] = None
	# Position of the name within a multi-name ValueSpec.
	index: int = 0
	# Import path of a PKG_NAME.
	path: Optional[str] = None


@dataclass(eq=False)
class Scope:
	parent: Optional["Scope"] = None
	names: Dict[str, Obj] = field(default_factory=dict)
	# Dot imports make unqualified names from other packages visible.
	dot_imports: bool = False

	def insert(self, obj: Obj) -> None:
		if obj.name != "_":
			self.names[obj.name] = obj

	def lookup(self, name: str) -> Optional[Obj]:
		scope: Optional[Scope] = self
		while scope is not None:
			obj = scope.names.get(name)
			if obj is not None:
				return obj
			scope = scope.parent
		return None

	def has_dot_imports(self) -> bool:
		scope: Optional[Scope] = self
		while scope is not None:
			if scope.dot_imports:
				return True
			scope = scope.parent
		return False

	def child(self) -> "Scope":
		return Scope(parent=self)


__all__ = ["Obj", "ObjKind", "Scope"]
