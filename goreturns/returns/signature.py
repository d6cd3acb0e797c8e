# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Flattened view of a function's declared results.

`func f() (a, b int, err error)` has three result slots even though its
result list holds two fields; the rewrite passes count and index slots.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional

from goreturns.parser.ast import Expr, FuncType


@dataclass(frozen=True)
class ResultSlot:
	name: Optional[str]
	type_expr: Expr

	@property
	def named(self) -> bool:
		return self.name is not None and self.name != "_"


def result_slots(func_type: Optional[FuncType]) -> List[ResultSlot]:
	if func_type is None or func_type.results is None:
		return []
	slots: List[ResultSlot] = []
	for f in func_type.results.fields:
		if not f.names:
			slots.append(ResultSlot(name=None, type_expr=f.type_expr))
			continue
		slots.extend(ResultSlot(name=ident.name, type_expr=f.type_expr) for ident in f.names)
	return slots


def result_arity(func_type: Optional[FuncType]) -> int:
	if func_type is None or func_type.results is None:
		return 0
	return func_type.results.num_fields()


__all__ = ["ResultSlot", "result_arity", "result_slots"]
