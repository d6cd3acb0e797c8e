# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Fill in the missing leading values of incomplete return statements."""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from goreturns.checker.types import TypeInfo
from goreturns.parser.ast import CallExpr, Expr, File, FuncType, ReturnStmt

from .call_arity import DEFAULT_SINGLE_RESULT_CALLS, CallArityResolver
from .collector import collect_returns
from .signature import result_slots
from .zero_values import zero_value

logger = logging.getLogger(__name__)


def fix_returns(
	file: File,
	type_info: Optional[TypeInfo] = None,
	single_result_calls: Iterable[str] = DEFAULT_SINGLE_RESULT_CALLS,
) -> List[ReturnStmt]:
	"""
	Complete every return statement in `file` that has fewer values than its
	function declares, and return the statements that were changed.

	Each statement is decided on its own. A statement is skipped when it is
	already complete, empty, over-full, when its lone call operand yields
	several values, or when any missing slot has no known zero value.
	"""
	resolver = CallArityResolver(file, type_info, single_result_calls)
	fixed: List[ReturnStmt] = []
	for binding in collect_returns(file):
		if _complete(binding.ret, binding.signature, resolver):
			fixed.append(binding.ret)
	return fixed


def _complete(ret: ReturnStmt, signature: Optional[FuncType], resolver: CallArityResolver) -> bool:
	slots = result_slots(signature)
	have = len(ret.results)
	if not slots or have == 0 or have >= len(slots):
		return False
	if have == 1 and isinstance(ret.results[0], CallExpr) and not resolver.is_single_valued(ret.results[0]):
		return False

	zeros: List[Expr] = []
	for slot in slots[: len(slots) - have]:
		zero = zero_value(slot.type_expr)
		if zero is None:
			return False
		zeros.append(zero)

	ret.results[:0] = zeros
	logger.debug("completed return at line %s with %d zero value(s)", ret.span.line, len(zeros))
	return True


__all__ = ["fix_returns"]
