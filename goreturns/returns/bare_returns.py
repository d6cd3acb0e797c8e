# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Expand naked returns in functions with named results."""

from __future__ import annotations

from typing import List

from goreturns.parser.ast import File, Ident, ReturnStmt

from .collector import collect_returns
from .signature import result_slots


def expand_bare_returns(file: File) -> List[ReturnStmt]:
	"""
	Rewrite `return` as `return a, b` when every result is named.

	A function with an unnamed (or blank) result cannot have its naked
	returns spelled out, so those statements are left alone.
	"""
	expanded: List[ReturnStmt] = []
	for binding in collect_returns(file):
		ret = binding.ret
		slots = result_slots(binding.signature)
		if ret.results or not slots:
			continue
		if not all(slot.named for slot in slots):
			continue
		ret.results = [Ident(name=slot.name) for slot in slots]  # type: ignore[arg-type]
		expanded.append(ret)
	return expanded


__all__ = ["expand_bare_returns"]
