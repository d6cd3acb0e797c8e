# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Pair every return statement with the signature of the function it returns from.

The walk uses an explicit work stack of `(node, enclosing signature)`
entries. Entering a function declaration or function literal pushes its
children with that function's own signature, so a return inside a closure
is bound to the closure even when the outer function has a different
result list, and leaving the closure needs no bookkeeping at all.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple

from goreturns.parser.ast import FuncDecl, FuncLit, FuncType, Node, ReturnStmt, iter_child_nodes


@dataclass(frozen=True)
class ReturnBinding:
	ret: ReturnStmt
	# None for a return outside any function (not valid Go, left alone).
	signature: Optional[FuncType]


def collect_returns(root: Node) -> List[ReturnBinding]:
	"""Bind each ReturnStmt under `root` to its innermost enclosing signature, in source order."""
	bindings: List[ReturnBinding] = []
	stack: List[Tuple[Node, Optional[FuncType]]] = [(root, None)]
	while stack:
		node, signature = stack.pop()
		if isinstance(node, (FuncDecl, FuncLit)):
			signature = node.func_type
		elif isinstance(node, ReturnStmt):
			bindings.append(ReturnBinding(ret=node, signature=signature))
		children = list(iter_child_nodes(node))
		stack.extend((child, signature) for child in reversed(children))
	return bindings


__all__ = ["ReturnBinding", "collect_returns"]
