# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
NodeId assignment for syntax tree nodes.

This pass assigns stable NodeIds so typed side tables can key off nodes
without relying on Python object identity. When a package is checked
together with sibling files, numbering continues from one file to the
next so ids stay unique across the whole package.
"""

from __future__ import annotations

from .ast import Node, walk


def assign_node_ids(root: Node, *, start: int = 1) -> int:
	"""
	Assign NodeIds to all nodes reachable from `root`, in pre-order.

	Returns the next available NodeId after traversal.
	"""
	next_id = start
	for node in walk(root):
		node.node_id = next_id
		next_id += 1
	return next_id


__all__ = ["assign_node_ids"]
