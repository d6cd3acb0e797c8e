# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Render a rewritten file back to source text.

The rewrite passes only ever add leading values to return statements, so
rendering is a splice: the original text is kept byte for byte and the new
values are inserted in front of the first original value (or after the
`return` keyword of a naked return). Synthesized nodes have no source
span and are printed from their fields; nodes that came from the source are
copied from the text.
"""

from __future__ import annotations

from typing import List, Tuple

from goreturns.parser.ast import (
	ArrayType,
	BasicLit,
	CallExpr,
	CompositeLit,
	Ellipsis,
	Expr,
	File,
	Ident,
	KeyValueExpr,
	MapType,
	ParenExpr,
	ReturnStmt,
	SelectorExpr,
	StarExpr,
	UnaryExpr,
	walk,
)

_RETURN_KEYWORD = "return"


class PrinterError(ValueError):
	"""Raised when a rewritten tree cannot be rendered faithfully."""


def render(file: File, text: str) -> str:
	"""Return `text` with the synthesized results of every return statement spliced in."""
	edits: List[Tuple[int, str]] = []
	for node in walk(file):
		if isinstance(node, ReturnStmt):
			edit = _return_edit(node, text)
			if edit is not None:
				edits.append(edit)
	out = text
	for offset, insert in sorted(edits, key=lambda e: e[0], reverse=True):
		out = out[:offset] + insert + out[offset:]
	return out


def _return_edit(ret: ReturnStmt, text: str) -> Tuple[int, str] | None:
	lead = 0
	while lead < len(ret.results) and not ret.results[lead].span.known:
		lead += 1
	rest = ret.results[lead:]
	if any(not r.span.known for r in rest):
		raise PrinterError(f"line {ret.span.line}: synthesized value after an original one")
	if lead == 0:
		return None
	if ret.span.start_pos is None:
		raise PrinterError("cannot place values in a synthesized return statement")
	rendered = ", ".join(format_expr(e, text) for e in ret.results[:lead])
	if rest:
		return rest[0].span.start_pos, rendered + ", "  # type: ignore[return-value]
	return ret.span.start_pos + len(_RETURN_KEYWORD), " " + rendered


def format_expr(expr: Expr, text: str) -> str:
	"""Source text of `expr`: copied from `text` when it has a span, printed otherwise."""
	span = expr.span
	if span.known:
		return text[span.start_pos : span.end_pos]  # type: ignore[misc]
	if isinstance(expr, Ident):
		return expr.name
	if isinstance(expr, BasicLit):
		return expr.value
	if isinstance(expr, CompositeLit):
		elts = ", ".join(format_expr(e, text) for e in expr.elts)
		type_text = format_expr(expr.type_expr, text) if expr.type_expr is not None else ""
		return f"{type_text}{{{elts}}}"
	if isinstance(expr, ArrayType):
		length = format_expr(expr.length, text) if expr.length is not None else ""
		return f"[{length}]{format_expr(expr.elt, text)}"
	if isinstance(expr, Ellipsis):
		return "..." + (format_expr(expr.elt, text) if expr.elt is not None else "")
	if isinstance(expr, StarExpr):
		return "*" + format_expr(expr.x, text)
	if isinstance(expr, SelectorExpr):
		return f"{format_expr(expr.x, text)}.{expr.sel.name}"
	if isinstance(expr, MapType):
		return f"map[{format_expr(expr.key, text)}]{format_expr(expr.value, text)}"
	if isinstance(expr, ParenExpr):
		return f"({format_expr(expr.x, text)})"
	if isinstance(expr, UnaryExpr):
		return expr.op + format_expr(expr.x, text)
	if isinstance(expr, KeyValueExpr):
		return f"{format_expr(expr.key, text)}: {format_expr(expr.value, text)}"
	if isinstance(expr, CallExpr):
		args = ", ".join(format_expr(a, text) for a in expr.args)
		return f"{format_expr(expr.fun, text)}({args}{'...' if expr.has_ellipsis else ''})"
	raise PrinterError(f"cannot print synthesized {type(expr).__name__}")


__all__ = ["PrinterError", "format_expr", "render"]
