# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Source span representation shared by the parser, checker and printer.

Besides line/column information a Span keeps absolute character offsets
into the parsed text. The printer relies on those offsets to splice edits
into the original source, so nodes synthesized by a rewrite (which have no
source text) are recognizable by `start_pos is None`.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional


@dataclass(frozen=True)
class Span:
	"""Represents a source span (best-effort file/line/column plus offsets)."""

	file: Optional[str] = None
	line: Optional[int] = None
	column: Optional[int] = None
	end_line: Optional[int] = None
	end_column: Optional[int] = None
	start_pos: Optional[int] = None
	end_pos: Optional[int] = None

	@classmethod
	def from_loc(cls, loc: Any, *, file: Optional[str] = None) -> "Span":
		"""
		Construct a Span from a parser location object.

		`loc` may be a lark Token, a lark tree `Meta`, or an existing Span
		(returned unchanged). Meta objects of empty rules carry no position
		attributes at all, which yields an empty span.
		"""
		if loc is None:
			return cls(file=file)
		if isinstance(loc, cls):
			return loc
		return cls(
			file=file or getattr(loc, "file", None) or getattr(loc, "filename", None) or None,
			line=getattr(loc, "line", None),
			column=getattr(loc, "column", None),
			end_line=getattr(loc, "end_line", None),
			end_column=getattr(loc, "end_column", None),
			start_pos=getattr(loc, "start_pos", None),
			end_pos=getattr(loc, "end_pos", None),
		)

	@property
	def known(self) -> bool:
		return self.start_pos is not None and self.end_pos is not None

	def describe(self) -> str:
		"""Render as `file:line:col` (unknown parts as `?`)."""
		file = self.file or "<unknown>"
		line = self.line if self.line is not None else "?"
		col = self.column if self.column is not None else "?"
		return f"{file}:{line}:{col}"


__all__ = ["Span"]
