# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Make source fragments parseable and undo the wrapping afterwards.

Editors often hand over a selection rather than a file: a few declarations
without a package clause, or a bare run of statements. The input is tried
as a whole file first, then as a declaration list (behind a synthetic
package clause), then as a statement list (inside a synthetic function).
Each attempt is a state of a small state machine; the attempt that parses
records how much text it added, so `NormalizedSource.restore` can strip it
again and re-apply the original's surrounding whitespace.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Tuple

from goreturns.parser.ast import File, FuncDecl
from goreturns.parser.parser import GoSyntaxError, SyntaxErrorKind, parse_file
from goreturns.printer import PrinterError

logger = logging.getLogger(__name__)

DECLARATION_PREFIX = "package main;"
MAIN_PACKAGE_CLAUSE = "package main\n"
STATEMENT_PREFIX = "package p; func _() {"
STATEMENT_SUFFIX = "\n}"

_SPACE = b" \t\n"


class WrapMode(Enum):
	WHOLE_UNIT = "whole-unit"
	DECLARATION_LIST = "declaration-list"
	STATEMENT_LIST = "statement-list"


class _State(Enum):
	TRY_WHOLE = "try-whole"
	TRY_DECLARATIONS = "try-declarations"
	TRY_STATEMENTS = "try-statements"
	FAILED = "failed"


@dataclass
class NormalizedSource:
	"""A parsed unit plus what is needed to map its rendering back to the input."""

	file: File
	# The text that was parsed (the input plus any synthetic wrapping).
	text: str
	mode: WrapMode
	original: bytes
	prefix: str = ""
	suffix: str = ""

	def restore(self, rendered: str) -> bytes:
		"""Strip the synthetic wrapping from `rendered` and re-match the original's whitespace."""
		if not self.prefix and not self.suffix:
			return rendered.encode("utf-8")
		if not rendered.startswith(self.prefix) or not rendered.endswith(self.suffix):
			raise PrinterError("rendered source lost its synthetic wrapping")
		body = rendered[len(self.prefix) : len(rendered) - len(self.suffix)]
		if self.mode is WrapMode.WHOLE_UNIT:
			# A fragment declaring func main keeps its package clause.
			return (MAIN_PACKAGE_CLAUSE + "\n" + body.lstrip("\n")).encode("utf-8")
		return match_space(self.original, dedent(body.encode("utf-8"), leading_indent(self.original)))


def normalize_source(filename: str, src: bytes, fragment: bool = False) -> NormalizedSource:
	"""
	Parse `src` as a whole file, or (with `fragment`) as a declaration or
	statement list. Raises the last GoSyntaxError when no attempt parses.
	"""
	try:
		text = src.decode("utf-8")
	except UnicodeDecodeError as err:
		raise GoSyntaxError(f"invalid UTF-8 encoding: {err.reason}", filename=filename) from err

	state = _State.TRY_WHOLE
	error: Optional[GoSyntaxError] = None
	while True:
		if state is _State.TRY_WHOLE:
			try:
				return NormalizedSource(parse_file(filename, text), text, WrapMode.WHOLE_UNIT, src)
			except GoSyntaxError as err:
				error = err
				if fragment and err.kind is SyntaxErrorKind.MISSING_PACKAGE:
					state = _State.TRY_DECLARATIONS
				else:
					state = _State.FAILED
		elif state is _State.TRY_DECLARATIONS:
			wrapped = DECLARATION_PREFIX + text
			try:
				file = parse_file(filename, wrapped)
			except GoSyntaxError as err:
				error = err
				if err.kind is SyntaxErrorKind.MISSING_DECLARATION:
					state = _State.TRY_STATEMENTS
				else:
					state = _State.FAILED
				continue
			if has_main_func(file):
				logger.debug("%s: fragment declares func main, treating it as a whole file", filename)
				return NormalizedSource(file, wrapped, WrapMode.WHOLE_UNIT, src, prefix=DECLARATION_PREFIX)
			return NormalizedSource(file, wrapped, WrapMode.DECLARATION_LIST, src, prefix=DECLARATION_PREFIX)
		elif state is _State.TRY_STATEMENTS:
			wrapped = STATEMENT_PREFIX + text + STATEMENT_SUFFIX
			try:
				file = parse_file(filename, wrapped)
			except GoSyntaxError as err:
				error = err
				state = _State.FAILED
				continue
			return NormalizedSource(
				file,
				wrapped,
				WrapMode.STATEMENT_LIST,
				src,
				prefix=STATEMENT_PREFIX,
				suffix=STATEMENT_SUFFIX,
			)
		else:
			assert error is not None
			raise error


def has_main_func(file: File) -> bool:
	"""True if `file` declares `func main()` with no parameters and no results."""
	for decl in file.decls:
		if not isinstance(decl, FuncDecl) or decl.recv is not None or decl.name.name != "main":
			continue
		func_type = decl.func_type
		if func_type.params.num_fields() == 0 and (func_type.results is None or not func_type.results.fields):
			return True
	return False


def cut_space(b: bytes) -> Tuple[bytes, bytes, bytes]:
	"""Split `b` into leading whitespace, middle and trailing whitespace."""
	i = 0
	while i < len(b) and b[i] in _SPACE:
		i += 1
	j = len(b)
	while j > 0 and b[j - 1] in _SPACE:
		j -= 1
	if i <= j:
		return b[:i], b[i:j], b[j:]
	# All whitespace: everything counts as trailing.
	return b"", b"", b[j:]


def leading_indent(orig: bytes) -> bytes:
	"""Indentation of the first non-blank line of `orig`."""
	before, _, _ = cut_space(orig)
	return before[before.rfind(b"\n") + 1 :]


def dedent(src: bytes, indent: bytes) -> bytes:
	"""Remove `indent` from the start of every line that begins with it."""
	if not indent:
		return src
	lines = src.split(b"\n")
	return b"\n".join(line[len(indent) :] if line.startswith(indent) else line for line in lines)


def match_space(orig: bytes, src: bytes) -> bytes:
	"""
	Give `src` the surrounding whitespace of `orig`.

	The leading whitespace of `orig` is copied, every non-blank line of
	`src` is indented like the first non-blank line of `orig`, and the
	trailing whitespace of `orig` is copied.
	"""
	before, _, after = cut_space(orig)
	i = before.rfind(b"\n")
	before, indent = before[: i + 1], before[i + 1 :]

	_, src, _ = cut_space(src)

	out = bytearray(before)
	while src:
		line = src
		i = line.find(b"\n")
		if i >= 0:
			line, src = line[: i + 1], line[i + 1 :]
		else:
			src = b""
		if line and line[0:1] != b"\n":
			out += indent
		out += line
	out += after
	return bytes(out)


__all__ = [
	"DECLARATION_PREFIX",
	"MAIN_PACKAGE_CLAUSE",
	"NormalizedSource",
	"STATEMENT_PREFIX",
	"STATEMENT_SUFFIX",
	"WrapMode",
	"cut_space",
	"dedent",
	"has_main_func",
	"leading_indent",
	"match_space",
	"normalize_source",
]
