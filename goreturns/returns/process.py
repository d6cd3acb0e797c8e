# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Driver: one source unit in, rewritten source out.

Pipeline: normalize (parse, wrapping fragments) -> optional package type
check -> complete returns -> optional bare-return expansion -> render ->
unwrap -> optional gofmt.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import List, Optional, Union

from goreturns.checker import TypeInfo, check_package, is_return_count_error
from goreturns.config import Options
from goreturns.gofmt import format_source
from goreturns.parser import GoSyntaxError, assign_node_ids, parse_source
from goreturns.parser.ast import File
from goreturns.printer import render

from .bare_returns import expand_bare_returns
from .fix import fix_returns
from .fragment import normalize_source

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]


def process(pkg_dir: Optional[PathLike], filename: str, src: bytes, options: Optional[Options] = None) -> bytes:
	"""
	Complete the incomplete return statements of `src` and return the new source.

	`pkg_dir` is the directory of the package `filename` belongs to; when
	given, the other files of the package are type-checked along with the
	unit so calls into them resolve exactly. Raises `GoSyntaxError` when
	the source does not parse, `PrinterError` or `FormatError` when the
	result cannot be produced.
	"""
	opts = options if options is not None else Options()
	normalized = normalize_source(filename, src, fragment=opts.fragment)
	file = normalized.file
	next_id = assign_node_ids(file)

	info: Optional[TypeInfo] = None
	if pkg_dir:
		siblings = load_siblings(pkg_dir, filename, file.package.name, start=next_id)
		info = _type_info(file, siblings, opts)

	fixed = fix_returns(file, info, opts.single_result_calls)
	if opts.remove_bare_returns:
		fixed.extend(expand_bare_returns(file))
	logger.debug("%s: rewrote %d return statement(s)", filename, len(fixed))

	out = normalized.restore(render(file, normalized.text))
	if opts.format:
		out = format_source(out, opts.gofmt_path)
	return out


def _type_info(unit: File, siblings: List[File], opts: Options) -> Optional[TypeInfo]:
	result = check_package(unit, siblings)
	errors = [d for d in result.errors if not is_return_count_error(d)]
	if not errors:
		return result.info
	if opts.print_errors:
		for diag in errors if opts.all_errors else errors[:1]:
			logger.warning("%s", diag)
		logger.warning("typechecking failed (continuing without type info)")
	return None


def load_siblings(pkg_dir: PathLike, filename: str, package: str, *, start: int = 1) -> List[File]:
	"""
	Parse the other `.go` files of `pkg_dir` that belong to `package`.

	Test files are skipped, as is the unit itself. Node ids are assigned
	from `start` on, continuing the unit's numbering.
	"""
	directory = Path(pkg_dir)
	unit = Path(filename).name
	siblings: List[File] = []
	next_id = start
	for path in sorted(directory.glob("*.go")):
		if path.name == unit or path.name.endswith("_test.go") or not path.is_file():
			continue
		try:
			file = parse_source(str(path), path.read_bytes())
		except (GoSyntaxError, OSError) as err:
			logger.warning("could not parse %r: %s", path.name, err)
			continue
		if file.package.name != package:
			continue
		next_id = assign_node_ids(file, start=next_id)
		siblings.append(file)
	return siblings


__all__ = ["load_siblings", "process"]
