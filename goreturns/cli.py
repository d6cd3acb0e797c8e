# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

import argparse
import difflib
import logging
import os
import sys
from dataclasses import replace
from pathlib import Path
from typing import Iterator, List, Optional

from goreturns.config import ConfigError, Options, default_config_path, load_config_file
from goreturns.gofmt import FormatError
from goreturns.parser import GoSyntaxError
from goreturns.printer import PrinterError
from goreturns.returns.process import process

_STDIN = "<standard input>"


def _build_parser() -> argparse.ArgumentParser:
	p = argparse.ArgumentParser(
		prog="goreturns",
		description="Fill in the missing zero values of incomplete Go return statements",
	)
	p.add_argument("paths", nargs="*", type=Path, help="Files or directories (default: read stdin)")
	p.add_argument("-l", dest="list", action="store_true", help="List files whose result differs from the input")
	p.add_argument("-w", dest="write", action="store_true", help="Write the result back to the source file")
	p.add_argument("-d", dest="diff", action="store_true", help="Print a unified diff instead of the result")
	p.add_argument("-e", dest="all_errors", action="store_true", help="Report all type errors, not just the first")
	p.add_argument("-p", dest="print_errors", action="store_true", help="Print non-fatal type errors to stderr")
	p.add_argument("-b", dest="remove_bare_returns", action="store_true", help="Expand bare returns of named results")
	p.add_argument("-i", dest="fragment", action="store_true", help="Accept declaration or statement fragments")
	p.add_argument("--gofmt", dest="format", action="store_true", help="Pipe the result through gofmt")
	p.add_argument(
		"--config",
		type=Path,
		default=None,
		help=f"Path to the config file (default: ~/{default_config_path().name})",
	)
	p.add_argument("-v", dest="verbose", action="store_true", help="Log every rewrite decision")
	return p


def _options(args: argparse.Namespace) -> Options:
	opts = load_config_file(args.config)
	flags = {}
	for name in ("fragment", "print_errors", "all_errors", "remove_bare_returns", "format"):
		if getattr(args, name):
			flags[name] = True
	return replace(opts, **flags)


def _go_files(root: Path) -> Iterator[Path]:
	for dirpath, dirnames, filenames in os.walk(root):
		dirnames[:] = sorted(d for d in dirnames if not d.startswith("."))
		for name in sorted(filenames):
			if name.endswith(".go") and not name.startswith("."):
				yield Path(dirpath) / name


def _diff(path: str, before: bytes, after: bytes) -> str:
	lines = difflib.unified_diff(
		before.decode("utf-8", errors="replace").splitlines(keepends=True),
		after.decode("utf-8", errors="replace").splitlines(keepends=True),
		fromfile=f"{path}.orig",
		tofile=path,
	)
	return "".join(lines)


def _emit(args: argparse.Namespace, path: Optional[Path], src: bytes, out: bytes) -> None:
	name = str(path) if path is not None else _STDIN
	changed = src != out
	if args.list and changed:
		print(name)
	if args.write and path is not None and changed:
		path.write_bytes(out)
	if args.diff:
		if changed:
			sys.stdout.write(_diff(name, src, out))
	elif not args.list and not (args.write and path is not None):
		sys.stdout.buffer.write(out)
		sys.stdout.flush()


def _process_file(args: argparse.Namespace, opts: Options, path: Path) -> None:
	src = path.read_bytes()
	out = process(str(path.parent), str(path), src, opts)
	_emit(args, path, src, out)


def main(argv: List[str] | None = None) -> int:
	"""
	Rewrite the given files (or stdin) and print, list, diff or write back the results.

	Returns 2 when the configuration is invalid or any input failed, 0 otherwise.
	"""
	p = _build_parser()
	args = p.parse_args(argv)
	logging.basicConfig(
		level=logging.DEBUG if args.verbose else logging.WARNING,
		format="%(levelname)s: %(message)s",
		stream=sys.stderr,
	)

	try:
		opts = _options(args)
	except ConfigError as err:
		print(f"goreturns: {err}", file=sys.stderr)
		return 2

	if not args.paths:
		if args.write:
			print("goreturns: cannot use -w with standard input", file=sys.stderr)
			return 2
		src = sys.stdin.buffer.read()
		try:
			out = process(None, _STDIN, src, replace(opts, fragment=True))
		except GoSyntaxError as err:
			print(err, file=sys.stderr)
			return 2
		except (PrinterError, FormatError) as err:
			print(f"{_STDIN}: {err}", file=sys.stderr)
			return 2
		_emit(args, None, src, out)
		return 0

	exit_code = 0
	for root in args.paths:
		files = list(_go_files(root)) if root.is_dir() else [root]
		for path in files:
			try:
				_process_file(args, opts, path)
			except GoSyntaxError as err:
				print(err, file=sys.stderr)
				exit_code = 2
			except (PrinterError, FormatError, OSError) as err:
				print(f"{path}: {err}", file=sys.stderr)
				exit_code = 2
	return exit_code


__all__ = ["main"]
