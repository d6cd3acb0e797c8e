# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Optional canonical formatting through the Go toolchain's `gofmt`."""

from __future__ import annotations

import shutil
import subprocess


class FormatError(RuntimeError):
	"""Raised when `gofmt` is missing or rejects its input."""


def format_source(src: bytes, gofmt_path: str = "gofmt") -> bytes:
	"""
	Pipe `src` through gofmt and return its output.

	gofmt accepts declaration and statement fragments on stdin as well as
	whole files, so restored fragments can be formatted in place.
	"""
	gofmt = shutil.which(gofmt_path)
	if gofmt is None:
		raise FormatError(f"{gofmt_path} not found")
	res = subprocess.run([gofmt], input=src, check=False, capture_output=True)
	if res.returncode != 0:
		raise FormatError(f"gofmt failed: {res.stderr.decode('utf-8', errors='replace').strip()}")
	return res.stdout


__all__ = ["FormatError", "format_source"]
