# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Diagnostics reported by the package checker.

Codes are stable strings, so the driver can tell the return-count
mismatches it is about to repair from real type errors without matching on
message text.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

from .span import Span


@dataclass
class Diagnostic:
	message: str
	code: Optional[str] = None
	# "typecheck" for everything the checker emits.
	phase: Optional[str] = None
	severity: str = "error"
	span: Span = field(default_factory=Span)

	@property
	def is_error(self) -> bool:
		return self.severity == "error"

	def __str__(self) -> str:
		"""Go-style `file:line:col: message`."""
		return f"{self.span.describe()}: {self.message}"


__all__ = ["Diagnostic"]
