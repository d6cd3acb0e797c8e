# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Shared source locations and diagnostics."""

from .diagnostics import Diagnostic
from .span import Span

__all__ = ["Diagnostic", "Span"]
