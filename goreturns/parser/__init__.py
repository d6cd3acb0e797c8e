# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Go front-end: grammar, semicolon insertion, syntax tree and node ids."""

from . import ast
from .node_ids import assign_node_ids
from .parser import GoSyntaxError, SyntaxErrorKind, parse_file, parse_source

__all__ = ["GoSyntaxError", "SyntaxErrorKind", "assign_node_ids", "ast", "parse_file", "parse_source"]
