# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Type checking of a package, for call arity decisions."""

from .checker import RETURN_COUNT_CODE, UNDEFINED_CODE, Checker, check_package, is_return_count_error
from .types import CheckResult, Signature, Tuple, Type, TypeInfo, call_result, type_string

__all__ = [
	"CheckResult",
	"Checker",
	"RETURN_COUNT_CODE",
	"Signature",
	"Tuple",
	"Type",
	"TypeInfo",
	"UNDEFINED_CODE",
	"call_result",
	"check_package",
	"is_return_count_error",
	"type_string",
]
