# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Return statement completion: zero values, call arity, fragments and the driver."""

from .bare_returns import expand_bare_returns
from .call_arity import DEFAULT_SINGLE_RESULT_CALLS, CallArityResolver
from .collector import ReturnBinding, collect_returns
from .fix import fix_returns
from .fragment import NormalizedSource, WrapMode, normalize_source
from .zero_values import zero_value

__all__ = [
	"CallArityResolver",
	"DEFAULT_SINGLE_RESULT_CALLS",
	"NormalizedSource",
	"ReturnBinding",
	"WrapMode",
	"collect_returns",
	"expand_bare_returns",
	"fix_returns",
	"normalize_source",
	"zero_value",
]
