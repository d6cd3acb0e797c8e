# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Options of one rewrite run and the user configuration file they can be read from.

Config file (JSON object, default `~/.goreturns.json`):
{
  "fragment": false,           // accept declaration/statement fragments
  "printErrors": false,        // log non-fatal type errors
  "allErrors": false,          // log all of them, not just the first
  "removeBareReturns": false,  // expand naked returns of named results
  "gofmt": false,              // pipe the result through gofmt
  "gofmtPath": "gofmt",
  "singleResultCalls": ["errors.New", "fmt.Errorf"]
}

Unknown keys are ignored so files shared with other tools keep working.
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field, replace
from pathlib import Path
from typing import Any, Dict, FrozenSet, Optional

from goreturns.returns.call_arity import DEFAULT_SINGLE_RESULT_CALLS

CONFIG_FILENAME = ".goreturns.json"

_BOOL_KEYS = {
	"fragment": "fragment",
	"printErrors": "print_errors",
	"allErrors": "all_errors",
	"removeBareReturns": "remove_bare_returns",
	"gofmt": "format",
}


class ConfigError(ValueError):
	"""Raised for unreadable or malformed configuration."""


@dataclass(frozen=True)
class Options:
	fragment: bool = False
	print_errors: bool = False
	all_errors: bool = False
	remove_bare_returns: bool = False
	format: bool = False
	gofmt_path: str = "gofmt"
	single_result_calls: FrozenSet[str] = field(default=DEFAULT_SINGLE_RESULT_CALLS)


def default_config_path() -> Path:
	return Path.home() / CONFIG_FILENAME


def load_config_file(path: Optional[Path] = None, options: Optional[Options] = None) -> Options:
	"""
	Read the config file at `path` (default `~/.goreturns.json`) on top of
	`options`. A missing file leaves the options unchanged.
	"""
	options = options if options is not None else Options()
	path = path if path is not None else default_config_path()
	try:
		text = path.read_text(encoding="utf-8")
	except FileNotFoundError:
		return options
	except OSError as err:
		raise ConfigError(f"{path}: {err.strerror or err}") from err
	try:
		obj = json.loads(text)
	except json.JSONDecodeError as err:
		raise ConfigError(f"{path}: invalid JSON: {err}") from err
	if not isinstance(obj, dict):
		raise ConfigError(f"{path}: config must be a JSON object")
	return apply_config(obj, options, source=str(path))


def apply_config(obj: Dict[str, Any], options: Options, source: str = "<config>") -> Options:
	changes: Dict[str, Any] = {}
	for key, attr in _BOOL_KEYS.items():
		if key not in obj:
			continue
		value = obj[key]
		if not isinstance(value, bool):
			raise ConfigError(f"{source}: {key} must be true or false")
		changes[attr] = value
	if "gofmtPath" in obj:
		value = obj["gofmtPath"]
		if not isinstance(value, str) or not value:
			raise ConfigError(f"{source}: gofmtPath must be a non-empty string")
		changes["gofmt_path"] = value
	if "singleResultCalls" in obj:
		value = obj["singleResultCalls"]
		if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
			raise ConfigError(f"{source}: singleResultCalls must be a list of strings")
		changes["single_result_calls"] = frozenset(value)
	return replace(options, **changes)


__all__ = ["CONFIG_FILENAME", "ConfigError", "Options", "apply_config", "default_config_path", "load_config_file"]
