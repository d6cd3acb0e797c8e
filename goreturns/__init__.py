# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""Complete Go return statements with zero values."""

from goreturns.config import ConfigError, Options, load_config_file
from goreturns.returns.process import process

__all__ = ["ConfigError", "Options", "load_config_file", "process"]
