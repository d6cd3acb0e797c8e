# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from goreturns.cli import main

raise SystemExit(main())
