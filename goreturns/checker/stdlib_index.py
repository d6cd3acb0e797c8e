# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
"""
Result counts of commonly used standard library functions.

The checker does not load imported packages. Calls into the packages
listed here resolve through this table (`os.Open` yields two values,
`strconv.Itoa` one); anything else in an imported package stays unknown.
"""

from __future__ import annotations

import re
from typing import Dict, FrozenSet, Optional

RESULT_COUNTS: Dict[str, Dict[str, int]] = {
	"bufio": {
		"NewReader": 1,
		"NewReaderSize": 1,
		"NewReadWriter": 1,
		"NewScanner": 1,
		"NewWriter": 1,
		"NewWriterSize": 1,
		"ScanLines": 3,
		"ScanRunes": 3,
		"ScanWords": 3,
	},
	"bytes": {
		"Clone": 1,
		"Compare": 1,
		"Contains": 1,
		"Count": 1,
		"Cut": 3,
		"Equal": 1,
		"EqualFold": 1,
		"Fields": 1,
		"HasPrefix": 1,
		"HasSuffix": 1,
		"Index": 1,
		"IndexByte": 1,
		"Join": 1,
		"LastIndex": 1,
		"NewBuffer": 1,
		"NewBufferString": 1,
		"NewReader": 1,
		"Repeat": 1,
		"Replace": 1,
		"ReplaceAll": 1,
		"Split": 1,
		"SplitN": 1,
		"ToLower": 1,
		"ToUpper": 1,
		"Trim": 1,
		"TrimPrefix": 1,
		"TrimSpace": 1,
		"TrimSuffix": 1,
	},
	"context": {
		"Background": 1,
		"Cause": 1,
		"TODO": 1,
		"WithCancel": 2,
		"WithCancelCause": 2,
		"WithDeadline": 2,
		"WithTimeout": 2,
		"WithValue": 1,
		"WithoutCancel": 1,
	},
	"crypto/md5": {"New": 1, "Sum": 1},
	"crypto/rand": {"Int": 2, "Read": 2},
	"crypto/sha256": {"New": 1, "Sum256": 1},
	"database/sql": {"Open": 2, "OpenDB": 1, "Register": 0},
	"encoding/hex": {"Decode": 2, "DecodeString": 2, "Encode": 1, "EncodeToString": 1},
	"encoding/json": {
		"Compact": 1,
		"Indent": 1,
		"Marshal": 2,
		"MarshalIndent": 2,
		"NewDecoder": 1,
		"NewEncoder": 1,
		"Unmarshal": 1,
		"Valid": 1,
	},
	"encoding/xml": {"Marshal": 2, "MarshalIndent": 2, "NewDecoder": 1, "NewEncoder": 1, "Unmarshal": 1},
	"errors": {"As": 1, "Is": 1, "Join": 1, "New": 1, "Unwrap": 1},
	"fmt": {
		"Append": 1,
		"Appendf": 1,
		"Appendln": 1,
		"Errorf": 1,
		"Fprint": 2,
		"Fprintf": 2,
		"Fprintln": 2,
		"Fscan": 2,
		"Fscanf": 2,
		"Print": 2,
		"Printf": 2,
		"Println": 2,
		"Scan": 2,
		"Scanf": 2,
		"Scanln": 2,
		"Sprint": 1,
		"Sprintf": 1,
		"Sprintln": 1,
		"Sscan": 2,
		"Sscanf": 2,
	},
	"io": {
		"Copy": 2,
		"CopyBuffer": 2,
		"CopyN": 2,
		"LimitReader": 1,
		"MultiReader": 1,
		"MultiWriter": 1,
		"NewSectionReader": 1,
		"NopCloser": 1,
		"Pipe": 2,
		"ReadAll": 2,
		"ReadAtLeast": 2,
		"ReadFull": 2,
		"TeeReader": 1,
		"WriteString": 2,
	},
	"io/fs": {"Glob": 2, "ReadDir": 2, "ReadFile": 2, "Stat": 2, "Sub": 2, "ValidPath": 1, "WalkDir": 1},
	"io/ioutil": {
		"NopCloser": 1,
		"ReadAll": 2,
		"ReadDir": 2,
		"ReadFile": 2,
		"TempDir": 2,
		"TempFile": 2,
		"WriteFile": 1,
	},
	"log": {
		"Fatal": 0,
		"Fatalf": 0,
		"Fatalln": 0,
		"New": 1,
		"Panic": 0,
		"Panicf": 0,
		"Print": 0,
		"Printf": 0,
		"Println": 0,
		"SetFlags": 0,
		"SetOutput": 0,
		"SetPrefix": 0,
	},
	"maps": {"Clone": 1, "Copy": 0, "DeleteFunc": 0, "Equal": 1, "Keys": 1, "Values": 1},
	"math": {
		"Abs": 1,
		"Ceil": 1,
		"Exp": 1,
		"Floor": 1,
		"Frexp": 2,
		"Inf": 1,
		"IsInf": 1,
		"IsNaN": 1,
		"Log": 1,
		"Max": 1,
		"Min": 1,
		"Mod": 1,
		"Modf": 2,
		"NaN": 1,
		"Pow": 1,
		"Round": 1,
		"Sincos": 2,
		"Sqrt": 1,
		"Trunc": 1,
	},
	"math/rand": {
		"Float64": 1,
		"Int": 1,
		"Int63": 1,
		"Intn": 1,
		"New": 1,
		"NewSource": 1,
		"Perm": 1,
		"Seed": 0,
		"Shuffle": 0,
	},
	"net": {
		"Dial": 2,
		"DialTimeout": 2,
		"InterfaceAddrs": 2,
		"Interfaces": 2,
		"JoinHostPort": 1,
		"Listen": 2,
		"ListenPacket": 2,
		"LookupHost": 2,
		"LookupIP": 2,
		"ParseCIDR": 3,
		"ParseIP": 1,
		"Pipe": 2,
		"ResolveTCPAddr": 2,
		"ResolveUDPAddr": 2,
		"SplitHostPort": 3,
	},
	"net/http": {
		"DetectContentType": 1,
		"Error": 0,
		"FileServer": 1,
		"Get": 2,
		"Handle": 0,
		"HandleFunc": 0,
		"Head": 2,
		"ListenAndServe": 1,
		"ListenAndServeTLS": 1,
		"MaxBytesReader": 1,
		"NewRequest": 2,
		"NewRequestWithContext": 2,
		"NewServeMux": 1,
		"NotFound": 0,
		"Post": 2,
		"PostForm": 2,
		"ReadRequest": 2,
		"ReadResponse": 2,
		"Redirect": 0,
		"Serve": 1,
		"StatusText": 1,
		"StripPrefix": 1,
		"TimeoutHandler": 1,
	},
	"net/url": {
		"JoinPath": 2,
		"Parse": 2,
		"ParseQuery": 2,
		"ParseRequestURI": 2,
		"PathEscape": 1,
		"PathUnescape": 2,
		"QueryEscape": 1,
		"QueryUnescape": 2,
	},
	"os": {
		"Chdir": 1,
		"Chmod": 1,
		"Create": 2,
		"CreateTemp": 2,
		"Environ": 1,
		"Executable": 2,
		"Exit": 0,
		"Expand": 1,
		"ExpandEnv": 1,
		"Getenv": 1,
		"Getpid": 1,
		"Getuid": 1,
		"Getwd": 2,
		"Hostname": 2,
		"IsExist": 1,
		"IsNotExist": 1,
		"LookupEnv": 2,
		"Lstat": 2,
		"Mkdir": 1,
		"MkdirAll": 1,
		"MkdirTemp": 2,
		"Open": 2,
		"OpenFile": 2,
		"Pipe": 3,
		"ReadDir": 2,
		"ReadFile": 2,
		"Readlink": 2,
		"Remove": 1,
		"RemoveAll": 1,
		"Rename": 1,
		"Setenv": 1,
		"Stat": 2,
		"Symlink": 1,
		"TempDir": 1,
		"Truncate": 1,
		"Unsetenv": 1,
		"UserHomeDir": 2,
		"WriteFile": 1,
	},
	"os/exec": {"Command": 1, "CommandContext": 1, "LookPath": 2},
	"path": {"Base": 1, "Clean": 1, "Dir": 1, "Ext": 1, "IsAbs": 1, "Join": 1, "Match": 2, "Split": 2},
	"path/filepath": {
		"Abs": 2,
		"Base": 1,
		"Clean": 1,
		"Dir": 1,
		"EvalSymlinks": 2,
		"Ext": 1,
		"FromSlash": 1,
		"Glob": 2,
		"IsAbs": 1,
		"Join": 1,
		"Match": 2,
		"Rel": 2,
		"Split": 2,
		"SplitList": 1,
		"ToSlash": 1,
		"VolumeName": 1,
		"Walk": 1,
		"WalkDir": 1,
	},
	"regexp": {
		"Compile": 2,
		"CompilePOSIX": 2,
		"Match": 2,
		"MatchString": 2,
		"MustCompile": 1,
		"MustCompilePOSIX": 1,
		"QuoteMeta": 1,
	},
	"runtime": {"Caller": 4, "GC": 0, "GOMAXPROCS": 1, "Gosched": 0, "NumCPU": 1, "NumGoroutine": 1},
	"slices": {
		"BinarySearch": 2,
		"Clone": 1,
		"Compact": 1,
		"Contains": 1,
		"ContainsFunc": 1,
		"Delete": 1,
		"Equal": 1,
		"Index": 1,
		"IndexFunc": 1,
		"Insert": 1,
		"Max": 1,
		"Min": 1,
		"Reverse": 0,
		"Sort": 0,
		"SortFunc": 0,
	},
	"sort": {
		"Float64s": 0,
		"Ints": 0,
		"IsSorted": 1,
		"Search": 1,
		"SearchInts": 1,
		"SearchStrings": 1,
		"Slice": 0,
		"SliceIsSorted": 1,
		"SliceStable": 0,
		"Sort": 0,
		"Stable": 0,
		"Strings": 0,
	},
	"strconv": {
		"AppendInt": 1,
		"AppendQuote": 1,
		"Atoi": 2,
		"FormatBool": 1,
		"FormatFloat": 1,
		"FormatInt": 1,
		"FormatUint": 1,
		"Itoa": 1,
		"ParseBool": 2,
		"ParseFloat": 2,
		"ParseInt": 2,
		"ParseUint": 2,
		"Quote": 1,
		"QuoteRune": 1,
		"Unquote": 2,
		"UnquoteChar": 4,
	},
	"strings": {
		"Clone": 1,
		"Compare": 1,
		"Contains": 1,
		"ContainsAny": 1,
		"ContainsRune": 1,
		"Count": 1,
		"Cut": 3,
		"CutPrefix": 2,
		"CutSuffix": 2,
		"EqualFold": 1,
		"Fields": 1,
		"FieldsFunc": 1,
		"HasPrefix": 1,
		"HasSuffix": 1,
		"Index": 1,
		"IndexAny": 1,
		"IndexByte": 1,
		"IndexFunc": 1,
		"IndexRune": 1,
		"Join": 1,
		"LastIndex": 1,
		"Map": 1,
		"NewReader": 1,
		"NewReplacer": 1,
		"Repeat": 1,
		"Replace": 1,
		"ReplaceAll": 1,
		"Split": 1,
		"SplitAfter": 1,
		"SplitN": 1,
		"Title": 1,
		"ToLower": 1,
		"ToTitle": 1,
		"ToUpper": 1,
		"Trim": 1,
		"TrimFunc": 1,
		"TrimLeft": 1,
		"TrimPrefix": 1,
		"TrimRight": 1,
		"TrimSpace": 1,
		"TrimSuffix": 1,
	},
	"sync/atomic": {
		"AddInt32": 1,
		"AddInt64": 1,
		"CompareAndSwapInt64": 1,
		"LoadInt32": 1,
		"LoadInt64": 1,
		"StoreInt64": 0,
	},
	"time": {
		"After": 1,
		"AfterFunc": 1,
		"Date": 1,
		"FixedZone": 1,
		"LoadLocation": 2,
		"NewTicker": 1,
		"NewTimer": 1,
		"Now": 1,
		"Parse": 2,
		"ParseDuration": 2,
		"ParseInLocation": 2,
		"Since": 1,
		"Sleep": 0,
		"Tick": 1,
		"Unix": 1,
		"UnixMilli": 1,
		"Until": 1,
	},
	"unicode": {
		"IsDigit": 1,
		"IsLetter": 1,
		"IsLower": 1,
		"IsPunct": 1,
		"IsSpace": 1,
		"IsUpper": 1,
		"ToLower": 1,
		"ToUpper": 1,
	},
	"unicode/utf8": {
		"AppendRune": 1,
		"DecodeLastRuneInString": 2,
		"DecodeRune": 2,
		"DecodeRuneInString": 2,
		"EncodeRune": 1,
		"RuneCount": 1,
		"RuneCountInString": 1,
		"RuneLen": 1,
		"Valid": 1,
		"ValidString": 1,
	},
}

# Exported types usable in conversions, e.g. `time.Duration(n)`.
TYPE_NAMES: Dict[str, FrozenSet[str]] = {
	"io/fs": frozenset({"FileMode"}),
	"net/http": frozenset({"Dir", "HandlerFunc", "Header"}),
	"os": frozenset({"FileMode"}),
	"sort": frozenset({"Float64Slice", "IntSlice", "StringSlice"}),
	"time": frozenset({"Duration", "Month", "Weekday"}),
}

_MAJOR_VERSION = re.compile(r"v[0-9]+")


def result_count(path: str, name: str) -> Optional[int]:
	"""Number of values `path.name(...)` yields, or None if the function is not indexed."""
	return RESULT_COUNTS.get(path, {}).get(name)


def is_type_name(path: str, name: str) -> bool:
	return name in TYPE_NAMES.get(path, frozenset())


def package_name_for_path(path: str) -> str:
	"""
	Guess the package name an import path binds when the import is unnamed.

	Follows the usual conventions: the last path element, skipping a major
	version suffix (`/v2`) and dropping a `go-` prefix or `.v3` suffix.
	"""
	parts = [p for p in path.split("/") if p]
	if not parts:
		return path
	last = parts[-1]
	if _MAJOR_VERSION.fullmatch(last) and len(parts) > 1:
		last = parts[-2]
	if last.startswith("go-"):
		last = last[len("go-") :]
	last = last.split(".")[0]
	return last.replace("-", "_")


__all__ = ["RESULT_COUNTS", "TYPE_NAMES", "is_type_name", "package_name_for_path", "result_count"]
