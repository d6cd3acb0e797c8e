# vim: set noexpandtab: -*- indent-tabs-mode: t -*-
from __future__ import annotations

from enum import Enum
from pathlib import Path
from typing import Iterable, Iterator, List, Optional

from lark import Lark, Token, Tree
from lark.exceptions import UnexpectedCharacters, UnexpectedEOF, UnexpectedInput, UnexpectedToken

from goreturns.core.span import Span

from .ast import (
	ArrayType,
	AssignStmt,
	BasicLit,
	BinaryExpr,
	BlockStmt,
	BranchStmt,
	CallExpr,
	CaseClause,
	ChanDir,
	ChanType,
	CommClause,
	CompositeLit,
	Decl,
	DeclStmt,
	DeferStmt,
	Ellipsis,
	Expr,
	ExprStmt,
	Field,
	FieldList,
	File,
	ForStmt,
	FuncDecl,
	FuncLit,
	FuncType,
	GenDecl,
	GoStmt,
	Ident,
	IfStmt,
	ImportSpec,
	IncDecStmt,
	IndexExpr,
	InterfaceType,
	KeyValueExpr,
	LabeledStmt,
	LitKind,
	MapType,
	ParenExpr,
	RangeStmt,
	ReturnStmt,
	SelectStmt,
	SelectorExpr,
	SendStmt,
	SliceExpr,
	Spec,
	StarExpr,
	Stmt,
	StructType,
	SwitchStmt,
	TypeAssertExpr,
	TypeSpec,
	TypeSwitchStmt,
	UnaryExpr,
	ValueSpec,
)

_GRAMMAR_PATH = Path(__file__).with_name("grammar.lark")
_GRAMMAR_SRC = _GRAMMAR_PATH.read_text()


class SyntaxErrorKind(Enum):
	"""Classification the fragment normalizer branches on."""

	MISSING_PACKAGE = "missing-package"
	MISSING_DECLARATION = "missing-declaration"
	OTHER = "other"


class GoSyntaxError(ValueError):
	"""
	User-facing parse error.

	`kind` tells a file that lacks its package clause, or that has a
	statement at top level, apart from any other syntax error. The message
	follows the Go toolchain's wording so it reads naturally in editors.
	"""

	def __init__(
		self,
		message: str,
		*,
		filename: str = "",
		line: Optional[int] = None,
		column: Optional[int] = None,
		kind: SyntaxErrorKind = SyntaxErrorKind.OTHER,
	) -> None:
		super().__init__(message)
		self.message = message
		self.filename = filename
		self.line = line
		self.column = column
		self.kind = kind

	def __str__(self) -> str:
		line = self.line if self.line is not None else "?"
		col = self.column if self.column is not None else "?"
		return f"{self.filename or '<input>'}:{line}:{col}: {self.message}"


class SemicolonInserter:
	"""
	Go's automatic semicolon insertion as a lark post-lexer.

	A newline becomes a terminator (`_T`) when the token before it is an
	identifier, a literal, one of the keywords `break`, `continue`,
	`fallthrough` or `return`, one of `++ -- ) ] }`. Explicit semicolons
	always terminate. A block comment spanning lines acts like a newline, and
	end of input terminates like a final newline. The rule is purely lexical;
	there is no bracket depth tracking as Go has none.
	"""

	always_accept = ("NEWLINE", "SEMI", "BLOCK_COMMENT")

	TERMINABLE = frozenset(
		{
			"NAME",
			"NUMBER",
			"STRING",
			"CHAR",
			"BREAK",
			"CONTINUE",
			"FALLTHROUGH",
			"RETURN",
			"INC",
			"DEC",
			"RPAR",
			"RSQB",
			"RBRACE",
		}
	)

	def process(self, stream: Iterable[Token]) -> Iterator[Token]:
		# State lives in locals: one Lark instance is shared by every parse.
		can_terminate = False
		last: Optional[Token] = None

		for token in stream:
			ttype = token.type

			if ttype == "BLOCK_COMMENT":
				if can_terminate and "\n" in token:
					yield Token.new_borrow_pos("_T", "\n", token)
					can_terminate = False
				continue

			if ttype == "NEWLINE":
				if can_terminate:
					yield Token.new_borrow_pos("_T", token.value, token)
					can_terminate = False
				continue

			if ttype == "SEMI":
				yield Token.new_borrow_pos("_T", token.value, token)
				can_terminate = False
				continue

			yield token
			last = token
			can_terminate = ttype in self.TERMINABLE

		if can_terminate and last is not None:
			yield Token.new_borrow_pos("_T", "", last)


_PARSER = Lark(
	_GRAMMAR_SRC,
	parser="earley",
	lexer="basic",
	start="start",
	propagate_positions=True,
	maybe_placeholders=True,
	postlex=SemicolonInserter(),
)


def parse_source(filename: str, src: bytes) -> File:
	"""Decode `src` as UTF-8 and parse it as a Go file."""
	try:
		text = src.decode("utf-8")
	except UnicodeDecodeError as err:
		raise GoSyntaxError(f"invalid UTF-8 encoding: {err.reason}", filename=filename) from err
	return parse_file(filename, text)


def parse_file(filename: str, text: str) -> File:
	"""
	Parse Go source text into a `File`.

	Raises `GoSyntaxError`. A token-level pre-pass classifies the two errors
	the fragment normalizer cares about before the grammar runs, so the
	classification does not depend on where the Earley parser gives up.
	"""
	_classify_top_level(filename, text)
	try:
		tree = _PARSER.parse(text)
	except UnexpectedInput as err:
		raise _convert_error(filename, err) from err
	source_file = tree.children[0]
	try:
		return _build_file(source_file, filename)
	except GoSyntaxError as err:
		err.filename = filename
		raise


_DECL_KEYWORDS = frozenset({"IMPORT", "FUNC", "VAR", "CONST", "TYPE"})
_OPENERS = frozenset({"LPAR", "LSQB", "LBRACE"})
_CLOSERS = frozenset({"RPAR", "RSQB", "RBRACE"})


def _classify_top_level(filename: str, text: str) -> None:
	tokens = _PARSER.lex(text)
	try:
		first = next(iter(tokens), None)
		if first is None or first.type != "PACKAGE":
			raise _error_at(
				filename,
				first,
				f"expected 'package', found {_describe(first)}",
				SyntaxErrorKind.MISSING_PACKAGE,
			)
		# Skip the package clause itself; an error in it is left to the grammar.
		clause = [next(tokens, None), next(tokens, None)]
		if any(tok is None for tok in clause) or clause[0].type != "NAME" or clause[1].type != "_T":
			return
		depth = 0
		at_decl_start = True
		for tok in tokens:
			if depth == 0 and at_decl_start:
				if tok.type == "_T":
					continue
				if tok.type not in _DECL_KEYWORDS:
					raise _error_at(
						filename,
						tok,
						f"expected declaration, found {_describe(tok)}",
						SyntaxErrorKind.MISSING_DECLARATION,
					)
				at_decl_start = False
			if tok.type in _OPENERS:
				depth += 1
			elif tok.type in _CLOSERS:
				depth = max(0, depth - 1)
			elif tok.type == "_T" and depth == 0:
				at_decl_start = True
	except UnexpectedCharacters as err:
		raise _convert_error(filename, err) from err


def _describe(tok: Optional[Token]) -> str:
	if tok is None or (tok.type == "_T" and tok.value == ""):
		return "EOF"
	if tok.type == "_T":
		return "newline" if tok.value == "\n" else "';'"
	if tok.type in {"NAME", "NUMBER", "STRING", "CHAR"}:
		return f"{tok.type.lower()} {tok.value}" if tok.type != "NAME" else tok.value
	return f"'{tok.value}'"


def _error_at(filename: str, tok: Optional[Token], message: str, kind: SyntaxErrorKind) -> GoSyntaxError:
	line = getattr(tok, "line", 1) if tok is not None else 1
	column = getattr(tok, "column", 1) if tok is not None else 1
	return GoSyntaxError(message, filename=filename, line=line, column=column, kind=kind)


def _convert_error(filename: str, err: UnexpectedInput) -> GoSyntaxError:
	if isinstance(err, UnexpectedToken):
		message = f"syntax error: unexpected {_describe(err.token)}"
	elif isinstance(err, UnexpectedEOF):
		message = "syntax error: unexpected EOF"
	elif isinstance(err, UnexpectedCharacters):
		message = f"invalid character {err.char!r}"
	else:
		message = "syntax error"
	return GoSyntaxError(
		message,
		filename=filename,
		line=getattr(err, "line", None),
		column=getattr(err, "column", None),
	)


# Tree builders ---------------------------------------------------------------


def _name(node: Tree | Token) -> str:
	if isinstance(node, Tree):
		data = node.data
		if isinstance(data, Token):
			return data.value
		return data
	if isinstance(node, Token):
		return node.type
	return str(node)


def _span(node: Tree | Token) -> Span:
	if isinstance(node, Tree):
		return Span.from_loc(node.meta)
	return Span.from_loc(node)


def _trees(node: Tree) -> List[Tree]:
	return [c for c in node.children if isinstance(c, Tree)]


def _ident(tok: Token) -> Ident:
	return Ident(name=str(tok), span=_span(tok))


def _idents(tree: Tree) -> List[Ident]:
	"""identifier_list -> [Ident]"""
	return [_ident(tok) for tok in tree.children if isinstance(tok, Token)]


def _build_file(tree: Tree, filename: str) -> File:
	package: Optional[Ident] = None
	decls: List[Decl] = []
	for child in _trees(tree):
		kind = _name(child)
		if kind == "package_clause":
			package = _ident(child.children[0])
		elif kind == "func_decl":
			decls.append(_build_func_decl(child))
		else:
			decls.append(_build_gen_decl(child))
	assert package is not None
	return File(package=package, decls=decls, filename=filename, span=_span(tree))


def _build_gen_decl(tree: Tree) -> GenDecl:
	kind = _name(tree)
	specs: List[Spec] = []
	for child in _trees(tree):
		if kind == "import_decl":
			specs.append(_build_import_spec(child))
		elif kind == "type_decl":
			specs.append(_build_type_spec(child))
		else:
			specs.append(_build_value_spec(child))
	tok = kind[: -len("_decl")]
	return GenDecl(tok=tok, specs=specs, span=_span(tree))


def _build_import_spec(tree: Tree) -> ImportSpec:
	*name, path = tree.children
	ident = _ident(name[0]) if name else None
	return ImportSpec(name=ident, path=_basic_lit(path, LitKind.STRING), span=_span(tree))


def _build_value_spec(tree: Tree) -> ValueSpec:
	"""const_spec / var_spec: identifier_list [type] [= expression_list]"""
	names_tree, *rest = tree.children
	type_expr: Optional[Expr] = None
	values: List[Expr] = []
	for child in rest:
		if isinstance(child, Token):
			continue
		if _name(child) == "expression_list":
			values = _build_expr_list(child)
		else:
			type_expr = _build_expr(child)
	return ValueSpec(names=_idents(names_tree), type_expr=type_expr, values=values, span=_span(tree))


def _build_type_spec(tree: Tree) -> TypeSpec:
	name, type_params, assign, type_node = tree.children
	return TypeSpec(
		name=_ident(name),
		type_expr=_build_expr(type_node),
		type_params=_build_type_params(type_params) if type_params is not None else None,
		alias=assign is not None,
		span=_span(tree),
	)


def _build_type_params(tree: Tree) -> FieldList:
	fields: List[Field] = []
	for decl in _trees(tree):
		names_tree, constraint = decl.children
		fields.append(Field(names=_idents(names_tree), type_expr=_build_union(constraint), span=_span(decl)))
	return FieldList(fields=fields, span=_span(tree))


def _build_union(tree: Tree) -> Expr:
	"""type_constraint / type_elem: `~A | B | ...` folded into BinaryExpr("|")."""
	terms = [_build_type_term(t) for t in _trees(tree)]
	expr = terms[0]
	for term in terms[1:]:
		expr = BinaryExpr(x=expr, op="|", y=term, span=_span(tree))
	return expr


def _build_type_term(tree: Tree) -> Expr:
	tilde, type_node = tree.children
	inner = _build_expr(type_node)
	if tilde is not None:
		return UnaryExpr(op="~", x=inner, span=_span(tree))
	return inner


def _build_func_decl(tree: Tree) -> FuncDecl:
	recv, name, type_params, signature, body = tree.children
	func_type = _build_signature(signature)
	if type_params is not None:
		func_type.type_params = _build_type_params(type_params)
	return FuncDecl(
		recv=_build_params(recv.children[0]) if recv is not None else None,
		name=_ident(name),
		func_type=func_type,
		body=_build_block(body) if body is not None else None,
		span=_span(tree),
	)


def _build_signature(tree: Tree) -> FuncType:
	params, result = tree.children
	results: Optional[FieldList] = None
	if result is not None:
		inner = result.children[0]
		if _name(inner) == "parameters":
			results = _build_params(inner)
		else:
			type_expr = _build_expr(inner)
			results = FieldList(fields=[Field(names=[], type_expr=type_expr, span=type_expr.span)], span=_span(result))
	return FuncType(params=_build_params(params), results=results, span=_span(tree))


def _build_params(tree: Tree) -> FieldList:
	"""
	Build a parameter or result list, grouping names the way Go does.

	The grammar sees `(a, b int, c string)` as three declarations, the first
	consisting of a lone `a`. Once any declaration carries a name, lone
	identifiers are names waiting for the next declaration's type;
	otherwise every declaration is an unnamed type.
	"""
	(param_list,) = tree.children
	decls = param_list.children if param_list is not None else []
	named = any(decl.children[0] is not None for decl in decls)
	fields: List[Field] = []
	pending: List[Ident] = []
	for decl in decls:
		name, ellipsis, type_node = decl.children
		type_expr = _build_expr(type_node)
		if ellipsis is not None:
			type_expr = Ellipsis(elt=type_expr, span=_span(decl))
		if not named:
			fields.append(Field(names=[], type_expr=type_expr, span=_span(decl)))
			continue
		if name is None:
			if ellipsis is not None or not isinstance(type_expr, Ident):
				raise _mixed_params(decl)
			pending.append(type_expr)
			continue
		fields.append(Field(names=pending + [_ident(name)], type_expr=type_expr, span=_span(decl)))
		pending = []
	if pending:
		raise _mixed_params(decls[-1])
	return FieldList(fields=fields, span=_span(tree))


def _mixed_params(decl: Tree) -> GoSyntaxError:
	span = _span(decl)
	return GoSyntaxError("syntax error: mixed named and unnamed parameters", line=span.line, column=span.column)


def _build_block(tree: Tree) -> BlockStmt:
	(stmts,) = tree.children
	return BlockStmt(stmts=_build_stmt_list(stmts), span=_span(tree))


def _build_stmt_list(tree: Tree) -> List[Stmt]:
	return [_build_stmt(child) for child in _trees(tree)]


def _build_stmt(tree: Tree) -> Stmt:
	kind = _name(tree)
	span = _span(tree)
	children = tree.children
	if kind == "return_stmt":
		(results,) = children
		return ReturnStmt(results=_build_expr_list(results) if results is not None else [], span=span)
	if kind == "expr_stmt":
		return ExprStmt(x=_build_expr(children[0]), span=span)
	if kind in {"assign_stmt", "define_stmt"}:
		lhs, tok, rhs = children
		return AssignStmt(lhs=_build_expr_list(lhs), tok=str(tok), rhs=_build_expr_list(rhs), span=span)
	if kind == "inc_dec_stmt":
		x, tok = children
		return IncDecStmt(x=_build_expr(x), tok=str(tok), span=span)
	if kind == "send_stmt":
		chan, _arrow, value = children
		return SendStmt(chan=_build_expr(chan), value=_build_expr(value), span=span)
	if kind == "block":
		return _build_block(tree)
	if kind == "if_stmt":
		return _build_if_stmt(tree)
	if kind == "for_stmt":
		return _build_for_stmt(tree)
	if kind == "switch_stmt":
		return _build_switch_stmt(tree)
	if kind == "type_switch_stmt":
		return _build_type_switch_stmt(tree)
	if kind == "select_stmt":
		clauses = [
			CommClause(
				comm=_build_stmt(c.children[0]) if len(c.children) == 2 else None,
				body=_build_stmt_list(c.children[-1]),
				span=_span(c),
			)
			for c in _trees(tree)
		]
		return SelectStmt(clauses=clauses, span=span)
	if kind == "decl_stmt":
		return DeclStmt(decl=_build_gen_decl(children[0]), span=span)
	if kind == "labeled_stmt":
		inner = _build_stmt(children[1]) if len(children) > 1 else None
		return LabeledStmt(label=_ident(children[0]), stmt=inner, span=span)
	if kind == "go_stmt":
		return GoStmt(call=_build_expr(children[0]), span=span)
	if kind == "defer_stmt":
		return DeferStmt(call=_build_expr(children[0]), span=span)
	if kind in {"break_stmt", "continue_stmt"}:
		(label,) = children
		return BranchStmt(
			tok=kind[: -len("_stmt")],
			label=_ident(label) if label is not None else None,
			span=span,
		)
	if kind == "goto_stmt":
		return BranchStmt(tok="goto", label=_ident(children[0]), span=span)
	if kind == "fallthrough_stmt":
		return BranchStmt(tok="fallthrough", span=span)
	raise ValueError(f"unsupported statement node: {kind}")


def _build_if_stmt(tree: Tree) -> IfStmt:
	header, body, *rest = tree.children
	init: Optional[Stmt] = None
	if len(header.children) == 2:
		init = _build_stmt(header.children[0])
	cond = _build_expr(header.children[-1])
	else_: Optional[Stmt] = None
	if rest and rest[0] is not None:
		else_ = _build_stmt(rest[0])
	return IfStmt(init=init, cond=cond, body=_build_block(body), else_=else_, span=_span(tree))


def _build_for_stmt(tree: Tree) -> Stmt:
	*header, body = tree.children
	block = _build_block(body)
	span = _span(tree)
	if not header or header[0] is None:
		return ForStmt(init=None, cond=None, post=None, body=block, span=span)
	clause = header[0]
	kind = _name(clause)
	if kind == "for_cond":
		return ForStmt(init=None, cond=_build_expr(clause.children[0]), post=None, body=block, span=span)
	if kind == "for_clause":
		init, cond, post = clause.children
		return ForStmt(
			init=_build_stmt(init.children[0]) if init is not None else None,
			cond=_build_expr(cond) if cond is not None else None,
			post=_build_stmt(post.children[0]) if post is not None else None,
			body=block,
			span=span,
		)
	# range_clause: [x] or [expression_list, tok, x]
	key: Optional[Expr] = None
	value: Optional[Expr] = None
	tok: Optional[str] = None
	if len(clause.children) == 3:
		lhs = _build_expr_list(clause.children[0])
		key = lhs[0]
		value = lhs[1] if len(lhs) > 1 else None
		tok = str(clause.children[1])
	return RangeStmt(key=key, value=value, tok=tok, x=_build_expr(clause.children[-1]), body=block, span=span)


def _build_switch_stmt(tree: Tree) -> SwitchStmt:
	init: Optional[Stmt] = None
	tag: Optional[Expr] = None
	clauses: List[CaseClause] = []
	for child in _trees(tree):
		kind = _name(child)
		if kind == "switch_tag":
			tag = _build_expr(child.children[0])
		elif kind == "switch_init":
			init = _build_stmt(child.children[0])
			if len(child.children) == 2:
				tag = _build_expr(child.children[1])
		else:
			clauses.append(_build_case_clause(child, _build_expr_list))
	return SwitchStmt(init=init, tag=tag, clauses=clauses, span=_span(tree))


def _build_case_clause(tree: Tree, build_list) -> CaseClause:
	if len(tree.children) == 2:
		exprs: Optional[List[Expr]] = build_list(tree.children[0])
	else:
		exprs = None
	return CaseClause(exprs=exprs, body=_build_stmt_list(tree.children[-1]), span=_span(tree))


def _build_type_switch_stmt(tree: Tree) -> TypeSwitchStmt:
	init: Optional[Stmt] = None
	assign: Optional[Stmt] = None
	clauses: List[CaseClause] = []
	for child in _trees(tree):
		kind = _name(child)
		if kind == "type_switch_guard":
			assign = _build_type_switch_guard(child)
		elif kind == "type_case_clause":
			clauses.append(_build_case_clause(child, _build_type_list))
		else:
			init = _build_stmt(child)
	assert assign is not None
	return TypeSwitchStmt(init=init, assign=assign, clauses=clauses, span=_span(tree))


def _build_type_switch_guard(tree: Tree) -> Stmt:
	span = _span(tree)
	guard = TypeAssertExpr(x=_build_expr(tree.children[-1]), type_expr=None, span=span)
	if len(tree.children) == 3:
		return AssignStmt(lhs=[_ident(tree.children[0])], tok=":=", rhs=[guard], span=span)
	return ExprStmt(x=guard, span=span)


def _build_type_list(tree: Tree) -> List[Expr]:
	return [_build_expr(child) for child in tree.children]


def _build_expr_list(tree: Tree) -> List[Expr]:
	return [_build_expr(child) for child in tree.children]


def _build_expr(node: Tree) -> Expr:
	kind = _name(node)
	span = _span(node)
	children = node.children
	if kind == "ident":
		return _ident(children[0])
	if kind == "number_lit":
		return _basic_lit(children[0], _number_kind(str(children[0])))
	if kind == "string_lit":
		return _basic_lit(children[0], LitKind.STRING)
	if kind == "char_lit":
		return _basic_lit(children[0], LitKind.CHAR)
	if kind == "paren_expr":
		return ParenExpr(x=_build_expr(children[0]), span=span)
	if kind == "selector_expr":
		x, sel = children
		return SelectorExpr(x=_build_expr(x), sel=_ident(sel), span=span)
	if kind == "call_expr":
		fun, args = children
		arg_list: List[Expr] = []
		has_ellipsis = False
		if args is not None:
			exprs, ellipsis = args.children
			arg_list = _build_expr_list(exprs)
			has_ellipsis = ellipsis is not None
		return CallExpr(fun=_build_expr(fun), args=arg_list, has_ellipsis=has_ellipsis, span=span)
	if kind == "index_expr":
		x, indices = children
		return IndexExpr(x=_build_expr(x), indices=_build_expr_list(indices), span=span)
	if kind in {"slice_expr", "slice3_expr"}:
		parts = [_build_expr(c) if c is not None else None for c in children]
		x = parts[0]
		assert x is not None
		if kind == "slice_expr":
			return SliceExpr(x=x, low=parts[1], high=parts[2], span=span)
		return SliceExpr(x=x, low=parts[1], high=parts[2], max=parts[3], slice3=True, span=span)
	if kind == "type_assert_expr":
		x, type_node = children
		return TypeAssertExpr(x=_build_expr(x), type_expr=_build_expr(type_node), span=span)
	if kind == "binary_expr":
		x, op, y = children
		return BinaryExpr(x=_build_expr(x), op=str(op), y=_build_expr(y), span=span)
	if kind == "unary_op_expr":
		op, x = children
		if str(op) == "*":
			return StarExpr(x=_build_expr(x), span=span)
		return UnaryExpr(op=str(op), x=_build_expr(x), span=span)
	if kind == "composite_lit":
		type_node, value = children
		return CompositeLit(type_expr=_build_expr(type_node), elts=_build_elements(value), span=span)
	if kind == "literal_value":
		return CompositeLit(type_expr=None, elts=_build_elements(node), span=span)
	if kind == "func_lit":
		signature, body = children
		return FuncLit(func_type=_build_signature(signature), body=_build_block(body), span=span)
	return _build_type(node)


def _build_elements(tree: Tree) -> List[Expr]:
	(element_list,) = tree.children
	if element_list is None:
		return []
	elts: List[Expr] = []
	for elem in element_list.children:
		if len(elem.children) == 2:
			key, value = elem.children
			elts.append(KeyValueExpr(key=_build_expr(key), value=_build_expr(value), span=_span(elem)))
		else:
			elts.append(_build_expr(elem.children[0]))
	return elts


def _build_type(tree: Tree) -> Expr:
	kind = _name(tree)
	span = _span(tree)
	children = tree.children
	if kind == "type_ref":
		if len(children) == 1:
			return _ident(children[0])
		pkg, sel = children
		return SelectorExpr(x=_ident(pkg), sel=_ident(sel), span=span)
	if kind == "generic_type":
		base, args = children
		return IndexExpr(x=_build_type(base), indices=_build_type_list(args), span=span)
	if kind == "pointer_type":
		return StarExpr(x=_build_expr(children[0]), span=span)
	if kind == "slice_type":
		return ArrayType(length=None, elt=_build_expr(children[0]), span=span)
	if kind == "array_type":
		length, elt = children
		if isinstance(length, Token):
			length_expr: Expr = Ellipsis(span=_span(length))
		else:
			length_expr = _build_expr(length)
		return ArrayType(length=length_expr, elt=_build_expr(elt), span=span)
	if kind == "map_type":
		key, value = children
		return MapType(key=_build_expr(key), value=_build_expr(value), span=span)
	if kind == "chan_type":
		*toks, elem = children
		direction = ChanDir.BOTH
		if len(toks) == 2:
			direction = ChanDir.SEND if toks[0].type == "CHAN" else ChanDir.RECV
		return ChanType(direction=direction, value=_build_expr(elem), span=span)
	if kind == "func_type":
		func_type = _build_signature(children[0])
		func_type.span = span
		return func_type
	if kind == "struct_type":
		fields = [_build_struct_field(c) for c in _trees(tree)]
		return StructType(fields=FieldList(fields=fields, span=span), span=span)
	if kind == "interface_type":
		methods: List[Field] = []
		for elem in _trees(tree):
			if _name(elem) == "method_elem":
				name, signature = elem.children
				methods.append(Field(names=[_ident(name)], type_expr=_build_signature(signature), span=_span(elem)))
			else:
				methods.append(Field(names=[], type_expr=_build_union(elem), span=_span(elem)))
		return InterfaceType(methods=FieldList(fields=methods, span=span), span=span)
	raise ValueError(f"unsupported expression node: {kind}")


def _build_struct_field(tree: Tree) -> Field:
	span = _span(tree)
	if _name(tree) == "field_decl":
		names_tree, type_node, tag = tree.children
		return Field(
			names=_idents(names_tree),
			type_expr=_build_expr(type_node),
			tag=_basic_lit(tag, LitKind.STRING) if tag is not None else None,
			span=span,
		)
	star, base, args, tag = tree.children
	type_expr = _build_type(base)
	if args is not None:
		type_expr = IndexExpr(x=type_expr, indices=_build_type_list(args), span=span)
	if star is not None:
		type_expr = StarExpr(x=type_expr, span=span)
	return Field(
		names=[],
		type_expr=type_expr,
		tag=_basic_lit(tag, LitKind.STRING) if tag is not None else None,
		span=span,
	)


def _basic_lit(tok: Token, kind: LitKind) -> BasicLit:
	return BasicLit(kind=kind, value=str(tok), span=_span(tok))


def _number_kind(text: str) -> LitKind:
	if text.endswith("i"):
		return LitKind.IMAG
	lowered = text.lower()
	if lowered.startswith("0x"):
		return LitKind.FLOAT if ("." in lowered or "p" in lowered) else LitKind.INT
	if lowered.startswith(("0b", "0o")):
		return LitKind.INT
	if any(ch in lowered for ch in ".e"):
		return LitKind.FLOAT
	return LitKind.INT


__all__ = ["GoSyntaxError", "SemicolonInserter", "SyntaxErrorKind", "parse_file", "parse_source"]
