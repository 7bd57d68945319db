"""Go subset parser: builds a SourceFile from Go source text."""

from __future__ import annotations
from pathlib import Path
from typing import NamedTuple
from lark import Lark, Transformer, Token, v_args
from lark.exceptions import UnexpectedInput

from scarc.transpiler.go_ast import (
    SourceFile, Import, SourceLocation,
    NamedType, QualifiedType, ArrayType, MapType, PointerType,
    StructField, StructType, MethodSpec, InterfaceType, UnsupportedType,
    Identifier, Literal, BinaryOp, UnaryOp, Paren, Call, Selector, Index,
    CompositeLiteral, KeyValue, TypeAssertion, UnsupportedExpr,
    Block, ExprStmt, Assign, LocalDecl, If, ClassicFor, ForEach, Return,
    IncDec, Case, Switch, Break, Continue, Unsupported,
    Param, Function, TypeDecl, ValueGroup,
)

_GRAMMAR_PATH = Path(__file__).parent.parent / "grammar" / "go_subset.lark"


class GoSyntaxError(Exception):
    def __init__(self, message: str, line: int | None = None, column: int | None = None):
        super().__init__(message)
        self.line = line
        self.column = column


# Tokens after which a newline terminates the statement.
_TERMINATING_TYPES = frozenset({"NAME", "NUMBER", "STRING", "RAW_STRING", "CHAR"})
_TERMINATING_VALUES = frozenset({
    "break", "continue", "fallthrough", "return",
    "++", "--", ")", "]", "}",
})


def _ends_statement(tok: Token) -> bool:
    return tok.type in _TERMINATING_TYPES or tok.value in _TERMINATING_VALUES


class GoSemicolons:
    """Post-lexer implementing Go's automatic semicolon insertion.

    Newline tokens are dropped, except after a token that can end a statement,
    where they become a ``_SEMI``. A final ``_SEMI`` is added at end of input
    under the same rule.
    """

    always_accept = ("_NL",)

    def process(self, stream):
        last = None
        for tok in stream:
            if tok.type == "_NL":
                if last is not None and _ends_statement(last):
                    last = Token.new_borrow_pos("_SEMI", ";", tok)
                    yield last
                continue
            last = tok
            yield tok
        if last is not None and _ends_statement(last):
            yield Token.new_borrow_pos("_SEMI", ";", last)


_parser = Lark(
    _GRAMMAR_PATH.read_text(encoding="utf-8"),
    parser="earley",
    lexer="basic",
    postlex=GoSemicolons(),
    propagate_positions=True,
)


def _loc(meta) -> SourceLocation | None:
    if hasattr(meta, "line"):
        return SourceLocation(meta.line, meta.column)
    return None


class _Signature(NamedTuple):
    params: list
    results: list


class _RangeClause(NamedTuple):
    bindings: list
    source: object


class _ForClause(NamedTuple):
    init: object
    cond: object
    post: object


class _SwitchInit(NamedTuple):
    stmt: object


class _SwitchTag(NamedTuple):
    expr: object


class _CallArgs(NamedTuple):
    args: list
    spread: bool


class GoTransformer(Transformer):
    """Transforms a Lark parse tree into a SourceFile."""

    # --- File ---

    def start(self, items):
        package = items[0]
        src = SourceFile(package)
        for item in items[1:]:
            if isinstance(item, list) and item and isinstance(item[0], Import):
                src.imports.extend(item)
            elif isinstance(item, list):
                src.decls.extend(item)
            else:
                src.decls.append(item)
        return src

    def package_clause(self, args):
        return str(args[0])

    def import_decl(self, args):
        return list(args)

    def import_spec(self, args):
        path = str(args[-1])[1:-1]
        alias = args[0] if len(args) > 1 else None
        return Import(path, alias)

    def import_alias(self, args):
        return str(args[0])

    # --- Functions ---

    @v_args(meta=True)
    def func_decl(self, meta, args):
        receiver = None
        name = None
        sig = _Signature([], [])
        body = None
        for a in args:
            if isinstance(a, Token):
                name = str(a)
            elif isinstance(a, _Signature):
                sig = a
            elif isinstance(a, Block):
                body = a
            elif isinstance(a, Param):
                receiver = a
        return Function(name, sig.params, sig.results, body, receiver, _loc(meta))

    def receiver(self, args):
        params = args[0]
        return params[0] if params else None

    def signature(self, args):
        results = args[1] if len(args) > 1 else []
        return _Signature(args[0], results)

    def result(self, args):
        if isinstance(args[0], list):
            return args[0]
        return [Param(None, args[0])]

    def parameters(self, args):
        return _group_params(list(args))

    def named_param(self, args):
        variadic = any(isinstance(a, Token) and a.type == "ELLIPSIS" for a in args)
        type_expr = args[-1]
        if variadic:
            type_expr = ArrayType(type_expr)
        return Param(str(args[0]), type_expr, variadic)

    def anon_param(self, args):
        variadic = len(args) > 1
        type_expr = args[-1]
        if variadic:
            type_expr = ArrayType(type_expr)
        return Param(None, type_expr, variadic)

    # --- var / const / type ---

    def var_decl(self, args):
        return ValueGroup("var", [d for spec in args for d in spec])

    def const_decl(self, args):
        return ValueGroup("const", [d for spec in args for d in spec])

    def var_spec(self, args):
        return _value_spec(args)

    def const_spec(self, args):
        return _value_spec(args)

    def type_decl(self, args):
        return list(args)

    @v_args(meta=True)
    def type_def(self, meta, args):
        return TypeDecl(str(args[0]), args[1], loc=_loc(meta))

    @v_args(meta=True)
    def type_alias(self, meta, args):
        return TypeDecl(str(args[0]), args[1], alias=True, loc=_loc(meta))

    def name_list(self, args):
        return [str(a) for a in args]

    # --- Types ---

    def named_type(self, args):
        return NamedType(str(args[0]))

    def qualified_type(self, args):
        return QualifiedType(str(args[0]), str(args[1]))

    def slice_type(self, args):
        return ArrayType(args[0])

    def array_type(self, args):
        if len(args) == 2:
            return ArrayType(args[1], args[0])
        return ArrayType(args[0])

    def map_type(self, args):
        return MapType(args[0], args[1])

    def pointer_type(self, args):
        return PointerType(args[0])

    def func_type(self, args):
        return UnsupportedType("function type")

    def chan_type(self, args):
        return UnsupportedType("channel type")

    def struct_type(self, args):
        fields = []
        for a in args:
            if isinstance(a, list):
                fields.extend(a)
            else:
                fields.append(a)
        return StructType(fields)

    def field_decl(self, args):
        names, type_expr = args[0], args[1]
        return [StructField(n, type_expr) for n in names]

    def embedded_field(self, args):
        pointer = any(isinstance(a, Token) and a.type == "STAR" for a in args)
        type_expr = next(a for a in args if isinstance(a, (NamedType, QualifiedType)))
        if pointer:
            return StructField(type_expr.name, PointerType(type_expr), embedded=True)
        return StructField(type_expr.name, type_expr, embedded=True)

    def tag(self, args):
        return None

    def interface_type(self, args):
        methods = [a for a in args if isinstance(a, MethodSpec)]
        embeds = [a for a in args if not isinstance(a, MethodSpec)]
        return InterfaceType(methods, embeds)

    def method_spec(self, args):
        sig = args[1]
        return MethodSpec(str(args[0]), sig.params, sig.results)

    def embedded_iface(self, args):
        return args[0]

    # --- Statements ---

    def block(self, args):
        return Block(args[0])

    def stmt_list(self, args):
        return [_as_statement(a) for a in args if a is not None]

    def expr_stmt(self, args):
        return ExprStmt(args[0])

    @v_args(meta=True)
    def send_stmt(self, meta, args):
        return Unsupported("send statement", _loc(meta))

    def inc_dec_stmt(self, args):
        return IncDec(args[1], args[0])

    def inc_dec_op(self, args):
        return str(args[0])

    def assignment(self, args):
        return Assign(args[1], args[0], args[2])

    def assign_op(self, args):
        return str(args[0])

    def short_var_decl(self, args):
        return Assign(":=", args[0], args[1])

    def return_stmt(self, args):
        return Return(args[0] if args else [])

    def break_stmt(self, args):
        return Break(str(args[0]) if args else None)

    def continue_stmt(self, args):
        return Continue(str(args[0]) if args else None)

    @v_args(meta=True)
    def goto_stmt(self, meta, args):
        return Unsupported("goto statement", _loc(meta))

    @v_args(meta=True)
    def fallthrough_stmt(self, meta, args):
        return Unsupported("fallthrough statement", _loc(meta))

    @v_args(meta=True)
    def go_stmt(self, meta, args):
        return Unsupported("go statement", _loc(meta))

    @v_args(meta=True)
    def defer_stmt(self, meta, args):
        return Unsupported("defer statement", _loc(meta))

    def labeled_stmt(self, args):
        # Labels have no Scar spelling; keep the labelled statement.
        return args[1] if len(args) > 1 else None

    def if_stmt(self, args):
        if isinstance(args[1], Block):
            init = None
            cond, body, *rest = args
        else:
            init, cond, body, *rest = args
        return If(cond, body, init, rest[0] if rest else None)

    def for_forever(self, args):
        return ClassicFor(args[0])

    def for_while(self, args):
        return ClassicFor(args[1], cond=args[0])

    def for_classic(self, args):
        clause, body = args
        return ClassicFor(body, clause.init, clause.cond, clause.post)

    def for_clause(self, args):
        return _ForClause(*args)

    def for_init(self, args):
        return args[0] if args else None

    def for_cond(self, args):
        return args[0] if args else None

    def for_post(self, args):
        return args[0] if args else None

    def for_range(self, args):
        clause, body = args
        key = clause.bindings[0] if len(clause.bindings) > 0 else None
        value = clause.bindings[1] if len(clause.bindings) > 1 else None
        return ForEach(clause.source, body, key, value)

    def range_define(self, args):
        return _RangeClause(args[0], args[1])

    def range_assign(self, args):
        return _RangeClause(args[0], args[1])

    def range_bare(self, args):
        return _RangeClause([], args[0])

    def switch_stmt(self, args):
        sw = Switch()
        for a in args:
            if isinstance(a, _SwitchInit):
                sw.init = a.stmt
            elif isinstance(a, _SwitchTag):
                sw.tag = a.expr
            elif isinstance(a, Case):
                sw.cases.append(a)
        return sw

    def switch_init(self, args):
        return _SwitchInit(args[0])

    def switch_tag(self, args):
        return _SwitchTag(args[0])

    def expr_case(self, args):
        return Case(args[0], args[1])

    def default_case(self, args):
        return Case(None, args[0])

    @v_args(meta=True)
    def type_switch_stmt(self, meta, args):
        return Unsupported("type switch", _loc(meta))

    @v_args(meta=True)
    def select_stmt(self, meta, args):
        return Unsupported("select statement", _loc(meta))

    # --- Expressions ---

    def expression_list(self, args):
        return list(args)

    def or_expr(self, args):
        return _left_assoc(args, "||")

    def and_expr(self, args):
        return _left_assoc(args, "&&")

    def rel_expr(self, args):
        return _left_assoc_ops(args)

    def add_expr(self, args):
        return _left_assoc_ops(args)

    def mul_expr(self, args):
        return _left_assoc_ops(args)

    def rel_op(self, args):
        return str(args[0])

    def add_op(self, args):
        return str(args[0])

    def mul_op(self, args):
        return str(args[0])

    def unary_op(self, args):
        return str(args[0])

    def unary_expr(self, args):
        return UnaryOp(args[0], args[1])

    def number_lit(self, args):
        text = str(args[0])
        if text.endswith("i"):
            kind = "IMAG"
        elif text[:2] in ("0x", "0X"):
            kind = "INT"
        elif any(c in text for c in ".eE"):
            kind = "FLOAT"
        else:
            kind = "INT"
        return Literal(kind, text)

    def string_lit(self, args):
        return Literal("STRING", str(args[0]))

    def char_lit(self, args):
        return Literal("CHAR", str(args[0]))

    def identifier(self, args):
        return Identifier(str(args[0]))

    def paren(self, args):
        return Paren(args[0])

    def selector(self, args):
        return Selector(args[0], str(args[1]))

    def type_assertion(self, args):
        return TypeAssertion(args[1], args[0])

    def index(self, args):
        return Index(args[0], args[1])

    def slice_expr(self, args):
        return UnsupportedExpr("slice expression")

    def call(self, args):
        call_args = args[1] if len(args) > 1 else _CallArgs([], False)
        return Call(args[0], call_args.args, call_args.spread)

    def call_args(self, args):
        spread = any(isinstance(a, Token) and a.type == "ELLIPSIS" for a in args)
        return _CallArgs([a for a in args if not isinstance(a, Token)], spread)

    def composite_lit(self, args):
        return CompositeLiteral(args[0], args[1].elements)

    def literal_value(self, args):
        return CompositeLiteral(None, list(args))

    def keyed_element(self, args):
        return KeyValue(args[0], args[1])

    def func_lit(self, args):
        return UnsupportedExpr("function literal")


def _group_params(raw: list[Param]) -> list[Param]:
    """Resolve Go's grouped parameter names: in ``(a, b int)`` the bare
    ``a`` parses as a type but is really a name sharing ``b``'s type."""
    if not any(p.name for p in raw):
        return raw
    params = []
    pending = []
    for p in raw:
        if p.name is None:
            pending.append(getattr(p.type_expr, "name", "_"))
            continue
        for name in pending:
            params.append(Param(name, p.type_expr, p.variadic))
        pending = []
        params.append(p)
    return params


def _value_spec(args) -> list[LocalDecl]:
    names = args[0]
    type_expr = None
    values = []
    for a in args[1:]:
        if isinstance(a, list):
            values = a
        else:
            type_expr = a
    return [
        LocalDecl(name, type_expr, values[i] if i < len(values) else None)
        for i, name in enumerate(names)
    ]


def _as_statement(item):
    """Declarations inside function bodies become statements."""
    if isinstance(item, ValueGroup):
        if len(item.entries) == 1:
            return item.entries[0]
        return Block(item.entries)
    if isinstance(item, list) and all(isinstance(d, TypeDecl) for d in item):
        loc = item[0].loc if item else None
        return Unsupported("local type declaration", loc)
    return item


def _left_assoc(args, op):
    result = args[0]
    for i in range(1, len(args)):
        result = BinaryOp(op, result, args[i])
    return result


def _left_assoc_ops(args):
    """Handle interleaved value/op/value/op/value lists."""
    if len(args) == 1:
        return args[0]
    result = args[0]
    i = 1
    while i < len(args):
        op = str(args[i])
        right = args[i + 1]
        result = BinaryOp(op, result, right)
        i += 2
    return result


def parse_go(source: str) -> SourceFile:
    """Parse Go source text into a SourceFile."""
    try:
        tree = _parser.parse(source)
    except UnexpectedInput as e:
        line = getattr(e, "line", None)
        column = getattr(e, "column", None)
        raise GoSyntaxError(
            f"syntax error at line {line}, column {column}:\n{e.get_context(source)}",
            line, column,
        ) from e
    return GoTransformer().transform(tree)
