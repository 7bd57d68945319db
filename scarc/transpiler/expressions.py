"""Go expression to Scar expression translation."""

from __future__ import annotations

from scarc.transpiler.go_ast import (
    TYPE_NODES, ArrayType, MapType,
    Identifier, Literal, BinaryOp, UnaryOp, Paren, Call, Selector, Index,
    CompositeLiteral, KeyValue, TypeAssertion, UnsupportedExpr,
)
from scarc.transpiler.types import map_type

UNKNOWN_EXPR = "# unknown expression"
COMPOSITE_PLACEHOLDER = "# composite literal"

# Builtin call rewrites, keyed by callee spelling
_PRINT_FUNCS = frozenset({"print", "println", "fmt.Print", "fmt.Println"})
_PRINTF_FUNCS = frozenset({"printf", "fmt.Printf"})


def translate_expr(expr, warnings: list[str] | None = None) -> str:
    """Render a Go expression as Scar text.

    Never raises: shapes Scar cannot express come back as a placeholder, and
    a note is appended to ``warnings`` when a list is given.
    """
    if expr is None:
        return ""

    if isinstance(expr, Identifier):
        return expr.name

    elif isinstance(expr, Literal):
        return expr.text

    elif isinstance(expr, BinaryOp):
        left = translate_expr(expr.left, warnings)
        right = translate_expr(expr.right, warnings)
        return f"{left} {expr.op} {right}"

    elif isinstance(expr, UnaryOp):
        return f"{expr.op}{translate_expr(expr.operand, warnings)}"

    elif isinstance(expr, Paren):
        return f"({translate_expr(expr.inner, warnings)})"

    elif isinstance(expr, Call):
        return _translate_call(expr, warnings)

    elif isinstance(expr, Selector):
        return f"{translate_expr(expr.owner, warnings)}.{expr.member}"

    elif isinstance(expr, Index):
        coll = translate_expr(expr.collection, warnings)
        idx = translate_expr(expr.index, warnings)
        return f"{coll}[{idx}]"

    elif isinstance(expr, CompositeLiteral):
        return _translate_composite(expr, warnings)

    elif isinstance(expr, KeyValue):
        key = translate_expr(expr.key, warnings)
        value = translate_expr(expr.value, warnings)
        return f"{key}: {value}"

    elif isinstance(expr, TypeAssertion):
        return f"({map_type(expr.type_expr)}){translate_expr(expr.operand, warnings)}"

    elif isinstance(expr, TYPE_NODES):
        # make([]int, n), []byte(s) and friends
        return map_type(expr)

    if isinstance(expr, UnsupportedExpr):
        _warn(warnings, f"{expr.description} not supported")
    else:
        _warn(warnings, f"unknown expression {type(expr).__name__}")
    return UNKNOWN_EXPR


def callee_name(callee) -> str | None:
    """Spelling used to match builtin rewrites: ``name`` or ``module.Name``."""
    if isinstance(callee, Identifier):
        return callee.name
    if isinstance(callee, Selector) and isinstance(callee.owner, Identifier):
        return f"{callee.owner.name}.{callee.member}"
    return None


def _translate_call(call: Call, warnings) -> str:
    name = callee_name(call.callee)
    args = call.args

    if not call.spread:
        if name in _PRINT_FUNCS and len(args) == 1:
            return f"print {translate_expr(args[0], warnings)}"

        if name in _PRINTF_FUNCS and args:
            fmt = translate_expr(args[0], warnings)
            rest = [translate_expr(a, warnings) for a in args[1:]]
            if rest:
                return f"print {fmt} | {', '.join(rest)}"
            return f"print {fmt}"

        if name == "make" and args:
            kind = args[0]
            if isinstance(kind, ArrayType):
                typ = map_type(kind)
                if len(args) > 1:
                    return f"new {typ}({translate_expr(args[1], warnings)})"
                return f"new {typ}()"
            if isinstance(kind, MapType):
                return "[]"

        if name == "len" and len(args) == 1:
            return f"len({translate_expr(args[0], warnings)})"

        if name == "append" and len(args) == 2:
            coll = translate_expr(args[0], warnings)
            elem = translate_expr(args[1], warnings)
            return f"{coll}.add({elem})"

    rendered = [translate_expr(a, warnings) for a in args]
    if call.spread and rendered:
        rendered[-1] += "..."
    return f"{translate_expr(call.callee, warnings)}({', '.join(rendered)})"


def _translate_composite(lit: CompositeLiteral, warnings) -> str:
    if not isinstance(lit.type_expr, ArrayType):
        _warn(warnings, "struct and map literals not supported")
        return COMPOSITE_PLACEHOLDER

    elements = []
    for elt in lit.elements:
        # [][]int{{1, 2}} elides the inner literal's type
        if isinstance(elt, CompositeLiteral) and elt.type_expr is None:
            elt = CompositeLiteral(lit.type_expr.elem, elt.elements)
        elements.append(translate_expr(elt, warnings))
    return f"[{', '.join(elements)}]"


def _warn(warnings, message: str):
    if warnings is not None:
        warnings.append(message)
