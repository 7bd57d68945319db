"""Tests for Go to Scar expression translation."""

import pytest

from scarc.transpiler.expressions import (
    translate_expr, callee_name, UNKNOWN_EXPR, COMPOSITE_PLACEHOLDER,
)
from scarc.transpiler.go_ast import (
    NamedType, ArrayType, MapType, PointerType,
    Identifier, Literal, BinaryOp, UnaryOp, Paren, Call, Selector, Index,
    CompositeLiteral, KeyValue, TypeAssertion, UnsupportedExpr,
)


def _id(name):
    return Identifier(name)


def _int(text):
    return Literal("INT", text)


def _call(name, *args, spread=False):
    if "." in name:
        owner, member = name.split(".")
        callee = Selector(_id(owner), member)
    else:
        callee = _id(name)
    return Call(callee, list(args), spread)


class TestBasicExpressions:
    @pytest.mark.parametrize("lit", [
        Literal("STRING", '"a\\tb\\n"'),
        Literal("STRING", "`raw\\n`"),
        Literal("CHAR", "'\\x41'"),
        Literal("INT", "0x_FF"),
        Literal("FLOAT", "6.02e23"),
        Literal("IMAG", "1i"),
    ])
    def test_literal_passthrough(self, lit):
        assert translate_expr(lit) == lit.text

    def test_binary_keeps_operator(self):
        expr = BinaryOp("&^", _id("a"), BinaryOp("<<", _id("b"), _int("2")))
        assert translate_expr(expr) == "a &^ b << 2"

    def test_unary(self):
        assert translate_expr(UnaryOp("!", _id("ok"))) == "!ok"
        assert translate_expr(UnaryOp("-", _int("1"))) == "-1"

    def test_paren(self):
        expr = BinaryOp("*", Paren(BinaryOp("+", _id("a"), _id("b"))), _id("c"))
        assert translate_expr(expr) == "(a + b) * c"

    def test_selector_and_index(self):
        expr = Index(Selector(_id("p"), "items"), BinaryOp("-", _id("n"), _int("1")))
        assert translate_expr(expr) == "p.items[n - 1]"

    def test_type_assertion(self):
        expr = TypeAssertion(NamedType("float64"), _id("v"))
        assert translate_expr(expr) == "(float)v"

    def test_type_in_expression_position(self):
        assert translate_expr(_call("string", _id("b"))) == "string(b)"
        conv = Call(ArrayType(NamedType("byte")), [_id("s")])
        assert translate_expr(conv) == "list[char](s)"

    def test_none_renders_empty(self):
        assert translate_expr(None) == ""


class TestPrintRewrites:
    @pytest.mark.parametrize("name", ["println", "print", "fmt.Println", "fmt.Print"])
    def test_print_family(self, name):
        assert translate_expr(_call(name, Literal("STRING", '"hi"'))) == 'print "hi"'

    def test_print_with_two_args_is_plain_call(self):
        expr = _call("fmt.Println", _id("a"), _id("b"))
        assert translate_expr(expr) == "fmt.Println(a, b)"

    def test_print_without_args_is_plain_call(self):
        assert translate_expr(_call("println")) == "println()"

    def test_printf(self):
        expr = _call("fmt.Printf", Literal("STRING", '"%d-%s"'), _id("n"), _id("s"))
        assert translate_expr(expr) == 'print "%d-%s" | n, s'

    def test_printf_format_only(self):
        expr = _call("printf", Literal("STRING", '"done\\n"'))
        assert translate_expr(expr) == 'print "done\\n"'

    def test_other_fmt_functions_unchanged(self):
        expr = _call("fmt.Sprintf", Literal("STRING", '"%d"'), _id("n"))
        assert translate_expr(expr) == 'fmt.Sprintf("%d", n)'


class TestBuiltinRewrites:
    def test_make_sequence_with_size(self):
        expr = _call("make", ArrayType(NamedType("int")), _id("n"))
        assert translate_expr(expr) == "new list[int](n)"

    def test_make_sequence_without_size(self):
        expr = _call("make", ArrayType(NamedType("string")))
        assert translate_expr(expr) == "new list[string]()"

    def test_make_map(self):
        expr = _call("make", MapType(NamedType("string"), NamedType("int")))
        assert translate_expr(expr) == "[]"

    def test_len(self):
        assert translate_expr(_call("len", _id("xs"))) == "len(xs)"

    def test_append(self):
        assert translate_expr(_call("append", _id("xs"), _int("5"))) == "xs.add(5)"

    def test_append_many_is_plain_call(self):
        expr = _call("append", _id("xs"), _int("1"), _int("2"))
        assert translate_expr(expr) == "append(xs, 1, 2)"

    def test_spread_disables_rewrite(self):
        expr = _call("append", _id("xs"), _id("ys"), spread=True)
        assert translate_expr(expr) == "append(xs, ys...)"

    def test_method_call_not_rewritten(self):
        expr = Call(Selector(Selector(_id("a"), "b"), "Println"), [_id("x")])
        assert translate_expr(expr) == "a.b.Println(x)"

    def test_nested_rewrites(self):
        expr = _call("fmt.Println", _call("len", _call("append", _id("xs"), _int("1"))))
        assert translate_expr(expr) == "print len(xs.add(1))"


class TestCalleeName:
    def test_shapes(self):
        assert callee_name(_id("len")) == "len"
        assert callee_name(Selector(_id("fmt"), "Println")) == "fmt.Println"
        assert callee_name(Selector(_call("f"), "Println")) is None
        assert callee_name(Paren(_id("f"))) is None


class TestCompositeLiterals:
    def test_sequence_literal(self):
        lit = CompositeLiteral(ArrayType(NamedType("int")), [_int("1"), _int("2"), _int("3")])
        assert translate_expr(lit) == "[1, 2, 3]"

    def test_empty_sequence(self):
        assert translate_expr(CompositeLiteral(ArrayType(NamedType("int")), [])) == "[]"

    def test_nested_elided_literals(self):
        inner = ArrayType(NamedType("int"))
        lit = CompositeLiteral(ArrayType(inner), [
            CompositeLiteral(None, [_int("1"), _int("2")]),
            CompositeLiteral(None, [_int("3")]),
        ])
        assert translate_expr(lit) == "[[1, 2], [3]]"

    def test_keyed_sequence_elements(self):
        lit = CompositeLiteral(ArrayType(NamedType("string")), [KeyValue(_int("2"), Literal("STRING", '"c"'))])
        assert translate_expr(lit) == '[2: "c"]'

    def test_struct_literal_placeholder(self):
        warnings = []
        lit = CompositeLiteral(NamedType("Point"), [KeyValue(_id("X"), _int("1"))])
        assert translate_expr(lit, warnings) == COMPOSITE_PLACEHOLDER == "# composite literal"
        assert len(warnings) == 1

    def test_map_literal_placeholder(self):
        lit = CompositeLiteral(MapType(NamedType("string"), NamedType("int")), [])
        assert translate_expr(lit) == COMPOSITE_PLACEHOLDER


class TestUnknownExpressions:
    def test_unsupported_placeholder(self):
        warnings = []
        result = translate_expr(UnsupportedExpr("function literal"), warnings)
        assert result == UNKNOWN_EXPR == "# unknown expression"
        assert warnings == ["function literal not supported"]

    def test_foreign_node_placeholder(self):
        warnings = []
        assert translate_expr(object(), warnings) == UNKNOWN_EXPR
        assert warnings == ["unknown expression object"]

    def test_no_warning_list(self):
        assert translate_expr(UnsupportedExpr("slice expression")) == UNKNOWN_EXPR

    def test_pointer_type_expression(self):
        assert translate_expr(_call("new", NamedType("Node"))) == "new(Node)"
        assert translate_expr(PointerType(NamedType("Node"))) == "ref Node"
