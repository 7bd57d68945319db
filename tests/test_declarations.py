"""Tests for top-level declaration emission."""

from scarc.transpiler.declarations import DeclarationEmitter, format_param, format_signature
from scarc.transpiler.output import TranslationState
from scarc.transpiler.go_ast import (
    NamedType, ArrayType, MapType, PointerType, QualifiedType,
    StructField, StructType, MethodSpec, InterfaceType, UnsupportedType,
    Identifier, Literal, BinaryOp, Call, Selector,
    Block, ExprStmt, Return, LocalDecl,
    Param, Function, TypeDecl, ValueGroup,
)


def _emit(decl):
    state = TranslationState()
    DeclarationEmitter(state).emit_decl(decl)
    return state.buffer.lines, state.warnings


class TestParams:
    def test_named(self):
        assert format_param(Param("xs", ArrayType(NamedType("int")))) == "list[int] xs"

    def test_unnamed(self):
        assert format_param(Param(None, NamedType("string"))) == "string"

    def test_signature(self):
        assert format_signature("f", ["int a"], NamedType("bool")) == "fn f(int a) -> bool"
        assert format_signature("g", [], None) == "fn g()"


class TestFunctions:
    def test_function_with_return(self):
        fn = Function(
            "add",
            [Param("a", NamedType("int")), Param("b", NamedType("int"))],
            [Param(None, NamedType("int"))],
            Block([Return([BinaryOp("+", Identifier("a"), Identifier("b"))])]),
        )
        lines, _ = _emit(fn)
        assert lines == ["fn add(int a, int b) -> int:", "    return a + b", ""]

    def test_multiple_results_omit_suffix(self):
        fn = Function(
            "divmod",
            [Param("a", NamedType("int"))],
            [Param(None, NamedType("int")), Param(None, NamedType("int"))],
            Block([]),
        )
        assert _emit(fn)[0] == ["fn divmod(int a):", ""]

    def test_pointer_receiver(self):
        fn = Function(
            "Area",
            results=[Param(None, NamedType("float64"))],
            body=Block([Return([Selector(Identifier("c"), "r")])]),
            receiver=Param("c", PointerType(NamedType("Circle"))),
        )
        assert _emit(fn)[0] == ["fn Area(this Circle) -> float:", "    return c.r", ""]

    def test_value_receiver_with_params(self):
        fn = Function(
            "Scale",
            [Param("k", NamedType("float32"))],
            body=Block([]),
            receiver=Param("p", NamedType("Point")),
        )
        assert _emit(fn)[0][0] == "fn Scale(this Point, float k):"

    def test_main_inlined(self):
        call = Call(Selector(Identifier("fmt"), "Println"), [Literal("STRING", '"hi"')])
        fn = Function("main", body=Block([ExprStmt(call)]))
        assert _emit(fn)[0] == ['print "hi"']

    def test_main_method_not_inlined(self):
        fn = Function("main", body=Block([]), receiver=Param("a", NamedType("App")))
        assert _emit(fn)[0] == ["fn main(this App):", ""]

    def test_external_function(self):
        fn = Function("now", results=[Param(None, NamedType("int64"))])
        assert _emit(fn)[0] == ["fn now() -> i64:", ""]


class TestTypeDeclarations:
    def test_struct(self):
        struct = StructType([
            StructField("Point", NamedType("Point"), embedded=True),
            StructField("Radius", NamedType("float64")),
            StructField("Tags", MapType(NamedType("string"), NamedType("bool"))),
        ])
        lines, warnings = _emit(TypeDecl("Circle", struct))
        assert lines == [
            "class Circle:",
            "    init:",
            "        Point this.Point",
            "        float this.Radius",
            "        map[string: bool] this.Tags",
            "",
        ]
        assert warnings == []

    def test_empty_struct(self):
        assert _emit(TypeDecl("Empty", StructType([])))[0] == ["class Empty:", "    init:", ""]

    def test_interface(self):
        iface = InterfaceType(
            [
                MethodSpec("Area", [], [Param(None, NamedType("float64"))]),
                MethodSpec("Scale", [Param("k", NamedType("float64"))]),
                MethodSpec("Pair", [], [Param(None, NamedType("int")), Param(None, NamedType("int"))]),
            ],
            embeds=[QualifiedType("fmt", "Stringer")],
        )
        lines, _ = _emit(TypeDecl("Shape", iface))
        assert lines == [
            "interface Shape:",
            "    fn Area() -> float",
            "    fn Scale(float k)",
            "    fn Pair()",
            "",
        ]

    def test_named_type_placeholder(self):
        lines, warnings = _emit(TypeDecl("Celsius", NamedType("float64")))
        assert lines == ["# type Celsius not supported"]
        assert len(warnings) == 1

    def test_alias_placeholder(self):
        lines, _ = _emit(TypeDecl("Shape2", InterfaceType([]), alias=True))
        assert lines == ["# type Shape2 not supported"]

    def test_func_type_placeholder(self):
        lines, _ = _emit(TypeDecl("Handler", UnsupportedType("function type")))
        assert lines == ["# type Handler not supported"]


class TestValueGroups:
    def test_var_group(self):
        group = ValueGroup("var", [
            LocalDecl("count", NamedType("int"), Literal("INT", "0")),
            LocalDecl("name", NamedType("string")),
        ])
        assert _emit(group)[0] == ["int count = 0", "string name", ""]

    def test_const_group(self):
        group = ValueGroup("const", [LocalDecl("Pi", None, Literal("FLOAT", "3.14"))])
        assert _emit(group)[0] == ["Pi = 3.14", ""]


class TestUnknownDeclaration:
    def test_placeholder(self):
        lines, warnings = _emit(object())
        assert lines == ["# unknown declaration"]
        assert len(warnings) == 1


class TestInterfaceResults:
    def test_multiple_results_get_no_suffix(self):
        iface = InterfaceType([
            MethodSpec(
                "Read",
                [Param("p", ArrayType(NamedType("byte")))],
                [Param(None, NamedType("int")), Param(None, NamedType("error"))],
            ),
        ])
        lines, _ = _emit(TypeDecl("Reader", iface))
        assert lines == ["interface Reader:", "    fn Read(list[char] p)", ""]
