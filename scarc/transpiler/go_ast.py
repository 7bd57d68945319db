"""Go AST nodes consumed by the Scar translator."""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import Optional


@dataclass
class SourceLocation:
    line: int
    column: int


# ---------------------------------------------------------------------------
# File-level
# ---------------------------------------------------------------------------

@dataclass
class SourceFile:
    package: str
    imports: list[Import] = field(default_factory=list)
    decls: list = field(default_factory=list)  # Function | TypeDecl | ValueGroup


@dataclass
class Import:
    path: str
    alias: Optional[str] = None


# ---------------------------------------------------------------------------
# Types
# ---------------------------------------------------------------------------

@dataclass
class NamedType:
    name: str


@dataclass
class QualifiedType:
    owner: str
    name: str


@dataclass
class ArrayType:
    """Slice, fixed-size array or variadic parameter type."""
    elem: object
    length: Optional[object] = None


@dataclass
class MapType:
    key: object
    value: object


@dataclass
class PointerType:
    base: object


@dataclass
class StructField:
    name: str
    type_expr: object
    embedded: bool = False


@dataclass
class StructType:
    fields: list[StructField] = field(default_factory=list)


@dataclass
class MethodSpec:
    name: str
    params: list[Param] = field(default_factory=list)
    results: list[Param] = field(default_factory=list)

    @property
    def return_type(self):
        # Same rule as Function: (int, error) gets no suffix, not "-> int".
        return _single_result(self.results)


@dataclass
class InterfaceType:
    methods: list[MethodSpec] = field(default_factory=list)
    embeds: list = field(default_factory=list)


@dataclass
class UnsupportedType:
    """Channel and function types."""
    description: str


TYPE_NODES = (
    NamedType, QualifiedType, ArrayType, MapType, PointerType,
    StructType, InterfaceType, UnsupportedType,
)


# ---------------------------------------------------------------------------
# Expressions
# ---------------------------------------------------------------------------

@dataclass
class Identifier:
    name: str


@dataclass
class Literal:
    kind: str  # "INT", "FLOAT", "IMAG", "CHAR", "STRING"
    text: str


@dataclass
class BinaryOp:
    op: str
    left: object
    right: object


@dataclass
class UnaryOp:
    op: str
    operand: object


@dataclass
class Paren:
    inner: object


@dataclass
class Call:
    callee: object
    args: list = field(default_factory=list)
    spread: bool = False  # f(xs...)


@dataclass
class Selector:
    owner: object
    member: str


@dataclass
class Index:
    collection: object
    index: object


@dataclass
class CompositeLiteral:
    type_expr: Optional[object]  # None for elided element literals
    elements: list = field(default_factory=list)


@dataclass
class KeyValue:
    key: object
    value: object


@dataclass
class TypeAssertion:
    type_expr: object
    operand: object


@dataclass
class UnsupportedExpr:
    """Function literals, slice expressions."""
    description: str


# ---------------------------------------------------------------------------
# Statements
# ---------------------------------------------------------------------------

@dataclass
class Block:
    statements: list = field(default_factory=list)


@dataclass
class ExprStmt:
    expr: object


@dataclass
class Assign:
    op: str  # "=", ":=", "+=", ...
    lhs: list
    rhs: list


@dataclass
class LocalDecl:
    name: str
    type_expr: Optional[object] = None
    init: Optional[object] = None


@dataclass
class If:
    cond: object
    body: Block
    init: Optional[object] = None
    else_: Optional[object] = None  # If | Block


@dataclass
class ClassicFor:
    body: Block
    init: Optional[object] = None
    cond: Optional[object] = None
    post: Optional[object] = None


@dataclass
class ForEach:
    source: object
    body: Block
    key: Optional[object] = None
    value: Optional[object] = None


@dataclass
class Return:
    results: list = field(default_factory=list)


@dataclass
class IncDec:
    op: str  # "++" or "--"
    operand: object


@dataclass
class Case:
    labels: Optional[list]  # None for the default clause
    body: list = field(default_factory=list)


@dataclass
class Switch:
    cases: list[Case] = field(default_factory=list)
    init: Optional[object] = None
    tag: Optional[object] = None


@dataclass
class Break:
    label: Optional[str] = None


@dataclass
class Continue:
    label: Optional[str] = None


@dataclass
class Unsupported:
    description: str
    loc: Optional[SourceLocation] = None


# ---------------------------------------------------------------------------
# Declarations
# ---------------------------------------------------------------------------

@dataclass
class Param:
    name: Optional[str]
    type_expr: object
    variadic: bool = False


@dataclass
class Function:
    name: str
    params: list[Param] = field(default_factory=list)
    results: list[Param] = field(default_factory=list)
    body: Optional[Block] = None
    receiver: Optional[Param] = None
    loc: Optional[SourceLocation] = None

    @property
    def return_type(self):
        return _single_result(self.results)


@dataclass
class TypeDecl:
    name: str
    body: object  # StructType | InterfaceType | any other type
    alias: bool = False
    loc: Optional[SourceLocation] = None


@dataclass
class ValueGroup:
    keyword: str  # "var" or "const"
    entries: list[LocalDecl] = field(default_factory=list)


def _single_result(results: list[Param]):
    # Multiple results have no header spelling in Scar.
    if len(results) == 1:
        return results[0].type_expr
    return None
