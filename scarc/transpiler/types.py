"""Go type to Scar type mapping."""

from __future__ import annotations

from scarc.transpiler.go_ast import (
    NamedType, QualifiedType, ArrayType, MapType, PointerType,
    Identifier, Selector,
)

UNKNOWN_TYPE = "unknown"

_TYPE_MAP: dict[str, str] = {
    "int": "int",
    "int8": "int",
    "int16": "int",
    "int32": "int",
    "rune": "int",
    "uint": "int",
    "uint16": "int",
    "uint32": "int",
    "int64": "i64",
    "uint64": "i64",
    "uintptr": "i64",
    "byte": "char",
    "uint8": "char",
    "float32": "float",
    "float64": "float",
    "string": "string",
    "bool": "bool",
}


def map_type(node) -> str:
    if node is None:
        return ""

    if isinstance(node, NamedType):
        return _TYPE_MAP.get(node.name, node.name)

    elif isinstance(node, ArrayType):
        return f"list[{map_type(node.elem)}]"

    elif isinstance(node, MapType):
        return f"map[{map_type(node.key)}: {map_type(node.value)}]"

    elif isinstance(node, PointerType):
        return f"ref {map_type(node.base)}"

    elif isinstance(node, QualifiedType):
        # Scar has no separate cross-module type syntax.
        from scarc.transpiler.expressions import translate_expr
        return translate_expr(Selector(Identifier(node.owner), node.name))

    return UNKNOWN_TYPE
