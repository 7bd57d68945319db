"""Top-level declaration emission for the Scar translator."""

from __future__ import annotations

from scarc.transpiler.go_ast import (
    Param, PointerType, StructType, InterfaceType,
    Function, TypeDecl, ValueGroup, MethodSpec,
)
from scarc.transpiler.output import TranslationState
from scarc.transpiler.statements import StatementEmitter
from scarc.transpiler.types import map_type


def format_param(param: Param) -> str:
    typ = map_type(param.type_expr)
    if param.name is None:
        return typ
    return f"{typ} {param.name}"


def format_signature(name: str, params: list[str], return_type) -> str:
    ret_clause = f" -> {map_type(return_type)}" if return_type is not None else ""
    return f"fn {name}({', '.join(params)}){ret_clause}"


class DeclarationEmitter:
    """Writes Scar lines for top-level Go declarations."""

    def __init__(self, state: TranslationState):
        self.state = state
        self.out = state.buffer
        self.statements = StatementEmitter(state)

    def emit_decl(self, decl):
        if isinstance(decl, Function):
            self.emit_function(decl)
        elif isinstance(decl, TypeDecl):
            self.emit_type_decl(decl)
        elif isinstance(decl, ValueGroup):
            self.emit_value_group(decl)
        else:
            self.out.line("# unknown declaration")
            self.state.warn(f"unknown declaration {type(decl).__name__}")

    def emit_function(self, fn: Function):
        # The program entry point is inlined at top level.
        if fn.name == "main" and fn.receiver is None:
            if fn.body is not None:
                self.statements.emit_block(fn.body)
            return

        params = [format_param(p) for p in fn.params]
        if fn.receiver is not None:
            recv_type = fn.receiver.type_expr
            if isinstance(recv_type, PointerType):
                recv_type = recv_type.base
            params.insert(0, f"this {map_type(recv_type)}")

        self.out.line(f"{format_signature(fn.name, params, fn.return_type)}:")
        if fn.body is not None:
            self.statements.emit_body(fn.body)
        self.out.line("")

    def emit_type_decl(self, decl: TypeDecl):
        if isinstance(decl.body, StructType) and not decl.alias:
            self._emit_struct(decl.name, decl.body)
        elif isinstance(decl.body, InterfaceType) and not decl.alias:
            self._emit_interface(decl.name, decl.body)
        else:
            self.out.line(f"# type {decl.name} not supported")
            self.state.warn(f"type declaration '{decl.name}' not supported", decl.loc)

    def _emit_struct(self, name: str, struct: StructType):
        self.out.line(f"class {name}:")
        with self.out.indented():
            # Field listing only; Scar constructors take no parameters here.
            self.out.line("init:")
            with self.out.indented():
                for f in struct.fields:
                    self.out.line(f"{map_type(f.type_expr)} this.{f.name}")
        self.out.line("")

    def _emit_interface(self, name: str, iface: InterfaceType):
        self.out.line(f"interface {name}:")
        with self.out.indented():
            for method in iface.methods:
                self.out.line(self._method_header(method))
        self.out.line("")

    def _method_header(self, method: MethodSpec) -> str:
        params = [format_param(p) for p in method.params]
        return format_signature(method.name, params, method.return_type)

    def emit_value_group(self, group: ValueGroup):
        for entry in group.entries:
            self.statements.emit_stmt(entry)
        self.out.line("")
