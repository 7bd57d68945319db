"""Statement emission for the Scar translator."""

from __future__ import annotations

from scarc.transpiler.go_ast import (
    Identifier, Block, ExprStmt, Assign, LocalDecl, If, ClassicFor, ForEach,
    Return, IncDec, Case, Switch, Break, Continue, Unsupported,
)
from scarc.transpiler.expressions import translate_expr
from scarc.transpiler.output import TranslationState
from scarc.transpiler.types import map_type

UNKNOWN_STMT = "# unknown statement"


def loop_variable(init) -> str | None:
    """Name bound by a classic for-loop initializer, read from the AST."""
    if isinstance(init, Assign):
        if len(init.lhs) == 1 and isinstance(init.lhs[0], Identifier):
            return init.lhs[0].name
    elif isinstance(init, LocalDecl):
        return init.name
    return None


class StatementEmitter:
    """Writes Scar lines for Go statements into a TranslationState."""

    def __init__(self, state: TranslationState):
        self.state = state
        self.out = state.buffer

    def _expr(self, expr) -> str:
        return translate_expr(expr, self.state.warnings)

    def emit_block(self, block: Block):
        for stmt in block.statements:
            self.emit_stmt(stmt)

    def emit_body(self, block: Block):
        with self.out.indented():
            self.emit_block(block)

    def emit_stmt(self, stmt):
        if stmt is None:
            return

        if isinstance(stmt, ExprStmt):
            self.out.line(self._expr(stmt.expr))

        elif isinstance(stmt, Assign):
            self._emit_assign(stmt)

        elif isinstance(stmt, LocalDecl):
            self._emit_local_decl(stmt)

        elif isinstance(stmt, If):
            self._emit_if(stmt, "if")

        elif isinstance(stmt, ClassicFor):
            self._emit_for(stmt)

        elif isinstance(stmt, ForEach):
            self._emit_for_each(stmt)

        elif isinstance(stmt, Return):
            if stmt.results:
                results = ", ".join(self._expr(r) for r in stmt.results)
                self.out.line(f"return {results}")
            else:
                self.out.line("return")

        elif isinstance(stmt, Block):
            self.emit_block(stmt)

        elif isinstance(stmt, IncDec):
            target = self._expr(stmt.operand)
            op = "+" if stmt.op == "++" else "-"
            self.out.line(f"{target} = {target} {op} 1")

        elif isinstance(stmt, Switch):
            self._emit_switch(stmt)

        elif isinstance(stmt, Case):
            self._emit_case(stmt)

        elif isinstance(stmt, (Break, Continue)):
            keyword = "break" if isinstance(stmt, Break) else "continue"
            if stmt.label is not None:
                self.state.warn(f"label '{stmt.label}' dropped from {keyword}")
            self.out.line(keyword)

        elif isinstance(stmt, Unsupported):
            self.out.line(f"# {stmt.description} not supported")
            self.state.warn(f"{stmt.description} not supported", stmt.loc)

        else:
            self.out.line(UNKNOWN_STMT)
            self.state.warn(f"unknown statement {type(stmt).__name__}")

    def render_inline(self, stmt) -> str:
        """Render a statement as a single line, e.g. a for-loop post statement."""
        scratch = TranslationState(warnings=self.state.warnings)
        StatementEmitter(scratch).emit_stmt(stmt)
        return "; ".join(text.strip() for text in scratch.buffer.lines if text.strip())

    def _emit_assign(self, stmt: Assign):
        if len(stmt.lhs) != 1 or len(stmt.rhs) != 1:
            self.out.line("# multiple assignment not supported")
            self.state.warn("multiple assignment not supported")
            return

        target = self._expr(stmt.lhs[0])
        value = self._expr(stmt.rhs[0])
        if stmt.op in ("=", ":="):
            self.out.line(f"{target} = {value}")
        else:
            # x += e -> x = x + e
            op = stmt.op[:-1]
            self.out.line(f"{target} = {target} {op} {value}")

    def _emit_local_decl(self, decl: LocalDecl):
        typ = map_type(decl.type_expr)
        if decl.init is not None:
            value = self._expr(decl.init)
            if typ:
                self.out.line(f"{typ} {decl.name} = {value}")
            else:
                self.out.line(f"{decl.name} = {value}")
        elif typ:
            self.out.line(f"{typ} {decl.name}")

    def _emit_if(self, stmt: If, keyword: str):
        if stmt.init is not None:
            self.emit_stmt(stmt.init)

        self.out.line(f"{keyword} {self._expr(stmt.cond)}:")
        self.emit_body(stmt.body)

        alt = stmt.else_
        if isinstance(alt, If):
            # else-if chains stay flat
            self._emit_if(alt, "elif")
        elif isinstance(alt, Block):
            self.out.line("else:")
            self.emit_body(alt)

    def _emit_for(self, stmt: ClassicFor):
        if stmt.init is not None and stmt.cond is not None and stmt.post is not None:
            cond = self._expr(stmt.cond)
            var = loop_variable(stmt.init)
            post = self.render_inline(stmt.post) if var is not None else ""
            if var is None:
                self.state.warn("for-loop initializer binds no single variable; init and post dropped")
                self.out.line(f"while {cond}:")
            elif not post or post.startswith("#"):
                self.state.warn("for-loop post statement has no inline form; init and post dropped")
                self.out.line(f"while {cond}:")
            else:
                self.out.line(f"for {var}; {cond}; {post}:")
        elif stmt.cond is not None:
            if stmt.init is not None:
                self.emit_stmt(stmt.init)
            if stmt.post is not None:
                self.state.warn("for-loop post statement dropped from loop without initializer")
            self.out.line(f"while {self._expr(stmt.cond)}:")
        else:
            if stmt.init is not None:
                self.emit_stmt(stmt.init)
            if stmt.post is not None:
                self.state.warn("for-loop post statement dropped from loop without condition")
            self.out.line("while true:")

        self.emit_body(stmt.body)

    def _emit_for_each(self, stmt: ForEach):
        source = self._expr(stmt.source)
        if stmt.key is not None and stmt.value is not None:
            key = self._expr(stmt.key)
            value = self._expr(stmt.value)
            self.out.line(f"for {key}, {value} in {source}:")
        elif stmt.key is not None:
            self.out.line(f"for {self._expr(stmt.key)} in {source}:")
        else:
            self.out.line(f"for _ in {source}:")
        self.emit_body(stmt.body)

    def _emit_switch(self, stmt: Switch):
        if stmt.init is not None:
            self.emit_stmt(stmt.init)

        if stmt.tag is not None:
            self.out.line(f"switch {self._expr(stmt.tag)}:")
        else:
            self.out.line("switch:")

        with self.out.indented():
            for case in stmt.cases:
                self._emit_case(case)

    def _emit_case(self, case: Case):
        if not case.labels:
            self.out.line("default:")
        else:
            labels = ", ".join(self._expr(label) for label in case.labels)
            self.out.line(f"case {labels}:")

        with self.out.indented():
            for stmt in case.body:
                self.emit_stmt(stmt)
