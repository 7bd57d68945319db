"""Go-to-Scar transpiler: converts a SourceFile into Scar source text."""

from __future__ import annotations
import logging
from dataclasses import dataclass, field

from scarc.transpiler.go_ast import SourceFile
from scarc.transpiler.declarations import DeclarationEmitter
from scarc.transpiler.imports import map_imports
from scarc.transpiler.output import TranslationState

logger = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass
class TranslateResult:
    scar_source: str
    warnings: list[str] = field(default_factory=list)


# ---------------------------------------------------------------------------
# Entry points
# ---------------------------------------------------------------------------

def translate_go_to_scar(source: str) -> TranslateResult:
    """Transpile Go source text to Scar source text."""
    from scarc.transpiler.go_parser import parse_go
    module = parse_go(source)
    return translate_module(module)


def translate_module(module: SourceFile) -> TranslateResult:
    """Transpile an already-parsed Go file."""
    emitter = ScarEmitter(module)
    return emitter.emit()


class ScarEmitter:
    """Drives one translation: imports first, then declarations in source order."""

    def __init__(self, module: SourceFile):
        self.module = module
        self.state = TranslationState()
        self.declarations = DeclarationEmitter(self.state)

    def emit(self) -> TranslateResult:
        out = self.state.buffer

        paths = [imp.path for imp in self.module.imports]
        modules = map_imports(paths)
        logger.debug("package %s: %d imports, %d mapped", self.module.package, len(paths), len(modules))
        for module in modules:
            out.line(f'import "{module}"')
        if modules:
            out.line("")

        for decl in self.module.decls:
            self.declarations.emit_decl(decl)

        if self.state.warnings:
            logger.debug("%d translation warnings", len(self.state.warnings))
        return TranslateResult(out.render(), list(self.state.warnings))
