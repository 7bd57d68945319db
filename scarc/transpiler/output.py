"""Line buffer and per-translation state for the Scar emitter."""

from __future__ import annotations
from contextlib import contextmanager
from dataclasses import dataclass, field

from scarc.transpiler.go_ast import SourceLocation

INDENT = "    "


class OutputBuffer:
    """Accumulates emitted lines at the current indentation depth."""

    def __init__(self):
        self.lines: list[str] = []
        self.depth = 0

    def line(self, text: str = ""):
        if text:
            self.lines.append(f"{INDENT * self.depth}{text}")
        else:
            self.lines.append("")

    @contextmanager
    def indented(self):
        """Emit the enclosed lines one level deeper."""
        self.depth += 1
        try:
            yield
        finally:
            self.depth -= 1

    def render(self) -> str:
        return "".join(f"{text}\n" for text in self.lines)


@dataclass
class TranslationState:
    """Everything one translation run mutates; never shared between runs."""
    buffer: OutputBuffer = field(default_factory=OutputBuffer)
    warnings: list[str] = field(default_factory=list)

    def warn(self, message: str, loc: SourceLocation | None = None):
        if loc is not None:
            message = f"line {loc.line}: {message}"
        self.warnings.append(message)
