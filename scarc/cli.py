"""Command-line interface for the Go-to-Scar translator."""

import argparse
import logging
import sys
from pathlib import Path

from scarc import __version__

logger = logging.getLogger(__name__)


def default_output_path(input_path: Path) -> Path:
    """input.go -> input.scar"""
    if input_path.suffix == ".go":
        return input_path.with_suffix(".scar")
    return input_path.with_name(input_path.name + ".scar")


def main(argv: list[str] | None = None) -> None:
    parser = argparse.ArgumentParser(
        prog="scarc",
        description="Go to Scar translator: rewrites a .go file as Scar source",
    )
    parser.add_argument("input", help="Input .go file")
    parser.add_argument(
        "output", nargs="?", type=Path, default=None,
        help="Output .scar file (default: input path with a .scar suffix)",
    )
    parser.add_argument(
        "--stdout", action="store_true",
        help="Print the translation instead of writing a file",
    )
    parser.add_argument(
        "--dump-ast", action="store_true", help="Dump the Go AST and exit"
    )
    parser.add_argument(
        "-v", "--verbose", action="store_true", help="Enable debug logging"
    )
    parser.add_argument(
        "--version", action="version", version=f"scarc {__version__}"
    )

    args = parser.parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(asctime)s [%(name)s] %(levelname)s: %(message)s",
    )

    input_path = Path(args.input)
    try:
        source = input_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        print(f"Error: cannot read {input_path}: {e}", file=sys.stderr)
        sys.exit(1)

    from scarc.transpiler.go_parser import parse_go, GoSyntaxError
    from scarc.transpiler.go_to_scar import translate_module

    try:
        module = parse_go(source)
    except GoSyntaxError as e:
        print(f"Error: cannot parse {input_path}: {e}", file=sys.stderr)
        sys.exit(1)

    # --- Dump AST mode ---
    if args.dump_ast:
        for imp in module.imports:
            print(imp)
        for decl in module.decls:
            print(decl)
        return

    result = translate_module(module)
    for w in result.warnings:
        print(f"  Warning: {w}", file=sys.stderr)

    if args.stdout:
        sys.stdout.write(result.scar_source)
        return

    output_path = args.output or default_output_path(input_path)
    try:
        output_path.write_text(result.scar_source, encoding="utf-8")
    except OSError as e:
        print(f"Error: cannot write {output_path}: {e}", file=sys.stderr)
        sys.exit(1)
    logger.info("wrote %d bytes to %s", len(result.scar_source), output_path)
    print(f"Translated: {input_path} -> {output_path}")


if __name__ == "__main__":
    main()
