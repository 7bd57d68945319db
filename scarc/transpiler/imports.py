"""Go import path to Scar module lookup."""

from __future__ import annotations

_IMPORT_MAP: dict[str, str] = {
    "crypto/sha256": "std/crypto",
    "crypto/sha512": "std/crypto",
    "crypto/sha1": "std/crypto",
    "crypto/md5": "std/crypto",
    "io": "std/io",
    "bufio": "std/io",
    "json": "std/json",
    "encoding/json": "std/json",
    "regexp": "std/regex",
    "os": "std/os",
    "strings": "std/strings",
    "strconv": "std/strings",
    "math": "std/math",
    "time": "std/time",
    "math/rand": "std/random",
}


def map_import(path: str) -> str | None:
    """Scar module for a Go import path, or None when Scar has no equivalent."""
    return _IMPORT_MAP.get(path)


def map_imports(paths) -> list[str]:
    """Mapped modules in declaration order, unmapped paths dropped, duplicates once."""
    modules = []
    for path in paths:
        module = map_import(path)
        if module is not None and module not in modules:
            modules.append(module)
    return modules
