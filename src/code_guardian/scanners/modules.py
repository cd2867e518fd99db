from __future__ import annotations

import os
import re
from pathlib import Path
from typing import Callable, Mapping

ExistsCheck = Callable[[Path], bool]

MODULE_EXTENSIONS = (".js", ".ts")
EXCLUDED_SUBSTRINGS = (".test", "spec", "config", "setup")
RESOLUTION_SUFFIXES = ("", ".js", ".ts")
ENTRY_POINT_PATTERN = re.compile(r"\b(index|cli|main)\.(js|ts)\b", re.IGNORECASE)


def is_module_candidate(path: str) -> bool:
    if not path.endswith(MODULE_EXTENSIONS):
        return False
    return not any(token in path for token in EXCLUDED_SUBSTRINGS)


def is_entry_point(path: str) -> bool:
    return bool(ENTRY_POINT_PATTERN.search(os.path.basename(path)))


def resolve_specifier(source_file: str | Path, specifier: str, exists: ExistsCheck) -> Path | None:
    if not specifier.startswith(("./", "../")):
        return None

    base = os.path.dirname(os.path.abspath(source_file))
    joined = os.path.normpath(os.path.join(base, specifier))
    for suffix in RESOLUTION_SUFFIXES:
        candidate = Path(joined + suffix)
        if exists(candidate):
            return candidate
    return None


def build_imported_set(import_map: Mapping[str, list[str]], exists: ExistsCheck) -> set[Path]:
    imported: set[Path] = set()
    for source_file, specifiers in import_map.items():
        for specifier in specifiers:
            resolved = resolve_specifier(source_file, specifier, exists)
            if resolved is not None:
                imported.add(resolved)
    return imported


def find_unused_modules(
    files: list[str],
    import_map: Mapping[str, list[str]],
    *,
    exists: ExistsCheck | None = None,
    root: str | Path | None = None,
) -> list[str]:
    """List module files that no relative import resolves to.

    ``files`` may be relative to ``root`` (default: the working directory);
    ``import_map`` keys are absolute paths. Entry points named index, cli or
    main are never reported.
    """
    check = exists or os.path.exists
    imported = build_imported_set(import_map, check)
    base = Path(root) if root is not None else Path.cwd()

    unused: list[str] = []
    for file in files:
        absolute = Path(os.path.normpath(os.path.join(os.path.abspath(base), file)))
        if absolute in imported or is_entry_point(file):
            continue
        unused.append(file)
    return unused
