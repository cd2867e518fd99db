from __future__ import annotations

import os
import subprocess
from pathlib import Path

import pathspec


DEFAULT_IGNORES = (
    "node_modules",
    ".git",
    "package-lock.json",
    "yarn.lock",
    "pnpm-lock.yaml",
)

ALWAYS_SKIPPED_DIRS = {".git", "node_modules"}

BINARY_EXTENSIONS = {".png", ".jpg", ".jpeg", ".gif", ".pdf", ".zip", ".exe", ".dll", ".so"}


class StagedListError(RuntimeError):
    pass


class ScanRootError(ValueError):
    pass


def build_ignore_patterns(root: str | Path, ignore_files: tuple[str, ...] | list[str] = ()) -> list[str]:
    patterns: list[str] = []
    gitignore = Path(root) / ".gitignore"
    if gitignore.is_file():
        for raw in gitignore.read_text(encoding="utf-8", errors="replace").splitlines():
            line = raw.strip()
            if not line or line.startswith("#"):
                continue
            patterns.append(line)
    patterns.extend(DEFAULT_IGNORES)
    patterns.extend(item.strip() for item in ignore_files if item.strip())
    return patterns


def build_ignore_spec(patterns: list[str]) -> pathspec.GitIgnoreSpec:
    return pathspec.GitIgnoreSpec.from_lines(patterns)


def is_ignored(relative_path: str, spec: pathspec.PathSpec) -> bool:
    """Directories are checked with a trailing slash so dir-only patterns apply."""
    return spec.match_file(relative_path.replace("\\", "/"))


def list_files(
    root: str | Path,
    *,
    staged: bool = False,
    ignore_files: tuple[str, ...] | list[str] = (),
) -> list[str]:
    root_path = Path(root).resolve()
    if not root_path.is_dir():
        raise ScanRootError(f"root must be an existing directory: {root_path}")

    spec = build_ignore_spec(build_ignore_patterns(root_path, ignore_files))

    if staged:
        staged_files = _list_staged(root_path)
        return [
            item
            for item in staged_files
            if (root_path / item).exists() and not is_ignored(item, spec)
        ]

    files: list[str] = []
    for dirpath, dirnames, filenames in os.walk(root_path):
        rel_dir = Path(dirpath).relative_to(root_path).as_posix()
        prefix = "" if rel_dir == "." else f"{rel_dir}/"
        dirnames[:] = [
            name
            for name in dirnames
            if name not in ALWAYS_SKIPPED_DIRS and not is_ignored(f"{prefix}{name}/", spec)
        ]
        for name in filenames:
            relative = f"{prefix}{name}"
            if is_ignored(relative, spec):
                continue
            files.append(relative)

    return sorted(files)


def _list_staged(root: Path) -> list[str]:
    cmd = ["git", "diff", "--name-only", "--staged"]
    try:
        process = subprocess.run(cmd, cwd=root, text=True, capture_output=True)
    except OSError as exc:
        raise StagedListError(f"Failed to get staged files: {exc}") from exc

    if process.returncode != 0:
        message = (process.stderr or process.stdout or "unknown git error").strip()
        raise StagedListError(f"Failed to get staged files. Are you in a git repo?\n{message[:500]}")

    return [line.strip() for line in process.stdout.splitlines() if line.strip()]
