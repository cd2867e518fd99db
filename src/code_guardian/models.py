from __future__ import annotations

from dataclasses import asdict, dataclass
from typing import Any


@dataclass(frozen=True)
class Rule:
    name: str | None
    pattern: str
    flags: str = "g"

    @property
    def label(self) -> str:
        return self.name or "unnamed"


@dataclass(frozen=True)
class AppConfig:
    rules: tuple[Rule, ...] = ()
    ignore_files: tuple[str, ...] = ()
    source: str = "<default>"


@dataclass(frozen=True)
class Finding:
    rule: str
    line_number: int
    line: str
    pattern: str

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class FileFindings:
    file: str
    matches: tuple[Finding, ...]

    def to_dict(self) -> dict[str, Any]:
        return {"file": self.file, "matches": [item.to_dict() for item in self.matches]}


@dataclass(frozen=True)
class ImportRecord:
    source_file: str
    specifier: str
    identifiers: tuple[str, ...] = ()


@dataclass(frozen=True)
class ScanStats:
    files_scanned: int
    elapsed_seconds: float
    memory_delta_bytes: int

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


@dataclass(frozen=True)
class ScanResult:
    findings: list[FileFindings]
    unused_imports: dict[str, list[str]]
    unused_modules: list[str]
    stats: ScanStats
    status: str = "CLEAN"

    @property
    def has_findings(self) -> bool:
        return bool(self.findings)

    def to_dict(self) -> dict[str, Any]:
        return {
            "status": self.status,
            "findings": [item.to_dict() for item in self.findings],
            "unused_imports": {key: list(value) for key, value in self.unused_imports.items()},
            "unused_modules": list(self.unused_modules),
            "stats": self.stats.to_dict(),
        }
