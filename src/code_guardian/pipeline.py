from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Protocol

from code_guardian.files import BINARY_EXTENSIONS, list_files
from code_guardian.metrics import RunMetrics
from code_guardian.models import AppConfig, FileFindings, ScanResult, ScanStats
from code_guardian.scanners import (
    ImportExtractor,
    RegexImportExtractor,
    find_unused_modules,
    match_lines,
    unused_identifiers,
)
from code_guardian.scanners.imports import is_js_ts_file
from code_guardian.scanners.modules import ExistsCheck, is_module_candidate

logger = logging.getLogger(__name__)


class Metrics(Protocol):
    def start(self) -> None:
        ...

    def stop(self, files_scanned: int) -> ScanStats:
        ...


def run_scan(
    config: AppConfig,
    *,
    root: str | Path = ".",
    staged: bool = False,
    extractor: ImportExtractor | None = None,
    metrics: Metrics | None = None,
    exists: ExistsCheck | None = None,
) -> ScanResult:
    root_path = Path(root).resolve()
    import_extractor = extractor or RegexImportExtractor()
    run_metrics = metrics or RunMetrics()

    run_metrics.start()
    files = list_files(root_path, staged=staged, ignore_files=config.ignore_files)

    findings: list[FileFindings] = []
    unused_imports: dict[str, list[str]] = {}
    import_map: dict[str, list[str]] = {}
    module_candidates: list[str] = []
    files_scanned = 0

    for file in files:
        if os.path.splitext(file)[1].lower() in BINARY_EXTENSIONS:
            continue

        file_path = root_path / file
        try:
            content = file_path.read_text(encoding="utf-8", errors="replace")
        except OSError as exc:
            logger.info("skip file %s: %s", file, exc)
            continue
        files_scanned += 1

        matches = match_lines(content, config.rules)
        if matches:
            findings.append(FileFindings(file=file, matches=tuple(matches)))

        if not is_js_ts_file(file):
            continue

        records = import_extractor.extract(content, source_file=str(file_path))
        import_map[str(file_path)] = [record.specifier for record in records]

        unused = unused_identifiers(content, records, import_extractor)
        if unused:
            unused_imports[file] = unused

        if is_module_candidate(file):
            module_candidates.append(file)

    unused_modules = find_unused_modules(
        module_candidates,
        import_map,
        exists=exists,
        root=root_path,
    )
    stats = run_metrics.stop(files_scanned)

    status = "CLEAN" if not findings and not unused_modules else "FINDINGS"
    logger.info(
        "scanned %d file(s): %d with findings, %d unused module(s)",
        files_scanned,
        len(findings),
        len(unused_modules),
    )

    return ScanResult(
        findings=findings,
        unused_imports=unused_imports,
        unused_modules=unused_modules,
        stats=stats,
        status=status,
    )
