from __future__ import annotations

import csv
import json
from datetime import datetime, timezone
from pathlib import Path

from code_guardian.models import ScanResult


def render_text(result: ScanResult, *, root: str | None = None) -> str:
    lines: list[str] = []

    if result.findings:
        lines.append(f"Found {len(result.findings)} file(s) with potential secrets:")
        for item in result.findings:
            lines.append("")
            lines.append(f"File: {item.file}")
            for match in item.matches:
                lines.append(f"  Rule: {match.rule} (line {match.line_number})")
                lines.append(f"    {match.line}")
    else:
        location = f" in {root}" if root else ""
        lines.append(f"Scan successful, no secrets found{location}.")

    if result.unused_imports:
        lines.append("")
        lines.append("Unused imports:")
        for file, identifiers in result.unused_imports.items():
            lines.append(f"  {file}: {', '.join(identifiers)}")

    if result.unused_modules:
        lines.append("")
        lines.append("Unused modules:")
        for file in result.unused_modules:
            lines.append(f"  {file}")

    stats = result.stats
    lines.append("")
    lines.append(
        f"Status: {result.status} | files scanned: {stats.files_scanned} | "
        f"elapsed: {stats.elapsed_seconds:.3f}s | memory delta: {stats.memory_delta_bytes / 1024:.1f} KiB"
    )
    return "\n".join(lines)


def render_json(result: ScanResult) -> str:
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=True)


def write_report(result: ScanResult, output_dir: str | Path) -> dict:
    out = Path(output_dir)
    out.mkdir(parents=True, exist_ok=True)

    findings_rows = [
        {"file": item.file, **match.to_dict()}
        for item in result.findings
        for match in item.matches
    ]
    unused_import_rows = [
        {"file": file, "identifier": identifier}
        for file, identifiers in result.unused_imports.items()
        for identifier in identifiers
    ]
    unused_module_rows = [{"file": file} for file in result.unused_modules]

    summary = {
        "generated_at": datetime.now(timezone.utc).isoformat(),
        "status": result.status,
        "stats": result.stats.to_dict(),
        "counts": {
            "files_with_findings": len(result.findings),
            "findings_total": len(findings_rows),
            "unused_imports": len(unused_import_rows),
            "unused_modules": len(unused_module_rows),
        },
        "files": {},
    }

    summary_json = out / "summary.json"
    findings_csv = out / "findings.csv"
    unused_imports_csv = out / "unused_imports.csv"
    unused_modules_csv = out / "unused_modules.csv"

    _write_csv(findings_csv, findings_rows)
    _write_csv(unused_imports_csv, unused_import_rows)
    _write_csv(unused_modules_csv, unused_module_rows)

    summary["files"] = {
        "summary": str(summary_json.resolve()),
        "findings": str(findings_csv.resolve()),
        "unused_imports": str(unused_imports_csv.resolve()),
        "unused_modules": str(unused_modules_csv.resolve()),
    }
    _write_json(summary_json, summary)

    return summary


def _write_json(path: Path, payload: dict) -> None:
    with path.open("w", encoding="utf-8") as handle:
        json.dump(payload, handle, indent=2, ensure_ascii=True)


def _write_csv(path: Path, rows: list[dict]) -> None:
    with path.open("w", encoding="utf-8", newline="") as handle:
        if not rows:
            return
        fieldnames = list(dict.fromkeys(key for row in rows for key in row))
        writer = csv.DictWriter(handle, fieldnames=fieldnames)
        writer.writeheader()
        writer.writerows(rows)
