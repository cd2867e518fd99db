from __future__ import annotations

import re

from code_guardian.models import ImportRecord
from code_guardian.scanners.imports import ImportExtractor, RegexImportExtractor


def unused_identifiers(
    content: str,
    records: list[ImportRecord],
    extractor: ImportExtractor | None = None,
) -> list[str]:
    """Return identifiers bound by ``records`` that never appear outside imports.

    Usage is a word-boundary text search, so names that only occur in strings
    or comments still count as used.
    """
    code = (extractor or RegexImportExtractor()).strip_imports(content)

    unused: list[str] = []
    checked: set[str] = set()
    for record in records:
        for identifier in record.identifiers:
            if identifier in checked:
                continue
            checked.add(identifier)
            pattern = re.compile(rf"\b{re.escape(identifier)}\b")
            if not pattern.search(code):
                unused.append(identifier)

    return unused
