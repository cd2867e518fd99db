from __future__ import annotations

import re
from typing import Protocol

from code_guardian.models import ImportRecord


ES_IMPORT_PATTERN = re.compile(r"""\bimport\s+(?:([\w$*{}\s,]+?)\s+from\s+)?['"]([^'"\n]+)['"]""")
CJS_REQUIRE_PATTERN = re.compile(
    r"""\b(?:const|let|var)\s+([\w${}\s,:]+?)\s*=\s*require\(\s*['"]([^'"\n]+)['"]\s*\)"""
)
BARE_REQUIRE_PATTERN = re.compile(r"""\brequire\(\s*['"]([^'"\n]+)['"]\s*\)""")

_NAMESPACE_CLAUSE = re.compile(r"^\*\s*as\s+([\w$]+)")
_ALIAS_SPLIT = re.compile(r"\s+as\s+")

JS_TS_EXTENSIONS = {".js", ".jsx", ".ts", ".tsx", ".mjs", ".cjs"}


class ImportExtractor(Protocol):
    def extract(self, content: str, source_file: str = "") -> list[ImportRecord]:
        ...

    def strip_imports(self, content: str) -> str:
        ...


class RegexImportExtractor:
    """Line-oriented import recognizer for JavaScript and TypeScript sources.

    Three passes run over the same content, in order: ES ``import ... from``,
    CommonJS ``const x = require(...)`` and bare ``require(...)`` calls. Only
    the first two bind identifiers.
    """

    def extract(self, content: str, source_file: str = "") -> list[ImportRecord]:
        records: list[ImportRecord] = []

        for match in ES_IMPORT_PATTERN.finditer(content):
            clause, specifier = match.group(1), match.group(2)
            records.append(
                ImportRecord(
                    source_file=source_file,
                    specifier=specifier,
                    identifiers=tuple(parse_es_clause(clause)),
                )
            )

        bound_spans: list[tuple[int, int]] = []
        for match in CJS_REQUIRE_PATTERN.finditer(content):
            bound_spans.append(match.span())
            records.append(
                ImportRecord(
                    source_file=source_file,
                    specifier=match.group(2),
                    identifiers=tuple(parse_cjs_binding(match.group(1))),
                )
            )

        for match in BARE_REQUIRE_PATTERN.finditer(content):
            start = match.start()
            if any(low <= start < high for low, high in bound_spans):
                continue
            records.append(ImportRecord(source_file=source_file, specifier=match.group(1)))

        return records

    def strip_imports(self, content: str) -> str:
        without_es = ES_IMPORT_PATTERN.sub("", content)
        return CJS_REQUIRE_PATTERN.sub("", without_es)


def parse_es_clause(clause: str | None) -> list[str]:
    if not clause:
        return []
    text = clause.strip()

    namespace = _NAMESPACE_CLAUSE.match(text)
    if namespace:
        return [namespace.group(1)]

    if text.startswith("{"):
        inner = text[1:].split("}", 1)[0]
        names: list[str] = []
        for token in inner.split(","):
            name = _ALIAS_SPLIT.split(token.strip(), maxsplit=1)[0].strip()
            if name:
                names.append(name)
        return names

    default = text.split(",")[0].strip()
    return [default] if default else []


def parse_cjs_binding(binding: str) -> list[str]:
    text = binding.strip()
    if text.startswith("{"):
        inner = text[1:].split("}", 1)[0]
        return [item.strip() for item in inner.split(",") if item.strip()]

    first = text.split(",")[0].strip()
    return [first] if first else []


def build_import_map(records: list[ImportRecord]) -> dict[str, list[str]]:
    import_map: dict[str, list[str]] = {}
    for record in records:
        import_map.setdefault(record.source_file, []).append(record.specifier)
    return import_map


def is_js_ts_file(path: str) -> bool:
    lowered = path.lower()
    return any(lowered.endswith(ext) for ext in JS_TS_EXTENSIONS)
