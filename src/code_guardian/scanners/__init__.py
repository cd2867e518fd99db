from code_guardian.scanners.imports import ImportExtractor, RegexImportExtractor, build_import_map
from code_guardian.scanners.modules import find_unused_modules
from code_guardian.scanners.secrets import match_lines
from code_guardian.scanners.usage import unused_identifiers

__all__ = [
    "ImportExtractor",
    "RegexImportExtractor",
    "build_import_map",
    "find_unused_modules",
    "match_lines",
    "unused_identifiers",
]
