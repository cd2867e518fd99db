from __future__ import annotations

import logging
import re
from typing import Callable

from code_guardian.models import Finding, Rule

logger = logging.getLogger(__name__)

LINE_SPLIT = re.compile(r"\r?\n")

LineTest = Callable[[str], object]

# JavaScript flag letters. Only the ones that change what a single line test
# matches map to a Python flag; sticky is handled by anchoring the test.
_FLAG_MAP = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "g": 0,
    "u": 0,
    "y": 0,
    "d": 0,
}

# (?<name> but not the lookbehinds (?<= and (?<!
_JS_NAMED_GROUP = re.compile(r"(?<!\\)\(\?<(?![=!])")
_JS_NAMED_BACKREF = re.compile(r"\\k<([A-Za-z_$][\w$]*)>")


def translate_flags(flags: str) -> int | None:
    value = 0
    seen: set[str] = set()
    for letter in flags:
        if letter not in _FLAG_MAP or letter in seen:
            return None
        seen.add(letter)
        value |= _FLAG_MAP[letter]
    return value


def translate_pattern(pattern: str) -> str:
    translated = _JS_NAMED_GROUP.sub("(?P<", pattern)
    return _JS_NAMED_BACKREF.sub(r"(?P=\1)", translated)


def compile_rule(rule: Rule) -> re.Pattern[str] | None:
    flags = translate_flags(rule.flags if rule.flags else "g")
    if flags is None:
        logger.debug("rule %s has invalid flags %r", rule.label, rule.flags)
        return None
    try:
        return re.compile(translate_pattern(rule.pattern), flags)
    except re.error as exc:
        logger.debug("rule %s has invalid pattern: %s", rule.label, exc)
        return None


def line_test(rule: Rule) -> LineTest | None:
    """Return the per-line test for ``rule``, or None when the rule is inert.

    A sticky rule only matches at the start of the line.
    """
    pattern = compile_rule(rule)
    if pattern is None:
        return None
    if "y" in (rule.flags or ""):
        return pattern.match
    return pattern.search


def match_lines(content: str, rules: list[Rule] | tuple[Rule, ...]) -> list[Finding]:
    compiled = [(rule, line_test(rule)) for rule in rules]

    findings: list[Finding] = []
    for line_index, line in enumerate(LINE_SPLIT.split(content), start=1):
        for rule, test in compiled:
            if test is None:
                continue
            if test(line):
                findings.append(
                    Finding(
                        rule=rule.label,
                        line_number=line_index,
                        line=line.strip(),
                        pattern=rule.pattern,
                    )
                )

    return findings
