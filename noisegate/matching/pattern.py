"""
Single-pattern and single-rule evaluation.

match_string decides whether one target string satisfies one pattern under a
match type. rule_matches combines the code and message constraints of one
IgnoreRule with a logical AND. Neither function raises for malformed
patterns: a regex that fails to compile is evaluated as a substring instead.

Regexes are compiled with RE2, so evaluation time stays linear in the target
length whatever the operator wrote. Constructs RE2 does not support
(backreferences, lookarounds) count as a failed compile.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Callable

import re2
from beartype import beartype

from noisegate.matching.models import ExtractedErrorFields, IgnoreRule, MatchType
from noisegate.matching.wildcard import compile_wildcard

_log = logging.getLogger(__name__)

_INVALID = object()

_COMPILERS: dict[MatchType, Callable[[str], Any]] = {
    MatchType.REGEX: re2.compile,
    MatchType.WILDCARD: compile_wildcard,
}


class PatternCache:
    """
    Compiled regex and wildcard patterns keyed by (match type, pattern).

    Safe for concurrent use. Two threads missing on the same key may both
    compile it; the first stored result wins. Compile failures are cached too,
    so a malformed pattern is reported once and then always falls back.
    """

    def __init__(self) -> None:
        self._entries: dict[tuple[MatchType, str], object] = {}
        self._lock = threading.Lock()

    def get(self, match_type: MatchType, pattern: str) -> Any | None:
        """Return the compiled pattern, or None if it does not compile."""
        key = (match_type, pattern)
        entry = self._entries.get(key)
        if entry is None:
            entry = _compile(match_type, pattern)
            with self._lock:
                entry = self._entries.setdefault(key, entry)
        return None if entry is _INVALID else entry  # type: ignore[return-value]

    def __len__(self) -> int:
        return len(self._entries)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()


def _compile(match_type: MatchType, pattern: str) -> object:
    try:
        return _COMPILERS[match_type](pattern)
    except re2.error as err:
        _log.debug("Ignore pattern %r (%s) does not compile, matching as substring: %s", pattern, match_type.value, err)
        return _INVALID


def resolve_match_type(match_type: MatchType | str | None) -> MatchType:
    """Map a raw match type onto MatchType; anything unrecognized is substring."""
    if isinstance(match_type, MatchType):
        return match_type
    try:
        return MatchType(match_type)
    except ValueError:
        return MatchType.SUBSTRING


@beartype
def match_string(
    target: str | None,
    pattern: str | None,
    match_type: MatchType | str | None = MatchType.SUBSTRING,
    cache: PatternCache | None = None,
) -> bool:
    """
    Return True if target satisfies pattern under match_type.

    An empty target or an empty pattern never matches.
    """
    if not target or not pattern:
        return False

    kind = resolve_match_type(match_type)
    if kind is MatchType.EXACT:
        return target == pattern
    if kind is MatchType.SUBSTRING:
        return pattern in target

    compiled = cache.get(kind, pattern) if cache is not None else _compile(kind, pattern)
    if compiled is None or compiled is _INVALID:
        return pattern in target
    if kind is MatchType.WILDCARD:
        return bool(compiled.fullmatch(target))
    return compiled.search(target) is not None


@beartype
def rule_matches(fields: ExtractedErrorFields, rule: IgnoreRule, cache: PatternCache | None = None) -> bool:
    """
    Return True if every constraint set on rule holds for fields.

    A code constraint never matches an error without a code. A rule with no
    constraint at all never matches.
    """
    if not rule.is_constrained:
        return False
    if rule.code and not match_string(fields.code or "", rule.code, rule.match_type, cache):
        return False
    if rule.message and not match_string(fields.message, rule.message, rule.match_type, cache):
        return False
    return True
