"""
ErrorMatcher: decide whether an upstream error should be ignored.

An ignored error is left out of health scoring, failure counters and
penalization. The matcher is an OR across its rules and is never mutated after
construction, so one instance can be shared by concurrent callers; a reload
builds a new matcher instead of editing an existing one.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from enum import Enum

from beartype import beartype

from noisegate.errors import StandardError
from noisegate.matching.models import ExtractedErrorFields, IgnoreRule
from noisegate.matching.pattern import PatternCache, rule_matches

_log = logging.getLogger(__name__)


@beartype
def extract_fields(err: BaseException) -> ExtractedErrorFields:
    """
    Pull the message and, when exposed, the code out of err.

    Only err itself is inspected. An exception raised "from" a structured
    error does not inherit its code.
    """
    code: str | None = None
    if isinstance(err, StandardError) and callable(err.base):
        descriptor = err.base()
        descriptor_code = getattr(descriptor, "code", None)
        if isinstance(descriptor_code, Enum):
            descriptor_code = descriptor_code.value
        if descriptor_code:
            code = str(descriptor_code)
    return ExtractedErrorFields(message=str(err), code=code)


class ErrorMatcher:
    """Ordered, read-only collection of ignore rules."""

    @beartype
    def __init__(self, rules: Iterable[IgnoreRule] | None = None, cache: PatternCache | None = None) -> None:
        self._rules: tuple[IgnoreRule, ...] = tuple(rules or ())
        self._cache = cache if cache is not None else PatternCache()

    @property
    def rules(self) -> tuple[IgnoreRule, ...]:
        return self._rules

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"ErrorMatcher(rules={len(self._rules)})"

    @beartype
    def should_ignore(self, err: BaseException | None) -> bool:
        """Return True if any rule matches err. None is never ignored."""
        if err is None or not self._rules:
            return False

        fields = extract_fields(err)
        return self.first_match(fields) is not None

    @beartype
    def first_match(self, fields: ExtractedErrorFields) -> IgnoreRule | None:
        """Return the first rule in order that matches fields."""
        for rule in self._rules:
            if rule_matches(fields, rule, self._cache):
                return rule
        return None


@beartype
def merge_rules(
    project_rules: Sequence[IgnoreRule] | None = None,
    network_rules: Sequence[IgnoreRule] | None = None,
    upstream_rules: Sequence[IgnoreRule] | None = None,
) -> ErrorMatcher:
    """
    Build one ErrorMatcher from the three configuration tiers.

    Rules are concatenated upstream first, then network, then project. The
    order only decides which rule is tried first: a rule from any tier ignores
    the same errors, and no tier can suppress another tier's rules.
    """
    merged = [*(upstream_rules or ()), *(network_rules or ()), *(project_rules or ())]
    _log.debug(
        "Merged ignore rules: upstream=%d network=%d project=%d",
        len(upstream_rules or ()),
        len(network_rules or ()),
        len(project_rules or ()),
    )
    return ErrorMatcher(merged)
