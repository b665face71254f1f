from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, field_validator
from pydantic.alias_generators import to_camel

_log = logging.getLogger(__name__)


class MatchType(str, Enum):
    EXACT = "exact"
    SUBSTRING = "substring"  # default when unset or unrecognized
    WILDCARD = "wildcard"  # '*' matches any run of characters, anchored
    REGEX = "regex"  # unanchored search


class IgnoreRule(BaseModel):
    """
    One operator-configured ignore pattern.

    A rule constrains the error code, the error message, or both. A rule with
    neither set never matches anything.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        alias_generator=to_camel,
        populate_by_name=True,
    )

    code: str = ""
    message: str = ""
    match_type: MatchType = MatchType.SUBSTRING

    @field_validator("code", "message", mode="before")
    @classmethod
    def _none_as_empty(cls, value: Any) -> Any:
        return "" if value is None else value

    @field_validator("match_type", mode="before")
    @classmethod
    def _coerce_match_type(cls, value: Any) -> Any:
        if value is None or value == "":
            return MatchType.SUBSTRING
        if isinstance(value, MatchType):
            return value
        try:
            return MatchType(value)
        except ValueError:
            _log.warning("Unknown ignore rule matchType %r, using substring", value)
            return MatchType.SUBSTRING

    @property
    def is_constrained(self) -> bool:
        return bool(self.code or self.message)


@dataclass(frozen=True)
class ExtractedErrorFields:
    """(code, message) pair pulled out of one error value."""

    message: str
    # None when the error has no code capability; never conflated with "".
    code: str | None = None
