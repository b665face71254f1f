"""
Glob-style matching where '*' is the only wildcard.

'*' matches zero or more arbitrary characters (newlines included). Every other
character is literal, and the whole target has to be consumed. Matching is a
left-to-right scan for the literal segments between stars, so it never
backtracks.
"""

from __future__ import annotations

from dataclasses import dataclass

from beartype import beartype

WILDCARD = "*"


@dataclass(frozen=True)
class WildcardPattern:
    pattern: str
    segments: tuple[str, ...]

    def fullmatch(self, target: str) -> bool:
        if len(self.segments) == 1:
            return target == self.pattern

        head, *middle, tail = self.segments
        if len(target) < len(head) + len(tail):
            return False
        if not target.startswith(head) or not target.endswith(tail):
            return False

        pos = len(head)
        end = len(target) - len(tail)
        for segment in middle:
            found = target.find(segment, pos, end)
            if found < 0:
                return False
            pos = found + len(segment)
        return True


@beartype
def compile_wildcard(pattern: str) -> WildcardPattern:
    return WildcardPattern(pattern=pattern, segments=tuple(pattern.split(WILDCARD)))


@beartype
def wildcard_match(pattern: str, target: str) -> bool:
    return compile_wildcard(pattern).fullmatch(target)
