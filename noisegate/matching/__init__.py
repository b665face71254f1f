"""
Ignore-rule matching for upstream errors.

Provides:
- IgnoreRule / MatchType: operator-configured patterns
- match_string / rule_matches: per-pattern and per-rule evaluation
- ErrorMatcher: OR across an ordered rule list
- merge_rules: combine project, network and upstream tiers
"""

from noisegate.matching.matcher import ErrorMatcher, extract_fields, merge_rules
from noisegate.matching.models import ExtractedErrorFields, IgnoreRule, MatchType
from noisegate.matching.pattern import PatternCache, match_string, resolve_match_type, rule_matches
from noisegate.matching.wildcard import WildcardPattern, compile_wildcard, wildcard_match

__all__ = [
    # Models
    "IgnoreRule",
    "MatchType",
    "ExtractedErrorFields",
    # Matching
    "ErrorMatcher",
    "PatternCache",
    "extract_fields",
    "match_string",
    "merge_rules",
    "resolve_match_type",
    "rule_matches",
    # Wildcards
    "WildcardPattern",
    "compile_wildcard",
    "wildcard_match",
]
