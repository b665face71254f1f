"""
noisegate: decide which upstream RPC errors count against an upstream's health.

Operators list ignore rules (exact, substring, wildcard or regex patterns on
an error's code and/or message) at project, network and upstream level.
Errors matching any of them are skipped by failure counters and failover.
"""

from noisegate import config, health, matching
from noisegate.errors import BaseError, ConfigError, ErrorDescriptor, NoiseGateError, StandardError
from noisegate.matching import ErrorMatcher, IgnoreRule, MatchType, merge_rules
from noisegate.upstream import Upstream, load_upstreams

__all__ = [
    "config",
    "health",
    "matching",
    "BaseError",
    "ConfigError",
    "ErrorDescriptor",
    "ErrorMatcher",
    "IgnoreRule",
    "MatchType",
    "NoiseGateError",
    "StandardError",
    "Upstream",
    "load_upstreams",
    "merge_rules",
]
