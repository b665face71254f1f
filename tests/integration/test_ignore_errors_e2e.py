"""
End-to-end: YAML config -> merged matcher per upstream -> health tracker.

Only the config file is synthetic; every component is real.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from noisegate.config import load_config
from noisegate.errors import BaseError
from noisegate.health.tracker import HealthTracker
from noisegate.matching.matcher import ErrorMatcher
from noisegate.matching.models import IgnoreRule, MatchType
from noisegate.upstream import Upstream

CONFIG = """
logLevel: INFO
projects:
  - id: main
    upstreamDefaults:
      ignoreErrors:
        - message: "project error"
    networkDefaults:
      ignoreErrors:
        - message: "network error"
          matchType: substring
    upstreams:
      - id: alchemy
        endpoint: ${ALCHEMY_URL}
        ignoreErrors:
          - message: "transaction underpriced"
            matchType: substring
          - message: "nonce too low"
            matchType: substring
          - code: "ErrEndpointCapacityExceeded"
            matchType: exact
"""


@pytest.fixture
def upstream(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Upstream:
    monkeypatch.setenv("ALCHEMY_URL", "https://eth.example.com/v2/key")
    path = tmp_path / "proxy.yaml"
    path.write_text(CONFIG, encoding="utf-8")
    project = load_config(path).projects[0]
    return Upstream.from_project(project, "alchemy")


def test_endpoint_is_interpolated(upstream: Upstream) -> None:
    assert upstream.config.endpoint == "https://eth.example.com/v2/key"


@pytest.mark.parametrize(
    ("err", "expected"),
    [
        (RuntimeError("Error: transaction underpriced"), True),
        (RuntimeError("nonce too low for this transaction"), True),
        (RuntimeError("insufficient funds"), False),
        (BaseError("ErrEndpointCapacityExceeded", "whatever the upstream said"), True),
        (BaseError("ErrSomeOtherError", "some error"), False),
        (RuntimeError("network error occurred"), True),
        (RuntimeError("project error occurred"), True),
    ],
)
def test_upstream_scenario(upstream: Upstream, err: Exception, expected: bool) -> None:
    assert upstream.should_ignore_error(err) is expected


def test_tracker_only_counts_relevant_failures(upstream: Upstream) -> None:
    tracker = HealthTracker("main")
    method = "eth_sendRawTransaction"
    errors: list[Exception] = [
        RuntimeError("Error: transaction underpriced"),
        BaseError("ErrEndpointCapacityExceeded", "slow down"),
        RuntimeError("insufficient funds"),
        RuntimeError("execution reverted"),
    ]

    for err in errors:
        tracker.record_upstream_request(upstream, method)
        tracker.record_upstream_failure(upstream, method, err)

    metrics = tracker.get_upstream_method_metrics(upstream, method)
    assert metrics.requests_total == 4
    assert metrics.errors_total == 2
    assert metrics.ignored_errors_total == 2


@pytest.mark.parametrize(
    ("message", "expected"),
    [
        ("transaction underpriced", True),
        ("nonce too low", True),
        ("transaction is underpriced", True),
        ("nonce is too low", True),
        ("insufficient funds", False),
    ],
)
def test_mixed_match_types(message: str, expected: bool) -> None:
    matcher = ErrorMatcher(
        [
            IgnoreRule(message="transaction underpriced", match_type=MatchType.SUBSTRING),
            IgnoreRule(message="nonce too low", match_type=MatchType.SUBSTRING),
            IgnoreRule(code="ErrEndpointCapacityExceeded", match_type=MatchType.EXACT),
            IgnoreRule(message="transaction*is*underpriced", match_type=MatchType.WILDCARD),
            IgnoreRule(message="nonce (is )?too low", match_type=MatchType.REGEX),
        ]
    )
    assert matcher.should_ignore(RuntimeError(message)) is expected
