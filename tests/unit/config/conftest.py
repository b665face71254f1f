from __future__ import annotations

from pathlib import Path

import pytest

PROXY_YAML = """
logLevel: DEBUG
projects:
  - id: test-project
    upstreamDefaults:
      ignoreErrors:
        - message: "default ignored error"
          matchType: substring
    networkDefaults:
      ignoreErrors:
        - message: "network ignored error"
          matchType: substring
    upstreams:
      - id: upstream-with-ignore
        endpoint: http://rpc1.example.com
        ignoreErrors:
          - message: "transaction underpriced"
            matchType: substring
          - message: "nonce too low"
            matchType: substring
          - code: "ErrEndpointCapacityExceeded"
            matchType: exact
      - id: upstream-without-ignore
        endpoint: http://rpc2.example.com
    networks:
      - architecture: evm
        evm:
          chainId: 1
"""


@pytest.fixture
def proxy_config_file(tmp_path: Path) -> Path:
    path = tmp_path / "proxy.yaml"
    path.write_text(PROXY_YAML, encoding="utf-8")
    return path
