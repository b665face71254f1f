"""
Upstream: one configured RPC node and the ignore matcher derived for it.

Config, tier rules and matcher live together in one immutable binding that
reconfigure() replaces with a single attribute assignment. Callers that
already fetched the previous matcher keep evaluating against it.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass
from pathlib import Path

from beartype import beartype

from noisegate.config import load_config
from noisegate.config.models import ProjectConfig, UpstreamConfig
from noisegate.logs.structlog import configure
from noisegate.matching.matcher import ErrorMatcher, merge_rules
from noisegate.matching.models import IgnoreRule

_log = logging.getLogger(__name__)


@dataclass(frozen=True)
class _Binding:
    config: UpstreamConfig
    project_rules: tuple[IgnoreRule, ...]
    network_rules: tuple[IgnoreRule, ...]
    matcher: ErrorMatcher


def _bind(
    config: UpstreamConfig,
    project_rules: Sequence[IgnoreRule] | None,
    network_rules: Sequence[IgnoreRule] | None,
) -> _Binding:
    project = tuple(project_rules or ())
    network = tuple(network_rules or ())
    return _Binding(config, project, network, merge_rules(project, network, config.ignore_errors))


class Upstream:
    @beartype
    def __init__(
        self,
        project_id: str,
        config: UpstreamConfig,
        project_rules: Sequence[IgnoreRule] | None = None,
        network_rules: Sequence[IgnoreRule] | None = None,
    ) -> None:
        self.project_id = project_id
        self._binding: _Binding = _bind(config, project_rules, network_rules)

    @classmethod
    @beartype
    def from_project(cls, project: ProjectConfig, upstream_id: str) -> Upstream:
        return cls(
            project.id,
            project.get_upstream(upstream_id),
            project.project_ignore_errors,
            project.network_ignore_errors,
        )

    @property
    def id(self) -> str:
        return self._binding.config.id

    @property
    def config(self) -> UpstreamConfig:
        return self._binding.config

    @property
    def error_matcher(self) -> ErrorMatcher:
        return self._binding.matcher

    @beartype
    def should_ignore_error(self, err: BaseException | None) -> bool:
        return self._binding.matcher.should_ignore(err)

    @beartype
    def reconfigure(
        self,
        config: UpstreamConfig,
        project_rules: Sequence[IgnoreRule] | None = None,
        network_rules: Sequence[IgnoreRule] | None = None,
    ) -> None:
        """
        Replace config and matcher with ones built from the new rules.

        A tier passed as None keeps the rules this upstream already has for
        it; pass an empty sequence to clear a tier.
        """
        current = self._binding
        if config.id != current.config.id:
            raise ValueError(f"Cannot reconfigure upstream {current.config.id!r} with config for {config.id!r}")
        binding = _bind(
            config,
            current.project_rules if project_rules is None else project_rules,
            current.network_rules if network_rules is None else network_rules,
        )
        self._binding = binding
        _log.info("%s/%s - ignore rules reloaded (%d rules)", self.project_id, self.id, len(binding.matcher))

    @beartype
    def reconfigure_from_project(self, project: ProjectConfig) -> None:
        """Reload all three tiers from a freshly loaded project config."""
        if project.id != self.project_id:
            raise ValueError(f"Cannot reconfigure upstream of project {self.project_id!r} from {project.id!r}")
        self.reconfigure(
            project.get_upstream(self.id),
            project.project_ignore_errors,
            project.network_ignore_errors,
        )

    def __repr__(self) -> str:
        return f"Upstream(project_id={self.project_id!r}, id={self.id!r})"


@beartype
def load_upstreams(
    path: str | Path,
    service_name: str = "noisegate",
    log_dir: str | None = None,
) -> dict[tuple[str, str], Upstream]:
    """
    Load a config file, configure logging at its logLevel and build every upstream.

    Returns:
        Upstreams keyed by (project id, upstream id).
    """
    root = load_config(path)
    configure(service_name=service_name, log_level=root.log_level, log_dir=log_dir)

    upstreams: dict[tuple[str, str], Upstream] = {}
    for project in root.projects:
        for upstream_config in project.upstreams:
            upstreams[(project.id, upstream_config.id)] = Upstream.from_project(project, upstream_config.id)
    _log.info("Loaded %d upstreams from %s", len(upstreams), path)
    return upstreams
