"""
Pydantic models for the proxy configuration sections that carry ignore rules.

Keys are camelCase in YAML (ignoreErrors, matchType, upstreamDefaults) and
snake_case in Python; both spellings are accepted when building models.
"""

from __future__ import annotations

from beartype import beartype
from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from noisegate.matching.matcher import ErrorMatcher, merge_rules
from noisegate.matching.models import IgnoreRule

_MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


class EvmConfig(BaseModel):
    model_config = _MODEL_CONFIG
    chain_id: int = Field(ge=1)


class UpstreamDefaults(BaseModel):
    """Project-wide defaults applied to every upstream."""

    model_config = _MODEL_CONFIG
    ignore_errors: list[IgnoreRule] | None = None


class NetworkDefaults(BaseModel):
    """Defaults applied at network level."""

    model_config = _MODEL_CONFIG
    ignore_errors: list[IgnoreRule] | None = None


class UpstreamConfig(BaseModel):
    model_config = _MODEL_CONFIG
    id: str = Field(min_length=1)
    endpoint: str
    type: str = "evm"
    evm: EvmConfig | None = None
    # None when not configured, as opposed to an explicit empty list.
    ignore_errors: list[IgnoreRule] | None = None


class NetworkConfig(BaseModel):
    model_config = _MODEL_CONFIG
    architecture: str = "evm"
    evm: EvmConfig | None = None


class ProjectConfig(BaseModel):
    model_config = _MODEL_CONFIG
    id: str = Field(min_length=1)
    upstream_defaults: UpstreamDefaults | None = None
    network_defaults: NetworkDefaults | None = None
    upstreams: list[UpstreamConfig] = Field(default_factory=list)
    networks: list[NetworkConfig] = Field(default_factory=list)

    @property
    def project_ignore_errors(self) -> list[IgnoreRule]:
        if self.upstream_defaults is None:
            return []
        return list(self.upstream_defaults.ignore_errors or [])

    @property
    def network_ignore_errors(self) -> list[IgnoreRule]:
        if self.network_defaults is None:
            return []
        return list(self.network_defaults.ignore_errors or [])

    @beartype
    def get_upstream(self, upstream_id: str) -> UpstreamConfig:
        for upstream in self.upstreams:
            if upstream.id == upstream_id:
                return upstream
        raise KeyError(f"Unknown upstream {upstream_id!r} in project {self.id!r}")

    @beartype
    def matcher_for(self, upstream_id: str) -> ErrorMatcher:
        """Merged ignore matcher for one upstream of this project."""
        upstream = self.get_upstream(upstream_id)
        return merge_rules(self.project_ignore_errors, self.network_ignore_errors, upstream.ignore_errors)


class RootConfig(BaseModel):
    model_config = _MODEL_CONFIG
    log_level: str = "INFO"
    projects: list[ProjectConfig] = Field(default_factory=list)
