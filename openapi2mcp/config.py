"""Generation settings supplied once per ``generate_mcp_server`` call."""

from __future__ import annotations

import json
from collections.abc import Collection
from dataclasses import dataclass
from typing import Any

from .errors import ConfigurationError

DEFAULT_SERVER_VERSION = "1.0.0"
DEFAULT_BASE_URL = "http://localhost:3000"
DEFAULT_JWKS_CACHE_TTL_SECONDS = 300


@dataclass(frozen=True)
class OAuth2Config:
    """Resource-server settings: clients authenticate against an external AS."""

    authorization_server_url: str | None = None
    scopes: tuple[str, ...] = ()
    resource_url: str | None = None
    jwks_cache_ttl_seconds: int = DEFAULT_JWKS_CACHE_TTL_SECONDS

    @property
    def enabled(self) -> bool:
        return bool(self.authorization_server_url)


@dataclass(frozen=True)
class PromptArgument:
    name: str
    description: str
    required: bool = False


@dataclass(frozen=True)
class PromptDefinition:
    """A prompt template; ``{{name}}`` placeholders are filled from arguments."""

    name: str
    description: str
    content: str
    title: str | None = None
    arguments: tuple[PromptArgument, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"name": self.name}
        if self.title is not None:
            data["title"] = self.title
        data["description"] = self.description
        data["content"] = self.content
        data["arguments"] = [
            {"name": a.name, "description": a.description, "required": a.required}
            for a in self.arguments
        ]
        return data


@dataclass(frozen=True)
class GeneratorConfig:
    name: str
    base_url: str
    version: str = DEFAULT_SERVER_VERSION
    enabled_endpoints: Collection[str] | None = None
    telemetry_enabled: bool = False
    local_sdk_path: str | None = None
    oauth2: OAuth2Config | None = None
    prompts: tuple[PromptDefinition, ...] = ()

    @property
    def oauth_enabled(self) -> bool:
        return self.oauth2 is not None and self.oauth2.enabled


def _require_str(entry: dict[str, Any], key: str, index: int) -> str:
    value = entry.get(key)
    if not isinstance(value, str) or not value:
        raise ConfigurationError(f"prompts[{index}] is missing '{key}'")
    return value


def parse_prompts(raw: list[Any]) -> tuple[PromptDefinition, ...]:
    """Build prompt definitions from decoded JSON."""
    prompts = []
    for index, entry in enumerate(raw):
        if not isinstance(entry, dict):
            raise ConfigurationError(f"prompts[{index}] must be an object")
        arguments = tuple(
            PromptArgument(
                name=_require_str(arg, "name", index),
                description=arg.get("description", ""),
                required=bool(arg.get("required", False)),
            )
            for arg in entry.get("arguments") or []
        )
        prompts.append(
            PromptDefinition(
                name=_require_str(entry, "name", index),
                description=_require_str(entry, "description", index),
                content=_require_str(entry, "content", index),
                title=entry.get("title"),
                arguments=arguments,
            )
        )
    return tuple(prompts)


def load_prompts(raw_json: str) -> tuple[PromptDefinition, ...]:
    """Parse the ``--prompts-json`` value."""
    try:
        raw = json.loads(raw_json)
    except json.JSONDecodeError as exc:
        raise ConfigurationError(f"Error parsing --prompts-json: {exc}") from exc
    if not isinstance(raw, list):
        raise ConfigurationError("prompts-json must be a JSON array")
    return parse_prompts(raw)
