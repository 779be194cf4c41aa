"""Build the template context shared by every generated file.

Feature flags (telemetry, OAuth resource-server mode, prompts) are resolved
here exactly once. Templates and manifest builders read the flags from the
context and never re-derive them, so all six files agree on what is on.
"""

from __future__ import annotations

import json
from collections.abc import Iterable, Mapping
from typing import Any

from .config import GeneratorConfig
from .models import SecuritySchemeDescriptor, ToolDefinition
from .naming import env_key

SDK_PACKAGE = "@emcy/sdk"
SDK_VERSION = "^0.1.0"

DEFAULT_PORT = 3000

# Placeholder values written to .env.example, keyed by credential prefix.
_CREDENTIAL_PLACEHOLDERS = {
    "API_KEY": "your-api-key",
    "BEARER_TOKEN": "your-bearer-token",
    "OAUTH_ACCESS_TOKEN": "your-access-token",
}


def credential_prefix(scheme: SecuritySchemeDescriptor) -> str | None:
    """Env var prefix the generated server reads for a scheme, if any."""
    if scheme.type == "apiKey":
        return "API_KEY"
    if scheme.type == "http" and scheme.scheme == "bearer":
        return "BEARER_TOKEN"
    if scheme.type == "oauth2":
        return "OAUTH_ACCESS_TOKEN"
    return None


def used_scheme_names(tools: Iterable[ToolDefinition]) -> list[str]:
    """Scheme names referenced by the tools, first-seen order, no duplicates."""
    seen: dict[str, None] = {}
    for tool in tools:
        for name in tool.security_schemes:
            seen.setdefault(name, None)
    return list(seen)


def build_credentials(
    tools: list[ToolDefinition],
    security_schemes: Mapping[str, SecuritySchemeDescriptor],
) -> list[dict[str, str]]:
    """Credential variables implied by the schemes the tools actually use."""
    credentials = []
    for name in used_scheme_names(tools):
        scheme = security_schemes.get(name)
        prefix = credential_prefix(scheme) if scheme else None
        if prefix is None:
            continue
        credentials.append({
            "scheme": name,
            "type": scheme.type,
            "variable": f"{prefix}_{env_key(name)}",
            "placeholder": _CREDENTIAL_PLACEHOLDERS[prefix],
        })
    return credentials


def _client_config(server_name: str, entry: dict[str, Any]) -> str:
    """JSON snippet for an MCP client config file."""
    return json.dumps({"mcpServers": {server_name: entry}}, indent=2, ensure_ascii=False)


def _tool_entry(tool: ToolDefinition) -> dict[str, Any]:
    return {
        "name": tool.name,
        "description": tool.description,
        "input_schema": tool.input_schema,
        "method": tool.http_method,
        "path_template": tool.path_template,
        "parameters": [param.to_dict() for param in tool.parameters],
        "request_body_content_type": tool.request_body_content_type,
        "security_schemes": list(tool.security_schemes),
    }


def build_context(
    tools: list[ToolDefinition],
    config: GeneratorConfig,
    security_schemes: Mapping[str, SecuritySchemeDescriptor] | None = None,
) -> dict[str, Any]:
    """Build the full template context from tools, config and schemes."""
    security_schemes = security_schemes or {}
    credentials = build_credentials(tools, security_schemes)
    oauth = config.oauth2 if config.oauth_enabled else None

    return {
        "server_name": config.name,
        "server_version": config.version,
        "base_url": config.base_url,
        "default_port": DEFAULT_PORT,
        "tools": [_tool_entry(tool) for tool in tools],
        "tool_count": len(tools),
        "security_schemes": {
            name: scheme.to_dict() for name, scheme in security_schemes.items()
        },
        "credentials": credentials,
        "uses_upstream_oauth": any(c["type"] == "oauth2" for c in credentials),
        "telemetry_enabled": config.telemetry_enabled,
        "sdk_package": SDK_PACKAGE,
        "sdk_dependency": (
            f"file:{config.local_sdk_path}" if config.local_sdk_path else SDK_VERSION
        ),
        "oauth_enabled": oauth is not None,
        "oauth": {
            "authorization_server_url": oauth.authorization_server_url,
            "scopes": list(oauth.scopes),
            "resource_url": oauth.resource_url,
            "jwks_cache_ttl_seconds": oauth.jwks_cache_ttl_seconds,
        } if oauth else None,
        "prompts_enabled": bool(config.prompts),
        "prompts": [prompt.to_dict() for prompt in config.prompts],
        "cursor_http_config": _client_config(
            config.name, {"url": f"http://localhost:{DEFAULT_PORT}/mcp"},
        ),
        "stdio_config": _client_config(
            config.name, {"command": "node", "args": ["<absolute-path-to>/build/index.js"]},
        ),
    }
