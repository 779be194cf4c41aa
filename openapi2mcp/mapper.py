"""Map extracted endpoints to MCP tool definitions.

Each endpoint becomes one tool whose input schema merges its parameters and
request body into a single JSON-Schema object.
"""

from __future__ import annotations

from collections.abc import Collection, Iterable
from typing import Any

from .models import EndpointDescriptor, ToolDefinition

REQUEST_BODY_PROPERTY = "requestBody"
REQUEST_BODY_DESCRIPTION = "The JSON request body."


def get_endpoint_key(endpoint: EndpointDescriptor) -> str:
    """Selection key for an endpoint: ``METHOD:/path/as/declared``."""
    return f"{endpoint.method.upper()}:{endpoint.path}"


def get_all_endpoint_keys(endpoints: Iterable[EndpointDescriptor]) -> list[str]:
    return [get_endpoint_key(endpoint) for endpoint in endpoints]


def map_to_mcp_tools(
    endpoints: Iterable[EndpointDescriptor],
    enabled_endpoints: Collection[str] | None = None,
) -> list[ToolDefinition]:
    """Map endpoints to tools, keeping only enabled keys when a filter is given."""
    return [
        map_endpoint_to_tool(endpoint)
        for endpoint in endpoints
        if enabled_endpoints is None or get_endpoint_key(endpoint) in enabled_endpoints
    ]


def map_endpoint_to_tool(endpoint: EndpointDescriptor) -> ToolDefinition:
    return ToolDefinition(
        name=endpoint.operation_id,
        description=build_description(endpoint),
        input_schema=build_input_schema(endpoint),
        http_method=endpoint.method.lower(),
        path_template=endpoint.path,
        parameters=endpoint.parameters,
        request_body_content_type=(
            endpoint.request_body.content_type if endpoint.request_body else None
        ),
        security_schemes=endpoint.security_schemes,
    )


def build_description(endpoint: EndpointDescriptor) -> str:
    """Summary (or a generic fallback), then the description if it adds anything."""
    description = endpoint.summary or f"Executes {endpoint.method.upper()} {endpoint.path}"
    if endpoint.description and endpoint.description != endpoint.summary:
        description += f"\n\n{endpoint.description}"
    return description


def build_input_schema(endpoint: EndpointDescriptor) -> dict[str, Any]:
    """Merge parameters and the request body into one object schema.

    Later parameters with the same name replace earlier ones, so
    operation-level parameters override path-level ones. ``required`` is
    left out entirely when nothing is required.
    """
    properties: dict[str, Any] = {}
    required: list[str] = []

    for param in endpoint.parameters:
        prop = dict(param.schema)
        description = param.description or param.schema.get("description")
        if description is not None:
            prop["description"] = description
        else:
            prop.pop("description", None)
        properties[param.name] = prop
        if param.required:
            required.append(param.name)

    if endpoint.request_body is not None:
        properties[REQUEST_BODY_PROPERTY] = {
            **endpoint.request_body.schema,
            "description": REQUEST_BODY_DESCRIPTION,
        }
        if endpoint.request_body.required:
            required.append(REQUEST_BODY_PROPERTY)

    schema: dict[str, Any] = {"type": "object", "properties": properties}
    if required:
        schema["required"] = required
    return schema
