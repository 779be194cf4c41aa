"""Extract endpoints, security schemes and the base URL from an OpenAPI spec.

The input is expected to be fully dereferenced (see ``loader``). Any
``$ref`` node still present is skipped; resolving it is the loader's job.
"""

from __future__ import annotations

import logging
from typing import Any

from .loader import SpecSource, resolve_spec, validate_spec
from .models import (
    EndpointDescriptor,
    ParameterDescriptor,
    ParsedSpec,
    RequestBodyDescriptor,
    SecuritySchemeDescriptor,
    ValidationResult,
)
from .naming import generate_operation_id

logger = logging.getLogger(__name__)

# Endpoint order within a path follows this sequence, not the source order.
HTTP_METHODS = ("get", "post", "put", "patch", "delete", "head", "options")

JSON_CONTENT_TYPE = "application/json"


def _is_reference(node: Any) -> bool:
    return isinstance(node, dict) and "$ref" in node


def parse_openapi(source: SpecSource) -> ParsedSpec:
    """Resolve a spec from a dict, URL or path and extract its endpoints."""
    return extract_from_spec(resolve_spec(source))


def validate_openapi(source: SpecSource) -> ValidationResult:
    """Validate a spec; never raises for an invalid document."""
    return validate_spec(source)


def extract_from_spec(spec: dict[str, Any]) -> ParsedSpec:
    """Build the endpoint model from a dereferenced OpenAPI document."""
    security_schemes: dict[str, SecuritySchemeDescriptor] = {}
    components = spec.get("components") or {}
    for name, scheme in (components.get("securitySchemes") or {}).items():
        if isinstance(scheme, dict) and not _is_reference(scheme):
            security_schemes[name] = extract_security_scheme(scheme)

    servers = spec.get("servers") or [{}]
    base_url = (servers[0] or {}).get("url") or ""

    endpoints: list[EndpointDescriptor] = []
    for path, path_item in (spec.get("paths") or {}).items():
        if not isinstance(path_item, dict) or _is_reference(path_item):
            continue
        for method in HTTP_METHODS:
            operation = path_item.get(method)
            if not isinstance(operation, dict):
                continue
            endpoints.append(
                extract_endpoint(path, method.upper(), operation, path_item.get("parameters"))
            )

    info = spec.get("info") or {}
    logger.debug(
        "Extracted %d endpoints and %d security schemes", len(endpoints), len(security_schemes),
    )
    return ParsedSpec(
        title=info.get("title", ""),
        version=str(info.get("version", "")),
        description=info.get("description"),
        base_url=base_url,
        endpoints=endpoints,
        security_schemes=security_schemes,
    )


def extract_endpoint(
    path: str,
    method: str,
    operation: dict[str, Any],
    path_parameters: list[dict[str, Any]] | None = None,
) -> EndpointDescriptor:
    """Build one endpoint; path-level parameters come before operation-level ones."""
    parameters = tuple(
        extract_parameter(param)
        for param in [*(path_parameters or []), *(operation.get("parameters") or [])]
        if isinstance(param, dict) and not _is_reference(param)
    )

    request_body = None
    body = operation.get("requestBody")
    if isinstance(body, dict) and not _is_reference(body):
        request_body = extract_request_body(body)

    # Alternative and combined requirements are flattened into one name list.
    security: list[str] = []
    for requirement in operation.get("security") or []:
        security.extend(requirement.keys())

    return EndpointDescriptor(
        operation_id=operation.get("operationId") or generate_operation_id(method, path),
        method=method,
        path=path,
        summary=operation.get("summary"),
        description=operation.get("description"),
        parameters=parameters,
        request_body=request_body,
        security_schemes=tuple(security),
        tags=tuple(operation.get("tags") or ()),
    )


def extract_parameter(param: dict[str, Any]) -> ParameterDescriptor:
    return ParameterDescriptor(
        name=param["name"],
        location=param.get("in", "query"),
        required=bool(param.get("required", False)),
        schema=param.get("schema") or {"type": "string"},
        description=param.get("description"),
    )


def extract_request_body(body: dict[str, Any]) -> RequestBodyDescriptor | None:
    """Keep one media type: JSON if declared, else the first declared one."""
    content = body.get("content") or {}
    required = bool(body.get("required", False))

    json_media = content.get(JSON_CONTENT_TYPE) or {}
    if json_media.get("schema"):
        return RequestBodyDescriptor(required, JSON_CONTENT_TYPE, json_media["schema"])

    first = next(iter(content.items()), None)
    if first and (first[1] or {}).get("schema"):
        return RequestBodyDescriptor(required, first[0], first[1]["schema"])
    return None


def extract_security_scheme(scheme: dict[str, Any]) -> SecuritySchemeDescriptor:
    scheme_type = scheme.get("type", "")
    if scheme_type == "apiKey":
        return SecuritySchemeDescriptor(
            type=scheme_type, name=scheme.get("name"), location=scheme.get("in"),
        )
    if scheme_type == "http":
        return SecuritySchemeDescriptor(
            type=scheme_type,
            scheme=scheme.get("scheme"),
            bearer_format=scheme.get("bearerFormat"),
        )
    if scheme_type == "oauth2":
        return SecuritySchemeDescriptor(type=scheme_type, flows=scheme.get("flows"))
    if scheme_type == "openIdConnect":
        return SecuritySchemeDescriptor(
            type=scheme_type, open_id_connect_url=scheme.get("openIdConnectUrl"),
        )
    return SecuritySchemeDescriptor(type=scheme_type)
