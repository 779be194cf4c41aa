"""Value objects passed between extraction, mapping and emission."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

ParameterLocation = str  # "path" | "query" | "header" | "cookie"

GeneratedFiles = dict[str, str]


@dataclass(frozen=True)
class ParameterDescriptor:
    name: str
    location: ParameterLocation
    required: bool
    schema: dict[str, Any]
    description: str | None = None

    def to_dict(self) -> dict[str, Any]:
        """Serialize in the key order the emitted server expects."""
        data: dict[str, Any] = {
            "name": self.name,
            "in": self.location,
            "required": self.required,
            "schema": self.schema,
        }
        if self.description is not None:
            data["description"] = self.description
        return data


@dataclass(frozen=True)
class RequestBodyDescriptor:
    required: bool
    content_type: str
    schema: dict[str, Any]


@dataclass(frozen=True)
class SecuritySchemeDescriptor:
    """A security scheme carrying only the fields relevant to its type."""

    type: str
    name: str | None = None
    location: str | None = None
    scheme: str | None = None
    bearer_format: str | None = None
    flows: dict[str, Any] | None = None
    open_id_connect_url: str | None = None

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {"type": self.type}
        for key, value in (
            ("name", self.name),
            ("in", self.location),
            ("scheme", self.scheme),
            ("bearerFormat", self.bearer_format),
            ("flows", self.flows),
            ("openIdConnectUrl", self.open_id_connect_url),
        ):
            if value is not None:
                data[key] = value
        return data


@dataclass(frozen=True)
class EndpointDescriptor:
    """One (method, path) operation; ``method`` is upper case."""

    operation_id: str
    method: str
    path: str
    summary: str | None = None
    description: str | None = None
    parameters: tuple[ParameterDescriptor, ...] = ()
    request_body: RequestBodyDescriptor | None = None
    security_schemes: tuple[str, ...] = ()
    tags: tuple[str, ...] = ()

    @property
    def key(self) -> str:
        return f"{self.method}:{self.path}"


@dataclass(frozen=True)
class ParsedSpec:
    title: str
    version: str
    description: str | None
    base_url: str
    endpoints: list[EndpointDescriptor] = field(default_factory=list)
    security_schemes: dict[str, SecuritySchemeDescriptor] = field(default_factory=dict)


@dataclass(frozen=True)
class ToolDefinition:
    name: str
    description: str
    input_schema: dict[str, Any]
    http_method: str
    path_template: str
    parameters: tuple[ParameterDescriptor, ...] = ()
    request_body_content_type: str | None = None
    security_schemes: tuple[str, ...] = ()


@dataclass(frozen=True)
class ValidationResult:
    valid: bool
    errors: list[str] = field(default_factory=list)
