"""Convert OpenAPI 3.x specifications into MCP server source bundles.

Pipeline: ``parse_openapi`` (extract endpoints) -> ``map_to_mcp_tools``
(build tool definitions) -> ``generate_mcp_server`` (render files).
"""

__version__ = "0.1.0"

from .codegen import generate_mcp_server, write_files
from .config import GeneratorConfig, OAuth2Config, PromptArgument, PromptDefinition
from .errors import (
    ConfigurationError,
    GeneratorError,
    OutputConflictError,
    SpecResolutionError,
)
from .mapper import get_all_endpoint_keys, get_endpoint_key, map_to_mcp_tools
from .models import (
    EndpointDescriptor,
    GeneratedFiles,
    ParameterDescriptor,
    ParsedSpec,
    RequestBodyDescriptor,
    SecuritySchemeDescriptor,
    ToolDefinition,
    ValidationResult,
)
from .naming import generate_operation_id
from .parser import extract_from_spec, parse_openapi, validate_openapi

__all__ = [
    "ConfigurationError",
    "EndpointDescriptor",
    "GeneratedFiles",
    "GeneratorConfig",
    "GeneratorError",
    "OAuth2Config",
    "OutputConflictError",
    "ParameterDescriptor",
    "ParsedSpec",
    "PromptArgument",
    "PromptDefinition",
    "RequestBodyDescriptor",
    "SecuritySchemeDescriptor",
    "SpecResolutionError",
    "ToolDefinition",
    "ValidationResult",
    "extract_from_spec",
    "generate_mcp_server",
    "generate_operation_id",
    "get_all_endpoint_keys",
    "get_endpoint_key",
    "map_to_mcp_tools",
    "parse_openapi",
    "validate_openapi",
    "write_files",
]
