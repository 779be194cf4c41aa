"""Command-line interface: ``openapi2mcp generate|validate|help``."""

from __future__ import annotations

import argparse
import logging
import sys
from pathlib import Path

from . import __version__
from .codegen import check_output_dir, generate_mcp_server, write_files
from .config import (
    DEFAULT_BASE_URL,
    DEFAULT_JWKS_CACHE_TTL_SECONDS,
    DEFAULT_SERVER_VERSION,
    GeneratorConfig,
    OAuth2Config,
    load_prompts,
)
from .errors import ConfigurationError, OutputConflictError, SpecResolutionError
from .mapper import map_to_mcp_tools
from .naming import slugify
from .parser import parse_openapi, validate_openapi

logger = logging.getLogger(__name__)

USAGE = {
    "generate": "Usage: openapi2mcp generate --url <openapi-url-or-path>",
    "validate": "Usage: openapi2mcp validate --url <openapi-url-or-path>",
}


def configure_logging(debug: bool = False) -> None:
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(levelname)s:%(name)s:%(message)s",
    )


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="openapi2mcp",
        description="Convert OpenAPI specs to MCP servers",
    )
    parser.add_argument(
        "--version", "-v", action="version", version=f"openapi2mcp v{__version__}",
    )
    subparsers = parser.add_subparsers(dest="command")

    generate = subparsers.add_parser(
        "generate", help="Generate an MCP server from an OpenAPI specification",
    )
    generate.add_argument("--url", "-u", help="URL or file path to OpenAPI specification (required)")
    generate.add_argument("--name", "-n", help="Name for the generated MCP server (default: from spec title)")
    generate.add_argument("--output", "-o", help="Output directory (default: ./<name>-mcp-server)")
    generate.add_argument("--emcy", "-e", action="store_true", help="Enable Emcy telemetry integration")
    generate.add_argument("--base-url", "-b", help="Override base URL for API calls")
    generate.add_argument("--version", dest="server_version", help="Version string for the server (default: from spec)")
    generate.add_argument("--force", "-f", action="store_true", help="Overwrite existing output directory")
    generate.add_argument("--local-sdk", help="Path to local @emcy/sdk for development (uses file: reference)")
    generate.add_argument("--prompts-json", help="JSON array of prompt definitions for MCP prompts feature")
    generate.add_argument(
        "--endpoint", action="append", dest="endpoints", metavar="METHOD:PATH",
        help="Only generate tools for these endpoints (repeatable, e.g. GET:/users)",
    )
    generate.add_argument("--oauth-authorization-server", help="Protect /mcp with tokens from this Authorization Server")
    generate.add_argument("--oauth-scopes", help="Comma-separated scopes advertised in resource metadata")
    generate.add_argument("--oauth-resource-url", help="Canonical public URL of the generated server")
    generate.add_argument(
        "--jwks-cache-ttl", type=int, default=DEFAULT_JWKS_CACHE_TTL_SECONDS,
        help=f"JWKS cache lifetime in seconds, default: {DEFAULT_JWKS_CACHE_TTL_SECONDS}",
    )
    generate.add_argument("--debug", action="store_true", help="Enable debug logging")

    validate = subparsers.add_parser("validate", help="Validate an OpenAPI specification")
    validate.add_argument("--url", "-u", help="URL or file path to OpenAPI specification (required)")
    validate.add_argument("--debug", action="store_true", help="Enable debug logging")

    subparsers.add_parser("help", help="Show this help message")
    return parser


def _oauth_config(args: argparse.Namespace) -> OAuth2Config | None:
    if not args.oauth_authorization_server:
        return None
    scopes = tuple(s.strip() for s in (args.oauth_scopes or "").split(",") if s.strip())
    return OAuth2Config(
        authorization_server_url=args.oauth_authorization_server,
        scopes=scopes,
        resource_url=args.oauth_resource_url,
        jwks_cache_ttl_seconds=args.jwks_cache_ttl,
    )


def run_generate(args: argparse.Namespace) -> int:
    if not args.url:
        raise ConfigurationError("--url is required")
    prompts = load_prompts(args.prompts_json) if args.prompts_json else ()

    print(f"Loading OpenAPI spec from: {args.url}")
    parsed = parse_openapi(args.url)
    print(f"  Title: {parsed.title}")
    print(f"  Version: {parsed.version}")
    print(f"  Endpoints: {len(parsed.endpoints)}")
    print(f"  Base URL: {parsed.base_url or '(not specified)'}")

    server_name = args.name or slugify(parsed.title)
    if not server_name:
        raise ConfigurationError("--name is required when the spec has no title")
    output_dir = Path(args.output or f"./{server_name}-mcp-server").resolve()
    check_output_dir(output_dir, args.force)

    config = GeneratorConfig(
        name=server_name,
        version=args.server_version or parsed.version or DEFAULT_SERVER_VERSION,
        base_url=args.base_url or parsed.base_url or DEFAULT_BASE_URL,
        enabled_endpoints=set(args.endpoints) if args.endpoints else None,
        telemetry_enabled=args.emcy,
        local_sdk_path=args.local_sdk,
        oauth2=_oauth_config(args),
        prompts=prompts,
    )
    tools = map_to_mcp_tools(parsed.endpoints, config.enabled_endpoints)
    print(f"  Tools: {len(tools)}")

    print(f"\nGenerating MCP server: {server_name}")
    print(f"  Output: {output_dir}")
    print(f"  Emcy Telemetry: {'enabled' if config.telemetry_enabled else 'disabled'}")
    if config.oauth_enabled:
        print(f"  OAuth: {config.oauth2.authorization_server_url}")
    if prompts:
        print(f"  Prompts: {len(prompts)} prompt(s) configured")

    files = generate_mcp_server(tools, config, parsed.security_schemes)
    for path in write_files(files, output_dir, args.force):
        print(f"  ✓ {path.relative_to(output_dir).as_posix()}")

    print("\nMCP server generated successfully!\n")
    print("Next steps:")
    print(f"  cd {output_dir}")
    print("  npm install")
    print("  npm run build")
    print("  npm run start:http    # For Cursor/HTTP transport")
    print("  npm start             # For Claude Desktop/stdio transport")
    if config.telemetry_enabled:
        print("\nEmcy Telemetry:")
        print("  Set EMCY_API_KEY in .env to enable telemetry.")
    return 0


def run_validate(args: argparse.Namespace) -> int:
    if not args.url:
        raise ConfigurationError("--url is required")
    print(f"Validating: {args.url}")
    result = validate_openapi(args.url)
    if result.valid:
        print("✓ OpenAPI specification is valid")
        return 0
    print("✗ OpenAPI specification is invalid:", file=sys.stderr)
    for error in result.errors:
        print(f"  - {error}", file=sys.stderr)
    return 1


def main(argv: list[str] | None = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    if args.command in (None, "help"):
        parser.print_help()
        return 0

    configure_logging(args.debug)
    try:
        if args.command == "generate":
            return run_generate(args)
        return run_validate(args)
    except ConfigurationError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        print(USAGE[args.command], file=sys.stderr)
        return 1
    except OutputConflictError as exc:
        print(f"\nError: {exc}", file=sys.stderr)
        print("Use --force to overwrite.", file=sys.stderr)
        return 1
    except SpecResolutionError as exc:
        print(f"\nError loading OpenAPI spec: {exc}", file=sys.stderr)
        for error in exc.errors:
            if error != exc.message:
                print(f"  - {error}", file=sys.stderr)
        return 1
