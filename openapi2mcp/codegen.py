"""Render templates into the generated MCP server bundle and write it out.

Takes the context from context_builder and produces the six files of a
TypeScript MCP server. Rendering is pure; ``write_files`` is the only step
that touches the filesystem.
"""

from __future__ import annotations

import json
import logging
from collections.abc import Mapping
from pathlib import Path
from typing import Any

import jinja2

from .config import GeneratorConfig
from .context_builder import build_context
from .errors import OutputConflictError
from .models import GeneratedFiles, SecuritySchemeDescriptor, ToolDefinition

logger = logging.getLogger(__name__)

TEMPLATE_DIR = Path(__file__).parent / "templates"

MCP_SDK_VERSION = "^1.24.0"
JOSE_VERSION = "^5.9.6"

# Output path -> template name; order is the order of the returned bundle.
_TEMPLATES = {
    "src/index.ts": "index.ts.j2",
    "src/transport.ts": "transport.ts.j2",
    ".env.example": "env.example.j2",
    "README.md": "README.md.j2",
}


def to_js(value: Any, indent: int | None = None) -> str:
    """Serialize a value as a JS literal (JSON.stringify semantics)."""
    if indent is None:
        return json.dumps(value, ensure_ascii=False, separators=(",", ":"))
    return json.dumps(value, ensure_ascii=False, indent=indent)


def to_comment(value: Any) -> str:
    """Make text safe inside a /* */ block comment."""
    return str(value).replace("*/", "* /")


def _environment() -> jinja2.Environment:
    env = jinja2.Environment(
        loader=jinja2.FileSystemLoader(str(TEMPLATE_DIR)),
        keep_trailing_newline=True,
        trim_blocks=True,
        lstrip_blocks=True,
        undefined=jinja2.StrictUndefined,
    )
    env.filters["js"] = to_js
    env.filters["comment"] = to_comment
    return env


def build_package_json(context: dict[str, Any]) -> dict[str, Any]:
    dependencies = {
        "@modelcontextprotocol/sdk": MCP_SDK_VERSION,
        "axios": "^1.9.0",
        "dotenv": "^16.4.5",
        "hono": "^4.7.7",
        "@hono/node-server": "^1.14.1",
    }
    if context["telemetry_enabled"]:
        dependencies[context["sdk_package"]] = context["sdk_dependency"]
    if context["oauth_enabled"]:
        dependencies["jose"] = JOSE_VERSION

    return {
        "name": context["server_name"],
        "version": context["server_version"],
        "description": "MCP Server generated from OpenAPI spec",
        "type": "module",
        "main": "build/index.js",
        "scripts": {
            "build": "tsc",
            "start": "node build/index.js",
            "start:http": "node build/index.js --transport=streamable-http",
            "dev": "tsc --watch",
        },
        "dependencies": dependencies,
        "devDependencies": {
            "@types/node": "^22.15.2",
            "typescript": "^5.8.3",
        },
        "engines": {"node": ">=20.0.0"},
    }


def build_tsconfig() -> dict[str, Any]:
    return {
        "compilerOptions": {
            "target": "ES2022",
            "module": "NodeNext",
            "moduleResolution": "NodeNext",
            "lib": ["ES2022"],
            "outDir": "./build",
            "rootDir": "./src",
            "strict": True,
            "esModuleInterop": True,
            "skipLibCheck": True,
            "forceConsistentCasingInFileNames": True,
            "declaration": True,
            "sourceMap": True,
        },
        "include": ["src/**/*"],
        "exclude": ["node_modules", "build"],
    }


def render(context: dict[str, Any]) -> GeneratedFiles:
    """Render every file of the bundle from one context."""
    env = _environment()
    files: GeneratedFiles = {
        "package.json": json.dumps(build_package_json(context), indent=2, ensure_ascii=False) + "\n",
        "tsconfig.json": json.dumps(build_tsconfig(), indent=2) + "\n",
    }
    for path, template_name in _TEMPLATES.items():
        files[path] = env.get_template(template_name).render(**context)
    return files


def generate_mcp_server(
    tools: list[ToolDefinition],
    config: GeneratorConfig,
    security_schemes: Mapping[str, SecuritySchemeDescriptor] | None = None,
) -> GeneratedFiles:
    """Generate the complete MCP server source bundle."""
    context = build_context(tools, config, security_schemes)
    files = render(context)
    logger.debug("Rendered %d files for %s (%d tools)", len(files), config.name, len(tools))
    return files


def check_output_dir(output_dir: Path, force: bool = False) -> None:
    """Refuse to write into a populated directory unless ``force`` is set."""
    if force or not output_dir.exists():
        return
    if not output_dir.is_dir() or any(output_dir.iterdir()):
        raise OutputConflictError(str(output_dir))


def write_files(files: GeneratedFiles, output_dir: Path, force: bool = False) -> list[Path]:
    """Write the bundle under ``output_dir``, creating parent directories."""
    check_output_dir(output_dir, force)
    written = []
    for relative_path, content in files.items():
        output_path = output_dir / relative_path
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(content, encoding="utf-8")
        written.append(output_path)
    logger.info("Wrote %d files to %s", len(written), output_dir)
    return written
