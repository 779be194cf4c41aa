"""Load, dereference and validate OpenAPI documents.

Sources may be an in-memory dict, an http(s) URL or a file path. Every
``$ref`` is resolved with prance so downstream stages only ever see a
fully inlined document.
"""

from __future__ import annotations

import json
import logging
from pathlib import Path
from typing import Any, Union

import httpx
import prance
import yaml
from prance.util.formats import ParseError
from prance.util.url import ResolutionError

from .errors import SpecResolutionError
from .models import ValidationResult

logger = logging.getLogger(__name__)

SpecSource = Union[str, Path, dict]

FETCH_TIMEOUT = 30.0

_YAML_SUFFIXES = (".yaml", ".yml")


def _is_url(source: str) -> bool:
    return source.startswith(("http://", "https://"))


def _parse_text(text: str, as_yaml: bool, origin: str) -> dict[str, Any]:
    try:
        document = yaml.safe_load(text) if as_yaml else json.loads(text)
    except (yaml.YAMLError, json.JSONDecodeError) as exc:
        raise SpecResolutionError(f"Failed to parse {origin}: {exc}") from exc
    if not isinstance(document, dict):
        raise SpecResolutionError(f"{origin} does not contain an OpenAPI object")
    return document


def fetch_spec(url: str, client: httpx.Client | None = None) -> dict[str, Any]:
    """Fetch a spec over HTTP, choosing YAML or JSON by content type or suffix."""
    owns_client = client is None
    client = client or httpx.Client(timeout=FETCH_TIMEOUT, follow_redirects=True)
    try:
        response = client.get(url)
        response.raise_for_status()
    except httpx.HTTPStatusError as exc:
        raise SpecResolutionError(
            f"Failed to fetch: {exc.response.status_code} {exc.response.reason_phrase}"
        ) from exc
    except httpx.RequestError as exc:
        raise SpecResolutionError(f"Failed to fetch {url}: {exc}") from exc
    finally:
        if owns_client:
            client.close()

    content_type = response.headers.get("content-type", "")
    as_yaml = "yaml" in content_type or url.lower().endswith(_YAML_SUFFIXES)
    return _parse_text(response.text, as_yaml, url)


def read_spec_file(path: Path) -> dict[str, Any]:
    """Read a spec from disk; ``.json`` files parse as JSON, the rest as YAML."""
    if not path.exists():
        raise SpecResolutionError(f"File not found: {path}")
    with open(path, encoding="utf-8") as f:
        text = f.read()
    return _parse_text(text, path.suffix.lower() != ".json", str(path))


def load_spec_source(
    source: SpecSource, client: httpx.Client | None = None,
) -> tuple[dict[str, Any], str | None]:
    """Load the raw document and, for files, the path relative refs resolve against.

    Remote documents are resolved from the fetched text only; relative refs
    pointing at sibling URLs are not followed.
    """
    if isinstance(source, dict):
        return source, None
    source = str(source)
    if _is_url(source):
        logger.debug("Fetching spec from %s", source)
        return fetch_spec(source, client), None
    path = Path(source).resolve()
    logger.debug("Reading spec from %s", path)
    return read_spec_file(path), str(path)


def _truncate_recursion(limit: int, parsed_url: Any, recursions: Any = ()) -> dict[str, Any]:
    """Replace a recursive reference with an empty schema."""
    logger.debug("Recursive reference cut at %s", parsed_url)
    return {}


def resolve_spec(source: SpecSource, client: httpx.Client | None = None) -> dict[str, Any]:
    """Return a fully dereferenced, validated OpenAPI document."""
    document, base_url = load_spec_source(source, client)
    options = dict(
        backend="openapi-spec-validator",
        strict=False,
        recursion_limit_handler=_truncate_recursion,
    )
    try:
        if base_url:
            # Files are read by prance itself so sibling refs resolve against them
            parser = prance.ResolvingParser(base_url, **options)
        else:
            parser = prance.ResolvingParser(spec_string=json.dumps(document, default=str), **options)
    except prance.ValidationError as exc:
        raise SpecResolutionError("OpenAPI specification is invalid", [str(exc)]) from exc
    except ResolutionError as exc:
        raise SpecResolutionError(f"Failed to resolve reference: {exc}") from exc
    except ParseError as exc:
        raise SpecResolutionError(f"Failed to parse referenced document: {exc}") from exc
    except OSError as exc:
        raise SpecResolutionError(f"Failed to read referenced document: {exc}") from exc
    return parser.specification


def validate_spec(source: SpecSource, client: httpx.Client | None = None) -> ValidationResult:
    """Check a spec without raising for invalid input."""
    try:
        resolve_spec(source, client)
    except SpecResolutionError as exc:
        return ValidationResult(valid=False, errors=list(exc.errors))
    return ValidationResult(valid=True)
