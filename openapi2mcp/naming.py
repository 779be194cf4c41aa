"""Derive identifiers from HTTP method + path and from scheme/spec names.

Operation IDs are synthesized when the source spec omits ``operationId``.
The algorithm is shared with the endpoint picker in the web wizard, which
re-derives IDs on its own to select endpoints, so both sides must agree on
every (method, path) pair. ``tests/fixtures/operation_ids.json`` holds the
vectors both implementations are checked against.

Pattern: {Method}{Segment}{BySegmentVar}...

Examples:
  GET    /users                   -> GetUsers
  GET    /users/{id}              -> GetUsersById
  POST   /orders/{orderId}/items  -> PostOrdersByOrderIdItems
  DELETE /Orders/{id}             -> DeleteOrdersById
  GET    /                        -> Get
"""

from __future__ import annotations

import re


def _capitalize(text: str) -> str:
    """Upper-case the first character only; the rest is left untouched."""
    return text[:1].upper() + text[1:]


def _is_path_variable(segment: str) -> bool:
    return segment.startswith("{") and segment.endswith("}")


def generate_operation_id(method: str, path: str) -> str:
    """Build an operation ID from an HTTP method and a path template."""
    parts = []
    for segment in path.split("/"):
        if not segment:
            continue
        if _is_path_variable(segment):
            parts.append("By" + _capitalize(segment[1:-1]))
        else:
            parts.append(_capitalize(segment))
    return _capitalize(method.lower()) + "".join(parts)


def env_key(scheme_name: str) -> str:
    """Environment variable suffix for a security scheme name."""
    return re.sub(r"[^a-zA-Z0-9]", "_", scheme_name).upper()


def slugify(text: str) -> str:
    """Turn a spec title into a package-safe server name."""
    return re.sub(r"[^a-z0-9]+", "-", text.lower()).strip("-")
