"""Shared fixtures: small OpenAPI documents used across the test modules."""

from __future__ import annotations

import copy
from typing import Any

import pytest

_OK = {"200": {"description": "OK"}}

# Mirrors what a typical ASP.NET sample API publishes: no operationIds.
SAMPLE_API_SPEC: dict[str, Any] = {
    "openapi": "3.0.1",
    "info": {
        "title": "Sample API",
        "description": "A sample API for products and orders",
        "version": "v1",
    },
    "paths": {
        "/Orders": {
            "get": {"tags": ["Orders"], "responses": _OK},
            "post": {
                "tags": ["Orders"],
                "requestBody": {
                    "content": {
                        "application/json": {
                            "schema": {
                                "type": "object",
                                "properties": {
                                    "productId": {"type": "integer"},
                                    "customerName": {"type": "string"},
                                    "quantity": {"type": "integer"},
                                },
                            },
                        },
                    },
                },
                "responses": _OK,
            },
        },
        "/Orders/{id}": {
            "get": {
                "tags": ["Orders"],
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}},
                ],
                "responses": _OK,
            },
            "delete": {
                "tags": ["Orders"],
                "parameters": [
                    {"name": "id", "in": "path", "required": True, "schema": {"type": "integer"}},
                ],
                "responses": _OK,
            },
        },
    },
}

PETSTORE_SPEC: dict[str, Any] = {
    "openapi": "3.0.3",
    "info": {"title": "Pet Store", "version": "2.1.0"},
    "servers": [
        {"url": "https://petstore.example.com/v2"},
        {"url": "https://staging.petstore.example.com/v2"},
    ],
    "components": {
        "securitySchemes": {
            "api_key": {"type": "apiKey", "name": "X-API-Key", "in": "header"},
            "bearerAuth": {"type": "http", "scheme": "bearer", "bearerFormat": "JWT"},
            "petstore-oauth": {
                "type": "oauth2",
                "flows": {
                    "clientCredentials": {
                        "tokenUrl": "https://auth.example.com/token",
                        "scopes": {"pets:read": "Read pets"},
                    },
                },
            },
        },
        "schemas": {
            "Pet": {
                "type": "object",
                "required": ["name"],
                "properties": {
                    "id": {"type": "integer", "readOnly": True},
                    "name": {"type": "string", "description": "Pet name"},
                    "tag": {"type": "string"},
                },
            },
        },
    },
    "paths": {
        "/pets": {
            "post": {
                "operationId": "createPet",
                "summary": "Create a pet",
                "security": [{"bearerAuth": []}],
                "requestBody": {
                    "required": True,
                    "content": {
                        "application/json": {"schema": {"$ref": "#/components/schemas/Pet"}},
                    },
                },
                "responses": _OK,
            },
            "get": {
                "operationId": "listPets",
                "summary": "List pets",
                "description": "Returns every pet in the store.",
                "security": [{"api_key": []}, {"petstore-oauth": ["pets:read"]}],
                "parameters": [
                    {
                        "name": "limit",
                        "in": "query",
                        "description": "How many items to return",
                        "schema": {"type": "integer", "description": "Page size"},
                    },
                ],
                "responses": _OK,
            },
        },
        "/pets/{petId}": {
            "parameters": [
                {"name": "petId", "in": "path", "required": True, "schema": {"type": "string"}},
            ],
            "get": {
                "summary": "Info for a specific pet",
                "responses": _OK,
            },
        },
    },
}


@pytest.fixture
def sample_api_spec() -> dict[str, Any]:
    return copy.deepcopy(SAMPLE_API_SPEC)


@pytest.fixture
def petstore_spec() -> dict[str, Any]:
    return copy.deepcopy(PETSTORE_SPEC)
