"""Tests for the mapper module."""

from openapi2mcp.mapper import (
    build_description,
    build_input_schema,
    get_all_endpoint_keys,
    get_endpoint_key,
    map_to_mcp_tools,
)
from openapi2mcp.models import EndpointDescriptor, ParameterDescriptor, RequestBodyDescriptor
from openapi2mcp.parser import extract_from_spec


def _endpoint(**overrides) -> EndpointDescriptor:
    fields = {"operation_id": "getUsers", "method": "GET", "path": "/users"}
    fields.update(overrides)
    return EndpointDescriptor(**fields)


class TestBuildInputSchema:

    def test_empty(self):
        assert build_input_schema(_endpoint()) == {"type": "object", "properties": {}}

    def test_required_omitted_when_nothing_required(self):
        endpoint = _endpoint(parameters=(
            ParameterDescriptor("limit", "query", False, {"type": "integer"}),
        ))
        schema = build_input_schema(endpoint)
        assert "required" not in schema
        assert schema["properties"] == {"limit": {"type": "integer"}}

    def test_parameter_description_wins(self):
        endpoint = _endpoint(parameters=(
            ParameterDescriptor(
                "limit", "query", False,
                {"type": "integer", "description": "Page size"}, "How many",
            ),
        ))
        assert build_input_schema(endpoint)["properties"]["limit"]["description"] == "How many"

    def test_schema_description_fallback(self):
        endpoint = _endpoint(parameters=(
            ParameterDescriptor("limit", "query", False, {"type": "integer", "description": "Page size"}),
        ))
        assert build_input_schema(endpoint)["properties"]["limit"]["description"] == "Page size"

    def test_required_order(self):
        """Parameters in declaration order, then requestBody last."""
        endpoint = _endpoint(
            method="POST",
            path="/users/{id}/posts",
            parameters=(
                ParameterDescriptor("id", "path", True, {"type": "string"}),
                ParameterDescriptor("draft", "query", False, {"type": "boolean"}),
                ParameterDescriptor("X-Trace", "header", True, {"type": "string"}),
            ),
            request_body=RequestBodyDescriptor(True, "application/json", {"type": "object"}),
        )
        schema = build_input_schema(endpoint)
        assert schema["required"] == ["id", "X-Trace", "requestBody"]
        assert list(schema["properties"]) == ["id", "draft", "X-Trace", "requestBody"]

    def test_request_body_fixed_description(self):
        endpoint = _endpoint(request_body=RequestBodyDescriptor(
            False, "application/json",
            {"type": "object", "description": "A user", "properties": {"name": {"type": "string"}}},
        ))
        schema = build_input_schema(endpoint)
        assert schema["properties"]["requestBody"] == {
            "type": "object",
            "description": "The JSON request body.",
            "properties": {"name": {"type": "string"}},
        }
        assert "required" not in schema

    def test_later_parameter_overrides_earlier(self):
        endpoint = _endpoint(parameters=(
            ParameterDescriptor("id", "path", True, {"type": "string"}),
            ParameterDescriptor("id", "path", True, {"type": "integer"}, "Item ID"),
        ))
        schema = build_input_schema(endpoint)
        assert schema["properties"]["id"] == {"type": "integer", "description": "Item ID"}

    def test_does_not_mutate_source_schema(self):
        source = {"type": "integer", "description": "Page size"}
        endpoint = _endpoint(parameters=(
            ParameterDescriptor("limit", "query", False, source, "How many"),
        ))
        build_input_schema(endpoint)
        assert source == {"type": "integer", "description": "Page size"}


class TestBuildDescription:

    def test_summary(self):
        assert build_description(_endpoint(summary="List users")) == "List users"

    def test_fallback(self):
        assert build_description(_endpoint()) == "Executes GET /users"

    def test_summary_and_description(self):
        endpoint = _endpoint(summary="List users", description="All of them.")
        assert build_description(endpoint) == "List users\n\nAll of them."

    def test_same_description_not_repeated(self):
        endpoint = _endpoint(summary="List users", description="List users")
        assert build_description(endpoint) == "List users"

    def test_description_without_summary(self):
        endpoint = _endpoint(description="All of them.")
        assert build_description(endpoint) == "Executes GET /users\n\nAll of them."


class TestMapToMcpTools:

    def test_tool_fields(self, petstore_spec):
        tools = map_to_mcp_tools(extract_from_spec(petstore_spec).endpoints)
        list_pets = tools[0]
        assert list_pets.name == "listPets"
        assert list_pets.http_method == "get"
        assert list_pets.path_template == "/pets"
        assert list_pets.description == "List pets\n\nReturns every pet in the store."
        assert list_pets.request_body_content_type is None
        assert list_pets.security_schemes == ("api_key", "petstore-oauth")
        assert tools[1].request_body_content_type == "application/json"
        assert tools[1].input_schema["required"] == ["requestBody"]

    def test_idempotent(self, petstore_spec):
        endpoints = extract_from_spec(petstore_spec).endpoints
        assert map_to_mcp_tools(endpoints) == map_to_mcp_tools(endpoints)

    def test_filter_subset(self, sample_api_spec):
        endpoints = extract_from_spec(sample_api_spec).endpoints
        enabled = {"GET:/Orders", "DELETE:/Orders/{id}", "GET:/Missing"}
        tools = map_to_mcp_tools(endpoints, enabled)
        assert [t.name for t in tools] == ["GetOrders", "DeleteOrdersById"]
        assert all(f"{t.http_method.upper()}:{t.path_template}" in enabled for t in tools)

    def test_filter_key_is_exact(self, sample_api_spec):
        endpoints = extract_from_spec(sample_api_spec).endpoints
        assert map_to_mcp_tools(endpoints, {"get:/Orders", "GET:/Orders/", "GET:/orders"}) == []

    def test_empty_filter_drops_everything(self, sample_api_spec):
        endpoints = extract_from_spec(sample_api_spec).endpoints
        assert map_to_mcp_tools(endpoints, set()) == []

    def test_round_trip_all_keys(self, sample_api_spec):
        endpoints = extract_from_spec(sample_api_spec).endpoints
        filtered = map_to_mcp_tools(endpoints, set(get_all_endpoint_keys(endpoints)))
        assert filtered == map_to_mcp_tools(endpoints)
        assert [t.name for t in filtered] == [e.operation_id for e in endpoints]


class TestEndpointKeys:

    def test_key_format(self):
        assert get_endpoint_key(_endpoint(path="/users/{id}")) == "GET:/users/{id}"

    def test_all_keys_in_order(self, sample_api_spec):
        endpoints = extract_from_spec(sample_api_spec).endpoints
        assert get_all_endpoint_keys(endpoints) == [
            "GET:/Orders", "POST:/Orders", "GET:/Orders/{id}", "DELETE:/Orders/{id}",
        ]
