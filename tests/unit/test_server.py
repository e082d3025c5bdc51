"""
Unit tests for the MCP server envelope.

dispatch_tool_call() is where tool outcomes become MCP results, so most tests
target it directly. create_server() is checked for the handlers it registers
and driven once through the SDK's in-memory client session.
"""

import json
from importlib.metadata import version

import mcp.types as types
import pytest
from mcp.shared.memory import create_connected_server_and_client_session

from gmtools.config.settings import ServerSettings
from gmtools.generators.random_source import SequenceRandomSource
from gmtools.server import build_call_result, create_server, dispatch_tool_call, mcp_tools
from gmtools.tools.generator_tool import GeneratorToolAdapter


@pytest.fixture
def adapter(fetcher):
    return GeneratorToolAdapter(fetcher, SequenceRandomSource([1], repeat=True))


def _payload(result: types.CallToolResult) -> dict:
    assert len(result.content) == 1
    assert result.content[0].type == "text"
    return json.loads(result.content[0].text)


class TestBuildCallResult:

    def test_pretty_prints_payload(self):
        result = build_call_result({"traits": ["Brave"]})

        assert result.content[0].text == json.dumps({"traits": ["Brave"]}, indent=2)
        assert result.isError is False

    def test_error_flag(self):
        assert build_call_result({"error": "boom"}, is_error=True).isError is True


class TestDispatchToolCall:

    @pytest.mark.asyncio
    async def test_success(self, adapter):
        result = await dispatch_tool_call(
            adapter, "generate_location_name", {"type": "tavern"}
        )

        assert result.isError is False
        assert _payload(result) == {"name": "The Rusty Dragon", "type": "tavern"}

    @pytest.mark.asyncio
    async def test_not_found_is_not_an_error_envelope(self, adapter):
        result = await dispatch_tool_call(adapter, "generate_plot_hook", {"theme": "horror"})

        assert result.isError is False
        assert _payload(result) == {"error": "No plot hooks found for theme: horror"}

    @pytest.mark.asyncio
    async def test_unknown_tool(self, adapter):
        result = await dispatch_tool_call(adapter, "generate_dragon", {})

        assert result.isError is True
        assert _payload(result) == {"error": "Unknown tool: generate_dragon"}

    @pytest.mark.asyncio
    async def test_invalid_arguments(self, adapter):
        result = await dispatch_tool_call(adapter, "generate_npc_name", {"race": "elf"})

        assert result.isError is True
        assert "gender" in _payload(result)["error"]

    @pytest.mark.asyncio
    async def test_data_unavailable(self, adapter, documents):
        del documents["weather"]

        result = await dispatch_tool_call(adapter, "generate_weather", {"climate": "desert"})

        assert result.isError is True
        assert _payload(result) == {"error": "Failed to fetch weather: HTTP 404 Not Found"}

    @pytest.mark.asyncio
    async def test_none_arguments(self, adapter):
        result = await dispatch_tool_call(adapter, "generate_personality", None)

        assert _payload(result) == {"traits": ["Curious"]}


class TestServer:

    def test_mcp_tools(self, adapter):
        tools = mcp_tools(adapter)

        assert all(isinstance(tool, types.Tool) for tool in tools)
        treasure = next(tool for tool in tools if tool.name == "generate_treasure")
        assert treasure.description == "Generate treasure based on challenge rating"
        assert treasure.inputSchema["required"] == ["cr"]

    def test_create_server_registers_tool_handlers(self, adapter):
        server = create_server(adapter, ServerSettings(name="gm-test", version="9.9.9"))

        assert server.name == "gm-test"
        assert types.ListToolsRequest in server.request_handlers
        assert types.CallToolRequest in server.request_handlers

    def test_initialization_options_report_identity(self, adapter):
        server = create_server(adapter, ServerSettings(name="gm-test", version="9.9.9"))

        options = server.create_initialization_options()

        assert options.server_name == "gm-test"
        assert options.server_version == "9.9.9"

    def test_sdk_major_version_matches_lowlevel_api(self):
        # create_server() is written against the 1.x low-level Server.
        assert int(version("mcp").split(".")[0]) == 1


class TestServerSession:

    @pytest.mark.asyncio
    async def test_round_trip_through_client_session(self, adapter):
        server = create_server(adapter, ServerSettings(name="gm-test", version="9.9.9"))

        async with create_connected_server_and_client_session(server) as client:
            listed = await client.list_tools()
            found = await client.call_tool("generate_location_name", {"type": "tavern"})
            unknown = await client.call_tool("roll_initiative", {})

        assert len(listed.tools) == 7
        assert found.isError is False
        assert json.loads(found.content[0].text) == {"name": "The Rusty Dragon", "type": "tavern"}
        assert unknown.isError is True
        assert json.loads(unknown.content[0].text) == {"error": "Unknown tool: roll_initiative"}
