"""Tests for the plugin base class, the registry and the catalog tools."""

import json
import logging
from typing import Any, Dict, List

import pytest
from mcp import types

from elastic_mcp.core.container import ServiceContainer
from elastic_mcp.core.interfaces import IDocumentStore
from elastic_mcp.mcp.cache import IndexListCache
from elastic_mcp.mcp.plugins import (
    IndexPlugin,
    MCPToolPlugin,
    PluginRegistry,
    get_builtin_plugins,
)
from elastic_mcp.mcp.plugins.tools.get_mappings import GetMappingsPlugin
from elastic_mcp.mcp.plugins.tools.list_indices import ListIndicesPlugin
from elastic_mcp.utils.errors import ValidationError
from resources.tests.helpers.backend import FakeDocumentStore


def _texts(content):
    return [fragment.text for fragment in content]


class EchoPlugin(MCPToolPlugin):
    """Minimal plugin used to exercise the base class."""

    @property
    def name(self) -> str:
        return "echo"

    @property
    def description(self) -> str:
        return "Echo the message back"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {
            "type": "object",
            "properties": {"message": {"type": "string"}, "times": {"type": "integer", "minimum": 1}},
            "required": ["message"],
        }

    async def execute(self, arguments: Dict[str, Any]) -> List[types.TextContent]:
        return [types.TextContent(type="text", text=arguments["message"])] * arguments.get("times", 1)


class ExplodingPlugin(EchoPlugin):

    @property
    def name(self) -> str:
        return "explode"

    async def execute(self, arguments: Dict[str, Any]) -> List[types.TextContent]:
        raise RuntimeError("kaboom")


class BadSignaturePlugin(EchoPlugin):

    @property
    def name(self) -> str:
        return "bad"

    async def execute(self, arguments, extra):
        return []


class NeedsStorePlugin(IndexPlugin):

    @property
    def name(self) -> str:
        return "needs_store"

    @property
    def description(self) -> str:
        return "Requires a document store"

    @property
    def input_schema(self) -> Dict[str, Any]:
        return {"type": "object", "properties": {}}

    async def execute(self, arguments: Dict[str, Any]) -> List[types.TextContent]:
        return []


class TestPluginBase:

    def test_metadata_and_definition(self):
        plugin = EchoPlugin()

        assert plugin.metadata.to_dict() == {
            "name": "echo",
            "version": "1.0.0",
            "description": "Echo the message back",
            "tags": [],
        }
        tool = plugin.get_tool_definition()
        assert tool.name == "echo"
        assert tool.inputSchema["required"] == ["message"]

    def test_validate_marks_plugin(self):
        plugin = EchoPlugin()

        assert not plugin.is_validated
        assert plugin.validate()
        assert plugin.is_validated

    def test_wrong_execute_signature_fails_validation(self):
        assert not BadSignaturePlugin().validate()

    def test_argument_violation_names_field(self):
        with pytest.raises(ValidationError) as exc_info:
            EchoPlugin().validate_arguments({"message": "hi", "times": 0})

        assert exc_info.value.message.startswith("Invalid argument 'times':")

    def test_missing_required_argument(self):
        with pytest.raises(ValidationError) as exc_info:
            EchoPlugin().validate_arguments({})

        assert exc_info.value.message.startswith("Invalid arguments:")
        assert "'message' is a required property" in exc_info.value.message

    def test_dependencies_without_container(self):
        assert EchoPlugin().check_dependencies()
        assert not NeedsStorePlugin().check_dependencies()

    def test_dependencies_with_container(self):
        container = ServiceContainer()
        plugin = NeedsStorePlugin(container)
        assert not plugin.check_dependencies()

        container.register_instance(IDocumentStore, FakeDocumentStore())
        assert plugin.check_dependencies()

    def test_builtin_tools(self):
        names = [plugin_class(None).name for plugin_class in get_builtin_plugins()]

        assert names == ["list_indices", "get_mappings", "search"]


@pytest.mark.asyncio
class TestPluginRegistry:

    async def test_registers_and_dispatches(self):
        registry = PluginRegistry()
        assert registry.register_plugin_class(EchoPlugin)

        content = await registry.execute_tool("echo", {"message": "hello", "times": 2})

        assert _texts(content) == ["hello", "hello"]
        assert registry.list_plugins() == ["echo"]
        assert [tool.name for tool in registry.get_tool_definitions()] == ["echo"]

    async def test_invalid_plugin_is_not_registered(self):
        registry = PluginRegistry()

        assert not registry.register_plugin_class(BadSignaturePlugin)
        assert registry.get_plugin("bad") is None

    async def test_unknown_tool_is_error_fragment(self, caplog):
        caplog.set_level(logging.ERROR)
        registry = PluginRegistry()

        content = await registry.execute_tool("drop_index", {})

        assert _texts(content) == ["Error: Unknown tool: drop_index"]
        assert any("drop_index" in record.getMessage() for record in caplog.records)

    async def test_schema_violation_is_error_fragment(self):
        registry = PluginRegistry()
        registry.register_plugin_class(EchoPlugin)

        content = await registry.execute_tool("echo", {"message": 5})

        assert len(content) == 1
        assert content[0].text.startswith("Error: Invalid argument 'message':")

    async def test_none_arguments_are_treated_as_empty(self):
        registry = PluginRegistry()
        registry.register_plugin_class(EchoPlugin)

        content = await registry.execute_tool("echo", None)

        assert content[0].text.startswith("Error: Invalid arguments:")

    async def test_plugin_exception_is_error_fragment(self):
        registry = PluginRegistry()
        registry.register_plugin_class(ExplodingPlugin)

        content = await registry.execute_tool("explode", {"message": "x"})

        assert _texts(content) == ["Error: Tool 'explode' execution failed: kaboom"]

    async def test_missing_dependency_is_error_fragment(self):
        registry = PluginRegistry(ServiceContainer())
        registry.register_plugin_class(NeedsStorePlugin)

        content = await registry.execute_tool("needs_store", {})

        assert _texts(content) == ["Error: Tool 'needs_store' dependencies not satisfied"]

    async def test_unregister(self):
        registry = PluginRegistry()
        registry.register_plugin_class(EchoPlugin)

        assert registry.unregister_plugin("echo")
        assert not registry.unregister_plugin("echo")


@pytest.fixture
def container(fake_store, fake_clock):
    container = ServiceContainer()
    container.register_instance(IDocumentStore, fake_store)
    container.register_instance(IndexListCache, IndexListCache(fake_store, clock=fake_clock))
    return container


@pytest.mark.asyncio
class TestListIndicesPlugin:

    async def test_lists_projected_indices(self, container):
        content = await ListIndicesPlugin(container).execute({})

        assert content[0].text == "Found 3 indices"
        listed = json.loads(content[1].text)
        assert listed[0] == {"index": "products", "health": "green", "status": "open", "docsCount": 1200}
        assert listed[1] == {"index": "logs-2024.06", "health": "yellow", "status": "open", "docsCount": 98}
        assert listed[2] == {"index": "archive", "health": None, "status": "close", "docsCount": None}

    async def test_second_call_is_cached(self, container, fake_store):
        plugin = ListIndicesPlugin(container)
        first = await plugin.execute({})
        second = await plugin.execute({})

        assert second[0].text == "Found 3 indices (cached)"
        assert second[1].text == first[1].text
        assert fake_store.calls["list_indices"] == 1

    async def test_cache_stats_are_logged(self, container, caplog):
        caplog.set_level(logging.DEBUG, logger="elastic_mcp.mcp.plugins.tools.list_indices")
        plugin = ListIndicesPlugin(container)

        await plugin.execute({})
        await plugin.execute({})

        stats_lines = [
            record.getMessage() for record in caplog.records
            if record.getMessage().startswith("Index list cache stats:")
        ]
        assert len(stats_lines) == 2
        assert "'hits': 1" in stats_lines[-1]
        assert "'misses': 1" in stats_lines[-1]

    async def test_backend_failure_is_error_fragment(self, container, fake_store, caplog):
        caplog.set_level(logging.ERROR)
        fake_store.errors["list_indices"] = RuntimeError("cluster unavailable")

        content = await ListIndicesPlugin(container).execute({})

        assert _texts(content) == ["Error: cluster unavailable"]
        assert [record.getMessage() for record in caplog.records if record.levelno >= logging.ERROR] == [
            "Failed to list indices: cluster unavailable"
        ]


@pytest.mark.asyncio
class TestGetMappingsPlugin:

    async def test_returns_index_mappings(self, container, fake_store):
        fake_store.mappings = {
            "products": {"mappings": {"properties": {"price": {"type": "float"}}}}
        }

        content = await GetMappingsPlugin(container).execute({"index": "products"})

        assert content[0].text == "Mappings for index: products"
        assert content[1].text == (
            'Mappings for index products: {\n  "properties": {\n    "price": {\n      "type": "float"\n    }\n  }\n}'
        )
        assert fake_store.mapping_requests == ["products"]

    async def test_empty_mapping_renders_empty_object(self, container, fake_store):
        fake_store.mappings = {"products": {"mappings": {}}}

        content = await GetMappingsPlugin(container).execute({"index": "products"})

        assert content[1].text == "Mappings for index products: {}"

    async def test_blank_index_is_rejected(self, container, fake_store):
        content = await GetMappingsPlugin(container).execute({"index": "  "})

        assert _texts(content) == ["Error: Index name is required"]
        assert fake_store.calls["get_mapping"] == 0

    async def test_backend_failure_is_error_fragment(self, container, fake_store):
        fake_store.errors["get_mapping"] = RuntimeError("no such index [ghost]")

        content = await GetMappingsPlugin(container).execute({"index": "ghost"})

        assert _texts(content) == ["Error: no such index [ghost]"]
