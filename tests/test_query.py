"""Tests for libscout.query module."""

import pytest

from libscout.index import ResourceIndex
from libscout.models import ComponentRecord, Event, EventDoc, PluginRecord, Prop, PropDoc
from libscout.query import (
    ResourceQueryTool,
    extract_practice,
    generate_plugin_usage,
    generate_usage_examples,
    merge_events,
    merge_props,
)


@pytest.fixture
def query_tool(sample_library, config):
    return ResourceQueryTool(ResourceIndex(root=sample_library, config=config))


class TestMergeProps:
    def test_no_docs_returns_input(self):
        props = [Prop(name="src", type="String")]
        assert merge_props(props, []) is props

    def test_documented_and_undocumented(self):
        props = [Prop(name="src", type="String", default="''"), Prop(name="alt")]
        docs = [PropDoc(name="src", type="String", default="''", description="Image URL")]
        src, alt = merge_props(props, docs)
        assert (src.description, src.documented, src.default) == ("Image URL", True, "''")
        assert (alt.description, alt.documented) == ("", False)

    def test_first_doc_row_wins(self):
        props = [Prop(name="size")]
        docs = [
            PropDoc(name="size", type="Number", default="40", description="first"),
            PropDoc(name="size", type="Number", default="40", description="second"),
        ]
        assert merge_props(props, docs)[0].description == "first"


class TestMergeEvents:
    def test_no_docs_returns_input(self):
        events = [Event(name="click")]
        assert merge_events(events, []) is events

    def test_type_from_docs(self):
        events = [Event(name="click"), Event(name="close")]
        docs = [EventDoc(name="click", type="MouseEvent", description="Clicked")]
        click, close = merge_events(events, docs)
        assert (click.type, click.description, click.documented) == ("MouseEvent", "Clicked", True)
        assert (close.type, close.documented) == ("unknown", False)


class TestGenerateUsage:
    def test_component_usage(self):
        component = ComponentRecord(
            name="yb-tag",
            category="src/scripts/components",
            file_path="yb-tag.vue",
            props=[Prop(name="text", type="String", default="''"), Prop(name="max", type="Number")],
            events=[Event(name="close")],
        )
        usage = generate_usage_examples(component)
        assert [u["title"] for u in usage] == ["Basic Usage", "With Props", "With Events"]
        assert usage[0]["code"] == "<yb-tag text=\"''\"></yb-tag>"
        assert "  text: 'value'" in usage[1]["code"]
        assert "  max: value" in usage[1]["code"]
        assert '@close="handleClose"' in usage[2]["code"]
        assert all(u["language"] == "vue" for u in usage)

    def test_bare_component(self):
        component = ComponentRecord(name="yb-divider", category="c", file_path="f")
        usage = generate_usage_examples(component)
        assert usage == [{
            "title": "Basic Usage",
            "code": "<yb-divider></yb-divider>",
            "language": "vue",
        }]

    def test_plugin_usage(self):
        usage = generate_plugin_usage(PluginRecord(name="toast", dir_path="p"), "@ui")
        assert usage[0]["code"] == "import toast from '@ui/plugins/toast';"
        assert "Vue.use(toast, {" in usage[1]["code"]


class TestExtractPractice:
    def test_excerpt(self):
        doc = "intro\nUse the Thing carefully\nline 2\nline 3\nline 4\nline 5\nline 6"
        assert extract_practice(doc, "thing") == (
            "Use the Thing carefully\nline 2\nline 3\nline 4\nline 5"
        )

    def test_no_match(self):
        assert extract_practice("nothing relevant", "toast") == ""


class TestQueryComponent:
    @pytest.mark.asyncio
    async def test_exact(self, query_tool):
        result = await query_tool.query_component("yb-avatar")
        assert result["found"] is True
        assert result["category"] == "src/scripts/components"
        assert result["file_path"].endswith("yb-avatar.vue")
        assert result["mixins"] == ["sizeMixin"]

    @pytest.mark.asyncio
    async def test_builds_lazily(self, query_tool):
        assert query_tool.index.ready is False
        await query_tool.query_component("yb-avatar")
        assert query_tool.index.ready is True

    @pytest.mark.asyncio
    async def test_props_merged_with_docs(self, query_tool):
        result = await query_tool.query_component("yb-avatar")
        props = {p["name"]: p for p in result["props"]}
        assert props["src"]["description"] == "Image URL"
        assert props["src"]["documented"] is True
        assert props["alt"]["documented"] is False

    @pytest.mark.asyncio
    async def test_events_merged_with_docs(self, query_tool):
        result = await query_tool.query_component("yb-avatar")
        (click,) = result["events"]
        assert click["name"] == "click"
        assert click["type"] == "MouseEvent"
        assert click["description"] == "Fired when the avatar is clicked"

    @pytest.mark.asyncio
    async def test_undocumented_component_keeps_raw_props(self, query_tool):
        result = await query_tool.query_component("yb-button")
        assert [p["name"] for p in result["props"]] == ["label", "disabled"]
        assert all(p["documented"] is False for p in result["props"])

    @pytest.mark.asyncio
    async def test_usage_and_examples(self, query_tool):
        result = await query_tool.query_component("yb-avatar")
        assert [u["title"] for u in result["usage"]] == ["Basic Usage", "With Props", "With Events"]
        assert result["examples"] == [
            {"language": "vue", "code": '<yb-avatar src="/me.png"></yb-avatar>'}
        ]

    @pytest.mark.asyncio
    async def test_fuzzy_match(self, query_tool):
        result = await query_tool.query_component("yb-avatr")
        assert result["found"] is True
        assert result["name"] == "yb-avatar"

    @pytest.mark.asyncio
    async def test_raised_threshold_suggests(self, query_tool, config):
        config.set("search", "accept_threshold", "0.95")
        result = await query_tool.query_component("yb-avatr")
        assert result["found"] is False
        assert result["category"] == "unknown"
        assert result["props"] == []
        assert result["suggestions"][0] == {
            "name": "yb-avatar",
            "category": "src/scripts/components",
        }

    @pytest.mark.asyncio
    async def test_category_hint(self, query_tool):
        result = await query_tool.query_component("in", category="form")
        assert result["found"] is True
        assert result["name"] == "yb-input"

    @pytest.mark.asyncio
    async def test_without_category_hint(self, query_tool):
        result = await query_tool.query_component("in")
        assert result["found"] is False

    @pytest.mark.asyncio
    async def test_wrong_category_hint(self, query_tool):
        result = await query_tool.query_component("in", category="chart")
        assert result["found"] is False
        assert result["category"] == "chart"

    @pytest.mark.asyncio
    async def test_nothing_close(self, query_tool):
        result = await query_tool.query_component("qqqqqqqqqqqq")
        assert result["found"] is False
        assert result["suggestions"] == []


class TestQueryUtility:
    @pytest.mark.asyncio
    async def test_function_lookup_builds_lazily(self, query_tool):
        result = await query_tool.query_utility("encrypted")
        assert query_tool.index.ready is True
        assert result["found"] is True
        assert result["type"] == "function"
        assert result["parent_module"] == "crypto"
        assert result["function_type"] == "function"
        assert result["exported"] is True

    @pytest.mark.asyncio
    async def test_function_examples_from_utils_readme(self, query_tool):
        result = await query_tool.query_utility("encrypted")
        assert len(result["examples"]) == 1
        assert "encrypted('secret', key)" in result["examples"][0]["code"]

    @pytest.mark.asyncio
    async def test_module_lookup(self, query_tool):
        result = await query_tool.query_utility("crypto")
        assert result["type"] == "utility"
        assert [f["name"] for f in result["functions"]] == ["encrypted", "pad", "decrypted"]
        assert result["imports"] == ["crypto-js"]
        assert result["examples"] == []

    @pytest.mark.asyncio
    async def test_partial_function_name(self, query_tool):
        result = await query_tool.query_utility("Date")
        assert result["name"] == "formatDate"
        assert result["parent_module"] == "format"
        assert result["function_type"] == "arrow"

    @pytest.mark.asyncio
    async def test_not_found_suggestions(self, query_tool):
        result = await query_tool.query_utility("formt")
        assert result["found"] is False
        assert result["suggestions"][:2] == [
            {"name": "format", "parent": None},
            {"name": "formatDate", "parent": "format"},
        ]


class TestQueryPlugin:
    @pytest.mark.asyncio
    async def test_found(self, query_tool):
        result = await query_tool.query_plugin("toast")
        assert result["found"] is True
        assert [f["name"] for f in result["files"]] == ["index.js"]
        assert result["usage"][0]["code"] == "import toast from '@shared/plugins/toast';"

    @pytest.mark.asyncio
    async def test_import_prefix_from_config(self, query_tool, config):
        config.set("usage", "import_prefix", "@ui")
        result = await query_tool.query_plugin("toast")
        assert result["usage"][0]["code"] == "import toast from '@ui/plugins/toast';"

    @pytest.mark.asyncio
    async def test_exact_only(self, query_tool):
        result = await query_tool.query_plugin("toasts")
        assert result["found"] is False
        assert result["suggestions"] == [{"name": "toast"}]


class TestBestPractices:
    @pytest.mark.asyncio
    async def test_plugin_documentation(self, query_tool):
        result = await query_tool.get_best_practices("register")
        assert result["topic"] == "register"
        (practice,) = result["practices"]
        assert practice["type"] == "plugin"
        assert practice["name"] == "toast"
        assert practice["practice"].startswith("Toast notifications. Register once")
        assert len(result["examples"]) == 1
        assert result["references"][0]["type"] == "plugin"
        assert result["references"][0]["name"] == "toast"

    @pytest.mark.asyncio
    async def test_component_documentation(self, query_tool):
        result = await query_tool.get_best_practices("avatar")
        component_hits = [p for p in result["practices"] if p["type"] == "component"]
        assert [p["name"] for p in component_hits] == ["yb-avatar"]
        assert component_hits[0]["practice"].startswith("Displays a user avatar")
        assert result["examples"][0]["language"] == "vue"

    @pytest.mark.asyncio
    async def test_utilities_documentation(self, query_tool):
        result = await query_tool.get_best_practices("helpers")
        assert result["practices"][0]["type"] == "utilities"
        assert result["references"][0]["name"] == "utilities"

    @pytest.mark.asyncio
    async def test_general_practices(self, query_tool):
        result = await query_tool.get_best_practices("component")
        assert len(result["practices"]) == 2
        assert all(p["type"] == "general" for p in result["practices"])
        assert result["references"] == []

    @pytest.mark.asyncio
    async def test_unknown_topic(self, query_tool):
        result = await query_tool.get_best_practices("kubernetes")
        assert result["practices"] == []
        assert result["examples"] == []


class TestListings:
    @pytest.mark.asyncio
    async def test_components_sorted(self, query_tool):
        components = await query_tool.get_all_components()
        assert [c["name"] for c in components] == ["yb-avatar", "yb-button", "yb-input"]
        assert components[0]["description"] == "Displays a user avatar"
        assert components[2]["description"] == ""

    @pytest.mark.asyncio
    async def test_utilities(self, query_tool):
        utilities = await query_tool.get_all_utilities()
        assert [u["name"] for u in utilities] == ["crypto", "format"]
        assert utilities[1]["functions"] == ["formatDate"]

    @pytest.mark.asyncio
    async def test_plugins(self, query_tool):
        assert await query_tool.get_all_plugins() == [{"name": "toast", "description": "Toast"}]

    @pytest.mark.asyncio
    async def test_case_insensitive_order(self, sample_library, query_tool):
        (sample_library / "src/scripts/components/yb-Zeta.vue").write_text("<template />")
        components = await query_tool.get_all_components()
        assert [c["name"] for c in components] == ["yb-avatar", "yb-button", "yb-input", "yb-Zeta"]

    @pytest.mark.asyncio
    async def test_status(self, query_tool):
        status = await query_tool.status()
        assert status["ready"] is True
        assert status["components"] == 3
