"""
Query interface for libscout.

Answers lookups against a ResourceIndex: exact matches first, then
category-scoped partial matches, then fuzzy matches, and finally a
ranked list of suggestions when nothing fits. Also aggregates "best
practices" from documentation and lists everything that was indexed.

All methods are coroutines, build the index on first use, and return
plain dicts/lists suitable for JSON serialization.

You asked for "yb-avatr". I found "yb-avatar". We don't need to talk about it.
"""

import locale
import logging
from typing import Any, Dict, Iterable, List, Optional, Tuple

from libscout.extractors import extract_description
from libscout.index import ResourceIndex
from libscout.models import (
    CodeExample,
    ComponentRecord,
    Event,
    EventDoc,
    PluginRecord,
    Prop,
    PropDoc,
    to_dict,
)
from libscout.similarity import best_match, rank_suggestions

logger = logging.getLogger(__name__)

# Number of documentation lines quoted per best-practice hit
PRACTICE_EXCERPT_LINES = 5


def _collation_key(name: str) -> Tuple[str, str]:
    """Locale-aware sort key, case-insensitive first, then exact."""
    return (locale.strxfrm(name.casefold()), name)


def _pascal_case(name: str) -> str:
    return name[:1].upper() + name[1:]


def merge_props(props: List[Prop], docs: List[PropDoc]) -> List[Prop]:
    """Attach documentation-table descriptions to declared props by name."""
    if not docs:
        return props

    by_name = {doc.name: doc for doc in reversed(docs)}
    merged = []
    for prop in props:
        doc = by_name.get(prop.name)
        merged.append(Prop(
            name=prop.name,
            type=prop.type,
            default=prop.default,
            description=doc.description if doc else "",
            documented=doc is not None,
        ))
    return merged


def merge_events(events: List[Event], docs: List[EventDoc]) -> List[Event]:
    """Attach documentation-table types/descriptions to emitted events by name."""
    if not docs:
        return events

    by_name = {doc.name: doc for doc in reversed(docs)}
    merged = []
    for event in events:
        doc = by_name.get(event.name)
        merged.append(Event(
            name=event.name,
            source=event.source,
            type=doc.type if doc else event.type,
            description=doc.description if doc else "",
            documented=doc is not None,
        ))
    return merged


def generate_usage_examples(component: ComponentRecord) -> List[Dict[str, str]]:
    """Template snippets showing how to use a component."""
    name = component.name
    examples = []

    basic_props = " ".join(
        f'{prop.name}="{prop.default}"'
        for prop in component.props
        if prop.default is not None
    )
    examples.append({
        "title": "Basic Usage",
        "code": f"<{name}{' ' + basic_props if basic_props else ''}></{name}>",
        "language": "vue",
    })

    if component.props:
        props_example = ",\n".join(
            f"  {prop.name}: {repr('value') if prop.type == 'String' else 'value'}"
            for prop in component.props
        )
        examples.append({
            "title": "With Props",
            "code": f"<{name}\n{props_example}\n></{name}>",
            "language": "vue",
        })

    if component.events:
        events_example = "\n  ".join(
            f'@{event.name}="handle{_pascal_case(event.name)}"'
            for event in component.events
        )
        examples.append({
            "title": "With Events",
            "code": f"<{name}\n  {events_example}\n></{name}>",
            "language": "vue",
        })

    return examples


def generate_plugin_usage(plugin: PluginRecord, import_prefix: str) -> List[Dict[str, str]]:
    """Import and registration snippets for a plugin."""
    module = f"{import_prefix}/plugins/{plugin.name}"
    return [
        {
            "title": "Import",
            "code": f"import {plugin.name} from '{module}';",
            "language": "javascript",
        },
        {
            "title": "Vue Plugin Usage",
            "code": (
                "import Vue from 'vue';\n"
                f"import {plugin.name} from '{module}';\n\n"
                f"Vue.use({plugin.name}, {{\n  // configuration options\n}});"
            ),
            "language": "javascript",
        },
    ]


def extract_practice(documentation: str, topic: str) -> str:
    """The first documentation line mentioning topic plus the lines after it."""
    lines = documentation.split("\n")
    topic_lower = topic.lower()
    for position, line in enumerate(lines):
        if topic_lower in line.lower():
            return "\n".join(lines[position:position + PRACTICE_EXCERPT_LINES]).strip()
    return ""


class ResourceQueryTool:
    """Query interface over a ResourceIndex.

    Thresholds come from the index's configuration: a fuzzy match must
    score above accept_threshold to be returned as found, and suggestions
    must score above suggestion_threshold (top max_suggestions kept).
    """

    def __init__(self, index: ResourceIndex):
        self.index = index
        self.config = index.config

    def _suggest(self, query: str, candidates: Iterable[Tuple[str, Dict[str, Any]]]) -> List[Dict[str, Any]]:
        return rank_suggestions(
            query,
            candidates,
            threshold=self.config.suggestion_threshold,
            limit=self.config.max_suggestions,
        )

    # --- Components ---

    def _find_component(self, name: str, category: Optional[str]) -> Optional[ComponentRecord]:
        component = self.index.components.get(name)
        if component:
            return component

        if category:
            name_lower = name.lower()
            for component_name, info in self.index.components.items():
                candidate = component_name.lower()
                if category in info.category and (
                    name_lower in candidate or candidate in name_lower
                ):
                    return info

        return best_match(
            name,
            self.index.components.items(),
            threshold=self.config.accept_threshold,
        )

    async def query_component(self, name: str, category: Optional[str] = None) -> Dict[str, Any]:
        """Look up a component by exact name, category hint, or fuzzy match.

        Args:
            name: Component name, e.g. "yb-avatar".
            category: Optional substring of the component's category path.

        Returns:
            Component details with merged props/events and generated usage,
            or a not-found result carrying ranked suggestions.
        """
        logger.info("Querying component: %s (category: %s)", name, category)
        await self.index.ensure_built()

        component = self._find_component(name, category)
        if component is None:
            return {
                "name": name,
                "category": category or "unknown",
                "found": False,
                "props": [],
                "events": [],
                "examples": [],
                "documentation": "",
                "suggestions": self._suggest(name, (
                    (component_name, {"name": component_name, "category": info.category})
                    for component_name, info in self.index.components.items()
                )),
            }

        return {
            "name": component.name,
            "category": component.category,
            "found": True,
            "file_path": component.file_path,
            "props": to_dict(merge_props(component.props, component.props_doc)),
            "events": to_dict(merge_events(component.events, component.events_doc)),
            "mixins": list(component.mixins),
            "imports": list(component.imports),
            "template": component.template,
            "examples": to_dict(component.examples),
            "documentation": component.documentation,
            "usage": generate_usage_examples(component),
        }

    # --- Utilities ---

    def _utility_examples(self, name: str) -> List[Dict[str, Any]]:
        doc = self.index.utilities_doc
        if doc is None:
            return []
        return [to_dict(example) for example in doc.examples if name in example.code]

    def _find_function(self, name: str) -> Optional[Tuple[str, Any]]:
        """First (module, function) whose function name equals, then contains, name."""
        name_lower = name.lower()
        for util_name, info in self.index.utilities.items():
            for function in info.functions:
                if function.name == name:
                    return util_name, function
        for util_name, info in self.index.utilities.items():
            for function in info.functions:
                if name_lower in function.name.lower():
                    return util_name, function
        return None

    async def query_utility(self, name: str) -> Dict[str, Any]:
        """Look up a utility module, or a function inside one."""
        logger.info("Querying utility: %s", name)
        await self.index.ensure_built()

        utility = self.index.utilities.get(name)
        if utility:
            return {
                "name": utility.name,
                "type": "utility",
                "found": True,
                "file_path": utility.file_path,
                "functions": to_dict(utility.functions),
                "exports": list(utility.exports),
                "imports": list(utility.imports),
                "documentation": utility.documentation,
                "examples": self._utility_examples(name),
            }

        match = self._find_function(name)
        if match:
            util_name, function = match
            parent = self.index.utilities[util_name]
            return {
                "name": function.name,
                "type": "function",
                "found": True,
                "file_path": parent.file_path,
                "parent_module": util_name,
                "exported": function.exported,
                "function_type": function.kind,
                "documentation": parent.documentation,
                "examples": self._utility_examples(name),
            }

        def candidates():
            for util_name, info in self.index.utilities.items():
                yield util_name, {"name": util_name, "parent": None}
                for function in info.functions:
                    yield function.name, {"name": function.name, "parent": util_name}

        return {
            "name": name,
            "type": "utility",
            "found": False,
            "suggestions": self._suggest(name, candidates()),
        }

    # --- Plugins ---

    async def query_plugin(self, name: str) -> Dict[str, Any]:
        """Look up a plugin by exact name."""
        logger.info("Querying plugin: %s", name)
        await self.index.ensure_built()

        plugin = self.index.plugins.get(name)
        if plugin is None:
            return {
                "name": name,
                "type": "plugin",
                "found": False,
                "suggestions": self._suggest(name, (
                    (plugin_name, {"name": plugin_name})
                    for plugin_name in self.index.plugins
                )),
            }

        return {
            "name": plugin.name,
            "type": "plugin",
            "found": True,
            "dir_path": plugin.dir_path,
            "files": to_dict(plugin.files),
            "documentation": plugin.documentation,
            "examples": to_dict(plugin.examples),
            "usage": generate_plugin_usage(plugin, self.config.import_prefix),
        }

    # --- Best practices ---

    def _general_practices(self, topic: str) -> List[Dict[str, Any]]:
        prefix = self.config.import_prefix
        topic_lower = topic.lower()
        practices: List[Dict[str, Any]] = []

        if "component" in topic_lower or "vue" in topic_lower:
            practices.append({
                "type": "general",
                "practice": "Always use kebab-case for component names in templates",
                "examples": [{"language": "vue", "code": "<yb-avatar></yb-avatar>"}],
            })
            practices.append({
                "type": "general",
                "practice": f"Import components from the {prefix} path for consistency",
                "examples": [{
                    "language": "javascript",
                    "code": f"import YbAvatar from '{prefix}/components/yb-avatar';",
                }],
            })

        if "util" in topic_lower or "function" in topic_lower:
            practices.append({
                "type": "general",
                "practice": "Import utilities from the main utils index for tree-shaking",
                "examples": [{
                    "language": "javascript",
                    "code": f"import {{ encrypted }} from '{prefix}/utils';",
                }],
            })

        if "plugin" in topic_lower:
            practices.append({
                "type": "general",
                "practice": "Configure plugins in the main plugins index file",
                "examples": [{
                    "language": "javascript",
                    "code": "Vue.use(plugin, { /* config */ });",
                }],
            })

        return practices

    async def get_best_practices(self, topic: str) -> Dict[str, Any]:
        """Collect documentation excerpts and general advice about a topic.

        Returns:
            {"topic", "practices", "examples", "references"}; examples and
            references aggregate what the matching records contributed.
        """
        logger.info("Getting best practices for: %s", topic)
        await self.index.ensure_built()

        topic_lower = topic.lower()
        practices: List[Dict[str, Any]] = []
        examples: List[Dict[str, Any]] = []
        references: List[Dict[str, Any]] = []

        def record_hit(entry: Dict[str, Any], record_examples: List[CodeExample],
                       reference: Dict[str, Any]) -> None:
            entry["examples"] = to_dict(record_examples)
            practices.append(entry)
            examples.extend(entry["examples"])
            references.append(reference)

        for name, component in self.index.components.items():
            if component.documentation and topic_lower in component.documentation.lower():
                record_hit(
                    {
                        "type": "component",
                        "name": name,
                        "category": component.category,
                        "practice": extract_practice(component.documentation, topic),
                    },
                    component.examples,
                    {"type": "component", "name": name, "path": component.file_path},
                )

        utils_doc = self.index.utilities_doc
        if utils_doc and topic_lower in utils_doc.documentation.lower():
            record_hit(
                {
                    "type": "utilities",
                    "practice": extract_practice(utils_doc.documentation, topic),
                },
                utils_doc.examples,
                {"type": "utilities", "name": utils_doc.name,
                 "path": str(self.index.root / self.config.utils_dir)},
            )

        for name, plugin in self.index.plugins.items():
            if plugin.documentation and topic_lower in plugin.documentation.lower():
                record_hit(
                    {
                        "type": "plugin",
                        "name": name,
                        "practice": extract_practice(plugin.documentation, topic),
                    },
                    plugin.examples,
                    {"type": "plugin", "name": name, "path": plugin.dir_path},
                )

        practices.extend(self._general_practices(topic))

        return {
            "topic": topic,
            "practices": practices,
            "examples": examples,
            "references": references,
        }

    # --- Listings ---

    async def get_all_components(self) -> List[Dict[str, Any]]:
        await self.index.ensure_built()
        components = [
            {
                "name": name,
                "category": info.category,
                "description": extract_description(info.documentation),
            }
            for name, info in self.index.components.items()
        ]
        return sorted(components, key=lambda item: _collation_key(item["name"]))

    async def get_all_utilities(self) -> List[Dict[str, Any]]:
        await self.index.ensure_built()
        utilities = [
            {
                "name": name,
                "functions": [function.name for function in info.functions],
                "description": extract_description(info.documentation),
            }
            for name, info in self.index.utilities.items()
        ]
        return sorted(utilities, key=lambda item: _collation_key(item["name"]))

    async def get_all_plugins(self) -> List[Dict[str, Any]]:
        await self.index.ensure_built()
        plugins = [
            {
                "name": name,
                "description": extract_description(info.documentation),
            }
            for name, info in self.index.plugins.items()
        ]
        return sorted(plugins, key=lambda item: _collation_key(item["name"]))

    async def status(self) -> Dict[str, Any]:
        """Counts per kind after making sure the index is built."""
        await self.index.ensure_built()
        return self.index.stats()
