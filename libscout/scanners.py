"""
Category scanners for libscout.

One walker per resource kind (components, utilities, configuration
modules, plugins, example projects). Each lists its directories through
the injected file system, runs the text extractors over what it finds
and writes records into the index.

Every directory and every file is on its own: a missing folder or a
file that can't be read logs a warning and the walk moves on.
"""

import json
from pathlib import Path
from typing import TYPE_CHECKING, Any, List, Optional

from libscout.config import ScoutConfig
from libscout.extractors import (
    extract_code_examples,
    extract_constants,
    extract_events,
    extract_events_documentation,
    extract_exports,
    extract_functions,
    extract_imports,
    extract_mixins,
    extract_props,
    extract_props_documentation,
    extract_template,
    parse_markdown_sections,
)
from libscout.filesystem import DirEntry
from libscout.models import (
    ComponentRecord,
    ConfigRecord,
    ExampleRecord,
    KindDocumentation,
    MarkdownSection,
    PluginFile,
    PluginRecord,
    TreeNode,
    UtilityRecord,
)

if TYPE_CHECKING:
    from libscout.index import ResourceIndex


def _strip_extension(file_name: str, extension: str) -> str:
    if file_name.endswith(extension):
        return file_name[: -len(extension)]
    return file_name


def _section_with_subsections(sections: List[MarkdownSection], start: int) -> str:
    """Content of sections[start] plus the deeper sections nested under it."""
    head = sections[start]
    parts = [head.content]
    for section in sections[start + 1:]:
        if section.level <= head.level:
            break
        parts.append(f"{'#' * section.level} {section.title}\n\n{section.content}")
    return "\n\n".join(part for part in parts if part).strip()


class LibraryScanner:
    """Walks a shared library and fills a ResourceIndex."""

    def __init__(self, root: Path, fs: Any, logger: Any, config: ScoutConfig):
        self.root = root
        self.fs = fs
        self.logger = logger
        self.config = config

    async def _list(self, path: Path) -> Optional[List[DirEntry]]:
        """List a directory, or None (with a warning) if it can't be read."""
        try:
            return await self.fs.read_directory(path)
        except Exception as e:
            self.logger.warning("Cannot access directory %s: %s", path, e)
            return None

    async def _read_kind_documentation(self, path: Path, name: str) -> Optional[KindDocumentation]:
        try:
            content = await self.fs.read_file(path)
        except Exception as e:
            self.logger.warning("Failed to read %s documentation %s: %s", name, path, e)
            return None
        return KindDocumentation(
            name=name,
            documentation=content,
            examples=extract_code_examples(content),
        )

    # --- Components ---

    async def scan_components(self, index: "ResourceIndex") -> None:
        for rel_dir in self.config.component_dirs:
            try:
                await self._scan_component_directory(self.root / rel_dir, rel_dir, index)
            except Exception as e:
                self.logger.warning("Failed to index component directory %s: %s", rel_dir, e)

    async def _scan_component_directory(
        self, dir_path: Path, category: str, index: "ResourceIndex"
    ) -> None:
        entries = await self._list(dir_path)
        if entries is None:
            return

        readme: Optional[Path] = None
        for entry in entries:
            full_path = dir_path / entry.name
            if entry.is_dir:
                await self._scan_component_directory(
                    full_path, f"{category}/{entry.name}", index
                )
            elif entry.name.endswith(self.config.component_extension):
                await self._parse_component(full_path, entry.name, category, index)
            elif entry.name == self.config.readme_name:
                readme = full_path

        # Documentation attaches to components already indexed in this category
        if readme is not None:
            await self._parse_component_documentation(readme, category, index)

    async def _parse_component(
        self, file_path: Path, file_name: str, category: str, index: "ResourceIndex"
    ) -> None:
        try:
            content = await self.fs.read_file(file_path)
            name = _strip_extension(file_name, self.config.component_extension)
            index.components[name] = ComponentRecord(
                name=name,
                category=category,
                file_path=str(file_path),
                props=extract_props(content),
                events=extract_events(content),
                mixins=extract_mixins(content),
                imports=extract_imports(content),
                template=extract_template(content),
            )
            self.logger.debug("Indexed component: %s", name)
        except Exception as e:
            self.logger.warning("Failed to parse component %s: %s", file_name, e)

    async def _parse_component_documentation(
        self, file_path: Path, category: str, index: "ResourceIndex"
    ) -> None:
        try:
            content = await self.fs.read_file(file_path)
        except Exception as e:
            self.logger.warning("Failed to parse documentation %s: %s", file_path, e)
            return

        sections = parse_markdown_sections(content)
        for name, component in index.components.items():
            if component.category != category:
                continue

            for position, section in enumerate(sections):
                if name.lower() in section.title.lower() or name in section.content:
                    documentation = _section_with_subsections(sections, position)
                    component.documentation = documentation
                    component.examples = extract_code_examples(documentation)
                    component.props_doc = extract_props_documentation(documentation)
                    component.events_doc = extract_events_documentation(documentation)
                    break

    # --- Utilities & configuration modules ---

    async def scan_utilities(self, index: "ResourceIndex") -> None:
        utils_path = self.root / self.config.utils_dir
        readme = utils_path / self.config.readme_name
        for file_path in await self._script_files(utils_path):
            if file_path == readme:
                index.utilities_doc = await self._read_kind_documentation(
                    file_path, "utilities"
                )
            else:
                await self._parse_utility(file_path, index)

    async def _parse_utility(self, file_path: Path, index: "ResourceIndex") -> None:
        try:
            content = await self.fs.read_file(file_path)
            name = _strip_extension(file_path.name, self.config.script_extension)
            index.utilities[name] = UtilityRecord(
                name=name,
                file_path=str(file_path),
                functions=extract_functions(content),
                exports=extract_exports(content),
                imports=extract_imports(content),
            )
            self.logger.debug("Indexed utility: %s", name)
        except Exception as e:
            self.logger.warning("Failed to parse utility %s: %s", file_path.name, e)

    async def scan_configurations(self, index: "ResourceIndex") -> None:
        config_path = self.root / self.config.config_modules_dir
        readme = config_path / self.config.readme_name
        for file_path in await self._script_files(config_path):
            if file_path == readme:
                index.configs_doc = await self._read_kind_documentation(
                    file_path, "configurations"
                )
            else:
                await self._parse_config(file_path, index)

    async def _parse_config(self, file_path: Path, index: "ResourceIndex") -> None:
        try:
            content = await self.fs.read_file(file_path)
            name = _strip_extension(file_path.name, self.config.script_extension)
            index.configs[name] = ConfigRecord(
                name=name,
                file_path=str(file_path),
                exports=extract_exports(content),
                constants=extract_constants(content),
            )
            self.logger.debug("Indexed config: %s", name)
        except Exception as e:
            self.logger.warning("Failed to parse config %s: %s", file_path.name, e)

    async def _script_files(self, dir_path: Path, top_level: bool = True) -> List[Path]:
        """Script files under dir_path (recursive), minus entry points.

        The top-level README is included so the caller can pick it out.
        """
        entries = await self._list(dir_path)
        if entries is None:
            return []

        files: List[Path] = []
        for entry in entries:
            full_path = dir_path / entry.name
            if entry.is_dir:
                files.extend(await self._script_files(full_path, top_level=False))
            elif entry.name == self.config.entry_point:
                continue
            elif entry.name.endswith(self.config.script_extension):
                files.append(full_path)
            elif top_level and entry.name == self.config.readme_name:
                files.append(full_path)
        return files

    # --- Plugins ---

    async def scan_plugins(self, index: "ResourceIndex") -> None:
        plugins_path = self.root / self.config.plugins_dir
        entries = await self._list(plugins_path)
        if entries is None:
            return

        for entry in entries:
            full_path = plugins_path / entry.name
            if entry.is_dir:
                try:
                    await self._scan_plugin_directory(full_path, entry.name, index)
                except Exception as e:
                    self.logger.warning("Failed to index plugin %s: %s", entry.name, e)
            elif entry.name == self.config.readme_name:
                index.plugins_doc = await self._read_kind_documentation(full_path, "plugins")

    async def _scan_plugin_directory(
        self, dir_path: Path, plugin_name: str, index: "ResourceIndex"
    ) -> None:
        entries = await self._list(dir_path)
        if entries is None:
            return

        plugin = PluginRecord(name=plugin_name, dir_path=str(dir_path))
        for entry in entries:
            if entry.is_dir:
                continue

            full_path = dir_path / entry.name
            try:
                if entry.name.endswith(self.config.script_extension):
                    content = await self.fs.read_file(full_path)
                    plugin.files.append(PluginFile(
                        name=entry.name,
                        path=str(full_path),
                        exports=extract_exports(content),
                        functions=extract_functions(content),
                    ))
                elif entry.name == self.config.readme_name:
                    content = await self.fs.read_file(full_path)
                    plugin.documentation = content
                    plugin.examples = extract_code_examples(content)
            except Exception as e:
                self.logger.warning(
                    "Failed to read plugin file %s/%s: %s", plugin_name, entry.name, e
                )

        index.plugins[plugin_name] = plugin
        self.logger.debug("Indexed plugin: %s", plugin_name)

    # --- Example projects ---

    async def scan_examples(self, index: "ResourceIndex") -> None:
        examples_path = self.root / self.config.examples_dir
        entries = await self._list(examples_path)
        if entries is None:
            return

        for entry in entries:
            if entry.is_dir:
                try:
                    await self._scan_example_project(examples_path / entry.name, entry.name, index)
                except Exception as e:
                    self.logger.warning("Failed to index example %s: %s", entry.name, e)

    async def _scan_example_project(
        self, dir_path: Path, project_name: str, index: "ResourceIndex"
    ) -> None:
        package_info = None
        try:
            manifest = await self.fs.read_file(dir_path / self.config.manifest_name)
            package_info = json.loads(manifest)
        except OSError:
            self.logger.warning(
                "No %s found for example %s", self.config.manifest_name, project_name
            )
        except json.JSONDecodeError as e:
            self.logger.warning(
                "Invalid %s for example %s: %s", self.config.manifest_name, project_name, e
            )

        structure = await self._directory_tree(dir_path, self.config.tree_depth)

        documentation = ""
        if any(node.name == self.config.readme_name and node.type == "file" for node in structure):
            try:
                documentation = await self.fs.read_file(dir_path / self.config.readme_name)
            except Exception as e:
                self.logger.warning("Failed to read README for example %s: %s", project_name, e)

        index.examples[project_name] = ExampleRecord(
            name=project_name,
            dir_path=str(dir_path),
            package_info=package_info,
            structure=structure,
            documentation=documentation,
        )
        self.logger.debug("Indexed example: %s", project_name)

    async def _directory_tree(
        self, dir_path: Path, max_depth: int, depth: int = 0
    ) -> List[TreeNode]:
        """Directory tree down to max_depth levels, skipping dotfiles."""
        if depth >= max_depth:
            return []

        try:
            entries = await self.fs.read_directory(dir_path)
        except Exception as e:
            self.logger.warning("Cannot access directory %s: %s", dir_path, e)
            return []

        nodes: List[TreeNode] = []
        for entry in entries:
            if entry.name.startswith("."):
                continue

            full_path = dir_path / entry.name
            node = TreeNode(
                name=entry.name,
                type="directory" if entry.is_dir else "file",
                path=str(full_path),
            )
            if entry.is_dir:
                node.children = await self._directory_tree(full_path, max_depth, depth + 1)
            nodes.append(node)
        return nodes
