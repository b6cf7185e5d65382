"""
In-memory resource index for libscout.

Holds one map per resource kind (components, utilities, configuration
modules, plugins, example projects), the kind-level documentation, and a
readiness flag. build() runs the five category scans in a fixed order;
a failing scan is logged and skipped so the rest of the library still
gets indexed.

Nothing is persisted. Every process reads the library fresh, which is
fine, because it's a couple hundred files, not the Library of Congress.
"""

import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

from libscout.config import ScoutConfig
from libscout.filesystem import LocalFileSystem
from libscout.models import (
    ComponentRecord,
    ConfigRecord,
    ExampleRecord,
    KindDocumentation,
    PluginRecord,
    UtilityRecord,
)
from libscout.scanners import LibraryScanner


class ResourceIndex:
    """Index of a shared library's components, utilities, configs, plugins and examples.

    The index starts UNBUILT (empty maps, ready=False). build() populates
    it and marks it READY; building again replaces the previous contents.

    Args:
        root: Root directory of the shared library. Defaults to the
            configured library path.
        fs: Object with async read_directory(path) and read_file(path).
            Defaults to LocalFileSystem.
        logger: Logger with debug/info/warning/error. Defaults to the
            module logger, which is silent unless logging is configured.
        config: ScoutConfig supplying directory layout and thresholds.
    """

    def __init__(
        self,
        root: Optional[Union[str, Path]] = None,
        fs: Optional[Any] = None,
        logger: Optional[Any] = None,
        config: Optional[ScoutConfig] = None,
    ):
        self.config = config or ScoutConfig()
        self.root = Path(root) if root is not None else self.config.library_path
        self.fs = fs or LocalFileSystem()
        self.logger = logger or logging.getLogger(__name__)

        self.components: Dict[str, ComponentRecord] = {}
        self.utilities: Dict[str, UtilityRecord] = {}
        self.configs: Dict[str, ConfigRecord] = {}
        self.plugins: Dict[str, PluginRecord] = {}
        self.examples: Dict[str, ExampleRecord] = {}

        self.utilities_doc: Optional[KindDocumentation] = None
        self.configs_doc: Optional[KindDocumentation] = None
        self.plugins_doc: Optional[KindDocumentation] = None

        self.ready = False

    def _reset(self) -> None:
        self.components = {}
        self.utilities = {}
        self.configs = {}
        self.plugins = {}
        self.examples = {}
        self.utilities_doc = None
        self.configs_doc = None
        self.plugins_doc = None

    async def build(self) -> None:
        """Scan the library and (re)populate every map.

        Raises:
            Exception: Only when the orchestration itself fails; the
                index is then left not ready.
        """
        self.logger.info("Building resource index for %s", self.root)

        try:
            self._reset()
            scanner = LibraryScanner(self.root, self.fs, self.logger, self.config)

            steps = (
                ("components", scanner.scan_components),
                ("utilities", scanner.scan_utilities),
                ("configurations", scanner.scan_configurations),
                ("plugins", scanner.scan_plugins),
                ("examples", scanner.scan_examples),
            )
            for kind, scan in steps:
                try:
                    await scan(self)
                except Exception as e:
                    self.logger.warning("Failed to index %s: %s", kind, e)

            self.ready = True
            self.logger.info(
                "Resource index built: %d components, %d utilities, %d configs, "
                "%d plugins, %d examples",
                len(self.components), len(self.utilities), len(self.configs),
                len(self.plugins), len(self.examples),
            )
        except Exception as e:
            self.logger.error("Failed to build resource index: %s", e)
            self.ready = False
            raise

    async def ensure_built(self) -> None:
        """Build on first use; queries call this so callers never have to."""
        if not self.ready:
            await self.build()

    def stats(self) -> Dict[str, Any]:
        return {
            "root": str(self.root),
            "ready": self.ready,
            "components": len(self.components),
            "utilities": len(self.utilities),
            "configs": len(self.configs),
            "plugins": len(self.plugins),
            "examples": len(self.examples),
        }
