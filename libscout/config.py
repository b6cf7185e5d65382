"""
Configuration management for libscout.

Handles reading/writing INI configuration files with cross-platform
path handling and type-safe accessors. Tells the index where the shared
library lives, which directories hold which kind of resource, and how
forgiving fuzzy matching should be.

I remember where you keep things. Even the chart components nobody uses.
"""

import configparser
import logging
import os
from pathlib import Path
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)


def _find_base_path() -> Path:
    """Find the libscout base path.

    Resolution order:
    1. LIBSCOUT_HOME environment variable
    2. ~/.libscout (user home directory)
    """
    env_path = os.environ.get("LIBSCOUT_HOME")
    if env_path:
        return Path(env_path).resolve()

    return Path.home() / ".libscout"


def _split_list(raw: str) -> List[str]:
    return [item.strip() for item in raw.split(",") if item.strip()]


class ScoutConfig:
    """Configuration manager for libscout.

    Reads configuration from INI files and provides type-safe accessors
    with default value fallbacks.
    """

    # Default configuration values
    DEFAULTS = {
        "library": {
            "path": ".",
            "component_dirs": (
                "src/scripts/components,src/scripts/form-components,"
                "src/scripts/chart-components"
            ),
            "utils_dir": "src/scripts/utils",
            "config_dir": "src/scripts/config",
            "plugins_dir": "src/scripts/plugins",
            "examples_dir": "examples",
            "component_extension": ".vue",
            "script_extension": ".js",
            "readme_name": "README.md",
            "entry_point": "index.js",
            "manifest_name": "package.json",
            "tree_depth": "3",
        },
        "search": {
            "accept_threshold": "0.5",
            "suggestion_threshold": "0.3",
            "max_suggestions": "5",
        },
        "usage": {
            "import_prefix": "@shared",
        },
    }

    def __init__(self, base_path: Optional[Path] = None):
        """Initialize configuration.

        Args:
            base_path: Root path for libscout settings. If None, auto-detected.
        """
        self.base_path = Path(base_path).resolve() if base_path else _find_base_path()
        self.config_dir = self.base_path / "config"
        self._library_override: Optional[Path] = None

        # Load configuration
        self._config = configparser.ConfigParser()
        self._load_defaults()
        self._load_user_config()

    def _load_defaults(self) -> None:
        """Load default configuration values."""
        for section, values in self.DEFAULTS.items():
            if not self._config.has_section(section):
                self._config.add_section(section)
            for key, value in values.items():
                self._config.set(section, key, value)

    def _load_user_config(self) -> None:
        """Load user configuration from defaults.ini if it exists."""
        config_path = self.config_dir / "defaults.ini"
        if config_path.exists():
            self._config.read(str(config_path))

    def ensure_directories(self) -> None:
        """Create all required directories."""
        self.config_dir.mkdir(parents=True, exist_ok=True)

    def save(self) -> None:
        """Save current configuration to defaults.ini."""
        self.config_dir.mkdir(parents=True, exist_ok=True)
        config_path = self.config_dir / "defaults.ini"
        with open(config_path, "w") as f:
            self._config.write(f)

    # --- Library layout ---

    def use_library(self, path: Path) -> None:
        """Pin the library root for this process, ahead of env and INI values."""
        self._library_override = Path(path).resolve()

    @property
    def library_path(self) -> Path:
        if self._library_override is not None:
            return self._library_override
        # Environment beats the INI file so MCP clients can point one install at many libraries
        env_path = os.environ.get("SHARED_LIBRARY_PATH")
        if env_path:
            return Path(env_path).resolve()
        raw = self._config.get("library", "path", fallback=".")
        return Path(raw).expanduser().resolve()

    @property
    def component_dirs(self) -> List[str]:
        return _split_list(self._config.get("library", "component_dirs", fallback=""))

    @property
    def utils_dir(self) -> str:
        return self._config.get("library", "utils_dir", fallback="src/scripts/utils")

    @property
    def config_modules_dir(self) -> str:
        return self._config.get("library", "config_dir", fallback="src/scripts/config")

    @property
    def plugins_dir(self) -> str:
        return self._config.get("library", "plugins_dir", fallback="src/scripts/plugins")

    @property
    def examples_dir(self) -> str:
        return self._config.get("library", "examples_dir", fallback="examples")

    @property
    def component_extension(self) -> str:
        return self._config.get("library", "component_extension", fallback=".vue")

    @property
    def script_extension(self) -> str:
        return self._config.get("library", "script_extension", fallback=".js")

    @property
    def readme_name(self) -> str:
        return self._config.get("library", "readme_name", fallback="README.md")

    @property
    def entry_point(self) -> str:
        return self._config.get("library", "entry_point", fallback="index.js")

    @property
    def manifest_name(self) -> str:
        return self._config.get("library", "manifest_name", fallback="package.json")

    @property
    def tree_depth(self) -> int:
        return self._config.getint("library", "tree_depth", fallback=3)

    # --- Search thresholds ---

    @property
    def accept_threshold(self) -> float:
        return self._config.getfloat("search", "accept_threshold", fallback=0.5)

    @property
    def suggestion_threshold(self) -> float:
        return self._config.getfloat("search", "suggestion_threshold", fallback=0.3)

    @property
    def max_suggestions(self) -> int:
        return self._config.getint("search", "max_suggestions", fallback=5)

    # --- Generated usage ---

    @property
    def import_prefix(self) -> str:
        return self._config.get("usage", "import_prefix", fallback="@shared")

    def get(self, section: str, key: str, fallback: str = "") -> str:
        return self._config.get(section, key, fallback=fallback)

    def set(self, section: str, key: str, value: str) -> None:
        if not self._config.has_section(section):
            self._config.add_section(section)
        self._config.set(section, key, value)

    def get_status(self) -> Dict[str, Any]:
        return {
            "base_path": str(self.base_path),
            "config_exists": (self.config_dir / "defaults.ini").exists(),
            "library_path": str(self.library_path),
            "component_dirs": self.component_dirs,
            "thresholds": {
                "accept": self.accept_threshold,
                "suggestion": self.suggestion_threshold,
                "max_suggestions": self.max_suggestions,
            },
        }
