"""fluxgraph configuration system.

Configuration is YAML-based; the CLI only supplies --source, --output and
a few per-run overrides (--split-mode, logging flags).
Supports environment variable substitution (${VAR}) in config files.

Configuration file discovery (in priority order):
1. CLI --config argument
2. ./.fluxgraph/config.yaml
3. ./fluxgraph.yaml
"""

import os
import re
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import yaml

# Flux kustomize-controller API group
DEFAULT_API_VERSION_PREFIX = "kustomize.toolkit.fluxcd.io"

SPLIT_MODES = {"naive", "documents"}

# =============================================================================
# Configuration Dataclasses
# =============================================================================


@dataclass
class CollectorConfig:
    """Manifest collection configuration.

    Attributes:
        api_version_prefix: apiVersion prefix a document must carry to be kept
        suffixes: File name suffixes that are read (".yml" is not included by default)
        split_mode: "naive" splits on every literal "---"; "documents" uses a
            real multi-document YAML load
    """

    api_version_prefix: str = DEFAULT_API_VERSION_PREFIX
    suffixes: list[str] = field(default_factory=lambda: [".yaml"])
    split_mode: str = "naive"

    def __post_init__(self) -> None:
        """Validate collector configuration."""
        if not self.api_version_prefix:
            raise ValueError("api_version_prefix must not be empty")

        if isinstance(self.suffixes, str):
            self.suffixes = [self.suffixes]
        if not self.suffixes or any(not suffix for suffix in self.suffixes):
            raise ValueError(f"Invalid file suffixes: {self.suffixes}")

        if self.split_mode not in SPLIT_MODES:
            raise ValueError(f"Invalid split mode: {self.split_mode}. Valid: {SPLIT_MODES}")


@dataclass
class DiagramConfig:
    """Diagram rendering configuration.

    Attributes:
        sort_nodes: Emit class blocks sorted by name instead of collection order
    """

    sort_nodes: bool = True


@dataclass
class FluxGraphConfig:
    """Top-level fluxgraph configuration.

    Attributes:
        collector: Manifest discovery and parsing settings
        diagram: Mermaid rendering settings
    """

    collector: CollectorConfig = field(default_factory=CollectorConfig)
    diagram: DiagramConfig = field(default_factory=DiagramConfig)

    _config_path: Path | None = field(default=None, repr=False)

    @property
    def config_path(self) -> Path | None:
        """Get the path to the config file that was loaded."""
        return self._config_path


# =============================================================================
# Environment Variable Substitution
# =============================================================================


_ENV_VAR_PATTERN = re.compile(r"\$\{([^}]+)\}")


def substitute_env_vars(value: Any) -> Any:
    """Substitute ${VAR} references in config values.

    Args:
        value: Config value (string, dict, list, or other)

    Returns:
        Value with environment variables substituted

    Raises:
        ValueError: If a referenced variable is not set
    """
    if isinstance(value, str):

        def replace_var(match: re.Match[str]) -> str:
            var_name = match.group(1)
            env_value = os.environ.get(var_name)
            if env_value is None:
                raise ValueError(f"Environment variable not set: {var_name}")
            return env_value

        return _ENV_VAR_PATTERN.sub(replace_var, value)

    elif isinstance(value, dict):
        return {k: substitute_env_vars(v) for k, v in value.items()}

    elif isinstance(value, list):
        return [substitute_env_vars(v) for v in value]

    return value


# =============================================================================
# Config File Discovery
# =============================================================================


def find_config_file(start_path: Path | None = None) -> Path | None:
    """Find configuration file in standard locations.

    Args:
        start_path: Starting directory for search (defaults to cwd)

    Returns:
        Path to config file if found, None otherwise
    """
    start_path = (start_path or Path.cwd()).resolve()

    candidates = [
        start_path / ".fluxgraph" / "config.yaml",
        start_path / "fluxgraph.yaml",
    ]

    for candidate in candidates:
        if candidate.is_file():
            return candidate

    return None


# =============================================================================
# Config Loading
# =============================================================================


def load_config_from_dict(data: dict[str, Any]) -> FluxGraphConfig:
    """Load configuration from a dictionary.

    Args:
        data: Configuration dictionary

    Returns:
        FluxGraphConfig instance

    Raises:
        ValueError: If a section is malformed or fails validation
    """
    if not isinstance(data, dict):
        raise ValueError("Configuration root must be a mapping")

    data = substitute_env_vars(data)

    config = FluxGraphConfig()

    if "collector" in data:
        collector_data = data["collector"] or {}
        config.collector = CollectorConfig(
            api_version_prefix=collector_data.get(
                "api_version_prefix", config.collector.api_version_prefix
            ),
            suffixes=collector_data.get("suffixes", config.collector.suffixes),
            split_mode=collector_data.get("split_mode", config.collector.split_mode),
        )

    if "diagram" in data:
        diagram_data = data["diagram"] or {}
        config.diagram = DiagramConfig(
            sort_nodes=bool(diagram_data.get("sort_nodes", config.diagram.sort_nodes)),
        )

    return config


def load_config(
    config_path: Path | None = None,
    auto_discover: bool = True,
) -> FluxGraphConfig:
    """Load configuration from file.

    Args:
        config_path: Explicit path to config file
        auto_discover: Whether to search for config file if not specified

    Returns:
        FluxGraphConfig instance (defaults when no file is found)

    Raises:
        FileNotFoundError: If config_path specified but doesn't exist
    """
    if config_path is not None:
        if not config_path.exists():
            raise FileNotFoundError(f"Config file not found: {config_path}")
        found_path = config_path
    elif auto_discover:
        found_path = find_config_file()
    else:
        found_path = None

    if found_path is None:
        return FluxGraphConfig()

    with open(found_path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    config = load_config_from_dict(data)
    config._config_path = found_path

    return config
