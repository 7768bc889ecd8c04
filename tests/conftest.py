"""Shared pytest fixtures for fluxgraph tests.

Fixtures are organized by category:
- Path fixtures: the bundled sample manifest tree
- Manifest fixtures: YAML documents for building ad-hoc trees
- Configuration fixtures: config dictionaries
"""

import logging
from collections.abc import Callable, Iterator
from pathlib import Path
from typing import Any

import pytest

from tests.fixtures import MANIFESTS_PATH


@pytest.fixture(autouse=True)
def reset_fluxgraph_logger() -> Iterator[None]:
    """Drop handlers installed by CLI runs so later tests never log to a closed stream."""
    yield
    logger = logging.getLogger("fluxgraph")
    logger.handlers.clear()
    logger.setLevel(logging.NOTSET)


# =============================================================================
# Path Fixtures
# =============================================================================


@pytest.fixture
def fixtures_dir() -> Path:
    """Return the path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def manifests_dir() -> Path:
    """Return the path to the sample Flux manifest tree."""
    return MANIFESTS_PATH


@pytest.fixture
def write_manifest(tmp_path: Path) -> Callable[[str, str], Path]:
    """Return a helper that writes a manifest below tmp_path.

    Parent directories are created as needed.
    """

    def _write(relative_path: str, content: str) -> Path:
        file_path = tmp_path / relative_path
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_path.write_text(content, encoding="utf-8")
        return file_path

    return _write


# =============================================================================
# Manifest Fixtures
# =============================================================================


def kustomization_yaml(
    name: str,
    namespace: str = "flux-system",
    depends_on: list[str] | None = None,
    api_version: str = "kustomize.toolkit.fluxcd.io/v1",
) -> str:
    """Build a Flux Kustomization document."""
    lines = [
        f"apiVersion: {api_version}",
        "kind: Kustomization",
        "metadata:",
        f"  name: {name}",
        f"  namespace: {namespace}",
        "spec:",
        "  interval: 10m",
        "  sourceRef:",
        "    kind: GitRepository",
        "    name: flux-system",
        f"  path: ./{name}",
        "  prune: true",
    ]
    if depends_on:
        lines.append("  dependsOn:")
        lines.extend(f"    - name: {dep}" for dep in depends_on)
    return "\n".join(lines) + "\n"


@pytest.fixture
def kustomization_document() -> Callable[..., str]:
    """Return the Kustomization document builder."""
    return kustomization_yaml


@pytest.fixture
def config_map_yaml() -> str:
    """Return an unrelated ConfigMap document."""
    return """apiVersion: v1
kind: ConfigMap
metadata:
  name: cluster-settings
  namespace: flux-system
data:
  CLUSTER_NAME: production
"""


# =============================================================================
# Configuration Fixtures
# =============================================================================


@pytest.fixture
def full_config() -> dict[str, Any]:
    """Return a complete fluxgraph configuration with all options."""
    return {
        "collector": {
            "api_version_prefix": "kustomize.toolkit.fluxcd.io",
            "suffixes": [".yaml", ".yml"],
            "split_mode": "documents",
        },
        "diagram": {
            "sort_nodes": False,
        },
    }
