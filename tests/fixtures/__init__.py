"""Test fixtures for fluxgraph.

Sample manifest trees for collector and CLI tests.

Manifest trees:
- manifests: A small Flux fleet repository with infrastructure and apps
  Kustomizations, a GitRepository, a plain Deployment, a kustomize.config
  Kustomization and a ``.yml`` file that must be ignored
"""

from pathlib import Path

# Path to fixtures directory
FIXTURES_DIR = Path(__file__).parent

# Sample Flux repository
MANIFESTS_PATH = FIXTURES_DIR / "manifests"

# Expected diagram for MANIFESTS_PATH with default settings
EXPECTED_MANIFESTS_DIAGRAM = """classDiagram
    class apps {
        +string name apps
        +string namespace flux-system
    }
    apps --> infra_configs : depends on
    apps --> external_secrets : depends on
    class infra_configs {
        +string name infra-configs
        +string namespace flux-system
    }
    infra_configs --> infra_controllers : depends on
    class infra_controllers {
        +string name infra-controllers
        +string namespace flux-system
    }
"""
